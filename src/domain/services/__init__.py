"""Domain services package."""

from .automation import format_amount, purchasable_units, run_automations
from .categorization import classify_note, parse_quick_entry, split_keywords
from .finance import (
    compute_allocation_breakdown,
    compute_net_worth_summary,
    compute_section_total,
    compute_section_totals,
    holding_value,
    summarize_daily_expenses,
)
from .fx import (
    build_rate_table,
    convert_amount,
    from_base,
    get_rate,
    to_base,
    validate_rate_table,
)
from .ledger import (
    apply_to_holdings,
    apply_transaction,
    ledger_delta,
    rebase_transaction,
    reverse_on_holdings,
    reverse_transaction,
)
from .market import apply_quote, rates_from_usd_quotes
from .normalization import (
    normalize_currency,
    normalize_ticker,
    otc_fallback_symbol,
    resolve_market,
)
from .validation import validate_holding, validate_quantity_sign

__all__ = [
    "format_amount",
    "purchasable_units",
    "run_automations",
    "classify_note",
    "parse_quick_entry",
    "split_keywords",
    "compute_allocation_breakdown",
    "compute_net_worth_summary",
    "compute_section_total",
    "compute_section_totals",
    "holding_value",
    "summarize_daily_expenses",
    "build_rate_table",
    "convert_amount",
    "from_base",
    "get_rate",
    "to_base",
    "validate_rate_table",
    "apply_to_holdings",
    "apply_transaction",
    "ledger_delta",
    "rebase_transaction",
    "reverse_on_holdings",
    "reverse_transaction",
    "apply_quote",
    "rates_from_usd_quotes",
    "normalize_currency",
    "normalize_ticker",
    "otc_fallback_symbol",
    "resolve_market",
    "validate_holding",
    "validate_quantity_sign",
]
