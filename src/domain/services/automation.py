"""Automation simulation engine.

One pass evaluates every active rule in list order against a working copy
of the holdings, so a rule sees the balances left by earlier rules. A rule
that fails or is skipped leaves the working copy untouched and the pass
moves on; earlier successful rules are kept. Every active rule yields
exactly one log entry.
"""

import logging
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import ROUND_FLOOR, Decimal
from logging import Logger

from src.domain.constants import (
    AUTOMATION_CATEGORY_LABEL,
    AUTOMATION_NOTE_PREFIX,
    DCA_NOTE_PREFIX,
    INVESTMENT_CATEGORY_LABEL,
)
from src.domain.errors import FinanceError, InvalidPrice, MissingReference
from src.domain.models import (
    Automation,
    AutomationKind,
    Holding,
    LogStatus,
    RateTable,
    SimulationResult,
    SystemLog,
    Transaction,
    TransactionKind,
)
from src.domain.services.fx import to_base
from src.domain.services.ledger import apply_transaction
from src.utils.decimal_utils import coerce_decimal, round_whole

IdFactory = Callable[[], str]


@dataclass(frozen=True)
class _RuleOutcome:
    holdings: tuple[Holding, ...]
    transaction: Transaction | None
    log: SystemLog


@dataclass(frozen=True)
class _RuleContext:
    rule: Automation
    rates: RateTable
    timestamp: datetime
    log_id: str
    next_id: IdFactory


def run_automations(
    automations: Iterable[Automation],
    holdings: Iterable[Holding],
    rates: RateTable,
    *,
    now: datetime | None = None,
    id_factory: IdFactory | None = None,
    logger: Logger | None = None,
) -> SimulationResult:
    """Simulate one run of every active automation rule.

    Args:
        automations: Rules to evaluate, in order.
        holdings: Holdings snapshot; never mutated.
        rates: Rate table anchored to the base currency.
        now: Timestamp stamped on created transactions and logs.
        id_factory: Callable producing identifiers for created records.
        logger: Logger used for diagnostics.

    Returns:
        SimulationResult: Final holdings plus the transactions and logs
        created by the pass, in rule order.
    """
    timestamp = now or datetime.now(timezone.utc)
    next_id = id_factory or _new_id
    log = logger or logging.getLogger(__name__)

    working = {holding.id: holding for holding in holdings}
    transactions: list[Transaction] = []
    logs: list[SystemLog] = []

    for rule in automations:
        if not rule.active:
            continue
        context = _RuleContext(
            rule=rule,
            rates=rates,
            timestamp=timestamp,
            log_id=next_id(),
            next_id=next_id,
        )
        try:
            outcome = _evaluate(context, working)
        except FinanceError as exc:
            log.warning(f"Automation {rule.id} ({rule.name}) failed: {exc}")
            outcome = _failed(context, str(exc))

        for holding in outcome.holdings:
            working[holding.id] = holding
        if outcome.transaction is not None:
            transactions.append(outcome.transaction)
        logs.append(outcome.log)

    result = SimulationResult(
        holdings=tuple(working.values()),
        transactions=tuple(transactions),
        logs=tuple(logs),
    )
    log.info(
        f"Automation pass finished: success={result.count(LogStatus.SUCCESS)}, "
        f"failed={result.count(LogStatus.FAILED)}, "
        f"skipped={result.count(LogStatus.SKIPPED)}"
    )
    return result


def purchasable_units(budget: Decimal, unit_price: Decimal) -> int:
    """Return the whole units a budget can buy.

    Args:
        budget: Budget in the base currency.
        unit_price: Unit price in the base currency; must be positive.

    Returns:
        int: ``floor(budget / unit_price)``, never costing more than the
        budget.
    """
    if budget <= 0:
        return 0
    units = int((budget / unit_price).to_integral_value(rounding=ROUND_FLOOR))
    while units > 0 and units * unit_price > budget:
        units -= 1
    return units


def format_amount(value: Decimal) -> str:
    """Format a monetary amount for log display with no decimals."""
    return f"${round_whole(value):,}"


def _evaluate(
    context: _RuleContext,
    working: dict[str, Holding],
) -> _RuleOutcome:
    if context.rule.kind == AutomationKind.RECURRING:
        return _run_recurring(context, working)
    return _run_dca(context, working)


def _run_recurring(
    context: _RuleContext,
    working: dict[str, Holding],
) -> _RuleOutcome:
    rule = context.rule
    target = _resolve(working, rule.target_holding_id, "target holding")
    kind = rule.transaction_kind or TransactionKind.EXPENSE
    amount_base = _rule_amount_in_base(context)

    updated = apply_transaction(target, kind, amount_base, context.rates)
    transaction = Transaction(
        id=context.next_id(),
        kind=kind,
        timestamp=context.timestamp,
        amount=amount_base,
        category=rule.category or AUTOMATION_CATEGORY_LABEL,
        note=f"{AUTOMATION_NOTE_PREFIX} {rule.name}",
        holding_id=target.id,
        holding_name=target.name,
    )
    if kind == TransactionKind.INCOME:
        description = f"Credited {target.name} {format_amount(amount_base)}"
        sign = "+"
    else:
        description = f"Debited {target.name} {format_amount(amount_base)}"
        sign = "-"
    log = SystemLog(
        id=context.log_id,
        timestamp=context.timestamp,
        title=f"Executed: {rule.name}",
        description=description,
        status=LogStatus.SUCCESS,
        amount=f"{sign}{format_amount(amount_base)}",
    )
    return _RuleOutcome(holdings=(updated,), transaction=transaction, log=log)


def _run_dca(
    context: _RuleContext,
    working: dict[str, Holding],
) -> _RuleOutcome:
    rule = context.rule
    source = _resolve(working, rule.source_holding_id, "source holding")
    security = _resolve(working, rule.invest_holding_id, "invest holding")

    budget = _rule_amount_in_base(context)
    unit_price = to_base(security.price, security.currency, context.rates)
    if unit_price <= 0:
        raise InvalidPrice(security.id, security.price)

    units = purchasable_units(budget, unit_price)
    if units == 0:
        log = SystemLog(
            id=context.log_id,
            timestamp=context.timestamp,
            title=f"Skipped: {rule.name}",
            description=(
                f"Budget {format_amount(budget)} cannot buy one unit of "
                f"{security.name} (unit price {format_amount(unit_price)})"
            ),
            status=LogStatus.SKIPPED,
        )
        return _RuleOutcome(holdings=(), transaction=None, log=log)

    cost = units * unit_price
    funded = apply_transaction(
        source,
        TransactionKind.EXPENSE,
        cost,
        context.rates,
    )
    if security.id == source.id:
        bought = replace(funded, quantity=funded.quantity + units)
        updates: tuple[Holding, ...] = (bought,)
    else:
        bought = replace(security, quantity=security.quantity + units)
        updates = (funded, bought)

    transaction = Transaction(
        id=context.next_id(),
        kind=TransactionKind.EXPENSE,
        timestamp=context.timestamp,
        amount=cost,
        category=INVESTMENT_CATEGORY_LABEL,
        note=f"{DCA_NOTE_PREFIX} {rule.name} - bought {units} units",
        holding_id=source.id,
        holding_name=source.name,
    )
    log = SystemLog(
        id=context.log_id,
        timestamp=context.timestamp,
        title=f"DCA executed: {rule.name}",
        description=(
            f"Debited {format_amount(cost)} from {source.name} to buy "
            f"{units} units of {security.name}; "
            f"{format_amount(budget - cost)} of budget left unspent"
        ),
        status=LogStatus.SUCCESS,
        amount=f"-{format_amount(cost)}",
    )
    return _RuleOutcome(holdings=updates, transaction=transaction, log=log)


def _failed(context: _RuleContext, reason: str) -> _RuleOutcome:
    log = SystemLog(
        id=context.log_id,
        timestamp=context.timestamp,
        title=f"Failed: {context.rule.name}",
        description=reason,
        status=LogStatus.FAILED,
    )
    return _RuleOutcome(holdings=(), transaction=None, log=log)


def _resolve(
    working: dict[str, Holding],
    holding_id: str | None,
    role: str,
) -> Holding:
    holding = working.get(holding_id) if holding_id else None
    if holding is None:
        raise MissingReference(holding_id, role)
    return holding


def _rule_amount_in_base(context: _RuleContext) -> Decimal:
    # Rule amounts are always base currency; ``currency`` is informational.
    return coerce_decimal(context.rule.amount)


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


__all__ = ["run_automations", "purchasable_units", "format_amount"]
