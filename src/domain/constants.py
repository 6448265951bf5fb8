"""Domain constants for the finance ledger."""

from decimal import Decimal

from src.domain.models.ledger import CategoryColor, CategoryDef, CategoryIcon

BASE_CURRENCY = "TWD"

SUPPORTED_CURRENCIES = (
    "TWD",
    "USD",
    "JPY",
)

DEFAULT_RATES = {
    "TWD": Decimal("1"),
    "USD": Decimal("0.0307"),
    "JPY": Decimal("4.7"),
}

AUTOMATION_CATEGORY_LABEL = "自動化"
INVESTMENT_CATEGORY_LABEL = "投資"
FALLBACK_CATEGORY_LABEL = "其他"

AUTOMATION_NOTE_PREFIX = "[Auto]"
DCA_NOTE_PREFIX = "[DCA]"

DAILY_EXPENSE_WINDOW_DAYS = 7

DEFAULT_CATEGORIES = (
    CategoryDef(
        id="c1",
        label="餐飲",
        icon=CategoryIcon.UTENSILS,
        color=CategoryColor.ORANGE,
        keywords=("午餐", "晚餐", "早餐", "飲料", "咖啡", "吃", "飯", "火鍋", "麥當勞"),
    ),
    CategoryDef(
        id="c2",
        label="娛樂",
        icon=CategoryIcon.FILM,
        color=CategoryColor.PURPLE,
        keywords=("電影", "遊戲", "Netflix", "KTV", "玩"),
    ),
    CategoryDef(
        id="c3",
        label="交通",
        icon=CategoryIcon.CAR,
        color=CategoryColor.BLUE,
        keywords=("車", "捷運", "高鐵", "加油", "Uber", "計程車"),
    ),
    CategoryDef(
        id="c4",
        label="購物",
        icon=CategoryIcon.SHOPPING_BAG,
        color=CategoryColor.PINK,
        keywords=("買", "衣服", "鞋子", "超市", "全聯", "蝦皮"),
    ),
    CategoryDef(
        id="c5",
        label="帳單",
        icon=CategoryIcon.FILE_TEXT,
        color=CategoryColor.RED,
        keywords=("電費", "水費", "房租", "電話", "繳費"),
    ),
    CategoryDef(
        id="c6",
        label=FALLBACK_CATEGORY_LABEL,
        icon=CategoryIcon.MORE_HORIZONTAL,
        color=CategoryColor.SLATE,
    ),
    CategoryDef(
        id="c7",
        label="薪資",
        icon=CategoryIcon.BRIEFCASE,
        color=CategoryColor.EMERALD,
        keywords=("薪水", "獎金", "收入"),
    ),
)


__all__ = [
    "BASE_CURRENCY",
    "SUPPORTED_CURRENCIES",
    "DEFAULT_RATES",
    "AUTOMATION_CATEGORY_LABEL",
    "INVESTMENT_CATEGORY_LABEL",
    "FALLBACK_CATEGORY_LABEL",
    "AUTOMATION_NOTE_PREFIX",
    "DCA_NOTE_PREFIX",
    "DAILY_EXPENSE_WINDOW_DAYS",
    "DEFAULT_CATEGORIES",
]
