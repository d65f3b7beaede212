from paisatrack.dates import format_date
from paisatrack.domain import Transaction, TransactionType

DEFAULT_SYMBOL = "₹"


def format_currency(amount: float, symbol: str = DEFAULT_SYMBOL) -> str:
    """Format an amount with thousands separators, e.g. '₹ 1,234.56'."""
    return f"{symbol} {amount:,.2f}"


def format_signed(amount: float, tx_type: TransactionType, symbol: str = DEFAULT_SYMBOL) -> str:
    sign = "+" if tx_type is TransactionType.INCOME else "-"
    return f"{sign} {format_currency(abs(amount), symbol)}"


def transaction_label(t: Transaction, symbol: str = DEFAULT_SYMBOL) -> str:
    """One-line description for pickers; the id keeps identical entries apart."""
    return f"#{t.id} · {format_date(t.date)} · {t.description} · {format_currency(t.amount, symbol)}"
