"""Naira amounts are stored as integer kobo (100 kobo = 1 NGN)."""

KOBO_PER_NAIRA = 100
CURRENCY_SYMBOL = "₦"


def format_ngn(amount):
    """Render an amount in kobo the way the storefront shows it: ``₦7,500.00``."""
    sign = "-" if amount < 0 else ""
    naira, kobo = divmod(abs(int(amount)), KOBO_PER_NAIRA)
    return f"{sign}{CURRENCY_SYMBOL}{naira:,}.{kobo:02d}"


def naira(value):
    """Convert whole naira to kobo."""
    return int(value) * KOBO_PER_NAIRA
