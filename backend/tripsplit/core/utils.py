"""
Utility functions for the application.
"""


def format_cents(amount: int, currency: str = "USD") -> str:
    """Render minor units as '<CUR> 12.34' without going through floats."""
    sign = "-" if amount < 0 else ""
    whole, cents = divmod(abs(amount), 100)
    return f"{currency} {sign}{whole}.{cents:02d}"
