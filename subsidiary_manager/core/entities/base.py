"""Shared helpers for domain entities."""

from datetime import UTC, datetime
from decimal import Decimal

CENTS = Decimal("0.01")


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every engine stores."""
    return datetime.now(UTC).replace(tzinfo=None)


def to_cents(value: Decimal) -> Decimal:
    """Round a money amount to the two places the price columns keep."""
    return value.quantize(CENTS)
