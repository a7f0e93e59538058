"""
Ether <-> wei conversion using the chain's 18-decimal fixed point.

Amounts with more than 18 decimal places are truncated toward zero,
never rounded, so ``format_ether(parse_ether(a))`` equals ``a`` up to
the 18th decimal.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext

from ..errors import ValidationError

ETHER_DECIMALS = 18
WEI_PER_ETHER = 10**ETHER_DECIMALS


def parse_ether(amount: str) -> int:
    """
    Convert a decimal ETH amount string to wei.

    Args:
        amount: Decimal string such as "0.5" or "1e-3"

    Returns:
        Amount in wei

    Raises:
        ValidationError: If the amount is not a finite, non-negative number
    """
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation:
        raise ValidationError(f"Invalid amount: {amount!r}") from None

    if not value.is_finite():
        raise ValidationError(f"Invalid amount: {amount!r}")
    if value < 0:
        raise ValidationError(f"Amount must not be negative: {amount}")

    with localcontext() as ctx:
        ctx.prec = 999
        wei = (value * WEI_PER_ETHER).to_integral_value(rounding=ROUND_DOWN)
    return int(wei)


def format_ether(wei: int) -> str:
    """Render a wei amount as an ETH decimal string ("1.0", "0.05")."""
    sign = "-" if wei < 0 else ""
    whole, frac = divmod(abs(int(wei)), WEI_PER_ETHER)
    frac_str = f"{frac:0{ETHER_DECIMALS}d}".rstrip("0") or "0"
    return f"{sign}{whole}.{frac_str}"
