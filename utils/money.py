from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def parse_money(value) -> Decimal:
    """Parse a stored or exported amount into a cent-quantized Decimal.

    Accepts numbers, ``"$1,234.50"`` and accounting negatives ``"(12.00)"``.
    """
    if value is None:
        raise ValueError("missing money value")
    if isinstance(value, bool):
        raise ValueError("invalid money value")
    if isinstance(value, (int, float, Decimal)):
        normalized = str(value)
        is_negative = False
    else:
        normalized = str(value).strip()
        if not normalized:
            raise ValueError("empty money value")

        is_negative = normalized.startswith("(") and normalized.endswith(")")
        normalized = normalized.replace("$", "").replace(",", "")

        if is_negative:
            normalized = normalized[1:-1]

    try:
        amount = Decimal(normalized).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError("invalid money value") from exc

    if not amount.is_finite():
        raise ValueError("invalid money value")

    return -amount if is_negative else amount
