from decimal import Decimal, InvalidOperation
from typing import Optional


def to_float(v) -> Optional[float]:
    try:
        if v is None or str(v).strip() == "" or str(v).lower() == "null":
            return None
        return float(v)
    except (TypeError, ValueError):
        return None


def to_str(v) -> str:
    return "" if v is None else str(v).strip()


def to_param(v) -> Optional[str]:
    """Render a numeric-looking value as a query parameter.

    The text is read as a Decimal so long integers are sent digit for digit.
    Integral values lose their decimal point, so ``"1000000.0"`` is sent as
    ``1000000``. Returns None when the value is empty, not numeric or not finite.
    """
    text = to_str(v)
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), "f")
