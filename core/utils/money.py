"""
금액 변환 헬퍼

내부 계산은 Decimal, JSON 스냅샷은 숫자 타입.
"""

from decimal import Decimal

ZERO = Decimal("0")

Amount = Decimal | int | float | str


def to_decimal(value: Amount | None) -> Decimal:
    """금액을 Decimal로 변환

    float는 str 경유로 변환하여 이진 오차 방지. None은 0.

    Raises:
        decimal.InvalidOperation: 숫자로 해석할 수 없는 경우
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"금액으로 bool을 사용할 수 없습니다: {value!r}")
    return Decimal(str(value))


def to_json_number(value: Decimal) -> int | float:
    """Decimal을 JSON 숫자로 변환 (정수면 int)

    Example:
        >>> to_json_number(Decimal("15.00"))
        15
        >>> to_json_number(Decimal("4.95"))
        4.95
    """
    if value == value.to_integral_value():
        return int(value)
    return float(value)
