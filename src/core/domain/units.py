"""
Quantity Units — Централизованный модуль нормализации количеств токенов

Единственный допустимый способ превращения внешнего значения в количество
ресурса (Decimal). Ledger хранит количества с фиксированной точностью
(до 18 знаков после запятой), поэтому:
- float ЗАПРЕЩЁН (двоичная дробь не представляет суммы точно)
- лишние знаки после запятой НЕ округляются, а отклоняются
- NaN/Infinity/отрицательные значения отклоняются

ЗАПРЕЩЕНО выполнять арифметику над количествами вне DECIMAL_CONTEXT.
"""

from decimal import Context, Decimal, DivisionByZero, Inexact, InvalidOperation, Overflow
from typing import Final, Union


# =============================================================================
# ПАРАМЕТРЫ ТОЧНОСТИ
# =============================================================================
# Максимальная делимость ресурса (знаков после запятой)
MAX_DIVISIBILITY: Final[int] = 18

# Максимум 192-битного знакового Decimal ledger'а: (2^191 - 1) * 10^-18
MAX_QUANTITY: Final[Decimal] = Decimal(f"{2**191 - 1}E-{MAX_DIVISIBILITY}")

# Точность контекста: MAX_QUANTITY (58 значащих цифр) помещается с запасом
DECIMAL_PRECISION: Final[int] = 60

# Inexact: исключение вместо молчаливого округления
DECIMAL_CONTEXT: Final[Context] = Context(
    prec=DECIMAL_PRECISION,
    traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
)

ZERO: Final[Decimal] = Decimal(0)

QuantityLike = Union[Decimal, int, str]


# =============================================================================
# НОРМАЛИЗАЦИЯ
# =============================================================================


def to_quantity(value: QuantityLike, divisibility: int = MAX_DIVISIBILITY) -> Decimal:
    """
    Конверсия внешнего значения в количество ресурса.

    Args:
        value: Decimal, int или десятичная строка ("250", "0.5")
        divisibility: Допустимое число знаков после запятой

    Returns:
        Неотрицательный конечный Decimal

    Raises:
        ValueError: Если значение не является корректным количеством
    """
    validate_divisibility(divisibility)

    if isinstance(value, bool) or isinstance(value, float):
        raise ValueError(
            f"Quantity must be Decimal, int or str, got {type(value).__name__} "
            f"(float_quantity_rejected)"
        )

    if isinstance(value, Decimal):
        quantity = value
    elif isinstance(value, int):
        quantity = Decimal(value)
    elif isinstance(value, str):
        try:
            quantity = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"Quantity is not a decimal number: {value!r}") from None
    else:
        raise ValueError(
            f"Quantity must be Decimal, int or str, got {type(value).__name__}"
        )

    validate_quantity(quantity, divisibility)
    # -0 → 0
    return quantity.copy_abs() if quantity.is_zero() else quantity


def validate_quantity(quantity: Decimal, divisibility: int = MAX_DIVISIBILITY) -> None:
    """
    Проверка количества: конечное, неотрицательное, не больше MAX_QUANTITY,
    в пределах делимости.

    Raises:
        ValueError: При нарушении любого из условий
    """
    if not quantity.is_finite():
        raise ValueError(f"Quantity must be finite: {quantity}")

    if quantity < 0:
        raise ValueError(f"Quantity cannot be negative: {quantity}")

    if quantity > MAX_QUANTITY:
        raise ValueError(
            f"Quantity {quantity} exceeds ledger maximum {MAX_QUANTITY} (quantity_overflow)"
        )

    if fractional_digits(quantity) > divisibility:
        raise ValueError(
            f"Quantity {quantity} exceeds divisibility {divisibility} "
            f"(precision_exceeded)"
        )


def validate_divisibility(divisibility: int) -> None:
    """Делимость должна лежать в [0, MAX_DIVISIBILITY]."""
    if isinstance(divisibility, bool) or not isinstance(divisibility, int):
        raise ValueError(f"Divisibility must be int, got {type(divisibility).__name__}")
    if not 0 <= divisibility <= MAX_DIVISIBILITY:
        raise ValueError(
            f"Divisibility {divisibility} outside [0, {MAX_DIVISIBILITY}]"
        )


def fractional_digits(quantity: Decimal) -> int:
    """
    Число значащих знаков после запятой (хвостовые нули не считаются).

    Считается по цифрам без округления, поэтому корректно для любой длины.

    Examples:
        >>> fractional_digits(Decimal("1.500"))
        1
        >>> fractional_digits(Decimal("1E+3"))
        0
    """
    if quantity.is_zero():
        return 0
    _, digits, exponent = quantity.as_tuple()
    if exponent >= 0:
        return 0
    trailing_zeros = len(digits) - len("".join(map(str, digits)).rstrip("0"))
    return max(0, -exponent - trailing_zeros)


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


def subtract_quantity(balance: Decimal, amount: Decimal) -> Decimal:
    """
    Точное вычитание balance - amount.

    Вызывающая сторона обязана проверить amount <= balance заранее.

    Raises:
        decimal.Inexact: Если результат не представим без округления
    """
    return DECIMAL_CONTEXT.subtract(balance, amount)


def format_quantity(quantity: Decimal) -> str:
    """Человекочитаемое представление без экспоненты и хвостовых нулей.

    Raises:
        decimal.Inexact: Если количество длиннее DECIMAL_PRECISION цифр
    """
    normalized = quantity.normalize(DECIMAL_CONTEXT)
    return format(normalized, "f")
