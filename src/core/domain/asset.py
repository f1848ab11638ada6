"""
Asset — количество конкретного fungible-ресурса

Asset ведёт себя как bucket ledger'а: это единица ценности, которую можно
переместить ровно один раз. После consume() asset пуст, любое повторное
использование — AssetConsumedError.

Поля (resource_address, amount) неизменяемы (frozen=True); состояние
потребления хранится в приватном атрибуте.
"""

import threading
from decimal import Decimal
from typing import Any, Dict

from pydantic import BaseModel, Field, PrivateAttr, field_validator

from src.core.contracts import validate_asset
from src.core.domain.units import QuantityLike, format_quantity, to_quantity
from src.core.errors import AssetConsumedError


# test-and-set в consume()
_CONSUME_LOCK = threading.Lock()


# =============================================================================
# RESOURCE ADDRESS
# =============================================================================


def validate_resource_address(value: str) -> str:
    """
    Проверка идентификатора ресурса.

    Адрес — непрозрачная строка, сравнивается только точным совпадением.
    Нормализация (strip/lower) НЕ выполняется: адрес с пробелами отклоняется.

    Raises:
        ValueError: Если адрес пуст, не строка или содержит пробельные символы
    """
    if not isinstance(value, str):
        raise ValueError(f"Resource address must be str, got {type(value).__name__}")
    if not value:
        raise ValueError("Resource address cannot be empty")
    if any(ch.isspace() for ch in value):
        raise ValueError(f"Resource address contains whitespace: {value!r}")
    return value


# =============================================================================
# ASSET MODEL
# =============================================================================


class Asset(BaseModel):
    """
    Количество fungible-ресурса, передаваемое как атомарная единица.

    Пример:
        >>> asset = Asset(resource_address="resource_sim_1abc", amount="250")
        >>> asset.consume()
        Decimal('250')
        >>> asset.is_consumed
        True
    """

    resource_address: str = Field(..., min_length=1, description="Идентификатор ресурса")
    amount: Decimal = Field(..., ge=0, description="Количество (неотрицательное)")

    model_config = {"frozen": True}

    _consumed: bool = PrivateAttr(default=False)

    @field_validator("resource_address", mode="before")
    @classmethod
    def validate_address(cls, v: Any) -> str:
        return validate_resource_address(v)

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: Any) -> Decimal:
        """float отклоняется, лишняя точность отклоняется (см. units.to_quantity)."""
        return to_quantity(v)

    @classmethod
    def of(cls, resource_address: str, amount: QuantityLike) -> "Asset":
        """Короткий конструктор."""
        return cls(resource_address=resource_address, amount=amount)

    @property
    def is_consumed(self) -> bool:
        return self._consumed

    def is_of(self, resource_address: str) -> bool:
        """Точное сравнение вида ресурса (без префиксов и регистра)."""
        return self.resource_address == resource_address

    def consume(self) -> Decimal:
        """
        Забрать всё содержимое asset.

        Returns:
            Количество, которое содержал asset

        Raises:
            AssetConsumedError: Если asset уже потреблён
        """
        with _CONSUME_LOCK:
            self.ensure_not_consumed()
            self._consumed = True
        return self.amount

    def ensure_not_consumed(self) -> None:
        if self._consumed:
            raise AssetConsumedError(self.resource_address)

    # -------------------------------------------------------------------------
    # Payload (dict) conversion
    # -------------------------------------------------------------------------

    def to_payload(self) -> Dict[str, Any]:
        """Dict для контракта asset: количество передаётся строкой."""
        return {
            "resource_address": self.resource_address,
            "amount": format_quantity(self.amount),
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Asset":
        """
        Raises:
            jsonschema.ValidationError: Если payload не соответствует контракту asset
        """
        validate_asset(payload)
        return cls.model_validate(payload)

    def __str__(self) -> str:
        return f"{format_quantity(self.amount)} of {self.resource_address}"
