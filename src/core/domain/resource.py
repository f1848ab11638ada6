"""
FungibleResource — определение fungible-ресурса и его выпуск

Ресурс определяется адресом (глобально уникальным), неизменяемыми
метаданными (name, symbol, description) и делимостью. Выпуск (mint)
создаёт новый адрес и Asset со всем начальным предложением.
"""

import uuid
from decimal import Decimal
from typing import Any, Final, Tuple

from pydantic import BaseModel, Field, field_validator

from src.core.domain.asset import Asset, validate_resource_address
from src.core.domain.units import (
    MAX_DIVISIBILITY,
    QuantityLike,
    to_quantity,
    validate_divisibility,
)


# Префикс адресов fungible-ресурсов
RESOURCE_ADDRESS_PREFIX: Final[str] = "resource"


# =============================================================================
# METADATA
# =============================================================================


class ResourceMetadata(BaseModel):
    """
    Метаданные ресурса.

    Immutable модель (frozen=True): после выпуска метаданные не меняются.
    """

    name: str = Field(..., min_length=1, description="Название токена")
    symbol: str = Field(..., min_length=1, max_length=16, description="Тикер")
    description: str = Field(default="", description="Описание токена")

    model_config = {"frozen": True}


# =============================================================================
# RESOURCE MODEL
# =============================================================================


class FungibleResource(BaseModel):
    """Выпущенный fungible-ресурс."""

    address: str = Field(..., min_length=1, description="Адрес ресурса")
    metadata: ResourceMetadata = Field(..., description="Неизменяемые метаданные")
    divisibility: int = Field(
        default=MAX_DIVISIBILITY, ge=0, le=MAX_DIVISIBILITY, description="Знаков после запятой"
    )
    total_supply: Decimal = Field(..., ge=0, description="Начальное предложение")

    model_config = {"frozen": True}

    @field_validator("address", mode="before")
    @classmethod
    def validate_address(cls, v: Any) -> str:
        return validate_resource_address(v)


# =============================================================================
# MINT
# =============================================================================


def new_resource_address(network: str) -> str:
    """
    Новый глобально уникальный адрес ресурса.

    Формат: resource_<network>_1<40 hex>
    """
    if not network or not network.isalnum():
        raise ValueError(f"Network id must be alphanumeric: {network!r}")
    suffix = uuid.uuid4().hex + uuid.uuid4().hex[:8]
    return f"{RESOURCE_ADDRESS_PREFIX}_{network}_1{suffix}"


def mint_fungible(
    metadata: ResourceMetadata,
    initial_supply: QuantityLike,
    divisibility: int = MAX_DIVISIBILITY,
    network: str = "sim",
) -> Tuple[FungibleResource, Asset]:
    """
    Выпуск нового fungible-ресурса с фиксированным начальным предложением.

    Args:
        metadata: Метаданные (становятся неизменяемыми)
        initial_supply: Начальное предложение
        divisibility: Делимость ресурса
        network: Идентификатор сети для адреса

    Returns:
        (resource, asset) — определение ресурса и Asset со всем предложением

    Raises:
        ValueError: Если предложение или делимость некорректны
    """
    validate_divisibility(divisibility)
    supply = to_quantity(initial_supply, divisibility)

    resource = FungibleResource(
        address=new_resource_address(network),
        metadata=metadata,
        divisibility=divisibility,
        total_supply=supply,
    )
    return resource, Asset(resource_address=resource.address, amount=supply)
