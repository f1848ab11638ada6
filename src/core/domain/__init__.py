"""
Domain models and value objects.

Contains fundamental domain entities like Asset, FungibleResource and quantity units.
"""

from src.core.domain.asset import Asset, validate_resource_address
from src.core.domain.resource import (
    FungibleResource,
    ResourceMetadata,
    mint_fungible,
    new_resource_address,
)
from src.core.domain.units import (
    DECIMAL_PRECISION,
    MAX_DIVISIBILITY,
    MAX_QUANTITY,
    format_quantity,
    fractional_digits,
    subtract_quantity,
    to_quantity,
    validate_divisibility,
    validate_quantity,
)

__all__ = [
    # Units module
    "MAX_DIVISIBILITY",
    "MAX_QUANTITY",
    "DECIMAL_PRECISION",
    "to_quantity",
    "validate_quantity",
    "validate_divisibility",
    "fractional_digits",
    "subtract_quantity",
    "format_quantity",
    # Asset model
    "Asset",
    "validate_resource_address",
    # Resource model
    "FungibleResource",
    "ResourceMetadata",
    "mint_fungible",
    "new_resource_address",
]
