"""
Contract Validation Module

Валидация dict-payload'ов vault против JSON Schema контрактов.
"""

from .validators import (
    AssetValidator,
    ClaimRequestValidator,
    ContractValidator,
    SchemaLoader,
    VaultStateValidator,
    get_schema_loader,
    validate_asset,
    validate_claim_request,
    validate_vault_state,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "AssetValidator",
    "ClaimRequestValidator",
    "VaultStateValidator",
    # Functions
    "get_schema_loader",
    "validate_asset",
    "validate_claim_request",
    "validate_vault_state",
]
