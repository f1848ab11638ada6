"""Конфигурация reward vault.

Константы развёртывания (ожидаемый ресурс, объём выпуска, метаданные)
передаются в vault через VaultConfig, а не зашиты в логику.

Переменные окружения (VaultConfig.from_env):
- HYDRA_VAULT_EXPECTED_RESOURCE: адрес канонического reward-токена
- HYDRA_VAULT_INITIAL_SUPPLY: объём выпуска для create_with_fresh_supply
- HYDRA_VAULT_NETWORK: идентификатор сети для новых адресов
"""

import os
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Final, Mapping, Optional

from src.core.domain.asset import validate_resource_address
from src.core.domain.resource import ResourceMetadata
from src.core.domain.units import MAX_DIVISIBILITY, to_quantity, validate_divisibility


# HYDRA на Stokenet
HYDRA_RESOURCE_ADDRESS: Final[str] = (
    "resource_tdx_2_1t5372e5thltf7d8qx7xckn50h2ayu0lwd5qe24f96d22rfp2ckpxqh"
)

DEFAULT_INITIAL_SUPPLY: Final[Decimal] = Decimal(1_000_000)

ENV_PREFIX: Final[str] = "HYDRA_VAULT_"


@dataclass(frozen=True)
class VaultConfig:
    """Конфигурация развёртывания vault.

    - expected_resource_address: единственный ресурс, принимаемый create()
    - initial_supply / divisibility: параметры выпуска create_with_fresh_supply()
    - token_*: метаданные выпускаемого токена
    """
    expected_resource_address: str = HYDRA_RESOURCE_ADDRESS
    initial_supply: Decimal = DEFAULT_INITIAL_SUPPLY
    divisibility: int = MAX_DIVISIBILITY
    token_name: str = "HYDRA"
    token_symbol: str = "HYDR"
    token_description: str = "Reward token of the Hydra battle arena"
    network: str = "sim"
    metadata: ResourceMetadata = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        validate_resource_address(self.expected_resource_address)
        validate_divisibility(self.divisibility)
        # frozen: нормализованные значения записываются через object.__setattr__
        object.__setattr__(
            self, "initial_supply", to_quantity(self.initial_supply, self.divisibility)
        )
        object.__setattr__(
            self,
            "metadata",
            ResourceMetadata(
                name=self.token_name,
                symbol=self.token_symbol,
                description=self.token_description,
            ),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "VaultConfig":
        """Конфигурация из переменных окружения HYDRA_VAULT_*.

        Отсутствующие/пустые переменные → значения по умолчанию.
        """
        env = os.environ if environ is None else environ
        overrides = {}

        expected = env.get(f"{ENV_PREFIX}EXPECTED_RESOURCE", "").strip()
        if expected:
            overrides["expected_resource_address"] = expected

        supply = env.get(f"{ENV_PREFIX}INITIAL_SUPPLY", "").strip()
        if supply:
            overrides["initial_supply"] = supply

        network = env.get(f"{ENV_PREFIX}NETWORK", "").strip()
        if network:
            overrides["network"] = network

        return cls(**overrides)
