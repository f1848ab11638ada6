"""Reward vault — custody одного reward-токена с выдачей по запросу.

- RewardVault.create(): фондирование существующим каноническим токеном
- RewardVault.create_with_fresh_supply(): выпуск нового токена
- RewardVault.claim_reward(): вывод средств
"""

from .config import HYDRA_RESOURCE_ADDRESS, VaultConfig
from .reward_vault import RewardVault, VaultSnapshot

__all__ = [
    "HYDRA_RESOURCE_ADDRESS",
    "VaultConfig",
    "RewardVault",
    "VaultSnapshot",
]
