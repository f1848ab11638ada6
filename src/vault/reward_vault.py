"""RewardVault — custody-компонент, хранящий один reward-токен и выдающий его по запросу.

Жизненный цикл:
- create(initial_funds): принимает существующее предложение канонического токена
- create_with_fresh_supply(): выпускает новый токен и фондирует себя всем предложением
- claim_reward(amount): списывает amount и возвращает его новым Asset

Инварианты:
- vault хранит ровно один вид ресурса (designated_asset_id), заданный при создании
- balance никогда не становится отрицательным
- balance меняется только при создании и при успешном claim_reward

Авторизации нет: любой владелец ссылки на vault может выводить средства
в пределах баланса.
"""

import logging
import threading
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from src.core.contracts import validate_claim_request, validate_vault_state
from src.core.domain.asset import Asset
from src.core.domain.resource import FungibleResource, mint_fungible
from src.core.domain.units import (
    MAX_DIVISIBILITY,
    QuantityLike,
    format_quantity,
    subtract_quantity,
    to_quantity,
)
from src.core.errors import InsufficientBalance, InvalidAssetKind
from src.vault.config import VaultConfig


logger = logging.getLogger(__name__)


class VaultSnapshot(BaseModel):
    """Снапшот состояния vault (только наблюдаемость, не формат хранения)."""

    resource_address: str = Field(..., min_length=1, description="Вид хранимого ресурса")
    balance: Decimal = Field(..., ge=0, description="Текущий баланс")
    claims_count: int = Field(..., ge=0, description="Число успешных выводов")

    model_config = {"frozen": True}

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "resource_address": self.resource_address,
            "balance": format_quantity(self.balance),
            "claims_count": self.claims_count,
        }
        validate_vault_state(payload)
        return payload


class RewardVault:
    """Vault одного reward-токена.

    Создавать через RewardVault.create() или RewardVault.create_with_fresh_supply();
    конкретный экземпляр использует ровно один из путей.
    """

    def __init__(
        self,
        funds: Asset,
        config: VaultConfig,
        resource: Optional[FungibleResource] = None,
    ):
        """
        Args:
            funds: Средства, переходящие во владение vault (будут потреблены)
            config: Конфигурация развёртывания
            resource: Определение ресурса, если vault сам его выпустил

        Допустимый вид средств: resource.address для выпущенного ресурса,
        иначе config.expected_resource_address.

        Raises:
            InvalidAssetKind: Если funds другого вида (funds не потребляется)
        """
        permitted = resource.address if resource is not None else config.expected_resource_address
        if not funds.is_of(permitted):
            raise InvalidAssetKind(expected=permitted, actual=funds.resource_address)

        self._config = config
        self._resource = resource
        self._divisibility = resource.divisibility if resource is not None else MAX_DIVISIBILITY
        self._designated_asset_id = funds.resource_address
        self._balance = funds.consume()
        self._claims_count = 0

        # Один мутатор, один ресурс: claim_reward сериализуется этим lock
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def create(cls, initial_funds: Asset, config: Optional[VaultConfig] = None) -> "RewardVault":
        """Создание vault из существующего предложения канонического токена.

        Args:
            initial_funds: Средства вызывающей стороны; потребляются целиком
            config: Конфигурация (по умолчанию VaultConfig())

        Returns:
            Новый vault с balance == initial_funds.amount

        Raises:
            InvalidAssetKind: Если ресурс не совпадает с config.expected_resource_address.
                Vault не создаётся, initial_funds не потребляется.
            AssetConsumedError: Если initial_funds уже потреблён
        """
        config = config or VaultConfig()

        if not initial_funds.is_of(config.expected_resource_address):
            logger.warning(
                "Vault creation rejected: resource %s is not %s",
                initial_funds.resource_address,
                config.expected_resource_address,
            )
            raise InvalidAssetKind(
                expected=config.expected_resource_address,
                actual=initial_funds.resource_address,
            )

        vault = cls(initial_funds, config)
        logger.info(
            "Reward vault created with %s of %s",
            format_quantity(vault.balance),
            vault.designated_asset_id,
        )
        return vault

    @classmethod
    def create_with_fresh_supply(cls, config: Optional[VaultConfig] = None) -> "RewardVault":
        """Создание vault с выпуском нового токена.

        Метаданные и объём выпуска берутся из config; метаданные неизменяемы.
        """
        config = config or VaultConfig()
        resource, supply = mint_fungible(
            metadata=config.metadata,
            initial_supply=config.initial_supply,
            divisibility=config.divisibility,
            network=config.network,
        )

        vault = cls(supply, config, resource=resource)
        logger.info(
            "Reward vault minted %s %s (%s)",
            format_quantity(vault.balance),
            resource.metadata.symbol,
            resource.address,
        )
        return vault

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def designated_asset_id(self) -> str:
        return self._designated_asset_id

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def is_empty(self) -> bool:
        return self._balance == 0

    @property
    def resource(self) -> Optional[FungibleResource]:
        """Выпущенный ресурс (None для vault, созданного через create())."""
        return self._resource

    @property
    def config(self) -> VaultConfig:
        return self._config

    def snapshot(self) -> VaultSnapshot:
        with self._lock:
            return VaultSnapshot(
                resource_address=self._designated_asset_id,
                balance=self._balance,
                claims_count=self._claims_count,
            )

    # -------------------------------------------------------------------------
    # Withdrawal
    # -------------------------------------------------------------------------

    def claim_reward(self, amount: QuantityLike) -> Asset:
        """Вывод amount из vault.

        Атомарно: либо баланс уменьшен и возвращён Asset, либо состояние не изменилось.

        Args:
            amount: Неотрицательное количество (Decimal, int или строка)

        Returns:
            Новый Asset (designated_asset_id, amount)

        Raises:
            InsufficientBalance: Если amount > balance
            ValueError: Если amount не является корректным количеством
        """
        quantity = to_quantity(amount, self._divisibility)

        with self._lock:
            if quantity > self._balance:
                logger.warning(
                    "Claim of %s rejected: vault holds %s",
                    format_quantity(quantity),
                    format_quantity(self._balance),
                )
                raise InsufficientBalance(requested=quantity, available=self._balance)

            claimed = Asset(resource_address=self._designated_asset_id, amount=quantity)
            self._balance = subtract_quantity(self._balance, quantity)
            self._claims_count += 1

        logger.info(
            "A warrior claimed %s %s tokens!", format_quantity(quantity), self._config.token_name
        )
        return claimed

    def claim_from_payload(self, payload: Dict[str, Any]) -> Asset:
        """claim_reward по dict-запросу {"amount": "<decimal>"}.

        Raises:
            jsonschema.ValidationError: Если payload не соответствует claim_request
        """
        validate_claim_request(payload)
        return self.claim_reward(payload["amount"])

    def __repr__(self) -> str:
        return (
            f"RewardVault(resource={self._designated_asset_id!r}, "
            f"balance={format_quantity(self._balance)})"
        )
