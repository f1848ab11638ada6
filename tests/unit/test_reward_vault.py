"""Unit тесты для RewardVault.

Coverage:
- create(): приём канонического токена, отказ для чужого ресурса
- create_with_fresh_supply(): выпуск 1,000,000 нового токена
- claim_reward(): списание, InsufficientBalance, атомарность
- Конкурентные выводы
- Снапшот и payload-запросы
- Логирование уведомлений
"""

import logging
import threading
from decimal import Decimal

import pytest
from jsonschema import ValidationError

from src.core.domain.asset import Asset
from src.core.domain.units import MAX_QUANTITY
from src.core.errors import AssetConsumedError, InsufficientBalance, InvalidAssetKind
from src.vault import HYDRA_RESOURCE_ADDRESS, RewardVault, VaultConfig, VaultSnapshot


@pytest.fixture
def hydra_config():
    """Конфигурация с коротким каноническим адресом."""
    return VaultConfig(expected_resource_address="HYDRA")


@pytest.fixture
def funded_vault(hydra_config):
    return RewardVault.create(Asset.of("HYDRA", 1_000), hydra_config)


@pytest.fixture
def fresh_vault():
    return RewardVault.create_with_fresh_supply()


# =============================================================================
# CREATE
# =============================================================================


class TestCreate:
    def test_create_balance_equals_funds(self, hydra_config):
        vault = RewardVault.create(Asset.of("HYDRA", "123.45"), hydra_config)

        assert vault.balance == Decimal("123.45")
        assert vault.designated_asset_id == "HYDRA"
        assert vault.resource is None

    def test_create_consumes_funds(self, hydra_config):
        funds = Asset.of("HYDRA", 100)
        RewardVault.create(funds, hydra_config)

        assert funds.is_consumed is True

    def test_create_with_wrong_kind_fails(self, hydra_config):
        funds = Asset.of("WRONG", 100)

        with pytest.raises(InvalidAssetKind) as exc_info:
            RewardVault.create(funds, hydra_config)

        assert exc_info.value.expected == "HYDRA"
        assert exc_info.value.actual == "WRONG"
        assert "invalid_asset_kind" in str(exc_info.value)
        # Средства вызывающей стороны не тронуты
        assert funds.is_consumed is False

    def test_create_rejects_prefix_match(self, hydra_config):
        with pytest.raises(InvalidAssetKind):
            RewardVault.create(Asset.of("HYDRA_EXTRA", 100), hydra_config)
        with pytest.raises(InvalidAssetKind):
            RewardVault.create(Asset.of("HYDR", 100), hydra_config)

    def test_create_default_config_expects_stokenet_hydra(self):
        vault = RewardVault.create(Asset.of(HYDRA_RESOURCE_ADDRESS, 500))
        assert vault.designated_asset_id == HYDRA_RESOURCE_ADDRESS

        with pytest.raises(InvalidAssetKind):
            RewardVault.create(Asset.of("HYDRA", 500))

    def test_create_with_consumed_funds_fails(self, hydra_config):
        funds = Asset.of("HYDRA", 100)
        RewardVault.create(funds, hydra_config)

        with pytest.raises(AssetConsumedError):
            RewardVault.create(funds, hydra_config)

    def test_create_with_zero_funds(self, hydra_config):
        vault = RewardVault.create(Asset.of("HYDRA", 0), hydra_config)
        assert vault.is_empty

    def test_direct_construction_checks_kind(self, hydra_config):
        funds = Asset.of("WRONG", 100)

        with pytest.raises(InvalidAssetKind):
            RewardVault(funds, hydra_config)

        assert funds.is_consumed is False

    def test_direct_construction_with_minted_resource_checks_kind(self, hydra_config):
        minted = RewardVault.create_with_fresh_supply().resource

        with pytest.raises(InvalidAssetKind) as exc_info:
            RewardVault(Asset.of("HYDRA", 100), hydra_config, resource=minted)

        assert exc_info.value.expected == minted.address

    def test_direct_construction_with_expected_kind(self, hydra_config):
        vault = RewardVault(Asset.of("HYDRA", 100), hydra_config)
        assert vault.balance == Decimal(100)


class TestCreateWithFreshSupply:
    def test_fresh_supply_balance(self, fresh_vault):
        assert fresh_vault.balance == Decimal(1_000_000)

    def test_fresh_supply_resource(self, fresh_vault):
        resource = fresh_vault.resource

        assert resource is not None
        assert resource.address == fresh_vault.designated_asset_id
        assert resource.divisibility == 18
        assert resource.total_supply == Decimal(1_000_000)
        assert resource.metadata.name == "HYDRA"
        assert resource.metadata.symbol == "HYDR"

    def test_fresh_supply_new_kind_each_time(self):
        a = RewardVault.create_with_fresh_supply()
        b = RewardVault.create_with_fresh_supply()
        assert a.designated_asset_id != b.designated_asset_id

    def test_fresh_supply_not_expected_kind(self, fresh_vault):
        assert fresh_vault.designated_asset_id != HYDRA_RESOURCE_ADDRESS

    def test_fresh_supply_custom_config(self):
        config = VaultConfig(initial_supply=Decimal(500), token_name="Scale", token_symbol="SCL")
        vault = RewardVault.create_with_fresh_supply(config)

        assert vault.balance == Decimal(500)
        assert vault.resource.metadata.symbol == "SCL"


# =============================================================================
# CLAIM
# =============================================================================


class TestClaimReward:
    def test_claim_returns_asset(self, funded_vault):
        claimed = funded_vault.claim_reward(250)

        assert isinstance(claimed, Asset)
        assert claimed.resource_address == "HYDRA"
        assert claimed.amount == Decimal(250)
        assert claimed.is_consumed is False
        assert funded_vault.balance == Decimal(750)

    def test_claim_sequence(self, funded_vault):
        amounts = ["100", "0.5", "399.5", "0"]
        for amount in amounts:
            funded_vault.claim_reward(amount)

        assert funded_vault.balance == Decimal(1_000) - sum(Decimal(a) for a in amounts)

    def test_claim_entire_balance(self, funded_vault):
        funded_vault.claim_reward(1_000)

        assert funded_vault.balance == 0
        assert funded_vault.is_empty

    def test_claim_insufficient_balance(self, funded_vault):
        with pytest.raises(InsufficientBalance) as exc_info:
            funded_vault.claim_reward("1000.000000000000000001")

        assert exc_info.value.requested == Decimal("1000.000000000000000001")
        assert exc_info.value.available == Decimal(1_000)
        assert funded_vault.balance == Decimal(1_000)

    def test_failed_claim_is_repeatable(self, funded_vault):
        for _ in range(3):
            with pytest.raises(InsufficientBalance):
                funded_vault.claim_reward(5_000)
        assert funded_vault.balance == Decimal(1_000)
        assert funded_vault.snapshot().claims_count == 0

    def test_claim_from_empty_vault(self, funded_vault):
        funded_vault.claim_reward(1_000)

        with pytest.raises(InsufficientBalance):
            funded_vault.claim_reward("0.000000000000000001")

    def test_smaller_claim_succeeds_after_failure(self, funded_vault):
        with pytest.raises(InsufficientBalance):
            funded_vault.claim_reward(2_000)

        funded_vault.claim_reward(999)
        assert funded_vault.balance == Decimal(1)

    def test_negative_amount_rejected(self, funded_vault):
        with pytest.raises(ValueError):
            funded_vault.claim_reward(-1)
        assert funded_vault.balance == Decimal(1_000)

    def test_float_amount_rejected(self, funded_vault):
        with pytest.raises(ValueError):
            funded_vault.claim_reward(0.1)

    def test_insufficient_balance_is_value_error(self, funded_vault):
        with pytest.raises(ValueError):
            funded_vault.claim_reward(10_000)

    def test_claim_from_max_balance_is_exact(self, hydra_config):
        vault = RewardVault.create(Asset.of("HYDRA", MAX_QUANTITY), hydra_config)

        vault.claim_reward(1)

        assert vault.balance == Decimal(f"{2**191 - 1 - 10**18}E-18")

    def test_claim_precision_follows_minted_divisibility(self):
        vault = RewardVault.create_with_fresh_supply(VaultConfig(divisibility=2))

        vault.claim_reward("0.25")
        with pytest.raises(ValueError):
            vault.claim_reward("0.125")
        assert vault.balance == Decimal("999999.75")


class TestScenarios:
    def test_fresh_supply_scenario(self, fresh_vault):
        """1,000,000 → claim 250 → 999,750 → claim 1,000,000 fails."""
        claimed = fresh_vault.claim_reward(250)

        assert claimed.amount == Decimal(250)
        assert fresh_vault.balance == Decimal(999_750)

        with pytest.raises(InsufficientBalance):
            fresh_vault.claim_reward(1_000_000)

        assert fresh_vault.balance == Decimal(999_750)

    def test_wrong_kind_scenario(self, hydra_config):
        with pytest.raises(InvalidAssetKind):
            RewardVault.create(Asset.of("WRONG", 100), hydra_config)


# =============================================================================
# CONCURRENCY
# =============================================================================


class TestConcurrentClaims:
    def test_concurrent_claims_never_overdraw(self, hydra_config):
        vault = RewardVault.create(Asset.of("HYDRA", 1_000), hydra_config)
        claimed = []
        failures = []
        claimed_lock = threading.Lock()

        def worker():
            for _ in range(50):
                try:
                    asset = vault.claim_reward(3)
                except InsufficientBalance:
                    with claimed_lock:
                        failures.append(1)
                else:
                    with claimed_lock:
                        claimed.append(asset.amount)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        total = sum(claimed, Decimal(0))
        # 1000 // 3 = 333 успешных вывода
        assert len(claimed) == 333
        assert len(failures) == 8 * 50 - 333
        assert total == Decimal(999)
        assert vault.balance == Decimal(1)
        assert vault.snapshot().claims_count == 333


# =============================================================================
# SNAPSHOT / PAYLOAD
# =============================================================================


class TestSnapshotAndPayload:
    def test_snapshot(self, funded_vault):
        funded_vault.claim_reward("0.5")
        snapshot = funded_vault.snapshot()

        assert isinstance(snapshot, VaultSnapshot)
        assert snapshot.resource_address == "HYDRA"
        assert snapshot.balance == Decimal("999.5")
        assert snapshot.claims_count == 1

    def test_snapshot_payload(self, funded_vault):
        funded_vault.claim_reward(250)
        assert funded_vault.snapshot().to_payload() == {
            "resource_address": "HYDRA",
            "balance": "750",
            "claims_count": 1,
        }

    def test_claim_from_payload(self, funded_vault):
        claimed = funded_vault.claim_from_payload({"amount": "12.5"})

        assert claimed.amount == Decimal("12.5")
        assert funded_vault.balance == Decimal("987.5")

    def test_claim_from_invalid_payload(self, funded_vault):
        with pytest.raises(ValidationError):
            funded_vault.claim_from_payload({"amount": -5})
        with pytest.raises(ValidationError):
            funded_vault.claim_from_payload({"amount": "1", "recipient": "me"})
        assert funded_vault.balance == Decimal(1_000)

    def test_repr(self, funded_vault):
        assert repr(funded_vault) == "RewardVault(resource='HYDRA', balance=1000)"


# =============================================================================
# LOGGING
# =============================================================================


class TestNotifications:
    def test_claim_emits_notification(self, funded_vault, caplog):
        with caplog.at_level(logging.INFO, logger="src.vault.reward_vault"):
            funded_vault.claim_reward(250)

        assert "A warrior claimed 250 HYDRA tokens!" in caplog.messages

    def test_rejected_claim_logs_warning(self, funded_vault, caplog):
        with caplog.at_level(logging.WARNING, logger="src.vault.reward_vault"):
            with pytest.raises(InsufficientBalance):
                funded_vault.claim_reward(5_000)

        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_rejected_create_logs_warning(self, hydra_config, caplog):
        with caplog.at_level(logging.WARNING, logger="src.vault.reward_vault"):
            with pytest.raises(InvalidAssetKind):
                RewardVault.create(Asset.of("WRONG", 1), hydra_config)

        assert "Vault creation rejected" in caplog.text
