"""
Vault Errors — иерархия исключений custody-компонента

Все ошибки наследуют VaultError. Ошибки валидации входных данных
дополнительно наследуют ValueError, чтобы вызывающий код, ловящий
ValueError (как для units/pydantic), продолжал работать.

Каждая ошибка несёт машинно-читаемый reason в тексте сообщения.
"""

from decimal import Decimal


class VaultError(Exception):
    """Базовая ошибка reward vault."""

    reason: str = "vault_error"


class InvalidAssetKind(VaultError, ValueError):
    """
    Переданные средства не являются каноническим reward-токеном.

    Возникает только при создании vault через create(). Необратима:
    vault не создаётся, переданный asset не потребляется.
    """

    reason = "invalid_asset_kind"

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid reward resource address: expected {expected!r}, "
            f"got {actual!r} ({self.reason})"
        )


class InsufficientBalance(VaultError, ValueError):
    """
    Запрошенная сумма превышает баланс vault.

    Состояние vault не меняется; повторный вызов с меньшей суммой может пройти.
    """

    reason = "insufficient_balance"

    def __init__(self, requested: Decimal, available: Decimal):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Cannot take {requested} from vault holding {available} ({self.reason})"
        )


class AssetConsumedError(VaultError, ValueError):
    """Asset уже был потреблён (перемещён в vault или другой контейнер)."""

    reason = "asset_consumed"

    def __init__(self, resource_address: str):
        self.resource_address = resource_address
        super().__init__(
            f"Asset of {resource_address!r} has already been consumed ({self.reason})"
        )
