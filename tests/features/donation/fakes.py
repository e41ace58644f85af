"""In-memory collaborators for donation tests."""

from __future__ import annotations

from dataclasses import dataclass, field

from symbol_donation.features.donation.errors import ConfirmationError
from symbol_donation.shared.protocols import TokenBalance


@dataclass
class FakeAccount:
    address: str | None = "TBXUTAX6O6EUVPB6X7OBNX6UUXBMPPAFX7KE5TQ"
    is_connected: bool = True


class FakeBalances:
    """Native balance plus optional token balances."""

    def __init__(self, native: int = 0, tokens: list[TokenBalance] | None = None):
        self.native = native
        self.tokens = tokens or []
        self.native_error: Exception | None = None
        self.token_error: Exception | None = None

    async def get_native_balance(self, account) -> int:
        if self.native_error:
            raise self.native_error
        return self.native

    async def get_token_balances(self, account) -> list[TokenBalance]:
        if self.token_error:
            raise self.token_error
        return list(self.tokens)


class NativeOnlyBalances:
    def __init__(self, native: int):
        self.native = native

    async def get_native_balance(self, account) -> int:
        return self.native


class FakeSubmitter:
    """Records every submission; ``failures`` maps asset id to an exception."""

    def __init__(self, failures: dict[str, Exception] | None = None):
        self.failures = failures or {}
        self.calls: list[tuple] = []

    async def submit_native_transfer(self, account, to: str, amount: int) -> str:
        self.calls.append(("native", to, amount))
        if "XYM" in self.failures:
            raise self.failures["XYM"]
        return f"HASH{len(self.calls):060d}"

    async def submit_token_transfer(
        self, account, token_address: str, to: str, amount: int
    ) -> str:
        self.calls.append(("token", token_address, to, amount))
        if token_address in self.failures:
            raise self.failures[token_address]
        return f"HASH{len(self.calls):060d}"


class FakeObserver:
    def __init__(self, failing_hashes: set[str] | None = None):
        self.failing_hashes = failing_hashes or set()
        self.awaited: list[str] = []

    async def await_confirmation(self, tx_hash: str) -> None:
        self.awaited.append(tx_hash)
        if tx_hash in self.failing_hashes:
            raise ConfirmationError("Transaction failed: Failure_Core_Insufficient_Balance", tx_hash=tx_hash)


@dataclass
class Notifications:
    entries: list[tuple[str, str, bool]] = field(default_factory=list)

    def __call__(self, title: str, message: str, *, destructive: bool = False) -> None:
        self.entries.append((title, message, destructive))

    @property
    def titles(self) -> list[str]:
        return [title for title, _, _ in self.entries]


class ScriptedPrompt:
    """Answers operator prompts from a list and remembers the questions."""

    def __init__(self, *answers: bool):
        self.answers = list(answers)
        self.messages: list[str] = []

    def __call__(self, message: str) -> bool:
        self.messages.append(message)
        return self.answers.pop(0)
