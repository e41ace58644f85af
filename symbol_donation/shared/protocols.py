"""Capability interfaces the donation core depends on.

The orchestrator never talks to a node, a wallet file or a UI directly. It is
handed objects that satisfy these protocols, which keeps it testable with
plain fakes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Protocol, runtime_checkable


class AccountContext(Protocol):
    """The currently connected account, passed explicitly into every call."""

    @property
    def address(self) -> str | None: ...

    @property
    def is_connected(self) -> bool: ...


@dataclass(frozen=True)
class TokenBalance:
    """A non-currency mosaic held by the account, in smallest units."""

    token_address: str
    symbol: str
    decimals: int
    amount: int


class BalanceReader(Protocol):
    async def get_native_balance(self, account: AccountContext) -> int: ...


@runtime_checkable
class TokenBalanceReader(Protocol):
    async def get_token_balances(
        self, account: AccountContext
    ) -> list[TokenBalance]: ...


class TransferSubmitter(Protocol):
    async def submit_native_transfer(
        self, account: AccountContext, to: str, amount: int
    ) -> str: ...

    async def submit_token_transfer(
        self, account: AccountContext, token_address: str, to: str, amount: int
    ) -> str: ...


class FinalityObserver(Protocol):
    async def await_confirmation(self, tx_hash: str) -> None: ...


class OperatorPrompt(Protocol):
    def __call__(self, message: str) -> bool | Awaitable[bool]: ...


class NotificationSink(Protocol):
    def __call__(
        self, title: str, message: str, *, destructive: bool = False
    ) -> None: ...
