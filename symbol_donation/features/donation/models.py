"""Data model for donation runs: assets, transfer records and progress."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum


class AssetKind(Enum):
    NATIVE = "native"
    FUNGIBLE_TOKEN = "fungible-token"


class TransferStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (TransferStatus.SUCCESS, TransferStatus.FAILED)


ALLOWED_TRANSITIONS: dict[TransferStatus, frozenset[TransferStatus]] = {
    TransferStatus.PENDING: frozenset({TransferStatus.PROCESSING}),
    TransferStatus.PROCESSING: frozenset(
        {TransferStatus.SUCCESS, TransferStatus.FAILED}
    ),
    TransferStatus.SUCCESS: frozenset(),
    TransferStatus.FAILED: frozenset(),
}


@dataclass(frozen=True)
class Asset:
    """A transferable unit held by the account.

    ``amount`` is the raw integer amount in the smallest unit and is already
    net of any reserve. ``usd_value`` is an estimate used only for ordering.
    """

    kind: AssetKind
    symbol: str
    decimals: int
    amount: int
    address: str | None = None
    usd_value: float = 0.0

    def __post_init__(self):
        if self.amount <= 0:
            raise ValueError(f"Asset amount must be positive, got {self.amount}")
        if self.decimals < 0:
            raise ValueError("Asset decimals must not be negative")
        if self.kind is AssetKind.FUNGIBLE_TOKEN and not self.address:
            raise ValueError("Token assets require an address")
        if self.kind is AssetKind.NATIVE and self.address is not None:
            raise ValueError("Native assets have no address")

    @property
    def is_native(self) -> bool:
        return self.kind is AssetKind.NATIVE

    @property
    def asset_id(self) -> str:
        return self.address or self.symbol

    @property
    def display_amount(self) -> Decimal:
        return Decimal(self.amount).scaleb(-self.decimals)


@dataclass(frozen=True)
class TransferRecord:
    asset_id: str
    symbol: str
    amount: Decimal
    usd_value: float
    status: TransferStatus = TransferStatus.PENDING
    tx_hash: str | None = None

    @classmethod
    def from_asset(cls, asset: Asset) -> "TransferRecord":
        return cls(
            asset_id=asset.asset_id,
            symbol=asset.symbol,
            amount=asset.display_amount,
            usd_value=asset.usd_value,
        )

    def transition(
        self, status: TransferStatus, tx_hash: str | None = None
    ) -> "TransferRecord":
        if status not in ALLOWED_TRANSITIONS[self.status]:
            raise ValueError(
                f"Invalid transfer status change {self.status.value} -> {status.value}"
            )
        return replace(self, status=status, tx_hash=tx_hash)


@dataclass(frozen=True)
class ProgressState:
    """Read-only view of a donation run handed to presentation code."""

    transactions: tuple[TransferRecord, ...] = field(default_factory=tuple)
    current_index: int = 0
    is_processing: bool = False

    @property
    def total_usd_value(self) -> float:
        return sum(record.usd_value for record in self.transactions)

    def count(self, status: TransferStatus) -> int:
        return sum(1 for record in self.transactions if record.status is status)

    @property
    def succeeded_count(self) -> int:
        return self.count(TransferStatus.SUCCESS)

    @property
    def failed_count(self) -> int:
        return self.count(TransferStatus.FAILED)

    @property
    def completed_count(self) -> int:
        return sum(1 for record in self.transactions if record.status.is_terminal)
