"""Donation feature: sequential transfer of every asset to one destination."""

from symbol_donation.features.donation.collector import AssetBalanceCollector
from symbol_donation.features.donation.confirmation import ConfirmationWaiter
from symbol_donation.features.donation.dispatcher import (
    TransferDispatcher,
    is_user_rejection,
)
from symbol_donation.features.donation.errors import (
    ConfirmationError,
    ConfirmationTimeout,
    DonationError,
    NoAssets,
    NotConnected,
    SubmissionError,
)
from symbol_donation.features.donation.models import (
    Asset,
    AssetKind,
    ProgressState,
    TransferRecord,
    TransferStatus,
)
from symbol_donation.features.donation.reservation import (
    DEFAULT_NATIVE_RESERVE,
    sendable,
)
from symbol_donation.features.donation.service import (
    DonationService,
    create_donation_service,
)

__all__ = [
    "AssetBalanceCollector",
    "ConfirmationWaiter",
    "TransferDispatcher",
    "is_user_rejection",
    "ConfirmationError",
    "ConfirmationTimeout",
    "DonationError",
    "NoAssets",
    "NotConnected",
    "SubmissionError",
    "Asset",
    "AssetKind",
    "ProgressState",
    "TransferRecord",
    "TransferStatus",
    "DEFAULT_NATIVE_RESERVE",
    "sendable",
    "DonationService",
    "create_donation_service",
]
