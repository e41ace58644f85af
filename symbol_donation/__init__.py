"""Symbol Quick Donation - send every transferable asset of a Symbol account
to one destination, one transfer at a time.

This package is organized into feature-based modules:
- features.donation: Balance collection, dispatch, confirmation and the run loop
- shared: Logging, node access, validation and capability interfaces
- chain / wallet: Symbol node adapter and the connected wallet session
"""

from symbol_donation.config import ConfigError, DonationConfig
from symbol_donation.features.donation import (
    Asset,
    AssetKind,
    DonationService,
    ProgressState,
    TransferRecord,
    TransferStatus,
)

__version__ = "0.1.0"
__all__ = [
    "ConfigError",
    "DonationConfig",
    "Asset",
    "AssetKind",
    "DonationService",
    "ProgressState",
    "TransferRecord",
    "TransferStatus",
]
