"""Submission of a single full-balance transfer."""

from __future__ import annotations

import logging
import re

from symbol_donation.features.donation.errors import SubmissionError
from symbol_donation.features.donation.models import Asset
from symbol_donation.shared.protocols import AccountContext, TransferSubmitter

logger = logging.getLogger(__name__)

REJECTION_PATTERN = re.compile(r"user rejected|rejected|denied|cancell?ed", re.IGNORECASE)


def is_user_rejection(error: Exception | str) -> bool:
    return bool(REJECTION_PATTERN.search(str(error)))


class TransferDispatcher:
    """Sends one asset, in full, to a fixed destination.

    There is no retry here. A failed dispatch becomes a failed record and the
    operator decides whether the run continues.
    """

    def __init__(self, submitter: TransferSubmitter, destination: str):
        self.submitter = submitter
        self.destination = destination

    async def dispatch(self, account: AccountContext | None, asset: Asset) -> str:
        if account is None or not account.is_connected or not account.address:
            raise SubmissionError("Wallet not connected")

        try:
            if asset.is_native:
                tx_hash = await self.submitter.submit_native_transfer(
                    account, self.destination, asset.amount
                )
            else:
                tx_hash = await self.submitter.submit_token_transfer(
                    account, asset.address, self.destination, asset.amount
                )
        except SubmissionError:
            raise
        except Exception as e:
            raise SubmissionError(
                str(e) or type(e).__name__,
                user_rejected=is_user_rejection(e),
                original_error=e,
            ) from e

        logger.info(
            "Submitted %s transfer of %s to %s: %s",
            asset.symbol,
            asset.display_amount,
            self.destination,
            tx_hash,
        )
        return tx_hash
