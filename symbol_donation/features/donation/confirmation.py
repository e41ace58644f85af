"""Waiting for a submitted transfer to be confirmed."""

from __future__ import annotations

import asyncio
import logging

from symbol_donation.features.donation.errors import (
    ConfirmationError,
    ConfirmationTimeout,
)
from symbol_donation.shared.protocols import FinalityObserver

logger = logging.getLogger(__name__)


class ConfirmationWaiter:
    def __init__(self, observer: FinalityObserver, timeout: float | None = None):
        self.observer = observer
        self.timeout = timeout

    async def wait(self, tx_hash: str) -> None:
        logger.debug("Waiting for confirmation of %s", tx_hash)
        try:
            if self.timeout is None:
                await self.observer.await_confirmation(tx_hash)
            else:
                await asyncio.wait_for(
                    self.observer.await_confirmation(tx_hash), self.timeout
                )
        except ConfirmationError:
            raise
        except (asyncio.TimeoutError, TimeoutError) as e:
            raise ConfirmationTimeout(
                f"Transaction {tx_hash} was not confirmed within {self.timeout} seconds",
                tx_hash=tx_hash,
            ) from e
        except Exception as e:
            raise ConfirmationError(
                f"Could not confirm transaction {tx_hash}: {e}", tx_hash=tx_hash
            ) from e
        logger.info("Transaction confirmed: %s", tx_hash)
