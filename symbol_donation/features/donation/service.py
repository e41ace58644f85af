"""Sequential donation of every transferable asset to one destination."""

from __future__ import annotations

import asyncio
import inspect
import logging
import uuid
from typing import TYPE_CHECKING, Awaitable, Callable

from symbol_donation.features.donation.collector import AssetBalanceCollector
from symbol_donation.features.donation.confirmation import ConfirmationWaiter
from symbol_donation.features.donation.dispatcher import TransferDispatcher
from symbol_donation.features.donation.errors import (
    ConfirmationError,
    NoAssets,
    NotConnected,
    SubmissionError,
)
from symbol_donation.features.donation.models import (
    Asset,
    ProgressState,
    TransferRecord,
    TransferStatus,
)
from symbol_donation.shared.logging import (
    ContextAdapter,
    format_error_for_user,
    get_logger,
)
from symbol_donation.shared.network import NetworkError
from symbol_donation.shared.protocols import (
    AccountContext,
    NotificationSink,
    OperatorPrompt,
)

if TYPE_CHECKING:
    from symbol_donation.chain import SymbolChainClient
    from symbol_donation.config import DonationConfig

logger = logging.getLogger(__name__)

CONTINUE_PROMPT = "Transaction failed. Do you want to continue with remaining tokens?"
DEFAULT_INTER_TRANSFER_DELAY = 1.0

ProgressListener = Callable[[ProgressState], None]


class DonationService:
    """Drives one donation run at a time.

    A run collects the account's assets, then dispatches and confirms them one
    by one in collection order. A failed transfer is never retried within the
    run; the operator is asked whether the remaining assets should still be
    sent. Progress is published to listeners after every state change.
    """

    def __init__(
        self,
        collector: AssetBalanceCollector,
        dispatcher: TransferDispatcher,
        waiter: ConfirmationWaiter,
        prompt: OperatorPrompt,
        notify: NotificationSink,
        inter_transfer_delay: float = DEFAULT_INTER_TRANSFER_DELAY,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.collector = collector
        self.dispatcher = dispatcher
        self.waiter = waiter
        self.prompt = prompt
        self.notify = notify
        self.inter_transfer_delay = inter_transfer_delay
        self._sleep = sleep
        self._records: list[TransferRecord] = []
        self._current_index = 0
        self._is_processing = False
        self._listeners: list[ProgressListener] = []

    @property
    def is_processing(self) -> bool:
        return self._is_processing

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def transactions(self) -> tuple[TransferRecord, ...]:
        return tuple(self._records)

    def snapshot(self) -> ProgressState:
        return ProgressState(
            transactions=tuple(self._records),
            current_index=self._current_index,
            is_processing=self._is_processing,
        )

    def add_listener(self, listener: ProgressListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ProgressListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _publish(self) -> None:
        state = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error("Error in progress listener: %s", e)

    def _set_status(
        self, index: int, status: TransferStatus, tx_hash: str | None = None
    ) -> None:
        self._records[index] = self._records[index].transition(status, tx_hash)
        self._publish()

    async def start_donation(self, account: AccountContext | None) -> None:
        if account is None or not account.is_connected or not account.address:
            error = NotConnected()
            logger.warning("Donation requested without a connected wallet")
            self.notify("Wallet Not Connected", str(error), destructive=True)
            return

        run_log = get_logger(
            __name__, {"run_id": uuid.uuid4().hex[:8], "account": account.address}
        )

        self._is_processing = True
        self._current_index = 0
        self._records = []
        self._publish()

        try:
            assets = await self.collector.collect(account)
            if not assets:
                error = NoAssets()
                run_log.info("No transferable assets found")
                self.notify("No Assets Found", str(error))
                return

            self._records = [TransferRecord.from_asset(asset) for asset in assets]
            self._publish()
            run_log.info(
                "Starting donation of %d assets to %s",
                len(assets),
                self.dispatcher.destination,
            )

            last_index = len(assets) - 1
            for index, asset in enumerate(assets):
                succeeded = await self._process(account, asset, index, run_log)

                if not succeeded and index < last_index:
                    if not await self._ask_to_continue():
                        run_log.info(
                            "Donation aborted by operator after index %d", index
                        )
                        break

                if index < last_index:
                    await self._sleep(self.inter_transfer_delay)

            state = self.snapshot()
            run_log.info(
                "Donation finished: %d succeeded, %d failed, %d pending",
                state.succeeded_count,
                state.failed_count,
                state.count(TransferStatus.PENDING),
            )
            self.notify("Donation Complete!", "Thank you for your generous donation")
        except Exception as e:
            run_log.exception("Donation error: %s", e)
            self.notify("Error", "Failed to process donation", destructive=True)
        finally:
            self._is_processing = False
            self._publish()

    async def _process(
        self,
        account: AccountContext,
        asset: Asset,
        index: int,
        run_log: ContextAdapter,
    ) -> bool:
        asset_log = run_log.with_context(index=index, asset=asset.asset_id)
        self._current_index = index
        self._set_status(index, TransferStatus.PROCESSING)

        try:
            tx_hash = await self.dispatcher.dispatch(account, asset)
            await self.waiter.wait(tx_hash)
        except (SubmissionError, ConfirmationError) as e:
            asset_log.error("Transaction error: %s", e)
            self._set_status(index, TransferStatus.FAILED)
            self._report_failure(e)
            return False

        self._set_status(index, TransferStatus.SUCCESS, tx_hash)
        asset_log.info("Transfer of %s %s confirmed", asset.display_amount, asset.symbol)
        return True

    def _report_failure(self, error: SubmissionError | ConfirmationError) -> None:
        if isinstance(error, SubmissionError) and error.user_rejected:
            self.notify("Transaction Cancelled", "You rejected the transaction")
            return

        cause = getattr(error, "original_error", None)
        if isinstance(cause, NetworkError):
            message = format_error_for_user(cause)
        else:
            message = str(error) or "Unknown error occurred"
        self.notify("Transaction Failed", message, destructive=True)

    async def _ask_to_continue(self) -> bool:
        answer = self.prompt(CONTINUE_PROMPT)
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)


def create_donation_service(
    config: "DonationConfig",
    chain: "SymbolChainClient",
    prompt: OperatorPrompt,
    notify: NotificationSink,
) -> DonationService:
    """Wire a DonationService to a Symbol chain client using ``config``."""
    collector = AssetBalanceCollector(
        chain,
        notify,
        reserve=config.native_reserve,
        prices=config.prices,
        include_tokens=config.include_tokens,
    )
    return DonationService(
        collector=collector,
        dispatcher=TransferDispatcher(chain, config.destination_address),
        waiter=ConfirmationWaiter(chain, timeout=config.confirmation_timeout),
        prompt=prompt,
        notify=notify,
        inter_transfer_delay=config.inter_transfer_delay,
    )
