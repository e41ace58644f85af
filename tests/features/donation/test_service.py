"""Tests for the donation run loop."""

import asyncio

import pytest

from symbol_donation.config import DonationConfig
from symbol_donation.features.donation.collector import AssetBalanceCollector
from symbol_donation.features.donation.confirmation import ConfirmationWaiter
from symbol_donation.features.donation.dispatcher import TransferDispatcher
from symbol_donation.features.donation.models import TransferStatus
from symbol_donation.features.donation.service import (
    CONTINUE_PROMPT,
    DonationService,
    create_donation_service,
)
from symbol_donation.shared.network import NetworkError, NetworkErrorType
from symbol_donation.shared.protocols import TokenBalance
from tests.features.donation.fakes import (
    FakeAccount,
    FakeBalances,
    FakeObserver,
    FakeSubmitter,
    Notifications,
    ScriptedPrompt,
)

DESTINATION = "TDONATIONDESTINATIONADDRESSXXXXXXXXXXXX"


def _tokens(*specs):
    return [
        TokenBalance(token_address=address, symbol=symbol, decimals=0, amount=amount)
        for address, symbol, amount in specs
    ]


class Harness:
    """Builds a service around in-memory collaborators."""

    def __init__(
        self,
        native=0,
        tokens=None,
        failures=None,
        failing_hashes=None,
        answers=(),
        prices=None,
    ):
        self.balances = FakeBalances(native=native, tokens=tokens)
        self.submitter = FakeSubmitter(failures)
        self.observer = FakeObserver(failing_hashes)
        self.notify = Notifications()
        self.prompt = ScriptedPrompt(*answers)
        self.sleeps: list[float] = []
        self.snapshots = []

        async def record_sleep(seconds):
            self.sleeps.append(seconds)

        self.service = DonationService(
            collector=AssetBalanceCollector(
                self.balances, self.notify, prices=prices or {}
            ),
            dispatcher=TransferDispatcher(self.submitter, DESTINATION),
            waiter=ConfirmationWaiter(self.observer),
            prompt=self.prompt,
            notify=self.notify,
            inter_transfer_delay=1.0,
            sleep=record_sleep,
        )
        self.service.add_listener(self.snapshots.append)

    def run(self, account=None):
        asyncio.run(self.service.start_donation(account or FakeAccount()))
        return self.service.snapshot()


@pytest.mark.unit
class TestScenarios:
    def test_native_only_account(self):
        harness = Harness(native=1_000_000)

        state = harness.run()

        assert harness.submitter.calls == [("native", DESTINATION, 900_000)]
        assert len(state.transactions) == 1
        record = state.transactions[0]
        assert record.status == TransferStatus.SUCCESS
        assert record.tx_hash
        assert not state.is_processing
        assert harness.notify.titles == ["Donation Complete!"]
        assert harness.prompt.messages == []
        assert harness.sleeps == []

    def test_failure_then_continue(self):
        harness = Harness(
            native=0,
            tokens=_tokens(
                ("AAAA000000000001", "one", 10),
                ("AAAA000000000002", "two", 20),
                ("AAAA000000000003", "three", 30),
            ),
            failures={"AAAA000000000002": RuntimeError("Failure_Core_Insufficient_Balance")},
            answers=(True,),
        )

        state = harness.run()

        assert [r.status for r in state.transactions] == [
            TransferStatus.SUCCESS,
            TransferStatus.FAILED,
            TransferStatus.SUCCESS,
        ]
        assert state.transactions[1].tx_hash is None
        assert harness.prompt.messages == [CONTINUE_PROMPT]
        assert ("Transaction Failed", "Failure_Core_Insufficient_Balance", True) in (
            harness.notify.entries
        )
        assert harness.notify.titles[-1] == "Donation Complete!"
        assert harness.sleeps == [1.0, 1.0]

    def test_failure_then_abort(self):
        harness = Harness(
            native=0,
            tokens=_tokens(
                ("AAAA000000000001", "one", 10),
                ("AAAA000000000002", "two", 20),
                ("AAAA000000000003", "three", 30),
            ),
            failures={"AAAA000000000001": RuntimeError("boom")},
            answers=(False,),
        )

        state = harness.run()

        assert [r.status for r in state.transactions] == [
            TransferStatus.FAILED,
            TransferStatus.PENDING,
            TransferStatus.PENDING,
        ]
        assert len(harness.submitter.calls) == 1
        assert not state.is_processing
        assert harness.notify.titles[-1] == "Donation Complete!"

    def test_user_rejection_on_last_asset(self):
        harness = Harness(
            native=0,
            tokens=_tokens(("AAAA000000000001", "one", 10), ("AAAA000000000002", "two", 20)),
            failures={"AAAA000000000002": RuntimeError("User rejected the request")},
        )

        state = harness.run()

        assert [r.status for r in state.transactions] == [
            TransferStatus.SUCCESS,
            TransferStatus.FAILED,
        ]
        assert harness.prompt.messages == []
        assert (
            "Transaction Cancelled",
            "You rejected the transaction",
            False,
        ) in harness.notify.entries
        assert harness.notify.titles[-1] == "Donation Complete!"


@pytest.mark.unit
class TestRunGuards:
    def test_not_connected_does_not_touch_state(self):
        harness = Harness(native=1_000_000)

        for account in (None, FakeAccount(is_connected=False)):
            asyncio.run(harness.service.start_donation(account))

        assert harness.notify.entries == [
            ("Wallet Not Connected", "Please connect your wallet first", True)
        ] * 2
        assert harness.snapshots == []
        assert harness.submitter.calls == []
        assert not harness.service.is_processing

    def test_no_assets(self):
        harness = Harness(native=1_000)

        state = harness.run()

        assert state.transactions == ()
        assert not state.is_processing
        assert harness.notify.titles == ["No Assets Found"]
        assert harness.submitter.calls == []

    def test_balance_failure_reports_once_then_no_assets(self):
        harness = Harness(native=1_000_000)
        harness.balances.native_error = RuntimeError("node down")

        state = harness.run()

        assert state.transactions == ()
        assert harness.notify.titles == ["Error", "No Assets Found"]

    def test_previous_records_are_cleared(self):
        harness = Harness(native=1_000_000)
        harness.run()
        harness.balances.native = 0

        state = harness.run()

        assert state.transactions == ()


@pytest.mark.unit
class TestProgressInvariants:
    def test_sequential_and_single_processing(self):
        harness = Harness(
            native=5_000_000,
            tokens=_tokens(("AAAA000000000001", "one", 10), ("AAAA000000000002", "two", 20)),
            prices={"XYM": 1.0},
        )

        harness.run()

        assert harness.snapshots[0].is_processing
        assert harness.snapshots[-1].is_processing is False
        for snapshot in harness.snapshots:
            processing = snapshot.count(TransferStatus.PROCESSING)
            assert processing <= 1
            if processing:
                index = next(
                    i
                    for i, r in enumerate(snapshot.transactions)
                    if r.status is TransferStatus.PROCESSING
                )
                assert snapshot.current_index == index
                assert all(
                    r.status is TransferStatus.PENDING
                    for r in snapshot.transactions[index + 1 :]
                )

        kinds = [call[0] for call in harness.submitter.calls]
        assert kinds == ["native", "token", "token"]

    def test_confirmation_failure_marks_record_failed(self):
        harness = Harness(native=1_000_000)
        harness.observer.failing_hashes = {f"HASH{1:060d}"}

        state = harness.run()

        assert state.transactions[0].status == TransferStatus.FAILED
        assert harness.notify.entries[0][0] == "Transaction Failed"
        assert harness.notify.entries[0][2] is True

    def test_network_failure_uses_friendly_message(self):
        error = NetworkError(
            error_type=NetworkErrorType.CONNECTION_ERROR,
            message="Announce transaction: Cannot connect to node: http://node",
        )
        harness = Harness(native=1_000_000, failures={"XYM": error})

        harness.run()

        title, message, destructive = harness.notify.entries[0]
        assert title == "Transaction Failed"
        assert message.startswith("Unable to connect to the node.")
        assert destructive

    def test_unexpected_error_is_contained(self):
        harness = Harness(
            native=0,
            tokens=_tokens(("AAAA000000000001", "one", 10), ("AAAA000000000002", "two", 20)),
            failures={"AAAA000000000001": RuntimeError("boom")},
        )

        def broken_prompt(message):
            raise RuntimeError("prompt crashed")

        harness.service.prompt = broken_prompt

        state = harness.run()

        assert not state.is_processing
        assert not harness.service.is_processing
        assert ("Error", "Failed to process donation", True) in harness.notify.entries
        assert "Donation Complete!" not in harness.notify.titles

    def test_async_prompt_is_awaited(self):
        harness = Harness(
            native=0,
            tokens=_tokens(("AAAA000000000001", "one", 10), ("AAAA000000000002", "two", 20)),
            failures={"AAAA000000000001": RuntimeError("boom")},
        )
        asked = []

        async def async_prompt(message):
            asked.append(message)
            return False

        harness.service.prompt = async_prompt

        state = harness.run()

        assert asked == [CONTINUE_PROMPT]
        assert state.transactions[1].status == TransferStatus.PENDING

    def test_listener_errors_do_not_break_run(self):
        harness = Harness(native=1_000_000)

        def broken_listener(state):
            raise RuntimeError("ui gone")

        harness.service.add_listener(broken_listener)

        state = harness.run()

        assert state.transactions[0].status == TransferStatus.SUCCESS

    def test_remove_listener(self):
        harness = Harness(native=1_000_000)
        harness.service.remove_listener(harness.snapshots.append)
        harness.service.remove_listener(harness.snapshots.append)

        harness.run()

        assert harness.snapshots == []


@pytest.mark.unit
def test_create_donation_service_wires_config(destination_address):
    config = DonationConfig(
        destination_address=destination_address,
        native_reserve=5_000,
        inter_transfer_delay=0.5,
        confirmation_timeout=30.0,
        include_tokens=False,
    )
    chain = FakeBalances(native=10_000)

    service = create_donation_service(
        config, chain, prompt=ScriptedPrompt(), notify=Notifications()
    )

    assert service.dispatcher.destination == destination_address
    assert service.collector.reserve == 5_000
    assert service.collector.include_tokens is False
    assert service.waiter.timeout == 30.0
    assert service.inter_transfer_delay == 0.5
    assert asyncio.run(service.collector.collect(FakeAccount()))[0].amount == 5_000
