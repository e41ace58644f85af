"""Terminal widgets for donation progress and the continue/abort prompt."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, Label, Static

from symbol_donation.features.donation.models import ProgressState, TransferStatus

STATUS_LABELS = {
    TransferStatus.PENDING: "⏳ Pending",
    TransferStatus.PROCESSING: "🔄 Processing",
    TransferStatus.SUCCESS: "✅ Success",
    TransferStatus.FAILED: "❌ Failed",
}


def short_hash(tx_hash: str | None) -> str:
    if not tx_hash:
        return "-"
    return f"{tx_hash[:16]}..."


def summary_text(state: ProgressState) -> str:
    if not state.transactions:
        return "Processing..." if state.is_processing else "No donation started yet."
    total = len(state.transactions)
    text = (
        f"Total ${state.total_usd_value:,.2f} | "
        f"{state.succeeded_count}/{total} sent, {state.failed_count} failed"
    )
    if state.is_processing:
        text += f" | transferring {state.current_index + 1} of {total}"
    return text


class DonationProgressTable(DataTable):
    """One row per transfer record, rebuilt from each progress snapshot."""

    def on_mount(self) -> None:
        self.cursor_type = "row"
        self.add_column("#", key="index")
        self.add_column("Asset", key="asset")
        self.add_column("Amount", key="amount")
        self.add_column("Value (USD)", key="value")
        self.add_column("Status", key="status")
        self.add_column("Hash", key="hash")

    def show(self, state: ProgressState) -> None:
        self.clear()
        for idx, record in enumerate(state.transactions):
            self.add_row(
                str(idx + 1),
                record.symbol,
                f"{record.amount:,f}",
                f"{record.usd_value:,.2f}",
                STATUS_LABELS[record.status],
                short_hash(record.tx_hash),
                key=str(idx),
            )
        if state.transactions and state.is_processing:
            self.move_cursor(row=state.current_index)


class ContinueAbortScreen(ModalScreen[bool]):
    """Asks the operator whether to keep going after a failed transfer."""

    BINDINGS = [
        ("y", "answer(True)", "Continue"),
        ("n", "answer(False)", "Abort"),
        ("escape", "answer(False)", "Abort"),
    ]

    def __init__(self, message: str):
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        yield Vertical(
            Label("⚠️ Transfer Failed", id="prompt-title"),
            Static(self.message, id="prompt-message"),
            Horizontal(
                Button("▶ Continue", id="continue-button", variant="primary"),
                Button("■ Abort", id="abort-button", variant="error"),
            ),
            id="prompt-dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "continue-button")

    def action_answer(self, answer: bool) -> None:
        self.dismiss(answer)
