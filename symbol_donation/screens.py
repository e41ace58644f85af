"""Modal screens shared by the Symbol Quick Donation app."""

import logging

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

logger = logging.getLogger(__name__)


class BaseModalScreen(ModalScreen):
    """Base modal screen with common key bindings."""

    BINDINGS = [
        ("escape", "app.pop_screen", "Close"),
        ("tab", "focus_next", "Next"),
        ("shift+tab", "focus_previous", "Previous"),
    ]


class PasswordScreen(BaseModalScreen):
    """Collects the wallet password; dismisses with the password or None."""

    BINDINGS = BaseModalScreen.BINDINGS + [("enter", "submit", "Unlock")]

    def __init__(self, address_hint: str = "", error: str = ""):
        super().__init__()
        self.address_hint = address_hint
        self.error = error

    def compose(self) -> ComposeResult:
        yield Label("🔐 Unlock Wallet", id="password-title")
        if self.address_hint:
            yield Static(f"Wallet: {self.address_hint}")
        yield Input(placeholder="Password", password=True, id="password-input")
        yield Static(self.error, id="password-error")
        yield Horizontal(
            Button("🔓 Unlock", id="unlock-button", variant="primary"),
            Button("✗ Cancel", id="cancel-button"),
        )

    def on_mount(self) -> None:
        self.query_one("#password-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.action_submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "unlock-button":
            self.action_submit()
        elif event.button.id == "cancel-button":
            self.dismiss(None)

    def action_submit(self) -> None:
        password = self.query_one("#password-input", Input).value
        if not password:
            self.query_one("#password-error", Static).update(
                "[red]Password is required[/red]"
            )
            return
        self.dismiss(password)


class ConfirmStartScreen(BaseModalScreen):
    """Shows where the funds go before a run starts; dismisses with a bool."""

    def __init__(self, source: str, destination: str, network: str):
        super().__init__()
        self.source = source
        self.destination = destination
        self.network = network

    def compose(self) -> ComposeResult:
        yield Label("✅ Confirm Donation", id="confirm-title")
        yield Static(f"📥 From: {self.source}")
        yield Static(f"📤 To: {self.destination}")
        yield Static(f"🌐 Network: {self.network}")
        yield Static(
            "Every transferable asset will be sent to the address above, "
            "keeping a small XYM reserve for fees."
        )
        yield Horizontal(
            Button("✓ Confirm", id="confirm-button", variant="primary"),
            Button("✗ Cancel", id="cancel-button"),
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm-button")
