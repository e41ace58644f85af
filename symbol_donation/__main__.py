"""Main application entry point for Symbol Quick Donation."""

from __future__ import annotations

import argparse
import logging
import sys
from getpass import getpass
from pathlib import Path

from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import Button, Footer, Header, Static

from symbol_donation.chain import SymbolChainClient
from symbol_donation.config import ConfigError, DonationConfig
from symbol_donation.features.donation.models import ProgressState
from symbol_donation.features.donation.screen import (
    ContinueAbortScreen,
    DonationProgressTable,
    summary_text,
)
from symbol_donation.features.donation.service import (
    DonationService,
    create_donation_service,
)
from symbol_donation.screens import ConfirmStartScreen, PasswordScreen
from symbol_donation.shared.logging import LoggingConfig, setup_logging
from symbol_donation.styles import CSS
from symbol_donation.wallet import WalletError, WalletSession

logger = logging.getLogger(__name__)


class DonationApp(App):
    CSS = CSS
    TITLE = "Symbol Quick Donation"
    BINDINGS = [
        ("s", "start_donation", "Start donation"),
        ("u", "unlock", "Unlock wallet"),
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        config: DonationConfig,
        wallet: WalletSession,
        chain: SymbolChainClient | None = None,
    ):
        super().__init__()
        self.config = config
        self.wallet = wallet
        self.chain = chain or SymbolChainClient.from_config(config)
        self.donation: DonationService = create_donation_service(
            config, self.chain, prompt=self.ask_operator, notify=self.show_notification
        )
        self.donation.add_listener(self.update_progress)

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Static("", id="wallet-info"),
            Static(
                f"Destination: {self.config.destination_address} ({self.config.network_name})",
                id="destination-info",
            ),
            Button("💚 Start Donation", id="start-button"),
            DonationProgressTable(id="progress-table"),
            Static(summary_text(ProgressState()), id="progress-summary"),
            id="content",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_wallet_info()
        if not self.wallet.is_connected and self.wallet.has_wallet():
            self.action_unlock()
        elif not self.wallet.is_connected:
            self.show_notification(
                "Wallet Not Connected",
                "No wallet found. Run with --import-key to add one.",
                destructive=True,
            )

    def refresh_wallet_info(self) -> None:
        text = (
            f"Wallet: {self.wallet.address}"
            if self.wallet.is_connected
            else "Wallet: not connected"
        )
        self.query_one("#wallet-info", Static).update(text)
        self.query_one("#start-button", Button).disabled = (
            self.donation.is_processing or not self.wallet.is_connected
        )

    def action_unlock(self, error: str = "") -> None:
        if self.wallet.is_connected:
            return
        self.push_screen(PasswordScreen(error=error), self._on_password_entered)

    def _on_password_entered(self, password: str | None) -> None:
        if password is None:
            return
        try:
            self.wallet.unlock(password)
        except WalletError as e:
            logger.warning("Wallet unlock failed: %s", e)
            self.action_unlock(error=f"[red]{e}[/red]")
            return
        self.refresh_wallet_info()
        self.show_notification("Wallet Connected", str(self.wallet.address))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "start-button":
            self.action_start_donation()

    def action_start_donation(self) -> None:
        if self.donation.is_processing:
            return
        if not self.wallet.is_connected:
            self.run_worker(self.donation.start_donation(None), exclusive=True)
            return
        self.push_screen(
            ConfirmStartScreen(
                str(self.wallet.address),
                self.config.destination_address,
                self.config.network_name,
            ),
            self._on_start_confirmed,
        )

    def _on_start_confirmed(self, confirmed: bool | None) -> None:
        if confirmed and not self.donation.is_processing:
            self.run_worker(
                self.donation.start_donation(self.wallet),
                exclusive=True,
                group="donation",
            )

    async def ask_operator(self, message: str) -> bool:
        return bool(await self.push_screen_wait(ContinueAbortScreen(message)))

    def show_notification(
        self, title: str, message: str, *, destructive: bool = False
    ) -> None:
        self.notify(
            message,
            title=title,
            severity="error" if destructive else "information",
        )

    def update_progress(self, state: ProgressState) -> None:
        self.query_one("#progress-table", DonationProgressTable).show(state)
        self.query_one("#progress-summary", Static).update(summary_text(state))
        self.query_one("#start-button", Button).disabled = (
            state.is_processing or not self.wallet.is_connected
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="symbol-quick-donation",
        description="Send every transferable asset of a Symbol account to one address.",
    )
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument("--wallet-dir", help="Directory holding wallet.json and config.json")
    parser.add_argument(
        "--import-key",
        action="store_true",
        help="Import a private key into the wallet directory before starting",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the application."""
    args = build_parser().parse_args(argv)
    logging_config = LoggingConfig.from_environment()
    if args.wallet_dir:
        logging_config.log_dir = Path(args.wallet_dir).expanduser()
    setup_logging(logging_config)

    try:
        config = DonationConfig.load(config_file=args.config, storage_dir=args.wallet_dir)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    wallet = WalletSession(config.network_name, storage_dir=config.storage_dir)

    if args.import_key:
        private_key = getpass("Private key: ")
        password = getpass("New wallet password: ")
        try:
            address = wallet.import_private_key(private_key, password)
        except WalletError as e:
            print(f"Failed to import key: {e}", file=sys.stderr)
            return 1
        print(f"Imported wallet {address}")

    DonationApp(config, wallet).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
