"""Symbol node adapter implementing the donation capabilities.

Balance reads, transfer submission and confirmation polling all go through
the node's REST API. The HTTP client is blocking, so every request runs in a
worker thread and the event loop stays free for the UI.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

from symbolchain import sc
from symbolchain.CryptoTypes import PrivateKey
from symbolchain.facade.SymbolFacade import SymbolFacade

from symbol_donation.config import DonationConfig
from symbol_donation.features.donation.errors import ConfirmationError
from symbol_donation.shared.network import NetworkClient, NetworkError
from symbol_donation.shared.protocols import AccountContext, TokenBalance
from symbol_donation.shared.validation import MosaicIdValidator, format_mosaic_id

logger = logging.getLogger(__name__)

MAINNET_CURRENCY_MOSAIC_ID = 0x6BED913FA20223F8
TESTNET_CURRENCY_MOSAIC_ID = 0x72C0212E67A08BCE
DEADLINE_HOURS = 2


class SigningAccount(Protocol):
    @property
    def address(self) -> str | None: ...

    @property
    def is_connected(self) -> bool: ...

    @property
    def private_key(self) -> PrivateKey: ...


def _normalize_address(address: str) -> str:
    return address.replace("-", "").strip().upper()


def _parse_amount(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


class SymbolChainClient:
    def __init__(
        self,
        network_name: str = "testnet",
        node_url: str = "http://sym-test-01.opening-line.jp:3000",
        fee_multiplier: int = 100,
        poll_interval: float = 3.0,
        network_client: NetworkClient | None = None,
    ):
        self.network_name = network_name
        self.facade = SymbolFacade(network_name)
        self.node_url = node_url.rstrip("/")
        self.fee_multiplier = fee_multiplier
        self.poll_interval = poll_interval
        self._network_client = network_client or NetworkClient(node_url=self.node_url)
        self._currency_mosaic_id: int | None = None

    @classmethod
    def from_config(cls, config: DonationConfig) -> "SymbolChainClient":
        return cls(
            network_name=config.network_name,
            node_url=config.node_url,
            fee_multiplier=config.fee_multiplier,
            poll_interval=config.confirmation_poll_interval,
            network_client=NetworkClient(
                node_url=config.node_url,
                timeout_config=config.timeout_config,
                retry_config=config.retry_config,
            ),
        )

    # Reads

    def get_currency_mosaic_id(self) -> int:
        if self._currency_mosaic_id is not None:
            return self._currency_mosaic_id

        try:
            properties = self._network_client.get(
                "/network/properties", context="Fetch network properties"
            )
            value = (
                properties.get("chain", {})
                .get("currencyMosaicId", "")
                .replace("'", "")
                .strip()
            )
            result = MosaicIdValidator.validate(value)
            if result.is_valid:
                self._currency_mosaic_id = result.normalized_value
                return self._currency_mosaic_id
        except NetworkError as e:
            logger.warning("Could not read currency mosaic id: %s", e)

        self._currency_mosaic_id = (
            TESTNET_CURRENCY_MOSAIC_ID
            if self.network_name == "testnet"
            else MAINNET_CURRENCY_MOSAIC_ID
        )
        return self._currency_mosaic_id

    def fetch_mosaics(self, address: str) -> dict[int, int]:
        """Return ``{mosaic_id: amount}`` for the account, empty if unknown to the node."""
        data = self._network_client.get_optional(
            f"/accounts/{_normalize_address(address)}",
            context="Fetch account balance",
        )
        if not data:
            return {}

        account_info = data.get("account", data)
        mosaics: dict[int, int] = {}
        for mosaic in account_info.get("mosaics", []):
            result = MosaicIdValidator.validate(mosaic.get("id", ""))
            if not result.is_valid:
                logger.debug("Skipping mosaic with invalid id: %s", mosaic.get("id"))
                continue
            mosaics[result.normalized_value] = _parse_amount(mosaic.get("amount"))
        return mosaics

    def get_mosaic_divisibility(self, mosaic_id: int) -> int:
        info = self._network_client.get(
            f"/mosaics/{format_mosaic_id(mosaic_id)}", context="Fetch mosaic info"
        )
        return int(info.get("mosaic", {}).get("divisibility", 0))

    def get_mosaic_names(self, mosaic_ids: list[int]) -> dict[int, str]:
        if not mosaic_ids:
            return {}
        try:
            result = self._network_client.post(
                "/namespaces/mosaic/names",
                context="Fetch mosaic names",
                json={"mosaicIds": [format_mosaic_id(m) for m in mosaic_ids]},
            )
        except NetworkError as e:
            logger.warning("Could not resolve mosaic names: %s", e)
            return {}

        names: dict[int, str] = {}
        for entry in result.get("mosaicNames", []):
            id_result = MosaicIdValidator.validate(entry.get("mosaicId", ""))
            if id_result.is_valid and entry.get("names"):
                names[id_result.normalized_value] = entry["names"][0]
        return names

    def read_native_balance(self, address: str) -> int:
        return self.fetch_mosaics(address).get(self.get_currency_mosaic_id(), 0)

    def read_token_balances(self, address: str) -> list[TokenBalance]:
        currency_id = self.get_currency_mosaic_id()
        held = {
            mosaic_id: amount
            for mosaic_id, amount in self.fetch_mosaics(address).items()
            if mosaic_id != currency_id and amount > 0
        }
        names = self.get_mosaic_names(list(held))
        return [
            TokenBalance(
                token_address=format_mosaic_id(mosaic_id),
                symbol=names.get(mosaic_id, format_mosaic_id(mosaic_id)),
                decimals=self.get_mosaic_divisibility(mosaic_id),
                amount=amount,
            )
            for mosaic_id, amount in held.items()
        ]

    async def get_native_balance(self, account: AccountContext) -> int:
        return await asyncio.to_thread(self.read_native_balance, account.address)

    async def get_token_balances(self, account: AccountContext) -> list[TokenBalance]:
        return await asyncio.to_thread(self.read_token_balances, account.address)

    # Writes

    def create_transfer_transaction(
        self, signer_public_key: str, recipient: str, mosaic_id: int, amount: int
    ):
        deadline = self.facade.network.from_datetime(
            datetime.now(timezone.utc) + timedelta(hours=DEADLINE_HOURS)
        ).timestamp
        transfer = self.facade.transaction_factory.create(
            {
                "type": "transfer_transaction_v1",
                "signer_public_key": signer_public_key,
                "deadline": deadline,
                "recipient_address": _normalize_address(recipient),
                "mosaics": [{"mosaic_id": mosaic_id, "amount": amount}],
            }
        )
        transfer.fee = sc.Amount(transfer.size * self.fee_multiplier)
        return transfer

    def sign_and_announce(self, account: SigningAccount, transaction) -> str:
        signer = self.facade.create_account(account.private_key)
        signature = signer.sign_transaction(transaction)
        signed_payload = self.facade.transaction_factory.attach_signature(
            transaction, signature
        )
        tx_hash = str(self.facade.hash_transaction(transaction))

        result = self._network_client.put(
            "/transactions",
            context="Announce transaction",
            data=signed_payload,
            headers={"Content-Type": "application/json"},
        )
        logger.info(
            "Transaction announced: %s (%s)", tx_hash, result.get("message", "")
        )
        return tx_hash

    def send_mosaic(
        self, account: SigningAccount, recipient: str, mosaic_id: int, amount: int
    ) -> str:
        if not account.is_connected:
            raise ValueError("Wallet not connected")
        signer_public_key = str(self.facade.create_account(account.private_key).public_key)
        transaction = self.create_transfer_transaction(
            signer_public_key, recipient, mosaic_id, amount
        )
        return self.sign_and_announce(account, transaction)

    async def submit_native_transfer(
        self, account: SigningAccount, to: str, amount: int
    ) -> str:
        mosaic_id = await asyncio.to_thread(self.get_currency_mosaic_id)
        return await asyncio.to_thread(self.send_mosaic, account, to, mosaic_id, amount)

    async def submit_token_transfer(
        self, account: SigningAccount, token_address: str, to: str, amount: int
    ) -> str:
        result = MosaicIdValidator.validate(token_address)
        if not result.is_valid:
            raise ValueError(result.error_message or "Invalid mosaic ID")
        return await asyncio.to_thread(
            self.send_mosaic, account, to, result.normalized_value, amount
        )

    # Confirmation

    def get_transaction_status(self, tx_hash: str) -> dict[str, Any] | None:
        response = self._network_client.post(
            "/transactionStatus",
            context="Check transaction status",
            json={"hashes": [tx_hash.strip().upper()]},
        )
        if isinstance(response, list) and response:
            return response[0]
        return None

    async def await_confirmation(self, tx_hash: str) -> None:
        last_group = ""
        while True:
            try:
                status = await asyncio.to_thread(self.get_transaction_status, tx_hash)
            except NetworkError as e:
                logger.debug("Status check for %s failed: %s", tx_hash, e)
                status = None

            group = (status or {}).get("group", "")
            code = (status or {}).get("code", "")
            if group == "confirmed":
                return
            if group == "failed":
                raise ConfirmationError(
                    f"Transaction failed: {code or 'Unknown error'}",
                    tx_hash=tx_hash,
                    status_code=code or None,
                )
            if group and group != last_group:
                logger.debug("Transaction %s is %s", tx_hash, group)
                last_group = group

            await asyncio.sleep(self.poll_interval)
