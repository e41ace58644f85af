"""Wallet session: the connected account the donation runs against.

Wallet files use the Symbol Quick Wallet layout (``wallet.json`` holding an
``encrypted_private_key`` and ``public_key``), so an existing wallet directory
can be pointed at directly.
"""

from __future__ import annotations

import base64
import json
import logging
from pathlib import Path

from cryptography.fernet import Fernet, InvalidToken
from symbolchain.CryptoTypes import PrivateKey
from symbolchain.facade.SymbolFacade import SymbolFacade

logger = logging.getLogger(__name__)


class WalletError(Exception):
    pass


def _cipher_for(password: str) -> Fernet:
    key = base64.urlsafe_b64encode(password.encode().ljust(32)[:32])
    return Fernet(key)


def encrypt_private_key(private_key_hex: str, password: str) -> str:
    return _cipher_for(password).encrypt(private_key_hex.encode()).decode()


def decrypt_private_key(encrypted_key: str, password: str) -> str:
    try:
        return _cipher_for(password).decrypt(encrypted_key.encode()).decode()
    except InvalidToken as e:
        raise WalletError("Invalid password. Please try again.") from e


class WalletSession:
    def __init__(self, network_name: str = "testnet", storage_dir: Path | None = None):
        self.network_name = network_name
        self.facade = SymbolFacade(network_name)
        self.storage_dir = Path(storage_dir) if storage_dir else None
        self._private_key: PrivateKey | None = None
        self._public_key: str | None = None
        self._address: str | None = None

    @property
    def wallet_file(self) -> Path | None:
        if self.storage_dir is None:
            return None
        return self.storage_dir / "wallet.json"

    @property
    def address(self) -> str | None:
        return self._address

    @property
    def public_key(self) -> str | None:
        return self._public_key

    @property
    def is_connected(self) -> bool:
        return self._private_key is not None and self._address is not None

    @property
    def private_key(self) -> PrivateKey:
        if self._private_key is None:
            raise WalletError("Wallet is not loaded")
        return self._private_key

    def has_wallet(self) -> bool:
        wallet_file = self.wallet_file
        if wallet_file is None or not wallet_file.exists():
            return False
        try:
            with open(wallet_file, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Wallet file exists but is unreadable: %s", e)
            return False

        encrypted_key = data.get("encrypted_private_key")
        public_key = data.get("public_key")
        if not isinstance(encrypted_key, str) or not encrypted_key:
            logger.warning("Wallet file missing encrypted_private_key")
            return False
        if not isinstance(public_key, str) or len(public_key) != 64:
            logger.warning("Wallet file has an invalid public_key")
            return False
        return True

    def connect_private_key(self, private_key_hex: str) -> str:
        try:
            private_key = PrivateKey(private_key_hex.strip())
        except ValueError as e:
            raise WalletError("The provided private key is not valid") from e

        account = self.facade.create_account(private_key)
        self._private_key = private_key
        self._public_key = str(account.public_key)
        self._address = str(account.address)
        logger.info("Wallet connected: %s", self._address)
        return self._address

    def unlock(self, password: str) -> str:
        if not password:
            raise WalletError("Password is required to unlock the wallet")
        if not self.has_wallet():
            raise WalletError("No wallet file found")

        with open(self.wallet_file, "r") as f:
            data = json.load(f)

        private_key_hex = decrypt_private_key(data["encrypted_private_key"], password)
        address = self.connect_private_key(private_key_hex)
        if self._public_key.upper() != data["public_key"].upper():
            self.disconnect()
            raise WalletError("Wallet file is corrupted: public key mismatch")
        return address

    def import_private_key(self, private_key_hex: str, password: str) -> str:
        if self.wallet_file is None:
            raise WalletError("No storage directory configured")
        if not password:
            raise WalletError("Password is required to save the wallet")

        address = self.connect_private_key(private_key_hex)
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        data = {
            "encrypted_private_key": encrypt_private_key(
                str(self._private_key), password
            ),
            "public_key": self._public_key,
        }
        with open(self.wallet_file, "w") as f:
            json.dump(data, f, indent=2)
        logger.info("Wallet saved with encrypted private key")
        return address

    def disconnect(self) -> None:
        if self._address:
            logger.info("Wallet disconnected: %s", self._address)
        self._private_key = None
        self._public_key = None
        self._address = None
