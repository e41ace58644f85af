"""Configuration for Symbol Quick Donation.

Values are layered: dataclass defaults, then a JSON file, then environment
variables. The destination address is mandatory and validated on load.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from symbol_donation.features.donation.reservation import DEFAULT_NATIVE_RESERVE
from symbol_donation.shared.logging import DEFAULT_DATA_DIR
from symbol_donation.shared.network import RetryConfig, TimeoutConfig
from symbol_donation.shared.validation import AddressValidator, AmountValidator

logger = logging.getLogger(__name__)

DEFAULT_NODE_URL = "http://sym-test-01.opening-line.jp:3000"
DEFAULT_NETWORK = "testnet"
DEFAULT_STORAGE_DIR = DEFAULT_DATA_DIR
NATIVE_DIVISIBILITY = 6

ENV_PREFIX = "SYMBOL_DONATION_"


class ConfigError(ValueError):
    pass


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def parse_reserve(value: Any) -> int:
    """Read a reserve in micro-XYM.

    Whole numbers, as ints or digit strings, are micro-XYM in every source.
    Only a value with a decimal point, such as ``"0.1"``, is read as XYM.
    """
    if isinstance(value, bool):
        raise ConfigError("Reserve must be a number")
    if isinstance(value, str) and value.strip().isdecimal():
        value = int(value.strip())
    if isinstance(value, int):
        if value < 0:
            raise ConfigError("Reserve must not be negative")
        return value
    result = AmountValidator.to_micro_units(
        str(value), NATIVE_DIVISIBILITY, allow_zero=True
    )
    if not result.is_valid:
        raise ConfigError(f"Invalid reserve: {result.error_message}")
    return result.normalized_value


@dataclass
class DonationConfig:
    destination_address: str = ""
    network_name: str = DEFAULT_NETWORK
    node_url: str = DEFAULT_NODE_URL
    native_reserve: int = DEFAULT_NATIVE_RESERVE
    inter_transfer_delay: float = 1.0
    confirmation_timeout: float = 180.0
    confirmation_poll_interval: float = 3.0
    include_tokens: bool = True
    fee_multiplier: int = 100
    prices: dict[str, float] = field(default_factory=lambda: {"XYM": 0.02})
    storage_dir: Path = DEFAULT_STORAGE_DIR
    timeout_config: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry_config: RetryConfig = field(default_factory=RetryConfig)

    def validate(self) -> None:
        result = AddressValidator.validate(self.destination_address, self.network_name)
        if not result.is_valid:
            raise ConfigError(f"Destination address: {result.error_message}")
        self.destination_address = result.normalized_value

        if self.network_name not in ("testnet", "mainnet"):
            raise ConfigError(f"Unknown network: {self.network_name}")
        if self.native_reserve < 0:
            raise ConfigError("Reserve must not be negative")
        if self.inter_transfer_delay < 0:
            raise ConfigError("Inter-transfer delay must not be negative")
        if self.confirmation_timeout <= 0 or self.confirmation_poll_interval <= 0:
            raise ConfigError("Confirmation timing values must be positive")

    def apply_dict(self, data: dict[str, Any]) -> None:
        if "destination_address" in data:
            self.destination_address = str(data["destination_address"])
        if "network" in data:
            self.network_name = str(data["network"]).lower()
        if "node_url" in data:
            self.node_url = str(data["node_url"]).rstrip("/")
        if "native_reserve" in data:
            self.native_reserve = parse_reserve(data["native_reserve"])
        if "inter_transfer_delay" in data:
            self.inter_transfer_delay = float(data["inter_transfer_delay"])
        if "confirmation_timeout" in data:
            self.confirmation_timeout = float(data["confirmation_timeout"])
        if "confirmation_poll_interval" in data:
            self.confirmation_poll_interval = float(data["confirmation_poll_interval"])
        if "include_tokens" in data:
            self.include_tokens = bool(data["include_tokens"])
        if "fee_multiplier" in data:
            self.fee_multiplier = int(data["fee_multiplier"])
        if "prices" in data:
            self.prices = {
                str(symbol).upper(): float(price)
                for symbol, price in data["prices"].items()
            }

        timeout_cfg = data.get("timeout", {})
        if timeout_cfg:
            self.timeout_config = TimeoutConfig(
                connect_timeout=timeout_cfg.get("connect_timeout", 5.0),
                read_timeout=timeout_cfg.get("read_timeout", 15.0),
            )
        retry_cfg = data.get("retry", {})
        if retry_cfg:
            self.retry_config = RetryConfig(
                max_retries=retry_cfg.get("max_retries", 3),
                base_delay=retry_cfg.get("base_delay", 1.0),
                max_delay=retry_cfg.get("max_delay", 30.0),
            )

    def apply_environment(self, environ: dict[str, str] | None = None) -> None:
        env = os.environ if environ is None else environ

        values = {
            name: env.get(f"{ENV_PREFIX}{name}", "").strip()
            for name in (
                "DESTINATION",
                "NETWORK",
                "NODE_URL",
                "RESERVE",
                "DELAY",
                "INCLUDE_TOKENS",
            )
        }

        if values["DESTINATION"]:
            self.destination_address = values["DESTINATION"]
        if values["NETWORK"]:
            self.network_name = values["NETWORK"].lower()
        if values["NODE_URL"]:
            self.node_url = values["NODE_URL"].rstrip("/")
        if values["RESERVE"]:
            self.native_reserve = parse_reserve(values["RESERVE"])
        if values["DELAY"]:
            self.inter_transfer_delay = float(values["DELAY"])
        if values["INCLUDE_TOKENS"]:
            self.include_tokens = _parse_bool(values["INCLUDE_TOKENS"])

    @classmethod
    def load(
        cls,
        config_file: str | Path | None = None,
        storage_dir: str | Path | None = None,
        environ: dict[str, str] | None = None,
    ) -> "DonationConfig":
        env = os.environ if environ is None else environ
        config = cls()

        env_dir = env.get(f"{ENV_PREFIX}DIR")
        if storage_dir:
            config.storage_dir = Path(storage_dir).expanduser()
        elif env_dir:
            config.storage_dir = Path(env_dir).expanduser()

        path = (
            Path(config_file).expanduser()
            if config_file
            else config.storage_dir / "config.json"
        )
        if path.exists():
            try:
                with open(path, "r") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigError(f"Failed to read config file {path}: {e}") from e
            config.apply_dict(data)
            logger.info("Loaded configuration from %s", path)
        elif config_file:
            raise ConfigError(f"Config file not found: {path}")

        config.apply_environment(env)
        config.validate()
        return config

    def to_dict(self) -> dict[str, Any]:
        return {
            "destination_address": self.destination_address,
            "network": self.network_name,
            "node_url": self.node_url,
            "native_reserve": self.native_reserve,
            "inter_transfer_delay": self.inter_transfer_delay,
            "confirmation_timeout": self.confirmation_timeout,
            "confirmation_poll_interval": self.confirmation_poll_interval,
            "include_tokens": self.include_tokens,
            "fee_multiplier": self.fee_multiplier,
            "prices": dict(self.prices),
            "timeout": {
                "connect_timeout": self.timeout_config.connect_timeout,
                "read_timeout": self.timeout_config.read_timeout,
            },
            "retry": {
                "max_retries": self.retry_config.max_retries,
                "base_delay": self.retry_config.base_delay,
                "max_delay": self.retry_config.max_delay,
            },
        }
