"""Tests for configuration loading."""

import json

import pytest

from symbol_donation.config import (
    DEFAULT_NETWORK,
    DEFAULT_STORAGE_DIR,
    ConfigError,
    DonationConfig,
    parse_reserve,
)
from symbol_donation.shared.logging import DEFAULT_DATA_DIR, LoggingConfig


@pytest.mark.unit
class TestParseReserve:
    def test_integer_micro_units(self):
        assert parse_reserve(2_500) == 2_500

    def test_human_amount(self):
        assert parse_reserve("0.001") == 1_000

    def test_zero_allowed(self):
        assert parse_reserve("0") == 0

    def test_whole_number_string_is_micro_units(self):
        assert parse_reserve("2000") == 2_000
        assert parse_reserve(" 150000 ") == 150_000

    def test_decimal_string_is_xym(self):
        assert parse_reserve("0.1") == 100_000
        assert parse_reserve("2.0") == 2_000_000

    @pytest.mark.parametrize("value", [-1, "-0.5", "abc", "0.0000001", True])
    def test_invalid(self, value):
        with pytest.raises(ConfigError):
            parse_reserve(value)


@pytest.mark.unit
class TestDonationConfig:
    def test_defaults(self, destination_address):
        config = DonationConfig(destination_address=destination_address)
        config.validate()

        assert config.network_name == DEFAULT_NETWORK
        assert config.native_reserve == 100_000
        assert config.inter_transfer_delay == 1.0
        assert config.include_tokens is True

    def test_missing_destination_is_rejected(self, tmp_path):
        with pytest.raises(ConfigError, match="Destination address"):
            DonationConfig.load(storage_dir=tmp_path, environ={})

    def test_destination_is_normalized(self, destination_address):
        dashed = "-".join(
            destination_address[i : i + 6] for i in range(0, len(destination_address), 6)
        ).lower()
        config = DonationConfig(destination_address=dashed)
        config.validate()
        assert config.destination_address == destination_address

    def test_destination_must_match_network(self, destination_address):
        config = DonationConfig(
            destination_address=destination_address, network_name="mainnet"
        )
        with pytest.raises(ConfigError):
            config.validate()

    def test_unknown_network(self, destination_address):
        config = DonationConfig(
            destination_address=destination_address, network_name="privatenet"
        )
        with pytest.raises(ConfigError, match="Unknown network"):
            config.validate()

    def test_negative_delay(self, destination_address):
        config = DonationConfig(
            destination_address=destination_address, inter_transfer_delay=-1
        )
        with pytest.raises(ConfigError):
            config.validate()

    def test_load_from_storage_dir(self, tmp_path, destination_address):
        (tmp_path / "config.json").write_text(
            json.dumps(
                {
                    "destination_address": destination_address,
                    "native_reserve": "0.005",
                    "node_url": "http://localhost:3000/",
                    "prices": {"xym": 0.05},
                    "timeout": {"connect_timeout": 2.0, "read_timeout": 4.0},
                    "retry": {"max_retries": 1},
                }
            )
        )

        config = DonationConfig.load(storage_dir=tmp_path, environ={})

        assert config.storage_dir == tmp_path
        assert config.native_reserve == 5_000
        assert config.node_url == "http://localhost:3000"
        assert config.prices == {"XYM": 0.05}
        assert config.timeout_config.request_timeout == (2.0, 4.0)
        assert config.retry_config.max_retries == 1

    def test_environment_overrides_file(self, tmp_path, destination_address):
        (tmp_path / "config.json").write_text(
            json.dumps({"destination_address": "TINVALID", "include_tokens": True})
        )
        environ = {
            "SYMBOL_DONATION_DESTINATION": destination_address,
            "SYMBOL_DONATION_RESERVE": "2000",
            "SYMBOL_DONATION_DELAY": "0.25",
            "SYMBOL_DONATION_INCLUDE_TOKENS": "no",
        }

        config = DonationConfig.load(storage_dir=tmp_path, environ=environ)

        assert config.destination_address == destination_address
        assert config.native_reserve == 2_000
        assert config.inter_transfer_delay == 0.25
        assert config.include_tokens is False

    def test_storage_dir_from_environment(self, tmp_path, destination_address):
        (tmp_path / "config.json").write_text(
            json.dumps({"destination_address": destination_address})
        )
        config = DonationConfig.load(environ={"SYMBOL_DONATION_DIR": str(tmp_path)})
        assert config.storage_dir == tmp_path

    def test_explicit_config_file_must_exist(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            DonationConfig.load(config_file=tmp_path / "missing.json", environ={})

    def test_unreadable_config_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Failed to read"):
            DonationConfig.load(config_file=path, environ={})

    def test_to_dict_round_trips_through_apply_dict(self, destination_address):
        original = DonationConfig(
            destination_address=destination_address,
            native_reserve=4_000,
            include_tokens=False,
            fee_multiplier=200,
        )
        copy = DonationConfig()
        copy.apply_dict(original.to_dict())

        assert copy.to_dict() == original.to_dict()


@pytest.mark.unit
def test_reserve_has_the_same_unit_in_file_and_environment(tmp_path, destination_address):
    (tmp_path / "config.json").write_text(
        json.dumps({"destination_address": destination_address, "native_reserve": 1000})
    )
    from_file = DonationConfig.load(storage_dir=tmp_path, environ={})
    from_env = DonationConfig.load(
        storage_dir=tmp_path, environ={"SYMBOL_DONATION_RESERVE": "1000"}
    )

    assert from_file.native_reserve == from_env.native_reserve == 1_000


@pytest.mark.unit
def test_storage_and_logs_share_one_directory(monkeypatch, tmp_path):
    assert DEFAULT_STORAGE_DIR == DEFAULT_DATA_DIR
    monkeypatch.setenv("SYMBOL_DONATION_DIR", str(tmp_path))
    assert LoggingConfig.from_environment().log_dir == tmp_path
