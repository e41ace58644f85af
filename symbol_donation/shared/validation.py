"""Validation of addresses, mosaic ids and human-entered amounts."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any


@dataclass
class ValidationResult:
    is_valid: bool
    error_message: str | None = None
    normalized_value: Any = None


class AmountValidator:
    MAX_AMOUNT = 9_223_372_036_854_775_807

    @staticmethod
    def parse_human_amount(value: str, allow_zero: bool = False) -> ValidationResult:
        if not value or not str(value).strip():
            return ValidationResult(is_valid=False, error_message="Amount is required")

        raw_amount = str(value).strip().replace(",", "").replace(" ", "")

        if raw_amount.startswith(("-", "+")):
            return ValidationResult(
                is_valid=False,
                error_message="Amount must be a positive number",
            )

        try:
            amount = Decimal(raw_amount)
        except (InvalidOperation, ValueError):
            return ValidationResult(
                is_valid=False,
                error_message="Amount must be a valid number",
            )

        if not amount.is_finite():
            return ValidationResult(
                is_valid=False,
                error_message="Invalid numeric format (special value detected)",
            )

        if amount == 0 and not allow_zero:
            return ValidationResult(
                is_valid=False,
                error_message="Amount must be greater than zero",
            )

        return ValidationResult(is_valid=True, normalized_value=amount)

    @staticmethod
    def convert_to_micro_units(amount: Decimal, divisibility: int) -> ValidationResult:
        scaled = amount * (Decimal(10) ** divisibility)
        if scaled != scaled.to_integral_value():
            return ValidationResult(
                is_valid=False,
                error_message=f"Too many decimal places. Maximum {divisibility} allowed",
            )

        micro_units = int(scaled)
        if micro_units > AmountValidator.MAX_AMOUNT:
            return ValidationResult(
                is_valid=False,
                error_message="Amount exceeds maximum allowed value",
            )

        return ValidationResult(is_valid=True, normalized_value=micro_units)

    @classmethod
    def to_micro_units(
        cls, value: str, divisibility: int, allow_zero: bool = False
    ) -> ValidationResult:
        parsed = cls.parse_human_amount(value, allow_zero=allow_zero)
        if not parsed.is_valid:
            return parsed
        return cls.convert_to_micro_units(parsed.normalized_value, divisibility)


class AddressValidator:
    MIN_ADDRESS_LENGTH = 39
    MAX_ADDRESS_LENGTH = 40
    NETWORK_PREFIXES = {"testnet": "T", "mainnet": "N"}

    @staticmethod
    def validate(value: str, network_name: str | None = None) -> ValidationResult:
        if not value or not value.strip():
            return ValidationResult(is_valid=False, error_message="Address is required")

        normalized = value.strip().replace("-", "").upper()

        if not (
            AddressValidator.MIN_ADDRESS_LENGTH
            <= len(normalized)
            <= AddressValidator.MAX_ADDRESS_LENGTH
        ):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid address length. Expected {AddressValidator.MIN_ADDRESS_LENGTH}-{AddressValidator.MAX_ADDRESS_LENGTH} characters",
            )

        if not normalized.isalnum():
            return ValidationResult(
                is_valid=False,
                error_message="Address contains invalid characters",
            )

        expected_prefix = AddressValidator.NETWORK_PREFIXES.get(
            (network_name or "").lower()
        )
        if expected_prefix and normalized[0] != expected_prefix:
            return ValidationResult(
                is_valid=False,
                error_message=f"Address must start with '{expected_prefix}' on {network_name}",
            )
        if normalized[0] not in ("T", "N"):
            return ValidationResult(
                is_valid=False,
                error_message="Address must start with 'T' (testnet) or 'N' (mainnet)",
            )

        return ValidationResult(is_valid=True, normalized_value=normalized)


class MosaicIdValidator:
    @staticmethod
    def validate(value: str | int) -> ValidationResult:
        if isinstance(value, int):
            if value <= 0:
                return ValidationResult(
                    is_valid=False,
                    error_message="Mosaic ID must be a positive integer",
                )
            return ValidationResult(is_valid=True, normalized_value=value)

        if not value or not value.strip():
            return ValidationResult(is_valid=False, error_message="Mosaic ID is required")

        hex_part = value.strip().lower()
        if hex_part.startswith("0x"):
            hex_part = hex_part[2:]

        if not hex_part or not all(c in "0123456789abcdef" for c in hex_part):
            return ValidationResult(
                is_valid=False,
                error_message="Mosaic ID must be a valid hexadecimal number",
            )

        return ValidationResult(is_valid=True, normalized_value=int(hex_part, 16))


def format_mosaic_id(mosaic_id: int) -> str:
    return f"{mosaic_id:016X}"
