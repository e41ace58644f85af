"""Centralized logging configuration for Symbol Quick Donation.

This module provides:
- Configurable log levels through environment variables
- Redaction of private keys and wallet passwords before anything is written
- User-friendly messages for transport and signing errors
- Context fields (run id, asset, index) carried by ContextAdapter
"""

from __future__ import annotations

import json
import logging
import os
import re
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

DEFAULT_DATA_DIR = Path.home() / ".config" / "symbol-quick-donation"


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class LoggingConfig:
    log_level: LogLevel = LogLevel.INFO
    log_to_file: bool = True
    log_to_stdout: bool = False
    log_dir: Path | None = None
    log_filename: str = "donation.log"
    log_format: str = "human"
    sanitize_sensitive: bool = True
    include_context: bool = True

    @classmethod
    def from_environment(cls) -> "LoggingConfig":
        env_level = os.getenv("SYMBOL_DONATION_LOG_LEVEL", "INFO").upper()
        try:
            log_level = LogLevel(env_level)
        except ValueError:
            log_level = LogLevel.INFO

        log_to_stdout = os.getenv("SYMBOL_DONATION_LOG_STDOUT", "").lower() in (
            "1",
            "true",
            "yes",
        )
        log_format = os.getenv("SYMBOL_DONATION_LOG_FORMAT", "human").lower()
        if log_format not in ("human", "json"):
            log_format = "human"

        data_dir = os.getenv("SYMBOL_DONATION_DIR", "").strip()

        return cls(
            log_level=log_level,
            log_to_stdout=log_to_stdout,
            log_dir=Path(data_dir).expanduser() if data_dir else None,
            log_format=log_format,
        )


SENSITIVE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (
        re.compile(
            r"(private[_-]?key['\"]?\s*[:=]\s*['\"]?)([A-Fa-f0-9]{64})",
            re.IGNORECASE,
        ),
        r"\1[REDACTED]",
    ),
    (
        re.compile(
            r"(encrypted[_-]?private[_-]?key['\"]?\s*[:=]\s*['\"]?)([A-Za-z0-9_\-+/=]{20,})",
            re.IGNORECASE,
        ),
        r"\1[REDACTED]",
    ),
    (
        re.compile(
            r"(password['\"]?\s*[:=]\s*['\"]?)([^\s'\"]+)",
            re.IGNORECASE,
        ),
        r"\1[REDACTED]",
    ),
]

# Transaction hashes are 64 hex characters as well, so bare hex is only
# redacted when the caller asks for it.
BARE_KEY_PATTERN = re.compile(r"\b[A-Fa-f0-9]{64}\b")

ADDRESS_PATTERN = re.compile(r"\b[TN][A-Z0-9]{38,39}\b", re.IGNORECASE)

SENSITIVE_KEYS = ("private_key", "privatekey", "password", "secret")


def sanitize_message(
    message: str,
    preserve_addresses: bool = True,
    redact_bare_hex: bool = False,
) -> str:
    if not message:
        return message

    sanitized = message
    for pattern, replacement in SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)

    if redact_bare_hex:
        sanitized = BARE_KEY_PATTERN.sub("[KEY_REDACTED]", sanitized)

    if not preserve_addresses:
        sanitized = ADDRESS_PATTERN.sub("[ADDRESS_REDACTED]", sanitized)

    return sanitized


def sanitize_dict(
    data: dict[str, Any], preserve_addresses: bool = True
) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in data.items():
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            result[key] = "[REDACTED]"
        elif isinstance(value, str):
            result[key] = sanitize_message(value, preserve_addresses)
        elif isinstance(value, dict):
            result[key] = sanitize_dict(value, preserve_addresses)
        elif isinstance(value, list):
            result[key] = [
                sanitize_dict(item, preserve_addresses)
                if isinstance(item, dict)
                else sanitize_message(item, preserve_addresses)
                if isinstance(item, str)
                else item
                for item in value
            ]
        else:
            result[key] = value
    return result


@dataclass
class ErrorMapping:
    error_pattern: str
    user_message: str
    suggest_action: str | None = None


ERROR_MAPPINGS: list[ErrorMapping] = [
    ErrorMapping(
        error_pattern="user rejected|rejected|denied|cancell?ed",
        user_message="You rejected the transaction.",
    ),
    ErrorMapping(
        error_pattern="timeout|timed out|not confirmed within",
        user_message="The network did not confirm the transaction in time.",
        suggest_action="Check the transaction hash in an explorer before retrying.",
    ),
    ErrorMapping(
        error_pattern="connection refused|cannot connect|connection error",
        user_message="Unable to connect to the node.",
        suggest_action="Check your internet connection and the configured node URL.",
    ),
    ErrorMapping(
        error_pattern="insufficient_balance|insufficient balance|insufficient funds",
        user_message="Insufficient balance for this transfer.",
        suggest_action="The fee reserve may be too small for current fees.",
    ),
    ErrorMapping(
        error_pattern="insufficient fee|fee.*too low",
        user_message="Transaction fee is too low.",
        suggest_action="Increase the fee multiplier and try again.",
    ),
    ErrorMapping(
        error_pattern="invalid.*address|address.*invalid",
        user_message="The destination address is not valid.",
        suggest_action="Check the configured destination address.",
    ),
    ErrorMapping(
        error_pattern="rate limit|too many requests|429",
        user_message="The node is rate limiting requests.",
        suggest_action="Wait a moment and try again.",
    ),
    ErrorMapping(
        error_pattern="deadline.*expired|expired.*deadline",
        user_message="Transaction deadline has expired.",
        suggest_action="Start a new donation run.",
    ),
    ErrorMapping(
        error_pattern="not found|404",
        user_message="The requested resource was not found on the node.",
    ),
    ErrorMapping(
        error_pattern="network.*error|networkerror",
        user_message="A network error occurred.",
        suggest_action="Check your internet connection.",
    ),
]


def get_user_friendly_error(error: Exception | str) -> tuple[str, str | None]:
    error_lower = str(error).lower()

    for mapping in ERROR_MAPPINGS:
        if re.search(mapping.error_pattern, error_lower):
            return mapping.user_message, mapping.suggest_action

    return "An unexpected error occurred.", None


def format_error_for_user(error: Exception | str) -> str:
    user_message, suggestion = get_user_friendly_error(error)
    if suggestion:
        return f"{user_message} {suggestion}"
    return user_message


class StructuredFormatter(logging.Formatter):
    def __init__(self, sanitize: bool = True, include_context: bool = True):
        super().__init__()
        self.sanitize = sanitize
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": sanitize_message(message) if self.sanitize else message,
        }

        if self.include_context:
            log_data["module"] = record.module
            log_data["function"] = record.funcName
            log_data["line"] = record.lineno

        context = getattr(record, "context", None)
        if context and isinstance(context, dict):
            log_data["context"] = sanitize_dict(context) if self.sanitize else context

        if record.exc_info:
            exc_text = self.formatException(record.exc_info)
            log_data["exception"] = (
                sanitize_message(exc_text) if self.sanitize else exc_text
            )

        try:
            return json.dumps(log_data, default=str)
        except (TypeError, ValueError):
            return f"{log_data['timestamp']} - {log_data['logger']} - {log_data['level']} - {log_data['message']}"


class HumanReadableFormatter(logging.Formatter):
    def __init__(self, sanitize: bool = True):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.sanitize = sanitize

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        context = getattr(record, "context", None)
        if context and isinstance(context, dict):
            fields = " ".join(f"{key}={value}" for key, value in context.items())
            text = f"{text} [{fields}]"
        if self.sanitize:
            text = sanitize_message(text)
        return text


class ContextAdapter(logging.LoggerAdapter):
    """Logger adapter that attaches a ``context`` dict to every record."""

    def __init__(
        self,
        logger: logging.Logger,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(logger, context or {})

    def process(
        self,
        msg: str,
        kwargs: dict[str, Any],
    ) -> tuple[str, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        context = {**(self.extra or {}), **extra.pop("context", {})}
        if context:
            extra["context"] = context
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(self, **kwargs: Any) -> "ContextAdapter":
        return ContextAdapter(self.logger, {**(self.extra or {}), **kwargs})


_logging_initialized = False


def _build_formatter(config: LoggingConfig) -> logging.Formatter:
    if config.log_format == "json":
        return StructuredFormatter(
            sanitize=config.sanitize_sensitive,
            include_context=config.include_context,
        )
    return HumanReadableFormatter(sanitize=config.sanitize_sensitive)


def setup_logging(config: LoggingConfig | None = None, force: bool = False) -> None:
    global _logging_initialized

    if _logging_initialized and not force:
        return

    if config is None:
        config = LoggingConfig.from_environment()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.log_level.value))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers: list[logging.Handler] = []

    if config.log_to_file:
        log_dir = config.log_dir or DEFAULT_DATA_DIR
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.FileHandler(
                log_dir / config.log_filename, mode="a", encoding="utf-8"
            )
        )

    if config.log_to_stdout:
        handlers.append(logging.StreamHandler(sys.stdout))

    formatter = _build_formatter(config)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    _logging_initialized = True


def get_logger(
    name: str,
    context: dict[str, Any] | None = None,
) -> ContextAdapter:
    return ContextAdapter(logging.getLogger(name), context)


__all__ = [
    "LogLevel",
    "LoggingConfig",
    "ContextAdapter",
    "StructuredFormatter",
    "HumanReadableFormatter",
    "sanitize_message",
    "sanitize_dict",
    "get_user_friendly_error",
    "format_error_for_user",
    "setup_logging",
    "get_logger",
]
