"""Shared utilities for Symbol Quick Donation."""

from symbol_donation.shared.logging import (
    ContextAdapter,
    LoggingConfig,
    LogLevel,
    format_error_for_user,
    get_logger,
    get_user_friendly_error,
    sanitize_dict,
    sanitize_message,
    setup_logging,
)
from symbol_donation.shared.network import (
    NetworkClient,
    NetworkError,
    NetworkErrorType,
    RetryConfig,
    TimeoutConfig,
)
from symbol_donation.shared.protocols import (
    AccountContext,
    BalanceReader,
    FinalityObserver,
    NotificationSink,
    OperatorPrompt,
    TokenBalance,
    TokenBalanceReader,
    TransferSubmitter,
)
from symbol_donation.shared.validation import (
    AddressValidator,
    AmountValidator,
    MosaicIdValidator,
    ValidationResult,
)

__all__ = [
    "NetworkClient",
    "NetworkError",
    "NetworkErrorType",
    "RetryConfig",
    "TimeoutConfig",
    "AccountContext",
    "BalanceReader",
    "FinalityObserver",
    "NotificationSink",
    "OperatorPrompt",
    "TokenBalance",
    "TokenBalanceReader",
    "TransferSubmitter",
    "AddressValidator",
    "AmountValidator",
    "MosaicIdValidator",
    "ValidationResult",
    "ContextAdapter",
    "LoggingConfig",
    "LogLevel",
    "format_error_for_user",
    "get_logger",
    "get_user_friendly_error",
    "sanitize_dict",
    "sanitize_message",
    "setup_logging",
]
