"""Error taxonomy for donation runs."""

from __future__ import annotations


class DonationError(Exception):
    """Base class for donation errors."""


class NotConnected(DonationError):
    def __init__(self, message: str = "Please connect your wallet first"):
        super().__init__(message)


class NoAssets(DonationError):
    def __init__(self, message: str = "No tokens or XYM available to donate"):
        super().__init__(message)


class SubmissionError(DonationError):
    """A transfer could not be submitted, including a declined signature."""

    def __init__(
        self,
        message: str,
        user_rejected: bool = False,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.user_rejected = user_rejected
        self.original_error = original_error


class ConfirmationError(DonationError):
    """A submitted transfer was not observed as confirmed."""

    def __init__(
        self,
        message: str,
        tx_hash: str | None = None,
        status_code: str | None = None,
    ):
        super().__init__(message)
        self.tx_hash = tx_hash
        self.status_code = status_code


class ConfirmationTimeout(ConfirmationError):
    pass
