"""Error types raised by the confidential protocol adapter."""


class ConfidentialError(Exception):
    """Base class for every error raised by this package."""


class ConfidentialNotImplementedError(ConfidentialError, NotImplementedError):
    """An interface method was called without a concrete override."""

    def __init__(self, method_name: str):
        super().__init__(f"Method '{method_name}' is not implemented.")
        self.method_name = method_name


class NotConnectedError(ConfidentialError):
    """The account has no provider to sign and send transactions with."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "The wallet must be connected to a provider in order to perform "
            "confidential operations."
        )


class NotEnabledError(ConfidentialError):
    """A confidential operation ran before enable_confidentiality() succeeded."""

    def __init__(self, operation: str):
        super().__init__(
            f"Confidentiality not enabled, cannot run {operation}. "
            "Call enable_confidentiality() first."
        )
        self.operation = operation


class UnsupportedOperationError(ConfidentialError):
    """A mutating operation was attempted with a read-only account."""

    def __init__(self, operation: str):
        super().__init__(f"{operation} requires a signing account, got a read-only one.")
        self.operation = operation


class BackendFailureError(ConfidentialError):
    """The confidential transfer client or the RPC node failed."""

    def __init__(self, operation: str, cause: BaseException):
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause


class InvalidAmountError(ConfidentialError, ValueError):
    """An amount is negative, fractional or not a number."""


class ConfigError(ConfidentialError, ValueError):
    """Invalid configuration, unloadable client or unreadable keystore."""
