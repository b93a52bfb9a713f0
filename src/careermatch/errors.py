"""Exception hierarchy for the agent core."""


class CareerMatchError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(CareerMatchError):
    """Invalid configuration value."""


class ProviderError(CareerMatchError):
    """A chat-completion or embedding call failed.

    Fatal to the current chat invocation. No retries happen inside
    the package; retry policy belongs to the caller.
    """


class EmbeddingDimensionError(ProviderError):
    """Embedding length does not match the configured dimensionality."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Embedding has {actual} dimensions, expected {expected}"
        )
        self.expected = expected
        self.actual = actual


class ToolRegistrationError(ValueError, CareerMatchError):
    """Duplicate or invalid tool registration at startup."""


class StoreError(CareerMatchError):
    """A persistence operation failed."""
