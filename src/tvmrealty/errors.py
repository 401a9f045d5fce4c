"""
Error taxonomy.

- ConfigurationError: credentials or settings missing. Fatal.
- ValidationError: malformed valuation input, rejected before any I/O.
- OracleError: oracle transport failure, timeout or unusable response.
- EstimationUnavailable: oracle failed and no baseline exists to fall back on.
- PersistenceError: cache/baseline write failure. Logged, never surfaced.
"""


class TvmRealtyError(Exception):
    """Base class for every error raised by tvmrealty."""


class ConfigurationError(TvmRealtyError, ValueError):
    """Required credentials or configuration are absent."""


class ValidationError(TvmRealtyError, ValueError):
    """The valuation input is malformed."""


class OracleError(TvmRealtyError):
    """The rate oracle failed or returned no usable rate."""


class EstimationUnavailable(TvmRealtyError):
    """No rate could be resolved for the request."""

    def __init__(self, locality: str, reason: str):
        self.locality = locality
        self.reason = reason
        super().__init__(f"Estimate unavailable for {locality}: {reason}")


class PersistenceError(TvmRealtyError):
    """A read or write against the persistence collaborator failed."""
