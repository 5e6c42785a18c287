"""Error taxonomy for the collateral oracle."""

from __future__ import annotations


class OracleError(Exception):
    """Base class for every failure surfaced by the oracle core."""


class NotFound(OracleError):
    """Raised when an operation references an unregistered asset or missing state."""


class DuplicateAsset(OracleError):
    """Raised when registering an asset that already has an active entry."""

    def __init__(self, asset: str):
        super().__init__(f"Collateral asset already registered: {asset}")
        self.asset = asset


class UpstreamQueryFailed(OracleError):
    """Raised when a price source's upstream call errors or returns a malformed payload."""


class InvalidArgument(OracleError):
    """Raised for rejected inputs such as negative multipliers or malformed numbers."""
