"""
Fetch errors shared by all price providers.
"""


class FetchError(Exception):
    """Raised when a price series cannot be obtained from a provider."""
    pass


class TransportError(FetchError):
    """Raised when the network call to the provider fails."""
    pass


class DecodeError(FetchError):
    """Raised when the provider response is malformed."""
    pass
