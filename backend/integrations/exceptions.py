"""Typed exception hierarchy for market data provider errors.

Lets the fetch path tell transient network failures apart from HTTP
errors and unusable payloads before collapsing them into an empty result.
Every error exposes ``retriable`` so a caller retrying at a higher layer
knows whether another attempt can help.
"""


class ProviderError(Exception):
    """Base exception for all provider-related errors.

    Carries the provider name so callers can identify which provider failed.
    """

    retriable = False

    def __init__(self, message: str, provider_name: str = ""):
        self.provider_name = provider_name
        super().__init__(message)


class ProviderConnectionError(ProviderError):
    """Timeouts, DNS resolution failures, refused connections."""

    def __init__(self, message: str, provider_name: str = "", retriable: bool = True):
        super().__init__(message, provider_name)
        self.retriable = retriable


class ProviderAPIError(ProviderError):
    """Non-2xx HTTP responses from the exchange endpoint."""

    def __init__(
        self,
        message: str,
        provider_name: str = "",
        status_code: int | None = None,
    ):
        self.status_code = status_code
        super().__init__(message, provider_name)

    @property
    def retriable(self) -> bool:
        """429 (rate limit) and 5xx errors are generally retriable."""
        if self.status_code is None:
            return False
        return self.status_code == 429 or self.status_code >= 500


class ProviderDataError(ProviderError):
    """Response body could not be decoded as JSON.

    Not retriable: the same deployment will keep returning the same shape.
    """

    def __init__(self, message: str, provider_name: str = "", content_type: str = ""):
        self.content_type = content_type
        super().__init__(message, provider_name)
