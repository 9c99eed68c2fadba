"""Custom exceptions for Omada controller API operations.

This module defines a hierarchy of exceptions for the connect handshake
and the generic request wrapper.
"""


class OmadaError(Exception):
    """Base exception for all Omada-related errors."""

    pass


class ConfigurationError(OmadaError):
    """Raised for configuration-related errors."""

    pass


class TransportError(OmadaError):
    """Raised on network-level failures (unreachable host, refused, timeout)."""

    def __init__(self, message: str, url: str | None = None):
        self.url = url
        super().__init__(message)


class DiscoveryError(OmadaError):
    """Raised when the controller identity cannot be obtained."""

    pass


class AuthenticationError(OmadaError):
    """Raised when login is rejected or no token is returned."""

    def __init__(
        self,
        message: str,
        error_code: int | None = None,
        server_message: str | None = None,
    ):
        self.error_code = error_code
        self.server_message = server_message
        super().__init__(message)


class SiteResolutionError(OmadaError):
    """Raised when no manageable site is found after login."""

    pass


class NotConnectedError(OmadaError):
    """Raised when a site-scoped call is made before connect()."""

    pass


class OmadaAPIError(OmadaError):
    """Raised by raise_for_envelope() for a non-success envelope."""

    def __init__(self, message: str, error_code: int | None = None, envelope=None):
        self.error_code = error_code
        self.envelope = envelope
        super().__init__(message)


class SessionExpiredError(OmadaAPIError):
    """Raised by raise_for_envelope() when the envelope signals session expiry.

    The session client never raises this on its own; callers re-run
    ``connect()`` and retry.
    """

    pass
