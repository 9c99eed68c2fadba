"""Omada API - client for the TP-Link Omada controller internal web API (v2).

Handles the connect handshake (controller ID, login, site) and attaches the
CSRF token and session cookie to every request.
"""

__version__ = "0.1.0"

# Session client
from .session import OmadaSession

# Endpoint helpers
from .endpoints import OmadaAPI

# Cookie store
from .cookies import CookieStore

# Configuration
from .config import OmadaConfig, load_config

# Envelope helpers
from .models import (
    ControllerInfo,
    Site,
    is_session_expired,
    is_success,
    raise_for_envelope,
    result_data,
)

# Exceptions
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    DiscoveryError,
    NotConnectedError,
    OmadaAPIError,
    OmadaError,
    SessionExpiredError,
    SiteResolutionError,
    TransportError,
)

# Utils
from .utils import setup_logging

__all__ = [
    "__version__",
    # Core
    "OmadaSession",
    "OmadaAPI",
    "CookieStore",
    # Config
    "OmadaConfig",
    "load_config",
    # Models
    "ControllerInfo",
    "Site",
    "is_session_expired",
    "is_success",
    "raise_for_envelope",
    "result_data",
    # Exceptions
    "AuthenticationError",
    "ConfigurationError",
    "DiscoveryError",
    "NotConnectedError",
    "OmadaAPIError",
    "OmadaError",
    "SessionExpiredError",
    "SiteResolutionError",
    "TransportError",
    # Utils
    "setup_logging",
]
