"""Session client for the Omada controller web API (v2).

The controller's web UI talks to an undocumented REST API. Establishing a
session takes three steps:

1. ``GET  /api/info``                   -> controller ID (``omadacId``)
2. ``POST /{controllerId}/api/v2/login`` -> CSRF token + session cookie
3. ``GET  /{controllerId}/api/v2/sites`` -> site ID

Every later request must carry all three credentials at once: the
``Csrf-Token`` header, the ``TPOMADA_SESSIONID`` cookie and a ``token``
query parameter. Dropping any one of them gets the login page back
instead of a JSON envelope.

Example:
    ```python
    from omada_api import OmadaSession

    with OmadaSession("https://192.168.0.2", "admin", "secret") as session:
        session.connect()
        networks = session.call("GET", "/setting/lan/networks?currentPage=1&currentPageSize=100")
        print(networks["result"]["data"])
    ```
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import OmadaConfig
from .cookies import CookieStore
from .exceptions import (
    AuthenticationError,
    DiscoveryError,
    NotConnectedError,
    SiteResolutionError,
    TransportError,
)
from .models import DEFAULT_PAGE_SIZE, SUCCESS, ControllerInfo, Site, error_code
from .utils import mask_token

logger = logging.getLogger(__name__)

INFO_PATH = "/api/info"
API_PREFIX = "/api/v2"
TOKEN_HEADER = "Csrf-Token"
TOKEN_PARAM = "token"


def join_token(url: str, token: str) -> str:
    """Append the token query parameter, joining with ``&`` if a query exists."""
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{TOKEN_PARAM}={token}"


class OmadaSession:
    """Authenticated session against a single Omada controller.

    The session is caller-owned: create it, ``connect()``, issue ``call()``s,
    then ``discard()`` (or ``close()`` / use it as a context manager).

    Attributes:
        controller_id: Controller identity from discovery.
        token: CSRF token issued at login.
        cookies: Cookie store, updated from every response.
        site_id: Active site identifier.
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        verify_ssl: bool = False,
        timeout: float = 30.0,
        site: str | None = None,
        cookies: CookieStore | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            base_url: Controller address, e.g. ``https://192.168.0.2``.
            username: Controller account name.
            password: Controller account password.
            verify_ssl: Verify the TLS certificate. Hardware controllers
                usually present a self-signed one.
            timeout: Per-request timeout in seconds.
            site: Site name to select. The first listed site when None.
            cookies: Cookie store to use. A fresh one when None.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self.username = username
        self._password = password
        self.site_name = site
        self.cookies = cookies if cookies is not None else CookieStore()

        if not verify_ssl and self.base_url.startswith("https://"):
            logger.warning(f"TLS certificate verification disabled for {self.base_url}")

        self._client = httpx.Client(
            verify=verify_ssl,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

        self.controller_info: ControllerInfo | None = None
        self.token: str | None = None
        self.site: Site | None = None

    @classmethod
    def from_config(cls, config: OmadaConfig, **kwargs: Any) -> OmadaSession:
        """Create a session from an ``OmadaConfig``."""
        config.validate()
        return cls(
            base_url=config.base_url,
            username=config.username,
            password=config.password,
            verify_ssl=config.verify_ssl,
            timeout=config.timeout,
            site=config.site,
            **kwargs,
        )

    def __enter__(self) -> OmadaSession:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    @property
    def controller_id(self) -> str | None:
        return self.controller_info.controller_id if self.controller_info else None

    @property
    def site_id(self) -> str | None:
        return self.site.id if self.site else None

    @property
    def is_connected(self) -> bool:
        return bool(self.controller_id and self.token and self.site_id)

    # ==================== Lifecycle ====================

    def connect(self) -> None:
        """Run the three-step handshake.

        Any prior session state is dropped first. If a step fails, the
        session is left empty and the step's error propagates.

        Raises:
            DiscoveryError: Controller identity not obtained.
            AuthenticationError: Login rejected or no token issued.
            SiteResolutionError: No site available after login.

        A network failure inside a step surfaces as that step's error,
        chained to the underlying TransportError.
        """
        self.discard()
        try:
            self._discover()
            self._login()
            self._resolve_site()
        except Exception:
            self.discard()
            raise
        logger.info(f"Connected to Omada controller {self.controller_id} (site {self.site_id})")

    def discard(self) -> None:
        """Forget all session state. The HTTP client stays usable."""
        self.controller_info = None
        self.token = None
        self.site = None
        self.cookies.clear()

    def close(self) -> None:
        """Discard the session and close the HTTP client."""
        self.discard()
        self._client.close()

    # ==================== Handshake steps ====================

    def _discover(self) -> None:
        logger.info("[1/3] Fetching controller ID...")
        try:
            data = self.request("GET", f"{self.base_url}{INFO_PATH}")
        except TransportError as e:
            raise DiscoveryError(f"Controller unreachable: {e}") from e

        result = data.get("result") if isinstance(data, dict) else None
        if not isinstance(result, dict) or not result.get("omadacId"):
            logger.error(f"Controller ID not found: {data!r}")
            raise DiscoveryError(f"Controller ID not found: {data!r}")

        self.controller_info = ControllerInfo.from_result(result)
        info = self.controller_info
        logger.info(f"      Controller ID: {info.controller_id}")
        logger.info(f"      Version: {info.controller_version}")

    def _login(self) -> None:
        logger.info(f"[2/3] Logging in as {self.username}...")
        url = f"{self.base_url}/{self.controller_id}{API_PREFIX}/login"
        try:
            data = self.request(
                "POST", url, {"username": self.username, "password": self._password}
            )
        except TransportError as e:
            raise AuthenticationError(f"Login request failed: {e}") from e

        if not isinstance(data, dict):
            raise AuthenticationError(f"Login failed: unexpected response {data!r}")

        code = error_code(data)
        message = data.get("msg")
        result = data.get("result")
        token = result.get("token") if isinstance(result, dict) else None

        if code != SUCCESS:
            logger.error(f"Login failed (errorCode {code}): {message}")
            raise AuthenticationError(
                f"Login failed (errorCode {code}): {message}",
                error_code=code,
                server_message=message,
            )
        if not token:
            logger.error("Login succeeded but no token was returned")
            raise AuthenticationError(
                "Login failed: no token in response",
                error_code=code,
                server_message=message,
            )

        self.token = token
        logger.info(f"      Token: {mask_token(token)}")

    def _resolve_site(self) -> None:
        logger.info("[3/3] Fetching site ID...")
        url = join_token(
            f"{self.base_url}/{self.controller_id}{API_PREFIX}/sites", self.token
        )
        url = f"{url}&currentPage=1&currentPageSize={DEFAULT_PAGE_SIZE}"
        try:
            data = self.request("GET", url)
        except TransportError as e:
            raise SiteResolutionError(f"Site listing failed: {e}") from e

        result = data.get("result") if isinstance(data, dict) else None
        entries = result.get("data") if isinstance(result, dict) else None
        if error_code(data) != SUCCESS or not entries:
            logger.error(f"No sites found: {data!r}")
            raise SiteResolutionError(f"No sites found: {data!r}")
        if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
            logger.error(f"Malformed site list: {entries!r}")
            raise SiteResolutionError(f"Malformed site list: {entries!r}")

        entry = entries[0]
        if self.site_name is not None:
            matches = [e for e in entries if e.get("name") == self.site_name]
            if not matches:
                raise SiteResolutionError(
                    f"Site {self.site_name!r} not found; available: "
                    f"{[e.get('name') for e in entries]}"
                )
            entry = matches[0]

        if not entry.get("id"):
            raise SiteResolutionError(f"Site entry has no id: {entry!r}")

        self.site = Site.from_entry(entry)
        logger.info(f'      Site: "{self.site.name}" (ID: {self.site.id})')

    # ==================== Requests ====================

    def site_url(self, path: str) -> str:
        """Build the full site-scoped URL for ``path``, token included."""
        if not self.is_connected:
            raise NotConnectedError("Session not established; call connect() first")
        url = (
            f"{self.base_url}/{self.controller_id}{API_PREFIX}"
            f"/sites/{self.site_id}{path}"
        )
        return join_token(url, self.token)

    def call(self, method: str, path: str, body: Any = None) -> Any:
        """Make an authenticated call relative to the active site.

        Args:
            method: HTTP method (GET, POST, PATCH, PUT, DELETE).
            path: Path relative to the site, e.g. ``/setting/lan/networks``.
                May carry its own query string.
            body: JSON-serializable request body.

        Returns:
            The parsed envelope as-is, or the raw text if the body is not
            JSON. The envelope's ``errorCode`` is not interpreted.

        Raises:
            NotConnectedError: If connect() has not succeeded.
            TransportError: On network failure or timeout.
        """
        data = self.request(method, self.site_url(path), body)
        if error_code(data) != SUCCESS:
            logger.warning(f"API error on {method} {path}: {data!r}")
        return data

    def request(self, method: str, url: str, body: Any = None) -> Any:
        """Send a request to an absolute URL with the session credentials.

        The token header and cookie header are attached whenever the
        session holds them. Cookies set on the response are merged into
        the store.
        """
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers[TOKEN_HEADER] = self.token
        cookie_header = self.cookies.header()
        if cookie_header:
            headers["Cookie"] = cookie_header

        # The query carries the token; keep it out of logs
        log_url = url.split("?", 1)[0]
        logger.debug(f"{method} {log_url}")
        try:
            response = self._client.request(method, url, headers=headers, json=body)
        except httpx.TimeoutException as e:
            logger.error(f"Request timed out: {method} {log_url}")
            raise TransportError(f"Request timed out: {e}", url=url) from e
        except httpx.RequestError as e:
            logger.error(f"Request error: {e}")
            raise TransportError(f"Request failed: {e}", url=url) from e

        self.cookies.merge(response.headers.get_list("set-cookie"))
        # The store is the only cookie source sent to the controller
        self._client.cookies.clear()

        try:
            return response.json()
        except ValueError:
            logger.debug(f"Non-JSON response ({response.status_code}) from {log_url}")
            return response.text
