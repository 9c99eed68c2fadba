"""Convenience wrappers for known Omada controller endpoints.

Each helper hard-codes a site-relative path and forwards the caller's
payload unchanged. Payload schemas are undocumented; the usual workflow
for updates is GET the full object, modify it, then PATCH it back.

Discovered endpoints (relative to ``/{controllerId}/api/v2/sites/{siteId}``):
- /setting/lan/networks: Networks / VLANs
- /setting/firewall/acls: Gateway, switch and EAP ACL rules
- /devices, /cmd/devices/adopt: Device inventory and adoption
- /setting/wlans[/{id}/ssids]: WLAN groups and SSIDs
- /setting/lan/profiles: Port profiles
- /switches/{mac}/ports: Switch ports
- /eaps/{mac}: Access point settings (SSID overrides)
- /setting/routing/staticRoutes: Static routes

Example:
    ```python
    from omada_api import OmadaAPI, OmadaSession

    session = OmadaSession("https://192.168.0.2", "admin", "secret")
    session.connect()
    api = OmadaAPI(session)

    for device in api.get_devices()["result"]["data"]:
        print(device["name"], device["status"])
    ```
"""

from __future__ import annotations

import logging
from typing import Any

from .exceptions import TransportError
from .models import DEFAULT_PAGE_SIZE, error_code, result_data
from .session import OmadaSession

logger = logging.getLogger(__name__)

PAGE = f"currentPage=1&currentPageSize={DEFAULT_PAGE_SIZE}"

EXPLORE_ENDPOINTS = [
    "/setting/lan/networks",
    "/setting/firewall/acls?type=gateway",
    "/setting/firewall/acls?type=switch",
    "/setting/firewall/acls?type=eap",
    "/setting/wlans",
    "/setting/lan/profiles",
    "/setting/routing/staticRoutes",
    "/setting/service/mdns",
    "/setting/service/igmpProxy",
    "/devices",
]


def with_query(path: str, query: str) -> str:
    """Append a query string to a path that may already carry one."""
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{query}"


class OmadaAPI:
    """Endpoint helpers bound to a connected ``OmadaSession``.

    All methods return the controller's envelope as-is.
    """

    def __init__(self, session: OmadaSession) -> None:
        self.session = session

    def call(self, method: str, path: str, body: Any = None) -> Any:
        return self.session.call(method, path, body)

    # ==================== Networks / VLANs ====================

    def get_networks(self) -> Any:
        return self.call("GET", with_query("/setting/lan/networks", PAGE))

    def create_network(self, config: dict[str, Any]) -> Any:
        return self.call("POST", "/setting/lan/networks", config)

    # ==================== ACL / Firewall ====================

    def get_gateway_acls(self) -> Any:
        """List gateway ACL rules (lower index = higher priority)."""
        return self.call("GET", with_query("/setting/firewall/acls?type=gateway", PAGE))

    def create_gateway_acl(self, config: dict[str, Any]) -> Any:
        return self.call("POST", "/setting/firewall/acls?type=gateway", config)

    def create_switch_acl(self, config: dict[str, Any]) -> Any:
        return self.call("POST", "/setting/firewall/acls?type=switch", config)

    # ==================== Devices ====================

    def get_devices(self) -> Any:
        return self.call("GET", with_query("/devices", PAGE))

    def adopt_device(self, mac: str) -> Any:
        """Adopt a pending device by MAC address.

        Adoption is asynchronous on the controller; poll ``get_devices()``
        for the result.
        """
        return self.call("POST", "/cmd/devices/adopt", {"mac": mac})

    # ==================== WLAN / SSID ====================

    def get_wlan_groups(self) -> Any:
        return self.call("GET", with_query("/setting/wlans", PAGE))

    # Older name kept for existing callers
    get_wlans = get_wlan_groups

    def create_wlan(self, config: dict[str, Any]) -> Any:
        return self.call("POST", "/setting/wlans", config)

    def get_ssids(self, wlan_group_id: str) -> Any:
        return self.call("GET", f"/setting/wlans/{wlan_group_id}/ssids")

    def create_ssid(self, wlan_group_id: str, config: dict[str, Any]) -> Any:
        return self.call("POST", f"/setting/wlans/{wlan_group_id}/ssids", config)

    def update_ssid(self, wlan_group_id: str, ssid_id: str, config: dict[str, Any]) -> Any:
        """Modify an SSID. The controller expects the full SSID object."""
        return self.call(
            "PATCH", f"/setting/wlans/{wlan_group_id}/ssids/{ssid_id}", config
        )

    def delete_ssid(self, wlan_group_id: str, ssid_id: str) -> Any:
        return self.call("DELETE", f"/setting/wlans/{wlan_group_id}/ssids/{ssid_id}")

    # ==================== Port profiles ====================

    def get_port_profiles(self) -> Any:
        return self.call("GET", with_query("/setting/lan/profiles", PAGE))

    def create_port_profile(self, config: dict[str, Any]) -> Any:
        return self.call("POST", "/setting/lan/profiles", config)

    # ==================== Switch ports ====================

    def get_switch_ports(self, mac: str) -> Any:
        return self.call("GET", f"/switches/{mac}/ports")

    def update_switch_port(self, mac: str, port: int, config: dict[str, Any]) -> Any:
        """Update a switch port. The controller expects the full port object."""
        return self.call("PATCH", f"/switches/{mac}/ports/{port}", config)

    # ==================== Access points ====================

    def get_eap(self, mac: str) -> Any:
        return self.call("GET", f"/eaps/{mac}")

    def update_eap(self, mac: str, config: dict[str, Any]) -> Any:
        """Update AP settings, e.g. ``{"ssidOverrides": [...]}``."""
        return self.call("PATCH", f"/eaps/{mac}", config)

    # ==================== Routing ====================

    def get_static_routes(self) -> Any:
        return self.call("GET", with_query("/setting/routing/staticRoutes", PAGE))

    # ==================== Discovery ====================

    def explore_settings(
        self, endpoints: list[str] | None = None
    ) -> dict[str, dict[str, Any]]:
        """Query known endpoints and report which ones answer.

        Transport failures are recorded per endpoint instead of aborting
        the run. ``hasData`` is true when the page has rows or, failing
        that, when the envelope carries a ``result`` object at all, so an
        empty paged result still counts as an endpoint that exists.

        Returns:
            Mapping of endpoint path to a report with either ``errorCode``,
            ``hasData`` and ``sampleKeys``, or ``error``.
        """
        results: dict[str, dict[str, Any]] = {}
        for endpoint in endpoints or EXPLORE_ENDPOINTS:
            try:
                data = self.call(
                    "GET", with_query(endpoint, "currentPage=1&currentPageSize=5")
                )
            except TransportError as e:
                logger.warning(f"ERR {endpoint}: {e}")
                results[endpoint] = {"error": str(e)}
                continue

            rows = result_data(data)
            result = data.get("result") if isinstance(data, dict) else None
            if isinstance(rows, list):
                sample = rows[0] if rows else None
            else:
                sample = rows
            sample_keys = sorted(sample) if isinstance(sample, dict) else []

            results[endpoint] = {
                "errorCode": error_code(data),
                "hasData": bool(rows) or isinstance(result, (dict, list)) or bool(result),
                "sampleKeys": sample_keys,
            }
            logger.info(f"OK  {endpoint} ({len(sample_keys)} keys)")
        return results
