#!/usr/bin/env python3
"""Create a WPA2/WPA3 SSID on a VLAN and show per-AP override status.

Requirements:
    - Set environment variables (or a .env file):
        - OMADA_URL
        - OMADA_PASS
    - At least one existing SSID (its rate limit ID is reused)
"""

import sys

from omada_api import OmadaAPI, OmadaSession, load_config, result_data, setup_logging

SSID_NAME = "MyNetwork"
VLAN_ID = 10
BAND_NAMES = {1: "2.4G", 2: "5G", 3: "2.4+5G"}


def build_ssid(rate_limit_id: str) -> dict:
    return {
        "name": SSID_NAME,
        "band": 3,  # 1=2.4G, 2=5G, 3=both
        "type": 0,
        "guestNetEnable": False,
        "security": 3,  # WPA2/WPA3; 2 is rejected by the controller
        "broadcast": True,
        "vlanSetting": {"mode": 1, "customConfig": {"vlanId": VLAN_ID}},
        "pskSetting": {
            "securityKey": "change-this-password",
            "encryptionPsk": 3,  # AES
            "versionPsk": 2,
            "gikRekeyPskEnable": False,
        },
        "rateLimit": {"rateLimitId": rate_limit_id},
        "ssidRateLimit": {"rateLimitId": rate_limit_id},
        "wlanScheduleEnable": False,
        "rateAndBeaconCtrl": {
            "rate2gCtrlEnable": False,
            "rate5gCtrlEnable": False,
            "rate6gCtrlEnable": False,
        },
        "macFilterEnable": False,
        "wlanId": "",
        "enable11r": False,
        "pmfMode": 3,  # 1=disabled, 2=optional, 3=required
        "multiCastSetting": {
            "multiCastEnable": True,
            "arpCastEnable": True,
            "filterEnable": False,
            "ipv6CastEnable": True,
            "channelUtil": 100,
        },
        "wpaPsk": [2, 3],
        "deviceType": 1,
        "dhcpOption82": {"dhcpEnable": False},
        "greEnable": False,
        "prohibitWifiShare": False,
        "mloEnable": False,
    }


def main() -> int:
    setup_logging()
    config = load_config()

    with OmadaSession.from_config(config) as session:
        session.connect()
        api = OmadaAPI(session)

        group = result_data(api.get_wlan_groups())[0]
        print(f"WLAN Group: {group['name']} ({group['id']})")

        existing = result_data(api.get_ssids(group["id"])) or []
        if not existing:
            print("No existing SSIDs found; a rateLimitId is needed.")
            print("Create one SSID via the web UI first, then rerun.")
            return 1
        rate_limit_id = existing[0]["rateLimit"]["rateLimitId"]
        print(f"Rate Limit ID (no limit): {rate_limit_id}")

        print(f'\nCreating SSID "{SSID_NAME}" on VLAN {VLAN_ID}...')
        result = api.create_ssid(group["id"], build_ssid(rate_limit_id))
        if not isinstance(result, dict) or result.get("errorCode") != 0:
            print(f"  Failed: {result.get('msg') if isinstance(result, dict) else result}")
            return 1
        print(f"  Created! SSID ID: {result['result']['ssidId']}")

        aps = [d for d in result_data(api.get_devices()) or [] if d.get("type") == "ap"]
        if aps:
            print(f"\nFound {len(aps)} APs. SSID override status:")
            for ap in aps:
                overrides = result_data(api.get_eap(ap["mac"])).get("ssidOverrides") or []
                for override in overrides:
                    if override.get("globalSsid") == SSID_NAME:
                        state = "enabled" if override.get("ssidEnable") else "disabled"
                        print(f"  {ap.get('name') or ap['mac']}: {state}")

        print("\nAll SSIDs:")
        for s in result_data(api.get_ssids(group["id"])) or []:
            vlan = (s.get("vlanSetting") or {}).get("customConfig", {}).get("vlanId", "default")
            band = BAND_NAMES.get(s.get("band"), s.get("band"))
            visibility = "visible" if s.get("broadcast") else "hidden"
            print(f"  {s['name']}: VLAN {vlan}, {band}, {visibility}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
