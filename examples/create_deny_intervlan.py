#!/usr/bin/env python3
"""Create Deny-InterVLAN gateway ACL rules for all networks.

One DENY rule per network blocks traffic to every other network. This is
the usual VLAN isolation setup; specific ALLOW rules go above them
(lower index = higher priority, first match wins).

Requirements:
    - Set environment variables (or a .env file):
        - OMADA_URL
        - OMADA_PASS
"""

import time

from omada_api import OmadaAPI, OmadaSession, load_config, result_data, setup_logging

ALL_PROTOCOLS = [6, 17, 1]  # TCP + UDP + ICMP

# Base template for Deny rules
BASE_RULE = {
    "status": True,
    "type": 0,  # Gateway ACL
    "biDirectional": False,
    "stateMode": 0,  # Auto (stateful)
    "ipSec": 0,
    "syslog": False,
    "customAclDevices": [],
    "customAclOsws": [],
    "customAclStacks": [],
    "direction": {
        "wanInIds": [],
        "vpnInIds": [],
        "lanToWan": False,
        "lanToLan": True,
    },
}

# Pause between bulk calls so the controller keeps up
CALL_DELAY_SECONDS = 0.2


def main() -> int:
    setup_logging()
    config = load_config()

    with OmadaSession.from_config(config) as session:
        session.connect()
        api = OmadaAPI(session)

        networks = {n["name"]: n["id"] for n in result_data(api.get_networks()) or []}
        print("Networks found:")
        for name, network_id in networks.items():
            print(f"  {name}: {network_id}")

        print("\nCreating Deny-InterVLAN rules...\n")
        for name, network_id in networks.items():
            others = [x for x in networks.values() if x != network_id]
            rule = {
                **BASE_RULE,
                "name": f"Deny-{name}-InterVLAN",
                "policy": 0,  # Deny
                "protocols": ALL_PROTOCOLS,
                "sourceType": 0,  # Network
                "sourceIds": [network_id],
                "destinationType": 0,  # Network
                "destinationIds": others,
            }
            result = api.call("POST", "/setting/firewall/acls", rule)
            ok = isinstance(result, dict) and result.get("errorCode") == 0
            detail = "" if ok else f": {result.get('msg') if isinstance(result, dict) else result}"
            print(f"{'OK  ' if ok else 'FAIL'} Deny-{name}-InterVLAN{detail}")
            time.sleep(CALL_DELAY_SECONDS)

        print("\n=== All ACL Rules ===")
        acls = api.call("GET", "/setting/firewall/acls?type=0&currentPage=1&currentPageSize=100")
        for i, acl in enumerate(result_data(acls) or [], start=1):
            policy = "ALLOW" if acl.get("policy") == 1 else "DENY "
            print(f"{i:2}. {policy} | {acl.get('name')}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
