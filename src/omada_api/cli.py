"""Command-line entry point: connect to a controller and print a summary.

Usage:
    export OMADA_URL="https://192.168.x.x"
    export OMADA_PASS="your-password"
    omada-api demo
    omada-api explore --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import load_config
from .endpoints import OmadaAPI
from .exceptions import OmadaError
from .models import result_data
from .session import OmadaSession
from .utils import LOG_LEVELS, setup_logging

logger = logging.getLogger(__name__)


def _rows(envelope) -> list:
    rows = result_data(envelope)
    return rows if isinstance(rows, list) else []


def _print_demo(api: OmadaAPI) -> None:
    print("Devices:")
    for d in _rows(api.get_devices()):
        print(f"  - {d.get('name') or d.get('mac')} ({d.get('type')}, status: {d.get('status')})")

    print("\nNetworks:")
    for n in _rows(api.get_networks()):
        vlan = n.get("vlanId") or "default"
        print(f"  - {n.get('name')} (VLAN {vlan}, {n.get('subnet') or ''}/{n.get('cidr') or ''})")

    print("\nGateway ACL Rules:")
    acls = _rows(api.get_gateway_acls())
    if not acls:
        print("  (no rules)")
    for a in acls:
        policy = "Permit" if a.get("policy") == 1 else "Deny"
        print(f"  - {a.get('name')} ({policy}, active: {a.get('status')})")


def _print_explore(report: dict, as_json: bool) -> None:
    if as_json:
        print(json.dumps(report, indent=2))
        return
    for endpoint, entry in report.items():
        if "error" in entry:
            print(f"  ERR {endpoint}: {entry['error']}")
            continue
        print(f"  OK  {endpoint} (errorCode {entry['errorCode']})")
        if entry["sampleKeys"]:
            print(f"      Keys: {', '.join(entry['sampleKeys'])}")


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = argparse.ArgumentParser(
        prog="omada-api", description="Omada controller web API client"
    )
    parser.add_argument("--config", default=None, help="Path to a YAML config file")
    parser.add_argument("--env-file", default=None, help="Path to a .env file (default: ./.env)")
    parser.add_argument(
        "--log-level", default=None, type=str.upper, choices=LOG_LEVELS, help="Log level"
    )
    parser.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    sub = parser.add_subparsers(dest="cmd")
    sub.add_parser("demo", help="List devices, networks and gateway ACLs (default)")
    sub.add_parser("explore", help="Check which known setting endpoints answer")
    sub.add_parser("sites", help="Show the resolved controller and site")

    args = parser.parse_args(argv)
    cmd = args.cmd or "demo"

    try:
        setup_logging(args.log_level)
        config = load_config(
            config_path=Path(args.config) if args.config else None,
            env_file=Path(args.env_file) if args.env_file else None,
        )
        with OmadaSession.from_config(config) as session:
            session.connect()
            api = OmadaAPI(session)

            if cmd == "explore":
                _print_explore(api.explore_settings(), as_json=bool(args.json))
            elif cmd == "sites":
                payload = {
                    "controller_id": session.controller_id,
                    "controller_version": session.controller_info.controller_version,
                    "site_id": session.site_id,
                    "site_name": session.site.name,
                }
                if args.json:
                    print(json.dumps(payload, indent=2))
                else:
                    for key, value in payload.items():
                        print(f"{key}: {value}")
            else:
                _print_demo(api)
    except OmadaError as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
