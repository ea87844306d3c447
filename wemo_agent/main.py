# wemo_agent/main.py

import argparse
import json
import logging
import sys
from typing import List, Optional

from wemo_agent.application.discovery_service import discovery_service
from wemo_agent.application.wemo_switch import WemoSwitch
from wemo_agent.core.config import settings
from wemo_agent.core.exceptions import WemoError
from wemo_agent.core.logging_config import configure_logging
from wemo_agent.infrastructure.http.http_transport import http_transport

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wemo-agent", description="Control Wemo smart switches")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging output")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("discover", help="Search the local network for switches")

    for command, help_text in (
        ("on", "Switch the device on"),
        ("off", "Switch the device off"),
        ("status", "Print the live binary state code"),
        ("insight", "Print the Insight power readings as JSON"),
    ):
        cmd = sub.add_parser(command, help=help_text)
        cmd.add_argument("host", help="Device address as ip:port, e.g. 192.168.1.20:49153")
        cmd.add_argument("--name", default="", help="Friendly name used in log output")

    return parser


def _run(args: argparse.Namespace) -> int:
    if args.command == "discover":
        result = discovery_service.discover()
        for switch in result.devices:
            print(switch.to_switch_state().model_dump_json())
        if not result.ok:
            logger.error(f"Discovery incomplete: {result.error}")
            return 1
        return 0

    switch = WemoSwitch(args.host, args.name or args.host)

    if args.command == "on":
        switch.turn_on()
    elif args.command == "off":
        switch.turn_off()
    elif args.command == "status":
        print(switch.query_binary_state())
    elif args.command == "insight":
        result = switch.refresh_telemetry()
        print(json.dumps(result.value.model_dump(), indent=2))
        if result.degraded:
            return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        settings.LOG_LEVEL = "DEBUG"
    configure_logging(settings)

    try:
        return _run(args)
    except WemoError as exc:
        logger.error(f"🛑 {exc}")
        return 1
    finally:
        http_transport.close()


if __name__ == "__main__":
    sys.exit(main())
