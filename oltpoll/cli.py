#!/usr/bin/env python3
"""
oltpoll - Command Line Interface.

Read-only SNMP polling of Huawei-style and ZTE-style OLTs.
Results are printed as JSON on stdout; logs go to stderr.

Usage:
    # Reachability check
    oltpoll test 10.20.0.2 -c public

    # System info / ONU count
    oltpoll system 10.20.0.2 --vendor huawei
    oltpoll count 10.20.0.2 --vendor zte --snmp-version 1

    # ONU discovery and optical levels
    oltpoll discover 10.20.0.2 --vendor huawei -o onus.json
    oltpoll optical 10.20.0.2 --vendor huawei
    oltpoll onu 10.20.0.2 --vendor zte --pon-port 3 --onu-id 17

    # Full snapshot
    oltpoll detail 10.20.0.2 --vendor huawei -v

    # From an inventory file
    oltpoll detail --config olts.yaml --olt olt-core-1
    oltpoll count --config olts.yaml --all --concurrency 5
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from functools import partial
from pathlib import Path
from typing import Any, List, Optional, Tuple

from . import __version__, engine
from .config import COMMUNITY_ENV, load_config
from .exceptions import OltPollError
from .models import DeviceEndpoint, Vendor
from .oids import parse_vendor


log = logging.getLogger("oltpoll.cli")

Target = Tuple[str, DeviceEndpoint, Optional[Vendor]]


# =============================================================================
# Logging
# =============================================================================

def setup_logging(level: str = "INFO"):
    """Configure logging with optional colors"""
    use_color = sys.platform != 'win32' or 'WT_SESSION' in os.environ

    class ColorFormatter(logging.Formatter):
        COLORS = {
            'DEBUG': '\033[36m',    # Cyan
            'INFO': '\033[32m',     # Green
            'WARNING': '\033[33m',  # Yellow
            'ERROR': '\033[31m',    # Red
            'CRITICAL': '\033[35m', # Magenta
        }
        RESET = '\033[0m'

        def format(self, record):
            if use_color and sys.stderr.isatty():
                color = self.COLORS.get(record.levelname, self.RESET)
                record.levelname = f"{color}{record.levelname:8}{self.RESET}"
            else:
                record.levelname = f"{record.levelname:8}"
            return super().format(record)

    log_level = getattr(logging, level.upper(), logging.INFO)

    # stdout carries the JSON result
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColorFormatter(
        '%(asctime)s | %(levelname)s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    logger = logging.getLogger('oltpoll')
    logger.setLevel(log_level)
    logger.handlers = [handler]
    logger.propagate = False


# =============================================================================
# Parser
# =============================================================================

def _common_options() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)

    common.add_argument('target', nargs='?', help='OLT IP address or hostname')
    common.add_argument(
        '--vendor',
        choices=[v.value for v in Vendor],
        help='OLT vendor OID layout'
    )

    snmp = common.add_argument_group('SNMP')
    snmp.add_argument(
        '-c', '--community',
        default=os.environ.get(COMMUNITY_ENV, 'public'),
        help=f'SNMP community string (default: ${COMMUNITY_ENV} or public)'
    )
    snmp.add_argument('--port', type=int, default=161, help='SNMP port (default: 161)')
    snmp.add_argument(
        '--snmp-version',
        choices=['1', '2c'],
        default='2c',
        dest='snmp_version',
        help='SNMP version (default: 2c)'
    )
    snmp.add_argument(
        '-t', '--timeout',
        type=float,
        default=10.0,
        help='Seconds per SNMP exchange (default: 10)'
    )
    snmp.add_argument('--retries', type=int, default=2, help='Retries per exchange (default: 2)')

    inventory = common.add_argument_group('inventory')
    inventory.add_argument('--config', type=Path, help='YAML inventory file')
    inventory.add_argument('--olt', help='OLT name from the inventory')
    inventory.add_argument(
        '--all',
        action='store_true',
        dest='all_olts',
        help='Poll every OLT in the inventory'
    )
    inventory.add_argument(
        '--concurrency',
        type=int,
        default=10,
        help='Max OLTs polled at once with --all (default: 10)'
    )

    output = common.add_argument_group('output')
    output.add_argument('-o', '--output', type=Path, help='Write JSON to file instead of stdout')
    output.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    output.add_argument(
        '--log-level',
        default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Log level (default: WARNING)'
    )
    return common


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog='oltpoll',
        description='Multi-vendor OLT SNMP poller',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  oltpoll test 10.20.0.2 -c public
  oltpoll discover 10.20.0.2 --vendor huawei -o onus.json
  oltpoll onu 10.20.0.2 --vendor zte --pon-port 3 --onu-id 17
  oltpoll detail --config olts.yaml --all
        """
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    common = _common_options()
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    subparsers.add_parser('test', parents=[common], help='Check SNMP reachability')
    subparsers.add_parser('system', parents=[common], help='System identity and health')
    subparsers.add_parser('count', parents=[common], help='Total ONUs across all PON ports')
    subparsers.add_parser('discover', parents=[common], help='List ONUs with serial and status')
    subparsers.add_parser('optical', parents=[common], help='Optical levels for every ONU')

    onu_parser = subparsers.add_parser('onu', parents=[common], help='Optical levels for one ONU')
    onu_parser.add_argument('--pon-port', type=int, required=True, dest='pon_port', help='PON port number')
    onu_parser.add_argument('--onu-id', type=int, required=True, dest='onu_id', help='ONU id on the port')

    subparsers.add_parser('detail', parents=[common], help='Boards, uplinks, VLANs and PON ports')

    return parser


# =============================================================================
# Commands
# =============================================================================

VENDOR_OPTIONAL = {'test'}


def resolve_targets(args) -> List[Target]:
    """
    Build (name, endpoint, vendor) tuples from the command line or inventory.

    Raises:
        OltPollError: inventory problems or missing vendor
    """
    if args.config:
        config = load_config(args.config)
        if args.all_olts:
            return list(config.targets())
        if not args.olt:
            raise OltPollError("--config needs --olt NAME or --all")
        endpoint, vendor = config.endpoint(args.olt)
        return [(args.olt, endpoint, vendor)]

    if args.olt or args.all_olts:
        raise OltPollError("--olt and --all need --config")
    if not args.target:
        raise OltPollError("No target: give a host or --config")

    vendor = parse_vendor(args.vendor) if args.vendor else None
    if vendor is None and args.command not in VENDOR_OPTIONAL:
        raise OltPollError(f"'{args.command}' needs --vendor")

    endpoint = DeviceEndpoint(
        host=args.target,
        port=args.port,
        community=args.community,
        version=args.snmp_version,
        timeout=args.timeout,
        retries=args.retries,
    )
    return [(args.target, endpoint, vendor)]


def build_operation(args):
    """Map a command to a coroutine function taking (endpoint, vendor)."""
    if args.command == 'test':
        return lambda endpoint, vendor: engine.test_connection(endpoint)
    if args.command == 'system':
        return engine.get_system_info
    if args.command == 'count':
        return engine.get_onu_count
    if args.command == 'discover':
        return engine.discover_onus
    if args.command == 'optical':
        return engine.bulk_poll_optical_power
    if args.command == 'onu':
        return partial(_single_onu, pon_port=args.pon_port, onu_id=args.onu_id)
    if args.command == 'detail':
        return engine.get_detailed_info
    raise OltPollError(f"Unknown command: {args.command}")


async def _single_onu(endpoint, vendor, pon_port: int, onu_id: int):
    return await engine.get_onu_optical_power(endpoint, vendor, pon_port, onu_id)


def to_jsonable(command: str, value: Any) -> Any:
    """Render an operation result as plain JSON data."""
    if isinstance(value, Exception):
        return {'error': f"{type(value).__name__}: {value}"}
    if command == 'test':
        return {'reachable': bool(value)}
    if command == 'count':
        return {'onu_count': value}
    if isinstance(value, list):
        return [item.to_dict() for item in value]
    if isinstance(value, dict):
        return {key: item.to_dict() for key, item in value.items()}
    return value.to_dict()


def succeeded(command: str, value: Any) -> bool:
    if isinstance(value, Exception):
        return False
    if command == 'test':
        return bool(value)
    return True


async def run_command(args) -> int:
    """Execute one sub-command; returns the process exit code."""
    try:
        targets = resolve_targets(args)
        operation = build_operation(args)
    except OltPollError as e:
        log.error(str(e))
        return 1

    if not targets:
        log.error("Inventory has no OLTs")
        return 1

    if len(targets) == 1 and not args.all_olts:
        name, endpoint, vendor = targets[0]
        try:
            value = await operation(endpoint, vendor)
        except OltPollError as e:
            log.error(f"{name}: {e}")
            value = e
        payload = to_jsonable(args.command, value)
        ok = succeeded(args.command, value)
    else:
        values = await engine.poll_many(
            [(endpoint, vendor) for _name, endpoint, vendor in targets],
            operation,
            concurrency=args.concurrency,
        )
        payload = {
            name: to_jsonable(args.command, value)
            for (name, _endpoint, _vendor), value in zip(targets, values)
        }
        ok = all(succeeded(args.command, value) for value in values)

    text = json.dumps(payload, indent=2)
    if args.output:
        args.output.write_text(text + '\n')
        log.info(f"Saved to: {args.output}")
    else:
        print(text)

    return 0 if ok else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging('DEBUG' if args.verbose else args.log_level)
    return asyncio.run(run_command(args))


if __name__ == '__main__':
    sys.exit(main())
