from __future__ import annotations

import argparse
import logging
from pathlib import Path

from envsender.client import DeliveryClient
from envsender.config import DEFAULT_CONFIG_PATH, SenderConfig, apply_overrides, load_config
from envsender.errors import ClientConstructionError, ConfigError, EnvSenderError
from envsender.logging import configure_logging
from envsender.runtime import (
    check_connectivity,
    deliver_environment,
    deliver_file,
    deliver_files,
    deliver_well_known,
)
from shared.constants import CLIENT_VERSION

logger = logging.getLogger("envsender")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2


def cmd_send(client: DeliveryClient, args: argparse.Namespace) -> int:
    logger.info("sending env file: %s", args.file)
    try:
        deliver_file(client, args.file)
    except EnvSenderError as exc:
        logger.error("failed to send env data: %s", exc)
        return EXIT_FAILURE
    logger.info("sent env data from %s", args.file)
    return EXIT_OK


def cmd_send_multiple(client: DeliveryClient, args: argparse.Namespace) -> int:
    logger.info("sending %s env file(s)", len(args.files))
    summary = deliver_files(client, args.files)
    logger.info("finished processing env files summary=%s", summary)
    return EXIT_OK


def cmd_send_current(client: DeliveryClient, args: argparse.Namespace) -> int:
    del args
    logger.info("sending current process environment")
    try:
        deliver_environment(client)
    except EnvSenderError as exc:
        logger.error("failed to send current environment: %s", exc)
        return EXIT_FAILURE
    logger.info("sent current process environment")
    return EXIT_OK


def cmd_send_common(client: DeliveryClient, args: argparse.Namespace) -> int:
    base_dir = Path(args.directory).expanduser() if args.directory else None
    delivered = deliver_well_known(client, base_dir=base_dir)
    if delivered is None:
        logger.error("no well-known env file could be sent")
        return EXIT_FAILURE
    logger.info("sent well-known env file %s", delivered)
    return EXIT_OK


def cmd_test(client: DeliveryClient, args: argparse.Namespace) -> int:
    del args
    logger.info("testing connection to backend")
    try:
        result = check_connectivity(client)
    except EnvSenderError as exc:
        logger.error("connection test failed: %s", exc)
        return EXIT_FAILURE
    logger.info("connection test finished status=%s", result.status_code)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="envsender", description="Send env file data to a backend server")
    parser.add_argument("--version", action="version", version=f"%(prog)s {CLIENT_VERSION}")
    parser.add_argument("--config", type=str, default=None, help=f"TOML config file (default {DEFAULT_CONFIG_PATH})")
    parser.add_argument("--backend-url", type=str, default=None, help="backend server URL")
    parser.add_argument("--auth-token", type=str, default=None, help="bearer token sent with every request")
    parser.add_argument("--timeout", type=int, default=None, help="request timeout in seconds")
    parser.add_argument("--insecure", action="store_true", help="skip TLS certificate verification")
    parser.add_argument("-v", "--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    send_parser = subparsers.add_parser("send", help="send a single env file")
    send_parser.add_argument("file", type=Path)
    send_parser.set_defaults(func=cmd_send)

    multiple_parser = subparsers.add_parser("send-multiple", help="send several env files")
    multiple_parser.add_argument("files", type=Path, nargs="+")
    multiple_parser.set_defaults(func=cmd_send_multiple)

    current_parser = subparsers.add_parser("send-current", help="send the current process environment")
    current_parser.set_defaults(func=cmd_send_current)

    common_parser = subparsers.add_parser("send-common", help="send the first well-known env file found")
    common_parser.add_argument("--directory", type=str, default=None)
    common_parser.set_defaults(func=cmd_send_common)

    test_parser = subparsers.add_parser("test", help="test connection to the backend")
    test_parser.set_defaults(func=cmd_test)

    return parser


def resolve_config(args: argparse.Namespace) -> SenderConfig:
    config = load_config(Path(args.config).expanduser() if args.config else None)
    return apply_overrides(
        config,
        backend_url=args.backend_url,
        auth_token=args.auth_token,
        timeout_seconds=args.timeout,
        tls_verify=False if args.insecure else None,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(bool(args.verbose))
    try:
        config = resolve_config(args)
        client = DeliveryClient(config)
    except (ConfigError, ClientConstructionError) as exc:
        logger.error("%s", exc)
        return EXIT_CONFIG
    with client:
        return int(args.func(client, args))
