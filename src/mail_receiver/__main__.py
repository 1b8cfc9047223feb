"""Command line entry point for the mail receiver.

The receiver itself is a library called by a mail delivery handler. The
command line tool validates configuration and shows how a raw message would
be routed:
- Configuration loading and validation
- Logging setup with reply key redaction
- Routing key resolution for a message file or stdin
"""

import argparse
import json
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError

from mail_receiver._version import __version__

log = structlog.get_logger()

EXIT_OK = 0
EXIT_NO_KEY = 1
EXIT_UNPARSABLE = 2


def setup_logging(debug: bool = False, log_format: str = "console") -> None:
    """Configure structured logging from command line options.

    Args:
        debug: Enable debug logging if True
        log_format: Output format ("json" or "console")
    """
    from mail_receiver.utils.logging import LogFormat, LogLevel, configure_logging

    level = LogLevel.DEBUG if debug else LogLevel.INFO
    configure_logging(level=level, log_format=LogFormat(log_format.lower()))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        prog="mail-receiver",
        description="Mail receiver - show how an inbound email is routed",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: environment only)",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate configuration and exit",
    )

    parser.add_argument(
        "--format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )

    parser.add_argument(
        "message",
        nargs="?",
        default=None,
        help="Raw email file to inspect, or - for stdin",
    )

    return parser.parse_args(argv)


def read_message(source: str) -> bytes:
    """Read a raw message from a file path or stdin ("-")."""
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def inspect_message(config_path: Path | None, source: str | None, dry_run: bool = False) -> int:
    """Resolve the routing key of a raw message and print it as JSON.

    Args:
        config_path: Path to configuration file, None for defaults
        source: Message file path or "-", None to only validate config
        dry_run: If True, only validate config

    Returns:
        Exit code
    """
    from mail_receiver.adapters.mime import EmailMimeParser
    from mail_receiver.config.loader import load_config
    from mail_receiver.config.schema import ReceiverConfig
    from mail_receiver.core.errors import EmailUnparsableError
    from mail_receiver.core.incoming_email import IncomingEmail
    from mail_receiver.core.routing import RoutingKeyResolver
    from mail_receiver.utils.logging import configure_logging

    try:
        config = load_config(config_path) if config_path else ReceiverConfig()
    except FileNotFoundError as e:
        log.error("configuration_file_not_found", path=str(config_path), error=str(e))
        return 1
    except (ValueError, ValidationError) as e:
        log.error("configuration_invalid", error=str(e))
        return 1

    configure_logging(
        level=config.logging.level,
        log_format=config.logging.format,
        file_path=config.logging.file.path if config.logging.file.enabled else None,
        file_enabled=config.logging.file.enabled,
        redact_keys=config.logging.redact_reply_keys,
    )

    incoming_email = IncomingEmail(config.incoming_email)

    if dry_run or source is None:
        log.info("configuration_valid", incoming_email_enabled=incoming_email.enabled)
        return EXIT_OK

    try:
        raw = read_message(source)
    except OSError as e:
        log.error("message_unreadable", source=source, error=str(e))
        return 1

    try:
        message = EmailMimeParser().parse(raw)
    except EmailUnparsableError as e:
        log.error("message_unparsable", error=str(e))
        return EXIT_UNPARSABLE

    resolver = RoutingKeyResolver(incoming_email)
    resolved = resolver.resolve_with_source(message)

    print(
        json.dumps(
            {
                "key": resolved.key if resolved else None,
                "source": resolved.source.value if resolved else None,
                "candidate": resolved.candidate if resolved else None,
            }
        )
    )
    return EXIT_OK if resolved else EXIT_NO_KEY


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_format=args.format)

    return inspect_message(args.config, args.message, args.dry_run)


if __name__ == "__main__":
    sys.exit(main())
