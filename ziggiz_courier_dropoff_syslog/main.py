# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Main entry point for the syslog client
#
# A logger(1)-like command: formats one message and sends it to a syslog
# daemon using the configured format and transport.

# Standard library imports
import argparse
import logging
import sys

from typing import List, Optional

# Local/package imports
from ziggiz_courier_dropoff_syslog.config import (
    Config,
    build_formatter,
    build_transport,
    configure_logging,
    load_config,
)
from ziggiz_courier_dropoff_syslog.errors import SyslogError
from ziggiz_courier_dropoff_syslog.facility import Severity


def setup_logging(log_level: str = "INFO", config: Optional[Config] = None) -> None:
    """
    Configure logging with appropriate formatters and handlers.

    Args:
        log_level: The logging level to set (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        config: Optional configuration object to use for logging setup
    """
    if config:
        # Use the configuration-based logging setup
        configure_logging(config)
    else:
        level = getattr(logging, log_level.upper(), logging.INFO)

        # Create a formatter with timestamp, level, and logger name
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        # Configure the root logger
        root_logger = logging.getLogger()
        root_logger.setLevel(level)

        # Add console handler
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)


def send_message(config: Config, message: str, severity: Severity) -> None:
    """
    Format a single message and send it.

    Args:
        config: The configuration describing format and transport
        message: The message text
        severity: The message severity

    Raises:
        SyslogError: If the formatter cannot be built or the message cannot be sent
    """
    logger = logging.getLogger("ziggiz_courier_dropoff_syslog.main")

    formatter = build_formatter(config)
    with build_transport(config) as transport:
        transport.send(formatter.format(severity, message))

    logger.info(
        "Sent syslog message",
        extra={
            "format": config.format,
            "transport": config.transport,
            "severity": str(severity),
        },
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Ziggiz Courier Syslog Client: send a message to a syslog daemon"
    )
    parser.add_argument(
        "message",
        nargs="+",
        help="Message text (multiple arguments are joined with spaces)",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (overrides config file)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["rfc5424", "rfc3164"],
        help="Message format (overrides config file)",
    )
    parser.add_argument(
        "--transport",
        type=str,
        choices=["udp", "tcp", "unix", "unix_stream"],
        help="Transport to use (overrides config file)",
    )
    parser.add_argument(
        "--host",
        type=str,
        help="Syslog daemon host for udp/tcp (overrides config file)",
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Syslog daemon port for udp/tcp (overrides config file)",
    )
    parser.add_argument(
        "--unix-socket-path",
        type=str,
        help="Path of the daemon's Unix domain socket (overrides config file)",
    )
    parser.add_argument(
        "--facility",
        type=str,
        help="Facility name, e.g. user, daemon, local0 (overrides config file)",
    )
    parser.add_argument(
        "--severity",
        type=str,
        default="info",
        choices=[s.name.lower() for s in Severity],
        help="Message severity (default: info)",
    )
    parser.add_argument(
        "--app-name",
        type=str,
        help="RFC 5424 APP-NAME (overrides config file)",
    )
    parser.add_argument(
        "--tag",
        type=str,
        help="RFC 3164 TAG (overrides config file)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the syslog client.
    Parses command-line arguments, sets up logging, and sends the message.
    """
    args = parse_args(argv)

    try:
        config = load_config(args.config if args.config else None)

        # Override config with command line arguments if provided
        overrides = {
            "log_level": args.log_level,
            "format": args.format,
            "transport": args.transport,
            "host": args.host,
            "port": args.port,
            "unix_socket_path": args.unix_socket_path,
            "facility": args.facility,
            "app_name": args.app_name,
            "tag": args.tag,
        }
        config = Config(
            **{
                **config.model_dump(),
                **{k: v for k, v in overrides.items() if v is not None},
            }
        )

        setup_logging(config=config)
        logger = logging.getLogger("ziggiz_courier_dropoff_syslog.main")

        if args.config:
            logger.debug(f"Loaded configuration from {args.config}")

        send_message(config, " ".join(args.message), Severity.from_name(args.severity))
    except SyslogError as e:
        if not logging.root.handlers:
            setup_logging("ERROR")
        logger = logging.getLogger("ziggiz_courier_dropoff_syslog.main")
        logger.error(f"Failed to send syslog message: {e}")
        sys.exit(1)
    except Exception as e:
        # Setup basic logging if we couldn't load the configuration
        if not logging.root.handlers:
            setup_logging("ERROR")
        logger = logging.getLogger("ziggiz_courier_dropoff_syslog.main")
        logger.exception(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
