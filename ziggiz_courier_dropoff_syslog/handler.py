# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# logging.Handler that forwards log records to a syslog daemon
#
# SyslogHandler composes a formatter and a transport. For every record it
# maps the logging level to a syslog Severity, renders the text with the
# handler's logging.Formatter, renders the syslog message (carrying the
# record's logger name, module, file and line as metadata) and sends it.
# Failures are reported through logging.Handler.handleError, so logging
# never raises into the application.

# Standard library imports
import logging

from typing import Callable, Optional

# Local/package imports
from ziggiz_courier_dropoff_syslog.facility import Severity
from ziggiz_courier_dropoff_syslog.format.base import EventMetadata, SyslogFormatter
from ziggiz_courier_dropoff_syslog.format.rfc3164 import Rfc3164Formatter
from ziggiz_courier_dropoff_syslog.format.rfc5424 import Rfc5424Formatter
from ziggiz_courier_dropoff_syslog.transport.base import Transport
from ziggiz_courier_dropoff_syslog.transport.udp import UdpTransport
from ziggiz_courier_dropoff_syslog.transport.unix import UnixDatagramTransport

PACKAGE_LOGGER = "ziggiz_courier_dropoff_syslog"

LevelMapping = Callable[[int], Severity]


def default_level_mapping(levelno: int) -> Severity:
    """
    Map a logging level number to a syslog severity.

    DEBUG (and anything below) maps to DEBUG, INFO to INFO, WARNING to
    WARNING, ERROR to ERR and CRITICAL to CRIT. Custom levels map to the
    nearest standard level at or below them.
    """
    if levelno >= logging.CRITICAL:
        return Severity.CRIT
    if levelno >= logging.ERROR:
        return Severity.ERR
    if levelno >= logging.WARNING:
        return Severity.WARNING
    if levelno >= logging.INFO:
        return Severity.INFO
    return Severity.DEBUG


class SyslogHandler(logging.Handler):
    """
    A logging handler that sends records to a syslog daemon.

    Records emitted by this package's own loggers are ignored; a failing
    transport logs a warning, and forwarding that warning through the same
    transport would loop.
    """

    def __init__(
        self,
        syslog_formatter: SyslogFormatter,
        transport: Transport,
        level: int = logging.NOTSET,
        map_level: Optional[LevelMapping] = None,
    ):
        """
        Initialize the handler.

        Args:
            syslog_formatter: Formatter rendering each record as a syslog message
            transport: Transport delivering the messages; owned by the handler
            level: Minimum logging level handled
            map_level: Mapping from logging level numbers to syslog severities
        """
        super().__init__(level)
        self.syslog_formatter = syslog_formatter
        self.transport = transport
        self.map_level = map_level or default_level_mapping

    @classmethod
    def try_default(cls, level: int = logging.NOTSET) -> "SyslogHandler":
        """
        RFC 5424 messages over UDP to localhost:514.

        Raises:
            TransportError: If the UDP socket cannot be opened
        """
        return cls(Rfc5424Formatter.default(), UdpTransport(), level)

    @classmethod
    def rfc3164_default(cls, level: int = logging.NOTSET) -> "SyslogHandler":
        """
        RFC 3164 messages over the /dev/log Unix datagram socket, which is
        what rsyslog's local socket parser understands.

        Raises:
            ResolutionError: If no hostname or tag can be derived
            TransportError: If /dev/log cannot be connected
        """
        return cls(Rfc3164Formatter.try_default(), UnixDatagramTransport(), level)

    def metadata(self, record: logging.LogRecord) -> EventMetadata:
        return EventMetadata(
            target=record.name,
            module=record.module,
            file=record.pathname,
            line=record.lineno,
        )

    def emit(self, record: logging.LogRecord) -> None:
        if record.name == PACKAGE_LOGGER or record.name.startswith(
            PACKAGE_LOGGER + "."
        ):
            return
        try:
            message = self.syslog_formatter.format(
                self.map_level(record.levelno),
                self.format(record),
                record.created,
                self.metadata(record),
            )
            self.transport.send(message)
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        self.acquire()
        try:
            self.transport.close()
        finally:
            self.release()
        super().close()
