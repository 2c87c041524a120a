# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Tests for SyslogHandler

# Standard library imports
import logging

from unittest.mock import MagicMock

# Third-party imports
import pytest

# Local/package imports
from ziggiz_courier_dropoff_syslog.errors import TransportError
from ziggiz_courier_dropoff_syslog.facility import Severity
from ziggiz_courier_dropoff_syslog.format.rfc3164 import Rfc3164Formatter
from ziggiz_courier_dropoff_syslog.format.rfc5424 import (
    Rfc5424Formatter,
    StructuredDataConfig,
)
from ziggiz_courier_dropoff_syslog.handler import SyslogHandler, default_level_mapping
from ziggiz_courier_dropoff_syslog.transport.base import Transport
from ziggiz_courier_dropoff_syslog.transport.udp import UdpTransport


@pytest.fixture
def formatter():
    return (
        Rfc5424Formatter.builder()
        .hostname("bree.local")
        .app_name("prototyping")
        .proc_id("123")
        .build()
    )


@pytest.fixture
def transport():
    return MagicMock(spec=Transport)


@pytest.fixture
def app_logger():
    logger = logging.getLogger("myapp.worker")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    yield logger
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


class TestLevelMapping:
    """Tests for default_level_mapping."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "levelno, severity",
        [
            (logging.CRITICAL, Severity.CRIT),
            (logging.ERROR, Severity.ERR),
            (logging.WARNING, Severity.WARNING),
            (logging.INFO, Severity.INFO),
            (logging.DEBUG, Severity.DEBUG),
            (5, Severity.DEBUG),
            (25, Severity.INFO),
            (60, Severity.CRIT),
        ],
    )
    def test_mapping(self, levelno, severity):
        assert default_level_mapping(levelno) == severity


class TestSyslogHandler:
    """Tests for SyslogHandler."""

    @pytest.mark.unit
    def test_emit_formats_and_sends(self, formatter, transport, app_logger):
        app_logger.addHandler(SyslogHandler(formatter, transport))
        app_logger.warning("disk %s full", "/var")

        transport.send.assert_called_once()
        message = transport.send.call_args[0][0]
        assert message.startswith(b"<12>1 ")
        assert message.endswith(b" bree.local prototyping 123 - - disk /var full")

    @pytest.mark.unit
    def test_uses_record_time(self, formatter, transport, app_logger):
        app_logger.addHandler(SyslogHandler(formatter, transport))
        record = app_logger.makeRecord(
            "myapp.worker", logging.INFO, "worker.py", 7, "at epoch", None, None
        )
        record.created = 0.0
        app_logger.handle(record)
        assert transport.send.call_args[0][0] == (
            b"<14>1 1970-01-01T00:00:00.000000+00:00 bree.local prototyping 123 - - at epoch"
        )

    @pytest.mark.unit
    def test_respects_logging_formatter(self, formatter, transport, app_logger):
        handler = SyslogHandler(formatter, transport)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        app_logger.addHandler(handler)
        app_logger.info("ready")
        assert transport.send.call_args[0][0].endswith(b" - - myapp.worker: ready")

    @pytest.mark.unit
    def test_metadata_as_structured_data(self, transport, app_logger):
        formatter = (
            Rfc5424Formatter.builder()
            .hostname("bree.local")
            .app_name("prototyping")
            .proc_id("123")
            .structured_data(StructuredDataConfig(with_target=True, with_module=True))
            .build()
        )
        app_logger.addHandler(SyslogHandler(formatter, transport))
        app_logger.info("hello")
        message = transport.send.call_args[0][0]
        assert (
            b'[tracing-meta@64700 target="myapp.worker" module="test_handler"] hello'
            in message
        )

    @pytest.mark.unit
    def test_metadata(self, formatter, transport):
        handler = SyslogHandler(formatter, transport)
        record = logging.LogRecord(
            "myapp.db", logging.INFO, "/srv/myapp/db.py", 12, "msg", None, None
        )
        metadata = handler.metadata(record)
        assert metadata.target == "myapp.db"
        assert metadata.module == "db"
        assert metadata.file == "/srv/myapp/db.py"
        assert metadata.line == 12

    @pytest.mark.unit
    def test_custom_level_mapping(self, formatter, transport, app_logger):
        app_logger.addHandler(
            SyslogHandler(formatter, transport, map_level=lambda _: Severity.ALERT)
        )
        app_logger.debug("anything")
        assert transport.send.call_args[0][0].startswith(b"<9>1 ")

    @pytest.mark.unit
    def test_level_filtering(self, formatter, transport, app_logger):
        app_logger.addHandler(SyslogHandler(formatter, transport, level=logging.ERROR))
        app_logger.warning("ignored")
        transport.send.assert_not_called()

    @pytest.mark.unit
    def test_ignores_own_loggers(self, formatter, transport):
        handler = SyslogHandler(formatter, transport)
        for name in (
            "ziggiz_courier_dropoff_syslog",
            "ziggiz_courier_dropoff_syslog.transport.udp",
        ):
            handler.handle(
                logging.LogRecord(name, logging.WARNING, __file__, 1, "x", None, None)
            )
        transport.send.assert_not_called()

    @pytest.mark.unit
    def test_similarly_named_logger_is_forwarded(self, formatter, transport):
        handler = SyslogHandler(formatter, transport)
        handler.handle(
            logging.LogRecord(
                "ziggiz_courier_dropoff_syslog_extra",
                logging.WARNING,
                __file__,
                1,
                "x",
                None,
                None,
            )
        )
        transport.send.assert_called_once()

    @pytest.mark.unit
    def test_transport_error_is_handled(self, formatter, transport, app_logger, mocker):
        transport.send.side_effect = TransportError("failed", OSError("down"))
        handler = SyslogHandler(formatter, transport)
        handle_error = mocker.patch.object(handler, "handleError")
        app_logger.addHandler(handler)

        app_logger.error("lost")
        handle_error.assert_called_once()

    @pytest.mark.unit
    def test_close_closes_transport(self, formatter, transport):
        handler = SyslogHandler(formatter, transport)
        handler.close()
        transport.close.assert_called_once()

    @pytest.mark.unit
    def test_defaults(self, mocker):
        udp = mocker.patch("ziggiz_courier_dropoff_syslog.handler.UdpTransport")
        handler = SyslogHandler.try_default(logging.INFO)
        assert isinstance(handler.syslog_formatter, Rfc5424Formatter)
        assert handler.transport is udp.return_value
        assert handler.level == logging.INFO

    @pytest.mark.unit
    def test_rfc3164_defaults(self, mocker):
        unix = mocker.patch(
            "ziggiz_courier_dropoff_syslog.handler.UnixDatagramTransport"
        )
        mocker.patch(
            "ziggiz_courier_dropoff_syslog.format.fields.executable_name",
            return_value=b"my-app",
        )
        mocker.patch(
            "ziggiz_courier_dropoff_syslog.format.fields.os_hostname",
            return_value=b"bree.example.com",
        )
        handler = SyslogHandler.rfc3164_default()
        assert isinstance(handler.syslog_formatter, Rfc3164Formatter)
        assert handler.syslog_formatter.tag.value == b"myapp"
        assert handler.transport is unix.return_value

    @pytest.mark.integration
    def test_end_to_end_udp(self, formatter, udp_daemon, app_logger):
        host, port = udp_daemon.getsockname()
        handler = SyslogHandler(formatter, UdpTransport(host, port))
        app_logger.addHandler(handler)
        try:
            app_logger.critical("meltdown")
            data = udp_daemon.recv(65536)
        finally:
            handler.close()
        assert data.startswith(b"<10>1 ")
        assert data.endswith(b" bree.local prototyping 123 - - meltdown")
