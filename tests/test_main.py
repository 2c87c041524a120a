# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Tests for the main module

# Standard library imports
import logging
import os
import socket

# Third-party imports
import pytest

# Local/package imports
from ziggiz_courier_dropoff_syslog.config import Config
from ziggiz_courier_dropoff_syslog.facility import Severity
from ziggiz_courier_dropoff_syslog.main import (
    main,
    parse_args,
    send_message,
    setup_logging,
)

MAIN = "ziggiz_courier_dropoff_syslog.main"


@pytest.fixture
def no_config_file(tmp_path, monkeypatch):
    """Run from an empty directory so that no config.yaml is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestMainModule:
    """Tests for the main entry point module."""

    @pytest.mark.unit
    def test_setup_logging(self):
        """Test that logging is set up correctly."""
        setup_logging("DEBUG")
        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) >= 1

        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        setup_logging("INFO")
        assert root_logger.level == logging.INFO

    @pytest.mark.unit
    def test_setup_logging_from_config(self):
        """Test that a configuration takes precedence over the level."""
        setup_logging("DEBUG", Config(log_level="ERROR"))
        assert logging.getLogger().level == logging.ERROR

    @pytest.mark.unit
    def test_argument_parsing(self):
        """Test command-line argument parsing."""
        args = parse_args(
            [
                "--format",
                "rfc3164",
                "--transport",
                "unix",
                "--unix-socket-path",
                "/run/log",
                "--facility",
                "local1",
                "--severity",
                "err",
                "--tag",
                "billing",
                "disk",
                "full",
            ]
        )
        assert args.message == ["disk", "full"]
        assert args.format == "rfc3164"
        assert args.transport == "unix"
        assert args.unix_socket_path == "/run/log"
        assert args.facility == "local1"
        assert args.severity == "err"
        assert args.tag == "billing"
        assert args.host is None
        assert args.config is None

    @pytest.mark.unit
    def test_argument_parsing_defaults(self):
        args = parse_args(["hello"])
        assert args.severity == "info"
        assert args.format is None
        assert args.transport is None

    @pytest.mark.unit
    def test_argument_parsing_requires_message(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            parse_args([])
        assert excinfo.value.code == 2

    @pytest.mark.unit
    def test_argument_parsing_rejects_unknown_transport(self, capsys):
        with pytest.raises(SystemExit):
            parse_args(["--transport", "tls", "hello"])

    @pytest.mark.integration
    def test_send_message(self, udp_daemon):
        host, port = udp_daemon.getsockname()
        config = Config(
            host=host, port=port, hostname="bree.local", app_name="cli", proc_id="9"
        )
        send_message(config, "hello", Severity.NOTICE)
        data = udp_daemon.recv(65536)
        assert data.startswith(b"<13>1 ")
        assert data.endswith(b" bree.local cli 9 - - hello")

    @pytest.mark.integration
    def test_main_sends_over_udp(self, udp_daemon, no_config_file):
        """Test that main() sends the joined message with CLI overrides applied."""
        host, port = udp_daemon.getsockname()
        main(
            [
                "--host",
                host,
                "--port",
                str(port),
                "--app-name",
                "cli",
                "--facility",
                "local7",
                "--severity",
                "warning",
                "hello",
                "world",
            ]
        )
        data = udp_daemon.recv(65536)
        assert data.startswith(b"<188>1 ")
        assert data.endswith(f" cli {os.getpid()} - - hello world".encode("ascii"))

    @pytest.mark.integration
    def test_main_with_config_file(self, tcp_daemon, read_lines, tmp_path):
        """Test that main() reads format and transport from a config file."""
        host, port = tcp_daemon.getsockname()
        config_path = tmp_path / "client.yaml"
        config_path.write_text(
            f"format: rfc3164\ntransport: tcp\nhost: {host}\nport: {port}\n"
            "hostname: bree\ntag: billing\npid: 77\nlog_level: WARNING\n"
        )

        main(["--config", str(config_path), "invoice", "sent"])

        conn, _ = tcp_daemon.accept()
        conn.settimeout(5)
        line = read_lines(conn, 1)[0]
        conn.close()
        assert line.startswith(b"<14>")
        assert line.endswith(b" bree billing[77]: invoice sent")

    @pytest.mark.integration
    def test_main_transport_failure(self, no_config_file, mocker, caplog):
        """Test that a transport failure exits with status 1."""
        caplog.set_level(logging.ERROR)
        mocker.patch(f"{MAIN}.setup_logging")

        probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]
        probe.close()

        with pytest.raises(SystemExit) as excinfo:
            main(["--transport", "tcp", "--host", "127.0.0.1", "--port", str(port), "x"])
        assert excinfo.value.code == 1
        assert "Failed to send syslog message" in caplog.text

    @pytest.mark.unit
    def test_main_invalid_field(self, no_config_file, mocker, caplog):
        """Test that a non-compliant header field exits with status 1."""
        caplog.set_level(logging.ERROR)
        mocker.patch(f"{MAIN}.setup_logging")
        transport = mocker.patch(f"{MAIN}.build_transport")

        with pytest.raises(SystemExit) as excinfo:
            main(["--format", "rfc3164", "--tag", "not-a-tag", "x"])
        assert excinfo.value.code == 1
        assert "RFC 3164-compliant tag" in caplog.text
        transport.assert_not_called()

    @pytest.mark.unit
    def test_main_unexpected_exception(self, no_config_file, mocker, caplog):
        """Test handling of unexpected exceptions in main."""
        caplog.set_level(logging.ERROR)
        mocker.patch(f"{MAIN}.setup_logging")
        mocker.patch(f"{MAIN}.send_message", side_effect=RuntimeError("boom"))
        mock_exit = mocker.patch("sys.exit")

        main(["x"])

        assert "Unexpected error: boom" in caplog.text
        mock_exit.assert_called_once_with(1)

    @pytest.mark.unit
    def test_main_missing_config_file(self, tmp_path, mocker, caplog):
        caplog.set_level(logging.ERROR)
        mocker.patch(f"{MAIN}.setup_logging")
        with pytest.raises(SystemExit) as excinfo:
            main(["--config", str(tmp_path / "absent.yaml"), "x"])
        assert excinfo.value.code == 1
