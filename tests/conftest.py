# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Pytest configuration file

# Standard library imports
import logging
import os
import socket
import tempfile

# Third-party imports
import pytest


# Define test categories
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line(
        "markers", "integration: mark a test as an integration test"
    )


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration after each test."""
    yield
    # Reset root logger after each test
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.WARNING)  # Default level


@pytest.fixture
def udp_daemon():
    """A UDP socket on 127.0.0.1 standing in for a syslog daemon."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(5)
    yield sock
    sock.close()


@pytest.fixture
def tcp_daemon():
    """A listening TCP socket on 127.0.0.1 standing in for a syslog daemon."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    sock.settimeout(5)
    yield sock
    sock.close()


@pytest.fixture
def unix_socket_dir():
    """
    A short temporary directory for Unix socket files; socket paths are
    limited to roughly 100 bytes, which pytest's tmp_path can exceed.
    """
    if not hasattr(socket, "AF_UNIX"):
        pytest.skip("Unix domain sockets are not supported on this platform")
    directory = tempfile.mkdtemp(prefix="zcds")
    yield directory
    for name in os.listdir(directory):
        os.unlink(os.path.join(directory, name))
    os.rmdir(directory)


def recv_lines(conn: socket.socket, count: int) -> list:
    """Read from a stream socket until count newline-terminated lines arrived."""
    data = b""
    while data.count(b"\n") < count:
        chunk = conn.recv(65536)
        if not chunk:
            break
        data += chunk
    return data.split(b"\n")[:count]


@pytest.fixture
def read_lines():
    """Helper reading newline-framed messages from an accepted stream socket."""
    return recv_lines
