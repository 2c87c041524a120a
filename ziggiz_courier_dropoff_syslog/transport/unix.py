# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Unix domain socket transports for syslog messages
#
# /dev/log is a datagram socket on most Linux distributions; some daemons
# (and systemd-journald configurations) offer a stream socket instead.


# Standard library imports
import os
import socket

from typing import Optional, Union

# Local/package imports
from ziggiz_courier_dropoff_syslog.errors import TransportError
from ziggiz_courier_dropoff_syslog.transport.base import (
    DatagramTransport,
    StreamTransport,
    open_socket,
)

DEFAULT_SOCKET_PATH = "/dev/log"

PathLike = Union[str, os.PathLike]


def _open_unix_socket(
    kind: int, path: PathLike, timeout: Optional[float]
) -> socket.socket:
    if not hasattr(socket, "AF_UNIX"):
        raise TransportError("Unix domain sockets are not supported on this platform")
    return open_socket(
        socket.AF_UNIX, kind, os.fspath(path), os.fspath(path), timeout=timeout
    )


class UnixDatagramTransport(DatagramTransport):
    """
    Unix datagram transport: one message per datagram, sent to a connected
    socket path.
    """

    net_transport = "unix"

    def __init__(
        self, path: PathLike = DEFAULT_SOCKET_PATH, timeout: Optional[float] = None
    ):
        """
        Open the transport.

        Args:
            path: Filesystem path of the daemon's socket (default: "/dev/log")
            timeout: Optional socket timeout in seconds (default: block)

        Raises:
            TransportError: If the socket cannot be connected
        """
        self.path = os.fspath(path)
        super().__init__(_open_unix_socket(socket.SOCK_DGRAM, self.path, timeout))
        self.logger.debug(
            "Unix datagram transport connected",
            extra={"net.transport": self.net_transport, "peer": self.path},
        )

    @property
    def logger_name(self) -> str:
        return "ziggiz_courier_dropoff_syslog.transport.unix"

    @property
    def destination(self) -> str:
        return self.path


class UnixStreamTransport(StreamTransport):
    """
    Unix stream transport: newline-delimited messages, like TcpTransport.
    """

    net_transport = "unix_stream"

    def __init__(
        self, path: PathLike = DEFAULT_SOCKET_PATH, timeout: Optional[float] = None
    ):
        """
        Open the transport.

        Args:
            path: Filesystem path of the daemon's socket (default: "/dev/log")
            timeout: Optional socket timeout in seconds (default: block)

        Raises:
            TransportError: If the socket cannot be connected
        """
        self.path = os.fspath(path)
        super().__init__(_open_unix_socket(socket.SOCK_STREAM, self.path, timeout))
        self.logger.debug(
            "Unix stream transport connected",
            extra={"net.transport": self.net_transport, "peer": self.path},
        )

    @property
    def logger_name(self) -> str:
        return "ziggiz_courier_dropoff_syslog.transport.unix"

    @property
    def destination(self) -> str:
        return self.path
