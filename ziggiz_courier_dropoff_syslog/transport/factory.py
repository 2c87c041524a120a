# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Transport factory for creating syslog transports by name
#
# Supported transport types:
#   - udp: UdpTransport to host:port
#   - tcp: TcpTransport to host:port
#   - unix: UnixDatagramTransport to a socket path
#   - unix_stream: UnixStreamTransport to a socket path

# Standard library imports
import logging

from typing import Optional

# Local/package imports
from ziggiz_courier_dropoff_syslog.transport.base import Transport
from ziggiz_courier_dropoff_syslog.transport.tcp import TcpTransport
from ziggiz_courier_dropoff_syslog.transport.udp import UdpTransport
from ziggiz_courier_dropoff_syslog.transport.unix import (
    DEFAULT_SOCKET_PATH,
    UnixDatagramTransport,
    UnixStreamTransport,
)

TRANSPORT_TYPES = ("udp", "tcp", "unix", "unix_stream")


class TransportFactory:
    """
    Factory class for creating syslog transports.

    Each call opens a new socket; transports are never shared or pooled.
    """

    logger = logging.getLogger("ziggiz_courier_dropoff_syslog.transport.factory")

    @staticmethod
    def create_transport(
        transport_type: str = "udp",
        host: str = "localhost",
        port: int = 514,
        unix_socket_path: str = DEFAULT_SOCKET_PATH,
        timeout: Optional[float] = None,
    ) -> Transport:
        """
        Create a transport instance of the specified type.

        Args:
            transport_type: The type of transport ("udp", "tcp", "unix" or "unix_stream")
            host: Daemon host for the network transports
            port: Daemon port for the network transports
            unix_socket_path: Socket path for the Unix transports
            timeout: Optional socket timeout in seconds

        Returns:
            A connected transport

        Raises:
            ValueError: If an invalid transport type is specified
            TransportError: If the transport cannot be opened
        """
        transport_type = transport_type.lower()
        extra = {"transport_type": transport_type}
        TransportFactory.logger.debug("Creating transport instance", extra=extra)

        if transport_type == "udp":
            return UdpTransport(host, port, timeout=timeout)
        elif transport_type == "tcp":
            return TcpTransport(host, port, timeout=timeout)
        elif transport_type == "unix":
            return UnixDatagramTransport(unix_socket_path, timeout=timeout)
        elif transport_type == "unix_stream":
            return UnixStreamTransport(unix_socket_path, timeout=timeout)
        else:
            TransportFactory.logger.error(
                "Invalid transport type specified",
                extra={"transport_type": transport_type, "error": "invalid_type"},
            )
            raise ValueError(
                f"Invalid transport type: {transport_type}. "
                f"Must be one of: {', '.join(TRANSPORT_TYPES)}"
            )
