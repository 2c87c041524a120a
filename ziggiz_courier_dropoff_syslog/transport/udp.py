# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# UDP transport for syslog messages


# Standard library imports
import socket

from typing import Optional

# Local/package imports
from ziggiz_courier_dropoff_syslog.errors import TransportError
from ziggiz_courier_dropoff_syslog.transport.base import DatagramTransport, open_socket


class UdpTransport(DatagramTransport):
    """
    UDP transport: one complete message per datagram.

    The socket is bound to an ephemeral local port and connected to the
    daemon, which fixes the default destination for every send.
    """

    net_transport = "ip_udp"

    def __init__(
        self, host: str = "localhost", port: int = 514, timeout: Optional[float] = None
    ):
        """
        Open the transport.

        Args:
            host: Host name or address of the syslog daemon (default: "localhost")
            port: UDP port of the syslog daemon (default: 514)
            timeout: Optional socket timeout in seconds (default: block)

        Raises:
            TransportError: If the address cannot be resolved or connected
        """
        self.host = host
        self.port = port
        super().__init__(self._connect(host, port, timeout))

        host_ip, host_port = self.sock.getsockname()[:2]
        self.logger.debug(
            "UDP transport connected",
            extra={
                "net.transport": self.net_transport,
                "net.host.ip": host_ip,
                "net.host.port": host_port,
                "net.peer.name": host,
                "net.peer.port": port,
            },
        )

    @property
    def logger_name(self) -> str:
        return "ziggiz_courier_dropoff_syslog.transport.udp"

    @property
    def destination(self) -> str:
        return f"{self.host}:{self.port}"

    @staticmethod
    def _connect(host: str, port: int, timeout: Optional[float]) -> socket.socket:
        description = f"{host}:{port}"
        try:
            addresses = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)
        except OSError as e:
            raise TransportError(f"could not resolve {description}", e) from e

        # Try each resolved address in turn, as socket.create_connection does
        error: Optional[TransportError] = None
        for family, kind, _, _, sockaddr in addresses:
            bind_address = ("::", 0) if family == socket.AF_INET6 else ("0.0.0.0", 0)
            try:
                return open_socket(
                    family, kind, sockaddr, description, bind_address, timeout
                )
            except TransportError as e:
                error = e
        if error is None:
            error = TransportError(f"no addresses found for {description}")
        raise error
