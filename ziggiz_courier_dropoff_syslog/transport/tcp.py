# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# TCP transport for syslog messages


# Standard library imports
import socket

from typing import Optional

# Local/package imports
from ziggiz_courier_dropoff_syslog.errors import TransportError
from ziggiz_courier_dropoff_syslog.transport.base import StreamTransport


class TcpTransport(StreamTransport):
    """
    TCP transport: messages are written to the stream followed by a newline.

    TCP itself does not delimit messages; the trailing newline gives the
    daemon a simple line-delimited framing.
    """

    net_transport = "ip_tcp"

    def __init__(
        self, host: str = "localhost", port: int = 514, timeout: Optional[float] = None
    ):
        """
        Open the transport.

        Args:
            host: Host name or address of the syslog daemon (default: "localhost")
            port: TCP port of the syslog daemon (default: 514)
            timeout: Optional socket timeout in seconds (default: block)

        Raises:
            TransportError: If the connection cannot be established
        """
        self.host = host
        self.port = port
        try:
            sock = socket.create_connection((host, port), timeout=timeout)
        except OSError as e:
            raise TransportError(f"could not connect to {host}:{port}", e) from e
        super().__init__(sock)

        self.logger.debug(
            "TCP transport connected",
            extra={
                "net.transport": self.net_transport,
                "net.peer.name": host,
                "net.peer.port": port,
            },
        )

    @property
    def logger_name(self) -> str:
        return "ziggiz_courier_dropoff_syslog.transport.tcp"

    @property
    def destination(self) -> str:
        return f"{self.host}:{self.port}"
