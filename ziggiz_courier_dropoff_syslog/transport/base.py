# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Transport interface and the datagram/stream framing shared by all transports
#
# A transport takes a finished message buffer and either hands the whole
# buffer to the operating system or raises TransportError. There is no
# retry, buffering or partial-send reporting.

# Standard library imports
import logging
import socket
import threading

from abc import ABC, abstractmethod
from typing import Optional

# Local/package imports
from ziggiz_courier_dropoff_syslog.errors import TransportError
from ziggiz_courier_dropoff_syslog.telemetry import get_tracer


class Transport(ABC):
    """
    Abstract base class for syslog transports.

    Each instance exclusively owns one socket for its lifetime. Subclasses
    open the socket in their constructor and implement the protocol-specific
    hooks below.
    """

    net_transport = "unknown"

    def __init__(self, sock: socket.socket):
        self.logger = logging.getLogger(self.logger_name)
        self.sock: Optional[socket.socket] = sock

    @property
    @abstractmethod
    def logger_name(self) -> str:
        """Name of the logger used by this transport."""

    @property
    @abstractmethod
    def destination(self) -> str:
        """Human-readable destination, for logs and error messages."""

    @property
    def span_name(self) -> str:
        return f"syslog.{self.net_transport}.send"

    @abstractmethod
    def _send(self, sock: socket.socket, message: bytes) -> None:
        """Write one complete message to the socket."""

    def send(self, message: bytes) -> None:
        """
        Send one complete syslog message.

        Args:
            message: The finished message buffer

        Raises:
            TransportError: If the transport is closed or the OS rejects the write
        """
        sock = self.sock
        if sock is None:
            raise TransportError(f"transport to {self.destination} is closed")

        tracer = get_tracer()
        with tracer.start_as_current_span(
            self.span_name,
            attributes={
                "net.transport": self.net_transport,
                "net.peer.name": self.destination,
                "message.length": len(message),
            },
        ):
            try:
                self._send(sock, message)
            except OSError as e:
                self.logger.warning(
                    "Failed to send syslog message",
                    extra={"destination": self.destination, "error": str(e)},
                )
                raise TransportError(
                    f"failed to send syslog message to {self.destination}", e
                ) from e

    def close(self) -> None:
        """Close the socket. Further sends raise TransportError."""
        sock, self.sock = self.sock, None
        if sock is not None:
            sock.close()
            self.logger.debug(
                "Transport closed", extra={"destination": self.destination}
            )

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "open" if self.sock is not None else "closed"
        return f"{type(self).__name__}({self.destination!r}, {state})"


class DatagramTransport(Transport):
    """
    Base for connected datagram sockets: one message is one datagram.

    The kernel writes each datagram atomically, so concurrent senders can
    never split a message, although datagrams from different threads may
    arrive in any order.
    """

    def _send(self, sock: socket.socket, message: bytes) -> None:
        sent = sock.send(message)
        if sent != len(message):
            raise OSError(
                f"datagram truncated: sent {sent} of {len(message)} bytes"
            )


class StreamTransport(Transport):
    """
    Base for stream sockets, framed with a trailing newline per message.

    This is the non-transparent framing of RFC 6587. Sends are serialised
    with a per-instance lock so that messages from concurrent threads are
    never interleaved mid-message.
    """

    end_of_message_marker = b"\n"

    def __init__(self, sock: socket.socket):
        super().__init__(sock)
        self._lock = threading.Lock()

    def _send(self, sock: socket.socket, message: bytes) -> None:
        with self._lock:
            sock.sendall(message + self.end_of_message_marker)


def open_socket(
    family: int,
    kind: int,
    address,
    description: str,
    bind_address=None,
    timeout: Optional[float] = None,
) -> socket.socket:
    """
    Create a socket, optionally bind it, and connect it to address.

    A timeout, if given, applies to the connect and to every later send;
    by default sockets block indefinitely.

    Raises:
        TransportError: If any step fails; the socket is closed first.
    """
    try:
        sock = socket.socket(family, kind)
    except OSError as e:
        raise TransportError(f"could not create a socket for {description}", e) from e
    try:
        if timeout is not None:
            sock.settimeout(timeout)
        if bind_address is not None:
            sock.bind(bind_address)
        sock.connect(address)
    except OSError as e:
        sock.close()
        raise TransportError(f"could not connect to {description}", e) from e
    return sock
