# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Validated syslog field values
#
# Every type here wraps an immutable byte string that satisfies one of the
# grammar constraints of RFC 3164 or RFC 5424. Values are validated once, when
# constructed, so formatters never have to validate at encode time.
#
# Types that have a NILVALUE fallback expose a default() that cannot fail;
# the RFC 3164 hostname and tag have none and expose try_default(), which
# raises a ResolutionError once every fallback is exhausted.

# Standard library imports
import ipaddress
import logging
import os
import socket
import string
import sys

from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar, Optional, Type, Union

# Local/package imports
from ziggiz_courier_dropoff_syslog.errors import (
    BadAppNameError,
    BadHostnameError,
    BadProcIdError,
    BadRfc5424HostnameError,
    BadTagError,
    FieldValidationError,
    NoHostnameError,
    NoTagError,
)

NILVALUE = b"-"

_ALNUM = frozenset((string.ascii_letters + string.digits).encode("ascii"))

logger = logging.getLogger("ziggiz_courier_dropoff_syslog.format.fields")


def os_hostname() -> bytes:
    """
    Return the hostname reported by the operating system.

    Raises:
        OSError: If the hostname cannot be retrieved or is empty.
    """
    name = socket.gethostname()
    if not name:
        raise OSError("the operating system reported an empty hostname")
    return name.encode("utf-8", "surrogateescape")


def local_ip() -> str:
    """
    Return a non-loopback IP address of this machine, rendered as text.

    Addresses bound to the hostname are tried first. If they are all loopback
    addresses, the address the kernel would route outbound traffic from is
    used; connecting a UDP socket sends no packets.

    Raises:
        OSError: If no non-loopback address can be found.
    """
    candidates = []
    try:
        for info in socket.getaddrinfo(socket.gethostname(), None):
            candidates.append(info[4][0])
    except OSError as e:
        logger.debug("Hostname address lookup failed", extra={"error": str(e)})

    for family, probe in ((socket.AF_INET, "192.0.2.1"), (socket.AF_INET6, "2001:db8::1")):
        try:
            with socket.socket(family, socket.SOCK_DGRAM) as sock:
                sock.connect((probe, 9))
                candidates.append(sock.getsockname()[0])
        except OSError as e:
            logger.debug(
                "Outbound address probe failed",
                extra={"family": family.name, "error": str(e)},
            )

    for candidate in candidates:
        try:
            address = ipaddress.ip_address(candidate.split("%", 1)[0])
        except ValueError:
            continue
        if not (address.is_loopback or address.is_unspecified):
            return str(address)

    raise OSError("no non-loopback IP address found for this host")


def executable_name() -> Optional[bytes]:
    """
    Return the file name of the running program, or None if unavailable.

    The script path in sys.argv[0] identifies the program; the interpreter in
    sys.executable is used when no script path is known (e.g. an embedded
    interpreter or the REPL).
    """
    for candidate in (sys.argv[0] if sys.argv else "", sys.executable):
        if candidate and candidate not in ("-", "-c"):
            name = Path(candidate).name
            if name:
                return os.fsencode(name)
    return None


class FieldValue(ABC):
    """
    Base class for an immutable, validated syslog field value.

    Subclasses implement is_valid() and set error_class; the constructor
    accepts bytes or str (encoded as UTF-8) and raises error_class if the
    value violates the field's constraint.
    """

    __slots__ = ("_value",)

    error_class: ClassVar[Type[FieldValidationError]] = FieldValidationError

    def __init__(self, value: Union[bytes, str]):
        if isinstance(value, str):
            value = value.encode("utf-8")
        value = bytes(value)
        if not self.is_valid(value):
            raise self.error_class(value)
        object.__setattr__(self, "_value", value)

    @staticmethod
    @abstractmethod
    def is_valid(value: bytes) -> bool:
        """Return True if value satisfies the field's constraint."""

    @property
    def value(self) -> bytes:
        return self._value

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __bytes__(self) -> bytes:
        return self._value

    def __str__(self) -> str:
        return self._value.decode("ascii")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    def __eq__(self, other) -> bool:
        if type(other) is type(self):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._value))


class Rfc3164Hostname(FieldValue):
    """
    An RFC 3164 HOSTNAME: printable ASCII above space (33-127).

    The RFC says the domain name must not be included, but an IPv4 or IPv6
    address is also acceptable, so the constructor does not enforce that;
    try_default() does strip the domain from the OS hostname.
    """

    __slots__ = ()

    error_class = BadHostnameError

    @staticmethod
    def is_valid(value: bytes) -> bool:
        return all(32 < b < 128 for b in value)

    @staticmethod
    def strip_domain(value: bytes) -> bytes:
        """Discard everything from the first '.' on."""
        return value.split(b".", 1)[0]

    @classmethod
    def try_default(cls) -> "Rfc3164Hostname":
        """
        Derive a hostname from the environment.

        Tries the OS hostname with its domain stripped, then the local IP
        address.

        Raises:
            NoHostnameError: If neither yields a compliant value.
        """
        try:
            name = cls.strip_domain(os_hostname())
            if name:
                return cls(name)
            logger.debug("OS hostname has no host part")
        except (OSError, BadHostnameError) as e:
            logger.debug(
                "OS hostname unusable for RFC 3164", extra={"error": str(e)}
            )

        try:
            return cls(local_ip())
        except (OSError, BadHostnameError) as e:
            raise NoHostnameError(
                "could not determine an RFC 3164 hostname or IP address for this host"
            ) from e


class Rfc5424Hostname(FieldValue):
    """
    An RFC 5424 HOSTNAME: ASCII, at most 255 bytes.
    """

    __slots__ = ()

    error_class = BadRfc5424HostnameError

    @staticmethod
    def is_valid(value: bytes) -> bool:
        return value.isascii() and len(value) < 256

    @classmethod
    def nil(cls) -> "Rfc5424Hostname":
        return cls(NILVALUE)

    @classmethod
    def default(cls) -> "Rfc5424Hostname":
        """
        Derive a hostname from the environment. Never fails.

        The RFC's order of preference is FQDN, static IP, hostname, dynamic
        IP, NILVALUE. This tries the OS hostname, then the local IP address,
        then falls back to NILVALUE.
        """
        try:
            return cls(os_hostname())
        except (OSError, BadRfc5424HostnameError) as e:
            logger.debug(
                "OS hostname unusable for RFC 5424", extra={"error": str(e)}
            )

        try:
            return cls(local_ip())
        except (OSError, BadRfc5424HostnameError) as e:
            logger.debug(
                "Local IP address unusable for RFC 5424", extra={"error": str(e)}
            )

        return cls.nil()


class AppName(FieldValue):
    """
    An RFC 5424 APP-NAME: ASCII, at most 48 bytes.
    """

    __slots__ = ()

    error_class = BadAppNameError

    @staticmethod
    def is_valid(value: bytes) -> bool:
        return value.isascii() and len(value) < 49

    @classmethod
    def default(cls) -> "AppName":
        """
        Use the running program's file name. Never fails; "-" is used if the
        name is unavailable or not compliant.
        """
        name = executable_name()
        if name is None:
            return cls(NILVALUE)
        try:
            return cls(name)
        except BadAppNameError as e:
            logger.debug("Program name unusable as APP-NAME", extra={"error": str(e)})
            return cls(NILVALUE)


class ProcId(FieldValue):
    """
    An RFC 5424 PROCID: ASCII, at most 128 bytes.

    PROCID has no interoperable meaning beyond "a change in the value
    indicates a discontinuity in syslog reporting"; the OS process id is
    the customary choice.
    """

    __slots__ = ()

    error_class = BadProcIdError

    @staticmethod
    def is_valid(value: bytes) -> bool:
        return value.isascii() and len(value) < 129

    @classmethod
    def default(cls) -> "ProcId":
        return cls(str(os.getpid()))


class Tag(FieldValue):
    """
    An RFC 3164 TAG: at most 32 ASCII alphanumeric characters.

    Any non-alphanumeric character terminates the TAG on the wire, so the
    process id (rendered as "[pid]") belongs to the CONTENT, not the tag.
    """

    __slots__ = ()

    error_class = BadTagError

    @staticmethod
    def is_valid(value: bytes) -> bool:
        return len(value) <= 32 and all(b in _ALNUM for b in value)

    @staticmethod
    def strip_non_compliant(value: bytes) -> bytes:
        return bytes(b for b in value if b in _ALNUM)

    @classmethod
    def try_default(cls) -> "Tag":
        """
        Use the running program's file name, stripped of non-alphanumerics.
        Unlike an explicit tag, a derived tag must not be empty.

        Raises:
            NoTagError: If the program name is unavailable or does not yield
                a compliant tag.
        """
        name = executable_name()
        if name is None:
            raise NoTagError("could not determine the current executable")
        stripped = cls.strip_non_compliant(name)
        if not stripped:
            raise NoTagError(f"{name!r} has no alphanumeric characters")
        try:
            return cls(stripped)
        except BadTagError as e:
            raise NoTagError(
                f"{name!r} does not yield an RFC 3164-compliant tag"
            ) from e
