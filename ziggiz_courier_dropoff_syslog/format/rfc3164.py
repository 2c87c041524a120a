# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# RFC 3164 (BSD syslog) message formatting
#
# RFC 3164 is descriptive rather than prescriptive: it documents what was
# already in the wild. It is still useful because rsyslog, when listening on
# /dev/log, hands incoming messages to a parser that does not understand
# RFC 5424.
#
# Wire format:
#   <PRI>Mon _d HH:MM:SS HOSTNAME TAG[PID]: MSG

# Standard library imports
import logging
import os

from datetime import datetime
from typing import Optional, Union

# Local/package imports
from ziggiz_courier_dropoff_syslog.facility import Facility, Severity
from ziggiz_courier_dropoff_syslog.format.base import (
    EventMetadata,
    SyslogFormatter,
    Timestamp,
    to_datetime,
)
from ziggiz_courier_dropoff_syslog.format.fields import Rfc3164Hostname, Tag

logger = logging.getLogger("ziggiz_courier_dropoff_syslog.format.rfc3164")

# Month abbreviations are fixed by the RFC; %b would follow the process locale.
_MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def format_timestamp(timestamp: Optional[Timestamp] = None) -> str:
    """
    Render a TIMESTAMP field: local time as "Mmm dd hh:mm:ss", with the day
    padded by a space rather than a zero and no year or time zone. A
    timestamp the platform cannot represent is replaced by the current time.
    """
    if timestamp is None:
        local = datetime.now().astimezone()
    else:
        try:
            local = to_datetime(timestamp).astimezone()
        except (OverflowError, ValueError, OSError) as e:
            logger.debug(
                "Timestamp out of range, using the current time",
                extra={"timestamp": repr(timestamp), "error": str(e)},
            )
            local = datetime.now().astimezone()
    return f"{_MONTHS[local.month - 1]} {local.day:>2} {local:%H:%M:%S}"


def escape_unicode(message: str) -> str:
    """
    Escape every character, ASCII included, as \\u{hex}: "Hi" becomes
    "\\u{48}\\u{69}".
    """
    return "".join(f"\\u{{{ord(c):x}}}" for c in message)


class Rfc3164Formatter(SyslogFormatter):
    """
    A syslog formatter that produces RFC 3164-conformant messages.

    The RFC says the code set is traditionally seven-bit ASCII, but UTF-8 is
    accepted by every daemon in practice. Instances therefore emit the
    message as UTF-8 unless escape_unicode is set, in which case every
    character of the message is written as a \\u{hex} escape.
    """

    __slots__ = ("_hostname", "_tag", "_pid", "_escape_unicode")

    def __init__(
        self,
        hostname: Rfc3164Hostname,
        tag: Tag,
        facility: Facility = Facility.USER,
        pid: Optional[int] = None,
        escape_unicode: bool = False,
    ):
        super().__init__(facility)
        object.__setattr__(self, "_hostname", hostname)
        object.__setattr__(self, "_tag", tag)
        object.__setattr__(self, "_pid", pid)
        object.__setattr__(self, "_escape_unicode", escape_unicode)

    @classmethod
    def try_default(cls) -> "Rfc3164Formatter":
        """
        Build a formatter from the environment: LOG_USER, the local hostname,
        a tag derived from the program name, and the current process id.

        Raises:
            NoHostnameError: If no hostname or IP address can be determined.
            NoTagError: If the program name does not yield a tag.
        """
        return cls.builder().build()

    @classmethod
    def builder(cls) -> "Rfc3164Builder":
        return Rfc3164Builder()

    @property
    def hostname(self) -> Rfc3164Hostname:
        return self._hostname

    @property
    def tag(self) -> Tag:
        return self._tag

    @property
    def pid(self) -> Optional[int]:
        return self._pid

    @property
    def escape_unicode(self) -> bool:
        return self._escape_unicode

    def format(
        self,
        severity: Severity,
        message: str,
        timestamp: Optional[Timestamp] = None,
        metadata: Optional[EventMetadata] = None,
    ) -> bytes:
        buf = bytearray(
            f"<{self.priority(severity)}>{format_timestamp(timestamp)} ".encode("ascii")
        )
        buf += self._hostname.value
        buf += b" "
        # Any non-alphanumeric character terminates the TAG; "[" and ":" are
        # the customary ones.
        buf += self._tag.value
        if self._pid is not None:
            buf += f"[{self._pid}]: ".encode("ascii")

        if self._escape_unicode:
            buf += escape_unicode(message).encode("ascii")
        else:
            buf += message.encode("utf-8", "backslashreplace")
        return bytes(buf)

    def __repr__(self) -> str:
        return (
            f"Rfc3164Formatter(facility={self._facility!s}, hostname={self._hostname}, "
            f"tag={self._tag}, pid={self._pid}, escape_unicode={self._escape_unicode})"
        )


class Rfc3164Builder:
    """
    Fluent builder for Rfc3164Formatter.

    Setters that take raw values validate them immediately and raise a
    FieldValidationError. Fields left unset are derived from the environment
    by build().
    """

    def __init__(self):
        self.logger = logger
        self._facility = Facility.USER
        self._hostname: Optional[Rfc3164Hostname] = None
        self._tag: Optional[Tag] = None
        self._pid: Optional[int] = os.getpid()
        self._escape_unicode = False

    def facility(self, facility: Facility) -> "Rfc3164Builder":
        self._facility = Facility(facility)
        return self

    def hostname(
        self, hostname: Union[Rfc3164Hostname, str, bytes]
    ) -> "Rfc3164Builder":
        if not isinstance(hostname, Rfc3164Hostname):
            hostname = Rfc3164Hostname(hostname)
        self._hostname = hostname
        return self

    def tag(self, tag: Union[Tag, str, bytes]) -> "Rfc3164Builder":
        if not isinstance(tag, Tag):
            tag = Tag(tag)
        self._tag = tag
        return self

    def pid(self, pid: Optional[int]) -> "Rfc3164Builder":
        """Set the process id appended to the tag; None omits it."""
        self._pid = pid
        return self

    def escape_unicode(self, escape_unicode: bool = True) -> "Rfc3164Builder":
        self._escape_unicode = escape_unicode
        return self

    def build(self) -> Rfc3164Formatter:
        """
        Build the formatter.

        Raises:
            NoHostnameError: If no hostname was set and none can be derived.
            NoTagError: If no tag was set and none can be derived.
        """
        hostname = (
            self._hostname
            if self._hostname is not None
            else Rfc3164Hostname.try_default()
        )
        tag = self._tag if self._tag is not None else Tag.try_default()
        self.logger.debug(
            "Built RFC 3164 formatter",
            extra={
                "facility": str(self._facility),
                "hostname": str(hostname),
                "tag": str(tag),
                "pid": self._pid,
            },
        )
        return Rfc3164Formatter(
            hostname=hostname,
            tag=tag,
            facility=self._facility,
            pid=self._pid,
            escape_unicode=self._escape_unicode,
        )
