# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Syslog facility and severity definitions
#
# Facility and Severity replicate the names used in <syslog.h>. They are
# identical in RFC 3164 and RFC 5424, so both formatters share them.

# Standard library imports
from enum import IntEnum
from typing import Union


class Facility(IntEnum):
    """
    Enumeration of syslog facilities.

    Each value is already shifted left by three bits so that it can be or-ed
    directly with a Severity to produce the PRI value.
    """

    KERN = 0 << 3
    USER = 1 << 3
    MAIL = 2 << 3
    DAEMON = 3 << 3
    AUTH = 4 << 3
    SYSLOG = 5 << 3
    LPR = 6 << 3
    NEWS = 7 << 3
    UUCP = 8 << 3
    CRON = 9 << 3
    AUTHPRIV = 10 << 3
    FTP = 11 << 3
    NTP = 12 << 3
    AUDIT = 13 << 3
    ALERT = 14 << 3
    CLOCK = 15 << 3
    LOCAL0 = 16 << 3
    LOCAL1 = 17 << 3
    LOCAL2 = 18 << 3
    LOCAL3 = 19 << 3
    LOCAL4 = 20 << 3
    LOCAL5 = 21 << 3
    LOCAL6 = 22 << 3
    LOCAL7 = 23 << 3

    @classmethod
    def default(cls) -> "Facility":
        return cls.USER

    @classmethod
    def from_name(cls, name: str) -> "Facility":
        """
        Look up a facility by name, case-insensitively.

        Accepts both the bare name ("local0") and the <syslog.h> form
        ("LOG_LOCAL0").

        Raises:
            ValueError: If the name is not a known facility.
        """
        key = name.upper()
        if key.startswith("LOG_"):
            key = key[4:]
        try:
            return cls[key]
        except KeyError:
            raise ValueError(
                f"Invalid facility: {name}. Must be one of "
                f"{[f.name.lower() for f in cls]}"
            ) from None

    def __str__(self) -> str:
        return f"LOG_{self.name}"


class Severity(IntEnum):
    """
    Enumeration of syslog severities, from EMERG (0) to DEBUG (7).
    """

    EMERG = 0
    ALERT = 1
    CRIT = 2
    ERR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7

    @classmethod
    def from_name(cls, name: str) -> "Severity":
        """
        Look up a severity by name, case-insensitively ("info", "LOG_INFO").

        Raises:
            ValueError: If the name is not a known severity.
        """
        key = name.upper()
        if key.startswith("LOG_"):
            key = key[4:]
        try:
            return cls[key]
        except KeyError:
            raise ValueError(
                f"Invalid severity: {name}. Must be one of "
                f"{[s.name.lower() for s in cls]}"
            ) from None

    def __str__(self) -> str:
        return f"LOG_{self.name}"


def pri(facility: Union[Facility, int], severity: Union[Severity, int]) -> int:
    """
    Compute the PRI value of a syslog message.

    Facility codes are multiples of eight and severity codes lie in 0-7, so
    the two never share bits and a bitwise or is sufficient.

    Args:
        facility: The message facility
        severity: The message severity

    Returns:
        The PRI value, in the range 0-191
    """
    return int(facility) | int(severity)
