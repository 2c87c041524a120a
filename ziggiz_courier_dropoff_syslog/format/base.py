# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Formatter interface shared by the RFC 3164 and RFC 5424 formatters

# Standard library imports
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional, Union

# Third-party imports
from pydantic import BaseModel, ConfigDict

# Local/package imports
from ziggiz_courier_dropoff_syslog.facility import Facility, Severity, pri

# A point in time: an aware datetime, a naive datetime (taken as local time),
# or POSIX seconds as found on logging.LogRecord.created.
Timestamp = Union[datetime, float, int]


class EventMetadata(BaseModel):
    """
    Optional per-event metadata that a formatter may carry alongside the
    message text.

    Attributes:
        target (Optional[str]): The event's target (for Python logging, the logger name).
        module (Optional[str]): The module that emitted the event.
        file (Optional[str]): The source file that emitted the event.
        line (Optional[int]): The source line that emitted the event.
    """

    model_config = ConfigDict(frozen=True)

    target: Optional[str] = None
    module: Optional[str] = None
    file: Optional[str] = None
    line: Optional[int] = None


def to_datetime(timestamp: Optional[Timestamp] = None) -> datetime:
    """
    Normalise a timestamp into an aware datetime.

    None means "now". Naive datetimes are interpreted as local time, the
    convention of the datetime module.
    """
    if timestamp is None:
        return datetime.now(timezone.utc)
    if isinstance(timestamp, datetime):
        if timestamp.tzinfo is None:
            return timestamp.astimezone()
        return timestamp
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


class SyslogFormatter(ABC):
    """
    Abstract base class for syslog message formatters.

    A formatter is configured once (usually through a builder) and then
    reused for every message. Its fields never change after construction, so
    one instance can be shared read-only between threads. format() never
    raises: every field was validated when the formatter was built.
    """

    __slots__ = ("_facility",)

    def __init__(self, facility: Facility = Facility.USER):
        object.__setattr__(self, "_facility", Facility(facility))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def facility(self) -> Facility:
        return self._facility

    def priority(self, severity: Severity) -> int:
        return pri(self._facility, severity)

    @abstractmethod
    def format(
        self,
        severity: Severity,
        message: str,
        timestamp: Optional[Timestamp] = None,
        metadata: Optional[EventMetadata] = None,
    ) -> bytes:
        """
        Render a complete syslog message.

        Args:
            severity: The message severity
            message: The message text
            timestamp: When the event occurred (default: now)
            metadata: Optional event metadata

        Returns:
            The finished message buffer
        """
