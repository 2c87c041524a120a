# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# RFC 5424 message formatting
#
# Wire format:
#   <PRI>1 TIMESTAMP HOSTNAME APP-NAME PROCID MSGID STRUCTURED-DATA MSG
#
# MSGID is always the NILVALUE. STRUCTURED-DATA optionally carries event
# metadata (target, module, file, line) under a single SD-ID, by default
# "tracing-meta@64700".

# Standard library imports
import logging

from datetime import datetime, timezone
from typing import List, Optional, Tuple, Union

# Third-party imports
from pydantic import BaseModel, ConfigDict, field_validator

# Local/package imports
from ziggiz_courier_dropoff_syslog.facility import Facility, Severity
from ziggiz_courier_dropoff_syslog.format.base import (
    EventMetadata,
    SyslogFormatter,
    Timestamp,
    to_datetime,
)
from ziggiz_courier_dropoff_syslog.format.fields import (
    NILVALUE,
    AppName,
    ProcId,
    Rfc5424Hostname,
)

logger = logging.getLogger("ziggiz_courier_dropoff_syslog.format.rfc5424")

DEFAULT_SD_ID = "tracing-meta@64700"

# UTF-8 byte order mark, optionally prefixed to MSG
BOM = b"\xef\xbb\xbf"


def format_timestamp(timestamp: Optional[Timestamp] = None) -> str:
    """
    Render a TIMESTAMP field: RFC 3339 in UTC with exactly six fractional
    digits and an explicit offset, e.g. 1970-01-01T00:00:00.000000+00:00.

    RFC 5424 forbids more than six fractional digits. A timestamp the
    platform cannot represent is replaced by the current time.
    """
    try:
        utc = to_datetime(timestamp).astimezone(timezone.utc)
    except (OverflowError, ValueError, OSError) as e:
        logger.debug(
            "Timestamp out of range, using the current time",
            extra={"timestamp": repr(timestamp), "error": str(e)},
        )
        utc = datetime.now(timezone.utc)
    return utc.isoformat(timespec="microseconds")


def validate_sd_id(sd_id: str) -> str:
    """SD-NAME: 1-32 printable ASCII characters other than '=', ' ', ']' and '"'."""
    if not 0 < len(sd_id) <= 32 or any(
        not 33 <= ord(c) <= 126 or c in '= ]"' for c in sd_id
    ):
        raise ValueError(f"Invalid SD-ID: {sd_id!r}")
    return sd_id


def escape_param_value(value: str) -> str:
    """Backslash-escape '\\', '"' and ']' in a PARAM-VALUE."""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("]", "\\]")


class StructuredDataConfig(BaseModel):
    """
    Configuration for the STRUCTURED-DATA element carrying event metadata.

    Attributes:
        sd_id (str): The SD-ID (default: "tracing-meta@64700").
        with_target (bool): Include the event target (default: False).
        with_module (bool): Include the event module (default: False).
        with_file_and_line (bool): Include the source file and line (default: False).
    """

    model_config = ConfigDict(frozen=True)

    sd_id: str = DEFAULT_SD_ID
    with_target: bool = False
    with_module: bool = False
    with_file_and_line: bool = False

    @field_validator("sd_id")
    @classmethod
    def check_sd_id(cls, v: str) -> str:
        return validate_sd_id(v)

    def params(self, metadata: EventMetadata) -> List[Tuple[str, str]]:
        """Return the enabled parameters that have a value, in wire order."""
        params = []
        if self.with_target and metadata.target is not None:
            params.append(("target", metadata.target))
        if self.with_module and metadata.module is not None:
            params.append(("module", metadata.module))
        if self.with_file_and_line:
            if metadata.file is not None:
                params.append(("file", metadata.file))
            if metadata.line is not None:
                params.append(("line", str(metadata.line)))
        return params

    def encode(self, metadata: Optional[EventMetadata]) -> bytes:
        """
        Render the STRUCTURED-DATA field for one event; NILVALUE when no
        enabled parameter has a value.
        """
        if metadata is None:
            return NILVALUE
        params = self.params(metadata)
        if not params:
            return NILVALUE
        body = " ".join(
            f'{name}="{escape_param_value(value)}"' for name, value in params
        )
        return f"[{self.sd_id} {body}]".encode("utf-8", "backslashreplace")


class Rfc5424Formatter(SyslogFormatter):
    """
    A syslog formatter that produces RFC 5424-conformant messages.
    """

    __slots__ = ("_hostname", "_app_name", "_proc_id", "_with_bom", "_structured_data")

    def __init__(
        self,
        hostname: Rfc5424Hostname,
        app_name: AppName,
        proc_id: ProcId,
        facility: Facility = Facility.USER,
        with_bom: bool = False,
        structured_data: Optional[StructuredDataConfig] = None,
    ):
        super().__init__(facility)
        object.__setattr__(self, "_hostname", hostname)
        object.__setattr__(self, "_app_name", app_name)
        object.__setattr__(self, "_proc_id", proc_id)
        object.__setattr__(self, "_with_bom", with_bom)
        object.__setattr__(self, "_structured_data", structured_data)

    @classmethod
    def default(cls) -> "Rfc5424Formatter":
        """
        Build a formatter from the environment. Never fails: fields that
        cannot be derived fall back to the NILVALUE.
        """
        return cls.builder().build()

    @classmethod
    def builder(cls) -> "Rfc5424Builder":
        return Rfc5424Builder()

    @property
    def hostname(self) -> Rfc5424Hostname:
        return self._hostname

    @property
    def app_name(self) -> AppName:
        return self._app_name

    @property
    def proc_id(self) -> ProcId:
        return self._proc_id

    @property
    def with_bom(self) -> bool:
        return self._with_bom

    @property
    def structured_data(self) -> Optional[StructuredDataConfig]:
        return self._structured_data

    def format(
        self,
        severity: Severity,
        message: str,
        timestamp: Optional[Timestamp] = None,
        metadata: Optional[EventMetadata] = None,
    ) -> bytes:
        buf = bytearray(
            f"<{self.priority(severity)}>1 {format_timestamp(timestamp)} ".encode(
                "ascii"
            )
        )
        buf += self._hostname.value
        buf += b" "
        buf += self._app_name.value
        buf += b" "
        buf += self._proc_id.value
        buf += b" - "
        if self._structured_data is None:
            buf += NILVALUE
        else:
            buf += self._structured_data.encode(metadata)
        buf += b" "

        # "If a syslog application encodes MSG in UTF-8, the string MUST
        # start with the Unicode byte order mask (BOM)"
        if self._with_bom:
            buf += BOM
        buf += message.encode("utf-8", "backslashreplace")
        return bytes(buf)

    def __repr__(self) -> str:
        return (
            f"Rfc5424Formatter(facility={self._facility!s}, hostname={self._hostname}, "
            f"app_name={self._app_name}, proc_id={self._proc_id}, "
            f"with_bom={self._with_bom}, structured_data={self._structured_data!r})"
        )


class Rfc5424Builder:
    """
    Fluent builder for Rfc5424Formatter.

    Setters that take raw values validate them immediately and raise a
    FieldValidationError. Fields left unset are derived from the environment
    by build(), which never fails.
    """

    def __init__(self):
        self.logger = logger
        self._facility = Facility.USER
        self._hostname: Optional[Rfc5424Hostname] = None
        self._app_name: Optional[AppName] = None
        self._proc_id: Optional[ProcId] = None
        self._with_bom = False
        self._structured_data: Optional[StructuredDataConfig] = None

    def facility(self, facility: Facility) -> "Rfc5424Builder":
        self._facility = Facility(facility)
        return self

    def hostname(
        self, hostname: Union[Rfc5424Hostname, str, bytes]
    ) -> "Rfc5424Builder":
        if not isinstance(hostname, Rfc5424Hostname):
            hostname = Rfc5424Hostname(hostname)
        self._hostname = hostname
        return self

    def app_name(self, app_name: Union[AppName, str, bytes]) -> "Rfc5424Builder":
        if not isinstance(app_name, AppName):
            app_name = AppName(app_name)
        self._app_name = app_name
        return self

    def proc_id(self, proc_id: Union[ProcId, str, bytes, int]) -> "Rfc5424Builder":
        if isinstance(proc_id, int):
            proc_id = str(proc_id)
        if not isinstance(proc_id, ProcId):
            proc_id = ProcId(proc_id)
        self._proc_id = proc_id
        return self

    def with_bom(self, with_bom: bool = True) -> "Rfc5424Builder":
        self._with_bom = with_bom
        return self

    def structured_data(
        self, structured_data: Optional[StructuredDataConfig]
    ) -> "Rfc5424Builder":
        """Enable (or, with None, disable) metadata as STRUCTURED-DATA."""
        self._structured_data = structured_data
        return self

    def build(self) -> Rfc5424Formatter:
        hostname = (
            self._hostname if self._hostname is not None else Rfc5424Hostname.default()
        )
        app_name = self._app_name if self._app_name is not None else AppName.default()
        proc_id = self._proc_id if self._proc_id is not None else ProcId.default()
        self.logger.debug(
            "Built RFC 5424 formatter",
            extra={
                "facility": str(self._facility),
                "hostname": str(hostname),
                "app_name": str(app_name),
                "proc_id": str(proc_id),
                "with_bom": self._with_bom,
                "sd_id": self._structured_data.sd_id
                if self._structured_data
                else None,
            },
        )
        return Rfc5424Formatter(
            hostname=hostname,
            app_name=app_name,
            proc_id=proc_id,
            facility=self._facility,
            with_bom=self._with_bom,
            structured_data=self._structured_data,
        )
