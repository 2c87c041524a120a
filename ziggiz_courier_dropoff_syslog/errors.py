# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Exception hierarchy for the syslog client
#
# Errors fall into three groups:
#   - FieldValidationError: a hostname, app-name, proc-id or tag violates its
#     charset or length constraint. Raised only while a formatter is built.
#   - ResolutionError: no default could be derived for a field that has no
#     NILVALUE fallback (the RFC 3164 hostname and tag).
#   - TransportError: any OS or network failure while opening a socket or
#     sending a message. The original exception is kept as __cause__.
#
# New subclasses may be added over time; callers should catch SyslogError
# as the catch-all.

# Standard library imports
from typing import Optional, Union


class SyslogError(Exception):
    """
    Base class for every error raised by ziggiz_courier_dropoff_syslog.
    """


class FieldValidationError(SyslogError, ValueError):
    """
    Raised when a syslog field value violates its constraint.

    Attributes:
        field (str): Name of the offending field (e.g. "hostname").
        value (bytes): The rejected value.
    """

    field = "field"
    rfc = ""

    def __init__(self, value: Union[bytes, str]):
        if isinstance(value, str):
            value = value.encode("utf-8")
        self.value = value
        if self.rfc:
            message = f"{value!r} is not an {self.rfc}-compliant {self.field}"
        else:
            message = f"{value!r} is not a valid {self.field}"
        super().__init__(message)


class BadHostnameError(FieldValidationError):
    """Non-compliant RFC 3164 hostname."""

    field = "hostname"
    rfc = "RFC 3164"


class BadRfc5424HostnameError(FieldValidationError):
    """Non-compliant RFC 5424 hostname."""

    field = "hostname"
    rfc = "RFC 5424"


class BadAppNameError(FieldValidationError):
    """Non-compliant RFC 5424 APP-NAME."""

    field = "app-name"
    rfc = "RFC 5424"


class BadProcIdError(FieldValidationError):
    """Non-compliant RFC 5424 PROCID."""

    field = "proc-id"
    rfc = "RFC 5424"


class BadTagError(FieldValidationError):
    """Non-compliant RFC 3164 TAG."""

    field = "tag"
    rfc = "RFC 3164"


class ResolutionError(SyslogError):
    """
    Raised when a default field value cannot be derived from the environment
    and the field has no NILVALUE to fall back on.
    """


class NoHostnameError(ResolutionError):
    """Neither a hostname nor a local IP address could be determined."""


class NoTagError(ResolutionError):
    """The current executable does not yield an RFC 3164-compliant tag."""


class TransportError(SyslogError):
    """
    Raised when a transport cannot be opened or cannot send a message.

    Attributes:
        source (Optional[BaseException]): The underlying OS/network error.
    """

    def __init__(self, message: str, source: Optional[BaseException] = None):
        self.source = source
        if source is not None:
            message = f"{message}: {source}"
        super().__init__(message)
