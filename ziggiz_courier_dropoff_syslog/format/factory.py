# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Formatter factory for creating syslog formatters by name
#
# Supported format types:
#   - rfc5424: Rfc5424Formatter, <PRI>1 TIMESTAMP HOST APP PROCID - SD MSG
#   - rfc3164: Rfc3164Formatter, <PRI>Mon _d HH:MM:SS HOST TAG[PID]: MSG

# Standard library imports
import logging

from typing import Optional

# Local/package imports
from ziggiz_courier_dropoff_syslog.facility import Facility
from ziggiz_courier_dropoff_syslog.format.base import SyslogFormatter
from ziggiz_courier_dropoff_syslog.format.rfc3164 import Rfc3164Formatter
from ziggiz_courier_dropoff_syslog.format.rfc5424 import (
    Rfc5424Formatter,
    StructuredDataConfig,
)

FORMAT_TYPES = ("rfc5424", "rfc3164")


class FormatterFactory:
    """
    Factory class for creating syslog formatters.

    Fields passed as None are derived from the environment, exactly as the
    builders do.
    """

    logger = logging.getLogger("ziggiz_courier_dropoff_syslog.format.factory")

    @staticmethod
    def create_formatter(
        format_type: str = "rfc5424",
        facility: Facility = Facility.USER,
        hostname: Optional[str] = None,
        app_name: Optional[str] = None,
        proc_id: Optional[str] = None,
        with_bom: bool = False,
        structured_data: Optional[StructuredDataConfig] = None,
        tag: Optional[str] = None,
        pid: Optional[int] = None,
        include_pid: bool = True,
        escape_unicode: bool = False,
    ) -> SyslogFormatter:
        """
        Create a formatter instance of the specified type.

        RFC 5424 options (app_name, proc_id, with_bom, structured_data) are
        ignored for RFC 3164 and vice versa (tag, pid, include_pid,
        escape_unicode).

        Args:
            format_type: The type of formatter ("rfc5424" or "rfc3164")
            facility: Facility for every message
            hostname: HOSTNAME override
            app_name: RFC 5424 APP-NAME override
            proc_id: RFC 5424 PROCID override
            with_bom: Prefix RFC 5424 MSG with a UTF-8 BOM
            structured_data: RFC 5424 metadata STRUCTURED-DATA configuration
            tag: RFC 3164 TAG override
            pid: RFC 3164 process id override (default: this process)
            include_pid: Append "[pid]: " to the RFC 3164 TAG
            escape_unicode: Write RFC 3164 message text as \\u{hex} escapes

        Returns:
            A ready-to-use formatter

        Raises:
            ValueError: If an invalid format type is specified
            FieldValidationError: If an override violates its field's constraint
            ResolutionError: If an RFC 3164 default cannot be derived
        """
        format_type = format_type.lower()
        FormatterFactory.logger.debug(
            "Creating formatter instance", extra={"format_type": format_type}
        )

        if format_type == "rfc5424":
            builder5424 = (
                Rfc5424Formatter.builder()
                .facility(facility)
                .with_bom(with_bom)
                .structured_data(structured_data)
            )
            if hostname is not None:
                builder5424.hostname(hostname)
            if app_name is not None:
                builder5424.app_name(app_name)
            if proc_id is not None:
                builder5424.proc_id(proc_id)
            return builder5424.build()
        elif format_type == "rfc3164":
            builder3164 = (
                Rfc3164Formatter.builder()
                .facility(facility)
                .escape_unicode(escape_unicode)
            )
            if hostname is not None:
                builder3164.hostname(hostname)
            if tag is not None:
                builder3164.tag(tag)
            if not include_pid:
                builder3164.pid(None)
            elif pid is not None:
                builder3164.pid(pid)
            return builder3164.build()
        else:
            FormatterFactory.logger.error(
                "Invalid format type specified",
                extra={"format_type": format_type, "error": "invalid_type"},
            )
            raise ValueError(
                f"Invalid format type: {format_type}. "
                f"Must be one of: {', '.join(FORMAT_TYPES)}"
            )
