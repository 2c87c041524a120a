# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# ziggiz_courier_dropoff_syslog package
#
# This is the package initializer for the Ziggiz Courier Dropoff Syslog client.
# It provides RFC 3164 and RFC 5424 message formatters and transports for
# delivering syslog messages over UDP, TCP and Unix domain sockets.

# Local/package imports
from ziggiz_courier_dropoff_syslog.errors import (
    FieldValidationError,
    ResolutionError,
    SyslogError,
    TransportError,
)
from ziggiz_courier_dropoff_syslog.facility import Facility, Severity, pri
from ziggiz_courier_dropoff_syslog.format.rfc3164 import Rfc3164Formatter
from ziggiz_courier_dropoff_syslog.format.rfc5424 import (
    Rfc5424Formatter,
    StructuredDataConfig,
)
from ziggiz_courier_dropoff_syslog.handler import SyslogHandler

__all__ = [
    "Facility",
    "FieldValidationError",
    "ResolutionError",
    "Rfc3164Formatter",
    "Rfc5424Formatter",
    "Severity",
    "StructuredDataConfig",
    "SyslogError",
    "SyslogHandler",
    "TransportError",
    "pri",
]
