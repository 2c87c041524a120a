# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Syslog message formatters
#
# This subpackage contains the validated field value types shared by the
# formatters and the two RFC-specific formatters:
#   - rfc3164: BSD syslog, <PRI>Mon _d HH:MM:SS HOSTNAME TAG[PID]: MSG
#   - rfc5424: <PRI>1 TIMESTAMP HOSTNAME APP-NAME PROCID MSGID SD MSG
