# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Syslog transports
#
# A transport moves a finished message buffer to a syslog daemon:
#   - udp: one message per datagram (default localhost:514)
#   - tcp: newline-delimited stream (default localhost:514)
#   - unix: one message per datagram on a Unix socket (default /dev/log)
#   - unix_stream: newline-delimited Unix stream socket (default /dev/log)
