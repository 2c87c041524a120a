# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Tests for the facility and severity model

# Third-party imports
import pytest

# Local/package imports
from ziggiz_courier_dropoff_syslog.facility import Facility, Severity, pri


class TestPriority:
    """Tests for PRI computation."""

    @pytest.mark.unit
    def test_user_info(self):
        assert pri(Facility.USER, Severity.INFO) == 14

    @pytest.mark.unit
    def test_all_pairs(self):
        """Every facility/severity pair or-s into the 0-191 range."""
        for facility in Facility:
            for severity in Severity:
                value = pri(facility, severity)
                assert value == int(facility) | int(severity)
                assert value == int(facility) + int(severity)
                assert 0 <= value <= 191

    @pytest.mark.unit
    def test_extremes(self):
        assert pri(Facility.KERN, Severity.EMERG) == 0
        assert pri(Facility.LOCAL7, Severity.DEBUG) == 191


class TestFacility:
    """Tests for the Facility enumeration."""

    @pytest.mark.unit
    def test_codes(self):
        assert len(Facility) == 24
        assert [int(f) for f in Facility] == list(range(0, 192, 8))
        assert Facility.default() is Facility.USER
        assert Facility.USER == 8
        assert Facility.LOCAL0 == 128

    @pytest.mark.unit
    def test_str(self):
        assert str(Facility.FTP) == "LOG_FTP"
        assert str(Facility.LOCAL3) == "LOG_LOCAL3"

    @pytest.mark.unit
    def test_from_name(self):
        assert Facility.from_name("local0") is Facility.LOCAL0
        assert Facility.from_name("LOG_DAEMON") is Facility.DAEMON
        assert Facility.from_name("Auth") is Facility.AUTH

    @pytest.mark.unit
    def test_from_name_invalid(self):
        with pytest.raises(ValueError, match="Invalid facility"):
            Facility.from_name("local8")


class TestSeverity:
    """Tests for the Severity enumeration."""

    @pytest.mark.unit
    def test_codes(self):
        assert [s.name for s in Severity] == [
            "EMERG",
            "ALERT",
            "CRIT",
            "ERR",
            "WARNING",
            "NOTICE",
            "INFO",
            "DEBUG",
        ]
        assert [int(s) for s in Severity] == list(range(8))

    @pytest.mark.unit
    def test_str_and_from_name(self):
        assert str(Severity.WARNING) == "LOG_WARNING"
        assert Severity.from_name("err") is Severity.ERR
        assert Severity.from_name("LOG_DEBUG") is Severity.DEBUG
        with pytest.raises(ValueError, match="Invalid severity"):
            Severity.from_name("verbose")
