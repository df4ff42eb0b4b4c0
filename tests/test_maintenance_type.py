#!/usr/bin/env python3
"""Tests for MaintenanceType enum."""
import pytest

from fleetmaint import MaintenanceType, TRACKED_TYPES


class TestMaintenanceType:
    """Tests for MaintenanceType lookup and intervals."""

    def test_six_types(self):
        assert [t.value for t in MaintenanceType] == [
            "Oil Change",
            "Air Filter Change",
            "Fuel Filter Change",
            "Tire Rotation",
            "Brake Service",
            "Other",
        ]

    def test_parse_is_case_insensitive(self):
        assert MaintenanceType.parse("oil change") == MaintenanceType.OIL_CHANGE
        assert MaintenanceType.parse("  Brake Service ") == MaintenanceType.BRAKE_SERVICE

    def test_parse_unknown_raises(self):
        with pytest.raises(ValueError):
            MaintenanceType.parse("Wash")

    def test_default_intervals(self):
        assert MaintenanceType.OIL_CHANGE.default_interval == 15000
        assert MaintenanceType.AIR_FILTER_CHANGE.default_interval == 30000
        assert MaintenanceType.FUEL_FILTER_CHANGE.default_interval == 30000
        assert MaintenanceType.TIRE_ROTATION.default_interval is None
        assert MaintenanceType.OTHER.default_interval is None

    def test_tracked_types(self):
        assert TRACKED_TYPES == [
            MaintenanceType.OIL_CHANGE,
            MaintenanceType.AIR_FILTER_CHANGE,
            MaintenanceType.FUEL_FILTER_CHANGE,
        ]
