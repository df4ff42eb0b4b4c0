#!/usr/bin/env python3
"""Tests for Truck class."""

from fleetmaint import Truck


class TestTruck:
    """Tests for Truck class."""

    def test_name_property(self):
        """Name property returns year make model."""
        truck = Truck("t1", "1HGBH41JXMN109186", 2019, "Freightliner", "Cascadia", 120000)
        assert truck.name == "2019 Freightliner Cascadia"

    def test_attributes(self):
        truck = Truck(
            "t1", "1HGBH41JXMN109186", 2019, "Volvo", "VNL", 5000, "ABC-123", "spare"
        )
        assert truck.id == "t1"
        assert truck.vin == "1HGBH41JXMN109186"
        assert truck.year == 2019
        assert truck.current_mileage == 5000
        assert truck.license_plate == "ABC-123"
        assert truck.notes == "spare"

    def test_missing_mileage_defaults_to_zero(self):
        truck = Truck("t1", "1HGBH41JXMN109186", 2019, "Volvo", "VNL", None)
        assert truck.current_mileage == 0


class TestRecordMileage:
    """Mileage only ever goes up."""

    def test_higher_reading_raises_mileage(self):
        truck = Truck("t1", "1HGBH41JXMN109186", 2019, "Volvo", "VNL", 50000)
        assert truck.record_mileage(51000) is True
        assert truck.current_mileage == 51000

    def test_lower_reading_is_ignored(self):
        truck = Truck("t1", "1HGBH41JXMN109186", 2019, "Volvo", "VNL", 50000)
        assert truck.record_mileage(40000) is False
        assert truck.current_mileage == 50000

    def test_equal_reading_is_no_change(self):
        truck = Truck("t1", "1HGBH41JXMN109186", 2019, "Volvo", "VNL", 50000)
        assert truck.record_mileage(50000) is False
        assert truck.current_mileage == 50000
