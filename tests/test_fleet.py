#!/usr/bin/env python3
"""
Tests for Fleet class.

Covers the per-company views built on the status evaluator:
1. Truck status cards - one status per tracked maintenance type
2. Needs-maintenance flags - list badges and dashboard counts
3. Upcoming list - soonest five scheduled services across all trucks
4. Recent list and dashboard stats
"""
from datetime import datetime, timezone

import pytest

from fleetmaint import Company, Fleet, MaintenanceRecord, Status, Truck

VIN_A = "1FUJGLDR5CLBP8834"
VIN_B = "3AKJHHDR7JSJV1234"


def rec(id, truck_id, maintenance_type, next_due, performed_at, mileage=0):
    return MaintenanceRecord(
        id=id,
        truck_id=truck_id,
        maintenance_type=maintenance_type,
        mileage=mileage,
        performed_at=performed_at,
        next_due_mileage=next_due,
    )


@pytest.fixture
def fleet():
    company = Company("c1", "Acme Hauling")
    trucks = [
        Truck("a", VIN_A, 2012, "Freightliner", "Cascadia", 50000),
        Truck("b", VIN_B, 2018, "Freightliner", "Cascadia", 120000),
    ]
    records = [
        rec("a-oil-old", "a", "Oil Change", 35000, "2024-06-01T00:00:00+00:00", 20000),
        rec("a-oil", "a", "Oil Change", 50000, "2024-12-01T00:00:00+00:00", 35000),
        rec("a-air", "a", "Air Filter Change", 80000, "2025-01-18T00:00:00+00:00", 50000),
        rec("b-fuel", "b", "Fuel Filter Change", 120800, "2025-01-15T00:00:00+00:00", 90800),
    ]
    return Fleet(company, trucks, records, "ops@acme.test")


class TestFleetLookup:
    """Tests for truck and record lookup."""

    def test_get_truck(self, fleet):
        assert fleet.get_truck("a").vin == VIN_A
        assert fleet.get_truck("missing") is None

    def test_records_for_truck_newest_first(self, fleet):
        ids = [r.id for r in fleet.records_for_truck("a")]
        assert ids == ["a-air", "a-oil", "a-oil-old"]

    def test_search_trucks(self, fleet):
        assert [t.id for t in fleet.search_trucks("2018")] == ["b"]
        assert [t.id for t in fleet.search_trucks("cascadia")] == ["a", "b"]
        assert [t.id for t in fleet.search_trucks("8834")] == ["a"]
        assert len(fleet.search_trucks("")) == 2


class TestTruckStatus:
    """Status cards for each tracked maintenance type."""

    def test_truck_a(self, fleet):
        statuses = {s.maintenance_type: s.status for s in fleet.truck_status(fleet.get_truck("a"))}
        assert statuses == {
            "Oil Change": Status.DUE,  # newest oil record: due at 50,000
            "Air Filter Change": Status.GOOD,
            "Fuel Filter Change": Status.UNKNOWN,
        }

    def test_truck_b(self, fleet):
        statuses = {s.maintenance_type: s.status for s in fleet.truck_status(fleet.get_truck("b"))}
        assert statuses["Fuel Filter Change"] == Status.SOON
        assert statuses["Oil Change"] == Status.UNKNOWN


class TestNeedsMaintenance:
    def test_flags(self, fleet):
        assert fleet.maintenance_flags() == {"a": True, "b": False}

    def test_trucks_needing_maintenance(self, fleet):
        assert [t.id for t in fleet.trucks_needing_maintenance()] == ["a"]


class TestUpcoming:
    def test_upcoming(self, fleet):
        upcoming = fleet.upcoming_maintenance()
        assert [(u.record.id, u.miles_remaining) for u in upcoming] == [
            ("b-fuel", 800),
            ("a-air", 30000),
        ]


class TestDashboard:
    def test_recent_maintenance(self, fleet):
        as_of = datetime(2025, 1, 20, tzinfo=timezone.utc)
        assert [r.id for r in fleet.recent_maintenance(as_of)] == ["a-air", "b-fuel"]

    def test_recent_window_is_seven_days(self, fleet):
        as_of = datetime(2025, 1, 23, tzinfo=timezone.utc)
        assert [r.id for r in fleet.recent_maintenance(as_of)] == ["a-air"]

    def test_dashboard_stats(self, fleet):
        as_of = datetime(2025, 1, 20, tzinfo=timezone.utc)
        assert fleet.dashboard_stats(as_of) == {
            "total_trucks": 2,
            "trucks_needing_maintenance": 1,
            "recent_maintenance_count": 2,
        }

    def test_empty_fleet(self):
        fleet = Fleet(Company("c1", "Empty"))
        assert fleet.upcoming_maintenance() == []
        assert fleet.dashboard_stats()["total_trucks"] == 0
