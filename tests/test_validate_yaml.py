#!/usr/bin/env python3
"""Tests for validate_yaml fleet file checks."""

from validate_yaml import load_schema, main, validate_fleet_file

VALID = """
company:
  id: c1
  name: Acme Hauling
account:
  email: ops@acme.test
  passwordHash: hash
trucks:
  - id: t1
    vin: 1FUJGLDR5CLBP8834
    year: 2012
    make: Freightliner
    model: Cascadia
    currentMileage: 50000
maintenanceRecords:
  - id: r1
    truckId: t1
    maintenanceType: Oil Change
    mileage: 35000
    nextDueMileage: 50000
    performedAt: '2024-12-01T00:00:00+00:00'
"""


def write(tmp_path, text, name="fleet.yaml"):
    path = tmp_path / name
    path.write_text(text)
    return path


class TestLoadSchema:
    """Tests for load_schema function."""

    def test_has_expected_structure(self):
        schema = load_schema()
        assert isinstance(schema, dict)
        assert "company" in schema["properties"]
        assert "trucks" in schema["properties"]


class TestValidateFleetFile:
    """Tests for validate_fleet_file function."""

    def test_valid_returns_no_errors(self, tmp_path):
        assert validate_fleet_file(write(tmp_path, VALID), load_schema()) == []

    def test_unquoted_timestamp_accepted(self, tmp_path):
        text = VALID.replace("'2024-12-01T00:00:00+00:00'", "2024-12-01T00:00:00Z")
        assert validate_fleet_file(write(tmp_path, text), load_schema()) == []

    def test_short_vin(self, tmp_path):
        text = VALID.replace("1FUJGLDR5CLBP8834", "SHORT")
        errors = validate_fleet_file(write(tmp_path, text), load_schema())
        assert len(errors) == 1
        assert errors[0].startswith("Schema validation error at trucks.0.vin")

    def test_reports_every_schema_error(self, tmp_path):
        text = VALID.replace("1FUJGLDR5CLBP8834", "SHORT").replace("Oil Change", "Wash")
        errors = validate_fleet_file(write(tmp_path, text), load_schema())
        assert len(errors) == 2
        assert "maintenanceRecords.0.maintenanceType" in errors[0]

    def test_dangling_truck_reference(self, tmp_path):
        text = VALID.replace("truckId: t1", "truckId: t9")
        errors = validate_fleet_file(write(tmp_path, text), load_schema())
        assert errors == ["Record 0 refers to unknown truck t9"]

    def test_duplicate_record_id(self, tmp_path):
        text = VALID + """\
  - id: r1
    truckId: t1
    maintenanceType: Other
    mileage: 36000
    performedAt: '2024-12-02T00:00:00+00:00'
"""
        errors = validate_fleet_file(write(tmp_path, text), load_schema())
        assert errors == ["Duplicate record id r1"]

    def test_yaml_parse_error(self, tmp_path):
        errors = validate_fleet_file(write(tmp_path, "company: [unclosed\n"), load_schema())
        assert errors[0].startswith("YAML parse error")


class TestMain:
    def test_data_dir(self, tmp_path, capsys):
        write(tmp_path, VALID, "a.yaml")
        assert main(["--data-dir", str(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert "OK: a.yaml" in out
        assert "1 of 1 files valid" in out

    def test_failure_exit_code(self, tmp_path, capsys):
        path = write(tmp_path, VALID.replace("truckId: t1", "truckId: t9"))
        assert main([str(path)]) == 1
        assert "FAIL: fleet.yaml" in capsys.readouterr().out

    def test_missing_dir(self, tmp_path):
        assert main(["--data-dir", str(tmp_path / "nope")]) == 1
