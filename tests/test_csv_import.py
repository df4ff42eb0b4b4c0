#!/usr/bin/env python3
"""Tests for CSV truck import parsing and validation."""

from fleetmaint.csv_import import load_csv, parse_csv_text, validate_rows

HEADER = "vin,year,make,model,current_mileage,license_plate,notes\n"


class TestParseCsv:
    """Tests for parse_csv_text."""

    def test_valid_rows(self):
        text = HEADER + (
            "1FUJGLDR5CLBP8834,2018,Freightliner,Cascadia,120000,ABC-123,\n"
            "3AKJHHDR7JSJV1234,2020,Volvo,VNL,5000,XYZ-9,new tires\n"
        )
        results = parse_csv_text(text)
        assert len(results.valid) == 2
        assert results.invalid == []
        first = results.valid[0]
        assert first.row == 1
        assert first.data["year"] == 2018
        assert first.data["current_mileage"] == 120000
        assert "notes" not in first.data
        assert results.valid[1].data["notes"] == "new tires"

    def test_missing_fields(self):
        text = HEADER + "1FUJGLDR5CLBP8834,2018,,Cascadia,,ABC-123,\n"
        results = parse_csv_text(text)
        assert results.valid == []
        assert results.invalid[0].errors == [
            "Missing required fields: make, current_mileage"
        ]

    def test_invalid_values(self):
        text = HEADER + "SHORTVIN,1850,Mack,Anthem,-10,P-1,\n"
        results = parse_csv_text(text)
        row = results.invalid[0]
        assert row.row == 1
        assert "VIN must be 17 characters" in row.errors
        assert "Mileage cannot be negative" in row.errors
        assert any(e.startswith("Year must be between 1900") for e in row.errors)

    def test_mixed_rows_keep_numbering(self):
        text = HEADER + (
            "SHORTVIN,2018,Mack,Anthem,10,P-1,\n"
            "\n"
            "1FUJGLDR5CLBP8834,2018,Mack,Anthem,10,P-2,\n"
        )
        results = parse_csv_text(text)
        assert [r.row for r in results.invalid] == [1]
        assert [r.row for r in results.valid] == [2]
        assert results.total == 2

    def test_header_names_normalized(self):
        text = (
            "VIN,Year,Make,Model,Current Mileage,License Plate\n"
            "1FUJGLDR5CLBP8834,2018,Mack,Anthem,10,P-2\n"
        )
        assert len(parse_csv_text(text).valid) == 1

    def test_unknown_columns_dropped(self):
        rows = [
            {"vin": "1FUJGLDR5CLBP8834", "year": "2018", "make": "Mack", "model": "Anthem",
             "current_mileage": "10", "license_plate": "P-2", "color": "red"}
        ]
        results = validate_rows(rows)
        assert "color" not in results.valid[0].data


class TestLoadCsv:
    def test_reads_file_with_bom(self, tmp_path):
        path = tmp_path / "trucks.csv"
        path.write_bytes(
            ("\ufeff" + HEADER + "1FUJGLDR5CLBP8834,2018,Mack,Anthem,10,P-2,\n").encode("utf-8")
        )
        results = load_csv(path)
        assert len(results.valid) == 1
