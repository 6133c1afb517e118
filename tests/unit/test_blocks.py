"""Tests for the dictionary-like records in valencehelper.blocks."""

import json

import pytest
from valencehelper.blocks import (
    Block,
    CourseOffering,
    OrgUnitType,
    Permissions,
    Role,
    build_many,
)

COURSE = {
    "Identifier": "12345",
    "Name": "Introduction to Biology",
    "Code": "BIO-101-F24",
    "IsActive": True,
    "Path": "/content/enforced/12345-BIO-101-F24/",
    "StartDate": None,
    "EndDate": "2024-12-20T00:00:00.000Z",
    "CourseTemplate": {"Identifier": "6610", "Name": "BIO-101", "Code": "BIO-101"},
    "Semester": {"Identifier": "6620", "Name": "Fall 2024", "Code": "F24"},
    "Department": None,
    "Description": {"Text": "Cells and such", "Html": "<p>Cells and such</p>"},
    "CanSelfRegister": False,
}


class TestBlockConstruction:
    def test_keys_are_copied_unchanged(self) -> None:
        """Every key of the response ends up in the record with its value."""
        record = CourseOffering(COURSE)

        assert set(record) == set(COURSE)
        for key, value in COURSE.items():
            assert record[key] == value
            assert type(record[key]) is type(value)

    def test_skipped_keys_are_dropped(self) -> None:
        """Keys listed in skip are not copied."""
        record = Block(COURSE, skip=["Description", "Semester"])

        assert set(record) == set(COURSE) - {"Description", "Semester"}

    def test_skip_of_unknown_key_is_ignored(self) -> None:
        record = Block({"a": 1}, skip=["b"])

        assert record == {"a": 1}

    def test_key_order_is_preserved(self) -> None:
        raw = {"z": 1, "a": 2, "m": 3}

        assert list(Block(raw)) == ["z", "a", "m"]

    def test_attribute_access(self) -> None:
        """Fields can be read as attributes using the Valence spelling."""
        record = CourseOffering(COURSE)

        assert record.Identifier == "12345"
        assert record.Semester["Code"] == "F24"

    def test_missing_attribute_raises_attribute_error(self) -> None:
        record = Role({"Identifier": "110"})

        with pytest.raises(AttributeError, match="DisplayName"):
            record.DisplayName  # noqa: B018

        assert getattr(record, "DisplayName", None) is None

    def test_keys_named_like_dict_methods(self) -> None:
        """Such keys are reachable by item access; attributes give the method."""
        record = Block({"items": [1, 2], "get": "value"})

        assert record["items"] == [1, 2]
        assert record["get"] == "value"
        assert callable(record.items)
        assert record.to_dict() == {"items": [1, 2], "get": "value"}

    def test_unknown_fields_are_kept(self) -> None:
        """Parsing does not depend on the documented field list."""
        record = Role({"Identifier": "110", "SomethingNew": [1, 2]})

        assert record.SomethingNew == [1, 2]
        assert "SomethingNew" not in record.summary()


class TestToDict:
    def test_round_trip(self) -> None:
        """Converting back to a plain dict reproduces the input tree."""
        record = Block(COURSE)

        plain = record.to_dict()

        assert plain == COURSE
        assert type(plain) is dict
        assert json.loads(json.dumps(plain)) == COURSE

    def test_nested_records_are_converted(self) -> None:
        inner = Block({"CanEdit": True})
        outer = Block({"Permissions": inner, "Items": [Block({"x": 1}), 2]})

        plain = outer.to_dict()

        assert plain == {"Permissions": {"CanEdit": True}, "Items": [{"x": 1}, 2]}
        assert type(plain["Permissions"]) is dict
        assert type(plain["Items"][0]) is dict

    def test_repr_is_json(self) -> None:
        record = Block({"Name": "Intro", "Identifier": 42})

        assert json.loads(repr(record)) == {"Name": "Intro", "Identifier": 42}


class TestOrgUnitType:
    def test_permissions_are_nested(self) -> None:
        """CanDelete and CanEdit are folded into a Permissions record."""
        outype = OrgUnitType(
            {
                "Id": 3,
                "Code": "Course Offering",
                "Name": "Course Offering",
                "Description": "",
                "SortOrder": 0,
                "CanDelete": False,
                "CanEdit": True,
            }
        )

        assert "CanDelete" not in outype
        assert isinstance(outype.Permissions, Permissions)
        assert outype.Permissions == {"CanDelete": False, "CanEdit": True}
        assert outype.to_dict()["Permissions"] == {"CanDelete": False, "CanEdit": True}


class TestBuildMany:
    def test_order_and_type(self) -> None:
        raw = [{"Identifier": str(i), "DisplayName": f"Role {i}"} for i in range(5)]

        roles = build_many(raw, Role)

        assert [role.Identifier for role in roles] == ["0", "1", "2", "3", "4"]
        assert all(isinstance(role, Role) for role in roles)

    def test_none_gives_empty_list(self) -> None:
        assert build_many(None, Role) == []


class TestSummary:
    def test_summary_contains_documented_fields_only(self) -> None:
        record = CourseOffering({**COURSE, "Extra": 1})

        summary = record.summary()

        assert summary["Code"] == "BIO-101-F24"
        assert "Extra" not in summary
