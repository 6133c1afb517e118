"""Typed records for Valence API responses.

Every record is a `dict` built from the JSON object the API returned, so
keys keep their original Valence spelling (`Identifier`, `OrgUnitId`, ...).
Keys can also be read as attributes:

    >>> role = Role({"Identifier": "110", "DisplayName": "Student"})
    >>> role.DisplayName
    'Student'

Attribute access only falls back to the keys when normal lookup fails, so a
key named like a `dict` method (`items`, `keys`, `get`, `copy`, ...) reads
back as the method. Use item access for those:

    >>> block = Block({"items": [1, 2]})
    >>> block["items"]
    [1, 2]

The `_fields_` list on each class documents the shape the API returns. It
is only used for `summary()`; parsing never looks at it, so unknown keys
are kept and missing keys are simply absent.
"""

import json
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

B = TypeVar("B", bound="Block")

__all__ = [
    "Block",
    "build_many",
    "Organization",
    "WhoAmIUser",
    "ProductVersions",
    "Role",
    "Permissions",
    "OrgUnitType",
    "CourseOffering",
    "EnrollmentData",
    "SectionData",
    "SectionPropertyData",
    "GroupCategoryData",
    "GroupData",
    "UserData",
    "LegalPreferredNames",
    "BrightspaceDataSetReportInfo",
]


class Block(dict):
    """Dictionary-like record built from a single JSON object."""

    _fields_: List[str] = []

    def __init__(self, response: Dict[str, Any], skip: Iterable[str] = ()):
        skipped = set(skip)
        super().__init__(
            (key, value) for key, value in response.items() if key not in skipped
        )

    def __getattr__(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__!r} record has no field {name!r}"
            ) from None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record, and any nested records, to plain dictionaries.

        Returns:
            A plain `dict` suitable for `json.dumps`.
        """
        return {key: _plain(value) for key, value in self.items()}

    def summary(self) -> Dict[str, Any]:
        """Return only the documented fields of this record."""
        return {name: self.get(name) for name in self._fields_ if name in self}

    def __repr__(self) -> str:
        return json.dumps(
            self.to_dict(), sort_keys=False, indent=2, separators=(",", ": ")
        )


def _plain(value: Any) -> Any:
    if isinstance(value, Block):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def build_many(response: Optional[List[Dict[str, Any]]], cls: Type[B]) -> List[B]:
    """Map a JSON array to a list of `cls` records, keeping the order."""
    return [cls(item) for item in response or []]


class Organization(Block):
    _fields_ = ["Identifier", "Name", "TimeZone"]


class WhoAmIUser(Block):
    _fields_ = [
        "Identifier",
        "FirstName",
        "LastName",
        "UniqueName",
        "ProfileIdentifier",
        "Pronouns",
    ]


class ProductVersions(Block):
    _fields_ = ["ProductCode", "LatestVersion", "SupportedVersions"]


class Role(Block):
    _fields_ = [
        "Identifier",
        "DisplayName",
        "Code",
        "Description",
        "RoleAlias",
        "IsCascading",
        "AccessFutureCourses",
        "AccessInactiveCourses",
        "AccessPastCourses",
        "ShowInGrades",
        "ShowInUserProgress",
        "InClassList",
    ]


class Permissions(Block):
    _fields_ = ["CanDelete", "CanEdit"]


class OrgUnitType(Block):
    """Org unit type, with its edit/delete flags folded into `Permissions`."""

    _fields_ = ["Id", "Code", "Name", "Description", "SortOrder", "Permissions"]

    def __init__(self, response: Dict[str, Any], skip: Iterable[str] = ()):
        super().__init__(response, skip=("CanDelete", "CanEdit", *skip))
        self["Permissions"] = Permissions(
            {
                "CanDelete": response.get("CanDelete"),
                "CanEdit": response.get("CanEdit"),
            }
        )


class CourseOffering(Block):
    _fields_ = [
        "Identifier",
        "Name",
        "Code",
        "IsActive",
        "Path",
        "StartDate",
        "EndDate",
        "CourseTemplate",
        "Semester",
        "Department",
        "Description",
        "CanSelfRegister",
    ]


class EnrollmentData(Block):
    _fields_ = ["OrgUnitId", "UserId", "RoleId", "IsCascading"]


class SectionData(Block):
    _fields_ = ["SectionId", "Name", "Code", "Description", "Enrollments"]


class SectionPropertyData(Block):
    _fields_ = [
        "EnrollmentStyle",
        "EnrollmentQuantity",
        "AutoEnroll",
        "RandomizeEnrollments",
    ]


class GroupCategoryData(Block):
    _fields_ = [
        "GroupCategoryId",
        "Name",
        "Description",
        "EnrollmentStyle",
        "EnrollmentQuantity",
        "MaxUsersPerGroup",
        "AutoEnroll",
        "RandomizeEnrollments",
        "Groups",
        "AllocateAfterExpiry",
        "SelfEnrollmentExpiryDate",
        "RestrictedByOrgUnitId",
    ]


class GroupData(Block):
    _fields_ = ["GroupId", "Name", "Code", "Description", "Enrollments"]


class UserData(Block):
    _fields_ = [
        "OrgId",
        "UserId",
        "FirstName",
        "MiddleName",
        "LastName",
        "UserName",
        "ExternalEmail",
        "OrgDefinedId",
        "UniqueIdentifier",
        "Activation",
        "LastAccessedDate",
        "Pronouns",
    ]


class LegalPreferredNames(Block):
    _fields_ = [
        "LegalFirstName",
        "LegalLastName",
        "PreferredFirstName",
        "PreferredLastName",
    ]


class BrightspaceDataSetReportInfo(Block):
    _fields_ = [
        "PluginId",
        "Name",
        "Description",
        "FullDataSet",
        "CreatedDate",
        "DownloadLink",
        "DownloadSize",
        "Version",
        "PreviousDataSets",
        "QueuedForProcessingDate",
    ]
