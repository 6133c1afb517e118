"""Lazy objects bound to one user or one course.

They hold only the facade and an ID; every method is a call on the facade.
Subclass them, or pass any callable with the same signature, to
`Valence(user_factory=..., course_factory=...)` to add your own helpers:

    ```python
    class MyCourse(ValenceCourse):
        def archive(self):
            ...

    valence = Valence(course_factory=MyCourse)
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from .blocks import (
        CourseOffering,
        EnrollmentData,
        GroupCategoryData,
        LegalPreferredNames,
        SectionData,
        UserData,
    )
    from .client import Valence


class ValenceUser:
    """A Brightspace user, identified by `user_id`."""

    def __init__(self, valence: Valence, user_id: int) -> None:
        self.valence = valence
        self.user_id = user_id

    def info(self) -> Optional[UserData]:
        return self.valence.get_user(self.user_id)

    def names(self) -> Optional[LegalPreferredNames]:
        return self.valence.get_user_names(self.user_id)

    def profile(self) -> Optional[dict]:
        return self.valence.get_user_profile(self.user_id)

    def enrollment(self, org_unit_id: int) -> Optional[EnrollmentData]:
        return self.valence.get_enrollment(org_unit_id, self.user_id)

    def enroll(self, org_unit_id: int, role_id: Any) -> Optional[EnrollmentData]:
        return self.valence.enroll_user(org_unit_id, self.user_id, role_id)

    def unenroll(self, org_unit_id: int) -> None:
        self.valence.unenroll_user(self.user_id, org_unit_id)

    def picture(self, filepath: str) -> bool:
        return self.valence.get_user_picture(self.user_id, filepath)

    def upload_picture(self, filepath: str) -> bool:
        return self.valence.upload_user_picture(self.user_id, filepath)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ValenceUser) and other.user_id == self.user_id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.user_id))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(user_id={self.user_id!r})"


class ValenceCourse:
    """A course offering, identified by `org_unit_id`."""

    def __init__(self, valence: Valence, org_unit_id: int) -> None:
        self.valence = valence
        self.org_unit_id = org_unit_id

    def info(self) -> Optional[CourseOffering]:
        return self.valence.get_course_offering(self.org_unit_id)

    def delete(self) -> None:
        self.valence.delete_course_offering(self.org_unit_id)

    def enroll_student(self, user_id: int) -> Optional[EnrollmentData]:
        return self.valence.enroll_student(self.org_unit_id, user_id)

    def enroll_instructor(self, user_id: int) -> Optional[EnrollmentData]:
        return self.valence.enroll_instructor(self.org_unit_id, user_id)

    def unenroll(self, user_id: int) -> None:
        self.valence.unenroll_user(user_id, self.org_unit_id)

    def sections(self) -> List[SectionData]:
        return self.valence.get_course_sections(self.org_unit_id)

    def group_categories(self) -> List[GroupCategoryData]:
        return self.valence.get_course_group_categories(self.org_unit_id)

    def image(self, filepath: str) -> bool:
        return self.valence.get_course_image(self.org_unit_id, filepath)

    def upload_image(self, filepath: str, name: str) -> bool:
        return self.valence.upload_course_image(self.org_unit_id, filepath, name)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, ValenceCourse) and other.org_unit_id == self.org_unit_id
        )

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.org_unit_id))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(org_unit_id={self.org_unit_id!r})"
