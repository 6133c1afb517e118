"""The `Valence` facade: one method per Brightspace API operation.

Each method builds a route, picks a verb, optionally assembles a JSON body,
sends it through the signer and the transport, and maps the answer to a
record from `valencehelper.blocks`.

Quick Start:
    ```python
    from valencehelper import Valence

    valence = Valence()  # reads D2L_VALENCE_* from the environment
    print(valence.whoami())

    course_id = valence.get_org_unit_id_from_offering_code("BIO-101-F24")
    user_id = valence.get_user_id_from_username("jdoe")
    valence.enroll_student(course_id, user_id)
    ```
"""

import logging
import sys
from typing import Callable, Type
from urllib.parse import quote

import requests
from typing_extensions import (
    Any,
    Dict,
    List,
    Optional,
    TypeVar,
    Union,
    deprecated,
)

from ._core._log import LogMode, RequestLog
from ._core._request import ApiResponse, RequestConfig, Transport
from .auth import IdKeySigner, RequestSigner
from .blockarrays import BrightspaceDataSetReportInfoArray, ProductVersionArray
from .blocks import (
    Block,
    CourseOffering,
    EnrollmentData,
    GroupCategoryData,
    GroupData,
    LegalPreferredNames,
    Organization,
    OrgUnitType,
    ProductVersions,
    Role,
    SectionData,
    SectionPropertyData,
    UserData,
    WhoAmIUser,
    build_many,
)
from .config import ValenceConfig
from .exceptions import ResponseError
from .resources import ValenceCourse, ValenceUser

logger = logging.getLogger(__name__)

VERSION_LP = "1.30"
VERSION_LE = "1.52"

LP = f"/d2l/api/lp/{VERSION_LP}"

# org unit type codes used by the derived lookups
COURSE_OFFERING = "Course Offering"
SEMESTER = "Semester"
COURSE_TEMPLATE = "Course Template"
DEPARTMENT = "Department"

STUDENT = "Student"
INSTRUCTOR = "Instructor"

B = TypeVar("B", bound=Block)

UserFactory = Callable[["Valence", int], Any]
CourseFactory = Callable[["Valence", int], Any]


def _exit_with_error(response: ApiResponse) -> None:
    """Report a failed response on stderr and terminate the process.

    This is the behaviour scripts built on Valence rely on: a single bad
    call stops the run with exit status 1.
    """
    sys.stderr.write(
        f"Error: {response.status_code} {response.error or ''} (exiting...)\n"
    )
    sys.stderr.flush()
    sys.exit(1)


def _description(text: Optional[str]) -> Dict[str, Any]:
    return {"Type": "Text", "Content": text}


def _q(value: Any) -> str:
    return quote(str(value), safe="")


def _named(name: str, code: str, description_text: Optional[str]) -> Dict[str, Any]:
    return {"Name": name, "Code": code, "Description": _description(description_text)}


class Valence:
    """Client for the Brightspace Valence API.

    Constructing a `Valence` instance fetches the organization info once to
    learn the root org unit ID and the time zone. If that call fails the
    instance is still usable, but `root_org_id` and `timezone` stay `None`
    and calls routed through the root org unit will most likely be rejected.

    Failed calls (any status outside 200-299) are handled according to two
    flags:

    * `raise_on_error`: raise `ResponseError`.
    * `exit_on_error` (default): print `Error: <code> <body> (exiting...)`
      on stderr and exit with status 1.

    With both disabled, methods return `None`, `[]` or `False`; since those
    are also what "not found" looks like, check `response_code()` or
    `is_valid_response_code()` afterwards.

    Attributes:
        root_org_id: Identifier of the root organization, if known.
        timezone: Time zone of the organization, if known.
        role_ids: Role display name to role ID, filled by `bootstrap()`.
        org_type_ids: Org unit type code to type ID, filled by `bootstrap()`.
    """

    def __init__(
        self,
        config: Optional[ValenceConfig] = None,
        *,
        signer: Optional[RequestSigner] = None,
        session: Optional[requests.Session] = None,
        user_factory: UserFactory = ValenceUser,
        course_factory: CourseFactory = ValenceCourse,
        exit_on_error: bool = True,
        raise_on_error: bool = False,
        return_object_on_create: bool = False,
        log_mode: LogMode = LogMode.NONE,
        log_file: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Create a session and fetch the organization info.

        Parameters:
            config: Credentials and host. Read from the environment when
                neither `config` nor `signer` is given.
            signer: Object turning `(route, method)` into a signed URI;
                defaults to an `IdKeySigner` built from `config`.
            session: `requests.Session` to send requests with.
            user_factory: Called as `user_factory(valence, user_id)` by `user()`.
            course_factory: Called as `course_factory(valence, org_unit_id)`
                by `course()` and by `create_course_offering()`.
            exit_on_error: Terminate the process on a failed call.
            raise_on_error: Raise `ResponseError` on a failed call; takes
                precedence over `exit_on_error`.
            return_object_on_create: Make `create_course_offering()` return
                a course object instead of a `CourseOffering` record.
            log_mode: Which calls to write to the request log.
            log_file: Request log path, defaults to `valence.log`.
            timeout: Per-request timeout in seconds.
        """
        if signer is None:
            signer = IdKeySigner.from_config(config or ValenceConfig.from_environ())
        self.signer = signer
        self.transport = Transport(session, timeout=timeout)

        self.exit_on_error = exit_on_error
        self.raise_on_error = raise_on_error
        self.return_object_on_create = return_object_on_create
        self.user_factory = user_factory
        self.course_factory = course_factory

        self.request_log = RequestLog()
        if log_mode != LogMode.NONE:
            self.set_logging(log_mode, log_file)

        self.role_ids: Dict[str, Any] = {}
        self.org_type_ids: Dict[str, Any] = {}
        self.root_org_id: Optional[Any] = None
        self.timezone: Optional[str] = None
        self._last: Optional[ApiResponse] = None
        self._bootstrapped = False

        org = self.get_organization()
        if org is not None:
            self.root_org_id = org.get("Identifier")
            self.timezone = org.get("TimeZone")
        else:
            logger.warning(
                "Could not read organization info (status %s); "
                "root org unit and time zone are unknown",
                self.response_code(),
            )

    # -------------------------------------------------------------------
    # Plumbing
    # -------------------------------------------------------------------

    def _authenticated_uri(self, route: str, method: str) -> str:
        return self.signer.create_authenticated_uri(route, method)

    def _settle(self, response: ApiResponse) -> None:
        """Store `response` as the last response and apply the error policy."""
        self._last = response
        if response.ok:
            return
        if self.raise_on_error:
            raise ResponseError(response.status_code, response.error)
        if self.exit_on_error:
            _exit_with_error(response)

    def request(
        self, route: str, method: str = "GET", data: Optional[Any] = None
    ) -> Optional[Any]:
        """Send a JSON request to the API.

        Parameters:
            route: API route, e.g. `/d2l/api/lp/1.30/users/whoami`. Spaces
                are replaced with `%20` before signing.
            method: HTTP verb.
            data: JSON body, sent as-is.

        Returns:
            The decoded JSON body on success, `None` on failure or when the
            response has no body.

        Raises:
            ResponseError: the call failed and `raise_on_error` is set.
            requests.RequestException: the request never got a response.
        """
        route = route.replace(" ", "%20")
        uri = self._authenticated_uri(route, method)
        response = self.transport.request(
            RequestConfig(method=method, url=uri, json=data)
        )
        self.request_log.record(route, method, data, response.status_code)
        self._settle(response)
        return response.body if response.ok else None

    def request_file(self, route: str, filepath: str) -> bool:
        """Download the body of a GET on `route` into `filepath`.

        Returns:
            `True` when the file was written.
        """
        route = route.replace(" ", "%20")
        uri = self._authenticated_uri(route, "GET")
        response = self.transport.download(uri, filepath)
        self.request_log.record(
            route, "GET", None, response.status_code, file_transfer=True
        )
        self._settle(response)
        return response.ok

    def send_file(
        self, route: str, method: str, filepath: str, field: str, name: str
    ) -> bool:
        """Upload `filepath` as the multipart field `field` named `name`.

        Returns:
            `True` when the API accepted the file.
        """
        route = route.replace(" ", "%20")
        uri = self._authenticated_uri(route, method)
        response = self.transport.upload(method, uri, filepath, field, name)
        self.request_log.record(
            route,
            method,
            {"field": field, "filename": name},
            response.status_code,
            file_transfer=True,
        )
        self._settle(response)
        return response.ok

    def _one(
        self,
        route: str,
        cls: Type[B],
        method: str = "GET",
        data: Optional[Dict[str, Any]] = None,
    ) -> Optional[B]:
        response = self.request(route, method, data)
        if self.is_valid_response_code() and isinstance(response, dict):
            return cls(response)
        return None

    def _many(self, route: str, cls: Type[B]) -> List[B]:
        response = self.request(route)
        if self.is_valid_response_code() and isinstance(response, list):
            return build_many(response, cls)
        return []

    # -------------------------------------------------------------------
    # Configuration and last response
    # -------------------------------------------------------------------

    def set_logging(self, log_mode: LogMode, log_file: Optional[str] = None) -> None:
        """Start (or reconfigure) the request log.

        Parameters:
            log_mode: `LogMode.NONE`, `LogMode.WRITES` (POST/PUT/DELETE) or
                `LogMode.ALL`.
            log_file: File to append to, defaults to `valence.log`. Any
                previously opened log file is closed first.
        """
        self.request_log.configure(log_mode, log_file)

    def set_return_object_on_create(self, return_object: bool) -> None:
        self.return_object_on_create = return_object

    def set_exit_on_error(self, exit_on_error: bool) -> None:
        self.exit_on_error = exit_on_error

    def set_raise_on_error(self, raise_on_error: bool) -> None:
        self.raise_on_error = raise_on_error

    def set_user_factory(self, user_factory: UserFactory) -> None:
        self.user_factory = user_factory

    def set_course_factory(self, course_factory: CourseFactory) -> None:
        self.course_factory = course_factory

    def response_code(self) -> Optional[int]:
        return self._last.status_code if self._last else None

    def response_body(self) -> Optional[Any]:
        return self._last.body if self._last else None

    def response_error(self) -> Optional[str]:
        return self._last.error if self._last else None

    def is_valid_response_code(self) -> bool:
        return self._last is not None and self._last.ok

    @property
    def is_ready(self) -> bool:
        """Whether the organization info was fetched at construction."""
        return self.root_org_id is not None

    def close(self) -> None:
        """Close the request log and the HTTP session."""
        self.request_log.close()
        self.transport.session.close()

    def __enter__(self) -> "Valence":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # -------------------------------------------------------------------
    # Lookup tables
    # -------------------------------------------------------------------

    @property
    def is_bootstrapped(self) -> bool:
        return self._bootstrapped

    def bootstrap(self) -> None:
        """Fill the role and org unit type lookup tables.

        This costs two requests (roles, then org unit types). Methods that
        need a table call it on their own the first time; call it upfront to
        pay that cost at a predictable point. Lookups never bootstrap twice,
        even when a table came back empty; call `bootstrap()` again to
        reload them.
        """
        self.role_ids = {
            role["DisplayName"]: role["Identifier"]
            for role in self.get_roles()
            if "DisplayName" in role and "Identifier" in role
        }
        self.org_type_ids = {
            outype["Code"]: outype["Id"]
            for outype in self.get_org_unit_types()
            if "Code" in outype and "Id" in outype
        }
        logger.debug(
            "Loaded %d roles and %d org unit types",
            len(self.role_ids),
            len(self.org_type_ids),
        )
        self._bootstrapped = True

    @deprecated("Use bootstrap() instead")
    def set_internal_ids(self) -> None:
        self.bootstrap()

    def _role_id(self, display_name: str) -> Optional[Any]:
        if not self._bootstrapped:
            logger.debug("Lookup tables not loaded, bootstrapping (2 extra requests)")
            self.bootstrap()
        role_id = self.role_ids.get(display_name)
        if role_id is None:
            logger.warning("No role named %r on this instance", display_name)
        return role_id

    def _org_type_id(self, code: str) -> Optional[Any]:
        if not self._bootstrapped:
            logger.debug("Lookup tables not loaded, bootstrapping (2 extra requests)")
            self.bootstrap()
        type_id = self.org_type_ids.get(code)
        if type_id is None:
            logger.warning("No org unit type with code %r on this instance", code)
        return type_id

    # -------------------------------------------------------------------
    # Organization, versions, roles
    # -------------------------------------------------------------------

    def whoami(self) -> Optional[WhoAmIUser]:
        """The user the requests are signed as."""
        return self._one(f"{LP}/users/whoami", WhoAmIUser)

    def get_organization(self) -> Optional[Organization]:
        return self._one(f"{LP}/organization/info", Organization)

    def version(self, product_code: str) -> Optional[ProductVersions]:
        """Supported API versions of one product, e.g. `lp` or `le`."""
        return self._one(f"/d2l/api/{product_code}/versions/", ProductVersions)

    def versions(self) -> ProductVersionArray:
        response = self.request("/d2l/api/versions/")
        return ProductVersionArray(self, response if isinstance(response, list) else [])

    def get_role(self, role_id: Union[int, str]) -> Optional[Role]:
        return self._one(f"{LP}/roles/{role_id}", Role)

    def get_roles(self) -> List[Role]:
        """Roles available under the root organization."""
        root = self.root_org_id if self.root_org_id is not None else ""
        return self._many(f"{LP}/{root}/roles/", Role)

    def get_org_unit_type(self, org_unit_type_id: int) -> Optional[OrgUnitType]:
        return self._one(f"{LP}/outypes/{org_unit_type_id}", OrgUnitType)

    def get_org_unit_types(self) -> List[OrgUnitType]:
        return self._many(f"{LP}/outypes/", OrgUnitType)

    # -------------------------------------------------------------------
    # Resource objects and ID lookups
    # -------------------------------------------------------------------

    def user(self, user_id: int) -> Any:
        """Return a user object from the configured user factory."""
        return self.user_factory(self, user_id)

    def course(self, org_unit_id: int) -> Any:
        """Return a course object from the configured course factory."""
        return self.course_factory(self, org_unit_id)

    def get_user_id_from_username(self, username: str) -> Optional[int]:
        response = self.request(f"{LP}/users/?username={_q(username)}")
        return response.get("UserId") if isinstance(response, dict) else None

    def get_user_id_from_org_defined_id(self, org_defined_id: str) -> Optional[int]:
        """Resolve a user ID from an org-defined ID.

        The API answers with a list of matching users; the first one wins.
        """
        response = self.request(f"{LP}/users/?orgDefinedId={_q(org_defined_id)}")
        if isinstance(response, list):
            response = response[0] if response else None
        return response.get("UserId") if isinstance(response, dict) else None

    def get_org_unit_id_from_code(
        self, org_unit_code: str, org_unit_type: Any
    ) -> Optional[int]:
        """Find an org unit by its exact code within one org unit type.

        Parameters:
            org_unit_code: The org unit code, matched exactly.
            org_unit_type: Org unit type ID, see `org_type_ids`.

        Returns:
            The identifier of the first match, or `None` if nothing matched.
        """
        response = self.request(
            f"{LP}/orgstructure/?orgUnitType={_q(org_unit_type)}"
            f"&exactOrgUnitCode={_q(org_unit_code)}"
        )
        if not isinstance(response, dict):
            return None
        items = response.get("Items") or []
        if not items or not isinstance(items[0], dict):
            return None
        return items[0].get("Identifier")

    def _org_unit_id_for_type(self, code: str, type_code: str) -> Optional[int]:
        type_id = self._org_type_id(type_code)
        if type_id is None:
            return None
        return self.get_org_unit_id_from_code(code, type_id)

    def get_org_unit_id_from_offering_code(self, offering_code: str) -> Optional[int]:
        return self._org_unit_id_for_type(offering_code, COURSE_OFFERING)

    def get_org_unit_id_from_semester_code(self, semester_code: str) -> Optional[int]:
        return self._org_unit_id_for_type(semester_code, SEMESTER)

    def get_org_unit_id_from_template_code(self, template_code: str) -> Optional[int]:
        return self._org_unit_id_for_type(template_code, COURSE_TEMPLATE)

    def get_org_unit_id_from_department_code(
        self, department_code: str
    ) -> Optional[int]:
        return self._org_unit_id_for_type(department_code, DEPARTMENT)

    # -------------------------------------------------------------------
    # Enrollments
    # -------------------------------------------------------------------

    def enroll_user(
        self, org_unit_id: int, user_id: int, role_id: Any
    ) -> Optional[EnrollmentData]:
        data = {"OrgUnitId": org_unit_id, "UserId": user_id, "RoleId": role_id}
        return self._one(f"{LP}/enrollments/", EnrollmentData, "POST", data)

    def unenroll_user(self, user_id: int, org_unit_id: int) -> None:
        self.request(
            f"{LP}/enrollments/users/{user_id}/orgUnits/{org_unit_id}", "DELETE"
        )

    def get_enrollment(
        self, org_unit_id: int, user_id: int
    ) -> Optional[EnrollmentData]:
        return self._one(
            f"{LP}/enrollments/orgUnits/{org_unit_id}/users/{user_id}", EnrollmentData
        )

    def _enroll_as(
        self, org_unit_id: int, user_id: int, role_name: str
    ) -> Optional[EnrollmentData]:
        role_id = self._role_id(role_name)
        if role_id is None:
            return None
        return self.enroll_user(org_unit_id, user_id, role_id)

    def enroll_student(
        self, org_unit_id: int, user_id: int
    ) -> Optional[EnrollmentData]:
        """Enroll a user with the `Student` role."""
        return self._enroll_as(org_unit_id, user_id, STUDENT)

    def enroll_instructor(
        self, org_unit_id: int, user_id: int
    ) -> Optional[EnrollmentData]:
        """Enroll a user with the `Instructor` role."""
        return self._enroll_as(org_unit_id, user_id, INSTRUCTOR)

    # -------------------------------------------------------------------
    # Course offerings
    # -------------------------------------------------------------------

    def get_course_offering(self, org_unit_id: int) -> Optional[CourseOffering]:
        return self._one(f"{LP}/courses/{org_unit_id}", CourseOffering)

    def create_course_offering(
        self,
        name: str,
        code: str,
        path: str,
        course_template_id: int,
        semester_id: Optional[int],
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        locale_id: Optional[int] = None,
        force_locale: bool = False,
        show_address_book: bool = False,
        description_text: Optional[str] = None,
        can_self_register: bool = False,
    ) -> Optional[Union[CourseOffering, Any]]:
        """Create a course offering from a course template.

        Parameters:
            name: Course name.
            code: Course code, must be unique.
            path: Course path, an empty string lets Brightspace decide.
            course_template_id: Parent course template.
            semester_id: Semester the offering belongs to.
            start_date: ISO 8601 start date, or `None`.
            end_date: ISO 8601 end date, or `None`.
            locale_id: Locale ID, or `None` for the default locale.
            force_locale: Prevent users from changing the locale.
            show_address_book: Show the course in the address book.
            description_text: Plain-text course description.
            can_self_register: Allow self-registration.

        Returns:
            A `CourseOffering`, or, when `return_object_on_create` is set,
            the course object produced by `course_factory`. `None` if the
            creation failed.
        """
        data = {
            "Name": name,
            "Code": code,
            "Path": path,
            "CourseTemplateId": course_template_id,
            "SemesterId": semester_id,
            "StartDate": start_date,
            "EndDate": end_date,
            "LocaleId": locale_id,
            "ForceLocale": force_locale,
            "ShowAddressBook": show_address_book,
            "CanSelfRegister": can_self_register,
            "Description": _description(description_text),
        }
        offering = self._one(f"{LP}/courses/", CourseOffering, "POST", data)
        if offering is None:
            return None
        if self.return_object_on_create:
            org_unit_id = offering.get("Identifier")
            if org_unit_id is None:
                logger.warning("Created course offering has no Identifier")
                return None
            return self.course(org_unit_id)
        return offering

    def update_course_offering(
        self,
        org_unit_id: int,
        name: str,
        code: str,
        start_date: Optional[str],
        end_date: Optional[str],
        is_active: bool,
        description_text: Optional[str] = None,
    ) -> Optional[CourseOffering]:
        data = {
            "Name": name,
            "Code": code,
            "StartDate": start_date,
            "EndDate": end_date,
            "IsActive": is_active,
            "Description": _description(description_text),
        }
        return self._one(f"{LP}/courses/{org_unit_id}", CourseOffering, "PUT", data)

    def delete_course_offering(self, org_unit_id: int) -> None:
        self.request(f"{LP}/courses/{org_unit_id}", "DELETE")

    def get_course_image(self, org_unit_id: int, filepath: str) -> bool:
        return self.request_file(f"{LP}/courses/{org_unit_id}/image", filepath)

    def upload_course_image(self, org_unit_id: int, filepath: str, name: str) -> bool:
        return self.send_file(
            f"{LP}/courses/{org_unit_id}/image", "PUT", filepath, "Image", name
        )

    # -------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------

    def get_course_sections(self, org_unit_id: int) -> List[SectionData]:
        return self._many(f"{LP}/{org_unit_id}/sections/", SectionData)

    def get_course_section(
        self, org_unit_id: int, section_id: int
    ) -> Optional[SectionData]:
        return self._one(f"{LP}/{org_unit_id}/sections/{section_id}", SectionData)

    def create_course_section(
        self, org_unit_id: int, name: str, code: str, description_text: str = ""
    ) -> Optional[SectionData]:
        data = _named(name, code, description_text)
        return self._one(f"{LP}/{org_unit_id}/sections/", SectionData, "POST", data)

    def update_course_section(
        self,
        org_unit_id: int,
        section_id: int,
        name: str,
        code: str,
        description_text: str = "",
    ) -> Optional[SectionData]:
        data = _named(name, code, description_text)
        return self._one(
            f"{LP}/{org_unit_id}/sections/{section_id}", SectionData, "PUT", data
        )

    def initialize_course_sections(
        self,
        org_unit_id: int,
        enrollment_style: int,
        enrollment_quantity: int,
        auto_enroll: bool,
        randomize_enrollments: bool,
    ) -> Optional[SectionData]:
        """Set up sectioning for a course that has none yet.

        `enrollment_style` is the Valence `SECTENROLL_T` value: 0 manual,
        1 by number of sections, 2 by number of users per section,
        3 one section per user (auto-enrollment).
        """
        data = {
            "EnrollmentStyle": enrollment_style,
            "EnrollmentQuantity": enrollment_quantity,
            "AutoEnroll": auto_enroll,
            "RandomizeEnrollments": randomize_enrollments,
        }
        return self._one(f"{LP}/{org_unit_id}/sections/", SectionData, "PUT", data)

    def delete_course_section(self, org_unit_id: int, section_id: int) -> None:
        self.request(f"{LP}/{org_unit_id}/sections/{section_id}", "DELETE")

    def enroll_user_in_course_section(
        self, org_unit_id: int, section_id: int, user_id: int
    ) -> Optional[Any]:
        return self.request(
            f"{LP}/{org_unit_id}/sections/{section_id}/enrollments/",
            "POST",
            {"UserId": user_id},
        )

    def get_course_section_settings(
        self, org_unit_id: int
    ) -> Optional[SectionPropertyData]:
        return self._one(f"{LP}/{org_unit_id}/sections/settings", SectionPropertyData)

    def update_course_section_settings(
        self,
        org_unit_id: int,
        enrollment_style: int,
        enrollment_quantity: int,
        auto_enroll: bool,
        randomize_enrollments: bool,
    ) -> Optional[SectionPropertyData]:
        data = {
            "EnrollmentStyle": enrollment_style,
            "EnrollmentQuantity": enrollment_quantity,
            "AutoEnroll": auto_enroll,
            "RandomizeEnrollments": randomize_enrollments,
        }
        return self._one(
            f"{LP}/{org_unit_id}/sections/settings", SectionPropertyData, "PUT", data
        )

    # -------------------------------------------------------------------
    # Group categories and groups
    # -------------------------------------------------------------------

    def get_course_group_categories(self, org_unit_id: int) -> List[GroupCategoryData]:
        return self._many(f"{LP}/{org_unit_id}/groupcategories/", GroupCategoryData)

    def get_course_group_category(
        self, org_unit_id: int, group_category_id: int
    ) -> Optional[GroupCategoryData]:
        return self._one(
            f"{LP}/{org_unit_id}/groupcategories/{group_category_id}",
            GroupCategoryData,
        )

    @staticmethod
    def _group_category_data(
        name: str,
        description_text: Optional[str],
        enrollment_style: int,
        enrollment_quantity: Optional[int],
        auto_enroll: bool,
        randomize_enrollments: bool,
        number_of_groups: Optional[int],
        max_users_per_group: Optional[int],
        allocate_after_expiry: bool,
        self_enrollment_expiry_date: Optional[str],
        group_prefix: Optional[str],
        restricted_by_org_unit_id: Optional[int],
    ) -> Dict[str, Any]:
        return {
            "Name": name,
            "EnrollmentStyle": enrollment_style,
            "EnrollmentQuantity": enrollment_quantity,
            "AutoEnroll": auto_enroll,
            "RandomizeEnrollments": randomize_enrollments,
            "NumberOfGroups": number_of_groups,
            "MaxUsersPerGroup": max_users_per_group,
            "AllocateAfterExpiry": allocate_after_expiry,
            "SelfEnrollmentExpiryDate": self_enrollment_expiry_date,
            "GroupPrefix": group_prefix,
            "RestrictedByOrgUnitId": restricted_by_org_unit_id,
            "Description": _description(description_text),
        }

    def create_course_group_category(
        self,
        org_unit_id: int,
        name: str,
        description_text: Optional[str],
        enrollment_style: int,
        enrollment_quantity: Optional[int] = None,
        auto_enroll: bool = False,
        randomize_enrollments: bool = False,
        number_of_groups: Optional[int] = None,
        max_users_per_group: Optional[int] = None,
        allocate_after_expiry: bool = False,
        self_enrollment_expiry_date: Optional[str] = None,
        group_prefix: Optional[str] = None,
        restricted_by_org_unit_id: Optional[int] = None,
    ) -> Optional[GroupCategoryData]:
        """Create a group category in a course.

        Parameters:
            org_unit_id: Course offering the category belongs to.
            name: Category name.
            description_text: Plain-text description.
            enrollment_style: Valence `GRPENROLL_T` value, e.g. 0 for
                "number of groups, no enrollment".
            enrollment_quantity: Groups or users per group, depending on
                the style; `None` when the style does not use it.
            auto_enroll: Enroll users into groups automatically.
            randomize_enrollments: Randomize automatic enrollment.
            number_of_groups: Number of groups, for styles that need it.
            max_users_per_group: Cap on group size, for self-enrollment.
            allocate_after_expiry: Auto-allocate once self-enrollment expires.
            self_enrollment_expiry_date: ISO 8601 date or `None`.
            group_prefix: Prefix for generated group names.
            restricted_by_org_unit_id: Section restricting the enrollment.

        Returns:
            The created category, or `None` on failure.
        """
        data = self._group_category_data(
            name,
            description_text,
            enrollment_style,
            enrollment_quantity,
            auto_enroll,
            randomize_enrollments,
            number_of_groups,
            max_users_per_group,
            allocate_after_expiry,
            self_enrollment_expiry_date,
            group_prefix,
            restricted_by_org_unit_id,
        )
        return self._one(
            f"{LP}/{org_unit_id}/groupcategories/", GroupCategoryData, "POST", data
        )

    def update_course_group_category(
        self,
        org_unit_id: int,
        group_category_id: int,
        name: str,
        description_text: Optional[str],
        enrollment_style: int,
        enrollment_quantity: Optional[int] = None,
        auto_enroll: bool = False,
        randomize_enrollments: bool = False,
        number_of_groups: Optional[int] = None,
        max_users_per_group: Optional[int] = None,
        allocate_after_expiry: bool = False,
        self_enrollment_expiry_date: Optional[str] = None,
        group_prefix: Optional[str] = None,
        restricted_by_org_unit_id: Optional[int] = None,
    ) -> Optional[GroupCategoryData]:
        """Replace a group category; takes the same fields as the create call."""
        data = self._group_category_data(
            name,
            description_text,
            enrollment_style,
            enrollment_quantity,
            auto_enroll,
            randomize_enrollments,
            number_of_groups,
            max_users_per_group,
            allocate_after_expiry,
            self_enrollment_expiry_date,
            group_prefix,
            restricted_by_org_unit_id,
        )
        return self._one(
            f"{LP}/{org_unit_id}/groupcategories/{group_category_id}",
            GroupCategoryData,
            "PUT",
            data,
        )

    def delete_course_group_category(
        self, org_unit_id: int, group_category_id: int
    ) -> None:
        self.request(
            f"{LP}/{org_unit_id}/groupcategories/{group_category_id}", "DELETE"
        )

    def get_course_groups(
        self, org_unit_id: int, group_category_id: int
    ) -> List[GroupData]:
        return self._many(
            f"{LP}/{org_unit_id}/groupcategories/{group_category_id}/groups/",
            GroupData,
        )

    def get_course_group(
        self, org_unit_id: int, group_category_id: int, group_id: int
    ) -> Optional[GroupData]:
        return self._one(
            f"{LP}/{org_unit_id}/groupcategories/{group_category_id}/groups/{group_id}",
            GroupData,
        )

    def create_course_group(
        self,
        org_unit_id: int,
        group_category_id: int,
        name: str,
        code: str,
        description_text: str = "",
    ) -> Optional[GroupData]:
        data = _named(name, code, description_text)
        return self._one(
            f"{LP}/{org_unit_id}/groupcategories/{group_category_id}/groups/",
            GroupData,
            "POST",
            data,
        )

    def update_course_group(
        self,
        org_unit_id: int,
        group_category_id: int,
        group_id: int,
        name: str,
        code: str,
        description_text: str = "",
    ) -> Optional[GroupData]:
        data = _named(name, code, description_text)
        return self._one(
            f"{LP}/{org_unit_id}/groupcategories/{group_category_id}/groups/{group_id}",
            GroupData,
            "PUT",
            data,
        )

    def delete_course_group(
        self, org_unit_id: int, group_category_id: int, group_id: int
    ) -> None:
        self.request(
            f"{LP}/{org_unit_id}/groupcategories/{group_category_id}/groups/{group_id}",
            "DELETE",
        )

    def enroll_user_in_group(
        self, org_unit_id: int, group_category_id: int, group_id: int, user_id: int
    ) -> Optional[Any]:
        return self.request(
            f"{LP}/{org_unit_id}/groupcategories/{group_category_id}"
            f"/groups/{group_id}/enrollments/",
            "POST",
            {"UserId": user_id},
        )

    def unenroll_user_from_group(
        self, org_unit_id: int, group_category_id: int, group_id: int, user_id: int
    ) -> None:
        self.request(
            f"{LP}/{org_unit_id}/groupcategories/{group_category_id}"
            f"/groups/{group_id}/enrollments/{user_id}",
            "DELETE",
        )

    # -------------------------------------------------------------------
    # Users and profiles
    # -------------------------------------------------------------------

    def get_user(self, user_id: int) -> Optional[UserData]:
        return self._one(f"{LP}/users/{user_id}", UserData)

    def get_user_names(self, user_id: int) -> Optional[LegalPreferredNames]:
        return self._one(f"{LP}/users/{user_id}/names", LegalPreferredNames)

    def update_user_names(
        self,
        user_id: int,
        legal_first_name: str,
        legal_last_name: str,
        preferred_first_name: Optional[str] = None,
        preferred_last_name: Optional[str] = None,
    ) -> Optional[LegalPreferredNames]:
        data = {
            "LegalFirstName": legal_first_name,
            "LegalLastName": legal_last_name,
            "PreferredFirstName": preferred_first_name,
            "PreferredLastName": preferred_last_name,
        }
        return self._one(
            f"{LP}/users/{user_id}/names", LegalPreferredNames, "PUT", data
        )

    def get_user_profile(self, user_id: int) -> Optional[Dict[str, Any]]:
        """The raw user profile document."""
        return self.request(f"{LP}/profile/user/{user_id}")

    def get_user_picture(self, user_id: int, filepath: str) -> bool:
        return self.request_file(f"{LP}/profile/user/{user_id}/image", filepath)

    def upload_user_picture(self, user_id: int, filepath: str) -> bool:
        return self.send_file(
            f"{LP}/profile/user/{user_id}/image",
            "POST",
            filepath,
            "profileImage",
            "profileImage",
        )

    def delete_user_picture(self, user_id: int) -> None:
        self.request(f"{LP}/profile/user/{user_id}/image", "DELETE")

    # -------------------------------------------------------------------
    # Brightspace Data Sets
    # -------------------------------------------------------------------

    def get_brightspace_data_sets(self) -> BrightspaceDataSetReportInfoArray:
        """List the Brightspace Data Sets, fetching further pages lazily.

        Examples:
            >>> for data_set in valence.get_brightspace_data_sets():  # doctest: +SKIP
            ...     print(data_set.Name, data_set.CreatedDate)
        """
        response = self.request(f"{LP}/dataExport/bds")
        return BrightspaceDataSetReportInfoArray(
            self, response if isinstance(response, dict) else {}
        )

    def download_brightspace_data_set(self, plugin_id: str, filepath: str) -> bool:
        """Download the latest extract of a data set as a zip file."""
        return self.request_file(f"{LP}/dataExport/bds/download/{plugin_id}", filepath)
