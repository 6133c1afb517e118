"""valencehelper: a Python client for the D2L Brightspace Valence API.

Quick Start:
    ```python
    from valencehelper import Valence

    # Credentials come from D2L_VALENCE_* environment variables
    valence = Valence(exit_on_error=False)

    course = valence.get_course_offering(12345)
    if course is None:
        print("lookup failed with", valence.response_code())

    for data_set in valence.get_brightspace_data_sets():
        print(data_set.Name)
    ```

Key Features:
    - **Signing**: ID-key authentication of every request
    - **Records**: JSON responses as dictionary-like records
    - **Pagination**: lazy, forward-only paged collections
    - **Scripts**: optional exit-on-error behaviour and a request log
"""

import logging
from importlib.metadata import PackageNotFoundError, version

from ._core._log import LogMode
from .auth import IdKeySigner, RequestSigner
from .blockarrays import (
    BlockArray,
    BrightspaceDataSetReportInfoArray,
    ProductVersionArray,
)
from .blocks import (
    Block,
    BrightspaceDataSetReportInfo,
    CourseOffering,
    EnrollmentData,
    GroupCategoryData,
    GroupData,
    LegalPreferredNames,
    Organization,
    OrgUnitType,
    Permissions,
    ProductVersions,
    Role,
    SectionData,
    SectionPropertyData,
    UserData,
    WhoAmIUser,
    build_many,
)
from .client import VERSION_LE, VERSION_LP, Valence
from .config import ValenceConfig
from .exceptions import (
    ConfigurationError,
    PaginationError,
    ResponseError,
    ValenceError,
)
from .resources import ValenceCourse, ValenceUser

logger = logging.getLogger(__name__)

__all__ = [
    # client.py
    "Valence",
    "VERSION_LP",
    "VERSION_LE",
    "LogMode",
    # config.py
    "ValenceConfig",
    # auth
    "IdKeySigner",
    "RequestSigner",
    # resources.py
    "ValenceUser",
    "ValenceCourse",
    # blocks.py
    "Block",
    "build_many",
    "BrightspaceDataSetReportInfo",
    "CourseOffering",
    "EnrollmentData",
    "GroupCategoryData",
    "GroupData",
    "LegalPreferredNames",
    "Organization",
    "OrgUnitType",
    "Permissions",
    "ProductVersions",
    "Role",
    "SectionData",
    "SectionPropertyData",
    "UserData",
    "WhoAmIUser",
    # blockarrays.py
    "BlockArray",
    "BrightspaceDataSetReportInfoArray",
    "ProductVersionArray",
    # exceptions.py
    "ValenceError",
    "ConfigurationError",
    "ResponseError",
    "PaginationError",
]

try:
    __version__ = version("valencehelper")
except PackageNotFoundError:
    __version__ = "unknown"
