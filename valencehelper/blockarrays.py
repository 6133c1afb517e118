"""Lazy, forward-only collections of Valence records.

A `BlockArray` holds one page of records at a time. When the page runs out
and the API told us where the next one lives, the next page is fetched
through the owning facade's `request` function.
"""

from __future__ import annotations

import logging
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Generic,
    Iterator,
    List,
    Optional,
    Type,
)

from typing_extensions import TypeVar

from .blocks import Block, BrightspaceDataSetReportInfo, ProductVersions, build_many
from .exceptions import PaginationError

if TYPE_CHECKING:
    from .client import Valence

logger = logging.getLogger(__name__)

API_PATH_MARKER = "/d2l/api/"

B = TypeVar("B", bound=Block, default=Block)


def next_page_route(url: Optional[str]) -> Optional[str]:
    """Trim an absolute continuation URL down to its API route.

    Parameters:
        url: The `NextPageUrl` the API returned, possibly `None`.

    Returns:
        The route starting at `/d2l/api/`, or `None` when there is no next page.

    Raises:
        PaginationError: `url` is set but does not contain `/d2l/api/`.
    """
    if not url:
        return None
    index = url.find(API_PATH_MARKER)
    if index < 0:
        raise PaginationError(f"Continuation URL is not a Valence route: {url!r}")
    return url[index:]


class BlockArray(Generic[B]):
    """Forward-only sequence of records spanning one or more pages.

    Examples:
        >>> for version in valence.versions():  # doctest: +SKIP
        ...     print(version.ProductCode, version.LatestVersion)

        >>> data_sets = valence.get_brightspace_data_sets()  # doctest: +SKIP
        >>> first = data_sets.next()  # doctest: +SKIP
    """

    block_class: Type[Block] = Block

    def __init__(self, valence: Optional[Valence], response: Any) -> None:
        self.valence = valence
        self.next_page_route: Optional[str] = None
        self._items: List[B] = []
        self._index = 0
        self.build(response)

    def build(self, response: Any) -> None:
        """Load a page of raw items and rewind the cursor."""
        self._items = build_many(response, self.block_class)  # type: ignore[arg-type]
        self._index = 0

    def next(self) -> Optional[B]:
        """Return the next record, or `None` once every page is consumed."""
        while self._index >= len(self._items):
            if self.next_page_route is None:
                return None
            if self.valence is None:
                raise PaginationError("No Valence session available to fetch pages")

            route = self.next_page_route
            logger.debug("Fetching next page %s", route)
            response = self.valence.request(route)
            if response is None:
                # the facade already recorded the failed response
                self.next_page_route = None
                self._items = []
                self._index = 0
                return None
            self.build(response)

        item = self._items[self._index]
        self._index += 1
        return item

    def __iter__(self) -> Iterator[B]:
        while (item := self.next()) is not None:
            yield item

    def __repr__(self) -> str:
        more = "yes" if self.next_page_route else "no"
        return (
            f"{self.__class__.__name__}(loaded={len(self._items)}, "
            f"position={self._index}, more={more})"
        )


class ProductVersionArray(BlockArray[ProductVersions]):
    """Versions of every product on the instance (single page)."""

    block_class = ProductVersions


class BrightspaceDataSetReportInfoArray(BlockArray[BrightspaceDataSetReportInfo]):
    """Paged listing of Brightspace Data Sets."""

    block_class = BrightspaceDataSetReportInfo

    def build(self, response: Dict[str, Any]) -> None:
        self.next_page_route = next_page_route(response.get("NextPageUrl"))
        super().build(response.get("BrightspaceDataSets", []))
