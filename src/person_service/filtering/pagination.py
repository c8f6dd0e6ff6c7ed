"""PaginationParser: page/size/sortBy/sortDirection from query params."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .schema import TypeTag, resolve

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .schema import EntitySchema

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class PageRequest:
    """
    Zero-based page request.

    ``sort_by`` is the domain attribute path (``coordinates.x``), already
    resolved from the public field name; ``None`` means unsorted.
    """

    page: int = 0
    size: int = 10
    sort_by: str | None = None
    sort_direction: SortDirection = SortDirection.ASC

    @property
    def offset(self) -> int:
        return self.page * self.size


class PaginationParser:
    """Parse page/size and sorting from query params."""

    def __init__(self, schema: EntitySchema) -> None:
        self.schema = schema

    def parse(
        self,
        query_params: Mapping[str, Any],
        *,
        page_key: str = "page",
        size_key: str = "size",
        sort_by_key: str = "sortBy",
        sort_direction_key: str = "sortDirection",
        default_size: int = 10,
        max_size: int = 100,
    ) -> PageRequest:
        page = query_params.get(page_key)
        try:
            page = max(0, int(page)) if page is not None else 0
        except (TypeError, ValueError):
            page = 0

        size = query_params.get(size_key)
        try:
            size = min(max_size, max(1, int(size))) if size is not None else default_size
        except (TypeError, ValueError):
            size = default_size

        return PageRequest(
            page=page,
            size=size,
            sort_by=self._sort_attr(query_params.get(sort_by_key)),
            sort_direction=self._direction(query_params.get(sort_direction_key)),
        )

    def _sort_attr(self, field_path: str | None) -> str | None:
        if not field_path:
            return None
        descriptor = resolve(self.schema, field_path)
        if descriptor is None or descriptor.type is TypeTag.UNSUPPORTED:
            logger.warning("Ignoring unknown sort field: %s", field_path)
            return None
        return descriptor.attr

    @staticmethod
    def _direction(raw: str | None) -> SortDirection:
        if raw and raw.lower() == SortDirection.DESC.value:
            return SortDirection.DESC
        return SortDirection.ASC


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T] = field(default_factory=list)
    total_elements: int = 0
    page: int = 0
    size: int = 10

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total_elements / self.size)

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    def headers(self) -> dict[str, str]:
        """Pagination metadata as response headers."""
        return {
            "X-Total-Count": str(self.total_elements),
            "X-Total-Pages": str(self.total_pages),
            "X-Current-Page": str(self.page),
            "X-Page-Size": str(self.size),
            "X-Has-Next": str(self.has_next).lower(),
            "X-Has-Previous": str(self.has_previous).lower(),
        }
