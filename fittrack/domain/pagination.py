# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def coerce(cls, value: Any) -> "SortDirection":
        """Anything that is not ``desc`` sorts ascending."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.lower() == cls.DESC.value:
            return cls.DESC
        return cls.ASC


@dataclass(frozen=True, slots=True)
class ListParams:
    page: int = 1
    limit: int = 10
    sort_by: str | None = None
    sort_direction: SortDirection | str = SortDirection.ASC
    filters: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Page:
    rows: list[dict[str, Any]]
    total_count: int
    total_pages: int
    page: int
    size: int

    def meta(self) -> dict[str, int]:
        return {
            "size": self.size,
            "totalElements": self.total_count,
            "totalPages": self.total_pages,
            "number": self.page,
        }
