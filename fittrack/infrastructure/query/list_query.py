# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Declarative filter/sort/pagination for list endpoints.

A resource describes once, at import time, which sort keys map to which
columns and which filter keys map to which ``(operator, columns)`` pair.
``ListQueryBuilder`` turns request parameters into a bounded query plus a
count under the same predicates.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sqlalchemy import and_, asc, desc, func, inspect, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from fittrack.domain.pagination import ListParams, Page, SortDirection
from fittrack.shared.logging import logger


class FilterOperator(str, Enum):
    EQUALS = "equals"
    CONTAINS = "contains"
    SEARCH = "search"


@dataclass(frozen=True, slots=True)
class FilterField:
    operator: FilterOperator
    columns: tuple[Any, ...]

    def __post_init__(self) -> None:
        if not self.columns:
            raise ValueError("FilterField needs at least one column")
        if self.operator is not FilterOperator.SEARCH and len(self.columns) != 1:
            raise ValueError(f"{self.operator.value} filters take exactly one column")


@dataclass(frozen=True, slots=True)
class ListQueryConfig:
    model: type
    sort_columns: Mapping[str, Any]
    default_sort: str
    filters: Mapping[str, FilterField]
    max_limit: int = 100
    redacted_fields: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.default_sort not in self.sort_columns:
            raise ValueError(f"default sort {self.default_sort!r} is not a sortable field")
        if self.max_limit < 1:
            raise ValueError("max_limit must be positive")


class ListQueryBuilder:
    def __init__(self, config: ListQueryConfig) -> None:
        self._config = config
        self._column_keys = tuple(attr.key for attr in inspect(config.model).column_attrs)

    def build_conditions(self, filters: Mapping[str, Any]) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        for key, value in filters.items():
            if value is None:
                continue
            field_spec = self._config.filters.get(key)
            if field_spec is None:
                # Unknown keys are dropped rather than rejected.
                logger.debug(f"list_query: ignoring unknown filter key={key!r}")
                continue
            if isinstance(value, Enum) and field_spec.operator is not FilterOperator.EQUALS:
                value = value.value

            if field_spec.operator is FilterOperator.EQUALS:
                conditions.append(field_spec.columns[0] == value)
            elif field_spec.operator is FilterOperator.CONTAINS:
                conditions.append(field_spec.columns[0].contains(str(value), autoescape=True))
            else:
                conditions.append(
                    or_(*(column.contains(str(value), autoescape=True) for column in field_spec.columns))
                )
        return conditions

    def resolve_sort(self, sort_by: str | None, direction: SortDirection | str | None) -> list[Any]:
        key = sort_by if sort_by in self._config.sort_columns else self._config.default_sort
        column = self._config.sort_columns[key]
        order = desc if SortDirection.coerce(direction) is SortDirection.DESC else asc
        ordering = [order(column)]

        # Tie-break on the default column so pages never overlap.
        tie_breaker = self._config.sort_columns[self._config.default_sort]
        if key != self._config.default_sort:
            ordering.append(asc(tie_breaker))
        return ordering

    def paginate(self, page: int, limit: int) -> tuple[int, int]:
        limit = max(1, min(int(limit), self._config.max_limit))
        page = max(1, int(page))
        return (page - 1) * limit, limit

    def execute(self, session: Session, params: ListParams) -> Page:
        conditions = self.build_conditions(params.filters)
        where = and_(*conditions) if conditions else None
        offset, limit = self.paginate(params.page, params.limit)
        page = max(1, int(params.page))

        count_stmt = select(func.count()).select_from(self._config.model)
        rows_stmt = select(self._config.model)
        if where is not None:
            count_stmt = count_stmt.where(where)
            rows_stmt = rows_stmt.where(where)

        total = int(session.execute(count_stmt).scalar_one() or 0)
        rows_stmt = (
            rows_stmt.order_by(*self.resolve_sort(params.sort_by, params.sort_direction))
            .offset(offset)
            .limit(limit)
        )
        records = session.execute(rows_stmt).scalars().all()

        rows = [self._redact(self._serialize(record)) for record in records]
        logger.debug(
            f"list_query: model={self._config.model.__name__} filters={len(conditions)} "
            f"page={page} limit={limit} total={total}"
        )
        return Page(
            rows=rows,
            total_count=total,
            total_pages=math.ceil(total / limit),
            page=page,
            size=limit,
        )

    def _serialize(self, record: Any) -> dict[str, Any]:
        return {key: getattr(record, key) for key in self._column_keys}

    def _redact(self, row: Mapping[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in row.items() if k not in self._config.redacted_fields}


__all__ = [
    "FilterField",
    "FilterOperator",
    "ListParams",
    "ListQueryBuilder",
    "ListQueryConfig",
    "Page",
    "SortDirection",
]
