# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from fittrack.infrastructure.db.models import User
from fittrack.infrastructure.query.list_query import (
    FilterField,
    FilterOperator,
    ListQueryBuilder,
    ListQueryConfig,
)
from fittrack.shared.config import load_config

USER_LIST_CONFIG = ListQueryConfig(
    model=User,
    sort_columns={
        "id": User.id,
        "username": User.username,
        "name": User.name,
        "lastName": User.last_name,
        "email": User.email,
        "createdAt": User.created_at,
        "updatedAt": User.updated_at,
        "height": User.height,
        "weight": User.weight,
        "targetWeight": User.target_weight,
        "country": User.country,
        "city": User.city,
        "dateOfBirth": User.date_of_birth,
    },
    default_sort="id",
    filters={
        "search": FilterField(
            FilterOperator.SEARCH, (User.username, User.name, User.last_name, User.email)
        ),
        "type": FilterField(FilterOperator.EQUALS, (User.type,)),
        "gender": FilterField(FilterOperator.EQUALS, (User.gender,)),
        "activityLevel": FilterField(FilterOperator.EQUALS, (User.activity_level,)),
        "firstLogin": FilterField(FilterOperator.EQUALS, (User.first_login,)),
    },
    max_limit=load_config().pagination.max_limit,
    redacted_fields=frozenset({"password_hash"}),
)

USER_LIST_QUERY = ListQueryBuilder(USER_LIST_CONFIG)

__all__ = ["USER_LIST_CONFIG", "USER_LIST_QUERY"]
