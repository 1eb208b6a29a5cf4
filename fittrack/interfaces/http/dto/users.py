from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from fittrack.domain.pagination import ListParams, SortDirection
from fittrack.domain.users.entities import ActivityLevel, Gender, UserType
from fittrack.shared.config import load_config


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
    )


class CreateUserRequestDTO(CamelModel):
    username: str = Field(min_length=3, max_length=50)
    name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=8, max_length=128)
    type: UserType = UserType.USER
    first_login: bool = True
    date_of_birth: date | None = None


class ChangePasswordRequestDTO(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=3, max_length=50)
    new_password: str = Field(min_length=3, max_length=50)


class UserPublicDTO(CamelModel):
    """Outbound user shape; carries no credential field."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )

    id: int
    username: str
    name: str
    last_name: str
    email: str
    type: UserType
    first_login: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    height: float | None = None
    weight: float | None = None
    target_weight: float | None = None
    country: str | None = None
    city: str | None = None
    phone: str | None = None
    occupation: str | None = None
    date_of_birth: date | None = None
    gender: Gender | None = None
    activity_level: ActivityLevel | None = None

    @classmethod
    def render(cls, source: Any) -> dict[str, Any]:
        if isinstance(source, dict):
            model = cls.model_validate(source)
        else:
            model = cls.model_validate(source, from_attributes=True)
        return model.model_dump(by_alias=True, mode="json")


class ListUsersQueryDTO(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
        extra="ignore",
    )

    page: int = Field(1, ge=1)
    # Default and upper bound come from PaginationConfig.
    limit: int | None = Field(None, ge=1, validate_default=True)
    sort_by: str | None = None
    sort_direction: SortDirection = SortDirection.ASC
    search: str | None = None
    type: UserType | None = None
    gender: Gender | None = None
    activity_level: ActivityLevel | None = None
    first_login: bool | None = None

    @field_validator("sort_direction", mode="before")
    @classmethod
    def _coerce_direction(cls, value: Any) -> SortDirection:
        return SortDirection.coerce(value)

    @field_validator("limit")
    @classmethod
    def _bounded_limit(cls, value: int | None) -> int:
        pagination = load_config().pagination
        if value is None:
            return pagination.default_limit
        if value > pagination.max_limit:
            raise ValueError(f"limit must be at most {pagination.max_limit}")
        return value

    @field_validator("search", mode="before")
    @classmethod
    def _blank_search(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_params(self) -> ListParams:
        return ListParams(
            page=self.page,
            limit=self.limit,
            sort_by=self.sort_by,
            sort_direction=self.sort_direction,
            filters={
                "search": self.search,
                "type": self.type,
                "gender": self.gender,
                "activityLevel": self.activity_level,
                "firstLogin": self.first_login,
            },
        )
