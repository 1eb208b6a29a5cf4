# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Response, jsonify

from fittrack.domain.pagination import Page


def json_response(
    *,
    data: Any = None,
    message: str | None = None,
    page: Page | None = None,
    status: HTTPStatus = HTTPStatus.OK,
) -> tuple[Response, HTTPStatus]:
    payload: dict[str, Any] = {"success": True}
    if data is not None:
        payload["data"] = data
    if message:
        payload["message"] = message
    if page is not None:
        payload["page"] = page.meta()
    return jsonify(payload), status


def resource_created(data: Any, message: str = "Resource created successfully"):
    return json_response(data=data, message=message, status=HTTPStatus.CREATED)


def resource_list(data: list[Any], page: Page, message: str = HTTPStatus.OK.phrase):
    return json_response(data=data, page=page, message=message)


__all__ = ["json_response", "resource_created", "resource_list"]
