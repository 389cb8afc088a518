"""Response envelope shared by the engine's API views."""

from __future__ import annotations

from typing import Any

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore


def success_response(data: Any = None, message: str | None = None, status_code: int = status.HTTP_200_OK) -> Response:
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return Response(body, status=status_code)
