"""Response envelope returned by the request handlers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass
class ApiResponse:
    """HTTP-style response: a status code and a JSON-serializable body."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def to_json(self, indent: int = 2) -> str:
        """Convert the body to a JSON string."""
        return json.dumps(self.body, indent=indent)


def success_response(data: dict[str, Any]) -> ApiResponse:
    """200 response with the given body."""
    return ApiResponse(status_code=200, body=data)


def results_response(results: dict[str, Any]) -> ApiResponse:
    """200 response wrapping analysis or coaching results."""
    return ApiResponse(
        status_code=200,
        body={
            "success": True,
            "results": results,
            "timestamp": datetime.now().isoformat(),
        },
    )


def error_response(error: str, details: Optional[list[str]] = None) -> ApiResponse:
    """400 response for invalid input.

    Args:
        error: Error summary
        details: Individual validation failures, if any

    Returns:
        ApiResponse with status 400
    """
    body: dict[str, Any] = {"error": error}
    if details is not None:
        body["details"] = details
    return ApiResponse(status_code=400, body=body)


def internal_error_response(exc: Exception) -> ApiResponse:
    """500 response for an unexpected failure."""
    return ApiResponse(
        status_code=500,
        body={"error": "Internal server error", "message": str(exc) or "Unknown error"},
    )
