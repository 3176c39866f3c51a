"""Helpers for consistent JSON responses.

Successful responses return the payload as the top-level JSON document; errors
always carry ``{"error": <message>, "code": <code>, "details": <details>}``.
"""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify


def ok(data: Any, status_code: int = 200) -> Response:
    """Success response."""

    return jsonify(data), status_code


def fail(code: str, message: str, status_code: int, details: Any | None = None) -> Response:
    """Error response."""

    return jsonify({"error": message, "code": code, "details": details}), status_code
