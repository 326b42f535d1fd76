"""JSON envelope shared by every API route: `{success, message?, ...data}`."""
from __future__ import annotations

from typing import Any, Optional

from flask import jsonify


def ok(message: Optional[str] = None, **payload: Any):
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    body.update(payload)
    return jsonify(body)


def fail(message: str, status: int = 500, **payload: Any):
    body: dict[str, Any] = {"success": False, "message": message}
    body.update(payload)
    return jsonify(body), status
