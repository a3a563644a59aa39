"""Request body dependencies for API routes."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import Request

logger = logging.getLogger(__name__)


async def read_json_body(request: Request) -> Any:
    """Return the decoded JSON body, or ``None`` when it is empty or malformed.

    Routes declare this instead of a body model so the body is only read
    once the admin guard has run; field checks are left to the services.
    """

    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.debug("Ignoring malformed JSON body on %s", request.url.path)
        return None


def json_field(payload: Any, name: str) -> Any:
    """Return ``payload[name]`` when the body is a JSON object, else ``None``."""

    if isinstance(payload, dict):
        return payload.get(name)
    return None


__all__ = ["json_field", "read_json_body"]
