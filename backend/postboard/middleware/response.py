"""
Postboard Backend — Response Envelope
=======================================

What:  Wraps successful handler results in the uniform success envelope.
Who:   Applied by `PipelineRoute` to every route whose options enable the
       envelope (all routes except health, metrics and docs).

Shaping rules (first match wins):
    1. {"success": <bool>, ...}         → unchanged
    2. {"data": ..., "meta": ...}       → {success, data, meta, timestamp}
    3. {"message": ...} without "data"  → {success, data: null, message, timestamp}
    4. anything else                    → {success, data: <result>, timestamp}

Pydantic models are dumped (camelCase, JSON-safe) before the rules are
checked, so a `Page` takes rule 2 and a `PostRead` takes rule 4.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi.encoders import jsonable_encoder


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. 2024-01-15T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize(result: Any) -> Dict[str, Any]:
    result = jsonable_encoder(result, by_alias=True)

    if isinstance(result, dict):
        if isinstance(result.get("success"), bool):
            return result
        if "data" in result and "meta" in result:
            return {
                "success": True,
                "data": result["data"],
                "meta": result["meta"],
                "timestamp": utc_timestamp(),
            }
        if "message" in result and "data" not in result:
            return {
                "success": True,
                "data": None,
                "message": result["message"],
                "timestamp": utc_timestamp(),
            }

    return {"success": True, "data": result, "timestamp": utc_timestamp()}
