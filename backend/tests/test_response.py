"""
Postboard Backend — Response Envelope Tests
=============================================

What we test:
    ✅ The four shaping rules, in order
    ✅ Idempotence on already-enveloped results
    ✅ Pydantic models are dumped with camelCase keys
    ✅ Timestamp format: ISO-8601 UTC with milliseconds
"""

import re

import pytest

from postboard.middleware.response import normalize, utc_timestamp
from postboard.schemas.common import Page, PageMeta

TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


class TestNormalize:

    def test_already_enveloped_passes_through(self):
        result = {"success": False, "data": None, "custom": 1}
        assert normalize(result) == result

    def test_paginated_shape(self):
        result = normalize({"data": [1, 2], "meta": {"total": 2}})

        assert result["success"] is True
        assert result["data"] == [1, 2]
        assert result["meta"] == {"total": 2}
        assert set(result) == {"success", "data", "meta", "timestamp"}

    def test_message_shape(self):
        result = normalize({"message": "Usuario eliminado exitosamente"})

        assert result["success"] is True
        assert result["data"] is None
        assert result["message"] == "Usuario eliminado exitosamente"

    def test_message_beside_data_stays_in_data(self):
        result = normalize({"data": [1], "message": "hi"})

        assert result["data"] == {"data": [1], "message": "hi"}
        assert "message" not in result

    @pytest.mark.parametrize("value", [{"id": 1, "name": "John"}, None, 42, "Hello World!", [1, 2]])
    def test_everything_else_becomes_data(self, value):
        result = normalize(value)

        assert result["success"] is True
        assert result["data"] == value
        assert "meta" not in result

    def test_success_field_must_be_boolean(self):
        result = normalize({"success": "yes"})
        assert result["data"] == {"success": "yes"}

    @pytest.mark.parametrize("value", [
        {"data": [], "meta": {"total": 0}},
        {"message": "done"},
        {"id": 1},
        None,
        "text",
    ])
    def test_idempotent(self, value):
        once = normalize(value)
        assert normalize(once) == once

    def test_page_model_is_dumped_by_alias(self):
        page = Page(data=[], meta=PageMeta(total=3, limit=2, offset=2, has_more=False))

        result = normalize(page)

        assert result["meta"] == {"total": 3, "limit": 2, "offset": 2, "hasMore": False}

    def test_timestamp_format(self):
        assert TIMESTAMP_RE.match(utc_timestamp())
        assert TIMESTAMP_RE.match(normalize(None)["timestamp"])
