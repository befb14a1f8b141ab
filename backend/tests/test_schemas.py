"""
Postboard Backend — Request Schema Tests
==========================================

What:  Tests for the user and post request validators.

What we test:
    ✅ Valid create payloads pass and keep only known fields
    ✅ Each broken constraint reports its pydantic error type
    ✅ Unknown fields are rejected, not dropped
    ✅ Update payloads: everything optional, explicit null rejected
    ✅ camelCase input keys and output aliases
"""

import pytest
from pydantic import ValidationError

from postboard.schemas.post import PostCreate, PostRead, PostUpdate
from postboard.schemas.user import UserCreate, UserUpdate


def error_types(exc_info) -> dict:
    return {".".join(str(p) for p in e["loc"]): e["type"] for e in exc_info.value.errors()}


class TestUserCreate:

    def test_valid_payload(self):
        user = UserCreate(email="test@example.com", name="John Doe", age=25)
        assert user.email == "test@example.com"
        assert user.name == "John Doe"
        assert user.age == 25

    def test_age_is_optional(self):
        user = UserCreate.model_validate({"email": "test@example.com", "name": "John"})
        assert user.age is None

    def test_invalid_email(self):
        with pytest.raises(ValidationError) as exc_info:
            UserCreate.model_validate({"email": "not-an-email", "name": "John"})
        assert error_types(exc_info) == {"email": "value_error"}

    def test_short_name(self):
        with pytest.raises(ValidationError) as exc_info:
            UserCreate.model_validate({"email": "test@example.com", "name": "J"})
        assert error_types(exc_info) == {"name": "string_too_short"}

    def test_underage(self):
        with pytest.raises(ValidationError) as exc_info:
            UserCreate.model_validate({"email": "test@example.com", "name": "John", "age": 17})
        assert error_types(exc_info) == {"age": "greater_than_equal"}

    def test_age_must_be_integer(self):
        with pytest.raises(ValidationError) as exc_info:
            UserCreate.model_validate({"email": "test@example.com", "name": "John", "age": "25"})
        assert error_types(exc_info) == {"age": "int_type"}

    def test_every_violated_field_is_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            UserCreate.model_validate({"email": "bad", "name": "J", "age": 10})
        assert set(error_types(exc_info)) == {"email", "name", "age"}

    def test_missing_required_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            UserCreate.model_validate({})
        assert error_types(exc_info) == {"email": "missing", "name": "missing"}

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            UserCreate.model_validate(
                {"email": "test@example.com", "name": "John", "isAdmin": True}
            )
        assert error_types(exc_info) == {"isAdmin": "extra_forbidden"}


class TestUserUpdate:

    def test_empty_payload_is_valid(self):
        update = UserUpdate.model_validate({})
        assert update.model_dump(exclude_unset=True) == {}

    def test_only_given_fields_are_set(self):
        update = UserUpdate.model_validate({"name": "Updated Name"})
        assert update.model_dump(exclude_unset=True) == {"name": "Updated Name"}

    def test_same_constraints_as_create(self):
        with pytest.raises(ValidationError) as exc_info:
            UserUpdate.model_validate({"name": "J", "age": 5})
        assert error_types(exc_info) == {"name": "string_too_short", "age": "greater_than_equal"}

    def test_null_on_required_column_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            UserUpdate.model_validate({"email": None})
        assert error_types(exc_info) == {"email": "null_not_allowed"}

    def test_null_age_clears_it(self):
        update = UserUpdate.model_validate({"age": None})
        assert update.model_dump(exclude_unset=True) == {"age": None}


class TestPostSchemas:

    def test_create_with_camel_case_keys(self):
        post = PostCreate.model_validate(
            {"title": "Test Post", "content": "Body", "authorId": 1, "tagIds": [1, 2]}
        )
        assert post.author_id == 1
        assert post.tag_ids == [1, 2]
        assert post.published is False

    def test_create_requires_title_and_author(self):
        with pytest.raises(ValidationError) as exc_info:
            PostCreate.model_validate({"content": "Body"})
        assert error_types(exc_info) == {"title": "missing", "authorId": "missing"}

    def test_create_rejects_empty_title(self):
        with pytest.raises(ValidationError) as exc_info:
            PostCreate.model_validate({"title": "", "authorId": 1})
        assert error_types(exc_info) == {"title": "string_too_short"}

    def test_create_rejects_unknown_field(self):
        with pytest.raises(ValidationError) as exc_info:
            PostCreate.model_validate({"title": "T", "authorId": 1, "views": 3})
        assert error_types(exc_info) == {"views": "extra_forbidden"}

    def test_update_keeps_only_given_fields(self):
        update = PostUpdate.model_validate({"title": "Updated Post", "tagIds": []})
        assert update.model_dump(exclude_unset=True) == {"title": "Updated Post", "tag_ids": []}

    def test_update_rejects_null_title(self):
        with pytest.raises(ValidationError) as exc_info:
            PostUpdate.model_validate({"title": None})
        assert error_types(exc_info) == {"title": "null_not_allowed"}

    def test_read_model_dumps_camel_case(self, make_post):
        dumped = PostRead.model_validate(make_post()).model_dump(mode="json", by_alias=True)
        assert dumped["authorId"] == 1
        assert "createdAt" in dumped
        assert dumped["author"] == {"id": 1, "name": "John Doe", "email": "john@example.com"}
