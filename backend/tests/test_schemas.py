"""
OmniCognitor Gateway: Create-Request Schema Tests
==================================================

What we test:
    ✅ Required-field messages per resource
    ✅ Blank values (empty / whitespace) count as missing
    ✅ Non-object bodies behave like `{}`
    ✅ Values forwarded as sent (no local type checks)
    ✅ camelCase → snake_case row mapping and defaults
"""

import pytest

from omnicognitor.exceptions import ValidationError
from omnicognitor.schemas.resources import (
    CreateConversationRequest,
    CreateMessageRequest,
    CreatePlatformRequest,
    CreateUserRequest,
    CreateWorkspaceRequest,
    is_blank,
)


class TestIsBlank:

    @pytest.mark.parametrize("value", [None, "", "   ", "\n"])
    def test_blank(self, value):
        assert is_blank(value)

    @pytest.mark.parametrize("value", ["a", 0, 42, False])
    def test_not_blank(self, value):
        assert not is_blank(value)


class TestRequiredFields:

    @pytest.mark.parametrize(
        "schema, body, missing",
        [
            (CreateUserRequest, {"username": "  "}, ["username"]),
            (CreatePlatformRequest, {"type": "chat"}, ["name"]),
            (CreateWorkspaceRequest, {"name": "Lab"}, ["owner_id"]),
            (CreateConversationRequest, {"userId": 3}, ["workspace_id"]),
            (CreateMessageRequest, {"content": "hi"}, ["conversation_id", "author_id"]),
        ],
    )
    def test_missing_fields_reported(self, schema, body, missing):
        with pytest.raises(ValidationError) as exc_info:
            schema.from_body(body)

        assert exc_info.value.message == schema.REQUIRED_MESSAGE
        assert exc_info.value.fields == missing
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize("body", [None, [], "username", 42])
    def test_non_object_body_is_treated_as_empty(self, body):
        with pytest.raises(ValidationError) as exc_info:
            CreateUserRequest.from_body(body)
        assert exc_info.value.message == "Username is required"


class TestRowMapping:

    def test_values_forwarded_without_type_checks(self):
        row = CreateUserRequest.from_body({"username": ["alice"], "email": 42}).to_row()
        assert row == {"username": ["alice"], "email": 42}

    def test_identifiers_are_not_coerced(self):
        row = CreateWorkspaceRequest.from_body(
            {"name": "Lab", "ownerId": True, "description": {"lang": "en"}}
        ).to_row()
        assert row["owner_id"] is True
        assert row["description"] == {"lang": "en"}

    @pytest.mark.parametrize(
        "raw, expected",
        [(None, False), (0, False), ("", False), (1, True), ("yes", True), (True, True)],
    )
    def test_is_public_is_truthiness(self, raw, expected):
        row = CreateWorkspaceRequest.from_body(
            {"name": "Lab", "ownerId": 1, "isPublic": raw}
        ).to_row()
        assert row["is_public"] is expected

    def test_message_empty_type_is_kept(self):
        row = CreateMessageRequest.from_body(
            {"conversationId": 1, "content": "hi", "authorId": 2, "type": ""}
        ).to_row()
        assert row["type"] == ""

    def test_message_null_type_defaults_to_user(self):
        row = CreateMessageRequest.from_body(
            {"conversationId": 1, "content": "hi", "authorId": 2, "type": None}
        ).to_row()
        assert row["type"] == "user"

    def test_user_row(self):
        row = CreateUserRequest.from_body({"username": "alice"}).to_row()
        assert row == {"username": "alice", "email": None}

    def test_workspace_row_defaults(self):
        row = CreateWorkspaceRequest.from_body({"name": "Lab", "ownerId": 4}).to_row()
        assert row == {"name": "Lab", "description": None, "owner_id": 4, "is_public": False}

    def test_conversation_row(self):
        row = CreateConversationRequest.from_body(
            {"workspaceId": "w-1", "userId": "u-1", "platformId": 2}
        ).to_row()
        assert row == {"workspace_id": "w-1", "user_id": "u-1", "platform_id": 2}

    def test_message_row_keeps_explicit_type(self):
        row = CreateMessageRequest.from_body(
            {"conversationId": 1, "content": "hi", "authorId": 2, "type": "assistant"}
        ).to_row()
        assert row == {
            "conversation_id": 1,
            "content": "hi",
            "author_id": 2,
            "type": "assistant",
        }

    def test_unknown_keys_are_dropped(self):
        row = CreatePlatformRequest.from_body({"name": "slack", "secret": "x"}).to_row()
        assert row == {"name": "slack", "type": None}
