"""
OmniCognitor Gateway: Create-Request Schemas
=============================================

What:  Pydantic models for the JSON bodies accepted by the create endpoints.
How:   Clients send camelCase keys (`ownerId`, `conversationId`, ...); each
       model declares them as aliases and `to_row()` renames them to the
       snake_case columns of the upstream table. Fields are typed `Any`:
       values are forwarded exactly as the client sent them, and column
       types, uniqueness and foreign keys are the database's business.

Required-field checks are done here rather than by Pydantic so the gateway can
answer with 400 and a single readable message instead of FastAPI's 422 list.
"""

from typing import Any, ClassVar, Dict, List, Tuple

from pydantic import BaseModel, Field

from omnicognitor.exceptions import ValidationError


def is_blank(value: Any) -> bool:
    """A required field counts as missing when None, empty or whitespace."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


class CreateRequest(BaseModel):
    """
    Base class for create bodies.

    Subclasses set:
        REQUIRED:         attribute names that must be non-blank
        REQUIRED_MESSAGE: 400 message when any of them is missing
    """

    REQUIRED: ClassVar[Tuple[str, ...]] = ()
    REQUIRED_MESSAGE: ClassVar[str] = "Required fields are missing"

    model_config = {"extra": "ignore", "populate_by_name": True}

    @classmethod
    def from_body(cls, raw: Any) -> "CreateRequest":
        """
        Build the request from a decoded JSON body.

        Anything that is not a JSON object is treated as `{}` so it fails
        the required-field check with the usual message.

        Raises:
            ValidationError: a required field is missing or blank (→ 400)
        """
        if not isinstance(raw, dict):
            raw = {}

        model = cls.model_validate(raw)
        missing = model.missing_fields()
        if missing:
            raise ValidationError(message=cls.REQUIRED_MESSAGE, fields=missing)
        return model

    def missing_fields(self) -> List[str]:
        return [name for name in self.REQUIRED if is_blank(getattr(self, name))]

    def to_row(self) -> Dict[str, Any]:
        """Row forwarded to the upstream insert, keyed by column name."""
        raise NotImplementedError


class CreateUserRequest(CreateRequest):
    REQUIRED = ("username",)
    REQUIRED_MESSAGE = "Username is required"

    username: Any = None
    email: Any = None

    def to_row(self) -> Dict[str, Any]:
        return {"username": self.username, "email": self.email}


class CreatePlatformRequest(CreateRequest):
    REQUIRED = ("name",)
    REQUIRED_MESSAGE = "Name is required"

    name: Any = None
    type: Any = None

    def to_row(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type}


class CreateWorkspaceRequest(CreateRequest):
    REQUIRED = ("name", "owner_id")
    REQUIRED_MESSAGE = "Name and ownerId are required"

    name: Any = None
    description: Any = None
    owner_id: Any = Field(default=None, alias="ownerId")
    is_public: Any = Field(default=None, alias="isPublic")

    def to_row(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "owner_id": self.owner_id,
            # The only coerced column: any truthy value publishes the workspace
            "is_public": bool(self.is_public),
        }


class CreateConversationRequest(CreateRequest):
    REQUIRED = ("workspace_id", "user_id")
    REQUIRED_MESSAGE = "workspaceId and userId are required"

    workspace_id: Any = Field(default=None, alias="workspaceId")
    user_id: Any = Field(default=None, alias="userId")
    platform_id: Any = Field(default=None, alias="platformId")

    def to_row(self) -> Dict[str, Any]:
        return {
            "workspace_id": self.workspace_id,
            "user_id": self.user_id,
            "platform_id": self.platform_id,
        }


class CreateMessageRequest(CreateRequest):
    REQUIRED = ("conversation_id", "content", "author_id")
    REQUIRED_MESSAGE = "conversationId, content, and authorId are required"

    conversation_id: Any = Field(default=None, alias="conversationId")
    content: Any = None
    author_id: Any = Field(default=None, alias="authorId")
    # Only a missing or null type falls back to "user"
    type: Any = None

    def to_row(self) -> Dict[str, Any]:
        return {
            "conversation_id": self.conversation_id,
            "content": self.content,
            "author_id": self.author_id,
            "type": self.type if self.type is not None else "user",
        }
