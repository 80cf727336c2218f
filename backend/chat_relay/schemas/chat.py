"""Relay Schemas: Pydantic models for the JSON bodies of the relay endpoints.

Invariants:
    - Wire names are camelCase (userId, createdAt); Python attributes are snake_case
    - Request fields are optional at the schema level: blank/missing checks live in the
      services (ValidationError) so the same rule applies to direct service callers
    - Wrong JSON types (e.g. a number for email) still fail Pydantic validation → 400

Design Decisions:
    - populate_by_name: tests and services may build responses with snake_case kwargs
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from chat_relay.core.domain_types import Exchange


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RegisterUserRequest(_CamelModel):
    name: str | None = None
    email: str | None = None


class RegisterUserResponse(_CamelModel):
    user_id: str = Field(alias="userId")
    name: str
    email: str


class ChatRequest(_CamelModel):
    user_id: str | None = Field(None, alias="userId")
    message: str | None = None


class ChatResponse(_CamelModel):
    reply: str


class GetMessagesRequest(_CamelModel):
    user_id: str | None = Field(None, alias="userId")


class ExchangeOut(_CamelModel):
    """One stored exchange as returned by /get-messages."""
    id: int
    user_id: str = Field(alias="userId")
    message: str
    reply: str
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_exchange(cls, exchange: Exchange) -> "ExchangeOut":
        return cls(
            id=exchange.id,
            user_id=exchange.user_id,
            message=exchange.message,
            reply=exchange.reply,
            created_at=exchange.created_at,
        )


class MessagesResponse(_CamelModel):
    messages: list[ExchangeOut]
