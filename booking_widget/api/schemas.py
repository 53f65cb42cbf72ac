from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class KBBusinessSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str | None = None
    business_type: str | None = None
    timezone: str | None = None
    contact_email: str | None = None


class KBServiceSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    name: str
    duration_min: int | None = None
    price_chf: float | None = None


class KBFaqSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    q: str | None = None
    a: str | None = None
    question: str | None = None
    answer: str | None = None


class KnowledgeBaseSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    business: KBBusinessSchema = Field(default_factory=KBBusinessSchema)
    hours_text: str | None = None
    services: list[KBServiceSchema] = Field(default_factory=list)
    faq: list[KBFaqSchema] = Field(default_factory=list)
    contact_email: str | None = None


class ChatRequestSchema(BaseModel):
    # Required fields are checked by the use case so a missing one yields a 400, not a 422.
    business_slug: str | None = None
    session_id: str | None = None
    message: str | None = None
    kb: KnowledgeBaseSchema | None = None


class ReplySchema(BaseModel):
    text: str


class ChatResponseSchema(BaseModel):
    session_id: str
    reply: ReplySchema


class BusinessUpsertSchema(BaseModel):
    name: str
    description: str | None = None
    address: str | None = None
    map_url: str | None = None
    business_type: str | None = None
    contact_email: str | None = None
    timezone: str | None = None
    services: list[dict[str, Any]] = Field(default_factory=list)
    hours: dict[str, Any] = Field(default_factory=dict)
    rules: dict[str, Any] = Field(default_factory=dict)


class BusinessPublicSchema(BaseModel):
    slug: str
    name: str
    description: str | None = None
    address: str | None = None
    map_url: str | None = None
    business_type: str | None = None
    timezone: str | None = None
    services: list[dict[str, Any]] = Field(default_factory=list)
    hours: dict[str, Any] = Field(default_factory=dict)
    rules: dict[str, Any] = Field(default_factory=dict)


class SendLinkRequestSchema(BaseModel):
    email: str | None = None
    slug: str | None = None


class SendLinkResponseSchema(BaseModel):
    ok: bool = True
    sent: bool
    verify_url: str | None = None
