from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Service:
    name: str
    price_minor: int | None = None
    duration_minutes: int | None = None


@dataclass(frozen=True)
class FaqEntry:
    question: str
    answer: str


@dataclass(frozen=True)
class KnowledgeBase:
    business_name: str
    business_type: str | None = None
    timezone: str | None = None
    hours_text: str | None = None
    services: tuple[Service, ...] = field(default_factory=tuple)
    faq: tuple[FaqEntry, ...] = field(default_factory=tuple)
    contact_email: str | None = None
