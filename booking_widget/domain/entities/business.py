from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class BusinessRecord:
    slug: str
    name: str
    description: str | None = None
    address: str | None = None
    map_url: str | None = None
    business_type: str | None = None
    contact_email: str | None = None
    timezone: str | None = None
    services: list[dict[str, Any]] = field(default_factory=list)
    hours: dict[str, Any] = field(default_factory=dict)
    rules: dict[str, Any] = field(default_factory=dict)
