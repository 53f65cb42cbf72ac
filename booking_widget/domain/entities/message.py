from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ChatMessage:
    business_slug: str
    text: str
    session_id: str | None = None
    kb_payload: dict[str, Any] | None = None
