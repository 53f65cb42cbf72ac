from __future__ import annotations

import hmac
import logging
from typing import Any, Mapping
from urllib.parse import quote_plus

from booking_widget.application.exceptions import NotFoundError, UnauthorizedError, ValidationError
from booking_widget.application.ports.business_store import BusinessStorePort
from booking_widget.domain.entities.business import BusinessRecord

MAP_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query="


class ManageBusinessUseCase:
    def __init__(
        self,
        store: BusinessStorePort,
        admin_token: str | None,
        fallbacks: Mapping[str, BusinessRecord] | None = None,
    ) -> None:
        self._store = store
        self._admin_token = admin_token
        self._fallbacks = dict(fallbacks or {})
        self._logger = logging.getLogger(__name__)

    def get_public(self, slug: str) -> dict[str, Any]:
        """Non-sensitive view of a business. Raises NotFoundError, StorageError."""
        record = self._store.get(slug) or self._fallbacks.get(slug)
        if record is None:
            raise NotFoundError(f"Unknown business: {slug}")
        return {
            "slug": record.slug,
            "name": record.name,
            "description": record.description,
            "address": record.address,
            "map_url": record.map_url or build_map_url(record.address),
            "business_type": record.business_type,
            "timezone": record.timezone,
            "services": list(record.services or []),
            "hours": dict(record.hours or {}),
            "rules": dict(record.rules or {}),
        }

    def upsert(self, slug: str, payload: Mapping[str, Any], token: str | None) -> BusinessRecord:
        self.check_admin_token(token)
        slug = (slug or "").strip().lower()
        name = str(payload.get("name") or "").strip()
        if not slug or not name:
            raise ValidationError("slug et name requis.")

        record = BusinessRecord(
            slug=slug,
            name=name,
            description=payload.get("description"),
            address=payload.get("address"),
            map_url=payload.get("map_url"),
            business_type=payload.get("business_type"),
            contact_email=payload.get("contact_email"),
            timezone=payload.get("timezone"),
            services=list(payload.get("services") or []),
            hours=dict(payload.get("hours") or {}),
            rules=dict(payload.get("rules") or {}),
        )
        return self._store.upsert(record)

    def check_admin_token(self, token: str | None) -> None:
        if not self._admin_token or not token:
            raise UnauthorizedError("Missing admin token")
        if not hmac.compare_digest(self._admin_token.encode("utf-8"), token.encode("utf-8")):
            self._logger.warning("Admin token mismatch", extra={"reason": "bad_token"})
            raise UnauthorizedError("Invalid admin token")


def build_map_url(address: str | None) -> str | None:
    if not address or not address.strip():
        return None
    return MAP_SEARCH_URL + quote_plus(address.strip())
