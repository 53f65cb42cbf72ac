from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

from booking_widget.application.exceptions import DispatchError, ValidationError
from booking_widget.application.ports.notifier import NotifierPort


@dataclass(frozen=True)
class MagicLinkResult:
    sent: bool
    verify_url: str


class MagicLinkUseCase:
    """
    Mocked owner login. The verification link carries the email and slug in
    clear; no credential is issued.
    """

    def __init__(
        self,
        notifier: NotifierPort,
        public_base_url: str,
        dashboard_url: str | None = None,
        ttl_minutes: int = 15,
    ) -> None:
        self._notifier = notifier
        self._public_base_url = public_base_url.rstrip("/")
        self._dashboard_url = dashboard_url
        self._ttl_minutes = ttl_minutes
        self._logger = logging.getLogger(__name__)

    def send_link(self, email: str | None, slug: str | None) -> MagicLinkResult:
        email, slug = _normalize(email, slug)
        verify_url = f"{self._public_base_url}/auth/verify?{urlencode({'email': email, 'slug': slug})}"
        text = (
            "Bonjour,\n\n"
            f"Voici votre lien de connexion pour {slug} (valide {self._ttl_minutes} min) :\n"
            f"{verify_url}\n"
        )
        try:
            self._notifier.send_email(to=email, subject="Votre lien de connexion", text=text)
        except DispatchError as e:
            self._logger.warning(
                "Magic link email not sent, returning link",
                extra={"business_slug": slug, "reason": str(e)},
            )
            return MagicLinkResult(sent=False, verify_url=verify_url)
        return MagicLinkResult(sent=True, verify_url=verify_url)

    def verify(self, email: str | None, slug: str | None) -> str | None:
        """Return the dashboard redirect URL, or None when no dashboard is configured."""
        email, slug = _normalize(email, slug)
        self._logger.info("Magic link verified", extra={"business_slug": slug})
        if not self._dashboard_url:
            return None
        separator = "&" if "?" in self._dashboard_url else "?"
        return f"{self._dashboard_url}{separator}{urlencode({'email': email, 'slug': slug})}"


def _normalize(email: str | None, slug: str | None) -> tuple[str, str]:
    email = (email or "").strip().lower()
    slug = (slug or "").strip().lower()
    if not email or "@" not in email:
        raise ValidationError("Email invalide")
    if not slug:
        raise ValidationError("Slug requis")
    return email, slug
