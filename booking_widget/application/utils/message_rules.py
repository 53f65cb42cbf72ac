from __future__ import annotations

import re
import unicodedata
from difflib import SequenceMatcher
from typing import Iterable

from booking_widget.domain.entities.knowledge_base import FaqEntry, Service

CONFIRMATION_TOKENS = (
    "oui",
    "ok",
    "okay",
    "confirme",
    "confirmer",
    "d'accord",
    "dac",
    "go",
    "c'est bon",
    "parfait",
    "valide",
    "yes",
)

HOURS_KEYWORDS = ("horaire", "heures d'ouverture", "ouvert", "ouverture", "ferme", "quand etes-vous")
SERVICES_KEYWORDS = ("services", "prestations", "tarifs", "prix", "combien")

STOPWORDS = {
    "le", "la", "les", "de", "des", "du", "un", "une", "est", "et", "a", "au", "aux",
    "vous", "je", "tu", "il", "on", "ce", "que", "qui", "quoi", "pour", "en", "avec",
    "sans", "faites", "acceptez", "quel", "quelle",
}


def strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_text(text: str) -> str:
    normalized = strip_accents((text or "").lower()).replace("’", "'").replace("`", "'")
    return re.sub(r"\s+", " ", normalized).strip()


def is_confirmation(text: str) -> bool:
    normalized = normalize_text(text)
    if not normalized:
        return False
    return any(normalized == token or token in normalized for token in CONFIRMATION_TOKENS)


def match_service(text: str, services: Iterable[Service]) -> Service | None:
    """Return the first catalog service whose name is contained in the message (case-insensitive)."""
    normalized = (text or "").lower()
    for service in services:
        name = service.name.strip().lower()
        if name and name in normalized:
            return service
    return None


def asks_about_hours(text: str) -> bool:
    normalized = normalize_text(text)
    return any(keyword in normalized for keyword in HOURS_KEYWORDS)


def asks_about_services(text: str) -> bool:
    normalized = normalize_text(text)
    return any(keyword in normalized for keyword in SERVICES_KEYWORDS)


def find_faq_answer(text: str, faq: Iterable[FaqEntry], threshold: float = 0.5) -> FaqEntry | None:
    """Best FAQ entry by keyword overlap, falling back to fuzzy similarity of the whole question."""
    message_words = _keywords(text)
    best: FaqEntry | None = None
    best_score = 0.0
    for entry in faq:
        question_words = _keywords(entry.question)
        if not question_words:
            continue
        overlap = len(message_words & question_words) / len(question_words)
        similarity = SequenceMatcher(None, normalize_text(entry.question), normalize_text(text)).ratio()
        score = max(overlap, similarity if similarity >= 0.75 else 0.0)
        if score > best_score:
            best, best_score = entry, score
    if best_score >= threshold:
        return best
    return None


def _keywords(text: str) -> set[str]:
    words = re.findall(r"[a-z0-9']+", normalize_text(text))
    return {w for w in words if w not in STOPWORDS and len(w) > 1}
