from __future__ import annotations

from booking_widget.domain.entities.knowledge_base import KnowledgeBase


def build_classify_prompt(message: str, kb: KnowledgeBase | None) -> str:
    services = [s.name for s in (kb.services if kb else ())]
    services_block = "\n".join(f"  - {name}" for name in services) or "  (aucun)"

    return (
        "Tu es un analyseur de messages pour un widget de prise de rendez-vous.\n"
        "Retourne UNIQUEMENT un JSON valide. Aucune phrase, aucun commentaire, pas de markdown.\n"
        "Schéma attendu :\n"
        "  {\"intent\": \"booking|faq|other\", \"service_name\": string|null, \"date\": string|null,"
        " \"time\": string|null, \"party_size\": number|null}\n"
        "Règles :\n"
        "  - N'invente rien. Si une info n'est pas claire, mets null.\n"
        "  - intent = \"booking\" si le client veut prendre, déplacer ou réserver un rendez-vous.\n"
        "  - intent = \"faq\" pour une question sur les horaires, les services, les prix ou le fonctionnement.\n"
        "  - Sinon intent = \"other\".\n"
        "  - La date doit être YYYY-MM-DD si identifiable.\n"
        "  - L'heure doit être HH:MM (24h) si identifiable.\n"
        "\n"
        "Services disponibles :\n"
        f"{services_block}\n"
        "\n"
        f"Message client : {message!r}\n"
    )
