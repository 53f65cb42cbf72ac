from __future__ import annotations

from booking_widget.domain.entities.booking_state import BookingSlotState


def format_booking_email(business_name: str, state: BookingSlotState) -> tuple[str, str]:
    """Return (subject, plain-text body) for a confirmed booking."""
    subject = f"Nouvelle demande de rendez-vous : {state.service} le {state.date} à {state.time}"
    body = "\n".join(
        [
            f"Bonjour {business_name},",
            "",
            "Un client vient de confirmer une demande de rendez-vous via le widget de chat.",
            "",
            f"Service : {state.service}",
            f"Date : {state.date}",
            f"Heure : {state.time}",
            f"Session : {state.session_id}",
            "",
            "Merci de recontacter le client pour finaliser le rendez-vous.",
        ]
    )
    return subject, body
