from dataclasses import dataclass


BOOKING = "booking"
FAQ = "faq"
OTHER = "other"

INTENTS = (BOOKING, FAQ, OTHER)


@dataclass(frozen=True)
class IntentClassification:
    intent: str = OTHER
    service_name: str | None = None
    date: str | None = None
    time: str | None = None
    party_size: int | None = None
