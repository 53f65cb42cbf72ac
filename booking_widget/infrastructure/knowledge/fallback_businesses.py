from __future__ import annotations

from booking_widget.domain.entities.business import BusinessRecord

ATELIER_ROMA = BusinessRecord(
    slug="atelier-roma",
    name="Atelier Roma",
    description="Salon de coiffure et barbier.",
    business_type="hair_salon",
    timezone="Europe/Zurich",
    services=[
        {"id": "svc_1", "name": "Coupe homme", "duration_min": 30, "price_chf": 35},
        {"id": "svc_2", "name": "Barbe", "duration_min": 20, "price_chf": 25},
        {"id": "svc_3", "name": "Coupe + barbe", "duration_min": 50, "price_chf": 55},
    ],
    hours={"text": "Lun-Ven 09:00-18:00, Sam 09:00-16:00"},
    rules={
        "faq": [
            {"q": "Acceptez-vous Twint ?", "a": "Oui, Twint est accepté."},
            {"q": "Faites-vous sans rendez-vous ?", "a": "Non, uniquement sur rendez-vous."},
        ]
    },
)

FALLBACK_BUSINESSES: dict[str, BusinessRecord] = {
    ATELIER_ROMA.slug: ATELIER_ROMA,
}
