from __future__ import annotations

from typing import Iterable

from fundiconnect.application.ports.provider_roster import ProviderRosterPort
from fundiconnect.domain.entities.provider import Provider

DEMO_PROVIDERS: tuple[Provider, ...] = (
    Provider(
        id="1",
        name="John Kamau",
        category="plumbing",
        rating=4.8,
        reviews=124,
        hourly_rate=1500,
        location="Nairobi, Westlands",
        response_time="< 30 mins",
        services=("Pipe Installation", "Leak Repairs", "Drain Cleaning", "Water Heater Service"),
        phone="+254700123456",
    ),
    Provider(
        id="2",
        name="Mary Wanjiku",
        category="cleaning",
        rating=4.9,
        reviews=89,
        hourly_rate=800,
        location="Nairobi, Karen",
        response_time="< 15 mins",
        services=("House Cleaning", "Office Cleaning", "Deep Cleaning", "Move-in/out Cleaning"),
        phone="+254700234567",
    ),
    Provider(
        id="3",
        name="Peter Mwangi",
        category="electrical",
        rating=4.7,
        reviews=156,
        hourly_rate=2000,
        location="Nairobi, CBD",
        response_time="< 45 mins",
        services=("Wiring Installation", "Electrical Repairs", "Security Systems", "Solar Installation"),
        phone="+254700345678",
    ),
    Provider(
        id="4",
        name="Grace Nyambura",
        category="beauty",
        rating=5.0,
        reviews=67,
        hourly_rate=3000,
        location="Nairobi, Kilimani",
        response_time="< 20 mins",
        services=("Bridal Makeup", "Hair Styling", "Manicure/Pedicure", "Facial Treatments"),
        phone="+254700456789",
    ),
    Provider(
        id="5",
        name="David Kiprop",
        category="carpentry",
        rating=4.6,
        reviews=98,
        hourly_rate=1800,
        location="Nairobi, Kasarani",
        response_time="< 1 hour",
        services=("Custom Furniture", "Kitchen Cabinets", "Door Installation", "Home Repairs"),
    ),
    Provider(
        id="6",
        name="Sarah Atieno",
        category="tutoring",
        rating=4.9,
        reviews=234,
        hourly_rate=2500,
        location="Nairobi, Lavington",
        response_time="< 10 mins",
        services=("Mathematics Tutoring", "Physics", "Chemistry", "KCSE Preparation"),
    ),
    Provider(
        id="7",
        name="James Muthoni",
        category="masonry",
        rating=4.7,
        reviews=142,
        hourly_rate=2200,
        location="Nairobi, Embakasi",
        response_time="< 1 hour",
        services=("Stone Wall Construction", "Brick Laying", "Concrete Work", "Foundation Repair"),
        phone="+254700567890",
    ),
)


class StaticProviderRoster(ProviderRosterPort):
    def __init__(self, providers: Iterable[Provider] | None = None) -> None:
        self._providers = tuple(providers) if providers is not None else DEMO_PROVIDERS
        self._by_id = {p.id: p for p in self._providers}

    def list_providers(self) -> list[Provider]:
        return list(self._providers)

    def get_provider(self, provider_id: str) -> Provider | None:
        return self._by_id.get(str(provider_id).strip())
