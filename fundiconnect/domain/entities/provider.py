from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

SERVICE_CATEGORIES: tuple[str, ...] = (
    "plumbing",
    "cleaning",
    "electrical",
    "beauty",
    "carpentry",
    "tutoring",
    "masonry",
)

CATEGORY_DISPLAY_NAMES: dict[str, str] = {
    "plumbing": "Plumbing",
    "cleaning": "Cleaning",
    "electrical": "Electrical",
    "beauty": "Beauty",
    "carpentry": "Carpentry",
    "tutoring": "Tutoring",
    "masonry": "Masonry",
}

RESPONSE_TIME_BUCKETS: tuple[str, ...] = (
    "< 10 mins",
    "< 15 mins",
    "< 30 mins",
    "< 45 mins",
    "< 1 hour",
    "< 2 hours",
)


@dataclass(frozen=True)
class Provider:
    id: str
    name: str
    category: str
    rating: float
    reviews: int
    hourly_rate: int
    location: str
    response_time: str
    services: tuple[str, ...] = ()
    phone: str | None = None
    image: str | None = None

    @staticmethod
    def from_row(row: Mapping[str, Any]) -> "Provider":
        """
        Build a Provider from a database row or JSON record.

        Accepts both the storefront's camelCase columns (hourlyRate, responseTime)
        and snake_case keys. Raises ValueError for out-of-range rating or rate.
        """
        provider_id = _first(row, "id", "provider_id")
        if provider_id in (None, ""):
            raise ValueError("Provider row is missing an id.")

        rating = float(_first(row, "rating", default=0) or 0)
        if not 0.0 <= rating <= 5.0:
            raise ValueError(f"Provider {provider_id}: rating must be within [0, 5], got {rating}")

        hourly_rate = int(_first(row, "hourly_rate", "hourlyRate", default=0) or 0)
        if hourly_rate <= 0:
            raise ValueError(f"Provider {provider_id}: hourly rate must be positive, got {hourly_rate}")

        reviews = int(_first(row, "reviews", default=0) or 0)
        services = _first(row, "services", default=()) or ()

        return Provider(
            id=str(provider_id),
            name=str(_first(row, "name", "full_name", default="") or "").strip(),
            category=str(_first(row, "category", default="") or "").strip(),
            rating=rating,
            reviews=max(0, reviews),
            hourly_rate=hourly_rate,
            location=str(_first(row, "location", default="") or "").strip(),
            response_time=str(_first(row, "response_time", "responseTime", default="") or "").strip(),
            services=tuple(str(s).strip() for s in services if s and str(s).strip()),
            phone=_first(row, "phone"),
            image=_first(row, "image", "image_url", "profile_image"),
        )


def _first(row: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return default
