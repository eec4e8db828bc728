from __future__ import annotations

import re
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping

from fundiconnect.domain.entities.quotation import Quotation
from fundiconnect.domain.entities.reply import BotReply

_HOURS_RE = re.compile(r"(\d+)")

_MESSAGE_TYPES = {"quotation": "quotation", "contact": "provider-match"}


class WebChatFormatter:
    """
    Renders replies as chat-widget messages:
    {id, type, text, isBot, timestamp, data, actions}.

    Quotation cards in `data` use the widget's camelCase keys and can be read
    back with `quotations_from_payload`.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock

    def render(self, reply: BotReply) -> dict[str, Any]:
        parts = [p for p in (reply.title, reply.body, reply.footer) if p]
        actions: list[dict[str, str]] = []
        for row in reply.buttons:
            for button in row:
                if button.url:
                    actions.append({"label": button.label, "url": button.url})
                elif button.action:
                    actions.append({"label": button.label, "action": button.action})

        return {
            "id": uuid.uuid4().hex,
            "type": _MESSAGE_TYPES.get(reply.kind, "text"),
            "text": "\n\n".join(parts),
            "isBot": True,
            "timestamp": datetime.fromtimestamp(self._clock(), tz=timezone.utc).isoformat(),
            "data": [quotation_card(q) for q in reply.quotations],
            "actions": actions,
        }

    def render_all(self, replies: Iterable[BotReply]) -> list[dict[str, Any]]:
        return [self.render(reply) for reply in replies]


def quotation_card(q: Quotation) -> dict[str, Any]:
    return {
        "id": q.id,
        "providerId": q.provider_id,
        "providerName": q.provider_name,
        "service": q.service,
        "estimatedCost": q.estimated_cost,
        "duration": q.duration,
        "hours": q.hours,
        "baseRate": q.base_rate,
        "urgencyFee": q.urgency_fee,
        "responseTime": q.response_time,
        "rating": q.rating,
        "location": q.location,
        "phone": q.phone,
        "services": list(q.services),
    }


def quotations_from_payload(payload: Mapping[str, Any]) -> list[Quotation]:
    """Read the quotation cards of a rendered message back into Quotations."""
    quotations: list[Quotation] = []
    for card in payload.get("data") or []:
        hours = card.get("hours")
        if hours is None:
            match = _HOURS_RE.search(str(card.get("duration", "")))
            hours = int(match.group(1)) if match else 0
        quotations.append(
            Quotation(
                id=str(card["id"]),
                provider_id=str(card["providerId"]),
                provider_name=card.get("providerName", ""),
                service=card.get("service", ""),
                estimated_cost=int(card["estimatedCost"]),
                hours=int(hours),
                base_rate=int(card.get("baseRate", 0)),
                urgency_fee=int(card.get("urgencyFee", 0)),
                response_time=card.get("responseTime", ""),
                rating=float(card.get("rating", 0.0)),
                location=card.get("location", ""),
                phone=card.get("phone"),
                services=tuple(card.get("services") or ()),
            )
        )
    return quotations
