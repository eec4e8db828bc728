import logging

from fastapi import Depends, FastAPI

from fundiconnect.api.v1.chat import router as chat_router
from fundiconnect.api.webhooks import router as webhooks_router
from fundiconnect.application.ports.session_store import SessionStorePort
from fundiconnect.core.config import settings
from fundiconnect.wiring.dependencies import get_llm, get_provider_roster, get_session_store

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("message_id", "user_id", "intent", "service", "location", "channel", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title=f"{settings.BUSINESS_NAME} Bot", version="1.0.0")

app.include_router(webhooks_router, tags=["webhooks"])
app.include_router(chat_router, prefix="/api/v1", tags=["chat"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/status")
def status(sessions: SessionStorePort = Depends(get_session_store)) -> dict[str, object]:
    return {
        "status": "running",
        "business": settings.BUSINESS_NAME,
        "active_sessions": sessions.count(),
        "providers": len(get_provider_roster().list_providers()),
        "ai_enabled": get_llm() is not None,
    }
