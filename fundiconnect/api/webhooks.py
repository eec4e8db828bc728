from __future__ import annotations

import hmac
import json
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request, Response
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from fundiconnect.application.dto.webhook_event import TelegramUpdateDTO, WhatsAppWebhookDTO
from fundiconnect.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from fundiconnect.infrastructure.whatsapp.webhook_verify import verify_post_signature, verify_subscription
from fundiconnect.wiring.dependencies import get_telegram_handler, get_whatsapp_handler
from fundiconnect.core.config import settings


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/webhooks/telegram")
async def telegram_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    use_case: HandleIncomingMessageUseCase = Depends(get_telegram_handler),
) -> Response:
    if settings.TELEGRAM_WEBHOOK_SECRET:
        token = request.headers.get("X-Telegram-Bot-Api-Secret-Token") or ""
        if not hmac.compare_digest(token, settings.TELEGRAM_WEBHOOK_SECRET):
            logger.warning("Telegram webhook rejected", extra={"channel": "telegram", "reason": "bad secret token"})
            return Response(status_code=403)

    body = await request.body()
    try:
        payload = json.loads(body.decode("utf-8")) if body else {}
        update = TelegramUpdateDTO.model_validate(payload)
    except (ValueError, ValidationError):
        logger.exception("Failed to parse Telegram update", extra={"channel": "telegram"})
        return Response(status_code=400)

    try:
        messages = update.extract_messages()
        logger.info("Webhook received", extra={"channel": "telegram", "reason": f"{len(messages)} message(s)"})
        for message in messages:
            background_tasks.add_task(use_case.handle, message)
        return Response(status_code=200)
    except Exception as e:
        logger.exception("Error processing Telegram update", extra={"channel": "telegram", "reason": str(e)})
        return Response(status_code=500)


@router.get("/webhooks/whatsapp")
def verify_whatsapp_webhook(
    hub_mode: str | None = Query(None, alias="hub.mode"),
    hub_verify_token: str | None = Query(None, alias="hub.verify_token"),
    hub_challenge: str | None = Query(None, alias="hub.challenge"),
):
    challenge = verify_subscription(hub_mode, hub_verify_token, hub_challenge, settings.WHATSAPP_VERIFY_TOKEN)
    if challenge is not None:
        return PlainTextResponse(challenge)
    raise HTTPException(status_code=403, detail="Verification failed")


@router.post("/webhooks/whatsapp")
async def whatsapp_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    use_case: HandleIncomingMessageUseCase = Depends(get_whatsapp_handler),
) -> Response:
    body = await request.body()
    signature = request.headers.get("X-Hub-Signature-256")
    if not verify_post_signature(body, signature, settings.WHATSAPP_APP_SECRET, settings.ENV):
        return Response(status_code=403)

    try:
        payload = json.loads(body.decode("utf-8")) if body else {}
        event = WhatsAppWebhookDTO.model_validate(payload)
    except (ValueError, ValidationError):
        logger.exception("Failed to parse WhatsApp webhook body", extra={"channel": "whatsapp"})
        return Response(status_code=400)

    try:
        messages = event.extract_messages()
        logger.info("Webhook received", extra={"channel": "whatsapp", "reason": f"{len(messages)} message(s)"})
        for message in messages:
            background_tasks.add_task(use_case.handle, message)
        return Response(status_code=200)
    except Exception as e:
        logger.exception("Error processing WhatsApp webhook event", extra={"channel": "whatsapp", "reason": str(e)})
        return Response(status_code=500)
