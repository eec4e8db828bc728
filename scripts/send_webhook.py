#!/usr/bin/env python3
from __future__ import annotations

import argparse
import hashlib
import hmac
import json
import time
from typing import Any

import httpx
from httpx import ConnectError


def build_whatsapp_payload(sender: str, name: str, text: str) -> dict[str, Any]:
    now = int(time.time())
    return {
        "object": "whatsapp_business_account",
        "entry": [
            {
                "id": "waba_1",
                "changes": [
                    {
                        "field": "messages",
                        "value": {
                            "messaging_product": "whatsapp",
                            "contacts": [{"wa_id": sender, "profile": {"name": name}}],
                            "messages": [
                                {
                                    "from": sender,
                                    "id": f"wamid.{now}{int(time.time() * 1000) % 1000}",
                                    "timestamp": str(now),
                                    "type": "text",
                                    "text": {"body": text},
                                }
                            ],
                        },
                    }
                ],
            }
        ],
    }


def build_telegram_payload(chat_id: str, name: str, text: str) -> dict[str, Any]:
    now = int(time.time())
    return {
        "update_id": int(time.time() * 1000) % 1_000_000_000,
        "message": {
            "message_id": now % 100000,
            "from": {"id": int(chat_id), "first_name": name, "is_bot": False},
            "chat": {"id": int(chat_id), "type": "private"},
            "date": now,
            "text": text,
        },
    }


def sign_body(secret: str, body: bytes) -> str:
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return f"sha256={digest}"


def main() -> None:
    parser = argparse.ArgumentParser(description="Send a test Telegram or WhatsApp webhook POST")
    parser.add_argument("channel", choices=["telegram", "whatsapp"])
    parser.add_argument("--base-url", default="http://127.0.0.1:8001")
    parser.add_argument("--sender", default="254712345678", help="WhatsApp number or Telegram chat id")
    parser.add_argument("--name", default="Wanjiru")
    parser.add_argument("--text", default="I need a plumber in Westlands")
    parser.add_argument("--app-secret", default="", help="WhatsApp app secret for signature")
    parser.add_argument("--secret-token", default="", help="Telegram webhook secret token")
    args = parser.parse_args()

    headers = {"Content-Type": "application/json"}
    if args.channel == "whatsapp":
        payload = build_whatsapp_payload(args.sender, args.name, args.text)
    else:
        payload = build_telegram_payload(args.sender, args.name, args.text)
        if args.secret_token:
            headers["X-Telegram-Bot-Api-Secret-Token"] = args.secret_token

    body = json.dumps(payload).encode("utf-8")
    if args.channel == "whatsapp" and args.app_secret:
        headers["X-Hub-Signature-256"] = sign_body(args.app_secret, body)

    try:
        resp = httpx.post(f"{args.base_url}/webhooks/{args.channel}", content=body, headers=headers, timeout=10.0)
    except ConnectError:
        print("Connection refused. Is the FastAPI server running?")
        print("Try: uvicorn fundiconnect.main:app --reload --port 8001")
        return

    print(resp.status_code)
    if resp.text:
        print(resp.text)


if __name__ == "__main__":
    main()
