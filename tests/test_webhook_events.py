"""
Tests for Telegram and WhatsApp webhook payload parsing.
"""

from __future__ import annotations

from fundiconnect.application.dto.webhook_event import TelegramUpdateDTO, WhatsAppWebhookDTO


def _telegram_text(text: str, update_id: int = 1001) -> dict:
    return {
        "update_id": update_id,
        "message": {
            "message_id": 5,
            "from": {"id": 777, "first_name": "Wanjiru", "is_bot": False},
            "chat": {"id": 777, "type": "private"},
            "date": 1700000000,
            "text": text,
        },
    }


def test_telegram_text_message():
    [message] = TelegramUpdateDTO.model_validate(_telegram_text("I need a plumber")).extract_messages()

    assert message.id == "tg:1001"
    assert message.thread_id == "777"
    assert message.text == "I need a plumber"
    assert message.sender_name == "Wanjiru"
    assert message.platform == "telegram"
    assert message.action is None


def test_telegram_commands_are_rewritten():
    assert TelegramUpdateDTO.model_validate(_telegram_text("/start")).extract_messages()[0].text == "hello"
    assert TelegramUpdateDTO.model_validate(_telegram_text("/help@FundiBot")).extract_messages()[0].text == "help"


def test_telegram_callback_query():
    update = {
        "update_id": 1002,
        "callback_query": {
            "id": "cbq_1",
            "from": {"id": 777, "first_name": "Wanjiru"},
            "message": {"message_id": 6, "chat": {"id": 777}},
            "data": "book_3",
        },
    }

    [message] = TelegramUpdateDTO.model_validate(update).extract_messages()

    assert message.action == "book_3"
    assert message.callback_id == "cbq_1"
    assert message.thread_id == "777"


def test_telegram_non_text_update_is_ignored():
    update = _telegram_text("")
    update["message"].pop("text")
    update["message"]["sticker"] = {"file_id": "x"}
    assert TelegramUpdateDTO.model_validate(update).extract_messages() == []
    assert TelegramUpdateDTO.model_validate({"update_id": 3}).extract_messages() == []


def test_whatsapp_messages_with_contact_names():
    payload = {
        "object": "whatsapp_business_account",
        "entry": [
            {
                "changes": [
                    {
                        "value": {
                            "contacts": [{"wa_id": "254711000111", "profile": {"name": "Kamau"}}],
                            "messages": [
                                {
                                    "from": "254711000111",
                                    "id": "wamid.A",
                                    "timestamp": "1700000000",
                                    "type": "text",
                                    "text": {"body": "Need a mason in Ruaka"},
                                },
                                {
                                    "from": "254711000111",
                                    "id": "wamid.B",
                                    "timestamp": "1700000001",
                                    "type": "interactive",
                                    "interactive": {"type": "button_reply", "button_reply": {"id": "search_again"}},
                                },
                                {
                                    "from": "254711000111",
                                    "id": "wamid.C",
                                    "timestamp": "1700000002",
                                    "type": "image",
                                    "image": {"id": "img"},
                                },
                            ],
                        }
                    }
                ]
            }
        ],
    }

    messages = WhatsAppWebhookDTO.model_validate(payload).extract_messages()

    assert [m.id for m in messages] == ["wamid.A", "wamid.B"]
    assert messages[0].text == "Need a mason in Ruaka"
    assert messages[0].sender_name == "Kamau"
    assert messages[0].timestamp == 1700000000
    assert messages[1].action == "search_again"


def test_whatsapp_status_callbacks_are_ignored():
    payload = {"entry": [{"changes": [{"value": {"statuses": [{"id": "wamid.A", "status": "read"}]}}]}]}
    assert WhatsAppWebhookDTO.model_validate(payload).extract_messages() == []
