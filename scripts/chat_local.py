#!/usr/bin/env python3
"""
Interactive local chat harness (no HTTP, no Telegram/WhatsApp).

Usage:
  python3 scripts/chat_local.py

What it does:
- Keeps a stable user id for the session
- Sends your typed messages through the same ConversationPipeline the webhooks use
- Prints each reply as WhatsApp-style text, followed by its button actions
"""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fundiconnect.core.config import settings  # noqa: E402
from fundiconnect.domain.entities.reply import BotReply  # noqa: E402
from fundiconnect.infrastructure.whatsapp.formatter import WhatsAppFormatter  # noqa: E402
from fundiconnect.wiring.dependencies import get_pipeline  # noqa: E402


def _print_header(user_id: str) -> None:
    print("\nLocal Chat Harness")
    print("-" * 60)
    print(f"user_id: {user_id}")
    print("Type your message and press Enter.")
    print("Commands: !<action> (press a button), /followup, /new, /quit, /help")
    print("-" * 60)


def _print_reply(formatter: WhatsAppFormatter, reply: BotReply) -> None:
    print(f"\n[{reply.kind}]")
    print(formatter.render(reply))
    actions = [b.action for row in reply.buttons for b in row if b.action]
    if actions:
        print("buttons: " + ", ".join(f"!{a}" for a in actions))


def main() -> None:
    user_id = os.getenv("CHAT_USER_ID", "local_user_1")
    user_name = os.getenv("CHAT_USER_NAME") or None
    pipeline = get_pipeline()
    formatter = WhatsAppFormatter(currency=settings.CURRENCY)
    _print_header(user_id)

    while True:
        try:
            user_text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_text:
            continue

        cmd = user_text.lower()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print("Commands:")
            print("  !search_again, !call_1, !book_1 ... -> press a button")
            print("  /followup -> ask how the last service went")
            print("  /new  -> start a new user id (fresh session)")
            print("  /quit -> exit")
            continue
        if cmd == "/new":
            user_id = f"local_user_{int(time.time())}"
            print(f"New user_id: {user_id}")
            continue
        if cmd == "/followup":
            reply = pipeline.follow_up(user_id)
            if reply is None:
                print("(no service requested yet)")
            else:
                _print_reply(formatter, reply)
            continue

        if user_text.startswith("!"):
            replies = pipeline.handle_action(user_text[1:].strip(), user_id, user_name)
        else:
            replies = pipeline.process(user_text, user_id, user_name)

        for reply in replies:
            _print_reply(formatter, reply)
        print("-" * 60)


if __name__ == "__main__":
    main()
