from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class TelegramNotifier:
    def __init__(self, bot_token: str, chat_id: str, timeout: float = 15.0) -> None:
        self.chat_id = chat_id
        self._url = f"https://api.telegram.org/bot{bot_token}/sendMessage"
        self._client = httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        await self._client.aclose()

    async def send(self, text: str, button: tuple[str, str] | None = None) -> None:
        response = await self._client.post(self._url, json=build_payload(self.chat_id, text, button))
        response.raise_for_status()
        data = response.json()
        if not data.get("ok", False):
            raise RuntimeError(f"Telegram send failed: {data}")


def build_payload(chat_id: str, text: str, button: tuple[str, str] | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "chat_id": chat_id,
        "text": text,
        "parse_mode": "Markdown",
        "disable_web_page_preview": True,
    }
    if button is not None:
        label, url = button
        payload["reply_markup"] = {"inline_keyboard": [[{"text": label, "url": url}]]}
    return payload
