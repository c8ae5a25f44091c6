from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    telegram_bot_token: str
    telegram_chat_id: str
    contract_address: str
    rpc_url: str
    token_address: str | None
    token_symbol: str | None
    brand_name: str
    explorer_tx_base: str
    website_url: str
    website_button_text: str
    poll_interval_seconds: int
    startup_backscan_blocks: int
    health_log_interval_seconds: int
    log_level: str


def _required(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise ValueError(f"Missing required environment variable: {name}")
    return value


def _optional(name: str) -> str | None:
    return os.getenv(name, "").strip() or None


def _optional_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _positive_int(name: str, default: int) -> int:
    value = _optional_int(name, default)
    if value <= 0:
        raise ValueError(f"{name} must be positive")
    return value


def _non_negative_int(name: str, default: int) -> int:
    value = _optional_int(name, default)
    if value < 0:
        raise ValueError(f"{name} must not be negative")
    return value


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        telegram_bot_token=_required("TELEGRAM_BOT_TOKEN"),
        telegram_chat_id=_required("TELEGRAM_CHAT_ID"),
        contract_address=_required("CONTRACT_ADDRESS"),
        rpc_url=_required("RPC_URL"),
        token_address=_optional("TOKEN_ADDRESS"),
        token_symbol=_optional("TOKEN_SYMBOL"),
        brand_name=os.getenv("BRAND_NAME", "STALLION").strip(),
        explorer_tx_base=os.getenv("EXPLORER_TX_BASE", "https://polygonscan.com/tx").strip(),
        website_url=os.getenv("WEBSITE_URL", "https://stallion.exchange").strip(),
        website_button_text=os.getenv("WEBSITE_BUTTON_TEXT", "🌐 Visit Website").strip(),
        poll_interval_seconds=_positive_int("POLL_INTERVAL_SECONDS", 12),
        startup_backscan_blocks=_non_negative_int("STARTUP_BACKSCAN_BLOCKS", 5),
        health_log_interval_seconds=_positive_int("HEALTH_LOG_INTERVAL_SECONDS", 60),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
    )
