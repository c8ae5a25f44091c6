from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from .formatting import format_alert_message, format_fallback_message
from .types import TradeEvent

logger = logging.getLogger(__name__)


@dataclass
class Metrics:
    ticks: int = 0
    ticks_failed: int = 0
    events_seen: int = 0
    alerts_sent: int = 0
    fallbacks_sent: int = 0
    alerts_failed: int = 0


class AlertDispatcher:
    def __init__(
        self,
        fetcher: Any,
        notifier: Any,
        brand_name: str,
        explorer_tx_base: str,
        website_button: tuple[str, str] | None = None,
        token_address: str | None = None,
        metrics: Metrics | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.notifier = notifier
        self.brand_name = brand_name
        self.explorer_tx_base = explorer_tx_base
        self.website_button = website_button
        self.token_address = token_address
        self.metrics = metrics or Metrics()

    async def dispatch(self, event: TradeEvent) -> None:
        try:
            snapshot = await self.fetcher.snapshot(self.token_address or event.token)
            text = format_alert_message(event, snapshot, self.brand_name, self.explorer_tx_base)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning("Alert build failed for %s tx=%s: %s", event.alert_type, event.tx_hash, exc)
            await self._send_fallback(event)
            return

        try:
            await self.notifier.send(text, self.website_button)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            self.metrics.alerts_failed += 1
            logger.exception("Failed to send %s alert for tx %s: %s", event.alert_type, event.tx_hash, exc)
            return

        self.metrics.alerts_sent += 1
        logger.info(
            "%s alert sent tx=%s block=%d symbol=%s",
            event.alert_type,
            event.tx_hash,
            event.block_number,
            snapshot.symbol,
        )

    async def _send_fallback(self, event: TradeEvent) -> None:
        try:
            text = format_fallback_message(event, self.brand_name, self.explorer_tx_base)
            await self.notifier.send(text)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            self.metrics.alerts_failed += 1
            logger.exception("Failed to send %s fallback for tx %s: %s", event.alert_type, event.tx_hash, exc)
            return
        self.metrics.fallbacks_sent += 1
        logger.info("%s fallback sent tx=%s", event.alert_type, event.tx_hash)
