from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from .chain_reader import ChainReader
from .config import Settings
from .contract_data import ContractDataFetcher
from .dispatcher import AlertDispatcher, Metrics
from .formatting import format_startup_message
from .telegram_notifier import TelegramNotifier
from .types import BUY, SELL

logger = logging.getLogger(__name__)


@dataclass
class PollState:
    watermark: int


class AlertService:
    def __init__(
        self,
        settings: Settings,
        reader: Any | None = None,
        notifier: Any | None = None,
        fetcher: Any | None = None,
    ) -> None:
        self.settings = settings
        self.metrics = Metrics()
        self.reader = reader or ChainReader(settings.rpc_url, settings.contract_address)
        self.notifier = notifier or TelegramNotifier(settings.telegram_bot_token, settings.telegram_chat_id)
        if fetcher is None:
            fetcher = ContractDataFetcher(self.reader.contract, settings.token_symbol)
        self.dispatcher = AlertDispatcher(
            fetcher=fetcher,
            notifier=self.notifier,
            brand_name=settings.brand_name,
            explorer_tx_base=settings.explorer_tx_base,
            website_button=(settings.website_button_text, settings.website_url),
            token_address=settings.token_address,
            metrics=self.metrics,
        )
        self.state: PollState | None = None

    async def run(self) -> None:
        try:
            if not await self.start():
                return
            health_task = asyncio.create_task(self._health_loop())
            try:
                await self._poll_forever()
            finally:
                health_task.cancel()
                await asyncio.gather(health_task, return_exceptions=True)
        finally:
            await self.notifier.close()
            await self.reader.close()

    async def start(self) -> bool:
        try:
            height = await self.reader.block_number()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.error("Startup failed, cannot read block height from %s: %s", self.settings.rpc_url, exc)
            return False

        self.state = PollState(watermark=max(height - self.settings.startup_backscan_blocks, 0))
        logger.info("RPC connected at block %d, scanning from %d", height, self.state.watermark + 1)

        try:
            await self.notifier.send(format_startup_message(self.settings.brand_name, height))
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning("Failed to send startup message: %s", exc)
        return True

    async def tick(self) -> None:
        state = self.state
        if state is None:
            raise RuntimeError("AlertService.start() must succeed before tick()")

        self.metrics.ticks += 1
        try:
            height = await self.reader.block_number()
            if height <= state.watermark:
                return

            from_block = state.watermark + 1
            logger.info("Scanning blocks %d to %d", from_block, height)
            # BUY group first, then SELL; each already in block/log order.
            for alert_type in (BUY, SELL):
                events = await self.reader.trade_events(alert_type, from_block, height)
                self.metrics.events_seen += len(events)
                for event in events:
                    await self.dispatcher.dispatch(event)
            state.watermark = height
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            self.metrics.ticks_failed += 1
            logger.warning("Poll tick failed, watermark stays at %d: %s", state.watermark, exc)

    async def _poll_forever(self) -> None:
        loop = asyncio.get_running_loop()
        interval = self.settings.poll_interval_seconds
        next_tick = loop.time() + interval
        while True:
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            await self.tick()
            # An overrunning tick pushes the schedule back instead of overlapping.
            next_tick = max(next_tick + interval, loop.time())

    async def _health_loop(self) -> None:
        while True:
            await asyncio.sleep(self.settings.health_log_interval_seconds)
            logger.info(
                (
                    "health watermark=%s ticks=%d ticks_failed=%d events_seen=%d "
                    "alerts_sent=%d fallbacks_sent=%d alerts_failed=%d"
                ),
                self.state.watermark if self.state else None,
                self.metrics.ticks,
                self.metrics.ticks_failed,
                self.metrics.events_seen,
                self.metrics.alerts_sent,
                self.metrics.fallbacks_sent,
                self.metrics.alerts_failed,
            )
