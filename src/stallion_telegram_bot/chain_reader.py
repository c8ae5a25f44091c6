from __future__ import annotations

import logging
from typing import Any

from web3 import AsyncWeb3

from .types import BUY, SELL, TradeEvent

logger = logging.getLogger(__name__)


def _event(name: str, in_field: str, out_field: str) -> dict[str, Any]:
    return {
        "anonymous": False,
        "type": "event",
        "name": name,
        "inputs": [
            {"indexed": False, "name": "tdate", "type": "uint256"},
            {"indexed": True, "name": "user", "type": "address"},
            {"indexed": True, "name": "token", "type": "address"},
            {"indexed": False, "name": in_field, "type": "uint256"},
            {"indexed": False, "name": out_field, "type": "uint256"},
            {"indexed": False, "name": "price", "type": "uint256"},
        ],
    }


def _view(name: str, outputs: list[tuple[str, str]]) -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "stateMutability": "view",
        "inputs": [{"name": "token", "type": "address"}],
        "outputs": [{"name": n, "type": t} for n, t in outputs],
    }


EXCHANGE_ABI: list[dict[str, Any]] = [
    _event("Bought", "usdtIn", "tokenOut"),
    _event("Sold", "tokenIn", "usdtOut"),
    _view(
        "getTokenFullData",
        [
            ("tokenAddress", "address"),
            ("name", "string"),
            ("symbol", "string"),
            ("price", "uint256"),
            ("lastPrice", "int256"),
            ("tokenLiquidity", "uint256"),
            ("usdtLiquidity", "uint256"),
            ("minted", "uint256"),
            ("sold", "uint256"),
            ("uniqueTraders", "uint256"),
            ("totalRegUsers", "uint256"),
            ("isTActive", "bool"),
        ],
    ),
    _view(
        "getBurnToken",
        [
            ("burntokens", "uint256"),
            ("buyuserPer", "uint256"),
            ("selluserPer", "uint256"),
            ("refAmt", "uint256"),
        ],
    ),
]

# alert type -> (event name, amount-in arg, amount-out arg)
EVENT_FIELDS: dict[str, tuple[str, str, str]] = {
    BUY: ("Bought", "usdtIn", "tokenOut"),
    SELL: ("Sold", "tokenIn", "usdtOut"),
}


class ChainReader:
    def __init__(self, rpc_url: str, contract_address: str) -> None:
        self.rpc_url = rpc_url
        self.w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
        self.contract = self.w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(contract_address),
            abi=EXCHANGE_ABI,
        )

    async def close(self) -> None:
        await self.w3.provider.disconnect()

    async def block_number(self) -> int:
        return int(await self.w3.eth.block_number)

    async def trade_events(self, alert_type: str, from_block: int, to_block: int) -> list[TradeEvent]:
        event_name = EVENT_FIELDS[alert_type][0]
        event = getattr(self.contract.events, event_name)()
        logs = await event.get_logs(from_block=from_block, to_block=to_block)
        events = [to_trade_event(alert_type, log) for log in logs]
        events.sort(key=lambda e: (e.block_number, e.log_index))
        logger.debug("Fetched %d %s logs in [%d, %d]", len(events), event_name, from_block, to_block)
        return events


def to_trade_event(alert_type: str, log: Any) -> TradeEvent:
    _, in_field, out_field = EVENT_FIELDS[alert_type]
    args = log["args"]
    return TradeEvent(
        alert_type=alert_type,
        user=str(args["user"]),
        token=str(args["token"]),
        amount_in=args.get(in_field),
        amount_out=args.get(out_field),
        price=args.get("price"),
        tx_hash=_hex(log["transactionHash"]),
        block_number=int(log["blockNumber"]),
        log_index=int(log["logIndex"]),
    )


def _hex(value: Any) -> str:
    if isinstance(value, str):
        return value if value.startswith("0x") else f"0x{value}"
    return AsyncWeb3.to_hex(value)
