from __future__ import annotations

from dataclasses import dataclass

BUY = "BUY"
SELL = "SELL"


@dataclass(frozen=True)
class TradeEvent:
    """A decoded ``Bought``/``Sold`` log.

    Amounts are raw integer base units. For a BUY ``amount_in`` is USDT
    (6 decimals) and ``amount_out`` is the token (18 decimals); a SELL is the
    other way round.
    """

    alert_type: str
    user: str
    token: str
    amount_in: int | None
    amount_out: int | None
    price: int | None
    tx_hash: str
    block_number: int
    log_index: int


@dataclass(frozen=True)
class TokenSnapshot:
    name: str
    symbol: str
    price: int
    minted_supply: int
    burned_supply: int
    usdt_liquidity: int
    holder_count: int
    buy_fee_percent: int
    sell_fee_percent: int

    @property
    def circulating_supply(self) -> int:
        return self.minted_supply - self.burned_supply
