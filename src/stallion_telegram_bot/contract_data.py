from __future__ import annotations

import logging
from typing import Any

from web3 import AsyncWeb3

from .types import TokenSnapshot

logger = logging.getLogger(__name__)


class ContractDataFetcher:
    def __init__(self, contract: Any, symbol_override: str | None = None) -> None:
        self.contract = contract
        self.symbol_override = symbol_override

    async def snapshot(self, token_address: str) -> TokenSnapshot:
        token = AsyncWeb3.to_checksum_address(token_address)
        full = await self.contract.functions.getTokenFullData(token).call()
        burn = await self.contract.functions.getBurnToken(token).call()
        return build_snapshot(full, burn, self.symbol_override)


def build_snapshot(full: Any, burn: Any, symbol_override: str | None = None) -> TokenSnapshot:
    # full: (tokenAddress, name, symbol, price, lastPrice, tokenLiquidity,
    #        usdtLiquidity, minted, sold, uniqueTraders, totalRegUsers, isTActive)
    # burn: (burntokens, buyuserPer, selluserPer, refAmt)
    return TokenSnapshot(
        name=str(full[1]),
        symbol=symbol_override or str(full[2]),
        price=int(full[3]),
        minted_supply=int(full[7]),
        burned_supply=int(burn[0]),
        usdt_liquidity=int(full[6]),
        holder_count=int(full[9]),
        buy_fee_percent=int(burn[1]),
        sell_fee_percent=int(burn[2]),
    )
