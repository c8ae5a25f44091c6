import asyncio

import pytest

from stallion_telegram_bot.contract_data import ContractDataFetcher, build_snapshot

TOKEN_LOWER = "0x94abf62b41f815448eedbe9ec10f10576d9d6004"
TOKEN = "0x94Abf62b41f815448eEDBE9eC10f10576D9D6004"

FULL = (TOKEN, "Stallion", "STN", 10**18, 0, 5, 1000 * 10**6, 500 * 10**18, 7, 42, 99, True)
BURN = (100 * 10**18, 2, 3, 0)


class FakeCall:
    def __init__(self, result) -> None:
        self.result = result

    async def call(self):
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class FakeFunctions:
    def __init__(self, full, burn) -> None:
        self.full = full
        self.burn = burn
        self.calls: list[tuple[str, str]] = []

    def getTokenFullData(self, token: str) -> FakeCall:
        self.calls.append(("full", token))
        return FakeCall(self.full)

    def getBurnToken(self, token: str) -> FakeCall:
        self.calls.append(("burn", token))
        return FakeCall(self.burn)


class FakeContract:
    def __init__(self, full=FULL, burn=BURN) -> None:
        self.functions = FakeFunctions(full, burn)


def test_build_snapshot_maps_tuple_positions() -> None:
    snapshot = build_snapshot(FULL, BURN)
    assert snapshot.name == "Stallion"
    assert snapshot.symbol == "STN"
    assert snapshot.price == 10**18
    assert snapshot.usdt_liquidity == 1000 * 10**6
    assert snapshot.minted_supply == 500 * 10**18
    assert snapshot.burned_supply == 100 * 10**18
    assert snapshot.circulating_supply == 400 * 10**18
    assert snapshot.holder_count == 42
    assert (snapshot.buy_fee_percent, snapshot.sell_fee_percent) == (2, 3)


def test_symbol_override_wins() -> None:
    assert build_snapshot(FULL, BURN, "XYZ").symbol == "XYZ"


def test_snapshot_reads_fresh_each_time_with_checksum_address() -> None:
    contract = FakeContract()
    fetcher = ContractDataFetcher(contract)

    asyncio.run(fetcher.snapshot(TOKEN_LOWER))
    asyncio.run(fetcher.snapshot(TOKEN_LOWER))

    assert contract.functions.calls == [
        ("full", TOKEN),
        ("burn", TOKEN),
        ("full", TOKEN),
        ("burn", TOKEN),
    ]


def test_snapshot_propagates_read_failure() -> None:
    fetcher = ContractDataFetcher(FakeContract(burn=RuntimeError("execution reverted")))
    with pytest.raises(RuntimeError):
        asyncio.run(fetcher.snapshot(TOKEN))
