import re
from decimal import Decimal

from stallion_telegram_bot.formatting import (
    build_trade_link,
    display_price,
    escape_markdown,
    format6,
    format18,
    format_alert_message,
    format_fallback_message,
    format_user,
    market_cap,
    short_address,
)
from stallion_telegram_bot.types import BUY, SELL, TokenSnapshot, TradeEvent

USER = "0x1234567890abcdef1234567890abcdef12345678"


def _snapshot(**overrides) -> TokenSnapshot:
    values = dict(
        name="Stallion",
        symbol="STN",
        price=0,
        minted_supply=500 * 10**18,
        burned_supply=100 * 10**18,
        usdt_liquidity=1000 * 10**6,
        holder_count=42,
        buy_fee_percent=2,
        sell_fee_percent=3,
    )
    values.update(overrides)
    return TokenSnapshot(**values)


def _event(alert_type: str, amount_in: int | None, amount_out: int | None) -> TradeEvent:
    return TradeEvent(
        alert_type=alert_type,
        user=USER,
        token="0x94Abf62b41f815448eEDBE9eC10f10576D9D6004",
        amount_in=amount_in,
        amount_out=amount_out,
        price=0,
        tx_hash="0xabc",
        block_number=101,
        log_index=0,
    )


def test_format18_zero_and_missing() -> None:
    assert format18(0) == "0.0000"
    assert format18(None) == "0.0000"


def test_format18_rounds_to_four_places() -> None:
    assert format18(1234567890000000000) == "1.2346"
    for value in (1, 10**18, 123 * 10**20, 10**30 + 7):
        assert re.fullmatch(r"\d+\.\d{4}", format18(value))


def test_format6_zero_and_missing() -> None:
    assert format6(0) == "0.00"
    assert format6(None) == "0.00"


def test_format6_rounds_to_two_places() -> None:
    assert format6(1_500_000) == "1.50"
    assert format6(1) == "0.00"
    for value in (7, 10**6, 987_654_321_123):
        assert re.fullmatch(r"\d+\.\d{2}", format6(value))


def test_short_address_keeps_six_chars_each_side() -> None:
    assert short_address(USER) == "0x1234...345678"
    assert format_user(USER) == "`0x1234...345678`"
    assert short_address(None) == "Unknown"
    assert short_address("0xabc") == "0xabc"


def test_display_price_uses_onchain_price_when_nonzero() -> None:
    snapshot = _snapshot(price=12345 * 10**14)
    assert display_price(snapshot) == Decimal("1.2345")


def test_display_price_derived_from_liquidity_when_price_is_zero() -> None:
    snapshot = _snapshot()
    assert display_price(snapshot) == Decimal("2.5")
    assert market_cap(snapshot) == Decimal("1000")


def test_display_price_zero_without_circulating_supply() -> None:
    snapshot = _snapshot(burned_supply=500 * 10**18)
    assert display_price(snapshot) == 0
    assert market_cap(snapshot) == 0


def test_links_and_escaping() -> None:
    assert build_trade_link("https://polygonscan.com/tx/", "0xabc") == "https://polygonscan.com/tx/0xabc"
    assert escape_markdown("MY_TOKEN*") == "MY\\_TOKEN\\*"


def test_format_buy_alert_contains_required_fields() -> None:
    text = format_alert_message(
        _event(BUY, 100 * 10**6, 8130081300813008130),
        _snapshot(),
        "STALLION",
        "https://polygonscan.com/tx",
    )
    assert "🚀 *STALLION BUY ALERT* 🚀" in text
    assert "📈 *Current Price:* 2.5000 USDT" in text
    assert "💰 *Spent:* 100.00 USDT" in text
    assert "🪙 *Received:* 8.1301 STN" in text
    assert "🔥 *Total Burned:* 100.0000 STN" in text
    assert "📊 *Market Cap:* 1000.00 USDT" in text
    assert "👥 *Holders:* 42" in text
    assert "`0x1234...345678`" in text
    assert "(https://polygonscan.com/tx/0xabc)" in text


def test_format_sell_alert_tolerates_missing_amounts() -> None:
    text = format_alert_message(
        _event(SELL, None, 0),
        _snapshot(price=10**18),
        "STALLION",
        "https://polygonscan.com/tx",
    )
    assert "🔻 *STALLION SELL ALERT* 🔻" in text
    assert "📈 *Current Price:* 1.0000 USDT" in text
    assert "🪙 *Sold:* 0.0000 STN" in text
    assert "💰 *Received:* 0.00 USDT" in text


def test_fallback_message_is_reduced() -> None:
    text = format_fallback_message(_event(SELL, 1, 1), "STALLION", "https://polygonscan.com/tx")
    assert "STALLION SELL DETECTED!" in text
    assert "`0x1234...345678`" in text
    assert "https://polygonscan.com/tx/0xabc" in text
    assert "Price" not in text
