from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

from .types import BUY, TokenSnapshot, TradeEvent

TOKEN_DECIMALS = 18
USDT_DECIMALS = 6
DIVIDER = "━━━━━━━━━━━━━━━━━━"

_MARKDOWN_SPECIAL = ("_", "*", "`", "[")


def _format_decimal(amount: Decimal, places: int) -> str:
    with localcontext() as ctx:
        ctx.prec = 100
        quantum = Decimal(1).scaleb(-places)
        return f"{amount.quantize(quantum, rounding=ROUND_HALF_UP):f}"


def from_units(value: int | None, decimals: int) -> Decimal:
    if not value:
        return Decimal(0)
    with localcontext() as ctx:
        ctx.prec = 100
        return Decimal(int(value)).scaleb(-decimals)


def format18(value: int | None) -> str:
    return _format_decimal(from_units(value, TOKEN_DECIMALS), 4)


def format6(value: int | None) -> str:
    return _format_decimal(from_units(value, USDT_DECIMALS), 2)


def display_price(snapshot: TokenSnapshot) -> Decimal:
    if snapshot.price:
        return from_units(snapshot.price, TOKEN_DECIMALS)
    circulating = snapshot.circulating_supply
    if circulating <= 0:
        return Decimal(0)
    with localcontext() as ctx:
        ctx.prec = 100
        return from_units(snapshot.usdt_liquidity, USDT_DECIMALS) / from_units(circulating, TOKEN_DECIMALS)


def market_cap(snapshot: TokenSnapshot) -> Decimal:
    circulating = snapshot.circulating_supply
    if circulating <= 0:
        return Decimal(0)
    with localcontext() as ctx:
        ctx.prec = 100
        return display_price(snapshot) * from_units(circulating, TOKEN_DECIMALS)


def short_address(address: str | None) -> str:
    if not address:
        return "Unknown"
    addr = address.strip()
    if len(addr) <= 12:
        return addr
    return f"{addr[:6]}...{addr[-6:]}"


def format_user(address: str | None) -> str:
    return f"`{short_address(address)}`"


def escape_markdown(text: str) -> str:
    for ch in _MARKDOWN_SPECIAL:
        text = text.replace(ch, f"\\{ch}")
    return text


def build_trade_link(base_url: str, tx_hash: str) -> str:
    return f"{base_url.rstrip('/')}/{tx_hash}"


def alert_emoji(alert_type: str) -> str:
    return "🚀" if alert_type == BUY else "🔻"


def format_alert_message(
    event: TradeEvent,
    snapshot: TokenSnapshot,
    brand_name: str,
    explorer_tx_base: str,
) -> str:
    emoji = alert_emoji(event.alert_type)
    brand = escape_markdown(brand_name)
    symbol = escape_markdown(snapshot.symbol)

    if event.alert_type == BUY:
        trade_lines = (
            f"💰 *Spent:* {format6(event.amount_in)} USDT\n"
            f"🪙 *Received:* {format18(event.amount_out)} {symbol}\n"
        )
    else:
        trade_lines = (
            f"🪙 *Sold:* {format18(event.amount_in)} {symbol}\n"
            f"💰 *Received:* {format6(event.amount_out)} USDT\n"
        )

    return (
        f"{emoji} *{brand} {event.alert_type} ALERT* {emoji}\n"
        f"{DIVIDER}\n\n"
        f"📈 *Current Price:* {_format_decimal(display_price(snapshot), 4)} USDT\n\n"
        f"{trade_lines}"
        f"{DIVIDER}\n"
        f"💎 *Total Minted:* {format18(snapshot.minted_supply)} {symbol}\n"
        f"🔥 *Total Burned:* {format18(snapshot.burned_supply)} {symbol}\n"
        f"💧 *Liquidity Pool:* {format6(snapshot.usdt_liquidity)} USDT\n"
        f"📊 *Market Cap:* {_format_decimal(market_cap(snapshot), 2)} USDT\n"
        f"🧾 *Fees:* buy {snapshot.buy_fee_percent}% | sell {snapshot.sell_fee_percent}%\n"
        f"👥 *Holders:* {snapshot.holder_count}\n\n"
        f"👤 *User:* {format_user(event.user)}\n"
        f"🔗 [View Transaction]({build_trade_link(explorer_tx_base, event.tx_hash)})"
    )


def format_fallback_message(event: TradeEvent, brand_name: str, explorer_tx_base: str) -> str:
    return (
        f"🚨 *{escape_markdown(brand_name)} {event.alert_type} DETECTED!*\n\n"
        f"👤 *User:* {format_user(event.user)}\n"
        f"🔗 [View Transaction]({build_trade_link(explorer_tx_base, event.tx_hash)})"
    )


def format_startup_message(brand_name: str, block_number: int) -> str:
    return (
        f"🤖 *{escape_markdown(brand_name.title())} Monitoring System Online!*\n"
        f"Watching trades from block {block_number}."
    )
