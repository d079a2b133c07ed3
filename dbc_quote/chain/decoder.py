"""Decode DBC VirtualPool on-chain account data.

Account size: 424 bytes (8 discriminator + 416 struct, repr(C) packed).

Field offsets:
  8:72    volatility_tracker (u64 ts, 8b pad, 3x u128)
  72:232  config, creator, base_mint, base_vault, quote_vault (Pubkey 32b)
  232:280 base/quote reserve, protocol base/quote fee, partner base/quote fee (u64 LE)
  280:296 sqrt_price (u128 LE)
  296:304 activation_point (u64 LE)
  304     pool_type (u8)
  305     is_migrated (u8 bool)
  312:344 metrics (4x u64 LE)
  344:368 finish_curve_timestamp, creator_base_fee, creator_quote_fee (u64 LE)
"""

import base64
import binascii
import struct

from loguru import logger
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from dbc_quote.constants import VIRTUAL_POOL_DISCRIMINATOR
from dbc_quote.exceptions import AccountDecodeError
from dbc_quote.models.pool import PoolMetrics, VirtualPool, VolatilityTracker

VIRTUAL_POOL_SIZE = 424


def _u128(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset : offset + 16], "little")


def _pubkey(data: bytes, offset: int) -> str:
    return str(Pubkey.from_bytes(data[offset : offset + 32]))


def decode_virtual_pool_bytes(pool_address: str, data: bytes) -> VirtualPool:
    """Decode raw VirtualPool account bytes.

    Raises AccountDecodeError on short data or a wrong discriminator.
    """
    if len(data) < VIRTUAL_POOL_SIZE:
        logger.debug(
            f"[DBC] Pool data too short: {len(data)} < {VIRTUAL_POOL_SIZE} "
            f"for {pool_address[:12]}"
        )
        raise AccountDecodeError(
            f"VirtualPool {pool_address} is {len(data)} bytes, expected {VIRTUAL_POOL_SIZE}"
        )

    if data[:8] != VIRTUAL_POOL_DISCRIMINATOR:
        logger.debug(f"[DBC] Wrong discriminator for {pool_address[:12]}")
        raise AccountDecodeError(f"{pool_address} is not a VirtualPool account")

    (last_update_timestamp,) = struct.unpack_from("<Q", data, 8)
    tracker = VolatilityTracker(
        last_update_timestamp=last_update_timestamp,
        sqrt_price_reference=_u128(data, 24),
        volatility_accumulator=_u128(data, 40),
        volatility_reference=_u128(data, 56),
    )

    (
        base_reserve,
        quote_reserve,
        protocol_base_fee,
        protocol_quote_fee,
        partner_base_fee,
        partner_quote_fee,
    ) = struct.unpack_from("<6Q", data, 232)
    (activation_point,) = struct.unpack_from("<Q", data, 296)
    (
        total_protocol_base_fee,
        total_protocol_quote_fee,
        total_trading_base_fee,
        total_trading_quote_fee,
        finish_curve_timestamp,
        creator_base_fee,
        creator_quote_fee,
    ) = struct.unpack_from("<7Q", data, 312)

    return VirtualPool(
        address=pool_address,
        config=_pubkey(data, 72),
        creator=_pubkey(data, 104),
        base_mint=_pubkey(data, 136),
        base_vault=_pubkey(data, 168),
        quote_vault=_pubkey(data, 200),
        base_reserve=base_reserve,
        quote_reserve=quote_reserve,
        protocol_base_fee=protocol_base_fee,
        protocol_quote_fee=protocol_quote_fee,
        partner_base_fee=partner_base_fee,
        partner_quote_fee=partner_quote_fee,
        creator_base_fee=creator_base_fee,
        creator_quote_fee=creator_quote_fee,
        sqrt_price=_u128(data, 280),
        activation_point=activation_point,
        pool_type=data[304],
        is_migrated=data[305] != 0,
        finish_curve_timestamp=finish_curve_timestamp,
        volatility_tracker=tracker,
        metrics=PoolMetrics(
            total_protocol_base_fee=total_protocol_base_fee,
            total_protocol_quote_fee=total_protocol_quote_fee,
            total_trading_base_fee=total_trading_base_fee,
            total_trading_quote_fee=total_trading_quote_fee,
        ),
    )


def decode_virtual_pool(pool_address: str, data_b64: str) -> VirtualPool:
    """Decode base64-encoded VirtualPool account data as returned by getAccountInfo."""
    try:
        data = base64.b64decode(data_b64, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.debug(f"[DBC] Failed to base64-decode pool data for {pool_address[:12]}")
        raise AccountDecodeError(f"invalid base64 for {pool_address}") from e
    return decode_virtual_pool_bytes(pool_address, data)
