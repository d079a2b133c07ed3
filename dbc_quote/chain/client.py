"""Read-only Solana JSON-RPC client for DBC pool snapshots and the current point."""

import httpx
from loguru import logger

from config.settings import Settings
from dbc_quote.chain.decoder import decode_virtual_pool
from dbc_quote.chain.throttle import RequestThrottle
from dbc_quote.constants import DBC_PROGRAM_ID
from dbc_quote.exceptions import AccountDecodeError, AccountNotFoundError, RpcResponseError
from dbc_quote.math.swap_quote import quote
from dbc_quote.models.config import ActivationType, PoolConfig
from dbc_quote.models.pool import VirtualPool
from dbc_quote.models.quote import QuoteResult


class DbcRpcClient:
    """Async client over getAccountInfo / getSlot / getBlockTime.

    No retries: transport failures surface as ``httpx`` exceptions, RPC
    error objects as RpcResponseError.
    """

    def __init__(
        self,
        rpc_url: str,
        throttle: RequestThrottle | None = None,
        max_rps: float = 5.0,
        timeout: float = 15.0,
        commitment: str = "confirmed",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._rpc_url = rpc_url
        self._commitment = commitment
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self._throttle = throttle or RequestThrottle(max_rps)

    @classmethod
    def from_settings(cls, settings: Settings, throttle: RequestThrottle | None = None) -> "DbcRpcClient":
        return cls(
            settings.solana_rpc_url,
            throttle=throttle,
            max_rps=settings.rpc_max_rps,
            timeout=settings.rpc_timeout_sec,
            commitment=settings.rpc_commitment,
        )

    async def _call(self, method: str, params: list) -> object:
        await self._throttle.acquire()
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}
        resp = await self._http.post(self._rpc_url, json=payload)
        resp.raise_for_status()
        data = resp.json()
        if data.get("error"):
            error = data["error"]
            logger.debug(f"[RPC] {method} failed: {error}")
            raise RpcResponseError(f"{method}: {error.get('message', error)}")
        return data.get("result")

    async def get_account_info(self, address: str) -> dict | None:
        """Raw ``value`` of getAccountInfo, or None when the account does not exist."""
        result = await self._call(
            "getAccountInfo",
            [address, {"encoding": "base64", "commitment": self._commitment}],
        )
        if not result or not result.get("value"):
            return None
        return result["value"]

    async def get_account_data(self, address: str) -> str | None:
        """Base64 account data, or None when the account does not exist."""
        value = await self.get_account_info(address)
        if value is None:
            return None
        return _account_data(value)

    async def get_virtual_pool(self, pool_address: str) -> VirtualPool:
        value = await self.get_account_info(pool_address)
        if value is None:
            logger.debug(f"[RPC] VirtualPool {pool_address[:16]} not found")
            raise AccountNotFoundError(f"VirtualPool {pool_address} not found")
        owner = value.get("owner")
        if owner is not None and owner != DBC_PROGRAM_ID:
            raise AccountDecodeError(f"{pool_address} is owned by {owner}, not the DBC program")
        return decode_virtual_pool(pool_address, _account_data(value))

    async def get_slot(self) -> int:
        return int(await self._call("getSlot", [{"commitment": self._commitment}]))

    async def get_block_time(self, slot: int) -> int:
        result = await self._call("getBlockTime", [slot])
        if result is None:
            raise RpcResponseError(f"getBlockTime: no block time for slot {slot}")
        return int(result)

    async def get_current_point(self, activation_type: ActivationType) -> int:
        """Current slot or unix timestamp, matching the config's activation type."""
        slot = await self.get_slot()
        if activation_type is ActivationType.SLOT:
            return slot
        return await self.get_block_time(slot)

    async def quote_swap(
        self,
        pool_address: str,
        config: PoolConfig,
        swap_base_for_quote: bool,
        amount_in: int,
        slippage_bps: int = 0,
        has_referral: bool = False,
    ) -> QuoteResult:
        """Fetch the pool and current point, then quote against that snapshot."""
        pool = await self.get_virtual_pool(pool_address)
        current_point = await self.get_current_point(config.activation_type)
        return quote(
            pool,
            config,
            swap_base_for_quote,
            amount_in,
            slippage_bps=slippage_bps,
            has_referral=has_referral,
            current_point=current_point,
        )

    async def close(self) -> None:
        await self._http.aclose()


def _account_data(value: dict) -> str:
    account_data = value["data"]
    if isinstance(account_data, list):
        return account_data[0]
    return account_data
