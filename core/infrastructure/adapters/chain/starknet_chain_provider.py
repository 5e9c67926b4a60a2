"""
Starknet Chain Provider Implementation.

Reads transaction finality through the Starknet JSON-RPC API.
"""
import logging
from typing import Any, Dict, Optional

import aiohttp

from core.application.interfaces import IChainProvider
from core.domain.enums.transaction_status import TransactionStatus
from core.settings.modules.starknet_settings import StarknetSettings


logger = logging.getLogger(__name__)

# JSON-RPC error returned while a transaction is not yet known to the node
TXN_HASH_NOT_FOUND = 29


class StarknetRpcError(Exception):
    """Raised when the RPC node answers with an error or an unexpected payload."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.code = code


class StarknetChainProvider(IChainProvider):
    """
    Starknet implementation of the chain provider.

    Calls ``starknet_getTransactionStatus``. Unknown and received
    transactions are reported PENDING; reverted ones are REJECTED.
    """

    def __init__(self, settings: StarknetSettings, session: Optional[aiohttp.ClientSession] = None):
        """
        Initialize Starknet chain provider.

        Args:
            settings: Starknet settings with the RPC url and timeout
            session: Optional shared aiohttp session
        """
        self.settings = settings
        self.rpc_url = settings.rpc_url
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=settings.request_timeout_seconds)
        self._request_id = 0
        logger.info(f"StarknetChainProvider initialized ({self.rpc_url})")

    async def get_transaction_status(self, tx_hash: str) -> TransactionStatus:
        try:
            result = await self._call("starknet_getTransactionStatus", {"transaction_hash": tx_hash})
        except StarknetRpcError as exc:
            if exc.code == TXN_HASH_NOT_FOUND:
                logger.debug(f"Transaction {tx_hash} not found yet")
                return TransactionStatus.PENDING
            raise

        return self.map_status(result)

    @staticmethod
    def map_status(result: Dict[str, Any]) -> TransactionStatus:
        """Map a ``starknet_getTransactionStatus`` result to TransactionStatus."""
        finality = result.get("finality_status")
        execution = result.get("execution_status")

        if finality == "REJECTED" or execution == "REVERTED":
            return TransactionStatus.REJECTED
        if finality == "ACCEPTED_ON_L1":
            return TransactionStatus.ACCEPTED_ON_L1
        if finality == "ACCEPTED_ON_L2":
            return TransactionStatus.ACCEPTED_ON_L2
        return TransactionStatus.PENDING

    async def _call(self, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        self._request_id += 1
        payload = {"jsonrpc": "2.0", "id": self._request_id, "method": method, "params": params}

        if self._session is not None:
            return await self._post(self._session, payload)
        async with aiohttp.ClientSession(timeout=self._timeout) as session:
            return await self._post(session, payload)

    async def _post(self, session: aiohttp.ClientSession, payload: Dict[str, Any]) -> Dict[str, Any]:
        async with session.post(self.rpc_url, json=payload, timeout=self._timeout) as response:
            if response.status != 200:
                error_text = await response.text()
                raise StarknetRpcError(f"Starknet RPC error: {response.status} - {error_text}")
            body = await response.json()

        if "error" in body:
            error = body["error"]
            raise StarknetRpcError(
                f"{payload['method']} failed: {error.get('message')}", code=error.get("code")
            )
        return body.get("result") or {}
