"""Chain provider adapters.

``StarknetChainProvider`` is aiohttp-backed; import it from its module.
"""

from .mock_chain_provider import MockChainProvider

__all__ = ["MockChainProvider"]
