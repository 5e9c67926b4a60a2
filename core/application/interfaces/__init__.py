"""Application layer interfaces."""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

from core.domain.enums.transaction_status import TransactionStatus
from core.domain.value_objects import ContainerInfo, ContainerSpec, Wallet


class IContainerRuntime(ABC):
    """
    Interface for the container runtime hosting agent processes.

    Steps talk to the runtime only through this contract, so the
    orchestration never depends on a particular runtime API.
    """

    @abstractmethod
    async def create_container(self, spec: ContainerSpec) -> ContainerInfo:
        """
        Create (but do not start) a container for an agent.

        Args:
            spec: Image config, name and wallet environment of the container

        Returns:
            Container id and the host port assigned to it
        """
        pass

    @abstractmethod
    async def start_container(self, container_id: str) -> None:
        pass

    @abstractmethod
    async def stop_container(self, container_id: str) -> None:
        pass

    @abstractmethod
    async def remove_container(self, container_id: str) -> None:
        pass

    @abstractmethod
    async def read_runtime_identity(self, container_id: str) -> Optional[str]:
        """
        Probe a started container for the agent runtime identity.

        This is a single, quick check; callers poll it with a bounded policy.

        Args:
            container_id: Container to inspect

        Returns:
            Runtime agent id once the agent is up, None if not ready yet
        """
        pass


class IChainProvider(ABC):
    """Interface for blockchain transaction lookups."""

    @abstractmethod
    async def get_transaction_status(self, tx_hash: str) -> TransactionStatus:
        """
        Get finality status of a transaction.

        Args:
            tx_hash: Transaction hash

        Returns:
            Current transaction status
        """
        pass


class IBlobStore(ABC):
    """
    Interface for uploaded file storage.

    Used by callers (upload before starting a workflow, cleanup when starting
    fails) and by the agent record step (moving a temp file to its final name).
    """

    @abstractmethod
    async def upload_temp_file(self, filename: str, content: bytes) -> str:
        """
        Store an upload under a temporary name.

        Args:
            filename: Original file name (extension is kept)
            content: File bytes

        Returns:
            Temporary file name, prefixed with ``temp_``
        """
        pass

    @abstractmethod
    async def move_to_final(self, temp_name: str, agent_id: str) -> str:
        """
        Move a temporary file to its final, agent-keyed name.

        Returns:
            Final file name
        """
        pass

    @abstractmethod
    async def delete_file(self, name: str, temp: bool = False) -> None:
        pass


class IWalletService(ABC):
    """Interface for agent wallet provisioning."""

    @abstractmethod
    def create_wallet(self) -> Wallet:
        """Generate a new wallet (keys and counterfactual address)."""
        pass

    @abstractmethod
    async def transfer_funds(self, wallet: Wallet) -> str:
        """
        Send initial funds to a wallet.

        Returns:
            Funding transaction hash
        """
        pass

    @abstractmethod
    async def deploy_wallet(self, wallet: Wallet) -> Tuple[str, str]:
        """
        Deploy the wallet's account contract.

        Returns:
            Tuple of (deploy transaction hash, deployed contract address)
        """
        pass


class ITokenDeployer(ABC):
    """Interface for agent token deployment."""

    @abstractmethod
    async def deploy_token(self, name: str, symbol: str) -> str:
        """
        Deploy a token contract.

        Args:
            name: Token name
            symbol: Token symbol

        Returns:
            Deployed contract address
        """
        pass
