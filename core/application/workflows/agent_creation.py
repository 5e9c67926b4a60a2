"""
Agent creation workflows.

Builds the step table for both agent creation workflow types:

- ``agent-creation``: record, wallet (create, fund, deploy), token, container
- ``leftcurve-agent-creation``: record, token, container (no wallet)
"""
import asyncio
from dataclasses import dataclass
from typing import List, Optional

from core.application.interfaces import (
    IBlobStore,
    IChainProvider,
    IContainerRuntime,
    ITokenDeployer,
    IWalletService,
)
from core.domain.repositories import (
    AgentRepository,
    AgentTokenRepository,
    AgentWalletRepository,
)
from orchestration.polling import PollPolicy, Sleep
from orchestration.registry import StepRegistry
from orchestration.step import StepExecutor

from .steps import (
    CreateContainerStep,
    CreateDbRecordStep,
    CreateWalletStep,
    DeployAgentTokenStep,
    DeployWalletStep,
    FundWalletStep,
    StartContainerStep,
)
from .types import AGENT_CREATION, LEFTCURVE_AGENT_CREATION


@dataclass
class AgentCreationDependencies:
    """Collaborators shared by the agent creation steps."""

    agents: AgentRepository
    wallets: AgentWalletRepository
    tokens: AgentTokenRepository
    chain: IChainProvider
    runtime: IContainerRuntime
    wallet_service: IWalletService
    token_deployer: ITokenDeployer
    blob_store: Optional[IBlobStore] = None
    payment_poll_policy: Optional[PollPolicy] = None
    runtime_poll_policy: Optional[PollPolicy] = None
    sleep: Sleep = asyncio.sleep


def build_agent_creation_steps(deps: AgentCreationDependencies) -> List[StepExecutor]:
    """Steps of the wallet-backed ``agent-creation`` workflow."""
    workflow_type = AGENT_CREATION
    return [
        CreateDbRecordStep(
            deps.agents,
            deps.chain,
            deps.blob_store,
            poll_policy=deps.payment_poll_policy,
            sleep=deps.sleep,
            workflow_type=workflow_type,
        ),
        CreateWalletStep(deps.wallet_service, deps.wallets, workflow_type=workflow_type),
        FundWalletStep(deps.wallet_service, deps.wallets, workflow_type=workflow_type),
        DeployWalletStep(deps.wallet_service, deps.wallets, workflow_type=workflow_type),
        DeployAgentTokenStep(deps.token_deployer, deps.tokens, workflow_type=workflow_type),
        CreateContainerStep(deps.runtime, deps.agents, deps.wallets, workflow_type=workflow_type),
        StartContainerStep(
            deps.runtime,
            deps.agents,
            poll_policy=deps.runtime_poll_policy,
            sleep=deps.sleep,
            workflow_type=workflow_type,
        ),
    ]


def build_leftcurve_steps(deps: AgentCreationDependencies) -> List[StepExecutor]:
    """Steps of ``leftcurve-agent-creation``; same step types, no wallet stage."""
    workflow_type = LEFTCURVE_AGENT_CREATION
    return [
        CreateDbRecordStep(
            deps.agents,
            deps.chain,
            deps.blob_store,
            poll_policy=deps.payment_poll_policy,
            sleep=deps.sleep,
            workflow_type=workflow_type,
        ),
        DeployAgentTokenStep(deps.token_deployer, deps.tokens, workflow_type=workflow_type),
        CreateContainerStep(deps.runtime, deps.agents, deps.wallets, workflow_type=workflow_type),
        StartContainerStep(
            deps.runtime,
            deps.agents,
            poll_policy=deps.runtime_poll_policy,
            sleep=deps.sleep,
            workflow_type=workflow_type,
        ),
    ]


def build_registry(deps: AgentCreationDependencies) -> StepRegistry:
    """Build the immutable registry holding both agent creation workflows."""
    return StepRegistry(build_agent_creation_steps(deps) + build_leftcurve_steps(deps))
