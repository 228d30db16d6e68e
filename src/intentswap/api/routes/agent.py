"""Chat, deposit and status endpoints."""

import logging
from typing import Optional

import httpx
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from intentswap.agent import AgentResponse, MessageContext, SwapAgent
from intentswap.exceptions import OneClickAPIError
from intentswap.execution.base import explorer_url, near_blocks_url
from intentswap.execution.runner import submit_deposit_best_effort
from intentswap.execution.strategy import ExecutionMode
from intentswap.oneclick.models import StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/agent")


# Request/Response models
class ChatRequest(BaseModel):
    """One chat message plus the caller's identity."""
    message: Optional[str] = None
    session_id: Optional[str] = None
    user_address: Optional[str] = None
    near_account_id: Optional[str] = None
    near_private_key: Optional[str] = None
    execution_mode: ExecutionMode = ExecutionMode.AUTO
    privy_wallet_id: Optional[str] = None
    privy_near_address: Optional[str] = None


class DepositRequest(BaseModel):
    """Client-signed deposit to report."""
    tx_hash: str
    deposit_address: str


class DepositResponse(BaseModel):
    success: bool
    tx_hash: str
    deposit_address: str
    submitted: bool
    error: Optional[str] = None
    explorer_url: str
    near_blocks_url: str


def get_agent(request: Request) -> SwapAgent:
    return request.app.state.agent


@router.post("/chat", response_model=AgentResponse)
async def chat(body: ChatRequest, request: Request) -> AgentResponse:
    """Run one conversational turn."""
    if not body.message or not body.message.strip():
        raise HTTPException(status_code=400, detail="message is required")
    if not body.session_id:
        raise HTTPException(status_code=400, detail="session_id is required")

    context = MessageContext(
        session_id=body.session_id,
        user_address=body.user_address,
        near_account_id=body.near_account_id,
        near_private_key=body.near_private_key,
        execution_mode=body.execution_mode,
        privy_wallet_id=body.privy_wallet_id,
        privy_near_address=body.privy_near_address,
    )
    return await get_agent(request).process_message(body.message, context)


@router.post("/deposit", response_model=DepositResponse)
async def submit_deposit(body: DepositRequest, request: Request) -> DepositResponse:
    """Report a deposit tx signed outside the service."""
    agent = get_agent(request)
    result = await submit_deposit_best_effort(agent.client, body.tx_hash, body.deposit_address)
    result.log()

    return DepositResponse(
        success=True,
        tx_hash=body.tx_hash,
        deposit_address=body.deposit_address,
        submitted=result.success,
        error=result.error,
        explorer_url=explorer_url(body.deposit_address),
        near_blocks_url=near_blocks_url(body.tx_hash),
    )


@router.get("/status/{deposit_address}", response_model=StatusResponse)
async def get_status(deposit_address: str, request: Request) -> StatusResponse:
    """Single status fetch for a deposit address."""
    agent = get_agent(request)
    try:
        return await agent.client.get_status(deposit_address)
    except OneClickAPIError as e:
        logger.warning(f"Status check failed for {deposit_address}: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except httpx.HTTPError as e:
        logger.warning(f"Status check failed for {deposit_address}: {e}")
        raise HTTPException(status_code=503, detail=f"Status service unavailable: {e}")
