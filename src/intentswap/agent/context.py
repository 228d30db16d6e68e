"""Per-message caller context."""

from typing import Optional

from pydantic import BaseModel, Field

from intentswap.execution.strategy import CredentialBundle, ExecutionMode


class MessageContext(BaseModel):
    """Who is talking and what they can sign with.

    Front ends fill this per message; nothing here is stored in the session.
    """

    session_id: str = Field(default="default", description="Conversation id")
    user_address: Optional[str] = Field(default=None, description="Connected wallet address")
    near_account_id: Optional[str] = Field(default=None, description="User's NEAR account")
    near_private_key: Optional[str] = Field(
        default=None, repr=False, description="Imported ed25519:<base58> key"
    )
    execution_mode: ExecutionMode = Field(default=ExecutionMode.AUTO)
    privy_wallet_id: Optional[str] = Field(default=None, description="Privy wallet id")
    privy_near_address: Optional[str] = Field(
        default=None, description="Privy wallet's NEAR implicit address"
    )

    def credentials(
        self,
        service_account_id: Optional[str] = None,
        service_private_key: Optional[str] = None,
    ) -> CredentialBundle:
        """Credential bundle for strategy selection."""
        return CredentialBundle(
            wallet_address=self.user_address,
            near_account_id=self.near_account_id,
            near_private_key=self.near_private_key,
            execution_mode=self.execution_mode,
            privy_wallet_id=self.privy_wallet_id,
            privy_near_address=self.privy_near_address,
            service_account_id=service_account_id,
            service_private_key=service_private_key,
        )
