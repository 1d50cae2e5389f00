"""Invite repository interface."""

from abc import ABC, abstractmethod

from fundteam.domain.model.invite import Invite
from fundteam.domain.value import FundId, InviteId, InviteToken


class InviteRepository(ABC):
    """Repository for Invite entity.

    Defines the contract for invite persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, invite_id: InviteId) -> Invite | None:
        """Find an invite by ID.

        Args:
            invite_id: The invite's unique identifier

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: InviteToken) -> Invite | None:
        """Find an invite by token.

        Used when a recipient opens the invite link.

        Args:
            token: The invite token

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_pending_by_email_and_fund(
        self, email: str, fund_id: FundId
    ) -> Invite | None:
        """Find the pending invite for an email within a fund.

        Args:
            email: Recipient email address
            fund_id: The fund the invite targets

        Returns:
            The pending invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists_pending_for_email_and_fund(
        self, email: str, fund_id: FundId
    ) -> bool:
        """Check if a pending invite exists for an email within a fund.

        Used during invite creation to prevent duplicates.

        Args:
            email: Recipient email address
            fund_id: The fund the invite targets

        Returns:
            True if a pending invite exists, False otherwise
        """
        pass

    @abstractmethod
    async def find_pending_by_fund(self, fund_id: FundId) -> list[Invite]:
        """List pending invites for a fund, newest first.

        Args:
            fund_id: The fund's unique identifier

        Returns:
            List of pending invites
        """
        pass

    @abstractmethod
    async def save(self, invite: Invite) -> Invite:
        """Save an invite (create or update).

        Args:
            invite: The invite to save

        Returns:
            The saved invite

        Raises:
            IntegrityError: If a pending invite already exists for this email and fund
        """
        pass

    @abstractmethod
    async def update_if_pending(self, invite: Invite) -> bool:
        """Overwrite a stored invite only while it is still pending.

        The status check and the write are a single store operation, so a
        concurrent accept or cancel that settled the invite first wins.

        Args:
            invite: The updated invite

        Returns:
            True if the stored invite was pending and has been updated,
            False if it no longer exists or has left the pending state
        """
        pass
