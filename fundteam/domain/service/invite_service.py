"""Invite lifecycle domain service.

State machine per invite: pending -> accepted | pending -> cancelled.
Every operation takes the current instant as ``now`` so that expiry
checks are deterministic.
"""

from datetime import datetime
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from fundteam.config import InvitationSettings
from fundteam.domain.error import (
    AlreadyUsedError,
    ConflictError,
    DependencyFailureError,
    ExpiredError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from fundteam.domain.model import Invite, User
from fundteam.domain.repository import FundRepository, InviteRepository
from fundteam.domain.value import (
    FundId,
    InviteId,
    InviteStatus,
    InviteToken,
    TeamRole,
    UserId,
)
from fundteam.domain.value.common import ValueObject
from fundteam.util.token import TokenGenerator, compute_expiry

from .base import Service
from .membership_service import MembershipService, normalize_email

UNKNOWN_FUND_NAME = "Unknown Fund"
UNKNOWN_INVITER_NAME = "A team member"


class InviteContext(ValueObject):
    """Display data that accompanies an invite in emails and verification."""

    fund_name: str
    platform_name: str
    invited_by_name: str
    invited_by_email: str | None = None
    inviter_full_name: str | None = None


class InviteVerification(ValueObject):
    """Result of a successful token verification."""

    invite: Invite
    context: InviteContext
    is_existing_user: bool


class AcceptedInvite(ValueObject):
    """Result of accepting an invite.

    ``invite_marked_accepted`` is False when the account changes went
    through but the final status update failed. The failure is logged and
    is not surfaced to the recipient.
    """

    invite: Invite
    user: User
    is_existing_user: bool
    invite_marked_accepted: bool


class ResentInvite(ValueObject):
    """Data needed to re-send the notification for an invite."""

    invite: Invite
    context: InviteContext

    @property
    def email(self) -> str:
        return self.invite.email

    @property
    def fund_name(self) -> str:
        return self.context.fund_name

    @property
    def token(self) -> InviteToken:
        return self.invite.token


class InviteService(Service):
    """Domain service for the team invite lifecycle."""

    def __init__(
        self,
        invite_repository: InviteRepository,
        fund_repository: FundRepository,
        membership_service: MembershipService,
        invitation_settings: InvitationSettings,
    ) -> None:
        """Initialize invite service.

        Args:
            invite_repository: Invite repository
            fund_repository: Fund repository
            membership_service: Membership service for account lookups and binding
            invitation_settings: Expiry window and platform defaults
        """
        self.invite_repository = invite_repository
        self.fund_repository = fund_repository
        self.membership_service = membership_service
        self.invitation_settings = invitation_settings

    async def create_invite(
        self,
        email: str,
        fund_id: FundId,
        role: TeamRole,
        invited_by_user_id: UserId | None,
        now: datetime,
        token_generator: TokenGenerator,
    ) -> Invite:
        """Create a new pending invite.

        Scheduling reminders and sending the invitation email are left to
        the caller.

        Args:
            email: Recipient email
            fund_id: Fund the recipient is invited to
            role: Role the recipient will hold
            invited_by_user_id: Inviting manager, if known
            now: Current instant
            token_generator: Source of the invite token

        Returns:
            Created invite

        Raises:
            ConflictError: If the email is already a member of the fund or
                already has a pending invite there
        """
        email = normalize_email(email)
        with logfire.span(
            "invite_service.create_invite",
            fund_id=str(fund_id),
            role=role.value,
            invited_by_user_id=str(invited_by_user_id) if invited_by_user_id else None,
        ):
            if await self.membership_service.is_fund_member(email, fund_id):
                logfire.warn("Invitee is already a member", fund_id=str(fund_id))
                raise ConflictError("This email is already a team member of this fund")

            if await self.invite_repository.exists_pending_for_email_and_fund(
                email, fund_id
            ):
                logfire.warn("Pending invite already exists", fund_id=str(fund_id))
                raise ConflictError("A pending invite already exists for this email")

            invite = Invite(
                id=InviteId(uuid4()),
                email=email,
                fund_id=fund_id,
                role=role,
                token=token_generator(),
                status=InviteStatus.PENDING,
                invited_by_user_id=invited_by_user_id,
                expires_at=compute_expiry(now, self.invitation_settings.expiry_days),
                created_at=now,
                updated_at=now,
            )

            try:
                saved = await self.invite_repository.save(invite)
            except IntegrityError as e:
                # Lost a race with a concurrent create for the same email and fund
                logfire.warn(
                    "Pending invite uniqueness violated on insert",
                    fund_id=str(fund_id),
                )
                raise ConflictError(
                    "A pending invite already exists for this email"
                ) from e

            logfire.info(
                "Invite created",
                invite_id=str(saved.id),
                fund_id=str(fund_id),
                role=role.value,
                token=saved.token.redacted,
            )
            return saved

    async def get_invite(self, invite_id: InviteId) -> Invite:
        """Get invite by ID.

        Args:
            invite_id: Invite ID

        Returns:
            The invite

        Raises:
            NotFoundError: If the invite does not exist
        """
        with logfire.span("invite_service.get_invite", invite_id=str(invite_id)):
            invite = await self.invite_repository.find_by_id(invite_id)
            if not invite:
                logfire.warn("Invite not found", invite_id=str(invite_id))
                raise NotFoundError("Invite", str(invite_id), "Invite not found")
            return invite

    async def find_invite(self, invite_id: InviteId) -> Invite | None:
        """Get invite by ID, or None if it does not exist."""
        return await self.invite_repository.find_by_id(invite_id)

    async def describe_invite(self, invite: Invite) -> InviteContext:
        """Collect the fund and inviter names shown alongside an invite.

        Args:
            invite: The invite

        Returns:
            Display context with fallbacks for a missing fund or inviter
        """
        fund = await self.fund_repository.find_by_id(invite.fund_id)
        inviter = (
            await self.membership_service.get_by_id(invite.invited_by_user_id)
            if invite.invited_by_user_id
            else None
        )

        if inviter:
            invited_by_name = inviter.display_name or inviter.email
        else:
            invited_by_name = UNKNOWN_INVITER_NAME

        return InviteContext(
            fund_name=fund.name if fund else UNKNOWN_FUND_NAME,
            platform_name=(
                fund.platform_name
                if fund and fund.platform_name
                else self.invitation_settings.platform_name
            ),
            invited_by_name=invited_by_name,
            invited_by_email=inviter.email if inviter else None,
            inviter_full_name=inviter.display_name if inviter else None,
        )

    async def verify_token(self, token: str, now: datetime) -> InviteVerification:
        """Check that a token names a usable invite.

        Checks run in order: unknown token, expiry, then status.

        Args:
            token: Token from the invite link
            now: Current instant

        Returns:
            The invite with display context and whether the recipient
            already has an account

        Raises:
            NotFoundError: If no invite has this token
            ExpiredError: If now is past the invite's expiry
            AlreadyUsedError: If the invite was accepted or cancelled
        """
        redacted = token[:8] + "..."
        with logfire.span("invite_service.verify_token", token=redacted):
            try:
                invite_token = InviteToken(root=token)
            except PydanticValidationError:
                invite_token = None

            invite = (
                await self.invite_repository.find_by_token(invite_token)
                if invite_token
                else None
            )
            if not invite:
                logfire.warn("Invite token not found", token=redacted)
                raise NotFoundError("Invite", redacted, "Invalid invite token")

            if invite.is_expired(now):
                logfire.warn("Invite expired", invite_id=str(invite.id))
                raise ExpiredError("Invite has expired")

            if not invite.is_pending:
                logfire.warn(
                    "Invite no longer pending",
                    invite_id=str(invite.id),
                    status=invite.status.value,
                )
                raise AlreadyUsedError("Invite has already been used or cancelled")

            context = await self.describe_invite(invite)
            existing_user = await self.membership_service.get_by_email(invite.email)

            logfire.info(
                "Invite verified",
                invite_id=str(invite.id),
                is_existing_user=existing_user is not None,
            )
            return InviteVerification(
                invite=invite,
                context=context,
                is_existing_user=existing_user is not None,
            )

    async def accept_invite(
        self,
        token: str,
        now: datetime,
        password: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> AcceptedInvite:
        """Accept an invite, binding or creating the recipient's account.

        Existing accounts are re-bound to the invite's fund and role. New
        recipients get an account created from the supplied password and
        names. Investors get an investor profile in either case. A new
        account is deleted again if its investor profile cannot be created.

        The invite is marked accepted last. If that update fails the
        account changes stand and ``invite_marked_accepted`` is False.

        Args:
            token: Token from the invite link
            now: Current instant
            password: Password for a new account
            first_name: First name for a new account
            last_name: Last name for a new account

        Returns:
            The accepted invite and resulting account

        Raises:
            NotFoundError: If no invite has this token
            ExpiredError: If the invite has expired
            AlreadyUsedError: If the invite was accepted or cancelled
            ValidationError: If a new recipient omits password or names
            DependencyFailureError: If the new account could not be completed
        """
        with logfire.span("invite_service.accept_invite", token=token[:8] + "..."):
            verification = await self.verify_token(token, now)
            invite = verification.invite

            user: User | None = None
            if not verification.is_existing_user:
                user = await self._accept_as_new_user(
                    invite, now, password, first_name, last_name
                )

            is_existing_user = user is None
            if user is None:
                user = await self._accept_as_existing_user(invite, now)

            marked = await self._mark_accepted(invite, now)

            logfire.info(
                "Invite accepted",
                invite_id=str(invite.id),
                user_id=str(user.id),
                is_existing_user=is_existing_user,
                invite_marked_accepted=marked,
            )
            return AcceptedInvite(
                invite=invite,
                user=user,
                is_existing_user=is_existing_user,
                invite_marked_accepted=marked,
            )

    async def _accept_as_existing_user(self, invite: Invite, now: datetime) -> User:
        """Re-bind an existing account to the invite's fund and role."""
        user = await self.membership_service.get_by_email(invite.email)
        if user is None:
            raise DependencyFailureError("Account disappeared during acceptance")

        bound = await self.membership_service.bind_to_fund(
            user, invite.fund_id, invite.role, now
        )

        if invite.role == TeamRole.INVESTOR:
            try:
                await self.membership_service.ensure_investor_profile(
                    bound, invite.fund_id, now
                )
            except Exception as e:
                # The binding already stands; a later role update retries this
                logfire.error(
                    "Failed to create investor profile for existing account",
                    user_id=str(bound.id),
                    fund_id=str(invite.fund_id),
                    error=str(e),
                )

        return bound

    async def _accept_as_new_user(
        self,
        invite: Invite,
        now: datetime,
        password: str | None,
        first_name: str | None,
        last_name: str | None,
    ) -> User | None:
        """Create an account for a new recipient.

        Returns None when an account for the email turns up after
        verification (a retried or concurrent acceptance), in which case
        the caller falls back to the existing-account path.
        """
        if await self.membership_service.get_by_email(invite.email):
            logfire.info(
                "Account already exists, treating acceptance as existing user",
                invite_id=str(invite.id),
            )
            return None

        if not password or not first_name or not last_name:
            raise ValidationError(
                "Password, first name, and last name are required for new users"
            )

        try:
            user = await self.membership_service.create_account(
                email=invite.email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                fund_id=invite.fund_id,
                role=invite.role,
                now=now,
            )
        except IntegrityError:
            logfire.warn(
                "Account created concurrently, treating as existing user",
                invite_id=str(invite.id),
            )
            return None

        if invite.role == TeamRole.INVESTOR:
            try:
                await self.membership_service.ensure_investor_profile(
                    user, invite.fund_id, now
                )
            except Exception as e:
                logfire.error(
                    "Failed to create investor profile, rolling back account",
                    user_id=str(user.id),
                    fund_id=str(invite.fund_id),
                    error=str(e),
                )
                await self._compensate_new_account(user)
                raise DependencyFailureError(
                    f"Failed to create investor record: {e}"
                ) from e

        return user

    async def _compensate_new_account(self, user: User) -> None:
        try:
            await self.membership_service.delete_account(user.id)
        except Exception as e:
            logfire.error(
                "Failed to roll back account after investor profile failure",
                user_id=str(user.id),
                error=str(e),
            )

    async def _mark_accepted(self, invite: Invite, now: datetime) -> bool:
        accepted = invite.changed(now, status=InviteStatus.ACCEPTED, accepted_at=now)
        try:
            updated = await self.invite_repository.update_if_pending(accepted)
        except Exception as e:
            logfire.error(
                "Failed to mark invite accepted",
                invite_id=str(invite.id),
                error=str(e),
            )
            return False
        if not updated:
            # Settled by a concurrent accept or cancel; that outcome stands
            logfire.warn(
                "Invite settled concurrently, not marking accepted",
                invite_id=str(invite.id),
            )
        return updated

    async def _update_pending(self, updated: Invite, action: str) -> Invite:
        """Write a change to a pending invite, or fail if it was settled meanwhile."""
        if not await self.invite_repository.update_if_pending(updated):
            logfire.warn(
                "Invite left pending state concurrently",
                invite_id=str(updated.id),
                action=action,
            )
            raise InvalidStateError(f"Only pending invites can be {action}")
        return updated

    async def _get_pending_for_fund(
        self, invite_id: InviteId, fund_id: FundId, action: str
    ) -> Invite:
        invite = await self.get_invite(invite_id)
        if invite.fund_id != fund_id:
            logfire.warn(
                "Invite belongs to another fund",
                invite_id=str(invite_id),
                fund_id=str(fund_id),
            )
            raise ForbiddenError("Invite does not belong to this fund")
        if not invite.is_pending:
            logfire.warn(
                "Invite not pending",
                invite_id=str(invite_id),
                status=invite.status.value,
                action=action,
            )
            raise InvalidStateError(f"Only pending invites can be {action}")
        return invite

    async def cancel_invite(
        self, invite_id: InviteId, fund_id: FundId, now: datetime
    ) -> Invite:
        """Cancel a pending invite.

        Cancelling reminders is left to the caller.

        Args:
            invite_id: Invite ID
            fund_id: Caller's fund
            now: Current instant

        Returns:
            The cancelled invite

        Raises:
            NotFoundError: If the invite does not exist
            ForbiddenError: If the invite belongs to another fund
            InvalidStateError: If the invite is not pending
        """
        with logfire.span(
            "invite_service.cancel_invite",
            invite_id=str(invite_id),
            fund_id=str(fund_id),
        ):
            invite = await self._get_pending_for_fund(invite_id, fund_id, "cancelled")
            cancelled = await self._update_pending(
                invite.changed(now, status=InviteStatus.CANCELLED), "cancelled"
            )
            logfire.info("Invite cancelled", invite_id=str(invite_id))
            return cancelled

    async def resend_invite(
        self, invite_id: InviteId, fund_id: FundId, now: datetime
    ) -> ResentInvite:
        """Extend a pending invite's expiry from now. The token is unchanged.

        Re-sending the email and rescheduling reminders is left to the caller.

        Args:
            invite_id: Invite ID
            fund_id: Caller's fund
            now: Current instant

        Returns:
            The refreshed invite with the display context for its email

        Raises:
            NotFoundError: If the invite does not exist
            ForbiddenError: If the invite belongs to another fund
            InvalidStateError: If the invite is not pending
        """
        with logfire.span(
            "invite_service.resend_invite",
            invite_id=str(invite_id),
            fund_id=str(fund_id),
        ):
            invite = await self._get_pending_for_fund(invite_id, fund_id, "resent")
            # Expiry never moves backwards, even if the caller's clock does
            expires_at = max(
                invite.expires_at,
                compute_expiry(now, self.invitation_settings.expiry_days),
            )
            resent = await self._update_pending(
                invite.changed(now, expires_at=expires_at), "resent"
            )
            logfire.info(
                "Invite expiry extended",
                invite_id=str(invite_id),
                expires_at=resent.expires_at.isoformat(),
            )
            context = await self.describe_invite(resent)
            return ResentInvite(invite=resent, context=context)

    async def list_pending_invites(self, fund_id: FundId) -> list[Invite]:
        """List a fund's pending invites, newest first.

        Args:
            fund_id: Fund ID

        Returns:
            Pending invites
        """
        with logfire.span(
            "invite_service.list_pending_invites", fund_id=str(fund_id)
        ):
            invites = await self.invite_repository.find_pending_by_fund(fund_id)
            logfire.info(
                "Pending invites listed", fund_id=str(fund_id), count=len(invites)
            )
            return invites
