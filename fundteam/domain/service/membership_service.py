"""Membership domain service.

Owns accounts and their fund binding, and the investor profiles that
accompany the investor role.
"""

from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from fundteam.domain.error import ForbiddenError, NotFoundError
from fundteam.domain.model import InvestorProfile, User
from fundteam.domain.repository import InvestorRepository, UserRepository
from fundteam.domain.value import FundId, InvestorId, TeamRole, UserId
from fundteam.util.password import hash_password

from .base import Service


def normalize_email(email: str) -> str:
    """Canonical form used for every email comparison."""
    return email.strip().lower()


class MembershipService(Service):
    """Domain service for fund membership operations."""

    def __init__(
        self,
        user_repository: UserRepository,
        investor_repository: InvestorRepository,
    ) -> None:
        """Initialize membership service.

        Args:
            user_repository: User repository
            investor_repository: Investor profile repository
        """
        self.user_repository = user_repository
        self.investor_repository = investor_repository

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Get an account by ID, or None."""
        return await self.user_repository.find_by_id(user_id)

    async def get_by_email(self, email: str) -> User | None:
        """Get an account by email.

        Args:
            email: Email address, compared case-insensitively

        Returns:
            The account if one exists, None otherwise
        """
        with logfire.span("membership_service.get_by_email"):
            return await self.user_repository.find_by_email(normalize_email(email))

    async def is_fund_member(self, email: str, fund_id: FundId) -> bool:
        """Whether an account with this email is bound to the fund.

        Args:
            email: Email address
            fund_id: Fund ID

        Returns:
            True if the account exists and belongs to the fund
        """
        user = await self.get_by_email(email)
        return user is not None and user.is_member_of(fund_id)

    async def bind_to_fund(
        self, user: User, fund_id: FundId, role: TeamRole, now: datetime
    ) -> User:
        """Bind an existing account to a fund with a role.

        Re-binding to the same fund and role is a no-op apart from
        marking onboarding complete.

        Args:
            user: Account to bind
            fund_id: Fund ID
            role: Team role
            now: Update instant

        Returns:
            The updated account
        """
        with logfire.span(
            "membership_service.bind_to_fund",
            user_id=str(user.id),
            fund_id=str(fund_id),
            role=role.value,
        ):
            if user.fund_id and user.fund_id != fund_id:
                logfire.warn(
                    "Account moves to a different fund",
                    user_id=str(user.id),
                    previous_fund_id=str(user.fund_id),
                    fund_id=str(fund_id),
                )

            bound = user.changed(
                now, fund_id=fund_id, role=role, onboarding_completed=True
            )
            saved = await self.user_repository.save(bound)
            logfire.info(
                "Account bound to fund",
                user_id=str(user.id),
                fund_id=str(fund_id),
                role=role.value,
            )
            return saved

    async def ensure_investor_profile(
        self, user: User, fund_id: FundId, now: datetime
    ) -> InvestorProfile:
        """Return the account's investor profile in a fund, creating it if absent.

        Idempotent: a concurrent insert that loses the uniqueness race
        re-reads and returns the winner's profile.

        Args:
            user: Account holding the investor role
            fund_id: Fund ID
            now: Creation instant

        Returns:
            The investor profile
        """
        with logfire.span(
            "membership_service.ensure_investor_profile",
            user_id=str(user.id),
            fund_id=str(fund_id),
        ):
            existing = await self.investor_repository.find_by_user_and_fund(
                user.id, fund_id
            )
            if existing:
                logfire.info(
                    "Investor profile already exists",
                    user_id=str(user.id),
                    investor_id=str(existing.id),
                )
                return existing

            profile = InvestorProfile(
                id=InvestorId(uuid4()),
                user_id=user.id,
                fund_id=fund_id,
                email=user.email,
                first_name=user.first_name,
                last_name=user.last_name,
                created_at=now,
            )
            try:
                saved = await self.investor_repository.save(profile)
            except IntegrityError:
                winner = await self.investor_repository.find_by_user_and_fund(
                    user.id, fund_id
                )
                if winner is None:
                    raise
                return winner

            logfire.info(
                "Investor profile created",
                user_id=str(user.id),
                investor_id=str(saved.id),
            )
            return saved

    async def create_account(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        fund_id: FundId,
        role: TeamRole,
        now: datetime,
    ) -> User:
        """Create a new account already bound to a fund.

        Args:
            email: Account email
            password: Plain text password, stored as a bcrypt hash
            first_name: First name
            last_name: Last name
            fund_id: Fund ID
            role: Team role
            now: Creation instant

        Returns:
            The created account

        Raises:
            IntegrityError: If an account already uses this email
        """
        with logfire.span(
            "membership_service.create_account", fund_id=str(fund_id), role=role.value
        ):
            user = User(
                id=UserId(uuid4()),
                email=normalize_email(email),
                first_name=first_name,
                last_name=last_name,
                fund_id=fund_id,
                role=role,
                password_hash=hash_password(password),
                onboarding_completed=True,
                created_at=now,
                updated_at=now,
            )
            saved = await self.user_repository.save(user)
            logfire.info(
                "Account created", user_id=str(saved.id), fund_id=str(fund_id)
            )
            return saved

    async def delete_account(self, user_id: UserId) -> bool:
        """Delete an account. Used to compensate a failed acceptance.

        Args:
            user_id: Account ID

        Returns:
            True if the account was deleted
        """
        with logfire.span("membership_service.delete_account", user_id=str(user_id)):
            deleted = await self.user_repository.delete(user_id)
            logfire.info("Account deleted", user_id=str(user_id), deleted=deleted)
            return deleted

    async def require_manager(self, user_id: UserId, action: str) -> User:
        """Load the caller's account and check it manages a fund.

        Role and fund are read from the store rather than from token claims,
        so a demoted or removed manager loses access immediately.

        Args:
            user_id: Caller's account ID
            action: What the caller is trying to do, for the error message

        Returns:
            The caller's account

        Raises:
            ForbiddenError: If the caller is not a manager bound to a fund
        """
        user = await self.user_repository.find_by_id(user_id)
        if not user or user.role != TeamRole.MANAGER or user.fund_id is None:
            logfire.warn("Manager role required", user_id=str(user_id), action=action)
            raise ForbiddenError(f"Only fund managers can {action}")
        return user

    async def get_member(self, user_id: UserId, fund_id: FundId) -> User:
        """Get an account that must belong to the given fund.

        Args:
            user_id: Account ID
            fund_id: Fund ID

        Returns:
            The account

        Raises:
            NotFoundError: If the account does not exist
            ForbiddenError: If the account belongs to another fund
        """
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            logfire.warn("User not found", user_id=str(user_id))
            raise NotFoundError("User", str(user_id), "User not found")
        if not user.is_member_of(fund_id):
            logfire.warn(
                "User is not a member of fund",
                user_id=str(user_id),
                fund_id=str(fund_id),
            )
            raise ForbiddenError("User is not a member of this fund")
        return user

    async def update_member_role(
        self, user_id: UserId, fund_id: FundId, role: TeamRole, now: datetime
    ) -> User:
        """Change a member's role within their fund.

        Switching a member to the investor role also ensures their
        investor profile exists.

        Args:
            user_id: Account ID
            fund_id: Fund ID
            role: New team role
            now: Update instant

        Returns:
            The updated account

        Raises:
            NotFoundError: If the account does not exist
            ForbiddenError: If the account belongs to another fund
        """
        with logfire.span(
            "membership_service.update_member_role",
            user_id=str(user_id),
            fund_id=str(fund_id),
            role=role.value,
        ):
            user = await self.get_member(user_id, fund_id)
            updated = await self.user_repository.save(
                user.changed(now, role=role)
            )
            if role == TeamRole.INVESTOR:
                await self.ensure_investor_profile(updated, fund_id, now)
            logfire.info(
                "Member role updated",
                user_id=str(user_id),
                previous_role=user.role.value if user.role else None,
                role=role.value,
            )
            return updated

    async def remove_member(
        self, user_id: UserId, fund_id: FundId, now: datetime
    ) -> User:
        """Detach a member from their fund. The account itself is kept.

        Args:
            user_id: Account ID
            fund_id: Fund ID
            now: Update instant

        Returns:
            The detached account

        Raises:
            NotFoundError: If the account does not exist
            ForbiddenError: If the account belongs to another fund
        """
        with logfire.span(
            "membership_service.remove_member",
            user_id=str(user_id),
            fund_id=str(fund_id),
        ):
            user = await self.get_member(user_id, fund_id)
            removed = await self.user_repository.save(
                user.changed(now, fund_id=None)
            )
            logfire.info(
                "Member removed from fund", user_id=str(user_id), fund_id=str(fund_id)
            )
            return removed

    async def list_members(self, fund_id: FundId) -> list[User]:
        """List accounts bound to a fund.

        Args:
            fund_id: Fund ID

        Returns:
            Members ordered by creation time
        """
        with logfire.span("membership_service.list_members", fund_id=str(fund_id)):
            members = await self.user_repository.find_by_fund(fund_id)
            logfire.info("Members listed", fund_id=str(fund_id), count=len(members))
            return members
