"""Unit tests for InviteService."""

import asyncio
from unittest.mock import patch
from uuid import uuid4

import pytest

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
from fundteam.domain.repository import (
    FundRepository,
    InvestorRepository,
    InviteRepository,
    UserRepository,
)
from fundteam.domain.service import InviteService
from fundteam.domain.service.invite_service import UNKNOWN_FUND_NAME
from fundteam.domain.value import FundId, InviteId, InviteStatus, TeamRole
from fundteam.util.token import generate_invite_token
from tests.conftest import T0, days, make_fund, make_user, sequential_tokens
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()

PASSWORD = "Sup3rSecret"


async def _create(service, email, fund_id, role, invited_by, now):
    return await service.create_invite(
        email, fund_id, role, invited_by, now, generate_invite_token
    )


async def _setup(unit_env):
    fund = await make_fund(await unit_env.get(FundRepository))
    manager = await make_user(
        await unit_env.get(UserRepository),
        "manager@acme.com",
        fund_id=fund.id,
        role=TeamRole.MANAGER,
        first_name="Mia",
        last_name="Manager",
    )
    return fund, manager


async def _invite(unit_env, email="a@x.com", role=TeamRole.INVESTOR):
    fund, manager = await _setup(unit_env)
    service = await unit_env.get(InviteService)
    invite = await _create(service, email, fund.id, role, manager.id, T0)
    return service, fund, manager, invite


class TestCreateInvite:
    """Tests for create_invite."""

    @pytest.mark.asyncio
    async def test_create_invite_success(self, unit_env):
        """A new invite is pending, expires in 7 days and has a 64-hex token."""
        service, fund, manager, invite = await _invite(unit_env)

        assert invite.status == InviteStatus.PENDING
        assert invite.email == "a@x.com"
        assert invite.fund_id == fund.id
        assert invite.role == TeamRole.INVESTOR
        assert invite.invited_by_user_id == manager.id
        assert invite.expires_at == T0 + days(7)
        assert invite.accepted_at is None
        assert len(invite.token.root) == 64

        saved = await (await unit_env.get(InviteRepository)).find_by_id(invite.id)
        assert saved == invite

    @pytest.mark.asyncio
    async def test_email_is_normalized(self, unit_env):
        """Emails are stored trimmed and lowercased."""
        _, _, _, invite = await _invite(unit_env, email="  New.Person@Example.COM ")

        assert invite.email == "new.person@example.com"

    @pytest.mark.asyncio
    async def test_uses_injected_token_generator(self, unit_env):
        """The token comes from the supplied generator."""
        fund, manager = await _setup(unit_env)
        service = await unit_env.get(InviteService)
        tokens = sequential_tokens()

        invite = await service.create_invite(
            "a@x.com", fund.id, TeamRole.ACCOUNTANT, manager.id, T0, tokens
        )

        assert invite.token.root == f"{1:064x}"

    @pytest.mark.asyncio
    async def test_duplicate_pending_invite_conflicts(self, unit_env):
        """A second pending invite for the same email and fund is a conflict."""
        service, fund, manager, _ = await _invite(unit_env)

        with pytest.raises(ConflictError, match="pending invite already exists"):
            await _create(
                service, "A@X.com", fund.id, TeamRole.MANAGER, manager.id, T0
            )

    @pytest.mark.asyncio
    async def test_same_email_other_fund_allowed(self, unit_env):
        """Pending uniqueness is per fund."""
        service, _, manager, _ = await _invite(unit_env)
        other_fund = await make_fund(await unit_env.get(FundRepository), "Other")

        invite = await _create(
            service, "a@x.com", other_fund.id, TeamRole.INVESTOR, manager.id, T0
        )

        assert invite.fund_id == other_fund.id

    @pytest.mark.asyncio
    async def test_existing_member_conflicts(self, unit_env):
        """Inviting someone already in the fund is a conflict."""
        fund, manager = await _setup(unit_env)
        service = await unit_env.get(InviteService)

        with pytest.raises(ConflictError, match="already a team member"):
            await _create(
                service, "manager@acme.com", fund.id, TeamRole.ATTORNEY, manager.id, T0
            )

    @pytest.mark.asyncio
    async def test_race_on_insert_maps_to_conflict(self, unit_env):
        """A uniqueness violation at the store surfaces as a conflict."""
        service, fund, manager, _ = await _invite(unit_env)
        invite_repo = await unit_env.get(InviteRepository)

        # Simulate a concurrent create that passed the pre-check
        with patch.object(
            invite_repo, "exists_pending_for_email_and_fund", return_value=False
        ):
            with pytest.raises(ConflictError):
                await _create(
                    service, "a@x.com", fund.id, TeamRole.INVESTOR, manager.id, T0
                )

        assert len(await invite_repo.find_pending_by_fund(fund.id)) == 1

    @pytest.mark.asyncio
    async def test_allowed_after_cancel(self, unit_env):
        """Cancelling frees the email for a new invite."""
        service, fund, manager, invite = await _invite(unit_env)
        await service.cancel_invite(invite.id, fund.id, T0)

        again = await _create(
            service, "a@x.com", fund.id, TeamRole.INVESTOR, manager.id, T0
        )

        assert again.id != invite.id
        assert again.token != invite.token


class TestVerifyToken:
    """Tests for verify_token."""

    @pytest.mark.asyncio
    async def test_valid_token(self, unit_env):
        """A pending, unexpired invite verifies with display context."""
        service, _, _, invite = await _invite(unit_env)

        result = await service.verify_token(invite.token.root, T0 + days(1))

        assert result.invite.id == invite.id
        assert result.context.fund_name == "Acme Ventures I"
        assert result.context.invited_by_name == "Mia Manager"
        assert result.context.platform_name == "Fund Portal"
        assert result.is_existing_user is False

    @pytest.mark.asyncio
    async def test_existing_user_flag(self, unit_env):
        """is_existing_user reflects an account for the invited email."""
        service, _, _, invite = await _invite(unit_env)
        await make_user(await unit_env.get(UserRepository), "a@x.com")

        result = await service.verify_token(invite.token.root, T0)

        assert result.is_existing_user is True

    @pytest.mark.asyncio
    async def test_unknown_token(self, unit_env):
        """An unknown token is not found."""
        service = await unit_env.get(InviteService)

        with pytest.raises(NotFoundError, match="Invalid invite token"):
            await service.verify_token("f" * 64, T0)

    @pytest.mark.asyncio
    async def test_malformed_token(self, unit_env):
        """A token of the wrong shape is reported as not found."""
        service = await unit_env.get(InviteService)

        with pytest.raises(NotFoundError, match="Invalid invite token"):
            await service.verify_token("not-a-token", T0)

    @pytest.mark.asyncio
    async def test_expired(self, unit_env):
        """A token past its expiry is expired."""
        service, _, _, invite = await _invite(unit_env)

        with pytest.raises(ExpiredError, match="Invite has expired"):
            await service.verify_token(invite.token.root, T0 + days(8))

    @pytest.mark.asyncio
    async def test_valid_at_exact_expiry(self, unit_env):
        """Expiry is strictly after expires_at."""
        service, _, _, invite = await _invite(unit_env)

        result = await service.verify_token(invite.token.root, invite.expires_at)

        assert result.invite.id == invite.id

    @pytest.mark.asyncio
    async def test_cancelled_is_already_used(self, unit_env):
        """A cancelled invite cannot be used."""
        service, fund, _, invite = await _invite(unit_env)
        await service.cancel_invite(invite.id, fund.id, T0)

        with pytest.raises(AlreadyUsedError, match="already been used or cancelled"):
            await service.verify_token(invite.token.root, T0)

    @pytest.mark.asyncio
    async def test_expiry_checked_before_status(self, unit_env):
        """An expired, cancelled invite reports expiry."""
        service, fund, _, invite = await _invite(unit_env)
        await service.cancel_invite(invite.id, fund.id, T0)

        with pytest.raises(ExpiredError):
            await service.verify_token(invite.token.root, T0 + days(30))

    @pytest.mark.asyncio
    async def test_missing_fund_and_inviter_fall_back(self, unit_env):
        """Display context falls back when fund and inviter are gone."""
        service = await unit_env.get(InviteService)
        invite = await _create(
            service, "a@x.com", FundId(uuid4()), TeamRole.INVESTOR, None, T0
        )

        result = await service.verify_token(invite.token.root, T0)

        assert result.context.fund_name == UNKNOWN_FUND_NAME
        assert result.context.invited_by_name == "A team member"


class TestAcceptInviteNewUser:
    """Tests for accept_invite when no account exists."""

    @pytest.mark.asyncio
    async def test_creates_account_and_investor_profile(self, unit_env):
        """A new investor gets an account, a profile and an accepted invite."""
        service, fund, _, invite = await _invite(unit_env)

        result = await service.accept_invite(
            invite.token.root, T0 + days(1), PASSWORD, "Ada", "Lovelace"
        )

        assert result.is_existing_user is False
        assert result.invite_marked_accepted is True
        assert result.user.email == "a@x.com"
        assert result.user.fund_id == fund.id
        assert result.user.role == TeamRole.INVESTOR
        assert result.user.onboarding_completed is True
        assert result.user.password_hash and result.user.password_hash != PASSWORD

        profile = await (await unit_env.get(InvestorRepository)).find_by_user_and_fund(
            result.user.id, fund.id
        )
        assert profile is not None

        stored = await (await unit_env.get(InviteRepository)).find_by_id(invite.id)
        assert stored.status == InviteStatus.ACCEPTED
        assert stored.accepted_at == T0 + days(1)

    @pytest.mark.asyncio
    async def test_non_investor_gets_no_profile(self, unit_env):
        """Only investors get an investor profile."""
        service, fund, _, invite = await _invite(unit_env, role=TeamRole.ACCOUNTANT)

        result = await service.accept_invite(
            invite.token.root, T0, PASSWORD, "Ada", "Lovelace"
        )

        profile = await (await unit_env.get(InvestorRepository)).find_by_user_and_fund(
            result.user.id, fund.id
        )
        assert profile is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "password,first_name,last_name",
        [
            (None, "Ada", "Lovelace"),
            (PASSWORD, None, "Lovelace"),
            (PASSWORD, "Ada", ""),
        ],
    )
    async def test_missing_fields(self, unit_env, password, first_name, last_name):
        """New users must supply password and both names."""
        service, _, _, invite = await _invite(unit_env)

        with pytest.raises(ValidationError, match="are required for new users"):
            await service.accept_invite(
                invite.token.root, T0, password, first_name, last_name
            )

        stored = await (await unit_env.get(InviteRepository)).find_by_id(invite.id)
        assert stored.status == InviteStatus.PENDING

    @pytest.mark.asyncio
    async def test_investor_profile_failure_rolls_back_account(self, unit_env):
        """A failed profile insert deletes the new account."""
        service, _, _, invite = await _invite(unit_env)
        investor_repo = await unit_env.get(InvestorRepository)
        user_repo = await unit_env.get(UserRepository)

        with patch.object(investor_repo, "save", side_effect=RuntimeError("db down")):
            with pytest.raises(DependencyFailureError, match="investor record"):
                await service.accept_invite(
                    invite.token.root, T0, PASSWORD, "Ada", "Lovelace"
                )

        assert await user_repo.find_by_email("a@x.com") is None
        stored = await (await unit_env.get(InviteRepository)).find_by_id(invite.id)
        assert stored.status == InviteStatus.PENDING

    @pytest.mark.asyncio
    async def test_retry_after_partial_failure_is_idempotent(self, unit_env):
        """Retrying after a lost status update succeeds."""
        service, fund, _, invite = await _invite(unit_env)
        invite_repo = await unit_env.get(InviteRepository)

        with patch.object(
            invite_repo, "update_if_pending", side_effect=RuntimeError("db down")
        ):
            first = await service.accept_invite(
                invite.token.root, T0, PASSWORD, "Ada", "Lovelace"
            )
        assert first.invite_marked_accepted is False

        retry = await service.accept_invite(invite.token.root, T0)

        assert retry.is_existing_user is True
        assert retry.invite_marked_accepted is True
        assert retry.user.id == first.user.id
        assert retry.user.fund_id == fund.id
        stored = await invite_repo.find_by_id(invite.id)
        assert stored.status == InviteStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_accept_twice_fails(self, unit_env):
        """An accepted invite cannot be accepted again."""
        service, _, _, invite = await _invite(unit_env)
        await service.accept_invite(invite.token.root, T0, PASSWORD, "Ada", "Lovelace")

        with pytest.raises(AlreadyUsedError):
            await service.accept_invite(invite.token.root, T0)

    @pytest.mark.asyncio
    async def test_accept_expired_fails(self, unit_env):
        """Accepting an expired invite propagates the expiry error."""
        service, _, _, invite = await _invite(unit_env)

        with pytest.raises(ExpiredError, match="Invite has expired"):
            await service.accept_invite(
                invite.token.root, T0 + days(8), PASSWORD, "Ada", "Lovelace"
            )


class TestAcceptInviteExistingUser:
    """Tests for accept_invite when the email already has an account."""

    @pytest.mark.asyncio
    async def test_rebinds_account_from_other_fund(self, unit_env):
        """An account in another fund is moved to the inviting fund and role."""
        service, fund, _, invite = await _invite(unit_env, role=TeamRole.ATTORNEY)
        other = await make_fund(await unit_env.get(FundRepository), "Other")
        existing = await make_user(
            await unit_env.get(UserRepository),
            "a@x.com",
            fund_id=other.id,
            role=TeamRole.ACCOUNTANT,
        )

        result = await service.accept_invite(invite.token.root, T0)

        assert result.is_existing_user is True
        assert result.user.id == existing.id
        assert result.user.fund_id == fund.id
        assert result.user.role == TeamRole.ATTORNEY
        assert result.user.onboarding_completed is True

    @pytest.mark.asyncio
    async def test_ignores_supplied_password(self, unit_env):
        """Existing accounts keep their password."""
        service, _, _, invite = await _invite(unit_env)
        existing = await make_user(await unit_env.get(UserRepository), "a@x.com")

        result = await service.accept_invite(
            invite.token.root, T0, PASSWORD, "Other", "Name"
        )

        assert result.user.password_hash == existing.password_hash
        assert result.user.first_name == existing.first_name

    @pytest.mark.asyncio
    async def test_investor_profile_created_once(self, unit_env):
        """The investor profile is not duplicated for an account that has one."""
        service, fund, _, invite = await _invite(unit_env)
        existing = await make_user(await unit_env.get(UserRepository), "a@x.com")
        membership = service.membership_service
        first = await membership.ensure_investor_profile(existing, fund.id, T0)

        await service.accept_invite(invite.token.root, T0)

        investor_repo = await unit_env.get(InvestorRepository)
        profile = await investor_repo.find_by_user_and_fund(existing.id, fund.id)
        assert profile.id == first.id

    @pytest.mark.asyncio
    async def test_investor_profile_failure_is_not_fatal(self, unit_env):
        """For existing accounts a profile failure is logged, not raised."""
        service, fund, _, invite = await _invite(unit_env)
        await make_user(await unit_env.get(UserRepository), "a@x.com")
        investor_repo = await unit_env.get(InvestorRepository)

        with patch.object(investor_repo, "save", side_effect=RuntimeError("db down")):
            result = await service.accept_invite(invite.token.root, T0)

        assert result.user.fund_id == fund.id
        assert result.invite_marked_accepted is True


class TestCancelInvite:
    """Tests for cancel_invite."""

    @pytest.mark.asyncio
    async def test_cancel(self, unit_env):
        """A pending invite becomes cancelled."""
        service, fund, _, invite = await _invite(unit_env)

        cancelled = await service.cancel_invite(invite.id, fund.id, T0 + days(1))

        assert cancelled.status == InviteStatus.CANCELLED
        assert cancelled.updated_at == T0 + days(1)

    @pytest.mark.asyncio
    async def test_cancel_unknown(self, unit_env):
        """Cancelling an unknown invite is not found."""
        service, fund, _, _ = await _invite(unit_env)

        with pytest.raises(NotFoundError, match="Invite not found"):
            await service.cancel_invite(InviteId(uuid4()), fund.id, T0)

    @pytest.mark.asyncio
    async def test_cancel_other_fund(self, unit_env):
        """Cancelling another fund's invite is forbidden."""
        service, _, _, invite = await _invite(unit_env)
        other = await make_fund(await unit_env.get(FundRepository), "Other")

        with pytest.raises(ForbiddenError, match="does not belong to this fund"):
            await service.cancel_invite(invite.id, other.id, T0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("terminal", ["accept", "cancel"])
    async def test_terminal_states_are_closed(self, unit_env, terminal):
        """Accepted and cancelled invites cannot be cancelled or resent."""
        service, fund, _, invite = await _invite(unit_env)
        if terminal == "accept":
            await service.accept_invite(
                invite.token.root, T0, PASSWORD, "Ada", "Lovelace"
            )
        else:
            await service.cancel_invite(invite.id, fund.id, T0)
        before = await (await unit_env.get(InviteRepository)).find_by_id(invite.id)

        with pytest.raises(InvalidStateError, match="can be cancelled"):
            await service.cancel_invite(invite.id, fund.id, T0)
        with pytest.raises(InvalidStateError, match="can be resent"):
            await service.resend_invite(invite.id, fund.id, T0)

        after = await (await unit_env.get(InviteRepository)).find_by_id(invite.id)
        assert after == before


class TestResendInvite:
    """Tests for resend_invite."""

    @pytest.mark.asyncio
    async def test_resend_extends_expiry_keeps_token(self, unit_env):
        """Resending resets expiry to now + 7 days with the same token."""
        service, fund, _, invite = await _invite(unit_env)

        resent = await service.resend_invite(invite.id, fund.id, T0 + days(2))

        assert resent.invite.expires_at == T0 + days(9)
        assert resent.token == invite.token
        assert resent.email == "a@x.com"
        assert resent.fund_name == "Acme Ventures I"

    @pytest.mark.asyncio
    async def test_expiry_is_monotonic(self, unit_env):
        """Successive resends never move expiry backwards."""
        service, fund, _, invite = await _invite(unit_env)

        first = await service.resend_invite(invite.id, fund.id, T0 + days(1))
        second = await service.resend_invite(invite.id, fund.id, T0 + days(3))

        assert invite.expires_at < first.invite.expires_at < second.invite.expires_at

    @pytest.mark.asyncio
    async def test_earlier_clock_does_not_shorten_expiry(self, unit_env):
        """A resend stamped before creation keeps the later expiry."""
        service, fund, _, invite = await _invite(unit_env)

        resent = await service.resend_invite(invite.id, fund.id, T0 - days(1))

        assert resent.invite.expires_at == invite.expires_at == T0 + days(7)

    @pytest.mark.asyncio
    async def test_resend_revives_expired_invite(self, unit_env):
        """A pending invite past its expiry can be resent and used again."""
        service, fund, _, invite = await _invite(unit_env)

        await service.resend_invite(invite.id, fund.id, T0 + days(10))
        result = await service.verify_token(invite.token.root, T0 + days(11))

        assert result.invite.id == invite.id

    @pytest.mark.asyncio
    async def test_resend_other_fund(self, unit_env):
        """Resending another fund's invite is forbidden."""
        service, _, _, invite = await _invite(unit_env)
        other = await make_fund(await unit_env.get(FundRepository), "Other")

        with pytest.raises(ForbiddenError):
            await service.resend_invite(invite.id, other.id, T0)


class TestListPendingInvites:
    """Tests for list_pending_invites."""

    @pytest.mark.asyncio
    async def test_lists_pending_newest_first(self, unit_env):
        """Only pending invites are listed, newest first."""
        service, fund, manager, first = await _invite(unit_env, email="one@x.com")
        second = await _create(
            service, "two@x.com", fund.id, TeamRole.ATTORNEY, manager.id, T0 + days(1)
        )
        third = await _create(
            service, "three@x.com", fund.id, TeamRole.ATTORNEY, manager.id, T0 + days(2)
        )
        await service.cancel_invite(third.id, fund.id, T0 + days(2))

        invites = await service.list_pending_invites(fund.id)

        assert [i.id for i in invites] == [second.id, first.id]


def _yield_after_read(invite_repo):
    """Make find_by_id hand control back to the loop after reading."""
    read = invite_repo.find_by_id

    async def find_then_yield(invite_id):
        invite = await read(invite_id)
        await asyncio.sleep(0)
        return invite

    return patch.object(invite_repo, "find_by_id", side_effect=find_then_yield)


class TestConcurrentTransitions:
    """Transitions on one invite racing each other."""

    @pytest.mark.asyncio
    async def test_resend_does_not_revive_concurrent_cancel(self, unit_env):
        """A resend that read the invite before a cancel landed fails."""
        service, fund, _, invite = await _invite(unit_env)
        invite_repo = await unit_env.get(InviteRepository)

        with _yield_after_read(invite_repo):
            cancelled, resent = await asyncio.gather(
                service.cancel_invite(invite.id, fund.id, T0 + days(1)),
                service.resend_invite(invite.id, fund.id, T0 + days(1)),
                return_exceptions=True,
            )

        assert cancelled.status == InviteStatus.CANCELLED
        assert isinstance(resent, InvalidStateError)
        stored = await invite_repo.find_by_id(invite.id)
        assert stored.status == InviteStatus.CANCELLED
        assert stored.expires_at == invite.expires_at

    @pytest.mark.asyncio
    async def test_second_cancel_loses(self, unit_env):
        """Of two concurrent cancels exactly one succeeds."""
        service, fund, _, invite = await _invite(unit_env)
        invite_repo = await unit_env.get(InviteRepository)

        with _yield_after_read(invite_repo):
            first, second = await asyncio.gather(
                service.cancel_invite(invite.id, fund.id, T0 + days(1)),
                service.cancel_invite(invite.id, fund.id, T0 + days(2)),
                return_exceptions=True,
            )

        assert first.status == InviteStatus.CANCELLED
        assert isinstance(second, InvalidStateError)
        stored = await invite_repo.find_by_id(invite.id)
        assert stored.updated_at == T0 + days(1)

    @pytest.mark.asyncio
    async def test_late_accept_does_not_overwrite_cancel(self, unit_env):
        """An accept verified against a stale pending read leaves the cancel."""
        service, fund, _, invite = await _invite(unit_env)
        invite_repo = await unit_env.get(InviteRepository)
        await service.cancel_invite(invite.id, fund.id, T0)

        with patch.object(invite_repo, "find_by_token", return_value=invite):
            result = await service.accept_invite(
                invite.token.root, T0, PASSWORD, "Ada", "Lovelace"
            )

        assert result.invite_marked_accepted is False
        stored = await invite_repo.find_by_id(invite.id)
        assert stored.status == InviteStatus.CANCELLED
        assert stored.accepted_at is None
