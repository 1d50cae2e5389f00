"""Unit tests for InMemoryInviteRepository."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from fundteam.domain.model import Invite
from fundteam.domain.value import FundId, InviteId, InviteStatus, TeamRole
from fundteam.persistence.repository.inmemory import InMemoryInviteRepository
from fundteam.util.token import compute_expiry, generate_invite_token
from tests.conftest import T0, days


def _invite(fund_id: FundId, email: str = "a@x.com", **changes) -> Invite:
    invite = Invite(
        id=InviteId(uuid4()),
        email=email,
        fund_id=fund_id,
        role=TeamRole.ATTORNEY,
        token=generate_invite_token(),
        expires_at=compute_expiry(T0),
        created_at=T0,
        updated_at=T0,
    )
    return invite.model_copy(update=changes)


class TestFindPendingByEmailAndFund:
    """Tests for find_pending_by_email_and_fund."""

    @pytest.mark.asyncio
    async def test_returns_pending_invite_in_fund(self):
        repo = InMemoryInviteRepository()
        fund_id, other_fund_id = FundId(uuid4()), FundId(uuid4())
        await repo.save(_invite(fund_id, status=InviteStatus.CANCELLED))
        await repo.save(_invite(fund_id, status=InviteStatus.ACCEPTED))
        pending = await repo.save(_invite(fund_id))
        await repo.save(_invite(other_fund_id))

        found = await repo.find_pending_by_email_and_fund("a@x.com", fund_id)

        assert found.id == pending.id

    @pytest.mark.asyncio
    async def test_none_without_pending_invite(self):
        repo = InMemoryInviteRepository()
        fund_id = FundId(uuid4())
        await repo.save(_invite(fund_id, status=InviteStatus.CANCELLED))

        assert await repo.find_pending_by_email_and_fund("a@x.com", fund_id) is None
        assert await repo.find_pending_by_email_and_fund("b@x.com", fund_id) is None
        assert not await repo.exists_pending_for_email_and_fund("a@x.com", fund_id)

    @pytest.mark.asyncio
    async def test_second_pending_invite_rejected(self):
        repo = InMemoryInviteRepository()
        fund_id = FundId(uuid4())
        await repo.save(_invite(fund_id))

        with pytest.raises(IntegrityError):
            await repo.save(_invite(fund_id))


class TestUpdateIfPending:
    """Tests for update_if_pending."""

    @pytest.mark.asyncio
    async def test_updates_pending_invite(self):
        repo = InMemoryInviteRepository()
        invite = await repo.save(_invite(FundId(uuid4())))

        updated = await repo.update_if_pending(
            invite.changed(T0 + days(1), expires_at=T0 + days(8))
        )

        assert updated is True
        assert (await repo.find_by_id(invite.id)).expires_at == T0 + days(8)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status", [InviteStatus.ACCEPTED, InviteStatus.CANCELLED]
    )
    async def test_settled_invite_is_left_alone(self, status):
        repo = InMemoryInviteRepository()
        invite = _invite(FundId(uuid4()))
        await repo.save(invite.model_copy(update={"status": status}))

        updated = await repo.update_if_pending(
            invite.changed(T0 + days(1), expires_at=T0 + days(8))
        )

        assert updated is False
        stored = await repo.find_by_id(invite.id)
        assert stored.status == status
        assert stored.expires_at == T0 + days(7)

    @pytest.mark.asyncio
    async def test_unknown_invite(self):
        repo = InMemoryInviteRepository()

        assert await repo.update_if_pending(_invite(FundId(uuid4()))) is False
        assert await repo.find_by_id(InviteId(uuid4())) is None
