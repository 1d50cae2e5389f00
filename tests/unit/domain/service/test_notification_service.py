"""Unit tests for NotificationService and invite email templates."""

import pytest

from fundteam.adapter.email import MockEmailClient
from fundteam.adapter.error import EmailDeliveryError
from fundteam.domain.repository import FundRepository, UserRepository
from fundteam.domain.service import InviteService, NotificationService
from fundteam.domain.service.email_templates import (
    render_team_invite,
    role_description,
)
from fundteam.domain.service.notification_service import days_until
from fundteam.domain.value import TeamRole
from fundteam.util.token import generate_invite_token
from tests.conftest import T0, days, make_fund, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _pending_invite(
    unit_env, platform_name=None, inviter_names=("Mia", "Lee")
):
    fund = await make_fund(
        await unit_env.get(FundRepository), "Oak & Pine Fund", platform_name
    )
    manager = await make_user(
        await unit_env.get(UserRepository),
        "mia@oak.com",
        fund_id=fund.id,
        role=TeamRole.MANAGER,
        first_name=inviter_names[0],
        last_name=inviter_names[1],
    )
    invite_service = await unit_env.get(InviteService)
    invite = await invite_service.create_invite(
        "new@x.com",
        fund.id,
        TeamRole.ACCOUNTANT,
        manager.id,
        T0,
        generate_invite_token,
    )
    return invite, await invite_service.describe_invite(invite)


class TestDaysUntil:
    """Tests for days_until."""

    def test_rounds_up(self):
        assert days_until(T0 + days(4.2), T0) == 5

    def test_exact_days(self):
        assert days_until(T0 + days(2), T0) == 2

    def test_never_negative(self):
        assert days_until(T0, T0 + days(1)) == 0


class TestTemplates:
    """Tests for rendered email content."""

    def test_role_descriptions(self):
        assert role_description(TeamRole.ACCOUNTANT) == (
            "access to K-1 management and investor tax data"
        )
        assert role_description(TeamRole.MANAGER).startswith("full access")

    def test_invite_html_is_escaped(self):
        """User-controlled names cannot inject markup."""
        rendered = render_team_invite(
            fund_name="<b>Evil</b>",
            platform_name="Fund Portal",
            role=TeamRole.INVESTOR,
            inviter_name="<script>x</script>",
            inviter_email=None,
            accept_url="https://app.example.com/invite/accept?token=abc&x=1",
            expires_in_days=7,
        )

        assert "<script>" not in rendered.html
        assert "&lt;b&gt;Evil&lt;/b&gt;" in rendered.html
        assert "token=abc&amp;x=1" in rendered.html
        assert rendered.subject == (
            "You've been invited to join <b>Evil</b> as a investor"
        )


class TestSendTeamInvite:
    """Tests for send_team_invite."""

    @pytest.mark.asyncio
    async def test_sends_invitation(self, unit_env):
        """The invitation names fund, inviter and role and links to acceptance."""
        invite, context = await _pending_invite(unit_env)
        service = await unit_env.get(NotificationService)
        client = await unit_env.get(MockEmailClient)

        await service.send_team_invite(invite, context)

        [message] = client.sent
        assert message.to == "new@x.com"
        assert message.subject == (
            "You've been invited to join Oak & Pine Fund as a accountant"
        )
        assert "Mia Lee" in message.text
        assert "K-1 management" in message.text
        assert "mia@oak.com" in message.text
        assert f"/invite/accept?token={invite.token.root}" in message.text
        assert "expire in 7 days" in message.text
        assert "Oak &amp; Pine Fund" in message.html

    @pytest.mark.asyncio
    async def test_fund_platform_name_overrides_default(self, unit_env):
        invite, context = await _pending_invite(unit_env, platform_name="OakHub")
        service = await unit_env.get(NotificationService)
        client = await unit_env.get(MockEmailClient)

        await service.send_team_invite(invite, context)

        assert "on OakHub as a accountant" in client.sent[0].text

    @pytest.mark.asyncio
    async def test_delivery_failure_propagates(self, unit_env):
        invite, context = await _pending_invite(unit_env)
        service = await unit_env.get(NotificationService)
        client = await unit_env.get(MockEmailClient)
        client.fail_with = EmailDeliveryError("Email API returned 500")

        with pytest.raises(EmailDeliveryError):
            await service.send_team_invite(invite, context)


class TestSendReminder:
    """Tests for send_team_invite_reminder."""

    @pytest.mark.asyncio
    async def test_reminder_counts_days_remaining(self, unit_env):
        invite, context = await _pending_invite(unit_env)
        service = await unit_env.get(NotificationService)
        client = await unit_env.get(MockEmailClient)

        await service.send_team_invite_reminder(invite, context, T0 + days(3))

        [message] = client.sent
        assert message.subject == (
            "Reminder: You've been invited to join Oak & Pine Fund"
        )
        assert "expire in 4 days" in message.text
        assert "Mia Lee has invited you" in message.text

    @pytest.mark.asyncio
    async def test_reminder_without_inviter_name(self, unit_env):
        """An inviter without names is shown as "A team member"."""
        invite, context = await _pending_invite(unit_env, inviter_names=(None, None))
        service = await unit_env.get(NotificationService)
        client = await unit_env.get(MockEmailClient)

        await service.send_team_invite_reminder(invite, context, T0)

        assert client.sent[0].text.startswith(
            "This is a reminder that A team member has invited you"
        )
