"""Application layer DI providers."""

from dishka import Scope, provide

from fundteam.application.usecase.invite import (
    AcceptTeamInviteUseCase,
    CancelTeamInviteUseCase,
    CreateTeamInviteUseCase,
    ResendTeamInviteUseCase,
    VerifyInviteUseCase,
)
from fundteam.application.usecase.member import (
    ListTeamUseCase,
    RemoveMemberUseCase,
    UpdateMemberRoleUseCase,
)
from fundteam.application.usecase.reminder import (
    DispatchDueRemindersUseCase,
    SendInviteReminderUseCase,
)
from fundteam.domain.repository import UnitOfWork
from fundteam.domain.service import (
    InviteService,
    JWTService,
    MembershipService,
    NotificationService,
    ReminderScheduler,
)
from fundteam.util.di.base import ProviderBase
from fundteam.util.token import TokenGenerator


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Invite use cases
    @provide
    def get_create_team_invite_use_case(
        self,
        membership_service: MembershipService,
        invite_service: InviteService,
        reminder_scheduler: ReminderScheduler,
        notification_service: NotificationService,
        token_generator: TokenGenerator,
        unit_of_work: UnitOfWork,
    ) -> CreateTeamInviteUseCase:
        """Provide create team invite use case."""
        return CreateTeamInviteUseCase(
            membership_service=membership_service,
            invite_service=invite_service,
            reminder_scheduler=reminder_scheduler,
            notification_service=notification_service,
            token_generator=token_generator,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_verify_invite_use_case(
        self, invite_service: InviteService
    ) -> VerifyInviteUseCase:
        """Provide verify invite use case."""
        return VerifyInviteUseCase(invite_service=invite_service)

    @provide
    def get_accept_team_invite_use_case(
        self,
        invite_service: InviteService,
        reminder_scheduler: ReminderScheduler,
        jwt_service: JWTService,
        unit_of_work: UnitOfWork,
    ) -> AcceptTeamInviteUseCase:
        """Provide accept team invite use case."""
        return AcceptTeamInviteUseCase(
            invite_service=invite_service,
            reminder_scheduler=reminder_scheduler,
            jwt_service=jwt_service,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_cancel_team_invite_use_case(
        self,
        membership_service: MembershipService,
        invite_service: InviteService,
        reminder_scheduler: ReminderScheduler,
        unit_of_work: UnitOfWork,
    ) -> CancelTeamInviteUseCase:
        """Provide cancel team invite use case."""
        return CancelTeamInviteUseCase(
            membership_service=membership_service,
            invite_service=invite_service,
            reminder_scheduler=reminder_scheduler,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_resend_team_invite_use_case(
        self,
        membership_service: MembershipService,
        invite_service: InviteService,
        reminder_scheduler: ReminderScheduler,
        notification_service: NotificationService,
        unit_of_work: UnitOfWork,
    ) -> ResendTeamInviteUseCase:
        """Provide resend team invite use case."""
        return ResendTeamInviteUseCase(
            membership_service=membership_service,
            invite_service=invite_service,
            reminder_scheduler=reminder_scheduler,
            notification_service=notification_service,
            unit_of_work=unit_of_work,
        )

    # Member use cases
    @provide
    def get_list_team_use_case(
        self, membership_service: MembershipService, invite_service: InviteService
    ) -> ListTeamUseCase:
        """Provide list team use case."""
        return ListTeamUseCase(
            membership_service=membership_service, invite_service=invite_service
        )

    @provide
    def get_update_member_role_use_case(
        self, membership_service: MembershipService
    ) -> UpdateMemberRoleUseCase:
        """Provide update member role use case."""
        return UpdateMemberRoleUseCase(membership_service=membership_service)

    @provide
    def get_remove_member_use_case(
        self, membership_service: MembershipService
    ) -> RemoveMemberUseCase:
        """Provide remove member use case."""
        return RemoveMemberUseCase(membership_service=membership_service)

    # Reminder use cases
    @provide
    def get_send_invite_reminder_use_case(
        self,
        invite_service: InviteService,
        notification_service: NotificationService,
    ) -> SendInviteReminderUseCase:
        """Provide send invite reminder use case."""
        return SendInviteReminderUseCase(
            invite_service=invite_service,
            notification_service=notification_service,
        )

    @provide
    def get_dispatch_due_reminders_use_case(
        self,
        reminder_scheduler: ReminderScheduler,
        send_invite_reminder: SendInviteReminderUseCase,
    ) -> DispatchDueRemindersUseCase:
        """Provide dispatch due reminders use case."""
        return DispatchDueRemindersUseCase(
            reminder_scheduler=reminder_scheduler,
            send_invite_reminder=send_invite_reminder,
        )
