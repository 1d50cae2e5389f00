"""Domain layer DI providers."""

from dishka import Scope, provide

from fundteam.config import AuthSettings, InvitationSettings, Settings
from fundteam.domain.repository import (
    FundRepository,
    InvestorRepository,
    InviteRepository,
    UserRepository,
)
from fundteam.domain.service import (
    EmailClient,
    InviteService,
    JWTService,
    MembershipService,
    NotificationService,
    ReminderQueue,
    ReminderScheduler,
)
from fundteam.util.di.base import ProviderBase
from fundteam.util.token import TokenGenerator, generate_invite_token


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_token_generator(self) -> TokenGenerator:
        """Provide the invite token source."""
        return generate_invite_token

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_membership_service(
        self,
        user_repository: UserRepository,
        investor_repository: InvestorRepository,
    ) -> MembershipService:
        """Provide membership domain service."""
        return MembershipService(
            user_repository=user_repository,
            investor_repository=investor_repository,
        )

    @provide
    def get_invite_service(
        self,
        invite_repository: InviteRepository,
        fund_repository: FundRepository,
        membership_service: MembershipService,
        invitation_settings: InvitationSettings,
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(
            invite_repository=invite_repository,
            fund_repository=fund_repository,
            membership_service=membership_service,
            invitation_settings=invitation_settings,
        )

    @provide
    def get_reminder_scheduler(
        self, queue: ReminderQueue, invitation_settings: InvitationSettings
    ) -> ReminderScheduler:
        """Provide reminder scheduler."""
        return ReminderScheduler(queue=queue, invitation_settings=invitation_settings)

    @provide
    def get_notification_service(
        self, email_client: EmailClient, settings: Settings
    ) -> NotificationService:
        """Provide email notification service."""
        return NotificationService(email_client=email_client, settings=settings)
