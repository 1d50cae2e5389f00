"""Domain model entities for fund team management."""

from fundteam.domain.model.fund import Fund
from fundteam.domain.model.investor import InvestorProfile
from fundteam.domain.model.invite import Invite
from fundteam.domain.model.user import User

__all__ = [
    "Fund",
    "Invite",
    "InvestorProfile",
    "User",
]
