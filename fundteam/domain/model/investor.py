"""Investor profile entity.

Every account holding the investor role in a fund has exactly one
profile for that fund.
"""

from datetime import datetime
from typing import Optional

from fundteam.domain.model.common import DomainModel
from fundteam.domain.value import FundId, InvestorId, UserId


class InvestorProfile(DomainModel):
    """Investor record linking an account to a fund."""

    id: InvestorId
    user_id: UserId
    fund_id: FundId
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    status: str = "active"
    created_at: datetime
