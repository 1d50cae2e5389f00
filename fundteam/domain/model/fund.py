"""Fund entity. Funds are the tenant boundary for teams."""

from datetime import datetime
from typing import Optional

from fundteam.domain.model.common import DomainModel
from fundteam.domain.value import FundId


class Fund(DomainModel):
    """Fund (tenant)."""

    id: FundId
    name: str
    platform_name: Optional[str] = None  # Branding override for emails
    created_at: datetime
