"""Strongly typed identifiers for fund team entities.

NewType keeps invite, user, fund and investor IDs from being mixed up.
"""

from typing import NewType
from uuid import UUID

InviteId = NewType("InviteId", UUID)
UserId = NewType("UserId", UUID)
FundId = NewType("FundId", UUID)
InvestorId = NewType("InvestorId", UUID)
