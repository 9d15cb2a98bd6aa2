from __future__ import annotations

from typing import Dict, Optional

from .models import MembershipType


class Membership:
    """
    Borrowing policy by membership tier.

    Rules:
        (1) Basic members may hold at most 2 books
        (2) Premium members may hold at most 5 books
        (3) Platinum members have no cap
        (4) Anything else may not borrow
    """

    LIMITS: Dict[MembershipType, Optional[int]] = {
        MembershipType.BASIC: 2,
        MembershipType.PREMIUM: 5,
        MembershipType.PLATINUM: None,
    }

    def limitFor(self, tier: Optional[MembershipType]) -> Optional[int]:
        """
        Returns the cap for a tier. None means uncapped, or an unknown tier.
        """
        return self.LIMITS.get(tier)

    def canBorrow(self, tier: Optional[MembershipType], bookCount: int) -> bool:
        if tier not in self.LIMITS:
            return False
        limit = self.LIMITS[tier]
        if limit is None:
            return True
        return bookCount <= limit
