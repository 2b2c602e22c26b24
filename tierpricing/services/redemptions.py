from dataclasses import dataclass
from datetime import datetime, date, timezone
from math import inf
from typing import Iterable, Optional, Union
from tierpricing.services.entitlements import max_monthly_redemptions

Allowance = Union[int, float]

@dataclass(frozen=True)
class RedemptionAllowance:
    used: int
    total: Allowance
    remaining: Allowance

    def as_dict(self) -> dict:
        # JSON has no infinity; unlimited is rendered as null.
        return {
            "used": self.used,
            "total": None if self.total == inf else self.total,
            "remaining": None if self.remaining == inf else self.remaining,
        }

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

def _as_datetime(value) -> datetime:
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    return value

def count_redemptions_in_month(redeemed_at: Iterable, now: datetime) -> int:
    used = 0
    for value in redeemed_at:
        when = _as_datetime(value)
        if when.tzinfo is not None and now.tzinfo is not None:
            when = when.astimezone(now.tzinfo)
        if when.year == now.year and when.month == now.month:
            used += 1
    return used

def calculate_remaining_redemptions(
    tier,
    redeemed_at: Iterable = (),
    extra_redemptions: int = 0,
    now: Optional[datetime] = None,
) -> RedemptionAllowance:
    """Work out this calendar month's redemption allowance for a tier.

    ``redeemed_at`` holds the timestamps (datetimes or ISO strings) of the
    user's past redemptions; only those in the same month as ``now`` count.
    ``extra_redemptions`` are bonus redemptions on top of a finite allowance.
    """
    now = now or _utcnow()
    used = count_redemptions_in_month(redeemed_at, now)
    base = max_monthly_redemptions(tier)
    if base == inf:
        return RedemptionAllowance(used=used, total=inf, remaining=inf)
    total = base + (extra_redemptions or 0)
    return RedemptionAllowance(used=used, total=total, remaining=max(0, total - used))

def next_renewal_date(now: Optional[datetime] = None) -> date:
    """Renewal is always on the 1st of the next month."""
    now = now or _utcnow()
    if now.month == 12:
        return date(now.year + 1, 1, 1)
    return date(now.year, now.month + 1, 1)
