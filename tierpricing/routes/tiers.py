from math import inf
from fastapi import APIRouter
from tierpricing.billing import TIER_ORDER, coerce_tier, name_of, price_of, tier_rank
from tierpricing.metrics import increment_tier_lookup
from tierpricing.services.entitlements import max_monthly_redemptions
from tierpricing.services.redemptions import next_renewal_date

router = APIRouter(prefix="/api/tiers", tags=["tiers"])

def describe_tier(tier) -> dict:
    monthly = max_monthly_redemptions(tier)
    return {
        "tier": tier.value,
        "name": name_of(tier),
        "rank": tier_rank(tier),
        "prices": price_of(tier).as_dict(),
        "monthly_redemptions": None if monthly == inf else monthly,
    }

@router.get("")
def list_tiers():
    increment_tier_lookup("list", "ok")
    return [describe_tier(tier) for tier in TIER_ORDER]

@router.get("/{tier}")
def get_tier(tier: str):
    info = describe_tier(coerce_tier(tier))
    increment_tier_lookup("detail", "ok")
    return info

@router.get("/{tier}/renewal")
def get_tier_renewal(tier: str):
    tier = coerce_tier(tier)
    increment_tier_lookup("renewal", "ok")
    return {"tier": tier.value, "next_renewal_date": next_renewal_date().isoformat()}
