from math import floor, inf
from fastapi import HTTPException
from sqlalchemy.orm import Session
from tierpricing.models import BillingPeriod, SubscriptionPlan
from tierpricing.repository import get_plan

UNLIMITED_THRESHOLD = 999999

def redemptions_per_month(redemptions_per_period: int, billing_period) -> float:
    if redemptions_per_period >= UNLIMITED_THRESHOLD:
        return inf
    if BillingPeriod(billing_period) == BillingPeriod.yearly:
        return floor(redemptions_per_period / 12)
    return redemptions_per_period

def _amount(value):
    if value is None:
        return None
    return int(value) if value == int(value) else float(value)

def serialize_plan(plan: SubscriptionPlan) -> dict:
    per_month = redemptions_per_month(plan.redemptions_per_period, plan.billing_period)
    return {
        "id": plan.id,
        "tier": plan.tier.value,
        "name": plan.name,
        "name_tr": plan.name_tr,
        "price": _amount(plan.price),
        "price_tr": _amount(plan.price_tr),
        "billing_period": plan.billing_period.value,
        "redemptions_per_period": plan.redemptions_per_period,
        "redemptions_per_month": None if per_month == inf else per_month,
        "features": list(plan.features or []),
        "features_tr": list(plan.features_tr or []),
        "is_active": plan.is_active,
        "created_at": plan.created_at.isoformat() if plan.created_at else None,
        "updated_at": plan.updated_at.isoformat() if plan.updated_at else None,
    }

def get_or_error(db: Session, plan_id: int) -> SubscriptionPlan:
    plan = get_plan(db, plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Plan not found")
    return plan
