from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import func
from tierpricing.models import SubscriptionPlan

PLAN_FIELDS = {
    "tier", "name", "name_tr", "price", "price_tr", "billing_period",
    "redemptions_per_period", "features", "features_tr", "is_active",
}

def get_active_plans(db: Session):
    return (
        db.query(SubscriptionPlan)
        .filter(SubscriptionPlan.is_active.is_(True))
        .order_by(SubscriptionPlan.price.asc(), SubscriptionPlan.id.asc())
        .all()
    )

def get_all_plans(db: Session):
    return db.query(SubscriptionPlan).order_by(SubscriptionPlan.price.asc(), SubscriptionPlan.id.asc()).all()

def get_plan(db: Session, plan_id: int):
    return db.get(SubscriptionPlan, plan_id)

def create_plan(db: Session, **fields):
    unknown = set(fields) - PLAN_FIELDS
    if unknown:
        raise ValueError(f"Unknown plan fields: {', '.join(sorted(unknown))}")
    plan = SubscriptionPlan(**fields)
    db.add(plan)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    db.refresh(plan)
    return plan

def update_plan(db: Session, plan: SubscriptionPlan, **updates):
    unknown = set(updates) - PLAN_FIELDS
    if unknown:
        raise ValueError(f"Unknown plan fields: {', '.join(sorted(unknown))}")
    for key, value in updates.items():
        setattr(plan, key, value)
    plan.updated_at = func.now()
    db.commit()
    db.refresh(plan)
    return plan

def deactivate_plan(db: Session, plan: SubscriptionPlan):
    """Soft delete: the row stays, it just drops out of the active catalog."""
    return update_plan(db, plan, is_active=False)
