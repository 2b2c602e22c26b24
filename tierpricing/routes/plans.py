from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from tierpricing.db import get_db
from tierpricing.dependencies import require_admin
from tierpricing.logging_config import get_logger
from tierpricing.metrics import increment_plan_change
from tierpricing.repository import create_plan, deactivate_plan, get_active_plans, get_all_plans, update_plan
from tierpricing.schemas import PlanCreate, PlanUpdate
from tierpricing.services.plans import get_or_error, serialize_plan

router = APIRouter(prefix="/api/plans", tags=["plans"])
logger = get_logger("tierpricing.plans")

@router.get("")
def list_active_plans(db: Session = Depends(get_db)):
    return [serialize_plan(plan) for plan in get_active_plans(db)]

@router.get("/all")
def list_all_plans(db: Session = Depends(get_db), admin=Depends(require_admin)):
    return [serialize_plan(plan) for plan in get_all_plans(db)]

@router.post("", status_code=201)
def create_subscription_plan(data: PlanCreate, db: Session = Depends(get_db), admin=Depends(require_admin)):
    plan = create_plan(db, **data.model_dump())
    increment_plan_change("create")
    logger.info(f"Created plan {plan.name}", extra={"plan_id": plan.id, "tier": plan.tier.value})
    return serialize_plan(plan)

@router.patch("/{plan_id}")
def update_subscription_plan(plan_id: int, data: PlanUpdate, db: Session = Depends(get_db), admin=Depends(require_admin)):
    plan = get_or_error(db, plan_id)
    plan = update_plan(db, plan, **data.model_dump(exclude_unset=True))
    increment_plan_change("update")
    logger.info(f"Updated plan {plan.name}", extra={"plan_id": plan.id, "tier": plan.tier.value})
    return serialize_plan(plan)

@router.delete("/{plan_id}")
def delete_subscription_plan(plan_id: int, db: Session = Depends(get_db), admin=Depends(require_admin)):
    plan = deactivate_plan(db, get_or_error(db, plan_id))
    increment_plan_change("deactivate")
    logger.info(f"Deactivated plan {plan.name}", extra={"plan_id": plan.id, "tier": plan.tier.value})
    return serialize_plan(plan)
