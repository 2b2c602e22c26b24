import math
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from tierpricing.models import Base, SubscriptionTier, BillingPeriod
from tierpricing.repository import create_plan, deactivate_plan, get_active_plans, get_all_plans, get_plan, update_plan
from tierpricing.services.plans import redemptions_per_month, serialize_plan

def setup_db():
    engine = create_engine("sqlite:///:memory:", connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    return engine, TestingSessionLocal

@pytest.fixture
def db():
    engine, TestingSessionLocal = setup_db()
    db = TestingSessionLocal()
    yield db
    db.close()
    engine.dispose()

def make_plan(db, tier, price, **kwargs):
    fields = dict(
        tier=tier, name=tier.value.title(), price=price, price_tr=price * 10,
        redemptions_per_period=5,
    )
    fields.update(kwargs)
    return create_plan(db, **fields)

def test_redemptions_per_month():
    assert redemptions_per_month(10, "monthly") == 10
    assert redemptions_per_month(60, BillingPeriod.yearly) == 5
    assert redemptions_per_month(65, "yearly") == 5
    assert redemptions_per_month(999999, "monthly") == math.inf
    assert redemptions_per_month(1500000, "yearly") == math.inf

def test_active_plans_are_ordered_by_price(db):
    make_plan(db, SubscriptionTier.VIP, 199)
    make_plan(db, SubscriptionTier.BASIC, 29)
    make_plan(db, SubscriptionTier.PREMIUM, 99)
    plans = get_active_plans(db)
    assert [p.tier for p in plans] == [SubscriptionTier.BASIC, SubscriptionTier.PREMIUM, SubscriptionTier.VIP]

def test_soft_delete_keeps_row(db):
    basic = make_plan(db, SubscriptionTier.BASIC, 29)
    make_plan(db, SubscriptionTier.PREMIUM, 99)
    deactivate_plan(db, basic)
    assert [p.tier for p in get_active_plans(db)] == [SubscriptionTier.PREMIUM]
    assert len(get_all_plans(db)) == 2
    assert get_plan(db, basic.id).is_active is False

def test_update_plan(db):
    plan = make_plan(db, SubscriptionTier.PREMIUM, 99, features=["20 deals"])
    update_plan(db, plan, name="Premium Plus", billing_period=BillingPeriod.yearly, redemptions_per_period=240)
    data = serialize_plan(get_plan(db, plan.id))
    assert data["name"] == "Premium Plus"
    assert data["billing_period"] == "yearly"
    assert data["redemptions_per_month"] == 20
    assert data["features"] == ["20 deals"]
    with pytest.raises(ValueError):
        update_plan(db, plan, colour="red")

def test_serialize_unlimited_plan(db):
    plan = make_plan(db, SubscriptionTier.VIP, 199, redemptions_per_period=999999)
    data = serialize_plan(plan)
    assert data["tier"] == "VIP"
    assert data["price"] == 199
    assert data["price_tr"] == 1990
    assert data["redemptions_per_month"] is None
    assert data["is_active"] is True
