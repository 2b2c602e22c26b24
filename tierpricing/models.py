from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum as SqlEnum, Numeric, JSON, func
from sqlalchemy.orm import declarative_base
from enum import Enum as PyEnum

Base = declarative_base()

class SubscriptionTier(PyEnum):
    NONE = "NONE"
    FREE = "FREE"
    BASIC = "BASIC"
    PREMIUM = "PREMIUM"
    VIP = "VIP"

class Locale(PyEnum):
    en = "en"
    tr = "tr"

class BillingPeriod(PyEnum):
    monthly = "monthly"
    yearly = "yearly"

class SubscriptionPlan(Base):
    __tablename__ = "subscription_plans"
    id = Column(Integer, primary_key=True)
    tier = Column(SqlEnum(SubscriptionTier), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    name_tr = Column(String(100), nullable=True)
    price = Column(Numeric(10, 2), default=0, nullable=False)
    price_tr = Column(Numeric(10, 2), default=0, nullable=False)
    billing_period = Column(SqlEnum(BillingPeriod), default=BillingPeriod.monthly, nullable=False)
    redemptions_per_period = Column(Integer, default=0, nullable=False)
    features = Column(JSON, default=list, nullable=False)
    features_tr = Column(JSON, default=list, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
