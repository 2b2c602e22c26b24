from pydantic import BaseModel, Field, model_validator
from decimal import Decimal
from typing import Annotated, List, Optional
from tierpricing.models import BillingPeriod, SubscriptionTier

# Matches the Numeric(10, 2) price columns; NaN and infinity are rejected.
Amount = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2, allow_inf_nan=False)]
Redemptions = Annotated[int, Field(ge=0, strict=True)]
PlanName = Annotated[str, Field(min_length=1)]


# ----------------------------
# Used by admin plan creation
# ----------------------------
class PlanCreate(BaseModel):
    tier: SubscriptionTier
    name: PlanName
    name_tr: Optional[str] = None
    price: Amount
    price_tr: Amount
    billing_period: BillingPeriod = BillingPeriod.monthly
    redemptions_per_period: Redemptions
    features: List[str] = []
    features_tr: List[str] = []
    is_active: bool = True

    model_config = {
        "extra": "forbid",
        "str_strip_whitespace": True,
    }


# ----------------------------
# Used by admin plan updates (PATCH)
# ----------------------------
class PlanUpdate(BaseModel):
    tier: Optional[SubscriptionTier] = None
    name: Optional[PlanName] = None
    name_tr: Optional[str] = None
    price: Optional[Amount] = None
    price_tr: Optional[Amount] = None
    billing_period: Optional[BillingPeriod] = None
    redemptions_per_period: Optional[Redemptions] = None
    features: Optional[List[str]] = None
    features_tr: Optional[List[str]] = None
    is_active: Optional[bool] = None

    model_config = {
        "extra": "forbid",
        "str_strip_whitespace": True,
    }

    @model_validator(mode="after")
    def only_name_tr_is_nullable(self):
        nulled = [
            field for field in self.model_fields_set
            if field != "name_tr" and getattr(self, field) is None
        ]
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(sorted(nulled))}")
        return self
