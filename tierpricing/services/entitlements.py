import os
import yaml
from math import inf
from tierpricing.billing import check_table_complete, coerce_tier
from tierpricing.models import SubscriptionTier

ENTITLEMENTS_PATH = os.getenv(
    "ENTITLEMENTS_PATH",
    os.path.abspath(os.path.join(os.path.dirname(__file__), "../entitlements.yaml")),
)

def load_entitlements_file(path: str) -> dict:
    with open(path, "r") as f:
        raw = yaml.safe_load(f)
    if not raw or not isinstance(raw, dict):
        raise RuntimeError(f"Entitlements YAML at {path} is empty or malformed!")
    try:
        entitlements = {SubscriptionTier(key): value or {} for key, value in raw.items()}
    except ValueError as e:
        raise RuntimeError(f"Entitlements YAML at {path} has an unknown tier: {e}") from e
    check_table_complete(entitlements, "Entitlements")
    for tier, block in entitlements.items():
        limit = block.get("monthly_redemptions") if isinstance(block, dict) else None
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < -1:
            raise RuntimeError(
                f"Entitlements YAML at {path}: {tier.value} needs an integer monthly_redemptions (-1 for unlimited)"
            )
    return entitlements

_entitlements = load_entitlements_file(ENTITLEMENTS_PATH)

def get_entitlements(tier) -> dict:
    return _entitlements[coerce_tier(tier)]

def max_monthly_redemptions(tier):
    ent = get_entitlements(tier)
    val = ent["monthly_redemptions"]
    if val == -1:
        return inf
    return val
