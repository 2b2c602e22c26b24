from dataclasses import dataclass
from types import MappingProxyType
from .models import SubscriptionTier, Locale


class UnknownTier(LookupError):
    """Raised when a lookup is made with a value outside SubscriptionTier."""

    def __init__(self, tier):
        self.tier = tier
        super().__init__(f"Unknown subscription tier: {tier!r}")


@dataclass(frozen=True)
class PriceEntry:
    en: int
    tr: int

    def for_locale(self, locale: Locale) -> int:
        return getattr(self, Locale(locale).value)

    def as_dict(self) -> dict:
        return {locale.value: self.for_locale(locale) for locale in Locale}


SUBSCRIPTION_PRICES = MappingProxyType({
    SubscriptionTier.NONE: PriceEntry(en=0, tr=0),
    SubscriptionTier.FREE: PriceEntry(en=0, tr=0),
    SubscriptionTier.BASIC: PriceEntry(en=29, tr=299),
    SubscriptionTier.PREMIUM: PriceEntry(en=99, tr=999),
    SubscriptionTier.VIP: PriceEntry(en=199, tr=1999),
})

TIER_NAMES = MappingProxyType({
    SubscriptionTier.NONE: "None",
    SubscriptionTier.FREE: "Free",
    SubscriptionTier.BASIC: "Basic",
    SubscriptionTier.PREMIUM: "Premium",
    SubscriptionTier.VIP: "VIP",
})

TIER_ORDER = tuple(SubscriptionTier)

PAID_TIERS = frozenset(
    tier for tier, entry in SUBSCRIPTION_PRICES.items() if any(entry.as_dict().values())
)


def check_table_complete(table, label: str):
    """Fail loudly if a tier-keyed table misses a tier or has extra keys."""
    keys = set(table)
    expected = set(SubscriptionTier)
    missing = expected - keys
    extra = keys - expected
    if missing or extra:
        raise RuntimeError(
            f"{label} must cover every subscription tier exactly "
            f"(missing={sorted(str(k) for k in missing)}, extra={sorted(str(k) for k in extra)})"
        )


check_table_complete(SUBSCRIPTION_PRICES, "SUBSCRIPTION_PRICES")
check_table_complete(TIER_NAMES, "TIER_NAMES")


def coerce_tier(tier) -> SubscriptionTier:
    """Accept a SubscriptionTier or its string value, anything else is UnknownTier."""
    if isinstance(tier, SubscriptionTier):
        return tier
    try:
        return SubscriptionTier(tier)
    except (ValueError, TypeError):
        raise UnknownTier(tier) from None


def price_of(tier) -> PriceEntry:
    return SUBSCRIPTION_PRICES[coerce_tier(tier)]


def name_of(tier) -> str:
    return TIER_NAMES[coerce_tier(tier)]


def tier_rank(tier) -> int:
    """Return the rank of a tier for comparison (higher is better)."""
    return TIER_ORDER.index(coerce_tier(tier))
