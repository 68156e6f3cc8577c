# services/industry.py
"""
Business profile and industry classification.

The free-text industry a user types ("Retail clothing", "SaaS / Software")
is resolved once, when business details are saved, into an IndustryCategory.
Template selection downstream switches on the category instead of re-matching
substrings on every prediction.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class IndustryCategory(str, Enum):
    RETAIL = "retail"
    TECHNOLOGY = "technology"
    MANUFACTURING = "manufacturing"
    HEALTHCARE = "healthcare"
    FINANCE = "finance"
    OTHER = "other"


# Category names are matched first, in this order, so "Fintech & Finance"
# lands on finance rather than on the "tech" synonym.
_CATEGORY_ORDER: Tuple[IndustryCategory, ...] = (
    IndustryCategory.RETAIL,
    IndustryCategory.TECHNOLOGY,
    IndustryCategory.MANUFACTURING,
    IndustryCategory.HEALTHCARE,
    IndustryCategory.FINANCE,
)

# "fintech" must be tried before the bare "tech" synonym.
_CATEGORY_SYNONYMS: Tuple[Tuple[IndustryCategory, Tuple[str, ...]], ...] = (
    (IndustryCategory.FINANCE, ("fintech", "financial", "bank", "insurance", "investment")),
    (IndustryCategory.RETAIL, ("e-commerce", "ecommerce", "store", "grocery")),
    (IndustryCategory.TECHNOLOGY, ("tech", "software", "saas", "it services", "internet")),
    (IndustryCategory.MANUFACTURING, ("manufactur", "factory", "industrial", "fabrication")),
    (IndustryCategory.HEALTHCARE, ("health", "medical", "hospital", "pharma", "clinic")),
)


def resolve_industry_category(industry: Optional[str]) -> IndustryCategory:
    lowered = (industry or "").strip().lower()
    if not lowered:
        return IndustryCategory.OTHER
    for category in _CATEGORY_ORDER:
        if category.value in lowered:
            return category
    for category, keywords in _CATEGORY_SYNONYMS:
        if any(word in lowered for word in keywords):
            return category
    return IndustryCategory.OTHER


@dataclass(frozen=True)
class BusinessProfile:
    industry: str
    location: str
    category: IndustryCategory = IndustryCategory.OTHER

    @classmethod
    def from_fields(
        cls,
        industry: Optional[str],
        location: Optional[str],
        category: Optional[str] = None,
    ) -> Optional["BusinessProfile"]:
        """Build a profile, or None when industry or location is missing/blank."""
        ind = (industry or "").strip()
        loc = (location or "").strip()
        if not ind or not loc:
            return None
        try:
            cat = IndustryCategory(category) if category else resolve_industry_category(ind)
        except ValueError:
            cat = resolve_industry_category(ind)
        return cls(industry=ind, location=loc, category=cat)
