# services/prediction/templates.py
"""Canned prediction text, selected by impact bands and industry category."""
from __future__ import annotations

from typing import Dict, Tuple

from services.industry import IndustryCategory

STRONG = 50
MODERATE = 20


def impact_band(score: float) -> str:
    """One of strong_positive, positive, strong_negative, negative, neutral."""
    if score > STRONG:
        return "strong_positive"
    if score > MODERATE:
        return "positive"
    if score < -STRONG:
        return "strong_negative"
    if score < -MODERATE:
        return "negative"
    return "neutral"


# ----------------------------
# Impact area descriptions ({industry} interpolated)
# ----------------------------
AREA_DESCRIPTIONS: Dict[str, Dict[str, str]] = {
    "Financial": {
        "strong_positive": "This news could have a significant positive financial impact on {industry} businesses, potentially increasing revenue streams and investment opportunities.",
        "positive": "This development may lead to moderate financial benefits for {industry} businesses, including possible increased customer spending.",
        "strong_negative": "This news may significantly affect {industry} financials negatively, potentially reducing revenue and increasing costs.",
        "negative": "There could be some financial challenges for {industry} businesses, requiring careful budget management.",
        "neutral": "Minimal financial impact expected for {industry} businesses based on this news.",
    },
    "Operational": {
        "strong_positive": "This news could significantly improve operational efficiency in the {industry} sector, enabling better processes and resource allocation.",
        "positive": "Some positive operational changes may be possible for {industry} businesses as a result of this development.",
        "strong_negative": "Significant operational disruptions may affect {industry} businesses, requiring major adjustments to processes.",
        "negative": "Some operational challenges could arise for {industry} businesses, potentially requiring workflow adjustments.",
        "neutral": "Minimal operational impact expected for {industry} businesses based on this news.",
    },
    "Market": {
        "strong_positive": "This development could significantly expand market opportunities for {industry} businesses, potentially opening new customer segments.",
        "positive": "Moderate market improvements may be expected for {industry} businesses, with possible increased customer interest.",
        "strong_negative": "Significant market challenges may arise for {industry} businesses, potentially reducing market share or customer interest.",
        "negative": "Some market pressure may affect {industry} businesses, requiring attention to customer retention strategies.",
        "neutral": "Minimal market impact expected for {industry} businesses based on this news.",
    },
    "Reputation": {
        "strong_positive": "This news could significantly enhance the reputation of {industry} businesses, building stronger customer trust and loyalty.",
        "positive": "Some positive reputation effects may benefit {industry} businesses, possibly improving public perception.",
        "strong_negative": "Significant reputation challenges may affect {industry} businesses, requiring proactive reputation management.",
        "negative": "Some negative public perception may affect {industry} businesses, suggesting a need for communication strategies.",
        "neutral": "Minimal reputation impact expected for {industry} businesses based on this news.",
    },
}


def area_description(area: str, base_impact: float, industry: str) -> str:
    return AREA_DESCRIPTIONS[area][impact_band(base_impact)].format(industry=industry)


# ----------------------------
# Timeframe descriptions
# ----------------------------
MEDIUM_TERM_SIGNIFICANT = 40
LONG_TERM_LASTING = 60


def _polarity(impact: float) -> str:
    if impact > 0:
        return "positive"
    if impact < 0:
        return "negative"
    return "neutral"


def timeframe_description(period: str, impact: float) -> str:
    polarity = _polarity(impact)
    positive = impact > 0

    if period == "short-term":
        action = (
            "quick action to capitalize on opportunities"
            if positive
            else "prompt attention to mitigate challenges"
        )
        return (
            f"In the immediate term (0-3 months), the {polarity} impact of this news "
            f"will be most pronounced, requiring {action}."
        )

    if period == "medium-term":
        trend = "continue to be significant" if abs(impact) > MEDIUM_TERM_SIGNIFICANT else "begin to stabilize"
        need = "strategic planning to maintain advantages" if positive else "ongoing adjustment of strategies"
        return (
            f"Over the medium term (3-12 months), the {polarity} effects will likely {trend}, "
            f"suggesting the need for {need}."
        )

    trend = (
        "create lasting changes in the industry landscape"
        if abs(impact) > LONG_TERM_LASTING
        else "diminish as the market adjusts"
    )
    need = (
        "sustainable approaches to leverage benefits"
        if positive
        else "resilience building against similar future challenges"
    )
    return (
        f"In the long term (1+ years), the {polarity} impact will likely {trend}, "
        f"indicating a need for {need}."
    )


# ----------------------------
# Recommendations
# ----------------------------
# band -> (title, description, priority)
DIRECTIONAL_RECOMMENDATIONS: Dict[str, Tuple[str, str, str]] = {
    "strong_positive": (
        "Capitalize on positive trend",
        "Consider increasing investment in related areas to maximize benefits from this positive development.",
        "high",
    ),
    "positive": (
        "Monitor positive development",
        "Keep track of this positive trend and prepare to adjust strategies if it continues.",
        "medium",
    ),
    "strong_negative": (
        "Mitigate potential risks",
        "Develop a risk mitigation strategy to address the potential negative impacts of this development.",
        "high",
    ),
    "negative": (
        "Prepare contingency plans",
        "Consider developing contingency plans to address possible negative outcomes.",
        "medium",
    ),
    "neutral": (
        "Monitor developments",
        "Keep an eye on related developments to determine if any action is needed in the future.",
        "low",
    ),
}

INDUSTRY_RECOMMENDATION_TITLE = "Industry-specific strategy for {industry}"

# category -> (when base impact > 0, otherwise)
INDUSTRY_RECOMMENDATIONS: Dict[IndustryCategory, Tuple[str, str]] = {
    IndustryCategory.RETAIL: (
        "Consider adjusting inventory and promotions to capitalize on this positive trend in retail consumer sentiment.",
        "Review inventory levels and customer engagement strategies to mitigate potential reduced foot traffic or spending.",
    ),
    IndustryCategory.TECHNOLOGY: (
        "Evaluate opportunities to accelerate innovation or product launches to capitalize on favorable tech market conditions.",
        "Consider focusing R&D efforts on resilient technologies and services that maintain value during market uncertainties.",
    ),
    IndustryCategory.MANUFACTURING: (
        "Assess supply chain optimizations and potential capacity increases to meet possible increased demand.",
        "Review supply chain redundancies and inventory management to prepare for potential disruptions.",
    ),
    IndustryCategory.HEALTHCARE: (
        "Consider expanding services or facilities to capitalize on favorable healthcare sector developments.",
        "Evaluate resource allocation and emergency preparedness to maintain quality care during potential challenges.",
    ),
    IndustryCategory.FINANCE: (
        "Consider adjusting investment portfolios and customer offerings to capitalize on positive financial market trends.",
        "Review risk management strategies and capital reserves to ensure resilience during market fluctuations.",
    ),
    IndustryCategory.OTHER: (
        "Evaluate opportunities to capitalize on this positive development in the {industry} sector through strategic planning and resource allocation.",
        "Consider developing contingency plans to navigate potential challenges in the {industry} sector, focusing on operational resilience.",
    ),
}


def industry_recommendation_text(category: IndustryCategory, base_impact: float, industry: str) -> str:
    positive, negative = INDUSTRY_RECOMMENDATIONS[category]
    return (positive if base_impact > 0 else negative).format(industry=industry)


def industry_priority(base_impact: float) -> str:
    magnitude = abs(base_impact)
    if magnitude > 40:
        return "high"
    if magnitude > 20:
        return "medium"
    return "low"
