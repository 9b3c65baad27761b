"""Interactive case-study registry and the domain -> case tag table used to relate them."""

from __future__ import annotations

SIMULATIONS = [
    {
        "case_id": "cs_unit_economics_crisis",
        "title": "Unit Economics Crisis",
        "description": "A venture-backed marketplace discovers its CAC has quietly overtaken LTV.",
        "estimated_duration": 45,
        "difficulty": "intermediate",
        "domain_id": "second-order-decision-making",
        "tags": ["unit_economics", "capital", "crisis"],
    },
    {
        "case_id": "cs_01_tesla_production_crisis_2018",
        "title": "Tesla: The Model 3 Production Crisis (2018)",
        "description": "Production hell, cash burn and a public deadline the market does not believe.",
        "estimated_duration": 60,
        "difficulty": "advanced",
        "domain_id": "crisis-leadership-public-composure",
        "tags": ["crisis", "operations", "narrative"],
    },
    {
        "case_id": "cs_02_disney_streaming_pivot_2017",
        "title": "Disney: The Streaming Pivot (2017)",
        "description": "Walking away from licensing revenue to build a direct-to-consumer platform.",
        "estimated_duration": 50,
        "difficulty": "advanced",
        "domain_id": "technological-market-foresight",
        "tags": ["market", "tech", "cannibalization", "capital"],
    },
    {
        "case_id": "cs_03_airbnb_covid_crisis_2020",
        "title": "Airbnb: Bookings Collapse (2020)",
        "description": "Eighty percent of bookings vanish in eight weeks ahead of a planned IPO.",
        "estimated_duration": 50,
        "difficulty": "advanced",
        "domain_id": "crisis-leadership-public-composure",
        "tags": ["crisis", "org", "narrative"],
    },
    {
        "case_id": "cs_04_netflix_content_strategy_2019",
        "title": "Netflix: Owning the Content (2019)",
        "description": "Licensors become competitors; debt-funded originals become the moat.",
        "estimated_duration": 45,
        "difficulty": "intermediate",
        "domain_id": "competitive-moat-architecture",
        "tags": ["market", "moat", "capital"],
    },
    {
        "case_id": "cs_05_zoom_security_crisis_2020",
        "title": "Zoom: The Security Reckoning (2020)",
        "description": "Hypergrowth meets public security failures in the glare of a pandemic.",
        "estimated_duration": 40,
        "difficulty": "intermediate",
        "domain_id": "crisis-leadership-public-composure",
        "tags": ["crisis", "tech"],
    },
    {
        "case_id": "cs_skill_01_asymmetric_warfare",
        "title": "Skill Drill: Asymmetric Warfare",
        "description": "Defend an incumbent position against a competitor with nothing to lose.",
        "estimated_duration": 20,
        "difficulty": "foundational",
        "domain_id": "competitive-moat-architecture",
        "tags": ["asymmetric", "moat"],
    },
    {
        "case_id": "cs_skill_02_second_order",
        "title": "Skill Drill: Second-Order Effects",
        "description": "Trace a pricing change three moves ahead before committing.",
        "estimated_duration": 20,
        "difficulty": "foundational",
        "domain_id": "second-order-decision-making",
        "tags": ["second_order"],
    },
    {
        "case_id": "cs_skill_03_cannibalization",
        "title": "Skill Drill: Cannibalization",
        "description": "Decide whether to launch the product that eats your best seller.",
        "estimated_duration": 20,
        "difficulty": "foundational",
        "domain_id": "technological-market-foresight",
        "tags": ["cannibalization", "market"],
    },
    {
        "case_id": "cs_arena_1_1_two_pizza_reorg",
        "title": "Arena: The Two-Pizza Reorg",
        "description": "Split a 400-person product org into autonomous teams without losing control.",
        "estimated_duration": 35,
        "difficulty": "intermediate",
        "domain_id": "organizational-design-talent-density",
        "tags": ["org", "talent"],
    },
]

# A simulation relates to a domain when it carries at least one of the domain's tags.
DOMAIN_CASE_TAGS = {
    "capital-allocation": ["capital", "unit_economics"],
    "competitive-moat-architecture": ["asymmetric", "moat"],
    "global-systems-thinking": [],
    "organizational-design-talent-density": ["talent", "org"],
    "high-stakes-dealmaking-integration": [],
    "investor-market-narrative-control": ["narrative"],
    "geopolitical-regulatory-navigation": [],
    "crisis-leadership-public-composure": ["crisis"],
    "second-order-decision-making": ["unit_economics", "second_order"],
    "technological-market-foresight": ["market", "tech"],
}
