"""Curated themes that repackage catalog content, and the built-in learning paths."""

from __future__ import annotations

# A lesson joins a theme when it belongs to one of the theme's domains or its
# lesson/module title contains one of the keywords (case-insensitive). Cases
# join when they carry one of the case tags.
THEMED_COLLECTIONS = [
    {
        "id": "m-and-a-essentials",
        "title": "M&A Essentials",
        "subtitle": "Master the fundamentals of mergers and acquisitions",
        "domains": ["high-stakes-dealmaking-integration"],
        "keywords": ["merger", "acquisition", "deal", "m&a"],
        "lesson_limit": 8,
        "view_all_href": "/library/curriculum/high-stakes-dealmaking-integration",
    },
    {
        "id": "financial-acumen-quickstart",
        "title": "Financial Acumen Quick Start",
        "subtitle": "Build your financial decision-making foundation",
        "domains": ["second-order-decision-making"],
        "keywords": ["financial", "economics", "cash flow"],
        "lesson_limit": 8,
        "view_all_href": "/library/curriculum/second-order-decision-making",
    },
    {
        "id": "crisis-leadership-playbook",
        "title": "Crisis Leadership Playbook",
        "subtitle": "Navigate high-stakes situations with confidence",
        "domains": ["crisis-leadership-public-composure"],
        "keywords": ["crisis", "emergency"],
        "case_tags": ["crisis"],
        "lesson_limit": 6,
        "case_limit": 3,
        "view_all_href": "/library/curriculum/crisis-leadership-public-composure",
    },
    {
        "id": "strategic-thinking-foundations",
        "title": "Strategic Thinking Foundations",
        "subtitle": "Develop your competitive advantage mindset",
        "domains": ["competitive-moat-architecture"],
        "keywords": ["strategic", "competitive", "moat"],
        "lesson_limit": 8,
        "view_all_href": "/library/curriculum/competitive-moat-architecture",
    },
    {
        "id": "org-design-essentials",
        "title": "Organizational Design Essentials",
        "subtitle": "Build high-performance teams and structures",
        "domains": ["organizational-design-talent-density"],
        "keywords": ["organizational", "talent"],
        "lesson_limit": 8,
        "view_all_href": "/library/curriculum/organizational-design-talent-density",
    },
]

# Served when no published path exists in the database.
DEFAULT_LEARNING_PATHS = [
    {
        "id": "first-90-days-operator",
        "title": "Your First 90 Days as an Operator",
        "description": "Capital discipline and organizational design before the first board meeting.",
        "duration": "4 weeks",
        "items": [
            {"type": "lesson", "domain": "capital-allocation", "module": "ceo-as-investor", "lesson": "five-choices"},
            {"type": "lesson", "domain": "capital-allocation", "module": "ceo-as-investor",
             "lesson": "opportunity-cost"},
            {"type": "lesson", "domain": "organizational-design-talent-density",
             "module": "foundational-theories-structure", "lesson": "speed-vs-control"},
            {"type": "case", "domain": "organizational-design-talent-density",
             "case_id": "cs_arena_1_1_two_pizza_reorg"},
        ],
    },
    {
        "id": "crisis-ready-ceo",
        "title": "The Crisis-Ready CEO",
        "description": "Prepare the organization, then run the first hour of a real crisis.",
        "duration": "3 weeks",
        "items": [
            {"type": "lesson", "domain": "crisis-leadership-public-composure",
             "module": "before-crisis-resilient-organization", "lesson": "inoculation-mindset"},
            {"type": "lesson", "domain": "crisis-leadership-public-composure",
             "module": "golden-hour-first-60-minutes", "lesson": "ceo-first-three-calls"},
            {"type": "case", "domain": "crisis-leadership-public-composure",
             "case_id": "cs_03_airbnb_covid_crisis_2020"},
            {"type": "case", "domain": "crisis-leadership-public-composure",
             "case_id": "cs_01_tesla_production_crisis_2018"},
        ],
    },
    {
        "id": "building-durable-moats",
        "title": "Building Durable Moats",
        "description": "From returns on capital to network effects and the competitor with nothing to lose.",
        "duration": "3 weeks",
        "items": [
            {"type": "lesson", "domain": "competitive-moat-architecture", "module": "foundational-theory",
             "lesson": "defining-moat"},
            {"type": "lesson", "domain": "competitive-moat-architecture", "module": "foundational-theory",
             "lesson": "source-all-moats"},
            {"type": "lesson", "domain": "competitive-moat-architecture", "module": "network-effects",
             "lesson": "physics-network-effects"},
            {"type": "case", "domain": "competitive-moat-architecture", "case_id": "cs_skill_01_asymmetric_warfare"},
            {"type": "case", "domain": "competitive-moat-architecture",
             "case_id": "cs_04_netflix_content_strategy_2019"},
        ],
    },
    {
        "id": "thinking-in-consequences",
        "title": "Thinking in Consequences",
        "description": "Second-order reasoning applied to pricing and unit economics.",
        "duration": "2 weeks",
        "items": [
            {"type": "lesson", "domain": "second-order-decision-making",
             "module": "foundations-consequential-thinking", "lesson": "first-order-vs-second-order"},
            {"type": "lesson", "domain": "second-order-decision-making",
             "module": "foundations-consequential-thinking", "lesson": "and-then-what-question"},
            {"type": "case", "domain": "second-order-decision-making", "case_id": "cs_skill_02_second_order"},
            {"type": "case", "domain": "second-order-decision-making", "case_id": "cs_unit_economics_crisis"},
        ],
    },
]
