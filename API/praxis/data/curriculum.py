"""Executive curriculum: domains, modules and lessons in canonical order."""

from __future__ import annotations

CURRICULUM_DOMAINS = [
    {"id": "capital-allocation", "title": "Mastery of Capital Allocation", "modules": [
        {"id": "ceo-as-investor", "number": 1, "title": "The CEO as an Investor: The Foundational Mindset", "lessons": [
            {"id": "five-choices", "number": 1, "title": "The Five Choices"},
            {"id": "per-share-value", "number": 2, "title": "The Primacy of Per-Share Value"},
            {"id": "opportunity-cost", "number": 3, "title": "Opportunity Cost as a Guiding Principle"},
        ]},
        {"id": "calculating-intrinsic-value", "number": 2,
         "title": "Calculating Intrinsic Value: The Yardstick for Decision-Making", "lessons": [
            {"id": "owners-earnings", "number": 1, "title": "The Owner's Earnings Framework"},
            {"id": "dcf-for-ceo", "number": 2, "title": "Discounted Cash Flow (DCF) for the CEO"},
            {"id": "sanity-check-multiples", "number": 3, "title": "Sanity Checking Value with Multiples"},
        ]},
    ]},
    {"id": "competitive-moat-architecture", "title": "Competitive Moat Architecture", "modules": [
        {"id": "foundational-theory", "number": 1, "title": "The Foundational Theory of Economic Moats", "lessons": [
            {"id": "defining-moat", "number": 1,
             "title": "Defining the Moat: Differentiating True Moats from Fleeting Advantages"},
            {"id": "source-all-moats", "number": 2,
             "title": "The Source of All Moats: High Returns on Invested Capital (ROIC)"},
            {"id": "moats-industry-structure", "number": 3,
             "title": "The Relationship Between Moats and Industry Structure"},
        ]},
        {"id": "network-effects", "number": 2, "title": "Moat #1 - Network Effects", "lessons": [
            {"id": "physics-network-effects", "number": 1,
             "title": "The Physics of Network Effects: Direct vs. Indirect"},
            {"id": "architecting-liquidity", "number": 2,
             "title": "Architecting for Liquidity: The 'Cold Start' Problem"},
            {"id": "asymptotic-network-effect", "number": 3,
             "title": "The Asymptotic Network Effect: When Networks Stop Growing in Value"},
        ]},
    ]},
    {"id": "global-systems-thinking", "title": "Global Systems Thinking", "modules": [
        {"id": "foundations-systems-thinking", "number": 1, "title": "The Foundations of Systems Thinking", "lessons": [
            {"id": "stocks-flows-feedback", "number": 1, "title": "Stocks, Flows, and Feedback Loops"},
            {"id": "reinforcing-vs-balancing", "number": 2,
             "title": "Reinforcing vs. Balancing Loops: The Engines of Growth and Stability"},
            {"id": "delays-oscillations-beer-game", "number": 3,
             "title": "Delays, Oscillations, and the 'Beer Game'"},
        ]},
        {"id": "organization-as-system", "number": 2, "title": "The Organization as a System", "lessons": [
            {"id": "conways-law", "number": 1, "title": "Conway's Law as a Systemic Force"},
            {"id": "unintended-consequences", "number": 2,
             "title": "Unintended Consequences: The Cobra Effect and Perverse Incentives"},
            {"id": "organizational-dysfunction-archetypes", "number": 3,
             "title": "Archetypes of Organizational Dysfunction"},
        ]},
    ]},
    {"id": "organizational-design-talent-density", "title": "Organizational Design & Talent Density", "modules": [
        {"id": "foundational-theories-structure", "number": 1,
         "title": "The Foundational Theories of Organizational Structure", "lessons": [
            {"id": "speed-vs-control", "number": 1, "title": "The Core Trade-off: Speed vs. Control"},
            {"id": "dunbars-number", "number": 2, "title": "Dunbar's Number & The Limits of Social Cohesion"},
            {"id": "strategy-structure-relationship", "number": 3,
             "title": "The Relationship Between Strategy and Structure"},
        ]},
        {"id": "three-archetypes-design", "number": 2, "title": "The Three Archetypes of Organizational Design",
         "lessons": [
            {"id": "functional-organization", "number": 1, "title": "The Functional Organization (The Machine)"},
            {"id": "divisional-organization", "number": 2, "title": "The Divisional Organization (The Portfolio)"},
            {"id": "matrix-organization", "number": 3, "title": "The Matrix Organization (The Compromise)"},
        ]},
    ]},
    {"id": "high-stakes-dealmaking-integration", "title": "High-Stakes Dealmaking & Integration", "modules": [
        {"id": "strategic-rationale", "number": 1, "title": "Strategic Rationale: The 'Why' Behind the Deal",
         "lessons": [
            {"id": "dealmaking-tool-strategy", "number": 1,
             "title": "Dealmaking as a Tool of Strategy, Not a Strategy Itself"},
            {"id": "build-buy-partner-framework", "number": 2, "title": "The Build vs. Buy vs. Partner Framework"},
            {"id": "five-archetypes-strategic-deals", "number": 3, "title": "The Five Archetypes of Strategic Deals"},
        ]},
        {"id": "target-identification-thesis", "number": 2, "title": "Target Identification & Thesis Development",
         "lessons": [
            {"id": "corporate-development-function", "number": 1, "title": "The Corporate Development Function"},
            {"id": "broad-scan-target-shortlist", "number": 2, "title": "From Broad Scan to Target Shortlist"},
            {"id": "deal-thesis-document", "number": 3, "title": "The Deal Thesis Document"},
        ]},
    ]},
    {"id": "investor-market-narrative-control", "title": "Investor & Market Narrative Control", "modules": [
        {"id": "public-market-storytelling", "number": 1, "title": "The Public Market as a Storytelling Arena",
         "lessons": [
            {"id": "efficient-market-vs-mr-market", "number": 1,
             "title": "The Efficient Market Hypothesis vs. Mr. Market"},
            {"id": "players-on-field", "number": 2,
             "title": "The Players on the Field: Sell-Side, Buy-Side, and Activists"},
            {"id": "fiduciary-duty-regulation-fd", "number": 3, "title": "The CEO's Fiduciary Duty and Regulation FD"},
        ]},
        {"id": "architecting-core-narrative", "number": 2, "title": "Architecting the Core Narrative", "lessons": [
            {"id": "three-pillars-narrative", "number": 1,
             "title": "The Three Pillars of a Defensible Narrative: The TAM, The Moat, and The Execution"},
            {"id": "north-star-metric", "number": 2, "title": "Crafting Your 'North Star' Metric"},
            {"id": "shareholder-letter-cornerstone", "number": 3,
             "title": "The Shareholder Letter as a Narrative Cornerstone"},
        ]},
    ]},
    {"id": "geopolitical-regulatory-navigation", "title": "Geopolitical & Regulatory Navigation", "modules": [
        {"id": "global-chessboard", "number": 1,
         "title": "The Global Chessboard: A CEO's Guide to Geopolitical Systems", "lessons": [
            {"id": "westphalian-system-corporate-sovereignty", "number": 1,
             "title": "The Westphalian System and Corporate Sovereignty"},
            {"id": "three-spheres-influence", "number": 2,
             "title": "The Three Spheres of Influence: Understanding the US, China, and EU Operating Systems"},
            {"id": "rise-geo-economic-state", "number": 3, "title": "The Rise of the 'Geo-Economic' State"},
        ]},
        {"id": "mapping-geopolitical-footprint", "number": 2, "title": "Mapping Your Geopolitical Footprint",
         "lessons": [
            {"id": "geopolitical-dependency-audit", "number": 1, "title": "The Geopolitical Dependency Audit"},
            {"id": "identifying-systemic-choke-points", "number": 2, "title": "Identifying Systemic Choke Points"},
            {"id": "scenario-planning-war-gaming", "number": 3,
             "title": "Scenario Planning: War-Gaming Geopolitical Shocks"},
        ]},
    ]},
    {"id": "crisis-leadership-public-composure", "title": "Crisis Leadership & Public Composure", "modules": [
        {"id": "before-crisis-resilient-organization", "number": 1,
         "title": "Before the Crisis: Building a Resilient Organization", "lessons": [
            {"id": "inoculation-mindset", "number": 1, "title": "The 'Inoculation' Mindset: When, Not If"},
            {"id": "crisis-response-architecture", "number": 2,
             "title": "The Crisis Response Architecture: The War Room and the Chain of Command"},
            {"id": "red-team-simulation", "number": 3, "title": "The 'Red Team' Simulation: Practicing for a Bad Day"},
        ]},
        {"id": "golden-hour-first-60-minutes", "number": 2, "title": "The Golden Hour: The First 60 Minutes",
         "lessons": [
            {"id": "ceo-first-three-calls", "number": 1, "title": "The CEO's First Three Calls"},
            {"id": "ooda-loop-business", "number": 2,
             "title": "The OODA Loop for Business: Observe, Orient, Decide, Act"},
            {"id": "single-source-truth", "number": 3, "title": "Establishing a Single Source of Truth"},
        ]},
    ]},
    {"id": "second-order-decision-making", "title": "Second-Order Decision Making", "modules": [
        {"id": "foundations-consequential-thinking", "number": 1,
         "title": "The Foundations of Consequential Thinking", "lessons": [
            {"id": "first-order-vs-second-order", "number": 1,
             "title": "First-Order vs. Second-Order Thinking: The Howard Marks Framework"},
            {"id": "chess-master-mindset", "number": 2,
             "title": "The Chess Master's Mindset: Thinking Three Moves Ahead"},
            {"id": "and-then-what-question", "number": 3,
             "title": "'And then what?': The Simple Question That Unlocks Deep Analysis"},
        ]},
        {"id": "temporal-dimension-time-variable", "number": 2,
         "title": "The Temporal Dimension: Time as a Key Variable", "lessons": [
            {"id": "perils-short-term-optimization", "number": 1, "title": "The Perils of Short-Term Optimization"},
            {"id": "inversion-principle", "number": 2,
             "title": "The 'Inversion' Principle: Starting with the End in Mind"},
            {"id": "compounding-small-decisions", "number": 3,
             "title": "Compounding: How Small, Consistent Decisions Create Massive Long-Term Effects"},
        ]},
    ]},
    {"id": "technological-market-foresight", "title": "Technological & Market Foresight", "modules": [
        {"id": "signal-detection-information-flow", "number": 1,
         "title": "Signal Detection: Curating the Information Flow", "lessons": [
            {"id": "building-information-diet", "number": 1, "title": "Building Your 'Information Diet'"},
            {"id": "first-principle-vs-analogy", "number": 2,
             "title": "First-Principle Thinking vs. Reasoning by Analogy"},
            {"id": "differentiating-hype-secular-trends", "number": 3,
             "title": "Differentiating Hype Cycles from Secular Trends"},
        ]},
        {"id": "understanding-technological-shifts", "number": 2, "title": "Understanding Technological Shifts",
         "lessons": [
            {"id": "s-curves-pace-adoption", "number": 1, "title": "S-Curves and the Pace of Adoption"},
            {"id": "general-purpose-technologies-tectonic", "number": 2,
             "title": "General Purpose Technologies (GPTs) as Tectonic Shifts"},
            {"id": "platform-shifts-ultimate-disruptive", "number": 3,
             "title": "Platform Shifts: The Ultimate Disruptive Force"},
        ]},
    ]},
]

# Competency keys scored in debriefs, mapped to the domain that teaches them.
COMPETENCY_TO_DOMAIN = {
    "financialAcumen": "capital-allocation",
    "strategicThinking": "competitive-moat-architecture",
    "marketAwareness": "technological-market-foresight",
    "riskManagement": "crisis-leadership-public-composure",
    "leadershipJudgment": "organizational-design-talent-density",
}

COMPETENCY_DISPLAY_NAMES = {
    "financialAcumen": "Financial Acumen",
    "strategicThinking": "Strategic Thinking",
    "marketAwareness": "Market Awareness",
    "riskManagement": "Risk Management",
    "leadershipJudgment": "Leadership Judgment",
}

RESIDENCY_TITLES = {
    1: "The Operator's Residency",
}
DEFAULT_RESIDENCY_TITLE = "Business Acumen Core"


def residency_title(year: int) -> str:
    return f"Year {year}: {RESIDENCY_TITLES.get(year, DEFAULT_RESIDENCY_TITLE)}"
