"""Raw rubric tables for product-management question types.

Each entry is validated into a :class:`rubrics.models.RubricConfig` by the
store at import time.
"""
from __future__ import annotations

from typing import Any, Dict, List


def dim_entry(
    dim_id: str,
    name: str,
    weight: int,
    description: str,
    levels: Dict[int, List[str]],
    common_issues: List[str],
) -> Dict[str, Any]:
    return {
        "id": dim_id,
        "name": name,
        "weight": weight,
        "description": description,
        "scoring_criteria": levels,
        "common_issues": common_issues,
    }


PRODUCT_SENSE: Dict[str, Any] = {
    "question_type": "product-sense",
    "dimensions": [
        dim_entry(
            "productMotivation",
            "Product Motivation & Mission",
            20,
            "Why the product exists, its tie to the company mission, and market context.",
            {
                1: ["No clear mission statement", "No connection to company strategy", "Missing market context entirely"],
                2: ["Vague mission statement", "Weak company mission alignment", "Limited market understanding"],
                3: ["Clear mission aligned to company", "Basic market context provided", "Reasonable value proposition"],
                4: [
                    "Specific mission with strategic relevance",
                    "Good market insight and competitive awareness",
                    "Clear articulation of why this matters now",
                ],
                5: [
                    "Clear description of product/experience fundamentals",
                    "Strong connection to company mission",
                    "Compelling articulation of market gaps/needs",
                    "Deep insight into why this matters now",
                    "Specific, actionable mission statement",
                ],
            },
            ["Generic mission statements", "Missing status quo analysis", "Weak connection to company strategy"],
        ),
        dim_entry(
            "targetAudience",
            "Target Audience",
            25,
            "Segmentation quality, ecosystem understanding, prioritization rationale and persona.",
            {
                1: ["No clear segments identified", "Missing key stakeholders", "No prioritization rationale"],
                2: ["Overlapping or vague segments", "Limited ecosystem view", "Weak selection rationale"],
                3: ["Identified segments with basic rationale", "Some ecosystem awareness", "Basic persona created"],
                4: [
                    "Comprehensive ecosystem analysis",
                    "Clear segmentation with strong prioritization logic",
                    "Well-developed persona with specific details",
                ],
                5: [
                    "Comprehensive ecosystem player identification",
                    "Clear rationale for selected group",
                    "Well-defined, mutually exclusive segments",
                    "Strong prioritization framework (2 dimensions)",
                    "Vivid, specific persona development",
                ],
            },
            ["Overlapping segments", "Weak segment prioritization rationale", "Overly broad/generic segments"],
        ),
        dim_entry(
            "problemIdentification",
            "Problem Identification",
            25,
            "User journey mapping, problem definition, severity/frequency analysis and prioritization.",
            {
                1: ["No user journey mapping", "Listing needs instead of problems", "No prioritization"],
                2: ["Generic pre/during/post journey", "Similar or overlapping problems", "Weak prioritization logic"],
                3: [
                    "Basic user journey with 3 distinct problems",
                    "Some severity/frequency consideration",
                    "Reasonable prioritization",
                ],
                4: [
                    "Specific journey tied to persona",
                    "Clear severity/frequency scoring",
                    "Strong prioritization with clear rationale",
                ],
                5: [
                    "Complete user journey mapping (specific day-in-the-life)",
                    "Distinct problems tied to journey steps",
                    "Clear severity/frequency scoring",
                    "Problems align with target segment",
                    "Strong prioritization rationale",
                ],
            },
            ["Listing needs instead of problems", "Missing journey steps", "Weak problem prioritization"],
        ),
        dim_entry(
            "solutionDevelopment",
            "Solution Development",
            20,
            "Solution creativity, feasibility evaluation, MVP definition and risk analysis.",
            {
                1: ["Solutions don't address the problem", "No evaluation criteria", "No MVP or risk consideration"],
                2: [
                    "Similar solutions with minor variations",
                    "Missing feasibility consideration",
                    "Vague MVP definition",
                ],
                3: ["Three distinct solutions presented", "Basic impact/effort evaluation", "Reasonable MVP scope"],
                4: [
                    "Creative, feasible solutions",
                    "Detailed MVP with clear scope",
                    "Risk identification with mitigations",
                ],
                5: [
                    "Three truly distinct solution approaches",
                    "Clear impact/effort evaluation",
                    "Solutions directly address chosen problem",
                    "Detailed MVP description",
                    "Thoughtful risk analysis with mitigations",
                ],
            },
            ["Solutions don't solve core problem", "Missing technical feasibility consideration", "Weak MVP definition"],
        ),
        dim_entry(
            "communicationStructure",
            "Communication Structure",
            10,
            "Interview execution, framework usage, time management and interviewer interaction.",
            {
                1: ["No clear structure", "Rambling responses", "No interviewer engagement"],
                2: ["Unclear transitions", "Poor time management", "Limited check-ins"],
                3: ["Basic structure followed", "Some check-ins with interviewer", "Reasonable time management"],
                4: ["Clear section transitions", "Regular interviewer check-ins", "Good time management"],
                5: [
                    "Clear section transitions",
                    "Regular interviewer check-ins",
                    "Efficient time management",
                    "Structured thinking demonstration",
                    "Clear prioritization frameworks throughout",
                ],
            },
            ["Poor time management", "Missing check-ins with interviewer", "Rambling/unfocused responses"],
        ),
    ],
    "calibrated_examples": [
        {
            "id": "google-maps-parking",
            "question_title": "Design a parking solution for Google Maps",
            "transcript_summary": (
                "Connected to Google's mission of organizing information. Identified 6 ecosystem players "
                "and 3 segments, chose urban professionals in unfamiliar areas. Mapped a 7-step journey, "
                "picked parking-availability uncertainty and defended the choice when challenged. Proposed "
                "smart parking predictions with a 2-3 city MVP."
            ),
            "scores": {
                "productMotivation": 3,
                "targetAudience": 4,
                "problemIdentification": 4,
                "solutionDevelopment": 3,
                "communicationStructure": 4,
            },
            "overall_score": 3.6,
            "strengths": [
                "Structured approach maintained throughout",
                "Strong segmentation framework with clear prioritization",
                "Good handling of interviewer challenge on problem selection",
            ],
            "improvements": [
                "Could have explored competitive landscape in motivation",
                "Solutions could leverage Google's technical capabilities more",
            ],
        }
    ],
}

ANALYTICAL_THINKING: Dict[str, Any] = {
    "question_type": "analytical-thinking",
    "dimensions": [
        dim_entry(
            "productRationale",
            "Product Rationale",
            15,
            "Product context, business model, competitive landscape and mission statement.",
            {
                1: ["No clear mission statement for product", "Missing business model consideration"],
                2: ["Superficial product overview", "Missing competitive context"],
                3: ["Basic product description with some mission thinking", "Limited competitive context"],
                4: ["Covers most product context elements with clear mission statements", "Good strategic positioning"],
                5: [
                    "States product description, use cases, maturity level, and business model",
                    "Explains why users and company care",
                    "Reviews competitors and limitations",
                    "Articulates company mission and creates product mission statement",
                ],
            },
            ["Generic mission statements", "No business model consideration", "Missing competitive landscape"],
        ),
        dim_entry(
            "measuringImpact",
            "Measuring Impact",
            35,
            "Ecosystem players, metric definitions with timeframes, North Star Metric and guardrails.",
            {
                1: ["Undefined metrics like 'engagement'", "No guardrail consideration"],
                2: ["Uses vanity metrics or averages inappropriately", "Missing timeframe rationale"],
                3: ["Identifies key ecosystem players with basic metrics", "Acceptable NSM selection"],
                4: ["Good ecosystem analysis with mostly specific metrics", "Solid NSM choice with adequate guardrails"],
                5: [
                    "Identifies 3+ ecosystem players with clear value propositions",
                    "Defines specific metrics with DWM timeframes and mathematical precision",
                    "Selects NSM that captures multi-player value and can grow infinitely",
                    "Creates guardrails that directly address NSM weaknesses",
                    "Critiques NSM with 2 strengths and 2 drawbacks",
                ],
            },
            ["Using percentages/averages as North Star", "Vague metrics without timeframes", "No guardrail metrics"],
        ),
        dim_entry(
            "settingGoals",
            "Setting Goals",
            25,
            "Altitude shift from product-level metrics to team-level goals with prioritization.",
            {
                1: ["No altitude shift", "No connection to North Star Metric"],
                2: ["Unclear transition from product to team level", "Weak prioritization rationale"],
                3: ["Shows some altitude shift thinking", "Basic connection to NSM"],
                4: ["Good team-level transition with reasonable timeline", "Clear connection to NSM improvement"],
                5: [
                    "Makes clear altitude shift from product metrics to team level",
                    "Justifies ecosystem player focus",
                    "Proposes 3 goals for 3-6 months with impact/feasibility scoring",
                    "Selects one goal decisively with clear NSM connection",
                ],
            },
            ["Goals too broad for single team", "Missing prioritization framework", "No clear NSM connection"],
        ),
        dim_entry(
            "evaluatingTradeoffs",
            "Evaluating Tradeoffs",
            25,
            "Principled decisions between competing options with clear rationale.",
            {
                1: ["No clear tradeoff framework", "Indecisive or contradictory"],
                2: ["Unclear tradeoff framing", "Hedges or avoids clear recommendation"],
                3: ["Basic tradeoff evaluation with some structured thinking", "Basic pros/cons identified"],
                4: ["Good tradeoff structure with clear decision framework", "Considers what might change decision"],
                5: [
                    "Identifies tradeoff type (breadth vs depth, real estate, required vs optional)",
                    "Clarifies common goal shared by both options",
                    "Frames 2 pros/2 cons systematically",
                    "Makes decisive recommendation tied to product mission",
                    "Specifies what would change their mind",
                ],
            },
            ["Hedging without making a decision", "Not tying back to mission", "Missing 'what would change my mind'"],
        ),
    ],
}

BEHAVIORAL: Dict[str, Any] = {
    "question_type": "behavioral",
    "dimensions": [
        dim_entry(
            "situation",
            "Situation & Context",
            20,
            "Context setting, stakes and constraints.",
            {
                1: ["No clear situation described", "Stakes unclear or absent"],
                2: ["Vague situation description", "Unclear constraints or timeline"],
                3: ["Clear situation with basic context", "Some business stakes identified"],
                4: ["Detailed situation with clear business context", "Well-articulated stakes and urgency"],
                5: [
                    "Rich, detailed situation description",
                    "Clear business impact and stakes",
                    "Well-defined constraints and timeline",
                    "Sets up clear 'before' state for comparison",
                ],
            },
            ["Jumping to actions without context", "Missing business stakes", "Vague timeline"],
        ),
        dim_entry(
            "task",
            "Task & Ownership",
            25,
            "Personal responsibility, role definition and ownership.",
            {
                1: ["Unclear personal role", "Uses 'we' without clarifying contribution"],
                2: ["Vague personal responsibility", "Limited ownership demonstrated"],
                3: ["Clear personal task identified", "Basic ownership demonstrated"],
                4: ["Well-defined personal responsibility", "Strong ownership and accountability"],
                5: [
                    "Crystal clear personal responsibility",
                    "Explicit distinction from team contribution",
                    "Strong accountability demonstrated",
                    "Leadership or initiative shown",
                ],
            },
            ["Using 'we' without specifying 'I'", "Overinflating role"],
        ),
        dim_entry(
            "action",
            "Action & Decision-Making",
            30,
            "Specific actions, decision rationale and problem-solving approach.",
            {
                1: ["No specific actions described", "Missing decision rationale"],
                2: ["Limited action specificity", "Missing alternatives considered"],
                3: ["Clear actions with some specificity", "Basic decision rationale provided"],
                4: ["Detailed, specific actions", "Alternatives considered and rejected"],
                5: [
                    "Highly specific, step-by-step actions",
                    "Clear rationale for each decision",
                    "Alternatives explicitly considered",
                    "Adaptation when challenges arose",
                ],
            },
            ["Too high-level, lacking specifics", "No mention of alternatives considered"],
        ),
        dim_entry(
            "result",
            "Result & Impact",
            25,
            "Quantified outcome, impact and learnings.",
            {
                1: ["No outcome mentioned", "Missing learnings"],
                2: ["Vague outcome description", "Generic learnings without specificity"],
                3: ["Clear outcome stated", "Basic learnings identified"],
                4: ["Specific, quantified outcome", "Meaningful learnings with application"],
                5: [
                    "Specific metrics and quantified impact",
                    "Clear 'before vs after' comparison",
                    "Business impact well-articulated",
                    "Deep learnings with future application",
                ],
            },
            ["Missing quantification", "No 'before vs after' comparison", "Generic learnings"],
        ),
    ],
}

ESTIMATION: Dict[str, Any] = {
    "question_type": "estimation",
    "dimensions": [
        dim_entry(
            "decomposition",
            "Problem Decomposition",
            30,
            "Breaking the problem into manageable components with clear structure.",
            {
                1: ["No clear breakdown attempted", "Jumped to final number"],
                2: ["Incomplete breakdown", "Unclear structure"],
                3: ["Basic breakdown with key components", "Most factors considered"],
                4: ["Clear, logical breakdown", "MECE structure largely achieved"],
                5: [
                    "Elegant breakdown into components",
                    "MECE structure achieved",
                    "Clear formula expressed before calculating",
                    "Top-down and bottom-up approaches compared",
                ],
            },
            ["Not stating approach before calculating", "Overlapping components (not MECE)"],
        ),
        dim_entry(
            "assumptions",
            "Assumption Quality",
            25,
            "Reasonable, explicit and justified assumptions.",
            {
                1: ["Unreasonable assumptions", "Assumptions not stated"],
                2: ["Some unreasonable assumptions", "Limited justification"],
                3: ["Reasonable assumptions stated", "Some justification provided"],
                4: ["Well-justified assumptions", "Range of uncertainty acknowledged"],
                5: [
                    "All assumptions explicitly stated",
                    "Each assumption justified with reasoning",
                    "Tied to verifiable benchmarks when possible",
                    "Uncertainty ranges provided",
                ],
            },
            ["Assumptions not stated explicitly", "Unrealistic numbers without justification"],
        ),
        dim_entry(
            "calculation",
            "Calculation Accuracy",
            25,
            "Mathematical correctness and order-of-magnitude reasoning.",
            {
                1: ["Significant math errors", "Wrong order of magnitude"],
                2: ["Some arithmetic errors", "Hard to follow steps"],
                3: ["Basic math correct", "Order of magnitude reasonable"],
                4: ["Accurate arithmetic", "Clear step-by-step process"],
                5: [
                    "Accurate arithmetic throughout",
                    "Clear step-by-step with intermediate results",
                    "Units tracked correctly",
                    "Order of magnitude checks along the way",
                ],
            },
            ["Losing track of zeros (millions vs billions)", "Over-precise calculations (false precision)"],
        ),
        dim_entry(
            "sanityCheck",
            "Sanity Check & Validation",
            20,
            "Validating results against benchmarks and alternative approaches.",
            {
                1: ["No sanity check performed", "Accepted clearly unreasonable result"],
                2: ["Minimal sanity check", "Didn't catch obvious issues"],
                3: ["Basic sanity check performed", "Some benchmark awareness"],
                4: ["Clear sanity check with rationale", "Caught and corrected errors"],
                5: [
                    "Multiple validation approaches used",
                    "Compared against public benchmarks",
                    "Alternative calculation method used to verify",
                    "Confidence interval provided",
                ],
            },
            ["Accepting clearly wrong results", "No confidence interval or range"],
        ),
    ],
}

STRATEGY: Dict[str, Any] = {
    "question_type": "strategy",
    "dimensions": [
        dim_entry(
            "market",
            "Market Understanding",
            25,
            "Market size, dynamics, trends and growth drivers.",
            {
                1: ["No market sizing attempted", "No trend awareness"],
                2: ["Vague market size estimates", "Missing growth drivers"],
                3: ["Basic market sizing with TAM/SAM", "Key trends identified"],
                4: ["Clear TAM/SAM/SOM breakdown", "Growth drivers well-articulated"],
                5: [
                    "Rigorous TAM/SAM/SOM with methodology",
                    "Key trends with implications identified",
                    "Growth drivers with quantification",
                    "Market timing considerations",
                ],
            },
            ["No TAM/SAM/SOM distinction", "Ignoring market timing"],
        ),
        dim_entry(
            "competition",
            "Competitive Analysis",
            25,
            "Competitive landscape, differentiation and positioning.",
            {
                1: ["No competitors identified", "No differentiation strategy"],
                2: ["Few competitors mentioned", "Vague differentiation"],
                3: ["Key competitors identified", "Some differentiation articulated"],
                4: ["Comprehensive competitor mapping", "Clear differentiation strategy"],
                5: [
                    "Direct and indirect competitors mapped",
                    "Differentiation with sustainability",
                    "Competitive moats identified",
                    "Anticipated competitive responses",
                ],
            },
            ["Missing indirect competitors", "Not considering competitive response"],
        ),
        dim_entry(
            "options",
            "Strategic Options & Go-to-Market",
            25,
            "Strategic alternatives, go-to-market and pricing.",
            {
                1: ["No clear strategy proposed", "Missing go-to-market plan"],
                2: ["Limited strategic options", "Weak pricing rationale"],
                3: ["Multiple options considered", "Basic go-to-market plan"],
                4: ["Well-developed strategic options", "Clear go-to-market with channels"],
                5: [
                    "Multiple strategic options with tradeoffs",
                    "Clear go-to-market with channel strategy",
                    "Pricing with value-based rationale",
                    "Customer acquisition approach",
                ],
            },
            ["Only one option considered", "No channel strategy"],
        ),
        dim_entry(
            "decision",
            "Decision Framework & Risk Assessment",
            25,
            "Clear recommendations with rationale and risk assessment.",
            {
                1: ["No clear recommendation", "No risk consideration"],
                2: ["Unclear recommendation", "Limited risk awareness"],
                3: ["Clear recommendation made", "Some risks identified"],
                4: ["Well-justified recommendation", "Key risks with mitigations"],
                5: [
                    "Clear recommendation with explicit criteria",
                    "Pros/cons of alternatives weighed",
                    "Risks identified with mitigations",
                    "'What would change my mind' articulated",
                ],
            },
            ["Recommendation without criteria", "No mitigation plan"],
        ),
    ],
}

TECHNICAL: Dict[str, Any] = {
    "question_type": "technical",
    "dimensions": [
        dim_entry(
            "requirements",
            "Requirements & Scope",
            20,
            "Clarifying scope, constraints and assumptions.",
            {
                1: ["No clarifying questions asked", "Jumped to solution without scoping"],
                2: ["Few clarifying questions", "Vague scope definition"],
                3: ["Some clarifying questions asked", "Key assumptions stated"],
                4: ["Good clarifying questions", "Clear scope with priorities"],
                5: [
                    "Probing clarifying questions",
                    "Clear functional and non-functional requirements",
                    "Scale and constraints well-defined",
                    "Prioritized must-haves vs nice-to-haves",
                ],
            },
            ["Not asking about scale requirements", "Missing non-functional requirements"],
        ),
        dim_entry(
            "architecture",
            "Architecture & Design",
            35,
            "System architecture, component design, data flow and scalability.",
            {
                1: ["No clear system architecture", "Data flow unclear"],
                2: ["Incomplete component diagram", "Missing scalability consideration"],
                3: ["Basic components identified", "Some scalability thought"],
                4: ["Clear component breakdown", "API contracts considered"],
                5: [
                    "Clear high-level architecture with component breakdown",
                    "Well-defined data flow and storage",
                    "Scalability built into design",
                    "API design with clear contracts",
                    "Failure handling considered",
                ],
            },
            ["Missing data storage design", "Single points of failure"],
        ),
        dim_entry(
            "tradeoffs",
            "Tradeoff Analysis",
            25,
            "Design tradeoffs, alternatives and justified decisions.",
            {
                1: ["No alternatives considered", "Decisions not justified"],
                2: ["Limited alternatives mentioned", "Weak justification for choices"],
                3: ["Some alternatives considered", "Basic tradeoffs identified"],
                4: ["Multiple alternatives considered", "Decisions well-justified with context"],
                5: [
                    "Multiple design alternatives considered",
                    "Clear pros/cons for each approach",
                    "Decisions tied to requirements",
                    "Cost vs performance tradeoffs discussed",
                ],
            },
            ["Picking technology without justification", "Ignoring cost implications"],
        ),
        dim_entry(
            "communication",
            "Technical Communication",
            20,
            "Clarity of technical explanation and ability to adjust depth.",
            {
                1: ["Unclear explanations", "Cannot explain decisions"],
                2: ["Confusing technical explanations", "Disorganized presentation"],
                3: ["Reasonably clear explanations", "Can explain main decisions"],
                4: ["Clear technical explanations", "Good use of examples"],
                5: [
                    "Crystal clear technical explanations",
                    "Logical flow from high-level to details",
                    "Adjusts depth based on audience",
                    "Summarizes key points effectively",
                ],
            },
            ["Too deep in details without overview", "Not checking for understanding"],
        ),
    ],
}

PM_RUBRICS: List[Dict[str, Any]] = [
    PRODUCT_SENSE,
    ANALYTICAL_THINKING,
    BEHAVIORAL,
    ESTIMATION,
    STRATEGY,
    TECHNICAL,
]
