"""Six-dimension case interview rubric used to grade consulting sessions."""
from __future__ import annotations

from typing import Any, Dict

from .pm import dim_entry

CASE_INTERVIEW: Dict[str, Any] = {
    "question_type": "case-interview",
    "dimensions": [
        dim_entry(
            "structure",
            "Structure",
            25,
            "Did they use a clear, logical framework to approach the problem?",
            {
                1: ["No framework", "Jumps between topics"],
                3: ["Generic but workable framework"],
                5: ["Tailored, MECE framework tied to the client's objective", "Hypothesis stated up front"],
            },
            ["Memorised framework not adapted to the case"],
        ),
        dim_entry(
            "problemSolving",
            "Problem Solving",
            20,
            "Did they identify key issues and analyze them effectively?",
            {
                1: ["Misses the core issue"],
                3: ["Finds the main driver with prompting"],
                5: ["Isolates the root cause quickly", "Prioritises the highest-value branch"],
            },
            ["Boiling the ocean"],
        ),
        dim_entry(
            "businessJudgment",
            "Business Judgment",
            20,
            "Were their insights commercially sound and realistic?",
            {
                1: ["Unrealistic recommendations"],
                3: ["Sensible but shallow implications"],
                5: ["Draws the 'so what' from every data point", "Weighs risks and feasibility"],
            },
            ["Ignoring implementation risk"],
        ),
        dim_entry(
            "communication",
            "Communication",
            15,
            "Was their delivery clear, concise, and well-organized?",
            {
                1: ["Rambling", "No synthesis"],
                3: ["Clear but verbose"],
                5: ["Top-down, concise delivery", "Signposts each step"],
            },
            ["Thinking out loud without structure"],
        ),
        dim_entry(
            "quantitative",
            "Quantitative Rigor",
            10,
            "Were calculations accurate and approach to numbers sound?",
            {
                1: ["Major arithmetic errors"],
                3: ["Correct with minor slips"],
                5: ["Fast, accurate math with sanity checks", "States the approach before computing"],
            },
            ["Losing track of zeros"],
        ),
        dim_entry(
            "creativity",
            "Creativity",
            10,
            "Did they show novel thinking or unique insights?",
            {
                1: ["Only obvious ideas"],
                3: ["A few non-obvious ideas"],
                5: ["Distinctive, structured brainstorming", "Ideas grounded in the client's context"],
            },
            ["Unstructured idea lists"],
        ),
    ],
}
