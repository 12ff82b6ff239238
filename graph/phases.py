"""Phase protocols: ordered phases with budgets, exit criteria and phrase sets."""
from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from catalog.models import Question

CriterionMode = Literal["statement", "list", "choice", "number"]

DEFAULT_CHALLENGES = [
    "Interesting choice. But couldn't you argue {alternative} is more important?",
    "Why not {alternative}? Convince me.",
    "Playing devil's advocate: {alternative} looks just as strong. Why your pick?",
]


class ExitCriterion(BaseModel):
    """Predicate over the facts extracted for a phase.

    ``list`` and ``number`` need ``min_items`` distinct items of ``category``;
    ``choice`` additionally needs ``min_reasons`` distinct reasons;
    ``statement`` needs one substantive statement.
    """

    mode: CriterionMode
    category: str
    min_items: int = Field(default=1, ge=1)
    min_reasons: int = Field(default=0, ge=0)
    description: str = ""

    def satisfied(self, facts: Dict[str, List[str]]) -> bool:
        if len(facts.get(self.category, [])) < self.min_items:
            return False
        if self.mode == "choice":
            return len(facts.get("reason", [])) >= self.min_reasons
        return True


class PhaseSpec(BaseModel):
    id: str
    title: str
    budget_seconds: Optional[int] = None
    prompt: str
    criterion: ExitCriterion
    transitions: List[str] = Field(min_length=1)
    probes: List[str] = Field(default_factory=lambda: ["Tell me more.", "What else?"])
    hints: List[str] = Field(default_factory=list)
    focus: str
    requires_challenge: bool = False
    challenges: List[str] = Field(default_factory=lambda: list(DEFAULT_CHALLENGES))
    alternatives_from: Optional[str] = None
    alternatives: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _challenge_needs_choice(self) -> "PhaseSpec":
        if self.requires_challenge and self.criterion.mode != "choice":
            raise ValueError(f"phase {self.id}: challenge phases need a choice criterion")
        return self


class ProtocolSpec(BaseModel):
    """An ordered phase list; the first phase is initial and the last is terminal."""

    name: str
    phases: List[PhaseSpec] = Field(min_length=2)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_shape(self) -> "ProtocolSpec":
        ids = [p.id for p in self.phases]
        if len(set(ids)) != len(ids):
            raise ValueError(f"protocol {self.name}: duplicate phase ids")
        if ids[-1] != "WRAP_UP":
            raise ValueError(f"protocol {self.name}: terminal phase must be WRAP_UP")
        for phase in self.phases:
            if phase.alternatives_from and phase.alternatives_from not in ids:
                raise ValueError(f"protocol {self.name}: unknown phase {phase.alternatives_from}")
            if phase.criterion.mode == "choice" and not phase.requires_challenge:
                raise ValueError(f"protocol {self.name}: choice phase {phase.id} must be challenged")
        return self

    @property
    def terminal_index(self) -> int:
        return len(self.phases) - 1

    def index_of(self, phase_id: str) -> int:
        for idx, phase in enumerate(self.phases):
            if phase.id == phase_id:
                return idx
        raise KeyError(phase_id)

    def phase(self, index: int) -> PhaseSpec:
        return self.phases[index]


def _statement(category: str, description: str) -> ExitCriterion:
    return ExitCriterion(mode="statement", category=category, description=description)


def _items(category: str, count: int, description: str) -> ExitCriterion:
    return ExitCriterion(mode="list", category=category, min_items=count, description=description)


def _choice(description: str, reasons: int = 2) -> ExitCriterion:
    return ExitCriterion(mode="choice", category="choice", min_reasons=reasons, description=description)


def _wrap_up(prompt: str, transitions: List[str]) -> PhaseSpec:
    return PhaseSpec(
        id="WRAP_UP",
        title="Wrap-up",
        budget_seconds=60,
        prompt=prompt,
        criterion=_statement("summary", "candidate summarises or reflects"),
        transitions=transitions,
        probes=["Anything else you'd like to add?"],
        hints=["the one thing you'd want the interviewer to remember"],
        focus="your summary",
    )


_CLOSINGS = ["Thanks, that's a wrap for today.", "Great, thanks for walking me through that."]

PRODUCT_SENSE = ProtocolSpec(
    name="product-sense",
    phases=[
        PhaseSpec(
            id="INTRO",
            title="Introduction",
            budget_seconds=60,
            prompt="Take a moment with the question, and feel free to ask any clarifying questions.",
            criterion=_statement("acknowledged", "question acknowledged or clarified"),
            transitions=["Good.", "Sounds good.", "Great, that's a fair scope."],
            hints=["the scope you want to assume, like platform or market"],
            focus="the question itself",
        ),
        PhaseSpec(
            id="MISSION",
            title="Mission",
            budget_seconds=150,
            prompt="Let's start with the mission. Why should this product exist?",
            criterion=_statement("mission", "mission statement"),
            transitions=["Clear mission.", "That's a solid mission statement.", "Good, that anchors us."],
            hints=["how this ties to the company's overall mission"],
            focus="the product mission",
        ),
        PhaseSpec(
            id="ECOSYSTEM",
            title="Ecosystem",
            budget_seconds=120,
            prompt="Who are the players in this ecosystem?",
            criterion=_items("player", 4, "4-6 ecosystem players"),
            transitions=["That's a good map of the ecosystem.", "Nice coverage of the players."],
            probes=["Who else is involved?", "Any other players?"],
            hints=["who supplies, who pays, and who regulates"],
            focus="the ecosystem players",
        ),
        PhaseSpec(
            id="SEGMENTS",
            title="User segments",
            budget_seconds=180,
            prompt="How would you segment the users?",
            criterion=_items("segment", 3, "3 distinct user segments"),
            transitions=["Three solid segments.", "Good segmentation.", "Those segments are nicely distinct."],
            probes=["Any other segments worth considering?", "How else could you slice the users?"],
            hints=["how users differ in their motivation or context"],
            focus="the user segments",
        ),
        PhaseSpec(
            id="PRIORITIZE_SEGMENT",
            title="Prioritize segment",
            prompt="Which would you focus on and why?",
            criterion=_choice("chosen segment with a 2-dimension rationale"),
            transitions=["Good defense. Let's continue.", "Fair enough, that holds up.", "Convincing. Let's keep going."],
            probes=["What's driving that choice?", "What makes that segment the priority?"],
            hints=["two dimensions like reach and pain intensity"],
            focus="choosing one segment",
            requires_challenge=True,
            alternatives_from="SEGMENTS",
        ),
        PhaseSpec(
            id="PERSONA",
            title="Persona",
            budget_seconds=120,
            prompt="Tell me about this user. Give me a persona with a name, age and context.",
            criterion=_items("persona_detail", 3, "name, age and context"),
            transitions=["That persona feels real.", "Great, I can picture them."],
            probes=["What else do we know about them?"],
            hints=["a name, an age and what a typical day looks like"],
            focus="your persona",
        ),
        PhaseSpec(
            id="JOURNEY",
            title="User journey",
            budget_seconds=180,
            prompt="Walk me through their journey, step by step.",
            criterion=_items("step", 5, "5-7 journey steps"),
            transitions=["That's a thorough journey.", "Nice, that covers the journey end to end."],
            probes=["What happens next?", "And after that?"],
            hints=["what happens before, during and after the core moment"],
            focus="the user journey",
        ),
        PhaseSpec(
            id="PROBLEMS",
            title="Problems",
            budget_seconds=180,
            prompt="What problems do they hit along the way?",
            criterion=_items("problem", 3, "3 problems"),
            transitions=["Three clear problems.", "Those are real pain points."],
            probes=["Any other pain points?", "Where else does it hurt?"],
            hints=["the steps in the journey where the user gets frustrated"],
            focus="the user problems",
        ),
        PhaseSpec(
            id="PRIORITIZE_PROBLEM",
            title="Prioritize problem",
            prompt="Which problem would you solve first, and why?",
            criterion=_choice("chosen problem with frequency and severity rationale"),
            transitions=["Good defense. Let's continue.", "That reasoning holds.", "Okay, I'm convinced."],
            probes=["How often does it happen, and how painful is it?"],
            hints=["how often the problem happens and how severe it is"],
            focus="picking one problem",
            requires_challenge=True,
            alternatives_from="PROBLEMS",
        ),
        PhaseSpec(
            id="SOLUTIONS",
            title="Solutions",
            budget_seconds=180,
            prompt="How would you solve it? Give me a few different solutions.",
            criterion=_items("solution", 3, "3 solutions"),
            transitions=["Nice range of ideas.", "Three distinct solutions, good."],
            probes=["What else could work?", "Any bolder idea?"],
            hints=["a low-tech option, a platform option and a partnership option"],
            focus="the solutions",
        ),
        PhaseSpec(
            id="PRIORITIZE_SOLUTION",
            title="Prioritize solution",
            prompt="Which solution would you build first?",
            criterion=_choice("chosen solution with impact and effort rationale"),
            transitions=["Makes sense.", "Reasonable call."],
            probes=["How does it compare on impact and effort?"],
            hints=["impact on the user versus effort to build"],
            focus="picking one solution",
            requires_challenge=True,
            alternatives_from="SOLUTIONS",
        ),
        PhaseSpec(
            id="MVP",
            title="MVP",
            budget_seconds=120,
            prompt="What does the MVP look like?",
            criterion=_statement("mvp", "MVP scope"),
            transitions=["That's a tight MVP.", "Good scoping."],
            hints=["the smallest version that still tests your core assumption"],
            focus="the MVP scope",
        ),
        PhaseSpec(
            id="RISKS",
            title="Risks",
            budget_seconds=120,
            prompt="What are the biggest risks, and how would you mitigate them?",
            criterion=_items("risk", 2, "2-3 risks with mitigations"),
            transitions=["Good risk awareness.", "Sensible mitigations."],
            probes=["Any other risk?", "How would you mitigate that?"],
            hints=["adoption, technical and privacy risks"],
            focus="the risks",
        ),
        _wrap_up("To wrap up, can you summarize your approach?", _CLOSINGS),
    ],
)

CONSULTING = ProtocolSpec(
    name="consulting-case",
    phases=[
        PhaseSpec(
            id="INTRO",
            title="Introduction & prompt",
            budget_seconds=180,
            prompt="Feel free to restate the problem or ask clarifying questions before you dive in.",
            criterion=_statement("restatement", "restatement or clarifying question"),
            transitions=["Good, you've got the problem.", "Right, that's the objective."],
            hints=["the client's objective and how success is measured"],
            focus="the client's objective",
        ),
        PhaseSpec(
            id="FRAMEWORK",
            title="Clarification & framework",
            budget_seconds=480,
            prompt="How would you structure this problem?",
            criterion=_items("bucket", 3, "a framework with at least three buckets"),
            transitions=["That structure works.", "Good, that's a clean framework.", "Nice, that's MECE enough."],
            probes=["What specific metric would you look at in that bucket?", "What else belongs in the structure?"],
            hints=["the main drivers of the client's objective"],
            focus="your framework",
        ),
        PhaseSpec(
            id="QUANT_ANALYSIS",
            title="Quantitative analysis",
            budget_seconds=600,
            prompt="Let's look at the numbers. What do they tell you?",
            criterion=ExitCriterion(mode="number", category="figure", description="a computed figure"),
            transitions=["That sounds reasonable.", "The math checks out.", "Good, that's the right number."],
            probes=["Walk me through your calculation.", "What would you compute next?"],
            hints=["writing the formula down before calculating"],
            focus="the numbers",
        ),
        PhaseSpec(
            id="QUAL_ANALYSIS",
            title="Qualitative analysis",
            budget_seconds=480,
            prompt="What could be driving this, and what could the client do about it?",
            criterion=_items("idea", 3, "three structured ideas"),
            transitions=["Good range of ideas.", "That's a well-structured brainstorm."],
            probes=["Can you categorize those ideas?", "What else comes to mind?"],
            hints=["internal versus external factors"],
            focus="the brainstorm",
        ),
        PhaseSpec(
            id="RECOMMENDATION",
            title="Synthesis & recommendation",
            budget_seconds=360,
            prompt="The CEO just walked in. What's your recommendation?",
            criterion=_choice("a clear recommendation with supporting arguments"),
            transitions=["Good defense.", "Clear and well argued."],
            probes=["What are your supporting arguments?", "What are the risks and next steps?"],
            hints=["answer first, then two or three reasons"],
            focus="your recommendation",
            requires_challenge=True,
            alternatives_from="QUAL_ANALYSIS",
            alternatives=["holding off for now", "a smaller pilot first"],
        ),
        _wrap_up(
            "That's time on the case. Before I share feedback, how do you think it went?",
            _CLOSINGS,
        ),
    ],
)

ESTIMATION = ProtocolSpec(
    name="estimation",
    phases=[
        PhaseSpec(
            id="CLARIFY",
            title="Clarify",
            budget_seconds=120,
            prompt="What would you like to clarify before estimating?",
            criterion=_statement("clarification", "scope clarified"),
            transitions=["Good scoping.", "Fair assumption on scope."],
            hints=["geography, time period and units"],
            focus="the scope of the estimate",
        ),
        PhaseSpec(
            id="STRUCTURE",
            title="Structure",
            budget_seconds=180,
            prompt="What's your formula?",
            criterion=_items("factor", 2, "a formula with factors"),
            transitions=["Clean formula.", "That structure works."],
            hints=["top-down from population or bottom-up from usage"],
            focus="the formula",
        ),
        PhaseSpec(
            id="ASSUME",
            title="Assumptions",
            budget_seconds=240,
            prompt="Let's hear the numbers you'd assume for each factor.",
            criterion=ExitCriterion(mode="number", category="assumption", min_items=2, description="explicit assumptions"),
            transitions=["Reasonable assumptions.", "Those numbers seem fair."],
            hints=["a benchmark you know for each factor"],
            focus="your assumptions",
        ),
        PhaseSpec(
            id="CALCULATE",
            title="Calculate",
            budget_seconds=240,
            prompt="Run the math for me.",
            criterion=ExitCriterion(mode="number", category="figure", description="a result"),
            transitions=["Got it.", "Okay, that's your estimate."],
            hints=["rounding to keep the arithmetic simple"],
            focus="the calculation",
        ),
        PhaseSpec(
            id="SANITY_CHECK",
            title="Sanity check",
            budget_seconds=120,
            prompt="Does that number pass a sanity check?",
            criterion=_statement("validation", "result validated"),
            transitions=["Good instinct to check.", "Nice validation."],
            hints=["a known benchmark or a second method"],
            focus="validating the result",
        ),
        _wrap_up("Any final thoughts on your estimate?", _CLOSINGS),
    ],
)

BEHAVIORAL = ProtocolSpec(
    name="behavioral",
    phases=[
        PhaseSpec(
            id="SITUATION",
            title="Situation",
            budget_seconds=180,
            prompt="Set the scene for me. What was the situation?",
            criterion=_statement("situation", "context and stakes"),
            transitions=["Got the context.", "Clear setup."],
            hints=["when this was, the team, and what was at stake"],
            focus="the situation",
        ),
        PhaseSpec(
            id="TASK",
            title="Task",
            budget_seconds=120,
            prompt="What was your specific responsibility?",
            criterion=_statement("task", "personal ownership"),
            transitions=["Clear ownership.", "Got it, that was yours to own."],
            hints=["what you personally owned, versus the team"],
            focus="your role",
        ),
        PhaseSpec(
            id="ACTION",
            title="Action",
            budget_seconds=240,
            prompt="What did you actually do, step by step?",
            criterion=_items("action", 2, "specific actions"),
            transitions=["Concrete actions.", "That's specific, thanks."],
            probes=["What did you do next?", "Why that approach?"],
            hints=["the decisions you made and the alternatives you rejected"],
            focus="your actions",
        ),
        PhaseSpec(
            id="RESULT",
            title="Result",
            budget_seconds=180,
            prompt="What was the outcome, and what did you learn?",
            criterion=_statement("result", "outcome and learning"),
            transitions=["Good outcome.", "Nice result."],
            hints=["a number that shows the before and after"],
            focus="the result",
        ),
        _wrap_up("Anything you'd do differently next time?", _CLOSINGS),
    ],
)

STRATEGY = ProtocolSpec(
    name="strategy",
    phases=[
        PhaseSpec(
            id="MARKET",
            title="Market analysis",
            budget_seconds=300,
            prompt="How do you see the market?",
            criterion=_items("market_factor", 2, "size, trends or drivers"),
            transitions=["Good read of the market.", "That's a clear landscape."],
            hints=["market size, growth and key trends"],
            focus="the market",
        ),
        PhaseSpec(
            id="COMPETITION",
            title="Competitive position",
            budget_seconds=300,
            prompt="Who are we up against, and where's our edge?",
            criterion=_items("competitor", 2, "competitors and differentiation"),
            transitions=["Sharp competitive view.", "Good, that's our edge."],
            hints=["direct and indirect competitors"],
            focus="the competition",
        ),
        PhaseSpec(
            id="OPTIONS",
            title="Strategic options",
            budget_seconds=300,
            prompt="What are our strategic options?",
            criterion=_items("option", 2, "at least two options"),
            transitions=["Solid options.", "Good, a real choice to make."],
            hints=["build, buy or partner"],
            focus="the options",
        ),
        PhaseSpec(
            id="RECOMMENDATION",
            title="Recommendation",
            budget_seconds=240,
            prompt="What do you recommend and why?",
            criterion=_choice("a recommendation with criteria"),
            transitions=["Well defended.", "Convincing."],
            hints=["the decision criteria that matter most"],
            focus="your recommendation",
            requires_challenge=True,
            alternatives_from="OPTIONS",
        ),
        _wrap_up("What would change your mind?", _CLOSINGS),
    ],
)

TECHNICAL = ProtocolSpec(
    name="technical",
    phases=[
        PhaseSpec(
            id="REQUIREMENTS",
            title="Requirements",
            budget_seconds=300,
            prompt="What are the requirements, functional and non-functional?",
            criterion=_items("requirement", 3, "requirements and scale"),
            transitions=["Good scoping.", "Clear requirements."],
            hints=["scale, latency and availability"],
            focus="the requirements",
        ),
        PhaseSpec(
            id="ARCHITECTURE",
            title="Architecture",
            budget_seconds=600,
            prompt="Sketch the architecture for me.",
            criterion=_items("component", 3, "components and data flow"),
            transitions=["That design hangs together.", "Clear architecture."],
            hints=["how data flows from the client to storage"],
            focus="the architecture",
        ),
        PhaseSpec(
            id="TRADEOFFS",
            title="Tradeoffs",
            budget_seconds=300,
            prompt="Which design choice would you defend, and what does it cost?",
            criterion=_choice("a justified design choice"),
            transitions=["Well argued.", "That tradeoff makes sense."],
            hints=["cost versus performance"],
            focus="the tradeoffs",
            requires_challenge=True,
            alternatives_from="ARCHITECTURE",
            alternatives=["a simpler single-service design"],
        ),
        _wrap_up("Can you summarize the design in two sentences?", _CLOSINGS),
    ],
)

ANALYTICAL = ProtocolSpec(
    name="analytical-thinking",
    phases=[
        PhaseSpec(
            id="RATIONALE",
            title="Product rationale",
            budget_seconds=240,
            prompt="What is this product and why does it matter to the company?",
            criterion=_statement("rationale", "product context and mission"),
            transitions=["Good context.", "Clear rationale."],
            hints=["who uses it and how the company makes money"],
            focus="the product rationale",
        ),
        PhaseSpec(
            id="METRICS",
            title="Measuring impact",
            budget_seconds=480,
            prompt="How would you measure success? Give me your metrics.",
            criterion=_items("metric", 3, "metrics including a North Star"),
            transitions=["Solid metrics.", "Good, that North Star works."],
            hints=["one metric per ecosystem player"],
            focus="the success metrics",
        ),
        PhaseSpec(
            id="GOALS",
            title="Setting goals",
            budget_seconds=300,
            prompt="If you ran one team, what goals would you set?",
            criterion=_items("goal", 2, "team-level goals"),
            transitions=["Actionable goals.", "Good altitude shift."],
            hints=["goals one team can move in a quarter"],
            focus="team goals",
        ),
        PhaseSpec(
            id="TRADEOFF",
            title="Evaluating tradeoffs",
            budget_seconds=300,
            prompt="If you had to pick between your top two goals, which would it be?",
            criterion=_choice("a decisive tradeoff call"),
            transitions=["Decisive, good.", "Fair call."],
            hints=["the goal both options share"],
            focus="the tradeoff",
            requires_challenge=True,
            alternatives_from="GOALS",
        ),
        _wrap_up("What would change your mind?", _CLOSINGS),
    ],
)

GENERIC = ProtocolSpec(
    name="generic",
    phases=[
        PhaseSpec(
            id="INTRO",
            title="Introduction",
            budget_seconds=120,
            prompt="Take a moment with the question and ask anything you need.",
            criterion=_statement("acknowledged", "question acknowledged"),
            transitions=["Good."],
            focus="the question",
        ),
        PhaseSpec(
            id="FRAMING",
            title="Framing",
            budget_seconds=420,
            prompt="How would you break this down?",
            criterion=_items("bucket", 2, "a structure"),
            transitions=["That works.", "Clear structure."],
            hints=["the main drivers of the outcome"],
            focus="your structure",
        ),
        PhaseSpec(
            id="ANALYSIS",
            title="Analysis",
            budget_seconds=900,
            prompt="Walk me through your analysis.",
            criterion=_items("insight", 2, "insights"),
            transitions=["Good insight.", "Makes sense."],
            hints=["the biggest driver first"],
            focus="your analysis",
        ),
        PhaseSpec(
            id="RECOMMENDATION",
            title="Recommendation",
            budget_seconds=300,
            prompt="What's your recommendation?",
            criterion=_choice("a recommendation with reasons"),
            transitions=["Well defended.", "Clear call."],
            hints=["answer first, then your reasons"],
            focus="your recommendation",
            requires_challenge=True,
            alternatives_from="ANALYSIS",
            alternatives=["holding off for now"],
        ),
        _wrap_up("Any final thoughts?", _CLOSINGS),
    ],
)

PM_PROTOCOLS: Dict[str, ProtocolSpec] = {
    "product-sense": PRODUCT_SENSE,
    "estimation": ESTIMATION,
    "behavioral": BEHAVIORAL,
    "strategy": STRATEGY,
    "technical": TECHNICAL,
    "analytical-thinking": ANALYTICAL,
    "execution": ANALYTICAL,
}

PROTOCOLS: Dict[str, ProtocolSpec] = {
    p.name: p for p in (PRODUCT_SENSE, CONSULTING, ESTIMATION, BEHAVIORAL, STRATEGY, TECHNICAL, ANALYTICAL, GENERIC)
}


def protocol_for(question: Question) -> ProtocolSpec:
    """Pick the phase protocol for a question; unknown PM types get the generic one."""

    if question.track == "consulting":
        return CONSULTING
    return PM_PROTOCOLS.get(question.type, GENERIC)


def get_protocol(name: str) -> ProtocolSpec:
    return PROTOCOLS[name]
