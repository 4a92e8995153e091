# app/agents/planner.py
import json
import logging

from pydantic import ValidationError as PydanticValidationError

from app.agents.schemas import PlanDraft
from app.agents.llm.base import LLMClient
from app.agents.llm.client import get_llm_client
from app.planning.errors import SchemaError

logger = logging.getLogger(__name__)


SYSTEM_PLANNER = """You are a study planner.

You must return ONLY valid JSON (no markdown, no code fences, no commentary).
The JSON must match the given schema exactly.
"""

DEFAULT_GOAL = "general proficiency"


def build_planner_prompt(topic: str, goal: str | None, hour_budget: float, difficulty: str) -> str:
    target_hours = max(6, round(hour_budget))
    return f"""
Return ONLY JSON in this exact shape:
{{
  "milestones": [
    {{
      "title": "string",
      "description": "string",
      "est_hours": number(1-40),
      "queries": {{
        "youtube": ["search term", ...],
        "github": ["search term", ...],
        "books": ["search term", ...],
        "wikipedia": ["page term", ...],
        "stackexchange": ["search term", ...]
      }}
    }}
  ]
}}

Constraints:
- 3 to 7 milestones
- Make queries specific to each milestone
- Topic: "{topic}"
- Goal/Exam: "{goal or DEFAULT_GOAL}"
- Target total study hours (approx): {target_hours} hours
- Learner level: {difficulty}
- No extra text, no markdown, only JSON.
""".strip()


def parse_plan(raw_text: str) -> PlanDraft:
    """Parse and validate the model output. Mismatches are rejected, never repaired."""
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise SchemaError(f"AI response is not valid JSON: {e}") from e

    try:
        return PlanDraft.model_validate(data)
    except PydanticValidationError as e:
        raise SchemaError(f"AI JSON did not match schema: {e}") from e


def request_plan(
    topic: str,
    goal: str | None,
    hour_budget: int,
    difficulty: str,
    llm: LLMClient | None = None,
) -> PlanDraft:
    llm = llm or get_llm_client()

    user_prompt = build_planner_prompt(topic, goal, hour_budget, difficulty)
    raw_text = llm.generate_json(system=SYSTEM_PLANNER, user=user_prompt, temperature=0.2)

    plan = parse_plan(raw_text)
    logger.info("Planner returned %d milestones for topic=%r", len(plan.milestones), topic)
    return plan
