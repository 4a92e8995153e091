## Request/response bodies for the generation API
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.planning.estimator import UNIT_DAYS

Difficulty = Literal["beginner", "intermediate", "advanced"]
TimeUnit = Literal["days", "weeks", "months"]
MilestoneStatus = Literal["pending", "in_progress", "done", "skipped", "hard"]


class PlanRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    topic: str = Field(min_length=2, max_length=200)
    exam: Optional[str] = Field(default=None, max_length=200)
    time_value: int = Field(gt=0, alias="timeValue")
    time_unit: TimeUnit = Field(alias="timeUnit")
    difficulty: Difficulty
    client_id: str = Field(min_length=2, max_length=100, alias="clientId")

    @field_validator("topic", "client_id", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("exam", mode="before")
    @classmethod
    def _blank_exam(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("time_unit", mode="before")
    @classmethod
    def _plural_unit(cls, v):
        # accept "week" as well as "weeks"
        if isinstance(v, str):
            v = v.strip().lower()
            if v + "s" in UNIT_DAYS:
                return v + "s"
        return v


class PlanCreated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    roadmap_id: str = Field(alias="roadmapId")


class StatusUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: MilestoneStatus
    client_id: str = Field(min_length=2, max_length=100, alias="clientId")
