## Pydantic Schemas for Structured Output
## Strict types: the model's JSON is rejected rather than coerced ("10" or true for hours)
from pydantic import BaseModel, Field, StrictFloat, StrictStr
from typing import List

class MilestoneQueries(BaseModel):
    youtube: List[StrictStr] = Field(default_factory=list)
    github: List[StrictStr] = Field(default_factory=list)
    books: List[StrictStr] = Field(default_factory=list)
    wikipedia: List[StrictStr] = Field(default_factory=list)
    stackexchange: List[StrictStr] = Field(default_factory=list)

class MilestoneDraft(BaseModel):
    title: StrictStr
    description: StrictStr = ""
    est_hours: StrictFloat = Field(ge=1, le=40)
    queries: MilestoneQueries

class PlanDraft(BaseModel):
    milestones: List[MilestoneDraft] = Field(min_length=3, max_length=7)
