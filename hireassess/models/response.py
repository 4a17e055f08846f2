"""Candidate response records.

A response is either a mutable draft or an immutable submission. The two
states are separate models joined by a discriminated union on `status`, so
callers branch on the type instead of probing a nullable `submitted_at`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from hireassess.models.question import AnswerValue


Answers = Dict[str, AnswerValue]


class _ResponseBase(BaseModel):
    id: str
    candidate_id: int
    assessment_id: str
    job_id: Optional[int] = None
    stage: Optional[str] = None
    answers: Answers = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime


class DraftResponse(_ResponseBase):
    status: Literal["draft"] = "draft"
    submitted_at: None = None


class SubmittedResponse(_ResponseBase):
    model_config = ConfigDict(frozen=True)

    status: Literal["submitted"] = "submitted"
    submitted_at: datetime


Response = Annotated[Union[DraftResponse, SubmittedResponse], Field(discriminator="status")]


__all__ = ["Answers", "DraftResponse", "Response", "SubmittedResponse"]
