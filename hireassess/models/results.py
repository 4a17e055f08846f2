"""Pydantic models for scoring, validation and ranking outputs."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel

from hireassess.models.assessment import Candidate


class ValidationIssue(BaseModel):
    question_id: str
    code: str
    message: str


class ScoreResult(BaseModel):
    correct: int = 0
    wrong: int = 0
    total: int = 0
    percentage: int = 0


class QuestionGrade(BaseModel):
    question_id: str
    outcome: Literal["correct", "wrong", "not_graded"]
    # Resolved option texts of the answer key; empty when not graded
    expected: List[str] = []


class RankedResponse(BaseModel):
    response_id: str
    candidate: Candidate
    submitted_at: datetime
    score: ScoreResult


class RankingSummary(BaseModel):
    count: int = 0
    excellent: int = 0
    passing: int = 0
    needs_review: int = 0
    mean_percentage: int = 0
    pass_rate: int = 0


class Ranking(BaseModel):
    assessment_id: Optional[str] = None
    responses: List[RankedResponse]
    summary: RankingSummary


__all__ = [
    "QuestionGrade",
    "RankedResponse",
    "Ranking",
    "RankingSummary",
    "ScoreResult",
    "ValidationIssue",
]
