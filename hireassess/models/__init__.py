"""Domain records shared by the engine, repositories and HTTP routes."""

from hireassess.models.assessment import Assessment, Candidate, Job, Section
from hireassess.models.question import (
    Category,
    ConditionOperator,
    Conditional,
    Question,
    QuestionType,
    QuestionValidation,
)
from hireassess.models.response import DraftResponse, Response, SubmittedResponse
from hireassess.models.results import (
    QuestionGrade,
    RankedResponse,
    Ranking,
    RankingSummary,
    ScoreResult,
    ValidationIssue,
)

__all__ = [
    "Assessment",
    "Candidate",
    "Category",
    "ConditionOperator",
    "Conditional",
    "DraftResponse",
    "Job",
    "Question",
    "QuestionGrade",
    "QuestionType",
    "QuestionValidation",
    "RankedResponse",
    "Ranking",
    "RankingSummary",
    "Response",
    "ScoreResult",
    "Section",
    "SubmittedResponse",
    "ValidationIssue",
]
