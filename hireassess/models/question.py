"""Question records and their type/category vocabularies.

Question types and categories are plain string constants rather than Enums so
stored payloads stay readable and compare directly with incoming JSON.
"""

from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class QuestionType:
    SINGLE_CHOICE = "single-choice"
    MULTI_CHOICE = "multi-choice"
    SHORT_TEXT = "short-text"
    LONG_TEXT = "long-text"
    NUMERIC = "numeric"
    FILE_UPLOAD = "file-upload"

    CHOICE_TYPES = frozenset({SINGLE_CHOICE, MULTI_CHOICE})
    ALL = frozenset({SINGLE_CHOICE, MULTI_CHOICE, SHORT_TEXT, LONG_TEXT, NUMERIC, FILE_UPLOAD})


class Category:
    APTITUDE = "aptitude"
    TECHNICAL = "technical"
    MANAGEMENT = "management"

    ALL = (APTITUDE, TECHNICAL, MANAGEMENT)


class ConditionOperator:
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"


AnswerValue = Union[str, List[str], int, float]


class QuestionValidation(BaseModel):
    """Type-specific constraint bag; only the keys relevant to a type are set."""

    model_config = ConfigDict(populate_by_name=True)

    max_length: Optional[int] = Field(default=None, validation_alias=AliasChoices("max_length", "maxLength"))
    min: Optional[float] = None
    max: Optional[float] = None
    allowed_types: Optional[List[str]] = Field(
        default=None, validation_alias=AliasChoices("allowed_types", "allowedTypes")
    )


class Conditional(BaseModel):
    """Show the owning question only when another answer satisfies `operator`."""

    model_config = ConfigDict(populate_by_name=True)

    depends_on_question_id: str = Field(
        validation_alias=AliasChoices("depends_on_question_id", "dependsOnQuestionId", "dependsOn")
    )
    # Free-form so unknown operators round-trip and evaluate as "visible"
    operator: str = Field(
        default=ConditionOperator.EQUALS, validation_alias=AliasChoices("operator", "condition")
    )
    value: Any = None


class Question(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: str = QuestionType.SINGLE_CHOICE
    category: str = Category.TECHNICAL
    tags: List[str] = Field(default_factory=list)
    difficulty: Optional[str] = None
    question: str = Field(default="", validation_alias=AliasChoices("question", "questionText", "question_text"))
    options: Optional[List[str]] = None
    correct_answer: Optional[Union[str, List[str]]] = Field(
        default=None, validation_alias=AliasChoices("correct_answer", "correctAnswer")
    )
    required: bool = False
    validation: QuestionValidation = Field(default_factory=QuestionValidation)
    conditional: Optional[Conditional] = None

    @property
    def is_choice(self) -> bool:
        return self.type in QuestionType.CHOICE_TYPES


__all__ = [
    "AnswerValue",
    "Category",
    "ConditionOperator",
    "Conditional",
    "Question",
    "QuestionType",
    "QuestionValidation",
]
