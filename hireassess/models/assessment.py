"""Assessment, section and collaborator records."""

from __future__ import annotations

from datetime import datetime
from typing import Iterator, List, Optional

from pydantic import BaseModel, Field

from hireassess.models.question import Question


class Section(BaseModel):
    id: int
    title: str
    questions: List[Question] = Field(default_factory=list)


class Assessment(BaseModel):
    id: Optional[str] = None
    job_id: int
    stage: str
    title: str
    sections: List[Section] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    def iter_questions(self) -> Iterator[Question]:
        for section in self.sections:
            yield from section.questions


class Job(BaseModel):
    id: int
    title: str


class Candidate(BaseModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    stage: str = "applied"
    job_id: Optional[int] = None


__all__ = ["Assessment", "Candidate", "Job", "Section"]
