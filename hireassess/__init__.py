"""Hiring assessment engine.

Generates role-specific assessments from a question bank, tracks candidate
drafts and submissions, and scores and ranks the results. Business logic
lives in `hireassess/logic/`, HTTP route handlers in `hireassess/routes/`.
"""

from __future__ import annotations

from hireassess.main import create_app

__all__ = ["create_app"]
