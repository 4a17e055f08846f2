"""Job and candidate lookups owned by the surrounding application.

The engine never writes jobs or candidates; it only resolves them through a
`JobDirectory`. `InMemoryDirectory` is enough for tests and for embedding
applications that already hold their records in memory.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Protocol

from hireassess.models.assessment import Candidate, Job


class JobDirectory(Protocol):
    def get_job(self, job_id: int) -> Optional[Job]: ...

    def get_candidate(self, candidate_id: int) -> Optional[Candidate]: ...

    def get_candidates_for_job(self, job_id: int) -> List[Candidate]: ...

    def list_jobs(self) -> List[Job]: ...


class InMemoryDirectory:
    def __init__(self, jobs: Iterable[Job] = (), candidates: Iterable[Candidate] = ()) -> None:
        self._jobs: Dict[int, Job] = {j.id: j for j in jobs}
        self._candidates: Dict[int, Candidate] = {c.id: c for c in candidates}

    def add_job(self, job: Job) -> None:
        self._jobs[job.id] = job

    def add_candidate(self, candidate: Candidate) -> None:
        self._candidates[candidate.id] = candidate

    def remove_candidate(self, candidate_id: int) -> None:
        self._candidates.pop(candidate_id, None)

    def get_job(self, job_id: int) -> Optional[Job]:
        return self._jobs.get(job_id)

    def get_candidate(self, candidate_id: int) -> Optional[Candidate]:
        return self._candidates.get(candidate_id)

    def get_candidates_for_job(self, job_id: int) -> List[Candidate]:
        return [c for c in self._candidates.values() if c.job_id == job_id]

    def list_jobs(self) -> List[Job]:
        return list(self._jobs.values())


__all__ = ["InMemoryDirectory", "JobDirectory"]
