"""Deduplication, ranking and summary statistics over submissions."""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict, Iterable, List, Optional

from hireassess.config import RankingConfig, load_config
from hireassess.logic.directory import JobDirectory
from hireassess.logic.errors import DataIntegrityGap
from hireassess.logic.repository_assessments import get_assessment_by_job_stage
from hireassess.logic.repository_responses import list_submitted
from hireassess.logic.scoring import score_response
from hireassess.models.assessment import Assessment, Candidate
from hireassess.models.response import SubmittedResponse
from hireassess.models.results import RankedResponse, Ranking, RankingSummary

logger = logging.getLogger(__name__)

CandidateResolver = Callable[[int], Optional[Candidate]]


def deduplicate_latest(responses: Iterable[SubmittedResponse]) -> List[SubmittedResponse]:
    """Keep each candidate's latest submission.

    Ties on `submitted_at` keep the first one seen. Output follows the order
    in which candidates were first seen.
    """
    latest: Dict[int, SubmittedResponse] = {}
    for resp in responses:
        current = latest.get(resp.candidate_id)
        if current is None or resp.submitted_at > current.submitted_at:
            latest[resp.candidate_id] = resp
    return list(latest.values())


def _resolve(resp: SubmittedResponse, resolve_candidate: CandidateResolver) -> Candidate:
    candidate = resolve_candidate(resp.candidate_id)
    if candidate is None:
        raise DataIntegrityGap(f"candidate {resp.candidate_id} of response {resp.id} does not resolve")
    if not candidate.name or not candidate.email:
        raise DataIntegrityGap(f"candidate {resp.candidate_id} lacks a name or email")
    return candidate


def deduplicate_and_rank(
    assessment: Assessment,
    responses: Iterable[SubmittedResponse],
    resolve_candidate: CandidateResolver,
) -> List[RankedResponse]:
    """Score each candidate's latest submission and order by percentage, best first.

    Candidates that cannot be resolved are logged and left out. Equal
    percentages keep their relative order.
    """
    ranked: List[RankedResponse] = []
    for resp in deduplicate_latest(responses):
        try:
            candidate = _resolve(resp, resolve_candidate)
        except DataIntegrityGap as e:
            logger.warning("ranking_candidate_skipped response_id=%s reason=%s", resp.id, e)
            continue
        ranked.append(
            RankedResponse(
                response_id=resp.id,
                candidate=candidate,
                submitted_at=resp.submitted_at,
                score=score_response(assessment, resp),
            )
        )
    ranked.sort(key=lambda r: r.score.percentage, reverse=True)
    return ranked


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def summarize(ranked: List[RankedResponse], config: Optional[RankingConfig] = None) -> RankingSummary:
    cfg = config or load_config().ranking
    count = len(ranked)
    if count == 0:
        return RankingSummary()
    percentages = [r.score.percentage for r in ranked]
    passing = sum(1 for p in percentages if p >= cfg.pass_threshold)
    return RankingSummary(
        count=count,
        excellent=sum(1 for p in percentages if p >= cfg.excellent_threshold),
        passing=passing,
        needs_review=count - passing,
        mean_percentage=_round_half_up(sum(percentages) / count),
        pass_rate=_round_half_up(passing / count * 100),
    )


def rank_job(
    job_id: int,
    directory: JobDirectory,
    stage: str,
    config: Optional[RankingConfig] = None,
) -> Ranking:
    """Rank every submission to the job's assessment for `stage`.

    A job without an assessment yields an empty ranking.
    """
    assessment = get_assessment_by_job_stage(job_id, stage)
    if assessment is None or assessment.id is None:
        return Ranking(assessment_id=None, responses=[], summary=RankingSummary())
    job_candidates = {c.id: c for c in directory.get_candidates_for_job(job_id)}

    def _lookup(candidate_id: int) -> Optional[Candidate]:
        return job_candidates.get(candidate_id) or directory.get_candidate(candidate_id)

    ranked = deduplicate_and_rank(assessment, list_submitted(assessment.id), _lookup)
    summary = summarize(ranked, config)
    logger.info(
        "job_ranked job_id=%s stage=%s ranked=%s mean=%s",
        job_id,
        stage,
        summary.count,
        summary.mean_percentage,
    )
    return Ranking(assessment_id=assessment.id, responses=ranked, summary=summary)


__all__ = ["deduplicate_and_rank", "deduplicate_latest", "rank_job", "summarize"]
