"""
Interview Policy
Deterministic stop conditions and dimension ranking; never calls the model
"""

from typing import Dict, List, Sequence

from .models import (
    Dimension,
    IntentAnalysis,
    Question,
    StopDecision,
    ALL_DIMENSIONS,
)
from .task_classifier import TaskFamily


REASON_MAX_REACHED = "max reached"
REASON_CRITICAL_COVERED = "critical dimensions covered"
REASON_ONLY_OPTIONAL = "only optional dimension remains"
REASON_NO_DIMENSIONS = "no dimensions left"

DIMENSION_PRIORITY: Dict[TaskFamily, List[Dimension]] = {
    TaskFamily.CODING: [
        Dimension.INPUTS, Dimension.CONSTRAINTS, Dimension.DELIVERABLE,
        Dimension.AUDIENCE, Dimension.STYLE_TONE,
    ],
    TaskFamily.WRITING: [
        Dimension.DELIVERABLE, Dimension.AUDIENCE, Dimension.CONSTRAINTS,
        Dimension.INPUTS, Dimension.STYLE_TONE,
    ],
    TaskFamily.MARKETING: [
        Dimension.DELIVERABLE, Dimension.AUDIENCE, Dimension.CONSTRAINTS,
        Dimension.INPUTS, Dimension.STYLE_TONE,
    ],
    TaskFamily.DESIGN: [
        Dimension.DELIVERABLE, Dimension.CONSTRAINTS, Dimension.AUDIENCE,
        Dimension.INPUTS, Dimension.STYLE_TONE,
    ],
    TaskFamily.ANALYSIS: [
        Dimension.INPUTS, Dimension.DELIVERABLE, Dimension.CONSTRAINTS,
        Dimension.AUDIENCE, Dimension.STYLE_TONE,
    ],
}


def remaining_dimensions(asked_questions: Sequence[Question]) -> List[Dimension]:
    """Dimensions not yet asked, in canonical order."""
    asked = {q.dimension for q in asked_questions}
    return [dim for dim in ALL_DIMENSIONS if dim not in asked]


def should_stop_interview(
    asked: Sequence[Question],
    min_q: int,
    max_q: int,
    remaining_dims: Sequence[Dimension],
    intent: IntentAnalysis
) -> StopDecision:
    """
    Decide whether the interview can stop without asking the model.

    Rules, first match wins:
        1. at or over max_q            -> stop
        2. under min_q                 -> continue
        3. every critical dim asked    -> stop
        4. only style_tone left and deliverable + audience known -> stop
        5. nothing left                -> stop
        6. otherwise                   -> continue
    """
    count = len(asked)

    if count >= max_q:
        return StopDecision(stop=True, reason=REASON_MAX_REACHED)

    if count < min_q:
        return StopDecision(stop=False)

    if all(dim not in remaining_dims for dim in intent.missing_critical):
        return StopDecision(stop=True, reason=REASON_CRITICAL_COVERED)

    if (
        list(remaining_dims) == [Dimension.STYLE_TONE]
        and intent.known_dimensions.get(Dimension.DELIVERABLE)
        and intent.known_dimensions.get(Dimension.AUDIENCE)
    ):
        return StopDecision(stop=True, reason=REASON_ONLY_OPTIONAL)

    if not remaining_dims:
        return StopDecision(stop=True, reason=REASON_NO_DIMENSIONS)

    return StopDecision(stop=False)


def rank_dimensions(
    intent: IntentAnalysis,
    remaining_dims: Sequence[Dimension]
) -> List[Dimension]:
    """Remaining dimensions ordered by the task family's priority table."""
    priority = DIMENSION_PRIORITY.get(intent.task_family, ALL_DIMENSIONS)
    return [dim for dim in priority if dim in remaining_dims]
