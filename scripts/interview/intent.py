"""
Intent Inference for Prompt Architect

Combines topic classification with the interview so far to work out:
- what kind of task this is (writing, coding, marketing, ...)
- what deliverable the user most likely wants
- which dimensions are already known
- which missing dimensions are critical for this task family
"""

from typing import Dict, List, Sequence

from .models import (
    Answer,
    DeliverableHint,
    Dimension,
    IntentAnalysis,
    Question,
    ALL_DIMENSIONS,
)
from .task_classifier import (
    DeliverableType,
    TaskFamily,
    classify_task_family,
    guess_deliverable,
)

BASE_CONFIDENCE = 0.5
KEYWORD_CONFIDENCE = 0.7
ANSWERED_CONFIDENCE = 0.9

# Dimensions that must be covered before the interview can stop early
CRITICAL_DIMENSIONS: Dict[TaskFamily, List[Dimension]] = {
    TaskFamily.CODING: [Dimension.INPUTS, Dimension.CONSTRAINTS, Dimension.DELIVERABLE],
    TaskFamily.WRITING: [Dimension.DELIVERABLE, Dimension.AUDIENCE, Dimension.CONSTRAINTS],
    TaskFamily.MARKETING: [Dimension.DELIVERABLE, Dimension.AUDIENCE, Dimension.CONSTRAINTS],
    TaskFamily.DESIGN: [Dimension.DELIVERABLE, Dimension.CONSTRAINTS, Dimension.AUDIENCE],
    TaskFamily.ANALYSIS: [Dimension.INPUTS, Dimension.DELIVERABLE, Dimension.CONSTRAINTS],
}


def _deliverable_answered(asked_questions: Sequence[Question], answers: Sequence[Answer]) -> bool:
    deliverable_ids = {q.id for q in asked_questions if q.dimension == Dimension.DELIVERABLE}
    return any(a.question_id in deliverable_ids for a in answers)


def infer_intent(
    topic: str,
    asked_questions: Sequence[Question],
    answers: Sequence[Answer]
) -> IntentAnalysis:
    """Recompute the intent snapshot from the topic and the Q&A history."""
    task_family = classify_task_family(topic)
    deliverable_type = guess_deliverable(topic)

    known_dimensions = {dim: False for dim in ALL_DIMENSIONS}
    for question in asked_questions:
        known_dimensions[question.dimension] = True

    missing_critical = [
        dim for dim in CRITICAL_DIMENSIONS[task_family]
        if not known_dimensions[dim]
    ]

    # Informational only; passed to the model as a hint
    confidence = BASE_CONFIDENCE
    if deliverable_type != DeliverableType.OTHER:
        confidence = KEYWORD_CONFIDENCE
    if known_dimensions[Dimension.DELIVERABLE] and _deliverable_answered(asked_questions, answers):
        confidence = ANSWERED_CONFIDENCE

    return IntentAnalysis(
        task_family=task_family,
        deliverable_hint=DeliverableHint(kind=deliverable_type, confidence=confidence),
        known_dimensions=known_dimensions,
        missing_critical=missing_critical,
    )
