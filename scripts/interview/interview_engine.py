"""
Interview Engine for Prompt Architect
Adaptive one-question-per-turn flow with a structural stop gate and a single repair retry
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from providers.base import CompletionProvider, CompletionResult, CompletionStatus

from .errors import MalformedOutputError, ProviderUnavailableError, TransportError
from .injection import InjectionMatchMode
from .intent import infer_intent
from .models import (
    Answer,
    Dimension,
    NextTurnResult,
    Question,
    QuestionType,
    InterviewSession,
    SessionState,
    CHOICE_TYPES,
)
from .policy import rank_dimensions, remaining_dimensions, should_stop_interview
from .prompts import (
    build_next_question_system_prompt,
    build_next_question_user_prompt,
    build_repair_system_prompt,
)
from .task_classifier import get_few_shot_example
from .validators import (
    extract_first_json_object,
    safe_json_parse,
    validate_next_question_response,
)

logger = logging.getLogger(__name__)

# One initial call plus exactly one repair
MAX_ATTEMPTS = 2


@dataclass
class InterviewConfig:
    """Engine-side knobs for questioning and compilation."""
    min_questions: int = 3
    max_questions: int = 5
    question_temperature: float = 0.7
    question_max_tokens: int = 1024
    compile_temperature: float = 0.7
    compile_max_tokens: int = 2048
    run_critic: bool = True
    injection_match_mode: InjectionMatchMode = InjectionMatchMode.WORD


def raise_for_provider_failure(result: CompletionResult):
    """Turn a non-ok completion into the matching typed error."""
    if result.ok:
        return
    detail = result.error or result.status.value
    if result.status == CompletionStatus.PROVIDER_UNAVAILABLE:
        raise ProviderUnavailableError(detail, result.provider)
    raise TransportError(detail, result.provider)


def _parse_and_validate(
    raw: str,
    asked_questions: Sequence[Question],
    min_q: int,
    max_q: int
) -> Tuple[Optional[dict], List[str]]:
    json_text = extract_first_json_object(raw)
    if json_text is None:
        return None, ['Response did not contain a JSON object']

    candidate = safe_json_parse(json_text)
    if candidate is None:
        return None, ['Response JSON could not be parsed']

    errors = validate_next_question_response(candidate, asked_questions, min_q, max_q)
    return (candidate if not errors else None), errors


def normalize_question(raw: dict, asked_questions: Sequence[Question]) -> Question:
    """Build a Question from a validated payload, filling defaults."""
    taken_ids = {q.id for q in asked_questions}
    q_id = raw.get('id')
    if not q_id or q_id in taken_ids:
        q_id = f"q{len(asked_questions) + 1}"
        while q_id in taken_ids:
            q_id = f"{q_id}_"

    q_type = QuestionType(raw.get('type', 'text'))
    options: List[Any] = raw.get('options') or []
    if q_type not in CHOICE_TYPES:
        options = []

    required = raw.get('required')
    return Question(
        id=q_id,
        dimension=Dimension(raw['dimension']),
        question=raw['question'].strip(),
        type=q_type,
        options=tuple(str(o).strip() for o in options),
        required=True if required is None else required,
    )


class InterviewEngine:
    """
    Decides the next question or the end of the interview.

    Stateless between calls: every call receives the topic and the full
    question/answer history. The only blocking point is the provider call.
    """

    def __init__(self, provider: CompletionProvider, config: Optional[InterviewConfig] = None):
        self.provider = provider
        self.config = config or InterviewConfig()

    def _call_model(self, system_prompt: str, user_prompt: str) -> str:
        messages = [
            {'role': 'system', 'content': system_prompt},
            {'role': 'user', 'content': user_prompt},
        ]
        logger.debug("Next-question prompt: system=%d chars, user=%d chars",
                     len(system_prompt), len(user_prompt))

        result = self.provider.complete(
            messages,
            temperature=self.config.question_temperature,
            max_tokens=self.config.question_max_tokens
        )
        raise_for_provider_failure(result)

        logger.debug("Model output length: %d chars", len(result.text))
        return result.text

    def next_turn(
        self,
        topic: str,
        asked_questions: Sequence[Question],
        answers: Sequence[Answer],
        min_q: Optional[int] = None,
        max_q: Optional[int] = None
    ) -> NextTurnResult:
        """
        Return the next question, or done with a reason.

        Raises:
            ProviderUnavailableError / TransportError: no provider produced text
            MalformedOutputError: output still invalid after one repair
        """
        min_q = self.config.min_questions if min_q is None else min_q
        max_q = self.config.max_questions if max_q is None else max_q

        intent = infer_intent(topic, asked_questions, answers)
        remaining = remaining_dimensions(asked_questions)

        decision = should_stop_interview(asked_questions, min_q, max_q, remaining, intent)
        if decision.stop:
            logger.info("Interview stopped at %d questions: %s", len(asked_questions), decision.reason)
            return NextTurnResult(done=True, reason=decision.reason)

        system_prompt = build_next_question_system_prompt(
            get_few_shot_example(intent.task_family),
            intent.task_family.value,
            intent.deliverable_hint.kind.value
        )
        user_prompt = build_next_question_user_prompt(
            topic, asked_questions, answers, remaining, intent, min_q, max_q,
            ranked_dims=rank_dimensions(intent, remaining)
        )

        raw = self._call_model(system_prompt, user_prompt)
        payload, errors = _parse_and_validate(raw, asked_questions, min_q, max_q)

        if errors:
            logger.warning("Invalid next-question output, attempting repair: %s", "; ".join(errors))
            repair_prompt = build_repair_system_prompt(system_prompt, errors)
            raw = self._call_model(repair_prompt, user_prompt)
            payload, errors = _parse_and_validate(raw, asked_questions, min_q, max_q)

            if errors:
                raise MalformedOutputError(errors, attempts=MAX_ATTEMPTS)

        if payload['done']:
            return NextTurnResult(done=True, reason=payload['reason'], model_called=True)

        question = normalize_question(payload['question'], asked_questions)
        return NextTurnResult(done=False, question=question, model_called=True)

    def run_turn(self, session: InterviewSession) -> NextTurnResult:
        """
        next_turn() over a caller-owned session, tracking its state.

        Accepted questions are appended to the session. Terminal errors mark
        the session failed and are re-raised.
        """
        session.state = SessionState.AWAITING_MODEL
        try:
            result = self.next_turn(
                session.topic,
                session.questions,
                session.answers,
                session.min_questions,
                session.max_questions
            )
        except (ProviderUnavailableError, TransportError, MalformedOutputError):
            session.record_failure()
            raise

        session.record_success()
        if result.done:
            session.state = SessionState.COMPILING
        else:
            session.add_question(result.question)
            session.state = SessionState.COLLECTING
        return result
