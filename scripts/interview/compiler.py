"""
Mega-Prompt Compiler
matching -> drafting -> (optional) critiquing -> done
"""

import logging
from typing import List, Optional, Sequence, Tuple

from providers.base import CompletionProvider

from .errors import MalformedOutputError, ProviderError
from .injection import (
    InjectionMatchMode,
    InjectionRule,
    trigger_matches,
    compile_injections,
    get_matching_rules,
)
from .interview_engine import InterviewConfig, raise_for_provider_failure
from .models import Answer, Dimension, Question
from .prompts import (
    CRITIC_SYSTEM,
    MEGA_PROMPT_SYSTEM,
    build_critic_user_prompt,
    build_mega_prompt_user_prompt,
)
from .validators import validate_mega_prompt_text

logger = logging.getLogger(__name__)

VAGUE_ANSWER_MIN_CHARS = 10
VAGUE_ANSWERS = {'not sure', 'maybe', 'idk', 'n/a', "don't know", 'no idea', 'whatever'}
VAGUE_THRESHOLD = 2

# Pairs of terms that contradict each other inside constraint answers
CONFLICTING_TERMS: List[Tuple[str, str]] = [
    ('formal', 'casual'),
    ('short', 'long'),
    ('technical', 'simple'),
]

REASON_VAGUE = "Multiple vague answers detected"
REASON_MISSING = "Missing required information"
REASON_CONFLICT = "Potential conflicting constraints"


def _is_vague(answer: Answer) -> bool:
    if not isinstance(answer.value, str):
        return False
    normalized = answer.value.lower().strip()
    return len(normalized) < VAGUE_ANSWER_MIN_CHARS or normalized in VAGUE_ANSWERS


def should_run_critic(
    questions: Sequence[Question],
    answers: Sequence[Answer]
) -> Tuple[bool, Optional[str]]:
    """
    Heuristic review flag over the finished interview.

    Returns (needs_critic, reason).
    """
    if sum(1 for a in answers if _is_vague(a)) >= VAGUE_THRESHOLD:
        return True, REASON_VAGUE

    answered_ids = {a.question_id for a in answers}
    if any(q.required and q.id not in answered_ids for q in questions):
        return True, REASON_MISSING

    constraint_ids = {q.id for q in questions if q.dimension == Dimension.CONSTRAINTS}
    constraint_answers = [a for a in answers if a.question_id in constraint_ids]
    if constraint_answers:
        text = ' '.join(' '.join(a.text_values()) for a in constraint_answers).lower()
        for left, right in CONFLICTING_TERMS:
            if (trigger_matches(left, text, InjectionMatchMode.WORD)
                    and trigger_matches(right, text, InjectionMatchMode.WORD)):
                return True, REASON_CONFLICT

    return False, None


class MegaPromptCompiler:
    """Turns a (possibly partial) interview into a CO-STAR mega-prompt."""

    def __init__(
        self,
        provider: CompletionProvider,
        config: Optional[InterviewConfig] = None,
        custom_rules: Optional[Sequence[InjectionRule]] = None
    ):
        self.provider = provider
        self.config = config or InterviewConfig()
        self.custom_rules = list(custom_rules or [])

    def _complete(self, system_prompt: str, user_prompt: str) -> str:
        result = self.provider.complete(
            [
                {'role': 'system', 'content': system_prompt},
                {'role': 'user', 'content': user_prompt},
            ],
            temperature=self.config.compile_temperature,
            max_tokens=self.config.compile_max_tokens
        )
        raise_for_provider_failure(result)
        return result.text.strip()

    def matching_rules(self, answers: Sequence[Answer]) -> List[InjectionRule]:
        return get_matching_rules(answers, self.custom_rules, self.config.injection_match_mode)

    def compile(
        self,
        topic: str,
        questions: Sequence[Question],
        answers: Sequence[Answer]
    ) -> str:
        """
        Compile the interview into mega-prompt text.

        Works with any subset of questions/answers, including none.

        Raises:
            ProviderUnavailableError / TransportError: drafting call failed
            MalformedOutputError: drafting returned empty text
        """
        rules = self.matching_rules(answers)
        if rules:
            logger.info("Injecting %d context block(s): %s",
                        len(rules), ", ".join(r.trigger for r in rules))
        injection_blocks = compile_injections(rules)

        user_prompt = build_mega_prompt_user_prompt(topic, questions, answers, injection_blocks)
        logger.debug("Compilation prompt: %d chars", len(user_prompt))

        draft = self._complete(MEGA_PROMPT_SYSTEM, user_prompt)
        if not draft:
            raise MalformedOutputError(['Compilation returned empty text'], attempts=1, stage='compilation')

        ok, issues = validate_mega_prompt_text(draft)
        if not ok:
            logger.warning("Mega-prompt quality issues: %s", "; ".join(issues))

        if not self.config.run_critic:
            return draft

        needs_critic, reason = should_run_critic(questions, answers)
        if not needs_critic:
            return draft

        logger.info("Running critic pass: %s", reason)
        return self._critique(draft, reason)

    def _critique(self, draft: str, reason: str) -> str:
        try:
            revised = self._complete(CRITIC_SYSTEM, build_critic_user_prompt(draft, reason))
        except ProviderError as e:
            logger.warning("Critic pass failed, keeping draft: %s", e)
            return draft

        if not revised:
            logger.warning("Critic pass returned empty text, keeping draft")
            return draft
        return revised


def compile_mega_prompt(
    provider: CompletionProvider,
    topic: str,
    questions: Sequence[Question],
    answers: Sequence[Answer],
    custom_rules: Optional[Sequence[InjectionRule]] = None,
    config: Optional[InterviewConfig] = None
) -> str:
    """One-shot compile without keeping a compiler around."""
    return MegaPromptCompiler(provider, config, custom_rules).compile(topic, questions, answers)
