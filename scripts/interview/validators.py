"""
Validators for Model Output
JSON extraction from noisy model text and structural checks on question payloads
"""

from typing import Any, List, Optional, Sequence, Tuple, Union
import json
import re

from .models import (
    Dimension,
    Question,
    DIMENSION_VALUES,
    QUESTION_TYPE_VALUES,
)

MIN_CHOICE_OPTIONS = 2
MEGA_PROMPT_MIN_CHARS = 50
MEGA_PROMPT_MAX_CHARS = 8000


# ===================
# JSON Extraction
# ===================

def _extract_balanced(text: str, opener: str, closer: str) -> Optional[str]:
    """
    Return the first balanced opener...closer region of the raw text.

    Quoted text never changes depth, so fence markers inside string values
    survive untouched.
    """
    if not text:
        return None

    start = text.find(opener)
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaping = False

    for i in range(start, len(text)):
        char = text[i]

        if escaping:
            escaping = False
            continue
        if char == '\\':
            escaping = True
            continue
        if char == '"':
            in_string = not in_string
            continue

        if in_string:
            continue
        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return text[start:i + 1]

    return None


def extract_first_json_object(text: str) -> Optional[str]:
    """
    Extract the first balanced {...} region from model output.

    Handles markdown fences, leading commentary and braces inside strings.
    Returns None when no balanced region exists.
    """
    return _extract_balanced(text, '{', '}')


def extract_first_json_array(text: str) -> Optional[str]:
    """Extract the first balanced [...] region from model output."""
    return _extract_balanced(text, '[', ']')


def safe_json_parse(text: Optional[str]) -> Any:
    """Parse JSON, returning None instead of raising on malformed input."""
    if text is None:
        return None
    try:
        return json.loads(text)
    except (ValueError, TypeError, RecursionError):
        return None


# ===================
# Structural Validation
# ===================

def _dimension_values(dimensions: Sequence[Union[Dimension, str]]) -> List[str]:
    return [d.value if isinstance(d, Dimension) else str(d) for d in dimensions]


def validate_question_object(
    candidate: Any,
    already_asked_dimensions: Sequence[Union[Dimension, str]]
) -> List[str]:
    """
    Check a raw question object against the question contract.

    Returns a list of human-readable errors; an empty list means valid.
    The error text is fed verbatim into the repair prompt.
    """
    if not isinstance(candidate, dict):
        return ['Question must be a JSON object']

    errors: List[str] = []
    asked = _dimension_values(already_asked_dimensions)

    q_id = candidate.get('id')
    if not q_id or not isinstance(q_id, str):
        errors.append('Question must have a valid id (string)')

    text = candidate.get('question')
    if not text or not isinstance(text, str):
        errors.append('Question must have a valid question text (string)')

    dimension = candidate.get('dimension')
    if not dimension or not isinstance(dimension, str):
        errors.append('Question must have a valid dimension (string)')
    elif dimension not in DIMENSION_VALUES:
        errors.append(
            f'Invalid dimension "{dimension}". Must be one of: {", ".join(DIMENSION_VALUES)}'
        )
    elif dimension in asked:
        errors.append(f'Dimension "{dimension}" has already been asked')

    q_type = candidate.get('type')
    if q_type not in QUESTION_TYPE_VALUES:
        errors.append('Question type must be: text, radio, checkbox, or scale')

    options = candidate.get('options')
    if q_type in ('radio', 'checkbox'):
        if not isinstance(options, list) or len(options) < MIN_CHOICE_OPTIONS:
            errors.append(
                f'Question type "{q_type}" must have options array with at least {MIN_CHOICE_OPTIONS} items'
            )
        elif not all(isinstance(o, str) and o.strip() for o in options):
            errors.append(f'Question type "{q_type}" options must be non-empty strings')
    elif q_type in ('text', 'scale') and options is not None:
        errors.append(f'Question type "{q_type}" should not have options')

    required = candidate.get('required')
    if required is not None and not isinstance(required, bool):
        errors.append('Question "required" must be a boolean when present')

    return errors


def validate_next_question_response(
    candidate: Any,
    asked_questions: Sequence[Question],
    min_q: int,
    max_q: int
) -> List[str]:
    """
    Validate the adaptive next-question payload.

    Expected forms:
        {"done": false, "question": {...}}
        {"done": true, "reason": "..."}

    Stopping below min_q is reported as an error so the repair turn can ask
    the model for a question instead.
    """
    if not isinstance(candidate, dict):
        return ['Response must be a JSON object']

    errors: List[str] = []
    done = candidate.get('done')

    if not isinstance(done, bool):
        errors.append('Response must have a "done" field (boolean)')
        return errors

    if done is False:
        question = candidate.get('question')
        if not isinstance(question, dict):
            errors.append('When done=false, response must include a "question" object')
            return errors

        if len(asked_questions) >= max_q:
            errors.append(f'Cannot ask another question: already at the maximum of {max_q}')

        asked_dims = [q.dimension for q in asked_questions]
        errors.extend(validate_question_object(question, asked_dims))
    else:
        reason = candidate.get('reason')
        if not reason or not isinstance(reason, str):
            errors.append('When done=true, response should include a "reason" string')

        if len(asked_questions) < min_q:
            errors.append(
                f'Cannot stop with only {len(asked_questions)} questions (min is {min_q})'
            )

    return errors


def validate_mega_prompt_text(text: str) -> Tuple[bool, List[str]]:
    """Basic quality checks on compiled output. Returns (ok, issues)."""
    issues: List[str] = []

    if len(text) < MEGA_PROMPT_MIN_CHARS:
        issues.append(f'Mega-prompt is too short (less than {MEGA_PROMPT_MIN_CHARS} characters)')

    if len(text) > MEGA_PROMPT_MAX_CHARS:
        issues.append(f'Mega-prompt is too long (over {MEGA_PROMPT_MAX_CHARS} characters)')

    has_context = re.search(r'context:', text, re.IGNORECASE) is not None
    has_objective = re.search(r'objective:', text, re.IGNORECASE) is not None
    if not has_context and not has_objective:
        issues.append('Mega-prompt missing CO-STAR structure (no Context or Objective found)')

    if text.count('...') > 3:
        issues.append('Mega-prompt contains too many placeholders (...)')

    return len(issues) == 0, issues
