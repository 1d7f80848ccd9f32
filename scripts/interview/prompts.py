"""
Prompt Library for Prompt Architect

All model-facing text in one place:
- Adaptive next-question prompts (one question per turn, or done)
- Repair wrapper for the single retry after invalid output
- CO-STAR mega-prompt compilation prompts
- Critic prompts for the optional clarity pass
"""

import json
from typing import List, Sequence

from .models import Answer, Dimension, IntentAnalysis, Question


# ===================
# Next Question
# ===================

def build_next_question_system_prompt(
    few_shot_example: str,
    task_family: str,
    deliverable_type: str
) -> str:
    """System prompt for the adaptive interviewer."""
    return f"""You are an adaptive Socratic interviewer specialized in {task_family} tasks.

<role>
Ask the single best NEXT clarification question, or decide the interview is done.
You are an interviewer, not a solution provider. Adapt to what was already asked and answered.
</role>

<context>
Task Family: {task_family}
Expected Deliverable Type: {deliverable_type}
</context>

<rules>
- Ask EXACTLY ONE question, or return done=true.
- Choose a dimension ONLY from the RemainingDimensions list provided.
- Never repeat a dimension that was already asked.
- Never invent or assume facts the user has not given.
- Do not change the user's goal and do not propose solutions.
- Prefer the question with the highest information gain: what would most change the final output?
- Be specific; never ask "tell me more".
- Output MUST be valid JSON only (no markdown, no commentary).
</rules>

<output_schema>
A) Ask next question:
{{
  "done": false,
  "question": {{
    "id": "qN",
    "dimension": "deliverable|audience|inputs|constraints|style_tone",
    "question": "...",
    "type": "radio|checkbox|text|scale",
    "options": ["..."],
    "required": true
  }}
}}

B) Interview complete:
{{
  "done": true,
  "reason": "Why the information gathered is sufficient"
}}
</output_schema>

<constraints>
- radio/checkbox must include an options array with at least 2 items
- text/scale must not include options
- scale questions define their endpoints in the question text (e.g. "1=formal, 10=casual")
</constraints>

{few_shot_example}

<self_check>
Before answering verify the JSON is valid, the dimension is in RemainingDimensions,
and the question object has every required field. Output only the corrected JSON.
</self_check>"""


def _format_asked(asked_questions: Sequence[Question]) -> str:
    if not asked_questions:
        return "None yet"
    return "\n".join(
        f"{i}. [{q.dimension.value}] {q.question}"
        for i, q in enumerate(asked_questions, 1)
    )


def format_qa_pairs(questions: Sequence[Question], answers: Sequence[Answer]) -> str:
    """Render answered questions as Q:/A: pairs, skipping orphan answers."""
    by_id = {q.id: q for q in questions}
    pairs = []
    for answer in answers:
        question = by_id.get(answer.question_id)
        if question is None:
            continue
        pairs.append(f"Q: {question.question}\nA: {answer.display_value()}")
    return "\n\n".join(pairs)


def _dims_json(dims: Sequence[Dimension]) -> str:
    return json.dumps([d.value for d in dims])


def build_next_question_user_prompt(
    topic: str,
    asked_questions: Sequence[Question],
    answers: Sequence[Answer],
    remaining_dims: Sequence[Dimension],
    intent: IntentAnalysis,
    min_q: int,
    max_q: int,
    ranked_dims: Sequence[Dimension] = ()
) -> str:
    """User prompt carrying the full interview state and intent hints."""
    qa_history = format_qa_pairs(asked_questions, answers) or "No answers yet"
    count = len(asked_questions)
    hint = intent.deliverable_hint

    priority = ""
    if ranked_dims:
        priority = f"\nSuggested priority order: {_dims_json(ranked_dims)}"

    return f"""<topic>
{topic}
</topic>

<interview_state>
Already asked questions ({count}/{max_q}):
{_format_asked(asked_questions)}

Answers so far:
{qa_history}
</interview_state>

<interview_bounds>
- MinQuestions: {min_q}
- MaxQuestions: {max_q}
- Currently at: {count} questions
</interview_bounds>

<remaining_dimensions>
You MUST pick from these dimensions only:
{_dims_json(remaining_dims)}{priority}
</remaining_dimensions>

<intent_hints>
Task Family: {intent.task_family.value}
Expected Deliverable: {hint.kind.value} (confidence {hint.confidence:.1f})
Critical Missing Dimensions: {_dims_json(intent.missing_critical)}
</intent_hints>

<task>
Either return the single best next question (Form A), or return done=true (Form B)
if there is already enough to produce a high-quality result.
Cover the critical missing dimensions first.
</task>"""


def build_repair_system_prompt(original_system_prompt: str, errors: Sequence[str]) -> str:
    """Original system prompt plus a <repair> block naming every violation."""
    listed = "\n".join(f"- {e}" for e in errors)
    return f"""{original_system_prompt}

<repair>
Your previous output was rejected for these reasons:
{listed}
Fix every problem and return valid JSON only.
</repair>"""


# ===================
# Mega-Prompt Compilation
# ===================

MEGA_PROMPT_SYSTEM = """You are a master prompt engineer. Compile interview decisions into a detailed CO-STAR mega-prompt that is ready to paste into any chat assistant.

<rules>
- Work from the decision summary; do not reproduce the interview as a transcript.
- Keep every concrete fact, example and constraint the user gave.
- Be specific; avoid vague phrases such as "as needed" or "appropriate".
- Fold the auto-injected context blocks into the relevant sections.
- If answers conflict or essential information is missing, add 2-5 Open Questions at the end.
- Complete every section; never stop mid-sentence.
- Output clean markdown only.
</rules>

<format>
### CO-STAR Mega-Prompt: {title}

**Context:**
[Background, situation and domain details.]

**Objective:**
[The precise goal, scope and success criteria.]

**Style:**
[Structure, formatting, length and depth.]

**Tone:**
[Voice and attitude.]

**Audience:**
[Who consumes the output and what they need from it.]

**Response Requirements:**
[A bulleted list of concrete requirements covering format, content, quality and delivery.]

**Open Questions (if needed):**
[Ambiguities the assistant should resolve before proceeding, or "None".]
</format>"""


def build_mega_prompt_user_prompt(
    topic: str,
    questions: Sequence[Question],
    answers: Sequence[Answer],
    injection_blocks: str
) -> str:
    """User prompt with the decision summary and injected context."""
    decisions = format_qa_pairs(questions, answers) or "No answers were collected."
    injected = injection_blocks.strip() or "None"

    unanswered: List[str] = [
        q.question for q in questions
        if not any(a.question_id == q.id for a in answers)
    ]
    unanswered_section = ""
    if unanswered:
        listed = "\n".join(f"- {text}" for text in unanswered)
        unanswered_section = f"\n\nUnanswered questions:\n{listed}"

    return f"""<original_goal>
"{topic}"
</original_goal>

<decision_inputs>
Decisions from the interview:
{decisions}{unanswered_section}

Auto-injected context blocks:
{injected}
</decision_inputs>

Compile into the CO-STAR mega-prompt now."""


# ===================
# Critic
# ===================

CRITIC_SYSTEM = """You are a prompt quality critic. Improve an existing mega-prompt for clarity and specificity.

<rules>
- Do NOT change the user's goal, scope or constraints.
- Do NOT add features or requirements that were not requested.
- Remove ambiguity and sharpen wording.
- Keep the length roughly the same.
- Keep the same CO-STAR sections and output only the improved mega-prompt.
</rules>"""


def build_critic_user_prompt(mega_prompt: str, reason: str) -> str:
    return f"""<original_mega_prompt>
{mega_prompt}
</original_mega_prompt>

<improvement_context>
This prompt needs review because: {reason}
</improvement_context>

Return the improved mega-prompt."""
