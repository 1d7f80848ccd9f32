"""
Data Models for the Prompt Architect Interview
Questions, answers, intent snapshots and the caller-owned session
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple, Union, Iterator
from enum import Enum
import json

from .errors import SessionError
from .task_classifier import TaskFamily, DeliverableType


class Dimension(Enum):
    """The five facets of missing context an interview covers."""
    DELIVERABLE = "deliverable"
    AUDIENCE = "audience"
    INPUTS = "inputs"
    CONSTRAINTS = "constraints"
    STYLE_TONE = "style_tone"


# Canonical order, also used for remaining-dimension computation
ALL_DIMENSIONS: List[Dimension] = [
    Dimension.DELIVERABLE,
    Dimension.AUDIENCE,
    Dimension.INPUTS,
    Dimension.CONSTRAINTS,
    Dimension.STYLE_TONE,
]

DIMENSION_VALUES: List[str] = [d.value for d in ALL_DIMENSIONS]


class QuestionType(Enum):
    """Input kinds a question can be rendered as."""
    TEXT = "text"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    SCALE = "scale"


QUESTION_TYPE_VALUES: List[str] = [t.value for t in QuestionType]

CHOICE_TYPES = (QuestionType.RADIO, QuestionType.CHECKBOX)


class SessionState(Enum):
    """Lifecycle of one interview session."""
    COLLECTING = "collecting"
    AWAITING_MODEL = "awaiting_model"
    COMPILING = "compiling"
    FAILED = "failed"


AnswerValue = Union[str, List[str], int, float]


@dataclass(frozen=True)
class Question:
    """A validated question accepted into the session."""
    id: str
    dimension: Dimension
    question: str
    type: QuestionType = QuestionType.TEXT
    options: Tuple[str, ...] = ()
    required: bool = True

    def __post_init__(self):
        object.__setattr__(self, 'options', tuple(self.options))

    def to_dict(self) -> Dict:
        data = {
            'id': self.id,
            'dimension': self.dimension.value,
            'question': self.question,
            'type': self.type.value,
            'required': self.required,
        }
        if self.type in CHOICE_TYPES:
            data['options'] = list(self.options)
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> 'Question':
        return cls(
            id=data['id'],
            dimension=Dimension(data['dimension']),
            question=data['question'],
            type=QuestionType(data.get('type', 'text')),
            options=tuple(data.get('options') or ()),
            required=bool(data.get('required', True)),
        )


@dataclass
class Answer:
    """The user's answer to one question."""
    question_id: str
    value: AnswerValue

    def text_values(self) -> List[str]:
        """Individual strings carried by the answer (lists flattened)."""
        if isinstance(self.value, list):
            return [str(v) for v in self.value]
        return [str(self.value)]

    def display_value(self) -> str:
        if isinstance(self.value, list):
            return ', '.join(str(v) for v in self.value)
        return str(self.value)

    def to_dict(self) -> Dict:
        return {'question_id': self.question_id, 'value': self.value}

    @classmethod
    def from_dict(cls, data: Dict) -> 'Answer':
        return cls(question_id=data['question_id'], value=data['value'])


@dataclass
class DeliverableHint:
    """Deliverable guess with a 0-1 confidence."""
    kind: DeliverableType
    confidence: float

    def to_dict(self) -> Dict:
        return {'kind': self.kind.value, 'confidence': self.confidence}


@dataclass
class IntentAnalysis:
    """Per-turn snapshot of what the interview already knows."""
    task_family: TaskFamily
    deliverable_hint: DeliverableHint
    known_dimensions: Dict[Dimension, bool]
    missing_critical: List[Dimension]

    def to_dict(self) -> Dict:
        return {
            'task_family': self.task_family.value,
            'deliverable_hint': self.deliverable_hint.to_dict(),
            'known_dimensions': {d.value: known for d, known in self.known_dimensions.items()},
            'missing_critical': [d.value for d in self.missing_critical],
        }


@dataclass
class StopDecision:
    """Outcome of the structural stop check."""
    stop: bool
    reason: Optional[str] = None


@dataclass
class NextTurnResult:
    """Either a new question or a done signal."""
    done: bool
    question: Optional[Question] = None
    reason: Optional[str] = None
    model_called: bool = False

    def to_dict(self) -> Dict:
        if self.done:
            return {'done': True, 'reason': self.reason}
        return {'done': False, 'question': self.question.to_dict()}


@dataclass
class InterviewSession:
    """
    Caller-owned interview state.

    The engine never keeps a reference to a session between calls; every
    operation receives the topic and history explicitly.
    """
    topic: str
    questions: List[Question] = field(default_factory=list)
    answers: List[Answer] = field(default_factory=list)
    min_questions: int = 3
    max_questions: int = 5
    state: SessionState = SessionState.COLLECTING
    consecutive_failures: int = 0

    def add_question(self, question: Question):
        """Append an accepted question, enforcing id and dimension uniqueness."""
        if any(q.id == question.id for q in self.questions):
            raise SessionError(f"Question id '{question.id}' already exists in session")
        if question.dimension in self.asked_dimensions():
            raise SessionError(f"Dimension '{question.dimension.value}' has already been asked")
        self.questions.append(question)

    def upsert_answer(self, answer: Answer):
        """Record an answer, replacing any earlier answer to the same question."""
        for i, existing in enumerate(self.answers):
            if existing.question_id == answer.question_id:
                self.answers[i] = answer
                return
        self.answers.append(answer)

    def answer_for(self, question_id: str) -> Optional[Answer]:
        for answer in self.answers:
            if answer.question_id == question_id:
                return answer
        return None

    def asked_dimensions(self) -> List[Dimension]:
        return [q.dimension for q in self.questions]

    def iter_answered(self) -> Iterator:
        """Yield (question, answer) pairs in question order."""
        for question in self.questions:
            answer = self.answer_for(question.id)
            if answer is not None:
                yield question, answer

    def record_failure(self):
        self.state = SessionState.FAILED
        self.consecutive_failures += 1

    def record_success(self):
        self.consecutive_failures = 0

    @property
    def can_compile_partial(self) -> bool:
        """True once two terminal failures happened back to back."""
        return self.consecutive_failures >= 2

    def to_dict(self) -> Dict:
        return {
            'topic': self.topic,
            'questions': [q.to_dict() for q in self.questions],
            'answers': [a.to_dict() for a in self.answers],
            'min_questions': self.min_questions,
            'max_questions': self.max_questions,
            'state': self.state.value,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
