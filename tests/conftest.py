"""
Shared fixtures for Prompt Architect tests
"""

import json
import sys
from pathlib import Path

import pytest

# Add scripts directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from interview import Answer, Dimension, Question, QuestionType
from providers.base import CompletionProvider, CompletionResult


class ScriptedProvider(CompletionProvider):
    """
    Provider stub that replays canned outputs and records every call.

    Each scripted item is either a string (returned as ok text) or a
    CompletionResult (returned as-is).
    """

    name = "scripted"

    def __init__(self, outputs=None):
        self.outputs = list(outputs or [])
        self.calls = []

    def complete(self, messages, temperature=0.7, max_tokens=2048):
        self.calls.append({
            'messages': messages,
            'temperature': temperature,
            'max_tokens': max_tokens,
        })
        if not self.outputs:
            raise AssertionError("ScriptedProvider ran out of outputs")
        item = self.outputs.pop(0)
        if isinstance(item, CompletionResult):
            return item
        return CompletionResult.success(item, self.name)

    @property
    def system_prompts(self):
        return [call['messages'][0]['content'] for call in self.calls]


def question_json(dimension, q_id="q1", q_type="text", options=None, **extra):
    """Build a done=false model response as JSON text."""
    question = {
        'id': q_id,
        'dimension': dimension,
        'question': f"What about the {dimension}?",
        'type': q_type,
    }
    if options is not None:
        question['options'] = options
    question.update(extra)
    return json.dumps({'done': False, 'question': question})


def done_json(reason="Enough information"):
    return json.dumps({'done': True, 'reason': reason})


@pytest.fixture
def scripted():
    """Factory for a ScriptedProvider with the given outputs."""
    def make(*outputs):
        return ScriptedProvider(outputs)
    return make


@pytest.fixture
def sample_questions():
    """Three answered-dimension questions for a coding topic."""
    return [
        Question(id='q1', dimension=Dimension.INPUTS,
                 question="What code can you share?", type=QuestionType.TEXT),
        Question(id='q2', dimension=Dimension.CONSTRAINTS,
                 question="Which constraints apply?", type=QuestionType.CHECKBOX,
                 options=['Minimal change', 'Refactor ok', 'Keep tests green']),
        Question(id='q3', dimension=Dimension.DELIVERABLE,
                 question="What output do you want?", type=QuestionType.RADIO,
                 options=['Patch diff', 'Explanation + fix']),
    ]


@pytest.fixture
def sample_answers():
    return [
        Answer(question_id='q1', value="A Python Flask handler that crashes on empty input"),
        Answer(question_id='q2', value=['Minimal change', 'Keep tests green']),
        Answer(question_id='q3', value='Patch diff'),
    ]
