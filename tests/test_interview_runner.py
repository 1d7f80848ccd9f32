"""
Unit Tests for the Prompt Architect CLI Runner
Scripted input/output callbacks, scripted provider
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from conftest import question_json
from interview import (
    Dimension,
    InterviewConfig,
    InterviewEngine,
    MegaPromptCompiler,
    Question,
    QuestionType
)
from interview_runner import InterviewRunner, parse_answer
from providers.base import CompletionResult

MEGA_PROMPT = "**Context:** Todo app in React.\n**Objective:** Ship a working todo list with tests."


def _runner(provider, replies, run_critic=False):
    config = InterviewConfig(run_critic=run_critic)
    replies = list(replies)
    output = []
    runner = InterviewRunner(
        engine=InterviewEngine(provider, config),
        compiler=MegaPromptCompiler(provider, config),
        input_callback=lambda prompt: replies.pop(0),
        output_callback=output.append
    )
    return runner, output


class TestParseAnswer:
    """Tests for parse_answer()."""

    radio = Question(id='q1', dimension=Dimension.AUDIENCE, question='Who?',
                     type=QuestionType.RADIO, options=['Devs', 'PMs'])
    checkbox = Question(id='q2', dimension=Dimension.CONSTRAINTS, question='Which?',
                        type=QuestionType.CHECKBOX, options=['Fast', 'Cheap', 'Good'])
    scale = Question(id='q3', dimension=Dimension.STYLE_TONE, question='1=formal, 10=casual',
                     type=QuestionType.SCALE)

    def test_radio_by_number(self):
        assert parse_answer(self.radio, '2') == 'PMs'

    def test_radio_by_text(self):
        assert parse_answer(self.radio, 'devs') == 'Devs'

    def test_radio_out_of_range(self):
        with pytest.raises(ValueError):
            parse_answer(self.radio, '3')

    def test_checkbox(self):
        assert parse_answer(self.checkbox, '1, 3, 1') == ['Fast', 'Good']

    def test_scale(self):
        assert parse_answer(self.scale, '7') == 7
        with pytest.raises(ValueError):
            parse_answer(self.scale, '11')
        with pytest.raises(ValueError):
            parse_answer(self.scale, 'loud')

    def test_required_empty(self):
        with pytest.raises(ValueError):
            parse_answer(self.radio, '  ')

    def test_optional_empty(self):
        optional = Question(id='q4', dimension=Dimension.INPUTS, question='Anything?', required=False)
        assert parse_answer(optional, '') is None


class TestRunNew:
    """Tests for InterviewRunner.run_new()."""

    def test_interview_then_compile(self, scripted, tmp_path):
        provider = scripted(
            question_json('inputs', q_id='q1'),
            question_json('constraints', q_id='q2', q_type='radio', options=['Minimal', 'Refactor']),
            question_json('deliverable', q_id='q3'),
            MEGA_PROMPT,
        )
        runner, output = _runner(provider, ['Existing repo', '1', 'A patch'])
        out_file = tmp_path / "prompt.md"

        result = runner.run_new("Build a todo app in React", output_path=str(out_file))

        assert result == MEGA_PROMPT
        assert out_file.read_text(encoding='utf-8') == MEGA_PROMPT
        compile_user = provider.calls[3]['messages'][1]['content']
        assert 'A: Minimal' in compile_user

    def test_done_command_compiles_early(self, scripted):
        provider = scripted(question_json('inputs'), MEGA_PROMPT)
        runner, _ = _runner(provider, ['done'])

        assert runner.run_new("Build a todo app") == MEGA_PROMPT
        assert len(provider.calls) == 2

    def test_quit_command(self, scripted):
        provider = scripted(question_json('inputs'))
        runner, _ = _runner(provider, ['quit'])

        assert runner.run_new("Build a todo app") is None

    def test_invalid_answer_reprompts(self, scripted):
        provider = scripted(
            question_json('audience', q_type='radio', options=['Devs', 'PMs']),
            MEGA_PROMPT,
        )
        runner, output = _runner(provider, ['9', '1', 'done'])

        runner.run_new("Build a todo app", min_q=1, max_q=1)

        assert "Choose a number between 1 and 2." in output

    def test_failure_then_partial_compile(self, scripted):
        """Test two failures offer compiling with the answers so far."""
        down = CompletionResult.unavailable('local', 'down')
        provider = scripted(down, down, MEGA_PROMPT)
        runner, output = _runner(provider, ['r', 'c'])

        result = runner.run_new("Build a todo app")

        assert result == MEGA_PROMPT
        assert any('Something went wrong' in line for line in output)

    def test_failure_then_quit(self, scripted):
        provider = scripted(CompletionResult.transport_failure('openai', 'reset'))
        runner, _ = _runner(provider, ['q'])

        assert runner.run_new("Build a todo app") is None


class TestOtherCommands:
    """Tests for run_classify() and run_rules()."""

    def test_classify(self, scripted):
        runner, output = _runner(scripted(), [])
        info = runner.run_classify("Write a poem about autumn")

        assert info == {'task_family': 'writing', 'deliverable': 'document', 'deliverable_obvious': True}

    def test_rules(self, scripted):
        runner, output = _runner(scripted(), [])
        rules = runner.run_rules()

        assert len(rules) == 12
        assert output[-1] == "\nTotal: 12 rules"
