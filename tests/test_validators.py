"""
Unit Tests for Model Output Validators
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from interview import (
    Dimension,
    Question,
    extract_first_json_object,
    extract_first_json_array,
    safe_json_parse,
    validate_question_object,
    validate_next_question_response,
    validate_mega_prompt_text
)


def _q(q_id, dimension):
    return Question(id=q_id, dimension=dimension, question="?")


class TestJsonExtraction:
    """Tests for extract_first_json_object / extract_first_json_array."""

    def test_plain_object(self):
        assert extract_first_json_object('{"done": true}') == '{"done": true}'

    def test_fenced_with_commentary(self):
        """Test fences and surrounding prose are ignored."""
        raw = 'Here you go:\n```json\n{"done":true,"reason":"x"}\n```\nThanks!'
        assert extract_first_json_object(raw) == '{"done":true,"reason":"x"}'

    def test_nested_object(self):
        raw = 'x {"a": {"b": {"c": 1}}} y'
        assert extract_first_json_object(raw) == '{"a": {"b": {"c": 1}}}'

    def test_braces_inside_strings(self):
        """Test braces in quoted text do not change depth."""
        raw = '{"question": "Use {curly} or \\"}\\"?", "done": false}'
        assert extract_first_json_object(raw) == raw

    def test_first_of_two(self):
        assert extract_first_json_object('{"a":1} {"b":2}') == '{"a":1}'

    def test_no_object(self):
        assert extract_first_json_object("no json here") is None
        assert extract_first_json_object("") is None

    def test_unbalanced(self):
        assert extract_first_json_object('{"a": {"b": 1}') is None

    def test_commentary_around_fence(self):
        raw = 'Sure! ```json\n{"a":1}\n```\nHope that helps'
        assert extract_first_json_object(raw) == '{"a":1}'

    def test_fence_inside_string_kept(self):
        """Test fence markers inside a string value come back unchanged."""
        raw = '{"question": "Paste code in ```json fences", "done": false}'
        assert extract_first_json_object('```json\n' + raw + '\n```') == raw

    def test_array(self):
        raw = 'Questions: [{"id": "q1"}, [1, 2]] trailing'
        assert extract_first_json_array(raw) == '[{"id": "q1"}, [1, 2]]'


class TestSafeJsonParse:
    """Tests for safe_json_parse()."""

    def test_valid(self):
        assert safe_json_parse('{"a": 1}') == {'a': 1}

    def test_invalid_returns_none(self):
        assert safe_json_parse('{"a": }') is None

    def test_none_input(self):
        assert safe_json_parse(None) is None

    def test_too_deep_returns_none(self):
        """Test nesting past the recursion limit is reported as unparseable."""
        nested = '{"a":' + '[' * 100000 + ']' * 100000 + '}'
        assert safe_json_parse(nested) is None


class TestValidateQuestionObject:
    """Tests for validate_question_object()."""

    def _valid(self, **overrides):
        data = {
            'id': 'q1',
            'dimension': 'audience',
            'question': 'Who reads this?',
            'type': 'radio',
            'options': ['Engineers', 'Executives'],
            'required': True,
        }
        data.update(overrides)
        return data

    def test_valid(self):
        assert validate_question_object(self._valid(), []) == []

    def test_not_a_dict(self):
        assert validate_question_object(['x'], []) == ['Question must be a JSON object']

    def test_radio_needs_two_options(self):
        """Test radio with a single option is rejected."""
        errors = validate_question_object(self._valid(options=['Only one']), [])
        assert any('at least 2' in e for e in errors)

    def test_radio_empty_options(self):
        errors = validate_question_object({'type': 'radio', 'options': []}, [])
        assert 'Question type "radio" must have options array with at least 2 items' in errors

    def test_checkbox_without_options(self):
        data = self._valid(type='checkbox')
        del data['options']
        errors = validate_question_object(data, [])
        assert any('checkbox' in e for e in errors)

    def test_text_with_options(self):
        """Test text/scale questions must not carry options."""
        errors = validate_question_object(self._valid(type='text'), [])
        assert errors == ['Question type "text" should not have options']

    def test_scale_without_options_ok(self):
        data = self._valid(type='scale')
        del data['options']
        assert validate_question_object(data, []) == []

    def test_invalid_dimension(self):
        errors = validate_question_object(self._valid(dimension='budget'), [])
        assert errors and 'Invalid dimension "budget"' in errors[0]

    def test_repeated_dimension(self):
        """Test a dimension already asked is rejected by name."""
        errors = validate_question_object(self._valid(), [Dimension.AUDIENCE])
        assert errors == ['Dimension "audience" has already been asked']

    def test_repeated_dimension_as_string(self):
        errors = validate_question_object(self._valid(), ['audience'])
        assert len(errors) == 1

    def test_missing_fields(self):
        errors = validate_question_object({'type': 'text'}, [])
        assert len(errors) == 3

    def test_bad_type(self):
        errors = validate_question_object(self._valid(type='dropdown'), [])
        assert 'Question type must be: text, radio, checkbox, or scale' in errors

    def test_required_must_be_bool(self):
        errors = validate_question_object(self._valid(required='yes'), [])
        assert len(errors) == 1


class TestValidateNextQuestionResponse:
    """Tests for validate_next_question_response()."""

    def test_missing_done(self):
        errors = validate_next_question_response({'question': {}}, [], 3, 5)
        assert errors == ['Response must have a "done" field (boolean)']

    def test_not_object(self):
        assert validate_next_question_response('done', [], 3, 5) == ['Response must be a JSON object']

    def test_done_false_needs_question(self):
        errors = validate_next_question_response({'done': False}, [], 3, 5)
        assert len(errors) == 1

    def test_valid_question(self):
        candidate = {'done': False, 'question': {
            'id': 'q2', 'dimension': 'inputs', 'question': 'What data?', 'type': 'text'}}
        asked = [_q('q1', Dimension.AUDIENCE)]
        assert validate_next_question_response(candidate, asked, 3, 5) == []

    def test_done_below_min_is_error(self):
        """Test stopping before the minimum is a validation error."""
        errors = validate_next_question_response({'done': True, 'reason': 'enough'}, [], 3, 5)
        assert errors == ['Cannot stop with only 0 questions (min is 3)']

    def test_done_at_min(self):
        asked = [_q('q1', Dimension.AUDIENCE), _q('q2', Dimension.INPUTS), _q('q3', Dimension.DELIVERABLE)]
        assert validate_next_question_response({'done': True, 'reason': 'ok'}, asked, 3, 5) == []

    def test_done_without_reason(self):
        asked = [_q(f'q{i}', d) for i, d in enumerate(
            [Dimension.AUDIENCE, Dimension.INPUTS, Dimension.DELIVERABLE], 1)]
        errors = validate_next_question_response({'done': True}, asked, 3, 5)
        assert len(errors) == 1

    def test_question_at_max(self):
        asked = [_q('q1', Dimension.AUDIENCE)]
        candidate = {'done': False, 'question': {
            'id': 'q2', 'dimension': 'inputs', 'question': 'What data?', 'type': 'text'}}
        errors = validate_next_question_response(candidate, asked, 1, 1)
        assert errors == ['Cannot ask another question: already at the maximum of 1']


class TestValidateMegaPromptText:
    """Tests for validate_mega_prompt_text()."""

    def test_good_prompt(self):
        text = "**Context:** A team needs a parser.\n**Objective:** Build a robust CSV parser with tests."
        assert validate_mega_prompt_text(text) == (True, [])

    def test_too_short(self):
        ok, issues = validate_mega_prompt_text("Context: hi")
        assert not ok
        assert any('too short' in i for i in issues)

    def test_too_long(self):
        ok, issues = validate_mega_prompt_text("Objective: " + "x" * 8000)
        assert any('too long' in i for i in issues)

    def test_missing_structure_and_placeholders(self):
        ok, issues = validate_mega_prompt_text("Something ... and ... then ... plus ... " * 3)
        assert not ok
        assert len(issues) == 2
