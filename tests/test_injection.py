"""
Unit Tests for the Context Injection Library
"""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from interview import (
    Answer,
    BUILT_IN_RULES,
    InjectionMatchMode,
    InjectionRule,
    compile_injections,
    get_matching_rules,
    load_custom_rules
)


def _triggers(rules):
    return [r.trigger for r in rules]


class TestBuiltInRules:
    """Tests for the built-in rule set."""

    def test_all_triggers_present(self):
        assert _triggers(BUILT_IN_RULES) == [
            'python', 'javascript', 'typescript', 'react', 'next.js', 'django',
            'healthcare', 'finance', 'education', 'academic', 'beginner', 'expert',
        ]

    def test_unique_triggers(self):
        triggers = _triggers(BUILT_IN_RULES)
        assert len(triggers) == len(set(triggers))


class TestGetMatchingRules:
    """Tests for get_matching_rules()."""

    def test_case_insensitive(self):
        rules = get_matching_rules([Answer('q1', 'We use DJANGO')])
        assert _triggers(rules) == ['django']

    def test_list_values_flattened(self):
        rules = get_matching_rules([Answer('q1', ['TypeScript', 'Healthcare'])])
        assert _triggers(rules) == ['typescript', 'healthcare']

    def test_numeric_values(self):
        assert get_matching_rules([Answer('q1', 7)]) == []

    def test_deduplicated(self):
        """Test the same trigger in several answers matches once."""
        answers = [Answer('q1', 'python'), Answer('q2', 'more python'), Answer('q3', ['Python'])]
        assert _triggers(get_matching_rules(answers)) == ['python']

    def test_word_mode_skips_embedded(self):
        """Test 'react' does not fire inside 'reactive' by default."""
        assert get_matching_rules([Answer('q1', 'a reactive system')]) == []

    def test_substring_mode_matches_embedded(self):
        rules = get_matching_rules([Answer('q1', 'a reactive system')],
                                   mode=InjectionMatchMode.SUBSTRING)
        assert _triggers(rules) == ['react']

    def test_dotted_trigger(self):
        rules = get_matching_rules([Answer('q1', 'Built with Next.js, deployed on Vercel')])
        assert 'next.js' in _triggers(rules)

    def test_punctuation_boundary(self):
        rules = get_matching_rules([Answer('q1', 'react/redux, (python)')])
        assert _triggers(rules) == ['python', 'react']

    def test_custom_rules_after_built_ins(self):
        custom = InjectionRule('fastapi', 'Framework', 'FastAPI notes', custom=True)
        rules = get_matching_rules([Answer('q1', 'fastapi and python')], [custom])
        assert _triggers(rules) == ['python', 'fastapi']

    def test_custom_duplicate_of_built_in_ignored(self):
        """Test a custom rule reusing a built-in trigger never fires."""
        custom = InjectionRule('Python', 'Mine', 'my python text', custom=True)
        rules = get_matching_rules([Answer('q1', 'python')], [custom])
        assert len(rules) == 1
        assert not rules[0].custom


class TestCompileInjections:
    """Tests for compile_injections()."""

    def test_empty(self):
        assert compile_injections([]) == ''

    def test_blocks_joined(self):
        rules = [InjectionRule('a', 'x', 'Block A'), InjectionRule('b', 'x', 'Block B')]
        text = compile_injections(rules)
        assert text.startswith('\n\n---\n## Additional Context (Auto-Injected)\n\n')
        assert text.endswith('Block A\n\nBlock B')


class TestLoadCustomRules:
    """Tests for load_custom_rules()."""

    def test_load(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(json.dumps([
            {'trigger': 'kotlin', 'category': 'Programming Language', 'injected_text': 'Kotlin tips'},
        ]))
        rules = load_custom_rules(str(path))

        assert len(rules) == 1
        assert rules[0].trigger == 'kotlin'
        assert rules[0].custom

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text('{"trigger": "kotlin"}')
        with pytest.raises(ValueError):
            load_custom_rules(str(path))

    def test_round_trip_dict(self):
        rule = InjectionRule('kotlin', 'Lang', 'Kotlin tips', custom=True)
        assert InjectionRule.from_dict(rule.to_dict()) == rule
