#!/usr/bin/env python3
"""
Prompt Architect Runner
Terminal front end: adaptive interview, then a compiled CO-STAR mega-prompt
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from dotenv import load_dotenv

# Load environment variables
load_dotenv(Path.home() / ".env")

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from interview import (
    Answer,
    BUILT_IN_RULES,
    InjectionMatchMode,
    InjectionRule,
    InterviewConfig,
    InterviewEngine,
    InterviewSession,
    MalformedOutputError,
    MegaPromptCompiler,
    ProviderError,
    Question,
    QuestionType,
    UnknownProviderError,
    classify_task_family,
    guess_deliverable,
    is_deliverable_obvious,
    load_custom_rules
)
from providers import ProviderChain, ProviderSettings

SCALE_MIN = 1
SCALE_MAX = 10

QUIT_COMMANDS = ('quit', 'exit', 'q')
SKIP_COMMANDS = ('skip', 'next')
DONE_COMMANDS = ('done', 'finish')


class _Command(Exception):
    """Control-flow signal for skip/done/quit typed at an answer prompt."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name


def parse_answer(question: Question, raw: str):
    """
    Convert typed input into an answer value for the question type.

    Returns None for an empty answer to an optional question.
    Raises ValueError with a user-facing message on invalid input.
    """
    text = raw.strip()
    if not text:
        if question.required:
            raise ValueError("An answer is required (or type 'skip').")
        return None

    if question.type == QuestionType.RADIO:
        return _pick_option(question.options, text)

    if question.type == QuestionType.CHECKBOX:
        picks = [part.strip() for part in text.split(',') if part.strip()]
        values = []
        for pick in picks:
            option = _pick_option(question.options, pick)
            if option not in values:
                values.append(option)
        return values

    if question.type == QuestionType.SCALE:
        try:
            score = int(text)
        except ValueError:
            raise ValueError(f"Enter a whole number from {SCALE_MIN} to {SCALE_MAX}.")
        if not SCALE_MIN <= score <= SCALE_MAX:
            raise ValueError(f"Enter a whole number from {SCALE_MIN} to {SCALE_MAX}.")
        return score

    return text


def _pick_option(options: Sequence[str], pick: str) -> str:
    if pick.isdigit():
        index = int(pick) - 1
        if 0 <= index < len(options):
            return options[index]
        raise ValueError(f"Choose a number between 1 and {len(options)}.")

    for option in options:
        if option.lower() == pick.lower():
            return option
    raise ValueError(f"'{pick}' is not one of the options.")


class InterviewRunner:
    """
    CLI runner for Prompt Architect.

    Supports:
    - new: interactive interview followed by compilation
    - classify: show how a topic is classified
    - rules: list the context injection library
    """

    def __init__(
        self,
        engine: InterviewEngine,
        compiler: MegaPromptCompiler,
        input_callback: Callable[[str], str] = None,
        output_callback: Callable[[str], None] = None
    ):
        """
        Initialize the runner.

        Args:
            engine: Interview engine bound to a completion provider
            compiler: Mega-prompt compiler bound to a completion provider
            input_callback: Callback for user input (prompt -> response)
            output_callback: Callback for output (message -> None)
        """
        self.engine = engine
        self.compiler = compiler

        # Default to stdin/stdout if no callbacks
        self.input_callback = input_callback or self._default_input
        self.output_callback = output_callback or self._default_output

    def _default_input(self, prompt: str) -> str:
        """Default input using stdin."""
        self.output_callback(prompt)
        try:
            return input().strip()
        except (EOFError, KeyboardInterrupt):
            return "quit"

    def _default_output(self, message: str):
        """Default output using stdout."""
        print(message)

    # ===================
    # Sub-commands
    # ===================

    def run_new(
        self,
        topic: str,
        min_q: Optional[int] = None,
        max_q: Optional[int] = None,
        output_path: Optional[str] = None
    ) -> Optional[str]:
        """
        Run an interview for a topic and compile the result.

        Returns:
            The mega-prompt text, or None if the user quit or compilation failed
        """
        config = self.engine.config
        session = InterviewSession(
            topic=topic,
            min_questions=config.min_questions if min_q is None else min_q,
            max_questions=config.max_questions if max_q is None else max_q
        )

        self.output_callback(
            f"\nLet's sharpen this request: \"{topic}\"\n"
            "Type 'skip' to skip a question, 'done' to compile now, 'quit' to exit.\n"
        )

        try:
            proceed = self._interview_loop(session)
        except KeyboardInterrupt:
            self.output_callback("\n\nInterrupted.")
            return None

        if not proceed:
            self.output_callback("Exiting without compiling.")
            return None

        return self._compile(session, output_path)

    def _interview_loop(self, session: InterviewSession) -> bool:
        """Ask questions until done. Returns False if the user quit."""
        while True:
            try:
                result = self.engine.run_turn(session)
            except (ProviderError, MalformedOutputError) as e:
                choice = self._handle_failure(session, e)
                if choice == 'retry':
                    continue
                return choice == 'compile'

            if result.done:
                self.output_callback(f"\nThat's enough to work with ({result.reason}).")
                return True

            try:
                self._ask(session, result.question)
            except _Command as command:
                if command.name == 'quit':
                    return False
                if command.name == 'done':
                    self.output_callback("\nWrapping up the interview...")
                    return True
                self.output_callback("Skipping this question.")

    def _handle_failure(self, session: InterviewSession, error: Exception) -> str:
        self.output_callback(f"\nSomething went wrong: {error}")

        if session.can_compile_partial:
            prompt = "Retry, compile with the answers so far, or quit? (r/c/q): "
        else:
            prompt = "Retry or quit? (r/q): "

        while True:
            choice = self.input_callback(prompt).strip().lower()
            if choice in ('r', 'retry'):
                return 'retry'
            if choice in ('q', 'quit'):
                return 'quit'
            if session.can_compile_partial and choice in ('c', 'compile'):
                return 'compile'
            self.output_callback("Please choose one of the listed options.")

    def _ask(self, session: InterviewSession, question: Question):
        number = len(session.questions)
        self.output_callback(f"\nQ{number}. {question.question}")
        for i, option in enumerate(question.options, 1):
            self.output_callback(f"  {i}. {option}")
        if question.type == QuestionType.CHECKBOX:
            self.output_callback("  (pick several, comma-separated)")
        elif question.type == QuestionType.SCALE:
            self.output_callback(f"  (rate {SCALE_MIN}-{SCALE_MAX})")

        while True:
            response = self.input_callback("\nYour answer: ")
            lowered = response.strip().lower()

            if lowered in QUIT_COMMANDS:
                raise _Command('quit')
            if lowered in SKIP_COMMANDS:
                raise _Command('skip')
            if lowered in DONE_COMMANDS:
                raise _Command('done')

            try:
                value = parse_answer(question, response)
            except ValueError as e:
                self.output_callback(str(e))
                continue

            if value is not None:
                session.upsert_answer(Answer(question_id=question.id, value=value))
            return

    def _compile(self, session: InterviewSession, output_path: Optional[str]) -> Optional[str]:
        self.output_callback("\nCompiling your mega-prompt...")
        try:
            mega_prompt = self.compiler.compile(session.topic, session.questions, session.answers)
        except (ProviderError, MalformedOutputError) as e:
            self.output_callback(f"Compilation failed: {e}")
            return None

        self.output_callback(f"\n{mega_prompt}\n")

        if output_path:
            Path(output_path).write_text(mega_prompt, encoding='utf-8')
            self.output_callback(f"Saved to: {output_path}")

        return mega_prompt

    def run_classify(self, topic: str) -> dict:
        """Show the task family and deliverable guess for a topic."""
        info = {
            'task_family': classify_task_family(topic).value,
            'deliverable': guess_deliverable(topic).value,
            'deliverable_obvious': is_deliverable_obvious(topic),
        }
        self.output_callback(f"\nTopic: {topic}")
        self.output_callback(f"  Task family:        {info['task_family']}")
        self.output_callback(f"  Deliverable guess:  {info['deliverable']}")
        self.output_callback(f"  Deliverable obvious: {'yes' if info['deliverable_obvious'] else 'no'}")
        return info

    def run_rules(self, custom_rules: Optional[List[InjectionRule]] = None) -> List[InjectionRule]:
        """List built-in and custom injection rules."""
        rules = list(BUILT_IN_RULES) + list(custom_rules or [])

        self.output_callback(f"\n{'Trigger':<14} {'Category':<22} {'Source':<8}")
        self.output_callback("-" * 46)
        for rule in rules:
            source = "custom" if rule.custom else "built-in"
            self.output_callback(f"{rule.trigger:<14} {rule.category:<22} {source:<8}")
        self.output_callback(f"\nTotal: {len(rules)} rules")

        return rules


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Prompt Architect - Turn a vague request into a structured mega-prompt",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s "build a todo app in react"       Interview, then compile
  %(prog)s "write an email" --provider openai
  %(prog)s "write an email" --classify       Show task classification
  %(prog)s --rules                           List injection rules
        """
    )

    parser.add_argument(
        'topic',
        nargs='?',
        help="What you want the assistant to do"
    )

    parser.add_argument(
        '--classify',
        action='store_true',
        help="Only classify the topic"
    )

    parser.add_argument(
        '--rules',
        action='store_true',
        help="List context injection rules"
    )

    parser.add_argument(
        '--rules-file',
        metavar='PATH',
        help="JSON file with custom injection rules"
    )

    parser.add_argument(
        '--provider', '-p',
        choices=['local', 'openai', 'anthropic', 'gemini', 'grok'],
        help="Preferred completion provider (default: PROMPT_ARCHITECT_PROVIDER or local)"
    )

    parser.add_argument(
        '--min-questions',
        type=int,
        default=3,
        help="Minimum questions before stopping (default: 3)"
    )

    parser.add_argument(
        '--max-questions',
        type=int,
        default=5,
        help="Maximum questions to ask (default: 5)"
    )

    parser.add_argument(
        '--output', '-o',
        help="Write the mega-prompt to this file"
    )

    parser.add_argument(
        '--no-critic',
        action='store_true',
        help="Skip the critic pass"
    )

    parser.add_argument(
        '--match-mode',
        choices=[m.value for m in InjectionMatchMode],
        default=InjectionMatchMode.WORD.value,
        help="How injection triggers match answers (default: word)"
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help="Verbose logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    if not 1 <= args.min_questions <= args.max_questions:
        parser.error("--min-questions must be at least 1 and not above --max-questions")

    custom_rules = []
    if args.rules_file:
        try:
            custom_rules = load_custom_rules(args.rules_file)
        except (OSError, ValueError, KeyError) as e:
            print(f"Could not load rules file: {e}", file=sys.stderr)
            sys.exit(1)

    config = InterviewConfig(
        min_questions=args.min_questions,
        max_questions=args.max_questions,
        run_critic=not args.no_critic,
        injection_match_mode=InjectionMatchMode(args.match_mode)
    )

    try:
        provider = ProviderChain.from_settings(ProviderSettings.from_env(preferred=args.provider))
    except UnknownProviderError as e:
        print(e.message, file=sys.stderr)
        sys.exit(1)

    runner = InterviewRunner(
        engine=InterviewEngine(provider, config),
        compiler=MegaPromptCompiler(provider, config, custom_rules)
    )

    # Dispatch to appropriate command
    if args.rules:
        runner.run_rules(custom_rules)

    elif args.topic and args.classify:
        runner.run_classify(args.topic)

    elif args.topic:
        result = runner.run_new(args.topic, output_path=args.output)
        if result is None:
            sys.exit(1)

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
