"""
Prompt Architect Interview Module
Adaptive interview that turns a vague request into a structured mega-prompt
"""

from .errors import (
    PromptArchitectError,
    ProviderError,
    ProviderUnavailableError,
    TransportError,
    UnknownProviderError,
    MalformedOutputError,
    SessionError
)

from .task_classifier import (
    TaskFamily,
    DeliverableType,
    classify,
    classify_task_family,
    guess_deliverable,
    is_deliverable_obvious,
    get_few_shot_example
)

from .models import (
    Dimension,
    QuestionType,
    SessionState,
    Question,
    Answer,
    DeliverableHint,
    IntentAnalysis,
    StopDecision,
    NextTurnResult,
    InterviewSession,
    ALL_DIMENSIONS
)

from .validators import (
    extract_first_json_object,
    extract_first_json_array,
    safe_json_parse,
    validate_question_object,
    validate_next_question_response,
    validate_mega_prompt_text
)

from .intent import infer_intent

from .policy import (
    remaining_dimensions,
    should_stop_interview,
    rank_dimensions
)

from .injection import (
    InjectionRule,
    InjectionMatchMode,
    BUILT_IN_RULES,
    get_matching_rules,
    compile_injections,
    load_custom_rules
)

from .interview_engine import (
    InterviewEngine,
    InterviewConfig
)

from .compiler import (
    MegaPromptCompiler,
    compile_mega_prompt,
    should_run_critic
)

__all__ = [
    # Errors
    'PromptArchitectError',
    'ProviderError',
    'ProviderUnavailableError',
    'TransportError',
    'UnknownProviderError',
    'MalformedOutputError',
    'SessionError',
    # Classifier
    'TaskFamily',
    'DeliverableType',
    'classify',
    'classify_task_family',
    'guess_deliverable',
    'is_deliverable_obvious',
    'get_few_shot_example',
    # Models
    'Dimension',
    'QuestionType',
    'SessionState',
    'Question',
    'Answer',
    'DeliverableHint',
    'IntentAnalysis',
    'StopDecision',
    'NextTurnResult',
    'InterviewSession',
    'ALL_DIMENSIONS',
    # Validators
    'extract_first_json_object',
    'extract_first_json_array',
    'safe_json_parse',
    'validate_question_object',
    'validate_next_question_response',
    'validate_mega_prompt_text',
    # Intent + Policy
    'infer_intent',
    'remaining_dimensions',
    'should_stop_interview',
    'rank_dimensions',
    # Injection
    'InjectionRule',
    'InjectionMatchMode',
    'BUILT_IN_RULES',
    'get_matching_rules',
    'compile_injections',
    'load_custom_rules',
    # Engine + Compiler
    'InterviewEngine',
    'InterviewConfig',
    'MegaPromptCompiler',
    'compile_mega_prompt',
    'should_run_critic'
]
