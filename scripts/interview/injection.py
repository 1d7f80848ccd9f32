"""
Context Injection Library
Trigger keyword -> context block rules matched against interview answers
"""

from dataclasses import dataclass, asdict
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence
import json
import re

from .models import Answer


class InjectionMatchMode(Enum):
    """How triggers are matched against answer text."""
    WORD = "word"             # bounded by non-word characters
    SUBSTRING = "substring"   # plain case-insensitive substring


@dataclass
class InjectionRule:
    """A trigger keyword and the context block it injects."""
    trigger: str
    category: str
    injected_text: str
    custom: bool = False

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> 'InjectionRule':
        return cls(
            trigger=data['trigger'],
            category=data.get('category', 'Custom'),
            injected_text=data.get('injected_text') or data.get('injectedText', ''),
            custom=bool(data.get('custom', True)),
        )


BUILT_IN_RULES: List[InjectionRule] = [
    # Programming languages
    InjectionRule(
        trigger='python',
        category='Programming Language',
        injected_text="""**Python Best Practices:**
- Follow PEP 8 style guide (4-space indentation, snake_case naming)
- Use type hints (e.g., def greet(name: str) -> str:)
- Prefer f-strings for formatting
- Use virtual environments (venv or conda)
- Handle exceptions with specific except clauses
- Write docstrings for public functions and classes""",
    ),
    InjectionRule(
        trigger='javascript',
        category='Programming Language',
        injected_text="""**JavaScript Best Practices:**
- Use const/let (never var)
- Prefer async/await over raw Promises
- Use strict equality (===)
- Handle errors with try/catch in async functions
- Follow ESLint + Prettier for code style
- Use ES2020+ features where supported""",
    ),
    InjectionRule(
        trigger='typescript',
        category='Programming Language',
        injected_text="""**TypeScript Best Practices:**
- Enable strict mode in tsconfig.json
- Avoid using 'any'; use 'unknown' for truly unknown types
- Define explicit return types for public functions
- Use interface for object shapes, type for unions/aliases
- Leverage discriminated unions for state modeling
- Use Zod or similar for runtime validation""",
    ),

    # Frameworks
    InjectionRule(
        trigger='react',
        category='Framework',
        injected_text="""**React Best Practices:**
- Use functional components + hooks for new code
- Keep components small and single-responsibility
- Lift state only as high as necessary
- Memoize expensive calculations with useMemo
- Use useCallback for stable function references passed to children
- Prefer composition over prop-drilling; use Context sparingly""",
    ),
    InjectionRule(
        trigger='next.js',
        category='Framework',
        injected_text="""**Next.js Best Practices:**
- Use the App Router (app/ directory) for new projects
- Prefer Server Components; use 'use client' only when needed
- Use Server Actions for form handling and mutations
- Leverage ISR or dynamic rendering based on data freshness needs
- Use next/image for all images (automatic optimization)
- Store secrets in .env.local (never commit to git)""",
    ),
    InjectionRule(
        trigger='django',
        category='Framework',
        injected_text="""**Django Best Practices:**
- Follow the Fat Models, Thin Views pattern
- Use Django REST Framework for APIs
- Keep settings split: base.py, development.py, production.py
- Use select_related / prefetch_related to avoid N+1 queries
- Write model-level validation, not just form-level
- Use Django's built-in auth system; extend AbstractUser if needed""",
    ),

    # Industries
    InjectionRule(
        trigger='healthcare',
        category='Industry',
        injected_text="""**Healthcare Compliance Context:**
- HIPAA compliance is mandatory for any PHI (Protected Health Information)
- Data encryption required at rest and in transit
- Audit trails must be maintained for all PHI access
- Minimum necessary principle: only access data required for the task
- Business Associate Agreements (BAA) required with third-party vendors
- Consider HL7 FHIR standards for health data interoperability""",
    ),
    InjectionRule(
        trigger='finance',
        category='Industry',
        injected_text="""**Financial Compliance Context:**
- PCI-DSS compliance required for payment card data
- SOX compliance for publicly traded companies (audit trails, internal controls)
- GDPR / CCPA considerations for customer financial data
- Data residency requirements may restrict where data is stored
- Immutable transaction logs are a regulatory requirement
- Consider FINRA regulations for investment-related features""",
    ),
    InjectionRule(
        trigger='education',
        category='Industry',
        injected_text="""**Education Context:**
- FERPA compliance required for student educational records (US)
- COPPA compliance if serving users under 13
- Accessibility (WCAG 2.1 AA) is both a legal and ethical requirement
- Consider diverse learning styles: visual, auditory, kinesthetic
- Design for varying tech literacy levels (students, teachers, admins)
- Offline-first approach benefits low-connectivity environments""",
    ),

    # Writing styles
    InjectionRule(
        trigger='academic',
        category='Writing Style',
        injected_text="""**Academic Writing Standards:**
- Use formal, objective tone; avoid first person unless specified
- Support all claims with citations (APA, MLA, or Chicago style)
- Define technical terms before first use
- Use passive voice judiciously (active generally preferred now)
- Structure: Introduction, Literature Review, Methodology, Results, Discussion, Conclusion
- Avoid contractions and colloquialisms""",
    ),

    # Audience levels
    InjectionRule(
        trigger='beginner',
        category='Audience Level',
        injected_text="""**Beginner Audience Guidelines:**
- Avoid jargon; when technical terms are unavoidable, define them immediately
- Use analogies to familiar, everyday concepts
- Short paragraphs and sentences (max 20 words per sentence as a guide)
- Include step-by-step instructions with numbered lists
- Anticipate confusion points and address them proactively
- Use encouraging, supportive tone""",
    ),
    InjectionRule(
        trigger='expert',
        category='Audience Level',
        injected_text="""**Expert Audience Guidelines:**
- Assume deep domain knowledge; skip introductory context
- Use precise technical terminology without definition
- Focus on nuance, edge cases, and advanced patterns
- Reference relevant standards, papers, or established best practices
- Be concise; experts value density of information
- Welcome debate and alternative approaches""",
    ),
]


def trigger_matches(trigger: str, text: str, mode: InjectionMatchMode) -> bool:
    needle = trigger.lower().strip()
    if not needle:
        return False
    if mode == InjectionMatchMode.SUBSTRING:
        return needle in text
    # Lookarounds instead of \b so triggers like "next.js" still bound correctly
    pattern = r'(?<!\w)' + re.escape(needle) + r'(?!\w)'
    return re.search(pattern, text) is not None


def answer_corpus(answers: Iterable[Answer]) -> str:
    """Flatten every answer value into one lower-cased searchable string."""
    values: List[str] = []
    for answer in answers:
        values.extend(answer.text_values())
    return ' '.join(values).lower()


def get_matching_rules(
    answers: Sequence[Answer],
    custom_rules: Optional[Sequence[InjectionRule]] = None,
    mode: InjectionMatchMode = InjectionMatchMode.WORD
) -> List[InjectionRule]:
    """
    Return every rule whose trigger appears in the answers.

    Built-in rules are scanned first; each trigger fires at most once.
    """
    corpus = answer_corpus(answers)
    matched: List[InjectionRule] = []
    seen = set()

    for rule in list(BUILT_IN_RULES) + list(custom_rules or []):
        key = rule.trigger.lower().strip()
        if key in seen:
            continue
        if trigger_matches(rule.trigger, corpus, mode):
            matched.append(rule)
            seen.add(key)

    return matched


def compile_injections(rules: Sequence[InjectionRule]) -> str:
    """Render matched rules as the auto-injected context section."""
    if not rules:
        return ''

    blocks = '\n\n'.join(rule.injected_text for rule in rules)
    return f"\n\n---\n## Additional Context (Auto-Injected)\n\n{blocks}"


def load_custom_rules(path: str) -> List[InjectionRule]:
    """Load user-defined rules from a JSON list of rule objects."""
    data = json.loads(Path(path).read_text(encoding='utf-8'))
    if not isinstance(data, list):
        raise ValueError(f"Custom rules file must contain a JSON list: {path}")
    return [InjectionRule.from_dict(item) for item in data]
