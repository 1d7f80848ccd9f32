"""
Task Classifier for Prompt Architect
Keyword scoring of a free-text topic into a task family and deliverable type
"""

from typing import Dict, List
from enum import Enum
import re


class TaskFamily(Enum):
    """Coarse classification of the user's goal."""
    WRITING = "writing"
    CODING = "coding"
    MARKETING = "marketing"
    DESIGN = "design"
    ANALYSIS = "analysis"


class DeliverableType(Enum):
    """What the user most likely wants produced."""
    EMAIL = "email"
    DOCUMENT = "document"
    PLAN = "plan"
    CODE = "code"
    PROMPT = "prompt"
    STRATEGY = "strategy"
    SCRIPT = "script"
    OTHER = "other"


# Declaration order doubles as the tie-break order
TASK_PATTERNS: Dict[TaskFamily, List[str]] = {
    TaskFamily.WRITING: [
        'write', 'draft', 'email', 'letter', 'message', 'article', 'blog', 'essay',
        'document', 'report', 'memo', 'note', 'respond', 'reply', 'communicate'
    ],
    TaskFamily.CODING: [
        'code', 'program', 'develop', 'build', 'implement', 'fix', 'debug', 'refactor',
        'function', 'app', 'website', 'api', 'script', 'bug', 'error', 'test'
    ],
    TaskFamily.MARKETING: [
        'marketing', 'campaign', 'strategy', 'launch', 'promote', 'brand', 'audience',
        'advertising', 'content', 'social', 'seo', 'growth', 'engagement', 'conversion'
    ],
    TaskFamily.DESIGN: [
        'design', 'ui', 'ux', 'interface', 'layout', 'mockup', 'prototype', 'wireframe',
        'visual', 'graphic', 'logo', 'branding', 'style', 'aesthetic'
    ],
    TaskFamily.ANALYSIS: [
        'analyze', 'research', 'plan', 'strategy', 'evaluate', 'assess', 'review',
        'compare', 'investigate', 'study', 'examine', 'understand', 'explore'
    ],
}

DELIVERABLE_PATTERNS: Dict[DeliverableType, List[str]] = {
    DeliverableType.EMAIL: ['email', 'message', 'letter', 'reply', 'respond', 'mail'],
    DeliverableType.DOCUMENT: ['document', 'doc', 'report', 'memo', 'article', 'blog', 'essay', 'write'],
    DeliverableType.PLAN: ['plan', 'roadmap', 'timeline', 'schedule', 'outline', 'strategy'],
    DeliverableType.CODE: ['code', 'function', 'script', 'program', 'app', 'implement', 'build', 'debug', 'fix'],
    DeliverableType.PROMPT: ['prompt', 'instruction', 'template', 'guideline'],
    DeliverableType.STRATEGY: ['strategy', 'campaign', 'approach', 'framework', 'methodology'],
    DeliverableType.SCRIPT: ['script', 'automation', 'workflow', 'pipeline'],
    DeliverableType.OTHER: [],
}

OBVIOUS_DELIVERABLE_PATTERNS = [
    # Creative writing
    re.compile(r'\b(story|stories|tale|narrative|fiction)\b'),
    re.compile(r'\b(poem|poetry|verse|haiku|sonnet)\b'),
    re.compile(r'\b(song|lyrics|ballad)\b'),
    re.compile(r'\b(joke|jokes|pun|riddle)\b'),
    # Business documents
    re.compile(r'\b(email|message|letter)\s+(to|for|about)'),
    re.compile(r'\b(report|document|memo|proposal)\s+(on|about|for)'),
    re.compile(r'\b(blog\s+post|article|essay)\s+(about|on)'),
    re.compile(r'\b(presentation|deck|slides)\s+(for|about)'),
    # Code
    re.compile(r'\b(function|class|component|script|code)\s+(to|for|that)'),
    re.compile(r'\b(app|application|website|tool)\s+(to|for|that)'),
    # Plans
    re.compile(r'\b(plan|roadmap|strategy|outline)\s+(for|to)'),
]


def _best_match(topic: str, patterns: Dict, default):
    """Highest substring-hit count wins; earlier entries win ties."""
    normalized = topic.lower()
    best, best_score = default, 0
    for category, triggers in patterns.items():
        score = sum(1 for trigger in triggers if trigger in normalized)
        if score > best_score:
            best, best_score = category, score
    return best


def classify_task_family(topic: str) -> TaskFamily:
    """Classify a topic into a task family, defaulting to writing."""
    return _best_match(topic, TASK_PATTERNS, TaskFamily.WRITING)


def guess_deliverable(topic: str) -> DeliverableType:
    """Guess the deliverable type from the topic, defaulting to other."""
    return _best_match(topic, DELIVERABLE_PATTERNS, DeliverableType.OTHER)


classify = classify_task_family


def is_deliverable_obvious(topic: str) -> bool:
    """
    Detect self-describing topics where the deliverable is already explicit.

    Examples: "tell me a story", "write a poem", "email to my landlord".
    """
    normalized = topic.lower()
    return any(pattern.search(normalized) for pattern in OBVIOUS_DELIVERABLE_PATTERNS)


FEW_SHOT_EXAMPLES: Dict[TaskFamily, str] = {
    TaskFamily.WRITING: """<example>
Topic: "write an email to a client about delayed delivery"

Good output questions:
- deliverable (radio): "What type of message is this?" options: ["Apology + new ETA", "Status update", "Compensation offer", "Request more time"]
- audience (radio): "Who is the recipient?" options: ["New client", "Existing client", "Enterprise stakeholder", "Internal team"]
- constraints (checkbox): "Any constraints to follow?" options: ["Must be under 120 words", "Must include new ETA date", "Avoid admitting fault", "Include escalation contact"]
- inputs (text): "What order/project details must be referenced (order ID, product, promised date)?"
</example>""",

    TaskFamily.CODING: """<example>
Topic: "fix a bug in my React app"

Good output questions:
- inputs (checkbox): "What can you share?" options: ["Error message", "Relevant code snippet", "Steps to reproduce", "Expected vs actual behavior"]
- constraints (radio): "Where should the fix be applied?" options: ["Minimal change", "Refactor ok", "Performance priority", "Stability priority"]
- deliverable (radio): "What output do you want?" options: ["Patch diff", "Explanation + fix", "Step-by-step debug plan", "Refactor proposal"]
</example>""",

    TaskFamily.MARKETING: """<example>
Topic: "make a campaign plan for a new skincare launch"

Good output questions:
- deliverable (radio): "What do you need?" options: ["One-page strategy", "Channel plan", "Creative angles", "Full deck outline"]
- audience (radio): "Who is this for?" options: ["Brand manager", "Agency team", "Leadership", "Sales enablement"]
- constraints (checkbox): "Key constraints?" options: ["Budget range", "Timeline", "Geos", "Must include benchmarks/citations", "Regulatory limits"]
- inputs (text): "Product RTBs, target persona, and any prior performance data?"
- style_tone (scale): "1=corporate formal, 10=Gen Z punchy"
</example>""",

    TaskFamily.DESIGN: """<example>
Topic: "design a mobile app login screen"

Good output questions:
- deliverable (radio): "What do you need?" options: ["Figma mockup", "Design brief", "Component specs", "Interactive prototype"]
- audience (radio): "Who will use this app?" options: ["Consumers", "Enterprise users", "Internal team", "Multi-tenant"]
- constraints (checkbox): "Design requirements?" options: ["Must support social login", "Biometric auth", "WCAG AA compliance", "Match existing brand"]
- inputs (text): "Link to brand guidelines, existing UI kit, or reference designs?"
</example>""",

    TaskFamily.ANALYSIS: """<example>
Topic: "analyze competitor pricing strategy"

Good output questions:
- deliverable (radio): "What output format?" options: ["Executive summary", "Detailed report", "Comparison matrix", "Action recommendations"]
- audience (radio): "Who is this for?" options: ["CEO/leadership", "Product team", "Sales enablement", "Investor deck"]
- inputs (checkbox): "What data can you provide?" options: ["Competitor names", "Price points", "Feature comparisons", "Market segment"]
- constraints (text): "Timeline, geographic scope, or must-include/must-avoid elements?"
</example>""",
}


def get_few_shot_example(family: TaskFamily) -> str:
    """Example question set for a task family, used to steer the model."""
    return FEW_SHOT_EXAMPLES.get(family, FEW_SHOT_EXAMPLES[TaskFamily.WRITING])
