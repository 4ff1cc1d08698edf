"""
Keyword and pattern heuristics over captions and scripts.
"""

import re
from typing import Dict, List, Optional

from .models import ContentSignals, ScriptComponents
from .readability import analyze_script, split_components, tokenize

MAX_HOOKS = 3
MAX_CALLS_TO_ACTION = 2
MAX_QUESTIONS = 3

HOOK_PATTERNS = [
    re.compile(r"^(what if|imagine|did you know|here's why|the secret)", re.IGNORECASE),
    re.compile(r"^(stop|wait|hold on)", re.IGNORECASE),
    re.compile(r"^(this will|you won't believe)", re.IGNORECASE),
]

CTA_PATTERNS = [
    re.compile(r"^(click|tap|swipe|visit|go to|check out)", re.IGNORECASE),
    re.compile(r"^(subscribe|follow|like|share|comment)", re.IGNORECASE),
    re.compile(r"^(download|get|try|start|join)", re.IGNORECASE),
    re.compile(r"^(buy|purchase|order|shop)", re.IGNORECASE),
]

TOPIC_KEYWORDS: Dict[str, List[str]] = {
    "technology": ["tech", "ai", "software", "app", "code", "programming"],
    "lifestyle": ["life", "daily", "routine", "tips", "advice"],
    "entertainment": ["funny", "comedy", "entertainment", "show", "movie"],
    "education": ["learn", "tutorial", "how to", "guide", "teach"],
    "fitness": ["workout", "fitness", "gym", "exercise", "health"],
    "food": ["food", "recipe", "cooking", "restaurant", "eat"],
}

POSITIVE_WORDS = {"love", "amazing", "great", "awesome", "fantastic", "wonderful", "excellent"}
NEGATIVE_WORDS = {"hate", "terrible", "awful", "bad", "worst", "horrible", "disgusting"}

EMOJI_PATTERN = re.compile(
    "[\U0001F600-\U0001F64F"
    "\U0001F300-\U0001F5FF"
    "\U0001F680-\U0001F6FF"
    "\U0001F1E0-\U0001F1FF"
    "\u2600-\u26FF"
    "\u2700-\u27BF]"
)

# Heading text (lowercased) -> ScriptComponents field
COMPONENT_HEADINGS = {
    "hook": "hook",
    "bridge": "bridge",
    "golden nugget": "golden_nugget",
    "nugget": "golden_nugget",
    "wta": "wta",
    "cta": "wta",
    "call to action": "wta",
}

MIN_COMPONENT_LENGTH = 5


def extract_hashtags(text: str) -> List[str]:
    return re.findall(r"#(\w+)", text or "")


def extract_mentions(text: str) -> List[str]:
    return re.findall(r"@([A-Za-z0-9_.]+)", text or "")


def split_sentences(text: str) -> List[str]:
    """Trimmed, non-blank fragments between sentence terminators."""
    return [s.strip() for s in re.split(r"[.!?]+", text or "") if s.strip()]


def extract_hooks(text: str) -> List[str]:
    hooks = [s for s in split_sentences(text) if any(p.search(s) for p in HOOK_PATTERNS)]
    return hooks[:MAX_HOOKS]


def extract_calls_to_action(text: str) -> List[str]:
    ctas = [s for s in split_sentences(text) if any(p.search(s) for p in CTA_PATTERNS)]
    return ctas[:MAX_CALLS_TO_ACTION]


def extract_questions(text: str) -> List[str]:
    """Sentences ending in a question mark, terminator included."""
    chunks = (chunk.strip() for chunk in re.findall(r"[^.!?]+[.!?]*", text or ""))
    return [chunk for chunk in chunks if chunk.endswith("?")][:MAX_QUESTIONS]


def extract_emojis(text: str) -> List[str]:
    seen: List[str] = []
    for emoji in EMOJI_PATTERN.findall(text or ""):
        if emoji not in seen:
            seen.append(emoji)
    return seen


def detect_topics(text: str) -> List[str]:
    if not text:
        return []
    lowered = text.lower()
    topics = []
    for topic, keywords in TOPIC_KEYWORDS.items():
        if any(re.search(rf"\b{re.escape(keyword)}\b", lowered) for keyword in keywords):
            topics.append(topic)
    return topics


def classify_sentiment(text: str) -> str:
    words = set(tokenize(text or ""))
    positive = len(words & POSITIVE_WORDS)
    negative = len(words & NEGATIVE_WORDS)
    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"


def classify_complexity(text: str) -> str:
    words = (text or "").split()
    if not words:
        return "low"

    avg_word_length = sum(len(word) for word in words) / len(words)
    sentences = max(len(split_sentences(text)), 1)
    avg_sentence_length = len(words) / sentences

    if avg_word_length > 6 or avg_sentence_length > 20:
        return "high"
    if avg_word_length > 4 or avg_sentence_length > 15:
        return "medium"
    return "low"


def analyze_content(text: str) -> ContentSignals:
    """Run every heuristic over ``text``, plus a readability pass."""
    return ContentSignals(
        hashtags=extract_hashtags(text),
        mentions=extract_mentions(text),
        hooks=extract_hooks(text),
        calls_to_action=extract_calls_to_action(text),
        questions=extract_questions(text),
        emojis=extract_emojis(text),
        topics=detect_topics(text),
        sentiment=classify_sentiment(text),
        complexity=classify_complexity(text),
        readability=analyze_script(text or ""),
    )


def script_components_from_text(script: str) -> ScriptComponents:
    """Pick Hook/Bridge/Golden Nugget/WTA sections out of a marked-up script."""
    fields: Dict[str, str] = {}
    for component in split_components(script or ""):
        field_name = COMPONENT_HEADINGS.get(component.heading.strip().lower())
        if field_name and field_name not in fields:
            fields[field_name] = component.content
    return ScriptComponents(**fields)


def validate_script_components(components: ScriptComponents) -> bool:
    return all(
        len(value) > MIN_COMPONENT_LENGTH
        for value in (components.hook, components.bridge, components.golden_nugget, components.wta)
    )


def generate_suggestions(
    components: Optional[ScriptComponents] = None,
    readability_score: Optional[float] = None,
) -> List[str]:
    """Rule-based writing suggestions for a script."""
    suggestions = []

    if components is not None:
        if len(components.hook) < 20:
            suggestions.append("Hook could be more detailed and engaging")
        if "?" not in components.hook and "!" not in components.hook:
            suggestions.append("Consider adding a question or exclamation to the hook")
        if len(components.wta) < 15:
            suggestions.append("Call-to-action could be more specific and compelling")

    if readability_score is not None and readability_score < 60:
        suggestions.append("Content may be too complex - consider simplifying language")

    if not suggestions:
        suggestions.append("Content analysis looks good - consider A/B testing different versions")

    return suggestions
