"""
Analysis models and schemas.
"""

from typing import List, Literal
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ScriptComponent(CamelModel):
    """Heading-delimited section of a script, before scoring."""
    heading: str
    content: str


class ScriptComponentReadability(CamelModel):
    heading: str
    content: str
    word_count: int = Field(ge=0)
    readability_score: int = Field(ge=0, le=100)
    grade_level: int


class ScriptReadabilityAnalysis(CamelModel):
    """Readability verdict for a whole script."""
    average_grade_level: str
    passes_third_grade_test: bool
    components: List[ScriptComponentReadability]


class ScriptComponents(CamelModel):
    """The four beats of a short-form script."""
    hook: str = ""
    bridge: str = ""
    golden_nugget: str = ""
    wta: str = ""  # "what to action", the call to action


Sentiment = Literal["positive", "negative", "neutral"]
Complexity = Literal["low", "medium", "high"]


class ContentSignals(CamelModel):
    """Deterministic engagement and readability signals for a piece of text."""
    hashtags: List[str] = Field(default_factory=list)
    mentions: List[str] = Field(default_factory=list)
    hooks: List[str] = Field(default_factory=list)
    calls_to_action: List[str] = Field(default_factory=list)
    questions: List[str] = Field(default_factory=list)
    emojis: List[str] = Field(default_factory=list)
    topics: List[str] = Field(default_factory=list)
    sentiment: Sentiment = "neutral"
    complexity: Complexity = "low"
    readability: ScriptReadabilityAnalysis
