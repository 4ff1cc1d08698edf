"""
Analysis router.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from analysis.content import (
    analyze_content,
    generate_suggestions,
    script_components_from_text,
    validate_script_components,
)
from analysis.models import CamelModel, ContentSignals, ScriptComponents, ScriptReadabilityAnalysis
from analysis.readability import analyze_script

router = APIRouter()
logger = logging.getLogger(__name__)

MAX_SCRIPT_CHARS = 100_000


class ReadabilityRequest(BaseModel):
    script: str = Field(default="", max_length=MAX_SCRIPT_CHARS)


class ContentRequest(BaseModel):
    text: str = Field(default="", max_length=MAX_SCRIPT_CHARS)


class SuggestionsRequest(CamelModel):
    """Either the four components, or a marked-up script to pull them from."""
    hook: str = ""
    bridge: str = ""
    golden_nugget: str = ""
    wta: str = ""
    script: Optional[str] = Field(default=None, max_length=MAX_SCRIPT_CHARS)
    readability_score: Optional[float] = Field(default=None, ge=0, le=100)


class SuggestionsResponse(CamelModel):
    valid: bool
    components: ScriptComponents
    suggestions: List[str]


@router.post("/readability", response_model=ScriptReadabilityAnalysis)
async def analyze_readability(request: ReadabilityRequest):
    """Grade-level readability of each ``**Heading:**`` section of a script."""
    result = analyze_script(request.script)
    logger.debug(
        "Readability: %s components, average grade %s",
        len(result.components),
        result.average_grade_level,
    )
    return result


@router.post("/content", response_model=ContentSignals)
async def analyze_content_signals(request: ContentRequest):
    return analyze_content(request.text)


@router.post("/components/suggestions", response_model=SuggestionsResponse)
async def suggest_component_improvements(request: SuggestionsRequest):
    if request.script is not None:
        components = script_components_from_text(request.script)
    else:
        components = ScriptComponents(
            hook=request.hook,
            bridge=request.bridge,
            golden_nugget=request.golden_nugget,
            wta=request.wta,
        )

    readability_score = request.readability_score
    if readability_score is None and request.script is not None:
        scored = analyze_script(request.script).components
        readability_score = sum(c.readability_score for c in scored) / len(scored)

    return SuggestionsResponse(
        valid=validate_script_components(components),
        components=components,
        suggestions=generate_suggestions(components, readability_score),
    )
