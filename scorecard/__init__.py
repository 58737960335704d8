from __future__ import annotations  # Re-export scorecard public API

from .scorecard import (  # noqa: F401 F403
    FALLBACK_SCORECARD,
    Scorecard,
    SkillAssessment,
    build_scorecard_prompt,
    generate_scorecard,
    parse_scorecard,
)

__all__ = [
    "FALLBACK_SCORECARD",
    "Scorecard",
    "SkillAssessment",
    "build_scorecard_prompt",
    "generate_scorecard",
    "parse_scorecard",
]
