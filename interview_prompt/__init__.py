from __future__ import annotations  # Re-export interview_prompt public API

from .interview_prompt import (  # noqa: F401 F403
    DIFFICULTY_BLOCKS,
    TYPE_BLOCKS,
    TYPE_LABELS,
    InterviewConfig,
    build_system_prompt,
    type_label,
)

__all__ = [
    "DIFFICULTY_BLOCKS",
    "TYPE_BLOCKS",
    "TYPE_LABELS",
    "InterviewConfig",
    "build_system_prompt",
    "type_label",
]
