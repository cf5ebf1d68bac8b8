"""
Prompt templates for DoseKeeper's LLM calls
"""

from prompts.suggestion_prompts import (
    SUGGESTION_SYSTEM_PROMPT,
    SCHEDULE_SUGGESTION_PROMPT,
    SUGGESTION_SCHEMA_HINT,
)


__all__ = [
    "SUGGESTION_SYSTEM_PROMPT",
    "SCHEDULE_SUGGESTION_PROMPT",
    "SUGGESTION_SCHEMA_HINT",
]
