"""Instruction text construction for generation requests."""

from jerseyswap.core.prompts.builder import (
    build_prompt,
    fidelity_clause,
    image_roles,
    join_negative_constraints,
)
from jerseyswap.core.prompts.models import (
    DEFAULT_NEGATIVE_CONSTRAINTS,
    NEGATIVE_CONSTRAINT_OPTIONS,
    BackgroundReplaceOperation,
    JerseySwapOperation,
    JerseyType,
    PromptOperation,
)

__all__ = [
    "DEFAULT_NEGATIVE_CONSTRAINTS",
    "NEGATIVE_CONSTRAINT_OPTIONS",
    "BackgroundReplaceOperation",
    "JerseySwapOperation",
    "JerseyType",
    "PromptOperation",
    "build_prompt",
    "fidelity_clause",
    "image_roles",
    "join_negative_constraints",
]
