"""Prompt operation models.

Defines the tagged operation variants accepted by the prompt builder:
- JerseyType: Which fidelity instruction variant to use
- JerseySwapOperation: Replace the jersey worn by a player
- BackgroundReplaceOperation: Re-composite the player onto a new background
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Canonical negative constraint options, in display order
NEGATIVE_CONSTRAINT_OPTIONS: tuple[str, ...] = (
    "rectangular patch",
    "pasted image",
    "incorrect logos",
    "blurry",
    "unrealistic lighting",
    "flat texture",
    "wrong colors",
    "cartoonish",
)

DEFAULT_NEGATIVE_CONSTRAINTS: frozenset[str] = frozenset(
    {"rectangular patch", "pasted image", "incorrect logos"}
)


class JerseyType(str, Enum):
    """Kind of jersey shown in the source jersey image.

    Attributes:
        CUSTOM_DESIGN: A unique concept design; copy it literally.
        OFFICIAL_JERSEY: A real team jersey; the image is the authoritative version.
    """

    CUSTOM_DESIGN = "Custom Design"
    OFFICIAL_JERSEY = "Official Jersey"


class JerseySwapOperation(BaseModel):
    """Replace the jersey on the player (Image A) with the design in Image B.

    Attributes:
        kind: Variant tag.
        jersey_type: Selects the fidelity clause.
        negative_constraints: Selected subset of NEGATIVE_CONSTRAINT_OPTIONS.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["jersey_swap"] = "jersey_swap"
    jersey_type: JerseyType = JerseyType.CUSTOM_DESIGN
    negative_constraints: frozenset[str] = Field(default=DEFAULT_NEGATIVE_CONSTRAINTS)

    @field_validator("negative_constraints")
    @classmethod
    def _check_known_constraints(cls, value: frozenset[str]) -> frozenset[str]:
        unknown = value.difference(NEGATIVE_CONSTRAINT_OPTIONS)
        if unknown:
            raise ValueError(f"Unknown negative constraints: {sorted(unknown)}")
        return value


class BackgroundReplaceOperation(BaseModel):
    """Place the player from the first image into the second image's scene."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["background_replace"] = "background_replace"


PromptOperation = Annotated[
    JerseySwapOperation | BackgroundReplaceOperation,
    Field(discriminator="kind"),
]
