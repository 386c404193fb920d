"""Tests for the deterministic prompt builder."""

from __future__ import annotations

import pytest

from jerseyswap.core.prompts.builder import (
    build_prompt,
    fidelity_clause,
    image_roles,
    join_negative_constraints,
)
from jerseyswap.core.prompts.models import (
    NEGATIVE_CONSTRAINT_OPTIONS,
    BackgroundReplaceOperation,
    JerseySwapOperation,
    JerseyType,
)

CUSTOM_MARKER = "LITERAL REPLICATION"
OFFICIAL_MARKER = "PERFECT REPLICATION"
USER_CONSTRAINTS_HEADER = "USER-DEFINED CONSTRAINTS TO AVOID"


class TestJoinNegativeConstraints:
    def test_canonical_order(self) -> None:
        joined = join_negative_constraints({"cartoonish", "blurry", "rectangular patch"})
        assert joined == "rectangular patch, blurry, cartoonish"

    def test_empty(self) -> None:
        assert join_negative_constraints(frozenset()) == ""

    def test_unknown_values_dropped(self) -> None:
        assert join_negative_constraints({"blurry", "not an option"}) == "blurry"


class TestJerseySwapPrompt:
    def test_deterministic(self) -> None:
        op = JerseySwapOperation(
            jersey_type=JerseyType.OFFICIAL_JERSEY,
            negative_constraints=frozenset({"blurry", "wrong colors"}),
        )
        assert build_prompt(op) == build_prompt(op)
        assert build_prompt(op) == build_prompt(op.model_copy())

    def test_selection_order_does_not_matter(self) -> None:
        a = JerseySwapOperation(negative_constraints=frozenset(["blurry", "cartoonish"]))
        b = JerseySwapOperation(negative_constraints=frozenset(["cartoonish", "blurry"]))
        assert build_prompt(a) == build_prompt(b)

    def test_mandatory_sections_present(self) -> None:
        prompt = build_prompt(JerseySwapOperation())
        assert "PHOTOREALISTIC JERSEY REPLACEMENT" in prompt
        assert "Image A (Player Photo)" in prompt
        assert "Image B (Jersey Design)" in prompt
        assert "This is not a rectangle" in prompt
        assert "Texture Mapping & Warping" in prompt
        assert "Lighting & Shadows" in prompt
        assert "FAILURE CONDITIONS" in prompt
        assert prompt.endswith("**OUTPUT:** The final, edited image ONLY. No text.")

    def test_section_order(self) -> None:
        prompt = build_prompt(JerseySwapOperation())
        markers = [
            "PHOTOREALISTIC JERSEY REPLACEMENT",
            "**INPUTS:**",
            "Masking",
            "Texture Mapping",
            "Fidelity & Detail Transfer",
            "Lighting & Shadows",
            "FAILURE CONDITIONS",
            USER_CONSTRAINTS_HEADER,
            "**OUTPUT:**",
        ]
        positions = [prompt.index(marker) for marker in markers]
        assert positions == sorted(positions)

    def test_custom_design_fidelity_only(self) -> None:
        prompt = build_prompt(JerseySwapOperation(jersey_type=JerseyType.CUSTOM_DESIGN))
        assert CUSTOM_MARKER in prompt
        assert OFFICIAL_MARKER not in prompt
        assert fidelity_clause(JerseyType.CUSTOM_DESIGN) in prompt
        assert "**Jersey Type:** Custom Design" in prompt

    def test_official_jersey_fidelity_only(self) -> None:
        prompt = build_prompt(JerseySwapOperation(jersey_type=JerseyType.OFFICIAL_JERSEY))
        assert OFFICIAL_MARKER in prompt
        assert CUSTOM_MARKER not in prompt
        assert "different season's version" in prompt
        assert "**Jersey Type:** Official Jersey" in prompt

    def test_no_constraint_clause_when_empty(self) -> None:
        prompt = build_prompt(JerseySwapOperation(negative_constraints=frozenset()))
        assert USER_CONSTRAINTS_HEADER not in prompt

    def test_constraint_clause_contains_exactly_selected(self) -> None:
        selected = {"blurry", "flat texture", "pasted image"}
        prompt = build_prompt(JerseySwapOperation(negative_constraints=frozenset(selected)))

        clause = prompt.split(USER_CONSTRAINTS_HEADER, 1)[1].split("**OUTPUT:**", 1)[0]
        assert "- pasted image, blurry, flat texture" in clause
        for option in NEGATIVE_CONSTRAINT_OPTIONS:
            assert (option in clause) == (option in selected)

    def test_default_constraints(self) -> None:
        prompt = build_prompt(JerseySwapOperation())
        assert "- rectangular patch, pasted image, incorrect logos" in prompt


class TestBackgroundReplacePrompt:
    def test_fixed_structure(self) -> None:
        prompt = build_prompt(BackgroundReplaceOperation())
        assert "**Player Image:** This is the first image provided" in prompt
        assert "**Background Image:** This is the second image provided" in prompt
        steps = [
            "1.  **Analyze the Background Image:**",
            "2.  **Prepare the Background Image:**",
            "3.  **Extract and Integrate the Player:**",
            "4.  **Master-Level Lighting and Shadow Synthesis:**",
        ]
        positions = [prompt.index(step) for step in steps]
        assert positions == sorted(positions)

    def test_placement_and_shadow_rules(self) -> None:
        prompt = build_prompt(BackgroundReplaceOperation())
        assert "ONLY IF they appear to be a teammate" in prompt
        assert "Wearing an opponent's jersey" in prompt
        assert "out of focus or far in the distance" in prompt
        assert "feet must align perfectly with the ground plane" in prompt
        assert "Contact Shadows" in prompt
        assert "must perfectly oppose the key light source" in prompt
        assert "No text." in prompt

    def test_deterministic(self) -> None:
        assert build_prompt(BackgroundReplaceOperation()) == build_prompt(
            BackgroundReplaceOperation()
        )


def test_image_roles() -> None:
    assert image_roles(JerseySwapOperation()) == ("player", "jersey")
    assert image_roles(BackgroundReplaceOperation()) == ("player", "background")


def test_unknown_operation_rejected() -> None:
    with pytest.raises(TypeError):
        build_prompt("jersey_swap")  # type: ignore[arg-type]
