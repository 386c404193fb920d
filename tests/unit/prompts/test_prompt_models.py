"""Tests for prompt operation models."""

from __future__ import annotations

from pydantic import TypeAdapter, ValidationError
import pytest

from jerseyswap.core.prompts.models import (
    DEFAULT_NEGATIVE_CONSTRAINTS,
    NEGATIVE_CONSTRAINT_OPTIONS,
    BackgroundReplaceOperation,
    JerseySwapOperation,
    JerseyType,
    PromptOperation,
)


class TestJerseySwapOperation:
    def test_defaults(self) -> None:
        op = JerseySwapOperation()
        assert op.jersey_type is JerseyType.CUSTOM_DESIGN
        assert op.negative_constraints == DEFAULT_NEGATIVE_CONSTRAINTS

    def test_defaults_are_canonical(self) -> None:
        assert DEFAULT_NEGATIVE_CONSTRAINTS <= set(NEGATIVE_CONSTRAINT_OPTIONS)

    def test_rejects_unknown_constraint(self) -> None:
        with pytest.raises(ValidationError, match="Unknown negative constraints"):
            JerseySwapOperation(negative_constraints=frozenset({"sepia"}))

    def test_duplicates_collapse(self) -> None:
        op = JerseySwapOperation.model_validate(
            {"negative_constraints": ["blurry", "blurry", "cartoonish"]}
        )
        assert op.negative_constraints == frozenset({"blurry", "cartoonish"})

    def test_jersey_type_from_value(self) -> None:
        op = JerseySwapOperation.model_validate({"jersey_type": "Official Jersey"})
        assert op.jersey_type is JerseyType.OFFICIAL_JERSEY

    def test_frozen(self) -> None:
        op = JerseySwapOperation()
        with pytest.raises(ValidationError):
            op.jersey_type = JerseyType.OFFICIAL_JERSEY  # type: ignore[misc]


class TestPromptOperationUnion:
    def test_discriminates_on_kind(self) -> None:
        adapter = TypeAdapter(PromptOperation)
        assert isinstance(adapter.validate_python({"kind": "jersey_swap"}), JerseySwapOperation)
        assert isinstance(
            adapter.validate_python({"kind": "background_replace"}), BackgroundReplaceOperation
        )

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValidationError):
            TypeAdapter(PromptOperation).validate_python({"kind": "recolor"})

    def test_background_replace_takes_no_parameters(self) -> None:
        with pytest.raises(ValidationError):
            BackgroundReplaceOperation.model_validate({"jersey_type": "Custom Design"})
