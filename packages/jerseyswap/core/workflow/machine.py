"""Jersey swap workflow state machine.

Owns the Session aggregate and is the only place it changes. Transitions:

    UPLOAD --perform_jersey_swap--> PROCESSING --> PREVIEW | ERROR
    PREVIEW --perform_background_replace--> PROCESSING --> PREVIEW | ERROR
    any --reset--> UPLOAD

Each composite operation validates its preconditions, builds the prompt,
moves to PROCESSING, awaits exactly one generation call and then moves to
PREVIEW or ERROR. A result that arrives after reset() is discarded. If the
awaiting task is cancelled, the workflow returns to the state it left.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from jerseyswap.core.config.models import WorkflowConfig
from jerseyswap.core.errors import (
    InvalidTransitionError,
    JerseySwapError,
    MissingInputError,
)
from jerseyswap.core.generation.client import GenerationClient
from jerseyswap.core.media.data_uri import ImageAsset, parse
from jerseyswap.core.prompts.builder import build_prompt, image_roles
from jerseyswap.core.prompts.models import (
    NEGATIVE_CONSTRAINT_OPTIONS,
    BackgroundReplaceOperation,
    JerseySwapOperation,
    JerseyType,
)
from jerseyswap.core.utils.logging import get_logger
from jerseyswap.core.workflow.models import Session, WorkflowState
from jerseyswap.core.workflow.status import StatusTicker

# User-facing messages; underlying errors are kept in Session.last_failure
MISSING_SWAP_INPUTS_MESSAGE = "Please upload both a player photo and a jersey image."
SWAP_FAILED_MESSAGE = "An error occurred during the AI processing. Please try again."
MISSING_BACKGROUND_INPUTS_MESSAGE = "An error occurred. Missing images for background swap."
BACKGROUND_FAILED_MESSAGE = (
    "An error occurred during the background replacement. Please try again."
)

SessionCallback = Callable[[Session], None]
StatusCallback = Callable[[str], None]


def _as_asset(image: ImageAsset | str) -> ImageAsset:
    """Accept an ImageAsset or a data URI string."""
    if isinstance(image, ImageAsset):
        return image
    return parse(image)


class JerseySwapWorkflow:
    """Finite-state workflow for swapping a jersey and replacing the background.

    Args:
        client: Generation client used for both operations.
        config: Workflow defaults (jersey type, constraints, status interval).
        on_change: Called with the session after every state transition.
        on_status: Receives rotating status messages while PROCESSING.
    """

    def __init__(
        self,
        client: GenerationClient,
        *,
        config: WorkflowConfig | None = None,
        on_change: SessionCallback | None = None,
        on_status: StatusCallback | None = None,
    ) -> None:
        self._client = client
        self._config = config or WorkflowConfig()
        self._on_change = on_change
        self.session = Session(
            jersey_type=self._config.default_jersey_type,
            negative_constraints=self._config.default_negative_constraints,
        )
        # Bumped by reset(); results for an older generation are discarded
        self._generation = 0
        self._ticker = (
            StatusTicker(on_status, interval_s=self._config.status_interval_seconds)
            if on_status is not None
            else None
        )
        self._logger = get_logger(__name__, session_id=self.session.session_id)

    @property
    def state(self) -> WorkflowState:
        return self.session.state

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_state(self, event: str, *allowed: WorkflowState) -> None:
        if self.session.state not in allowed:
            raise InvalidTransitionError(self.session.state.value, event)

    def _transition(self, new_state: WorkflowState) -> None:
        old_state = self.session.state
        self.session.state = new_state

        if self._ticker is not None:
            if new_state is WorkflowState.PROCESSING:
                self._ticker.start()
            else:
                self._ticker.stop()

        self._logger.debug("Transition %s -> %s", old_state.value, new_state.value)
        if self._on_change is not None:
            self._on_change(self.session)

    def _fail(self, message: str, failure: BaseException) -> None:
        self.session.last_error = message
        self.session.last_failure = failure
        self._transition(WorkflowState.ERROR)

    def _is_stale(self, generation: int, operation: str) -> bool:
        if generation == self._generation:
            return False
        self._logger.info("Discarding %s result: session was reset while in flight", operation)
        return True

    def _abandon(self, generation: int, previous: WorkflowState) -> None:
        """Leave PROCESSING after the awaiting task was cancelled."""
        if generation != self._generation or self.session.state is not WorkflowState.PROCESSING:
            return
        self._logger.info("Generation cancelled, returning to %s", previous.value)
        self._transition(previous)

    def _images_for(
        self,
        operation: JerseySwapOperation | BackgroundReplaceOperation,
        **assets: ImageAsset,
    ) -> list[ImageAsset]:
        """Order assets by the operation's image roles and check their payloads.

        Raises:
            MalformedInputError: If a payload is not valid base64.
        """
        roles = image_roles(operation)
        images = [assets[role] for role in roles]
        for image in images:
            image.decode()
        self._logger.debug("Submitting %s with images: %s", operation.kind, ", ".join(roles))
        return images

    # ------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------

    def set_player_image(self, image: ImageAsset | str) -> None:
        """Set (or replace) the player photo.

        Raises:
            MalformedInputError: If a data URI string cannot be parsed.
            InvalidTransitionError: If not in UPLOAD.
        """
        self._require_state("set_player_image", WorkflowState.UPLOAD)
        self.session.player_image = _as_asset(image)

    def set_jersey_image(self, image: ImageAsset | str) -> None:
        """Set (or replace) the jersey design image.

        Raises:
            MalformedInputError: If a data URI string cannot be parsed.
            InvalidTransitionError: If not in UPLOAD.
        """
        self._require_state("set_jersey_image", WorkflowState.UPLOAD)
        self.session.jersey_image = _as_asset(image)

    def set_jersey_type(self, jersey_type: JerseyType) -> None:
        self._require_state("set_jersey_type", WorkflowState.UPLOAD)
        self.session.jersey_type = JerseyType(jersey_type)

    def toggle_negative_constraint(self, constraint: str) -> bool:
        """Select or deselect one negative constraint.

        Args:
            constraint: One of NEGATIVE_CONSTRAINT_OPTIONS.

        Returns:
            True if the constraint is selected after the toggle.

        Raises:
            ValueError: If the constraint is not a canonical option.
            InvalidTransitionError: If not in UPLOAD.
        """
        self._require_state("toggle_negative_constraint", WorkflowState.UPLOAD)
        if constraint not in NEGATIVE_CONSTRAINT_OPTIONS:
            raise ValueError(f"Unknown negative constraint: {constraint!r}")

        current = self.session.negative_constraints
        if constraint in current:
            self.session.negative_constraints = current - {constraint}
            return False
        self.session.negative_constraints = current | {constraint}
        return True

    def begin_background_edit(self) -> None:
        self._require_state("begin_background_edit", WorkflowState.PREVIEW)
        self.session.is_editing_background = True

    def cancel_background_edit(self) -> None:
        """Leave background editing and drop any selected background."""
        self._require_state("cancel_background_edit", WorkflowState.PREVIEW)
        self.session.is_editing_background = False
        self.session.background_image = None

    def set_background_image(self, image: ImageAsset | str) -> None:
        """Set (or replace) the background image while editing the background.

        Raises:
            MalformedInputError: If a data URI string cannot be parsed.
            InvalidTransitionError: If not in PREVIEW with background editing on.
        """
        self._require_state("set_background_image", WorkflowState.PREVIEW)
        if not self.session.is_editing_background:
            raise InvalidTransitionError(self.session.state.value, "set_background_image")
        self.session.background_image = _as_asset(image)

    def reset(self) -> Session:
        """Return to UPLOAD, clearing all images and error text.

        Jersey type and negative constraint selections are kept. Any call
        still in flight will have its result discarded.
        """
        self._generation += 1
        session = self.session
        session.player_image = None
        session.jersey_image = None
        session.background_image = None
        session.result_image = None
        session.last_error = None
        session.last_failure = None
        session.is_editing_background = False
        self._transition(WorkflowState.UPLOAD)
        return session

    # ------------------------------------------------------------------
    # Composite operations
    # ------------------------------------------------------------------

    async def perform_jersey_swap(self) -> WorkflowState:
        """Swap the jersey on the player photo.

        Returns:
            State after the operation (PREVIEW or ERROR, or the current state
            if the result was discarded after a reset).

        Raises:
            InvalidTransitionError: If not in UPLOAD.
            MissingInputError: If the player or jersey image is missing. The
                state is left unchanged and last_error is set.
            MalformedInputError: If an input payload is not valid base64.
            asyncio.CancelledError: If the awaiting task is cancelled. The
                workflow returns to UPLOAD first.
        """
        self._require_state("perform_jersey_swap", WorkflowState.UPLOAD)
        session = self.session

        if session.player_image is None or session.jersey_image is None:
            session.last_error = MISSING_SWAP_INPUTS_MESSAGE
            raise MissingInputError(MISSING_SWAP_INPUTS_MESSAGE)

        operation = JerseySwapOperation(
            jersey_type=session.jersey_type,
            negative_constraints=session.negative_constraints,
        )
        images = self._images_for(
            operation, player=session.player_image, jersey=session.jersey_image
        )
        prompt = build_prompt(operation)

        generation = self._generation
        session.last_error = None
        self._transition(WorkflowState.PROCESSING)

        try:
            result = await self._client.generate(prompt, images)
        except asyncio.CancelledError:
            self._abandon(generation, WorkflowState.UPLOAD)
            raise
        except JerseySwapError as e:
            if self._is_stale(generation, "jersey swap"):
                return session.state
            self._logger.exception("Jersey swap failed")
            self._fail(SWAP_FAILED_MESSAGE, e)
            return session.state

        if self._is_stale(generation, "jersey swap"):
            return session.state

        session.result_image = result
        self._transition(WorkflowState.PREVIEW)
        return session.state

    async def perform_background_replace(self) -> WorkflowState:
        """Composite the current result onto the selected background.

        Returns:
            State after the operation (PREVIEW or ERROR, or the current state
            if the result was discarded after a reset).

        Raises:
            InvalidTransitionError: If not in PREVIEW.
            MissingInputError: If the result or background image is missing.
                The workflow moves to ERROR before raising.
            MalformedInputError: If an input payload is not valid base64.
            asyncio.CancelledError: If the awaiting task is cancelled. The
                workflow returns to PREVIEW first.
        """
        self._require_state("perform_background_replace", WorkflowState.PREVIEW)
        session = self.session

        if session.result_image is None or session.background_image is None:
            error = MissingInputError(MISSING_BACKGROUND_INPUTS_MESSAGE)
            self._fail(MISSING_BACKGROUND_INPUTS_MESSAGE, error)
            raise error

        operation = BackgroundReplaceOperation()
        images = self._images_for(
            operation, player=session.result_image, background=session.background_image
        )
        prompt = build_prompt(operation)

        generation = self._generation
        session.last_error = None
        self._transition(WorkflowState.PROCESSING)

        try:
            result = await self._client.generate(prompt, images)
        except asyncio.CancelledError:
            self._abandon(generation, WorkflowState.PREVIEW)
            raise
        except JerseySwapError as e:
            if self._is_stale(generation, "background replace"):
                return session.state
            self._logger.exception("Background replacement failed")
            self._fail(BACKGROUND_FAILED_MESSAGE, e)
            return session.state

        if self._is_stale(generation, "background replace"):
            return session.state

        session.result_image = result
        session.is_editing_background = False
        session.background_image = None
        self._transition(WorkflowState.PREVIEW)
        return session.state
