"""Workflow state models.

- WorkflowState: The four states of a jersey swap session
- Session: Mutable aggregate owned by exactly one workflow instance
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from uuid import uuid4

from jerseyswap.core.media.data_uri import ImageAsset
from jerseyswap.core.prompts.models import DEFAULT_NEGATIVE_CONSTRAINTS, JerseyType


class WorkflowState(str, Enum):
    """Workflow state.

    Attributes:
        UPLOAD: Collecting player/jersey images and options (initial).
        PROCESSING: A generation call is in flight.
        PREVIEW: A result image is available.
        ERROR: The last operation failed; only reset leaves this state.
    """

    UPLOAD = "upload"
    PROCESSING = "processing"
    PREVIEW = "preview"
    ERROR = "error"


@dataclass
class Session:
    """Transformation state for one user session (mutable).

    Mutated only by JerseySwapWorkflow handlers.
    """

    player_image: ImageAsset | None = None
    jersey_image: ImageAsset | None = None
    background_image: ImageAsset | None = None
    result_image: ImageAsset | None = None
    state: WorkflowState = WorkflowState.UPLOAD
    last_error: str | None = None
    jersey_type: JerseyType = JerseyType.CUSTOM_DESIGN
    negative_constraints: frozenset[str] = DEFAULT_NEGATIVE_CONSTRAINTS
    is_editing_background: bool = False
    # Underlying failure behind last_error, for diagnostics only
    last_failure: BaseException | None = field(default=None, repr=False)
    session_id: str = field(default_factory=lambda: str(uuid4()))

