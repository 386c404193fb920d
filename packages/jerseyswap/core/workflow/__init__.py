"""Jersey swap workflow: session state, transitions and processing status."""

from jerseyswap.core.workflow.machine import JerseySwapWorkflow
from jerseyswap.core.workflow.models import Session, WorkflowState
from jerseyswap.core.workflow.status import PROCESSING_MESSAGES, StatusTicker, message_at

__all__ = [
    "PROCESSING_MESSAGES",
    "JerseySwapWorkflow",
    "Session",
    "StatusTicker",
    "WorkflowState",
    "message_at",
]
