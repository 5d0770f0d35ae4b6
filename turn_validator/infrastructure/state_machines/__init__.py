"""State machines for managing state transitions."""

from .validation_state_machine import (
    ValidationStateMachine,
    ValidationState,
    ValidationEvent,
)

__all__ = [
    "ValidationStateMachine",
    "ValidationState",
    "ValidationEvent",
]
