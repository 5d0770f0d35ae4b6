"""Validation state machine for the global ON/OFF toggle."""

import logging
from enum import Enum, auto
from typing import Optional

_LOGGER = logging.getLogger(__name__)


class ValidationState(Enum):
    """Validation states."""

    DISABLED = auto()
    ENABLED = auto()


class ValidationEvent(Enum):
    """Events that trigger state transitions."""

    ENABLE = auto()
    DISABLE = auto()


class ValidationStateMachine:
    """State machine for the validation toggle.

    Valid transitions:
        DISABLED -> ENABLED (on ENABLE)
        ENABLED -> DISABLED (on DISABLE)

    The machine only tracks state; the engine owning it does the full
    recompute on entering ENABLED and the clear on entering DISABLED.

    Example:
        >>> sm = ValidationStateMachine()
        >>> sm.state
        <ValidationState.DISABLED: 1>
        >>> sm.toggle()
        <ValidationState.ENABLED: 2>
        >>> sm.is_enabled
        True
    """

    def __init__(self):
        """Initialize state machine in DISABLED state."""
        self._state = ValidationState.DISABLED
        self._previous_state: Optional[ValidationState] = None

        # Valid transitions: (current_state, event) -> new_state
        self._transitions = {
            (
                ValidationState.DISABLED,
                ValidationEvent.ENABLE,
            ): ValidationState.ENABLED,
            (
                ValidationState.ENABLED,
                ValidationEvent.DISABLE,
            ): ValidationState.DISABLED,
        }

    @property
    def state(self) -> ValidationState:
        """Get current state."""
        return self._state

    @property
    def previous_state(self) -> Optional[ValidationState]:
        """Get the state before the last transition."""
        return self._previous_state

    @property
    def is_enabled(self) -> bool:
        """Check if validation is on."""
        return self._state == ValidationState.ENABLED

    def transition(self, event: ValidationEvent) -> bool:
        """Attempt state transition.

        Args:
            event: Event triggering transition

        Returns:
            True if transition valid and executed, False otherwise

        Example:
            >>> sm = ValidationStateMachine()
            >>> sm.transition(ValidationEvent.DISABLE)
            False
            >>> sm.transition(ValidationEvent.ENABLE)
            True
        """
        key = (self._state, event)

        if key not in self._transitions:
            _LOGGER.debug(
                "Invalid transition: %s + %s",
                self._state.name,
                event.name,
            )
            return False

        self._previous_state = self._state
        self._state = self._transitions[key]

        _LOGGER.debug(
            "Validation state: %s -> %s (event: %s)",
            self._previous_state.name,
            self._state.name,
            event.name,
        )
        return True

    def toggle(self) -> ValidationState:
        """Flip between DISABLED and ENABLED.

        Returns:
            The new state
        """
        event = ValidationEvent.DISABLE if self.is_enabled else ValidationEvent.ENABLE
        self.transition(event)
        return self._state

    def reset(self):
        """Reset to initial DISABLED state."""
        self._state = ValidationState.DISABLED
        self._previous_state = None

    def __str__(self) -> str:
        """String representation."""
        return f"ValidationStateMachine(state={self._state.name})"

    def __repr__(self) -> str:
        """Developer representation."""
        return f"ValidationStateMachine(state={self._state!r}, previous={self._previous_state!r})"
