"""Recording state machine for one acquire/start/stop attempt."""

from enum import Enum


class RecordingState(str, Enum):
    """Phases of a cloud recording attempt.

    IDLE → ACQUIRING → ACQUIRED → STARTING → RECORDING → STOPPING → STOPPED

    - ACQUIRING/STARTING/STOPPING are in flight around an external call.
    - A failed acquire falls back to IDLE; a failed start falls back to
      ACQUIRED so the same resource can be started again.
    - A failed stop falls back to RECORDING.
    - IDLE → RECORDING resumes a recording persisted by an earlier request,
      which is how a stop request enters the machine.

    STOPPED is terminal; a new attempt starts from a fresh IDLE.
    """

    IDLE = "idle"
    ACQUIRING = "acquiring"
    ACQUIRED = "acquired"
    STARTING = "starting"
    RECORDING = "recording"
    STOPPING = "stopping"
    STOPPED = "stopped"

    def __str__(self) -> str:
        return self.value


class RecordingStateMachine:
    TRANSITIONS: dict[RecordingState, set[RecordingState]] = {
        RecordingState.IDLE: {RecordingState.ACQUIRING, RecordingState.RECORDING},
        RecordingState.ACQUIRING: {RecordingState.ACQUIRED, RecordingState.IDLE},
        RecordingState.ACQUIRED: {RecordingState.STARTING},
        RecordingState.STARTING: {RecordingState.RECORDING, RecordingState.ACQUIRED},
        RecordingState.RECORDING: {RecordingState.STOPPING},
        RecordingState.STOPPING: {RecordingState.STOPPED, RecordingState.RECORDING},
        RecordingState.STOPPED: set(),
    }

    TERMINAL_STATES: set[RecordingState] = {RecordingState.STOPPED}

    @classmethod
    def can_transition(cls, current: RecordingState, new: RecordingState) -> bool:
        return new in cls.TRANSITIONS.get(current, set())

    @classmethod
    def is_terminal(cls, state: RecordingState) -> bool:
        return state in cls.TERMINAL_STATES

    @classmethod
    def get_valid_transitions(cls, state: RecordingState) -> set[RecordingState]:
        return cls.TRANSITIONS.get(state, set())
