from __future__ import annotations

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from pangram.models import GamePhase


class PhaseFSM(StateMachine):
    """FSM over the engine phase.

    - phases: accepting <-> resolving
    - the transition function decides *what* happens; the FSM only guards *which* phase moves exist.
    """

    accepting = State(GamePhase.accepting.value, value=GamePhase.accepting.value, initial=True)
    resolving = State(GamePhase.resolving.value, value=GamePhase.resolving.value)

    submitted = accepting.to(resolving)
    resolved = resolving.to(accepting)
    advanced = accepting.to(accepting) | resolving.to(accepting)

    def __init__(self, phase: GamePhase):
        super().__init__(start_value=phase.value)

    @property
    def phase(self) -> GamePhase:
        return GamePhase(str(self.current_state_value))


def next_phase(phase: GamePhase, trigger: str) -> GamePhase:
    """Fire `trigger` from `phase` and return the resulting phase.

    Raises TransitionNotAllowed if the trigger is not defined for `phase`.
    """

    fsm = PhaseFSM(phase)
    fsm.send(trigger)
    return fsm.phase


def can_fire(phase: GamePhase, trigger: str) -> bool:
    try:
        next_phase(phase, trigger)
    except TransitionNotAllowed:
        return False
    return True
