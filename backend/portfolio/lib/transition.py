from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

Timeout = Union[int, float, Tuple[float, float]]


class TransitionStatus(str, Enum):
    UNMOUNTED = "unmounted"
    ENTERING = "entering"
    ENTERED = "entered"
    EXITING = "exiting"
    EXITED = "exited"


@dataclass
class TransitionState:
    status: TransitionStatus = TransitionStatus.UNMOUNTED
    elapsed_ms: float = 0.0
    predicate: bool = False


class Transition:
    """
    Timed mount/unmount state machine for one visual element.

      set_predicate(True):  unmounted | exiting | exited -> entering
      set_predicate(False): entering | entered -> exiting
      tick(ms):             entering -> entered after the enter timeout,
                            exiting -> exited after the exit timeout,
                            exited -> unmounted when unmount=True
    """

    def __init__(self, predicate: bool = False, timeout: Timeout = 0, unmount: bool = False):
        enter, exit_ = timeout if isinstance(timeout, tuple) else (timeout, timeout)
        if enter < 0 or exit_ < 0:
            raise ValueError("timeout must be >= 0")
        self.enter_ms = float(enter)
        self.exit_ms = float(exit_)
        self.unmount = unmount
        self.state = TransitionState(predicate=bool(predicate))
        if predicate:
            self.state.status = TransitionStatus.ENTERING

    def current_state(self) -> TransitionStatus:
        return self.state.status

    @property
    def mounted(self) -> bool:
        return self.state.status != TransitionStatus.UNMOUNTED

    @property
    def data_status(self) -> Optional[str]:
        """Value for the element's data-status attribute; None when unmounted."""
        if not self.mounted:
            return None
        return self.state.status.value

    def set_predicate(self, value: bool) -> TransitionStatus:
        value = bool(value)
        s = self.state
        s.predicate = value
        if value and s.status in (TransitionStatus.UNMOUNTED, TransitionStatus.EXITING, TransitionStatus.EXITED):
            s.status = TransitionStatus.ENTERING
            s.elapsed_ms = 0.0
        elif not value and s.status in (TransitionStatus.ENTERING, TransitionStatus.ENTERED):
            s.status = TransitionStatus.EXITING
            s.elapsed_ms = 0.0
        return s.status

    def tick(self, elapsed_ms: float) -> TransitionStatus:
        if elapsed_ms < 0:
            raise ValueError("elapsed_ms must be >= 0")
        s = self.state
        if s.status == TransitionStatus.ENTERING:
            s.elapsed_ms += elapsed_ms
            if s.elapsed_ms >= self.enter_ms:
                s.status = TransitionStatus.ENTERED
                s.elapsed_ms = 0.0
        elif s.status == TransitionStatus.EXITING:
            s.elapsed_ms += elapsed_ms
            if s.elapsed_ms >= self.exit_ms:
                s.status = TransitionStatus.EXITED
                s.elapsed_ms = 0.0
        if s.status == TransitionStatus.EXITED and self.unmount:
            s.status = TransitionStatus.UNMOUNTED
        return s.status
