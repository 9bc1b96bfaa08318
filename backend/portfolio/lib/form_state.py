from typing import Any, Dict, List, Mapping, Optional

from portfolio.lib.contact_form import CONTACT_FIELDS, HONEYPOT_FIELD, FormField
from portfolio.lib.timing import (
    DURATION_M,
    DURATION_S,
    DURATION_XS,
    get_delay,
    ms_to_num,
)
from portfolio.lib.transition import Transition, TransitionStatus

FORM_TIMEOUT_MS = 1600
ERROR_TIMEOUT_MS = ms_to_num(DURATION_M)
SUCCESS_TIMEOUT_MS = 0

INITIAL_DELAY = DURATION_S

# element -> (delay, multiplier, offset by the initial delay)
FORM_SEQUENCE = {
    "title": (DURATION_XS, 0.3, True),
    "divider": (DURATION_XS, 0.4, True),
    "email": (DURATION_XS, 1, True),
    "message": (DURATION_S, 1, True),
    "button": (DURATION_M, 1, True),
}
SUCCESS_SEQUENCE = {
    "text": (DURATION_XS, 1, False),
    "button": (DURATION_M, 1, False),
}


def element_delays(sequence: Mapping[str, tuple]) -> Dict[str, Dict[str, str]]:
    out = {}
    for element, (delay, multiplier, offset) in sequence.items():
        out[element] = get_delay(delay, INITIAL_DELAY if offset else "0ms", multiplier)
    return out


class FormState:
    """
    Client-side state of the contact page.

    Three panels share one source of truth (the last result plus the
    in-flight flag): the form, the inline error banner and the success panel.
    """

    def __init__(
        self,
        fields: Optional[List[FormField]] = None,
        form_timeout: float = FORM_TIMEOUT_MS,
        error_timeout: float = ERROR_TIMEOUT_MS,
        success_timeout: float = SUCCESS_TIMEOUT_MS,
    ):
        self.fields = {f.name: f for f in (fields or CONTACT_FIELDS)}
        self.values: Dict[str, str] = {name: "" for name in self.fields}
        self.result: Optional[Dict[str, Any]] = None
        self.submitting = False
        self.form = Transition(self.form_visible, timeout=form_timeout, unmount=True)
        self.error_banner = Transition(self.error_visible, timeout=error_timeout, unmount=True)
        self.success = Transition(self.success_visible, timeout=success_timeout, unmount=True)

    @property
    def form_visible(self) -> bool:
        return not (self.result or {}).get("success")

    @property
    def error_visible(self) -> bool:
        return not self.submitting and bool((self.result or {}).get("errors"))

    @property
    def success_visible(self) -> bool:
        return bool((self.result or {}).get("success"))

    @property
    def panels(self) -> Dict[str, Transition]:
        return {"form": self.form, "error": self.error_banner, "success": self.success}

    def _sync(self) -> None:
        self.form.set_predicate(self.form_visible)
        self.error_banner.set_predicate(self.error_visible)
        self.success.set_predicate(self.success_visible)

    def set_value(self, name: str, value: str) -> str:
        field = self.fields.get(name)
        if field is None:
            raise KeyError(name)
        value = value or ""
        if field.max_length is not None:
            value = value[: field.max_length]
        self.values[name] = value
        return value

    def form_data(self) -> Dict[str, str]:
        data = dict(self.values)
        if HONEYPOT_FIELD in data:
            data[HONEYPOT_FIELD] = ""
        return data

    def begin_submit(self) -> None:
        self.submitting = True
        self._sync()

    def receive(self, result: Optional[Dict[str, Any]]) -> None:
        # field values survive every outcome
        self.submitting = False
        self.result = result
        self._sync()

    def tick(self, elapsed_ms: float) -> Dict[str, TransitionStatus]:
        return {name: t.tick(elapsed_ms) for name, t in self.panels.items()}

    def error_messages(self) -> List[str]:
        errors = (self.result or {}).get("errors") or {}
        return [errors[key] for key in ("email", "message") if errors.get(key)]

    def snapshot(self) -> Dict[str, Any]:
        return {
            "panels": {name: t.current_state().value for name, t in self.panels.items()},
            "submitting": self.submitting,
            "errors": self.error_messages(),
            "values": dict(self.values),
        }
