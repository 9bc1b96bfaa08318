import math
from typing import Dict, Union

Duration = Union[str, int, float]

# Theme durations (ms)
DURATION_XS = "200ms"
DURATION_S = "300ms"
DURATION_M = "400ms"
DURATION_L = "600ms"
DURATION_XL = "800ms"


def ms_to_num(value: Duration) -> float:
    """'300ms' -> 300.0; plain numbers pass through."""
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if text.endswith("ms"):
        text = text[:-2]
    return float(text)


def num_to_ms(value: Union[int, float, str]) -> str:
    num = float(value)
    if num.is_integer():
        return f"{int(num)}ms"
    return f"{num}ms"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def css_props(props: Dict[str, object]) -> Dict[str, str]:
    """{'delay': '200ms'} -> {'--delay': '200ms'}; numbers become px."""
    out: Dict[str, str] = {}
    for key, value in props.items():
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = f"{value}px"
        out[f"--{key}"] = str(value)
    return out


def delay_ms(delay: Duration, offset: Duration = 0, multiplier: float = 1) -> int:
    return _round_half_up(ms_to_num(offset) + ms_to_num(delay) * multiplier)


def get_delay(delay: Duration, offset: Duration = "0ms", multiplier: float = 1) -> Dict[str, str]:
    return css_props({"delay": num_to_ms(delay_ms(delay, offset, multiplier))})


def stagger_delay(index: int, base: Duration, step: Duration) -> float:
    if index < 0:
        raise ValueError("index must be >= 0")
    return ms_to_num(base) + ms_to_num(step) * index
