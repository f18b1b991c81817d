"""Traffic light cycles and the arrival-time wait function.

A junction's light repeats ``red + green + yellow`` time units. The wait
function treats green as the first ``green`` units of every cycle: a vehicle
arriving inside ``[0, green)`` passes straight through, anyone else waits for
the cycle to wrap around. Only the cycle length and the green duration
influence the delay; the red/yellow split matters for display only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .exceptions import InputError


class LightState(Enum):
    """Colour shown by a junction's light."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


@dataclass(frozen=True)
class TrafficLight:
    """Repeating ``(red, green, yellow)`` cycle of a junction.

    A cycle whose total is zero is legal and means the junction is always
    passable.
    """

    red: int = 0
    green: int = 0
    yellow: int = 0

    def __post_init__(self) -> None:
        """Reject negative or non-integer durations."""
        for name in ("red", "green", "yellow"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InputError(f"{name} duration must be an integer, got {value!r}")
            if value < 0:
                raise InputError(f"{name} duration must be non-negative, got {value}")

    @property
    def cycle(self) -> int:
        """Total length of one cycle."""
        return self.red + self.green + self.yellow

    @property
    def always_green(self) -> bool:
        """``True`` for a degenerate cycle that never delays anybody."""
        return self.cycle <= 0

    def wait(self, arrival: int) -> int:
        """Shortcut for :func:`wait_time` on this light."""
        return wait_time(self, arrival)

    def state_at(self, t: int) -> LightState:
        """Return the colour shown at time ``t``.

        Uses the same green-first ordering as :func:`wait_time`: green, then
        yellow, then red until the cycle restarts.
        """
        if self.always_green:
            return LightState.GREEN
        phase = t % self.cycle
        if phase < self.green:
            return LightState.GREEN
        if phase < self.green + self.yellow:
            return LightState.YELLOW
        return LightState.RED

    def as_tuple(self) -> tuple[int, int, int]:
        """Return ``(red, green, yellow)``."""
        return (self.red, self.green, self.yellow)


ALWAYS_GREEN = TrafficLight(0, 0, 0)


def wait_time(light: TrafficLight, arrival: int) -> int:
    """Return the delay incurred when arriving at ``light`` at time ``arrival``.

    Args:
        light: Cycle of the junction being entered.
        arrival: Non-negative arrival time.

    Returns:
        ``0`` inside the green window or for a degenerate cycle, otherwise the
        time left until the cycle restarts.

    Raises:
        InputError: If ``arrival`` is negative.

    Examples:
        ```python
        >>> wait_time(TrafficLight(red=0, green=5, yellow=5), 16)
        4
        >>> wait_time(TrafficLight(red=5, green=5, yellow=0), 20)
        0
        ```
    """
    if arrival < 0:
        raise InputError(f"arrival time must be non-negative, got {arrival}")
    cycle = light.cycle
    if cycle <= 0:
        return 0
    phase = arrival % cycle
    if phase < light.green:
        return 0
    return cycle - phase


__all__ = ["LightState", "TrafficLight", "ALWAYS_GREEN", "wait_time"]
