from __future__ import annotations

from dataclasses import dataclass

AXIS_IN_BOUNDS = "in_bounds"
AXIS_OVERSHOT = "overshot"

OVERSHOOT_DECAY = 0.15
SNAP_EPSILON = 0.001


@dataclass
class OrbitAxis:
    """
    One orbit angle with rubber-band limits.

    Drag input may push `value` up to `margin` past the hard bounds
    (in_bounds -> overshot); frame ticks ease it back and snap onto the bound
    (overshot -> in_bounds). `deviation` is the signed distance past the hard
    bound measured at the last drag, and is zero whenever the axis is in bounds.
    """

    value: float
    hard_min: float
    hard_max: float
    margin: float = 0.0
    deviation: float = 0.0

    def __post_init__(self) -> None:
        self.margin = max(0.0, float(self.margin))
        self._settle_deviation()

    @property
    def phase(self) -> str:
        return AXIS_OVERSHOT if self.deviation != 0.0 else AXIS_IN_BOUNDS

    @property
    def soft_min(self) -> float:
        return self.hard_min - self.margin

    @property
    def soft_max(self) -> float:
        return self.hard_max + self.margin

    def apply_delta(self, delta: float) -> None:
        self.value += float(delta)
        self._settle_deviation()

    def relax(self, decay: float = OVERSHOOT_DECAY) -> None:
        if self.deviation == 0.0:
            return
        if self.value < self.hard_min:
            bound = self.hard_min
        elif self.value > self.hard_max:
            bound = self.hard_max
        else:
            self.deviation = 0.0
            return
        self.value += (bound - self.value) * float(decay)
        if abs(self.value - bound) < SNAP_EPSILON:
            self.value = bound
            self.deviation = 0.0

    def _settle_deviation(self) -> None:
        # Deviation is measured on the raw value, before the soft clamp.
        if self.value < self.hard_min:
            self.deviation = self.value - self.hard_min
        elif self.value > self.hard_max:
            self.deviation = self.value - self.hard_max
        else:
            self.deviation = 0.0
        self.value = max(self.soft_min, min(self.soft_max, self.value))
