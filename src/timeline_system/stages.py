"""
Timeline stage descriptors

A timeline is an ordered list of steps played one after another. Each step is
either a single Stage or a ParallelGroup whose stages run together (each after
its own start delay). A HOLD stage animates nothing and only takes time.
"""

import enum
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from .color import Color
from .errors import TimelineError
from .scene import SceneProperty, SceneValue


class StageKind(enum.Enum):
    """What a stage animates"""
    FADE = "fade"
    MOVE = "move"
    SCALE = "scale"
    COLOR = "color"
    HOLD = "hold"


# Which scene properties each kind may drive
_KIND_TARGETS = {
    StageKind.FADE: {SceneProperty.LOGO_ALPHA, SceneProperty.TEXT_ALPHA},
    StageKind.MOVE: {SceneProperty.LOGO_OFFSET_X, SceneProperty.LOGO_OFFSET_Y},
    StageKind.SCALE: {SceneProperty.LOGO_SCALE},
    StageKind.COLOR: {SceneProperty.BACKGROUND},
    StageKind.HOLD: {None},
}


def ease_in_out(fraction: float) -> float:
    """Accelerate-decelerate curve: slow start, slow end"""
    t = min(1.0, max(0.0, fraction))
    return math.cos((t + 1.0) * math.pi) / 2.0 + 0.5


@dataclass
class Stage:
    """
    One timed transition of one scene property.

    Attributes:
        kind: What the stage animates
        target: Scene property driven (None for HOLD)
        end: Value at the end of the stage
        duration_ms: Length of the transition
        start: Value at the start; None means "whatever the scene holds when
            the stage begins"
        start_delay_ms: Delay inside a ParallelGroup before the stage begins
    """
    kind: StageKind
    target: Optional[SceneProperty]
    end: Optional[SceneValue]
    duration_ms: int
    start: Optional[SceneValue] = None
    start_delay_ms: int = 0

    def __post_init__(self):
        if self.target not in _KIND_TARGETS[self.kind]:
            raise TimelineError(f"{self.kind.name} stage cannot drive {self.target}")
        if self.duration_ms < 0 or self.start_delay_ms < 0:
            raise TimelineError(f"Negative timing in {self.kind.name} stage: {self.duration_ms}/{self.start_delay_ms}")
        if self.kind is not StageKind.HOLD and self.end is None:
            raise TimelineError(f"{self.kind.name} stage needs an end value")

    @property
    def span_ms(self) -> int:
        """Start delay plus duration"""
        return self.start_delay_ms + self.duration_ms

    def value_at(self, start: SceneValue, fraction: float) -> SceneValue:
        """Interpolated value at fraction (0.0-1.0) of the stage"""
        eased = ease_in_out(fraction)
        if self.kind is StageKind.COLOR:
            return Color(int(start)).blend(Color(int(self.end)), eased)
        return float(start) + (float(self.end) - float(start)) * eased

    def scaled(self, factor: float) -> 'Stage':
        """Copy with duration and start delay multiplied by factor"""
        return Stage(
            kind=self.kind,
            target=self.target,
            end=self.end,
            duration_ms=int(self.duration_ms * factor),
            start=self.start,
            start_delay_ms=int(self.start_delay_ms * factor),
        )


@dataclass
class ParallelGroup:
    """Stages that start together; the group lasts as long as its longest span"""
    stages: List[Stage] = field(default_factory=list)

    @property
    def span_ms(self) -> int:
        return max((stage.span_ms for stage in self.stages), default=0)

    def scaled(self, factor: float) -> 'ParallelGroup':
        return ParallelGroup([stage.scaled(factor) for stage in self.stages])


TimelineStep = Union[Stage, ParallelGroup]


# ----------------------------------------------------------------------------
# Builders
# ----------------------------------------------------------------------------

def fade(target: SceneProperty, end: float, duration_ms: int,
         start: Optional[float] = None, start_delay_ms: int = 0) -> Stage:
    return Stage(StageKind.FADE, target, end, duration_ms, start, start_delay_ms)


def move(target: SceneProperty, end: float, duration_ms: int,
         start: Optional[float] = None) -> Stage:
    return Stage(StageKind.MOVE, target, end, duration_ms, start)


def scale(end: float, duration_ms: int, start: Optional[float] = None) -> Stage:
    return Stage(StageKind.SCALE, SceneProperty.LOGO_SCALE, end, duration_ms, start)


def color(end: Color, duration_ms: int, start: Optional[Color] = None, start_delay_ms: int = 0) -> Stage:
    return Stage(StageKind.COLOR, SceneProperty.BACKGROUND, end, duration_ms, start, start_delay_ms)


def hold(duration_ms: int) -> Stage:
    return Stage(StageKind.HOLD, None, None, duration_ms)


def together(*stages: Stage) -> ParallelGroup:
    return ParallelGroup(list(stages))


def total_duration_ms(steps: Sequence[TimelineStep]) -> int:
    """Length of a whole timeline"""
    return sum(step.span_ms for step in steps)
