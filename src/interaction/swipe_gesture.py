# src/interaction/swipe_gesture.py

"""Drag-to-decide state machine for a single product card.

``Idle -> Dragging -> Committed(left|right)`` when the release happens
beyond the commit threshold, ``Dragging -> Idle`` (spring back)
otherwise.  Committed is terminal: the card is gone for the session.

Displacements are pixel-equivalents; the widget converts terminal cells
before feeding them in.
"""

import logging
from bisect import bisect_right
from enum import Enum

from src.config.settings import Settings
from src.models.interaction import Direction

logger = logging.getLogger("swipeshop.gesture")


class GestureState(Enum):
    """Lifecycle of one card's drag gesture."""

    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTED = "committed"


def interpolate(
    value: float,
    inputs: list[float],
    outputs: list[float],
) -> float:
    """Piecewise-linear map of *value* through control points, clamped.

    *inputs* must be ascending and the same length as *outputs*.
    """
    if len(inputs) != len(outputs) or len(inputs) < 2:
        raise ValueError("need at least two matching control points")
    if value <= inputs[0]:
        return outputs[0]
    if value >= inputs[-1]:
        return outputs[-1]
    idx = bisect_right(inputs, value) - 1
    x0, x1 = inputs[idx], inputs[idx + 1]
    y0, y1 = outputs[idx], outputs[idx + 1]
    if x1 == x0:
        return y1
    return y0 + (value - x0) * (y1 - y0) / (x1 - x0)


class SwipeGesture:
    """Tracks one card's horizontal drag and decides on release."""

    def __init__(self, threshold: float | None = None) -> None:
        self.threshold: float = (
            Settings.SWIPE_COMMIT_THRESHOLD
            if threshold is None
            else threshold
        )
        self.state = GestureState.IDLE
        self.offset: float = 0.0
        self.direction: Direction | None = None

    # ── Transitions ──────────────────────────────────────

    def press(self) -> bool:
        """Pointer down. Returns False when a drag cannot start."""
        if self.state is not GestureState.IDLE:
            return False
        self.state = GestureState.DRAGGING
        self.offset = 0.0
        return True

    def drag_to(self, offset: float) -> None:
        """Update the horizontal displacement of an active drag."""
        if self.state is GestureState.DRAGGING:
            self.offset = offset

    def release(self) -> Direction | None:
        """Pointer up: commit past the threshold, else spring back."""
        if self.state is not GestureState.DRAGGING:
            return None
        if abs(self.offset) > self.threshold:
            self.direction = "right" if self.offset > 0 else "left"
            self.state = GestureState.COMMITTED
            logger.debug(
                "Swipe committed %s at offset %.1f",
                self.direction,
                self.offset,
            )
            return self.direction
        self.state = GestureState.IDLE
        self.offset = 0.0
        return None

    # ── Derived visuals ──────────────────────────────────

    @property
    def rotation(self) -> float:
        """Tilt in degrees, -25..25 across -200..200."""
        return interpolate(
            self.offset,
            Settings.ROTATION_INPUT,
            Settings.ROTATION_OUTPUT,
        )

    @property
    def opacity(self) -> float:
        """Card opacity: opaque in the middle, fading out at ±200."""
        return interpolate(
            self.offset,
            Settings.OPACITY_INPUT,
            Settings.OPACITY_OUTPUT,
        )

    @property
    def left_badge_opacity(self) -> float:
        """Visibility of the "save for later" badge."""
        return interpolate(
            self.offset,
            Settings.LEFT_BADGE_INPUT,
            Settings.LEFT_BADGE_OUTPUT,
        )

    @property
    def right_badge_opacity(self) -> float:
        """Visibility of the "add to cart" badge."""
        return interpolate(
            self.offset,
            Settings.RIGHT_BADGE_INPUT,
            Settings.RIGHT_BADGE_OUTPUT,
        )
