# tests/test_swipe_gesture.py

"""Tests for the drag-to-decide state machine."""

import unittest

from src.interaction.swipe_gesture import (
    GestureState,
    SwipeGesture,
    interpolate,
)


class TestInterpolate(unittest.TestCase):
    """Clamped piecewise-linear interpolation."""

    def test_midpoints(self) -> None:
        self.assertEqual(interpolate(0, [-200, 200], [-25, 25]), 0)
        self.assertEqual(interpolate(100, [-200, 200], [-25, 25]), 12.5)

    def test_clamped_outside_range(self) -> None:
        self.assertEqual(interpolate(-999, [-200, 200], [-25, 25]), -25)
        self.assertEqual(interpolate(999, [-200, 200], [-25, 25]), 25)

    def test_multi_segment(self) -> None:
        xs = [-200, -100, 0, 100, 200]
        ys = [0, 1, 1, 1, 0]
        self.assertEqual(interpolate(-150, xs, ys), 0.5)
        self.assertEqual(interpolate(50, xs, ys), 1)
        self.assertEqual(interpolate(150, xs, ys), 0.5)

    def test_mismatched_points_rejected(self) -> None:
        with self.assertRaises(ValueError):
            interpolate(0, [0, 1], [0])


class TestSwipeGesture(unittest.TestCase):
    """Idle -> Dragging -> Committed / Idle transitions."""

    def _drag(self, offset: float) -> tuple[SwipeGesture, str | None]:
        gesture = SwipeGesture()
        gesture.press()
        gesture.drag_to(offset)
        return gesture, gesture.release()

    def test_release_at_threshold_springs_back(self) -> None:
        """|d| <= 100 records nothing."""
        for offset in (100, -100, 0, 42):
            with self.subTest(offset=offset):
                gesture, direction = self._drag(offset)
                self.assertIsNone(direction)
                self.assertIs(gesture.state, GestureState.IDLE)
                self.assertEqual(gesture.offset, 0)

    def test_release_beyond_threshold_commits(self) -> None:
        gesture, direction = self._drag(100.5)
        self.assertEqual(direction, "right")
        self.assertIs(gesture.state, GestureState.COMMITTED)

        gesture, direction = self._drag(-150)
        self.assertEqual(direction, "left")

    def test_committed_is_terminal(self) -> None:
        gesture, _ = self._drag(300)
        self.assertFalse(gesture.press())
        gesture.drag_to(-300)
        self.assertIsNone(gesture.release())
        self.assertEqual(gesture.direction, "right")

    def test_press_ignored_while_dragging(self) -> None:
        gesture = SwipeGesture()
        self.assertTrue(gesture.press())
        self.assertFalse(gesture.press())

    def test_drag_ignored_when_idle(self) -> None:
        gesture = SwipeGesture()
        gesture.drag_to(150)
        self.assertEqual(gesture.offset, 0)
        self.assertIsNone(gesture.release())

    def test_can_drag_again_after_spring_back(self) -> None:
        gesture, _ = self._drag(50)
        gesture.press()
        gesture.drag_to(120)
        self.assertEqual(gesture.release(), "right")

    def test_visuals(self) -> None:
        gesture = SwipeGesture()
        gesture.press()
        gesture.drag_to(200)
        self.assertEqual(gesture.rotation, 25)
        self.assertEqual(gesture.opacity, 0)
        self.assertEqual(gesture.right_badge_opacity, 1)
        self.assertEqual(gesture.left_badge_opacity, 0)

        gesture.drag_to(-125)
        self.assertAlmostEqual(gesture.left_badge_opacity, 0.5)
        self.assertAlmostEqual(gesture.opacity, 0.75)
        self.assertEqual(gesture.right_badge_opacity, 0)

    def test_custom_threshold(self) -> None:
        gesture = SwipeGesture(threshold=10)
        gesture.press()
        gesture.drag_to(11)
        self.assertEqual(gesture.release(), "right")


if __name__ == "__main__":
    unittest.main()
