"""
Input adapter: turns key codes and swipe gestures into engine commands.

Key codes follow the browser KeyboardEvent.code names (ArrowUp, KeyW, Space...).
"""

from typing import Optional, Sequence

from domain.constants import UP, DOWN, LEFT, RIGHT, MIN_SWIPE_DISTANCE

KEY_MAP = {
    'ArrowUp': UP,
    'ArrowDown': DOWN,
    'ArrowLeft': LEFT,
    'ArrowRight': RIGHT,
    'KeyW': UP,
    'KeyS': DOWN,
    'KeyA': LEFT,
    'KeyD': RIGHT,
}

PAUSE_KEY = 'Space'


def direction_for_key(code: str) -> Optional[str]:
    return KEY_MAP.get(code)


def classify_swipe(
    start: Sequence[float],
    end: Sequence[float],
    min_distance: float = MIN_SWIPE_DISTANCE
) -> Optional[str]:
    """
    Classify a touch gesture from its start and end points.

    Returns None when neither axis moved at least `min_distance`.
    The dominant axis wins; an exact diagonal counts as vertical.
    """
    delta_x = end[0] - start[0]
    delta_y = end[1] - start[1]

    if abs(delta_x) < min_distance and abs(delta_y) < min_distance:
        return None

    if abs(delta_x) > abs(delta_y):
        return RIGHT if delta_x > 0 else LEFT
    return DOWN if delta_y > 0 else UP


def handle_key(engine, code: str) -> bool:
    """
    Apply a key press to the engine.

    Space restarts a stopped game and toggles pause on a running one.
    Returns True when the key was consumed.
    """
    if code == PAUSE_KEY:
        if not engine.running:
            engine.restart()
        else:
            engine.toggle_pause()
        return True

    if not engine.running or engine.paused:
        return False

    direction = direction_for_key(code)
    if direction is None:
        return False
    engine.set_direction(direction)
    return True


def handle_swipe(engine, start: Sequence[float], end: Sequence[float]) -> Optional[str]:
    """Apply a swipe; returns the recognised direction, or None for a tap."""
    direction = classify_swipe(start, end)
    if direction is not None:
        engine.set_direction(direction)
    return direction
