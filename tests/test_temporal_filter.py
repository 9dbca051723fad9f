"""
Tests for the Stability Filter
===============================
"""

import pytest

from reaction_mirror.core.types import GestureLabel
from reaction_mirror.modules.recognition.temporal_filter import StabilityFilter

THINKING = GestureLabel.THINKING
CONFIRMED = GestureLabel.CONFIRMED
NEUTRAL = GestureLabel.NEUTRAL


def feed(stability_filter, labels):
    return [stability_filter.observe(label) for label in labels]


class TestStabilityFilter:
    """Test suite for the unanimity window."""

    def test_first_frame_emits(self):
        f = StabilityFilter(3)
        assert f.observe(THINKING) == THINKING
        assert f.last_emitted == THINKING

    def test_unanimous_window_emits_every_frame(self):
        f = StabilityFilter(3)
        assert feed(f, [THINKING] * 3) == [THINKING] * 3

    def test_disagreement_suppresses(self):
        f = StabilityFilter(3)
        assert feed(f, [THINKING, THINKING, CONFIRMED]) == [THINKING, THINKING, None]
        # Display is held on the last unanimous label
        assert f.last_emitted == THINKING

    def test_transition_needs_full_window(self):
        f = StabilityFilter(3)
        labels = [THINKING] * 3 + [CONFIRMED] * 3
        assert feed(f, labels) == [THINKING] * 3 + [None, None, CONFIRMED]
        assert f.last_emitted == CONFIRMED

    def test_single_outlier_does_not_flicker(self):
        f = StabilityFilter(3)
        outputs = feed(f, [NEUTRAL] * 4 + [THINKING] + [NEUTRAL] * 3)
        assert THINKING not in outputs
        assert outputs[-1] == NEUTRAL

    def test_window_size_one_passes_through(self):
        f = StabilityFilter(1)
        labels = [NEUTRAL, THINKING, CONFIRMED, THINKING]
        assert feed(f, labels) == labels

    def test_window_never_exceeds_size(self):
        f = StabilityFilter(3)
        for i, label in enumerate([NEUTRAL, THINKING, CONFIRMED, NEUTRAL, THINKING]):
            f.observe(label)
            assert len(f.window) == min(i + 1, 3)
        # Oldest entries are evicted first
        assert f.window == (CONFIRMED, NEUTRAL, THINKING)

    def test_window_fill(self):
        f = StabilityFilter(4)
        assert f.window_fill == 0.0
        feed(f, [NEUTRAL, NEUTRAL])
        assert f.window_fill == 0.5

    def test_reset(self):
        f = StabilityFilter(3)
        feed(f, [THINKING, THINKING, CONFIRMED])
        f.reset()
        assert f.window == ()
        assert f.last_emitted is None
        # After a reset the next frame emits immediately again
        assert f.observe(CONFIRMED) == CONFIRMED

    @pytest.mark.parametrize("size", [0, -1, True, 2.5, "3"])
    def test_invalid_window_size(self, size):
        with pytest.raises(ValueError):
            StabilityFilter(size)

    def test_default_window_size(self):
        assert StabilityFilter().window_size == 3
