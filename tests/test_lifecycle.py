# ============================================================================
# LIFECYCLE STATE TESTS
# ============================================================================
# STATUS: Tests - Phase transitions
# PURPOSE: Verify the one-way STARTING -> SERVING -> DRAINING -> STOPPED order
# CREATED: 18 OCT 2026
# ============================================================================
"""
Tests for LifecycleState.

Run with:
    pytest tests/test_lifecycle.py -v
"""

import pytest

from health import LifecyclePhase, LifecycleState, LifecycleTransitionError


class TestTransitions:

    def test_initial_phase_is_starting(self):
        state = LifecycleState()
        assert state.phase == LifecyclePhase.STARTING
        assert not state.is_ready
        assert state.is_alive
        assert state.entered_at(LifecyclePhase.STARTING) is not None
        assert state.entered_at(LifecyclePhase.SERVING) is None

    def test_full_sequence(self):
        state = LifecycleState()

        state.mark_serving()
        assert state.phase == LifecyclePhase.SERVING
        assert state.is_ready

        state.begin_draining()
        assert state.phase == LifecyclePhase.DRAINING
        assert not state.is_ready
        assert state.is_alive

        state.mark_stopped()
        assert state.phase == LifecyclePhase.STOPPED
        assert not state.is_alive
        assert state.phase.next_phase is None

    def test_cannot_skip_serving(self):
        state = LifecycleState()
        with pytest.raises(LifecycleTransitionError) as exc_info:
            state.begin_draining()
        assert exc_info.value.current == "starting"
        assert exc_info.value.requested == "draining"
        assert state.phase == LifecyclePhase.STARTING

    def test_cannot_go_backwards(self):
        state = LifecycleState()
        state.mark_serving()
        state.begin_draining()
        with pytest.raises(LifecycleTransitionError):
            state.mark_serving()
        assert state.phase == LifecyclePhase.DRAINING

    def test_each_phase_entered_once(self):
        state = LifecycleState()
        state.mark_serving()
        with pytest.raises(LifecycleTransitionError):
            state.mark_serving()

    def test_no_transition_out_of_stopped(self):
        state = LifecycleState()
        state.mark_serving()
        state.begin_draining()
        state.mark_stopped()
        assert LifecyclePhase.STOPPED.next_phase is None
        with pytest.raises(LifecycleTransitionError):
            state.mark_stopped()

    def test_to_dict(self):
        state = LifecycleState()
        state.mark_serving()
        assert state.to_dict() == {"phase": "serving", "ready": True, "alive": True}
