"""Tests for ReviewState thread safety and decision handling."""

import threading

from ai_codereview.server.state import ReviewState


class TestReport:
    def test_initially_empty(self):
        state = ReviewState()
        assert state.get_report() is None
        assert state.running is False
        assert state.decision is None

    def test_publish(self):
        state = ReviewState()
        state.publish({"files": []})
        assert state.get_report() == {"files": []}

    def test_running_flag(self):
        state = ReviewState()
        state.set_running(True)
        assert state.running is True
        state.set_running(False)
        assert state.running is False


class TestDecision:
    def test_first_decision_wins(self):
        state = ReviewState()
        assert state.record_decision(False) is True
        assert state.record_decision(True) is False
        assert state.decision is False

    def test_wait_times_out(self):
        assert ReviewState().wait_for_decision(timeout=0.01) is None

    def test_wait_returns_decision_from_other_thread(self):
        state = ReviewState()
        timer = threading.Timer(0.05, state.record_decision, args=(True,))
        timer.start()
        try:
            assert state.wait_for_decision(timeout=5) is True
        finally:
            timer.cancel()

    def test_concurrent_decisions_record_once(self):
        state = ReviewState()
        recorded = []
        threads = [
            threading.Thread(target=lambda p=p: recorded.append(state.record_decision(p)))
            for p in (True, False) * 10
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert recorded.count(True) == 1
        assert state.decision in (True, False)
