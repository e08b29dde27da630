"""
Tests for the tracker cell transition cycle.
"""
import pytest

from backend.services.transition_service import can_afford_rest, resolve_next_status


class TestResolveNextStatus:
    """Tests for resolve_next_status"""

    def test_pending_becomes_completed(self):
        assert resolve_next_status(None, 1, 0) == "COMPLETED"
        assert resolve_next_status("PENDING", 1, 0) == "COMPLETED"

    def test_completed_rests_when_affordable(self):
        assert resolve_next_status("COMPLETED", 1, 10) == "REST_USED"

    def test_completed_misses_when_unaffordable(self):
        assert resolve_next_status("COMPLETED", 1, 9) == "MISSED"

    def test_rest_cost_uses_multiplier(self):
        assert resolve_next_status("COMPLETED", 3, 29) == "MISSED"
        assert resolve_next_status("COMPLETED", 3, 30) == "REST_USED"

    def test_negative_balance_cannot_rest(self):
        assert resolve_next_status("COMPLETED", 1, -7) == "MISSED"

    def test_rest_becomes_missed(self):
        assert resolve_next_status("REST_USED", 1, 1000) == "MISSED"

    def test_missed_becomes_pending(self):
        assert resolve_next_status("MISSED", 1, 1000) == "PENDING"

    def test_full_cycle_with_enough_balance(self):
        """Four clicks from an empty cell walk the whole cycle"""
        status = None
        seen = []
        for _ in range(4):
            status = resolve_next_status(status, 2, 100)
            seen.append(status)
        assert seen == ["COMPLETED", "REST_USED", "MISSED", "PENDING"]

    def test_full_cycle_without_balance_skips_rest(self):
        status = None
        seen = []
        for _ in range(3):
            status = resolve_next_status(status, 1, 0)
            seen.append(status)
        assert seen == ["COMPLETED", "MISSED", "PENDING"]


class TestCanAffordRest:
    """Tests for can_afford_rest"""

    @pytest.mark.parametrize("multiplier,balance,expected", [
        (1, 10, True),
        (1, 9, False),
        (10, 100, True),
        (10, 99, False),
    ])
    def test_threshold(self, multiplier, balance, expected):
        assert can_afford_rest(multiplier, balance) is expected
