"""Tests for optimistic local markers."""

import pytest

from projectreview.core.errors import StaleTokenError
from projectreview.core.optimistic import OptimisticLedger


class TestOptimisticLedger:
    """Test apply/confirm/rollback."""

    def test_apply_and_confirm(self):
        """Test a confirmed marker is released."""
        ledger = OptimisticLedger()
        token = ledger.apply_local_marker("FILE_1", "under_review", previous="completed")

        assert ledger.is_pending("FILE_1")
        assert ledger.marker_for("FILE_1") == "under_review"
        assert ledger.confirm(token) == "under_review"
        assert not ledger.is_pending("FILE_1")
        assert ledger.marker_for("FILE_1") is None

    def test_rollback_returns_previous(self):
        """Test rollback hands back the replaced value."""
        ledger = OptimisticLedger()
        token = ledger.apply_local_marker("FILE_1", "under_review", previous="completed")

        assert ledger.rollback(token) == "completed"
        assert ledger.pending_keys == []

    def test_one_marker_per_key(self):
        """Test a second marker for the same key is refused."""
        ledger = OptimisticLedger()
        ledger.apply_local_marker("FILE_1", "approve")
        with pytest.raises(ValueError):
            ledger.apply_local_marker("FILE_1", "reject")

    def test_independent_keys(self):
        """Test markers on different keys coexist."""
        ledger = OptimisticLedger()
        ledger.apply_local_marker("FILE_1", "approve")
        ledger.apply_local_marker("FILE_2", "reject")
        assert sorted(ledger.pending_keys) == ["FILE_1", "FILE_2"]

    def test_token_single_use(self):
        """Test settling a token twice raises."""
        ledger = OptimisticLedger()
        token = ledger.apply_local_marker("FILE_1", "approve")
        ledger.confirm(token)

        with pytest.raises(StaleTokenError):
            ledger.rollback(token)

    def test_old_token_cannot_settle_new_marker(self):
        """Test a stale token does not release a newer marker."""
        ledger = OptimisticLedger()
        old = ledger.apply_local_marker("FILE_1", "approve")
        ledger.rollback(old)
        ledger.apply_local_marker("FILE_1", "reject")

        with pytest.raises(StaleTokenError):
            ledger.confirm(old)
        assert ledger.marker_for("FILE_1") == "reject"
