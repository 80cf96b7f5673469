"""积分账本测试"""
import numpy as np
import pytest

from core.ledger import ScoreLedger


class TestScoreLedger:
    """ScoreLedger 测试"""

    def test_initial(self):
        ledger = ScoreLedger(["a", "b", "c"])
        assert ledger.payments.shape == (3, 3)
        assert ledger.payments.sum() == 0
        assert ledger.balances() == {"a": 0, "b": 0, "c": 0}
        assert ledger.is_balanced()

    def test_record_transaction(self):
        ledger = ScoreLedger(["a", "b", "c"])
        ledger.record_transaction(0, 1, 5)

        assert ledger.payments[0, 1] == 5
        assert ledger.payments[1, 0] == -5
        assert ledger.balance(0) == -5
        assert ledger.balance(1) == 5
        assert ledger.balance(2) == 0

    def test_invariants_after_settlement(self):
        ledger = ScoreLedger(["a", "b", "c"])
        # 地主 (1) 赢两位农民
        ledger.record_transaction(0, 1, 4)
        ledger.record_transaction(2, 1, 4)
        # 下一局农民赢
        ledger.record_transaction(1, 0, 2)
        ledger.record_transaction(1, 2, 2)

        p = ledger.payments
        for a in range(3):
            for b in range(3):
                if a != b:
                    assert p[a, b] == -p[b, a]
            assert p[a, a] == -sum(p[a, x] for x in range(3) if x != a)
        assert ledger.is_balanced()
        assert ledger.balances() == {"a": -2, "b": 4, "c": -2}

    def test_zero_sum(self):
        ledger = ScoreLedger(["a", "b", "c"])
        ledger.record_transaction(0, 2, 3)
        ledger.record_transaction(1, 2, 3)
        assert int(np.diag(ledger.payments).sum()) == 0

    def test_accumulates(self):
        ledger = ScoreLedger(["a", "b", "c"])
        ledger.record_transaction(0, 1, 1)
        ledger.record_transaction(0, 1, 2)
        assert ledger.payments[0, 1] == 3
        assert ledger.balance(1) == 3

    def test_self_payment_rejected(self):
        ledger = ScoreLedger(["a", "b", "c"])
        with pytest.raises(ValueError):
            ledger.record_transaction(1, 1, 5)

    def test_is_balanced_detects_corruption(self):
        ledger = ScoreLedger(["a", "b", "c"])
        ledger.record_transaction(0, 1, 1)
        ledger.payments[0, 2] = 7
        assert not ledger.is_balanced()

    def test_reset(self):
        ledger = ScoreLedger(["a", "b", "c"])
        ledger.record_transaction(0, 1, 1)
        ledger.reset()
        assert ledger.balances() == {"a": 0, "b": 0, "c": 0}

    def test_to_dict(self):
        ledger = ScoreLedger(["a", "b", "c"])
        ledger.record_transaction(2, 0, 6)
        d = ledger.to_dict()
        assert d["player_names"] == ["a", "b", "c"]
        assert d["payments"][2][0] == 6
        assert d["payments"][0][0] == 6
