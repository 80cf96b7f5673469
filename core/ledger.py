"""
积分账本

零和支付矩阵，按玩家下标对齐:
- payments[a][b]: a 欠 b 的数额 (payments[b][a] == -payments[a][b])
- payments[a][a]: 别人欠 a 的总额 - a 欠别人的总额 (净收益)
"""
from typing import Dict, List, Any
import logging

import numpy as np

logger = logging.getLogger(__name__)


class ScoreLedger:
    """
    积分账本

    交易在同一服务器的多局之间累加，本模块不做跨局清算
    """

    def __init__(self, player_names: List[str]):
        """
        Args:
            player_names: 玩家名，下标与 payments 矩阵对齐
        """
        self.player_names = list(player_names)
        n = len(self.player_names)
        self.payments = np.zeros((n, n), dtype=np.int64)

    def record_transaction(self, from_index: int, to_index: int, amount: int) -> None:
        """
        记录一笔从 from_index 到 to_index 的支付，并增量更新双方的净收益

        Args:
            from_index: 付款玩家下标
            to_index: 收款玩家下标
            amount: 金额
        """
        if from_index == to_index:
            raise ValueError("A player cannot pay themselves")

        self.payments[from_index, to_index] += amount
        self.payments[to_index, from_index] -= amount
        self.payments[from_index, from_index] -= amount
        self.payments[to_index, to_index] += amount

        logger.debug(
            f"Ledger: {self.player_names[from_index]} -> "
            f"{self.player_names[to_index]} {amount}"
        )

    def balance(self, index: int) -> int:
        """指定玩家的净收益"""
        return int(self.payments[index, index])

    def balances(self) -> Dict[str, int]:
        """所有玩家的净收益"""
        return {name: self.balance(i) for i, name in enumerate(self.player_names)}

    def is_balanced(self) -> bool:
        """
        检查账本不变式

        - 非对角线部分反对称
        - 对角线等于该行其余元素之和的相反数
        """
        diag = np.diag(self.payments)
        off_diag = self.payments - np.diag(diag)
        if not np.array_equal(off_diag, -off_diag.T):
            return False
        return bool(np.array_equal(diag, -off_diag.sum(axis=1)))

    def reset(self) -> None:
        """清空所有交易"""
        self.payments[:] = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_names": list(self.player_names),
            "payments": self.payments.tolist(),
        }

    def __repr__(self) -> str:
        return f"ScoreLedger(balances={self.balances()})"
