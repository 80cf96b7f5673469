"""
智能体

为宿主或测试提供自动出牌的玩家: 每回合根据游戏状态与出牌提示返回一条消息
"""
from typing import List, Optional
import random

from core.actions import BidMessage, MoveMessage, Message, PASS
from core.cards import Card, Rank
from core.rules import RuleEngine, MAX_BID
from core.state import GameState, Phase


class Agent:
    """智能体基类"""

    def __init__(self, name: str = "agent"):
        self.name = name

    def act(self, state: GameState, hints: List[List[Card]]) -> Optional[Message]:
        """
        选择动作

        Args:
            state: 当前游戏状态 (只读)
            hints: 当前玩家可打出的合法出牌 (叫分阶段为空)

        Returns:
            叫分/出牌消息，None 表示本回合不行动
        """
        if state.phase == Phase.AUCTION:
            return self.bid(state)
        return self.move(state, hints)

    def bid(self, state: GameState) -> Optional[Message]:
        raise NotImplementedError

    def move(self, state: GameState, hints: List[List[Card]]) -> Optional[Message]:
        raise NotImplementedError


class PassAgent(Agent):
    """什么都不做的智能体 (等同于超时)"""

    def __init__(self, name: str = "pass"):
        super().__init__(name)

    def bid(self, state: GameState) -> Optional[Message]:
        return None

    def move(self, state: GameState, hints: List[List[Card]]) -> Optional[Message]:
        return None


class RandomAgent(Agent):
    """随机智能体"""

    def __init__(self, name: str = "random", rng: Optional[random.Random] = None):
        super().__init__(name)
        self.rng = rng or random.Random()

    def bid(self, state: GameState) -> Optional[Message]:
        options = [PASS] + list(range(state.accepted_bid + 1, MAX_BID + 1))
        return BidMessage(self.rng.choice(options))

    def move(self, state: GameState, hints: List[List[Card]]) -> Optional[Message]:
        options: list = list(hints)
        # 主动出牌时不 pass
        if state.current_hand or not options:
            options.append(PASS)
        return MoveMessage(self.rng.choice(options))


class GreedyAgent(Agent):
    """
    规则智能体

    - 手中有炸弹/王炸或至少两张 2 时抬高一分叫分，否则 pass
    - 出牌时打出能打过桌面的最小非炸弹牌型，没有则 pass；主动出牌时优先出张数多的小牌
    """

    def __init__(self, name: str = "greedy"):
        super().__init__(name)

    @staticmethod
    def _is_strong(hand: List[Card]) -> bool:
        ranks = [c.rank for c in hand]
        has_rocket = Rank.BLACK_JOKER in ranks and Rank.RED_JOKER in ranks
        has_bomb = any(ranks.count(r) == 4 for r in set(ranks))
        return has_rocket or has_bomb or ranks.count(Rank.TWO) >= 2

    def bid(self, state: GameState) -> Optional[Message]:
        if self._is_strong(state.current_player.hand) and state.accepted_bid < MAX_BID:
            return BidMessage(state.accepted_bid + 1)
        return BidMessage(PASS)

    def move(self, state: GameState, hints: List[List[Card]]) -> Optional[Message]:
        if not hints:
            return MoveMessage(PASS)

        def key(cards: List[Card]):
            hand = RuleEngine.classify(cards)
            return (hand.is_bomb, hand.strength, -len(cards))

        plain = [h for h in hints if not RuleEngine.classify(h).is_bomb]
        if state.current_hand and not plain:
            # 只剩炸弹可出时留着不出
            return MoveMessage(PASS)
        return MoveMessage(min(plain or hints, key=key))
