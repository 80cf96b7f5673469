"""
牌型、消息定义与出牌提示生成器

斗地主共有 13 种牌型；玩家消息分为叫分消息与出牌消息两种
"""
from enum import Enum
from dataclasses import dataclass
from typing import List, Dict, Tuple, Union, Iterator
from collections import defaultdict
import itertools

from .cards import Card, Rank


class HandType(Enum):
    """牌型 (按 pagat.com 的强度顺序列出)"""
    SINGLE = "single"                                                  # 单张
    PAIR = "pair"                                                      # 对子
    TRIPLET = "triplet"                                                # 三张
    TRIPLET_WITH_SINGLE = "tripletWithSingle"                          # 三带一
    TRIPLET_WITH_PAIR = "tripletWithPair"                              # 三带二
    STRAIGHT = "straight"                                              # 顺子
    STRAIGHT_OF_PAIRS = "straightOfPairs"                              # 连对
    STRAIGHT_OF_TRIPLETS = "straightOfTriplets"                        # 飞机不带
    STRAIGHT_OF_TRIPLETS_WITH_SINGLES = "straightOfTripletsWithSingles"  # 飞机带单
    STRAIGHT_OF_TRIPLETS_WITH_PAIRS = "straightOfTripletsWithPairs"    # 飞机带对
    QUADPLEX_SET = "quadplexSet"                                       # 四带二
    BOMB = "bomb"                                                      # 炸弹
    ROCKET = "rocket"                                                  # 王炸


# 顺子/连对/飞机的最小长度
MIN_STRAIGHT_LEN = 5     # 顺子至少 5 张
MIN_STRAIGHT_PAIR_LEN = 3  # 连对至少 3 对
MIN_AIRPLANE_LEN = 2     # 飞机至少 2 个三张


@dataclass(frozen=True, slots=True)
class Hand:
    """
    牌型识别结果

    Attributes:
        type: 牌型
        strength: 同牌型内的比较键 (主牌面值或顺子最小牌面值)
    """
    type: HandType
    strength: int

    @property
    def is_bomb(self) -> bool:
        """炸弹或王炸 (结算时翻倍)"""
        return self.type in (HandType.BOMB, HandType.ROCKET)


PASS = "pass"

Bid = Union[int, str]
Move = Union[List[Card], str]


@dataclass(frozen=True)
class BidMessage:
    """叫分消息: 1/2/3 或 "pass" """
    bid: Bid


@dataclass(frozen=True)
class MoveMessage:
    """出牌消息: 牌列表或 "pass" """
    move: Move


Message = Union[BidMessage, MoveMessage]


class MoveGenerator:
    """
    出牌提示生成器

    根据手牌生成所有可组成的牌型，返回手中的具体牌
    """

    def __init__(self, hand_cards: List[Card]):
        """
        Args:
            hand_cards: 手牌列表
        """
        self.hand = list(hand_cards)
        self.by_rank: Dict[int, List[Card]] = defaultdict(list)

        for card in self.hand:
            self.by_rank[card.rank].append(card)

    def _ranks_with(self, count: int) -> List[int]:
        """至少有 count 张的牌面值"""
        return sorted(r for r, cards in self.by_rank.items() if len(cards) >= count)

    def _take(self, parts: List[Tuple[int, int]]) -> List[Card]:
        """按 (牌面值, 张数) 从手牌中取出具体的牌"""
        cards = []
        for rank, count in parts:
            cards.extend(self.by_rank[rank][:count])
        return cards

    @staticmethod
    def _runs(ranks: List[int], min_len: int, max_rank: int) -> Iterator[List[int]]:
        """生成所有长度不小于 min_len 的连续牌面值序列"""
        ranks = [r for r in ranks if r <= max_rank]
        for start in range(len(ranks)):
            for end in range(start + min_len, len(ranks) + 1):
                seq = ranks[start:end]
                if seq[-1] - seq[0] != len(seq) - 1:
                    break
                yield seq

    def _candidates(self) -> Iterator[List[Tuple[int, int]]]:
        singles = self._ranks_with(1)
        pairs = self._ranks_with(2)
        triples = self._ranks_with(3)
        bombs = self._ranks_with(4)

        # 基础牌型
        for r in singles:
            yield [(r, 1)]
        for r in pairs:
            yield [(r, 2)]
        for r in triples:
            yield [(r, 3)]
        for r in bombs:
            yield [(r, 4)]
        if Rank.BLACK_JOKER in self.by_rank and Rank.RED_JOKER in self.by_rank:
            yield [(Rank.BLACK_JOKER, 1), (Rank.RED_JOKER, 1)]

        # 三带
        for t in triples:
            for s in singles:
                if s != t:
                    yield [(t, 3), (s, 1)]
            for p in pairs:
                if p != t:
                    yield [(t, 3), (p, 2)]

        # 连续牌型
        for seq in self._runs(singles, MIN_STRAIGHT_LEN, Rank.ACE):
            yield [(r, 1) for r in seq]
        for seq in self._runs(pairs, MIN_STRAIGHT_PAIR_LEN, Rank.ACE):
            yield [(r, 2) for r in seq]
        for seq in self._runs(triples, MIN_AIRPLANE_LEN, Rank.TWO):
            airplane = [(r, 3) for r in seq]
            yield airplane

            # 飞机带翅膀
            wings = [s for s in singles if s not in seq]
            for combo in itertools.combinations(wings, len(seq)):
                yield airplane + [(r, 1) for r in combo]
            wings = [p for p in pairs if p not in seq]
            for combo in itertools.combinations(wings, len(seq)):
                yield airplane + [(r, 2) for r in combo]

        # 四带二
        for q in bombs:
            others = [s for s in singles if s != q]
            for combo in itertools.combinations(others, 2):
                yield [(q, 4)] + [(r, 1) for r in combo]
            others = [p for p in pairs if p != q]
            for combo in itertools.combinations(others, 2):
                yield [(q, 4)] + [(r, 2) for r in combo]

    def generate_all(self) -> List[List[Card]]:
        """
        生成所有可能的出牌 (主动出牌)

        Returns:
            所有可被识别的出牌列表
        """
        from .rules import RuleEngine

        moves = []
        for parts in self._candidates():
            cards = self._take(parts)
            if RuleEngine.classify(cards) is not None:
                moves.append(cards)
        return moves

    def generate_responses(self, current_hand: List[Card]) -> List[List[Card]]:
        """
        生成能打过桌面牌的出牌 (不含 pass)

        Args:
            current_hand: 桌面上需要打过的牌，空列表表示主动出牌

        Returns:
            合法出牌列表
        """
        from .rules import RuleEngine

        if not current_hand:
            return self.generate_all()
        return [
            cards for cards in self.generate_all()
            if RuleEngine.can_beat_hand(cards, current_hand)
        ]
