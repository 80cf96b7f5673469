"""
规则引擎 - 牌型识别、大小比较、叫分比较、结算倍数

所有方法都是纯函数，无状态
"""
from typing import List, Optional, Dict, Iterable
from collections import defaultdict

from .cards import Card, Rank, count_ranks
from .actions import (
    Hand,
    HandType,
    Move,
    PASS,
    MIN_STRAIGHT_LEN,
    MIN_STRAIGHT_PAIR_LEN,
    MIN_AIRPLANE_LEN,
)

MAX_BID = 3


class RuleEngine:
    """
    斗地主规则引擎

    提供牌型识别、大小比较、叫分比较等功能
    所有方法都是静态方法，无状态
    """

    @staticmethod
    def is_consecutive(ranks: List[int]) -> bool:
        """
        检查牌面值列表是否连续

        Args:
            ranks: 已排序的牌面值列表

        Returns:
            是否连续
        """
        for i in range(len(ranks) - 1):
            if ranks[i + 1] - ranks[i] != 1:
                return False
        return True

    @staticmethod
    def classify(cards: List[Card]) -> Optional[Hand]:
        """
        识别牌型

        Args:
            cards: 牌列表

        Returns:
            牌型与强度，无法识别时返回 None
        """
        if not cards:
            return None

        n = len(cards)
        counter = count_ranks(cards)
        unique_ranks = sorted(counter.keys())
        n_ranks = len(unique_ranks)

        # 张数 -> 该张数的牌面值 (已排序)
        groups: Dict[int, List[int]] = defaultdict(list)
        for rank in unique_ranks:
            groups[counter[rank]].append(rank)

        # 两张王只能组成王炸
        if counter.get(Rank.BLACK_JOKER) == 1 and counter.get(Rank.RED_JOKER) == 1:
            if n == 2:
                return Hand(HandType.ROCKET, Rank.RED_JOKER)
            return None

        # 单张、对子、三张、炸弹
        if n_ranks == 1:
            by_count = {
                1: HandType.SINGLE,
                2: HandType.PAIR,
                3: HandType.TRIPLET,
                4: HandType.BOMB,
            }
            if n in by_count:
                return Hand(by_count[n], unique_ranks[0])
            return None

        # 三带一 / 三带二
        if n_ranks == 2 and len(groups.get(3, [])) == 1:
            if n == 4:
                return Hand(HandType.TRIPLET_WITH_SINGLE, groups[3][0])
            if n == 5:
                return Hand(HandType.TRIPLET_WITH_PAIR, groups[3][0])

        # 顺子、连对、飞机不带: 所有牌面值连续且张数相同
        if RuleEngine.is_consecutive(unique_ranks) and len(groups) == 1:
            low = unique_ranks[0]
            # 2 和王不能参与顺子与连对
            if unique_ranks[-1] <= Rank.ACE:
                if groups.get(1) and n_ranks >= MIN_STRAIGHT_LEN:
                    return Hand(HandType.STRAIGHT, low)
                if groups.get(2) and n_ranks >= MIN_STRAIGHT_PAIR_LEN:
                    return Hand(HandType.STRAIGHT_OF_PAIRS, low)
            if groups.get(3) and n_ranks >= MIN_AIRPLANE_LEN:
                return Hand(HandType.STRAIGHT_OF_TRIPLETS, low)

        # 飞机带翅膀: 每个三张恰好带一个不同的单张或对子
        triplets = groups.get(3, [])
        if len(triplets) >= MIN_AIRPLANE_LEN and RuleEngine.is_consecutive(triplets):
            k = len(triplets)
            wings = [r for r in unique_ranks if counter[r] != 3]
            if len(wings) == k:
                wing_counts = {counter[r] for r in wings}
                if wing_counts == {1}:
                    return Hand(HandType.STRAIGHT_OF_TRIPLETS_WITH_SINGLES, triplets[0])
                if wing_counts == {2}:
                    return Hand(HandType.STRAIGHT_OF_TRIPLETS_WITH_PAIRS, triplets[0])

        # 四带二: 两个单张或两个对子
        if n_ranks == 3 and len(groups.get(4, [])) == 1:
            if len(groups.get(1, [])) == 2 or len(groups.get(2, [])) == 2:
                return Hand(HandType.QUADPLEX_SET, groups[4][0])

        return None

    @staticmethod
    def compare_hands(a: Optional[Hand], b: Optional[Hand], len_a: int, len_b: int) -> bool:
        """
        判断牌型 a 能否打过牌型 b

        Args:
            a: 新出的牌型
            b: 桌面上的牌型
            len_a: a 的张数
            len_b: b 的张数

        Returns:
            a 是否严格大于 b
        """
        # 无法识别的牌型打不过任何牌
        if a is None:
            return False

        # 桌面上没有需要打过的牌
        if b is None:
            return True

        # 王炸最大，王炸之间不分大小
        if a.type == HandType.ROCKET:
            return b.type != HandType.ROCKET

        # 炸弹打过除王炸及更大炸弹以外的所有牌
        if a.type == HandType.BOMB:
            if b.type == HandType.ROCKET:
                return False
            if b.type == HandType.BOMB:
                return a.strength > b.strength
            return True

        # 同牌型、同张数才能比较
        if a.type == b.type and len_a == len_b:
            return a.strength > b.strength

        return False

    @staticmethod
    def can_beat_hand(new_cards: List[Card], current_cards: List[Card]) -> bool:
        """
        检查新出的牌能否打过桌面上的牌

        Args:
            new_cards: 要出的牌
            current_cards: 桌面上的牌 (空列表表示主动出牌)

        Returns:
            是否能打过
        """
        return RuleEngine.compare_hands(
            RuleEngine.classify(new_cards),
            RuleEngine.classify(current_cards),
            len(new_cards),
            len(current_cards),
        )

    @staticmethod
    def can_beat_bid(bid, accepted_bid: int) -> bool:
        """
        检查叫分是否合法

        Args:
            bid: 叫分
            accepted_bid: 当前最高叫分 (初始为 0)

        Returns:
            是否为 1-3 的整数且严格大于当前叫分
        """
        # bool 是 int 的子类，不算作叫分
        if not isinstance(bid, int) or isinstance(bid, bool):
            return False
        return 1 <= bid <= MAX_BID and bid > accepted_bid

    @staticmethod
    def count_bombs(moves: Iterable[Move]) -> int:
        """统计出牌历史中的炸弹与王炸数量"""
        total = 0
        for move in moves:
            if move == PASS:
                continue
            hand = RuleEngine.classify(move)
            if hand is not None and hand.is_bomb:
                total += 1
        return total

    @staticmethod
    def calculate_stake(accepted_bid: int, bombs_count: int) -> int:
        """
        计算每对输赢玩家之间的赌注

        Args:
            accepted_bid: 最终叫分 (1-3)
            bombs_count: 本局打出的炸弹与王炸总数

        Returns:
            叫分 × 2^炸弹数
        """
        return accepted_bid * (2 ** bombs_count)
