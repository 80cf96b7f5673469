"""
牌的定义、建牌与发牌

斗地主使用 54 张牌：
- 3-10, J, Q, K, A, 2 各 4 张 (四种花色)
- 小王、大王各 1 张

牌面值即比较优先级: 3..14 为 3..A, 15 为 2, 16/17 为小王/大王
"""
from enum import IntEnum
from dataclasses import dataclass
from typing import List, Dict, Tuple, Iterable
from collections import Counter
import random

from .exceptions import InvalidPlayerCountError


class Rank(IntEnum):
    """牌面值定义 (数值越大越强)"""
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14
    TWO = 15
    BLACK_JOKER = 16
    RED_JOKER = 17


SUITS: Tuple[str, ...] = ("hearts", "diamonds", "clubs", "spades")
JOKER_SUIT = "joker"

NUM_PLAYERS = 3
HAND_SIZE = 17
KITTY_SIZE = 3
DECK_SIZE = 54

# 牌面值到显示字符的映射
RANK_TO_STR: Dict[int, str] = {
    3: '3', 4: '4', 5: '5', 6: '6', 7: '7',
    8: '8', 9: '9', 10: '10', 11: 'J', 12: 'Q',
    13: 'K', 14: 'A', 15: '2', 16: 'X', 17: 'D'
}

# 显示字符到牌面值的映射
STR_TO_RANK: Dict[str, int] = {v: k for k, v in RANK_TO_STR.items()}


@dataclass(frozen=True, slots=True)
class Card:
    """
    单张牌

    Attributes:
        rank: 牌面值 (3..17)
        suit: 花色，仅用于区分相同牌面值的牌
    """
    rank: int
    suit: str

    @property
    def is_joker(self) -> bool:
        return self.rank >= Rank.BLACK_JOKER

    def __str__(self) -> str:
        return RANK_TO_STR.get(self.rank, '?')


def build_deck(rng: random.Random) -> List[Card]:
    """
    构建并洗好一副 54 张的牌

    Args:
        rng: 随机数源 (由调用方注入，便于复现)

    Returns:
        洗好的牌列表
    """
    deck = [
        Card(rank, suit)
        for rank in range(Rank.THREE, Rank.TWO + 1)
        for suit in SUITS
    ]
    deck.append(Card(Rank.BLACK_JOKER, JOKER_SUIT))
    deck.append(Card(Rank.RED_JOKER, JOKER_SUIT))

    # Fisher-Yates 原地洗牌
    rng.shuffle(deck)
    return deck


def deal(deck: List[Card], num_players: int = NUM_PLAYERS) -> List[List[Card]]:
    """
    依次给每位玩家发 17 张牌，剩下 3 张留在 deck 中作为底牌

    Args:
        deck: 洗好的牌 (原地修改)
        num_players: 玩家人数，必须为 3

    Returns:
        各玩家手牌
    """
    if num_players != NUM_PLAYERS:
        raise InvalidPlayerCountError(
            f"Number of players must be {NUM_PLAYERS}, got {num_players}"
        )

    hands = []
    for _ in range(num_players):
        hands.append(deck[:HAND_SIZE])
        del deck[:HAND_SIZE]
    return hands


def count_ranks(cards: Iterable[Card]) -> Counter:
    """牌面值 -> 张数"""
    return Counter(card.rank for card in cards)


def cards_to_str(cards: List[Card]) -> str:
    """
    将牌列表转换为可读字符串

    Args:
        cards: 牌列表

    Returns:
        如 "3 4 5 6 7" 或 "J Q K A 2 X D"
    """
    return ' '.join(str(c) for c in sorted(cards, key=lambda c: (c.rank, c.suit)))


def str_to_cards(s: str) -> List[Card]:
    """
    将字符串转换为牌列表

    花色按出现顺序依次分配，同一牌面值最多 4 张

    Args:
        s: 牌字符串，如 "34567"、"3 3 10 10" 或 "XD"

    Returns:
        牌列表
    """
    s = s.replace(' ', '').upper()
    ranks = []
    i = 0
    while i < len(s):
        if s[i:i+2] == '10':
            ranks.append(10)
            i += 2
        else:
            if s[i] not in STR_TO_RANK:
                raise ValueError(f"Unknown card symbol: {s[i]!r}")
            ranks.append(STR_TO_RANK[s[i]])
            i += 1

    seen: Counter = Counter()
    cards = []
    for rank in ranks:
        if rank >= Rank.BLACK_JOKER:
            if seen[rank]:
                raise ValueError(f"Only one card of rank {rank} exists")
            cards.append(Card(rank, JOKER_SUIT))
        else:
            if seen[rank] >= len(SUITS):
                raise ValueError(f"Only {len(SUITS)} cards of rank {rank} exist")
            cards.append(Card(rank, SUITS[seen[rank]]))
        seen[rank] += 1
    return cards
