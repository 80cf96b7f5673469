"""
游戏状态定义

GameState 是唯一的可变聚合根，由服务器实例独占并原地修改；
调用方可以在两次调用之间读取，但不应直接修改
"""
from dataclasses import dataclass, field
from typing import List, Optional
from enum import Enum

from .cards import Card, DECK_SIZE
from .actions import Bid, Move, PASS


class Phase(Enum):
    """游戏阶段"""
    AUCTION = "auction"  # 叫分阶段
    PLAY = "play"        # 出牌阶段


class Role(Enum):
    """玩家角色"""
    LANDLORD = "landlord"
    FARMER = "farmer"


@dataclass
class Player:
    """
    玩家

    Attributes:
        name: 玩家名
        hand: 手牌 (只由出牌状态机和底牌转移修改)
        moves: 出牌历史，pass 记为 "pass"
        role: 角色，默认为农民，叫分结束后最多被设为地主一次
        last_bid: 最近一次叫分，未叫过为 None
    """
    name: str
    hand: List[Card] = field(default_factory=list)
    moves: List[Move] = field(default_factory=list)
    role: Role = Role.FARMER
    last_bid: Optional[Bid] = None

    @property
    def last_move(self) -> Optional[Move]:
        return self.moves[-1] if self.moves else None

    @property
    def passed(self) -> bool:
        """最近一次出牌是否为 pass"""
        return self.last_move == PASS

    def remove_cards(self, cards: List[Card]) -> bool:
        """
        按值从手牌中移除指定的牌 (每张只移除第一张相等的牌，保持剩余顺序)

        任意一张不在手中时手牌保持不变

        Args:
            cards: 要移除的牌

        Returns:
            是否全部移除成功
        """
        remaining = list(self.hand)
        for card in cards:
            try:
                remaining.remove(card)
            except ValueError:
                return False
        self.hand[:] = remaining
        return True


@dataclass
class GameState:
    """
    可变游戏状态

    Attributes:
        id: 本局唯一 id (发牌时生成)
        phase: 游戏阶段
        deck: 未发出的牌 (叫分阶段为底牌)
        players: 玩家列表，下标即座位
        current_player_index: 当前行动玩家下标
        current_hand: 桌面上需要打过的牌，空列表表示无需打过任何牌
        accepted_bid: 当前最高叫分，初始为 0
        landlord_index: 地主下标，确定前为 -1
    """
    id: str
    players: List[Player]
    deck: List[Card] = field(default_factory=list)
    phase: Phase = Phase.AUCTION
    current_player_index: int = 0
    current_hand: List[Card] = field(default_factory=list)
    accepted_bid: int = 0
    landlord_index: int = -1

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    def offset_index(self, offset: int) -> int:
        """相对当前玩家偏移 offset 个座位的下标 (取模)"""
        return (self.current_player_index + offset) % self.num_players

    @property
    def previous_player(self) -> Player:
        return self.players[self.offset_index(-1)]

    @property
    def next_player_index(self) -> int:
        return self.offset_index(1)

    @property
    def landlord(self) -> Optional[Player]:
        if self.landlord_index == -1:
            return None
        return self.players[self.landlord_index]

    def advance(self) -> None:
        """轮到下一位玩家 (不跳过任何人)"""
        self.current_player_index = self.next_player_index

    def transfer_kitty(self, index: int) -> None:
        """将剩余底牌全部转入指定玩家手牌并清空牌堆"""
        self.players[index].hand.extend(self.deck)
        self.deck = []

    def get_winner(self) -> Optional[int]:
        """手牌出完的第一位玩家下标，没有则返回 None"""
        for i, player in enumerate(self.players):
            if not player.hand:
                return i
        return None

    def cards_played(self) -> int:
        """所有玩家已打出的牌数"""
        return sum(
            len(move)
            for player in self.players
            for move in player.moves
            if move != PASS
        )

    def total_cards(self) -> int:
        """手牌与牌堆中的牌数之和，恒等于 54 - 已打出的牌数"""
        return sum(len(p.hand) for p in self.players) + len(self.deck)

    def check_invariants(self) -> bool:
        """牌数守恒"""
        return self.total_cards() == DECK_SIZE - self.cards_played()
