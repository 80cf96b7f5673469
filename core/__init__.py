"""
Core Layer - 纯游戏逻辑

Modules:
    cards: 牌定义、建牌与发牌
    actions: 牌型、消息与出牌提示
    rules: 规则引擎
    state: 游戏状态
    validation: 消息校验
    ledger: 积分账本
    exceptions: 异常定义
"""
from .cards import (
    Rank,
    Card,
    SUITS,
    JOKER_SUIT,
    NUM_PLAYERS,
    HAND_SIZE,
    KITTY_SIZE,
    DECK_SIZE,
    RANK_TO_STR,
    STR_TO_RANK,
    build_deck,
    deal,
    count_ranks,
    cards_to_str,
    str_to_cards,
)

from .actions import (
    HandType,
    Hand,
    PASS,
    Bid,
    Move,
    BidMessage,
    MoveMessage,
    Message,
    MoveGenerator,
    MIN_STRAIGHT_LEN,
    MIN_STRAIGHT_PAIR_LEN,
    MIN_AIRPLANE_LEN,
)

from .rules import RuleEngine, MAX_BID

from .state import (
    Phase,
    Role,
    Player,
    GameState,
)

from .validation import validate_bid_message, validate_move_message

from .ledger import ScoreLedger

from .exceptions import (
    DoudizhuError,
    GameStateAccessError,
    InvalidPlayerCountError,
)

__all__ = [
    # cards
    "Rank",
    "Card",
    "SUITS",
    "JOKER_SUIT",
    "NUM_PLAYERS",
    "HAND_SIZE",
    "KITTY_SIZE",
    "DECK_SIZE",
    "RANK_TO_STR",
    "STR_TO_RANK",
    "build_deck",
    "deal",
    "count_ranks",
    "cards_to_str",
    "str_to_cards",
    # actions
    "HandType",
    "Hand",
    "PASS",
    "Bid",
    "Move",
    "BidMessage",
    "MoveMessage",
    "Message",
    "MoveGenerator",
    "MIN_STRAIGHT_LEN",
    "MIN_STRAIGHT_PAIR_LEN",
    "MIN_AIRPLANE_LEN",
    # rules
    "RuleEngine",
    "MAX_BID",
    # state
    "Phase",
    "Role",
    "Player",
    "GameState",
    # validation
    "validate_bid_message",
    "validate_move_message",
    # ledger
    "ScoreLedger",
    # exceptions
    "DoudizhuError",
    "GameStateAccessError",
    "InvalidPlayerCountError",
]
