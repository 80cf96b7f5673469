"""
消息校验

每种消息对应一个校验函数，返回被接受的内容 (叫分/出牌)，被拒绝时返回 None；
状态机把 None 统一当作 pass 处理
"""
from typing import Optional

from .actions import Bid, BidMessage, Move, MoveMessage, Message, PASS
from .cards import Card
from .rules import RuleEngine
from .state import GameState


def validate_bid_message(message: Optional[Message], state: GameState) -> Optional[Bid]:
    """
    校验叫分消息

    Args:
        message: 待校验的消息 (None 表示本回合无动作)
        state: 当前游戏状态

    Returns:
        被接受的叫分 ("pass" 或 1-3)，否则 None
    """
    if not isinstance(message, BidMessage):
        return None

    bid = message.bid
    if bid == PASS:
        return PASS

    if RuleEngine.can_beat_bid(bid, state.accepted_bid):
        return bid
    return None


def validate_move_message(message: Optional[Message], state: GameState) -> Optional[Move]:
    """
    校验出牌消息

    Args:
        message: 待校验的消息 (None 表示本回合无动作)
        state: 当前游戏状态

    Returns:
        被接受的出牌 ("pass" 或牌列表)，否则 None
    """
    if not isinstance(message, MoveMessage):
        return None

    move = message.move
    if isinstance(move, str):
        return PASS if move == PASS else None

    if not isinstance(move, (list, tuple)) or not move:
        return None
    if not all(isinstance(card, Card) for card in move):
        return None

    # 在副本上模拟移除，确认玩家持有这些牌
    scratch = list(state.current_player.hand)
    for card in move:
        try:
            scratch.remove(card)
        except ValueError:
            return None

    cards = list(move)
    if not RuleEngine.can_beat_hand(cards, state.current_hand):
        return None
    return cards
