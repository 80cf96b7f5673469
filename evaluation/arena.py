"""
对战竞技场

让三个智能体在同一台服务器上连续对局，积分账本跨局累加
"""
from typing import Dict, List, Optional, Any
from dataclasses import dataclass
import logging

import numpy as np

from core.rules import RuleEngine
from core.state import Role
from server import DoudizhuServer, ServerConfig

from .agents import Agent

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """对局结果"""
    game_id: str
    landlord: Optional[str]  # 无人叫分时为 None
    winner: Optional[str]
    winner_role: Optional[str]  # "landlord" or "farmer"
    bid: int
    bombs: int
    turns: int
    truncated: bool = False


class Arena:
    """
    对战竞技场

    Args:
        agents: 3 个智能体，下标即座位
        config: 服务器配置
        max_turns: 单局回合上限，超过则强制结束
    """

    def __init__(
        self,
        agents: List[Agent],
        config: Optional[ServerConfig] = None,
        max_turns: int = 1000,
        **server_kwargs,
    ):
        assert len(agents) == 3
        self.agents = agents
        self.max_turns = max_turns
        self.server = DoudizhuServer(
            [agent.name for agent in agents], config=config, **server_kwargs
        )

    def play_game(self) -> MatchResult:
        """进行一局"""
        server = self.server
        server.start()

        # 保留引用，结束后服务器不再暴露状态
        state = server.game_state
        turns = 0

        while server.is_running and turns < self.max_turns:
            agent = self.agents[state.current_player_index]
            message = agent.act(state, server.hints())
            server.play(message)
            turns += 1

        truncated = server.is_running
        if truncated:
            logger.warning(f"Game {state.id} truncated after {turns} turns")
            server.end()

        landlord = state.landlord
        winner = None if truncated else state.get_winner()
        bombs = sum(RuleEngine.count_bombs(p.moves) for p in state.players)

        return MatchResult(
            game_id=state.id,
            landlord=landlord.name if landlord else None,
            winner=state.players[winner].name if winner is not None else None,
            winner_role=state.players[winner].role.value if winner is not None else None,
            bid=state.accepted_bid,
            bombs=bombs,
            turns=turns,
            truncated=truncated,
        )

    def run(self, n_games: int = 1) -> List[MatchResult]:
        """
        连续进行多局

        Args:
            n_games: 对局数

        Returns:
            对局结果列表
        """
        results = []
        for game_idx in range(n_games):
            results.append(self.play_game())
            if (game_idx + 1) % 100 == 0:
                logger.info(f"Game {game_idx + 1}/{n_games}, balances {self.server.score_ledger.balances()}")
        return results

    @staticmethod
    def summarize(results: List[MatchResult]) -> Dict[str, Any]:
        """汇总对局统计"""
        played = [r for r in results if r.winner is not None]
        if not played:
            return {"games": len(results), "played": 0}

        landlord_wins = np.array(
            [r.winner_role == Role.LANDLORD.value for r in played], dtype=np.float32
        )
        return {
            "games": len(results),
            "played": len(played),
            "no_landlord": sum(1 for r in results if r.landlord is None),
            "truncated": sum(1 for r in results if r.truncated),
            "landlord_win_rate": float(landlord_wins.mean()),
            "avg_bid": float(np.mean([r.bid for r in played])),
            "avg_bombs": float(np.mean([r.bombs for r in played])),
            "avg_turns": float(np.mean([r.turns for r in played])),
        }

