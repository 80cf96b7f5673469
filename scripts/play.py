#!/usr/bin/env python3
"""
对战脚本

Usage:
    python scripts/play.py --mode watch                 # 观看智能体对战
    python scripts/play.py --mode watch --games 100     # 连续对局并输出统计
    python scripts/play.py --mode play                  # 坐 0 号位与智能体对战
"""
import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from core.actions import BidMessage, MoveMessage, Message, PASS
from core.cards import Card, cards_to_str, str_to_cards
from core.state import GameState, Phase
from evaluation import Agent, Arena, GreedyAgent, PassAgent, RandomAgent
from server import DoudizhuServer, ServerConfig

logger = logging.getLogger(__name__)

AGENT_TYPES = {
    "random": RandomAgent,
    "greedy": GreedyAgent,
    "pass": PassAgent,
}


def parse_args():
    parser = argparse.ArgumentParser(description="Dou Dizhu Play")

    parser.add_argument(
        "--mode",
        type=str,
        default="watch",
        choices=["watch", "play"],
        help="Mode: watch agents or play against them",
    )
    parser.add_argument(
        "--agents",
        type=str,
        nargs=3,
        default=["greedy", "random", "random"],
        choices=sorted(AGENT_TYPES),
        help="Agent type for each seat",
    )
    parser.add_argument("--games", type=int, default=1, help="Number of games")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Log every turn")
    parser.add_argument("--output", type=str, default=None, help="Output file for watch results")

    return parser.parse_args()


def create_agents(types: List[str], seed: Optional[int]) -> List[Agent]:
    """创建智能体"""
    agents = []
    for i, agent_type in enumerate(types):
        name = f"{agent_type}_{i}"
        if agent_type == "random":
            rng = random.Random(None if seed is None else seed + i + 1)
            agents.append(RandomAgent(name, rng))
        else:
            agents.append(AGENT_TYPES[agent_type](name))
    return agents


def print_game_state(state: GameState, seat: int):
    """打印游戏状态"""
    print("\n" + "=" * 60)
    print(f"阶段: {state.phase.value}  叫分: {state.accepted_bid}")
    print("-" * 60)
    for i, player in enumerate(state.players):
        marker = "*" if i == state.current_player_index else " "
        if i == seat:
            print(f"{marker}[{player.name}|{player.role.value}] 手牌 ({len(player.hand)}): {cards_to_str(player.hand)}")
        else:
            print(f"{marker} {player.name}|{player.role.value}  手牌数: {len(player.hand)}")
    if state.current_hand:
        print(f"\n桌面: {cards_to_str(state.current_hand)}")
    print("=" * 60)


def read_human_message(state: GameState, hints: List[List[Card]]) -> Optional[Message]:
    """读取玩家输入，返回 None 表示退出"""
    if state.phase == Phase.AUCTION:
        choice = input("叫分 (1/2/3/pass, q 退出): ").strip().lower()
        if choice == "q":
            return None
        return BidMessage(int(choice) if choice.isdigit() else PASS)

    for i, cards in enumerate(hints[:20]):
        print(f"  {i}: {cards_to_str(cards)}")
    if len(hints) > 20:
        print(f"  ... 还有 {len(hints) - 20} 个出牌")

    choice = input("出牌编号或牌面 (如 '3 3 3 4'，回车 pass，q 退出): ").strip()
    if choice.lower() == "q":
        return None
    if not choice or choice.lower() == PASS:
        return MoveMessage(PASS)
    if choice.isdigit() and int(choice) < len(hints):
        return MoveMessage(hints[int(choice)])

    # 按牌面值从手牌中挑选具体的牌
    hand = list(state.current_player.hand)
    move = []
    try:
        wanted = str_to_cards(choice)
    except ValueError as e:
        print(f"无法解析: {e}")
        return MoveMessage(PASS)
    for card in wanted:
        match = next((c for c in hand if c.rank == card.rank), None)
        if match is None:
            break
        hand.remove(match)
        move.append(match)
    return MoveMessage(move)


def watch_game(args):
    """观看智能体对战"""
    agents = create_agents(args.agents, args.seed)
    arena = Arena(agents, ServerConfig(seed=args.seed))
    results = arena.run(args.games)

    for result in results[-10:]:
        logger.info(
            f"{result.game_id[:8]} landlord={result.landlord} winner={result.winner} "
            f"bid={result.bid} bombs={result.bombs} turns={result.turns}"
        )

    logger.info("=" * 50)
    for key, value in Arena.summarize(results).items():
        logger.info(f"{key}: {value}")
    for name, balance in arena.server.score_ledger.balances().items():
        logger.info(f"{name}: {balance:+d}")
    logger.info("=" * 50)

    if args.output:
        with open(args.output, "w") as f:
            json.dump({
                "summary": Arena.summarize(results),
                "ledger": arena.server.score_ledger.to_dict(),
            }, f, indent=2)


def play_game(args):
    """坐 0 号位与智能体对战"""
    agents = create_agents(args.agents, args.seed)
    names = ["you"] + [agent.name for agent in agents[1:]]
    server = DoudizhuServer(names, ServerConfig(seed=args.seed))

    for game_idx in range(args.games):
        print(f"\nGame {game_idx + 1}/{args.games}")
        server.start()
        state = server.game_state

        while server.is_running:
            idx = state.current_player_index
            hints = server.hints()
            if idx == 0:
                print_game_state(state, seat=0)
                message = read_human_message(state, hints)
                if message is None:
                    print("退出游戏")
                    server.end()
                    return
            else:
                message = agents[idx].act(state, hints)
            server.play(message)

        winner = state.get_winner()
        if winner is None:
            print("无人叫分，本局作废")
        else:
            print(f"胜者: {state.players[winner].name} ({state.players[winner].role.value})")

    print(f"积分: {server.score_ledger.balances()}")


def main():
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    if args.mode == "watch":
        watch_game(args)
    elif args.mode == "play":
        play_game(args)


if __name__ == "__main__":
    main()
