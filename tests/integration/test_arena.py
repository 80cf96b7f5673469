"""智能体对战集成测试"""
import random

import pytest

from core.state import Role
from evaluation import Arena, GreedyAgent, MatchResult, PassAgent, RandomAgent
from server import ServerConfig


def random_agents(seed=0):
    return [RandomAgent(name, random.Random(seed + i)) for i, name in enumerate("abc")]


class TestArena:
    """Arena 测试"""

    def test_random_games_complete(self):
        arena = Arena(random_agents(), config=ServerConfig(seed=1))
        results = arena.run(20)

        assert len(results) == 20
        for result in results:
            assert isinstance(result, MatchResult)
            assert not result.truncated
            if result.landlord is None:
                assert result.winner is None
            else:
                assert result.winner is not None
                assert 1 <= result.bid <= 3

        assert arena.server.score_ledger.is_balanced()

    def test_invariants_hold_every_turn(self):
        arena = Arena(random_agents(seed=3), config=ServerConfig(seed=3))
        server = arena.server
        checks = []

        def check():
            state = server.game_state
            checks.append(state.check_invariants())
            landlords = [p for p in state.players if p.role == Role.LANDLORD]
            checks.append(len(landlords) <= 1)

        server.on("gameStateChanged", check)
        arena.run(5)

        assert checks
        assert all(checks)

    def test_one_event_per_turn(self):
        arena = Arena(random_agents(seed=7), config=ServerConfig(seed=7))
        events = []
        arena.server.on("gameStateChanged", lambda: events.append("changed"))
        arena.server.on("gameOver", lambda: events.append("over"))

        result = arena.play_game()
        assert len(events) == result.turns
        assert events[-1] == "over"
        assert events.count("over") == 1

    def test_greedy_games_complete(self):
        agents = [GreedyAgent("a"), GreedyAgent("b"), GreedyAgent("c")]
        arena = Arena(agents, config=ServerConfig(seed=11))
        results = arena.run(10)
        assert not any(r.truncated for r in results)

    def test_pass_agents_never_pick_landlord(self):
        agents = [PassAgent("a"), PassAgent("b"), PassAgent("c")]
        arena = Arena(agents, config=ServerConfig(seed=0))
        result = arena.play_game()

        assert result.landlord is None
        assert result.winner is None
        assert result.turns == 3
        assert arena.server.score_ledger.balances() == {"a": 0, "b": 0, "c": 0}

    def test_max_turns_truncates(self):
        arena = Arena(random_agents(), config=ServerConfig(seed=1, first_player=0), max_turns=1)
        result = arena.play_game()
        assert result.truncated
        assert result.turns == 1
        assert not arena.server.is_running

    def test_winner_settled_in_ledger(self):
        arena = Arena(random_agents(seed=2), config=ServerConfig(seed=2))
        arena.run(10)
        ledger = arena.server.score_ledger

        assert sum(ledger.balances().values()) == 0
        assert ledger.is_balanced()

    def test_requires_three_agents(self):
        with pytest.raises(AssertionError):
            Arena(random_agents()[:2])


class TestSummarize:
    """统计汇总测试"""

    def test_empty(self):
        assert Arena.summarize([]) == {"games": 0, "played": 0}

    def test_summary(self):
        results = [
            MatchResult("g0", "a", "a", "landlord", bid=3, bombs=1, turns=20),
            MatchResult("g1", "b", "c", "farmer", bid=1, bombs=0, turns=30),
            MatchResult("g2", None, None, None, bid=0, bombs=0, turns=3),
        ]
        summary = Arena.summarize(results)

        assert summary["games"] == 3
        assert summary["played"] == 2
        assert summary["no_landlord"] == 1
        assert summary["landlord_win_rate"] == pytest.approx(0.5)
        assert summary["avg_bid"] == pytest.approx(2.0)
        assert summary["avg_bombs"] == pytest.approx(0.5)
        assert summary["avg_turns"] == pytest.approx(25.0)
