"""
Evaluation Layer - 自动对局

Modules:
    agents: 智能体
    arena: 对战竞技场
"""
from .agents import (
    Agent,
    PassAgent,
    RandomAgent,
    GreedyAgent,
)
from .arena import (
    MatchResult,
    Arena,
)

__all__ = [
    # agents
    "Agent",
    "PassAgent",
    "RandomAgent",
    "GreedyAgent",
    # arena
    "MatchResult",
    "Arena",
]
