"""
Server Layer - 对宿主暴露的游戏服务器

Modules:
    server: 叫分/出牌状态机与生命周期
    event_bus: 生命周期事件总线
    config: 服务器配置
"""
from .config import ServerConfig

from .event_bus import (
    EventBus,
    EVENTS,
    GAME_START,
    GAME_STATE_CHANGED,
    GAME_OVER,
)

from .server import (
    GameServer,
    DoudizhuServer,
)

__all__ = [
    # config
    "ServerConfig",
    # event_bus
    "EventBus",
    "EVENTS",
    "GAME_START",
    "GAME_STATE_CHANGED",
    "GAME_OVER",
    # server
    "GameServer",
    "DoudizhuServer",
]
