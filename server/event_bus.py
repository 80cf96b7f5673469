"""
生命周期事件总线

同步、单线程的发布/订阅:
- 订阅者按注册顺序在触发事件的调用内被执行
- once 订阅在第一次执行后自动移除，不影响同一次分发中的其他订阅者
"""
from typing import Callable, Dict, List, Tuple
import logging

logger = logging.getLogger(__name__)

GAME_START = "gameStart"
GAME_STATE_CHANGED = "gameStateChanged"
GAME_OVER = "gameOver"

EVENTS: Tuple[str, ...] = (GAME_START, GAME_STATE_CHANGED, GAME_OVER)

Listener = Callable[..., None]


class EventBus:
    """按事件名注册回调的同步事件总线"""

    def __init__(self, events: Tuple[str, ...] = EVENTS):
        self._listeners: Dict[str, List[Listener]] = {name: [] for name in events}

    def _get(self, event: str) -> List[Listener]:
        if event not in self._listeners:
            raise ValueError(
                f"Unknown event {event!r}, expected one of {tuple(self._listeners)}"
            )
        return self._listeners[event]

    def on(self, event: str, callback: Listener) -> None:
        """注册回调"""
        self._get(event).append(callback)

    def off(self, event: str, callback: Listener) -> None:
        """移除回调 (未注册时不做任何事)"""
        listeners = self._get(event)
        self._listeners[event] = [
            cb for cb in listeners
            if cb is not callback and getattr(cb, "__wrapped__", None) is not callback
        ]

    def once(self, event: str, callback: Listener) -> None:
        """注册只执行一次的回调"""
        def wrapped(*args, **kwargs):
            self.off(event, wrapped)
            callback(*args, **kwargs)

        wrapped.__wrapped__ = callback
        self.on(event, wrapped)

    def fire(self, event: str, *args, **kwargs) -> None:
        """按注册顺序同步通知所有订阅者"""
        # 遍历快照，分发期间的 off/once 不影响本轮
        for callback in list(self._get(event)):
            callback(*args, **kwargs)

    def listener_count(self, event: str) -> int:
        return len(self._get(event))

    def __repr__(self) -> str:
        counts = {name: len(cbs) for name, cbs in self._listeners.items()}
        return f"EventBus(listeners={counts})"
