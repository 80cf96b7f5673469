"""
斗地主引擎异常定义

只有宿主的编程错误会以异常形式抛出；
玩家的非法动作一律视为 pass，不会抛出异常。
"""


class DoudizhuError(Exception):
    """引擎基础异常类"""
    pass


class GameStateAccessError(DoudizhuError, RuntimeError):
    """在游戏开始前或结束后访问游戏状态"""
    pass


class InvalidPlayerCountError(DoudizhuError, ValueError):
    """玩家人数不是 3"""
    pass
