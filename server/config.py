"""
服务器配置
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ServerConfig:
    """
    服务器配置

    Attributes:
        seed: 随机种子 (未注入随机数源时使用)，None 表示不固定
        first_player: 首位叫分玩家下标，None 表示随机选取
        landlord_leads: 叫分结束后是否改由地主首先出牌 (默认由结束叫分的玩家出牌)
    """
    seed: Optional[int] = None
    first_player: Optional[int] = None
    landlord_leads: bool = False

    @classmethod
    def from_dict(cls, d: dict) -> 'ServerConfig':
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)
