"""
斗地主服务器

负责管理游戏状态并提供与之交互的方法:
- start(): 发牌开始新的一局，触发 gameStart
- play(message): 代表当前玩家执行一个回合，触发 gameStateChanged 或 gameOver
- end(): 结束当前局，触发 gameOver

宿主负责确认消息来自当前玩家，并把多个客户端的输入串行化为依次的 play 调用
"""
from typing import Callable, List, Optional
import logging
import random
import uuid

from core.actions import Message, MoveGenerator, PASS
from core.cards import Card, NUM_PLAYERS, build_deck, deal, cards_to_str
from core.exceptions import GameStateAccessError, InvalidPlayerCountError
from core.ledger import ScoreLedger
from core.rules import RuleEngine
from core.state import GameState, Phase, Player, Role
from core.validation import validate_bid_message, validate_move_message

from .config import ServerConfig
from .event_bus import EventBus, Listener, GAME_START, GAME_STATE_CHANGED, GAME_OVER

logger = logging.getLogger(__name__)


def _default_id() -> str:
    return str(uuid.uuid4())


class GameServer:
    """
    通用游戏服务器基类

    持有游戏状态 (原地修改)、积分账本与事件总线；
    子类实现 create_game 与 play
    """

    def __init__(
        self,
        player_names: List[str],
        config: Optional[ServerConfig] = None,
        rng: Optional[random.Random] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Args:
            player_names: 玩家名
            config: 服务器配置
            rng: 随机数源 (洗牌与首位叫分玩家)，默认使用 config.seed
            id_factory: 生成每局 id 的函数，默认为 uuid4
        """
        self.config = config or ServerConfig()
        self._player_names = list(player_names)
        self._rng = rng if rng is not None else random.Random(self.config.seed)
        self._id_factory = id_factory or _default_id
        self._game_state: Optional[GameState] = None
        self._score_ledger = ScoreLedger(self._player_names)
        self._event_bus = EventBus()

    @property
    def game_state(self) -> GameState:
        if self._game_state is None:
            raise GameStateAccessError("Cannot access game state before a game has started!")
        return self._game_state

    @property
    def score_ledger(self) -> ScoreLedger:
        return self._score_ledger

    @property
    def is_running(self) -> bool:
        return self._game_state is not None

    def create_game(self) -> GameState:
        raise NotImplementedError

    def play(self, message: Optional[Message]) -> None:
        raise NotImplementedError

    def start(self) -> None:
        """开始新的一局并触发 gameStart"""
        self._game_state = self.create_game()
        logger.info(f"Game {self._game_state.id} started")
        self._event_bus.fire(GAME_START)

    def end(self) -> None:
        """结束当前局并触发 gameOver"""
        if self._game_state is not None:
            logger.info(f"Game {self._game_state.id} over")
        self._game_state = None
        self._event_bus.fire(GAME_OVER)

    def on(self, event: str, callback: Listener) -> None:
        self._event_bus.on(event, callback)

    def off(self, event: str, callback: Listener) -> None:
        self._event_bus.off(event, callback)

    def once(self, event: str, callback: Listener) -> None:
        self._event_bus.once(event, callback)


class DoudizhuServer(GameServer):
    """
    斗地主服务器

    叫分阶段与出牌阶段均为一次 play 调用处理一位玩家的一个回合；
    任何非法消息 (类型错误、None、非法叫分/出牌) 都按 pass 处理
    """

    def __init__(
        self,
        player_names: List[str],
        config: Optional[ServerConfig] = None,
        rng: Optional[random.Random] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        if len(player_names) != NUM_PLAYERS:
            raise InvalidPlayerCountError(
                f"Number of players must be {NUM_PLAYERS}, got {len(player_names)}"
            )
        super().__init__(player_names, config, rng, id_factory)

    def create_game(self) -> GameState:
        deck = build_deck(self._rng)
        hands = deal(deck, len(self._player_names))

        players = [
            Player(name=name, hand=hand)
            for name, hand in zip(self._player_names, hands)
        ]

        # 随机选择首位叫分玩家 (相当于翻明牌)
        first = self.config.first_player
        if first is None:
            first = self._rng.randrange(len(players))

        return GameState(
            id=self._id_factory(),
            players=players,
            deck=deck,
            phase=Phase.AUCTION,
            current_player_index=first % len(players),
        )

    def _assign_landlord(self, index: int) -> None:
        """指定地主，转移底牌并进入出牌阶段"""
        state = self.game_state
        landlord = state.players[index]
        landlord.role = Role.LANDLORD
        state.landlord_index = index
        state.transfer_kitty(index)
        state.phase = Phase.PLAY
        if self.config.landlord_leads:
            state.current_player_index = index

        logger.info(
            f"Landlord is {landlord.name} with bid {state.accepted_bid}, "
            f"hand {len(landlord.hand)} cards"
        )

    def _play_auction(self, message: Optional[Message]) -> None:
        state = self.game_state
        player = state.current_player
        previous = state.previous_player
        next_index = state.next_player_index

        bid = validate_bid_message(message, state)
        if bid is None:
            # 任何非法叫分都视为 pass
            logger.debug(f"{player.name}: invalid bid {message!r} treated as pass")
            bid = PASS
        player.last_bid = bid
        if bid != PASS:
            state.accepted_bid = bid
        logger.debug(f"{player.name} bids {bid}")

        # 无人叫分则本局结束 (是否重新发牌由宿主决定)
        if state.accepted_bid == 0 and all(p.last_bid == PASS for p in state.players):
            logger.info("All players passed the auction, no landlord")
            self.end()
            return

        # 叫 3 分立即成为地主；或本家与上家连续 pass，由下家 (最近的叫分者) 成为地主
        landlord_index = -1
        if player.last_bid == 3:
            landlord_index = state.current_player_index
        elif (
            player.last_bid == PASS
            and previous.last_bid == PASS
            and state.players[next_index].last_bid is not None
        ):
            landlord_index = next_index

        if landlord_index != -1:
            self._assign_landlord(landlord_index)
        else:
            state.advance()

    def _settle(self, winner: int) -> None:
        """按叫分与炸弹数结算，每个与赢家角色不同的玩家单独付款"""
        state = self.game_state
        bombs = sum(RuleEngine.count_bombs(p.moves) for p in state.players)
        stake = RuleEngine.calculate_stake(state.accepted_bid, bombs)
        winner_role = state.players[winner].role

        for i, player in enumerate(state.players):
            if player.role == winner_role:
                continue
            self._score_ledger.record_transaction(i, winner, stake)

        logger.info(
            f"{state.players[winner].name} ({winner_role.value}) wins, "
            f"bid {state.accepted_bid}, bombs {bombs}, stake {stake}"
        )

    def _play_move(self, message: Optional[Message]) -> None:
        state = self.game_state
        player = state.current_player
        previous = state.previous_player

        move = validate_move_message(message, state)
        if move is None:
            # 任何非法出牌都视为 pass
            logger.debug(f"{player.name}: invalid move {message!r} treated as pass")
            move = PASS

        if move != PASS:
            player.moves.append(move)
            state.current_hand = list(move)
            player.remove_cards(move)
            logger.debug(f"{player.name} plays {cards_to_str(move)}")
        else:
            player.moves.append(PASS)
            # 连续两家 pass 后无需再打过任何牌
            if previous.passed:
                state.current_hand = []
            logger.debug(f"{player.name} passes")

        winner = state.get_winner()
        if winner is not None:
            self._settle(winner)
            self.end()
            return

        # 不跳过已 pass 的玩家，pass 可能是策略性的
        state.advance()

    def play(self, message: Optional[Message]) -> None:
        """
        代表当前玩家执行一个回合

        Args:
            message: 叫分或出牌消息；None 表示本回合无动作，等同于 pass
        """
        state = self._game_state
        if state is None or state.get_winner() is not None:
            return

        if state.phase == Phase.AUCTION:
            self._play_auction(message)
        elif state.phase == Phase.PLAY:
            self._play_move(message)

        # 游戏未结束则状态必然发生了变化
        if self._game_state is not None:
            self._event_bus.fire(GAME_STATE_CHANGED)

    def hints(self) -> List[List[Card]]:
        """当前玩家在出牌阶段可以打出的所有合法出牌 (不含 pass)"""
        state = self._game_state
        if state is None or state.phase != Phase.PLAY:
            return []
        generator = MoveGenerator(state.current_player.hand)
        return generator.generate_responses(state.current_hand)
