"""牌定义、建牌与发牌测试"""
import random
from collections import Counter

import pytest

from core.cards import (
    Rank,
    Card,
    SUITS,
    JOKER_SUIT,
    HAND_SIZE,
    KITTY_SIZE,
    DECK_SIZE,
    build_deck,
    deal,
    count_ranks,
    cards_to_str,
    str_to_cards,
)
from core.exceptions import InvalidPlayerCountError


class TestRankEnum:
    """Rank 枚举测试"""

    def test_rank_values(self):
        assert Rank.THREE == 3
        assert Rank.ACE == 14
        assert Rank.TWO == 15
        assert Rank.BLACK_JOKER == 16
        assert Rank.RED_JOKER == 17

    def test_rank_ordering(self):
        assert Rank.THREE < Rank.FOUR < Rank.ACE < Rank.TWO
        assert Rank.TWO < Rank.BLACK_JOKER < Rank.RED_JOKER


class TestCard:
    """Card 数据类测试"""

    def test_value_equality(self):
        assert Card(5, "hearts") == Card(5, "hearts")
        assert Card(5, "hearts") != Card(5, "spades")

    def test_immutability(self):
        card = Card(5, "hearts")
        with pytest.raises(Exception):
            card.rank = 6

    def test_is_joker(self):
        assert Card(Rank.RED_JOKER, JOKER_SUIT).is_joker
        assert not Card(Rank.TWO, "clubs").is_joker


class TestBuildDeck:
    """建牌测试"""

    def test_deck_size(self):
        deck = build_deck(random.Random(0))
        assert len(deck) == DECK_SIZE

    def test_deck_is_unique(self):
        deck = build_deck(random.Random(0))
        assert len(set(deck)) == DECK_SIZE

    def test_deck_composition(self):
        counter = count_ranks(build_deck(random.Random(0)))
        # 普通牌各4张
        for rank in range(Rank.THREE, Rank.TWO + 1):
            assert counter[rank] == len(SUITS)
        # 王各1张
        assert counter[Rank.BLACK_JOKER] == 1
        assert counter[Rank.RED_JOKER] == 1

    def test_seeded_shuffle_is_reproducible(self):
        assert build_deck(random.Random(42)) == build_deck(random.Random(42))

    def test_deck_is_shuffled(self):
        assert build_deck(random.Random(1)) != build_deck(random.Random(2))


class TestDeal:
    """发牌测试"""

    def test_deal_three_players(self):
        deck = build_deck(random.Random(7))
        original = list(deck)
        hands = deal(deck, 3)

        assert [len(h) for h in hands] == [HAND_SIZE] * 3
        assert len(deck) == KITTY_SIZE

        # 17+17+17+3 = 54 张，无重复无遗漏
        all_cards = [c for h in hands for c in h] + deck
        assert len(all_cards) == DECK_SIZE
        assert Counter(all_cards) == Counter(original)

    def test_deal_in_sequence(self):
        deck = build_deck(random.Random(7))
        original = list(deck)
        hands = deal(deck)
        assert hands[0] == original[:17]
        assert hands[1] == original[17:34]
        assert hands[2] == original[34:51]
        assert deck == original[51:]

    @pytest.mark.parametrize("num_players", [0, 2, 4])
    def test_wrong_player_count(self, num_players):
        deck = build_deck(random.Random(0))
        with pytest.raises(InvalidPlayerCountError):
            deal(deck, num_players)

    def test_wrong_player_count_is_value_error(self):
        with pytest.raises(ValueError):
            deal(build_deck(random.Random(0)), 4)


class TestCardsStrConversion:
    """字符串转换测试"""

    def test_cards_to_str(self):
        assert cards_to_str(str_to_cards("345")) == "3 4 5"
        assert cards_to_str(str_to_cards("JQKA")) == "J Q K A"
        assert cards_to_str(str_to_cards("XD")) == "X D"

    def test_cards_to_str_sorted(self):
        assert cards_to_str(str_to_cards("D 2 3")) == "3 2 D"

    def test_str_to_cards(self):
        assert [c.rank for c in str_to_cards("345")] == [3, 4, 5]
        assert [c.rank for c in str_to_cards("10 J")] == [10, 11]
        assert [c.rank for c in str_to_cards("2XD")] == [15, 16, 17]

    def test_str_to_cards_assigns_distinct_suits(self):
        cards = str_to_cards("5555")
        assert len(set(cards)) == 4
        assert [c.suit for c in cards] == list(SUITS)

    def test_str_to_cards_jokers(self):
        assert str_to_cards("X") == [Card(Rank.BLACK_JOKER, JOKER_SUIT)]

    def test_too_many_copies(self):
        with pytest.raises(ValueError):
            str_to_cards("33333")
        with pytest.raises(ValueError):
            str_to_cards("XX")

    def test_unknown_symbol(self):
        with pytest.raises(ValueError):
            str_to_cards("3Z")
