"""Unit tests for the game engine."""

import random
from collections import Counter

import pytest
from unoroom.engine import (
    Card,
    Color,
    DECK_SIZE,
    DeckManager,
    DrawCard,
    EndTurn,
    GameState,
    PlayCard,
    apply_action,
    build_deck,
    is_valid_play,
    remove_player,
    shuffle,
    start_game,
)
from unoroom.engine.errors import (
    CardNotHeld,
    EmptyDeck,
    IllegalPlay,
    NoCardsAvailable,
    NotYourTurn,
)


def c(token: str) -> Card:
    return Card.parse(token)


def _state(hands: dict, discard: list, turn_index: int = 0) -> GameState:
    return GameState(
        players=list(hands),
        hands={pid: [c(t) for t in cards] for pid, cards in hands.items()},
        discard_pile=[c(t) for t in discard],
        turn_index=turn_index,
    )


def test_card_tokens() -> None:
    assert str(Card(Color.RED, "5")) == "R5"
    assert str(Card(Color.BLUE, "Skip")) == "BSkip"
    assert str(Card(None, "WildDraw4")) == "WildDraw4"
    assert c("GDraw2") == Card(Color.GREEN, "Draw2")
    assert c("Wild").is_wild


@pytest.mark.parametrize("token", ["", "X5", "R", "RWild", "R10", "wild"])
def test_card_parse_rejects_unknown_tokens(token: str) -> None:
    with pytest.raises(ValueError):
        Card.parse(token)


def test_build_deck_composition() -> None:
    deck = build_deck()
    assert len(deck) == DECK_SIZE == 108
    counts = Counter(str(card) for card in deck)
    for color in "RGBY":
        assert counts[f"{color}0"] == 1
        for rank in ["1", "2", "3", "4", "5", "6", "7", "8", "9", "Skip", "Reverse", "Draw2"]:
            assert counts[f"{color}{rank}"] == 2
    assert counts["Wild"] == 4
    assert counts["WildDraw4"] == 4
    assert len(counts) == 4 * 13 + 2


@pytest.mark.parametrize("size", [0, 1, 2, 7, 108])
def test_shuffle_is_permutation(size: int) -> None:
    cards = build_deck()[:size]
    shuffled = shuffle(list(cards), random.Random(size))
    assert Counter(shuffled) == Counter(cards)


def test_shuffle_reproducible_with_seed() -> None:
    d1 = shuffle(build_deck(), random.Random(123))
    d2 = shuffle(build_deck(), random.Random(123))
    assert d1 == d2


def test_deal_initial_hands_takes_from_front_in_roster_order() -> None:
    cards = build_deck()
    deck = DeckManager(cards=list(cards))
    hands = deck.deal_initial_hands(["p1", "p2", "p3", "p4"])
    assert hands["p1"] == cards[0:7]
    assert hands["p4"] == cards[21:28]
    assert len(deck) == 108 - 28


def test_pick_starting_card_skips_wilds() -> None:
    deck = DeckManager(cards=[c("Wild"), c("WildDraw4"), c("R3"), c("G1")])
    assert deck.pick_starting_card() == c("R3")
    assert deck.cards == [c("G1"), c("Wild"), c("WildDraw4")]


def test_pick_starting_card_all_wild_falls_back() -> None:
    deck = DeckManager(cards=[c("Wild"), c("WildDraw4"), c("Wild")])
    card = deck.pick_starting_card()
    assert card.is_wild
    assert len(deck) == 2


def test_pick_starting_card_empty_deck() -> None:
    with pytest.raises(EmptyDeck):
        DeckManager(cards=[]).pick_starting_card()


def test_draw_takes_front_card() -> None:
    deck = DeckManager(cards=[c("R1"), c("B2")])
    discard = [c("G5")]
    assert deck.draw(discard) == c("R1")
    assert deck.cards == [c("B2")]
    assert discard == [c("G5")]


def test_draw_reshuffles_discard_when_deck_empty() -> None:
    deck = DeckManager(cards=[], rng=random.Random(7))
    discard = [c("R1"), c("R5"), c("B3")]
    card = deck.draw(discard)
    assert discard == [c("B3")]
    assert card in (c("R1"), c("R5"))
    assert sorted(map(str, deck.cards + [card])) == ["R1", "R5"]


def test_draw_with_only_current_card_fails_without_mutation() -> None:
    deck = DeckManager(cards=[])
    discard = [c("B3")]
    with pytest.raises(NoCardsAvailable):
        deck.draw(discard)
    assert discard == [c("B3")]
    assert deck.cards == []


@pytest.mark.parametrize(
    "card,current,legal",
    [
        ("R9", "R5", True),
        ("B5", "R5", True),
        ("B7", "R5", False),
        ("Wild", "R5", True),
        ("WildDraw4", "B7", True),
        ("GSkip", "RSkip", True),
        ("GSkip", "RReverse", False),
        ("B7", "Wild", True),
        ("YDraw2", "WildDraw4", True),
    ],
)
def test_is_valid_play(card: str, current: str, legal: bool) -> None:
    assert is_valid_play(c(card), c(current)) is legal


def test_start_game() -> None:
    deck = DeckManager(rng=random.Random(1))
    state = start_game(["p1", "p2", "p3", "p4"], deck)
    assert all(len(state.hands[p]) == 7 for p in state.players)
    assert len(state.discard_pile) == 1
    assert not state.current_card.is_wild
    assert state.current_player == "p1"
    assert len(deck) + state.card_count() == 108


def test_play_advances_turn_and_updates_discard() -> None:
    state = _state({"p1": ["R9", "B7"], "p2": ["G1"]}, ["R5"])
    deck = DeckManager(cards=[])
    apply_action(state, deck, "p1", PlayCard(card=c("R9")))
    assert state.hands["p1"] == [c("B7")]
    assert state.discard_pile == [c("R5"), c("R9")]
    assert state.current_card == c("R9")
    assert state.turn_index == 1


def test_play_wraps_turn_index() -> None:
    state = _state({"p1": ["G1"], "p2": ["R9"]}, ["R5"], turn_index=1)
    apply_action(state, DeckManager(cards=[]), "p2", PlayCard(card=c("R9")))
    assert state.turn_index == 0


def test_play_removes_one_duplicate() -> None:
    state = _state({"p1": ["R9", "B7", "R9"], "p2": []}, ["R5"])
    apply_action(state, DeckManager(cards=[]), "p1", PlayCard(card=c("R9")))
    assert state.hands["p1"] == [c("B7"), c("R9")]


def test_action_cards_do_not_change_turn_order() -> None:
    state = _state({"p1": ["RSkip"], "p2": [], "p3": []}, ["R5"])
    apply_action(state, DeckManager(cards=[c("B1")]), "p1", PlayCard(card=c("RSkip")))
    assert state.current_player == "p2"
    assert state.hands["p2"] == []


def test_rejections_leave_state_untouched() -> None:
    state = _state({"p1": ["B7", "R1"], "p2": ["R9"]}, ["R5"])
    deck = DeckManager(cards=[c("G2")])
    before = state.to_dict()

    with pytest.raises(NotYourTurn):
        apply_action(state, deck, "p2", PlayCard(card=c("R9")))
    with pytest.raises(NotYourTurn):
        apply_action(state, deck, "p2", DrawCard())
    with pytest.raises(CardNotHeld):
        apply_action(state, deck, "p1", PlayCard(card=c("R9")))
    with pytest.raises(IllegalPlay):
        apply_action(state, deck, "p1", PlayCard(card=c("B7")))

    assert state.to_dict() == before
    assert deck.cards == [c("G2")]


def test_draw_does_not_end_turn() -> None:
    state = _state({"p1": [], "p2": []}, ["R5"])
    deck = DeckManager(cards=[c("G2"), c("B4")])
    card = apply_action(state, deck, "p1", DrawCard())
    assert card == c("G2")
    assert state.hands["p1"] == [c("G2")]
    assert state.current_player == "p1"


def test_end_turn_advances() -> None:
    state = _state({"p1": [], "p2": []}, ["R5"])
    assert apply_action(state, DeckManager(cards=[]), "p1", EndTurn()) is None
    assert state.current_player == "p2"


def test_remove_player_keeps_next_player() -> None:
    state = _state({"p1": ["R1"], "p2": [], "p3": [], "p4": []}, ["R5"], turn_index=2)
    remove_player(state, "p1")
    assert state.players == ["p2", "p3", "p4"]
    assert state.current_player == "p3"
    assert state.hands["p1"] == [c("R1")]


def test_remove_current_player_passes_turn() -> None:
    state = _state({"p1": [], "p2": [], "p3": [], "p4": []}, ["R5"], turn_index=3)
    remove_player(state, "p4")
    assert state.current_player == "p1"
    state.turn_index = 1
    remove_player(state, "p2")
    assert state.current_player == "p3"


def test_card_conservation_over_random_actions() -> None:
    rng = random.Random(99)
    deck = DeckManager(rng=rng)
    state = start_game(["p1", "p2", "p3", "p4"], deck)
    for _ in range(500):
        pid = state.current_player
        playable = [x for x in state.hands[pid] if is_valid_play(x, state.current_card)]
        try:
            if playable and rng.random() < 0.7:
                apply_action(state, deck, pid, PlayCard(card=rng.choice(playable)))
            elif rng.random() < 0.8:
                apply_action(state, deck, pid, DrawCard())
            else:
                apply_action(state, deck, pid, EndTurn())
        except NoCardsAvailable:
            apply_action(state, deck, pid, EndTurn())
        assert len(deck) + state.card_count() == 108
        assert state.current_card == state.discard_pile[-1]
