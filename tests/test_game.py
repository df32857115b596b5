import random

import pytest

from battleship.board import BOARD_HIT, BOARD_SHIP
from battleship.errors import GameStateError, InvalidCoordinate, RepeatShot
from battleship.game import BattleshipGame, GameState
from conftest import empty_cells, ship_cells


@pytest.fixture
def game() -> BattleshipGame:
    game = BattleshipGame("Alice", "Bob", rng=random.Random(42))
    game.initialize()
    return game


def test_new_game_starts_in_setup():
    game = BattleshipGame("Alice", "Bob")
    assert game.state is GameState.SETUP
    assert not game.is_over()
    with pytest.raises(GameStateError):
        game.fire(0, 0)


def test_initialize_places_both_fleets(game):
    assert game.state is GameState.PLAYER1_TURN
    assert game.current_player is game.player1
    assert game.opponent is game.player2
    for player in game.players:
        assert int((player.board.grid == BOARD_SHIP).sum()) == 17
        assert player.board.ships == game.fleet_of(player)


def test_initialize_only_once(game):
    with pytest.raises(GameStateError):
        game.initialize()


def test_initialize_announces_each_player():
    game = BattleshipGame("Alice", "Bob", rng=random.Random(1))
    announced = []
    game.initialize(announce=lambda player: announced.append(player.name))
    assert announced == ["Alice", "Bob"]


def test_turns_alternate(game):
    x, y = empty_cells(game.player2.board)[0]
    outcome = game.fire(x, y)
    assert not outcome.hit
    assert outcome.shooter is game.player1
    assert game.state is GameState.PLAYER2_TURN

    x, y = ship_cells(game.player1.board)[0]
    outcome = game.fire(x, y)
    assert outcome.hit
    assert outcome.target is game.player1
    assert game.state is GameState.PLAYER1_TURN
    assert game.turns_taken == 2


def test_hit_also_hands_over_the_turn(game):
    x, y = ship_cells(game.player2.board)[0]
    assert game.fire(x, y).hit
    assert game.current_player is game.player2


def test_out_of_range_shot_does_not_consume_turn(game):
    with pytest.raises(InvalidCoordinate):
        game.fire(10, 3)
    assert game.state is GameState.PLAYER1_TURN
    assert game.turns_taken == 0


def test_repeat_shot_is_rejected(game):
    x, y = empty_cells(game.player2.board)[0]
    game.fire(x, y)
    game.fire(*empty_cells(game.player1.board)[0])

    with pytest.raises(RepeatShot):
        game.fire(x, y)
    assert game.state is GameState.PLAYER1_TURN
    assert game.player1.shots_fired == 1


def test_full_game_player1_wins(game):
    targets = ship_cells(game.player2.board)
    decoys = empty_cells(game.player1.board)
    sunk = []

    for index, (x, y) in enumerate(targets):
        outcome = game.fire(x, y)
        assert outcome.hit
        if outcome.sunk is not None:
            sunk.append(outcome.sunk.ship_type)
        if index < len(targets) - 1:
            assert not outcome.game_over
            assert not game.fire(*decoys[index]).hit

    assert outcome.game_over
    assert outcome.winner is game.player1
    assert game.winner is game.player1
    assert game.state is GameState.GAME_OVER
    assert game.is_over()
    assert sorted(sunk) == sorted(ship.ship_type for ship in game.fleet_of(game.player2))
    assert game.player2.has_lost(game.fleet_of(game.player2))
    assert not game.player1.has_lost(game.fleet_of(game.player1))

    with pytest.raises(GameStateError):
        game.fire(0, 0)


def test_player2_can_win(game):
    targets = ship_cells(game.player1.board)
    decoys = empty_cells(game.player2.board)
    for index, (x, y) in enumerate(targets):
        game.fire(*decoys[index])
        outcome = game.fire(x, y)
    assert outcome.game_over
    assert game.winner is game.player2


def test_board_and_ship_hits_stay_consistent(game):
    shooter = random.Random(5)
    while not game.is_over():
        try:
            game.fire(shooter.randrange(10), shooter.randrange(10))
        except RepeatShot:
            continue
    for player in game.players:
        hit_cells = int((player.board.grid == BOARD_HIT).sum())
        assert hit_cells == sum(ship.hits for ship in game.fleet_of(player))


def test_same_seed_same_game_layout():
    first = BattleshipGame("A", "B", rng=random.Random(3))
    second = BattleshipGame("A", "B", rng=random.Random(3))
    first.initialize()
    second.initialize()
    assert ship_cells(first.player1.board) == ship_cells(second.player1.board)
    assert ship_cells(first.player2.board) == ship_cells(second.player2.board)
