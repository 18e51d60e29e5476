"""Shared test factories for parser and stats tests.

Provides factory functions for building raw Chess.com / Lichess records and
normalized games with sensible defaults and easy overrides.
"""

from datetime import datetime, timedelta, timezone

from chess_insights.game_data import NormalizedGame

ITALIAN_ECO_URL = "https://www.chess.com/openings/Italian-Game-Giuoco-Piano-4...Nf6"

SAMPLE_PGN = """[Event "Live Chess"]
[Site "Chess.com"]
[Date "2023.11.14"]
[White "Alice"]
[Black "Bob"]
[Result "1-0"]
[ECO "C53"]
[ECOUrl "https://www.chess.com/openings/Italian-Game-Giuoco-Piano-4...Nf6"]

1. e4 {[%clk 0:09:58.5]} 1... e5 {[%clk 0:09:57.1]} 2. Nf3 {[%clk 0:09:55.2]} 2... Nc6 3. Bc4 Bc5 4. c3 Nf6 1-0
"""

BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


# ─── Chess.com Raw Game Factory ───────────────────────────────────

def make_chess_com_game(**overrides):
    """Build a raw Chess.com archive game. Alice (white) beats Bob by default.

    white_overrides / black_overrides merge into the player dicts; any other
    kwarg replaces the top-level field. Pass a value of None to drop a field.
    """
    white_ovr = overrides.pop("white_overrides", {})
    black_ovr = overrides.pop("black_overrides", {})

    game = {
        "url": "https://www.chess.com/game/live/1",
        "white": {"username": "Alice", "rating": 1500, "result": "win"},
        "black": {"username": "Bob", "rating": 1480, "result": "checkmated"},
        "end_time": 1700000000,
        "time_class": "rapid",
        "rules": "chess",
        "pgn": SAMPLE_PGN,
        "eco": ITALIAN_ECO_URL,
    }
    game["white"].update(white_ovr)
    game["black"].update(black_ovr)
    game.update(overrides)
    return {k: v for k, v in game.items() if v is not None}


# ─── Lichess Raw Game Factory ─────────────────────────────────────

def make_lichess_game(**overrides):
    """Build a raw Lichess export game. Alice (white) beats Bob by default."""
    white_ovr = overrides.pop("white_overrides", {})
    black_ovr = overrides.pop("black_overrides", {})

    game = {
        "id": "abcd1234",
        "rated": True,
        "status": "mate",
        "players": {
            "white": {"user": {"name": "Alice", "id": "alice"}, "rating": 1600},
            "black": {"user": {"name": "Bob", "id": "bob"}, "rating": 1590},
        },
        "winner": "white",
        "opening": {"eco": "B01", "name": "Scandinavian Defense", "ply": 2},
        "createdAt": 1700000000123,
        "moves": "e4 d5 exd5 Qxd5 Nc3 Qa5",
    }
    game["players"]["white"].update(white_ovr)
    game["players"]["black"].update(black_ovr)
    game.update(overrides)
    return {k: v for k, v in game.items() if v is not None}


# ─── Normalized Game Factories ────────────────────────────────────

def make_game(**overrides):
    """Build a NormalizedGame: a 30-move Chess.com win as White by default."""
    fields = {
        "platform": "chess.com",
        "result": "Win",
        "color": "White",
        "opening": "Italian Game",
        "date": BASE_TIME,
        "moves": 30,
    }
    fields.update(overrides)
    return NormalizedGame(**fields)


def make_games(n, opening="Italian Game", wins=0, losses=0, **overrides):
    """Build n games in one opening: `wins` wins, `losses` losses, rest draws."""
    games = []
    for i in range(n):
        if i < wins:
            result = "Win"
        elif i < wins + losses:
            result = "Loss"
        else:
            result = "Draw"
        games.append(make_game(
            opening=opening,
            result=result,
            date=BASE_TIME - timedelta(days=i),
            **overrides,
        ))
    return games
