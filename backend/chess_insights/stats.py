"""
Aggregate statistics over normalized games.

All functions are pure: they never mutate the games they are given and
return the same output for the same input.
"""
import math
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .game_data import BLACK, DRAW, LOSS, UNKNOWN_OPENING, WHITE, WIN, NormalizedGame

# Openings need at least this many games to compete for best/worst
MIN_GAMES_FOR_BEST_WORST = 2
MOST_PLAYED_LIMIT = 5


class StatsModel(BaseModel):
    """Snake_case in Python, camelCase when serialized."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class OpeningStats(StatsModel):
    name: str
    total: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    win_rate: float = 0  # 0-100


class GameStats(StatsModel):
    total_games: int = 0
    overall_win_rate: float = 0
    win_rate_white: float = 0
    win_rate_black: float = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    white_games: int = 0
    white_wins: int = 0
    black_games: int = 0
    black_wins: int = 0
    avg_game_length: float = 0
    most_played_openings: List[OpeningStats] = []
    best_opening: Optional[OpeningStats] = None
    worst_opening: Optional[OpeningStats] = None
    win_rate_trend: Optional[float] = None
    rating_approx: Optional[int] = None
    rating_by_source: Optional[Dict[str, int]] = None


def round_half_up(value: float, digits: int = 1) -> float:
    """Round like Math.round does: halves go up, not to even."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def win_rate(wins: int, total: int) -> float:
    """Win percentage to one decimal place, 0 when there are no games."""
    if total == 0:
        return 0
    return round_half_up(wins / total * 100)


def _opening_name(game: NormalizedGame) -> str:
    if not game.opening or not game.opening.strip():
        return UNKNOWN_OPENING
    return game.opening


def build_opening_table(games: Iterable[NormalizedGame]) -> List[OpeningStats]:
    """Group games by exact opening name, in first-seen order."""
    table: Dict[str, Dict[str, int]] = {}

    for game in games:
        counts = table.setdefault(_opening_name(game), {"total": 0, "wins": 0, "losses": 0, "draws": 0})
        counts["total"] += 1
        if game.result == WIN:
            counts["wins"] += 1
        elif game.result == LOSS:
            counts["losses"] += 1
        else:
            counts["draws"] += 1

    return [
        OpeningStats(name=name, win_rate=win_rate(counts["wins"], counts["total"]), **counts)
        for name, counts in table.items()
    ]


def most_played(openings: List[OpeningStats], limit: int = MOST_PLAYED_LIMIT) -> List[OpeningStats]:
    """Top openings by game count; sorted() is stable so ties keep table order."""
    return sorted(openings, key=lambda o: o.total, reverse=True)[:limit]


def select_best_opening(openings: List[OpeningStats]) -> Optional[OpeningStats]:
    """
    Highest win rate among openings with enough games, ties to the bigger sample.

    Falls back to the highest win rate overall when nothing qualifies.
    """
    if not openings:
        return None
    qualified = [o for o in openings if o.total >= MIN_GAMES_FOR_BEST_WORST]
    if qualified:
        return max(qualified, key=lambda o: (o.win_rate, o.total))
    return max(openings, key=lambda o: o.win_rate)


def select_worst_opening(openings: List[OpeningStats]) -> Optional[OpeningStats]:
    """Lowest win rate among qualified openings, ties also to the bigger sample."""
    if not openings:
        return None
    qualified = [o for o in openings if o.total >= MIN_GAMES_FOR_BEST_WORST]
    if qualified:
        return min(qualified, key=lambda o: (o.win_rate, -o.total))
    return min(openings, key=lambda o: o.win_rate)


def trend_label(delta: Optional[float]) -> Optional[str]:
    if delta is None:
        return None
    if delta > 0:
        return "Improving"
    if delta < 0:
        return "Declining"
    return "Stable"


def compute_stats(games: Optional[Iterable[NormalizedGame]], previous_win_rate: Optional[float] = None) -> GameStats:
    """
    Build the summary statistics for a list of games.

    Args:
        games: Normalized games in any order; None is treated as no games
        previous_win_rate: Win rate of an earlier period. When given, the
            signed difference is reported as win_rate_trend.

    Returns:
        GameStats for the games
    """
    games = list(games or [])
    total_games = len(games)

    wins = sum(1 for g in games if g.result == WIN)
    losses = sum(1 for g in games if g.result == LOSS)
    draws = sum(1 for g in games if g.result == DRAW)

    white_games = [g for g in games if g.color == WHITE]
    black_games = [g for g in games if g.color == BLACK]
    white_wins = sum(1 for g in white_games if g.result == WIN)
    black_wins = sum(1 for g in black_games if g.result == WIN)

    total_moves = sum(g.moves for g in games)
    avg_game_length = round_half_up(total_moves / total_games) if total_games > 0 else 0

    openings = build_opening_table(games)
    overall_win_rate = win_rate(wins, total_games)

    win_rate_trend = None
    if previous_win_rate is not None:
        win_rate_trend = round_half_up(overall_win_rate - previous_win_rate)

    return GameStats(
        total_games=total_games,
        overall_win_rate=overall_win_rate,
        win_rate_white=win_rate(white_wins, len(white_games)),
        win_rate_black=win_rate(black_wins, len(black_games)),
        wins=wins,
        losses=losses,
        draws=draws,
        white_games=len(white_games),
        white_wins=white_wins,
        black_games=len(black_games),
        black_wins=black_wins,
        avg_game_length=avg_game_length,
        most_played_openings=most_played(openings),
        best_opening=select_best_opening(openings),
        worst_opening=select_worst_opening(openings),
        win_rate_trend=win_rate_trend,
    )
