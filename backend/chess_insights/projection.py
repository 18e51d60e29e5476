"""
Shape normalized games and stats for downstream consumers.

The insight generator receives a condensed per-game view plus the full
stats object as JSON; the dashboard reads the merged, date-sorted game list.
"""
import json
from typing import Any, Dict, Iterable, List, Optional

from .game_data import NormalizedGame
from .stats import GameStats, round_half_up


def condense_game(game: NormalizedGame) -> Dict[str, Any]:
    """Short-keyed projection: p=platform, r=result, c=color, o=opening, d=date, m=moves."""
    return {
        "p": game.platform,
        "r": game.result,
        "c": game.color,
        "o": game.opening,
        "d": game.date.date().isoformat(),
        "m": game.moves,
    }


def condense_games(games: Iterable[NormalizedGame]) -> List[Dict[str, Any]]:
    return [condense_game(game) for game in games]


def stats_to_json(stats: GameStats) -> str:
    """Serialize stats with camelCase keys, 2-space indented."""
    return json.dumps(stats.to_dict(), indent=2)


def build_insight_payload(stats: GameStats, games: Iterable[NormalizedGame]) -> Dict[str, Any]:
    return {
        "stats": stats.to_dict(),
        "games": condense_games(games),
    }


def combine_games(*game_lists: Iterable[NormalizedGame]) -> List[NormalizedGame]:
    """Merge per-platform lists, most recent game first."""
    combined = [game for games in game_lists for game in games]
    return sorted(combined, key=lambda g: g.date, reverse=True)


def approximate_rating(chess_com: Optional[int] = None, lichess: Optional[int] = None) -> Optional[int]:
    """Mean of the known platform ratings, rounded half-up."""
    if chess_com is not None and lichess is not None:
        return int(round_half_up((chess_com + lichess) / 2, digits=0))
    if chess_com is not None:
        return chess_com
    return lichess


def with_ratings(stats: GameStats, chess_com: Optional[int] = None, lichess: Optional[int] = None) -> GameStats:
    """Return a copy of stats carrying the player's platform ratings."""
    by_source = {}
    if chess_com is not None:
        by_source["chessCom"] = chess_com
    if lichess is not None:
        by_source["lichess"] = lichess

    return stats.model_copy(update={
        "rating_approx": approximate_rating(chess_com, lichess),
        "rating_by_source": by_source or None,
    })
