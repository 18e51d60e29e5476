"""Chess game normalization and performance statistics."""

from .game_data import NormalizedGame, UNKNOWN_OPENING
from .normalize import normalize_chess_com_game, normalize_lichess_game, normalize_game, normalize_games
from .stats import GameStats, OpeningStats, compute_stats, trend_label, win_rate
from .projection import (
    build_insight_payload,
    combine_games,
    condense_game,
    condense_games,
    stats_to_json,
    with_ratings,
)

__all__ = [
    'NormalizedGame',
    'UNKNOWN_OPENING',
    'normalize_chess_com_game',
    'normalize_lichess_game',
    'normalize_game',
    'normalize_games',
    'GameStats',
    'OpeningStats',
    'compute_stats',
    'trend_label',
    'win_rate',
    'build_insight_payload',
    'combine_games',
    'condense_game',
    'condense_games',
    'stats_to_json',
    'with_ratings',
]
