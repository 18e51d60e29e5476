"""
Convert raw Chess.com and Lichess game records into NormalizedGame objects.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

from .game_data import (
    BLACK,
    CHESS_COM,
    CHESS_COM_DRAW_RESULTS,
    DRAW,
    LICHESS,
    LOSS,
    UNKNOWN_OPENING,
    WHITE,
    WIN,
    NormalizedGame,
)
from .pgn_parser import count_full_moves, opening_from_eco_url, opening_from_pgn

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _full_moves(half_moves: int) -> int:
    """Convert plies to full moves, rounding up."""
    return max(0, (half_moves + 1) // 2)


# ─── Chess.com ──────────────────────────────────────────────────


def parse_chess_com_result(player_result: Optional[str]) -> str:
    """Map a Chess.com per-side outcome to Win/Loss/Draw."""
    if player_result == "win":
        return WIN
    if player_result in CHESS_COM_DRAW_RESULTS:
        return DRAW
    return LOSS


def _chess_com_opening(game: Dict[str, Any]) -> str:
    eco = game.get("eco")
    pgn = game.get("pgn")
    if isinstance(eco, str) and eco:
        return opening_from_eco_url(eco)
    if isinstance(pgn, str) and pgn:
        return opening_from_pgn(pgn)
    return UNKNOWN_OPENING


def normalize_chess_com_game(game: Dict[str, Any], username: str) -> NormalizedGame:
    """
    Normalize a game from the Chess.com monthly archive API.

    Args:
        game: Raw game dict (white/black players, end_time, optional pgn and eco)
        username: Viewer's Chess.com username, matched case-insensitively

    Returns:
        NormalizedGame from the viewer's perspective. A username matching
        neither side is treated as Black.
    """
    user_is_white = game["white"]["username"].lower() == username.lower()
    player = game["white"] if user_is_white else game["black"]

    pgn = game.get("pgn")
    moves = count_full_moves(pgn) if isinstance(pgn, str) else 0

    return NormalizedGame(
        platform=CHESS_COM,
        result=parse_chess_com_result(player.get("result")),
        color=WHITE if user_is_white else BLACK,
        opening=_chess_com_opening(game),
        date=datetime.fromtimestamp(game["end_time"], tz=timezone.utc),
        moves=moves,
    )


# ─── Lichess ────────────────────────────────────────────────────


def _lichess_display_name(player: Optional[Dict[str, Any]]) -> str:
    """Registered name, else account id, else empty (AI opponents have no user)."""
    user = (player or {}).get("user") or {}
    return user.get("name") or user.get("id") or ""


def _lichess_moves(game: Dict[str, Any]) -> int:
    move_list = game.get("moves")
    if isinstance(move_list, str) and move_list.strip():
        return _full_moves(len(move_list.split()))

    ply = (game.get("opening") or {}).get("ply")
    if isinstance(ply, int) and ply:
        return _full_moves(ply)
    return 0


def normalize_lichess_game(game: Dict[str, Any], username: str) -> NormalizedGame:
    """
    Normalize a game from the Lichess games export (NDJSON) API.

    Games without a declared winner count as draws, aborted ones included.
    """
    players = game["players"]
    white_name = _lichess_display_name(players.get("white"))
    user_is_white = white_name.lower() == username.lower()

    winner = game.get("winner")
    if not winner:
        result = DRAW
    else:
        user_side = "white" if user_is_white else "black"
        result = WIN if winner == user_side else LOSS

    opening = (game.get("opening") or {}).get("name") or UNKNOWN_OPENING

    return NormalizedGame(
        platform=LICHESS,
        result=result,
        color=WHITE if user_is_white else BLACK,
        opening=opening,
        date=EPOCH + timedelta(milliseconds=game["createdAt"]),
        moves=_lichess_moves(game),
    )


# ─── Dispatch ───────────────────────────────────────────────────

PARSERS: Dict[str, Callable[[Dict[str, Any], str], NormalizedGame]] = {
    CHESS_COM: normalize_chess_com_game,
    LICHESS: normalize_lichess_game,
}


def _get_parser(platform: str) -> Callable[[Dict[str, Any], str], NormalizedGame]:
    try:
        return PARSERS[platform]
    except KeyError:
        raise ValueError(f"Unsupported platform: {platform}") from None


def normalize_game(platform: str, game: Dict[str, Any], username: str) -> NormalizedGame:
    """Normalize a single raw record using the parser for its platform."""
    return _get_parser(platform)(game, username)


def normalize_games(platform: str, games: Optional[Iterable[Dict[str, Any]]], username: str) -> List[NormalizedGame]:
    """
    Normalize a batch of raw records from one platform.

    Malformed records are logged and skipped so the rest of the batch survives.
    """
    parser = _get_parser(platform)
    normalized = []
    skipped = 0

    for game in games or []:
        try:
            normalized.append(parser(game, username))
        except (KeyError, TypeError, ValueError, AttributeError, OverflowError, OSError) as e:
            skipped += 1
            logger.warning(f"Skipping malformed {platform} game: {e!r}")

    if skipped > 0:
        logger.info(f"Skipped {skipped} malformed {platform} games for {username}")

    return normalized
