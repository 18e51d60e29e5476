#!/usr/bin/env python3
"""
Fetch a player's recent games from Chess.com and Lichess and print their stats.

Usage:
  python main.py --chess-com hikaru --lichess DrNykterstein --games
"""
import argparse
import json
import logging
from concurrent.futures import ThreadPoolExecutor

from chess_insights import config
from chess_insights.chess_com_client import ChessComClient
from chess_insights.game_data import CHESS_COM, LICHESS
from chess_insights.lichess_client import LichessClient
from chess_insights.normalize import normalize_games
from chess_insights.projection import build_insight_payload, combine_games, with_ratings
from chess_insights.stats import compute_stats, trend_label

logger = logging.getLogger(__name__)


def fetch_platform(client, platform, username, max_games):
    """Fetch, normalize and rate one platform. Returns (games, rating)."""
    if not username:
        return [], None
    raw_games = client.fetch_recent_games(username, max_games=max_games)
    games = normalize_games(platform, raw_games, username)
    return games, client.get_player_rating(username)


def run(args):
    with ThreadPoolExecutor(max_workers=2) as pool:
        chess_com_future = pool.submit(fetch_platform, ChessComClient(), CHESS_COM, args.chess_com, args.max_games)
        lichess_future = pool.submit(fetch_platform, LichessClient(), LICHESS, args.lichess, args.max_games)
        chess_com_games, chess_com_rating = chess_com_future.result()
        lichess_games, lichess_rating = lichess_future.result()

    logger.info(f"Normalized {len(chess_com_games)} Chess.com and {len(lichess_games)} Lichess games")

    games = combine_games(chess_com_games, lichess_games)
    stats = compute_stats(games, previous_win_rate=args.previous_win_rate)
    stats = with_ratings(stats, chess_com=chess_com_rating, lichess=lichess_rating)

    payload = build_insight_payload(stats, games)
    if not args.games:
        del payload["games"]
    label = trend_label(stats.win_rate_trend)
    if label:
        payload["trend"] = label
    return payload


def main():
    parser = argparse.ArgumentParser(description="Summarize recent Chess.com and Lichess games")
    parser.add_argument("--chess-com", help="Chess.com username")
    parser.add_argument("--lichess", help="Lichess username")
    parser.add_argument("--max-games", type=int, default=config.MAX_GAMES,
                        help=f"Recent games per platform (default: {config.MAX_GAMES})")
    parser.add_argument("--previous-win-rate", type=float,
                        help="Win rate of an earlier period, reported as a trend")
    parser.add_argument("--games", action="store_true",
                        help="Include the condensed game list in the output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    if not args.chess_com and not args.lichess:
        parser.error("Please enter at least one username.")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    print(json.dumps(run(args), indent=2))


if __name__ == "__main__":
    main()
