"""
Chess.com API client for fetching a player's recent games.
"""
import requests
import logging
from typing import Any, Dict, List, Optional

from . import config

logger = logging.getLogger(__name__)


class ChessComClient:
    """Client for interacting with Chess.com Published Data API."""

    BASE_URL = "https://api.chess.com/pub"
    RATING_MODES = ("chess_rapid", "chess_blitz", "chess_bullet", "chess_daily")

    def __init__(self, timeout: float = config.REQUEST_TIMEOUT, user_agent: str = config.USER_AGENT):
        """
        Initialize the Chess.com API client.

        Args:
            timeout: Seconds to wait for each request
            user_agent: Chess.com asks API consumers to identify themselves
        """
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': user_agent
        })

    def _make_request(self, url: str) -> Optional[dict]:
        """
        Make an API request with error handling.
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                logger.warning(f"Chess.com user not found: {url}")
                return None
            logger.error(f"HTTP error fetching {url}: {e}")
            return None
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error fetching {url}: {str(e)}")
            return None
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {e}")
            return None

    def get_archives(self, username: str) -> List[str]:
        """Get the monthly archive URLs for a user, oldest first."""
        data = self._make_request(f"{self.BASE_URL}/player/{username}/games/archives")
        if not data:
            return []
        return data.get('archives', [])

    def fetch_recent_games(self, username: str, max_games: int = config.MAX_GAMES) -> List[Dict[str, Any]]:
        """
        Fetch a user's most recent games, newest first.

        Args:
            username: Chess.com username
            max_games: Number of games to return at most

        Returns:
            List of raw game dicts as returned by the monthly archive endpoint
        """
        raw_games = []

        for archive_url in reversed(self.get_archives(username)):
            if len(raw_games) >= max_games:
                break

            monthly_data = self._make_request(archive_url)
            if not monthly_data:
                continue

            # Games within a month are chronological
            raw_games.extend(reversed(monthly_data.get('games', [])))

        logger.info(f"Fetched {min(len(raw_games), max_games)} Chess.com games for {username}")
        return raw_games[:max_games]

    def get_player_rating(self, username: str) -> Optional[int]:
        """Current rating in the first rated time control the player has."""
        data = self._make_request(f"{self.BASE_URL}/player/{username}/stats")
        if not data:
            return None

        for mode in self.RATING_MODES:
            last = (data.get(mode) or {}).get('last') or {}
            rating = last.get('rating')
            if isinstance(rating, int):
                return rating
        return None
