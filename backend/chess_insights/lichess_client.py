"""
Lichess API client for fetching a player's recent games.
"""
import requests
import json
import logging
from typing import Any, Dict, List, Optional

from . import config

logger = logging.getLogger(__name__)


class LichessClient:
    """Client for interacting with Lichess API."""

    BASE_URL = "https://lichess.org/api"
    RATING_MODES = ("rapid", "blitz", "bullet", "classical")

    def __init__(self, timeout: float = config.REQUEST_TIMEOUT, user_agent: str = config.USER_AGENT):
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': user_agent
        })

    def _make_request(self, url: str, params: dict = None, headers: dict = None) -> Optional[requests.Response]:
        """Make API request, returning None on failure."""
        try:
            response = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            return response
        except requests.exceptions.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                logger.warning(f"Lichess user not found: {url}")
                return None
            logger.error(f"HTTP error fetching {url}: {str(e)}")
            return None
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error fetching {url}: {str(e)}")
            return None

    def fetch_recent_games(self, username: str, max_games: int = config.MAX_GAMES) -> List[Dict[str, Any]]:
        """
        Fetch a user's most recent games, newest first.

        Args:
            username: Lichess username
            max_games: Number of games to return at most

        Returns:
            List of raw game dicts, one per NDJSON line
        """
        url = f"{self.BASE_URL}/games/user/{username}"
        params = {
            'max': max_games,
            'opening': 'true',
            'moves': 'true',
        }

        response = self._make_request(url, params, headers={'Accept': 'application/x-ndjson'})
        if response is None:
            return []

        # Parse NDJSON response (newline-delimited JSON)
        games = []
        for line in response.text.strip().split('\n'):
            if not line.strip():
                continue
            try:
                games.append(json.loads(line))
            except json.JSONDecodeError as e:
                logger.warning(f"Failed to parse game JSON: {e}")
                continue

        logger.info(f"Fetched {len(games)} Lichess games for {username}")
        return games

    def get_player_rating(self, username: str) -> Optional[int]:
        """Rating in the first time control the player has games in, else any rating."""
        response = self._make_request(f"{self.BASE_URL}/user/{username}")
        if response is None:
            return None

        try:
            perfs = response.json().get('perfs') or {}
        except ValueError as e:
            logger.error(f"Invalid profile JSON for {username}: {e}")
            return None

        for mode in self.RATING_MODES:
            perf = perfs.get(mode) or {}
            if isinstance(perf.get('rating'), int) and (perf.get('games') or 0) > 0:
                return perf['rating']

        for mode in self.RATING_MODES:
            rating = (perfs.get(mode) or {}).get('rating')
            if isinstance(rating, int):
                return rating
        return None
