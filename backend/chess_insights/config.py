"""
Runtime settings, read from the environment.
"""
import os

USER_AGENT = os.getenv("CHESS_INSIGHTS_USER_AGENT", "ChessInsights/1.0")
REQUEST_TIMEOUT = float(os.getenv("CHESS_INSIGHTS_TIMEOUT", "30"))
MAX_GAMES = int(os.getenv("CHESS_INSIGHTS_MAX_GAMES", "50"))  # Most recent games per platform
