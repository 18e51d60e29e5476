"""
PGN and ECO URL parsing utilities - lightweight version.

Only headers and move numbers are read; moves themselves are never validated.
"""
import re
from typing import Dict
from urllib.parse import unquote, urlsplit

from .game_data import UNKNOWN_OPENING

HEADER_RE = re.compile(r'\[(\w+)\s+"([^"]*)"\]')
BRACKETED_RE = re.compile(r'\[.*?\]\s*')
COMMENT_RE = re.compile(r'\{[^}]*\}')
MOVE_NUMBER_RE = re.compile(r'(\d+)\.')

OPENINGS_SEGMENT = "/openings/"


def parse_headers(pgn_string: str) -> Dict[str, str]:
    """Extract PGN tag pairs with regex, skipping empty values. The first occurrence of a tag wins."""
    headers = {}
    for match in HEADER_RE.finditer(pgn_string):
        if match.group(2):
            headers.setdefault(match.group(1), match.group(2))
    return headers


def opening_from_eco_url(eco_url: str) -> str:
    """
    Turn a Chess.com ECO URL into a readable opening name.

    ".../openings/Italian-Game-Giuoco-Piano-4...Nf6" becomes
    "Italian Game Giuoco Piano 4...Nf6".
    """
    try:
        parts = urlsplit(eco_url)
    except ValueError:
        return UNKNOWN_OPENING

    # Only absolute URLs are accepted
    if not parts.scheme or not parts.netloc:
        return UNKNOWN_OPENING
    path = parts.path

    if OPENINGS_SEGMENT not in path:
        return UNKNOWN_OPENING

    slug = unquote(path.split(OPENINGS_SEGMENT, 1)[1])
    # Keep move numbers readable
    name = re.sub(r'-(\d)', r' \1', slug).replace("-", " ").strip()
    return name or UNKNOWN_OPENING


def opening_from_pgn(pgn_string: str) -> str:
    """Resolve the opening from PGN tags: Opening, then ECOUrl, then ECO."""
    headers = parse_headers(pgn_string)

    if "Opening" in headers:
        return headers["Opening"]
    if "ECOUrl" in headers:
        return opening_from_eco_url(headers["ECOUrl"])
    if "ECO" in headers:
        return headers["ECO"]
    return UNKNOWN_OPENING


def count_full_moves(pgn_string: str) -> int:
    """Return the highest move number in the movetext, 0 if there is none."""
    move_text = BRACKETED_RE.sub('', pgn_string)  # Remove headers and clock annotations
    move_text = COMMENT_RE.sub('', move_text)     # Remove comments

    numbers = [int(n) for n in MOVE_NUMBER_RE.findall(move_text)]
    return max(numbers) if numbers else 0
