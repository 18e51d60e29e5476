"""PGN header, ECO URL and move-count parsing."""

import pytest
from helpers import ITALIAN_ECO_URL, SAMPLE_PGN

from chess_insights.pgn_parser import (
    count_full_moves,
    opening_from_eco_url,
    opening_from_pgn,
    parse_headers,
)


class TestParseHeaders:

    def test_reads_tag_pairs(self):
        headers = parse_headers(SAMPLE_PGN)
        assert headers["White"] == "Alice"
        assert headers["ECO"] == "C53"
        assert headers["Result"] == "1-0"

    def test_first_occurrence_wins(self):
        headers = parse_headers('[Opening "Ruy Lopez"]\n[Opening "Italian Game"]')
        assert headers["Opening"] == "Ruy Lopez"

    def test_empty_values_are_absent(self):
        assert "Opening" not in parse_headers('[Opening ""]\n[ECO "B01"]')


class TestOpeningFromEcoUrl:

    def test_hyphens_become_spaces_and_move_numbers_stay_readable(self):
        name = opening_from_eco_url(ITALIAN_ECO_URL)
        assert "Italian Game Giuoco Piano 4" in name
        assert name == "Italian Game Giuoco Piano 4...Nf6"

    def test_move_number_after_hyphen(self):
        url = "https://www.chess.com/openings/Sicilian-Defense-Open-2...d6-3.d4"
        assert opening_from_eco_url(url) == "Sicilian Defense Open 2...d6 3.d4"

    def test_plain_name(self):
        assert opening_from_eco_url("https://www.chess.com/openings/Kings-Pawn-Opening") == "Kings Pawn Opening"

    def test_percent_encoded_segment(self):
        url = "https://www.chess.com/openings/Bird%27s-Opening"
        assert opening_from_eco_url(url) == "Bird's Opening"

    @pytest.mark.parametrize("url", [
        "https://www.chess.com/openings/",
        "https://www.chess.com/game/live/123",
        "not a url",
        "",
        "http://[::1",
        "www.chess.com/openings/Italian-Game",
        "/openings/Italian-Game",
    ])
    def test_unparseable_urls_are_unknown(self, url):
        assert opening_from_eco_url(url) == "Unknown"


class TestOpeningFromPgn:

    def test_opening_tag_wins(self):
        pgn = '[Opening "Ruy Lopez"]\n[ECOUrl "https://www.chess.com/openings/Italian-Game"]\n[ECO "C60"]'
        assert opening_from_pgn(pgn) == "Ruy Lopez"

    def test_eco_url_tag_before_eco_code(self):
        assert opening_from_pgn(SAMPLE_PGN) == "Italian Game Giuoco Piano 4...Nf6"

    def test_eco_code_fallback(self):
        assert opening_from_pgn('[White "A"]\n[ECO "B20"]\n\n1. e4 c5') == "B20"

    def test_no_tags(self):
        assert opening_from_pgn("1. e4 e5 2. Nf3") == "Unknown"


class TestCountFullMoves:

    def test_highest_move_number(self):
        assert count_full_moves(SAMPLE_PGN) == 4

    def test_clock_annotations_do_not_count(self):
        pgn = '1. e4 {[%clk 0:09:58.5]} 1... e5 {[%clk 0:09:57.1]}'
        assert count_full_moves(pgn) == 1

    def test_comment_numbers_do_not_count(self):
        assert count_full_moves("1. e4 {see game 99. for ideas} e5 2. Nf3") == 2

    def test_header_numbers_do_not_count(self):
        assert count_full_moves('[Date "2023.11.14"]\n[Round "12."]\n\n1. d4 d5') == 1

    def test_no_moves(self):
        assert count_full_moves('[Event "Live Chess"]\n[Result "*"]\n') == 0
        assert count_full_moves("") == 0
