"""Tests for catalog display helpers."""

import pytest
from hypothesis import given, strategies as st

from gamehunt.models import Game, Genre
from gamehunt.ui.formatting import (
    DEFAULT_COLOR,
    format_rating,
    format_release_date,
    game_card_text,
    join_genre_names,
    parse_color,
    strip_html,
)


class TestReleaseDate:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2013-09-17", "Sep 2013"),
            ("2020-01-02", "Jan 2020"),
            ("1998-12-31", "Dec 1998"),
        ],
    )
    def test_formats_month_and_year(self, value: str, expected: str) -> None:
        assert format_release_date(value) == expected

    def test_missing_date(self) -> None:
        assert format_release_date(None) == ""
        assert format_release_date("") == ""

    def test_unparseable_date_is_returned_unchanged(self) -> None:
        assert format_release_date("TBA") == "TBA"
        assert format_release_date("2013-13-40") == "2013-13-40"

    @given(st.dates())
    def test_any_date_has_month_and_year(self, value) -> None:
        month, year = format_release_date(value.isoformat()).split(" ")
        assert len(month) == 3
        assert int(year) == value.year


class TestStripHtml:
    def test_paragraphs_become_lines(self) -> None:
        assert strip_html("<p>First.</p><p>Second <b>bold</b>.</p>") == "First.\nSecond\nbold\n."

    def test_plain_text_is_kept(self) -> None:
        assert strip_html("Just text") == "Just text"

    def test_empty(self) -> None:
        assert strip_html("") == ""


class TestParseColor:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("0f0f0f", "#0f0f0f"),
            ("#ABCDEF", "#abcdef"),
            ("11223344", "#112233"),
            ("  0f0f0f ", "#0f0f0f"),
        ],
    )
    def test_valid_hex(self, value: str, expected: str) -> None:
        assert parse_color(value) == expected

    @pytest.mark.parametrize("value", ["", "red", "12345", "#1234567", "zzzzzz"])
    def test_invalid_falls_back(self, value: str) -> None:
        assert parse_color(value) == DEFAULT_COLOR
        assert parse_color(value, default="#ffffff") == "#ffffff"


def test_format_rating() -> None:
    assert format_rating(4.5) == "★ 4.5"
    assert format_rating(4.0) == "★ 4.0"
    assert format_rating(3.456) == "★ 3.5"


def test_join_genre_names() -> None:
    genres = [Genre(4, "Action", "action", ""), Genre(5, "RPG", "rpg", "")]
    assert join_genre_names(genres) == "Action | RPG"
    assert join_genre_names([]) == ""


class TestGameCardText:
    def test_full_card(self) -> None:
        game = Game(1, "Portal 2", "portal-2", "", 4.6, "2011-04-18", ["Shooter", "Puzzle"])
        assert game_card_text(game) == "Portal 2  ·  ★ 4.6  ·  Apr 2011  ·  Shooter, Puzzle"

    def test_minimal_card(self) -> None:
        assert game_card_text(Game(1, "X", "x", "", 4.5)) == "X  ·  ★ 4.5"

    def test_brackets_are_kept_verbatim(self) -> None:
        game = Game(1, "[PROTOTYPE]", "prototype", "", 3.9)
        assert game_card_text(game).startswith("[PROTOTYPE]")
