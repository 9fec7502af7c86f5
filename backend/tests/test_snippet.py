"""Unit tests for snippet windows and highlighting."""

from app.search.snippet import create_snippet, find_best_window


def test_short_text_is_highlighted_without_ellipsis():
    text = "machine learning transforms healthcare. deep learning improves diagnosis."

    snippet = create_snippet(text, "deep learning")

    assert snippet == (
        "machine **learning** transforms healthcare. **deep** **learning** improves diagnosis."
    )


def test_highlight_keeps_original_case():
    assert create_snippet("Deep Learning", "deep") == "**Deep** Learning"


def test_long_text_without_match_starts_at_beginning():
    assert create_snippet("a" * 300, "zzz") == "a" * 200 + "..."


def test_text_of_exactly_max_length_has_no_ellipsis():
    assert create_snippet("a" * 200, "zzz") == "a" * 200
    assert create_snippet("a" * 201, "zzz") == "a" * 200 + "..."


def test_picks_window_with_most_terms():
    text = "." * 300 + "deep learning" + "." * 300

    snippet = create_snippet(text, "deep learning")

    assert snippet == "." * 150 + "**deep** **learning**" + "." * 37 + "..."


def test_earliest_window_wins_ties():
    text = "deep" + "." * 500 + "deep" + "." * 100
    assert find_best_window(text, ["deep"], 200, 50) == 0


def test_window_reaching_the_end_has_no_ellipsis():
    text = "." * 250 + "quantum"
    # the only scanned offsets are 0 and 50; neither contains the term
    assert find_best_window(text, ["quantum"], 200, 50) == 0
    assert create_snippet(text, "quantum").endswith("...")

    text = "." * 100 + "quantum" + "." * 93
    snippet = create_snippet(text, "quantum")
    assert len(text) == 200
    assert not snippet.endswith("...")


def test_regex_characters_in_query_are_literal():
    assert create_snippet("c++ rocks", "c++") == "**c++** rocks"


def test_overlapping_terms_produce_nested_markers():
    # terms are replaced one after another without overlap protection
    assert create_snippet("learning", "learning learn") == "****learn**ing**"
    assert create_snippet("learning", "learn learning") == "**learn**ing"
