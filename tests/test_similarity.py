import pytest

from safephone.core.similarity import levenshtein_distance


@pytest.mark.parametrize("text", ["", "a", "banreservas.com", "ñandú.com.do"])
def test_distance_to_self_is_zero(text):
    assert levenshtein_distance(text, text) == 0


def test_distance_against_empty_is_length():
    assert levenshtein_distance("", "bhd.com.do") == len("bhd.com.do")
    assert levenshtein_distance("apap", "") == 4


def test_dropped_letter_is_close():
    assert levenshtein_distance("banreservas.com", "banresevas.com") <= 2


def test_known_distances():
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("flaw", "lawn") == 2
    assert levenshtein_distance("bhd.com.do", "bdh.com.do") == 2


def test_distance_is_symmetric():
    assert levenshtein_distance("popularenlinea.com", "popularenlinea.co") == \
        levenshtein_distance("popularenlinea.co", "popularenlinea.com")


def test_code_points_are_atomic():
    assert levenshtein_distance("leon", "león") == 1


@pytest.mark.parametrize("a, b, c", [
    ("banreservas.com", "banresevas.com", "banreserva.com"),
    ("bhd.com.do", "bhdleon.com.do", "bdh.com.do"),
    ("popularenlinea.com", "bancopopular.com.do", "bpd.com.do"),
    ("", "apap.com.do", "acap.com.do"),
])
def test_triangle_inequality(a, b, c):
    assert levenshtein_distance(a, c) <= levenshtein_distance(a, b) + levenshtein_distance(b, c)
    assert levenshtein_distance(b, c) <= levenshtein_distance(b, a) + levenshtein_distance(a, c)
