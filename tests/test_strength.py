import pytest

from keyfort.core.strength import STRENGTH_LABELS, score_password_strength


def test_empty_password():
    result = score_password_strength("")
    assert (result.score, result.label, result.percentage) == (0, "Very Weak", 0)


def test_nine_character_mixed_password():
    # length >= 8, mixed case, digit and symbol: tally 4 of 6
    result = score_password_strength("Abc12345!")
    assert result.score == 2
    assert result.label == "Fair"
    assert result.percentage == 50


def test_adding_length_raises_score():
    assert score_password_strength("Abc12345!xyz").score == 3
    assert score_password_strength("Abc12345!xyzuvw0").score == 4


def test_sixteen_lowercase_is_fair():
    result = score_password_strength("a" * 16)
    assert result.score == 2
    assert result.label == "Fair"
    assert result.percentage == 50


@pytest.mark.parametrize("password, score", [
    ("abc", 0),                     # tally 0
    ("abcdefgh", 0),                # tally 1
    ("abcdefgh1", 1),               # tally 2
    ("abcdefghijk1", 2),            # tally 3
    ("Abcdefghijk1", 2),            # tally 4
    ("Abcdefghijk1!", 3),           # tally 5
    ("Abcdefghijklmno1!", 4),       # tally 6
    ("!!!!", 0),                    # symbol only
])
def test_buckets(password, score):
    result = score_password_strength(password)
    assert result.score == score
    assert result.label == STRENGTH_LABELS[score]
    assert result.percentage == score * 25


def test_non_ascii_letters_count_as_symbols():
    assert score_password_strength("é").score == 0
    assert score_password_strength("ééééééééééé1Aa").score == 3


def test_percentage_is_one_of_five_values():
    for password in ["", "a", "aaaaaaaa", "Aa1!Aa1!Aa1!Aa1!"]:
        assert score_password_strength(password).percentage in (0, 25, 50, 75, 100)
