"""Tests for domain models."""

import pytest

from hanzi_srs.domain.constants import DEFAULT_WEIGHTS
from hanzi_srs.domain.errors import CardNotFoundError, InvalidParametersError
from hanzi_srs.domain.models import Card, CardState, Parameters, Rating


def test_new_card_defaults(now):
    card = Card.new("你好", now)

    assert card.state == CardState.NEW
    assert card.stability == 0.0
    assert card.difficulty == 0.0
    assert card.reps == 0
    assert card.lapses == 0
    assert card.last_review is None
    assert card.due == now


def test_card_is_frozen(now):
    card = Card.new("你", now)
    with pytest.raises(AttributeError):
        card.reps = 3  # type: ignore[misc]


class TestRating:
    def test_ordered_worst_to_best(self):
        assert Rating.AGAIN < Rating.HARD < Rating.GOOD < Rating.EASY
        assert [int(r) for r in Rating] == [1, 2, 3, 4]

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("again", Rating.AGAIN),
            ("Hard", Rating.HARD),
            (" GOOD ", Rating.GOOD),
            ("4", Rating.EASY),
            (1, Rating.AGAIN),
            (Rating.GOOD, Rating.GOOD),
        ],
    )
    def test_parse(self, value, expected):
        assert Rating.parse(value) == expected

    @pytest.mark.parametrize("value", ["meh", "5", 0])
    def test_parse_rejects_unknown(self, value):
        with pytest.raises(ValueError):
            Rating.parse(value)

    def test_label(self):
        assert Rating.AGAIN.label == "Again"


class TestParameters:
    def test_defaults(self):
        params = Parameters()
        assert params.request_retention == 0.9
        assert params.maximum_interval == 36500
        assert params.w == DEFAULT_WEIGHTS
        assert len(params.w) == 19

    def test_list_weights_become_tuple(self):
        params = Parameters(w=list(DEFAULT_WEIGHTS))
        assert isinstance(params.w, tuple)
        assert hash(params) == hash(Parameters())

    def test_wrong_weight_count(self):
        with pytest.raises(InvalidParametersError, match="Expected 19 weights"):
            Parameters(w=(1.0, 2.0))

    def test_non_numeric_weights(self):
        with pytest.raises(InvalidParametersError):
            Parameters(w=("x",) * 19)

    @pytest.mark.parametrize("retention", [0.0, 1.0, 1.5, -0.1])
    def test_retention_bounds(self, retention):
        with pytest.raises(ValueError):
            Parameters(request_retention=retention)

    def test_maximum_interval_positive(self):
        with pytest.raises(InvalidParametersError):
            Parameters(maximum_interval=0)


def test_card_not_found_error_message():
    err = CardNotFoundError("猫")
    assert err.card_id == "猫"
    assert str(err) == "No card with id '猫'"
    assert isinstance(err, KeyError)
