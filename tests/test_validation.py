# tests/test_validation.py

"""Unit tests for the request rules, without going through HTTP."""

import pytest

from products_api.validation import (
    CREATE_PRODUCT_RULES,
    ID_RULES,
    UPDATE_AVAILABILITY_RULES,
    UPDATE_PRODUCT_RULES,
    as_text,
    evaluate,
    fits_price_column,
    greater_than_zero,
    is_boolean,
    is_numeric,
)


def messages(rules, params=None, body=None):
    return [error.msg for error in evaluate(rules, params or {}, body or {})]


@pytest.mark.parametrize(
    "value, expected",
    [(None, ""), (True, "true"), (False, "false"), (120.0, "120"), (1.5, "1.5"), ("abc", "abc")],
)
def test_as_text(value, expected):
    assert as_text(value) == expected


@pytest.mark.parametrize("product_id", ["1", "0", "-3", "+7", "2000"])
def test_id_rule_accepts_integers(product_id):
    assert evaluate(ID_RULES, {"id": product_id}, {}) == []


@pytest.mark.parametrize("product_id", ["abc", "1.5", "01", "", "1e3", "5\n"])
def test_id_rule_rejects_non_integers(product_id):
    assert messages(ID_RULES, {"id": product_id}) == ["ID no válido"]


def test_create_rules_on_empty_body():
    assert len(evaluate(CREATE_PRODUCT_RULES, {}, {})) == 4


def test_update_rules_on_empty_body():
    errors = evaluate(UPDATE_PRODUCT_RULES, {"id": "1"}, {})
    assert len(errors) == 5
    assert [error.path for error in errors] == [
        "name",
        "price",
        "price",
        "price",
        "availability",
    ]


def test_update_rules_report_id_first():
    errors = evaluate(UPDATE_PRODUCT_RULES, {"id": "x"}, {"name": "A", "price": -1, "availability": 1})
    assert [error.msg for error in errors] == ["ID no válido", "El Precio debe ser mayor que 0"]


def test_missing_value_is_not_reported():
    error = evaluate(CREATE_PRODUCT_RULES, {}, {"price": 5})[0]
    assert error.to_dict() == {
        "type": "field",
        "msg": "Tienes que asignar un nombre al Producto",
        "path": "name",
        "location": "body",
    }


def test_present_value_is_reported():
    error = evaluate(CREATE_PRODUCT_RULES, {}, {"name": "A", "price": -2})[0]
    assert error.to_dict()["value"] == -2


@pytest.mark.parametrize("price", [0, "0", -1, "-0.5"])
def test_non_positive_price_fails_only_positivity(price):
    assert messages(CREATE_PRODUCT_RULES, body={"name": "A", "price": price}) == [
        "El Precio debe ser mayor que 0"
    ]


@pytest.mark.parametrize("price", [1, 0.01, "19.99", ".5", "+3"])
def test_valid_prices(price):
    assert messages(CREATE_PRODUCT_RULES, body={"name": "A", "price": price}) == []


@pytest.mark.parametrize("price", [True, "1e3", " 5", "abc", "5\n"])
def test_is_numeric_rejects(price):
    rule = is_numeric("price", "numeric")
    assert rule({}, {"price": price}) is not None


def test_greater_than_zero_rejects_booleans():
    rule = greater_than_zero("price", "positive")
    assert rule({}, {"price": True}) is not None


@pytest.mark.parametrize("value", [True, False, "true", "false", "1", "0", 1, 0])
def test_is_boolean_accepts(value):
    assert is_boolean("availability", "bool")({}, {"availability": value}) is None


@pytest.mark.parametrize("value", ["yes", 2, None, "", [True]])
def test_is_boolean_rejects(value):
    assert is_boolean("availability", "bool")({}, {"availability": value}) is not None


def test_availability_is_optional_on_patch():
    assert evaluate(UPDATE_AVAILABILITY_RULES, {"id": "1"}, {}) == []
    assert messages(UPDATE_AVAILABILITY_RULES, {"id": "1"}, {"availability": "x"}) == [
        "Valor no válido para la Disponibilidad"
    ]


@pytest.mark.parametrize("price", [0.001, "0.004", 0.0049])
def test_price_rounding_to_zero_cents_is_not_positive(price):
    assert messages(CREATE_PRODUCT_RULES, body={"name": "A", "price": price}) == [
        "El Precio debe ser mayor que 0"
    ]


@pytest.mark.parametrize("price", [0.005, 0.01, 99999999.99])
def test_price_within_column(price):
    assert messages(CREATE_PRODUCT_RULES, body={"name": "A", "price": price}) == []


@pytest.mark.parametrize("price", [100000000, "99999999.995", 1e300])
def test_price_beyond_column(price):
    rule = fits_price_column("price", "too large")
    assert rule({}, {"price": price}) is not None


@pytest.mark.parametrize("price", [None, "abc", -5, 0])
def test_fits_price_column_leaves_other_failures_alone(price):
    rule = fits_price_column("price", "too large")
    assert rule({}, {"price": price}) is None
