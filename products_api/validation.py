# products_api/validation.py

"""
Declarative request rules for the product routes.

A rule looks at the path parameters and the JSON body of one request and
returns a `FieldError` when its constraint does not hold, or `None` when it
does. Rule sets are plain ordered lists. Every rule of a set is evaluated,
so a request gets one error entry per failed constraint, in declaration
order, and a single field can fail several rules at once.

Checks work on the "string form" of a value: a missing value or `null`
reads as the empty string, booleans read as "true"/"false" and numbers as
their decimal text.
"""
import re
from typing import Any, Callable, Dict, List, Optional, Sequence

from .models import stored_price
from .schemas import FieldError

Rule = Callable[[Dict[str, Any], Dict[str, Any]], Optional[FieldError]]

MISSING = object()

INT_PATTERN = re.compile(r"[-+]?(?:0|[1-9][0-9]*)")
NUMERIC_PATTERN = re.compile(r"[-+]?(?:[0-9]*\.)?[0-9]+")
BOOLEAN_STRINGS = {"true", "false", "1", "0"}


def as_text(value: Any) -> str:
    """String form of a request value, as the checks see it."""
    if value is MISSING or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def as_number(value: Any) -> Optional[float]:
    """Numeric value of a request value, or None if it has none."""
    if value is MISSING or value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    text = as_text(value)
    if NUMERIC_PATTERN.fullmatch(text):
        return float(text)
    return None


def _rule(
    field: str,
    location: str,
    message: str,
    check: Callable[[Any], bool],
    optional: bool = False,
) -> Rule:
    def rule(params: Dict[str, Any], body: Dict[str, Any]) -> Optional[FieldError]:
        source = params if location == "params" else body
        value = source.get(field, MISSING)
        if optional and value is MISSING:
            return None
        if check(value):
            return None
        details = {"msg": message, "path": field, "location": location}
        if value is not MISSING:
            details["value"] = value
        return FieldError(**details)

    rule.__name__ = f"{check.__name__}[{location}.{field}]"
    return rule


# -----------------------------
# Rule constructors
# -----------------------------


def is_int(field: str, message: str, location: str = "params") -> Rule:
    def is_int(value):
        return bool(INT_PATTERN.fullmatch(as_text(value)))

    return _rule(field, location, message, is_int)


def not_empty(field: str, message: str, location: str = "body") -> Rule:
    def not_empty(value):
        return as_text(value) != ""

    return _rule(field, location, message, not_empty)


def is_numeric(field: str, message: str, location: str = "body") -> Rule:
    def is_numeric(value):
        return not isinstance(value, bool) and bool(NUMERIC_PATTERN.fullmatch(as_text(value)))

    return _rule(field, location, message, is_numeric)


def greater_than_zero(field: str, message: str, location: str = "body") -> Rule:
    """Positive, also once rounded to the cents the price column keeps."""

    def greater_than_zero(value):
        number = as_number(value)
        if number is None or number <= 0:
            return False
        stored = stored_price(number)
        return stored is None or stored > 0

    return _rule(field, location, message, greater_than_zero)


def fits_price_column(field: str, message: str, location: str = "body") -> Rule:
    def fits_price_column(value):
        number = as_number(value)
        # Missing and non-positive values are reported by the other price rules
        return number is None or number <= 0 or stored_price(number) is not None

    return _rule(field, location, message, fits_price_column)


def is_boolean(
    field: str, message: str, location: str = "body", optional: bool = False
) -> Rule:
    def is_boolean(value):
        return isinstance(value, bool) or as_text(value) in BOOLEAN_STRINGS

    return _rule(field, location, message, is_boolean, optional=optional)


def evaluate(
    rules: Sequence[Rule], params: Dict[str, Any], body: Dict[str, Any]
) -> List[FieldError]:
    """Run every rule and collect the failures in order."""
    errors = []
    for rule in rules:
        error = rule(params, body)
        if error is not None:
            errors.append(error)
    return errors


# -----------------------------
# Rule sets per route
# -----------------------------

ID_RULES = [is_int("id", "ID no válido")]

NAME_RULES = [not_empty("name", "Tienes que asignar un nombre al Producto")]

PRICE_RULES = [
    is_numeric("price", "El precio debe ser un número"),
    not_empty("price", "Hay que asignar un precio al Producto"),
    greater_than_zero("price", "El Precio debe ser mayor que 0"),
    fits_price_column("price", "El Precio debe ser menor que 100000000"),
]

AVAILABILITY_MESSAGE = "Valor no válido para la Disponibilidad"

CREATE_PRODUCT_RULES = NAME_RULES + PRICE_RULES

# PUT replaces the whole product, so availability is required
UPDATE_PRODUCT_RULES = (
    ID_RULES + NAME_RULES + PRICE_RULES + [is_boolean("availability", AVAILABILITY_MESSAGE)]
)

# PATCH flips availability; a body is not needed, but a bad value is rejected
UPDATE_AVAILABILITY_RULES = ID_RULES + [
    is_boolean("availability", AVAILABILITY_MESSAGE, optional=True)
]
