"""
tests.test_pydantic_engine
Unit tests for the Pydantic engine primitives.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from typing import Optional

import pytest
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from preoccupied.pydantic.schemaversions import (
    ConstructionError, PydanticEngine, create_versioned_schema)


def test_record_builds_model():
    """
    Records are Pydantic models honouring bare and tuple field definitions.
    """

    engine = PydanticEngine()
    model = engine.record("Widget", {
        "name": str,
        "size": (int, 1),
        "label": (Optional[str], Field(default=None, max_length=4)),
    })

    assert issubclass(model, BaseModel)
    assert model.__name__ == "Widget"
    assert list(model.model_fields) == ["name", "size", "label"]

    widget = model.model_validate({"name": "w"})
    assert widget.size == 1
    assert widget.label is None

    with pytest.raises(ValidationError):
        model.model_validate({"size": 2})

    with pytest.raises(ValidationError):
        model.model_validate({"name": "w", "label": "too long"})


def test_record_rejects_malformed_tuple():
    """
    Tuple field definitions must have exactly two members.
    """

    with pytest.raises(ValueError):
        PydanticEngine().record("Broken", {"name": (str, "a", "b")})


def test_literal_matches_exact_value():
    """
    Literal validators accept only their value.
    """

    adapter = TypeAdapter(PydanticEngine().literal("1"))
    assert adapter.validate_python("1") == "1"

    with pytest.raises(ValidationError):
        adapter.validate_python("2")


@pytest.mark.parametrize(
    "value, note",
    [
        (True, "boolean"),
        (1.0, "float"),
        ("1", "string"),
    ],
)
def test_literal_refuses_other_types(value, note):
    """
    Integer literals do not coerce equal values of other types.
    """

    adapter = TypeAdapter(PydanticEngine().literal(1))
    assert adapter.validate_python(1) == 1

    with pytest.raises(ValidationError):
        adapter.validate_python(value)


@pytest.mark.parametrize(
    "base, tag_field, note",
    [
        ({"_id": str}, "version", "underscore base field"),
        ({"id": str}, "_version", "underscore tag field"),
    ],
)
def test_underscore_fields_refused(base, tag_field, note):
    """
    Underscore-prefixed names cannot be model fields and are refused at
    construction instead of silently dropped.
    """

    with pytest.raises(ConstructionError) as error:
        create_versioned_schema(base=base, versions={"1": {}}, tag_field=tag_field)

    assert "underscore-prefixed" in str(error.value), note


def test_single_branch_union():
    """
    A single branch needs no union wrapper.
    """

    engine = PydanticEngine()
    model = engine.record("Only", {"name": str})
    adapter = engine.union([model])

    parsed = engine.parse(adapter, {"name": "n"})
    assert isinstance(parsed, model)
    assert engine.field_value(parsed, "name") == "n"


def test_union_prefers_first_branch():
    """
    Overlapping branches resolve to the first declared.
    """

    engine = PydanticEngine()
    loose = engine.record("Loose", {"value": (Optional[int], None)})
    tight = engine.record("Tight", {"value": int})
    adapter = engine.union([loose, tight])

    assert isinstance(engine.parse(adapter, {"value": 3}), loose)

    adapter = engine.union([tight, loose])
    assert isinstance(engine.parse(adapter, {"value": 3}), tight)
    assert isinstance(engine.parse(adapter, {}), loose)


def test_invalid_extra_policy():
    """
    Unknown extra policies are refused.
    """

    with pytest.raises(ValueError):
        PydanticEngine(extra="sometimes")


def test_frozen_and_strict_config():
    """
    Frozen and strict settings flow into the generated models.
    """

    schema = create_versioned_schema(
        base={"count": int},
        versions={"1": {}},
        engine=PydanticEngine(strict=True, frozen=True))

    parsed = schema.parse({"count": 3, "version": "1"})
    with pytest.raises(ValidationError):
        parsed.count = 4

    assert not schema.validate({"count": "3", "version": "1"})


# The end.
