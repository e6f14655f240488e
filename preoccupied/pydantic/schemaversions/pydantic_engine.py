# This library is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This library is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this library; if not, see <http://www.gnu.org/licenses/>.

"""
preoccupied.pydantic.schemaversions.pydantic_engine

Validation engine producing Pydantic models for each version branch.

Field validators are anything :func:`pydantic.create_model` accepts as a
field definition. A bare annotation declares a required field, and a
``(annotation, default)`` or ``(annotation, FieldInfo)`` tuple is passed
through untouched.

Example:

```python
engine = PydanticEngine(extra="forbid")

things = create_versioned_schema(
    base={"id": str, "created_at": int},
    versions={
        "1": {"name": str},
        "2": {"name": str, "description": (Optional[str], None)},
    },
    engine=engine)

thing = things.parse({"id": "a", "created_at": 1, "name": "n", "version": "2"})
assert thing.description is None
```

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from typing import Any, Callable, Dict, Literal, Sequence, Tuple, Type, Union

from pydantic import (
    BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter, create_model)
from typing_extensions import Annotated

from .engine import FieldSet, ValidationEngine
from .exceptions import ConstructionError


__all__ = (
    "PydanticEngine",
)


_EXTRA_POLICIES = ("ignore", "forbid", "allow")


def _field_definition(spec: Any) -> Tuple[Any, Any]:
    """
    Convert a field validator into a ``create_model`` field definition.
    """

    if isinstance(spec, tuple):
        if len(spec) != 2:
            raise ValueError(
                f"Field definition tuples must be (annotation, default), got {spec!r}"
            )
        return spec
    return (spec, ...)


def _exact_type(expected: Any) -> Callable[[Any], Any]:
    """
    Build a before-validator refusing values whose type differs from
    ``expected``. Lax literal matching would otherwise let ``True`` or
    ``1.0`` through for a tag of ``1``.
    """

    def check(value: Any) -> Any:
        if type(value) is not type(expected):
            raise ValueError(
                f"Expected {type(expected).__name__} {expected!r}, got {type(value).__name__}"
            )
        return value

    return check


class PydanticEngine(ValidationEngine):
    """
    Engine building one dynamically created :class:`pydantic.BaseModel`
    per version branch, combined by a left-to-right :class:`TypeAdapter`
    union.
    """

    def __init__(
            self,
            *,
            extra: str = "ignore",
            strict: bool = False,
            frozen: bool = False) -> None:

        if extra not in _EXTRA_POLICIES:
            raise ValueError(
                f"Unsupported extra policy {extra!r}; expected one of {_EXTRA_POLICIES}"
            )

        self.config = ConfigDict(extra=extra, strict=strict, frozen=frozen)


    def record(self, name: str, fields: FieldSet) -> Type[BaseModel]:
        """
        Create a model named ``name`` with one field per entry of ``fields``.
        Names with a leading underscore would become private attributes
        rather than fields, so they are refused.
        """

        private = [key for key in fields if key.startswith("_")]
        if private:
            raise ConstructionError(
                f"{name} cannot declare underscore-prefixed fields: {', '.join(private)}"
            )

        definitions: Dict[str, Any] = {
            key: _field_definition(spec) for key, spec in fields.items()
        }
        return create_model(name, __config__=self.config, **definitions)


    def literal(self, value: Any) -> Any:
        """
        Return an annotation accepting only ``value``, of exactly its type.
        ``True`` and ``1.0`` do not satisfy a tag of ``1``.
        """

        return Annotated[
            Literal[value],  # type: ignore[valid-type]
            BeforeValidator(_exact_type(value)),
        ]


    def union(self, branches: Sequence[Type[BaseModel]]) -> TypeAdapter:
        """
        Wrap the branch models in a :class:`TypeAdapter` that tries them in
        order.
        """

        if len(branches) == 1:
            return TypeAdapter(branches[0])

        # smart mode would pick the "best" branch; we want the first
        combined = Annotated[
            Union[tuple(branches)],  # type: ignore[valid-type]
            Field(union_mode="left_to_right"),
        ]
        return TypeAdapter(combined)


    def parse(self, schema: TypeAdapter, value: Any) -> BaseModel:
        """
        Validate ``value``, returning the first matching branch model
        instance or raising :class:`pydantic.ValidationError`.
        """

        return schema.validate_python(value)


    def field_value(self, value: Any, name: str) -> Any:
        return getattr(value, name)


# The end.
