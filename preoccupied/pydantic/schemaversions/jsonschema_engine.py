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
preoccupied.pydantic.schemaversions.jsonschema_engine

Validation engine expressing version branches as JSON Schema documents.

Field validators are JSON Schema fragments. Fragments are required unless
wrapped with :func:`optional`.

Example:

```python
events = create_versioned_schema(
    base={"id": {"type": "string"}},
    versions={
        1: {"name": {"type": "string"}},
        2: {"name": {"type": "string"}, "tags": optional({"type": "array"})},
    },
    engine=JsonSchemaEngine(additional_properties=False))

assert events.validate({"id": "a", "name": "n", "version": 2})
```

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type

from jsonschema import Draft202012Validator, FormatChecker
from jsonschema.protocols import Validator
from jsonschema.validators import extend

from .engine import FieldSet, ValidationEngine
from .exceptions import VersionedSchemaError


__all__ = (
    "JsonSchemaEngine",
    "OptionalField",
    "optional",
)


@dataclass(frozen=True)
class OptionalField:
    """
    Marker wrapping a JSON Schema fragment for a field that may be omitted.
    """

    schema: Mapping[str, Any]


def optional(schema: Mapping[str, Any]) -> OptionalField:
    """
    Declare a JSON Schema fragment as not required.
    """

    return OptionalField(schema=schema)


def _is_integer(checker: Any, instance: Any) -> bool:
    """
    Python-style integer check. Unlike the draft 6+ default, ``1.0`` is
    not an integer here.
    """

    return isinstance(instance, int) and not isinstance(instance, bool)


class JsonSchemaEngine(ValidationEngine):
    """
    Engine producing plain JSON Schema documents. Records are ``object``
    schemas, literals are ``const`` schemas pinned to the tag's JSON type,
    and the union is an ``anyOf``. Parsing returns a deep copy of the
    accepted value.

    The validator class is extended so that ``"integer"`` matches Python
    ``int`` values only. This keeps a tag of ``1`` from accepting ``1.0``,
    and applies equally to any field declared as ``"integer"``.
    """

    def __init__(
            self,
            *,
            additional_properties: bool = True,
            validator_cls: Type[Validator] = Draft202012Validator,
            format_checker: Optional[FormatChecker] = None) -> None:

        self.additional_properties = additional_properties
        self.validator_cls = extend(
            validator_cls,
            type_checker=validator_cls.TYPE_CHECKER.redefine("integer", _is_integer))
        self.format_checker = format_checker


    def validator(self, schema: Mapping[str, Any]) -> Validator:
        return self.validator_cls(schema, format_checker=self.format_checker)


    def record(self, name: str, fields: FieldSet) -> Dict[str, Any]:
        """
        Return an ``object`` schema titled ``name``. Every field is required
        unless wrapped with :func:`optional`. The document is checked against
        the validator's metaschema, raising :class:`jsonschema.SchemaError`
        for malformed fragments.
        """

        properties: Dict[str, Any] = {}
        required: List[str] = []

        for key, spec in fields.items():
            if isinstance(spec, OptionalField):
                properties[key] = dict(spec.schema)
            else:
                properties[key] = dict(spec)
                required.append(key)

        document = {
            "title": name,
            "type": "object",
            "properties": properties,
            "required": required,
            "additionalProperties": self.additional_properties,
        }
        self.validator_cls.check_schema(document)
        return document


    def literal(self, value: Any) -> Dict[str, Any]:
        """
        Return a ``const`` schema for ``value``, constrained to the JSON
        type of ``value`` so that numerically equal values of another type
        are refused.
        """

        document: Dict[str, Any] = {"const": value}

        if isinstance(value, bool):
            document["type"] = "boolean"
        elif isinstance(value, int):
            document["type"] = "integer"
        elif isinstance(value, float):
            document["type"] = "number"
            document["not"] = {"type": "integer"}
        elif isinstance(value, str):
            document["type"] = "string"

        return document


    def union(self, branches: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Combine the branch documents under ``anyOf``, preserving order.
        """

        document = {"anyOf": list(branches)}
        self.validator_cls.check_schema(document)
        return document


    def parse(self, schema: Mapping[str, Any], value: Any) -> Any:
        """
        Return a deep copy of ``value`` if any branch accepts it, trying the
        branches in order. Otherwise raise the ``anyOf`` error, whose
        ``context`` lists the failures of each branch.
        """

        for branch in schema["anyOf"]:
            if self.validator(branch).is_valid(value):
                return deepcopy(value)

        self.validator(schema).validate(value)

        raise VersionedSchemaError(
            f"Combined schema accepted a value refused by every branch: {value!r}"
        )


    def field_value(self, value: Any, name: str) -> Any:
        return value[name]


# The end.
