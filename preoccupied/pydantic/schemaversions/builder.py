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
preoccupied.pydantic.schemaversions.builder

Compose a single tagged-union validator from a shared base field set and a
mapping of version-specific field additions.

Example:

```python
events = create_versioned_schema(
    base={"id": str, "created_at": int},
    versions={
        "1": {"name": str},
        "2": {"name": str, "description": str},
    })

event = events.parse({"id": "x", "created_at": 1, "name": "n", "version": "1"})
assert event.version == "1"
assert events.is_version("1", event)
assert events.latest == "2"
```

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Hashable, Mapping, Optional, Tuple

from .engine import FieldSet, ValidationEngine
from .exceptions import ConstructionError
from .pydantic_engine import PydanticEngine


__all__ = (
    "VersionedSchema",
    "create_versioned_schema",
    "merge_fields",
)


logger = logging.getLogger(__name__)


COLLISION_POLICIES = ("override", "error")


def _same_tag(left: Any, right: Any) -> bool:
    """
    Strict tag comparison; ``"1"`` is not ``1`` and ``True`` is not ``1``.
    """

    return type(left) is type(right) and left == right


def merge_fields(
        base: FieldSet,
        fields: FieldSet,
        *,
        tag_field: str,
        tag_validator: Any,
        on_collision: str = "override",
        tag: Any = None) -> Dict[str, Any]:
    """
    Merge the base and version-specific field sets, then append the tag
    field. Version-specific fields replace base fields of the same name, and
    the tag field replaces anything declared under its name. With
    ``on_collision="error"`` either case raises :class:`ConstructionError`.
    """

    shadowed = [name for name in fields if name in base]
    declared_tag = tag_field in base or tag_field in fields

    if on_collision == "error":
        if shadowed:
            raise ConstructionError(
                f"Version {tag!r} redeclares base fields: {', '.join(shadowed)}"
            )
        if declared_tag:
            raise ConstructionError(
                f"Version {tag!r} declares reserved tag field {tag_field!r}"
            )

    if shadowed:
        logger.debug("version %r overrides base fields %s", tag, shadowed)
    if declared_tag:
        logger.debug("version %r replaces declared field %r with its tag", tag, tag_field)

    merged: Dict[str, Any] = dict(base)
    merged.update(fields)

    # keep the tag last even when the caller declared it earlier
    merged.pop(tag_field, None)
    merged[tag_field] = tag_validator

    return merged


@dataclass(frozen=True, eq=False)
class VersionedSchema:
    """
    Immutable result of :func:`create_versioned_schema`. Holds the combined
    engine-native ``schema`` along with the ordered ``versions`` and the
    per-version ``branches`` it was composed from.
    """

    schema: Any
    versions: Tuple[Hashable, ...]
    branches: Mapping[Hashable, Any]
    tag_field: str
    engine: ValidationEngine


    @property
    def latest(self) -> Hashable:
        """
        The last declared version, by declaration order rather than by
        magnitude.
        """

        return self.versions[-1]


    def parse(self, value: Any) -> Any:
        """
        Validate ``value`` against each version branch in declaration order,
        returning the result of the first branch which accepts it. Raises the
        engine's validation error when no branch matches.
        """

        return self.engine.parse(self.schema, value)


    def validate(self, value: Any) -> bool:
        """
        True if :meth:`parse` would accept ``value``.
        """

        try:
            self.parse(value)
        except Exception:
            return False
        return True


    def is_version(self, tag: Hashable, value: Any) -> bool:
        """
        True if ``value`` parses and the branch it matched is tagged ``tag``.
        """

        try:
            parsed = self.parse(value)
            found = self.engine.field_value(parsed, self.tag_field)
        except Exception:
            return False
        return _same_tag(found, tag)


    def version_of(self, value: Any) -> Hashable:
        """
        Parse ``value`` and return the tag of the branch it matched.
        """

        parsed = self.parse(value)
        return self.engine.field_value(parsed, self.tag_field)


    def branch(self, tag: Hashable) -> Any:
        """
        Return the record validator for a single version.
        """

        for known in self.versions:
            if _same_tag(known, tag):
                return self.branches[known]
        raise KeyError(tag)


def create_versioned_schema(
        *,
        base: FieldSet,
        versions: Mapping[Hashable, FieldSet],
        engine: Optional[ValidationEngine] = None,
        tag_field: str = "version",
        on_collision: str = "override",
        name: str = "Versioned") -> VersionedSchema:
    """
    Build a tagged union validator with one branch per entry of ``versions``.

    Each branch accepts the ``base`` fields, the version's own fields, and a
    ``tag_field`` whose value must be exactly the version's key. Branches are
    tried in the iteration order of ``versions``.

    :param base: Field validators shared by every version.
    :param versions: Mapping of version tag to the fields that version adds.
    :param engine: Validation engine to compose with. Defaults to a
      :class:`PydanticEngine` with its default configuration.
    :param tag_field: Name of the discriminant field added to every branch.
    :param on_collision: ``"override"`` lets version fields shadow base
      fields and the tag replace any declared ``tag_field``. ``"error"``
      raises :class:`ConstructionError` instead.
    :param name: Prefix for generated record names.
    :return: The composed :class:`VersionedSchema`.
    """

    if on_collision not in COLLISION_POLICIES:
        raise ConstructionError(
            f"Unknown collision policy {on_collision!r}; expected one of {COLLISION_POLICIES}"
        )

    if not versions:
        raise ConstructionError("At least one version must be declared.")

    if engine is None:
        engine = PydanticEngine()

    branches: Dict[Hashable, Any] = {}
    for tag, fields in versions.items():
        merged = merge_fields(
            base, fields,
            tag_field=tag_field,
            tag_validator=engine.literal(tag),
            on_collision=on_collision,
            tag=tag)
        branches[tag] = engine.record(f"{name}V{tag}", merged)

    tags = tuple(branches)
    schema = engine.union([branches[tag] for tag in tags])

    logger.debug(
        "built %s with %d versions %r using %s",
        name, len(tags), tags, type(engine).__name__)

    return VersionedSchema(
        schema=schema,
        versions=tags,
        branches=MappingProxyType(branches),
        tag_field=tag_field,
        engine=engine)


# The end.
