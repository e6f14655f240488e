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
preoccupied.pydantic.schemaversions.engine
Protocol describing the validation capability versioned schemas are built on.

An engine owns every validator value passed through the builder. The builder
never inspects field validators, records, or unions; it only hands them back
to the engine that produced them.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from typing import Any, Mapping, Protocol, Sequence

from typing_extensions import TypeAlias


__all__ = (
    "FieldSet",
    "ValidationEngine",
)


FieldSet: TypeAlias = Mapping[str, Any]
"""
Ordered mapping of field name to an engine-specific field validator.
"""


class ValidationEngine(Protocol):
    """
    Protocol describing the structural validation operations required to
    compose a versioned union.
    """

    def record(self, name: str, fields: FieldSet) -> Any:
        """
        Return a validator matching objects carrying the given fields.

        :param name: Descriptive name for the record, used in error
          locations and generated documentation.
        :param fields: Ordered mapping of field names to field validators.
        :return: An engine-native record validator.
        """

        ...


    def literal(self, value: Any) -> Any:
        """
        Return a field validator matching only ``value``.
        """

        ...


    def union(self, branches: Sequence[Any]) -> Any:
        """
        Return a validator accepting a value matching any one branch.
        Branches must be attempted in the given order and the first match
        must win.
        """

        ...


    def parse(self, schema: Any, value: Any) -> Any:
        """
        Validate ``value`` against ``schema`` and return the validated
        result, raising the engine's native validation error on failure.
        """

        ...


    def field_value(self, value: Any, name: str) -> Any:
        """
        Read the named field from a value previously returned by
        :meth:`parse`.
        """

        ...


# The end.
