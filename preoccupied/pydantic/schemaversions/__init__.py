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
preoccupied.pydantic.schemaversions
Namespace package segment composing versioned record shapes into a single
tagged union validator.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from .builder import VersionedSchema, create_versioned_schema, merge_fields
from .engine import FieldSet, ValidationEngine
from .exceptions import ConstructionError, VersionedSchemaError
from .jsonschema_engine import JsonSchemaEngine, OptionalField, optional
from .pydantic_engine import PydanticEngine


__all__ = (
    "VersionedSchema",
    "create_versioned_schema",
    "merge_fields",

    "FieldSet",
    "ValidationEngine",

    "PydanticEngine",

    "JsonSchemaEngine",
    "OptionalField",
    "optional",

    "ConstructionError",
    "VersionedSchemaError",
)


# The end.
