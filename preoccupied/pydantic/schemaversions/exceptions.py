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
preoccupied.pydantic.schemaversions.exceptions
Errors raised while declaring versioned schemas.

Validation failures are not represented here; each engine raises its own
native error type from ``parse``.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


__all__ = (
    "ConstructionError",
    "VersionedSchemaError",
)


class VersionedSchemaError(ValueError):
    """
    Base class for errors raised by this package.
    """


class ConstructionError(VersionedSchemaError):
    """
    A versioned schema could not be built from the supplied declaration.
    """


# The end.
