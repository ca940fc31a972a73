# dynamic_relations/exc.py
# Copyright (C) 2026 the sqlalchemy-dynamic-relations authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-dynamic-relations and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

"""Exceptions raised while resolving dynamic relations.

All errors are rooted in :class:`sqlalchemy.exc.InvalidRequestError`, the same
way the exceptions in :mod:`sqlalchemy.orm.exc` are, so that code which
catches :class:`sqlalchemy.exc.SQLAlchemyError` sees them as well.

"""

from __future__ import annotations

from typing import Any
from typing import Optional

from sqlalchemy import exc as sa_exc


class DynamicRelationError(sa_exc.InvalidRequestError):
    """Base for errors raised by the dynamic relation resolver."""


class RelationNotFound(DynamicRelationError):
    """A relation name could not be resolved.

    Raised when the name is neither a dynamic relation, nor already loaded
    into the instance's relation cache, nor the name of a relation method
    on the class.

    """

    def __init__(self, name: str, msg: Optional[str] = None):
        self.name = name
        if not msg:
            msg = (
                "Relation %r not found; it is not a dynamic relation, "
                "has not been loaded, and no relation method of that "
                "name exists" % (name,)
            )
        super().__init__(msg)


class InvalidRelationshipContract(DynamicRelationError):
    """A relation method returned something other than a
    :class:`.Relation`."""

    def __init__(self, name: str, value: Any, msg: Optional[str] = None):
        self.name = name
        self.value = value
        if not msg:
            msg = (
                "Relationship method %r must return an object of type "
                "dynamic_relations.Relation; got %r" % (name, value)
            )
        super().__init__(msg)


class DynamicRelationWarning(sa_exc.SAWarning):
    """Emitted when a dynamic relation name is shadowed by an attribute
    already present on the class."""
