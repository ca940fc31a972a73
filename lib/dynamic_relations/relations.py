# dynamic_relations/relations.py
# Copyright (C) 2026 the sqlalchemy-dynamic-relations authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-dynamic-relations and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

"""Relation descriptor objects.

A :class:`.Relation` represents an unexecuted relationship query between one
parent instance and a target mapped class.  It is produced by the relation
constructor methods of :class:`.DynamicRelationsMixin`, e.g.
:meth:`.DynamicRelationsMixin.has_many`, and is materialized by calling
:meth:`.Relation.get_results`, which runs a :func:`_sql.select` against the
:class:`_orm.Session` the parent belongs to.

Unlike :func:`_orm.relationship`, nothing here is configured on the mapper;
the join criterion is built per call from the key names given::

    rel = HasMany(some_user, Comment, "user_id")

    # SELECT comment.* FROM comment WHERE comment.user_id = :param_1
    comments = rel.get_results()

"""

from __future__ import annotations

import enum
from typing import Any
from typing import cast
from typing import List
from typing import Optional
from typing import Tuple
from typing import Type
from typing import TYPE_CHECKING
from typing import Union

from sqlalchemy import bindparam
from sqlalchemy import exc as sa_exc
from sqlalchemy import inspect
from sqlalchemy import select
from sqlalchemy.orm import exc as orm_exc
from sqlalchemy.orm import object_session
from typing_extensions import Self

if TYPE_CHECKING:
    from sqlalchemy.orm import Mapper
    from sqlalchemy.orm import Session
    from sqlalchemy.sql import ColumnElement
    from sqlalchemy.sql import Select


class RelationshipType(enum.Enum):
    """The relation kinds understood by :class:`.DynamicRelationsMixin`.

    Each value is the name of the relation constructor method invoked for
    that kind.

    """

    HAS_MANY = "has_many"
    HAS_ONE = "has_one"
    BELONGS_TO = "belongs_to"


def _instance_str(instance: Any) -> str:
    return "<%s at 0x%x>" % (type(instance).__name__, id(instance))


def _class_path(cls: Type[Any]) -> str:
    return "%s.%s" % (cls.__module__, cls.__qualname__)


def resolve_entity(
    owner: Type[Any], target: Union[str, Type[Any]]
) -> Type[Any]:
    """Locate the mapped class named by ``target``.

    ``target`` may be a class, which is returned as is, or a string.  A
    string is matched against the classes in the declarative registry of
    ``owner``, either by bare class name (``"Comment"``) or by a dotted
    path which must match the trailing portion of the class' full module
    path (``"app.models.Comment"``, ``"models.Comment"``).

    """
    if isinstance(target, type):
        return target
    elif not isinstance(target, str):
        raise sa_exc.ArgumentError(
            "Relation target must be a mapped class or a string "
            "identifier; got %r" % (target,)
        )

    registry = inspect(owner).registry
    candidates: List[Type[Any]] = [
        mapper.class_
        for mapper in registry.mappers
        if _class_path(mapper.class_) == target
        or _class_path(mapper.class_).endswith("." + target)
    ]
    if not candidates:
        raise sa_exc.InvalidRequestError(
            "Could not locate a mapped class for identifier %r in the "
            "registry of %s" % (target, owner.__name__)
        )
    elif len(candidates) > 1:
        raise sa_exc.InvalidRequestError(
            "Multiple classes found for identifier %r in the registry of "
            "%s: %s.  Please use a more fully module-qualified identifier."
            % (
                target,
                owner.__name__,
                ", ".join(sorted(_class_path(c) for c in candidates)),
            )
        )
    return candidates[0]


def _mapped_attribute(cls: Type[Any], key: str) -> Any:
    mapper = inspect(cls)
    if key not in mapper.attrs:
        raise sa_exc.InvalidRequestError(
            "Mapped class %s has no attribute %r" % (cls.__name__, key)
        )
    return getattr(cls, key)


def _primary_key_attribute(mapper: Mapper[Any]) -> str:
    if len(mapper.primary_key) != 1:
        raise sa_exc.ArgumentError(
            "Mapped class %s does not have a single-column primary key; an "
            "explicit key is required" % (mapper.class_.__name__,)
        )
    return mapper.get_property_by_column(mapper.primary_key[0]).key


class Relation:
    """Base for relation descriptors.

    :param parent: the instance the relation is loaded for.

    :param target: mapped class, or string identifier resolved with
     :func:`.resolve_entity`.

    :param key: foreign key attribute name.  Which side of the relation
     holds it depends on the kind.

    """

    kind: RelationshipType

    _where_criteria: Tuple[ColumnElement[bool], ...] = ()

    def __init__(
        self,
        parent: Any,
        target: Union[str, Type[Any]],
        key: str,
    ):
        self.parent = parent
        self.target = resolve_entity(type(parent), target)
        self.key = key

    @property
    def statement(self) -> Select[Any]:
        """The :class:`_sql.Select` that loads this relation.

        The parent's key value is bound lazily, so the statement may be
        built before a pending parent has been flushed.

        """
        return select(self.target).where(
            self._join_criterion(), *self._where_criteria
        )

    def where(self, *criteria: ColumnElement[bool]) -> Self:
        """Return a new relation with additional WHERE criteria."""
        rel = self.__class__.__new__(self.__class__)
        rel.__dict__ = self.__dict__.copy()
        rel._where_criteria = self._where_criteria + criteria
        return rel

    @property
    def session(self) -> Session:
        sess = object_session(self.parent)
        if sess is None:
            raise orm_exc.DetachedInstanceError(
                "Parent instance %s is not bound to a Session; relation "
                "%s cannot be loaded" % (_instance_str(self.parent), self)
            )
        return sess

    def get_results(self) -> Any:
        """Execute the relation and return its materialized value."""
        raise NotImplementedError()

    def _join_criterion(self) -> ColumnElement[bool]:
        raise NotImplementedError()

    def __repr__(self) -> str:
        return "<%s %s -> %s key=%r>" % (
            self.__class__.__name__,
            type(self.parent).__name__,
            self.target.__name__,
            self.key,
        )


class HasOneOrMany(Relation):
    """Relation where the target holds the foreign key.

    :param local_key: attribute on the parent that the target's foreign key
     refers to; defaults to the parent's primary key.

    """

    def __init__(
        self,
        parent: Any,
        target: Union[str, Type[Any]],
        key: str,
        local_key: Optional[str] = None,
    ):
        super().__init__(parent, target, key)
        if local_key is None:
            local_key = _primary_key_attribute(inspect(type(parent)))
        self.local_key = local_key
        self._foreign = _mapped_attribute(self.target, key)
        _mapped_attribute(type(parent), local_key)

    def _join_criterion(self) -> ColumnElement[bool]:
        parent, local_key = self.parent, self.local_key
        return cast(
            "ColumnElement[bool]",
            self._foreign
            == bindparam(
                None, callable_=lambda: getattr(parent, local_key), unique=True
            ),
        )


class HasMany(HasOneOrMany):
    """One-to-many relation; materializes as a list."""

    kind = RelationshipType.HAS_MANY

    def get_results(self) -> Any:
        return list(self.session.scalars(self.statement).all())


class HasOne(HasOneOrMany):
    """One-to-one relation from the side that does not hold the key;
    materializes as an instance or ``None``."""

    kind = RelationshipType.HAS_ONE

    def get_results(self) -> Any:
        return self.session.scalars(self.statement).first()


class BelongsTo(Relation):
    """Many-to-one relation; the parent holds the foreign key.

    :param owner_key: attribute on the target that the parent's foreign key
     refers to; defaults to the target's primary key.

    """

    kind = RelationshipType.BELONGS_TO

    def __init__(
        self,
        parent: Any,
        target: Union[str, Type[Any]],
        key: str,
        owner_key: Optional[str] = None,
    ):
        super().__init__(parent, target, key)
        if owner_key is None:
            owner_key = _primary_key_attribute(inspect(self.target))
        self.owner_key = owner_key
        self._owner = _mapped_attribute(self.target, owner_key)
        _mapped_attribute(type(parent), key)

    def _join_criterion(self) -> ColumnElement[bool]:
        parent, key = self.parent, self.key
        return cast(
            "ColumnElement[bool]",
            self._owner
            == bindparam(
                None, callable_=lambda: getattr(parent, key), unique=True
            ),
        )

    def get_results(self) -> Any:
        if getattr(self.parent, self.key) is None:
            return None
        return self.session.scalars(self.statement).first()
