# dynamic_relations/model.py
# Copyright (C) 2026 the sqlalchemy-dynamic-relations authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-dynamic-relations and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

"""Mixin adding dynamic relations to declarative classes.

Usage::

    from sqlalchemy import ForeignKey
    from sqlalchemy.orm import DeclarativeBase
    from sqlalchemy.orm import Mapped
    from sqlalchemy.orm import mapped_column

    from dynamic_relations import DynamicRelationsMixin


    class Base(DynamicRelationsMixin, DeclarativeBase):
        pass


    class User(Base):
        __tablename__ = "user"
        __dynamic_relations__ = {
            "relations": ["comments", "profile", "account"],
            "type_map": {"profile": "has_one", "account": "belongs_to"},
            "key_map": {"account": "account_id"},
        }

        id: Mapped[int] = mapped_column(primary_key=True)
        account_id: Mapped[int] = mapped_column(ForeignKey("account.id"))

Each name in ``relations`` becomes an attribute of ``User``.  Reading it
loads the relation through the instance's :class:`_orm.Session` the first
time, and returns the cached value afterwards::

    user = session.get(User, 5)

    # SELECT comment.* FROM comment WHERE comment.user_id = ?
    user.comments

    # no SQL emitted
    user.comments

:meth:`.DynamicRelationsMixin.dynamic_relation` returns the unexecuted
:class:`.Relation` instead, which may be refined further::

    recent = user.dynamic_relation("comments").where(Comment.id > 100)

Names that are already attributes of the class, such as mapped columns or
methods, are not replaced; a :class:`.DynamicRelationWarning` is emitted.

"""

from __future__ import annotations

from typing import Any
from typing import ClassVar
from typing import Dict
from typing import Optional
from typing import Type
from typing import TYPE_CHECKING
from typing import Union
import warnings

from sqlalchemy import util
from typing_extensions import Self

from . import exc
from .config import DynamicRelationConfig
from .relations import BelongsTo
from .relations import HasMany
from .relations import HasOne
from .resolver import DynamicRelationResolver
from .util import class_attribute

_NO_ATTR = util.symbol("NO_ATTR")


class DynamicRelationAttribute:
    """Descriptor installed on a class for each dynamic relation name.

    Reading the attribute from an instance returns the materialized relation
    value; assigning to it replaces the cached value, and deleting it
    discards the cached value so that the next read loads it again.

    """

    def __init__(self, key: str):
        self.key = key

    def __get__(
        self, instance: Optional[DynamicRelationsMixin], owner: Type[Any]
    ) -> Any:
        if instance is None:
            return self
        return instance.get_relation_value(self.key)

    def __set__(self, instance: DynamicRelationsMixin, value: Any) -> None:
        instance.set_relation(self.key, value)

    def __delete__(self, instance: DynamicRelationsMixin) -> None:
        instance.unset_relation(self.key)

    def __repr__(self) -> str:
        return "%s(%r)" % (self.__class__.__name__, self.key)


def _instrument_dynamic_relations(
    cls: Type[Any], resolver: DynamicRelationResolver
) -> None:
    for name in sorted(resolver.config.relations):
        existing = class_attribute(cls, name, _NO_ATTR)
        if isinstance(existing, DynamicRelationAttribute):
            continue
        elif existing is not _NO_ATTR:
            warnings.warn(
                "Dynamic relation %r conflicts with an existing attribute "
                "of the same name on class %s; attribute access will not "
                "load the relation" % (name, cls.__name__),
                exc.DynamicRelationWarning,
                stacklevel=3,
            )
            continue
        setattr(cls, name, DynamicRelationAttribute(name))


class DynamicRelationsMixin:
    """Mixin for declarative classes which resolves relations from the
    ``__dynamic_relations__`` configuration.

    The mixin also provides the per-instance relation cache and the
    relation constructor methods named by :class:`.RelationshipType`.

    """

    __dynamic_relations__ = None

    if TYPE_CHECKING:
        _dynamic_resolver: ClassVar[DynamicRelationResolver]

    def __init_subclass__(cls, **kw: Any) -> None:
        super().__init_subclass__(**kw)
        resolver = DynamicRelationResolver(
            DynamicRelationConfig.coerce(cls.__dynamic_relations__), cls
        )
        cls._dynamic_resolver = resolver
        _instrument_dynamic_relations(cls, resolver)

    @classmethod
    def is_dynamic_relation(cls, name: str) -> bool:
        """Return True if ``name`` is a dynamic relation of this class.

        Being a classmethod, this may be called on instances as well.

        """
        return cls._dynamic_resolver.is_dynamic(name)

    def dynamic_relation(self, name: str) -> Any:
        """Return the :class:`.Relation` for relation ``name``.

        ``name`` may be an alias listed in the rename map.  If ``name`` is
        not a dynamic relation, it is handled as an ordinary relation method
        and the materialized value is returned.

        :raises RelationNotFound: ``name`` could not be resolved.

        """
        return type(self)._dynamic_resolver.proxy(self, name)

    def get_relation_value(self, key: str) -> Any:
        """Return the materialized value of relation ``key``, loading it on
        first access; ``None`` if no such relation exists."""
        return type(self)._dynamic_resolver.relation_value(self, key)

    def has_many(
        self,
        target: Union[str, Type[Any]],
        key: str,
        local_key: Optional[str] = None,
    ) -> HasMany:
        return HasMany(self, target, key, local_key)

    def has_one(
        self,
        target: Union[str, Type[Any]],
        key: str,
        local_key: Optional[str] = None,
    ) -> HasOne:
        return HasOne(self, target, key, local_key)

    def belongs_to(
        self,
        target: Union[str, Type[Any]],
        key: str,
        owner_key: Optional[str] = None,
    ) -> BelongsTo:
        return BelongsTo(self, target, key, owner_key)

    @util.memoized_property
    def _dynamic_relation_cache(self) -> Dict[str, Any]:
        return {}

    def relation_loaded(self, key: str) -> bool:
        return key in self._dynamic_relation_cache

    def get_relation(self, key: str) -> Any:
        return self._dynamic_relation_cache[key]

    def get_relations(self) -> Dict[str, Any]:
        return dict(self._dynamic_relation_cache)

    def set_relation(self, key: str, value: Any) -> Self:
        self._dynamic_relation_cache[key] = value
        return self

    def unset_relation(self, key: str) -> Self:
        self._dynamic_relation_cache.pop(key, None)
        return self

    def load(self, *names: str) -> Self:
        """Load the given relations, replacing any cached values.

        :raises RelationNotFound: a name could not be resolved.

        """
        for name in names:
            self.unset_relation(name)
            self._load_relation(name)
        return self

    def load_missing(self, *names: str) -> Self:
        """Load those of the given relations that are not loaded yet."""
        for name in names:
            if not self.relation_loaded(name):
                self._load_relation(name)
        return self

    def _load_relation(self, name: str) -> None:
        self.get_relation_value(name)
        if not self.relation_loaded(name):
            raise exc.RelationNotFound(name)
