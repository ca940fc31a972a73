# dynamic_relations/config.py
# Copyright (C) 2026 the sqlalchemy-dynamic-relations authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-dynamic-relations and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

"""Configuration tables for dynamic relations.

A mapped class that includes :class:`.DynamicRelationsMixin` declares its
configuration using the ``__dynamic_relations__`` class attribute, in the
same way ``__tablename__`` and ``__mapper_args__`` are declared::

    class User(DynamicRelationsMixin, Base):
        __tablename__ = "user"

        __dynamic_relations__ = DynamicRelationConfig(
            relations=["comments", "profile", "languages"],
            type_map={"profile": "has_one"},
            model_map={"languages": "UserLanguage"},
        )

        id: Mapped[int] = mapped_column(primary_key=True)

A plain ``dict`` of the same keyword arguments is accepted as well.  Any
field left unset falls back to the module level defaults
:data:`.DEFAULT_RELATION_TYPE` and :data:`.DEFAULT_MODEL_NAMESPACE`, or to a
value derived from the class name, as is the case for
:paramref:`.DynamicRelationConfig.default_key`.

"""

from __future__ import annotations

import dataclasses
from typing import Any
from typing import FrozenSet
from typing import Iterable
from typing import Mapping
from typing import Optional
from typing import Type
from typing import Union

from sqlalchemy import exc as sa_exc
from sqlalchemy import util

DEFAULT_RELATION_TYPE = "has_many"
"""Relation kind used when a relation has no entry in
:paramref:`.DynamicRelationConfig.type_map` and the configuration sets no
:paramref:`.DynamicRelationConfig.default_type`.  The value names a relation
constructor method on :class:`.DynamicRelationsMixin`."""

DEFAULT_MODEL_NAMESPACE = ""
"""Namespace prefixed to derived entity names.  When empty, derived names are
bare class names, located through the declarative registry of the owning
class."""

_MAP_FIELDS = ("key_map", "type_map", "model_map", "rename_map")


@dataclasses.dataclass(frozen=True)
class DynamicRelationConfig:
    """Immutable set of configuration tables for one mapped class.

    :param relations: names to be treated as dynamic relations.  Membership
     is tested by exact string match.

    :param key_map: relation name -> foreign key attribute name.  Relations
     not present use :attr:`.DynamicRelationResolver.default_key`.

    :param type_map: relation name -> relation kind, either a
     :class:`.RelationshipType` or the name of a relation constructor method
     such as ``"belongs_to"``.

    :param model_map: relation name -> target entity, either a mapped class
     or an identifier string.  Relations not present derive the identifier
     from the relation name, e.g. ``comments`` -> ``Comment``.

    :param rename_map: alias -> canonical relation name.  Names that are not
     keys of this map pass through unchanged.

    :param default_key: fallback key.  When ``None``, the snake-cased class
     name plus ``_id`` is used, e.g. ``BlogPost`` -> ``blog_post_id``.

    :param default_type: fallback relation kind; when ``None``,
     :data:`.DEFAULT_RELATION_TYPE` is used.

    :param model_namespace: prefix for derived entity identifiers; when
     ``None``, :data:`.DEFAULT_MODEL_NAMESPACE` is used.

    """

    relations: FrozenSet[str] = frozenset()
    key_map: Mapping[str, str] = dataclasses.field(default_factory=dict)
    type_map: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    model_map: Mapping[str, Union[str, Type[Any]]] = dataclasses.field(
        default_factory=dict
    )
    rename_map: Mapping[str, str] = dataclasses.field(default_factory=dict)
    default_key: Optional[str] = None
    default_type: Optional[Any] = None
    model_namespace: Optional[str] = None

    def __post_init__(self) -> None:
        relations: Optional[Iterable[str]] = self.relations
        if relations is None:
            relations = ()
        elif isinstance(relations, str):
            relations = (relations,)
        object.__setattr__(self, "relations", frozenset(relations))

        for name in _MAP_FIELDS:
            value = getattr(self, name)
            if value is None:
                value = {}
            object.__setattr__(self, name, util.immutabledict(value))

    @classmethod
    def coerce(cls, value: Any) -> DynamicRelationConfig:
        """Produce a :class:`.DynamicRelationConfig` from the value of a
        ``__dynamic_relations__`` class attribute."""
        if value is None:
            return cls()
        elif isinstance(value, cls):
            return value
        elif isinstance(value, Mapping):
            return cls(**value)
        else:
            raise sa_exc.ArgumentError(
                "__dynamic_relations__ must be a DynamicRelationConfig or a "
                "dictionary of its arguments; got %r" % (value,)
            )

    def replace(self, **kw: Any) -> DynamicRelationConfig:
        """Return a copy of this configuration with the given fields
        replaced."""
        return dataclasses.replace(self, **kw)

    def merge(
        self, other: Union[DynamicRelationConfig, Mapping[str, Any]]
    ) -> DynamicRelationConfig:
        """Layer ``other`` over this configuration.

        Relation names are unioned, map entries of ``other`` take precedence,
        and scalar fields of ``other`` win when they are not ``None``.  This
        is the usual way for a subclass to extend its parent's tables::

            class Admin(User):
                __dynamic_relations__ = User.__dynamic_relations__.merge(
                    {"relations": ["audits"]}
                )

        """
        other = self.coerce(other)
        kw: dict[str, Any] = {"relations": self.relations | other.relations}
        for name in _MAP_FIELDS:
            kw[name] = {**getattr(self, name), **getattr(other, name)}
        for name in ("default_key", "default_type", "model_namespace"):
            value = getattr(other, name)
            kw[name] = value if value is not None else getattr(self, name)
        return self.__class__(**kw)
