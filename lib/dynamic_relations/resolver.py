# dynamic_relations/resolver.py
# Copyright (C) 2026 the sqlalchemy-dynamic-relations authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-dynamic-relations and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

"""Resolve dynamic relation names into relation descriptors.

One :class:`.DynamicRelationResolver` is created for each class that includes
:class:`.DynamicRelationsMixin`, holding that class'
:class:`.DynamicRelationConfig`.  For a requested relation name it determines

* the canonical name, via the rename map;
* the target entity, via the model map or derived from the name;
* the key, via the key map or the class' default key;
* the relation kind, via the type map or the default kind.

The resulting ``(kind, target, key)`` triple is captured in a factory
callable, kept in a per-resolver registry keyed on the requested name, which
is then invoked against instances to produce :class:`.Relation` objects.

"""

from __future__ import annotations

import logging
from typing import Any
from typing import Callable
from typing import cast
from typing import Dict
from typing import Optional
from typing import Type
from typing import TYPE_CHECKING
from typing import Union

from sqlalchemy import exc as sa_exc
from sqlalchemy import util

from . import config as configlib
from . import exc
from . import log
from .relations import Relation
from .util import entity_name_for_relation
from .util import has_relation_method
from .util import snake_case

if TYPE_CHECKING:
    from .config import DynamicRelationConfig
    from .model import DynamicRelationsMixin

_RelationFactory = Callable[["DynamicRelationsMixin"], Any]


def _kind_name(kind: Any) -> str:
    return cast(str, getattr(kind, "value", kind))


@log.class_logger
class DynamicRelationResolver:
    """Resolves relation names for one class against its configuration."""

    logger: logging.Logger
    _should_log_debug: Callable[[], bool]
    _should_log_info: Callable[[], bool]

    def __init__(self, config: DynamicRelationConfig, class_: Type[Any]):
        self.config = config
        self.class_ = class_
        self._factories: Dict[str, _RelationFactory] = {}

    def __repr__(self) -> str:
        return "%s(%s)" % (self.__class__.__name__, self.class_.__name__)

    @util.memoized_property
    def default_key(self) -> str:
        """Key used for relations with no entry in the key map.

        Unless configured, this is the snake-cased class name plus ``_id``;
        it is computed once per class.

        """
        if self.config.default_key is not None:
            return self.config.default_key
        return snake_case(self.class_.__name__) + "_id"

    @property
    def default_type(self) -> str:
        if self.config.default_type is not None:
            return _kind_name(self.config.default_type)
        return _kind_name(configlib.DEFAULT_RELATION_TYPE)

    @property
    def model_namespace(self) -> str:
        if self.config.model_namespace is not None:
            return self.config.model_namespace
        return configlib.DEFAULT_MODEL_NAMESPACE

    def is_dynamic(self, name: str) -> bool:
        return name in self.config.relations

    def resolve_alias(self, name: str) -> str:
        return self.config.rename_map.get(name, name)

    def resolve_key(self, name: str) -> str:
        if name in self.config.key_map:
            return self.config.key_map[name]
        return self.default_key

    def resolve_type(self, name: str) -> str:
        if name in self.config.type_map:
            return _kind_name(self.config.type_map[name])
        return self.default_type

    def resolve_target_entity(self, name: str) -> Union[str, Type[Any]]:
        if name in self.config.model_map:
            return self.config.model_map[name]
        return entity_name_for_relation(self.model_namespace, name)

    def relation_factory(self, name: str) -> Optional[_RelationFactory]:
        """Return the factory producing the relation for ``name``, or
        ``None`` if ``name`` does not resolve to a dynamic relation.

        The target and key come from the canonical (renamed) name, while the
        kind is looked up under ``name`` as requested, so that an alias may
        carry its own kind.

        """
        try:
            return self._factories[name]
        except KeyError:
            pass

        canonical = self.resolve_alias(name)
        if not self.is_dynamic(canonical):
            return None

        target = self.resolve_target_entity(canonical)
        key = self.resolve_key(canonical)
        kind = self.resolve_type(name)

        def factory(instance: DynamicRelationsMixin) -> Any:
            constructor = getattr(instance, kind, None)
            if not callable(constructor):
                raise sa_exc.ArgumentError(
                    "Relation kind %r for dynamic relation %r on %s does "
                    "not name a relation constructor method"
                    % (kind, name, self.class_.__name__)
                )
            return constructor(target, key)

        if self._should_log_debug():
            self.logger.debug(
                "%s: dynamic relation %r resolves to %s(%r, %r)",
                self.class_.__name__,
                name,
                kind,
                target,
                key,
            )
        self._factories[name] = factory
        return factory

    def proxy(self, instance: DynamicRelationsMixin, name: str) -> Any:
        """Produce the relation for ``name`` on ``instance``.

        For a dynamic relation, this is the :class:`.Relation` returned by
        the relation constructor.  Otherwise ``name`` is handled as an
        ordinary relation: a value already in the instance's relation cache
        is returned, else a relation method of that name is called and its
        result materialized.

        :raises RelationNotFound: ``name`` could not be resolved.

        """
        factory = self.relation_factory(name)
        if factory is not None:
            return factory(instance)

        if instance.relation_loaded(name):
            return instance.get_relation(name)

        if has_relation_method(type(instance), name):
            return self.relationship_from_method(instance, name, False)

        raise exc.RelationNotFound(name)

    def relation_value(
        self, instance: DynamicRelationsMixin, name: str
    ) -> Any:
        """Return the materialized value of relation ``name``, loading and
        caching it on first access.

        Returns ``None`` when ``name`` is neither dynamic nor a relation
        method.

        """
        if instance.relation_loaded(name):
            return instance.get_relation(name)

        if self.is_dynamic(name):
            return self.relationship_from_method(instance, name, True)
        elif has_relation_method(type(instance), name):
            return self.relationship_from_method(instance, name, False)
        else:
            return None

    def relationship_from_method(
        self, instance: DynamicRelationsMixin, name: str, use_proxy: bool
    ) -> Any:
        if use_proxy:
            relation = self.proxy(instance, name)
        else:
            relation = getattr(instance, name)()

        if not isinstance(relation, Relation):
            raise exc.InvalidRelationshipContract(name, relation)

        results = relation.get_results()
        instance.set_relation(name, results)

        if self._should_log_debug():
            self.logger.debug(
                "%s: loaded relation %r via %r",
                self.class_.__name__,
                name,
                relation,
            )
        return results
