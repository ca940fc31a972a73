# dynamic_relations/__init__.py
# Copyright (C) 2026 the sqlalchemy-dynamic-relations authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-dynamic-relations and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

"""Relations resolved at runtime from configuration tables, for SQLAlchemy
declarative classes."""

from .config import DEFAULT_MODEL_NAMESPACE as DEFAULT_MODEL_NAMESPACE
from .config import DEFAULT_RELATION_TYPE as DEFAULT_RELATION_TYPE
from .config import DynamicRelationConfig as DynamicRelationConfig
from .exc import DynamicRelationError as DynamicRelationError
from .exc import DynamicRelationWarning as DynamicRelationWarning
from .exc import InvalidRelationshipContract as InvalidRelationshipContract
from .exc import RelationNotFound as RelationNotFound
from .model import DynamicRelationAttribute as DynamicRelationAttribute
from .model import DynamicRelationsMixin as DynamicRelationsMixin
from .relations import BelongsTo as BelongsTo
from .relations import HasMany as HasMany
from .relations import HasOne as HasOne
from .relations import HasOneOrMany as HasOneOrMany
from .relations import Relation as Relation
from .relations import RelationshipType as RelationshipType
from .relations import resolve_entity as resolve_entity
from .resolver import DynamicRelationResolver as DynamicRelationResolver

__version__ = "1.1.0"
