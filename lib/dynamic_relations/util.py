# dynamic_relations/util.py
# Copyright (C) 2026 the sqlalchemy-dynamic-relations authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-dynamic-relations and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

"""Naming helpers used to derive entity identifiers and keys.

Inflection is delegated to the `inflection
<https://pypi.org/project/inflection/>`_ package.  It applies English
heuristics only; irregular plurals may not singularize correctly, in which
case the target entity should be given explicitly via
:paramref:`.DynamicRelationConfig.model_map`.

"""

from __future__ import annotations

import types
from typing import Any

import inflection

NAMESPACE_SEPARATOR = "."


def singularize(word: str) -> str:
    return inflection.singularize(word)


def studly_case(word: str) -> str:
    """``user_languages`` -> ``UserLanguages``."""
    return inflection.camelize(word, uppercase_first_letter=True)


def snake_case(word: str) -> str:
    """``BlogPost`` -> ``blog_post``."""
    return inflection.underscore(word)


def qualify(namespace: str, name: str) -> str:
    """Prefix ``name`` with ``namespace``, ensuring exactly one separator
    between them.  An empty namespace leaves ``name`` unqualified."""
    if namespace and not namespace.endswith(NAMESPACE_SEPARATOR):
        namespace += NAMESPACE_SEPARATOR
    return namespace + name


def entity_name_for_relation(namespace: str, relation_name: str) -> str:
    return qualify(namespace, studly_case(singularize(relation_name)))


def class_attribute(cls: type, name: str, default: Any = None) -> Any:
    """Return the raw value for ``name`` from the first class in the MRO
    that defines it, without invoking descriptors."""
    for klass in cls.__mro__:
        if name in vars(klass):
            return vars(klass)[name]
    return default


def has_relation_method(cls: type, name: str) -> bool:
    return isinstance(getattr(cls, name, None), types.FunctionType)
