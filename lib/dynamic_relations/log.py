# dynamic_relations/log.py
# Copyright (C) 2026 the sqlalchemy-dynamic-relations authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-dynamic-relations and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

"""Logging control and utilities.

Control of logging is performed from the regular python logging module.
The regular dotted module namespace is used, starting at
``dynamic_relations``.  For class-level logging, the class name is appended,
e.g.::

    import logging

    logging.getLogger(
        "dynamic_relations.resolver.DynamicRelationResolver"
    ).setLevel(logging.DEBUG)

No handlers are installed by this package.

"""

from __future__ import annotations

import logging
from typing import Any
from typing import Type
from typing import TypeVar

rootlogger = logging.getLogger("dynamic_relations")
if rootlogger.level == logging.NOTSET:
    rootlogger.setLevel(logging.WARN)

_IT = TypeVar("_IT", bound=Any)


def _qual_logger_name_for_cls(cls: Type[Any]) -> str:
    return (
        getattr(cls, "_dynamic_logger_name", None)
        or cls.__module__ + "." + cls.__name__
    )


def class_logger(cls: Type[_IT]) -> Type[_IT]:
    logger = logging.getLogger(_qual_logger_name_for_cls(cls))
    cls._should_log_debug = lambda self: logger.isEnabledFor(logging.DEBUG)
    cls._should_log_info = lambda self: logger.isEnabledFor(logging.INFO)
    cls.logger = logger
    return cls
