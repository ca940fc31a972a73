#!/usr/bin/env python
"""
pytest plugin script.

Puts the local ``lib/`` directory at the front of ``sys.path`` so that the
in-tree ``dynamic_relations`` package is tested when running plain ``pytest``
from a checkout, without installing it first.

"""
import os
import sys

import pytest


# this requires that sqlalchemy.testing was not already
# imported in order to work
pytest.register_assert_rewrite("sqlalchemy.testing.assertions")


if not sys.flags.no_user_site:
    # We check no_user_site to honor the use of this flag.
    sys.path.insert(
        0,
        os.path.abspath(
            os.path.join(
                os.path.dirname(os.path.abspath(__file__)), "..", "lib"
            )
        ),
    )
