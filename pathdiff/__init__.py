# Copyright Red Hat
#
# pathdiff/__init__.py - Path diff package initialisation
#
# This file is part of the pathdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Pathdiff top-level package.
"""
from ._pathdiff import *  # noqa: F401, F403
from ._pathdiff import __all__  # noqa: F401

__version__ = "0.1.0"
