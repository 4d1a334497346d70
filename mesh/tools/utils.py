# -*- coding: utf-8 -*-
# Meshbridge/mesh/tools/utils.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose
-------
Resolve the mesher executable the runner hands to `subprocess`.

Notes:
------
    - Order: explicit path, then the <NAME>_BIN variable (e.g. GMSH_BIN), then PATH.
    - Explicit and environment paths are taken as given (quotes stripped); a wrong path
      surfaces as the subprocess error, with the full command in the message.
"""

import logging
import os
import shutil
from typing import Optional

logger = logging.getLogger(__name__)


def resolve_executable(name: str, explicit: Optional[str] = None) -> str:
    """
    Return the command to run for executable `name`.

    Raises
    ------
    RuntimeError
        Neither an explicit path, the environment variable, nor PATH provides `name`.
    """
    if explicit:
        return _unquote(explicit)

    env_key = name.upper() + "_BIN"
    from_env = _unquote(os.environ.get(env_key, ""))
    if from_env:
        logger.debug("[resolve_executable] %s from %s: %s", name, env_key, from_env)
        return from_env

    found = shutil.which(name)
    if found is None:
        raise RuntimeError(
            f"'{name}' was not found on PATH. Install it, pass its path explicitly, "
            f"or set {env_key}."
        )
    return os.path.abspath(found)


def _unquote(path: str) -> str:
    return path.strip().strip('"').strip("'")
