"""Environment-variable substitution over a configuration tree.

:func:`expand_env` walks a value produced by ``yaml.safe_load`` (or a
Pydantic model) and replaces ``${VAR}`` and ``$VAR`` references in every
string it finds. Unset variables expand to the empty string. Substitution
is single-pass: an expanded value is never expanded again. A container
reached twice (YAML anchors and aliases share one object) is expanded once.

Name syntax follows the shell: ``${NAME}`` takes everything up to the closing
brace; a bare ``$NAME`` is a letter or underscore followed by letters, digits
and underscores. A single digit or one of ``*#$@!?-`` after ``$`` is a
one-character name, so ``$1abc`` looks up ``1`` and keeps ``abc``.

Traversal rules
---------------
- ``str``: expanded.
- ``bytes`` / ``bytearray``: passed through untouched.
- ``list``: each element expanded or recursed into, in place.
- ``tuple``: rebuilt with expanded elements.
- ``dict``: values expanded or recursed into, in place; keys are kept.
- Pydantic models: every serialized field is expanded in place; excluded
  fields and private attributes are left alone.
- Anything else (numbers, booleans, ``None``): returned unchanged.

Example
-------
::

    doc = {"paths": [{"path": "${HOME}/data", "perms": ["$MODE"]}]}
    expand_env(doc, {"HOME": "/home/alice", "MODE": "read"})
    assert doc["paths"][0]["path"] == "/home/alice/data"
"""
from __future__ import annotations

import os
import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

_VAR_PATTERN = re.compile(
    r"\$(?:\{(?P<braced>[^}]*)\}"
    r"|(?P<bare>[*#$@!?\-0-9]|[A-Za-z_][A-Za-z0-9_]*))"
)


def expand_string(value: str, env: Mapping[str, str] | None = None) -> str:
    """Return *value* with ``${VAR}``/``$VAR`` references substituted.

    A ``$`` that is not followed by a name (for example ``"cost: $"``) is
    kept literally.
    """
    environ = os.environ if env is None else env

    def _lookup(match: re.Match[str]) -> str:
        name = match.group("braced")
        if name is None:
            name = match.group("bare")
        return environ.get(name, "")

    return _VAR_PATTERN.sub(_lookup, value)


def expand_env(value: Any, env: Mapping[str, str] | None = None) -> Any:
    """Expand environment references throughout *value*.

    Mutable containers and models are updated in place and also returned,
    so the call works for a top-level string too.

    Parameters
    ----------
    value:
        A string, container, or Pydantic model.
    env:
        Variable lookup; defaults to ``os.environ``.

    Returns
    -------
    Any
        The expanded value.
    """
    environ = os.environ if env is None else env
    return _expand(value, environ, set())


def _expand(value: Any, env: Mapping[str, str], seen: set[int]) -> Any:
    if isinstance(value, str):
        return expand_string(value, env)
    if isinstance(value, (bytes, bytearray)):
        return value
    if isinstance(value, (list, dict, BaseModel)):
        if id(value) in seen:
            return value
        seen.add(id(value))
    if isinstance(value, list):
        for index, item in enumerate(value):
            value[index] = _expand(item, env, seen)
        return value
    if isinstance(value, tuple):
        return tuple(_expand(item, env, seen) for item in value)
    if isinstance(value, dict):
        for key, item in value.items():
            value[key] = _expand(item, env, seen)
        return value
    if isinstance(value, BaseModel):
        for name, info in type(value).model_fields.items():
            if info.exclude:
                continue
            setattr(value, name, _expand(getattr(value, name), env, seen))
        return value
    return value
