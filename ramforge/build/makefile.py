# -*- coding: utf-8 -*-
# Ramforge/ramforge/build/makefile.py

"""
Project: Ramforge
Date: 10/2/2026 (Updated: 10/14/2026)

Purpose
-------
In-memory Makefile model. Accumulates preprocessor definitions, variables, verbatim
lines and rules in insertion order, then renders them in one fixed layout that the
RAMSES build scripts read back byte-for-byte.

Main Tasks
----------
    1. `define`: record a `-D<name>=<value>` macro and upsert a variable of the same name.
    2. `set` / `extend`: upsert a variable, or append " <text>" to an existing one.
    3. `rule` / `plain`: collect rule blocks and verbatim lines.
    4. Render `DEFINES`, variables, plain lines and rules (in that order) and write
       the text atomically.

Notes
-----
- Variables keep their first-seen position; `set` on an existing name replaces the value
  in place.
- Definitions are never de-duplicated: defining a name twice emits two `-D` tokens.
- References between entries (e.g. `$(LIBS)` inside a rule) are plain text; nothing here
  resolves or checks them.
"""

import io
import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .errors import UndefinedVariableError

__all__ = ["Makefile", "Rule"]


@dataclass(frozen=True)
class Rule:
    """
    One rule block: `<target>: <deps>` followed by tab-indented commands.
    """
    target: str
    deps: str
    commands: Tuple[str, ...] = ()


class Makefile:
    """
    Ordered accumulator of definitions, variables, plain lines and rules.
    """

    def __init__(self) -> None:
        self._defines = []  # type: List[Tuple[str, str]]
        self._vars = {}     # type: Dict[str, str]
        self._plain = []    # type: List[str]
        self._rules = []    # type: List[Rule]

    # ---------- Mutation ----------
    def define(self, name: Any, value: Any) -> None:
        """
        Add a preprocessor macro and expose it as a plain variable as well.
        """
        key, val = str(name), str(value)
        self._defines.append((key, val))
        self._vars[key] = val

    def set(self, name: Any, value: Any) -> None:
        """
        Create or replace a variable; an existing name keeps its position.
        """
        self._vars[str(name)] = str(value)

    def extend(self, name: Any, value: Any) -> None:
        """
        Append `" " + value` to an existing variable.

        Raises
        ------
        UndefinedVariableError
            If `name` was never set or defined.
        """
        key = str(name)
        if key not in self._vars:
            raise UndefinedVariableError(
                "Cannot extend undefined variable {!r}; set or define it first.".format(key),
                {"name": key, "value": str(value)},
            )
        self._vars[key] = self._vars[key] + " " + str(value)

    def rule(self, target: Any, deps: Any, *commands: Any) -> None:
        self._rules.append(Rule(str(target), str(deps), tuple(str(c) for c in commands)))

    def plain(self, text: Any) -> None:
        self._plain.append(str(text))

    # ---------- Read access ----------
    @property
    def defines(self) -> Tuple[Tuple[str, str], ...]:
        return tuple(self._defines)

    @property
    def variables(self) -> Dict[str, str]:
        return dict(self._vars)

    @property
    def plains(self) -> Tuple[str, ...]:
        return tuple(self._plain)

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return tuple(self._rules)

    def get(self, name: Any, default: Optional[str] = None) -> Optional[str]:
        return self._vars.get(str(name), default)

    def __contains__(self, name: Any) -> bool:
        return str(name) in self._vars

    # ---------- Output ----------
    def render(self) -> str:
        """
        Render the model as Makefile text.

        Layout
        ------
        1. `DEFINES =` followed by ` -D<name>=<value>` per definition.
        2. `<name> = <value>` per variable.
        3. Plain lines verbatim.
        4. `<target>: <deps>` per rule, each command on its own line behind a TAB.
        """
        buf = io.StringIO()
        W = buf.write

        W("DEFINES =")
        for name, value in self._defines:
            W(" -D{}={}".format(name, value))
        W("\n")

        for name, value in self._vars.items():
            W("{} = {}\n".format(name, value))

        for line in self._plain:
            W(line + "\n")

        for r in self._rules:
            W("{}: {}\n".format(r.target, r.deps))
            for cmd in r.commands:
                W("\t" + cmd + "\n")

        return buf.getvalue()

    def write(self, path) -> str:
        """
        Write the rendered Makefile to `path`, replacing any existing file.

        The parent directory must already exist; OSError (missing directory,
        permissions, `path` being a directory) propagates to the caller.

        Returns
        -------
        str
            The path that was written.
        """
        return _write_atomic(self.render(), path)


def _target_mode(p: Path) -> int:
    """Permission bits for the written file: the existing file's, else 0o666 minus umask."""
    try:
        return stat.S_IMODE(os.stat(str(p)).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _write_atomic(text: str, path) -> str:
    """
    Write `text` to a temporary file next to `path`, then move it into place.

    The target keeps its permission bits and the temporary file is removed on any failure.
    """
    p = Path(path)
    mode = _target_mode(p)
    tf = tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", newline="\n", dir=str(p.parent), prefix=".", suffix=".tmp", delete=False
    )
    try:
        with tf:
            tf.write(text)
        os.chmod(tf.name, mode)
        os.replace(tf.name, str(p))
    except BaseException:
        os.unlink(tf.name)
        raise
    return str(p)
