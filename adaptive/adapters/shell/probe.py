"""
Command probe — is a name a real command, or only a shell function?

Users routinely wrap real tools in shell functions of the same name
(``ls() { command ls --color "$@"; }``).  Backend availability must be
decided by the real binary, so ``has_command`` looks only at executables
on PATH and shell builtins, and never at functions.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)

# bash + zsh builtins that behave like commands
SHELL_BUILTINS: frozenset[str] = frozenset({
    ".", ":", "[", "alias", "bg", "bind", "break", "builtin", "caller",
    "cd", "command", "compgen", "complete", "compopt", "continue",
    "declare", "dirs", "disown", "echo", "enable", "eval", "exec", "exit",
    "export", "false", "fc", "fg", "getopts", "hash", "help", "history",
    "jobs", "kill", "let", "local", "logout", "mapfile", "popd", "printf",
    "pushd", "pwd", "read", "readarray", "readonly", "return", "set",
    "shift", "shopt", "source", "suspend", "test", "times", "trap", "true",
    "type", "typeset", "ulimit", "umask", "unalias", "unset", "wait",
    "whence", "where", "which",
})

# bash exports functions as BASH_FUNC_<name>%%=() { ... }
_EXPORTED_FUNC = re.compile(r"^BASH_FUNC_(.+?)(?:%%|\(\))$")

# anything else (spaces, quotes, globs, path separators) cannot name a command
_COMMAND_NAME = re.compile(r"[\w.+@-]+")


def _require_name(name: str | None, what: str) -> str:
    if not name:
        raise ValueError(f"{what} is missing")
    return name


def exported_functions(environ: Mapping[str, str]) -> set[str]:
    """Names of shell functions the parent bash exported (``export -f``)."""
    names = set()
    for key in environ:
        match = _EXPORTED_FUNC.match(key)
        if match:
            names.add(match.group(1))
    return names


class CommandProbe:
    """Answer "is this on PATH" without being fooled by shell functions.

    Args:
        path: PATH string to search (default: ``$PATH`` at construction).
        functions: Shell function names known to the caller.
        builtins: Builtin names accepted as commands.
    """

    def __init__(
        self,
        path: str | None = None,
        functions: Iterable[str] = (),
        builtins: frozenset[str] = SHELL_BUILTINS,
    ):
        self._path = os.environ.get("PATH", os.defpath) if path is None else path
        self._functions: set[str] = set(functions)
        self._builtins = builtins

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> CommandProbe:
        """Probe the current PATH, aware of functions exported by bash."""
        env = os.environ if environ is None else environ
        return cls(
            path=env.get("PATH", os.defpath),
            functions=exported_functions(env),
        )

    def define_function(self, name: str) -> None:
        """Record a shell function (it may shadow a real command)."""
        self._functions.add(_require_name(name, "function name"))

    def has_command(self, name: str) -> bool:
        """True iff ``name`` is an executable on PATH or a shell builtin.

        Shell functions never count, even when they share the name.

        Raises:
            ValueError: If ``name`` is empty.
        """
        name = _require_name(name, "cmd")
        if not _COMMAND_NAME.fullmatch(name):
            return False
        if shutil.which(name, path=self._path) is not None:
            return True
        return name in self._builtins

    def has_function(self, name: str) -> bool:
        """True iff ``name`` is a known shell function.

        Raises:
            ValueError: If ``name`` is empty.
        """
        name = _require_name(name, "function name")
        return name in self._functions

    def __repr__(self) -> str:
        return f"<CommandProbe functions={sorted(self._functions)!r}>"
