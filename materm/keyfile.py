"""Reading and writing of ``[group]`` / ``key=value`` configuration files."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

CONFIG_VERSION = 1
CONFIG_COMPAT_VERSION = 1

CONFIG_GROUP = "MATE Terminal Configuration"
CONFIG_PROP_VERSION = "Version"
CONFIG_PROP_COMPAT_VERSION = "CompatVersion"
CONFIG_PROP_WINDOWS = "Windows"

CONFIG_WINDOW_PROP_ACTIVE_TAB = "ActiveTerminal"
CONFIG_WINDOW_PROP_FULLSCREEN = "Fullscreen"
CONFIG_WINDOW_PROP_GEOMETRY = "Geometry"
CONFIG_WINDOW_PROP_MAXIMIZED = "Maximized"
CONFIG_WINDOW_PROP_MENUBAR_VISIBLE = "MenubarVisible"
CONFIG_WINDOW_PROP_ROLE = "Role"
CONFIG_WINDOW_PROP_TABS = "Terminals"

CONFIG_TERMINAL_PROP_HEIGHT = "Height"
CONFIG_TERMINAL_PROP_COMMAND = "Command"
CONFIG_TERMINAL_PROP_PROFILE_ID = "ProfileID"
CONFIG_TERMINAL_PROP_TITLE = "Title"
CONFIG_TERMINAL_PROP_WIDTH = "Width"
CONFIG_TERMINAL_PROP_WORKING_DIRECTORY = "WorkingDirectory"
CONFIG_TERMINAL_PROP_ZOOM = "Zoom"

_LIST_SEPARATOR = ";"
_UNESCAPES = {"s": " ", "n": "\n", "t": "\t", "r": "\r", "\\": "\\", ";": ";"}
_ESCAPES = {"\n": "\\n", "\t": "\\t", "\r": "\\r", "\\": "\\\\"}
_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class KeyFileError(Exception):
    """A key file that cannot be parsed, or a missing or malformed value."""


def _check_group(name: str) -> None:
    if not name or any(ch in name for ch in "[]\n\r"):
        raise KeyFileError(f'Invalid group name "{name}"')


def _check_key(key: str) -> None:
    if not key or any(ch in key for ch in "=\n\r") or key != key.strip():
        raise KeyFileError(f'Invalid key name "{key}"')


def _escape(value: str, escape_separator: bool) -> str:
    out = []
    leading = True
    for ch in value:
        if leading and ch == " ":
            out.append("\\s")
            continue
        leading = False
        if escape_separator and ch == _LIST_SEPARATOR:
            out.append("\\;")
        else:
            out.append(_ESCAPES.get(ch, ch))
    return "".join(out)


def _unescape(raw: str, split: bool) -> list[str]:
    pieces: list[str] = []
    buf: list[str] = []
    chars = iter(raw)
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, None)
            if nxt is None:
                raise KeyFileError("Key file contains escape character at end of line")
            mapped = _UNESCAPES.get(nxt)
            if mapped is None:
                raise KeyFileError(f'Key file contains invalid escape sequence "\\{nxt}"')
            buf.append(mapped)
        elif split and ch == _LIST_SEPARATOR:
            pieces.append("".join(buf))
            buf = []
        else:
            buf.append(ch)
    if buf or not split:
        pieces.append("".join(buf))
    return pieces


class KeyFile:
    """An ordered set of groups, each an ordered set of string entries."""

    def __init__(self) -> None:
        self._groups: dict[str, dict[str, str]] = {}
        self._comment: str | None = None

    @classmethod
    def load(cls, path: str | Path) -> KeyFile:
        """Read and parse the file at ``path``."""
        with open(path, encoding="utf-8") as handle:
            return cls.parse(handle.read())

    @classmethod
    def parse(cls, text: str) -> KeyFile:
        """Parse key file text; comments and blank lines are dropped."""
        key_file = cls()
        current: dict[str, str] | None = None
        for number, raw_line in enumerate(text.split("\n"), start=1):
            line = raw_line.rstrip("\r").lstrip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("["):
                if not line.endswith("]"):
                    raise KeyFileError(f"Line {number} is not a valid group header")
                name = line[1:-1]
                _check_group(name)
                current = key_file._groups.setdefault(name, {})
                continue
            if current is None:
                raise KeyFileError("Key file does not start with a group")
            key, sep, value = line.partition("=")
            key = key.rstrip()
            if not sep or not key:
                raise KeyFileError(f"Line {number} is not a group, key-value pair or comment")
            current[key] = value.lstrip(" \t")
        return key_file

    def to_text(self) -> str:
        """Serialise the whole file, top comment first."""
        parts = []
        if self._comment is not None:
            parts.append("".join(f"#{line}\n" for line in self._comment.split("\n")))
        for name, entries in self._groups.items():
            lines = [f"[{name}]"]
            lines.extend(f"{key}={value}" for key, value in entries.items())
            parts.append("\n".join(lines) + "\n")
        return "\n".join(parts)

    def groups(self) -> list[str]:
        """Group names in file order."""
        return list(self._groups)

    def has_group(self, group: str) -> bool:
        return group in self._groups

    def has_key(self, group: str, key: str) -> bool:
        return key in self._groups.get(group, {})

    def _raw(self, group: str, key: str) -> str:
        try:
            entries = self._groups[group]
        except KeyError:
            raise KeyFileError(f'Key file does not have group "{group}"') from None
        try:
            return entries[key]
        except KeyError:
            raise KeyFileError(
                f'Key file does not have key "{key}" in group "{group}"'
            ) from None

    def get_string(self, group: str, key: str) -> str:
        return _unescape(self._raw(group, key), split=False)[0]

    def get_integer(self, group: str, key: str) -> int:
        raw = self._raw(group, key).strip()
        if not _INTEGER.fullmatch(raw):
            raise KeyFileError(f'Value "{raw}" cannot be interpreted as a number')
        value = int(raw)
        if not _INT_MIN <= value <= _INT_MAX:
            raise KeyFileError(f'Integer value "{raw}" out of range')
        return value

    def get_boolean(self, group: str, key: str) -> bool:
        raw = self._raw(group, key).strip()
        if raw in ("true", "1"):
            return True
        if raw in ("false", "0"):
            return False
        raise KeyFileError(f'Value "{raw}" cannot be interpreted as a boolean')

    def get_string_list(self, group: str, key: str) -> list[str]:
        return _unescape(self._raw(group, key), split=True)

    def _set_raw(self, group: str, key: str, raw: str) -> None:
        _check_group(group)
        _check_key(key)
        self._groups.setdefault(group, {})[key] = raw

    def set_string(self, group: str, key: str, value: str) -> None:
        self._set_raw(group, key, _escape(value, escape_separator=False))

    def set_integer(self, group: str, key: str, value: int) -> None:
        self._set_raw(group, key, str(int(value)))

    def set_boolean(self, group: str, key: str, value: bool) -> None:
        self._set_raw(group, key, "true" if value else "false")

    def set_string_list(self, group: str, key: str, values: Iterable[str]) -> None:
        raw = "".join(_escape(value, escape_separator=True) + _LIST_SEPARATOR for value in values)
        self._set_raw(group, key, raw)

    def set_comment(self, comment: str | None) -> None:
        """Set the comment written at the top of the file; ``None`` removes it."""
        self._comment = comment