"""Merging a saved terminal configuration into the requested options."""

from __future__ import annotations

import shlex

from materm.keyfile import (
    CONFIG_COMPAT_VERSION,
    CONFIG_GROUP,
    CONFIG_PROP_COMPAT_VERSION,
    CONFIG_PROP_VERSION,
    CONFIG_PROP_WINDOWS,
    CONFIG_TERMINAL_PROP_COMMAND,
    CONFIG_TERMINAL_PROP_PROFILE_ID,
    CONFIG_TERMINAL_PROP_TITLE,
    CONFIG_TERMINAL_PROP_WORKING_DIRECTORY,
    CONFIG_WINDOW_PROP_FULLSCREEN,
    CONFIG_WINDOW_PROP_GEOMETRY,
    CONFIG_WINDOW_PROP_MAXIMIZED,
    CONFIG_WINDOW_PROP_MENUBAR_VISIBLE,
    CONFIG_WINDOW_PROP_ROLE,
    CONFIG_WINDOW_PROP_TABS,
    KeyFile,
    KeyFileError,
)
from materm.options import (
    InitialTab,
    InitialWindow,
    OptionError,
    OptionErrorCode,
    TerminalOptions,
)


def _string_or_none(key_file: KeyFile, group: str, key: str) -> str | None:
    try:
        return key_file.get_string(group, key)
    except KeyFileError:
        return None


def _integer_or_zero(key_file: KeyFile, group: str, key: str) -> int:
    try:
        return key_file.get_integer(group, key)
    except KeyFileError:
        return 0


def _boolean_or_false(key_file: KeyFile, group: str, key: str) -> bool:
    try:
        return key_file.get_boolean(group, key)
    except KeyFileError:
        return False


def _argv(key_file: KeyFile, group: str, key: str) -> list[str]:
    command = key_file.get_string(group, key)
    try:
        argv = shlex.split(command)
    except ValueError as exc:
        raise KeyFileError(f'Invalid command "{command}" in group "{group}": {exc}') from exc
    if not argv:
        raise KeyFileError(
            f'Invalid command in group "{group}": '
            "Text was empty (or contained only whitespace)"
        )
    return argv


def merge_config(options: TerminalOptions, key_file: KeyFile, source_tag: int) -> None:
    """Append the windows stored in ``key_file`` to ``options``.

    Raises :class:`OptionError` when the file is not a terminal configuration
    or has an incompatible version, and :class:`KeyFileError` when the window
    list or a stored command cannot be read. On error no window is added.
    """
    if not key_file.has_group(CONFIG_GROUP):
        raise OptionError(
            OptionErrorCode.INVALID_CONFIG_FILE, "Not a valid terminal config file."
        )

    version = _integer_or_zero(key_file, CONFIG_GROUP, CONFIG_PROP_VERSION)
    compat_version = _integer_or_zero(key_file, CONFIG_GROUP, CONFIG_PROP_COMPAT_VERSION)
    if version <= 0 or compat_version <= 0 or compat_version > CONFIG_COMPAT_VERSION:
        raise OptionError(
            OptionErrorCode.INCOMPATIBLE_CONFIG_FILE,
            "Incompatible terminal config file version.",
        )

    window_groups = key_file.get_string_list(CONFIG_GROUP, CONFIG_PROP_WINDOWS)

    windows: list[InitialWindow] = []
    for window_group in window_groups:
        try:
            tab_groups = key_file.get_string_list(window_group, CONFIG_WINDOW_PROP_TABS)
        except KeyFileError:
            continue  # a window without tabs is skipped

        window = InitialWindow(source_tag=source_tag)
        windows.append(window)
        options.apply_defaults(window)

        window.role = _string_or_none(key_file, window_group, CONFIG_WINDOW_PROP_ROLE)
        window.geometry = _string_or_none(key_file, window_group, CONFIG_WINDOW_PROP_GEOMETRY)
        window.start_fullscreen = _boolean_or_false(
            key_file, window_group, CONFIG_WINDOW_PROP_FULLSCREEN
        )
        window.start_maximized = _boolean_or_false(
            key_file, window_group, CONFIG_WINDOW_PROP_MAXIMIZED
        )
        if key_file.has_key(window_group, CONFIG_WINDOW_PROP_MENUBAR_VISIBLE):
            window.force_menubar_state = True
            window.menubar_state = _boolean_or_false(
                key_file, window_group, CONFIG_WINDOW_PROP_MENUBAR_VISIBLE
            )

        for tab_group in tab_groups:
            tab = InitialTab(
                _string_or_none(key_file, tab_group, CONFIG_TERMINAL_PROP_PROFILE_ID),
                True,
            )
            window.tabs.append(tab)
            tab.working_dir = _string_or_none(
                key_file, tab_group, CONFIG_TERMINAL_PROP_WORKING_DIRECTORY
            )
            tab.title = _string_or_none(key_file, tab_group, CONFIG_TERMINAL_PROP_TITLE)
            if key_file.has_key(tab_group, CONFIG_TERMINAL_PROP_COMMAND):
                tab.exec_argv = _argv(key_file, tab_group, CONFIG_TERMINAL_PROP_COMMAND)

    options.initial_windows.extend(windows)