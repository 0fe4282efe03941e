"""Windows and tabs to open, as requested on the command line."""

from __future__ import annotations

import enum
import os
import shlex
import sys
from dataclasses import dataclass, field

# Smallest and largest zoom factors a terminal accepts.
SCALE_MINIMUM = 1.2 ** -6
SCALE_MAXIMUM = 1.2 ** 6

_ZOOM_EPSILON = 1e-6


class OptionErrorCode(enum.Enum):
    """Why a set of options could not be handled."""

    NOT_IN_FACTORY = enum.auto()
    EXCLUSIVE_OPTIONS = enum.auto()
    INVALID_CONFIG_FILE = enum.auto()
    INCOMPATIBLE_CONFIG_FILE = enum.auto()
    BAD_VALUE = enum.auto()
    FAILED = enum.auto()


class OptionError(Exception):
    """An option or configuration that cannot be used."""

    def __init__(self, code: OptionErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code


@dataclass
class InitialTab:
    """A terminal tab to open."""

    profile: str | None = None
    profile_is_id: bool = False
    exec_argv: list[str] | None = None
    title: str | None = None
    working_dir: str | None = None
    zoom: float = 1.0
    zoom_set: bool = False
    active: bool = False
    attach_window: bool = False


@dataclass
class InitialWindow:
    """A window to open, holding at least one tab."""

    source_tag: int = 0
    tabs: list[InitialTab] = field(default_factory=list)
    force_menubar_state: bool = False
    menubar_state: bool = False
    start_fullscreen: bool = False
    start_maximized: bool = False
    geometry: str | None = None
    role: str | None = None


def _warn(message: str) -> None:
    print(message, file=sys.stderr)


def _parse_double(value: str) -> float:
    """Read a number the way strtod does, requiring the whole string to be used."""
    if value == "":
        return 0.0
    text = value.lstrip()
    if not text or text != text.rstrip() or "_" in text:
        raise ValueError(value)
    try:
        return float(text)
    except ValueError:
        return float.fromhex(text)


@dataclass
class TerminalOptions:
    """Everything requested: defaults, plus the windows and tabs to open."""

    remote_arguments: bool = False
    env: list[str] = field(default_factory=list)
    startup_id: str | None = None
    display_name: str | None = None
    initial_windows: list[InitialWindow] = field(default_factory=list)
    default_window_menubar_forced: bool = False
    default_window_menubar_state: bool = True
    default_fullscreen: bool = False
    default_maximize: bool = False
    default_role: str | None = None
    default_geometry: str | None = None
    default_working_dir: str | None = None
    default_title: str | None = None
    exec_argv: list[str] | None = None
    default_profile: str | None = None
    default_profile_is_id: bool = False
    execute: bool = False
    use_factory: bool = True
    zoom: float = 1.0
    config_file: str | None = None
    load_config: bool = False
    save_config: bool = False
    initial_workspace: int = -1

    def apply_defaults(self, window: InitialWindow) -> None:
        """Give a new window the pending window defaults.

        The role and a forced menubar state are used up by the first window.
        """
        if self.default_role is not None:
            window.role = self.default_role
            self.default_role = None
        if window.geometry is None:
            window.geometry = self.default_geometry
        if self.default_window_menubar_forced:
            window.force_menubar_state = True
            window.menubar_state = self.default_window_menubar_state
            self.default_window_menubar_forced = False
        window.start_fullscreen |= self.default_fullscreen
        window.start_maximized |= self.default_maximize

    def ensure_window(self) -> InitialWindow:
        """Return the last window, creating one with a single tab if there is none."""
        if not self.initial_windows:
            window = InitialWindow(source_tag=0, tabs=[InitialTab()])
            self.apply_defaults(window)
            self.initial_windows.append(window)
        return self.initial_windows[-1]

    def ensure_top_tab(self) -> InitialTab:
        """Return the last tab of the last window, creating both if needed."""
        return self.ensure_window().tabs[-1]

    def add_window(self, profile: str | None, is_id: bool) -> InitialWindow:
        """Append a new window with one tab using ``profile``."""
        window = InitialWindow(source_tag=0, tabs=[InitialTab(profile, is_id)])
        self.apply_defaults(window)
        self.initial_windows.append(window)
        return window

    def add_tab(self, profile: str | None, is_id: bool) -> InitialTab:
        """Append a tab to the last window.

        With no window yet, a new window is made whose tab asks to be
        attached to an existing window instead.
        """
        if self.initial_windows:
            tab = InitialTab(profile, is_id)
            self.initial_windows[-1].tabs.append(tab)
            return tab
        window = self.add_window(profile, is_id)
        tab = window.tabs[-1]
        tab.attach_window = True
        return tab

    def set_command(self, value: str) -> None:
        """Set the command to run, split like a shell command line."""
        try:
            argv = shlex.split(value)
        except ValueError as exc:
            raise OptionError(
                OptionErrorCode.BAD_VALUE,
                f'Argument to "--command/-e" is not a valid command: {exc}',
            ) from exc
        if not argv:
            raise OptionError(
                OptionErrorCode.BAD_VALUE,
                'Argument to "--command/-e" is not a valid command: '
                "Text was empty (or contained only whitespace)",
            )
        if self.initial_windows:
            self.ensure_top_tab().exec_argv = argv
        else:
            self.exec_argv = argv

    def set_profile(self, value: str, is_id: bool) -> None:
        """Choose the profile for the last tab, or the default profile."""
        if self.initial_windows:
            tab = self.ensure_top_tab()
            tab.profile = value
            tab.profile_is_id = is_id
        else:
            self.default_profile = value
            self.default_profile_is_id = is_id

    def set_role(self, value: str) -> None:
        """Set the role of the last window, or of the first window to come."""
        if self.initial_windows:
            self.initial_windows[-1].role = value
        elif self.default_role is None:
            self.default_role = value
        else:
            raise OptionError(OptionErrorCode.FAILED, "Two roles given for one window")

    def _force_menubar(self, state: bool, option: str) -> None:
        if self.initial_windows:
            window = self.initial_windows[-1]
            if window.force_menubar_state and window.menubar_state == state:
                _warn(f'"{option}" option given twice for the same window')
                return
            window.force_menubar_state = True
            window.menubar_state = state
        else:
            self.default_window_menubar_forced = True
            self.default_window_menubar_state = state

    def show_menubar(self) -> None:
        """Force the menubar on."""
        self._force_menubar(True, "--show-menubar")

    def hide_menubar(self) -> None:
        """Force the menubar off."""
        self._force_menubar(False, "--hide-menubar")

    def maximize(self) -> None:
        """Start the last window, or every window, maximized."""
        if self.initial_windows:
            self.initial_windows[-1].start_maximized = True
        else:
            self.default_maximize = True

    def fullscreen(self) -> None:
        """Start the last window, or every window, full screen."""
        if self.initial_windows:
            self.initial_windows[-1].start_fullscreen = True
        else:
            self.default_fullscreen = True

    def set_geometry(self, value: str) -> None:
        """Set the geometry of the last window, or the default geometry."""
        if self.initial_windows:
            self.initial_windows[-1].geometry = value
        else:
            self.default_geometry = value

    def set_config_file(self, option_name: str, value: str) -> None:
        """Record a configuration file to load or save.

        ``option_name`` is ``--load-config`` or ``--save-config``; only one
        of them may be given.
        """
        if self.config_file is not None:
            raise OptionError(
                OptionErrorCode.EXCLUSIVE_OPTIONS,
                'Options "--load-config" and "--save-config" are mutually exclusive',
            )
        path = value
        if self.default_working_dir is not None and not os.path.isabs(value):
            path = os.path.join(self.default_working_dir, value)
        self.config_file = path
        self.load_config = option_name == "--load-config"
        self.save_config = option_name == "--save-config"

    def set_title(self, value: str) -> None:
        """Set the title of the last tab, or the default title."""
        if self.initial_windows:
            self.ensure_top_tab().title = value
        else:
            self.default_title = value

    def set_working_directory(self, value: str) -> None:
        """Set the working directory of the last tab, or the default one."""
        if self.initial_windows:
            self.ensure_top_tab().working_dir = value
        else:
            self.default_working_dir = value

    def set_active(self) -> None:
        """Make the last tab the active one in its window."""
        self.ensure_top_tab().active = True

    def set_zoom(self, value: str) -> None:
        """Set the zoom factor, clamped to the supported range."""
        try:
            zoom = _parse_double(value)
        except ValueError:
            raise OptionError(
                OptionErrorCode.BAD_VALUE, f'"{value}" is not a valid zoom factor'
            ) from None
        if zoom < SCALE_MINIMUM + _ZOOM_EPSILON:
            _warn(f'Zoom factor "{zoom:g}" is too small, using {SCALE_MINIMUM:g}')
            zoom = SCALE_MINIMUM
        if zoom > SCALE_MAXIMUM - _ZOOM_EPSILON:
            _warn(f'Zoom factor "{zoom:g}" is too large, using {SCALE_MAXIMUM:g}')
            zoom = SCALE_MAXIMUM
        if self.initial_windows:
            tab = self.ensure_top_tab()
            tab.zoom = zoom
            tab.zoom_set = True
        else:
            self.zoom = zoom

    def digest(self) -> None:
        """Finish parsing: hand an ``--execute`` command to the first tab."""
        if not self.execute:
            return
        if self.exec_argv is None:
            raise OptionError(
                OptionErrorCode.BAD_VALUE,
                'Option "--execute/-x" requires specifying the command to run'
                " on the rest of the command line",
            )
        self.ensure_top_tab().exec_argv = self.exec_argv
        self.exec_argv = None