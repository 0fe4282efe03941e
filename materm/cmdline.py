"""Command-line parsing into :class:`TerminalOptions`."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Callable, Sequence

from materm.options import OptionError, OptionErrorCode, TerminalOptions

PROGRAM_NAME = "MATE Terminal"
VERSION = "1.26.0"

_INTERNAL_ID_SUFFIX = "-with-profile-internal-id"

_Handler = Callable[[TerminalOptions, str, "str | None"], None]


@dataclass(frozen=True)
class _Entry:
    takes_value: bool
    handler: _Handler
    description: str | None = None
    arg_name: str | None = None


@dataclass
class ParseResult:
    """The parsed options and the arguments that were not consumed."""

    options: TerminalOptions
    argv: list[str] = field(default_factory=list)


def _warn(message: str) -> None:
    print(message, file=sys.stderr)


def _unsupported(options: TerminalOptions, name: str, value: str | None) -> None:
    _warn(
        f'Option "{name}" is no longer supported in this version of mate-terminal;'
        " you might want to create a profile with the desired setting, and use"
        " the new '--profile' option"
    )


def _version(options: TerminalOptions, name: str, value: str | None) -> None:
    print(f"{PROGRAM_NAME} {VERSION}")
    raise SystemExit(0)


def _window(options: TerminalOptions, name: str, value: str | None) -> None:
    options.add_window(value, name.endswith(_INTERNAL_ID_SUFFIX))


def _tab(options: TerminalOptions, name: str, value: str | None) -> None:
    options.add_tab(value, name.endswith(_INTERNAL_ID_SUFFIX))


def _disable_factory(options: TerminalOptions, name: str, value: str | None) -> None:
    options.use_factory = False


def _use_factory(options: TerminalOptions, name: str, value: str | None) -> None:
    options.use_factory = True


def _default_working_dir(options: TerminalOptions, name: str, value: str | None) -> None:
    options.default_working_dir = value


def _startup_id(options: TerminalOptions, name: str, value: str | None) -> None:
    options.startup_id = value


_GLOBAL_UNIQUE = {
    "disable-factory": _Entry(
        False,
        _disable_factory,
        "Do not register with the activation nameserver, do not re-use an active terminal",
    ),
    "load-config": _Entry(
        True,
        lambda o, n, v: o.set_config_file(n, v),
        "Load a terminal configuration file",
        "FILE",
    ),
    "save-config": _Entry(
        True,
        lambda o, n, v: o.set_config_file(n, v),
        "Save the terminal configuration to a file",
        "FILE",
    ),
    "version": _Entry(False, _version),
}

_GLOBAL_MULTIPLE = {
    "window": _Entry(
        False, _window, "Open a new window containing a tab with the default profile"
    ),
    "tab": _Entry(
        False, _tab, "Open a new tab in the last-opened window with the default profile"
    ),
}

_WINDOW = {
    "show-menubar": _Entry(False, lambda o, n, v: o.show_menubar(), "Turn on the menubar"),
    "hide-menubar": _Entry(False, lambda o, n, v: o.hide_menubar(), "Turn off the menubar"),
    "maximize": _Entry(False, lambda o, n, v: o.maximize(), "Maximize the window"),
    "full-screen": _Entry(False, lambda o, n, v: o.fullscreen(), "Full-screen the window"),
    "geometry": _Entry(
        True,
        lambda o, n, v: o.set_geometry(v),
        "Set the window size; for example: 80x24, or 80x24+200+200 (COLSxROWS+X+Y)",
        "GEOMETRY",
    ),
    "role": _Entry(True, lambda o, n, v: o.set_role(v), "Set the window role", "ROLE"),
    "active": _Entry(
        False,
        lambda o, n, v: o.set_active(),
        "Set the last specified tab as the active one in its window",
    ),
}

_TERMINAL = {
    "command": _Entry(
        True,
        lambda o, n, v: o.set_command(v),
        "Execute the argument to this option inside the terminal",
    ),
    "profile": _Entry(
        True,
        lambda o, n, v: o.set_profile(v, False),
        "Use the given profile instead of the default profile",
        "PROFILE-NAME",
    ),
    "title": _Entry(True, lambda o, n, v: o.set_title(v), "Set the terminal title", "TITLE"),
    "working-directory": _Entry(
        True,
        lambda o, n, v: o.set_working_directory(v),
        "Set the working directory",
        "DIRNAME",
    ),
    "zoom": _Entry(
        True,
        lambda o, n, v: o.set_zoom(v),
        "Set the terminal's zoom factor (1.0 = normal size)",
        "ZOOM",
    ),
}

_UNSUPPORTED_NAMES = (
    "tclass", "font", "nologin", "login", "foreground", "background", "solid",
    "bgscroll", "bgnoscroll", "shaded", "noshaded", "transparent", "utmp",
    "noutmp", "wtmp", "nowtmp", "lastlog", "nolastlog", "icon", "termname",
    "start-factory-server",
)

_INTERNAL = {
    "profile-id": _Entry(True, lambda o, n, v: o.set_profile(v, True)),
    "window-with-profile": _Entry(True, _window),
    "tab-with-profile": _Entry(True, _tab),
    "window-with-profile-internal-id": _Entry(True, _window),
    "tab-with-profile-internal-id": _Entry(True, _tab),
    "default-working-directory": _Entry(True, _default_working_dir),
    "use-factory": _Entry(False, _use_factory),
    "startup-id": _Entry(True, _startup_id),
    **{name: _Entry(False, _unsupported) for name in _UNSUPPORTED_NAMES},
}

_ENTRIES: dict[str, _Entry] = {
    **_GLOBAL_UNIQUE,
    **_INTERNAL,
    **_GLOBAL_MULTIPLE,
    **_WINDOW,
    **_TERMINAL,
}

_SHORT = {"e": "command", "t": "title"}
_SHORT_OF = {long: short for short, long in _SHORT.items()}

_HELP_SECTIONS = (
    ("MATE Terminal Emulator", _GLOBAL_UNIQUE),
    (
        "Options to open new windows or terminal tabs; more than one of these may be specified:",
        _GLOBAL_MULTIPLE,
    ),
    (
        "Window options; if used before the first --window or --tab argument,"
        " sets the default for all windows:",
        _WINDOW,
    ),
    (
        "Terminal options; if used before the first --window or --tab argument,"
        " sets the default for all terminals:",
        _TERMINAL,
    ),
)


def _help_text(program: str) -> str:
    lines = [f"Usage:\n  {program} [OPTION...]", ""]
    for title, entries in _HELP_SECTIONS:
        rows = []
        for name, entry in entries.items():
            if entry.description is None:
                continue
            short = _SHORT_OF.get(name)
            spec = f"-{short}, --{name}" if short else f"--{name}"
            if entry.arg_name:
                spec += f"={entry.arg_name}"
            rows.append((spec, entry.description))
        if not rows:
            continue
        width = max(len(spec) for spec, _ in rows)
        lines.append(title)
        lines.extend(f"  {spec.ljust(width)}  {text}" for spec, text in rows)
        lines.append("")
    lines.append("MATE Terminal Emulator")
    return "\n".join(lines)


def _show_help(program: str) -> None:
    print(_help_text(program))
    raise SystemExit(0)


def _take_value(option_name: str, inline: str | None, args: list[str], index: int) -> tuple[str, int]:
    if inline is not None:
        return inline, index
    if index < len(args):
        return args[index], index + 1
    raise OptionError(OptionErrorCode.BAD_VALUE, f"Missing argument for {option_name}")


def _parse(options: TerminalOptions, args: list[str], ignore_unknown: bool) -> list[str]:
    program = args[0] if args else "mate-terminal"
    remaining = args[:1]
    index = 1
    while index < len(args):
        arg = args[index]
        index += 1
        if arg == "--":
            remaining.extend(args[index:])
            break
        if arg.startswith("--"):
            name, sep, inline = arg[2:].partition("=")
            option_name = f"--{name}"
            entry = _ENTRIES.get(name)
            if entry is None:
                if name in ("help", "help-all"):
                    _show_help(program)
                if ignore_unknown:
                    remaining.append(arg)
                    continue
                raise OptionError(OptionErrorCode.FAILED, f"Unknown option {arg}")
            if entry.takes_value:
                value, index = _take_value(option_name, inline if sep else None, args, index)
            elif sep:
                raise OptionError(
                    OptionErrorCode.BAD_VALUE,
                    f"Option {option_name} does not take an argument",
                )
            else:
                value = None
            entry.handler(options, option_name, value)
        elif arg.startswith("-") and len(arg) > 1:
            short = arg[1]
            long_name = _SHORT.get(short)
            if long_name is None:
                if short in ("h", "?") and len(arg) == 2:
                    _show_help(program)
                if ignore_unknown:
                    remaining.append(arg)
                    continue
                raise OptionError(OptionErrorCode.FAILED, f"Unknown option {arg}")
            option_name = f"-{short}"
            value, index = _take_value(option_name, arg[2:] or None, args, index)
            _ENTRIES[long_name].handler(options, option_name, value)
        else:
            remaining.append(arg)
    return remaining


def parse_options(
    argv: Sequence[str] | None = None,
    working_directory: str | None = None,
    display_name: str | None = None,
    startup_id: str | None = None,
    env: Sequence[str] | None = None,
    remote_arguments: bool = False,
    ignore_unknown_options: bool = False,
) -> ParseResult:
    """Parse ``argv`` (program name first) into the windows and tabs to open.

    Everything after ``-x``/``--execute`` or ``--`` is the command to run.
    Raises :class:`OptionError` on a bad option; ``--version`` and ``--help``
    print and raise :class:`SystemExit`.
    """
    args = list(sys.argv if argv is None else argv)
    options = TerminalOptions(
        remote_arguments=remote_arguments,
        env=list(env or ()),
        startup_id=startup_id or None,
        display_name=display_name,
        default_working_dir=working_directory,
    )

    for index, arg in enumerate(args[1:], start=1):
        is_execute = arg in ("-x", "--execute")
        if not is_execute and arg != "--":
            continue
        options.execute = is_execute
        if index + 1 == len(args):
            break  # a trailing -x is reported later; a trailing -- is fine
        options.exec_argv = args[index + 1:]
        args = args[:index]
        break

    remaining = _parse(options, args, ignore_unknown_options)
    options.digest()
    return ParseResult(options=options, argv=remaining)