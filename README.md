# materm

This package holds the parts of a tabbed terminal emulator's startup logic that
do not need a GUI toolkit. It uses only the standard library.

| Module            | What it provides                                                        |
|-------------------|-------------------------------------------------------------------------|
| `materm.options`  | `TerminalOptions`, `InitialWindow`, `InitialTab`, `OptionError`, `OptionErrorCode` |
| `materm.cmdline`  | `parse_options` and `ParseResult`                                       |
| `materm.keyfile`  | `KeyFile` and `KeyFileError`, which read and write INI-style key files  |
| `materm.config`   | `merge_config`, which folds a saved session into a `TerminalOptions`    |
| `materm.encoding` | `TerminalEncoding`, `builtin_encodings()` and `current_charset()`       |

## Parsing a command line

```python
from materm.cmdline import parse_options

result = parse_options(
    ["materm", "--window", "--title", "logs", "--tab", "--zoom", "1.5"],
    working_directory="/home/me",
)
options = result.options
for window in options.initial_windows:
    for tab in window.tabs:
        print(tab.title, tab.zoom, tab.zoom_set)
print(result.argv)  # program name plus any arguments that were not consumed
```

The parser understands the following options:

- **Windows and tabs:** `--window`, `--tab`.
- **Per window:** `--geometry`, `--role`, `--show-menubar`, `--hide-menubar`,
  `--maximize`, `--full-screen`, `--active`.
- **Per terminal:** `-e/--command`, `--profile`, `-t/--title`,
  `--working-directory`, `--zoom`.
- **Session files:** `--load-config`, `--save-config`.
- **Factory:** `--disable-factory`.
- **Internal:** `--profile-id`, `--window-with-profile`, `--tab-with-profile`,
  and others.

A per-window or per-terminal option that comes before the first `--window` or
`--tab` sets the default for what follows. After the first one, the option
applies to the last window or tab.

Everything after `-x`/`--execute` or `--` is the command to run. With `-x`,
that command goes to the first tab. `--version` and `--help` print their output
and raise `SystemExit`. Old options that are no longer supported, such as
`--font`, print a warning and are otherwise ignored.

The parser raises `OptionError` when it cannot handle the input. The error's
`code` is an `OptionErrorCode`. Examples of bad input:

- an unknown option, unless `ignore_unknown_options=True`;
- a zoom factor that is not a number;
- two `--role` options for one window;
- both `--load-config` and `--save-config`;
- `-x` with no command after it.

A zoom factor outside the supported range (`1.2 ** -6` to `1.2 ** 6`) is
clamped to that range, and a warning goes to standard error.

The same changes can be made directly on a `TerminalOptions`. It has methods
such as `add_window`, `add_tab`, `set_title` and `set_zoom`. Call `digest()`
once all the changes are made.

## Loading a saved session

```python
from materm.config import merge_config
from materm.keyfile import KeyFile
from materm.options import TerminalOptions

key_file = KeyFile.load("session.ini")
options = TerminalOptions()
merge_config(options, key_file, source_tag=1)
options.ensure_window()
```

`merge_config` raises `OptionError` in two cases. The first is a file without
the `[MATE Terminal Configuration]` group. The second is a file whose
`CompatVersion` is missing or newer than 1. It raises `KeyFileError` if the
window list or a stored `Command` cannot be read. When it raises, no windows
are added.

`KeyFile` can also build and write files:

- setters: `set_string`, `set_integer`, `set_boolean`, `set_string_list`,
  `set_comment`;
- output: `to_text()` returns the whole file as text.

## Encodings

```python
from materm.encoding import builtin_encodings

table = builtin_encodings()
utf8 = table["UTF-8"]
print(utf8.name, utf8.is_valid())   # Unicode True
print(table["current"].charset())   # the locale's character set
```

An encoding counts as valid only if printable ASCII encodes to the same bytes.
Any charset name that Python's codecs do not know also counts as invalid. The
result is computed once and then kept.

## What it does not do

The package has no terminal widget, no windows and no process spawning. It
also installs no command-line program.

It does not store profiles or settings. A profile name from the command line
or a session file is kept only as a string on `InitialTab`.

Nothing in it gathers open windows into a session file. A caller that wants
that must fill a `KeyFile` itself.