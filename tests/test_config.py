import pytest

from materm.config import merge_config
from materm.keyfile import (
    CONFIG_COMPAT_VERSION,
    CONFIG_GROUP,
    CONFIG_PROP_COMPAT_VERSION,
    CONFIG_PROP_VERSION,
    CONFIG_PROP_WINDOWS,
    CONFIG_VERSION,
    KeyFile,
    KeyFileError,
)
from materm.options import OptionError, OptionErrorCode, TerminalOptions


def _header(version=CONFIG_VERSION, compat=CONFIG_COMPAT_VERSION, windows=()):
    kf = KeyFile()
    kf.set_integer(CONFIG_GROUP, CONFIG_PROP_VERSION, version)
    kf.set_integer(CONFIG_GROUP, CONFIG_PROP_COMPAT_VERSION, compat)
    kf.set_string_list(CONFIG_GROUP, CONFIG_PROP_WINDOWS, windows)
    return kf


def _full_config():
    kf = _header(windows=["Window0"])
    kf.set_string_list("Window0", "Terminals", ["Terminal0", "Terminal1"])
    kf.set_string("Window0", "Role", "main-role")
    kf.set_string("Window0", "Geometry", "80x24+10+10")
    kf.set_boolean("Window0", "Fullscreen", True)
    kf.set_boolean("Window0", "Maximized", False)
    kf.set_boolean("Window0", "MenubarVisible", False)
    kf.set_string("Terminal0", "ProfileID", "default")
    kf.set_string("Terminal0", "Title", "first tab")
    kf.set_string("Terminal0", "WorkingDirectory", "/tmp/work")
    kf.set_string("Terminal0", "Command", "ls -l '/a b'")
    kf.set_string("Terminal1", "ProfileID", "other")
    return kf


def test_missing_group_is_invalid():
    with pytest.raises(OptionError) as info:
        merge_config(TerminalOptions(), KeyFile(), 0)
    assert info.value.code is OptionErrorCode.INVALID_CONFIG_FILE
    assert str(info.value) == "Not a valid terminal config file."


@pytest.mark.parametrize(
    "version, compat",
    [(0, CONFIG_COMPAT_VERSION), (CONFIG_VERSION, 0), (CONFIG_VERSION, CONFIG_COMPAT_VERSION + 1)],
)
def test_incompatible_versions(version, compat):
    with pytest.raises(OptionError) as info:
        merge_config(TerminalOptions(), _header(version, compat), 0)
    assert info.value.code is OptionErrorCode.INCOMPATIBLE_CONFIG_FILE


def test_missing_version_key_is_incompatible():
    kf = KeyFile()
    kf.set_string_list(CONFIG_GROUP, CONFIG_PROP_WINDOWS, [])
    with pytest.raises(OptionError) as info:
        merge_config(TerminalOptions(), kf, 0)
    assert info.value.code is OptionErrorCode.INCOMPATIBLE_CONFIG_FILE


def test_missing_window_list_raises():
    kf = KeyFile()
    kf.set_integer(CONFIG_GROUP, CONFIG_PROP_VERSION, CONFIG_VERSION)
    kf.set_integer(CONFIG_GROUP, CONFIG_PROP_COMPAT_VERSION, CONFIG_COMPAT_VERSION)
    with pytest.raises(KeyFileError):
        merge_config(TerminalOptions(), kf, 0)


def test_full_window_is_merged():
    options = TerminalOptions()
    merge_config(options, _full_config(), 1)
    assert len(options.initial_windows) == 1
    window = options.initial_windows[0]
    assert window.source_tag == 1
    assert window.role == "main-role"
    assert window.geometry == "80x24+10+10"
    assert window.start_fullscreen is True
    assert window.start_maximized is False
    assert window.force_menubar_state is True
    assert window.menubar_state is False
    first, second = window.tabs
    assert first.profile == "default"
    assert first.profile_is_id is True
    assert first.title == "first tab"
    assert first.working_dir == "/tmp/work"
    assert first.exec_argv == ["ls", "-l", "/a b"]
    assert second.profile == "other"
    assert second.exec_argv is None
    assert second.title is None


def test_round_trip_through_text():
    options = TerminalOptions()
    merge_config(options, KeyFile.parse(_full_config().to_text()), 0)
    assert options.initial_windows[0].tabs[0].exec_argv == ["ls", "-l", "/a b"]
    assert options.initial_windows[0].role == "main-role"


def test_window_without_tabs_is_skipped():
    kf = _header(windows=["Empty", "Window1"])
    kf.set_string("Empty", "Role", "ignored")
    kf.set_string_list("Window1", "Terminals", ["T"])
    kf.set_string("T", "Title", "kept")
    options = TerminalOptions()
    merge_config(options, kf, 0)
    assert [w.tabs[0].title for w in options.initial_windows] == ["kept"]


def test_windows_are_appended_after_existing_ones():
    options = TerminalOptions()
    existing = options.ensure_window()
    merge_config(options, _full_config(), 0)
    assert options.initial_windows[0] is existing
    assert len(options.initial_windows) == 2


def test_pending_menubar_default_is_used_by_first_window():
    kf = _header(windows=["W0", "W1"])
    kf.set_string_list("W0", "Terminals", ["T0"])
    kf.set_string_list("W1", "Terminals", ["T1"])
    options = TerminalOptions()
    options.hide_menubar()
    merge_config(options, kf, 0)
    first, second = options.initial_windows
    assert first.force_menubar_state is True
    assert first.menubar_state is False
    assert second.force_menubar_state is False
    assert options.default_window_menubar_forced is False


@pytest.mark.parametrize("command", ["echo 'unterminated", "   "])
def test_bad_command_discards_all_windows(command):
    kf = _full_config()
    kf.set_string("Terminal1", "Command", command)
    options = TerminalOptions()
    with pytest.raises(KeyFileError):
        merge_config(options, kf, 0)
    assert options.initial_windows == []