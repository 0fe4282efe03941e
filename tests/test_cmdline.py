import os

import pytest

from materm.cmdline import VERSION, ParseResult, parse_options
from materm.options import OptionError, OptionErrorCode


def parse(*args, **kwargs):
    return parse_options(["mate-terminal", *args], **kwargs)


def test_no_arguments():
    result = parse()
    assert isinstance(result, ParseResult)
    assert result.argv == ["mate-terminal"]
    assert result.options.initial_windows == []
    assert result.options.use_factory is True
    assert result.options.initial_workspace == -1


def test_window_and_tabs():
    options = parse("--window", "--tab", "--tab").options
    assert len(options.initial_windows) == 1
    assert len(options.initial_windows[0].tabs) == 3
    assert options.initial_windows[0].tabs[1].attach_window is False


def test_tab_first_attaches():
    options = parse("--tab").options
    assert len(options.initial_windows) == 1
    assert options.initial_windows[0].tabs[0].attach_window is True


def test_title_default_and_per_tab():
    options = parse("--title", "Default", "--window", "-t", "Mine").options
    assert options.default_title == "Default"
    assert options.initial_windows[0].tabs[0].title == "Mine"


def test_command_short_option():
    options = parse("-e", "ls -l").options
    assert options.exec_argv == ["ls", "-l"]


def test_command_attached_value():
    options = parse("--command=ls -a").options
    assert options.exec_argv == ["ls", "-a"]


def test_execute_goes_to_first_tab():
    result = parse("--title", "x", "-x", "ls", "-l")
    options = result.options
    assert options.execute is True
    assert options.exec_argv is None
    assert options.initial_windows[0].tabs[0].exec_argv == ["ls", "-l"]
    assert result.argv == ["mate-terminal"]


def test_dashdash_collects_command():
    result = parse("--", "vim", "--window")
    options = result.options
    assert options.execute is False
    assert options.exec_argv == ["vim", "--window"]
    assert options.initial_windows == []


def test_trailing_dashdash_is_dropped():
    result = parse("--window", "--")
    assert result.argv == ["mate-terminal"]
    assert result.options.exec_argv is None


def test_trailing_execute_without_command():
    with pytest.raises(OptionError) as info:
        parse("-x", ignore_unknown_options=True)
    assert info.value.code is OptionErrorCode.BAD_VALUE


def test_trailing_execute_is_unknown_when_strict():
    with pytest.raises(OptionError) as info:
        parse("-x")
    assert info.value.code is OptionErrorCode.FAILED


def test_unknown_option_ignored():
    result = parse("--bogus", "--window", ignore_unknown_options=True)
    assert result.argv == ["mate-terminal", "--bogus"]
    assert len(result.options.initial_windows) == 1


def test_unknown_option_rejected():
    with pytest.raises(OptionError) as info:
        parse("--bogus")
    assert info.value.code is OptionErrorCode.FAILED


def test_positional_arguments_kept():
    result = parse("file.txt", "--window")
    assert result.argv == ["mate-terminal", "file.txt"]


def test_load_and_save_exclusive():
    with pytest.raises(OptionError) as info:
        parse("--load-config", "a", "--save-config", "b")
    assert info.value.code is OptionErrorCode.EXCLUSIVE_OPTIONS


def test_load_config_relative_to_working_directory():
    options = parse("--load-config=conf", working_directory="/tmp/w").options
    assert options.config_file == os.path.join("/tmp/w", "conf")
    assert options.load_config is True
    assert options.save_config is False


def test_missing_argument():
    with pytest.raises(OptionError) as info:
        parse("--geometry")
    assert info.value.code is OptionErrorCode.BAD_VALUE


def test_no_arg_option_with_value():
    with pytest.raises(OptionError):
        parse("--maximize=yes")


def test_profile_id_variants():
    options = parse(
        "--window-with-profile-internal-id=abc", "--window-with-profile", "Foo"
    ).options
    first, second = options.initial_windows
    assert (first.tabs[0].profile, first.tabs[0].profile_is_id) == ("abc", True)
    assert (second.tabs[0].profile, second.tabs[0].profile_is_id) == ("Foo", False)


def test_profile_before_window_sets_default():
    options = parse("--profile-id", "p1").options
    assert options.default_profile == "p1"
    assert options.default_profile_is_id is True


def test_disable_factory():
    assert parse("--disable-factory").options.use_factory is False


def test_startup_id():
    assert parse(startup_id="").options.startup_id is None
    assert parse(startup_id="id1").options.startup_id == "id1"
    assert parse("--startup-id", "id2").options.startup_id == "id2"


def test_env_copied():
    env = ["A=1"]
    options = parse(env=env).options
    env.append("B=2")
    assert options.env == ["A=1"]


def test_unsupported_option_warns(capsys):
    result = parse("--font", "--window")
    assert "--font" in capsys.readouterr().err
    assert len(result.options.initial_windows) == 1


def test_menubar_default_applies_to_window():
    window = parse("--hide-menubar", "--window").options.initial_windows[0]
    assert window.force_menubar_state is True
    assert window.menubar_state is False


def test_two_roles_rejected():
    with pytest.raises(OptionError) as info:
        parse("--role", "a", "--role", "b")
    assert info.value.code is OptionErrorCode.FAILED


def test_version_exits(capsys):
    with pytest.raises(SystemExit) as info:
        parse("--version")
    assert info.value.code == 0
    assert VERSION in capsys.readouterr().out


def test_help_exits(capsys):
    with pytest.raises(SystemExit) as info:
        parse("--help")
    assert info.value.code == 0
    assert "--window" in capsys.readouterr().out