"""Unit tests for the state differ."""

from hetki.core.diff import command_name, commands_match, compare, windows_equal
from hetki.core.enums import CompareMode
from hetki.core.model import Pane, State, Window


def _state(**sessions) -> State:
    state = State()
    for name, windows in sessions.items():
        state.add_session(name).windows = windows
    return state


def _window(name="editor", path="/code", commands=("",), **kwargs) -> Window:
    return Window(name=name, path=path, panes=[Pane(path=path, command=c) for c in commands], **kwargs)


class TestCommandMatching:
    """Test suite for command comparison."""

    def test_command_name(self):
        """The executable name is the first word's basename."""
        assert command_name("vim notes.md") == "vim"
        assert command_name("/usr/bin/htop -d 5") == "htop"
        assert command_name("  ") == ""

    def test_unbalanced_quotes(self):
        """Commands that shlex cannot split still yield a name."""
        assert command_name("echo 'oops") == "echo"

    def test_empty_desired_matches_anything(self):
        """A pane without a command is satisfied by any process."""
        assert commands_match("", "zsh")

    def test_name_match(self):
        """Arguments do not take part in the match."""
        assert commands_match("vim notes.md", "vim")
        assert not commands_match("vim", "nvim")


class TestWindowsEqual:
    """Test suite for windows_equal."""

    def test_layout_only_in_strict(self):
        """Layouts differ only under the strict mode."""
        desired = _window(layout="tiled")
        actual = _window()
        assert windows_equal(desired, actual, CompareMode.DEFAULT)
        assert not windows_equal(desired, actual, CompareMode.STRICT)

    def test_index_only_in_strict(self):
        """Indices differ only under the strict mode."""
        assert windows_equal(_window(index=3), _window(index=1), CompareMode.DEFAULT)
        assert not windows_equal(_window(index=3), _window(index=1), CompareMode.STRICT)

    def test_pane_count(self):
        """Different pane counts never compare equal."""
        assert not windows_equal(_window(commands=("", "")), _window(), CompareMode.DEFAULT)

    def test_explicit_mode(self):
        """Callers may combine flags freely."""
        desired = _window(commands=("vim",))
        actual = _window(commands=("zsh",))
        assert windows_equal(desired, actual, CompareMode.NAME | CompareMode.PATH)
        assert not windows_equal(desired, actual, CompareMode.COMMAND)


class TestCompare:
    """Test suite for compare."""

    def test_identical_states(self):
        """Equal states produce an empty diff."""
        desired = _state(dev=[_window()])
        actual = _state(dev=[_window()])
        assert compare(desired, actual).is_empty()

    def test_missing_session_carries_windows(self):
        """Missing sessions keep their full window tree."""
        desired = _state(dev=[_window(), _window("server", "/srv")])
        diff = compare(desired, State())
        assert [s.name for s in diff.sessions.missing] == ["dev"]
        assert len(diff.sessions.missing[0].windows) == 2
        assert diff.windows == {}

    def test_extra_session_carries_name_only(self):
        """Extra sessions are names without windows."""
        diff = compare(State(), _state(old=[_window()]))
        assert [s.name for s in diff.sessions.extra] == ["old"]
        assert diff.sessions.extra[0].windows == []

    def test_missing_order_follows_desired(self):
        """Missing sessions come out in manifest order."""
        desired = _state(web=[_window()], api=[_window()], db=[_window()])
        diff = compare(desired, _state(api=[_window()]))
        assert [s.name for s in diff.sessions.missing] == ["web", "db"]

    def test_window_buckets(self):
        """Common sessions get missing, extra and mismatched windows."""
        desired = _state(
            dev=[_window("editor", commands=("vim",)), _window("tests", "/code/tests")]
        )
        actual = _state(dev=[_window("editor", commands=("nvim",)), _window("logs", "/var/log")])
        diff = compare(desired, actual)

        window_diff = diff.windows["dev"]
        assert [w.name for w in window_diff.missing] == ["tests"]
        assert [w.name for w in window_diff.extra] == ["logs"]
        assert [m.desired.name for m in window_diff.mismatched] == ["editor"]
        assert window_diff.mismatched[0].actual.panes[0].command == "nvim"

    def test_moved_window_is_missing_and_extra(self):
        """Windows are keyed by name and path; a new path is a new window."""
        diff = compare(_state(dev=[_window(path="/new")]), _state(dev=[_window(path="/old")]))
        assert [w.path for w in diff.windows["dev"].missing] == ["/new"]
        assert [w.path for w in diff.windows["dev"].extra] == ["/old"]

    def test_unchanged_sessions_are_omitted(self):
        """Only sessions with window differences appear in the window map."""
        desired = _state(dev=[_window()], ops=[_window("logs")])
        actual = _state(dev=[_window()], ops=[_window("logs"), _window("extra")])
        assert list(compare(desired, actual).windows) == ["ops"]

    def test_compare_does_not_mutate(self):
        """Inputs are read only."""
        desired = _state(dev=[_window()])
        actual = _state(old=[_window()])
        compare(desired, actual)
        assert list(desired.sessions) == ["dev"]
        assert list(actual.sessions) == ["old"]
        assert len(actual.sessions["old"].windows) == 1

    def test_swapping_arguments_swaps_missing_and_extra(self):
        """What one side lacks is what the other side has in excess."""
        a = _state(dev=[_window(), _window("tests", "/code/tests")], web=[_window()])
        b = _state(dev=[_window(), _window("logs", "/var/log")], db=[_window()], cache=[_window()])

        forward, backward = compare(a, b), compare(b, a)

        assert [s.name for s in forward.sessions.missing] == [s.name for s in backward.sessions.extra]
        assert [s.name for s in forward.sessions.extra] == [s.name for s in backward.sessions.missing]
        assert {s.name for s in forward.sessions.missing} == {"web"}
        assert {s.name for s in forward.sessions.extra} == {"db", "cache"}
        assert [w.name for w in forward.windows["dev"].missing] == [
            w.name for w in backward.windows["dev"].extra
        ]
        assert [w.name for w in forward.windows["dev"].extra] == [
            w.name for w in backward.windows["dev"].missing
        ]

    def test_session_order_is_manifest_order(self):
        """The diff remembers the desired session order."""
        desired = _state(web=[_window()], api=[_window()], db=[_window()])
        diff = compare(desired, _state(api=[_window(), _window("x", "/x")]))
        assert diff.session_order() == ["web", "api", "db"]
