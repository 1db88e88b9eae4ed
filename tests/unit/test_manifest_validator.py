"""Unit tests for workspace validation."""

from hetki.manifest import validate_workspace
from hetki.manifest.loader import decode_workspace, normalize_workspace
from hetki.utils.logging import FieldError


def _validate(data):
    return validate_workspace(normalize_workspace(decode_workspace(data)))


class TestValidateWorkspace:
    """Test suite for validate_workspace."""

    def test_valid_workspace(self):
        """A well-formed workspace has no errors."""
        assert _validate({"sessions": [{"name": "dev", "windows": ["/code"]}]}) == []

    def test_missing_workspace(self):
        """None is reported as a nil workspace."""
        assert validate_workspace(None) == [FieldError("workspace", "workspace is nil")]

    def test_no_sessions(self):
        """A workspace needs at least one session."""
        assert _validate({"sessions": []}) == [
            FieldError("sessions", "workspace has no sessions defined")
        ]

    def test_blank_session_name(self):
        """Blank session names are reported by position."""
        errors = _validate({"sessions": [{"name": "  ", "windows": ["/a"]}]})
        assert errors == [FieldError("sessions.0.name", "session name cannot be empty")]

    def test_duplicate_session_name(self):
        """Session names are unique."""
        errors = _validate(
            {"sessions": [{"name": "dev", "windows": ["/a"]}, {"name": "dev", "windows": ["/b"]}]}
        )
        assert errors == [FieldError("session.dev", "duplicate session name")]

    def test_session_name_with_separator(self):
        """Dots and colons are not allowed in session names."""
        errors = _validate({"sessions": [{"name": "my.app", "windows": ["/a"]}]})
        assert errors == [
            FieldError("session.my.app.name", "session name cannot contain '.' or ':'")
        ]

    def test_duplicate_window_name(self):
        """Two windows called editor in one session give one session-qualified error."""
        errors = _validate(
            {
                "sessions": [
                    {
                        "name": "dev",
                        "windows": [
                            {"name": "editor", "path": "/a"},
                            {"name": "editor", "path": "/b"},
                        ],
                    }
                ]
            }
        )
        assert len(errors) == 1
        assert errors[0].field == "session.dev.window.editor"
        assert errors[0].message == "duplicate window name"

    def test_same_window_name_in_two_sessions(self):
        """Window names only need to be unique within their session."""
        errors = _validate(
            {
                "sessions": [
                    {"name": "dev", "windows": [{"name": "editor", "path": "/a"}]},
                    {"name": "ops", "windows": [{"name": "editor", "path": "/b"}]},
                ]
            }
        )
        assert errors == []

    def test_defaulted_names_collide(self):
        """Duplicates are detected after names are defaulted from paths."""
        errors = _validate({"sessions": [{"name": "dev", "windows": ["/x/api", "/y/api"]}]})
        assert [e.field for e in errors] == ["session.dev.window.api"]

    def test_more_than_one_zoomed_pane(self):
        """At most one pane per window may be zoomed."""
        errors = _validate(
            {
                "sessions": [
                    {
                        "name": "dev",
                        "windows": [
                            {
                                "name": "editor",
                                "path": "/a",
                                "panes": [{"zoom": True}, {"zoom": True}],
                            }
                        ],
                    }
                ]
            }
        )
        assert errors == [
            FieldError(
                "session.dev.window.editor.panes",
                "2 panes have zoom=true (only one allowed per window)",
            )
        ]

    def test_errors_are_collected(self):
        """Validation is not fail-fast."""
        errors = _validate(
            {
                "sessions": [
                    {"name": "", "windows": ["/a"]},
                    {"name": "dev", "windows": []},
                    {"name": "ops", "windows": [{"name": "logs"}]},
                ]
            }
        )
        assert [e.field for e in errors] == [
            "sessions.0.name",
            "session.dev.windows",
            "session.ops.window.logs.path",
        ]
