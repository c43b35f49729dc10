import pytest

from groupsettings.exceptions import LoadError, WriteError
from groupsettings.utils.result import Failure, Success


class TestSuccess:

    def test_success_accessors(self):
        result = Success("/etc/scanner.conf")

        assert result.is_success() and not result.is_failure()
        assert result.unwrap() == "/etc/scanner.conf"
        assert bool(result) is True


class TestFailure:

    def test_failure_carries_error(self):
        error = WriteError(
            "Failed to write configuration",
            file_path="/etc/scanner.conf",
            group_name="scanner",
            metadata={"stage": "write"},
        )

        result = Failure(error)

        assert result.is_failure() and not result.is_success()
        assert bool(result) is False
        assert result.error is error
        assert result.error_type == "WriteError"
        assert result.message == "Failed to write configuration"
        assert result.context == {
            "file_path": "/etc/scanner.conf",
            "group_name": "scanner",
            "metadata": {"stage": "write"},
        }

    def test_context_leaves_out_unknown_fields(self):
        result = Failure(LoadError("Group 'scanner' not found", group_name="scanner"))

        assert result.context == {"group_name": "scanner"}

    def test_unwrap_reraises_error(self):
        error = LoadError("No such file", file_path="/missing.conf")

        with pytest.raises(LoadError) as exc_info:
            Failure(error).unwrap()

        assert exc_info.value is error

    def test_repr(self):
        result = Failure(WriteError("disk full"))

        assert repr(result) == "Failure(WriteError: disk full)"
