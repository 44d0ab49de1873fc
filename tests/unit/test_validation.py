"""Tests for classpath input validation."""
import pytest

from classpaths.core.exceptions import ValidationError
from classpaths.core.store import ClasspathRecord
from classpaths.core.validation import (
    clean_ident,
    dangerous,
    validate_record,
)


class TestDangerous:
    """Test suite for the forbidden token check."""

    @pytest.mark.parametrize("text", [
        "<script>", "a>b", "a&b", "it's", 'say "hi"', "file:///etc", "../up",
    ])
    def test_forbidden_tokens(self, text):
        assert dangerous(text) is True

    @pytest.mark.parametrize("text", ["infra", "infra-web_01", "a.b:c", "file:/x", "..", ""])
    def test_clean_text(self, text):
        assert dangerous(text) is False


class TestValidateRecord:
    """Test suite for validate_record."""

    def test_valid_record(self):
        validate_record(ClasspathRecord(path="infraweb", note="web tier"))

    def test_space_in_path(self):
        with pytest.raises(ValidationError, match="path has invalid characters"):
            validate_record(ClasspathRecord(path="team a"))

    @pytest.mark.parametrize("path", ["team\ta", "team\na", "team　a"])
    def test_other_whitespace_in_path(self, path):
        with pytest.raises(ValidationError):
            validate_record(ClasspathRecord(path=path))

    def test_dangerous_path(self):
        with pytest.raises(ValidationError):
            validate_record(ClasspathRecord(path="<infra>"))

    def test_blank_path(self):
        with pytest.raises(ValidationError, match="blank"):
            validate_record(ClasspathRecord(path=""))

    def test_note_may_contain_spaces(self):
        validate_record(ClasspathRecord(path="infra", note="all infra hosts"))

    def test_dangerous_note(self):
        with pytest.raises(ValidationError, match="note has invalid characters"):
            validate_record(ClasspathRecord(path="infra", note="<b>"))


class TestCleanIdent:
    """Test suite for resource identifier cleanup."""

    def test_strips_whitespace(self):
        assert clean_ident("  host-1\n") == "host-1"

    def test_blank_ident(self):
        with pytest.raises(ValidationError):
            clean_ident("   ")
