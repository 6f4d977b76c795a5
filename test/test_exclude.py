"""Tests for merging patterns into git's local ignore list."""
# pylint: disable=redefined-outer-name

import pytest

from graftree.exclude import MARKER, merge_ignore_list, read_known_patterns


@pytest.fixture
def exclude_file(tmp_path):
    """Path of an ignore list inside a fake .git/info directory."""
    return tmp_path / ".git" / "info" / "exclude"


def pattern_lines(path):
    """Non-comment, non-blank lines of an ignore list."""
    lines = [line.strip() for line in path.read_text().splitlines()]
    return [line for line in lines if line and not line.startswith("#")]


class TestReadKnownPatterns:
    """Tests for read_known_patterns function."""

    def test_missing_file(self, exclude_file):
        """Test a missing file has no known patterns."""
        assert read_known_patterns(exclude_file) == set()

    def test_ignores_comments_and_blanks(self, exclude_file):
        """Test only trimmed pattern lines are known."""
        exclude_file.parent.mkdir(parents=True)
        exclude_file.write_text("# comment\n\n  .env  \n*.log\n   \n")

        assert read_known_patterns(exclude_file) == {".env", "*.log"}


class TestMergeIgnoreList:
    """Tests for merge_ignore_list function."""

    def test_creates_directory_and_file(self, exclude_file):
        """Test missing parent directories and file are created."""
        added = merge_ignore_list([".env", "config.json"], exclude_file)

        assert added == [".env", "config.json"]
        assert exclude_file.read_text() == f"\n{MARKER}\n.env\nconfig.json\n"

    def test_appends_after_existing_content(self, exclude_file):
        """Test existing content is kept byte for byte before the new block."""
        exclude_file.parent.mkdir(parents=True)
        original = "# git ls-files --others --exclude-from=.git/info/exclude\n*.swp\n"
        exclude_file.write_text(original)

        merge_ignore_list([".env"], exclude_file)

        content = exclude_file.read_text()
        assert content.startswith(original)
        assert content[len(original):] == f"\n{MARKER}\n.env\n"

    def test_skips_known_patterns(self, exclude_file):
        """Test patterns already listed are not appended again."""
        exclude_file.parent.mkdir(parents=True)
        exclude_file.write_text(".env\n")

        added = merge_ignore_list([".env", "secrets/"], exclude_file)

        assert added == ["secrets/"]
        assert pattern_lines(exclude_file) == [".env", "secrets/"]

    def test_no_write_when_nothing_new(self, exclude_file):
        """Test the file is untouched when every pattern is known."""
        exclude_file.parent.mkdir(parents=True)
        exclude_file.write_text("  .env\nconfig.json\n")
        before = exclude_file.read_bytes()
        mtime = exclude_file.stat().st_mtime_ns

        added = merge_ignore_list([".env", "config.json"], exclude_file)

        assert added == []
        assert exclude_file.read_bytes() == before
        assert exclude_file.stat().st_mtime_ns == mtime

    def test_no_file_created_for_empty_input(self, exclude_file):
        """Test an empty pattern list does not create the file."""
        assert merge_ignore_list([], exclude_file) == []
        assert not exclude_file.exists()

    def test_twice_never_duplicates(self, exclude_file):
        """Test merging the same patterns twice keeps one occurrence each."""
        patterns = [".env", "config/", "certs/dev.pem"]

        merge_ignore_list(patterns, exclude_file)
        merge_ignore_list(patterns, exclude_file)

        assert pattern_lines(exclude_file) == patterns
        assert exclude_file.read_text().count(MARKER) == 1

    def test_duplicate_input_collapsed(self, exclude_file):
        """Test duplicates within one call are appended once."""
        added = merge_ignore_list([".env", ".env", " .env "], exclude_file)

        assert added == [".env"]
        assert pattern_lines(exclude_file) == [".env"]

    def test_blank_input_ignored(self, exclude_file):
        """Test blank patterns are never written."""
        added = merge_ignore_list(["", "   ", ".env"], exclude_file)

        assert added == [".env"]

    def test_comment_does_not_count_as_present(self, exclude_file):
        """Test a comment mentioning a pattern does not suppress it."""
        exclude_file.parent.mkdir(parents=True)
        exclude_file.write_text("# .env\n")

        added = merge_ignore_list([".env"], exclude_file)

        assert added == [".env"]
        assert pattern_lines(exclude_file) == [".env"]
        assert exclude_file.read_text().startswith("# .env\n")

    def test_preserves_existing_blank_lines_and_order(self, exclude_file):
        """Test existing lines are never reordered or removed."""
        exclude_file.parent.mkdir(parents=True)
        exclude_file.write_text("b\n\n\na\n# note\n")

        merge_ignore_list(["c", "a"], exclude_file)

        assert exclude_file.read_text() == f"b\n\n\na\n# note\n\n{MARKER}\nc\n"

    def test_accepts_string_path(self, exclude_file):
        """Test the ignore file may be given as a string."""
        merge_ignore_list([".env"], str(exclude_file))

        assert pattern_lines(exclude_file) == [".env"]

    def test_unwritable_location_raises(self, tmp_path):
        """Test failure to create the directory propagates."""
        blocker = tmp_path / ".git"
        blocker.write_text("gitdir: elsewhere\n")

        with pytest.raises(OSError):
            merge_ignore_list([".env"], blocker / "info" / "exclude")
