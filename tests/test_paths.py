"""Tests for the project path codec."""

import pytest

from prompt_share.paths import decode_project_path, project_name


class TestDecodeProjectPath:
    def test_encoded_absolute_path(self):
        assert decode_project_path("-Users-alice-projects-webapp") == "/Users/alice/projects/webapp"

    def test_missing_leading_separator_is_added(self):
        assert decode_project_path("home-bob") == "/home/bob"

    @pytest.mark.parametrize("encoded", ["-a-b", "a", "", "---", "x-y-z"])
    def test_always_starts_with_separator(self, encoded):
        assert decode_project_path(encoded).startswith("/")

    def test_dash_inside_segment_is_ambiguous(self):
        # "/Users/alice/my-app" encodes to the same name as "/Users/alice/my/app"
        assert decode_project_path("-Users-alice-my-app") == "/Users/alice/my/app"


class TestProjectName:
    def test_empty_path(self):
        assert project_name("") == "Unknown"

    def test_last_segment(self):
        assert project_name("/a/b/c") == "c"

    def test_no_separator(self):
        assert project_name("nodash") == "nodash"

    def test_decoded_project(self):
        assert project_name(decode_project_path("-Users-testuser-dev-myapp")) == "myapp"
