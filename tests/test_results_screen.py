"""Tests for results-screen helpers."""

import pytest

from repo_lens.screens.results import LANGUAGE_MAP, syntax_language


class TestSyntaxLanguage:
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("app.ts", "typescript"),
            ("src/view.tsx", "tsx"),
            ("main.py", "python"),
            ("config.yml", "yaml"),
            ("README.md", "markdown"),
            ("INDEX.HTML", "html"),
        ],
    )
    def test_known_extensions(self, path, expected):
        assert syntax_language(path) == expected

    @pytest.mark.parametrize("path", ["Makefile", "notes.txt", "archive.tar.gz"])
    def test_unknown_is_text(self, path):
        assert syntax_language(path) == "text"

    def test_map_values_are_lowercase(self):
        assert all(v == v.lower() for v in LANGUAGE_MAP.values())
