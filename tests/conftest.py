"""Pytest fixtures for lispish tests."""

import pytest
from pathlib import Path

from lispish.log import reset_logging

# Programs from the original demo harness
DEFINE_INT = "(define foo 3)"
DEFINE_STRING = '(define foo "bananas")'
ESCAPED_STRING = '(define foo "Say \\"Chease!\\" ")'
UNTERMINATED_STRING = '(define foo "Say \\"Chease!\\)'
SIMPLE_SUM = "(+ 3 4)"
NESTED = "(+ 3.14 (* 4 7))"
UNBALANCED = "(+ 3.14 (* 4 7)"

MULTI_LINE_PROGRAM = """
(define square (lambda (x) (* x x)))
(print "hello")
42 -1.5 .5 +7
()
"""


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep user and project config files from leaking into tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setattr("lispish.config.USER_CONFIG_PATH", home / "config.toml")
    monkeypatch.setattr("lispish.cli.config_cmd.USER_CONFIG_PATH", home / "config.toml")
    return home


@pytest.fixture(autouse=True)
def clean_logging():
    """Remove the CLI log handler after each test."""
    yield
    reset_logging()


@pytest.fixture
def project_dir(tmp_path, monkeypatch) -> Path:
    """Empty project directory (with .git) set as the working directory."""
    (tmp_path / ".git").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def program_file(project_dir) -> Path:
    """Source file holding a multi-line program."""
    path = project_dir / "program.lsp"
    path.write_text(MULTI_LINE_PROGRAM, encoding="utf-8")
    return path


@pytest.fixture
def nested_file(project_dir) -> Path:
    path = project_dir / "nested.lsp"
    path.write_text(NESTED, encoding="utf-8")
    return path


@pytest.fixture
def unbalanced_file(project_dir) -> Path:
    path = project_dir / "unbalanced.lsp"
    path.write_text(UNBALANCED, encoding="utf-8")
    return path
