# Copyright 2026 futspec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the project configuration module."""

from pathlib import Path

import pytest

from futspec.workspace import (
    CONFIG_FILE_NAME,
    ProjectConfig,
    ProjectConfigError,
    find_project_config,
    load_project_config,
)

# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write a project config file and return its path."""
    config_file = tmp_path / CONFIG_FILE_NAME
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_full_config(tmp_path: Path) -> None:
    """Both fields are read from the file."""
    content = """\
source-extension: .futhark
exclude:
  - lib
  - data
"""
    config = load_project_config(_write_config(tmp_path, content))

    assert isinstance(config, ProjectConfig)
    assert config.source_extension == ".futhark"
    assert config.exclude == ["lib", "data"]


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    """An empty document yields the default configuration."""
    config = load_project_config(_write_config(tmp_path, ""))
    assert config == ProjectConfig()
    assert config.source_extension == ".fut"
    assert config.exclude == []


def test_extension_without_dot(tmp_path: Path) -> None:
    """A leading dot is added to the source extension when missing."""
    config = load_project_config(_write_config(tmp_path, "source-extension: fut\n"))
    assert config.source_extension == ".fut"


def test_find_project_config_without_file(tmp_path: Path) -> None:
    """A directory without a config file uses the defaults."""
    assert find_project_config(tmp_path) == ProjectConfig()


def test_find_project_config_with_file(tmp_path: Path) -> None:
    """The config file in the directory is loaded."""
    _write_config(tmp_path, "exclude: [vendor]\n")
    assert find_project_config(tmp_path).exclude == ["vendor"]


# ###############
# Error Cases
# ###############


def test_file_not_found(tmp_path: Path) -> None:
    """Loading a missing file raises ProjectConfigError."""
    with pytest.raises(ProjectConfigError, match="not found"):
        load_project_config(tmp_path / CONFIG_FILE_NAME)


def test_invalid_yaml_syntax(tmp_path: Path) -> None:
    """Malformed YAML raises ProjectConfigError."""
    with pytest.raises(ProjectConfigError, match="Invalid YAML"):
        load_project_config(_write_config(tmp_path, "exclude: [unclosed\n"))


def test_not_a_mapping(tmp_path: Path) -> None:
    """A top-level list is rejected."""
    with pytest.raises(ProjectConfigError, match="mapping"):
        load_project_config(_write_config(tmp_path, "- lib\n"))


def test_unknown_field(tmp_path: Path) -> None:
    """Fields other than the known ones are rejected."""
    with pytest.raises(ProjectConfigError, match="unknown field.*backend"):
        load_project_config(_write_config(tmp_path, "backend: cuda\n"))


def test_extension_not_a_string(tmp_path: Path) -> None:
    """A non-string source extension is rejected."""
    with pytest.raises(ProjectConfigError, match="source-extension"):
        load_project_config(_write_config(tmp_path, "source-extension: 42\n"))


def test_extension_empty(tmp_path: Path) -> None:
    """An empty source extension is rejected."""
    with pytest.raises(ProjectConfigError, match="source-extension"):
        load_project_config(_write_config(tmp_path, "source-extension: ''\n"))


def test_exclude_not_a_list(tmp_path: Path) -> None:
    """A scalar exclude value is rejected."""
    with pytest.raises(ProjectConfigError, match="'exclude' must be a list"):
        load_project_config(_write_config(tmp_path, "exclude: lib\n"))


def test_exclude_entry_not_a_string(tmp_path: Path) -> None:
    """Every exclude entry must be a string."""
    with pytest.raises(ProjectConfigError, match=r"exclude\[1\]"):
        load_project_config(_write_config(tmp_path, "exclude: [lib, 3]\n"))


def test_find_project_config_with_invalid_file(tmp_path: Path) -> None:
    """An existing but invalid file is reported, not ignored."""
    _write_config(tmp_path, "exclude: 1\n")
    with pytest.raises(ProjectConfigError):
        find_project_config(tmp_path)
