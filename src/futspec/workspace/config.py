# Copyright 2026 futspec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the futspec project configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from futspec.loader.specs import DEFAULT_EXTENSION

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".futspec.yaml"


class ProjectConfigError(Exception):
    """Raised when a project configuration file is invalid or cannot be loaded."""


@dataclass
class ProjectConfig:
    """The parsed configuration of a directory of test programs.

    Attributes:
        source_extension: File extension of test programs, including the dot.
        exclude: Directory names skipped when searching for test programs.
    """

    source_extension: str = DEFAULT_EXTENSION
    exclude: list[str] = field(default_factory=list)


def load_project_config(path: Path) -> ProjectConfig:
    """Load and parse a futspec configuration file.

    Args:
        path: Path to the `.futspec.yaml` file.

    Returns:
        A ProjectConfig instance populated from the file.

    Raises:
        ProjectConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ProjectConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ProjectConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_project_config(text, source_label=str(path))


def find_project_config(directory: Path) -> ProjectConfig:
    """Load the configuration file in *directory*, or return the defaults if there is none.

    Raises:
        ProjectConfigError: If the configuration file exists but is invalid.
    """
    config_file = directory / CONFIG_FILE_NAME
    if not config_file.is_file():
        return ProjectConfig()
    return load_project_config(config_file)


# ################
# Implementation
# ################


def _parse_project_config(text: str, source_label: str = "<string>") -> ProjectConfig:
    """Parse configuration YAML text into a ProjectConfig.

    An empty document yields the defaults.

    Raises:
        ProjectConfigError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ProjectConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return ProjectConfig()
    if not isinstance(data, dict):
        raise ProjectConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(set(data) - {"source-extension", "exclude"})
    if unknown:
        raise ProjectConfigError(f"{source_label}: unknown field(s): {', '.join(map(str, unknown))}")

    config = ProjectConfig()
    if "source-extension" in data:
        extension = data["source-extension"]
        if not isinstance(extension, str) or not extension:
            raise ProjectConfigError(f"{source_label}: 'source-extension' must be a non-empty string")
        config.source_extension = extension if extension.startswith(".") else f".{extension}"

    if "exclude" in data:
        exclude = data["exclude"]
        if not isinstance(exclude, list):
            raise ProjectConfigError(f"{source_label}: 'exclude' must be a list")
        for index, entry in enumerate(exclude):
            if not isinstance(entry, str):
                raise ProjectConfigError(f"{source_label}: exclude[{index}] must be a string")
        config.exclude = list(exclude)

    return config
