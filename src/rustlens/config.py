"""Configuration for indexing and searching a local Rust source tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import yaml

from .errors import IoFailure

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".rustlens.yaml"
CONFIG_SECTION = "rustlens"


@dataclass(slots=True)
class LocalConfig:
    """Runtime configuration for one indexing run.

    Attributes
    ----------
    model_name:
        sentence-transformers model used to embed elements and queries.
    top_k:
        Number of results returned by a search when the caller gives none.
    file_extension:
        Extension of the source files picked up by directory traversal.
    exclude_dirs:
        Directory names that are never descended into (build artefacts,
        VCS metadata).
    skip_unparsable:
        When true a file that fails to parse is logged and skipped; otherwise
        the whole run aborts with :class:`~rustlens.errors.ParseFailure`.
    embed_retries:
        Attempts made for each embedding request before giving up.
    embed_retry_wait:
        Base delay in seconds for the exponential backoff between attempts.
    """

    model_name: str = "all-MiniLM-L12-v2"
    top_k: int = 5
    file_extension: str = ".rs"
    exclude_dirs: List[str] = field(default_factory=lambda: ["target", ".git"])
    skip_unparsable: bool = False
    embed_retries: int = 3
    embed_retry_wait: float = 1.0


def _is_int(value: object, minimum: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= minimum


# Accepted values per key. YAML booleans are not accepted as numbers.
_CHECKS = {
    "model_name": lambda value: isinstance(value, str) and bool(value.strip()),
    "top_k": lambda value: _is_int(value, 0),
    "file_extension": lambda value: isinstance(value, str) and value.startswith("."),
    "exclude_dirs": lambda value: isinstance(value, list) and all(isinstance(item, str) for item in value),
    "skip_unparsable": lambda value: isinstance(value, bool),
    "embed_retries": lambda value: _is_int(value, 1),
    "embed_retry_wait": lambda value: _is_int(value, 0) or (isinstance(value, float) and value >= 0),
}


def load_config(root: Path, path: Path | None = None) -> LocalConfig:
    """Load configuration from ``<root>/.rustlens.yaml`` or an explicit file.

    Parameters
    ----------
    root:
        Directory searched for the default config file.
    path:
        Explicit config file. Unlike the default file it must exist.

    Returns
    -------
    LocalConfig populated from the ``rustlens`` section, with defaults for
    anything the file leaves out.
    """
    if path is not None:
        config_file = Path(path)
        if not config_file.is_file():
            raise IoFailure(config_file, "config file does not exist")
    else:
        config_file = Path(root) / CONFIG_FILE_NAME
        if not config_file.is_file():
            return LocalConfig()

    try:
        content = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except OSError as exc:
        raise IoFailure(config_file, str(exc)) from exc
    except yaml.YAMLError as exc:
        logger.warning("Failed to parse config file %s: %s. Using defaults.", config_file, exc)
        return LocalConfig()

    if not isinstance(content, dict) or CONFIG_SECTION not in content:
        logger.debug("Config file %s has no '%s' section", config_file, CONFIG_SECTION)
        return LocalConfig()

    section = content[CONFIG_SECTION]
    if section is None:
        return LocalConfig()
    if not isinstance(section, dict):
        logger.warning(
            "Config section '%s' in %s is not a mapping. Using defaults.", CONFIG_SECTION, config_file
        )
        return LocalConfig()

    values = {}
    for key, value in section.items():
        check = _CHECKS.get(key)
        if check is None:
            logger.warning("Ignoring unknown config key '%s' in %s", key, config_file)
        elif not check(value):
            logger.warning("Ignoring invalid value %r for config key '%s' in %s", value, key, config_file)
        else:
            values[key] = float(value) if key == "embed_retry_wait" else value
    return LocalConfig(**values)
