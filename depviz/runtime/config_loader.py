"""Helpers for loading graph build configuration from TOML/JSON sources.

`load_graph_build_config` accepts:

* None -> default GraphBuildConfig
* dict -> GraphBuildConfig.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings
"""

from __future__ import annotations

import json
import logging
import re
import tomllib
from pathlib import Path
from typing import Any, Dict, Union

from depviz.config.schema import GraphBuildConfig

logger = logging.getLogger("depviz.runtime.config_loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


# A leading "[name]" or "[[name]]" is a TOML table header, not a JSON array.
_TOML_TABLE_HEADER = re.compile(r"\[\[?\s*[A-Za-z_][\w.-]*\s*\]\]?\s*(?:#.*)?$")


def _guess_format(text: str) -> str:
    stripped = text.lstrip()
    if stripped.startswith("{"):
        return "json"
    if stripped.startswith("[") and not _TOML_TABLE_HEADER.match(stripped.splitlines()[0]):
        return "json"
    return "toml"


def load_graph_build_config(source: ConfigSource) -> GraphBuildConfig:
    """Load GraphBuildConfig from various configuration sources.

    Args:
        source: None, an already-parsed mapping, a path to a .toml/.json
            file, or an inline TOML/JSON string (auto-detected).

    Returns:
        GraphBuildConfig instance.

    Raises:
        ValueError: If the parsed configuration is not a mapping.
        pydantic.ValidationError: If the configuration is invalid.
    """
    if source is None:
        logger.debug("No config source provided; using default GraphBuildConfig")
        return GraphBuildConfig.default()

    if isinstance(source, dict):
        logger.debug("Loading GraphBuildConfig from provided dict")
        return GraphBuildConfig.from_dict(source)

    if not isinstance(source, (str, Path)):
        raise TypeError(f"Unsupported config source type: {type(source)!r}")

    path = Path(source)
    if path.is_file():
        text = path.read_text(encoding="utf-8")
        suffix = path.suffix.lower()
        if suffix in {".toml", ".tml"}:
            fmt = "toml"
        elif suffix == ".json":
            fmt = "json"
        else:
            fmt = _guess_format(text)
        logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
    else:
        text = str(source)
        fmt = _guess_format(text)
        logger.info("Loading configuration from inline %s string", fmt)

    data = json.loads(text) if fmt == "json" else tomllib.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Top-level configuration must be a mapping/dict")

    return GraphBuildConfig.from_dict(data)


__all__ = ["load_graph_build_config"]
