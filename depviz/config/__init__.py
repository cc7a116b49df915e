"""Configuration schema and validation for depviz."""

from .schema import DuplicatePolicy, GraphBuildConfig, ValidatorConfig

__all__ = [
    "DuplicatePolicy",
    "GraphBuildConfig",
    "ValidatorConfig",
]
