"""Configuration schema definitions using Pydantic for validation.

These models control how a graph is built and validated. Using Pydantic
ensures configuration errors are caught early with clear error messages.
"""

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, Field


class DuplicatePolicy(str, Enum):
    """What to keep when two declarations share an FQN.

    Both policies report the duplicate FQN in the build statistics.
    """

    LAST_WINS = "last_wins"
    FIRST_WINS = "first_wins"


class ValidatorConfig(BaseModel):
    """Limits applied by the graph validator.

    Attributes:
        max_path_depth: Hop ceiling for longest-path enumeration.
        path_limit: Number of longest paths to report.
        connection_limit: Number of most/least connected nodes to report.
    """

    max_path_depth: int = Field(default=20, ge=1, le=100)
    path_limit: int = Field(default=5, ge=1)
    connection_limit: int = Field(default=5, ge=1)

    model_config = {"extra": "forbid"}


class GraphBuildConfig(BaseModel):
    """Top-level configuration for graph building and validation.

    Attributes:
        duplicate_policy: Node kept when an FQN is declared more than once.
        sort_records: Sort records by FQN before building, for callers that
            merge extraction results from parallel workers.
        validator: Validator limits.
    """

    duplicate_policy: DuplicatePolicy = DuplicatePolicy.LAST_WINS
    sort_records: bool = False
    validator: ValidatorConfig = Field(default_factory=ValidatorConfig)

    model_config = {"extra": "forbid"}

    @classmethod
    def default(cls) -> "GraphBuildConfig":
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GraphBuildConfig":
        """Create configuration from dictionary.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
