"""Data classes for the API reference resolver."""

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List

from .components import ComponentConflict, ConflictStrategy

if TYPE_CHECKING:
    from ..cli.config import Config


@dataclass
class ResolverOptions:
    """Options for one resolution run."""

    conflict_strategy: ConflictStrategy = ConflictStrategy.RENAME
    include_markers: bool = True  # add x-resolved-from / x-resolved-at
    verbose: bool = False
    http_timeout: float = 30.0

    def __post_init__(self):
        self.conflict_strategy = ConflictStrategy(self.conflict_strategy)

    @classmethod
    def from_config(cls, config: "Config") -> "ResolverOptions":
        """Create options from Config object."""
        return cls(
            conflict_strategy=config.conflict_strategy,
            include_markers=config.include_markers,
            verbose=config.verbose,
            http_timeout=config.http_timeout,
        )

    @classmethod
    def from_env(cls) -> "ResolverOptions":
        """Create options from environment variables."""
        return cls(
            conflict_strategy=os.getenv("REF_RESOLVER_CONFLICT_STRATEGY", "rename"),
            include_markers=os.getenv("REF_RESOLVER_MARKERS", "true").lower() == "true",
            verbose=os.getenv("REF_RESOLVER_VERBOSE", "false").lower() == "true",
            http_timeout=float(os.getenv("REF_RESOLVER_HTTP_TIMEOUT", "30")),
        )


@dataclass
class ApiRefResolved:
    """The result of a resolution run."""

    api: Dict[str, Any]
    options: ResolverOptions
    conflicts: List[ComponentConflict] = field(default_factory=list)
    passes: int = 0
