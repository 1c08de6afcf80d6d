"""Configuration management for the API reference resolver CLI."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

CONFLICT_STRATEGIES = ("error", "rename", "ignore")


class Config:
    """Configuration loaded from .env file and environment variables."""

    def __init__(self, env_file: Optional[str] = None):
        """Load configuration from .env file."""
        if env_file:
            load_dotenv(env_file)
        else:
            # Load from working directory .env
            env_path = Path.cwd() / ".env"
            if env_path.exists():
                load_dotenv(env_path)

        # Resolution
        self.conflict_strategy = os.getenv("REF_RESOLVER_CONFLICT_STRATEGY", "rename").lower()
        self.include_markers = os.getenv("REF_RESOLVER_MARKERS", "true").lower() == "true"
        self.verbose = os.getenv("REF_RESOLVER_VERBOSE", "false").lower() == "true"

        # Loading
        self.http_timeout = float(os.getenv("REF_RESOLVER_HTTP_TIMEOUT", "30"))

        # Output
        self.output_format = os.getenv("REF_RESOLVER_OUTPUT_FORMAT", "yaml").lower()

        if self.conflict_strategy not in CONFLICT_STRATEGIES:
            raise ValueError(
                f"REF_RESOLVER_CONFLICT_STRATEGY must be one of {', '.join(CONFLICT_STRATEGIES)}, "
                f"got '{self.conflict_strategy}'"
            )
        if self.output_format not in ("yaml", "json"):
            raise ValueError(f"REF_RESOLVER_OUTPUT_FORMAT must be yaml or json, got '{self.output_format}'")
