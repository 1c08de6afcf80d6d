"""Logging setup - all logs go to stderr so stdout stays clean for documents."""

import logging
import sys


def setup_logging(verbose: bool = False):
    """Log to stderr: INFO and up when verbose, otherwise errors only."""
    level = logging.INFO if verbose else logging.ERROR
    fmt = "%(levelname)s %(name)s: %(message)s" if verbose else "%(message)s"
    logging.basicConfig(level=level, format=fmt, stream=sys.stderr, force=True)
    # Component conflict warnings are shown even without --verbose
    logging.getLogger("src.ref_resolver").setLevel(logging.INFO if verbose else logging.WARNING)
