"""Refs command - list the $ref values of a document without resolving them."""

import logging
import sys

from src.cli.config import Config
from src.ref_resolver.errors import ApiRefResolverError
from src.ref_resolver.loader import DocumentLoader, to_root_location
from src.ref_resolver.reference_scanner import ReferenceScanner

logger = logging.getLogger(__name__)


def refs_command(config: Config, input_path: str, external_only: bool = False):
    """Print each distinct $ref of a document, one per line."""
    loader = DocumentLoader(http_timeout=config.http_timeout)
    try:
        document = loader.load(to_root_location(input_path))
    except ApiRefResolverError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    scanner = ReferenceScanner()
    refs = scanner.find_external_references(document) if external_only else scanner.find_references(document)
    logger.info(f"🔗 {len(refs)} references in {input_path}")
    for ref in refs:
        print(ref)
