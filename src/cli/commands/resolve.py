"""Resolve command - merge a multi-file API document into one document."""

import logging
import sys
from dataclasses import replace
from typing import Optional

from src.cli.config import Config
from src.ref_resolver.data_classes import ResolverOptions
from src.ref_resolver.errors import ApiRefResolverError
from src.ref_resolver.resolver import ApiRefResolver
from src.ref_resolver.serializer import dump_document, format_for_path, write_document

logger = logging.getLogger(__name__)


def resolve_command(
    config: Config,
    input_path: str,
    output_path: Optional[str] = None,
    output_format: Optional[str] = None,
    markers: Optional[bool] = None,
    conflict_strategy: Optional[str] = None,
    verbose: bool = False,
):
    """Resolve external $refs of input_path and write the result to output_path or stdout."""
    options = ResolverOptions.from_config(config)
    overrides = {"verbose": verbose or options.verbose}
    if markers is not None:
        overrides["include_markers"] = markers
    if conflict_strategy:
        overrides["conflict_strategy"] = conflict_strategy
    options = replace(options, **overrides)

    logger.info(f"🔍 Input: {input_path}")
    logger.info(f"⚙️  Conflict strategy: {options.conflict_strategy.value}, markers: {options.include_markers}")

    try:
        resolved = ApiRefResolver(input_path, options=options).resolve()
    except ApiRefResolverError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    for conflict in resolved.conflicts:
        logger.info(f"⚠️ {conflict.pointer}: {conflict.action} ({conflict.new_source}) -> {conflict.final_name}")
    logger.info(f"✅ Resolved in {resolved.passes} passes")

    if output_path:
        fmt = output_format or format_for_path(output_path, config.output_format)
        written = write_document(resolved.api, output_path, fmt)
        logger.info(f"💾 Wrote {written}")
    else:
        sys.stdout.write(dump_document(resolved.api, output_format or config.output_format))
