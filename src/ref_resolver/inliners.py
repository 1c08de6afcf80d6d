"""The three ways an external reference is brought into the root document.

- FullDocumentInliner: ``other.yaml`` replaces the reference with the whole
  document.
- ComponentInliner: ``other.yaml#/components/<section>/<name>`` copies the
  component into the root's components section and points the reference at
  the local copy.
- FragmentInliner: ``other.yaml#/any/other/pointer`` replaces the reference
  with the addressed item.

Every inserted item is a deep copy of the cached source, so no two places in
the output share structure.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict

from .components import ComponentRegistry
from .errors import InvalidReferenceError
from .json_navigation import JsonNavigation, compile_pointer, component_parts, item_at_pointer
from .loader import DocumentLoader, Location
from .memo import ReferenceMemo
from .provenance import mark_resolved, sibling_keys, siblings_of, tag_source
from .rewriter import ReferenceRewriter

logger = logging.getLogger(__name__)


@dataclass
class InlineContext:
    """Run state shared by the inliners."""

    loader: DocumentLoader
    rewriter: ReferenceRewriter
    registry: ComponentRegistry
    memo: ReferenceMemo
    include_markers: bool = True
    pass_number: int = 0


def merge_siblings(item: Any, node: Dict[str, Any]) -> Any:
    """Overlay the sibling keys of a reference object on the inlined item."""
    siblings = siblings_of(node)
    if not siblings:
        return item
    if not isinstance(item, dict):
        raise InvalidReferenceError(
            f"Cannot merge {sorted(siblings)} from $ref {node['$ref']} into a non-object item"
        )
    item.update(siblings)
    return item


class Inliner:
    """Base class; subclasses implement ``inline``."""

    def __init__(self, context: InlineContext):
        self.context = context

    def inline(self, location: Location, node: Dict[str, Any], nav: JsonNavigation) -> Any:
        """
        Resolve one reference object.

        Args:
            location: Normalized absolute location of the reference
            node: The reference object
            nav: Where the reference object sits in the root document

        Returns:
            The node that takes the reference object's place (possibly the
            reference object itself, modified)
        """
        raise NotImplementedError

    def _finish(self, item: Any, location: Location) -> Any:
        tag_source(item, location, self.context.include_markers)
        return mark_resolved(item, self.context.pass_number)


class FullDocumentInliner(Inliner):
    """Replaces a reference to a whole document with that document."""

    def inline(self, location: Location, node: Dict[str, Any], nav: JsonNavigation) -> Any:
        ctx = self.context
        document = ctx.loader.load(location)
        ctx.rewriter.rewrite_fragments(document, location.locator, nav.as_fragment())
        ctx.rewriter.rewrite_paths(document, location.locator)

        merged = merge_siblings(copy.deepcopy(document), node)
        ctx.memo.remember(str(location), nav.as_fragment())
        return self._finish(merged, location)


class ComponentInliner(Inliner):
    """Brings a named component into the root's components section."""

    def inline(self, location: Location, node: Dict[str, Any], nav: JsonNavigation) -> Any:
        ctx = self.context
        section, name = component_parts(location.fragment)
        document = ctx.loader.load(location)
        ctx.rewriter.rewrite_paths(document, location.locator)
        item = copy.deepcopy(item_at_pointer(document, location.fragment))
        ctx.rewriter.qualify_local_refs(item, location.locator)
        source = str(location)

        # components.<section>.<name> forwarding to an identically named component
        if nav.component_slot() == (section, name) and not sibling_keys(node):
            ctx.registry.record_source(section, name, source)
            ctx.memo.remember(source, nav.as_fragment())
            return self._finish(item, location)

        tag_source(item, location, ctx.include_markers)
        placement = ctx.registry.place(section, name, item, source)
        fragment = "#" + compile_pointer(["components", section, placement.name])
        if placement.inserted:
            logger.debug(f"Added component {fragment} from {source}")

        node["$ref"] = fragment
        ctx.memo.remember(source, fragment)
        return node


class FragmentInliner(Inliner):
    """Replaces a reference with the item its pointer addresses."""

    def inline(self, location: Location, node: Dict[str, Any], nav: JsonNavigation) -> Any:
        ctx = self.context
        document = ctx.loader.load(location)
        ctx.rewriter.rewrite_paths(document, location.locator)
        item = copy.deepcopy(item_at_pointer(document, location.fragment))
        ctx.rewriter.qualify_local_refs(item, location.locator)

        merged = merge_siblings(item, node)
        # Later references to the same location point at this splice site
        ctx.memo.remember(str(location), nav.as_fragment())
        return self._finish(merged, location)
