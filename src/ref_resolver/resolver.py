"""Fixpoint driver that resolves every external reference of an API document."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .classifier import RefKind, classify
from .components import ComponentRegistry
from .data_classes import ApiRefResolved, ResolverOptions
from .errors import ResourceError
from .inliners import ComponentInliner, FragmentInliner, FullDocumentInliner, InlineContext
from .json_navigation import JsonNavigation
from .loader import DocumentLoader, Location, to_root_location
from .memo import ReferenceMemo
from .provenance import is_settled, strip_markers, tag_root
from .reference_scanner import is_ref
from .rewriter import ReferenceRewriter

logger = logging.getLogger(__name__)


class ApiRefResolver:
    """
    Resolves multi-file API documents into one self-contained document.

    External ``{"$ref": "uri"}`` objects are replaced by what they reference,
    while referenced components are kept as named entries of the root's
    ``components`` section. One instance performs one run; all caches and
    bookkeeping live on the instance.
    """

    def __init__(
        self,
        uri: Union[str, Path, Location],
        document: Optional[Dict[str, Any]] = None,
        options: Optional[ResolverOptions] = None,
        loader: Optional[DocumentLoader] = None,
    ):
        """
        Args:
            uri: Path or URL of the root document; when ``document`` is given,
                the nominal location its relative references resolve against
            document: Already parsed root document (mutated by ``resolve``)
            options: Resolution options; defaults to ResolverOptions()
            loader: Document loader; a fresh one is created when omitted
        """
        self.location = uri if isinstance(uri, Location) else to_root_location(uri)
        self.document = document
        self.options = options or ResolverOptions()
        self.loader = loader or DocumentLoader(http_timeout=self.options.http_timeout)
        self.memo = ReferenceMemo()
        self.rewriter = ReferenceRewriter()
        self.passes = 0
        self._resolved_in_pass = 0
        self._log = logger.info if self.options.verbose else logger.debug

    def resolve(self) -> ApiRefResolved:
        """
        Inline external references until a full pass changes nothing.

        Returns:
            ApiRefResolved with the resolved document, the options used and
            any component name conflicts that were settled

        Raises:
            ApiRefResolverError: on any failure; the document may then be
                partially modified and must be discarded
        """
        if self.document is None:
            self.document = self.loader.load(self.location)
        else:
            self.loader.register(self.location.locator, self.document)
        if not isinstance(self.document, dict):
            raise ResourceError(self.location.locator, "the root document must be a mapping")

        registry = ComponentRegistry(self.document, self.options.conflict_strategy, self.location.locator)
        context = InlineContext(
            loader=self.loader,
            rewriter=self.rewriter,
            registry=registry,
            memo=self.memo,
            include_markers=self.options.include_markers,
        )
        self._inliners = {
            RefKind.FULL_DOCUMENT: FullDocumentInliner(context),
            RefKind.COMPONENT: ComponentInliner(context),
            RefKind.OTHER_FRAGMENT: FragmentInliner(context),
        }

        self._log(f"Resolving {self.location}")
        while True:
            self.passes += 1
            context.pass_number = self.passes
            self._resolved_in_pass = 0
            self.document = self._visit(self.document, JsonNavigation())
            registry.document = self.document
            self._log(f"Pass {self.passes}: resolved {self._resolved_in_pass} references")
            if self._resolved_in_pass == 0:
                break

        tag_root(self.document, self.location, self.options.include_markers)
        strip_markers(self.document)
        return ApiRefResolved(
            api=self.document,
            options=self.options,
            conflicts=list(registry.conflicts),
            passes=self.passes,
        )

    def _visit(self, node: Any, nav: JsonNavigation) -> Any:
        """Resolve a node, then its children; returns the node to keep at nav."""
        while is_ref(node) and not is_settled(node, self.passes):
            replacement = self._resolve_ref(node, nav)
            if replacement is None:
                break
            self._resolved_in_pass += 1
            node = replacement

        if is_settled(node, self.passes):
            return node
        if isinstance(node, dict):
            # Snapshot keys: resolving may add entries (e.g. to components)
            for key in list(node):
                if key in node:
                    node[key] = self._visit(node[key], nav.with_key(key))
        elif isinstance(node, list):
            for index, item in enumerate(node):
                node[index] = self._visit(item, nav.with_key(index))
        return node

    def _resolve_ref(self, node: Dict[str, Any], nav: JsonNavigation) -> Any:
        """Dispatch one reference object; None means it stays as is."""
        ref = node["$ref"]
        classified = classify(ref, self.location.locator, self.memo, self.location.locator)
        self._log(f"seen $ref {ref} at {nav.as_fragment()} ({classified.kind.value})")

        if classified.kind == RefKind.LOCAL:
            return None
        if classified.kind == RefKind.ROOT:
            self.memo.remember(str(classified.location), classified.replacement)
        if classified.kind in (RefKind.MEMOIZED, RefKind.ROOT):
            node["$ref"] = classified.replacement
            return node
        return self._inliners[classified.kind].inline(classified.location, node, nav)


def resolve(
    uri: Union[str, Path, Location],
    document: Optional[Dict[str, Any]] = None,
    options: Optional[ResolverOptions] = None,
) -> ApiRefResolved:
    """Resolve the API document at ``uri`` (or ``document`` nominally located there)."""
    return ApiRefResolver(uri, document=document, options=options).resolve()
