"""Resolver that merges multi-file OpenAPI/AsyncAPI documents joined by $ref links."""

from .classifier import ClassifiedRef, RefKind, classify
from .components import ComponentConflict, ComponentRegistry, ConflictStrategy
from .data_classes import ApiRefResolved, ResolverOptions
from .errors import ApiRefResolverError, ComponentConflictError, InvalidReferenceError, ResourceError
from .json_navigation import JsonNavigation
from .loader import DocumentLoader, Location, to_root_location
from .parser import DocumentParser, ParseResult
from .reference_scanner import ReferenceScanner
from .resolver import ApiRefResolver, resolve
from .rewriter import ReferenceRewriter
from .serializer import dump_document, write_document

__all__ = [
    "ApiRefResolver",
    "ApiRefResolved",
    "ApiRefResolverError",
    "ClassifiedRef",
    "ComponentConflict",
    "ComponentConflictError",
    "ComponentRegistry",
    "ConflictStrategy",
    "DocumentLoader",
    "DocumentParser",
    "InvalidReferenceError",
    "JsonNavigation",
    "Location",
    "ParseResult",
    "RefKind",
    "ReferenceRewriter",
    "ReferenceScanner",
    "ResolverOptions",
    "ResourceError",
    "classify",
    "dump_document",
    "resolve",
    "to_root_location",
    "write_document",
]
