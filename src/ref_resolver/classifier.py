"""Classification of reference objects into resolution strategies."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .json_navigation import is_component_pointer
from .loader import Location
from .reference_scanner import is_local_ref


class RefKind(Enum):
    """How a reference is handled."""

    LOCAL = "local"  # '#/...': left untouched
    MEMOIZED = "memoized"  # already resolved elsewhere; reuse the replacement
    ROOT = "root"  # points into the root document itself
    FULL_DOCUMENT = "full_document"  # no fragment: inline the whole document
    COMPONENT = "component"  # '/components/<section>/<name>'
    OTHER_FRAGMENT = "other_fragment"  # any other pointer


@dataclass(frozen=True)
class ClassifiedRef:
    """A reference together with the strategy chosen for it."""

    kind: RefKind
    ref: str
    location: Optional[Location] = None
    replacement: Optional[str] = None  # local fragment for MEMOIZED and ROOT


def classify(ref: str, base: str, memo: Dict[str, str], root_locator: str) -> ClassifiedRef:
    """
    Decide how a ``$ref`` value is resolved.

    Args:
        ref: The ``$ref`` string
        base: Absolute locator the reference is relative to
        memo: Canonical location string -> local replacement fragment
        root_locator: Locator of the root document

    Returns:
        ClassifiedRef; no I/O is performed

    Raises:
        InvalidReferenceError: if ref is not a valid location
    """
    if is_local_ref(ref):
        return ClassifiedRef(RefKind.LOCAL, ref)

    if ref in memo:
        return ClassifiedRef(RefKind.MEMOIZED, ref, replacement=memo[ref])

    location = Location.parse(ref, base)
    key = str(location)
    if key in memo:
        return ClassifiedRef(RefKind.MEMOIZED, ref, location, replacement=memo[key])

    if location.locator == root_locator:
        return ClassifiedRef(RefKind.ROOT, ref, location, replacement="#" + location.fragment)

    if not location.fragment:
        return ClassifiedRef(RefKind.FULL_DOCUMENT, ref, location)
    if is_component_pointer(location.fragment):
        return ClassifiedRef(RefKind.COMPONENT, ref, location)
    return ClassifiedRef(RefKind.OTHER_FRAGMENT, ref, location)
