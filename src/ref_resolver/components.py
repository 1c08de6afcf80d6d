"""The root document's components section and component name conflicts."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .errors import ComponentConflictError
from .json_navigation import compile_pointer
from .loader import Location
from .provenance import RESOLVED_FROM, sibling_keys
from .reference_scanner import is_ref

logger = logging.getLogger(__name__)


class ConflictStrategy(str, Enum):
    """What to do when two sources define the same component name."""

    ERROR = "error"
    RENAME = "rename"
    IGNORE = "ignore"


@dataclass
class ComponentConflict:
    """A component name collision and how it was settled."""

    pointer: str
    existing_source: Optional[str]
    new_source: str
    action: str  # "renamed" or "ignored"
    final_name: str


@dataclass
class Placement:
    """Where a component ended up in the registry."""

    name: str
    inserted: bool


class ComponentRegistry:
    """View of ``components/<section>/<name>`` in the root document."""

    def __init__(
        self,
        document: Dict[str, Any],
        strategy: ConflictStrategy = ConflictStrategy.RENAME,
        root_locator: Optional[str] = None,
    ):
        self.document = document
        self.strategy = ConflictStrategy(strategy)
        self.root_locator = root_locator  # base for forwarding $refs already in the root
        self.conflicts: List[ComponentConflict] = []
        self._sources: Dict[Tuple[str, str], str] = {}

    def section(self, section: str, create: bool = False) -> Optional[Dict[str, Any]]:
        components = self.document.get("components")
        if components is None and create:
            components = self.document["components"] = {}
        if not isinstance(components, dict):
            return None
        entries = components.get(section)
        if entries is None and create:
            entries = components[section] = {}
        return entries if isinstance(entries, dict) else None

    def has(self, section: str, name: str) -> bool:
        entries = self.section(section)
        return entries is not None and name in entries

    def get(self, section: str, name: str) -> Any:
        entries = self.section(section)
        return entries.get(name) if entries is not None else None

    def set(self, section: str, name: str, item: Any, source: str) -> None:
        self.section(section, create=True)[name] = item
        self.record_source(section, name, source)

    def record_source(self, section: str, name: str, source: str) -> None:
        self._sources[(section, name)] = source

    def source_of(self, section: str, name: str) -> Optional[str]:
        """Source location of a component, if it was inlined from elsewhere."""
        if (section, name) in self._sources:
            return self._sources[(section, name)]
        existing = self.get(section, name)
        if isinstance(existing, dict) and isinstance(existing.get(RESOLVED_FROM), str):
            return existing[RESOLVED_FROM]
        return None

    def place(self, section: str, name: str, item: Any, source: str) -> Placement:
        """
        Add a component, settling a name collision with the configured strategy.

        Args:
            section: Components section, e.g. "schemas"
            name: Preferred component name
            item: Component content (already copied)
            source: Canonical location the component came from

        Returns:
            Placement with the final name and whether item was inserted

        Raises:
            ComponentConflictError: on a collision with the ``error`` strategy
        """
        if not self.has(section, name):
            self.set(section, name, item, source)
            return Placement(name, inserted=True)

        existing_source = self.source_of(section, name)
        if existing_source == source:
            return Placement(name, inserted=False)
        if self.forwards_to(section, name, source):
            # Slot not visited yet; it still holds its own $ref to this component
            self.set(section, name, item, source)
            return Placement(name, inserted=True)

        pointer = compile_pointer(["components", section, name])
        if self.strategy == ConflictStrategy.ERROR:
            raise ComponentConflictError(pointer, existing_source or "the root document", source)

        if self.strategy == ConflictStrategy.IGNORE:
            logger.warning(f"Keeping existing {pointer}; ignoring the one from {source}")
            self.conflicts.append(ComponentConflict(pointer, existing_source, source, "ignored", name))
            return Placement(name, inserted=False)

        final_name = self.unique_name(section, name)
        logger.warning(f"Renamed {pointer} from {source} to '{final_name}'")
        self.conflicts.append(ComponentConflict(pointer, existing_source, source, "renamed", final_name))
        self.set(section, final_name, item, source)
        return Placement(final_name, inserted=True)

    def forwards_to(self, section: str, name: str, source: str) -> bool:
        """True if the slot is a bare '$ref' to source, relative to the root document."""
        existing = self.get(section, name)
        if self.root_locator is None or not is_ref(existing) or sibling_keys(existing):
            return False
        return str(Location.parse(existing["$ref"], self.root_locator)) == source

    def unique_name(self, section: str, name: str) -> str:
        """First of ``name1``, ``name2``, ... not yet used in the section."""
        entries = self.section(section) or {}
        suffix = 1
        while f"{name}{suffix}" in entries:
            suffix += 1
        return f"{name}{suffix}"
