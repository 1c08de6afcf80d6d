"""Record of references already resolved during a run."""

from typing import Dict, Optional

from .errors import InvalidReferenceError


class ReferenceMemo:
    """
    Maps a canonical external location to the local fragment that replaced it.

    A location is resolved once; every later occurrence is rewritten from
    here. Recording the entry before the inlined content is explored is what
    makes cyclic references terminate.
    """

    def __init__(self):
        self._replacements: Dict[str, str] = {}

    def __contains__(self, ref: str) -> bool:
        return ref in self._replacements

    def __getitem__(self, ref: str) -> str:
        return self._replacements[ref]

    def __len__(self) -> int:
        return len(self._replacements)

    def get(self, ref: str) -> Optional[str]:
        return self._replacements.get(ref)

    def remember(self, ref: str, replacement: str) -> None:
        if ref in self._replacements:
            raise InvalidReferenceError(
                f"Reference {ref} already has a replacement, {self._replacements[ref]}"
            )
        self._replacements[ref] = replacement
