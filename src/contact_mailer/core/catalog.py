"""
Service catalog.

Fixed mapping from the short service codes posted by the contact form
to the labels shown in emails.
"""

from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Tuple


DEFAULT_SERVICES: Mapping[str, str] = MappingProxyType({
    "bathroom": "Bathrooms",
    "kitchen": "Kitchens",
    "basement": "Basements",
    "deck": "Decks",
    "extensions": "Extensions",
    "carpentry": "Custom Carpentry",
})


class ServiceCatalog(Mapping[str, str]):
    """
    Read-only catalog of remodeling services.

    Unknown or non-string codes never raise; callers decide what a
    missing entry means.
    """

    def __init__(self, services: Optional[Mapping[str, str]] = None) -> None:
        if services is None:
            services = DEFAULT_SERVICES
        self._services = MappingProxyType(dict(services))

    def __getitem__(self, code: str) -> str:
        return self._services[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._services)

    def __len__(self) -> int:
        return len(self._services)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code in self._services

    def label_for(self, code: Any) -> Optional[str]:
        """Return the display label for a code, or None if unknown."""
        if not isinstance(code, str):
            return None
        return self._services.get(code)

    def is_valid_code(self, code: Any) -> bool:
        """Check whether a code is a declared service key."""
        return code in self

    def codes(self) -> Tuple[str, ...]:
        """Service codes in declaration order."""
        return tuple(self._services)


default_catalog = ServiceCatalog()
