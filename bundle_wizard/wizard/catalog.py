"""
Flavor Catalog Accessor.

Read-only view over a flavor list that was fetched by the host. The wizard
never queries or mutates the catalog itself.
"""

from typing import Iterable

from .models import Flavor, FlavorCategory


class FlavorCatalog:
    """Flavor lookups by id and by category."""

    def __init__(self, flavors: Iterable[Flavor]):
        self._flavors: list[Flavor] = list(flavors)
        self._by_id: dict[str, Flavor] = {f.id: f for f in self._flavors}

    def __len__(self) -> int:
        return len(self._flavors)

    def get(self, flavor_id: str) -> Flavor | None:
        return self._by_id.get(flavor_id)

    def for_category(self, category: FlavorCategory) -> list[Flavor]:
        """
        Active flavors in a category, in catalog order.

        Unavailable flavors are included so they can be shown greyed out.
        """
        return [
            f for f in self._flavors
            if f.flavor_category == category and f.is_active
        ]

    def is_selectable(self, flavor_id: str, category: FlavorCategory) -> bool:
        """True if the flavor can be picked for a step of the given category."""
        flavor = self._by_id.get(flavor_id)
        if flavor is None:
            return False
        return flavor.is_active and flavor.is_available and flavor.flavor_category == category
