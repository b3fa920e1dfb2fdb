"""
Paid Upgrade Definitions.

An upgrade step lets the customer swap an included bundle item for a better
one at a fixed price (e.g. Plain Rice -> Java Rice). Each definition names the
included item it targets by keyword and lists its options; the first option
is the free default the step starts on.
"""

from dataclasses import dataclass

from ..config import JAVA_RICE_UPGRADE_PRICE
from .models import BundleComponent, RiceUpgradeChoice


@dataclass(frozen=True)
class UpgradeOption:
    key: str
    label: str  # display name of the included item when this option is chosen
    price: float = 0.0


@dataclass(frozen=True)
class UpgradeDefinition:
    key: str
    target_keyword: str  # case-insensitive substring of the included product name
    title: str
    options: tuple[UpgradeOption, ...]

    @property
    def default_choice(self) -> str:
        return self.options[0].key

    def get_option(self, choice: str) -> UpgradeOption | None:
        for option in self.options:
            if option.key == choice:
                return option
        return None

    def matches(self, component: BundleComponent) -> bool:
        return (
            not component.has_flavor_selection
            and self.target_keyword in component.product_name.lower()
        )


RICE_UPGRADE = UpgradeDefinition(
    key="rice",
    target_keyword="plain rice",
    title="Upgrade to Java Rice?",
    options=(
        UpgradeOption(RiceUpgradeChoice.PLAIN.value, "Plain Rice", 0.0),
        UpgradeOption(RiceUpgradeChoice.JAVA.value, "Java Rice", JAVA_RICE_UPGRADE_PRICE),
    ),
)

DEFAULT_UPGRADES: tuple[UpgradeDefinition, ...] = (RICE_UPGRADE,)
