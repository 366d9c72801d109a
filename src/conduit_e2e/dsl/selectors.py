"""
Selector Registry

Maps symbolic element names to attribute queries using the test-id
convention (`[data-cy="<name>"]`), so page objects never carry raw CSS.

Usage:
    registry = SelectorRegistry.from_test_ids(["email-input", "login-button"])
    registry.query("email-input")  # '[data-cy="email-input"]'
    locator = registry.resolve("email-input", page.locator)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from conduit_e2e.core.exceptions import DuplicateSelectorError

if TYPE_CHECKING:
    from playwright.sync_api import Locator

DEFAULT_TEST_ID_ATTRIBUTE = "data-cy"

Lookup = Callable[[str], "Locator"]


def data_cy_query(test_id: str, attribute: str = DEFAULT_TEST_ID_ATTRIBUTE) -> str:
    """Build the attribute query for a test id."""
    return f'[{attribute}="{test_id}"]'


def data_cy_prefix_query(prefix: str, attribute: str = DEFAULT_TEST_ID_ATTRIBUTE) -> str:
    """Build the attribute query matching every test id starting with prefix."""
    return f'[{attribute}^="{prefix}"]'


@dataclass(frozen=True)
class Selector:
    """A symbolic element name and the query it resolves to."""

    name: str
    query: str


class SelectorRegistry(Mapping[str, Selector]):
    """Immutable name -> Selector mapping.

    Unknown names are not an error: they are treated as ad-hoc test ids
    (e.g. `tag-python`, `page-2`), which is how parameterised elements are
    addressed.
    """

    def __init__(
        self,
        selectors: Iterable[Selector] = (),
        attribute: str = DEFAULT_TEST_ID_ATTRIBUTE,
    ) -> None:
        entries: dict[str, Selector] = {}
        for selector in selectors:
            if selector.name in entries:
                raise DuplicateSelectorError(selector.name)
            entries[selector.name] = selector
        self._entries = MappingProxyType(entries)
        self.attribute = attribute

    @classmethod
    def from_test_ids(
        cls,
        test_ids: Iterable[str],
        attribute: str = DEFAULT_TEST_ID_ATTRIBUTE,
    ) -> SelectorRegistry:
        return cls(
            (Selector(test_id, data_cy_query(test_id, attribute)) for test_id in test_ids),
            attribute=attribute,
        )

    def __getitem__(self, name: str) -> Selector:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def ad_hoc(self, test_id: str) -> Selector:
        """Selector for a test id that is not declared up front."""
        return Selector(test_id, data_cy_query(test_id, self.attribute))

    def get_selector(self, name: str) -> Selector:
        selector = self._entries.get(name)
        return selector if selector is not None else self.ad_hoc(name)

    def query(self, name: str) -> str:
        return self.get_selector(name).query

    def resolve(self, name: str, lookup: Lookup) -> Locator:
        """Return a fresh, lazily evaluated locator for name."""
        return lookup(self.query(name))
