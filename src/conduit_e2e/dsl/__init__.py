"""Selector registry, lazy elements and the fluent page object base."""

from conduit_e2e.dsl.element import Element
from conduit_e2e.dsl.page import BasePage, data_cy
from conduit_e2e.dsl.selectors import (
    DEFAULT_TEST_ID_ATTRIBUTE,
    Selector,
    SelectorRegistry,
    data_cy_prefix_query,
    data_cy_query,
)
from conduit_e2e.dsl.storage import BrowserStorage

__all__ = [
    "DEFAULT_TEST_ID_ATTRIBUTE",
    "BasePage",
    "BrowserStorage",
    "Element",
    "Selector",
    "SelectorRegistry",
    "data_cy",
    "data_cy_prefix_query",
    "data_cy_query",
]
