from __future__ import annotations

from dataclasses import dataclass


TABLE_SOURCE_URL = "https://www.theaustinwinemerchant.com/spirits.html"
TABLE_SOURCE_NAME = "Austin Wine Merchant"
TABLE_SECTION = "Mezcal"

GRID_SOURCE_URL = "https://abliquor2.com/order/ab-liquor-2-1809-w-anderson-ln-unit-1"
GRID_SOURCE_NAME = "AB Liquor"
GRID_CATEGORY_LABEL = "Tequila Mezcal & Sotol"
GRID_ITEM_SELECTOR = 'a[href*="/item-"]'

GRID_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
)
GRID_VIEWPORT = {"width": 1280, "height": 800}


@dataclass(frozen=True)
class ScrollSettings:
    """Timing assumptions for the infinite-scroll grid.

    max_iterations bounds the total wall-clock cost of a slow page;
    no_growth_limit is how many consecutive polls with an unchanged page
    height count as "everything has loaded".
    """

    max_iterations: int = 30
    no_growth_limit: int = 3
    wait_ms: int = 1500
    initial_wait_ms: int = 2000
    category_timeout_ms: int = 5000
    navigation_timeout_ms: int = 60000
