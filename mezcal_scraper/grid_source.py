from __future__ import annotations

import json
import logging
import os
from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, sync_playwright
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .config import (
    GRID_CATEGORY_LABEL,
    GRID_ITEM_SELECTOR,
    GRID_SOURCE_NAME,
    GRID_SOURCE_URL,
    GRID_USER_AGENT,
    GRID_VIEWPORT,
    ScrollSettings,
)
from .errors import SourceError
from .pipeline import extract_records, record_from_title
from .types import RawListing, StructuredRecord


logger = logging.getLogger(__name__)

_CLICK_BY_TEXT_JS = """
(label) => {
    const elements = Array.from(document.querySelectorAll('div, span, button'));
    const el = elements.find(e => e.innerText && e.innerText.trim() === label);
    if (el) {
        el.click();
        return true;
    }
    return false;
}
"""


def _text(el) -> str:
    return " ".join(el.get_text().split()) if el else ""


def open_category(
    page: Page,
    label: str = GRID_CATEGORY_LABEL,
    timeout_ms: int = 5000,
    source: str = GRID_SOURCE_NAME,
) -> None:
    try:
        button = page.wait_for_selector(f'div[aria-label="{label}"]', timeout=timeout_ms)
    except PlaywrightTimeoutError:
        button = None

    if button is not None:
        button.click()
        logger.info("%s: opened category %r", source, label)
        return

    logger.info("%s: no aria-label match for %r, searching by text", source, label)
    if page.evaluate(_CLICK_BY_TEXT_JS, label):
        logger.info("%s: opened category %r via text search", source, label)
        return
    raise SourceError(source, "Category button not found")


def scroll_to_end(page: Page, settings: ScrollSettings = ScrollSettings()) -> int:
    """
    Scroll to the bottom until the page height stops growing.

    Stops after settings.no_growth_limit consecutive unchanged heights, or after
    settings.max_iterations polls at most. Returns the number of scrolls made.
    """
    count_js = f"document.querySelectorAll({json.dumps(GRID_ITEM_SELECTOR)}).length"
    previous_height = 0
    no_growth = 0
    for iteration in range(settings.max_iterations):
        height = page.evaluate("document.body.scrollHeight")
        if height == previous_height:
            no_growth += 1
        else:
            no_growth = 0
            previous_height = height

        if no_growth >= settings.no_growth_limit:
            logger.info("Page height stable at %s, stopping after %d scrolls", height, iteration)
            return iteration

        page.evaluate("window.scrollTo(0, document.body.scrollHeight)")
        page.wait_for_timeout(settings.wait_ms)
        logger.debug("Scroll %d: %s items so far", iteration + 1, page.evaluate(count_js))

    logger.warning("Reached scroll limit of %d iterations", settings.max_iterations)
    return settings.max_iterations


def parse_grid_listings(html: str, base_url: str = GRID_SOURCE_URL) -> List[RawListing]:
    soup = BeautifulSoup(html, "lxml")
    listings: List[RawListing] = []
    for link in soup.select(GRID_ITEM_SELECTOR):
        price_el = next((s for s in link.find_all("span") if "$" in s.get_text()), None)
        image_el = link.find("img")
        image = image_el.get("src") if image_el else None
        listings.append(
            RawListing(
                title=_text(link.find("h3")),
                price=price_el.get_text().strip() if price_el else "",
                link=urljoin(base_url, link.get("href", "")),
                image=urljoin(base_url, image) if image else None,
            )
        )
    return listings


def _dump_page(page: Page, dump_dir: str) -> None:
    os.makedirs(dump_dir, exist_ok=True)
    screenshot_path = os.path.join(dump_dir, "grid_error.png")
    html_path = os.path.join(dump_dir, "grid_dump.html")
    try:
        page.screenshot(path=screenshot_path)
        with open(html_path, "w", encoding="utf-8") as fh:
            fh.write(page.content())
        logger.info("Saved %s and %s", screenshot_path, html_path)
    except (PlaywrightError, OSError) as exc:
        logger.warning("Could not save page dump: %s", exc)


def scrape_grid_source(
    url: str = GRID_SOURCE_URL,
    settings: ScrollSettings = ScrollSettings(),
    headless: bool = True,
    user_agent: Optional[str] = None,
    dump_dir: Optional[str] = None,
    source: str = GRID_SOURCE_NAME,
) -> List[StructuredRecord]:
    """Render the retailer's product grid in Chromium and return its mezcal records."""
    logger.info("%s: starting browser", source)
    with sync_playwright() as pw:
        browser = pw.chromium.launch(
            headless=headless,
            args=["--no-sandbox", "--disable-setuid-sandbox"],
        )
        try:
            page = browser.new_page(user_agent=user_agent or GRID_USER_AGENT, viewport=GRID_VIEWPORT)
            page.on("console", lambda msg: logger.debug("page console: %s", msg.text))
            try:
                page.goto(url, wait_until="networkidle", timeout=settings.navigation_timeout_ms)
                open_category(page, timeout_ms=settings.category_timeout_ms, source=source)
                page.wait_for_timeout(settings.initial_wait_ms)
                scroll_to_end(page, settings)
                html = page.content()
                base_url = page.url
            except (PlaywrightError, SourceError) as exc:
                if dump_dir:
                    _dump_page(page, dump_dir)
                if isinstance(exc, SourceError):
                    raise
                raise SourceError(source, str(exc)) from exc
        finally:
            try:
                browser.close()
            except PlaywrightError as exc:
                logger.warning("%s: could not close browser: %s", source, exc)

    listings = parse_grid_listings(html, base_url=base_url)
    logger.info("%s: scraped %d grid items", source, len(listings))
    return extract_records(listings, record_from_title, source)
