from __future__ import annotations

import logging
from typing import Protocol, Sequence

from playwright.sync_api import sync_playwright

logger = logging.getLogger(__name__)

PAGE_MARGIN = "10mm"


class PdfRenderer(Protocol):
    def render(self, html: str) -> bytes:
        raise NotImplementedError


class PlaywrightPdfRenderer(PdfRenderer):
    """Headless Chromium print-to-PDF.

    One browser per render; it is closed on every exit path.
    """

    def __init__(self, *, browser_args: Sequence[str] = ()):
        self._browser_args = list(browser_args)

    def render(self, html: str) -> bytes:
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True, args=self._browser_args)
            try:
                page = browser.new_page()
                page.set_content(html, wait_until="networkidle")
                return page.pdf(
                    format="A4",
                    print_background=True,
                    margin={"top": PAGE_MARGIN, "right": PAGE_MARGIN, "bottom": PAGE_MARGIN, "left": PAGE_MARGIN},
                )
            finally:
                browser.close()
