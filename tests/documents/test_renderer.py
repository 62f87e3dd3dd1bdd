from __future__ import annotations

from contextlib import contextmanager

import pytest

from porter_payroll.documents.renderer import PlaywrightPdfRenderer


class FakePage:
    def __init__(self, fail_on: str | None):
        self._fail_on = fail_on
        self.content = None
        self.pdf_kwargs = None

    def set_content(self, html, **kwargs):
        if self._fail_on == "set_content":
            raise RuntimeError("navigation failed")
        self.content = html

    def pdf(self, **kwargs):
        if self._fail_on == "pdf":
            raise RuntimeError("print failed")
        self.pdf_kwargs = kwargs
        return b"%PDF-1.4 rendered"


class FakeBrowser:
    def __init__(self, page: FakePage):
        self.page = page
        self.closed = 0

    def new_page(self):
        return self.page

    def close(self):
        self.closed += 1


class FakeChromium:
    def __init__(self, browser: FakeBrowser):
        self.browser = browser
        self.launch_kwargs = None

    def launch(self, **kwargs):
        self.launch_kwargs = kwargs
        return self.browser


@pytest.fixture
def chromium(monkeypatch):
    def _install(fail_on: str | None = None) -> FakeChromium:
        fake = FakeChromium(FakeBrowser(FakePage(fail_on)))

        @contextmanager
        def fake_sync_playwright():
            yield type("Playwright", (), {"chromium": fake})()

        monkeypatch.setattr("porter_payroll.documents.renderer.sync_playwright", fake_sync_playwright)
        return fake

    return _install


def test_render_prints_a4_with_margins(chromium):
    fake = chromium()

    content = PlaywrightPdfRenderer(browser_args=["--no-sandbox"]).render("<p>hi</p>")

    assert content == b"%PDF-1.4 rendered"
    assert fake.launch_kwargs == {"headless": True, "args": ["--no-sandbox"]}
    page = fake.browser.page
    assert page.content == "<p>hi</p>"
    assert page.pdf_kwargs == {
        "format": "A4",
        "print_background": True,
        "margin": {"top": "10mm", "right": "10mm", "bottom": "10mm", "left": "10mm"},
    }
    assert fake.browser.closed == 1


@pytest.mark.parametrize("fail_on", ["set_content", "pdf"])
def test_browser_closed_when_render_fails(chromium, fail_on):
    fake = chromium(fail_on)

    with pytest.raises(RuntimeError):
        PlaywrightPdfRenderer().render("<p>hi</p>")

    assert fake.browser.closed == 1
