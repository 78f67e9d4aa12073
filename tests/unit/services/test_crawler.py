"""
Unit tests for SiteCrawler.

The crawler runs against FakeSession/FakePage so the whole flow (entry load,
frontier walk, navigation and style extraction, session release) is covered
without a browser.
"""

from __future__ import annotations

import pytest
from playwright.async_api import Error as PlaywrightError

from spacrawl.core.config import Settings
from spacrawl.core.errors import CrawlFailure, NavigationFailure
from spacrawl.services.crawler import SiteCrawler
from spacrawl.services.navigator import STRICT_WAIT
from tests.fixtures.dom_snapshots import LANDING_DOM
from tests.fixtures.fake_page import FakeDocument, FakePage, FakeSession

ENTRY_URL = "https://app.test"
PRICING = f"{ENTRY_URL}/pricing"
DOCS = f"{ENTRY_URL}/docs"
TEAM = f"{ENTRY_URL}/docs/team"


def _app_documents() -> dict[str, FakeDocument]:
    return {
        ENTRY_URL: FakeDocument(
            title="Home",
            dom=LANDING_DOM,
            visible_text="Welcome",
            hrefs=[
                f"{ENTRY_URL}/",
                PRICING,
                f"{PRICING}#plans",
                DOCS,
                PRICING,
                "https://elsewhere.test/blog",
            ],
            nav_links=[{"label": "Home", "href": "/"}],
        ),
        f"{ENTRY_URL}/": FakeDocument(title="Home (slash)"),
        PRICING: FakeDocument(title="Pricing", hrefs=[ENTRY_URL, DOCS]),
        DOCS: FakeDocument(
            title="Docs",
            hrefs=[TEAM, "https://elsewhere.test/docs"],
            nav_links=[
                {"label": " Guide ", "href": "/docs"},
                {"label": "API", "href": "/docs/api"},
            ],
            stylesheets=[
                {
                    "href": None,
                    "rules": [
                        {"selector": ":root", "cssText": ":root { --brand: red; }"},
                        {"selector": ".card", "cssText": ".card { padding: 4px; }"},
                        {"selector": "body", "cssText": "body { margin: 0px; }"},
                    ],
                }
            ],
        ),
        TEAM: FakeDocument(title="Team"),
    }


class _ScreenshotFailingPage(FakePage):
    async def screenshot(self, full_page: bool = False, type: str = "png") -> bytes:
        raise PlaywrightError("Target closed")


def _crawler(settings: Settings, session: FakeSession) -> SiteCrawler:
    return SiteCrawler(settings, session_factory=lambda _settings: session)


class TestCrawl:
    """End-to-end crawl flow."""

    @pytest.mark.asyncio
    async def test_visits_entry_then_discovered_routes_in_order(
        self, fast_settings: Settings
    ) -> None:
        page = FakePage(_app_documents())
        session = FakeSession(page)

        result = await _crawler(fast_settings, session).crawl(ENTRY_URL)

        assert result.base_url == ENTRY_URL
        assert [p.url for p in result.pages] == [
            ENTRY_URL,
            f"{ENTRY_URL}/",
            PRICING,
            DOCS,
        ]
        assert [p.title for p in result.pages] == [
            "Home",
            "Home (slash)",
            "Pricing",
            "Docs",
        ]
        assert result.pages[0].component_tree
        assert session.opened is True
        assert session.closed is True

    @pytest.mark.asyncio
    async def test_off_origin_link_is_never_visited(
        self, fast_settings: Settings
    ) -> None:
        documents = {
            ENTRY_URL: FakeDocument(
                title="Home",
                hrefs=[PRICING, DOCS, PRICING, "https://elsewhere.test/"],
            )
        }
        page = FakePage(documents)

        result = await _crawler(fast_settings, FakeSession(page)).crawl(ENTRY_URL)

        assert [p.url for p in result.pages] == [ENTRY_URL, PRICING, DOCS]
        assert all("elsewhere" not in url for url, _ in page.goto_calls)

    @pytest.mark.asyncio
    async def test_entry_page_is_loaded_once(self, fast_settings: Settings) -> None:
        page = FakePage(_app_documents())

        await _crawler(fast_settings, FakeSession(page)).crawl(ENTRY_URL)

        entry_loads = [call for call in page.goto_calls if call[0] == ENTRY_URL]
        assert entry_loads == [(ENTRY_URL, STRICT_WAIT)]

    @pytest.mark.asyncio
    async def test_navigation_and_styles_come_from_last_page(
        self, fast_settings: Settings
    ) -> None:
        page = FakePage(_app_documents())

        result = await _crawler(fast_settings, FakeSession(page)).crawl(ENTRY_URL)

        assert [(item.label, item.href) for item in result.navigation] == [
            ("Guide", "/docs"),
            ("API", "/docs/api"),
        ]
        assert result.global_styles == (
            ":root { --brand: red; }\nbody { margin: 0px; }"
        )

    @pytest.mark.asyncio
    async def test_routes_of_routes_are_not_followed_by_default(
        self, fast_settings: Settings
    ) -> None:
        page = FakePage(_app_documents())

        result = await _crawler(fast_settings, FakeSession(page)).crawl(ENTRY_URL)

        docs = result.pages[3]
        assert docs.discovered_routes == [TEAM]
        assert TEAM not in [p.url for p in result.pages]

    @pytest.mark.asyncio
    async def test_max_depth_follows_routes_breadth_first(
        self, fast_settings: Settings
    ) -> None:
        settings = fast_settings.model_copy(update={"max_depth": 1})
        page = FakePage(_app_documents())

        result = await _crawler(settings, FakeSession(page)).crawl(ENTRY_URL)

        assert [p.url for p in result.pages] == [
            ENTRY_URL,
            f"{ENTRY_URL}/",
            PRICING,
            DOCS,
            TEAM,
        ]
        assert [p.url for p in result.pages].count(ENTRY_URL) == 1

    @pytest.mark.asyncio
    async def test_app_with_no_links_yields_single_page(
        self, fast_settings: Settings
    ) -> None:
        page = FakePage({ENTRY_URL: FakeDocument(title="Lonely")})

        result = await _crawler(fast_settings, FakeSession(page)).crawl(ENTRY_URL)

        assert [p.url for p in result.pages] == [ENTRY_URL]
        assert result.navigation == []
        assert result.global_styles == ""

    @pytest.mark.asyncio
    async def test_progress_callback_reports_each_page(
        self, fast_settings: Settings
    ) -> None:
        page = FakePage(_app_documents())
        calls: list[tuple[str, int, int]] = []

        async def on_progress(url: str, visited: int, total: int) -> None:
            calls.append((url, visited, total))

        await _crawler(fast_settings, FakeSession(page)).crawl(
            ENTRY_URL, progress_callback=on_progress
        )

        assert calls == [
            (ENTRY_URL, 1, 4),
            (f"{ENTRY_URL}/", 2, 4),
            (PRICING, 3, 4),
            (DOCS, 4, 4),
        ]


class TestCrawlFailures:
    """Failure paths always release the session."""

    @pytest.mark.asyncio
    async def test_entry_navigation_failure_becomes_crawl_failure(
        self, fast_settings: Settings
    ) -> None:
        page = FakePage(
            {}, goto_errors={ENTRY_URL: [PlaywrightError("net::ERR_NAME_NOT_RESOLVED")]}
        )
        session = FakeSession(page)

        with pytest.raises(CrawlFailure) as exc_info:
            await _crawler(fast_settings, session).crawl(ENTRY_URL)

        assert exc_info.value.url == ENTRY_URL
        assert "Could not load entry page" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, NavigationFailure)
        assert session.closed is True

    @pytest.mark.asyncio
    async def test_session_open_failure_becomes_crawl_failure(
        self, fast_settings: Settings
    ) -> None:
        session = FakeSession(FakePage({}), open_error=OSError("no browser"))

        with pytest.raises(CrawlFailure, match="Could not start browser session"):
            await _crawler(fast_settings, session).crawl(ENTRY_URL)

    @pytest.mark.asyncio
    async def test_route_navigation_failure_propagates(
        self, fast_settings: Settings
    ) -> None:
        page = FakePage(
            _app_documents(),
            goto_errors={PRICING: [PlaywrightError("net::ERR_CONNECTION_RESET")]},
        )
        session = FakeSession(page)

        with pytest.raises(NavigationFailure) as exc_info:
            await _crawler(fast_settings, session).crawl(ENTRY_URL)

        assert exc_info.value.url == PRICING
        assert session.closed is True

    @pytest.mark.asyncio
    async def test_extraction_error_releases_session(
        self, fast_settings: Settings
    ) -> None:
        page = _ScreenshotFailingPage(_app_documents())
        session = FakeSession(page)

        with pytest.raises(PlaywrightError, match="Target closed"):
            await _crawler(fast_settings, session).crawl(ENTRY_URL)

        assert session.closed is True


class TestDiscover:
    """Route discovery without a full crawl."""

    @pytest.mark.asyncio
    async def test_discover_returns_entry_routes(
        self, fast_settings: Settings
    ) -> None:
        session = FakeSession(FakePage(_app_documents()))

        routes = await _crawler(fast_settings, session).discover(ENTRY_URL)

        assert routes == [f"{ENTRY_URL}/", PRICING, DOCS]
        assert session.closed is True

    @pytest.mark.asyncio
    async def test_discover_strict_origin_rejects_lookalike_hosts(
        self, fast_settings: Settings
    ) -> None:
        documents = {
            ENTRY_URL: FakeDocument(
                hrefs=[PRICING, "https://app.test.evil.example/login"]
            )
        }
        lenient = await _crawler(
            fast_settings, FakeSession(FakePage(documents))
        ).discover(ENTRY_URL)
        strict_settings = fast_settings.model_copy(update={"strict_origin": True})
        strict = await _crawler(
            strict_settings, FakeSession(FakePage(documents))
        ).discover(ENTRY_URL)

        assert lenient == [PRICING, "https://app.test.evil.example/login"]
        assert strict == [PRICING]
