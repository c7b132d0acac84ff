"""Page object for the YouTube home/search results page."""
from __future__ import annotations

from playwright.sync_api import Page, TimeoutError as PlaywrightTimeout, expect

from config import BrowserConfig
from exceptions import NavigationError
from pages.base_page import BasePage

FIRST_RESULT_XPATH = '//ytd-video-renderer[contains(@class,"ytd-item-section-renderer")][1]'


class YouTubeSearchPage(BasePage):
    """Search for a video and check the first result."""

    def __init__(self, page: Page, config: BrowserConfig | None = None):
        super().__init__(page, config)
        self.search_input = page.get_by_placeholder("Search")
        self.search_button = page.get_by_title("Search")
        self.initial_load_check = page.get_by_label("Try searching to get started")
        self.first_video_result = page.locator(FIRST_RESULT_XPATH).first

    def navigate_and_verify_load(self, url: str | None = None) -> None:
        url = url or self.config.base_url
        timeout = self.config.navigation_timeout_ms
        try:
            self.page.goto(url, wait_until="domcontentloaded", timeout=timeout)
            expect(self.initial_load_check).to_be_visible()
            self._passed(f'Navigation to "{url}" Completed Successfully.')
        except PlaywrightTimeout as e:
            self._failed(f'Navigating to URL - "{url}"')
            raise NavigationError(f"Navigation timed out: {url}", url=url, timeout=timeout) from e
        except Exception:
            self._failed(f'Navigating to URL - "{url}"')
            raise

    def search_for_video(self, title: str) -> None:
        timeout = self.config.action_timeout_ms
        try:
            self.search_input.fill(title)
            self.search_button.click()
            self.page.wait_for_load_state("networkidle", timeout=timeout)
            self.first_video_result.wait_for(state="attached", timeout=timeout)
            self._passed(f'Video with Title : "{title}" Searched Successfully.')
        except Exception:
            self._failed(f'Searching Video with Title: "{title}"')
            raise

    def check_first_video_title(self, expected_title: str) -> None:
        actual_title = ""
        try:
            actual_title = self.first_video_result.locator('//a[@id="video-title"]').get_attribute("title")
            self._expect_equal(actual_title, expected_title)
            self._passed(f'Video with title :"{expected_title}" visible')
        except Exception:
            self._failed(f'Video title Expected : "{expected_title}" and Received: "{actual_title}"')
            raise

    def check_first_video_duration(self, expected_duration: str) -> None:
        actual_duration = ""
        try:
            actual_duration = self.first_video_result.locator(
                '//div[@id="overlays"]//div[@class="yt-badge-shape__text"]'
            ).inner_text()
            self._expect_equal(actual_duration, expected_duration)
            self._passed(f'Video with duration "{expected_duration}" visible')
        except Exception:
            self._failed(
                f'Video Duration Expected : "{expected_duration}" and Received: "{actual_duration}"'
            )
            raise

    def check_first_video_thumbnail_url(self, expected_url: str) -> None:
        actual_url = ""
        try:
            actual_url = self.first_video_result.locator('//a[@id="thumbnail"]//img').get_attribute("src")
            self._expect_equal(actual_url, expected_url)
            self._passed(f'Video with Thumbnail Url "{expected_url}" visible')
        except Exception:
            self._failed(f'Video Thumbnail Url Expected : "{expected_url}" and Received: "{actual_url}"')
            raise

    def click_video_title(self, title: str) -> None:
        try:
            self.first_video_result.locator('//a[@id="thumbnail"]//img').click()
            self.page.wait_for_load_state("domcontentloaded", timeout=self.config.navigation_timeout_ms)
            self._passed(f'Video with Title: "{title}" opened successfully.')
        except Exception:
            self._failed(f'opening Video with title "{title}"')
            raise
