"""Page object for a YouTube watch page."""
from __future__ import annotations

from playwright.sync_api import Page

from config import BrowserConfig
from pages.base_page import BasePage


class YouTubeVideoPage(BasePage):
    """Checks on an opened video and its share dialog."""

    def __init__(self, page: Page, config: BrowserConfig | None = None):
        super().__init__(page, config)
        self.share_button = page.locator('//ancestor::div[@id="above-the-fold"]//button[@aria-label="Share"]')
        self.share_dialog = page.locator('//div[@id="scrollable"]')
        self.copy_button = self.share_dialog.locator('//button[@aria-label="Copy"]')
        self.toast_container = page.locator("#toast>div>#text")
        self.video_title = page.locator('//div[@id="title"]//h1/yt-formatted-string')
        self.play_pause_button = page.locator("button.ytp-play-button")

    def verify_video_page_loaded(self, expected_title: str) -> None:
        actual_title = ""
        try:
            self.play_pause_button.wait_for(state="attached", timeout=self.config.navigation_timeout_ms)
            self.play_pause_button.click()
            # gives the player a moment to start before reading the title
            self.page.locator("#subscribe-button-shape").wait_for(state="attached", timeout=2000)
            actual_title = self.video_title.inner_text()
            self._expect_equal(actual_title, expected_title)
            self._passed(f'Video with title "{expected_title}" confirmed visible.')
        except Exception:
            self._failed(f'Video Title Expected: "{expected_title}" and Received: "{actual_title}"')
            raise

    def verify_video_url(self, expected_url: str) -> None:
        video_url = self.page.url
        try:
            self._expect_equal(video_url, expected_url)
            self._passed(f'URL verified as "{expected_url}".')
        except AssertionError:
            self._failed(f'Video Url Expected: "{expected_url}" and Received: "{video_url}"')
            raise

    def open_share_dialog(self) -> None:
        try:
            self.share_button.click()
            self.share_dialog.wait_for(state="visible", timeout=self.config.navigation_timeout_ms)
            self._passed("Share Dialog opened successfully.")
        except Exception:
            self._failed("Share Dialog opening")
            raise

    def copy_link_and_verify_clipboard_message(self, expected_message: str) -> None:
        actual_message = ""
        try:
            self.copy_button.click()
            self.toast_container.wait_for(state="visible", timeout=self.config.action_timeout_ms)
            actual_message = self.toast_container.inner_text()
            self._expect_equal(actual_message, expected_message)
            self._passed(f'Link copied and "{actual_message}" message verified.')
        except Exception:
            self._failed(
                f'toast message Expected: "{expected_message}" and Received: "{actual_message}"'
            )
            raise
