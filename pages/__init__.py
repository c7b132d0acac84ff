"""Page objects for the YouTube E2E suite."""
from pages.screenshot import capture_step
from pages.youtube_search_page import YouTubeSearchPage
from pages.youtube_video_page import YouTubeVideoPage

__all__ = [
    "YouTubeSearchPage",
    "YouTubeVideoPage",
    "capture_step",
]
