import logging
from typing import Optional

from fake_useragent import UserAgent

logger = logging.getLogger(__name__)

FALLBACK_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36"
)


class UserAgentProvider:
    """
    Desktop user-agent strings shared by the browser context and the HTTP adapters.
    """

    _ua: Optional[UserAgent] = None
    _failed: bool = False

    @classmethod
    def initialize(cls):
        if cls._ua is not None or cls._failed:
            return
        try:
            cls._ua = UserAgent(
                browsers=["chrome", "firefox", "safari"],
                os=["windows", "macos"],
                fallback=FALLBACK_UA,
            )
        except Exception as e:
            cls._failed = True
            logger.warning(f"Failed to initialize fake_useragent, using fallback: {e}")

    @classmethod
    def get_random(cls) -> str:
        cls.initialize()
        if cls._ua:
            return cls._ua.random
        return FALLBACK_UA
