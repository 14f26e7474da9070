"""Connection hijacker adapters."""

from scrapegate.adapters.hijacker.fake import FakeConnectionHijacker, FakeTransport
from scrapegate.adapters.hijacker.transport import AiohttpConnectionHijacker

__all__ = ["AiohttpConnectionHijacker", "FakeConnectionHijacker", "FakeTransport"]
