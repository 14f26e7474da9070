"""Landing page served at ``/`` when metrics live elsewhere."""

from dataclasses import dataclass, field
from html import escape

from aiohttp import web


@dataclass(frozen=True)
class LandingLink:
    address: str
    text: str


@dataclass(frozen=True)
class LandingConfig:
    name: str
    description: str
    version: str
    links: list[LandingLink] = field(default_factory=list)


class LandingPage:
    """Static HTML page linking to the exporter's endpoints."""

    def __init__(self, config: LandingConfig) -> None:
        links = "\n".join(
            f'<li><a href="{escape(link.address)}">{escape(link.text)}</a></li>'
            for link in config.links
        )
        self._body = (
            "<!DOCTYPE html>\n"
            f"<html><head><title>{escape(config.name)}</title></head>\n"
            f"<body><h1>{escape(config.name)}</h1>\n"
            f"<p>{escape(config.description)}</p>\n"
            f"<p>Version: {escape(config.version)}</p>\n"
            f"<ul>\n{links}\n</ul>\n"
            "</body></html>\n"
        )

    async def handle(self, request: web.Request) -> web.Response:
        return web.Response(text=self._body, content_type="text/html")
