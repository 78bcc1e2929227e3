"""Shared fixtures for release aggregation tests."""

from html import escape
from typing import Optional

import httpx
import pytest

GITHUB_REPO_URL = "https://github.com/secureedumailproject/secureedumail"

# 114 characters, so "GitHub [url]" after it no longer fits in 130 columns
SOURCE_LINE = (
    "The complete source code for this release, including build scripts "
    "and documentation, can be browsed and cloned on"
)


def release_html(
    release_id: Optional[int] = 12,
    version: Optional[str] = "1.2.0",
    github_url: Optional[str] = GITHUB_REPO_URL,
) -> str:
    """Build release description HTML the way the release pipeline writes it."""
    lines = []
    if release_id is not None:
        lines.append(f"ID: {release_id}")
    lines.append("Date: 2024-03-01")
    if version is not None:
        lines.append(f"Version: {version}")
    lines.extend([
        "Tag: v1_2_0",
        "Name: 'SecureEduMail Server'",
        "Type: 'stable'",
        "Download Link: 'https://downloads.example.com/secureedumail-1.2.0.zip'",
    ])
    html = "<p>" + "<br>\n".join(lines) + "</p>"
    if github_url:
        html += f'\n<p>{SOURCE_LINE} <a href="{github_url}">GitHub</a></p>'
    return html


def atom_feed(*contents: str, title: str = "Release notes from secureedumail") -> bytes:
    """Build an Atom feed document with one entry per HTML content."""
    entries = []
    for index, content in enumerate(contents):
        entries.append(
            "  <entry>\n"
            f"    <id>tag:github.com,2008:Repository/1/v{index}</id>\n"
            "    <updated>2024-03-01T10:00:00Z</updated>\n"
            f'    <link rel="alternate" type="text/html" href="{GITHUB_REPO_URL}/releases/tag/v{index}"/>\n'
            f"    <title>v{index}</title>\n"
            f'    <content type="html">{escape(content, quote=False)}</content>\n'
            "  </entry>\n"
        )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<feed xmlns="http://www.w3.org/2005/Atom" xml:lang="en-US">\n'
        f"  <id>tag:github.com,2008:{GITHUB_REPO_URL}/releases</id>\n"
        f'  <link type="text/html" rel="alternate" href="{GITHUB_REPO_URL}/releases"/>\n'
        f"  <title>{title}</title>\n"
        "  <updated>2024-03-01T10:00:00Z</updated>\n"
        + "".join(entries)
        + "</feed>\n"
    ).encode("utf-8")


def http_response(url: str, status_code: int = 200, content: bytes = b"") -> httpx.Response:
    """Build an httpx response bound to a GET request for url."""
    return httpx.Response(
        status_code,
        content=content,
        request=httpx.Request("GET", url),
    )


@pytest.fixture
def feed_urls():
    """Three feed URLs in a fixed order."""
    return [
        "https://feeds.example.com/one.atom",
        "https://feeds.example.com/two.atom",
        "https://feeds.example.com/three.atom",
    ]


@pytest.fixture
def make_release_html():
    """Factory for release description HTML."""
    return release_html


@pytest.fixture
def make_feed():
    """Factory for Atom feed documents."""
    return atom_feed


@pytest.fixture
def make_response():
    """Factory for httpx responses."""
    return http_response
