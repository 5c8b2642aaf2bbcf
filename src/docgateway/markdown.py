"""Assemble the intermediate markup document for a PDF export."""

from __future__ import annotations

import html
import logging
from datetime import date
from typing import Awaitable, Callable, Iterable

from docgateway.exceptions import DocumentFetchError
from docgateway.schemas import ChapterNode, Project

logger = logging.getLogger(__name__)

DocumentFetch = Callable[[str], Awaitable[bytes]]

PAGE_BREAK = '<p style="page-break-after:always;"></p>'


class MarkdownDocument:
    """Append-only text accumulator owned by a single export call."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, text: str) -> MarkdownDocument:
        self._parts.append(text)
        return self

    def append_line(self, text: str = "") -> MarkdownDocument:
        self._parts.append(text + "\n")
        return self

    @property
    def text(self) -> str:
        return "".join(self._parts)


def storage_key_for(url: str) -> str:
    """Turn a chapter url into a document store key ("a/b/c" -> "a:b:c")."""
    return url.replace("/", ":")


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def page_break() -> str:
    """Return the explicit page break marker placed between sections."""
    return PAGE_BREAK + "\n"


def build_title_page(project: Project, branch_name: str, *, today: date | None = None) -> str:
    """Render the title page block.

    Branch, project name and description are HTML-escaped; they are treated
    as plain text rather than markup.

    Args:
        project: Project whose name and description appear on the page.
        branch_name: Branch label shown as the version.
        today: Date to print. Defaults to the current local date.
    """
    date_string = (today or date.today()).strftime("%d %B %Y")
    version = (
        '<div style="text-align: right;">'
        f"<div>version: {html.escape(branch_name)}</div>"
        f"<div>date: {date_string}</div>"
        "</div>"
    )
    title = (
        '<div style="margin-top: 200px">'
        f"<center><h1>{html.escape(project.name)}</h1></center>"
        "</div>"
    )
    description = (
        '<div><div style="text-align: center; width: 240px;margin-top: 50px; '
        'margin-left: auto; margin-right: auto;">'
        f"{html.escape(project.description)}"
        "</div></div>"
    )
    return f"{version}\n{title}\n{description}\n"


def build_table_of_contents(chapters: Iterable[ChapterNode]) -> str:
    """Render the chapter tree as nested HTML lists.

    Every node produces exactly one ``<li>``, in original sibling order. Blank
    titles are omitted and childless untitled nodes stay as empty items.
    """
    document = MarkdownDocument()
    _append_table_of_contents(chapters, document)
    return document.text


def _append_table_of_contents(chapters: Iterable[ChapterNode], document: MarkdownDocument) -> None:
    document.append_line("<ul>")
    for chapter in chapters:
        document.append("<li>")
        if not is_blank(chapter.title):
            document.append(f"<span>{html.escape(chapter.title)}</span>")
        if chapter.children:
            _append_table_of_contents(chapter.children, document)
        document.append("</li>")
    document.append_line("</ul>")


async def build_body(
    project_id: str,
    branch_name: str,
    chapters: Iterable[ChapterNode],
    fetch_document: DocumentFetch,
) -> str:
    """Fetch and concatenate every referenced document in pre-order.

    Fetches are awaited one at a time, so a node's own document always
    precedes its descendants' documents.

    Args:
        project_id: Project the documents belong to (used for logging).
        branch_name: Branch the documents belong to (used for logging).
        chapters: Top-level chapters of the tree.
        fetch_document: Coroutine returning the raw bytes stored under a key.

    Raises:
        DocumentFetchError: If a document is not valid UTF-8. Errors raised by
            ``fetch_document`` propagate unchanged.
    """
    document = MarkdownDocument()
    await append_body(project_id, branch_name, chapters, fetch_document, document)
    return document.text


async def append_body(
    project_id: str,
    branch_name: str,
    chapters: Iterable[ChapterNode],
    fetch_document: DocumentFetch,
    document: MarkdownDocument,
) -> None:
    for chapter in chapters:
        if not is_blank(chapter.url):
            key = storage_key_for(chapter.url)
            logger.debug("Fetching document %s for %s/%s", key, project_id, branch_name)
            content = await fetch_document(key)
            try:
                text = content.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise DocumentFetchError(key, f"content is not valid UTF-8 ({exc})") from exc
            document.append(text)
            document.append_line().append_line()

        if chapter.children:
            await append_body(project_id, branch_name, chapter.children, fetch_document, document)
