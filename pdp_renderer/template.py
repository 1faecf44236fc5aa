"""Adapt a published storefront page into a Handlebars base template."""

import re
from typing import Any, Awaitable, Callable, Iterable, Optional

import httpx
import structlog
from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from .exceptions import FetchFailure
from .models import TemplateContext

logger = structlog.get_logger(__name__, service="pdp_renderer")

DEFAULT_TIMEOUT = 10.0
PLAIN_HTML_SUFFIX = ".plain.html"

Fetcher = Callable[[str], Awaitable[str]]

# Serialize like a browser: void elements stay unclosed, non-ASCII is kept as-is.
_HTML_FORMATTER = HTMLFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
)

_WHITESPACE_RE = re.compile(r"\s+")


async def fetch_text(url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """
    Fetch a URL and return the response body as text.

    Args:
        url: URL to fetch
        timeout: Request timeout (seconds)

    Returns:
        Decoded response body

    Raises:
        httpx.HTTPError: Transport failure (connection error, timeout, ...)
        httpx.InvalidURL: The URL cannot be parsed
    """
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        response = await client.get(url)
        return response.text


def localize_url(url: str, context: Any) -> str:
    """
    Substitute the request locale into a template URL.

    The URL is only touched when the context carries a locale other than
    "default": whitespace is removed, one trailing slash is dropped and the
    "{locale}" token is replaced.
    """
    locale = TemplateContext.from_record(context).locale
    if not locale or locale == "default":
        return url

    url = _WHITESPACE_RE.sub("", url)
    if url.endswith("/"):
        url = url[:-1]
    return url.replace("{locale}", locale, 1)


def partial_reference(block: str) -> str:
    """Handlebars partial reference for a block class name."""
    return f"{{{{> {block} }}}}"


def replace_blocks(html: str, block_class_names: Iterable[str]) -> str:
    """
    Replace every element carrying one of the given classes by a partial reference.

    Args:
        html: HTML fragment
        block_class_names: Class names of the blocks to replace, in order

    Returns:
        Inner HTML of the fragment with blocks replaced, followed by a newline
    """
    soup = BeautifulSoup(f"<main>{html}</main>", "html.parser")
    root = soup.main

    for block in block_class_names:
        matches = root.find_all(class_=block)
        for element in matches:
            element.replace_with(partial_reference(block))
        logger.debug("block_replaced", block=block, count=len(matches))

    adapted = root.decode_contents(formatter=_HTML_FORMATTER)
    return adapted.replace("&gt;", ">") + "\n"


async def adapt_template(
    url: str,
    block_class_names: Iterable[str],
    context: Any = None,
    fetch: Optional[Fetcher] = None,
) -> str:
    """
    Return the base template for a product detail page.

    Loads the plain HTML rendition of a published page and replaces the
    given blocks with Handlebars partials, so the commerce data can be
    rendered into them later.

    Args:
        url: Page URL, may contain a "{locale}" token
        block_class_names: Class names of the blocks to replace with partials
        context: TemplateContext or mapping with an optional "locale"
        fetch: Async callable returning the body of a URL. Defaults to fetch_text.

    Returns:
        Adapted base template HTML

    Raises:
        FetchFailure: The page could not be fetched
    """
    fetch = fetch or fetch_text
    block_class_names = list(block_class_names)
    template_url = f"{localize_url(url, context)}{PLAIN_HTML_SUFFIX}"

    logger.info("template_fetch_started", url=template_url)
    try:
        html = await fetch(template_url)
    except FetchFailure:
        logger.error("template_fetch_failed", url=template_url)
        raise
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error("template_fetch_failed", url=template_url, error=str(e))
        raise FetchFailure(template_url, str(e)) from e

    adapted = replace_blocks(html, block_class_names)

    logger.info(
        "template_adapted",
        url=template_url,
        blocks=len(block_class_names),
        length=len(adapted),
    )
    return adapted
