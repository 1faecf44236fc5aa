"""Pick a plain-text product description for page metadata."""

import re
from typing import Any, Callable, Dict, Optional, Sequence

from bs4 import BeautifulSoup

from .models import Product

DEFAULT_DESCRIPTION_PRIORITY = ("metaDescription", "shortDescription", "description")

LINE_BREAK_RE = re.compile(r"\s*[\r\n]+\s*")

_ACCESSORS: Dict[str, Callable[[Product], Optional[str]]] = {
    "metaDescription": lambda p: p.meta_description,
    "meta_description": lambda p: p.meta_description,
    "shortDescription": lambda p: p.short_description,
    "short_description": lambda p: p.short_description,
    "description": lambda p: p.description,
}


def strip_tags(text: str) -> str:
    """Remove markup tags, keeping their text content."""
    return BeautifulSoup(text, "html.parser").get_text()


def clean_description(text: Optional[str]) -> str:
    """
    Normalize a description candidate to a single line of plain text.

    Args:
        text: Raw field value, possibly containing markup and line breaks

    Returns:
        Trimmed text without tags; line breaks collapsed to single spaces
    """
    if not text:
        return ""

    text = strip_tags(text.strip())
    text = LINE_BREAK_RE.sub(" ", text)
    return text.strip()


def select_description(
    product: Any,
    priority: Sequence[str] = DEFAULT_DESCRIPTION_PRIORITY,
) -> str:
    """
    Return the first non-empty description field of a product.

    Args:
        product: Product record (mapping or Product)
        priority: Field names to try, in order

    Returns:
        Cleaned description, or "" when every candidate is empty
    """
    record = Product.from_record(product)

    for field in priority:
        accessor = _ACCESSORS.get(field)
        if accessor is None:
            continue
        candidate = clean_description(accessor(record))
        if candidate:
            return candidate

    return ""
