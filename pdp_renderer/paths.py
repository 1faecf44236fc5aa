"""Route parameter extraction for storefront URL paths."""

from typing import Dict, Optional

import structlog

from .exceptions import FormatMismatch

logger = structlog.get_logger(__name__, service="pdp_renderer")


def match_path(path: Optional[str], format: str) -> Dict[str, str]:
    """
    Extract placeholder values from a path according to a route format.

    The format is made of "/"-separated literal segments and "{name}"
    placeholders, e.g. "/{locale}/products/{urlKey}/{sku}". Empty segments
    are ignored on both sides, so leading, trailing and repeated slashes
    do not matter.

    Args:
        path: Request path, e.g. "/en/products/shoe/123"
        format: Route format the path is expected to follow

    Returns:
        Mapping of placeholder name to path segment, in format order.
        Empty when path is empty or None.

    Raises:
        FormatMismatch: Segment counts differ or a literal segment does not match
    """
    if not path:
        return {}

    format_parts = [part for part in format.split("/") if part]
    path_parts = [part for part in path.split("/") if part]

    if len(format_parts) != len(path_parts):
        logger.debug(
            "path_segment_count_mismatch",
            path=path,
            format=format,
            expected=len(format_parts),
            actual=len(path_parts),
        )
        raise FormatMismatch(format, path)

    params: Dict[str, str] = {}
    for part, value in zip(format_parts, path_parts):
        if part.startswith("{") and part.endswith("}"):
            params[part[1:-1]] = value
        elif part != value:
            logger.debug("path_literal_mismatch", path=path, format=format, segment=value)
            raise FormatMismatch(format, path)

    return params
