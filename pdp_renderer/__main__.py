"""
Command line entry point for the PDP helpers.

Usage:
    python -m pdp_renderer match /en/products/shoe/123 "/{locale}/products/{urlKey}/{sku}"
    python -m pdp_renderer fields product.json --locale de-de
    cat product.json | python -m pdp_renderer fields -
    python -m pdp_renderer template "https://main--site--org.aem.live/{locale}/products/default" \
        --block product-details --block product-recommendations --locale en
"""

import argparse
import asyncio
import json
import sys
from functools import partial
from typing import Any, Dict, List, Optional

import yaml

from .config import load_config
from .description import DEFAULT_DESCRIPTION_PRIORITY, select_description
from .exceptions import FetchFailure, FormatMismatch
from .images import build_image_list, select_image
from .logging_config import configure_structlog, get_logger
from .models import Product
from .paths import match_path
from .pricing import format_price
from .template import adapt_template, fetch_text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdp-renderer",
        description="Compute product page display fields and base templates",
    )
    parser.add_argument(
        "--config",
        help="Path to config file (default: packaged settings.yaml)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-format",
        choices=["console", "json"],
        help="Log output format (default: from config)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    match = subparsers.add_parser("match", help="Extract route parameters from a path")
    match.add_argument("path", help="Request path")
    match.add_argument("format", help="Route format, e.g. /{locale}/products/{sku}")

    fields = subparsers.add_parser("fields", help="Compute display fields of a product")
    fields.add_argument("product", help="Product JSON file, or - for stdin")
    fields.add_argument("--locale", help="Locale for price formatting")
    fields.add_argument("--role", help="Image role of the primary image ('' for the first image)")
    fields.add_argument(
        "--priority",
        nargs="+",
        help="Description fields to try, in order",
    )

    template = subparsers.add_parser("template", help="Adapt a page into a base template")
    template.add_argument("url", help="Page URL, may contain {locale}")
    template.add_argument(
        "--block",
        action="append",
        default=[],
        dest="blocks",
        help="Block class name to replace with a partial (repeatable)",
    )
    template.add_argument("--locale", help="Locale substituted into the URL")

    return parser


def _read_product(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    with open(source, "r") as f:
        return json.load(f)


def compute_fields(
    product: Any,
    locale: str,
    role: Optional[str],
    priority: List[str],
) -> Dict[str, Any]:
    """
    Compute the display fields of a product.

    Args:
        product: Product record
        locale: Locale for price formatting
        role: Role of the primary image
        priority: Description fields to try, in order

    Returns:
        Dict with description, price, image and images
    """
    record = Product.from_record(product)
    image = select_image(record, role)
    primary_url = image.url if image else None

    return {
        "description": select_description(record, priority),
        "price": format_price(record, locale),
        "image": primary_url,
        "images": build_image_list(primary_url, record.images),
    }


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        configure_structlog()
        get_logger(__name__).error("config_load_failed", error=str(e))
        return 1

    log_level = "DEBUG" if args.verbose else config["logging"].get("level", "INFO")
    log_format = args.log_format or config["logging"].get("format", "console")
    configure_structlog(log_level, log_format)
    logger = get_logger(__name__)

    if args.command == "match":
        try:
            params = match_path(args.path, args.format)
        except FormatMismatch as e:
            logger.error("path_match_failed", path=args.path, format=e.format)
            return 1
        print(json.dumps(params, indent=2))
        return 0

    if args.command == "fields":
        role = args.role if args.role is not None else config["images"].get("role", "image")
        try:
            product = _read_product(args.product)
        except (OSError, ValueError) as e:
            logger.error("product_load_failed", source=args.product, error=str(e))
            return 1

        fields = compute_fields(
            product,
            locale=args.locale or config["locale"].get("default", "us-en"),
            role=role,
            priority=(
                args.priority
                or config["description"].get("priority")
                or list(DEFAULT_DESCRIPTION_PRIORITY)
            ),
        )
        print(json.dumps(fields, indent=2, ensure_ascii=False))
        return 0

    fetch = partial(fetch_text, timeout=config["template"].get("timeout", 10.0))
    context = {"locale": args.locale}
    try:
        adapted = asyncio.run(adapt_template(args.url, args.blocks, context, fetch=fetch))
    except FetchFailure as e:
        logger.error("template_failed", url=e.url, error=e.reason)
        return 1
    sys.stdout.write(adapted)
    return 0


if __name__ == "__main__":
    sys.exit(main())
