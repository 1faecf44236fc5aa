"""Presentation helpers for rendering commerce product detail pages."""

from .description import DEFAULT_DESCRIPTION_PRIORITY, select_description
from .exceptions import FetchFailure, FormatMismatch, PdpRendererError
from .images import DEFAULT_IMAGE_ROLE, build_image_list, select_image
from .models import PriceRange, PriceSide, Product, ProductImage, TemplateContext
from .paths import match_path
from .pricing import format_price, get_formatter
from .template import adapt_template, fetch_text

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_DESCRIPTION_PRIORITY",
    "DEFAULT_IMAGE_ROLE",
    "FetchFailure",
    "FormatMismatch",
    "PdpRendererError",
    "PriceRange",
    "PriceSide",
    "Product",
    "ProductImage",
    "TemplateContext",
    "adapt_template",
    "build_image_list",
    "fetch_text",
    "format_price",
    "get_formatter",
    "match_path",
    "select_description",
    "select_image",
]
