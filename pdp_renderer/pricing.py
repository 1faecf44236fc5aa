"""Locale-aware price strings for simple and complex products."""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Callable, Optional

import structlog
from babel import Locale, UnknownLocaleError
from babel.numbers import format_currency

from .models import PriceSide, Product

logger = structlog.get_logger(__name__, service="pdp_renderer")

DEFAULT_LOCALE = "us-en"
DEFAULT_CURRENCY = "USD"
FALLBACK_LOCALE = "en_US"

Formatter = Callable[[Decimal], str]


def resolve_locale(locale_code: Optional[str]) -> Locale:
    """
    Resolve a storefront locale code to a Babel locale.

    Storefront codes are often written country first ("us-en"), so a code
    that does not parse as a language tag is retried with its two parts
    swapped before falling back to en_US.

    Args:
        locale_code: Locale code such as "en-US", "de_DE" or "us-en"

    Returns:
        Babel Locale
    """
    code = (locale_code or DEFAULT_LOCALE).strip().replace("_", "-")
    candidates = [code]
    parts = code.split("-")
    if len(parts) == 2:
        candidates.append(f"{parts[1]}-{parts[0]}")

    for candidate in candidates:
        try:
            return Locale.parse(candidate, sep="-")
        except (ValueError, UnknownLocaleError):
            continue

    logger.warning("locale_fallback", locale=locale_code, fallback=FALLBACK_LOCALE)
    return Locale.parse(FALLBACK_LOCALE)


def get_formatter(locale_code: str = DEFAULT_LOCALE, currency: Optional[str] = None) -> Formatter:
    """
    Return a currency formatter for the given locale and currency.

    Args:
        locale_code: Locale to format for. Defaults to us-en.
        currency: ISO 4217 code. Missing or "NONE" means USD.

    Returns:
        Callable formatting a number with exactly two fraction digits
    """
    if not currency or currency == "NONE":
        currency = DEFAULT_CURRENCY

    locale = resolve_locale(locale_code)

    def fmt(value: Decimal) -> str:
        # Halves round away from zero.
        with localcontext() as ctx:
            ctx.rounding = ROUND_HALF_UP
            return format_currency(value, currency, locale=locale, currency_digits=False)

    return fmt


def _format_side(side: Optional[PriceSide], fmt: Formatter) -> str:
    """Format one regular/final pair, striking through the regular price on discount."""
    if side is None or side.final_value is None:
        return ""

    final = side.final_value
    regular = side.regular_value
    if regular is not None and regular > final:
        return f"<s>{fmt(regular)}</s> {fmt(final)}"
    return fmt(final)


def format_price(product: Any, locale_code: str = DEFAULT_LOCALE) -> str:
    """
    Generate the formatted price string of a simple or complex product.

    Args:
        product: Product record (mapping or Product)
        locale_code: Locale to format for

    Returns:
        Formatted price, "<min>-<max>" for a real price range, or "" when
        the product has no price data
    """
    record = Product.from_record(product)
    price = record.price
    price_range = record.price_range

    if price_range:
        currency = price_range.minimum.currency if price_range.minimum else None
    else:
        currency = price.currency if price else None
    fmt = get_formatter(locale_code, currency)

    if price_range:
        minimum = price_range.minimum
        maximum = price_range.maximum
        minimum_final = minimum.final_value if minimum else None
        maximum_final = maximum.final_value if maximum else None
        if minimum_final != maximum_final:
            return f"{_format_side(minimum, fmt)}-{_format_side(maximum, fmt)}"
        return _format_side(minimum, fmt)

    if price:
        return _format_side(price, fmt)

    return ""
