"""Pytest configuration and fixtures."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore the default structlog configuration after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def simple_product():
    """Simple product as returned by the commerce API."""
    return {
        "sku": "SHOE-123",
        "name": "Trail Runner",
        "metaDescription": "",
        "shortDescription": "<p>Lightweight <b>trail</b> shoe</p>",
        "description": "<p>Full description</p>\n<p>with details</p>",
        "images": [
            {"url": "https://cdn.example.com/shoe-side.jpg", "roles": ["thumbnail"]},
            {"url": "https://cdn.example.com/shoe-front.jpg", "roles": ["image", "small_image"]},
            {"url": "https://cdn.example.com/shoe-back.jpg", "roles": []},
        ],
        "price": {
            "regular": {"amount": {"value": 100, "currency": "USD"}},
            "final": {"amount": {"value": 80, "currency": "USD"}},
        },
    }


@pytest.fixture
def complex_product():
    """Configurable product with a price range."""
    return {
        "sku": "JACKET-7",
        "name": "Rain Jacket",
        "images": [
            {"url": "https://cdn.example.com/jacket.jpg", "roles": ["image"]},
        ],
        "priceRange": {
            "minimum": {
                "regular": {"amount": {"value": 50, "currency": "USD"}},
                "final": {"amount": {"value": 40, "currency": "USD"}},
            },
            "maximum": {
                "regular": {"amount": {"value": 90, "currency": "USD"}},
                "final": {"amount": {"value": 90, "currency": "USD"}},
            },
        },
    }
