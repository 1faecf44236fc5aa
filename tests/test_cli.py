"""Tests for the command line entry point."""

import json

import pytest

from pdp_renderer import __main__ as cli
from pdp_renderer.exceptions import FetchFailure


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("PDP_LOCALE", "PDP_IMAGE_ROLE", "TEMPLATE_TIMEOUT", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)


class TestMatchCommand:
    """Test the match command."""

    def test_prints_params(self, capsys):
        """Test params are printed as JSON."""
        code = cli.main(["match", "/en/products/shoe/123", "/{locale}/products/{urlKey}/{sku}"])

        assert code == 0
        assert json.loads(capsys.readouterr().out) == {"locale": "en", "urlKey": "shoe", "sku": "123"}

    def test_mismatch_exit_code(self, capsys):
        """Test format mismatch exits with 1."""
        code = cli.main(["match", "/en/shoes", "/{locale}/{category}/{id}"])

        assert code == 1
        assert capsys.readouterr().out == ""


class TestFieldsCommand:
    """Test the fields command."""

    def test_display_fields(self, tmp_path, capsys, simple_product):
        """Test display fields of a product file."""
        path = tmp_path / "product.json"
        path.write_text(json.dumps(simple_product))

        code = cli.main(["fields", str(path)])

        assert code == 0
        fields = json.loads(capsys.readouterr().out)
        assert fields == {
            "description": "Lightweight trail shoe",
            "price": "<s>$100.00</s> $80.00",
            "image": "https://cdn.example.com/shoe-front.jpg",
            "images": [
                "https://cdn.example.com/shoe-front.jpg",
                "https://cdn.example.com/shoe-side.jpg",
                "https://cdn.example.com/shoe-back.jpg",
            ],
        }

    def test_options(self, tmp_path, capsys, simple_product):
        """Test role and priority options."""
        path = tmp_path / "product.json"
        path.write_text(json.dumps(simple_product))

        code = cli.main(["fields", str(path), "--role", "", "--priority", "description"])

        assert code == 0
        fields = json.loads(capsys.readouterr().out)
        assert fields["description"] == "Full description with details"
        assert fields["image"] == "https://cdn.example.com/shoe-side.jpg"

    def test_missing_product_file(self, tmp_path, capsys):
        """Test unreadable product file exits with 1."""
        code = cli.main(["fields", str(tmp_path / "missing.json")])

        assert code == 1
        assert capsys.readouterr().out == ""


class TestTemplateCommand:
    """Test the template command."""

    def test_writes_adapted_template(self, monkeypatch, capsys):
        """Test adapted template is written to stdout."""
        calls = []

        async def fake_adapt(url, blocks, context, fetch=None):
            calls.append((url, blocks, context))
            return "{{> product-details }}\n"

        monkeypatch.setattr(cli, "adapt_template", fake_adapt)

        code = cli.main([
            "template",
            "https://example.com/{locale}/products/default",
            "--block",
            "product-details",
            "--locale",
            "en",
        ])

        assert code == 0
        assert capsys.readouterr().out == "{{> product-details }}\n"
        assert calls == [
            ("https://example.com/{locale}/products/default", ["product-details"], {"locale": "en"})
        ]

    def test_fetch_failure_exit_code(self, monkeypatch, capsys):
        """Test fetch failures exit with 1."""

        async def failing_adapt(url, blocks, context, fetch=None):
            raise FetchFailure(f"{url}.plain.html", "connection refused")

        monkeypatch.setattr(cli, "adapt_template", failing_adapt)

        code = cli.main(["template", "https://example.com/page", "--block", "a"])

        assert code == 1
        assert capsys.readouterr().out == ""


class TestConfigErrors:
    """Test configuration errors."""

    def test_missing_config_file(self, tmp_path, capsys):
        """Test missing config file exits with 1."""
        code = cli.main(["--config", str(tmp_path / "nope.yaml"), "match", "/a", "/{x}"])

        assert code == 1
        assert capsys.readouterr().out == ""
