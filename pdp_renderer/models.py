"""Data models for product records consumed by the PDP helpers."""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, List, Optional

import structlog
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic.alias_generators import to_camel

logger = structlog.get_logger(__name__, service="pdp_renderer")


class RecordModel(BaseModel):
    """Base for records coming from the commerce API (camelCase keys)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


class Amount(RecordModel):
    """A monetary amount."""

    value: Optional[Decimal] = Field(default=None, allow_inf_nan=False)
    currency: Optional[str] = None


class Money(RecordModel):
    amount: Optional[Amount] = None


class PriceSide(RecordModel):
    """Regular/final price pair of a product or of one end of a range."""

    regular: Optional[Money] = None
    final: Optional[Money] = None

    @property
    def regular_value(self) -> Optional[Decimal]:
        if self.regular and self.regular.amount:
            return self.regular.amount.value
        return None

    @property
    def final_value(self) -> Optional[Decimal]:
        if self.final and self.final.amount:
            return self.final.amount.value
        return None

    @property
    def currency(self) -> Optional[str]:
        """Currency of the regular price."""
        if self.regular and self.regular.amount:
            return self.regular.amount.currency
        return None


class PriceRange(RecordModel):
    """Price range of a complex product."""

    minimum: Optional[PriceSide] = None
    maximum: Optional[PriceSide] = None


class ProductImage(RecordModel):
    """Product image with its role tags (e.g. "image", "thumbnail")."""

    url: str
    roles: List[str] = Field(default_factory=list)

    @field_validator("roles", mode="before")
    @classmethod
    def _missing_roles(cls, value: Any) -> Any:
        return [] if value is None else value


class Product(RecordModel):
    """Product record as returned by the commerce data API."""

    meta_description: Optional[str] = None
    short_description: Optional[str] = None
    description: Optional[str] = None
    images: Optional[List[ProductImage]] = None
    price: Optional[PriceSide] = None
    price_range: Optional[PriceRange] = None

    @field_validator("images", mode="wrap")
    @classmethod
    def _drop_invalid_images(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        """Keep the valid images of a list, skipping broken entries."""
        if not isinstance(value, (list, tuple)):
            return handler(value)

        images: List[ProductImage] = []
        for item in value:
            try:
                images.append(ProductImage.model_validate(item))
            except ValidationError as e:
                logger.warning("product_image_invalid", errors=[err["msg"] for err in e.errors()])
        return images

    @classmethod
    def from_record(cls, record: Any) -> "Product":
        """
        Build a Product from a mapping, an object or an existing Product.

        Fields that fail validation are logged and left empty, so display
        helpers fall back to their empty results for those fields only.

        Args:
            record: Product mapping (camelCase or snake_case keys), object or Product

        Returns:
            Validated Product
        """
        if isinstance(record, cls):
            return record
        if record is None:
            return cls()

        try:
            return cls.model_validate(record)
        except ValidationError as e:
            invalid = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
            logger.warning(
                "product_record_invalid",
                fields=sorted(invalid),
                errors=[err["msg"] for err in e.errors()],
            )
            if not isinstance(record, Mapping):
                return cls()

        dropped = set()
        for name, field in cls.model_fields.items():
            if name in invalid or field.alias in invalid:
                dropped.update({name, field.alias})
        valid = {key: value for key, value in record.items() if key not in dropped}

        try:
            return cls.model_validate(valid)
        except ValidationError:
            return cls()


class TemplateContext(RecordModel):
    """Request context used when adapting the base template."""

    locale: Optional[str] = None

    @classmethod
    def from_record(cls, record: Any) -> "TemplateContext":
        if isinstance(record, cls):
            return record
        if record is None:
            return cls()
        return cls.model_validate(record)
