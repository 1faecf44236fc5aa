"""Image selection and ordering for product pages."""

from typing import Any, Iterable, List, Optional

from .models import Product, ProductImage

DEFAULT_IMAGE_ROLE = "image"


def select_image(product: Any, role: Optional[str] = DEFAULT_IMAGE_ROLE) -> Optional[ProductImage]:
    """
    Return the primary image of a product.

    Args:
        product: Product record (mapping or Product)
        role: Role the image must carry. When empty or None, the first
            image is returned regardless of its roles.

    Returns:
        Matching image, or None if there is none
    """
    images = Product.from_record(product).images or []

    if role:
        return next((image for image in images if role in image.roles), None)

    return images[0] if images else None


def _image_url(image: Any) -> Optional[str]:
    if isinstance(image, ProductImage):
        return image.url
    if isinstance(image, dict):
        return image.get("url")
    return getattr(image, "url", None)


def build_image_list(primary_url: Optional[str], images: Optional[Iterable[Any]]) -> List[str]:
    """
    List image URLs with the primary image first.

    Args:
        primary_url: URL of the primary image
        images: Image records (mappings or ProductImage), in display order

    Returns:
        Image URLs in their original order, except that primary_url is
        moved to the front when it is present
    """
    urls = [_image_url(image) for image in images or []]

    if primary_url and primary_url in urls:
        urls.remove(primary_url)
        urls.insert(0, primary_url)

    return urls
