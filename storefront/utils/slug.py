from slugify import slugify

from storefront.core.exceptions import ValidationError


def generate_slug(text: str) -> str:
    # "Calças Jeans" -> "calcas-jeans"
    slug = slugify(text, lowercase=True)
    if not slug:
        raise ValidationError(f"Could not derive a slug from '{text}'")
    return slug
