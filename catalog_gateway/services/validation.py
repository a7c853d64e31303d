from enum import Enum

from catalog_gateway.services.exceptions import MissingField


class ProductStatus(str, Enum):
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"
    DRAFT = "DRAFT"


class ProductSortKey(str, Enum):
    CREATED_AT = "CREATED_AT"
    ID = "ID"
    PRICE = "PRICE"
    PRODUCT_TYPE = "PRODUCT_TYPE"
    RELEVANCE = "RELEVANCE"
    TITLE = "TITLE"
    UPDATED_AT = "UPDATED_AT"
    VENDOR = "VENDOR"


class CollectionSortKey(str, Enum):
    ID = "ID"
    RELEVANCE = "RELEVANCE"
    TITLE = "TITLE"
    UPDATED_AT = "UPDATED_AT"


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_title(values: dict, required: bool = True, label: str = "title") -> None:
    """
    Check the title of a create/update payload.

    A missing title fails only when ``required``; a title that is present but
    blank after stripping always fails.
    """
    if "title" not in values or values["title"] is None:
        if required:
            raise MissingField("title", f"{label.capitalize()} is required")
        return
    if _is_blank(values["title"]):
        raise MissingField("title", f"{label.capitalize()} cannot be empty")


def require_id(value, field: str = "id") -> None:
    if _is_blank(value):
        raise MissingField(field)


def require_ids(values, field: str = "product_ids") -> None:
    if not values:
        raise MissingField(field, f"At least one value is required for {field}")
    for value in values:
        require_id(value, field)


def require_variants(variants) -> None:
    if not variants:
        raise MissingField("variants", "At least one variant is required")
    for variant in variants:
        require_id((variant or {}).get("id"), "variants.id")


def coerce_status(value):
    if value is None:
        return None
    return ProductStatus(value.upper() if isinstance(value, str) else value)


def coerce_sort_key(value, enum_type, default):
    """Map a sort key string onto ``enum_type``; ValueError when unknown."""
    if value is None or value == "":
        return default
    return enum_type(value.upper() if isinstance(value, str) else value)
