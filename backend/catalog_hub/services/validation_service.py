"""
Validation service — pre-publish checks over a candidate snapshot.

Pure functions: nothing here touches storage or raises for bad data.
Hard errors make a snapshot unpublishable, warnings are surfaced to the
operator but never block.
Version: 1.0.0
"""
import logging
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from catalog_hub.core.constants.publishing import (
    CRITICAL_SECTIONS,
    ORPHAN_POLICIES,
    ORPHAN_POLICY_ERROR,
    ORPHAN_POLICY_WARN,
    PRICE_WARNING_THRESHOLD,
)
from catalog_hub.schemas.snapshot import ValidationResult, ValidationStats

logger = logging.getLogger("validation_service")

SectionCheck = Tuple[List[str], List[str], int]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def section_entries(section: Any) -> List[Tuple[str, Any]]:
    """Return (id, entry) pairs for a mapping- or list-shaped section.

    Firebase exports integer-keyed collections as arrays with holes,
    so list positions become ids and None slots are skipped.
    """
    if section is None:
        return []
    if isinstance(section, Mapping):
        return [(str(key), value) for key, value in section.items()]
    if isinstance(section, (list, tuple)):
        return [(str(idx), value) for idx, value in enumerate(section) if value is not None]
    return []


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return not value


def _is_blank_id(value: Any) -> bool:
    """Ids may be integers, so 0 is a real id."""
    return value is None or (isinstance(value, str) and value.strip() == "")


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value) and not math.isinf(value)


def linked_category_ids(product: Mapping[str, Any]) -> List[str]:
    """Category ids a product links to, from category_ids and/or category_id."""
    ids: List[str] = []
    raw_ids = product.get("category_ids")
    if isinstance(raw_ids, Mapping):
        ids.extend(str(key) for key, flag in raw_ids.items() if flag)
    elif isinstance(raw_ids, (list, tuple)):
        ids.extend(str(value) for value in raw_ids if not _is_blank_id(value))
    elif isinstance(raw_ids, str) and raw_ids.strip():
        ids.append(raw_ids.strip())

    single = product.get("category_id")
    if not _is_blank_id(single) and str(single) not in ids:
        ids.append(str(single))
    return ids


# ---------------------------------------------------------------------------
# Section validators
# ---------------------------------------------------------------------------

def _validate_products(
    products: Any,
    category_ids: Optional[Iterable[str]],
    price_warning_threshold: float,
    orphan_policy: str,
) -> SectionCheck:
    errors: List[str] = []
    warnings: List[str] = []

    if products is None:
        errors.append("No products found")
        return errors, warnings, 0

    known_categories = set(category_ids) if category_ids is not None else None
    entries = section_entries(products)

    for product_id, product in entries:
        if not isinstance(product, Mapping):
            errors.append(f"Product {product_id}: Invalid product entry")
            continue

        if _is_blank(product.get("name")) or not isinstance(product.get("name"), str):
            errors.append(f"Product {product_id}: Missing or empty name")

        price = product.get("price")
        if price is None:
            errors.append(f"Product {product_id}: Missing price")
        elif not _is_number(price) or price < 0:
            errors.append(f"Product {product_id}: Invalid price format")
            price = None
        elif price > price_warning_threshold:
            warnings.append(
                f"Product {product_id}: Price seems unusually high ({price})"
            )

        linked = linked_category_ids(product)
        if not linked:
            warnings.append(f"Product {product_id}: Not assigned to any category")
        elif known_categories is not None:
            for category_id in linked:
                if category_id in known_categories:
                    continue
                message = f"Product {product_id}: References unknown category {category_id}"
                if orphan_policy == ORPHAN_POLICY_ERROR:
                    errors.append(message)
                else:
                    warnings.append(message)

        if _is_blank(product.get("image_url")):
            warnings.append(f"Product {product_id}: Missing product image")

        if _is_blank(product.get("description")):
            warnings.append(f"Product {product_id}: Missing description")

        compare_at = product.get("compare_at_price")
        if price is not None and _is_number(compare_at) and compare_at < price:
            errors.append(
                f"Product {product_id}: Compare price ({compare_at}) should be "
                f"higher than sale price ({price})"
            )

    return errors, warnings, len(entries)


def _validate_categories(categories: Any) -> SectionCheck:
    errors: List[str] = []
    warnings: List[str] = []

    if categories is None:
        errors.append("No categories found")
        return errors, warnings, 0

    entries = section_entries(categories)
    for category_id, category in entries:
        if not isinstance(category, Mapping):
            errors.append(f"Category {category_id}: Invalid category entry")
            continue
        if _is_blank(category.get("name")) or not isinstance(category.get("name"), str):
            errors.append(f"Category {category_id}: Missing or empty name")
        if _is_blank(category.get("image_url")):
            warnings.append(f"Category {category_id}: Missing category image")

    return errors, warnings, len(entries)


def _validate_reviews(reviews: Any) -> SectionCheck:
    errors: List[str] = []
    entries = section_entries(reviews)
    for review_id, review in entries:
        if not isinstance(review, Mapping):
            errors.append(f"Review {review_id}: Invalid review entry")
            continue
        if _is_blank(review.get("customer_name")):
            errors.append(f"Review {review_id}: Missing customer name")
        if _is_blank(review.get("review_text")):
            errors.append(f"Review {review_id}: Missing review text")
    return errors, [], len(entries)


def _validate_offers(offers: Any) -> SectionCheck:
    errors: List[str] = []
    warnings: List[str] = []
    entries = section_entries(offers)
    for offer_id, offer in entries:
        if not isinstance(offer, Mapping):
            errors.append(f"Offer {offer_id}: Invalid offer entry")
            continue
        if _is_blank(offer.get("title")):
            errors.append(f"Offer {offer_id}: Missing title")
        if "is_active" not in offer and "isActive" not in offer:
            warnings.append(f"Offer {offer_id}: Active status not set")
    return errors, warnings, len(entries)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def validate_snapshot(
    candidate: Optional[Mapping[str, Any]],
    price_warning_threshold: float = PRICE_WARNING_THRESHOLD,
    orphan_policy: str = ORPHAN_POLICY_WARN,
) -> ValidationResult:
    """
    Check a candidate snapshot before publishing.

    Products and categories are required and must each be non-empty.
    Reviews and offers are checked only when present. Orphaned product
    links are warnings unless orphan_policy is "error".

    Returns:
        ValidationResult with valid == (no errors)

    Raises:
        ValueError: orphan_policy is neither "warn" nor "error"
    """
    if orphan_policy not in ORPHAN_POLICIES:
        raise ValueError(f"Unknown orphan policy: {orphan_policy}")
    candidate = candidate or {}
    all_errors: List[str] = []
    all_warnings: List[str] = []

    categories = candidate.get("categories")
    category_ids = (
        [category_id for category_id, _ in section_entries(categories)]
        if categories is not None
        else None
    )

    product_errors, product_warnings, product_count = _validate_products(
        candidate.get("products"), category_ids, price_warning_threshold, orphan_policy
    )
    category_errors, category_warnings, category_count = _validate_categories(categories)
    review_errors, review_warnings, review_count = _validate_reviews(candidate.get("reviews"))
    offer_errors, offer_warnings, offer_count = _validate_offers(candidate.get("offers"))

    for errs, warns in (
        (product_errors, product_warnings),
        (category_errors, category_warnings),
        (review_errors, review_warnings),
        (offer_errors, offer_warnings),
    ):
        all_errors.extend(errs)
        all_warnings.extend(warns)

    counts = {"products": product_count, "categories": category_count}
    for section in CRITICAL_SECTIONS:
        if counts[section] == 0:
            all_errors.append(f"CRITICAL: No {section} - cannot publish without {section}")

    result = ValidationResult(
        valid=not all_errors,
        errors=all_errors,
        warnings=all_warnings,
        stats=ValidationStats(
            productCount=product_count,
            categoryCount=category_count,
            reviewCount=review_count,
            offerCount=offer_count,
        ),
    )
    logger.info(
        "validate snapshot valid=%s errors=%s warnings=%s products=%s categories=%s",
        result.valid,
        len(all_errors),
        len(all_warnings),
        product_count,
        category_count,
    )
    return result


def get_data_summary(candidate: Optional[Mapping[str, Any]]) -> str:
    """Multi-line count summary for operator display."""
    candidate = candidate or {}
    counts: Dict[str, int] = {
        label: len(section_entries(candidate.get(section)))
        for label, section in (
            ("Products", "products"),
            ("Categories", "categories"),
            ("Reviews", "reviews"),
            ("Offers", "offers"),
        )
    }
    lines = ["Data Summary:"] + [f"- {label}: {count}" for label, count in counts.items()]
    return "\n".join(lines)
