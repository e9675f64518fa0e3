"""
Sample storefront snapshot served when no real snapshot can be read.

Hardcoded to satisfy the same invariants a published snapshot must:
every product links to an existing category, every compare_at_price is
above its price, and every entity has a name and an image.
Version: 1.0.0
"""
from typing import Any, Dict

SAMPLE_IMAGE_BASE: str = "https://placehold.co/600x600/f3f4f6/111827/png?text="

SAMPLE_SNAPSHOT: Dict[str, Any] = {
    "products": {
        "sample-product-1": {
            "name": "Pearl Hair Clip",
            "price": 299,
            "compare_at_price": 499,
            "description": "Classic pearl-studded clip for everyday styling.",
            "image_url": SAMPLE_IMAGE_BASE + "Pearl+Clip",
            "category_id": "sample-category-1",
            "in_stock": True,
            "featured": True,
        },
        "sample-product-2": {
            "name": "Satin Scrunchie Set",
            "price": 199,
            "compare_at_price": 349,
            "description": "Pack of three soft satin scrunchies.",
            "image_url": SAMPLE_IMAGE_BASE + "Scrunchies",
            "category_id": "sample-category-1",
            "in_stock": True,
            "featured": False,
        },
        "sample-product-3": {
            "name": "Gold Hoop Earrings",
            "price": 449,
            "compare_at_price": 699,
            "description": "Lightweight gold-tone hoops.",
            "image_url": SAMPLE_IMAGE_BASE + "Hoops",
            "category_id": "sample-category-2",
            "in_stock": True,
            "featured": True,
        },
        "sample-product-4": {
            "name": "Crystal Stud Earrings",
            "price": 349,
            "description": "Minimal crystal studs for daily wear.",
            "image_url": SAMPLE_IMAGE_BASE + "Studs",
            "category_id": "sample-category-2",
            "in_stock": False,
            "featured": False,
        },
    },
    "categories": {
        "sample-category-1": {
            "name": "Hair Accessories",
            "image_url": SAMPLE_IMAGE_BASE + "Hair",
            "featured": True,
        },
        "sample-category-2": {
            "name": "Earrings",
            "image_url": SAMPLE_IMAGE_BASE + "Earrings",
            "featured": True,
        },
    },
    "navigation_settings": {
        "background": "#ffffff",
        "text": "#111827",
        "activeTab": "#14b8a6",
        "inactiveButton": "#f3f4f6",
        "borderRadius": "full",
        "buttonSize": "md",
        "themeMode": "default",
        "buttonLabels": {
            "home": "Home",
            "shop": "Shop All",
            "search": "Search",
            "cart": "Cart",
            "myOrders": "My Orders",
            "login": "Login",
            "signOut": "Sign Out",
            "admin": "Admin",
        },
    },
    "published_at": None,
    "version": "1.0.0",
}
