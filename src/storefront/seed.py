"""Demo catalogue and accounts for local development."""

import os

from protean.utils.globals import current_domain

from storefront.account.registration import register
from storefront.account.user import Role, User
from storefront.catalogue.product import Product
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_PRODUCTS = [
    {
        "name": "Premium Wireless Headphones",
        "description": "Wireless headphones with noise cancellation and superior sound quality.",
        "price": 199.99,
        "original_price": 249.99,
        "category": "Electronics",
        "brand": "AudioTech",
        "quantity": 50,
        "rating": 4.5,
        "reviews": 156,
        "featured": True,
        "tags": ["wireless", "noise-cancelling", "premium"],
        "specifications": {"Battery Life": "30 hours", "Connectivity": "Bluetooth 5.0"},
    },
    {
        "name": "Ergonomic Wireless Mouse",
        "description": "Comfortable wireless mouse with precision tracking and long battery life.",
        "price": 49.99,
        "original_price": 69.99,
        "category": "Electronics",
        "brand": "TechPro",
        "quantity": 100,
        "rating": 4.8,
        "reviews": 89,
        "featured": True,
        "tags": ["wireless", "ergonomic", "gaming"],
        "specifications": {"DPI": "3200", "Battery": "Rechargeable"},
    },
    {
        "name": "Adjustable Smartphone Stand",
        "description": "Universal smartphone stand with adjustable angles for calls and desk organization.",
        "price": 24.99,
        "category": "Accessories",
        "brand": "StandPro",
        "quantity": 200,
        "rating": 4.3,
        "reviews": 67,
        "tags": ["stand", "adjustable"],
        "specifications": {"Material": "Aluminum Alloy", "Angles": "0-270 degrees"},
    },
    {
        "name": "USB-C Fast Charging Cable",
        "description": "High-speed USB-C charging cable with reinforced connectors.",
        "price": 19.99,
        "category": "Accessories",
        "brand": "ChargeFast",
        "quantity": 300,
        "rating": 4.6,
        "reviews": 123,
        "tags": ["usb-c", "fast-charging"],
        "specifications": {"Length": "6 feet", "Power": "100W"},
    },
]


def seed_catalogue() -> int:
    repo = current_domain.repository_for(Product)
    for entry in DEMO_PRODUCTS:
        attributes = dict(entry)
        repo.add(
            Product.create(
                name=attributes.pop("name"),
                description=attributes.pop("description"),
                price=attributes.pop("price"),
                **attributes,
            )
        )
    logger.info("Seeded catalogue", products=len(DEMO_PRODUCTS))
    return len(DEMO_PRODUCTS)


def seed_accounts() -> list[str]:
    """Create the admin account (from ADMIN_EMAIL / ADMIN_PASSWORD) and a demo customer."""
    accounts = [
        (
            "Admin User",
            os.getenv("ADMIN_EMAIL", "admin@example.com"),
            os.getenv("ADMIN_PASSWORD", "admin123"),
            Role.ADMIN.value,
        ),
        ("John Doe", "john@example.com", "password123", Role.USER.value),
    ]

    created = []
    repo = current_domain.repository_for(User)
    for name, email, password, role in accounts:
        if repo.find_by_email(email) is not None:
            logger.info("Account already present", email=email)
            continue
        user, _ = register(name=name, email=email, password=password, role=role)
        created.append(user.email)

    logger.info("Seeded accounts", accounts=created)
    return created
