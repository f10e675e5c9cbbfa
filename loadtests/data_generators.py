"""Faker-based data generators for Locust load test scenarios.

Payloads match the camelCase field names of the API's request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

PASSWORD = "loadtest-harvest"


def unique_email(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:10]}@loadtest.agrigo.test"


def registration_data(role: str) -> dict:
    data = {
        "name": fake.name()[:150],
        "email": unique_email(role),
        "password": PASSWORD,
        "phone": fake.numerify("98########"),
        "role": role,
    }
    if role == "farmer":
        data["farmName"] = f"{fake.last_name()} Farms"
    return data


def product_data(quantity: int | None = None) -> dict:
    return {
        "name": random.choice(["Tomatoes", "Okra", "Onions", "Mangoes", "Wheat", "Milk"]),
        "description": fake.sentence(nb_words=8),
        "price": round(random.uniform(10, 500), 2),
        "quantity": quantity if quantity is not None else random.randint(50, 500),
        "unit": random.choice(["kg", "g", "dozen", "litre"]),
        "category": random.choice(["vegetables", "fruits", "grains", "other"]),
        "images": [],
    }


def delivery_address() -> dict:
    return {
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "pincode": fake.numerify("4#####"),
    }


def order_data(product_id: str, quantity: int) -> dict:
    return {
        "products": [{"productId": product_id, "quantity": quantity}],
        "deliveryAddress": delivery_address(),
        "paymentMethod": random.choice(["cash", "card", "transfer"]),
    }
