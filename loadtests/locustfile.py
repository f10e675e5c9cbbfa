"""AgriGo Load Testing: Locust entry point.

Usage:
    # Stock contention against one hot product (web UI):
    locust -f loadtests/locustfile.py StockContentionUser

    # Consumer journeys:
    locust -f loadtests/locustfile.py MarketplaceUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py StockContentionUser --headless \
           -u 50 -r 10 -t 120s --csv=results/contention

HOT_STOCK sets the hot product's starting stock (default 500).
"""

import logging
import os
import time

import requests
from locust import events

from loadtests.data_generators import PASSWORD, product_data, registration_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import HOT_PRODUCT
from loadtests.scenarios.contention import StockContentionUser  # noqa: F401
from loadtests.scenarios.marketplace import MarketplaceUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, extract_error_detail(response))


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Register a farmer and list the hot product every contention user orders."""
    host = environment.host
    farmer = registration_data("farmer")
    requests.post(f"{host}/auth/user/register", json=farmer, timeout=10).raise_for_status()
    token = requests.post(
        f"{host}/auth/user/login",
        json={"email": farmer["email"], "password": PASSWORD},
        timeout=10,
    ).json()["token"]

    stock = int(os.getenv("HOT_STOCK", "500"))
    resp = requests.post(
        f"{host}/products",
        json=product_data(quantity=stock),
        headers={"Authorization": f"Bearer {token}"},
        timeout=10,
    )
    resp.raise_for_status()

    HOT_PRODUCT.product_id = resp.json()["product"]["id"]
    HOT_PRODUCT.initial_stock = stock
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')} against {host}")
    print(f"[LOADTEST] Hot product {HOT_PRODUCT.product_id} with stock {stock}\n")


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Check the hot product's final stock against the accepted orders."""
    if HOT_PRODUCT.product_id is None:
        return

    final = requests.get(f"{environment.host}/products/{HOT_PRODUCT.product_id}", timeout=10).json()["quantity"]
    expected = HOT_PRODUCT.initial_stock - HOT_PRODUCT.reserved
    print(f"\n[LOADTEST] Accepted quantity {HOT_PRODUCT.reserved}, refusals {HOT_PRODUCT.refused}")
    print(f"[LOADTEST] Final stock {final}, expected {expected}")
    if final != expected or final < 0:
        logger.error("Stock drifted: final=%s expected=%s", final, expected)
        environment.process_exit_code = 1
