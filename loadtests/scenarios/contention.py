"""Stock contention scenario.

Every user orders small quantities of one shared product until it sells
out. Refusals with InsufficientStock are the expected outcome once stock
runs low and count as successes; anything else is a failure.
"""

import random

from locust import HttpUser, between, task

from loadtests.data_generators import PASSWORD, order_data, registration_data
from loadtests.helpers.response import extract_error_detail, is_insufficient_stock
from loadtests.helpers.state import HOT_PRODUCT, ConsumerState


class StockContentionUser(HttpUser):
    wait_time = between(0.05, 0.2)

    def on_start(self):
        self.state = ConsumerState()
        registration = registration_data("consumer")
        self.client.post("/auth/user/register", json=registration, name="POST /auth/user/register")
        resp = self.client.post(
            "/auth/user/login",
            json={"email": registration["email"], "password": PASSWORD},
            name="POST /auth/user/login",
        )
        self.state.token = resp.json().get("token")

    @task
    def order_hot_product(self):
        if HOT_PRODUCT.product_id is None or self.state.token is None:
            return

        quantity = random.randint(1, 3)
        with self.client.post(
            "/orders",
            json=order_data(HOT_PRODUCT.product_id, quantity),
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders (hot product)",
        ) as resp:
            if resp.status_code == 201:
                HOT_PRODUCT.reserved += quantity
                self.state.order_ids.append(resp.json()["order"]["id"])
            elif is_insufficient_stock(resp):
                HOT_PRODUCT.refused += 1
                resp.success()
            else:
                resp.failure(f"Place order failed: {resp.status_code} {extract_error_detail(resp)}")
