"""Consumer journey across the marketplace.

Register -> Login -> Browse -> Place Order -> View Order -> Cancel Order.
Cancelling gives the stock back, so the journey can repeat indefinitely.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import PASSWORD, order_data, registration_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ConsumerState


class ConsumerJourney(SequentialTaskSet):
    def on_start(self):
        self.state = ConsumerState()
        self.product_id = None

    @task
    def register_and_login(self):
        registration = registration_data("consumer")
        with self.client.post(
            "/auth/user/register", json=registration, catch_response=True, name="POST /auth/user/register"
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Registration failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

        with self.client.post(
            "/auth/user/login",
            json={"email": registration["email"], "password": PASSWORD},
            catch_response=True,
            name="POST /auth/user/login",
        ) as resp:
            if resp.status_code == 200:
                self.state.token = resp.json()["token"]
            else:
                resp.failure(f"Login failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def browse(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            in_stock = [p for p in resp.json() if p["quantity"] > 0] if resp.status_code == 200 else []
            if not in_stock:
                resp.success()
                self.interrupt()
            self.product_id = random.choice(in_stock)["id"]

    @task
    def place_order(self):
        with self.client.post(
            "/orders",
            json=order_data(self.product_id, 1),
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["order"]["id"])
            else:
                resp.failure(f"Place order failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def view_order(self):
        self.client.get(
            f"/orders/{self.state.order_ids[-1]}", headers=self.state.headers, name="GET /orders/{id}"
        )

    @task
    def cancel_order(self):
        with self.client.put(
            f"/orders/{self.state.order_ids[-1]}/cancel",
            headers=self.state.headers,
            catch_response=True,
            name="PUT /orders/{id}/cancel",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Cancel failed: {resp.status_code} {extract_error_detail(resp)}")
        self.interrupt()


class MarketplaceUser(HttpUser):
    tasks = [ConsumerJourney]
    wait_time = between(0.5, 2.0)
