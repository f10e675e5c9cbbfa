"""Shared BDD fixtures and step definitions for marketplace orders."""

import json
import threading

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

from agrigo.catalogue.listing import ListProduct
from agrigo.catalogue.product import Product
from agrigo.domain import agrigo
from agrigo.errors import MarketplaceError
from agrigo.identity.registration import RegisterUser
from agrigo.ordering.cancellation import CancelOrder
from agrigo.ordering.order import Order
from agrigo.ordering.placement import PlaceOrder
from agrigo.ordering.status import UpdateOrderStatus

ADDRESS = {"street": "12 Mill Road", "city": "Pune", "pincode": "411001"}


@pytest.fixture()
def world():
    """Users, products and command outcomes of one scenario, keyed by name."""
    return {"users": {}, "products": {}, "orders": [], "attempts": []}


def _user(world, name, role):
    if name not in world["users"]:
        user_id = current_domain.process(
            RegisterUser(
                name=name,
                email=f"{name.lower()}@bdd.test",
                password="harvest-123",
                phone="9800000000",
                role=role,
            ),
            asynchronous=False,
        )
        world["users"][name] = user_id
    return world["users"][name]


def _attempt(world, command):
    try:
        result = current_domain.process(command, asynchronous=False)
    except (MarketplaceError, ValidationError) as exc:
        world["attempts"].append(("failed", exc))
        return None
    world["attempts"].append(("succeeded", result))
    return result


def _order_command(world, consumer, lines):
    return PlaceOrder(
        consumer_id=_user(world, consumer, "consumer"),
        items=json.dumps([{"product_id": world["products"][name], "quantity": qty} for name, qty in lines]),
        delivery_address=json.dumps(ADDRESS),
        payment_method="cash",
    )


def _place(world, consumer, lines):
    order_id = _attempt(world, _order_command(world, consumer, lines))
    if order_id:
        world["orders"].append(order_id)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.parse('farmer "{farmer}" lists "{product}" with stock {stock:d} at price {price:g}'))
def _(world, farmer, product, stock, price):
    world["products"][product] = current_domain.process(
        ListProduct(
            farmer_id=_user(world, farmer, "farmer"),
            name=product,
            description=f"Fresh {product.lower()}",
            price=float(price),
            quantity=stock,
        ),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.parse('consumer "{consumer}" places an order for {quantity:d} "{product}"'))
def _(world, consumer, quantity, product):
    _place(world, consumer, [(product, quantity)])


@when(
    parsers.parse(
        'consumer "{consumer}" places a mixed order for {first_qty:d} "{first}" and {second_qty:d} "{second}"'
    )
)
def _(world, consumer, first_qty, first, second_qty, second):
    _place(world, consumer, [(first, first_qty), (second, second_qty)])


@when(parsers.parse('consumers "{first}" and "{second}" each order {quantity:d} "{product}" at the same time'))
def _(world, first, second, quantity, product):
    commands = [_order_command(world, name, [(product, quantity)]) for name in (first, second)]
    start = threading.Barrier(len(commands))

    def run(command):
        with agrigo.domain_context():
            start.wait()
            order_id = _attempt(world, command)
        if order_id:
            world["orders"].append(order_id)

    threads = [threading.Thread(target=run, args=(command,)) for command in commands]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)


@when(parsers.parse('consumer "{consumer}" cancels their last order'))
def _(world, consumer):
    _attempt(world, CancelOrder(order_id=world["orders"][-1], consumer_id=world["users"][consumer]))


@when(parsers.parse('farmer "{farmer}" sets the last order to "{status}"'))
def _(world, farmer, status):
    _attempt(
        world,
        UpdateOrderStatus(order_id=world["orders"][-1], farmer_id=world["users"][farmer], status=status),
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.parse("attempt {number:d} succeeded"))
def _(world, number):
    outcome, detail = world["attempts"][number - 1]
    assert outcome == "succeeded", detail


@then(parsers.parse('attempt {number:d} failed with "{message}"'))
def _(world, number, message):
    outcome, detail = world["attempts"][number - 1]
    assert outcome == "failed"
    assert detail.message == message


@then(parsers.parse('one attempt succeeded and one failed with "{message}"'))
def _(world, message):
    outcomes = sorted(world["attempts"], key=lambda attempt: attempt[0])
    assert [outcome for outcome, _ in outcomes] == ["failed", "succeeded"]
    assert outcomes[0][1].message == message


@then(parsers.parse('"{product}" has stock {stock:d}'))
def _(world, product, stock):
    assert current_domain.repository_for(Product).get(world["products"][product]).quantity == stock


@then(parsers.parse('the last order is "{status}"'))
def _(world, status):
    assert current_domain.repository_for(Order).get(world["orders"][-1]).status == status


@then("no order exists")
def _():
    assert current_domain.repository_for(Order)._dao.query.all().items == []



@then(parsers.parse("exactly {count:d} order exists"))
def _(count):
    assert len(current_domain.repository_for(Order)._dao.query.all().items) == count
