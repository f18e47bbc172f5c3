"""Entities shared by the test suite."""

from decimal import Decimal
from typing import Annotated, ClassVar, Optional

from envali import ValidatableEntity, constraints as c


class Plain(ValidatableEntity):
    name: str = ""
    count: int = 0


class Account(ValidatableEntity):
    user_id: Annotated[Optional[str], c.non_null(), c.non_blank()] = "user"
    age: Annotated[int, c.range_from_to(0, 150)] = 30
    email: Annotated[str, c.match(preset="email_address")] = "someone@example.com"


class Address(ValidatableEntity):
    city: Annotated[str, c.non_blank(message="city is required")] = "Tokyo"
    post_code: Annotated[str, c.starts_with("1")] = "100-0001"


class Customer(ValidatableEntity):
    name: Annotated[str, c.non_empty()] = "Alice"
    address: Annotated[Optional[Address], c.nested()] = None
    previous: Annotated[list[Address], c.nested()] = []
    by_label: Annotated[dict[str, Address], c.nested()] = {}


class Node(ValidatableEntity):
    label: Annotated[str, c.non_blank()] = "node"
    child: Annotated[Optional["Node"], c.nested()] = None


class Left(ValidatableEntity):
    right: Annotated[Optional["Right"], c.nested()] = None


class Right(ValidatableEntity):
    left: Annotated[Optional[Left], c.nested()] = None


Left.model_rebuild()


class Measurements(ValidatableEntity):
    whole: Annotated[int, c.range_from(-10), c.range_to(10)] = 0
    ratio: Annotated[float, c.range_from_to(0.0, 1.0)] = 0.5
    price: Annotated[Decimal, c.range_from_to("0.10", "0.30")] = Decimal("0.20")


class MappedAccount(ValidatableEntity):
    parameter_mapping: ClassVar[Optional[str]] = "Account"

    age: Annotated[int, c.range_from_to()] = 30
    code: Annotated[str, c.starts_with(), c.ends_with()] = "AB-01"
    score: Annotated[int, c.range_from(0, external=True)] = 10


def invalid_account() -> Account:
    return Account(user_id="   ", age=200, email="not-an-email")


valid_account = Account()
