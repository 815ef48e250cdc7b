"""
Unit tests for identifier and quantity value objects.
"""
import pytest

from order_service.domain import (
    CustomerId,
    DomainError,
    InvalidValueError,
    OrderId,
    ProductId,
    Quantity,
)


def test_generated_order_ids_are_distinct():
    ids = {OrderId.generate() for _ in range(100)}
    assert len(ids) == 100


def test_ids_compare_by_value():
    assert OrderId("abc") == OrderId("abc")
    assert hash(CustomerId("c1")) == hash(CustomerId("c1"))
    assert ProductId("p1") != ProductId("p2")


def test_ids_of_different_kinds_are_not_equal():
    assert OrderId("same") != CustomerId("same")


@pytest.mark.parametrize("id_type", [OrderId, CustomerId, ProductId])
@pytest.mark.parametrize("raw", ["", "   ", None, 123])
def test_blank_or_non_text_ids_rejected(id_type, raw):
    with pytest.raises(InvalidValueError):
        id_type(raw)


def test_id_str_and_repr():
    order_id = OrderId("o-1")
    assert str(order_id) == "o-1"
    assert repr(order_id) == "OrderId('o-1')"


def test_ids_are_immutable():
    order_id = OrderId("o-1")
    with pytest.raises(AttributeError):
        order_id.value = "o-2"


def test_quantity_accepts_positive_integers():
    assert Quantity(1).value == 1
    assert int(Quantity.of(5)) == 5
    assert str(Quantity(3)) == "3"


@pytest.mark.parametrize("raw", [0, -1, 1.5, "2", True, None])
def test_quantity_rejects_invalid_values(raw):
    with pytest.raises(InvalidValueError):
        Quantity(raw)


def test_invalid_value_error_is_domain_and_value_error():
    with pytest.raises(DomainError):
        Quantity(0)
    with pytest.raises(ValueError):
        Quantity(0)
