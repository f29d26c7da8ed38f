"""Tests for the position impact calculator."""

import random
from dataclasses import replace
from decimal import Decimal

import pytest

from portfolio_ledger.domain.errors import (
    DomainError,
    InsufficientQuantityError,
    NotAllowedError,
)
from portfolio_ledger.domain.models import PositionDelta, Quantity
from portfolio_ledger.domain.services.ledger_replay import replay_ledger
from portfolio_ledger.domain.services.position_update import (
    calculate_buy_impact,
    calculate_dividend_impact,
    calculate_sell_impact,
    calculate_transaction_impact,
)
from tests.factories import brl, buy, dividend, position, sell


def test_buy_impact_on_empty_position():
    """A first Buy opens the position at the trade price."""
    delta = calculate_buy_impact(None, buy(10, "25"))

    assert delta.new_quantity == Quantity(10)
    assert delta.new_average_price == brl(25)
    assert delta.new_total_invested == brl(250)
    assert delta.new_profit_loss.is_zero()
    assert delta.new_income_received == brl(0)


def test_buy_impact_does_not_mutate_position():
    """The preview works on a copy of the stored position."""
    holding = position(10, "50")
    snapshot = replace(holding)

    delta = calculate_buy_impact(holding, buy(10, "150"))

    assert delta.new_average_price.amount == Decimal("100")
    assert delta.new_current_price == brl(150)
    assert holding == snapshot


def test_sell_impact_keeps_average():
    """Selling reduces units without touching the average price."""
    delta = calculate_sell_impact(position(100, "25.50"), sell(40, "30.00"))

    assert delta.new_quantity == Quantity(60)
    assert delta.new_average_price == brl("25.50")
    assert delta.new_current_value == brl(1800)


def test_sell_impact_closing_position():
    """Selling every unit flags the delta as closing the position."""
    delta = calculate_sell_impact(position(10, "10"), sell(10, "12"))

    assert delta.closes_position


@pytest.mark.parametrize("holding", [None, position(0, "0", current_price="10")])
def test_sell_impact_without_holding(holding):
    """Selling an asset that is not held is rejected."""
    result = calculate_sell_impact(holding, sell(1, "10"))

    assert isinstance(result, InsufficientQuantityError)


def test_sell_impact_oversell():
    """Selling more than held is rejected."""
    result = calculate_sell_impact(position(50, "10"), sell(60, "10"))

    assert isinstance(result, InsufficientQuantityError)


@pytest.mark.parametrize("holding", [None, position(0, "0", current_price="10")])
def test_dividend_impact_without_position_is_ignored(holding):
    """A Dividend with nothing held leaves no position, as replay does."""
    transaction = dividend("5")

    assert calculate_dividend_impact(holding, transaction) is None
    assert replay_ledger([transaction]) is None


def test_dividend_impact_accrues_income_and_updates_price():
    """A Dividend adds income and refreshes the price it carries."""
    delta = calculate_dividend_impact(position(10, "10"), dividend("5", price="11"))

    assert delta.new_quantity == Quantity(10)
    assert delta.new_average_price == brl(10)
    assert delta.new_current_price == brl(11)
    assert delta.new_income_received == brl(5)


def test_wrong_transaction_type_is_rejected():
    """Each calculator accepts only its own transaction type."""
    result = calculate_buy_impact(position(10, "10"), sell(1, "10"))

    assert isinstance(result, NotAllowedError)
    assert "Expected a Buy" in result.message


def test_transaction_from_another_ledger_is_rejected():
    """A transaction for another asset cannot update this position."""
    result = calculate_buy_impact(position(10, "10"), buy(1, "10", asset_id="VALE3"))

    assert isinstance(result, NotAllowedError)


def _random_transaction(rng: random.Random, held: int, offset: int):
    price = f"{rng.randint(100, 9999) / 100:.2f}"
    choice = rng.random()
    if choice < 0.4:
        return buy(rng.randint(1, 50), price, fees=rng.choice(["0", "1.25"]), offset=offset)
    if choice < 0.7:
        # Up to five units past the holding, so some Sells overdraw.
        return sell(rng.randint(1, held + 5), price, offset=offset)
    with_price = rng.random() < 0.5
    return dividend("3.10", price=price if with_price else None, offset=offset)


@pytest.mark.parametrize("seed", range(8))
def test_calculator_matches_replay_for_every_step(seed):
    """calculate(replay(ledger), tx) agrees with replay(ledger + [tx])."""
    rng = random.Random(seed)
    ledger = []
    held = 0

    for offset in range(40):
        transaction = _random_transaction(rng, held, offset)
        before = replay_ledger(ledger)
        after = replay_ledger(ledger + [transaction])

        delta = calculate_transaction_impact(before, transaction)

        if isinstance(after, DomainError):
            assert delta == after
            continue
        ledger.append(transaction)
        if after is None:
            held = 0
            if transaction.is_dividend():
                assert delta is None
            else:
                assert delta.closes_position
        else:
            held = int(after.quantity.value)
            assert delta == PositionDelta.from_position(after)
