"""
Tests for indicative quotation generation.
"""

from __future__ import annotations

import random

from fundiconnect.application.use_cases.generate_quotation import QuotationGenerator
from fundiconnect.domain.entities.provider import Provider
from fundiconnect.infrastructure.roster.static_roster import DEMO_PROVIDERS

from conftest import FIXED_NOW, FixedRandom

PLUMBER = DEMO_PROVIDERS[0]


def _generator(complexity: float) -> QuotationGenerator:
    return QuotationGenerator(rng=FixedRandom(complexity), clock=lambda: FIXED_NOW)


def test_standard_quotation():
    quotation = _generator(0.6).generate(PLUMBER, "plumbing")

    assert quotation.provider_id == "1"
    assert quotation.provider_name == "John Kamau"
    assert quotation.hours == 2
    assert quotation.duration == "2 hours"
    assert quotation.estimated_cost == 3000
    assert quotation.urgency_fee == 0
    assert quotation.base_rate == 1500
    assert quotation.response_time == "< 30 mins"
    assert quotation.rating == 4.8
    assert quotation.location == "Nairobi, Westlands"
    assert quotation.id == "quote_1_1700000000000"


def test_urgent_quotation_costs_more_for_same_draw():
    normal = _generator(0.9).generate(PLUMBER, "plumbing", urgent=False)
    urgent = _generator(0.9).generate(PLUMBER, "plumbing", urgent=True)

    assert normal.hours == urgent.hours == 3
    assert normal.estimated_cost == 4500
    assert urgent.estimated_cost == 5400
    assert urgent.urgency_fee == 900
    assert urgent.estimated_cost > normal.estimated_cost


def test_hours_stay_within_two_and_three():
    generator = QuotationGenerator(rng=random.Random(7))
    hours = {generator.generate(PLUMBER, "plumbing").hours for _ in range(200)}
    assert hours <= {2, 3}


def test_seeded_generators_agree():
    first = QuotationGenerator(rng=random.Random(42), clock=lambda: FIXED_NOW).generate(PLUMBER, "plumbing")
    second = QuotationGenerator(rng=random.Random(42), clock=lambda: FIXED_NOW).generate(PLUMBER, "plumbing")
    assert first == second


def test_invalid_rate_yields_no_quotation():
    broken = Provider(
        id="9",
        name="Broken",
        category="plumbing",
        rating=4.0,
        reviews=1,
        hourly_rate=0,
        location="Nairobi",
        response_time="< 1 hour",
    )
    generator = _generator(0.6)

    assert generator.generate(broken, "plumbing") is None
    assert [q.provider_id for q in generator.generate_all([broken, PLUMBER], "plumbing")] == ["1"]
