"""
Tests for checkout-time promo code validation.

Verifies that the validator:
- Applies the rules in order and reports the first failure
- Computes percentage and fixed discounts in cents
- Scopes codes to their event or to the organizer's events
"""

from datetime import timedelta

import pytest

from eventops.crud import crud_promo_code
from eventops.models.promo_code import PromoCode
from eventops.schemas.promo_code import PromoCodeCreate
from eventops.services import promo_validation
from eventops.services.promo_validation import calculate_discount, evaluate, format_cents
from eventops.utils.time_utils import utcnow

from tests.utils.auth import create_user
from tests.utils.event import create_random_event


def make_promo(**overrides) -> PromoCode:
    values = {
        "id": "promo_test",
        "code": "SAVE20",
        "discount_type": "percentage",
        "discount_value": 20,
        "is_active": True,
        "used_count": 0,
        "max_uses": None,
        "max_uses_per_email": None,
        "min_order_amount": None,
        "valid_from": None,
        "valid_until": None,
        "description": None,
    }
    values.update(overrides)
    return PromoCode(**values)


class TestCalculateDiscount:
    def test_percentage_discount(self):
        assert calculate_discount("percentage", 20, 10000) == 2000

    def test_percentage_rounds_half_up(self):
        # 15% of 1010 cents is 151.5
        assert calculate_discount("percentage", 15, 1010) == 152

    def test_fixed_discount_is_capped_at_order_amount(self):
        assert calculate_discount("fixed", 1500, 1000) == 1000

    def test_fixed_discount_below_order_amount(self):
        assert calculate_discount("fixed", 500, 1000) == 500

    def test_format_cents(self):
        assert format_cents(1000) == "$10.00"
        assert format_cents(1999) == "$19.99"


class TestEvaluate:
    def setup_method(self):
        self.now = utcnow()

    def test_valid_code_returns_discount(self):
        result = evaluate(make_promo(), 5000, self.now)

        assert result.valid is True
        assert result.error is None
        assert result.code == "SAVE20"
        assert result.discount_amount == 1000

    def test_inactive_code(self):
        result = evaluate(make_promo(is_active=False), 5000, self.now)
        assert result.valid is False
        assert result.error == "This promo code is no longer active"

    def test_not_yet_valid(self):
        promo = make_promo(valid_from=self.now + timedelta(days=1))
        result = evaluate(promo, 5000, self.now)
        assert result.error == "This promo code is not yet valid"

    def test_expired(self):
        promo = make_promo(valid_until=self.now - timedelta(seconds=1))
        result = evaluate(promo, 5000, self.now)
        assert result.error == "This promo code has expired"

    def test_naive_window_bounds_are_treated_as_utc(self):
        naive_past = (self.now - timedelta(hours=1)).replace(tzinfo=None)
        result = evaluate(make_promo(valid_until=naive_past), 5000, self.now)
        assert result.error == "This promo code has expired"

    def test_usage_limit_reached(self):
        promo = make_promo(max_uses=10, used_count=10)
        result = evaluate(promo, 5000, self.now)
        assert result.error == "This promo code has reached its usage limit"

    def test_per_email_limit_reached(self):
        promo = make_promo(max_uses_per_email=1)
        result = evaluate(promo, 5000, self.now, email_usage_count=1)
        assert result.error == "You have already used this promo code"

    def test_per_email_limit_skipped_without_usage_count(self):
        promo = make_promo(max_uses_per_email=1)
        assert evaluate(promo, 5000, self.now).valid is True

    def test_minimum_order_amount(self):
        promo = make_promo(min_order_amount=1000)
        result = evaluate(promo, 500, self.now)

        assert result.valid is False
        assert result.error == "Minimum order amount is $10.00 for this promo code"

    def test_first_failing_rule_wins(self):
        promo = make_promo(is_active=False, max_uses=1, used_count=1, min_order_amount=1000)
        result = evaluate(promo, 500, self.now)
        assert result.error == "This promo code is no longer active"

    def test_fixed_discount_larger_than_order(self):
        promo = make_promo(discount_type="fixed", discount_value=1500)
        result = evaluate(promo, 1000, self.now)
        assert result.valid is True
        assert result.discount_amount == 1000


class TestValidate:
    @pytest.fixture(autouse=True)
    def setup(self, db_session):
        self.db = db_session
        self.organizer = create_user(db_session, email="promo-owner@example.com")
        self.event = create_random_event(db_session, owner_id=self.organizer.id)

    def _create(self, **overrides):
        values = {
            "code": "save20",
            "discount_type": "percentage",
            "discount_value": 20,
        }
        values.update(overrides)
        return crud_promo_code.promo_code.create_for_organizer(
            self.db, obj_in=PromoCodeCreate(**values), organizer_id=self.organizer.id
        )

    def test_unknown_event(self):
        result = promo_validation.validate(self.db, "SAVE20", "evt_missing", 1000)
        assert result.error == "Event not found"

    def test_unknown_code(self):
        result = promo_validation.validate(self.db, "NOPE", self.event.id, 1000)
        assert result.error == "Invalid promo code"

    def test_code_lookup_is_case_insensitive(self):
        self._create(event_id=self.event.id)
        result = promo_validation.validate(self.db, " Save20 ", self.event.id, 10000)
        assert result.valid is True
        assert result.discount_amount == 2000

    def test_organizer_wide_code_applies_to_their_events(self):
        self._create(event_id=None)
        result = promo_validation.validate(self.db, "SAVE20", self.event.id, 10000)
        assert result.valid is True

    def test_code_scoped_to_another_event_is_invalid(self):
        other_event = create_random_event(self.db, owner_id=self.organizer.id)
        self._create(event_id=other_event.id)
        result = promo_validation.validate(self.db, "SAVE20", self.event.id, 10000)
        assert result.error == "Invalid promo code"

    def test_per_email_usage_is_counted(self):
        promo = self._create(event_id=self.event.id, max_uses_per_email=1)
        crud_promo_code.promo_code.record_usage(
            self.db,
            promo=promo,
            order_id="ord_1",
            buyer_email="buyer@example.com",
            discount_applied=200,
        )

        result = promo_validation.validate(
            self.db, "SAVE20", self.event.id, 1000, buyer_email="buyer@example.com"
        )
        assert result.error == "You have already used this promo code"

        other = promo_validation.validate(
            self.db, "SAVE20", self.event.id, 1000, buyer_email="someone@example.com"
        )
        assert other.valid is True
