"""Tests for reading and directly adding reviews."""

from datetime import datetime, timezone

from app.schemas.review import AddReviewRequest
from app.services.reviews import add_review, get_reviews
from tests.factories import make_review


def test_empty_location_returns_empty_page(reviews):
    result = get_reviews(reviews, "nothing-here")

    assert result.reviews == []
    assert result.total_count == 0


def test_reviews_are_newest_first_and_windowed(reviews):
    for review_id, day in (("day-1", 1), ("day-3", 3), ("day-5", 5)):
        reviews.upsert(make_review(review_id, days=day))
    reviews.upsert(make_review("other", location_id="L2", days=4))

    result = get_reviews(reviews, "L1", skip=1, take=1)

    assert [r.id for r in result.reviews] == ["day-3"]
    assert result.total_count == 3


def test_default_window_returns_everything_in_order(reviews):
    for review_id, day in (("a", 2), ("b", 9), ("c", 5)):
        reviews.upsert(make_review(review_id, days=day))

    result = get_reviews(reviews, "L1")

    assert [r.id for r in result.reviews] == ["b", "c", "a"]


def test_add_review_fills_defaults(reviews):
    stored = add_review(reviews, AddReviewRequest(business_id="L1", rating=4))

    assert stored.id
    assert stored.reviewer_name == "Anonymous"
    assert stored.text == ""
    assert stored.review_date is not None
    assert reviews.get(stored.id) is not None


def test_add_review_keeps_given_fields(reviews):
    payload = AddReviewRequest(
        id="manual-1",
        business_id="L1",
        reviewer_name="Bob Johnson",
        rating=5,
        text="Excellent! Highly recommend.",
        review_date=datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc),
        reply="Thank you!",
    )

    stored = add_review(reviews, payload)

    assert stored.id == "manual-1"
    assert stored.review_date == datetime(2024, 5, 1, 9, 0)
    assert stored.reply == "Thank you!"


def test_add_review_accepts_comment_field(reviews):
    payload = AddReviewRequest.model_validate({"businessId": "L1", "rating": 3, "comment": "Okay"})

    stored = add_review(reviews, payload)

    assert stored.text == "Okay"


def test_upsert_preserves_created_at(reviews):
    first = reviews.upsert(make_review("r1", text="first"))
    second = reviews.upsert(make_review("r1", text="edited"))

    assert second.created_at == first.created_at
    assert second.updated_at >= first.updated_at
    assert reviews.get("r1").text == "edited"
    assert reviews.count_for_location("L1") == 1
