"""HTTP layer tests with the stores and review source overridden."""

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_business_repository, get_review_repository, get_review_source
from app.core.exceptions import GoogleApiError
from app.main import app
from tests.factories import make_business, make_review


@pytest.fixture
def client(businesses, reviews, review_source):
    app.dependency_overrides[get_business_repository] = lambda: businesses
    app.dependency_overrides[get_review_repository] = lambda: reviews
    app.dependency_overrides[get_review_source] = lambda: review_source
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/api/health").json() == {"status": "ok"}


def test_link_business(client, businesses):
    response = client.post(
        "/api/businesses/link",
        json={
            "profileBusinessId": "profile-1",
            "googleLocationId": "accounts/123/locations/L1",
            "businessName": "Cafe",
            "location": "Seoul",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["googleBusiness"]["locationId"] == "L1"
    assert body["googleBusiness"]["linkedProfileId"] == "profile-1"
    assert businesses.get("L1").address == "Seoul"


@pytest.mark.parametrize(
    "payload",
    [
        {"profileBusinessId": "", "googleLocationId": "L1", "businessName": "Cafe"},
        {"profileBusinessId": "00000000-0000-0000-0000-000000000000", "googleLocationId": "L1", "businessName": "Cafe"},
        {"profileBusinessId": "profile-1", "googleLocationId": " ", "businessName": "Cafe"},
    ],
)
def test_link_business_requires_ids(client, businesses, payload):
    response = client.post("/api/businesses/link", json=payload)

    assert response.status_code == 400
    assert businesses.list_all() == []


def test_ingest_reviews(client, review_source, reviews, businesses):
    businesses.create(make_business("L1"))
    review_source.fetch_reviews.return_value = [make_review("r1"), make_review("r2")]

    response = client.post("/api/reviews/ingest", json={"businessId": "L1"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["reviewsIngested"] == 2
    assert body["syncTime"] is not None
    assert reviews.count_for_location("L1") == 2


def test_ingest_requires_identifier(client, review_source):
    response = client.post("/api/reviews/ingest", json={"businessId": "", "profileBusinessId": None})

    assert response.status_code == 400
    review_source.fetch_reviews.assert_not_called()


def test_ingest_failure_returns_500_with_result(client, review_source):
    review_source.fetch_reviews.side_effect = GoogleApiError(403, "forbidden")

    response = client.post("/api/reviews/ingest", json={"businessId": "L1"})

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["reviewsIngested"] == 0
    assert body["errorKind"] == "remote"
    assert "403" in body["errorMessage"]


def test_get_reviews_pages_newest_first(client, reviews):
    for review_id, day in (("day-1", 1), ("day-3", 3), ("day-5", 5)):
        reviews.upsert(make_review(review_id, days=day))

    response = client.get("/api/reviews/L1", params={"skip": 1, "take": 1})

    assert response.status_code == 200
    body = response.json()
    assert body["totalCount"] == 3
    assert [r["id"] for r in body["reviews"]] == ["day-3"]
    assert body["reviews"][0]["reviewerName"] == "John Doe"


def test_get_reviews_falls_back_on_bad_paging(client, reviews):
    for index in range(3):
        reviews.upsert(make_review(f"r{index}", days=index))

    response = client.get("/api/reviews/L1", params={"skip": "abc", "take": "-5"})

    assert response.status_code == 200
    assert len(response.json()["reviews"]) == 3


def test_get_reviews_empty(client):
    response = client.get("/api/reviews/unknown")

    assert response.status_code == 200
    assert response.json() == {"reviews": [], "totalCount": 0}


def test_add_review(client, reviews):
    response = client.post(
        "/api/reviews/add",
        json={"businessId": "L1", "reviewerName": "Kim", "rating": 4, "text": "좋아요"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    stored = reviews.get(body["reviewId"])
    assert stored.location_id == "L1"
    assert stored.rating == 4


def test_add_review_reads_comment(client, reviews):
    response = client.post("/api/reviews/add", json={"businessId": "L1", "rating": 5, "comment": "Great service!"})

    assert response.status_code == 200
    assert reviews.get(response.json()["reviewId"]).text == "Great service!"


def test_add_review_requires_business(client, reviews):
    response = client.post("/api/reviews/add", json={"businessId": "", "rating": 4})

    assert response.status_code == 400
    assert reviews.count_for_location("") == 0


def test_sweep(client, review_source, businesses):
    businesses.create(make_business("L1"))
    businesses.create(make_business("L2"))
    review_source.fetch_reviews.return_value = []

    response = client.post("/api/reviews/sweep")

    assert response.status_code == 200
    body = response.json()
    assert body["businessesProcessed"] == 2
    assert body["failures"] == 0


def test_missing_credentials_returns_503(businesses, reviews):
    app.dependency_overrides[get_business_repository] = lambda: businesses
    app.dependency_overrides[get_review_repository] = lambda: reviews
    app.state.review_source = None
    try:
        response = TestClient(app).post("/api/reviews/ingest", json={"businessId": "L1"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
    assert "credentials" in response.json()["detail"]


def test_missing_ids_is_400_even_without_credentials(businesses, reviews):
    app.dependency_overrides[get_business_repository] = lambda: businesses
    app.dependency_overrides[get_review_repository] = lambda: reviews
    app.state.review_source = None
    try:
        response = TestClient(app).post("/api/reviews/ingest", json={"businessId": " "})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 400


def test_sweep_without_credentials_returns_503(businesses, reviews):
    app.dependency_overrides[get_business_repository] = lambda: businesses
    app.dependency_overrides[get_review_repository] = lambda: reviews
    app.state.review_source = None
    try:
        response = TestClient(app).post("/api/reviews/sweep")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
