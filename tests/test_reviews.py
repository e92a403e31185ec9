"""Review card payloads: friend activity versus per-title reviews."""
from __future__ import annotations

from cinematch.schemas import FriendActivityReview, MediaDetailsWithReviews, UserReview, parse_review_like


def test_payload_with_title_is_friend_activity() -> None:
    review = parse_review_like(
        {"userId": "u2", "userName": "Luis", "tmdbId": 550, "mediaType": "movie", "posterPath": "/f.jpg", "rating": 4}
    )
    assert isinstance(review, FriendActivityReview)
    assert review.tmdb_id == 550
    assert review.has_text is False


def test_payload_without_title_is_user_review() -> None:
    review = parse_review_like({"userId": "u2", "review": "  Muy buena  ", "watchedAt": "2025-11-07T00:00:00Z"})
    assert isinstance(review, UserReview)
    assert review.has_text
    assert review.watched_at is not None and review.watched_at.year == 2025


def test_details_with_reviews_keeps_cached_fields() -> None:
    details = MediaDetailsWithReviews.model_validate(
        {"tmdbId": 550, "title": "Fight Club", "reviews": [{"userId": "u1", "rating": 5}]}
    )
    assert details.reviews[0].kind == "user_review"
    assert details.model_extra == {"tmdbId": 550, "title": "Fight Club"}
