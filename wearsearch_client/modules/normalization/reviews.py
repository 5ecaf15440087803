"""
Review, review stats and store rating normalizers.
"""

from typing import Any

from wearsearch_client.core.schemas import Rating, Review, ReviewsResponse, ReviewStats
from .envelopes import unwrap_list_envelope
from .guards import (
    as_record,
    get_record,
    is_record,
    now_iso,
    pick,
    to_boolean,
    to_float,
    to_int,
    to_optional_string,
)

RATING_BUCKETS = (5, 4, 3, 2, 1)


def normalize_review(raw: Any) -> Review:
    record = as_record(raw)
    return Review(
        id=pick(record, ("id", "review_id", "reviewId"), to_optional_string) or "",
        product_id=pick(record, ("product_id", "productId", "item_id"), to_optional_string),
        store_id=pick(record, ("store_id", "storeId"), to_optional_string),
        user_id=pick(record, ("user_id", "userId", "user.id"), to_optional_string) or "",
        user_name=pick(record, ("user_name", "userName", "user.name", "user.display_name"), to_optional_string)
        or "Anonymous",
        user_avatar=pick(record, ("user_avatar", "userAvatar", "user.avatar"), to_optional_string),
        rating=pick(record, ("rating", "score"), to_float) or 0,
        title=pick(record, ("title",), to_optional_string),
        text=pick(record, ("text", "content", "comment"), to_optional_string) or "",
        helpful_count=pick(record, ("helpful_count", "helpfulCount", "helpful"), to_int) or 0,
        is_verified_purchase=pick(
            record, ("is_verified_purchase", "isVerifiedPurchase", "verified"), to_boolean
        ) or False,
        created_at=pick(record, ("created_at", "createdAt"), to_optional_string) or now_iso(),
    )


def normalize_review_stats(raw: Any) -> ReviewStats:
    record = as_record(raw)
    distribution = pick(record, ("rating_distribution", "ratingDistribution"))
    if not is_record(distribution):
        distribution = {}
    buckets = {}
    for bucket in RATING_BUCKETS:
        value = distribution.get(str(bucket))
        if value is None:
            value = distribution.get(bucket)
        buckets[bucket] = to_int(value) or 0
    return ReviewStats(
        average_rating=pick(record, ("average_rating", "averageRating"), to_float) or 0,
        total_reviews=pick(record, ("total_reviews", "totalReviews"), to_int) or 0,
        rating_distribution=buckets,
    )


def normalize_reviews_response(raw: Any) -> ReviewsResponse:
    record = as_record(raw)
    reviews = [normalize_review(entry) for entry in unwrap_list_envelope(raw, ("reviews", "items", "data"))]
    total = pick(record, ("total", "count"), to_int)
    return ReviewsResponse(
        reviews=reviews,
        stats=normalize_review_stats(get_record(record, "stats")),
        total=total if total is not None else len(reviews),
    )


def empty_reviews_response() -> ReviewsResponse:
    return ReviewsResponse()


def normalize_rating(raw: Any) -> Rating:
    record = as_record(raw)
    return Rating(
        id=pick(record, ("id", "rating_id", "ratingId"), to_optional_string) or "",
        store_id=pick(record, ("store_id", "storeId", "store.id"), to_optional_string) or "",
        product_id=pick(record, ("product_id", "productId"), to_optional_string),
        user_id=pick(record, ("user_id", "userId", "user.id"), to_optional_string) or "",
        rating=pick(record, ("rating", "score"), to_float) or 0,
        comment=pick(record, ("comment", "text", "content"), to_optional_string),
        created_at=pick(record, ("created_at", "createdAt"), to_optional_string),
        updated_at=pick(record, ("updated_at", "updatedAt"), to_optional_string),
    )
