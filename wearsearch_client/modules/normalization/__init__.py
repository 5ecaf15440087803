"""
Response normalization: lenient input, strict output.
"""

from .collections import normalize_collection, normalize_collection_item, normalize_collections
from .envelopes import (
    extract_page_meta,
    get_array_prop,
    normalize_page,
    unwrap_item_envelope,
    unwrap_list_envelope,
    unwrap_success_envelope,
)
from .guards import (
    as_record,
    get_array,
    get_record,
    is_record,
    pick,
    to_boolean,
    to_number,
    to_optional_string,
)
from .products import (
    normalize_brand,
    normalize_product,
    normalize_recommendation,
    normalize_similar_product,
    normalize_store,
)
from .reviews import normalize_rating, normalize_review, normalize_review_stats
from .users import normalize_user, normalize_user_context
from .wishlist import normalize_wishlist_item, normalize_wishlist_response

__all__ = [
    "as_record",
    "extract_page_meta",
    "get_array",
    "get_array_prop",
    "get_record",
    "is_record",
    "normalize_brand",
    "normalize_collection",
    "normalize_collection_item",
    "normalize_collections",
    "normalize_page",
    "normalize_product",
    "normalize_rating",
    "normalize_recommendation",
    "normalize_review",
    "normalize_review_stats",
    "normalize_similar_product",
    "normalize_store",
    "normalize_user",
    "normalize_user_context",
    "normalize_wishlist_item",
    "normalize_wishlist_response",
    "pick",
    "to_boolean",
    "to_number",
    "to_optional_string",
    "unwrap_item_envelope",
    "unwrap_list_envelope",
    "unwrap_success_envelope",
]
