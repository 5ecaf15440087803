"""
User, auth, user-context and search normalizers.
"""

from typing import Any, List

from wearsearch_client.core.schemas import (
    ActionResult,
    AuthResult,
    BrandAccess,
    EntityRef,
    FavoriteStatus,
    PopularQuery,
    SearchHistoryItem,
    StoreAccess,
    TeamMember,
    User,
    UserContext,
)
from .guards import (
    as_record,
    get_record,
    is_record,
    now_iso,
    pick,
    to_boolean,
    to_int,
    to_optional_string,
)

DASHBOARD_TYPES = ("super_admin", "brand_owner", "store_owner", "store_manager", "user")
ADMIN_ROLES = {"admin", "super_admin", "superadmin"}


def normalize_user(raw: Any) -> User:
    record = as_record(raw)
    return User(
        id=pick(record, ("id", "user_id", "userId"), to_optional_string) or "",
        email=pick(record, ("email",), to_optional_string),
        username=pick(record, ("username", "user_name"), to_optional_string),
        display_name=pick(record, ("display_name", "displayName", "name"), to_optional_string),
        role=pick(record, ("role",), to_optional_string) or "user",
        avatar=pick(record, ("avatar", "avatar_url", "avatarUrl"), to_optional_string),
        bio=pick(record, ("bio",), to_optional_string),
        created_at=pick(record, ("created_at", "createdAt"), to_optional_string),
    )


def normalize_auth_result(raw: Any) -> AuthResult:
    record = as_record(raw)
    user = pick(record, ("user", "data.user"))
    return AuthResult(
        token=pick(record, ("access_token", "token", "accessToken"), to_optional_string),
        refresh_token=pick(record, ("refresh_token", "refreshToken"), to_optional_string),
        expires_in=pick(record, ("expires_in", "expiresIn"), to_int),
        user=normalize_user(user) if is_record(user) else None,
        message=pick(record, ("message",), to_optional_string),
    )


def normalize_entity_ref(raw: Any) -> EntityRef:
    record = as_record(raw)
    return EntityRef(
        id=pick(record, ("id", "store_id", "brand_id"), to_optional_string) or "",
        name=pick(record, ("name", "title"), to_optional_string) or "",
        logo_url=pick(record, ("logo_url", "logoUrl", "logo"), to_optional_string),
    )


def _refs(raw: Any) -> List[EntityRef]:
    if not isinstance(raw, list):
        return []
    return [normalize_entity_ref(entry) for entry in raw if is_record(entry)]


def _merge_refs(*groups: List[EntityRef]) -> List[EntityRef]:
    seen = set()
    merged = []
    for group in groups:
        for ref in group:
            if ref.id in seen:
                continue
            seen.add(ref.id)
            merged.append(ref)
    return merged


def derive_dashboard_type(context: UserContext) -> str:
    if context.is_admin:
        return "super_admin"
    if context.is_brand_owner:
        return "brand_owner"
    if context.is_store_owner:
        return "store_owner"
    if context.is_store_manager:
        return "store_manager"
    return "user"


def normalize_user_context(raw: Any) -> UserContext:
    """
    User context with ownership relationships.

    ``dashboard_type`` is taken from the payload when it is a known tag,
    otherwise derived from the role flags and ownership lists.
    """
    record = as_record(raw)
    stores = get_record(record, "stores") or {}
    brands = get_record(record, "brands") or {}

    roles_raw = record.get("roles")
    roles = [role for role in (to_optional_string(entry) for entry in roles_raw) if role] if isinstance(roles_raw, list) else []
    single_role = pick(record, ("role",), to_optional_string)
    if single_role and single_role not in roles:
        roles.append(single_role)

    owned_stores = _refs(stores.get("owned"))
    managed_stores = _refs(stores.get("managed"))
    all_stores = _refs(stores.get("all")) or _merge_refs(owned_stores, managed_stores)
    owned_brands = _refs(brands.get("owned"))
    managed_brands = _refs(brands.get("managed"))

    context = UserContext(
        user_id=pick(record, ("user_id", "userId", "id"), to_optional_string) or "",
        roles=roles,
        is_admin=pick(record, ("is_admin", "isAdmin"), to_boolean)
        or any(role.lower() in ADMIN_ROLES for role in roles),
        is_store_owner=pick(record, ("is_store_owner", "isStoreOwner"), to_boolean) or bool(owned_stores),
        is_brand_owner=pick(record, ("is_brand_owner", "isBrandOwner"), to_boolean) or bool(owned_brands),
        is_store_manager=pick(record, ("is_store_manager", "isStoreManager"), to_boolean) or bool(managed_stores),
        stores=StoreAccess(owned=owned_stores, managed=managed_stores, all=all_stores),
        brands=BrandAccess(owned=owned_brands, managed=managed_brands),
    )

    dashboard_type = pick(record, ("dashboard_type", "dashboardType"), to_optional_string)
    context.dashboard_type = dashboard_type if dashboard_type in DASHBOARD_TYPES else derive_dashboard_type(context)
    return context


def normalize_team_member(raw: Any) -> TeamMember:
    record = as_record(raw)
    return TeamMember(
        user_id=pick(record, ("user_id", "userId", "id"), to_optional_string) or "",
        email=pick(record, ("email", "user.email"), to_optional_string) or "",
        name=pick(record, ("name", "display_name", "user.name"), to_optional_string),
        role=pick(record, ("role",), to_optional_string) or "manager",
        added_at=pick(record, ("added_at", "addedAt", "created_at"), to_optional_string) or now_iso(),
    )


def normalize_search_history_item(raw: Any) -> SearchHistoryItem:
    record = as_record(raw)
    return SearchHistoryItem(
        query=pick(record, ("query",), to_optional_string) or "",
        results_count=pick(record, ("results_count", "resultsCount"), to_int),
        searched_at=pick(record, ("searched_at", "searchedAt"), to_optional_string) or now_iso(),
    )


def normalize_popular_query(raw: Any) -> PopularQuery:
    record = as_record(raw)
    return PopularQuery(
        query=pick(record, ("query",), to_optional_string) or "",
        count=pick(record, ("count", "search_count"), to_int) or 0,
    )


def normalize_favorite_status(raw: Any) -> FavoriteStatus:
    record = as_record(raw)
    return FavoriteStatus(
        is_favorited=pick(record, ("is_favorited", "isFavorited", "favorited"), to_boolean) or False,
        favorite_id=pick(record, ("favorite_id", "favoriteId"), to_optional_string),
    )


def normalize_action_result(raw: Any) -> ActionResult:
    record = as_record(raw)
    success = pick(record, ("success",), to_boolean)
    return ActionResult(
        success=True if success is None else success,
        message=pick(record, ("message",), to_optional_string) or "",
    )
