"""
Collections API Service

Named folders of favorite products. Delete and item writes retry once against
the legacy ``/api/user/collections`` routes when the v1 route answers 404.
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar, Union

from wearsearch_client.core.exceptions import ApiError
from wearsearch_client.core.schemas import Collection, CollectionItem
from wearsearch_client.modules.http.client import ApiClient
from wearsearch_client.modules.http.endpoints import UserEndpoints
from wearsearch_client.modules.http.recovery import recover_with
from wearsearch_client.modules.normalization.collections import (
    extract_collection_items,
    has_product_reference,
    normalize_collection,
    normalize_collection_item,
    normalize_collections,
    unwrap_collection_payload,
)
from wearsearch_client.modules.normalization.guards import is_record
from wearsearch_client.modules.observability.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def _soft_item_errors(error: ApiError) -> bool:
    return error.status in (401, 403, 404) or error.is_server_error()


class CollectionsService:
    def __init__(self, api: ApiClient, legacy: Optional[ApiClient] = None):
        self.api = api
        self.legacy = legacy

    async def _with_legacy_retry(
        self,
        call: Callable[[ApiClient], Awaitable[T]],
        label: str,
    ) -> T:
        """Run ``call`` on the v1 client; on 404 run it once more on the legacy client."""
        try:
            return await call(self.api)
        except ApiError as e:
            if e.status != 404 or self.legacy is None:
                raise
            logger.info(f"[Collections API] {label} not found on v1, retrying legacy route")
            return await call(self.legacy)

    async def get_collections(self) -> List[Collection]:
        try:
            body = await self.api.get(UserEndpoints.COLLECTIONS)
        except ApiError as e:
            logger.error(f"[Collections API] Failed to fetch collections: {e}")
            raise
        return normalize_collections(body)

    async def create_collection(
        self,
        name: str,
        emoji: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Collection:
        payload = {"name": name, "emoji": emoji, "description": description}
        body = await self.api.post(
            UserEndpoints.COLLECTIONS,
            json={key: value for key, value in payload.items() if value is not None},
        )
        return self._collection_from_body(body)

    async def update_collection(self, collection_id: str, updates: Dict[str, Any]) -> Collection:
        body = await self.api.put(UserEndpoints.collection(collection_id), json=updates)
        return self._collection_from_body(body)

    @staticmethod
    def _collection_from_body(body: Any) -> Collection:
        payload = unwrap_collection_payload(body)
        if not is_record(payload):
            raise ApiError("Invalid collection response")
        return normalize_collection(payload)

    async def delete_collection(self, collection_id: str) -> None:
        async def call(client: ApiClient):
            path = (
                UserEndpoints.collection(collection_id)
                if client is self.api
                else UserEndpoints.legacy_collection(collection_id)
            )
            await client.delete(path)

        await self._with_legacy_retry(call, f"delete collection {collection_id}")

    async def get_collection_items(self, collection_id: str, currency: Optional[str] = None) -> List[CollectionItem]:
        body = await recover_with(
            self.api.get(
                UserEndpoints.collection_items(collection_id),
                params={"currency": currency},
            ),
            lambda: [],
            f"[Collections API] get_collection_items {collection_id}",
            when=_soft_item_errors,
        )
        return [
            normalize_collection_item(raw)
            for raw in extract_collection_items(body)
            if has_product_reference(raw)
        ]

    async def add_to_collection(
        self,
        collection_id: str,
        product_id: Union[str, int],
        notes: Optional[str] = None,
    ) -> CollectionItem:
        # Both spellings are sent; the two API generations read different ones
        payload = {
            "product_id": product_id,
            "productId": product_id,
            "collection_id": collection_id,
            "collectionId": collection_id,
            "notes": notes,
        }

        async def call(client: ApiClient):
            path = (
                UserEndpoints.collection_items(collection_id)
                if client is self.api
                else UserEndpoints.legacy_collection_items(collection_id)
            )
            return await client.post(path, json=payload)

        body = await self._with_legacy_retry(call, f"add to collection {collection_id}")
        item = body.get("item") if is_record(body) and body.get("item") is not None else body
        return normalize_collection_item(item)

    async def remove_from_collection(self, collection_id: str, product_id: Union[str, int]) -> None:
        async def call(client: ApiClient):
            path = (
                UserEndpoints.collection_item(collection_id, product_id)
                if client is self.api
                else UserEndpoints.legacy_collection_item(collection_id, product_id)
            )
            await client.delete(path)

        await self._with_legacy_retry(call, f"remove {product_id} from collection {collection_id}")
