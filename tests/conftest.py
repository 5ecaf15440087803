import httpx
import pytest

from wearsearch_client.modules.services import WearsearchClient
from wearsearch_client.modules.session.storage import MemoryStorage

from tests.helpers import BASE_URL, LEGACY_BASE_URL


@pytest.fixture
def make_client():
    def factory(handler, storage=None, **kwargs):
        return WearsearchClient(
            base_url=BASE_URL,
            legacy_base_url=LEGACY_BASE_URL,
            storage=storage if storage is not None else MemoryStorage(),
            transport=httpx.MockTransport(handler),
            **kwargs,
        )
    return factory
