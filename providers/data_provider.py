"""
Generic CRUD adapter for /admin/<resource> endpoints.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from client.pipeline import AdminApiClient
from settings import ADMIN_BASE_PATH, DEFAULT_PAGE_SIZE
from .base_provider import BaseProvider
from .pagination import ListResult, normalize_list_response

logger = logging.getLogger(__name__)

# (field, "asc" | "desc")
Sorter = Tuple[str, str]


def build_list_query(
    page: int,
    page_size: int,
    filters: Optional[Dict[str, Any]] = None,
    sorters: Optional[Sequence[Sorter]] = None,
) -> List[Tuple[str, Any]]:
    """Build list query parameters

    Pages are 1-based for callers and 0-based on the wire. Each sorter
    becomes its own ``sort=field,order`` parameter.
    """
    params: List[Tuple[str, Any]] = [("page", page - 1), ("size", page_size)]
    for field_name, value in (filters or {}).items():
        if value is None:
            continue
        params.append((field_name, value))
    for field_name, order in sorters or ():
        params.append(("sort", f"{field_name},{order}"))
    return params


class DataProvider(BaseProvider):
    """CRUD over admin resources such as products, variants and collections"""

    def __init__(self, client: AdminApiClient, api_url: str = ADMIN_BASE_PATH):
        super().__init__(client, api_url)

    async def get_list(
        self,
        resource: str,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        filters: Optional[Dict[str, Any]] = None,
        sorters: Optional[Iterable[Sorter]] = None,
    ) -> ListResult:
        params = build_list_query(page, page_size, filters, list(sorters or ()))
        payload = await self.client.get(self.url(resource), params=params)
        result = normalize_list_response(payload)
        logger.debug(f"Listed {resource}: {len(result.data)} of {result.total}")
        return result

    async def get_one(self, resource: str, record_id: str) -> Dict[str, Any]:
        return await self.client.get(self.url(resource, record_id))

    async def create(self, resource: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.post(self.url(resource), variables)

    async def update(self, resource: str, record_id: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.put(self.url(resource, record_id), variables)

    async def delete_one(self, resource: str, record_id: str) -> Any:
        return await self.client.delete(self.url(resource, record_id))

    def get_api_url(self) -> str:
        return self.client.base_url + self.api_url
