"""
User and role management under /api/v1/internal/admin/users.
"""
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from client.pipeline import AdminApiClient
from settings import USERS_BASE_PATH, DEFAULT_PAGE_SIZE
from .base_provider import BaseProvider
from .pagination import ListResult, normalize_list_response

logger = logging.getLogger(__name__)


class CreateUserRequest(BaseModel):
    """New admin user"""
    model_config = ConfigDict(populate_by_name=True)

    email: str
    password: str = Field(min_length=8)
    role: str = Field(min_length=1)
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    is_active: bool = Field(default=True, alias="isActive")

    @field_validator("email")
    @classmethod
    def email_has_at(cls, value: str) -> str:
        value = value.strip()
        local, _, domain = value.partition("@")
        if not local or "." not in domain:
            raise ValueError("Invalid email address")
        return value


class UpdateUserRequest(BaseModel):
    """Editable user fields"""
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    roles: Optional[List[str]] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    is_active: Optional[bool] = Field(default=None, alias="isActive")


class UserAdminProvider(BaseProvider):
    """Adapter for user administration endpoints"""

    def __init__(self, client: AdminApiClient, api_url: str = USERS_BASE_PATH):
        super().__init__(client, api_url)

    async def list_users(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        query: Optional[str] = None,
        sort_field: Optional[str] = None,
        sort_order: str = "asc",
    ) -> ListResult:
        params: Dict[str, Any] = {"limit": page_size, "offset": (page - 1) * page_size}
        if query:
            params["q"] = query
        if sort_field:
            params["order"] = f"{sort_field}.{sort_order}"
        return normalize_list_response(await self.client.get(self.url(), params=params))

    async def get_user(self, user_id: str) -> Dict[str, Any]:
        return await self.client.get(self.url(user_id))

    async def list_roles(self) -> Any:
        return await self.client.get(self.url("roles"))

    async def create_user(self, request: CreateUserRequest) -> Dict[str, Any]:
        logger.info(f"Creating user {request.email}")
        return await self.client.post(self.url("create"), request.model_dump(by_alias=True))

    async def update_user(self, user_id: str, request: UpdateUserRequest) -> Dict[str, Any]:
        body = request.model_dump(by_alias=True, exclude_none=True)
        return await self.client.put(self.url(user_id), body)

    async def reset_password(self, user_id: str, new_password: str) -> Any:
        if len(new_password) < 8:
            raise ValueError("Password must be at least 8 characters")
        return await self.client.post(self.url(user_id, "reset-password"), {"newPassword": new_password})

    async def deactivate_user(self, user_id: str) -> Any:
        logger.info(f"Deactivating user {user_id}")
        return await self.client.post(self.url(user_id, "deactivate"))

    async def reactivate_user(self, user_id: str) -> Any:
        logger.info(f"Reactivating user {user_id}")
        return await self.client.post(self.url(user_id, "reactivate"))
