"""
REST adapters that translate admin actions into backend calls.
"""
from providers.base_provider import BaseProvider
from providers.data_provider import DataProvider, build_list_query
from providers.pagination import ListResult, normalize_list_response
from providers.uploads import upload_product_image, upload_product_images
from providers.users import CreateUserRequest, UpdateUserRequest, UserAdminProvider

__all__ = [
    'BaseProvider',
    'DataProvider',
    'ListResult',
    'build_list_query',
    'normalize_list_response',
    'upload_product_image',
    'upload_product_images',
    'CreateUserRequest',
    'UpdateUserRequest',
    'UserAdminProvider',
]
