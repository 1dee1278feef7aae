"""
Product image uploads.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from client.errors import ApiError
from client.pipeline import AdminApiClient
from settings import UPLOAD_IMAGE_PATH

logger = logging.getLogger(__name__)

UPLOAD_FAILED_MESSAGE = "Failed to upload image"


async def upload_product_image(
    client: AdminApiClient,
    content: bytes,
    filename: str,
    product_id: Optional[str] = None,
    content_type: str = "application/octet-stream",
) -> str:
    """Upload one image as multipart field ``file``

    Args:
        client: Authenticated API client
        content: Raw file bytes
        filename: Name sent with the file part
        product_id: Optional product the image belongs to
        content_type: MIME type of the file part

    Returns:
        Public URL of the stored image

    Raises:
        ApiError: Upload rejected or no URL in the response
    """
    data = {"productId": product_id} if product_id else None
    payload = await client.request_json(
        "POST",
        UPLOAD_IMAGE_PATH,
        data=data,
        files={"file": (filename, content, content_type)},
    )

    url = payload.get("url") if isinstance(payload, dict) else None
    if not url:
        raise ApiError(UPLOAD_FAILED_MESSAGE, payload=payload)

    logger.info(f"Uploaded {filename} to {url}")
    return url


async def upload_product_images(
    client: AdminApiClient,
    files: Sequence[Tuple[str, bytes]],
    product_id: Optional[str] = None,
) -> List[str]:
    """Upload several images, skipping the ones that fail

    Returns:
        URLs of the successful uploads, in input order
    """
    urls: List[str] = []
    for filename, content in files:
        try:
            urls.append(await upload_product_image(client, content, filename, product_id))
        except ApiError as e:
            logger.warning(f"Upload of {filename} failed: {e.message}")
    return urls
