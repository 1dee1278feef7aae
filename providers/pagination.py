"""
Normalization of list responses.

List endpoints answer in several shapes:
- Spring pages: {"content": [...], "page": {"totalElements": n}}
  or {"content": [...], "totalElements": n}
- collection listings: {"collections": [...], "count": n}
- user listings: {"users": [...], "count": n, "limit": l, "offset": o}
- bare arrays: [...]
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

ListPayload = Union[List[Dict[str, Any]], Dict[str, Any], None]

ITEM_KEYS = ("content", "collections", "users")


@dataclass
class ListResult:
    """One page of records

    Attributes:
        data: Records of the page
        total: Total number of records across pages
    """
    data: List[Dict[str, Any]] = field(default_factory=list)
    total: int = 0


def normalize_list_response(payload: ListPayload) -> ListResult:
    """Turn any known list shape into a ListResult

    Unknown shapes normalize to an empty result.
    """
    if isinstance(payload, list):
        return ListResult(data=payload, total=len(payload))

    if not isinstance(payload, dict):
        return ListResult()

    data: List[Dict[str, Any]] = []
    for key in ITEM_KEYS:
        items = payload.get(key)
        if isinstance(items, list):
            data = items
            break

    page = payload.get("page")
    if isinstance(page, dict) and page.get("totalElements") is not None:
        total = page["totalElements"]
    elif payload.get("totalElements") is not None:
        total = payload["totalElements"]
    elif payload.get("count") is not None:
        total = payload["count"]
    else:
        total = len(data)

    return ListResult(data=data, total=int(total))
