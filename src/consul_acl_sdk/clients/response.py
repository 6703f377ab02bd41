"""
Response handling: classify the status, then decode the body.

Classification is tri-state. A 2xx is success, a 404 is "absent" when the
caller says absence is a valid outcome, anything else raises. Decoders read the
body to completion; the caller owns closing the response.
"""
import logging
from datetime import timedelta
from typing import List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from ..exceptions import ACLApiError, ACLDecodeError, PermissionDeniedError
from ..models import QueryMeta

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class CallResult:
    """Outcome of one dispatched and classified request."""

    def __init__(self, found: bool, request_time: timedelta, response: httpx.Response):
        self.found = found
        self.request_time = request_time
        self.response = response


async def require_ok(response: httpx.Response, absent_ok: bool = False) -> bool:
    """
    Classify a response.

    Args:
        response: The raw (possibly still streaming) response.
        absent_ok: Treat 404 as a valid "not found" outcome instead of an error.

    Returns:
        True on success, False when absent_ok is set and the entity does not exist.

    Raises:
        ACLApiError: For any other status. The body is closed before raising.
    """
    if response.is_success:
        return True

    if absent_ok and response.status_code == 404:
        await response.aclose()
        return False

    try:
        await response.aread()
        detail = response.text.strip()
    finally:
        await response.aclose()

    logger.debug(f"{response.request.method} {response.request.url.path} failed with {response.status_code}")
    if response.status_code == 403:
        raise PermissionDeniedError(response.status_code, detail)
    raise ACLApiError(response.status_code, detail)


async def _read(response: httpx.Response) -> bytes:
    await response.aread()
    return response.content


async def decode_body(response: httpx.Response, model: Type[M]) -> M:
    content = await _read(response)
    try:
        return model.model_validate_json(content)
    except ValidationError as e:
        raise ACLDecodeError(f"Failed to decode {model.__name__} response: {e}") from e


async def decode_list(response: httpx.Response, model: Type[M]) -> List[M]:
    content = await _read(response)
    try:
        return TypeAdapter(List[model]).validate_json(content)
    except ValidationError as e:
        raise ACLDecodeError(f"Failed to decode {model.__name__} list response: {e}") from e


async def decode_first(response: httpx.Response, model: Type[M]) -> Optional[M]:
    """Decode an array-wrapped single entity; an empty array means not found."""
    entries = await decode_list(response, model)
    if entries:
        return entries[0]
    return None


async def read_text(response: httpx.Response) -> str:
    try:
        content = await _read(response)
        return content.decode(response.encoding or "utf-8")
    except (httpx.StreamError, UnicodeDecodeError) as e:
        raise ACLDecodeError(f"Failed to read translated rule body: {e}") from e


def parse_query_meta(response: httpx.Response, request_time: timedelta) -> QueryMeta:
    """Build QueryMeta from the X-Consul-* headers."""
    headers = response.headers
    try:
        last_index = int(headers.get("X-Consul-Index", "0") or 0)
        last_contact = timedelta(milliseconds=int(headers.get("X-Consul-LastContact", "0") or 0))
    except ValueError as e:
        raise ACLDecodeError(f"Failed to parse query metadata: {e}") from e

    return QueryMeta(
        last_index=last_index,
        last_contact=last_contact,
        known_leader=headers.get("X-Consul-KnownLeader") == "true",
        address_translation_enabled=headers.get("X-Consul-Translate-Addresses") == "true",
        request_time=request_time,
    )
