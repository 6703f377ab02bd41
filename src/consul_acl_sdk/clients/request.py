from typing import Any, Dict, Optional, Union
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from ..models import QueryOptions, WriteOptions, duration_to_msec

TOKEN_HEADER = "X-Consul-Token"

RawBody = Union[str, bytes, Any]


def escape_segment(value: str) -> str:
    """Percent-encode a caller supplied path segment, slashes included."""
    return quote(value, safe="")


class ACLRequest:
    """Description of one outbound call. Building it performs no I/O."""

    def __init__(self, method: str, path: str):
        self.method = method
        self.path = path
        self.params: Dict[str, str] = {}
        self.headers: Dict[str, str] = {}
        self.obj: Any = None
        self.body: Optional[RawBody] = None

    def set_query_options(self, q: Optional[QueryOptions]) -> "ACLRequest":
        if q is None:
            return self
        if q.datacenter:
            self.params["dc"] = q.datacenter
        if q.allow_stale:
            self.params["stale"] = ""
        if q.require_consistent:
            self.params["consistent"] = ""
        if q.wait_index:
            self.params["index"] = str(q.wait_index)
        if q.wait_time:
            self.params["wait"] = duration_to_msec(q.wait_time)
        if q.token:
            self.headers[TOKEN_HEADER] = q.token
        if q.near:
            self.params["near"] = q.near
        return self

    def set_write_options(self, q: Optional[WriteOptions]) -> "ACLRequest":
        if q is None:
            return self
        if q.datacenter:
            self.params["dc"] = q.datacenter
        if q.token:
            self.headers[TOKEN_HEADER] = q.token
        if q.relay_factor:
            self.params["relay-factor"] = str(q.relay_factor)
        return self

    def set_object(self, obj: Any) -> "ACLRequest":
        if self.body is not None:
            raise ValueError("request already has a raw body")
        self.obj = obj
        return self

    def set_body(self, body: RawBody) -> "ACLRequest":
        """Attach a raw body. File objects are read here, synchronously and in full."""
        if self.obj is not None:
            raise ValueError("request already has an object body")
        if hasattr(body, "read"):
            body = body.read()
        self.body = body
        return self

    def _content(self) -> Optional[bytes]:
        if self.body is None:
            return None
        body = self.body
        if isinstance(body, str):
            body = body.encode("utf-8")
        return body

    def _json(self) -> Any:
        if self.obj is None:
            return None
        if hasattr(self.obj, "to_wire"):
            return self.obj.to_wire()
        if isinstance(self.obj, BaseModel):
            return self.obj.model_dump(mode="json", by_alias=True, exclude_none=True)
        return self.obj

    def build(self, client: httpx.AsyncClient) -> httpx.Request:
        """Materialise the description into an httpx request bound to ``client``."""
        kwargs: Dict[str, Any] = {"params": self.params, "headers": self.headers}
        if self.obj is not None:
            kwargs["json"] = self._json()
        elif self.body is not None:
            kwargs["content"] = self._content()
        return client.build_request(self.method, self.path, **kwargs)

    def __repr__(self) -> str:
        return f"<ACLRequest {self.method} {self.path}>"
