from typing import TYPE_CHECKING, Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel

from ..clients.request import escape_segment
from ..clients.response import decode_body, decode_first, decode_list, parse_query_meta, read_text
from ..exceptions import PreconditionError
from ..models import KeyPolicy, KeyedEntity, QueryMeta, QueryOptions, WriteMeta, WriteOptions

if TYPE_CHECKING:
    from ..clients.http import HTTPACLClient

M = TypeVar("M", bound=BaseModel)
E = TypeVar("E", bound=KeyedEntity)
L = TypeVar("L", bound=BaseModel)


def _wire_name(model: Type[BaseModel], field: str) -> str:
    return model.model_fields[field].alias or field


def _with_article(word: str) -> str:
    return f"an {word}" if word[:1].upper() in "AEIOU" else f"a {word}"


def require_key(model: Type[KeyedEntity], key: Optional[str], action: str) -> None:
    """Raise unless ``key`` is set; ``action`` ends the message, e.g. "Update"."""
    if not key:
        name = _wire_name(model, model.key_field)
        raise PreconditionError(f"Must specify {_with_article(name)} in {model.entity_label} {action}")


def check_create(entity: KeyedEntity) -> None:
    """Server assigned fields must be empty; a caller assigned key must be present."""
    model = type(entity)
    if model.key_policy is KeyPolicy.CALLER_ASSIGNED:
        require_key(model, getattr(entity, model.key_field), "Creation")
        return
    for field in model.server_fields:
        if getattr(entity, field):
            name = _wire_name(model, field)
            raise PreconditionError(f"Cannot specify {_with_article(name)} in {model.entity_label} Creation")


def check_update(entity: KeyedEntity) -> None:
    model = type(entity)
    require_key(model, getattr(entity, model.key_field), "Update")


class BaseManager:
    def __init__(self, client: "HTTPACLClient"):
        self.client = client

    async def _write(
        self,
        method: str,
        path: str,
        q: Optional[WriteOptions] = None,
        obj: Any = None,
        body: Any = None,
        model: Optional[Type[M]] = None,
    ) -> Tuple[Optional[M], WriteMeta]:
        """
        Execute a write request.

        Args:
            method: HTTP verb.
            path: The API path.
            q: Optional write options.
            obj: Optional object serialized as the JSON body.
            body: Optional raw body.
            model: Entity to decode the response into; None discards the body.

        Returns:
            Tuple of the decoded entity (or None) and the WriteMeta.
        """
        req = self.client.new_request(method, path).set_write_options(q)
        if obj is not None:
            req.set_object(obj)
        if body is not None:
            req.set_body(body)

        async with self.client.call(req) as result:
            wm = WriteMeta(request_time=result.request_time)
            if model is None:
                return None, wm
            return await decode_body(result.response, model), wm

    async def _query(
        self,
        path: str,
        q: Optional[QueryOptions],
        model: Type[M],
        absent_ok: bool = False,
        params: Optional[Dict[str, str]] = None,
    ) -> Tuple[Optional[M], QueryMeta]:
        """
        Execute a GET request for a single entity.

        Args:
            path: The API path.
            q: Optional query options.
            model: Entity type to decode into.
            absent_ok: Return ``(None, meta)`` on 404 instead of raising.
            params: Extra query parameters.

        Returns:
            Tuple of the entity (None when absent) and the QueryMeta.
        """
        req = self.client.new_request("GET", path).set_query_options(q)
        if params:
            req.params.update(params)

        async with self.client.call(req, absent_ok=absent_ok) as result:
            qm = parse_query_meta(result.response, result.request_time)
            if not result.found:
                return None, qm
            return await decode_body(result.response, model), qm

    async def _query_list(
        self,
        path: str,
        q: Optional[QueryOptions],
        model: Type[M],
        params: Optional[Dict[str, str]] = None,
    ) -> Tuple[List[M], QueryMeta]:
        req = self.client.new_request("GET", path).set_query_options(q)
        if params:
            req.params.update(params)

        async with self.client.call(req) as result:
            qm = parse_query_meta(result.response, result.request_time)
            return await decode_list(result.response, model), qm

    async def _query_first(
        self,
        path: str,
        q: Optional[QueryOptions],
        model: Type[M],
    ) -> Tuple[Optional[M], QueryMeta]:
        """GET an endpoint that wraps a single entity in an array."""
        req = self.client.new_request("GET", path).set_query_options(q)

        async with self.client.call(req) as result:
            qm = parse_query_meta(result.response, result.request_time)
            return await decode_first(result.response, model), qm

    async def _text(self, method: str, path: str, body: Any = None) -> str:
        req = self.client.new_request(method, path)
        if body is not None:
            req.set_body(body)

        async with self.client.call(req) as result:
            return await read_text(result.response)


class EntityManager(BaseManager, Generic[E, L]):
    """
    Create/read/update/delete/list for one keyed entity.

    Subclasses set the entity types and paths. Whether the key is percent-encoded
    in paths and how create is validated follow ``entity.key_policy``.
    """
    entity: Type[E]
    list_entity: Type[L]
    path: str
    list_path: str
    # 404 on read means "absent", not an error
    absent_ok: bool = False

    def _item_path(self, key: str) -> str:
        if self.entity.key_policy is KeyPolicy.CALLER_ASSIGNED:
            key = escape_segment(key)
        return f"{self.path}/{key}"

    def _check_type(self, entity: Any) -> None:
        if not isinstance(entity, self.entity):
            raise TypeError(f"expected {self.entity.__name__}, got {type(entity).__name__}")

    async def create(self, entity: E, q: Optional[WriteOptions] = None) -> Tuple[E, WriteMeta]:
        """
        Create an entity.

        Raises:
            PreconditionError: The key field violates the creation contract. No request is sent.
        """
        self._check_type(entity)
        check_create(entity)
        return await self._write("PUT", self.path, q, obj=entity, model=self.entity)

    async def update(self, entity: E, q: Optional[WriteOptions] = None) -> Tuple[E, WriteMeta]:
        """
        Replace an entity. The key field must be set.

        Raises:
            PreconditionError: The key field is empty. No request is sent.
        """
        self._check_type(entity)
        check_update(entity)
        key = getattr(entity, self.entity.key_field)
        return await self._write("PUT", self._item_path(key), q, obj=entity, model=self.entity)

    async def delete(self, key: str, q: Optional[WriteOptions] = None) -> WriteMeta:
        require_key(self.entity, key, "Delete")
        _, wm = await self._write("DELETE", self._item_path(key), q)
        return wm

    async def read(self, key: str, q: Optional[QueryOptions] = None) -> Tuple[Optional[E], QueryMeta]:
        require_key(self.entity, key, "Read")
        return await self._query(self._item_path(key), q, self.entity, absent_ok=self.absent_ok)

    async def list(self, q: Optional[QueryOptions] = None) -> Tuple[List[L], QueryMeta]:
        return await self._query_list(self.list_path, q, self.list_entity)
