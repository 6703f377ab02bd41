"""
Deprecated single-type token API.

These endpoints predate tokens/policies/roles and address tokens by a single
ID that doubles as the secret. Kept for clusters still running legacy ACLs;
new code should use ``client.tokens``.
"""
import warnings
from typing import List, Optional, Tuple

from .base import BaseManager
from ..exceptions import PreconditionError
from ..models import ACLEntry, ACLEntryID, QueryMeta, QueryOptions, WriteMeta, WriteOptions


def _deprecated(replacement: str) -> None:
    warnings.warn(
        f"legacy ACL endpoints are deprecated, use {replacement} instead",
        DeprecationWarning,
        stacklevel=3,
    )


def _require_id(acl_id: str) -> None:
    if not acl_id:
        raise PreconditionError("Must specify an ID for legacy ACL operations")


class LegacyACLManager(BaseManager):

    async def create(self, entry: ACLEntry, q: Optional[WriteOptions] = None) -> Tuple[str, WriteMeta]:
        """Create a legacy token and return its ID."""
        _deprecated("tokens.create")
        out, wm = await self._write("PUT", "/v1/acl/create", q, obj=entry, model=ACLEntryID)
        return out.id, wm

    async def update(self, entry: ACLEntry, q: Optional[WriteOptions] = None) -> WriteMeta:
        _deprecated("tokens.update")
        _require_id(entry.id)
        _, wm = await self._write("PUT", "/v1/acl/update", q, obj=entry)
        return wm

    async def destroy(self, acl_id: str, q: Optional[WriteOptions] = None) -> WriteMeta:
        _deprecated("tokens.delete")
        _require_id(acl_id)
        _, wm = await self._write("PUT", f"/v1/acl/destroy/{acl_id}", q)
        return wm

    async def clone(self, acl_id: str, q: Optional[WriteOptions] = None) -> Tuple[str, WriteMeta]:
        """Clone a legacy token and return the new ID."""
        _deprecated("tokens.clone")
        _require_id(acl_id)
        out, wm = await self._write("PUT", f"/v1/acl/clone/{acl_id}", q, model=ACLEntryID)
        return out.id, wm

    async def info(self, acl_id: str, q: Optional[QueryOptions] = None) -> Tuple[Optional[ACLEntry], QueryMeta]:
        """
        Look up a legacy token.

        The agent answers with an array; an empty one means the token does not exist.
        """
        _deprecated("tokens.read")
        _require_id(acl_id)
        return await self._query_first(f"/v1/acl/info/{acl_id}", q, ACLEntry)

    async def list(self, q: Optional[QueryOptions] = None) -> Tuple[List[ACLEntry], QueryMeta]:
        _deprecated("tokens.list")
        return await self._query_list("/v1/acl/list", q, ACLEntry)
