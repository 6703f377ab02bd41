from typing import List, Optional, Tuple

from ..models import ACLToken, ACLTokenListEntry, QueryMeta, QueryOptions, WriteMeta, WriteOptions
from .base import EntityManager, require_key


class TokenManager(EntityManager[ACLToken, ACLTokenListEntry]):
    """Tokens, keyed by the server assigned AccessorID.

    Reads of a missing token raise rather than returning None.
    """
    entity = ACLToken
    list_entity = ACLTokenListEntry
    path = "/v1/acl/token"
    list_path = "/v1/acl/tokens"

    async def read_self(self, q: Optional[QueryOptions] = None) -> Tuple[ACLToken, QueryMeta]:
        """
        Read the token used to authenticate this call.

        Args:
            q: Optional query options; ``q.token`` overrides the client token.

        Returns:
            Tuple of the token and the QueryMeta.
        """
        return await self._query(f"{self.path}/self", q, ACLToken)

    async def clone(
        self,
        accessor_id: str,
        description: str = "",
        q: Optional[WriteOptions] = None
    ) -> Tuple[ACLToken, WriteMeta]:
        """
        Clone a token with the same links but new AccessorID/SecretID.

        Args:
            accessor_id: Token to clone.
            description: Description for the clone; empty keeps the original's.
            q: Optional write options.
        """
        require_key(ACLToken, accessor_id, "Cloning")
        return await self._write(
            "PUT",
            f"{self.path}/{accessor_id}/clone",
            q,
            obj={"Description": description},
            model=ACLToken,
        )

    async def list(
        self,
        q: Optional[QueryOptions] = None,
        policy: Optional[str] = None,
        role: Optional[str] = None
    ) -> Tuple[List[ACLTokenListEntry], QueryMeta]:
        """
        List tokens. SecretIDs are never included.

        Args:
            q: Optional query options.
            policy: Only tokens linked to this policy ID.
            role: Only tokens linked to this role ID.
        """
        params = {}
        if policy:
            params["policy"] = policy
        if role:
            params["role"] = role
        return await self._query_list(self.list_path, q, ACLTokenListEntry, params=params)
