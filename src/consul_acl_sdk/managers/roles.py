from typing import Optional, Tuple

from ..clients.request import escape_segment
from ..exceptions import PreconditionError
from ..models import ACLRole, QueryMeta, QueryOptions
from .base import EntityManager


class RoleManager(EntityManager[ACLRole, ACLRole]):
    entity = ACLRole
    list_entity = ACLRole
    path = "/v1/acl/role"
    list_path = "/v1/acl/roles"
    absent_ok = True

    async def read_by_name(self, name: str, q: Optional[QueryOptions] = None) -> Tuple[Optional[ACLRole], QueryMeta]:
        """
        Get a role by name.

        Args:
            name: Role name, escaped before being placed in the path.
            q: Optional query options.

        Returns:
            Tuple of the role (None if no role has that name) and the QueryMeta.
        """
        if not name:
            raise PreconditionError("Must specify a Name in Role Read")
        return await self._query(f"{self.path}/name/{escape_segment(name)}", q, ACLRole, absent_ok=True)
