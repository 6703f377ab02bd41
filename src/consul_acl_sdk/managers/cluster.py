from typing import Optional, Tuple

from .base import BaseManager
from ..models import ACLReplicationStatus, ACLToken, QueryMeta, QueryOptions, WriteMeta


class ClusterManager(BaseManager):
    """Cluster wide ACL operations that are not tied to one entity."""

    async def bootstrap(self) -> Tuple[ACLToken, WriteMeta]:
        """
        Mint the initial management token.

        Only succeeds once per cluster; later calls fail with the agent's error.
        """
        return await self._write("PUT", "/v1/acl/bootstrap", model=ACLToken)

    async def replication(self, q: Optional[QueryOptions] = None) -> Tuple[ACLReplicationStatus, QueryMeta]:
        """Status of ACL replication in the queried datacenter."""
        return await self._query("/v1/acl/replication", q, ACLReplicationStatus)
