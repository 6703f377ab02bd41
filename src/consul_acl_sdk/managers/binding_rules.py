from typing import List, Optional, Tuple

from ..models import ACLRoleBindingRule, QueryMeta, QueryOptions
from .base import EntityManager


class RoleBindingRuleManager(EntityManager[ACLRoleBindingRule, ACLRoleBindingRule]):
    entity = ACLRoleBindingRule
    list_entity = ACLRoleBindingRule
    path = "/v1/acl/rolebindingrule"
    list_path = "/v1/acl/rolebindingrules"
    absent_ok = True

    async def list(
        self,
        q: Optional[QueryOptions] = None,
        idp_name: Optional[str] = None
    ) -> Tuple[List[ACLRoleBindingRule], QueryMeta]:
        """
        List role binding rules.

        Args:
            q: Optional query options.
            idp_name: Only rules owned by this identity provider.
        """
        params = {"idp": idp_name} if idp_name else None
        return await self._query_list(self.list_path, q, ACLRoleBindingRule, params=params)
