from ..models import ACLPolicy, ACLPolicyListEntry
from .base import EntityManager


class PolicyManager(EntityManager[ACLPolicy, ACLPolicyListEntry]):
    """Policies. Listing omits the rule text; read a policy by ID for it."""
    entity = ACLPolicy
    list_entity = ACLPolicyListEntry
    path = "/v1/acl/policy"
    list_path = "/v1/acl/policies"
