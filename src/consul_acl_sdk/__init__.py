from typing import Optional

from .clients import HTTPACLClient, ACLClientFactory
from .exceptions import ACLError, PreconditionError, ACLApiError, PermissionDeniedError, ACLDecodeError

from .models import (
    ACL_CLIENT_TYPE,
    ACL_MANAGEMENT_TYPE,
    IDP_TYPE_KUBERNETES,
    KeyPolicy,
    ACLToken,
    ACLTokenListEntry,
    ACLTokenPolicyLink,
    ACLTokenRoleLink,
    ACLServiceIdentity,
    ACLPolicy,
    ACLPolicyListEntry,
    ACLRole,
    ACLRolePolicyLink,
    ACLIdentityProvider,
    ACLIdentityProviderListEntry,
    ACLRoleBindingRule,
    ACLRoleBindingRuleMatch,
    ACLLoginParams,
    ACLReplicationStatus,
    ACLEntry,
    QueryOptions,
    WriteOptions,
    QueryMeta,
    WriteMeta,
)


def ACLClient(base_url: Optional[str] = None, **kwargs) -> HTTPACLClient:
    """Convenience function to create a client.

    Usage:
        client = ACLClient("http://127.0.0.1:8500", token="...")  # explicit address
        client = ACLClient(base_url="https://consul.internal:8501")  # same as above
        client = ACLClient()  # CONSUL_HTTP_ADDR / CONSUL_HTTP_TOKEN from the environment
    """
    if base_url:
        return ACLClientFactory.create(base_url=base_url, **kwargs)
    return ACLClientFactory.from_env(**kwargs)


__all__ = [
    "HTTPACLClient",
    "ACLClientFactory",
    "ACLClient",
    "ACLError",
    "PreconditionError",
    "ACLApiError",
    "PermissionDeniedError",
    "ACLDecodeError",
    "ACL_CLIENT_TYPE",
    "ACL_MANAGEMENT_TYPE",
    "IDP_TYPE_KUBERNETES",
    "KeyPolicy",
    "ACLToken",
    "ACLTokenListEntry",
    "ACLTokenPolicyLink",
    "ACLTokenRoleLink",
    "ACLServiceIdentity",
    "ACLPolicy",
    "ACLPolicyListEntry",
    "ACLRole",
    "ACLRolePolicyLink",
    "ACLIdentityProvider",
    "ACLIdentityProviderListEntry",
    "ACLRoleBindingRule",
    "ACLRoleBindingRuleMatch",
    "ACLLoginParams",
    "ACLReplicationStatus",
    "ACLEntry",
    "QueryOptions",
    "WriteOptions",
    "QueryMeta",
    "WriteMeta",
]
