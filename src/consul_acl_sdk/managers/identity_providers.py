from ..models import ACLIdentityProvider, ACLIdentityProviderListEntry
from .base import EntityManager


class IdentityProviderManager(EntityManager[ACLIdentityProvider, ACLIdentityProviderListEntry]):
    """Identity providers, keyed by the caller chosen Name.

    The name is required for every call and is escaped in paths. Listing
    omits the CA certificate and service account JWT.
    """
    entity = ACLIdentityProvider
    list_entity = ACLIdentityProviderListEntry
    path = "/v1/acl/idp"
    list_path = "/v1/acl/idps"
    absent_ok = True
