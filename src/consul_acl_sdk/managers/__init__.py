from .base import BaseManager, EntityManager
from .tokens import TokenManager
from .policies import PolicyManager
from .roles import RoleManager
from .identity_providers import IdentityProviderManager
from .binding_rules import RoleBindingRuleManager
from .auth import AuthManager
from .cluster import ClusterManager
from .rules import RulesManager
from .legacy import LegacyACLManager

__all__ = [
    "BaseManager",
    "EntityManager",
    "TokenManager",
    "PolicyManager",
    "RoleManager",
    "IdentityProviderManager",
    "RoleBindingRuleManager",
    "AuthManager",
    "ClusterManager",
    "RulesManager",
    "LegacyACLManager",
]
