from .http import HTTPACLClient
from .factory import ACLClientFactory
from .request import ACLRequest
from .response import CallResult

__all__ = [
    "HTTPACLClient",
    "ACLClientFactory",
    "ACLRequest",
    "CallResult",
]
