from typing import Optional

from .http import HTTPACLClient
from ..config import settings

class ACLClientFactory:
    """Factory for creating HTTPACLClient instances."""

    @staticmethod
    def create(
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        datacenter: Optional[str] = None,
        timeout: Optional[float] = None,
        **kwargs
    ) -> HTTPACLClient:
        """
        Create a client with explicit configuration.
        """
        if not base_url:
            raise ValueError("base_url is required")

        return HTTPACLClient(
            base_url=base_url,
            token=token,
            datacenter=datacenter,
            timeout=timeout if timeout is not None else settings.TIMEOUT,
            **kwargs
        )

    @staticmethod
    def from_env(**kwargs) -> HTTPACLClient:
        """
        Create a client from the CONSUL_* environment variables.

        Explicit keyword arguments win over the environment.
        """
        base_url = kwargs.pop("base_url", settings.BASE_URL)
        token = kwargs.pop("token", settings.HTTP_TOKEN)
        datacenter = kwargs.pop("datacenter", settings.DATACENTER)
        timeout = kwargs.pop("timeout", settings.TIMEOUT)
        if "transport" not in kwargs:
            kwargs.setdefault("verify", settings.VERIFY)

        return ACLClientFactory.create(
            base_url=base_url,
            token=token,
            datacenter=datacenter,
            timeout=timeout,
            **kwargs
        )
