from typing import Optional, Tuple

from .base import BaseManager
from ..models import ACLLoginParams, ACLToken, WriteMeta, WriteOptions


class AuthManager(BaseManager):
    """Exchange identity provider credentials for tokens and give them back."""

    async def login(self, params: ACLLoginParams, q: Optional[WriteOptions] = None) -> Tuple[ACLToken, WriteMeta]:
        """
        Log in through an identity provider.

        Args:
            params: Provider name/type and the external bearer credential.
            q: Optional write options.

        Returns:
            Tuple of the newly minted token (AccessorID and SecretID set) and the WriteMeta.
        """
        return await self._write("POST", "/v1/acl/login", q, obj=params, model=ACLToken)

    async def logout(self, q: Optional[WriteOptions] = None) -> WriteMeta:
        """
        Destroy the token used for this call, which must have come from login().

        Args:
            q: Optional write options; ``q.token`` selects the token to destroy.
        """
        _, wm = await self._write("POST", "/v1/acl/logout", q)
        return wm
