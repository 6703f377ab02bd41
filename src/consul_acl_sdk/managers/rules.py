from typing import Any

from .base import BaseManager
from ..exceptions import PreconditionError


class RulesManager(BaseManager):
    """Translate legacy rule syntax. Both endpoints speak plain text."""

    async def translate(self, rules: Any) -> str:
        """
        Translate legacy rules to the current syntax.

        Args:
            rules: Rule text as str, bytes or a readable file object. A file is
                read in full with a blocking read before the request is sent,
                so pass the text itself when that matters.

        Returns:
            The translated rules.
        """
        return await self._text("POST", "/v1/acl/rules/translate", body=rules)

    async def translate_token(self, token_id: str) -> str:
        """Translate the rules embedded in a legacy token, addressed by its ID."""
        if not token_id:
            raise PreconditionError("Must specify a token ID to translate")
        return await self._text("GET", f"/v1/acl/rules/translate/{token_id}")
