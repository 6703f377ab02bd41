import httpx
import logging
import time
from datetime import timedelta
from typing import Optional, Dict, AsyncIterator, Tuple
from contextlib import asynccontextmanager

from .request import ACLRequest, TOKEN_HEADER
from .response import CallResult, require_ok

# HTTP Managers
from ..managers.tokens import TokenManager
from ..managers.policies import PolicyManager
from ..managers.roles import RoleManager
from ..managers.identity_providers import IdentityProviderManager
from ..managers.binding_rules import RoleBindingRuleManager
from ..managers.auth import AuthManager
from ..managers.cluster import ClusterManager
from ..managers.rules import RulesManager
from ..managers.legacy import LegacyACLManager

logger = logging.getLogger(__name__)

class HTTPACLClient:
    """HTTP client for the agent ACL endpoints.

    The client holds configuration only (base URL, default token and
    datacenter). Every call builds its own request and closes its own
    response, so one instance can be shared between concurrent tasks.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        datacenter: Optional[str] = None,
        timeout: float = 30.0,
        **client_kwargs
    ):
        if not base_url:
            raise ValueError("base_url is required")
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.datacenter = datacenter
        self.timeout = timeout
        self.client_kwargs = client_kwargs
        self._client: Optional[httpx.AsyncClient] = None

        # Initialize Managers
        self.tokens = TokenManager(self)
        self.policies = PolicyManager(self)
        self.roles = RoleManager(self)
        self.identity_providers = IdentityProviderManager(self)
        self.binding_rules = RoleBindingRuleManager(self)
        self.auth = AuthManager(self)
        self.cluster = ClusterManager(self)
        self.rules = RulesManager(self)
        self.legacy = LegacyACLManager(self)

        logger.info(f"ACL client initialized for {self.base_url}")

    def _new_http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self._get_headers(),
            **self.client_kwargs
        )

    @asynccontextmanager
    async def connect(self, token: Optional[str] = None):
        """Keep one connection pool open for the duration of the block.

        Nested blocks reuse the pool of the outermost one, which alone closes it.
        """
        if token is not None:
            self.set_token(token)
        owner = self._client is None
        if owner:
            self._client = self._new_http_client()
        try:
            yield self
        finally:
            if owner:
                await self.close()

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    def _get_headers(self) -> Dict[str, str]:
        return {"Accept": "application/json"}

    def set_token(self, token: Optional[str]):
        """Set the default token sent when a call does not override it."""
        self.token = token

    def new_request(self, method: str, path: str) -> ACLRequest:
        """Start a request carrying the client defaults; options applied later override them."""
        req = ACLRequest(method, path)
        if self.datacenter:
            req.params["dc"] = self.datacenter
        if self.token:
            req.headers[TOKEN_HEADER] = self.token
        return req

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with self._new_http_client() as temp_client:
            yield temp_client

    async def _send(self, http: httpx.AsyncClient, req: ACLRequest) -> Tuple[timedelta, httpx.Response]:
        start = time.monotonic()
        response = await http.send(req.build(http), stream=True)
        rtt = timedelta(seconds=time.monotonic() - start)
        logger.debug(f"{req.method} {req.path} -> {response.status_code} in {rtt.total_seconds() * 1000:.1f}ms")
        return rtt, response

    @asynccontextmanager
    async def call(self, req: ACLRequest, absent_ok: bool = False) -> AsyncIterator[CallResult]:
        """
        Dispatch a request and classify the response.

        Args:
            req: The request to send.
            absent_ok: Report 404 as ``found=False`` instead of raising.

        Yields:
            CallResult with the still-open response. It is closed when the block exits.
        """
        async with self._session() as http:
            rtt, response = await self._send(http, req)
            try:
                found = await require_ok(response, absent_ok=absent_ok)
                yield CallResult(found, rtt, response)
            finally:
                await response.aclose()
