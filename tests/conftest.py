import os
# Keep a developer's real agent settings out of the tests
for _var in ("CONSUL_HTTP_ADDR", "CONSUL_HTTP_TOKEN", "CONSUL_HTTP_TOKEN_FILE", "CONSUL_DATACENTER",
             "CONSUL_HTTP_SSL", "CONSUL_HTTP_SSL_VERIFY", "CONSUL_CACERT"):
    os.environ.pop(_var, None)

from typing import Callable, List

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport

from consul_acl_sdk import ACLClient, HTTPACLClient
from fake_agent import FakeACLState, create_app


@pytest.fixture
def acl_state():
    return FakeACLState()


@pytest.fixture
def app(acl_state):
    return create_app(acl_state)


@pytest.fixture
def sdk_client(app) -> HTTPACLClient:
    """Client wired to the in-process fake agent, no token yet."""
    return ACLClient("http://test", transport=ASGITransport(app=app))


@pytest_asyncio.fixture(scope="function")
async def mgmt_client(sdk_client):
    """Client holding the bootstrap (global-management) token."""
    token, _ = await sdk_client.cluster.bootstrap()
    async with sdk_client.connect(token=token.secret_id):
        yield sdk_client


@pytest.fixture
def sent_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def mock_client(sent_requests) -> Callable[..., HTTPACLClient]:
    """Build a client whose transport answers with ``handler`` and records every request."""
    def factory(handler=None, **kwargs) -> HTTPACLClient:
        def record(request: httpx.Request):
            sent_requests.append(request)
            if handler is None:
                return httpx.Response(200, json={})
            return handler(request)
        return ACLClient("http://test", transport=httpx.MockTransport(record), **kwargs)
    return factory
