import io

import pytest

from consul_acl_sdk import ACLApiError, ACLEntry, ACL_CLIENT_TYPE

LEGACY_RULES = 'key "" { policy = "read" }\nservice "web" { policy = "write" }'
TRANSLATED = 'key_prefix "" { policy = "read" }\nservice_prefix "web" { policy = "write" }'


@pytest.mark.asyncio
@pytest.mark.parametrize("rules", [LEGACY_RULES, LEGACY_RULES.encode(), io.BytesIO(LEGACY_RULES.encode())])
async def test_translate(mgmt_client, rules):
    assert await mgmt_client.rules.translate(rules) == TRANSLATED


@pytest.mark.asyncio
@pytest.mark.filterwarnings("ignore::DeprecationWarning")
async def test_translate_legacy_token(mgmt_client):
    acl_id, _ = await mgmt_client.legacy.create(ACLEntry(name="old", type=ACL_CLIENT_TYPE, rules=LEGACY_RULES))

    assert await mgmt_client.rules.translate_token(acl_id) == TRANSLATED


@pytest.mark.asyncio
async def test_translate_unknown_token(mgmt_client):
    with pytest.raises(ACLApiError) as exc:
        await mgmt_client.rules.translate_token("1f2d8c3e-0000-0000-0000-000000000000")
    assert exc.value.status_code == 404
