from datetime import timedelta

import pytest

from consul_acl_sdk import (
    ACLApiError, ACLPolicy, ACLServiceIdentity, ACLToken, ACLTokenListEntry, ACLTokenPolicyLink,
    PermissionDeniedError, QueryOptions,
)


async def _policy(client, name="node-read"):
    policy, _ = await client.policies.create(ACLPolicy(name=name, rules='node_prefix "" { policy = "read" }'))
    return policy


@pytest.mark.asyncio
async def test_create_then_read_round_trip(mgmt_client):
    policy = await _policy(mgmt_client)
    token, wm = await mgmt_client.tokens.create(ACLToken(
        description="web service token",
        policies=[ACLTokenPolicyLink(id=policy.id, name=policy.name)],
        service_identities=[ACLServiceIdentity(service_name="web", datacenters=["dc1"])],
        expiration_ttl=timedelta(hours=1),
    ))

    assert token.accessor_id
    assert token.secret_id
    assert token.create_index > 0
    assert token.expiration_ttl == timedelta(hours=1)
    assert wm.request_time.total_seconds() >= 0

    read, meta = await mgmt_client.tokens.read(token.accessor_id)
    assert read == token
    assert meta.known_leader is True
    assert meta.last_index >= token.modify_index


@pytest.mark.asyncio
async def test_update_keeps_accessor_and_bumps_modify_index(mgmt_client):
    token, _ = await mgmt_client.tokens.create(ACLToken(description="before"))

    replacement = token.model_copy(update={"description": "after"})
    updated, _ = await mgmt_client.tokens.update(replacement)

    assert updated.accessor_id == token.accessor_id
    assert updated.secret_id == token.secret_id
    assert updated.description == "after"
    assert updated.modify_index > token.modify_index
    assert updated.create_index == token.create_index


@pytest.mark.asyncio
async def test_update_without_secret_is_allowed(mgmt_client):
    token, _ = await mgmt_client.tokens.create(ACLToken(description="before"))

    updated, _ = await mgmt_client.tokens.update(ACLToken(accessor_id=token.accessor_id, description="after"))

    assert updated.description == "after"


@pytest.mark.asyncio
async def test_list_never_includes_secrets(mgmt_client):
    token, _ = await mgmt_client.tokens.create(ACLToken(description="listed"))

    entries, _ = await mgmt_client.tokens.list()

    assert all(isinstance(e, ACLTokenListEntry) for e in entries)
    assert token.accessor_id in {e.accessor_id for e in entries}
    assert all(not hasattr(e, "secret_id") for e in entries)
    assert all(e.legacy is False for e in entries)


@pytest.mark.asyncio
async def test_list_filtered_by_policy(mgmt_client, acl_state):
    policy = await _policy(mgmt_client)
    linked, _ = await mgmt_client.tokens.create(
        ACLToken(policies=[ACLTokenPolicyLink(id=policy.id, name=policy.name)])
    )
    await mgmt_client.tokens.create(ACLToken(description="unlinked"))

    entries, _ = await mgmt_client.tokens.list(policy=policy.id)

    assert [e.accessor_id for e in entries] == [linked.accessor_id]
    assert acl_state.requests[-1]["query"] == {"policy": policy.id}


@pytest.mark.asyncio
async def test_read_self(mgmt_client):
    me, _ = await mgmt_client.tokens.read_self()
    assert me.description.startswith("Bootstrap Token")
    assert me.policies[0].name == "global-management"


@pytest.mark.asyncio
async def test_read_self_with_unknown_token_fails(mgmt_client):
    with pytest.raises(PermissionDeniedError):
        await mgmt_client.tokens.read_self(QueryOptions(token="not-a-real-secret"))


@pytest.mark.asyncio
async def test_clone(mgmt_client):
    policy = await _policy(mgmt_client)
    token, _ = await mgmt_client.tokens.create(
        ACLToken(description="original", policies=[ACLTokenPolicyLink(id=policy.id)])
    )

    clone, _ = await mgmt_client.tokens.clone(token.accessor_id, description="clone")

    assert clone.accessor_id != token.accessor_id
    assert clone.secret_id != token.secret_id
    assert clone.description == "clone"
    assert [p.id for p in clone.policies] == [policy.id]


@pytest.mark.asyncio
async def test_delete_then_read_is_an_error(mgmt_client):
    token, _ = await mgmt_client.tokens.create(ACLToken(description="short lived"))

    await mgmt_client.tokens.delete(token.accessor_id)

    with pytest.raises(ACLApiError) as exc:
        await mgmt_client.tokens.read(token.accessor_id)
    assert exc.value.status_code == 404


@pytest.mark.asyncio
async def test_query_options_reach_the_agent(mgmt_client, acl_state):
    await mgmt_client.tokens.list(QueryOptions(
        require_consistent=True, wait_index=5, wait_time=timedelta(seconds=2), datacenter="dc1",
    ))

    sent = acl_state.requests[-1]
    assert sent["path"] == "/v1/acl/tokens"
    assert sent["query"] == {"consistent": "", "index": "5", "wait": "2000ms", "dc": "dc1"}
