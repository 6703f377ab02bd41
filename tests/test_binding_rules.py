import pytest

from consul_acl_sdk import (
    ACLApiError, ACLIdentityProvider, ACLRoleBindingRule, ACLRoleBindingRuleMatch, IDP_TYPE_KUBERNETES,
)


async def _idp(client, name):
    idp, _ = await client.identity_providers.create(ACLIdentityProvider(
        name=name, type=IDP_TYPE_KUBERNETES, kubernetes_host="https://192.0.2.42:8443",
    ))
    return idp


def _rule(idp_name, role_name="web-operators"):
    return ACLRoleBindingRule(
        description="bind web service accounts",
        idp_name=idp_name,
        match=[ACLRoleBindingRuleMatch(selector=["serviceaccount.namespace=default", "serviceaccount.name=web"])],
        role_name=role_name,
        must_exist=True,
    )


@pytest.mark.asyncio
async def test_create_read_update_delete(mgmt_client):
    await _idp(mgmt_client, "k8s")

    rule, _ = await mgmt_client.binding_rules.create(_rule("k8s"))
    assert rule.id
    assert rule.match[0].selector == ["serviceaccount.namespace=default", "serviceaccount.name=web"]
    assert rule.must_exist is True

    read, _ = await mgmt_client.binding_rules.read(rule.id)
    assert read == rule

    updated, _ = await mgmt_client.binding_rules.update(rule.model_copy(update={"role_name": "db-operators"}))
    assert updated.role_name == "db-operators"
    assert updated.create_index == rule.create_index

    await mgmt_client.binding_rules.delete(rule.id)
    gone, _ = await mgmt_client.binding_rules.read(rule.id)
    assert gone is None


@pytest.mark.asyncio
async def test_unknown_provider_is_rejected_by_the_agent(mgmt_client):
    with pytest.raises(ACLApiError) as exc:
        await mgmt_client.binding_rules.create(_rule("nope"))
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_list_filtered_by_provider(mgmt_client, acl_state):
    await _idp(mgmt_client, "k8s-a")
    await _idp(mgmt_client, "k8s-b")
    rule_a, _ = await mgmt_client.binding_rules.create(_rule("k8s-a"))
    rule_b, _ = await mgmt_client.binding_rules.create(_rule("k8s-b"))

    all_rules, _ = await mgmt_client.binding_rules.list()
    only_a, _ = await mgmt_client.binding_rules.list(idp_name="k8s-a")

    assert {r.id for r in all_rules} == {rule_a.id, rule_b.id}
    assert [r.id for r in only_a] == [rule_a.id]
    assert acl_state.requests[-1]["query"] == {"idp": "k8s-a"}


@pytest.mark.asyncio
async def test_must_exist_omitted_when_unset(mock_client, sent_requests):
    client = mock_client()

    await client.binding_rules.create(ACLRoleBindingRule(idp_name="k8s", role_name="web"))

    assert b"MustExist" not in sent_requests[0].content
