import re
from datetime import datetime, timedelta
from enum import Enum
from typing import Annotated, Any, ClassVar, Dict, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_pascal

# Legacy token types
ACL_CLIENT_TYPE = "client"
ACL_MANAGEMENT_TYPE = "management"

IDP_TYPE_KUBERNETES = "kubernetes"

T = TypeVar("T")

_DURATION_RE = re.compile(r"(\d*\.?\d+)(ns|us|µs|μs|ms|s|m|h)")
_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_duration(value: str) -> timedelta:
    """Parse a Go style duration string such as ``"1h30m"`` or ``"250ms"``."""
    text = value.strip()
    sign = -1 if text.startswith("-") else 1
    text = text.lstrip("+-")
    if text == "0":
        return timedelta(0)

    total = 0.0
    pos = 0
    for match in _DURATION_RE.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()
    if pos == 0 or pos != len(text):
        raise ValueError(f"invalid duration {value!r}")
    return timedelta(seconds=sign * total)


def format_duration(value: timedelta) -> str:
    """Render a timedelta in the largest whole unit the agent understands."""
    micros = round(value / timedelta(microseconds=1))
    if micros % 1_000_000 == 0:
        return f"{micros // 1_000_000}s"
    if micros % 1_000 == 0:
        return f"{micros // 1_000}ms"
    return f"{micros}us"


def duration_to_msec(value: timedelta) -> str:
    """Blocking query ``wait`` parameter; never rounds a positive wait down to 0."""
    ms = int(value / timedelta(milliseconds=1))
    if ms == 0 and value > timedelta(0):
        ms = 1
    return f"{ms}ms"


def _none_as_empty(value: Any) -> Any:
    return [] if value is None else value


# The agent encodes empty slices as null on several endpoints
NullableList = Annotated[List[T], BeforeValidator(_none_as_empty)]


class KeyPolicy(str, Enum):
    """Who picks the identifying field of an entity."""
    SERVER_ASSIGNED = "server_assigned"
    CALLER_ASSIGNED = "caller_assigned"


class BaseEntity(BaseModel):
    model_config = ConfigDict(extra='ignore', populate_by_name=True, alias_generator=to_pascal)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class KeyedEntity(BaseEntity):
    """Entity addressed by a single key field.

    ``key_field`` names the attribute used as the path key. For server
    assigned keys every field in ``server_fields`` must be empty on create;
    caller assigned keys must be set on every call.
    """
    key_field: ClassVar[str] = "id"
    key_policy: ClassVar[KeyPolicy] = KeyPolicy.SERVER_ASSIGNED
    server_fields: ClassVar[Tuple[str, ...]] = ("id",)
    entity_label: ClassVar[str] = ""


# ============================================================================
# Link records
# ============================================================================
class ACLTokenPolicyLink(BaseEntity):
    id: str = Field("", alias="ID")
    name: str = ""

class ACLTokenRoleLink(BaseEntity):
    id: str = Field("", alias="ID")
    name: str = ""
    bound_name: Optional[str] = None

class ACLRolePolicyLink(BaseEntity):
    id: str = Field("", alias="ID")
    name: str = ""

class ACLServiceIdentity(BaseEntity):
    """Grants every privilege needed to act as the named service."""
    service_name: str
    datacenters: Optional[List[str]] = None


# ============================================================================
# Tokens
# ============================================================================
class ACLToken(KeyedEntity):
    key_field: ClassVar[str] = "accessor_id"
    server_fields: ClassVar[Tuple[str, ...]] = ("accessor_id", "secret_id")
    entity_label: ClassVar[str] = "Token"

    create_index: int = 0
    modify_index: int = 0
    accessor_id: str = Field("", alias="AccessorID")
    secret_id: str = Field("", alias="SecretID")
    description: str = ""
    policies: NullableList[ACLTokenPolicyLink] = Field(default_factory=list)
    roles: NullableList[ACLTokenRoleLink] = Field(default_factory=list)
    service_identities: NullableList[ACLServiceIdentity] = Field(default_factory=list)
    local: bool = False
    expiration_ttl: Optional[timedelta] = Field(None, alias="ExpirationTTL")
    expiration_time: Optional[datetime] = None
    create_time: Optional[datetime] = None
    hash: Optional[str] = None
    # Only present for legacy tokens read through the new endpoints
    rules: Optional[str] = None

    @field_validator("expiration_ttl", mode="before")
    @classmethod
    def _parse_ttl(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            # nanoseconds on the wire
            return timedelta(microseconds=value / 1000)
        if isinstance(value, str):
            return parse_duration(value)
        return value

    @field_serializer("expiration_ttl")
    def _dump_ttl(self, value: Optional[timedelta]) -> Optional[str]:
        return format_duration(value) if value is not None else None


class ACLTokenListEntry(BaseEntity):
    create_index: int = 0
    modify_index: int = 0
    accessor_id: str = Field("", alias="AccessorID")
    description: str = ""
    policies: NullableList[ACLTokenPolicyLink] = Field(default_factory=list)
    roles: NullableList[ACLTokenRoleLink] = Field(default_factory=list)
    service_identities: NullableList[ACLServiceIdentity] = Field(default_factory=list)
    local: bool = False
    expiration_time: Optional[datetime] = None
    create_time: Optional[datetime] = None
    hash: Optional[str] = None
    legacy: bool = False


# ============================================================================
# Policies
# ============================================================================
class ACLPolicy(KeyedEntity):
    entity_label: ClassVar[str] = "Policy"

    id: str = Field("", alias="ID")
    name: str = ""
    description: str = ""
    rules: str = ""
    datacenters: NullableList[str] = Field(default_factory=list)
    hash: Optional[str] = None
    create_index: int = 0
    modify_index: int = 0

class ACLPolicyListEntry(BaseEntity):
    id: str = Field("", alias="ID")
    name: str = ""
    description: str = ""
    datacenters: NullableList[str] = Field(default_factory=list)
    hash: Optional[str] = None
    create_index: int = 0
    modify_index: int = 0


# ============================================================================
# Roles
# ============================================================================
class ACLRole(KeyedEntity):
    entity_label: ClassVar[str] = "Role"

    id: str = Field("", alias="ID")
    name: str = ""
    description: str = ""
    policies: NullableList[ACLRolePolicyLink] = Field(default_factory=list)
    service_identities: NullableList[ACLServiceIdentity] = Field(default_factory=list)
    hash: Optional[str] = None
    create_index: int = 0
    modify_index: int = 0


# ============================================================================
# Identity providers
# ============================================================================
class ACLIdentityProvider(KeyedEntity):
    key_field: ClassVar[str] = "name"
    key_policy: ClassVar[KeyPolicy] = KeyPolicy.CALLER_ASSIGNED
    server_fields: ClassVar[Tuple[str, ...]] = ()
    entity_label: ClassVar[str] = "Identity Provider"

    name: str = ""
    description: str = ""
    type: str = ""
    kubernetes_host: Optional[str] = None
    kubernetes_ca_cert: Optional[str] = Field(None, alias="KubernetesCACert")
    kubernetes_service_account_jwt: Optional[str] = Field(None, alias="KubernetesServiceAccountJWT")
    create_index: int = 0
    modify_index: int = 0

class ACLIdentityProviderListEntry(BaseEntity):
    name: str = ""
    description: str = ""
    type: str = ""
    kubernetes_host: Optional[str] = None
    create_index: int = 0
    modify_index: int = 0


# ============================================================================
# Role binding rules
# ============================================================================
class ACLRoleBindingRuleMatch(BaseEntity):
    selector: NullableList[str] = Field(default_factory=list)

class ACLRoleBindingRule(KeyedEntity):
    entity_label: ClassVar[str] = "Role Binding Rule"

    id: str = Field("", alias="ID")
    description: str = ""
    idp_name: str = Field("", alias="IDPName")
    match: NullableList[ACLRoleBindingRuleMatch] = Field(default_factory=list)
    role_name: str = ""
    must_exist: Optional[bool] = None
    create_index: int = 0
    modify_index: int = 0


# ============================================================================
# Login / replication / legacy
# ============================================================================
class ACLLoginParams(BaseEntity):
    idp_type: str = Field("", alias="IDPType")
    idp_name: str = Field("", alias="IDPName")
    idp_token: str = Field("", alias="IDPToken")
    meta: Optional[Dict[str, str]] = None

class ACLReplicationStatus(BaseEntity):
    enabled: bool = False
    running: bool = False
    source_datacenter: str = ""
    replication_type: str = ""
    replicated_index: int = 0
    replicated_role_index: int = 0
    replicated_token_index: int = 0
    last_success: Optional[datetime] = None
    last_error: Optional[datetime] = None

class ACLEntry(BaseEntity):
    """Token in the deprecated single-type model."""
    create_index: int = 0
    modify_index: int = 0
    id: str = Field("", alias="ID")
    name: str = ""
    type: str = ""
    rules: str = ""

class ACLEntryID(BaseEntity):
    id: str = Field("", alias="ID")


# ============================================================================
# Request options and response metadata
# ============================================================================
class QueryOptions(BaseModel):
    """Per-call read parameters. ``None``/falsy values fall back to the client defaults."""
    datacenter: Optional[str] = None
    allow_stale: bool = False
    require_consistent: bool = False
    wait_index: int = 0
    wait_time: Optional[timedelta] = None
    token: Optional[str] = None
    near: Optional[str] = None

class WriteOptions(BaseModel):
    datacenter: Optional[str] = None
    token: Optional[str] = None
    relay_factor: int = 0

class QueryMeta(BaseModel):
    last_index: int = 0
    last_contact: timedelta = timedelta(0)
    known_leader: bool = False
    address_translation_enabled: bool = False
    request_time: timedelta = timedelta(0)

class WriteMeta(BaseModel):
    request_time: timedelta = timedelta(0)
