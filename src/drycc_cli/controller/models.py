"""
Pydantic models for controller resources.

Models accept unknown fields so newer controllers do not break older
clients; only the fields the CLI renders are declared.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Resource(BaseModel):
    """Base for every controller object."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    uuid: str = ""
    owner: str = ""
    created: str = ""
    updated: str = ""


class App(Resource):
    id: str
    structure: Dict[str, Any] = Field(default_factory=dict)


class Build(Resource):
    app: str = ""
    image: str = ""
    stack: str = ""
    sha: str = ""
    procfile: Dict[str, str] = Field(default_factory=dict)
    dryccfile: Dict[str, Any] = Field(default_factory=dict)


class Config(Resource):
    """App configuration: env values plus per-ptype settings."""

    app: str = ""
    values: Dict[str, Any] = Field(default_factory=dict)
    typed_values: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    limits: Dict[str, Any] = Field(default_factory=dict)
    timeouts: Dict[str, Any] = Field(default_factory=dict, alias="termination_grace_period")
    healthcheck: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    registry: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    tags: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


class Release(Resource):
    app: str = ""
    build: Optional[str] = None
    config: str = ""
    summary: str = ""
    version: int = 0
    state: str = ""


class Domain(Resource):
    app: str = ""
    domain: str
    ptype: str = "web"


class ServicePort(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = ""
    port: int = 0
    protocol: str = "TCP"
    target_port: int = Field(0, alias="targetPort")


class Service(BaseModel):
    model_config = ConfigDict(extra="allow")

    ptype: str
    domain: str = ""
    ports: List[ServicePort] = Field(default_factory=list)


class Listener(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = ""
    port: int = 0
    protocol: str = ""


class Gateway(Resource):
    app: str = ""
    name: str
    listeners: List[Listener] = Field(default_factory=list)
    addresses: List[Dict[str, Any]] = Field(default_factory=list)


class ParentRef(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    port: int = 0


class Route(Resource):
    app: str = ""
    name: str
    kind: str = ""
    parent_refs: List[ParentRef] = Field(default_factory=list)
    rules: List[Dict[str, Any]] = Field(default_factory=list)


class Cert(Resource):
    name: str
    common_name: str = ""
    expires: Optional[str] = None
    starts: Optional[str] = None
    fingerprint: str = ""
    san: List[str] = Field(default_factory=list)
    domains: List[str] = Field(default_factory=list)
    issuer: str = ""
    subject: str = ""


class Key(Resource):
    id: str
    public: str = ""


class Perm(BaseModel):
    model_config = ConfigDict(extra="allow")

    app: str = ""
    username: str
    permissions: List[str] = Field(default_factory=list)


class Pod(BaseModel):
    """One running process."""

    model_config = ConfigDict(extra="allow")

    name: str
    release: str = ""
    state: str = ""
    type: str = ""
    started: Optional[str] = None
    ready: str = ""
    restarts: int = 0


class Ptype(BaseModel):
    """Aggregate state of one process type."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    release: str = ""
    ready: str = ""
    up_to_date: int = 0
    available: int = 0
    started: Optional[str] = None
    garbage: bool = False


class Event(BaseModel):
    model_config = ConfigDict(extra="allow")

    reason: str = ""
    message: str = ""
    created: str = ""


class Volume(Resource):
    app: str = ""
    name: str
    size: str = ""
    type: str = ""
    path: Dict[str, Any] = Field(default_factory=dict)
    parameters: Dict[str, Any] = Field(default_factory=dict)


class ServiceInstance(Resource):
    """A provisioned backing resource (database, queue, ...)."""

    app: str = ""
    name: str
    plan: str = ""
    status: Optional[str] = None
    binding: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)
    options: Dict[str, Any] = Field(default_factory=dict)
    message: str = ""


class ResourceService(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str = ""
    name: str
    updateable: bool = False


class ResourcePlan(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str = ""
    name: str
    description: str = ""


class Autoscale(BaseModel):
    model_config = ConfigDict(extra="allow")

    min: int = 1
    max: int = 1
    cpu_percent: int = 0


class AppSettings(Resource):
    app: str = ""
    routable: Optional[bool] = None
    autodeploy: Optional[bool] = None
    autorollback: Optional[bool] = None
    maintenance: Optional[bool] = None
    autoscale: Dict[str, Optional[Autoscale]] = Field(default_factory=dict)
    label: Dict[str, Any] = Field(default_factory=dict)
    canaries: List[str] = Field(default_factory=list)


class TLS(Resource):
    app: str = ""
    https_enforced: Optional[bool] = None
    certs_auto_enabled: Optional[bool] = None
    issuer: Optional[Dict[str, Any]] = None
    events: List[Dict[str, Any]] = Field(default_factory=list)


class User(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[int] = None
    username: str
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    is_superuser: bool = False
    is_staff: bool = False
    is_active: bool = True
    last_login: Optional[str] = None
    date_joined: str = ""


class Token(Resource):
    alias: str = ""
    key: str = ""


class LimitSpec(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    cpu: Dict[str, Any] = Field(default_factory=dict)
    memory: Dict[str, Any] = Field(default_factory=dict)
    features: Dict[str, Any] = Field(default_factory=dict)


class LimitPlan(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    spec: Optional[LimitSpec] = None
    cpu: Any = None
    memory: Any = None
    features: Dict[str, Any] = Field(default_factory=dict)
