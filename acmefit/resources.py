"""
Resource descriptions and the dependency graph that orders them
Nothing here talks to Pulumi; see acmefit.submit for that
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from acmefit.errors import TopologyError

SECRET_KEY = "password"


class Exposure(str, Enum):
    """How a Service is reachable"""

    CLUSTER_IP = "ClusterIP"
    LOAD_BALANCER = "LoadBalancer"
    NODE_PORT = "NodePort"


@dataclass(frozen=True)
class Secret:
    name: str
    logical_name: str
    # base64 encoded, not encrypted
    password: str
    namespace: str = "default"

    kind = "Secret"


@dataclass(frozen=True)
class ConfigMap:
    name: str
    logical_name: str
    data: Dict[str, str] = field(default_factory=dict)

    kind = "ConfigMap"


@dataclass(frozen=True)
class EnvVar:
    """A literal value, or a reference to the password key of a Secret"""

    name: str
    value: Optional[str] = None
    secret: Optional[str] = None


@dataclass(frozen=True)
class Volume:
    """emptyDir scratch space unless config_map names a ConfigMap to mount"""

    name: str
    mount_path: str
    config_map: Optional[str] = None


@dataclass(frozen=True)
class Workload:
    name: str
    logical_name: str
    labels: Dict[str, str]
    container_name: str
    image: str
    port_name: str
    container_port: int
    env: Tuple[EnvVar, ...] = ()
    volumes: Tuple[Volume, ...] = ()
    requests: Dict[str, str] = field(default_factory=dict)
    limits: Dict[str, str] = field(default_factory=dict)
    replicas: int = 1
    strategy: str = "Recreate"
    image_pull_policy: str = "Always"

    kind = "Deployment"

    @property
    def secret_refs(self) -> List[str]:
        refs = []
        for var in self.env:
            if var.secret and var.secret not in refs:
                refs.append(var.secret)
        return refs

    @property
    def config_map_refs(self) -> List[str]:
        return [v.config_map for v in self.volumes if v.config_map]


@dataclass(frozen=True)
class Service:
    name: str
    logical_name: str
    labels: Dict[str, str]
    selector: Dict[str, str]
    port_name: str
    port: int
    target_port: int
    exposure: Exposure = Exposure.CLUSTER_IP
    node_port: Optional[int] = None

    kind = "Service"


Resource = Union[Secret, ConfigMap, Workload, Service]


def resource_key(resource: Resource) -> str:
    """Identity of a resource inside a graph, e.g. `Secret/cart-redis-pass`"""
    return f"{resource.kind}/{resource.name}"


class ResourceGraph:
    """
    Append-only collection of resource descriptions with ordering edges

    An edge A -> B means B must exist before A is created.
    """

    def __init__(self):
        self._nodes: "OrderedDict[str, Resource]" = OrderedDict()
        self._edges: Dict[str, Tuple[str, ...]] = {}

    def add(self, resource: Resource, depends_on: Iterable[Resource] = ()) -> Resource:
        key = resource_key(resource)
        if key in self._nodes:
            raise TopologyError(f"Duplicate resource {key}")
        deps = []
        for dep in depends_on:
            dep_key = resource_key(dep)
            if dep_key not in self._nodes:
                raise TopologyError(f"{key} depends on {dep_key}, which is not in the graph")
            if dep_key not in deps:
                deps.append(dep_key)
        self._nodes[key] = resource
        self._edges[key] = tuple(deps)
        return resource

    def get(self, kind: str, name: str) -> Resource:
        try:
            return self._nodes[f"{kind}/{name}"]
        except KeyError:
            raise KeyError(f"No {kind} named {name!r} in graph") from None

    def find(self, kind: str, name: str) -> Optional[Resource]:
        return self._nodes.get(f"{kind}/{name}")

    def dependencies(self, resource: Resource) -> List[Resource]:
        return [self._nodes[k] for k in self._edges[resource_key(resource)]]

    @property
    def edges(self) -> Dict[str, Tuple[str, ...]]:
        return dict(self._edges)

    def ordered(self) -> List[Resource]:
        """
        Topological order, dependencies first

        Among resources whose dependencies are satisfied, insertion order wins,
        so the result is deterministic.
        """
        remaining = OrderedDict((k, set(v)) for k, v in self._edges.items())
        ordered = []
        while remaining:
            ready = [k for k, deps in remaining.items() if not deps]
            if not ready:
                raise TopologyError(f"Dependency cycle between {', '.join(remaining)}")
            key = ready[0]
            del remaining[key]
            for deps in remaining.values():
                deps.discard(key)
            ordered.append(self._nodes[key])
        return ordered

    def of_kind(self, kind: str) -> List[Resource]:
        return [r for r in self._nodes.values() if r.kind == kind]

    @property
    def secrets(self) -> List[Secret]:
        return self.of_kind(Secret.kind)

    @property
    def config_maps(self) -> List[ConfigMap]:
        return self.of_kind(ConfigMap.kind)

    @property
    def workloads(self) -> List[Workload]:
        return self.of_kind(Workload.kind)

    @property
    def services(self) -> List[Service]:
        return self.of_kind(Service.kind)

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, resource: Resource) -> bool:
        return resource_key(resource) in self._nodes

    def __eq__(self, other) -> bool:
        if not isinstance(other, ResourceGraph):
            return NotImplemented
        return list(self._nodes.items()) == list(other._nodes.items()) and self._edges == other._edges
