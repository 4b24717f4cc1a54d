"""
Topology builder
Turns a Configuration into the full ResourceGraph for the ACME Fitness Shop.
Pure function: no Pulumi calls, no I/O.
"""

import base64
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from acmefit import catalog
from acmefit.catalog import (ConfigMapSpec, FqdnOf, HostOf, Literal, PortOf,
                             SecretRef, SecretSpec, UnitSpec)
from acmefit.config import PORT_FIELDS, PORT_RANGE, Configuration
from acmefit.errors import TopologyError
from acmefit.resources import (ConfigMap, EnvVar, Exposure, ResourceGraph,
                               Secret, Service, Volume, Workload)


def to_base64(value: str) -> str:
    """Encode a string for the data field of a Kubernetes Secret"""
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def build(config: Union[Configuration, Mapping[str, Any]],
          units: Iterable[UnitSpec] = catalog.ALL_UNITS,
          secrets: Iterable[SecretSpec] = catalog.SECRETS,
          config_maps: Iterable[ConfigMapSpec] = catalog.CONFIG_MAPS) -> ResourceGraph:
    """
    Build the resource graph for a configuration

    Args:
        config: Validated Configuration, or a raw kubevars mapping
        units: Deployment/Service pairs, in creation order
        secrets: Datastore credential secrets
        config_maps: Seed data config maps

    Returns:
        ResourceGraph with Secrets, ConfigMaps, Deployments and Services

    Raises:
        ConfigurationError: if config is a mapping with missing or invalid fields
        TopologyError: if the catalog is inconsistent
    """
    if not isinstance(config, Configuration):
        config = Configuration.from_kubevars(config)

    units = tuple(units)
    secrets = tuple(secrets)
    config_maps = tuple(config_maps)
    _check_catalog(units, secrets, config_maps)

    graph = ResourceGraph()
    password = to_base64(config.data_store_password)
    for spec in secrets:
        graph.add(Secret(name=spec.name, logical_name=spec.logical_name,
                         password=password, namespace=catalog.NAMESPACE))

    for spec in config_maps:
        graph.add(ConfigMap(name=spec.name, logical_name=spec.logical_name, data=dict(spec.data)))

    ports = {unit.name: _resolve(config, unit.port) for unit in units}
    for unit in units:
        workload = _workload(unit, ports)
        graph.add(workload, depends_on=(
            [graph.get(Secret.kind, name) for name in workload.secret_refs] +
            [graph.get(ConfigMap.kind, name) for name in workload.config_map_refs]
        ))
        graph.add(_service(unit, ports[unit.name], config), depends_on=[workload])

    check_selectors(graph)
    # Raises on cycles
    graph.ordered()
    return graph


def exposure_for(unit: UnitSpec, config: Configuration) -> Exposure:
    """Frontend switches on is_single_node; point-of-sale is always a NodePort"""
    if unit.exposure == "frontend":
        return Exposure.NODE_PORT if config.is_single_node else Exposure.LOAD_BALANCER
    if unit.exposure == "node":
        return Exposure.NODE_PORT
    if unit.exposure == "cluster":
        return Exposure.CLUSTER_IP
    raise TopologyError(f"{unit.name} has unknown exposure {unit.exposure!r}")


def check_selectors(graph: ResourceGraph) -> None:
    """Every Service must select the pod labels of exactly one Deployment"""
    for service in graph.services:
        targets = [w for w in graph.workloads if w.labels == service.selector]
        if len(targets) != 1:
            raise TopologyError(
                f"Service {service.name} selector {service.selector} matches "
                f"{len(targets)} deployments"
            )


def _resolve(config: Configuration, value: Union[int, str]) -> int:
    if isinstance(value, int):
        return value
    return getattr(config, value)


def _check_catalog(units, secrets, config_maps) -> None:
    seen = set()
    for kind, name in ([("Secret", s.name) for s in secrets] +
                       [("ConfigMap", c.name) for c in config_maps] +
                       [("Unit", u.name) for u in units]):
        if (kind, name) in seen:
            raise TopologyError(f"Duplicate {kind} name {name!r} in catalog")
        seen.add((kind, name))

    labels = set()
    for unit in units:
        if unit.service_label in labels:
            raise TopologyError(f"Duplicate service label {unit.service_label!r} in catalog")
        labels.add(unit.service_label)

    secret_names = {s.name for s in secrets}
    config_map_names = {c.name for c in config_maps}
    unit_names = {u.name for u in units}
    for unit in units:
        for template in unit.env:
            if isinstance(template, SecretRef) and template.secret not in secret_names:
                raise TopologyError(f"{unit.name} reads undefined secret {template.secret!r}")
            if isinstance(template, (HostOf, FqdnOf, PortOf)) and template.unit not in unit_names:
                raise TopologyError(f"{unit.name} addresses undefined service {template.unit!r}")
        for volume in unit.volumes:
            if volume.config_map and volume.config_map not in config_map_names:
                raise TopologyError(f"{unit.name} mounts undefined config map {volume.config_map!r}")
        _check_port(unit.name, "port", unit.port)
        if unit.exposure not in catalog.EXPOSURES:
            raise TopologyError(f"{unit.name} has unknown exposure {unit.exposure!r}")
        if unit.exposure != "cluster" and not unit.node_port:
            raise TopologyError(f"{unit.name} is exposed outside the cluster without a node port")
        if unit.node_port:
            _check_port(unit.name, "node_port", unit.node_port)


def _check_port(unit_name: str, field_name: str, value: Union[int, str]) -> None:
    if isinstance(value, str):
        if value not in PORT_FIELDS:
            raise TopologyError(f"{unit_name} {field_name} {value!r} is not a port setting")
        return
    low, high = PORT_RANGE
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise TopologyError(f"{unit_name} {field_name} {value!r} is not a valid port")


def _env(template, ports: Dict[str, int]) -> EnvVar:
    if isinstance(template, Literal):
        return EnvVar(template.name, value=template.value)
    if isinstance(template, HostOf):
        return EnvVar(template.name, value=template.unit)
    if isinstance(template, FqdnOf):
        return EnvVar(template.name, value=f"{template.unit}.{catalog.NAMESPACE}.{catalog.CLUSTER_DOMAIN}")
    if isinstance(template, PortOf):
        return EnvVar(template.name, value=str(ports[template.unit]))
    if isinstance(template, SecretRef):
        return EnvVar(template.name, secret=template.secret)
    raise TopologyError(f"Unknown environment template {template!r}")


def _workload(unit: UnitSpec, ports: Dict[str, int]) -> Workload:
    return Workload(
        name=unit.name,
        logical_name=unit.deployment_logical_name,
        labels=unit.labels,
        container_name=unit.container_name or unit.name,
        image=unit.image,
        port_name=unit.port_name or unit.name,
        container_port=ports[unit.name],
        env=tuple(_env(t, ports) for t in unit.env),
        volumes=tuple(Volume(v.name, v.mount_path, v.config_map) for v in unit.volumes),
        requests=dict(unit.requests),
        limits=dict(unit.limits),
    )


def _service(unit: UnitSpec, port: int, config: Configuration) -> Service:
    exposure = exposure_for(unit, config)
    node_port: Optional[int] = None
    if exposure == Exposure.NODE_PORT:
        node_port = _resolve(config, unit.node_port)
    return Service(
        name=unit.name,
        logical_name=unit.service_logical_name,
        labels=unit.labels,
        selector=unit.labels,
        port_name=unit.service_port_name or unit.name,
        port=unit.public_port or port,
        target_port=port,
        exposure=exposure,
        node_port=node_port,
    )
