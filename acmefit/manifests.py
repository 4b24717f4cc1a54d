"""
Plain Kubernetes manifests for a ResourceGraph
Lets the topology be reviewed or diffed without a Pulumi backend
"""

from typing import Any, Dict, List

import yaml

from acmefit.resources import (SECRET_KEY, ConfigMap, Exposure, ResourceGraph,
                               Secret, Service, Workload)


def secret_manifest(secret: Secret) -> Dict[str, Any]:
    return {
        "apiVersion": "v1",
        "kind": "Secret",
        "metadata": {"name": secret.name, "namespace": secret.namespace},
        "type": "Opaque",
        "data": {SECRET_KEY: secret.password},
    }


def config_map_manifest(config_map: ConfigMap) -> Dict[str, Any]:
    return {
        "apiVersion": "v1",
        "kind": "ConfigMap",
        "metadata": {"name": config_map.name},
        "data": dict(config_map.data),
    }


def deployment_manifest(workload: Workload) -> Dict[str, Any]:
    container: Dict[str, Any] = {
        "name": workload.container_name,
        "image": workload.image,
        "imagePullPolicy": workload.image_pull_policy,
        "ports": [{
            "name": workload.port_name,
            "containerPort": workload.container_port,
            "protocol": "TCP",
        }],
    }
    if workload.env:
        container["env"] = [
            {"name": v.name, "valueFrom": {"secretKeyRef": {"name": v.secret, "key": SECRET_KEY}}}
            if v.secret else {"name": v.name, "value": v.value}
            for v in workload.env
        ]
    if workload.volumes:
        container["volumeMounts"] = [{"name": v.name, "mountPath": v.mount_path} for v in workload.volumes]
    resources = {}
    if workload.requests:
        resources["requests"] = dict(workload.requests)
    if workload.limits:
        resources["limits"] = dict(workload.limits)
    if resources:
        container["resources"] = resources

    pod_spec: Dict[str, Any] = {"containers": [container]}
    if workload.volumes:
        pod_spec["volumes"] = [
            {"name": v.name, "configMap": {"name": v.config_map}} if v.config_map
            else {"name": v.name, "emptyDir": {}}
            for v in workload.volumes
        ]

    return {
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": {"name": workload.name, "labels": dict(workload.labels)},
        "spec": {
            "replicas": workload.replicas,
            "selector": {"matchLabels": dict(workload.labels)},
            "strategy": {"type": workload.strategy},
            "template": {
                "metadata": {"labels": dict(workload.labels)},
                "spec": pod_spec,
            },
        },
    }


def service_manifest(service: Service) -> Dict[str, Any]:
    port: Dict[str, Any] = {
        "name": service.port_name,
        "port": service.port,
        "targetPort": service.target_port,
        "protocol": "TCP",
    }
    if service.exposure == Exposure.NODE_PORT:
        port["nodePort"] = service.node_port
    return {
        "apiVersion": "v1",
        "kind": "Service",
        "metadata": {"name": service.name, "labels": dict(service.labels)},
        "spec": {
            "type": service.exposure.value,
            "ports": [port],
            "selector": dict(service.selector),
        },
    }


RENDERERS = {
    Secret.kind: secret_manifest,
    ConfigMap.kind: config_map_manifest,
    Workload.kind: deployment_manifest,
    Service.kind: service_manifest,
}


def to_manifests(graph: ResourceGraph) -> List[Dict[str, Any]]:
    """Manifests in creation order"""
    return [RENDERERS[r.kind](r) for r in graph.ordered()]


def dump_manifests(graph: ResourceGraph) -> str:
    """Multi-document YAML, ready for `kubectl apply -f -`"""
    return yaml.safe_dump_all(to_manifests(graph), sort_keys=False, default_flow_style=False)
