"""
Kubernetes resources
Registers every node of a ResourceGraph with Pulumi, with depends_on taken
from the graph edges
"""

from typing import Dict, List, Optional

import pulumi
import pulumi_kubernetes as k8s

from acmefit.catalog import FRONTEND, POINT_OF_SALE
from acmefit.errors import SubmissionError
from acmefit.resources import (SECRET_KEY, ConfigMap, Exposure,
                               ResourceGraph, Secret, Service, Workload,
                               resource_key)


# Parent of the datastore password Secrets
SECRETS_COMPONENT_TYPE = "pulumi:acmefitness:secret"
SECRETS_COMPONENT_NAME = "acmefitness-datastore-passwords"


def create_secret(secret: Secret, opts: pulumi.ResourceOptions) -> k8s.core.v1.Secret:
    return k8s.core.v1.Secret(
        secret.logical_name,
        metadata=k8s.meta.v1.ObjectMetaArgs(
            name=secret.name,
            namespace=secret.namespace,
        ),
        type="Opaque",
        data={SECRET_KEY: secret.password},
        opts=opts,
    )


def create_config_map(config_map: ConfigMap, opts: pulumi.ResourceOptions) -> k8s.core.v1.ConfigMap:
    return k8s.core.v1.ConfigMap(
        config_map.logical_name,
        metadata=k8s.meta.v1.ObjectMetaArgs(
            name=config_map.name,
        ),
        data=dict(config_map.data),
        opts=opts,
    )


def _env_args(workload: Workload) -> List[k8s.core.v1.EnvVarArgs]:
    env = []
    for var in workload.env:
        if var.secret:
            env.append(k8s.core.v1.EnvVarArgs(
                name=var.name,
                value_from=k8s.core.v1.EnvVarSourceArgs(
                    secret_key_ref=k8s.core.v1.SecretKeySelectorArgs(
                        name=var.secret,
                        key=SECRET_KEY,
                    )
                ),
            ))
        else:
            env.append(k8s.core.v1.EnvVarArgs(name=var.name, value=var.value))
    return env


def _volume_args(workload: Workload) -> List[k8s.core.v1.VolumeArgs]:
    volumes = []
    for volume in workload.volumes:
        if volume.config_map:
            volumes.append(k8s.core.v1.VolumeArgs(
                name=volume.name,
                config_map=k8s.core.v1.ConfigMapVolumeSourceArgs(name=volume.config_map),
            ))
        else:
            volumes.append(k8s.core.v1.VolumeArgs(
                name=volume.name,
                empty_dir=k8s.core.v1.EmptyDirVolumeSourceArgs(),
            ))
    return volumes


def create_deployment(workload: Workload, opts: pulumi.ResourceOptions) -> k8s.apps.v1.Deployment:
    resources = None
    if workload.requests or workload.limits:
        resources = k8s.core.v1.ResourceRequirementsArgs(
            requests=dict(workload.requests) or None,
            limits=dict(workload.limits) or None,
        )

    return k8s.apps.v1.Deployment(
        workload.logical_name,
        metadata=k8s.meta.v1.ObjectMetaArgs(
            name=workload.name,
            labels=dict(workload.labels),
        ),
        spec=k8s.apps.v1.DeploymentSpecArgs(
            replicas=workload.replicas,
            # Has to match .spec.template.metadata.labels
            selector=k8s.meta.v1.LabelSelectorArgs(
                match_labels=dict(workload.labels)
            ),
            strategy=k8s.apps.v1.DeploymentStrategyArgs(type=workload.strategy),
            template=k8s.core.v1.PodTemplateSpecArgs(
                metadata=k8s.meta.v1.ObjectMetaArgs(
                    labels=dict(workload.labels)
                ),
                spec=k8s.core.v1.PodSpecArgs(
                    volumes=_volume_args(workload) or None,
                    containers=[
                        k8s.core.v1.ContainerArgs(
                            name=workload.container_name,
                            image=workload.image,
                            image_pull_policy=workload.image_pull_policy,
                            env=_env_args(workload) or None,
                            ports=[
                                k8s.core.v1.ContainerPortArgs(
                                    name=workload.port_name,
                                    container_port=workload.container_port,
                                    protocol="TCP"
                                )
                            ],
                            volume_mounts=[
                                k8s.core.v1.VolumeMountArgs(
                                    name=v.name,
                                    mount_path=v.mount_path
                                ) for v in workload.volumes
                            ] or None,
                            resources=resources,
                        )
                    ]
                )
            )
        ),
        opts=opts,
    )


def create_service(service: Service, opts: pulumi.ResourceOptions) -> k8s.core.v1.Service:
    return k8s.core.v1.Service(
        service.logical_name,
        metadata=k8s.meta.v1.ObjectMetaArgs(
            name=service.name,
            labels=dict(service.labels),
        ),
        spec=k8s.core.v1.ServiceSpecArgs(
            type=service.exposure.value,
            ports=[
                k8s.core.v1.ServicePortArgs(
                    name=service.port_name,
                    port=service.port,
                    target_port=service.target_port,
                    node_port=service.node_port,
                    protocol="TCP"
                )
            ],
            selector=dict(service.selector),
        ),
        opts=opts,
    )


CREATORS = {
    Secret.kind: create_secret,
    ConfigMap.kind: create_config_map,
    Workload.kind: create_deployment,
    Service.kind: create_service,
}


def submit(graph: ResourceGraph,
           provider: Optional[k8s.Provider] = None) -> Dict[str, pulumi.CustomResource]:
    """
    Register all resources of a graph with Pulumi

    Secrets are grouped under one component resource, everything else is
    registered at the top level.

    Args:
        graph: Output of acmefit.topology.build
        provider: Kubernetes provider, the ambient kubeconfig when omitted

    Returns:
        Dict of resource key (`Kind/name`) to the created Pulumi resource

    Raises:
        SubmissionError: if a resource cannot be registered
    """
    secrets_parent = None
    if graph.secrets:
        secrets_parent = pulumi.ComponentResource(SECRETS_COMPONENT_TYPE, SECRETS_COMPONENT_NAME)
        secrets_parent.register_outputs({})

    created: Dict[str, pulumi.CustomResource] = {}
    for resource in graph.ordered():
        key = resource_key(resource)
        opts = pulumi.ResourceOptions(
            provider=provider,
            parent=secrets_parent if resource.kind == Secret.kind else None,
            depends_on=[created[resource_key(dep)] for dep in graph.dependencies(resource)],
        )
        try:
            created[key] = CREATORS[resource.kind](resource, opts)
        except Exception as e:
            pulumi.log.error(f"Could not register {key}: {e}")
            raise SubmissionError(key, str(e)) from e
        pulumi.log.debug(f"Registered {key} as {resource.logical_name}")

    pulumi.log.info(f"Registered {len(created)} Kubernetes resources")
    return created


def _ingress_address(status) -> str:
    ingress = status.load_balancer.ingress[0]
    return "http://" + (ingress.ip or ingress.hostname)


def endpoints(graph: ResourceGraph,
              created: Dict[str, pulumi.CustomResource]) -> Dict[str, pulumi.Output]:
    """
    Externally reachable addresses of the frontend and point-of-sale services

    Both values are deferred; the LoadBalancer address is only known once the
    cloud provider has assigned it.
    """
    frontend = graph.get(Service.kind, FRONTEND.name)
    pos = graph.get(Service.kind, POINT_OF_SALE.name)

    if frontend.exposure == Exposure.NODE_PORT:
        frontend_address = pulumi.Output.from_input(f"http://localhost:{frontend.node_port}")
    else:
        frontend_address = created[resource_key(frontend)].status.apply(_ingress_address)

    return {
        "frontend": frontend_address,
        "pos": pulumi.Output.from_input(f"http://localhost:{pos.node_port}"),
    }
