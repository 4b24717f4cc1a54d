"""
ACME Fitness Shop - Kubernetes deployment
Secrets and seed data first, then datastores, services and the two entry points
"""
import pulumi
from acmefit.config import get_config
from acmefit.submit import endpoints, submit
from acmefit.topology import build

# Configuration
config = get_config()

# Placeholder credential for the demo, base64 is not encryption
pulumi.log.warn("All datastores share the dataStorePassword from kubevars")

# 1. Resource graph (pure, no Pulumi calls)
graph = build(config)
pulumi.log.info(
    f"Topology: {len(graph.secrets)} secrets, {len(graph.config_maps)} config maps, "
    f"{len(graph.workloads)} deployments, {len(graph.services)} services"
)

# 2. Kubernetes resources, ordered by the graph edges
resources = submit(graph)

# Exports
addresses = endpoints(graph, resources)
pulumi.export("frontendIP", addresses["frontend"])
pulumi.export("posIP", addresses["pos"])
pulumi.export("singleNode", config.is_single_node)
