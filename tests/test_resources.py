"""
Unit tests for the resource graph
"""

import unittest
import sys
import os

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from acmefit.errors import TopologyError
from acmefit.resources import (ConfigMap, EnvVar, ResourceGraph, Secret,
                               Service, Volume, Workload, resource_key)

LABELS = {"app": "acmefit", "service": "cart"}


def make_workload(name="cart", env=(), volumes=()):
    return Workload(
        name=name,
        logical_name=f"{name}-deployment",
        labels={"app": "acmefit", "service": name},
        container_name=name,
        image="example/cart:latest",
        port_name=name,
        container_port=5000,
        env=env,
        volumes=volumes,
    )


def make_service(name="cart"):
    labels = {"app": "acmefit", "service": name}
    return Service(
        name=name,
        logical_name=f"{name}-service",
        labels=labels,
        selector=labels,
        port_name=f"http-{name}",
        port=5000,
        target_port=5000,
    )


class TestResourceGraph(unittest.TestCase):
    """Test ResourceGraph bookkeeping and ordering"""

    def setUp(self):
        self.secret = Secret("cart-redis-pass", "cart-redis-pass", "aGVsbG93b3JsZA==")
        self.config_map = ConfigMap("seed", "seed-config-map", {"seed.js": "db.x.insertMany([])"})

    def test_resource_keys(self):
        """Test that identity is kind plus name"""
        self.assertEqual(resource_key(self.secret), "Secret/cart-redis-pass")
        self.assertEqual(resource_key(self.config_map), "ConfigMap/seed")
        self.assertEqual(resource_key(make_workload()), "Deployment/cart")
        self.assertEqual(resource_key(make_service()), "Service/cart")

    def test_workload_references(self):
        """Test that secret and config map references are collected without duplicates"""
        workload = make_workload(
            env=(
                EnvVar("A", secret="cart-redis-pass"),
                EnvVar("B", value="x"),
                EnvVar("C", secret="cart-redis-pass"),
            ),
            volumes=(Volume("data", "/data"), Volume("seed", "/seed", config_map="seed")),
        )
        self.assertEqual(workload.secret_refs, ["cart-redis-pass"])
        self.assertEqual(workload.config_map_refs, ["seed"])

    def test_duplicate_resource_rejected(self):
        """Test that the same kind and name cannot be added twice"""
        graph = ResourceGraph()
        graph.add(self.secret)
        with self.assertRaises(TopologyError):
            graph.add(Secret("cart-redis-pass", "other", "eA=="))

    def test_same_name_different_kind_allowed(self):
        """Test that a Deployment and its Service share a name"""
        graph = ResourceGraph()
        workload = graph.add(make_workload())
        graph.add(make_service(), depends_on=[workload])
        self.assertEqual(len(graph), 2)

    def test_unknown_dependency_rejected(self):
        """Test that dependencies must already be in the graph"""
        graph = ResourceGraph()
        with self.assertRaises(TopologyError):
            graph.add(make_workload(), depends_on=[self.secret])

    def test_ordered_respects_edges(self):
        """Test that dependencies come first and insertion order breaks ties"""
        graph = ResourceGraph()
        graph.add(self.secret)
        graph.add(self.config_map)
        workload = graph.add(make_workload(), depends_on=[self.secret, self.config_map])
        graph.add(make_service(), depends_on=[workload])

        keys = [resource_key(r) for r in graph.ordered()]
        self.assertEqual(keys, ["Secret/cart-redis-pass", "ConfigMap/seed", "Deployment/cart", "Service/cart"])
        self.assertEqual(graph.dependencies(workload), [self.secret, self.config_map])

    def test_cycle_detected(self):
        """Test that ordered() refuses a cyclic graph"""
        graph = ResourceGraph()
        workload = graph.add(make_workload())
        graph.add(make_service(), depends_on=[workload])
        # add() cannot create cycles, so wire one in directly
        graph._edges["Deployment/cart"] = ("Service/cart",)

        with self.assertRaises(TopologyError):
            graph.ordered()

    def test_accessors(self):
        """Test lookup helpers"""
        graph = ResourceGraph()
        graph.add(self.secret)
        graph.add(make_workload())

        self.assertIs(graph.get("Secret", "cart-redis-pass"), self.secret)
        self.assertIsNone(graph.find("Service", "cart"))
        with self.assertRaises(KeyError):
            graph.get("Service", "cart")
        self.assertEqual(graph.secrets, [self.secret])
        self.assertEqual(len(graph.workloads), 1)
        self.assertIn(self.secret, graph)


if __name__ == "__main__":
    unittest.main()
