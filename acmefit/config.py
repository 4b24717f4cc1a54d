"""
Configuration management for the ACME Fitness deployment
Reads the `kubevars` object from the Pulumi stack configuration
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping

import pulumi

from acmefit.errors import ConfigurationError

# Kubernetes default NodePort range
NODE_PORT_RANGE = (30000, 32767)
PORT_RANGE = (1, 65535)

# Stack config key -> attribute name
KUBEVARS_FIELDS = {
    "isSingleNode": "is_single_node",
    "dataStorePassword": "data_store_password",
    "frontendPort": "frontend_port",
    "usersPort": "users_port",
    "catalogPort": "catalog_port",
    "orderPort": "order_port",
    "cartPort": "cart_port",
    "paymentPort": "payment_port",
    "frontendNodeport": "frontend_nodeport",
    "posNodeport": "pos_nodeport",
}

# Configuration attributes a catalog entry may take a port number from
PORT_FIELDS = frozenset(
    attr for key, attr in KUBEVARS_FIELDS.items() if key.endswith(("Port", "Nodeport"))
)


@dataclass(frozen=True)
class Configuration:
    """Validated inputs for the topology builder"""

    # True for Minikube, Docker Desktop and other clusters without LoadBalancer support
    is_single_node: bool
    # Shared password for every datastore
    data_store_password: str
    frontend_port: int
    users_port: int
    catalog_port: int
    order_port: int
    cart_port: int
    payment_port: int
    # Exposes the frontend outside the cluster when is_single_node is set
    frontend_nodeport: int
    # Always exposes the point-of-sale service outside the cluster
    pos_nodeport: int

    @classmethod
    def from_kubevars(cls, kubevars: Mapping[str, Any]) -> "Configuration":
        """
        Validate a raw kubevars mapping

        Every field is required; nothing is defaulted. All problems are
        collected and reported together.

        Raises:
            ConfigurationError: if any field is missing or invalid
        """
        if not isinstance(kubevars, Mapping):
            raise ConfigurationError(invalid=["kubevars must be an object"])

        missing = [key for key in KUBEVARS_FIELDS if kubevars.get(key) is None]
        invalid = []
        values = {}
        for key, attr in KUBEVARS_FIELDS.items():
            if key in missing:
                continue
            value = kubevars[key]
            error = _check_value(key, value)
            if error:
                invalid.append(error)
            values[attr] = value

        if missing or invalid:
            raise ConfigurationError(missing=missing, invalid=invalid)
        return cls(**values)

    def to_kubevars(self) -> Dict[str, Any]:
        """Inverse of from_kubevars, using the stack config key names"""
        attrs = {attr: key for key, attr in KUBEVARS_FIELDS.items()}
        return {attrs[f.name]: getattr(self, f.name) for f in fields(self)}


def _check_value(key: str, value: Any) -> str:
    if key == "isSingleNode":
        if not isinstance(value, bool):
            return f"{key} must be a boolean"
        return ""
    if key == "dataStorePassword":
        if not isinstance(value, str) or not value:
            return f"{key} must be a non-empty string"
        return ""

    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, int):
        return f"{key} must be an integer"
    low, high = NODE_PORT_RANGE if key.endswith("Nodeport") else PORT_RANGE
    if not low <= value <= high:
        return f"{key} must be between {low} and {high}, got {value}"
    return ""


def get_config() -> Configuration:
    """Load and validate kubevars from the current Pulumi stack"""
    config = pulumi.Config()
    try:
        kubevars = config.require_object("kubevars")
    except pulumi.ConfigMissingError as e:
        raise ConfigurationError(missing=["kubevars"]) from e
    except pulumi.ConfigTypeError as e:
        raise ConfigurationError(invalid=[f"kubevars must be a JSON object: {e}"]) from e
    return Configuration.from_kubevars(kubevars)
