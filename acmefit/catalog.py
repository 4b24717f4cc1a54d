"""
Service catalog for the ACME Fitness Shop
Every name, label, image and port used by the topology is declared here once.
Environment variables that point at another service refer to it by catalog
name, so producer and consumer cannot drift apart.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

from acmefit.seed_data import CATALOG_SEED, USERS_SEED

APP_LABEL = "acmefit"
NAMESPACE = "default"
CLUSTER_DOMAIN = "svc.cluster.local"

IMAGE_REGISTRY = "gcr.io/vmwarecloudadvocacy"

MONGO_PORT = 27017
REDIS_PORT = 6379
POSTGRES_PORT = 5432
POS_PORT = 7777
# Port the frontend is published on, whatever frontend_port the container uses
FRONTEND_PUBLIC_PORT = 80

MONGO_USER = "mongoadmin"
POSTGRES_USER = "pgbench"

APP_REQUESTS = {"cpu": "100m", "memory": "64Mi"}
APP_LIMITS = {"cpu": "500m", "memory": "256Mi"}
REDIS_REQUESTS = {"cpu": "100m", "memory": "100Mi"}


# Environment templates, resolved by acmefit.topology

@dataclass(frozen=True)
class Literal:
    name: str
    value: str


@dataclass(frozen=True)
class HostOf:
    """Service name of another catalog unit"""
    name: str
    unit: str


@dataclass(frozen=True)
class FqdnOf:
    """Fully qualified in-cluster DNS name of another catalog unit"""
    name: str
    unit: str


@dataclass(frozen=True)
class PortOf:
    """Listening port of a catalog unit, as a string"""
    name: str
    unit: str


@dataclass(frozen=True)
class SecretRef:
    name: str
    secret: str


EnvTemplate = Union[Literal, HostOf, FqdnOf, PortOf, SecretRef]


@dataclass(frozen=True)
class VolumeSpec:
    name: str
    mount_path: str
    config_map: Optional[str] = None


@dataclass(frozen=True)
class SecretSpec:
    name: str

    @property
    def logical_name(self) -> str:
        return self.name


@dataclass(frozen=True)
class ConfigMapSpec:
    name: str
    logical_name: str
    data: Dict[str, str]


# Values of UnitSpec.exposure
EXPOSURES = ("cluster", "frontend", "node")


@dataclass(frozen=True)
class UnitSpec:
    """
    One Deployment + Service pair

    port is either a fixed number or the Configuration attribute holding it.
    exposure is "cluster", "frontend" (LoadBalancer or NodePort depending on
    is_single_node) or "node" (always NodePort).
    """
    name: str
    service_label: str
    image: str
    port: Union[int, str]
    container_name: str = ""
    port_name: str = ""
    service_port_name: str = ""
    env: Tuple[EnvTemplate, ...] = ()
    volumes: Tuple[VolumeSpec, ...] = ()
    requests: Dict[str, str] = field(default_factory=dict)
    limits: Dict[str, str] = field(default_factory=dict)
    exposure: str = "cluster"
    public_port: Optional[int] = None
    node_port: Optional[str] = None

    @property
    def labels(self) -> Dict[str, str]:
        return {"app": APP_LABEL, "service": self.service_label}

    @property
    def deployment_logical_name(self) -> str:
        return f"{self.name}-deployment"

    @property
    def service_logical_name(self) -> str:
        return f"{self.name}-service"


SECRETS = (
    SecretSpec("cart-redis-pass"),
    SecretSpec("catalog-mongo-pass"),
    SecretSpec("order-postgres-pass"),
    SecretSpec("users-redis-pass"),
    SecretSpec("users-mongo-pass"),
)

CONFIG_MAPS = (
    ConfigMapSpec("catalog-initdb-config", "catalog-config-map", {"seed.js": CATALOG_SEED}),
    ConfigMapSpec("users-initdb-config", "users-config-map", {"seed.js": USERS_SEED}),
)

JAEGER = (
    Literal("JAEGER_AGENT_HOST", "localhost"),
    # Misspelt name is what the service images read
    Literal("JAGER_AGENT_PORT", "6831"),
)
JAEGER_ALT = (
    Literal("JAEGER_AGENT_HOST", "localhost"),
    Literal("JAGER_AGENT_PORT", "6832"),
)


def _redis(name: str, secret: str, service_port_name: str) -> UnitSpec:
    return UnitSpec(
        name=name,
        service_label=name,
        image="bitnami/redis",
        port=REDIS_PORT,
        port_name="redis",
        service_port_name=service_port_name,
        env=(
            HostOf("REDIS_HOST", name),
            SecretRef("REDIS_PASSWORD", secret),
        ),
        volumes=(VolumeSpec(f"{name}-data", "/var/lib/redis"),),
        requests=REDIS_REQUESTS,
    )


def _mongo(name: str, service_label: str, secret: str, seed: str, service_port_name: str) -> UnitSpec:
    return UnitSpec(
        name=name,
        service_label=service_label,
        image="mongo:4",
        port=MONGO_PORT,
        port_name=name,
        service_port_name=service_port_name,
        env=(
            Literal("MONGO_INITDB_ROOT_USERNAME", MONGO_USER),
            Literal("MONGO_INITDB_DATABASE", "acmefit"),
            SecretRef("MONGO_INITDB_ROOT_PASSWORD", secret),
        ),
        volumes=(
            VolumeSpec("mongodata", "/data/db"),
            VolumeSpec("mongo-initdb", "/docker-entrypoint-initdb.d", config_map=seed),
        ),
    )


def _app(name: str, image: str, port: str, env: Tuple[EnvTemplate, ...],
         data_volume: bool = True, sized: bool = True) -> UnitSpec:
    return UnitSpec(
        name=name,
        service_label=name,
        image=f"{IMAGE_REGISTRY}/{image}",
        port=port,
        service_port_name=f"http-{name}",
        env=env,
        volumes=(VolumeSpec(f"acmefit-{name}-data", "/data"),) if data_volume else (),
        requests=APP_REQUESTS if sized else {},
        limits=APP_LIMITS if sized else {},
    )


# Datastores and backend applications, in creation order
UNITS = (
    _redis("cart-redis", "cart-redis-pass", "redis-cart"),
    _app("cart", "acmeshop-cart:latest", "cart_port", (
        HostOf("REDIS_HOST", "cart-redis"),
        SecretRef("REDIS_PASSWORD", "cart-redis-pass"),
        PortOf("REDIS_PORT", "cart-redis"),
        PortOf("CART_PORT", "cart"),
        HostOf("USER_HOST", "users"),
        PortOf("USER_PORT", "users"),
    ) + JAEGER + (
        Literal("AUTH_MODE", "1"),
    )),
    _mongo("catalog-mongo", "catalog-db", "catalog-mongo-pass", "catalog-initdb-config", "mongo-catalog"),
    _app("catalog", "acmeshop-catalog:latest", "catalog_port", (
        HostOf("CATALOG_DB_HOST", "catalog-mongo"),
        SecretRef("CATALOG_DB_PASSWORD", "catalog-mongo-pass"),
        PortOf("CATALOG_DB_PORT", "catalog-mongo"),
        Literal("CATALOG_DB_USERNAME", MONGO_USER),
        PortOf("CATALOG_PORT", "catalog"),
        Literal("CATALOG_VERSION", "v1"),
        HostOf("USERS_HOST", "users"),
        PortOf("USERS_PORT", "users"),
    ) + JAEGER),
    _app("payment", "acmeshop-payment:latest", "payment_port", (
        PortOf("PAYMENT_PORT", "payment"),
        HostOf("USERS_HOST", "users"),
        PortOf("USERS_PORT", "users"),
    ) + JAEGER_ALT, data_volume=False, sized=False),
    UnitSpec(
        name="order-postgres",
        service_label="order-db",
        image="postgres:9.5",
        port=POSTGRES_PORT,
        container_name="postgres",
        port_name="order-postgres",
        service_port_name="postgres-order",
        env=(
            Literal("POSTGRES_USER", POSTGRES_USER),
            SecretRef("POSTGRES_PASSWORD", "order-postgres-pass"),
            SecretRef("PGBENCH_PASSWORD", "order-postgres-pass"),
            Literal("PGDATA", "/var/lib/postgresql/data/pgdata"),
        ),
        volumes=(VolumeSpec("postgredb", "/var/lib/postgresql/data"),),
    ),
    _app("order", "acmeshop-order:latest", "order_port", (
        HostOf("ORDER_DB_HOST", "order-postgres"),
        SecretRef("ORDER_DB_PASSWORD", "order-postgres-pass"),
        PortOf("ORDER_DB_PORT", "order-postgres"),
        Literal("AUTH_MODE", "1"),
        Literal("ORDER_DB_USERNAME", POSTGRES_USER),
        SecretRef("PGPASSWORD", "order-postgres-pass"),
        Literal("ORDER_AUTH_DB", "postgres"),
        PortOf("ORDER_PORT", "order"),
        PortOf("PAYMENT_PORT", "payment"),
        HostOf("PAYMENT_HOST", "payment"),
        HostOf("USER_HOST", "users"),
        PortOf("USER_PORT", "users"),
    ) + JAEGER),
    _mongo("users-mongo", "users-mongo", "users-mongo-pass", "users-initdb-config", "mongo-users"),
    _redis("users-redis", "users-redis-pass", "redis-users"),
    _app("users", "acmeshop-user:latest", "users_port", (
        HostOf("USERS_DB_HOST", "users-mongo"),
        SecretRef("USERS_DB_PASSWORD", "users-mongo-pass"),
        PortOf("USERS_DB_PORT", "users-mongo"),
        Literal("USERS_DB_USERNAME", MONGO_USER),
        HostOf("REDIS_HOST", "users-redis"),
        SecretRef("REDIS_PASSWORD", "users-redis-pass"),
        PortOf("USER_PORT", "users"),
    ) + JAEGER),
)

FRONTEND = UnitSpec(
    name="frontend",
    service_label="frontend",
    image=f"{IMAGE_REGISTRY}/acmeshop-front-end:latest",
    port="frontend_port",
    service_port_name="http-frontend",
    env=(
        PortOf("FRONTEND_PORT", "frontend"),
        HostOf("USERS_HOST", "users"),
        HostOf("CATALOG_HOST", "catalog"),
        HostOf("ORDER_HOST", "order"),
        HostOf("CART_HOST", "cart"),
        PortOf("USERS_PORT", "users"),
        PortOf("CATALOG_PORT", "catalog"),
        PortOf("ORDER_PORT", "order"),
        PortOf("CART_PORT", "cart"),
    ) + JAEGER_ALT,
    exposure="frontend",
    public_port=FRONTEND_PUBLIC_PORT,
    node_port="frontend_nodeport",
)

# Point-of-sale is meant for direct host access, so it is always a NodePort
POINT_OF_SALE = UnitSpec(
    name="pos",
    service_label="pos",
    image=f"{IMAGE_REGISTRY}/acmeshop-pos:v0.1.0-beta",
    port=POS_PORT,
    service_port_name="http-pos",
    env=(
        PortOf("HTTP_PORT", "pos"),
        Literal("DATASTORE", "remote"),
        FqdnOf("FRONTEND_HOST", "frontend"),
    ),
    exposure="node",
    node_port="pos_nodeport",
)

ALL_UNITS = UNITS + (FRONTEND, POINT_OF_SALE)
