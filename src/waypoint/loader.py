"""Route file loading — YAML route lists and Kubernetes Ingress manifests.

A route file is one or more YAML documents. Each document is either a
plain route list::

    gateway:
      port: 8080
    routes:
      - path: /api/
        pathType: Prefix
        rewriteTarget: /
        backend: notes-svc:8000

or a ``networking.k8s.io/v1`` Ingress. Other Kubernetes kinds in the
same bundle (Deployments, Services, ...) are skipped, so a whole
manifest directory can be concatenated and loaded as-is.
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml

from waypoint.config import GatewayConfig
from waypoint.errors import InvalidRouteConfig
from waypoint.routing.route import Backend, MatchMode, Route
from waypoint.routing.table import RouteTable

logger = logging.getLogger("waypoint.loader")

REWRITE_ANNOTATION = "nginx.ingress.kubernetes.io/rewrite-target"

_PATH_TYPES = {
    "exact": MatchMode.EXACT,
    "prefix": MatchMode.PREFIX,
    # ingress-nginx treats ImplementationSpecific as a prefix match
    "implementationspecific": MatchMode.PREFIX,
}


def load_file(path: str | Path) -> tuple[RouteTable, GatewayConfig]:
    """Load and validate a route file.

    Raises:
        InvalidRouteConfig: The file is not valid YAML or describes an
            invalid route set.
        OSError: The file cannot be read.
    """
    text = Path(path).read_text(encoding="utf-8")
    return load_string(text, source=str(path))


def load_string(text: str, *, source: str = "<string>") -> tuple[RouteTable, GatewayConfig]:
    """Load a route set from YAML text."""
    try:
        documents = [doc for doc in yaml.safe_load_all(text) if doc is not None]
    except yaml.YAMLError as exc:
        msg = f"{source}: invalid YAML: {exc}"
        raise InvalidRouteConfig(msg) from exc
    return load_documents(documents, source=source)


def load_documents(
    documents: Iterable[Any],
    *,
    source: str = "<documents>",
) -> tuple[RouteTable, GatewayConfig]:
    """Build a route table and gateway config from parsed documents.

    Routes keep document order, then entry order within a document, so
    registration order (the tie-break order) follows the file.
    """
    routes: list[Route] = []
    config = GatewayConfig()
    config_seen = False

    for index, doc in enumerate(documents):
        where = f"{source}[{index}]"
        if not isinstance(doc, Mapping):
            msg = f"{where}: expected a mapping, got {type(doc).__name__}"
            raise InvalidRouteConfig(msg)

        kind = doc.get("kind")
        if kind == "Ingress":
            routes.extend(routes_from_ingress(doc, where=where))
            continue
        if kind is not None:
            logger.debug("%s: skipping %s document", where, kind)
            continue

        if "gateway" in doc:
            if config_seen:
                msg = f"{where}: 'gateway' settings given more than once"
                raise InvalidRouteConfig(msg)
            config = GatewayConfig.from_mapping(doc["gateway"])
            config_seen = True
        if "routes" in doc:
            routes.extend(routes_from_list(doc["routes"], where=where))
        unknown = set(doc) - {"gateway", "routes"}
        if unknown:
            msg = f"{where}: unknown top-level keys {sorted(unknown)}"
            raise InvalidRouteConfig(msg)

    if not routes:
        msg = f"{source}: no routes defined"
        raise InvalidRouteConfig(msg)

    return RouteTable(routes), config


def routes_from_list(entries: Any, *, where: str = "routes") -> list[Route]:
    """Convert a ``routes:`` list into Route objects."""
    if not isinstance(entries, list):
        msg = f"{where}: 'routes' must be a list"
        raise InvalidRouteConfig(msg)

    routes: list[Route] = []
    for i, entry in enumerate(entries):
        label = f"{where}.routes[{i}]"
        if not isinstance(entry, Mapping):
            msg = f"{label}: expected a mapping"
            raise InvalidRouteConfig(msg)
        unknown = set(entry) - {"path", "pathType", "rewriteTarget", "backend", "name"}
        if unknown:
            msg = f"{label}: unknown keys {sorted(unknown)}"
            raise InvalidRouteConfig(msg)
        if "path" not in entry or "backend" not in entry:
            msg = f"{label}: 'path' and 'backend' are required"
            raise InvalidRouteConfig(msg)

        routes.append(
            Route(
                path=entry["path"],
                backend=parse_backend(entry["backend"], where=label),
                mode=parse_path_type(entry.get("pathType", "Prefix"), where=label),
                rewrite_target=entry.get("rewriteTarget"),
                name=entry.get("name"),
            )
        )
    return routes


def routes_from_ingress(doc: Mapping[str, Any], *, where: str = "Ingress") -> list[Route]:
    """Convert a ``networking.k8s.io/v1`` Ingress into Route objects."""
    api_version = doc.get("apiVersion", "")
    if api_version != "networking.k8s.io/v1":
        msg = f"{where}: unsupported Ingress apiVersion {api_version!r}"
        raise InvalidRouteConfig(msg)

    metadata = _section(doc, "metadata", where)
    name = metadata.get("name", "ingress")
    namespace = metadata.get("namespace")
    rewrite = _section(metadata, "annotations", f"{where}.metadata").get(REWRITE_ANNOTATION)
    spec = _section(doc, "spec", where)

    if rewrite is not None and "$" in str(rewrite):
        msg = (
            f"{where}: rewrite target {rewrite!r} uses capture groups, "
            "which need regex paths; only Exact and Prefix paths are supported"
        )
        raise InvalidRouteConfig(msg)
    if "defaultBackend" in spec:
        logger.warning(
            "%s: Ingress %r defaultBackend ignored; unmatched paths are reported, not defaulted",
            where,
            name,
        )

    routes: list[Route] = []
    rules = spec.get("rules") or []
    if not isinstance(rules, list):
        msg = f"{where}.spec: 'rules' must be a list"
        raise InvalidRouteConfig(msg)

    for r, rule in enumerate(rules):
        if not isinstance(rule, Mapping):
            msg = f"{where}.rules[{r}]: expected a mapping"
            raise InvalidRouteConfig(msg)
        if rule.get("host"):
            logger.warning(
                "%s: host %r on Ingress %r is not matched; its paths apply to every host",
                where,
                rule["host"],
                name,
            )
        paths = _section(rule, "http", f"{where}.rules[{r}]").get("paths") or []
        if not isinstance(paths, list):
            msg = f"{where}.rules[{r}].http: 'paths' must be a list"
            raise InvalidRouteConfig(msg)
        for p, entry in enumerate(paths):
            label = f"{where}.rules[{r}].paths[{p}]"
            if not isinstance(entry, Mapping):
                msg = f"{label}: expected a mapping"
                raise InvalidRouteConfig(msg)
            if "pathType" not in entry:
                msg = f"{label}: pathType is required"
                raise InvalidRouteConfig(msg)
            routes.append(
                Route(
                    path=entry.get("path", "/"),
                    backend=_ingress_backend(entry, namespace, where=label),
                    mode=parse_path_type(entry["pathType"], where=label),
                    rewrite_target=rewrite,
                    name=name,
                )
            )
    return routes


def _section(parent: Mapping[str, Any], key: str, where: str) -> Mapping[str, Any]:
    """Return ``parent[key]`` as a mapping; missing or null gives ``{}``."""
    value = parent.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        msg = f"{where}: '{key}' must be a mapping, got {type(value).__name__}"
        raise InvalidRouteConfig(msg)
    return value


def _ingress_backend(entry: Mapping[str, Any], namespace: str | None, *, where: str) -> Backend:
    backend = _section(entry, "backend", where)
    service = _section(backend, "service", f"{where}.backend")
    if not service.get("name"):
        msg = f"{where}: backend.service.name is required"
        raise InvalidRouteConfig(msg)
    port = _section(service, "port", f"{where}.backend.service")
    if "number" not in port:
        msg = f"{where}: backend.service.port.number is required (named ports are not supported)"
        raise InvalidRouteConfig(msg)

    host = service["name"]
    if namespace:
        host = f"{host}.{namespace}"
    return Backend(host=host, port=port["number"])


def parse_path_type(value: Any, *, where: str = "route") -> MatchMode:
    """Map an Ingress-style ``pathType`` to a MatchMode (case-insensitive)."""
    mode = _PATH_TYPES.get(str(value).lower())
    if mode is None:
        msg = f"{where}: unknown pathType {value!r} (expected Exact or Prefix)"
        raise InvalidRouteConfig(msg)
    return mode


def parse_backend(value: Any, *, where: str = "route") -> Backend:
    """Parse ``"host:port"`` or ``{host: ..., port: ...}`` into a Backend."""
    if isinstance(value, str):
        host, sep, port_text = value.rpartition(":")
        if not sep or not port_text.isdigit():
            msg = f"{where}: backend {value!r} must look like 'host:port'"
            raise InvalidRouteConfig(msg)
        return Backend(host=host, port=int(port_text))
    if isinstance(value, Mapping):
        if "host" not in value or "port" not in value:
            msg = f"{where}: backend needs 'host' and 'port'"
            raise InvalidRouteConfig(msg)
        return Backend(host=value["host"], port=value["port"])
    msg = f"{where}: backend must be 'host:port' or a mapping"
    raise InvalidRouteConfig(msg)
