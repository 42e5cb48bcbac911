"""Routers implement exactly the routes the OpenAPI contract documents.

Why: the contract is the source of truth shared with the web client; drift breaks generated clients.
Failure: a documented route has no router registration (error), or a registered route is undocumented (warning).
"""

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import yaml

from guardrails_policy.domain.constants import Severity
from guardrails_policy.domain.rules import create_checker, file_filters

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

logger = logging.getLogger(__name__)

CONTRACT_GLOB = "contracts/api/*.openapi.yaml"
ROUTE_PATTERN = re.compile(r"\.\s*(get|post|put|patch|delete)\s*\(\s*[\"']([^\"']+)[\"']\s*,", re.IGNORECASE)
ROUTER_FILE = re.compile(r"^(\w+)-router\.ts$")
NON_OPERATION_KEYS = frozenset({"parameters", "$ref", "summary", "description", "servers"})

Route = tuple[str, str]


@lru_cache(maxsize=16)
def load_contract_routes(workspace_root: str) -> frozenset[Route]:
    """(METHOD, /path/{param}) pairs of every contract under the workspace root."""
    routes: set[Route] = set()
    for contract in sorted(Path(workspace_root).glob(CONTRACT_GLOB)):
        try:
            with open(contract, encoding="utf-8") as f:
                document = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Skipping OpenAPI contract %s: %s", contract, exc)
            continue
        paths = document.get("paths") if isinstance(document, dict) else None
        if not isinstance(paths, dict):
            continue
        for url, methods in paths.items():
            if not isinstance(methods, dict):
                continue
            for method in methods:
                if method not in NON_OPERATION_KEYS:
                    routes.add((str(method).upper(), str(url)))
    return frozenset(routes)


def to_openapi_path(router_path: str) -> str:
    """/todos/:todoId -> /todos/{todoId}."""
    return re.sub(r":([^/]+)", r"{\1}", router_path)


def infer_base_path(file_name: str) -> Optional[str]:
    """todo-router.ts -> /todos, category-router.ts -> /categories."""
    match = ROUTER_FILE.match(file_name)
    if match is None:
        return None
    entity = match.group(1)
    if entity.endswith("y"):
        return f"/{entity[:-1]}ies"
    return f"/{entity}s"


def implemented_routes(source_text: str, base_path: str) -> dict[Route, None]:
    routes: dict[Route, None] = {}
    for match in ROUTE_PATTERN.finditer(source_text):
        route_path = match.group(2)
        full_path = base_path if route_path == "/" else base_path + route_path
        routes[(match.group(1).upper(), to_openapi_path(full_path))] = None
    return routes


def workspace_root(file_path: str) -> Optional[str]:
    """Directory holding server/ and contracts/, relative paths included."""
    marker = "/server/"
    probe = file_path if file_path.startswith("/") else "/" + file_path
    if marker not in probe:
        return None
    root = probe.split(marker)[0]
    return (root if file_path.startswith("/") else root.lstrip("/")) or "."


def _under(path: str, base_path: str) -> bool:
    return path == base_path or path.startswith(base_path + "/")


def _format(routes: list[Route]) -> str:
    return "\n".join(f"  - {method} {path}" for method, path in routes)


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "program":
        return
    base_path = infer_base_path(ctx.file_name)
    root = workspace_root(ctx.file_path)
    if base_path is None or root is None:
        return
    contract = load_contract_routes(root)
    if not contract:
        return

    implemented = implemented_routes(ctx.source_file.text, base_path)
    missing = sorted(route for route in contract if _under(route[1], base_path) and route not in implemented)
    undocumented = [route for route in implemented if route not in contract]

    if missing:
        ctx.report(
            node,
            f'router "{ctx.file_name}" does not implement documented routes.\n'
            f"Bad: routes left unregistered:\n{_format(missing)}\n"
            "Good: register a handler for each route in the OpenAPI contract.\n"
            "Reason: clients generated from the contract call these routes.",
        )
    if undocumented:
        ctx.report(
            node,
            f'router "{ctx.file_name}" registers routes missing from the OpenAPI contract.\n'
            f"Bad: undocumented registrations:\n{_format(undocumented)}\n"
            "Good: document the route in the contract, or remove the registration.\n"
            "Reason: undocumented routes are invisible to generated clients.",
            Severity.WARNING,
        )


policy_check = create_checker(
    file_pattern=r"/hono-handler/.*-router\.ts$",
    visitor=visit,
    exclude=(file_filters.is_test_file,),
)
