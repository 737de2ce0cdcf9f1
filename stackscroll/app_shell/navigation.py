"""
Named routes and the sign-in guard.

Kept free of UI types so the redirect rules can be tested on their own.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal

RouteName = Literal["home", "listing", "article", "compose", "authenticate"]
DecisionKind = Literal["render", "redirect", "loading", "not_found"]

ROUTES: dict[RouteName, str] = {
    "home": "/",
    "listing": "/blog",
    "compose": "/write",
    "authenticate": "/login",
}

DYNAMIC_ROUTES: dict[RouteName, str] = {
    "article": r"^/blog/(?P<article_id>[^/]+)$",
}

PROTECTED: frozenset[str] = frozenset({"compose"})


@dataclass(frozen=True)
class RouteDecision:
    kind: DecisionKind
    path: str
    name: RouteName | None = None
    params: dict[str, str] = field(default_factory=dict)
    next_path: str | None = None  # where to go after sign-in


def path_for(name: str) -> str:
    if name not in ROUTES:
        raise ValueError(f"Unknown route: {name}")
    return ROUTES[name]  # type: ignore[index]


def match_route(path: str) -> tuple[RouteName, dict[str, str]] | None:
    for name, route_path in ROUTES.items():
        if route_path == path:
            return name, {}
    for name, pattern in DYNAMIC_ROUTES.items():
        match = re.match(pattern, path)
        if match:
            return name, match.groupdict()
    return None


def resolve(path: str, *, signed_in: bool, session_ready: bool = True) -> RouteDecision:
    """
    Decide what to show for a requested path.

    Protected routes wait for the session to be restored, then either render
    or redirect to sign-in with the original path kept for afterwards.
    """
    path = path or "/"
    matched = match_route(path)
    if matched is None:
        return RouteDecision(kind="not_found", path=path)

    name, params = matched
    if name in PROTECTED and not signed_in:
        if not session_ready:
            return RouteDecision(kind="loading", path=path, name=name, params=params)
        return RouteDecision(
            kind="redirect",
            path=ROUTES["authenticate"],
            name="authenticate",
            next_path=path,
        )

    return RouteDecision(kind="render", path=path, name=name, params=params)
