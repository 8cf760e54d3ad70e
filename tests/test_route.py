"""Tests for waypoint.routing.route and waypoint.routing.matching."""

import pytest

from waypoint.routing.matching import matches, rewrite_path
from waypoint.routing.route import Backend, MatchMode, NoRouteMatched, Route, RoutingDecision


class TestMatchMode:
    def test_values_follow_ingress_spelling(self) -> None:
        assert MatchMode.EXACT == "Exact"
        assert MatchMode.PREFIX == "Prefix"
        assert MatchMode("Prefix") is MatchMode.PREFIX


class TestBackend:
    def test_authority_and_url(self) -> None:
        backend = Backend("notes-svc.default", 8000)
        assert backend.authority == "notes-svc.default:8000"
        assert backend.url("/items") == "http://notes-svc.default:8000/items"
        assert str(backend) == "notes-svc.default:8000"

    def test_frozen(self) -> None:
        backend = Backend("svc", 80)
        with pytest.raises(AttributeError):
            backend.port = 81  # type: ignore[misc]


class TestRoute:
    def test_defaults(self) -> None:
        route = Route("/", Backend("svc", 80))
        assert route.mode is MatchMode.PREFIX
        assert route.rewrite_target is None
        assert route.name is None

    def test_describe(self) -> None:
        route = Route(
            "/api/",
            Backend("svc", 8000),
            MatchMode.PREFIX,
            rewrite_target="/",
            name="notes-ingress",
        )
        assert route.describe() == "Prefix /api/ -> svc:8000 (rewrite /) [notes-ingress]"

    def test_describe_minimal(self) -> None:
        route = Route("/api", Backend("svc", 8000), MatchMode.EXACT)
        assert route.describe() == "Exact /api -> svc:8000"

    def test_hashable(self) -> None:
        a = Route("/", Backend("svc", 80))
        b = Route("/", Backend("svc", 80))
        assert a == b
        assert len({a, b}) == 1


class TestResultValues:
    def test_no_route_matched_is_falsy(self) -> None:
        assert not NoRouteMatched("/x")

    def test_decision_is_truthy(self) -> None:
        route = Route("/", Backend("svc", 80))
        assert RoutingDecision(route, "/", "http://svc:80/")


class TestMatches:
    @pytest.mark.parametrize(
        ("route_path", "mode", "request_path", "expected"),
        [
            ("/api", MatchMode.EXACT, "/api", True),
            ("/api", MatchMode.EXACT, "/api/", False),
            ("/api", MatchMode.PREFIX, "/api", True),
            ("/api", MatchMode.PREFIX, "/api/", True),
            ("/api", MatchMode.PREFIX, "/apiv2", False),
            ("/api/", MatchMode.PREFIX, "/api/v2", True),
            ("/api/", MatchMode.PREFIX, "/api", False),
            ("/", MatchMode.PREFIX, "/anything", True),
            ("/", MatchMode.PREFIX, "relative", False),
        ],
    )
    def test_matches(
        self, route_path: str, mode: MatchMode, request_path: str, expected: bool
    ) -> None:
        route = Route(route_path, Backend("svc", 80), mode)
        assert matches(route, request_path) is expected


class TestRewritePath:
    def test_none_keeps_path(self) -> None:
        route = Route("/api", Backend("svc", 80))
        assert rewrite_path(route, "/api/x") == "/api/x"

    def test_keeps_suffix_after_prefix(self) -> None:
        route = Route("/api/", Backend("svc", 80), rewrite_target="/")
        assert rewrite_path(route, "/api/items/1") == "/items/1"

    def test_exact_match_yields_target(self) -> None:
        route = Route("/api/", Backend("svc", 80), rewrite_target="/")
        assert rewrite_path(route, "/api/") == "/"

    def test_collapses_joint_slash(self) -> None:
        route = Route("/api", Backend("svc", 80), rewrite_target="/backend/")
        assert rewrite_path(route, "/api/items") == "/backend/items"
        assert rewrite_path(route, "/api") == "/backend/"
