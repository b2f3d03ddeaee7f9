"""Tests for patmux.routing.mux — registration and resolution."""

import threading

import pytest

from patmux.config import MuxConfig
from patmux.errors import ConfigurationError
from patmux.http.query import QueryParams
from patmux.http.request import Request
from patmux.routing.handlers import HandlerFunc, NotFoundHandler, RedirectHandler
from patmux.routing.mux import ServeMux
from patmux.routing.pattern import Exact, Prefix, Template


def _handler(request: Request) -> str:
    return "ok"


def _mux(*patterns: str) -> ServeMux:
    mux = ServeMux()
    for pattern in patterns:
        mux.register_func(pattern, _handler)
    return mux


def _resolved(mux: ServeMux, path: str, host: str = "") -> str | None:
    match = mux.resolve(host + path, path)
    return None if match is None else match.pattern


class TestRegister:
    def test_empty_pattern_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="non-empty"):
            ServeMux().register("", HandlerFunc(_handler))

    def test_none_handler_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="No handler"):
            ServeMux().register("/a", None)  # type: ignore[arg-type]

    def test_none_function_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="No handler"):
            ServeMux().register_func("/a", None)  # type: ignore[arg-type]

    def test_duplicate_explicit_rejected(self) -> None:
        mux = _mux("/a")
        with pytest.raises(ConfigurationError, match="Multiple registrations"):
            mux.register_func("/a", _handler)

    def test_duplicate_does_not_replace_original(self) -> None:
        mux = ServeMux()
        first = HandlerFunc(_handler)
        mux.register("/a", first)
        with pytest.raises(ConfigurationError):
            mux.register("/a", HandlerFunc(_handler))
        match = mux.resolve("/a", "/a")
        assert match is not None
        assert match.handler is first

    def test_entries_are_compiled(self) -> None:
        mux = _mux("/a", "/b/", "/c/:id")
        kinds = {entry.pattern: type(entry.compiled) for entry in mux.routes}
        assert kinds["/a"] is Exact
        assert kinds["/b/"] is Prefix
        assert kinds["/c/:id"] is Template

    def test_route_decorator_returns_function(self) -> None:
        mux = ServeMux()

        @mux.route("/hello")
        def hello(request: Request) -> str:
            return "hi"

        assert hello(Request("GET", "", "/hello")) == "hi"
        assert [entry.pattern for entry in mux.routes] == ["/hello"]


class TestImplicitRedirect:
    def test_tree_registers_redirect(self) -> None:
        mux = _mux("/tree/")
        match = mux.resolve("/tree", "/tree")
        assert match is not None
        assert match.pattern == "/tree"
        assert match.handler == RedirectHandler("/tree/", 301)

    def test_redirect_is_implicit(self) -> None:
        entries = {entry.pattern: entry for entry in _mux("/tree/").routes}
        assert entries["/tree/"].explicit is True
        assert entries["/tree"].explicit is False

    def test_explicit_registration_overrides_redirect(self) -> None:
        mux = _mux("/tree/")
        own = HandlerFunc(_handler)
        mux.register("/tree", own)
        match = mux.resolve("/tree", "/tree")
        assert match is not None
        assert match.handler is own

    def test_existing_explicit_entry_kept(self) -> None:
        mux = ServeMux()
        own = HandlerFunc(_handler)
        mux.register("/tree", own)
        mux.register_func("/tree/", _handler)
        match = mux.resolve("/tree", "/tree")
        assert match is not None
        assert match.handler is own

    def test_redirect_status_from_config(self) -> None:
        mux = ServeMux(MuxConfig(redirect_status=308))
        mux.register_func("/tree/", _handler)
        match = mux.resolve("/tree", "/tree")
        assert match is not None
        assert match.handler == RedirectHandler("/tree/", 308)

    def test_host_pattern_redirects_to_path_part(self) -> None:
        mux = _mux("example.com/admin/")
        match = mux.resolve("example.com/admin", "/admin")
        assert match is not None
        assert match.pattern == "example.com/admin"
        assert match.handler == RedirectHandler("/admin/", 301)

    def test_root_adds_no_redirect(self) -> None:
        assert [entry.pattern for entry in _mux("/").routes] == ["/"]

    def test_template_redirect_is_shadowed_by_longer_prefix(self) -> None:
        mux = _mux("/users/:id/")
        entries = {entry.pattern: entry for entry in mux.routes}
        assert entries["/users/:id"].explicit is False
        assert _resolved(mux, "/users/7") == "/users/:id/"


class TestResolve:
    def test_miss_returns_none(self) -> None:
        assert _mux("/a").resolve("/b", "/b") is None

    def test_longest_pattern_wins(self) -> None:
        mux = _mux("/images/", "/images/thumbnails/")
        assert _resolved(mux, "/images/thumbnails/x") == "/images/thumbnails/"
        assert _resolved(mux, "/images/full/x") == "/images/"

    def test_registration_order_does_not_matter_for_length(self) -> None:
        mux = _mux("/images/thumbnails/", "/images/")
        assert _resolved(mux, "/images/thumbnails/x") == "/images/thumbnails/"

    def test_root_catches_everything(self) -> None:
        mux = _mux("/", "/api/")
        assert _resolved(mux, "/anything") == "/"
        assert _resolved(mux, "/api/v1") == "/api/"

    def test_equal_length_tie_goes_to_first_registered(self) -> None:
        mux = _mux("/x/:a", "/:b/y")
        assert _resolved(mux, "/x/y") == "/x/:a"
        mux = _mux("/:b/y", "/x/:a")
        assert _resolved(mux, "/x/y") == "/:b/y"

    def test_longer_template_beats_shorter_exact(self) -> None:
        mux = _mux("/users/:id", "/users/me")
        assert _resolved(mux, "/users/me") == "/users/:id"
        assert _resolved(mux, "/users/42") == "/users/:id"

    def test_host_pattern_takes_precedence(self) -> None:
        mux = _mux("/search", "search.example.com/")
        assert _resolved(mux, "/search", host="search.example.com") == "search.example.com/"
        assert _resolved(mux, "/search", host="www.example.com") == "/search"

    def test_host_pattern_falls_back_to_plain(self) -> None:
        mux = _mux("example.com/admin/", "/")
        assert _resolved(mux, "/admin/users", host="example.com") == "example.com/admin/"
        assert _resolved(mux, "/admin/users", host="other.com") == "/"

    def test_captures_extracted(self) -> None:
        mux = _mux("/hello/:a")
        match = mux.resolve("/hello/world", "/hello/world")
        assert match is not None
        assert match.captures is not None
        assert match.captures[":a"] == "world"

    def test_flat_match_has_no_captures(self) -> None:
        match = _mux("/hello/").resolve("/hello/world", "/hello/world")
        assert match is not None
        assert match.captures is None

    def test_host_template_captures(self) -> None:
        mux = _mux("example.com/users/:id")
        match = mux.resolve("example.com/users/9", "/users/9")
        assert match is not None
        assert match.captures is not None
        assert match.captures[":id"] == "9"


class TestHandlerFor:
    def test_miss_uses_not_found_handler(self) -> None:
        request = Request("GET", "testserver", "/nope")
        handler, seen = _mux("/a").handler_for(request)
        assert isinstance(handler, NotFoundHandler)
        assert seen is request

    def test_captures_prepended_to_query(self) -> None:
        request = Request(
            "GET", "testserver", "/hello/world", query=QueryParams(b"a=1&:a=mine")
        )
        _, seen = _mux("/hello/:a").handler_for(request)
        assert seen.captures[":a"] == "world"
        assert seen.query[":a"] == "world"
        assert seen.query.get_list(":a") == ["world", "mine"]
        assert seen.query["a"] == "1"

    def test_no_captures_keeps_request(self) -> None:
        request = Request("GET", "testserver", "/static/app.css")
        _, seen = _mux("/static/").handler_for(request)
        assert seen is request

    def test_host_matched_before_plain(self) -> None:
        mux = ServeMux()
        host_handler = HandlerFunc(_handler)
        mux.register("api.example.com/", host_handler)
        mux.register_func("/", _handler)
        handler, _ = mux.handler_for(Request("GET", "api.example.com", "/v1"))
        assert handler is host_handler


class TestRoutes:
    def test_sorted_snapshot(self) -> None:
        mux = _mux("/b", "/a/")
        assert [entry.pattern for entry in mux.routes] == ["/a", "/a/", "/b"]

    def test_snapshot_is_a_copy(self) -> None:
        mux = _mux("/a")
        routes = mux.routes
        mux.register_func("/b", _handler)
        assert len(routes) == 1


class TestConcurrency:
    def test_concurrent_registration_and_lookup(self) -> None:
        mux = _mux("/")
        errors: list[BaseException] = []

        def register(start: int) -> None:
            try:
                for i in range(start, start + 50):
                    mux.register_func(f"/n{i}/", _handler)
            except BaseException as exc:  # noqa: BLE001
                errors.append(exc)

        def lookup() -> None:
            try:
                for _ in range(200):
                    assert mux.resolve("/n1/x", "/n1/x") is not None
            except BaseException as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [threading.Thread(target=register, args=(i * 50,)) for i in range(4)]
        threads += [threading.Thread(target=lookup) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(mux.routes) == 1 + 2 * 200
