"""Tests for the middleware pipeline — ordering, short-circuit, one response."""

import logging

import pytest

from wayfare.app import App
from wayfare.config import AppConfig
from wayfare.http.request import Request
from wayfare.http.response import Response
from wayfare.middleware.protocol import Next
from wayfare.testing import TestClient


def _recorder(name: str, log: list[str]):
    async def mw(request: Request, next: Next) -> Response:
        log.append(name)
        return await next(request)

    return mw


class TestOrdering:
    async def test_registration_order_then_handler(self) -> None:
        app = App()
        log: list[str] = []
        app.use(_recorder("A", log))
        app.use(_recorder("B", log))

        @app.get("/")
        def handler():
            log.append("H")
            return "ok"

        await app.dispatch(Request.build("GET", "/"))
        assert log == ["A", "B", "H"]

    async def test_order_is_stable_across_requests(self) -> None:
        app = App()
        log: list[str] = []
        app.use(_recorder("A", log))
        app.use(_recorder("B", log))
        app.register("GET", "/", lambda: log.append("H") or "ok")

        for _ in range(3):
            log.clear()
            await app.dispatch(Request.build("GET", "/"))
            assert log == ["A", "B", "H"]

    async def test_response_unwinds_in_reverse(self) -> None:
        app = App()

        def tag(name: str):
            async def mw(request: Request, next: Next) -> Response:
                response = await next(request)
                return response.with_header("X-Seen", name)

            return mw

        app.use(tag("outer"))
        app.use(tag("inner"))
        app.register("GET", "/", lambda: "ok")

        response = await app.dispatch(Request.build("GET", "/"))
        assert [v for k, v in response.headers if k == "X-Seen"] == ["inner", "outer"]

    async def test_middleware_runs_for_unmatched_path(self) -> None:
        app = App()
        log: list[str] = []
        app.use(_recorder("A", log))

        response = await app.dispatch(Request.build("GET", "/nowhere"))
        assert log == ["A"]
        assert response.status == 404


class TestShortCircuit:
    async def test_first_middleware_short_circuits(self) -> None:
        app = App()
        log: list[str] = []

        async def gate(request: Request, next: Next) -> Response:
            log.append("A")
            return Response("Forbidden").with_status(403)

        app.use(gate)
        app.use(_recorder("B", log))
        app.register("GET", "/", lambda: log.append("H") or "ok")

        response = await app.dispatch(Request.build("GET", "/"))
        assert response.status == 403
        assert log == ["A"]

    async def test_second_middleware_short_circuits(self) -> None:
        app = App()
        log: list[str] = []

        async def gate(request: Request, next: Next) -> Response:
            log.append("B")
            return Response("Maintenance").with_status(503)

        app.use(_recorder("A", log))
        app.use(gate)
        app.register("GET", "/", lambda: log.append("H") or "ok")

        response = await app.dispatch(Request.build("GET", "/"))
        assert response.text == "Maintenance"
        assert log == ["A", "B"]

    async def test_middleware_may_return_plain_values(self) -> None:
        app = App()

        async def teapot(request: Request, next: Next):
            return ("short and stout", 418)

        app.use(teapot)
        response = await app.dispatch(Request.build("GET", "/"))
        assert response.status == 418
        assert response.text == "short and stout"

    async def test_class_middleware(self) -> None:
        class Maintenance:
            def __init__(self, enabled: bool) -> None:
                self.enabled = enabled

            async def __call__(self, request: Request, next: Next) -> Response:
                if self.enabled:
                    return Response("Down").with_status(503)
                return await next(request)

        on = App()
        on.use(Maintenance(enabled=True))
        on.register("GET", "/", lambda: "up")
        off = App()
        off.use(Maintenance(enabled=False))
        off.register("GET", "/", lambda: "up")

        assert (await on.dispatch(Request.build("GET", "/"))).status == 503
        assert (await off.dispatch(Request.build("GET", "/"))).text == "up"

    async def test_middleware_can_replace_request(self) -> None:
        app = App()

        async def rewrite(request: Request, next: Next) -> Response:
            return await next(Request.build(request.method, "/about"))

        app.use(rewrite)
        app.register("GET", "/about", lambda: "About page")

        response = await app.dispatch(Request.build("GET", "/"))
        assert response.text == "About page"


class TestOneResponsePerRequest:
    async def test_next_called_twice_is_an_error(self, caplog: pytest.LogCaptureFixture) -> None:
        app = App()
        calls: list[str] = []

        async def greedy(request: Request, next: Next) -> Response:
            await next(request)
            return await next(request)

        app.use(greedy)
        app.register("GET", "/", lambda: calls.append("H") or "ok")

        with caplog.at_level(logging.ERROR, logger="wayfare.server"):
            response = await app.dispatch(Request.build("GET", "/"))

        assert response.status == 500
        assert calls == ["H"]
        assert "called next() more than once" in caplog.text

    async def test_middleware_returning_none_is_an_error(self) -> None:
        app = App(AppConfig(debug=True))

        async def forgetful(request: Request, next: Next):
            await next(request)

        app.use(forgetful)
        app.register("GET", "/", lambda: "ok")

        response = await app.dispatch(Request.build("GET", "/"))
        assert response.status == 500
        assert "ConfigurationError" in response.text
        assert "No response was produced" in response.text

    async def test_handler_returning_none_is_an_error(self) -> None:
        app = App(AppConfig(debug=True))
        app.register("GET", "/", lambda: None)

        response = await app.dispatch(Request.build("GET", "/"))
        assert response.status == 500
        assert "No response was produced" in response.text

    async def test_asgi_sends_exactly_one_response(self) -> None:
        app = App()
        app.use(_recorder("A", []))
        app.register("GET", "/", lambda: "Hello World!")

        # TestClient raises if http.response.start is sent twice
        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.text == "Hello World!"


class TestErrorsInsideTheChain:
    async def test_outer_middleware_sees_handler_failure_as_500(self) -> None:
        app = App()
        seen: list[int] = []

        async def observe(request: Request, next: Next) -> Response:
            response = await next(request)
            seen.append(response.status)
            return response

        def broken():
            raise ValueError("boom")

        app.use(observe)
        app.register("GET", "/", broken)

        response = await app.dispatch(Request.build("GET", "/"))
        assert response.status == 500
        assert seen == [500]

    async def test_failing_middleware_becomes_500(self) -> None:
        app = App()

        async def broken(request: Request, next: Next) -> Response:
            raise RuntimeError("middleware bug")

        app.use(broken)
        app.register("GET", "/", lambda: "ok")

        response = await app.dispatch(Request.build("GET", "/"))
        assert response.status == 500
        assert response.text == "Internal Server Error"

    async def test_failure_does_not_leak_into_next_request(self) -> None:
        app = App()
        state = {"fail": True}

        def flaky():
            if state["fail"]:
                state["fail"] = False
                raise RuntimeError("once")
            return "recovered"

        app.register("GET", "/", flaky)

        assert (await app.dispatch(Request.build("GET", "/"))).status == 500
        second = await app.dispatch(Request.build("GET", "/"))
        assert second.status == 200
        assert second.text == "recovered"
