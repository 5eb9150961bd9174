"""Tests for wayfare.templating — Template return type and renderers."""

import sys

import pytest

from wayfare.app import App
from wayfare.config import AppConfig
from wayfare.errors import ConfigurationError
from wayfare.http.request import Request
from wayfare.templating import KidaRenderer, Template, ViewRenderer


class _Upper:
    def render(self, name, context):
        return f"{name}|{context['title'].upper()}"


class TestCustomRenderer:
    def test_protocol_is_structural(self) -> None:
        assert isinstance(_Upper(), ViewRenderer)
        assert not isinstance(object(), ViewRenderer)

    async def test_app_uses_custom_renderer(self) -> None:
        app = App(renderer=_Upper())

        @app.get("/")
        def index():
            return Template("index", title="home")

        response = await app.dispatch(Request.build("GET", "/"))
        assert response.text == "index|HOME"

    async def test_template_without_renderer_is_500(self, tmp_path) -> None:
        app = App(AppConfig(template_dir=tmp_path / "none", debug=True))
        app.register("GET", "/", lambda: Template("index.html"))

        response = await app.dispatch(Request.build("GET", "/"))
        assert response.status == 500
        assert "no view renderer" in response.text

    def test_filters_with_custom_renderer_rejected(self) -> None:
        app = App(renderer=_Upper())

        @app.template_filter()
        def shout(value: str) -> str:
            return value.upper()

        with pytest.raises(ConfigurationError, match=r"shout"):
            app._ensure_frozen()
        assert app._frozen is False

    def test_globals_without_template_dir_rejected(self, tmp_path) -> None:
        app = App(AppConfig(template_dir=tmp_path / "none"))

        @app.template_global("site")
        def site_name() -> str:
            return "wayfare"

        with pytest.raises(ConfigurationError, match=r"no kida renderer"):
            app._ensure_frozen()


class TestKidaMissing:
    def test_clear_install_hint(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setitem(sys.modules, "kida", None)
        with pytest.raises(ConfigurationError, match=r"pip install wayfare\[templates\]"):
            KidaRenderer.from_config(AppConfig())


class TestKidaRenderer:
    @pytest.fixture
    def views(self, tmp_path):
        pytest.importorskip("kida")
        (tmp_path / "index.html").write_text("<h1>{{ title }}</h1>")
        return tmp_path

    def test_render(self, views) -> None:
        renderer = KidaRenderer.from_config(AppConfig(template_dir=views))
        assert renderer.render("index.html", {"title": "Home"}) == "<h1>Home</h1>"

    def test_autoescape(self, views) -> None:
        renderer = KidaRenderer.from_config(AppConfig(template_dir=views))
        html = renderer.render("index.html", {"title": "<b>x</b>"})
        assert "<b>" not in html
        assert "&lt;b&gt;" in html

    def test_filters(self, views) -> None:
        (views / "shout.html").write_text("{{ name | shout }}")
        renderer = KidaRenderer.from_config(
            AppConfig(template_dir=views), filters={"shout": lambda v: v.upper() + "!"}
        )
        assert renderer.render("shout.html", {"name": "hi"}) == "HI!"

    async def test_app_renders_from_template_dir(self, views) -> None:
        app = App(AppConfig(template_dir=views))

        @app.template_global()
        def site_name() -> str:
            return "wayfare"

        (views / "about.html").write_text("{{ site_name() }}: {{ title }}")

        @app.get("/")
        def index():
            return Template("index.html", title="Home")

        @app.get("/about")
        def about():
            return Template("about.html", title="About page")

        assert app._renderer is None
        home = await app.dispatch(Request.build("GET", "/"))
        about_page = await app.dispatch(Request.build("GET", "/about"))
        assert home.text == "<h1>Home</h1>"
        assert about_page.text == "wayfare: About page"
        assert isinstance(app._renderer, KidaRenderer)
