"""Return-value negotiation — maps handler return values to Responses.

isinstance-based dispatch, no magic, fully predictable. Every path
either yields exactly one ``Response`` or raises.
"""

import json as json_module
from typing import Any

from wayfare.errors import ConfigurationError
from wayfare.http.response import Redirect, Response
from wayfare.templating.integration import ViewRenderer
from wayfare.templating.returns import Template


def negotiate(value: Any, *, renderer: ViewRenderer | None = None) -> Response:
    """Convert a handler's return value to a Response.

    Dispatch order:

    1. ``Response``            -> pass through
    2. ``Redirect``            -> empty body + Location header
    3. ``Template``            -> rendered by *renderer* -> text/html
    4. ``str``                 -> 200, text/html
    5. ``bytes``               -> 200, application/octet-stream
    6. ``dict`` / ``list``     -> 200, application/json
    7. ``(value, int)``        -> negotiate value, override status
    8. ``(value, int, dict)``  -> negotiate value, override status + headers
    9. ``None``                -> ConfigurationError (nothing was produced)
    """
    match value:
        case Response():
            return value
        case Redirect():
            return (
                Response(body="")
                .with_status(value.status)
                .with_header("Location", value.url)
                .with_headers(dict(value.headers))
            )
        case Template():
            if renderer is None:
                msg = (
                    f"Cannot render Template({value.name!r}): no view renderer. "
                    "Install kida (pip install wayfare[templates]) and create the "
                    "AppConfig.template_dir directory, or pass renderer= to App()."
                )
                raise ConfigurationError(msg)
            return Response(body=renderer.render(value.name, value.context))
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(
                body=json_module.dumps(value, default=str),
                content_type="application/json; charset=utf-8",
            )
        case (inner, int() as status):
            return negotiate(inner, renderer=renderer).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner, renderer=renderer).with_status(status).with_headers(headers)
        case None:
            msg = (
                "No response was produced: a handler or middleware returned None. "
                "Return a value (str, dict, Template, Response, ...) or call next()."
            )
            raise ConfigurationError(msg)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                "Return str, bytes, dict, list, Template, Response, or Redirect."
            )
            raise TypeError(msg)
