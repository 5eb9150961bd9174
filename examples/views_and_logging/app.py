"""Views and logging — middleware, rendered views, plain routes.

Demonstrates:
- RequestLogger for one access-log line per request
- A function middleware that does some work and continues the chain
- Rendering a kida view from ``views/`` (needs ``wayfare[templates]``)

Run:
    cd examples/views_and_logging && python app.py
"""

import logging
from pathlib import Path

from wayfare import App, AppConfig, Request, RequestLogger, Response, Template
from wayfare.middleware import Next

log = logging.getLogger("views_and_logging")

app = App(AppConfig(template_dir=Path(__file__).parent / "views"))


async def tally(request: Request, next: Next) -> Response:
    """Do a little work on every request, then hand off."""
    total = 10 + 20
    log.info("middleware ran, total is %d", total)
    response = await next(request)
    return response.with_header("X-Total", str(total))


app.use(RequestLogger())
app.use(tally)


@app.get("/")
def index():
    log.info("rendering index")
    return Template("index.html", title="Home")


@app.get("/about")
def about():
    return "About page"


@app.get("/contact")
def contact():
    return "Contact page"


if __name__ == "__main__":
    app.run()
