"""Hello server — the smallest wayfare app.

Two exact routes and nothing else. Any other path is a 404, and at
most one handler ever answers a request.

Run:
    python app.py
"""

from wayfare import App

app = App()


@app.get("/")
def index():
    return "Hello World!"


@app.get("/about")
def about():
    return "About page"


if __name__ == "__main__":
    app.run()
