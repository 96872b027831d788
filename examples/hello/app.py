"""Hello Web — the five demo routes.

Static greeting, path-parameter greeting, query-parameter greeting,
JSON-body greeting, and a JSON response.

Run:
    python app.py
"""

from signpost import App, HTTPError, Response

app = App()


@app.get("/")
def index():
    return "Hello, Web!"


@app.get("/name/:name")
def greet_path(name: str):
    return f"Hello, {name}!"


@app.get("/name")
def greet_query(request):
    name = request.query.get("name", "Anonymous Person")
    return f"Hello, {name}!"


@app.post("/name", json=True)
def greet_json(body):
    if not isinstance(body, dict) or not isinstance(body.get("name"), str):
        raise HTTPError(400, "Expected a JSON object with a string 'name' field")
    return f"Hello, {body['name']}!"


@app.get("/json")
def hello_json():
    return Response.json({"hello": "JSON"})


if __name__ == "__main__":
    app.run()
