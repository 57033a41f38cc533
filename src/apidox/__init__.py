"""apidox -- Build API documentation from HTTP interactions recorded in tests.

Every request a test suite makes becomes an *example*. apidox infers the route
template each example belongs to (``/pokemons/1`` -> ``/pokemons/{id}``),
groups examples into *actions* and *resources*, and merges them into one
OpenAPI-style ``paths`` tree that renders to markdown, JSON, or YAML.

Typical workflow::

    recorder = Recorder(load_config())
    recorder.record_httpx(client.get("/pokemons/1"), path_params={"id": 1})
    recorder.dump_interactions("recordings.json")

    $ apidox build recordings.json -o docs/api.md

Modules:
    models: Pydantic models shared across the entire package.
    recorder: The per-run recorder and the httpx adapter.
    inference: Path template inference.
    document: The find-or-add document tree merge engine.
    formatting: Attribute rendering.
    render: Markdown and OpenAPI renderers.
    config: Configuration precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
"""

__version__ = "0.1.0"
