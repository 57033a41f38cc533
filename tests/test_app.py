"""CLI tests for the ``apidox`` Typer application.

Covers:
- build to stdout, to a file, and in every document format
- --whitelist, --config and stdin input
- Skipped vs --strict handling of unknown verbs
- Exit codes for missing files, bad config and description errors
- inspect in table and JSON modes
- Root flags (--version)
"""

from __future__ import annotations

import json

import pytest
import yaml

from apidox import __version__
from apidox.app import app
from apidox.exit_codes import (
    EXIT_DESCRIPTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_INVALID_VERB,
    EXIT_RECORDING_PARSE_ERROR,
    EXIT_SUCCESS,
)


@pytest.fixture
def valid_recordings(isolated_config, recordings_path):
    """The fixture recordings without the interaction that uses an unknown verb."""
    data = json.loads(recordings_path.read_text())
    data["interactions"] = [
        i for i in data["interactions"] if i["request"]["method"] != "FETCH"
    ]
    path = isolated_config / "valid.json"
    path.write_text(json.dumps(data))
    return path


# ---------------------------------------------------------------------------
# build
# ---------------------------------------------------------------------------


class TestBuild:
    def test_markdown_to_stdout(self, cli_runner, isolated_config, recordings_path):
        result = cli_runner.invoke(app, ["build", str(recordings_path)])
        assert result.exit_code == EXIT_SUCCESS
        assert "# Group Pokemon" in result.output
        assert "## Pokemons [/pokemons]" in result.output
        assert "### Get a pokemon [GET /pokemons/{id}]" in result.output
        assert "### Create a pokemon [POST /pokemons]" in result.output

    def test_unknown_verb_is_skipped_with_warning(self, cli_runner, isolated_config, recordings_path):
        result = cli_runner.invoke(app, ["--no-color", "build", str(recordings_path)])
        assert result.exit_code == EXIT_SUCCESS
        assert "Skipping interaction 3 (Uses a made up verb)" in result.output
        assert "### Create a pokemon [POST /pokemons]" in result.output

    def test_strict_fails_on_unknown_verb(self, cli_runner, isolated_config, recordings_path):
        result = cli_runner.invoke(app, ["--no-color", "build", str(recordings_path), "--strict"])
        assert result.exit_code == EXIT_INVALID_VERB
        assert "Unrecognized HTTP verb FETCH" in result.output

    def test_whitelist_flag(self, cli_runner, isolated_config, valid_recordings):
        without = cli_runner.invoke(app, ["build", str(valid_recordings)])
        assert "X-Auth-Token" not in without.output

        with_flag = cli_runner.invoke(app, ["build", str(valid_recordings), "-w", "X-Auth-Token"])
        assert with_flag.exit_code == EXIT_SUCCESS
        assert "X-Auth-Token: 877da7da7fbc16216e" in with_flag.output
        assert "Other: x" not in with_flag.output

    def test_config_file(self, cli_runner, isolated_config, valid_recordings):
        config = isolated_config / "custom.yaml"
        config.write_text(
            "headers_whitelist: [X-Auth-Token]\n"
            "schema_request_folder_path: /schemas/requests\n"
        )
        result = cli_runner.invoke(
            app, ["build", str(valid_recordings), "--format", "json", "--config", str(config)]
        )
        assert result.exit_code == EXIT_SUCCESS
        document = json.loads(result.output)
        post = document["paths"]["/pokemons"]["post"]
        schema = post["requestBody"]["content"]["application/json"]["schema"]
        assert schema == {"$ref": "/schemas/requests/pokemon_create.json"}
        get_params = document["paths"]["/pokemons/{id}"]["get"]["parameters"]
        assert {"name": "X-Auth-Token", "in": "header", "example": "877da7da7fbc16216e"} in get_params

    def test_json_to_file(self, cli_runner, isolated_config, recordings_path):
        out = isolated_config / "docs" / "openapi.json"
        result = cli_runner.invoke(
            app, ["--no-color", "build", str(recordings_path), "-f", "json", "-o", str(out)]
        )
        assert result.exit_code == EXIT_SUCCESS
        assert "Documented 2 actions from 3 interactions" in result.output

        document = json.loads(out.read_text())
        assert list(document["paths"]) == ["/pokemons/{id}", "/pokemons"]
        responses = document["paths"]["/pokemons/{id}"]["get"]["responses"]
        assert list(responses) == ["200", "404"]
        assert responses["404"]["content"]["application/json"]["examples"]["Pokemon not found"]["value"] == {
            "error": "not found"
        }

    def test_yaml_to_file(self, cli_runner, isolated_config, recordings_path):
        out = isolated_config / "openapi.yaml"
        result = cli_runner.invoke(app, ["build", str(recordings_path), "--format", "yaml", "-o", str(out)])
        assert result.exit_code == EXIT_SUCCESS
        document = yaml.safe_load(out.read_text())
        assert document["tags"] == [{"name": "Pokemons"}]
        assert document["x-tagGroups"] == [{"name": "Pokemon", "tags": ["Pokemons"]}]

    def test_markdown_to_file_ends_with_newline(self, cli_runner, isolated_config, valid_recordings):
        out = isolated_config / "api.md"
        result = cli_runner.invoke(app, ["--quiet", "build", str(valid_recordings), "-o", str(out)])
        assert result.exit_code == EXIT_SUCCESS
        text = out.read_text()
        assert text.startswith("# Group Pokemon\n")
        assert text.endswith("\n")
        assert "Documented" not in result.output

    def test_stdin(self, cli_runner, isolated_config, valid_recordings):
        result = cli_runner.invoke(app, ["build", "-"], input=valid_recordings.read_text())
        assert result.exit_code == EXIT_SUCCESS
        assert "## Pokemons [/pokemons]" in result.output

    def test_missing_recordings(self, cli_runner, isolated_config):
        result = cli_runner.invoke(app, ["--no-color", "build", "missing.json"])
        assert result.exit_code == EXIT_RECORDING_PARSE_ERROR
        assert "Recordings file not found" in result.output

    def test_output_directory_is_invalid_usage(self, cli_runner, isolated_config, valid_recordings):
        result = cli_runner.invoke(
            app, ["--no-color", "build", str(valid_recordings), "-o", str(isolated_config)]
        )
        assert result.exit_code == EXIT_INVALID_USAGE
        assert "Output path is a directory" in result.output

    def test_invalid_config(self, cli_runner, isolated_config, valid_recordings):
        (isolated_config / "apidox.yaml").write_text("- not a mapping\n")
        result = cli_runner.invoke(app, ["--no-color", "build", str(valid_recordings)])
        assert result.exit_code == EXIT_GENERIC_FAILURE
        assert "must be a mapping" in result.output

    def test_description_file_missing(self, cli_runner, isolated_config):
        path = isolated_config / "recordings.json"
        path.write_text(json.dumps([
            {
                "request": {"method": "GET", "path": "/pokemons"},
                "response": {"status": 200},
                "details": {"action_desc": "list.md"},
            }
        ]))
        result = cli_runner.invoke(app, ["--no-color", "build", str(path)])
        assert result.exit_code == EXIT_DESCRIPTION_ERROR
        assert "list.md" in result.output


# ---------------------------------------------------------------------------
# inspect
# ---------------------------------------------------------------------------


class TestInspect:
    def test_json_table(self, cli_runner, isolated_config, valid_recordings):
        result = cli_runner.invoke(app, ["--json", "inspect", str(valid_recordings)])
        assert result.exit_code == EXIT_SUCCESS
        rows = json.loads(result.output)
        assert rows == [
            {"Resource": "Pokemons", "Verb": "GET", "Path": "/pokemons/{id}", "Examples": "2"},
            {"Resource": "Pokemons", "Verb": "POST", "Path": "/pokemons", "Examples": "1"},
        ]

    def test_plain_table(self, cli_runner, isolated_config, valid_recordings):
        result = cli_runner.invoke(app, ["--no-color", "inspect", str(valid_recordings)])
        assert result.exit_code == EXIT_SUCCESS
        lines = result.output.strip().splitlines()
        assert lines[0] == "Resource\tVerb\tPath\tExamples"
        assert lines[1] == "Pokemons\tGET\t/pokemons/{id}\t2"

    def test_missing_file(self, cli_runner, isolated_config):
        result = cli_runner.invoke(app, ["inspect", "missing.json"])
        assert result.exit_code == EXIT_RECORDING_PARSE_ERROR


# ---------------------------------------------------------------------------
# Root flags
# ---------------------------------------------------------------------------


class TestRootFlags:
    def test_version(self, cli_runner):
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == EXIT_SUCCESS
        assert f"apidox {__version__}" in result.output

    def test_no_args_shows_help(self, cli_runner):
        result = cli_runner.invoke(app, [])
        assert "build" in result.output
        assert "inspect" in result.output
