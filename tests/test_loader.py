"""Tests for reading the TOML configuration."""

import pytest

from weftgen.errors import ConfigError
from weftgen.loader import load_config, parse_config


class TestLoadConfig:

    def test_sample_config(self, raw_api):
        assert raw_api.title == "Quake API"
        assert raw_api.production is False
        assert [e.uri for e in raw_api.endpoint] == ["/quake/", "/intensity", "/quake"]
        assert raw_api.query["bbox"].id == "bbox"
        assert raw_api.response["depth"].type == "float64"

    def test_method_uppercased(self, raw_api):
        intensity = raw_api.endpoint[1]
        assert intensity.request[0].method == "PUT"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="cannot read"):
            load_config(tmp_path / "weft.toml")

    def test_generator_defaults(self):
        api = parse_config('title = "x"')
        assert api.generator.runtime == "weft"
        assert api.generator.handlers == "handlers"
        assert api.generator.routes_file == "routes_auto.py"
        assert api.generator.docs_file == "index.html"
        assert api.generator.docs_uri == "/api-docs"

    def test_bytes_accepted(self):
        assert parse_config(b'title = "x"').title == "x"


class TestMalformedConfig:
    """Malformed input is reported as ConfigError."""

    def test_invalid_toml(self):
        with pytest.raises(ConfigError, match="invalid TOML"):
            parse_config("title = ")

    def test_invalid_utf8(self):
        with pytest.raises(ConfigError, match="UTF-8"):
            parse_config(b"title = \"\xff\"")

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="invalid API description"):
            parse_config('titel = "typo"')

    def test_unknown_method(self):
        text = """
[[endpoint]]
uri = "/x"
[[endpoint.request]]
method = "POST"
function = "x"
"""
        with pytest.raises(ConfigError):
            parse_config(text)

    def test_function_must_be_identifier(self):
        text = """
[[endpoint]]
uri = "/x"
[[endpoint.request]]
method = "GET"
function = "not-a-name"
"""
        with pytest.raises(ConfigError, match="not a valid function name"):
            parse_config(text)

    @pytest.mark.parametrize("line, name", [
        ('uri = "/evil"', "uri"),
        ("required_parameters = []", "required_parameters"),
        ('uri_parameter = { id = "x" }', "uri_parameter"),
    ])
    def test_resolved_fields_rejected(self, line, name):
        text = f"""
[[endpoint]]
uri = "/x"
[[endpoint.request]]
method = "GET"
function = "x"
{line}
"""
        with pytest.raises(ConfigError, match=f"{name} cannot be set in the configuration"):
            parse_config(text)

    @pytest.mark.parametrize("method, line", [
        ("PUT", 'accept = "application/json"'),
        ("DELETE", "default = true"),
    ])
    def test_get_only_fields_rejected(self, method, line):
        text = f"""
[[endpoint]]
uri = "/x"
[[endpoint.request]]
method = "{method}"
function = "x"
{line}
"""
        with pytest.raises(ConfigError, match=f"only apply to GET requests, not {method}"):
            parse_config(text)

    def test_missing_uri(self):
        with pytest.raises(ConfigError):
            parse_config('[[endpoint]]\ntitle = "x"\n')

    def test_bad_runtime_module(self):
        with pytest.raises(ConfigError):
            parse_config('[generator]\nruntime = ".weft"\n')

    def test_relative_handlers_module(self):
        api = parse_config('[generator]\nhandlers = ".handlers"\n')
        assert api.generator.handlers == ".handlers"

    def test_same_output_files(self):
        with pytest.raises(ConfigError, match="must differ"):
            parse_config('[generator]\nroutes_file = "out"\ndocs_file = "out"\n')

    def test_output_file_with_directory(self):
        with pytest.raises(ConfigError):
            parse_config('[generator]\ndocs_file = "docs/index.html"\n')
