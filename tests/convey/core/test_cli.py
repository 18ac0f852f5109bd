"""Tests for the Convey command-line interface."""

from unittest.mock import patch
import json

import httpx
from click.testing import CliRunner

from convey.core.cli import cli
from convey.llm.providers.gemini import GeminiProvider

API_KEY_ENV = "CONVEY_TEST_CLI_KEY"


def make_provider(handler, key="cli-key"):
    """Build a provider whose requests are answered by `handler`."""
    env = {API_KEY_ENV: key} if key else {}
    with patch.dict("os.environ", env, clear=True):
        return GeminiProvider(
            {"provider": "gemini", "api_key": API_KEY_ENV},
            transport=httpx.MockTransport(handler),
        )


def answer(text):
    """Handler replying with a single candidate."""
    return lambda request: httpx.Response(
        200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]}
    )


class TestModelsCommand:
    """Tests for `convey models`."""

    def test_models_json(self):
        """Models are printed as JSON."""
        provider = make_provider(answer("unused"))
        with patch("convey.core.cli.get_llm_provider", return_value=provider):
            result = CliRunner().invoke(cli, ["models", "--json"])

        assert result.exit_code == 0, result.output
        models = json.loads(result.output)
        assert models
        assert all(m["version"] in m["api_url"] for m in models)

    def test_models_text(self):
        """Plain listing exits cleanly."""
        provider = make_provider(answer("unused"))
        with patch("convey.core.cli.get_llm_provider", return_value=provider):
            result = CliRunner().invoke(cli, ["models"])
        assert result.exit_code == 0, result.output


class TestSendCommand:
    """Tests for `convey send`."""

    def test_send_prints_response(self, tmp_path):
        """The response text is printed and the context is sent."""
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return answer("Hi!")(request)

        source = tmp_path / "notes.txt"
        source.write_text("some notes", encoding="utf-8")
        provider = make_provider(handler)
        with patch("convey.core.cli.get_llm_provider", return_value=provider):
            result = CliRunner().invoke(
                cli,
                [
                    "send",
                    "hello",
                    "--model",
                    "gemini-2.5-pro",
                    "--system",
                    "be kind",
                    "--file",
                    str(source),
                ],
            )

        assert result.exit_code == 0, result.output
        assert "Hi!" in result.output
        contents = bodies[0]["contents"]
        assert [c["role"] for c in contents] == ["user", "user", "user"]
        assert contents[0]["parts"][0]["text"] == "be kind"
        assert "some notes" in contents[1]["parts"][0]["text"]
        assert contents[2]["parts"][0]["text"] == "hello"
        assert bodies[0]["generationConfig"] == {"maxOutputTokens": 65536}

    def test_send_provider_error(self):
        """A provider error exits with status 1."""
        provider = make_provider(
            lambda request: httpx.Response(
                400,
                json={"error": {"message": "nope", "code": 400, "status": "INVALID_ARGUMENT"}},
            )
        )
        with patch("convey.core.cli.get_llm_provider", return_value=provider):
            result = CliRunner().invoke(cli, ["send", "hello"])
        assert result.exit_code == 1

    def test_send_without_key(self):
        """A missing API key exits with status 1."""
        provider = make_provider(answer("unused"), key=None)
        with patch("convey.core.cli.get_llm_provider", return_value=provider):
            result = CliRunner().invoke(cli, ["send", "hello"])
        assert result.exit_code == 1

    def test_send_unknown_model(self):
        """An unknown model exits with status 1."""
        provider = make_provider(answer("unused"))
        with patch("convey.core.cli.get_llm_provider", return_value=provider):
            result = CliRunner().invoke(cli, ["send", "hello", "--model", "gpt-4"])
        assert result.exit_code == 1


class TestOtherCommands:
    """Tests for `convey config`, `convey plugins` and `--version`."""

    def test_config(self):
        """The configuration command exits cleanly."""
        result = CliRunner().invoke(cli, ["config", "--key", "llm.gemini.model"])
        assert result.exit_code == 0, result.output

    def test_plugins(self):
        """The plugin listing command exits cleanly."""
        result = CliRunner().invoke(cli, ["plugins"])
        assert result.exit_code == 0, result.output

    def test_version(self):
        """--version prints the program name."""
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "convey" in result.output
