import json

from typer.testing import CliRunner

from modelgate import cli

runner = CliRunner()


def _clear_env(monkeypatch):
    for name in ("LLM_PROVIDER", "LLM_MODEL", "INPUT_LLM_PROVIDER", "INPUT_LLM_MODEL"):
        monkeypatch.delenv(name, raising=False)


def test_run_prints_json(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("LLM_API_KEY", "k")
    seen = {}

    def fake_infer(provider, model, request, settings):
        seen.update(provider=provider, model=model, request=request)
        return {"answer": "Paris"}

    monkeypatch.setattr(cli, "infer", fake_infer)

    result = runner.invoke(cli.app, ["run", "--model", "gpt-4o-mini", "-t", "0.5"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"answer": "Paris"}
    assert seen["provider"] == "ai-sdk"
    assert seen["model"] == "gpt-4o-mini"
    assert seen["request"].temperature == 0.5
    assert seen["request"].schema["additionalProperties"] is True


def test_run_without_model_fails(monkeypatch):
    _clear_env(monkeypatch)

    result = runner.invoke(cli.app, ["run"])

    assert result.exit_code == 1


def test_run_unknown_model_exits_nonzero(monkeypatch):
    _clear_env(monkeypatch)

    result = runner.invoke(
        cli.app, ["run", "--provider", "ai-sdk", "--model", "not-a-real-model"]
    )

    assert result.exit_code == 1
