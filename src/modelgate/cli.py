"""Command-line smoke runner: send one prompt through the configured provider."""

from __future__ import annotations

import json
import time
from dataclasses import replace
from typing import Annotated, Optional

import typer

from modelgate import logger as logger_mod
from modelgate.config import Settings
from modelgate.llm import InferenceRequest, LLMError, infer, permissive_schema

log = logger_mod.get_logger()

app = typer.Typer(add_completion=False, help="Structured LLM inference gateway.")

DEFAULT_PROMPT = (
    "What is the capital of France? Return the answer as JSON with an 'answer' field."
)
DEFAULT_SYSTEM = "You are a helpful assistant that responds in JSON format."


@app.callback()
def main() -> None:
    """Structured LLM inference gateway."""


@app.command()
def run(
    prompt: Annotated[str, typer.Option("--prompt", "-p")] = DEFAULT_PROMPT,
    system: Annotated[str, typer.Option("--system", "-s")] = DEFAULT_SYSTEM,
    model: Annotated[
        Optional[str], typer.Option("--model", "-m", help="Defaults to LLM_MODEL.")
    ] = None,
    provider: Annotated[
        Optional[str],
        typer.Option("--provider", help="Defaults to LLM_PROVIDER."),
    ] = None,
    temperature: Annotated[
        Optional[float], typer.Option("--temperature", "-t")
    ] = None,
    debug: Annotated[bool, typer.Option("--debug", "-d")] = False,
) -> None:
    """Run one prompt and print the JSON result."""

    if debug:
        logger_mod.set_logging_level("DEBUG")

    settings = Settings.from_env()
    settings = replace(
        settings,
        llm_model=model or settings.llm_model,
        llm_provider=provider or settings.llm_provider,
    )
    if not settings.llm_model:
        log.error("No model specified. Use --model or set LLM_MODEL.")
        raise typer.Exit(code=1)

    request = InferenceRequest(
        prompt=prompt,
        schema=permissive_schema(),
        system=system or None,
        temperature=temperature,
    )

    start = time.monotonic()
    try:
        result = infer(settings.llm_provider, settings.llm_model, request, settings)
    except LLMError as e:
        log.error(f"{type(e).__name__}: {e}")
        raise typer.Exit(code=1) from e

    log.info(f"Inference completed in {time.monotonic() - start:.2f} seconds")
    typer.echo(json.dumps(result, indent=2))


if __name__ == "__main__":
    app()
