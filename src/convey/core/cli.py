"""
Convey CLI: Command-line interface for talking to Gemini models
"""

from importlib.metadata import version, PackageNotFoundError
from pathlib import Path
import sys
import logging
import json
import asyncio
import click

from convey import utils
from convey.core import conf
from convey.llm import (
    ConfigurationError,
    ProviderError,
    StructType,
    get_llm_provider,
    make_typed_struct,
)
from convey.llm.providers.gemini.models import describe, find_model
from convey.plugins import get_plugin_registry

try:
    __version__ = version("convey")
except PackageNotFoundError:
    __version__ = "0.1.0"  # fallback


def setup_logging(verbose: bool = False):
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO

    # Configure root logger
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Set convey.console logger
    logger = logging.getLogger("convey.console")
    logger.setLevel(level)


@click.group()
@click.version_option(version=__version__, prog_name="convey")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.option(
    "--provider",
    default="gemini",
    show_default=True,
    help="LLM provider plugin to use",
)
@click.pass_context
def cli(ctx, verbose, provider):
    """Convey CLI."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["provider"] = provider
    setup_logging(verbose)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print models as JSON")
@click.pass_context
def models(ctx, as_json):
    """List the available model variants."""
    logger = logging.getLogger("convey.console")
    provider = get_llm_provider(ctx.obj["provider"])
    descriptors = provider.list_models()

    if as_json:
        click.echo(json.dumps([describe(m) for m in descriptors], indent=2))
        return

    for model in descriptors:
        logger.info(
            "%-40s version=%s max_tokens=%s temperature=%s",
            model.name,
            model.version,
            model.max_tokens,
            "default" if model.temperature is None else model.temperature,
        )


@cli.command()
@click.argument("prompt")
@click.option("--model", "model_name", default=None, help="Model name or version")
@click.option("--system", default=None, help="System instruction")
@click.option(
    "--file",
    "files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="File to include as context (repeatable)",
)
@click.pass_context
def send(ctx, prompt, model_name, system, files):
    """Send PROMPT to a model and print the response."""

    exit_code = asyncio.run(
        _send(ctx.obj["provider"], prompt, model_name, system, files)
    )
    ctx.exit(exit_code)


async def _send(provider_name, prompt, model_name, system, files) -> int:
    logger = logging.getLogger("convey.console")

    provider = get_llm_provider(provider_name)
    model_name = model_name or conf.get(f"llm.{provider_name}.model")
    try:
        model = find_model(model_name, provider.list_models())
    except KeyError as e:
        logger.error("%s", e.args[0])
        return 1

    context = []
    if system:
        context.append(make_typed_struct(system, StructType.SYSTEM))
    for file in files:
        path = Path(file)
        context.append(
            make_typed_struct(
                f"File: {path.name}\n\n{path.read_text(encoding='utf-8')}",
                StructType.FILE_CONTEXT,
                {"path": path.resolve().as_posix()},
            )
        )
    context.append(make_typed_struct(prompt, StructType.USER))

    logger.debug("Sending to %s: %s", model.name, utils.truncate(prompt))
    try:
        responses = await provider.generate(context, model)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 1
    except ProviderError as e:
        logger.error("Request failed [%s]: %s", e.status or "unknown", e)
        return 1

    for response in responses:
        click.echo(response.content)
    return 0


@cli.command()
@click.option(
    "--key",
    default=None,
    help="Key to show from the configuration (dot notation)",
)
@click.pass_context
def config(ctx, key):
    """Show the identified Convey configuration."""
    logger = logging.getLogger("convey.console")
    logger.info("Convey configuration:\n")
    logger.info("> Path: %s", conf.path or "<defaults>")
    if key:
        logger.info("> Key: Value")
        value = json.dumps(conf.get(key, "undefined"), indent=2)
        logger.info("%s: %s", key, value)
    else:
        logger.info("> Configuration Dictionary:")
        logger.info(json.dumps(conf.config, indent=2))


@cli.command()
@click.pass_context
def plugins(ctx):
    """List the registered LLM provider plugins."""
    logger = logging.getLogger("convey.console")
    found = get_plugin_registry().plugins()
    if not found:
        logger.info("No LLM provider plugins registered.")
        return
    for plugin in found:
        logger.info("%s %s: %s", plugin.name, plugin.version, plugin.description)


def main() -> None:
    """Entry point for CLI."""

    # pylint: disable=no-value-for-parameter
    cli()


if __name__ == "__main__":
    main()
