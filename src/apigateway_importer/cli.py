"""CLI entry point for apigateway-importer."""

import asyncio
from pathlib import Path

import click
from botocore.exceptions import BotoCoreError

from apigateway_importer.config import ImporterOptions, configure_logging
from apigateway_importer.errors import ImporterError
from apigateway_importer.importer import ApiImporter

DOC_ARGUMENT = click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))


def _importer(ctx: click.Context, doc_path: Path) -> ApiImporter:
    options: ImporterOptions = ctx.obj
    try:
        return ApiImporter(doc_path, options=options)
    except (ImporterError, BotoCoreError) as e:
        raise click.ClickException(str(e)) from e


def _run(coro):
    """Run one importer workflow, turning importer errors into a CLI failure."""
    try:
        return asyncio.run(coro)
    except ImporterError as e:
        raise click.ClickException(str(e)) from e


async def _lookup(importer: ApiImporter) -> None:
    if not await importer.get_api_id():
        raise click.ClickException(f"No API named '{importer.title}'")


@click.group()
@click.option("--region", default=None, help="AWS region of the API Gateway control plane.")
@click.option("--profile", default=None, help="AWS credentials profile.")
@click.option("--log-level", default="info", type=click.Choice(["silent", "debug", "info", "warning", "error"]), help="Log verbosity.")
@click.option("--delay", default=0.3, type=click.FloatRange(min=0, min_open=True), show_default=True, help="Base rate-limit retry delay in seconds.")
@click.pass_context
def main(ctx: click.Context, region: str | None, profile: str | None, log_level: str, delay: float):
    """Import Swagger 2.0 documents into AWS API Gateway."""
    configure_logging(log_level)
    ctx.obj = ImporterOptions(region=region, profile=profile, log_level=log_level, delay=delay)


@main.command()
@DOC_ARGUMENT
@click.option("--deploy", is_flag=True, help="Deploy to the basePath stage after creating.")
@click.option("--cleanup", is_flag=True, help="Delete the partially created API on failure.")
@click.pass_context
def create(ctx: click.Context, doc_path: Path, deploy: bool, cleanup: bool):
    """Create a new API from DOC_PATH."""
    importer = _importer(ctx, doc_path)

    async def workflow():
        try:
            await importer.create()
            if deploy:
                await importer.deploy()
        except ImporterError:
            if cleanup and importer.api_id is not None:
                click.echo(f"Cleaning up API {importer.api_id}...")
                await importer.delete()
            raise

    _run(workflow())
    click.echo(f"Created API {importer.api_id}")
    if deploy:
        click.echo(f"Deployed to stage '{importer.stage_name}'")


@main.command()
@DOC_ARGUMENT
@click.pass_context
def deploy(ctx: click.Context, doc_path: Path):
    """Deploy the API named by DOC_PATH's title to its basePath stage."""
    importer = _importer(ctx, doc_path)

    async def workflow():
        await _lookup(importer)
        await importer.deploy()

    _run(workflow())
    click.echo(f"Deployed API {importer.api_id} to stage '{importer.stage_name}'")


@main.command()
@DOC_ARGUMENT
@click.option("--deploy", is_flag=True, help="Deploy to the basePath stage after updating.")
@click.pass_context
def update(ctx: click.Context, doc_path: Path, deploy: bool):
    """Replace every resource of the existing API with DOC_PATH's."""
    importer = _importer(ctx, doc_path)

    async def workflow():
        await _lookup(importer)
        await importer.update_api()
        if deploy:
            await importer.deploy()

    _run(workflow())
    click.echo(f"Updated API {importer.api_id}")


@main.command()
@DOC_ARGUMENT
@click.pass_context
def delete(ctx: click.Context, doc_path: Path):
    """Delete the API named by DOC_PATH's title."""
    importer = _importer(ctx, doc_path)

    async def workflow():
        await _lookup(importer)
        api_id = importer.api_id
        await importer.delete()
        return api_id

    api_id = _run(workflow())
    click.echo(f"Deleted API {api_id}")


@main.command()
@DOC_ARGUMENT
@click.pass_context
def resources(ctx: click.Context, doc_path: Path):
    """List the live resources of the API named by DOC_PATH's title."""
    importer = _importer(ctx, doc_path)

    async def workflow():
        await _lookup(importer)
        return await importer.get_resources()

    items = _run(workflow())
    for item in sorted(items, key=lambda i: i.get("path", "")):
        methods = ", ".join(sorted(item.get("resourceMethods", {})))
        click.echo(f"{item.get('path')}  {methods}".rstrip())
