import asyncio
import logging
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bard.api.client import BardAPI
from bard.api.config import (
    AppConfig,
    Config,
    generate_default_config,
    load_config_from_env,
    load_yaml_config,
)
from bard.api.logging import configure_cli_logging
from bard.api.slate import (
    ParseError,
    document_to_html,
    dump_document,
    get_visible_content,
    normalize,
    parse_document,
    serialize_text,
)
from bard.api.store.exceptions import ContentIntegrityError, NotFoundError

logger = logging.getLogger(__name__)

console = Console()

_cli = typer.Typer(name="bard-api", no_args_is_help=True)


def _load_config(config_file: Path | None):
    config = Config
    if config_file:
        config = AppConfig.model_validate(load_yaml_config(config_file))
    return config


def _read_document(file: Path):
    """Read and parse a document file, exiting with an error if it is invalid."""
    try:
        return parse_document(file.read_text())
    except ParseError as e:
        console.print(
            f"[red]Error:[/red] {file} is not a valid document", soft_wrap=True
        )
        logger.debug(str(e))
        raise typer.Exit(1)


@_cli.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_cli_logging(logging.DEBUG if verbose else logging.INFO)


@_cli.command("normalize", help="Collapse consecutive blank paragraphs in a document")
def normalize_command(file: Path = typer.Argument(..., exists=True, dir_okay=False)):
    document = _read_document(file)
    console.print_json(dump_document(normalize(document)))


@_cli.command("html", help="Render a document to HTML")
def html_command(
    file: Path = typer.Argument(..., exists=True, dir_okay=False),
    blocked: bool = typer.Option(
        False, "--blocked", help="Only render the subscriber preview"
    ),
):
    document = _read_document(file)
    typer.echo(document_to_html(get_visible_content(document, blocked)))


@_cli.command("text", help="Render a document to plain text")
def text_command(file: Path = typer.Argument(..., exists=True, dir_okay=False)):
    document = _read_document(file)
    typer.echo(serialize_text(document))


@_cli.command("preview", help="Show the part of a document visible to non-subscribers")
def preview_command(file: Path = typer.Argument(..., exists=True, dir_okay=False)):
    content = file.read_text()
    console.print_json(dump_document(get_visible_content(content, True)))


@_cli.command("add-article", help="Store a new article")
def add_article(
    user_id: str = typer.Argument(..., help="Author of the article"),
    title: str = typer.Argument(..., help="Article title"),
    file: Path = typer.Argument(..., exists=True, dir_okay=False),
    summary: str = typer.Option("", "--summary", help="Short description"),
    subscribers_only: bool = typer.Option(
        False, "--subscribers-only", help="Gate the article behind a subscription"
    ),
    db: Path | None = typer.Option(None, "--db", help="Path to the database"),
    config_file: Path | None = typer.Option(
        None, "--config", help="Path to the configuration file"
    ),
):
    config = _load_config(config_file)
    content = dump_document(_read_document(file))

    async def run():
        async with BardAPI(db_path=db, config=config, create=True) as client:
            return await client.create_article(
                user_id,
                title,
                content,
                summary=summary,
                subscribers_only=subscribers_only,
            )

    article = asyncio.run(run())
    console.print(f"[green]Article {article.id} created[/green]")


@_cli.command("get-article", help="Show an article")
def get_article(
    article_id: str = typer.Argument(...),
    blocked: bool = typer.Option(
        False, "--blocked", help="Only show the subscriber preview"
    ),
    as_html: bool = typer.Option(False, "--html", help="Render the content as HTML"),
    db: Path | None = typer.Option(None, "--db", help="Path to the database"),
    config_file: Path | None = typer.Option(
        None, "--config", help="Path to the configuration file"
    ),
):
    config = _load_config(config_file)

    async def run():
        async with BardAPI(db_path=db, config=config, read_only=True) as client:
            article = await client.get_article(article_id)
            if article is None:
                raise NotFoundError(f"Article not found: {article_id}")
            if as_html:
                return article, client.render_article_html(article, blocked)
            return article, dump_document(client.get_article_content(article, blocked))

    try:
        article, body = asyncio.run(run())
    except (NotFoundError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {e}", soft_wrap=True)
        raise typer.Exit(1)

    console.print(f"[bold]{escape(article.title)}[/bold]")
    if as_html:
        typer.echo(body)
    else:
        console.print_json(body)


@_cli.command("list-articles", help="List stored articles")
def list_articles(
    limit: int | None = typer.Option(None, "--limit"),
    offset: int | None = typer.Option(None, "--offset"),
    db: Path | None = typer.Option(None, "--db", help="Path to the database"),
    config_file: Path | None = typer.Option(
        None, "--config", help="Path to the configuration file"
    ),
):
    config = _load_config(config_file)

    async def run():
        async with BardAPI(db_path=db, config=config, read_only=True) as client:
            return await client.list_articles(limit=limit, offset=offset)

    try:
        articles = asyncio.run(run())
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}", soft_wrap=True)
        raise typer.Exit(1)

    table = Table("ID", "Title", "Author", "Subscribers only", "Created")
    for article in articles:
        table.add_row(
            article.id or "",
            article.title,
            article.user_id,
            "yes" if article.subscribers_only else "no",
            article.created_at.isoformat(timespec="seconds"),
        )
    console.print(table)


@_cli.command("init-config", help="Write a default YAML configuration file")
def init_config(
    output: Path = typer.Argument(Path("bard.yaml"), help="Where to write the config"),
    from_env: bool = typer.Option(
        False, "--from-env", help="Seed values from environment variables"
    ),
):
    if output.exists():
        console.print(
            f"[red]Error:[/red] {output} already exists", soft_wrap=True
        )
        raise typer.Exit(1)

    data = generate_default_config()
    if from_env:
        for section, values in load_config_from_env().items():
            if isinstance(values, dict):
                data.setdefault(section, {}).update(values)
            else:
                data[section] = values

    with open(output, "w") as f:
        yaml.safe_dump(data, f, sort_keys=False)
    console.print(f"[green]Configuration written to {output}[/green]")


def cli():
    try:
        _cli()
    except (ContentIntegrityError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {e}", soft_wrap=True)
        raise SystemExit(1)
