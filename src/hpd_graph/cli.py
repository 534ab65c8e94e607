from __future__ import annotations

import json
from pathlib import Path

import typer

from hpd_graph.config import DEFAULT_CONFIG_PATH, AppConfig, load_config, resolve_input_paths
from hpd_graph.graph.long_paths import find_long_paths
from hpd_graph.graph.portfolios import Portfolio
from hpd_graph.io.write import write_table
from hpd_graph.logging import configure_logging
from hpd_graph.paths import build_output_paths
from hpd_graph.pipeline.dataset import HpdDataset, PortfolioNotFoundError, load_dataset
from hpd_graph.report.document import portfolio_document
from hpd_graph.report.dot import dot_graph
from hpd_graph.report.site import render_site
from hpd_graph.report.tables import build_ranking_table
from hpd_graph.report.text import (
    format_graph_counts,
    format_long_paths,
    format_portfolio_info,
    format_ranking,
)

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Landlord portfolio analysis over NYC HPD registration contacts.",
)


def _load_app_config(config_path: Path | None) -> AppConfig:
    if config_path is not None:
        return load_config(config_path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return resolve_input_paths(AppConfig(), Path.cwd())


def _config(ctx: typer.Context) -> AppConfig:
    return ctx.ensure_object(AppConfig)


def _load(ctx: typer.Context) -> HpdDataset:
    return load_dataset(_config(ctx))


def _portfolio_or_exit(dataset: HpdDataset, name: str) -> Portfolio:
    try:
        label, portfolio = dataset.portfolio_for_name(name)
    except PortfolioNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"Found a matching name '{label}'.", err=True)
    return portfolio


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None,
        exists=True,
        readable=True,
        resolve_path=True,
        help=f"YAML config. Defaults to {DEFAULT_CONFIG_PATH} when present.",
    ),
    contacts: Path | None = typer.Option(
        None,
        exists=True,
        readable=True,
        resolve_path=True,
        help="HPD Registration Contacts CSV. Overrides inputs.contacts_csv.",
    ),
    registrations: Path | None = typer.Option(
        None,
        exists=True,
        readable=True,
        resolve_path=True,
        help="HPD Multiple Dwelling Registrations CSV. Overrides inputs.registrations_csv.",
    ),
    max_expiration_age: int | None = typer.Option(
        None,
        min=0,
        metavar="DAYS",
        help="Ignore HPD registrations that have expired more than this number of days ago.",
    ),
    include_corps: bool | None = typer.Option(
        None,
        "--include-corps/--no-include-corps",
        help="Include corporation names in portfolios.",
    ),
) -> None:
    """Fun with NYC HPD registration graph structure data analysis."""
    configure_logging()
    cfg = _load_app_config(config)
    if contacts is not None:
        cfg.inputs.contacts_csv = str(contacts)
    if registrations is not None:
        cfg.inputs.registrations_csv = str(registrations)
    if max_expiration_age is not None:
        cfg.registrations.max_expiration_age_days = max_expiration_age
    if include_corps is not None:
        cfg.names.include_corps = include_corps
    ctx.obj = cfg


@app.command()
def info(
    ctx: typer.Context,
    name: str | None = typer.Argument(None, help="Name (or part of one) inside a portfolio."),
    top: int | None = typer.Option(
        None,
        "--top",
        "-t",
        min=1,
        help="Show the top N names and business addresses in the portfolio.",
    ),
) -> None:
    """Show general information about the graph."""
    cfg = _config(ctx)
    dataset = _load(ctx)
    typer.echo(format_graph_counts(dataset.graph, dataset.portfolios))
    if name is None:
        return
    portfolio = _portfolio_or_exit(dataset, name)
    for line in format_portfolio_info(dataset.graph, portfolio, top=top or cfg.ranking.top):
        typer.echo(line)


@app.command()
def longpaths(
    ctx: typer.Context,
    min_length: int | None = typer.Option(
        None,
        "--min-length",
        "-m",
        min=1,
        help="Only show paths with this minimum length.",
    ),
) -> None:
    """Show the longest paths in the graph."""
    cfg = _config(ctx)
    dataset = _load(ctx)
    effective_min_length = min_length or cfg.paths.min_length
    paths = find_long_paths(dataset.graph, effective_min_length)
    for line in format_long_paths(dataset.graph, paths, effective_min_length):
        typer.echo(line)


@app.command()
def dot(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name (or part of one) inside the portfolio."),
) -> None:
    """Output a dot graph of a particular portfolio."""
    dataset = _load(ctx)
    portfolio = _portfolio_or_exit(dataset, name)
    bridges = portfolio.find_local_bridges(dataset.graph)
    typer.echo(dot_graph(dataset.graph, portfolio, bridges=bridges), nl=False)


@app.command("json")
def json_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name (or part of one) inside the portfolio."),
) -> None:
    """Output JSON of a particular portfolio."""
    dataset = _load(ctx)
    portfolio = _portfolio_or_exit(dataset, name)
    document = portfolio_document(
        dataset.graph,
        portfolio,
        bridges=portfolio.find_local_bridges(dataset.graph),
        building_id=dataset.building_id_for_registration,
    )
    typer.echo(json.dumps(document, indent=2, ensure_ascii=False))


@app.command()
def ranking(
    ctx: typer.Context,
    min_buildings: int | None = typer.Option(
        None,
        "--min-buildings",
        "-b",
        min=0,
        help="Only show portfolios of a minimum size.",
    ),
    out: Path | None = typer.Option(
        None,
        resolve_path=True,
        help="Also write the ranking table under OUT/tables.",
    ),
) -> None:
    """Show a ranking of the largest portfolios."""
    cfg = _config(ctx)
    dataset = _load(ctx)
    threshold = cfg.ranking.min_buildings if min_buildings is None else min_buildings
    ranked = dataset.portfolios.rank_by_building_count(dataset.graph, threshold)
    for line in format_ranking(ranked):
        typer.echo(line)
    if out is not None:
        fmt = cfg.outputs.tables_format
        table_path = build_output_paths(out).tables / f"portfolio_ranking.{fmt}"
        write_table(build_ranking_table(dataset.graph, ranked), table_path, fmt=fmt)
        typer.echo(f"Ranking table written to: {table_path}", err=True)


@app.command()
def website(
    ctx: typer.Context,
    out: Path | None = typer.Option(
        None,
        resolve_path=True,
        help="Site output directory. Defaults to outputs.site_dir.",
    ),
    min_buildings: int | None = typer.Option(
        None,
        "--min-buildings",
        "-b",
        min=0,
        help="Only export portfolios of a minimum size.",
    ),
) -> None:
    """Export a static website of ranked portfolios."""
    cfg = _config(ctx)
    dataset = _load(ctx)
    site_dir = out or Path(cfg.outputs.site_dir).resolve()
    threshold = cfg.ranking.min_buildings if min_buildings is None else min_buildings
    index_path = render_site(dataset, site_dir, min_buildings=threshold)
    typer.echo(f"Site written to: {index_path}")


if __name__ == "__main__":
    app()
