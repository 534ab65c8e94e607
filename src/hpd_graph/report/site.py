from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from time import perf_counter

from jinja2 import Environment, FileSystemLoader, select_autoescape

from hpd_graph.io.write import write_summary, write_text
from hpd_graph.paths import build_output_paths
from hpd_graph.pipeline.dataset import HpdDataset
from hpd_graph.report.document import portfolio_document
from hpd_graph.report.dot import dot_graph

LOGGER = logging.getLogger(__name__)

TOP_ENTRIES = 10


@dataclass(frozen=True)
class SiteEntry:
    rank: int
    title: str
    buildings: int
    href: str
    n_local_bridges: int


def _template_env() -> Environment:
    templates_path = Path(__file__).resolve().parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(templates_path)),
        autoescape=select_autoescape(enabled_extensions=("html", "xml", "j2")),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_site(dataset: HpdDataset, out_dir: Path, min_buildings: int = 0) -> Path:
    """Write a static site with one page, JSON document and dot file per ranked portfolio."""
    started = perf_counter()
    generated_at = datetime.now(timezone.utc).isoformat()
    paths = build_output_paths(out_dir)
    env = _template_env()
    portfolio_template = env.get_template("portfolio.html.j2")
    index_template = env.get_template("index.html.j2")

    graph = dataset.graph
    ranking = dataset.portfolios.rank_by_building_count(graph, min_buildings)
    entries: list[SiteEntry] = []
    for rank, (portfolio, size) in enumerate(ranking, start=1):
        portfolio_dir = paths.portfolios / str(portfolio.index)
        bridges = portfolio.find_local_bridges(graph)
        document = portfolio_document(
            graph,
            portfolio,
            bridges=bridges,
            building_id=dataset.building_id_for_registration,
        )
        write_text(
            json.dumps(document, indent=2, ensure_ascii=False),
            portfolio_dir / "portfolio.json",
        )
        write_text(dot_graph(graph, portfolio, bridges=bridges), portfolio_dir / "graph.dot")
        write_text(
            portfolio_template.render(
                title=portfolio.name,
                buildings=size,
                bizaddrs=portfolio.rank_bizaddrs(graph)[:TOP_ENTRIES],
                names=portfolio.rank_names(graph)[:TOP_ENTRIES],
                bridges=[(graph.label(a), graph.label(b)) for a, b in bridges],
                generated_at=generated_at,
            ),
            portfolio_dir / "index.html",
        )
        entries.append(
            SiteEntry(
                rank=rank,
                title=portfolio.name,
                buildings=size,
                href=f"./portfolios/{portfolio.index}/index.html",
                n_local_bridges=len(bridges),
            )
        )

    index_path = write_text(
        index_template.render(
            entries=entries,
            min_buildings=min_buildings,
            generated_at=generated_at,
        ),
        paths.root / "index.html",
    )
    write_summary(
        {
            "generated_at": generated_at,
            "n_names": len(graph.name_nodes),
            "n_bizaddrs": len(graph.addr_nodes),
            "n_edges": graph.edge_count,
            "n_portfolios": len(dataset.portfolios),
            "n_portfolios_exported": len(entries),
            "min_buildings": min_buildings,
            "site_total_ms": round((perf_counter() - started) * 1000.0, 3),
        },
        paths.summary / "site.json",
    )
    LOGGER.info("Exported %d portfolios to %s", len(entries), paths.root)
    return index_path
