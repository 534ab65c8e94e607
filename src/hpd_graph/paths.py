from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class OutputPaths:
    root: Path
    tables: Path
    portfolios: Path
    summary: Path


def build_output_paths(out_dir: Path) -> OutputPaths:
    paths = OutputPaths(
        root=out_dir,
        tables=out_dir / "tables",
        portfolios=out_dir / "portfolios",
        summary=out_dir / "summary",
    )
    for path in (paths.root, paths.tables, paths.portfolios, paths.summary):
        path.mkdir(parents=True, exist_ok=True)
    return paths
