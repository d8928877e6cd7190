"""Shared pytest fixtures for edgy tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from edgy.api import Edgy
from edgy.config.settings import EdgySettings
from edgy.domain.records import GraphRecord, NodeRecord
from edgy.infrastructure.store import GraphStore


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests independent of the developer's environment and edgy.toml."""
    for var in ("EDGY_CONFIG", "EDGY_DATABASE__URL", "EDGY_TRAVERSAL__DEFAULT_DEPTH_LIMIT"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'edgy.db'}"


@pytest.fixture
def store(db_url: str) -> Iterator[GraphStore]:
    """A store on a fresh SQLite file with all tables created."""
    s = GraphStore.from_url(db_url)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def settings_store(db_url: str, tmp_path: Path) -> Iterator[GraphStore]:
    """A store opened from settings, so the configured defaults apply."""
    settings = EdgySettings.from_cli(root=tmp_path, database_url=db_url)
    s = GraphStore.from_settings(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def db(store: GraphStore) -> Edgy:
    return Edgy(store)


@pytest.fixture
def graph(db: Edgy) -> GraphRecord:
    return db.create_graph("demo")


@pytest.fixture
def chain(db: Edgy, graph: GraphRecord) -> dict[str, Any]:
    """Nodes a -> b -> c -> d linked by ``link`` edges.

    Returns a dict with the nodes by name and the edges by ``"a->b"`` label.
    """
    node_map: dict[str, NodeRecord] = {}
    for name in "abcd":
        node_map[name] = db.add_node(graph, "node", {"name": name})
    edge_map = {}
    for src, dst, strength in (("a", "b", "strong"), ("b", "c", "weak"), ("c", "d", "strong")):
        edge_map[f"{src}->{dst}"] = db.add_edge(
            graph,
            "link",
            {"name": f"{src} -> {dst}", "strength": strength},
            node_map[src],
            node_map[dst],
        )
    return {"nodes": node_map, "edges": edge_map}
