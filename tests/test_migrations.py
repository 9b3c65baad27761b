from __future__ import annotations

import importlib.util
from pathlib import Path

from praxis.models import entities  # noqa: F401
from praxis.models.base import Base

VERSIONS_DIR = Path(__file__).resolve().parents[1] / "API" / "alembic" / "versions"


def _load(path: Path):
    spec = importlib.util.spec_from_file_location(path.stem, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_revision_chain_is_linear():
    modules = [_load(p) for p in sorted(VERSIONS_DIR.glob("*.py"))]
    assert modules, "no migrations found"
    heads = [m for m in modules if m.down_revision is None]
    assert len(heads) == 1

    by_parent = {m.down_revision: m for m in modules}
    assert len(by_parent) == len(modules)
    current = heads[0]
    seen = 1
    while current.revision in by_parent:
        current = by_parent[current.revision]
        seen += 1
    assert seen == len(modules)


def test_migrations_create_every_mapped_table():
    source = "\n".join(p.read_text(encoding="utf-8") for p in sorted(VERSIONS_DIR.glob("*.py")))
    for table in Base.metadata.tables:
        assert f'"{table}"' in source, table
