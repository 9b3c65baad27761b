from __future__ import annotations

import uuid

import pytest
from sqlalchemy.exc import OperationalError, ProgrammingError, SQLAlchemyError

from praxis.core.errors import DataSourceError
from praxis.models.entities import LearningPath, LearningPathItem
from praxis.stores.base import ProfileSettings, default_learning_paths
from praxis.stores.sql import SqlLearningStore


class FakeResult:
    def __init__(self, value=None, rows=None):
        self.value = value
        self.rows = rows or []

    def scalar_one_or_none(self):
        return self.value

    def scalars(self):
        return self

    def all(self):
        return list(self.rows)

    def first(self):
        return self.rows[0] if self.rows else None


class ScriptedSession:
    """Async session stand-in that answers each ``execute`` with the next scripted outcome."""

    def __init__(self, outcomes: list):
        self.outcomes = outcomes

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def execute(self, statement):
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def scripted_store(*outcomes) -> tuple[SqlLearningStore, list]:
    queue = list(outcomes)
    return SqlLearningStore(lambda: ScriptedSession(queue)), queue


def _missing_column() -> ProgrammingError:
    return ProgrammingError(
        "SELECT profiles.bio, profiles.weekly_target_hours",
        {},
        Exception('column profiles.weekly_target_hours does not exist'),
    )


@pytest.mark.asyncio
async def test_profile_falls_back_to_bio_when_settings_columns_are_missing():
    store, queue = scripted_store(_missing_column(), FakeResult(value="Weekly commitment: 5 hours"))

    profile = await store.get_profile("u1")

    assert profile == ProfileSettings(bio="Weekly commitment: 5 hours")
    assert queue == []


@pytest.mark.asyncio
async def test_profile_reads_all_settings_when_columns_exist():
    class Row:
        bio = "Operator"
        weekly_target_hours = 3.0
        learning_track = "operator"

    store, _ = scripted_store(FakeResult(rows=[Row()]))
    profile = await store.get_profile("u1")
    assert profile == ProfileSettings(bio="Operator", weekly_target_hours=3.0, learning_track="operator")


@pytest.mark.asyncio
async def test_profile_bio_read_failure_surfaces_as_data_source_error():
    store, _ = scripted_store(_missing_column(), SQLAlchemyError("connection reset"))

    with pytest.raises(DataSourceError) as exc_info:
        await store.get_profile("u1")
    assert exc_info.value.source == "profile"


@pytest.mark.asyncio
async def test_sqlalchemy_errors_are_wrapped_per_source():
    store, _ = scripted_store(SQLAlchemyError("connection refused\nretrying"))

    with pytest.raises(DataSourceError) as exc_info:
        await store.get_current_residency("u1")
    assert exc_info.value.source == "residency"
    assert exc_info.value.message == "connection refused"
    assert isinstance(exc_info.value.__cause__, SQLAlchemyError)


@pytest.mark.asyncio
async def test_learning_paths_fall_back_when_table_is_missing():
    missing_table = ProgrammingError("SELECT learning_paths.id", {}, Exception("relation does not exist"))
    store, _ = scripted_store(missing_table)

    paths = await store.list_learning_paths()
    assert [p.id for p in paths] == [p.id for p in default_learning_paths()]


@pytest.mark.asyncio
async def test_learning_paths_fall_back_when_nothing_is_published():
    store, _ = scripted_store(FakeResult(rows=[]))
    paths = await store.list_learning_paths()
    assert [p.id for p in paths] == [p.id for p in default_learning_paths()]


@pytest.mark.asyncio
async def test_learning_paths_group_items_by_path():
    path_id = uuid.uuid4()
    path = LearningPath(id=path_id, slug="board-ready", title="Board Ready", description=None, duration="2 weeks",
                        status="published")
    items = [
        LearningPathItem(path_id=path_id, order=0, type="lesson", domain="capital-allocation",
                         module="ceo-as-investor", lesson="five-choices"),
        LearningPathItem(path_id=path_id, order=1, type="case", domain="capital-allocation",
                         case_id="cs_unit_economics_crisis"),
    ]
    store, _ = scripted_store(FakeResult(rows=[path]), FakeResult(rows=items))

    [result] = await store.list_learning_paths()

    assert result.id == "board-ready"
    assert [i.type for i in result.items] == ["lesson", "case"]
    assert result.items[0].lesson_id == "five-choices"
    assert result.items[1].case_id == "cs_unit_economics_crisis"


@pytest.mark.asyncio
async def test_learning_paths_connection_failure_is_not_masked():
    down = OperationalError("SELECT learning_paths.id", {}, Exception("could not connect"))
    store, _ = scripted_store(down)

    with pytest.raises(DataSourceError) as exc_info:
        await store.list_learning_paths()
    assert exc_info.value.source == "learning_paths"
