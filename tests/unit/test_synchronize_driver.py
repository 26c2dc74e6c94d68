"""Contains unit tests for the sync pipeline."""

import pytest

from gitlab_notion_sync.configuration.models import UnparsableIdentityPolicy
from gitlab_notion_sync.exceptions import ParseError, TransportError
from gitlab_notion_sync.synchronize.driver import SyncPipeline
from gitlab_notion_sync.synchronize.identity import extract_local_id
from gitlab_notion_sync.synchronize.models import SyncDecision, SyncStage

from .fakes import FakeStore, FakeTracker, make_identity_properties, make_issue


def _make_pipeline(tracker: FakeTracker, store: FakeStore, **kwargs: object) -> SyncPipeline:
    return SyncPipeline(tracker, store, assignee_name="Jan Strich", title_prefix="G4KMU", page_size=5, **kwargs)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_run_creates_pages_for_new_issues() -> None:
    """A first run against an empty database creates one page per assigned issue."""
    tracker = FakeTracker(
        [[make_issue(1), make_issue(2, assignees=("Someone Else",)), make_issue(3)]],
        labels=["bug", "feature"],
    )
    store = FakeStore()

    result = await _make_pipeline(tracker, store).run()

    assert result.stage == SyncStage.DONE
    assert result.issues_fetched == 2
    assert result.pages_indexed == 0
    assert result.labels_synced == 2
    assert result.count(SyncDecision.CREATE) == 2
    assert result.count(SyncDecision.UPDATE) == 0
    assert result.failures == []
    assert sorted(extract_local_id(handle, properties) for handle, properties in store.pages.items()) == [1, 3]


@pytest.mark.asyncio
async def test_run_is_idempotent() -> None:
    """A second run over unchanged input updates every page and creates none."""
    tracker = FakeTracker([[make_issue(iid) for iid in range(1, 5)]])
    store = FakeStore()

    await _make_pipeline(tracker, store).run()
    first_snapshot = dict(store.pages)
    result = await _make_pipeline(tracker, store).run()

    assert result.pages_indexed == 4
    assert result.count(SyncDecision.CREATE) == 0
    assert result.count(SyncDecision.UPDATE) == 4
    assert store.pages == first_snapshot


@pytest.mark.asyncio
async def test_run_updates_existing_and_creates_missing() -> None:
    """Mirrored issues are updated in place and the rest are created."""
    tracker = FakeTracker([[make_issue(1), make_issue(2, title="Changed")]])
    store = FakeStore()
    handle = store.add_page(make_identity_properties("#2"))

    result = await _make_pipeline(tracker, store).run()

    assert result.count(SyncDecision.CREATE) == 1
    assert result.count(SyncDecision.UPDATE) == 1
    assert store.pages[handle]["title"]["title"][0]["text"]["content"] == "G4KMU: Changed"
    assert len(store.pages) == 2


@pytest.mark.asyncio
async def test_run_syncs_taxonomy_before_writing_pages() -> None:
    """Tag options are replaced before any page is created or updated."""
    tracker = FakeTracker([[make_issue(1), make_issue(2)]], labels=["bug"])
    store = FakeStore()
    store.add_page(make_identity_properties("#1"))

    await _make_pipeline(tracker, store).run()

    schema_position = store.calls.index("update_database_schema")
    write_positions = [position for position, call in enumerate(store.calls) if call in ("create_page", "update_page")]
    assert write_positions
    assert all(position > schema_position for position in write_positions)


@pytest.mark.asyncio
async def test_run_reports_per_item_failures() -> None:
    """Failed writes are reported without aborting the run."""
    tracker = FakeTracker([[make_issue(iid) for iid in range(1, 4)]])
    store = FakeStore(failing_local_ids={2})

    result = await _make_pipeline(tracker, store).run()

    assert result.stage == SyncStage.DONE
    assert [failure.local_id for failure in result.failures] == [2]
    assert result.count(SyncDecision.CREATE) == 2


@pytest.mark.asyncio
async def test_run_aborts_on_listing_failure() -> None:
    """A transport failure while listing aborts the run before any write."""

    class FailingTracker(FakeTracker):
        async def list_issues(self, page: int, per_page: int):  # type: ignore[no-untyped-def]
            raise TransportError("GET /issues failed with HTTP 500", status_code=500)

    store = FakeStore()
    pipeline = _make_pipeline(FailingTracker([]), store)

    with pytest.raises(TransportError):
        await pipeline.run()

    assert pipeline.stage == SyncStage.LISTING
    assert "create_page" not in store.calls
    assert "update_database_schema" not in store.calls


@pytest.mark.asyncio
async def test_run_fails_on_unparsable_identity_with_fail_policy() -> None:
    """The fail policy aborts the run while building the index."""
    store = FakeStore()
    store.add_page(make_identity_properties("not an id"))
    pipeline = _make_pipeline(FakeTracker([[make_issue(1)]]), store, unparsable_identity_policy=UnparsableIdentityPolicy.FAIL)

    with pytest.raises(ParseError):
        await pipeline.run()

    assert pipeline.stage == SyncStage.BUILDING_INDEX


@pytest.mark.asyncio
async def test_stages_cannot_be_skipped() -> None:
    """Entering a stage out of order is rejected."""
    pipeline = _make_pipeline(FakeTracker([]), FakeStore())

    with pytest.raises(RuntimeError):
        await pipeline.list_source()

    await pipeline.build_index()
    with pytest.raises(RuntimeError):
        await pipeline.build_index()


@pytest.mark.asyncio
async def test_build_index_keeps_last_duplicate_page() -> None:
    """Two pages mirroring the same issue resolve to the page listed last."""
    store = FakeStore()
    store.add_page(make_identity_properties("#1"))
    store.add_page(make_identity_properties("#1"))
    pipeline = _make_pipeline(FakeTracker([]), store)

    index = await pipeline.build_index()

    assert dict(index) == {1: "page-2"}
