"""Contains results of the sync workflow."""

from gitlab_notion_sync.synchronize.models import CreatePage, SyncDecision, SyncStage, UpdatePage, WorkItem


class WriteOutcome:
    """Outcome of a single create or update operation."""

    def __init__(self, work_item: WorkItem, handle: str | None = None, error: Exception | None = None) -> None:
        """Initialize the outcome with the work item and either the resulting handle or the error."""
        self.work_item = work_item
        self.handle = handle
        self.error = error

    @property
    def succeeded(self) -> bool:
        """Whether the operation completed without error."""
        return self.error is None

    @property
    def local_id(self) -> int:
        """IID of the GitLab issue the operation wrote."""
        return self.work_item.issue.iid


class WriteSummary:
    """Contains the outcomes of every operation executed by the batched writer."""

    def __init__(self, outcomes: list[WriteOutcome], batch_count: int) -> None:
        """Initialize the summary with per-operation outcomes in input order."""
        self.outcomes = outcomes
        self.batch_count = batch_count

    @property
    def succeeded(self) -> int:
        """Number of operations that completed without error."""
        return sum(1 for outcome in self.outcomes if outcome.succeeded)

    @property
    def failures(self) -> list[WriteOutcome]:
        """Outcomes of the operations that failed, in input order."""
        return [outcome for outcome in self.outcomes if not outcome.succeeded]

    @property
    def created_handles(self) -> dict[int, str]:
        """Handles of newly created pages, keyed by GitLab issue IID."""
        return {
            outcome.local_id: outcome.handle
            for outcome in self.outcomes
            if outcome.succeeded and isinstance(outcome.work_item, CreatePage) and outcome.handle is not None
        }


class ReconcileResult:
    """Contains the disjoint create and update work lists produced by the reconciler."""

    def __init__(self, creates: list[CreatePage], updates: list[UpdatePage]) -> None:
        """Initialize the result with both work lists, each in source order."""
        self.creates = creates
        self.updates = updates

    def __len__(self) -> int:
        """Total number of work items."""
        return len(self.creates) + len(self.updates)


class SyncRunResult:
    """Contains results of a complete sync run."""

    def __init__(
        self,
        stage: SyncStage,
        issues_fetched: int,
        pages_indexed: int,
        labels_synced: int,
        creates: WriteSummary,
        updates: WriteSummary,
    ) -> None:
        """Initialize the result with the counts and write summaries of the run."""
        self.stage = stage
        self.issues_fetched = issues_fetched
        self.pages_indexed = pages_indexed
        self.labels_synced = labels_synced
        self.creates = creates
        self.updates = updates

    @property
    def failures(self) -> list[WriteOutcome]:
        """Failed create and update outcomes of the run."""
        return self.creates.failures + self.updates.failures

    def count(self, decision: SyncDecision) -> int:
        """Return the number of successful operations for the given decision."""
        if decision == SyncDecision.CREATE:
            return self.creates.succeeded
        return self.updates.succeeded
