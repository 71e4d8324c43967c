"""Pytest fixtures shared by the job trigger tests."""

from typing import Iterator, List, Optional

import pytest
from google.cloud import dlp_v2

from dlp_triggers.errors import RemoteError
from dlp_triggers.service import TriggerService, TriggerSummary


class FakeTriggerService(TriggerService):
    """Records the calls made and returns canned responses."""

    def __init__(self, summaries: Optional[List[TriggerSummary]] = None,
                 error: Optional[str] = None):
        self.summaries = summaries or []
        self.error = error
        self.calls = []
        self.opened = 0
        self.closed = 0

    def __enter__(self):
        self.opened += 1
        return self

    def create_trigger(self, parent, definition):
        self.calls.append(("create", parent, definition))
        if self.error:
            raise RemoteError(self.error)
        return dlp_v2.JobTrigger(
            name=f"{parent}/jobTriggers/{definition.trigger_id}",
            display_name=definition.display_name)

    def list_triggers(self, parent) -> Iterator[TriggerSummary]:
        self.calls.append(("list", parent))
        if self.error:
            raise RemoteError(self.error)
        yield from self.summaries

    def delete_trigger(self, name):
        self.calls.append(("delete", name))
        if self.error:
            raise RemoteError(self.error)

    def close(self):
        self.closed += 1


@pytest.fixture
def fake_service() -> FakeTriggerService:
    """Return a fake service without triggers."""
    return FakeTriggerService()


@pytest.fixture
def sample_summary() -> TriggerSummary:
    """Return a listed trigger."""
    return TriggerSummary(
        name="projects/p1/jobTriggers/t1",
        create_time="2023-05-01T10:00:00+00:00",
        update_time="2023-05-02T10:00:00+00:00",
        display_name="Nightly scan",
        description="",
        status="HEALTHY",
        error_count=2,
    )
