import dataclasses
from datetime import datetime

import pytest

from taskengine.models import ExtractionResult, Task, TRANSCRIPT_PROVENANCE


def test_task_defaults():
    task = Task(title="todo call vendor")
    assert task.scheduled_at is None
    assert task.description == TRANSCRIPT_PROVENANCE
    assert not task.is_scheduled


def test_task_is_immutable():
    task = Task(title="todo call vendor")
    with pytest.raises(dataclasses.FrozenInstanceError):
        task.title = "something else"


@pytest.mark.parametrize("title", ["", "   ", " padded", "padded\n"])
def test_task_rejects_untrimmed_or_empty_titles(title):
    with pytest.raises(ValueError):
        Task(title=title)


def test_task_to_dict():
    task = Task(title="need to ship", scheduled_at=datetime(2024, 3, 11, 14, 30))
    assert task.to_dict() == {
        "title": "need to ship",
        "scheduled_at": "2024-03-11T14:30:00",
        "description": TRANSCRIPT_PROVENANCE,
    }


def test_extraction_result_has_tasks():
    assert not ExtractionResult().has_tasks
    assert ExtractionResult(tasks=[Task(title="todo x")]).has_tasks
