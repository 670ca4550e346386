from datetime import datetime

from taskengine.detector import detect_tasks, is_task_fragment, split_fragments
from taskengine.models import Task, TRANSCRIPT_PROVENANCE

NOW = datetime(2024, 3, 10, 8, 0)


def test_split_on_periods_drops_empty_fragments():
    assert split_fragments("a.b..c.") == ["a", "b", "c"]
    assert split_fragments("") == []
    assert split_fragments("no terminator") == ["no terminator"]


def test_split_does_not_protect_decimals():
    assert split_fragments("Price is 3.50. Need to pay") == ["Price is 3", "50", " Need to pay"]


def test_trigger_matching_is_case_insensitive_substring():
    assert is_task_fragment("TODO: buy milk")
    assert is_task_fragment("You Should rest")
    assert is_task_fragment("I'm great at multitasking")
    assert is_task_fragment("we need to talk")
    assert not is_task_fragment("The weather was nice")
    assert not is_task_fragment("needed two")


def test_report_example():
    tasks = detect_tasks("I need to submit the report tomorrow at 14:30", now=NOW)
    assert tasks == [
        Task(
            title="I need to submit the report tomorrow at 14:30",
            scheduled_at=datetime(2024, 3, 11, 14, 30),
            description=TRANSCRIPT_PROVENANCE,
        )
    ]


def test_no_trigger_no_task():
    assert detect_tasks("The weather was nice", now=NOW) == []


def test_unscheduled_task():
    tasks = detect_tasks("todo call vendor", now=NOW)
    assert tasks == [Task(title="todo call vendor")]
    assert tasks[0].scheduled_at is None


def test_empty_input():
    assert detect_tasks("", now=NOW) == []
    assert detect_tasks("...", now=NOW) == []


def test_order_is_preserved_and_titles_trimmed():
    text = (
        "We met today. I need to submit the report tomorrow at 14:30. "
        "The weather was nice.   Someone should call the vendor next Friday.  "
    )
    tasks = detect_tasks(text, now=NOW)

    assert [t.title for t in tasks] == [
        "I need to submit the report tomorrow at 14:30",
        "Someone should call the vendor next Friday",
    ]
    assert tasks[1].scheduled_at == datetime(2024, 3, 17, 9, 0)


def test_duplicates_are_kept():
    tasks = detect_tasks("todo call vendor. todo call vendor.", now=NOW)
    assert len(tasks) == 2
    assert tasks[0] == tasks[1]


def test_one_bad_fragment_does_not_affect_others():
    text = "The task is due on Funday 5. I need to pay rent tomorrow."
    tasks = detect_tasks(text, now=NOW)
    assert [t.scheduled_at for t in tasks] == [None, datetime(2024, 3, 11, 9, 0)]


def test_idempotent_for_same_baseline():
    text = "I should call Sam tomorrow at 10:00. Task: tidy up. Todo next week."
    assert detect_tasks(text, now=NOW) == detect_tasks(text, now=NOW)


def test_results_bounded_by_fragment_count():
    text = "need to a. should b. task c. nothing. todo d"
    fragments = split_fragments(text)
    tasks = detect_tasks(text, now=NOW)
    assert len(tasks) <= len(fragments)
    for task in tasks:
        assert task.title == task.title.strip()
        assert any(task.title in fragment for fragment in fragments)


def test_custom_description():
    tasks = detect_tasks("todo call vendor", now=NOW, description="From standup")
    assert tasks[0].description == "From standup"


def test_defaults_to_current_time():
    before = datetime.now()
    tasks = detect_tasks("need to stretch tomorrow at 07:00")
    assert tasks[0].scheduled_at.date() > before.date()
    assert tasks[0].scheduled_at.strftime("%H:%M") == "07:00"
