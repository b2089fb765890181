from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

import pytest

from sanitize.collector import collect
from sanitize.scheduler import RenameScheduler, partition, process_entry
from sanitize.types import DRY_RUN, EXISTS, RENAMED, SKIPPED, UNCHANGED, Entry, RenameContext


def _make_tree(root: Path, entries: Iterable[str]) -> None:
    for entry in entries:
        target = root / entry
        if entry.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(entry, encoding="utf-8")


def _snapshot(root: Path) -> list[str]:
    return sorted(str(path.relative_to(root)) for path in root.rglob("*"))


def _run(root: Path, *, workers: int, dry_run: bool = False) -> RenameContext:
    context = RenameContext(dry_run=dry_run)
    collect(str(root), context)
    scheduler = RenameScheduler(context, workers=workers)
    scheduler.run()
    assert scheduler.barrier.generation == context.max_depth + 1
    return context


@pytest.mark.parametrize(
    ("count", "workers", "expected"),
    [
        (10, 3, [range(0, 4), range(4, 8), range(8, 10)]),
        (9, 3, [range(0, 3), range(3, 6), range(6, 9)]),
        (2, 4, [range(0, 1), range(1, 2), range(2, 2), range(2, 2)]),
        (0, 2, [range(0, 0), range(0, 0)]),
        (5, 1, [range(0, 5)]),
    ],
)
def test_partition_examples(count: int, workers: int, expected: list[range]) -> None:
    assert partition(count, workers) == expected


def test_partition_covers_every_index_once() -> None:
    for count in range(0, 40):
        for workers in range(1, 12):
            spans = partition(count, workers)
            assert len(spans) == workers
            indices = [index for span in spans for index in span]
            assert indices == list(range(count))


def test_partition_rejects_zero_workers() -> None:
    with pytest.raises(ValueError):
        partition(3, 0)


def test_scheduler_rejects_zero_workers() -> None:
    with pytest.raises(ValueError):
        RenameScheduler(RenameContext(), workers=0)


@pytest.mark.parametrize("workers", [1, 3, 8])
def test_renames_whole_tree_children_first(tmp_path: Path, workers: int) -> None:
    _make_tree(
        tmp_path,
        [
            "MY DIR/FILE NAME.TXT",
            "MY DIR/Sub Folder/--weird__name--.mp4",
            "MY DIR/Sub Folder/Deeper One/Notes.Final.md",
            "Other-Stuff/",
            "top level.JPG",
            ".hidden Dir/Do Not Touch.txt",
        ],
    )

    _run(tmp_path, workers=workers)

    assert _snapshot(tmp_path) == sorted(
        [
            ".hidden Dir",
            os.path.join(".hidden Dir", "Do Not Touch.txt"),
            "my_dir",
            os.path.join("my_dir", "file_name.TXT"),
            os.path.join("my_dir", "sub_folder"),
            os.path.join("my_dir", "sub_folder", "weird_name.mp4"),
            os.path.join("my_dir", "sub_folder", "deeper_one"),
            os.path.join("my_dir", "sub_folder", "deeper_one", "notes_final.md"),
            "other_stuff",
            "top_level.JPG",
        ]
    )


def test_layers_complete_before_shallower_layers_start(tmp_path: Path) -> None:
    entries = []
    for a in range(4):
        for b in range(4):
            for c in range(3):
                entries.append(f"Dir {a}/Sub {b}/File {c}.txt")
    _make_tree(tmp_path, entries)

    context = _run(tmp_path, workers=4)

    by_depth: dict[int, list[float]] = {}
    for outcome in context.outcomes:
        by_depth.setdefault(outcome.depth, []).append(outcome.completed_at)
    assert sorted(by_depth) == [0, 1, 2]
    for depth in range(context.max_depth):
        assert max(by_depth[depth + 1]) <= min(by_depth[depth])
    assert all(outcome.status == RENAMED for outcome in context.outcomes)


def test_dry_run_leaves_disk_untouched_and_is_repeatable(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _make_tree(tmp_path, ["MY DIR/FILE NAME.TXT", "MY DIR/ok.txt", "keep/", "Other Dir/A B.txt"])
    before = _snapshot(tmp_path)

    _run(tmp_path, workers=4, dry_run=True)
    first = capsys.readouterr().out
    _run(tmp_path, workers=2, dry_run=True)
    second = capsys.readouterr().out

    assert _snapshot(tmp_path) == before
    assert first == second
    my_dir = os.path.join(str(tmp_path), "MY DIR")
    assert first == (
        f'"{os.path.join(my_dir, "FILE NAME.TXT")}" --> "file_name.TXT"\n\n'
        f'"{os.path.join(str(tmp_path), "Other Dir", "A B.txt")}" --> "a_b.txt"\n\n'
        f'"{my_dir}" --> "my_dir"\n\n'
        f'"{os.path.join(str(tmp_path), "Other Dir")}" --> "other_dir"\n\n'
    )


def test_dry_run_uses_custom_emitter(tmp_path: Path) -> None:
    _make_tree(tmp_path, ["Bad Name.txt"])
    context = RenameContext(dry_run=True)
    collect(str(tmp_path), context)
    seen: list[tuple[str, str]] = []

    outcomes = RenameScheduler(context, workers=2, emit=lambda path, new: seen.append((path, new))).run()

    assert seen == [(str(tmp_path / "Bad Name.txt"), "bad_name.txt")]
    assert [outcome.status for outcome in outcomes] == [DRY_RUN]


def test_collision_keeps_first_in_discovery_order(tmp_path: Path) -> None:
    _make_tree(tmp_path, ["A B.txt", "A-B.txt"])

    context = _run(tmp_path, workers=1)

    assert _snapshot(tmp_path) == ["A-B.txt", "a_b.txt"]
    assert (tmp_path / "a_b.txt").read_text(encoding="utf-8") == "A B.txt"
    assert sorted(outcome.status for outcome in context.outcomes) == [EXISTS, RENAMED]


def test_collision_never_overwrites_with_many_workers(tmp_path: Path) -> None:
    names = ["Same Name.txt", "same-name.txt", "SAME_NAME.txt", "Same.Name.txt"]
    _make_tree(tmp_path, names)

    context = _run(tmp_path, workers=4)

    remaining = _snapshot(tmp_path)
    assert len(remaining) == len(names)
    assert "same_name.txt" in remaining
    contents = sorted((tmp_path / name).read_text(encoding="utf-8") for name in remaining)
    assert contents == sorted(names)
    statuses = [outcome.status for outcome in context.outcomes]
    assert statuses.count(RENAMED) == 1
    assert statuses.count(EXISTS) == len(names) - 1


def test_missing_entries_are_skipped_silently(tmp_path: Path) -> None:
    context = RenameContext()
    gone_parent = Entry(str(tmp_path / "Missing Dir" / "File.txt"), 1)
    gone_entry = Entry(str(tmp_path / "Vanished.txt"), 0)

    assert process_entry(context, gone_parent).status == SKIPPED
    assert process_entry(context, gone_entry).status == SKIPPED


def test_safe_names_are_left_alone(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path, ["already_safe/file.txt"])

    context = _run(tmp_path, workers=2, dry_run=True)

    assert capsys.readouterr().out == ""
    assert {outcome.status for outcome in context.outcomes} == {UNCHANGED}


def test_empty_entry_list_still_runs_one_phase() -> None:
    context = RenameContext()
    scheduler = RenameScheduler(context, workers=3)
    assert scheduler.run() == []
    assert scheduler.barrier.generation == 1
