"""
Tests for the patch reconciler: operation handling, structural errors,
validation before commit, and atomicity of rejected patches.
"""

import pytest
from moviecatalog.movies.exceptions import MalformedPatch, MovieNotFound, ValidationFailed
from moviecatalog.movies.patching import PatchReconciler, apply_operations, parse_operations
from moviecatalog.movies.schemas import MovieCreate, MovieUpdate
from moviecatalog.movies.store import MovieStore
from moviecatalog.repositories import InMemoryRepository


# ────────────────────────────────
# Fixtures and helpers
# ────────────────────────────────
@pytest.fixture
def store():
    store = MovieStore(InMemoryRepository())
    store.create(MovieCreate(title="Inception", genre="Sci-Fi", duration_minutes=148))
    return store


@pytest.fixture
def reconciler(store):
    return PatchReconciler(store)


BASE = MovieUpdate(title="Inception", genre="Sci-Fi", duration_minutes=148)


def ops(*raw):
    return parse_operations(list(raw))


# ────────────────────────────────
# Tests: applying operations
# ────────────────────────────────
def test_replace_sets_field():
    candidate = apply_operations(BASE, ops({"op": "replace", "path": "/title", "value": "Heat"}))
    assert candidate.title == "Heat"
    assert BASE.title == "Inception"


def test_operations_apply_in_order():
    candidate = apply_operations(
        BASE,
        ops(
            {"op": "replace", "path": "/genre", "value": "Drama"},
            {"op": "add", "path": "/genre", "value": "Thriller"},
        ),
    )
    assert candidate.genre == "Thriller"


def test_path_lookup_is_case_insensitive_and_accepts_camel_case():
    candidate = apply_operations(
        BASE,
        ops(
            {"op": "replace", "path": "/Title", "value": "Heat"},
            {"op": "replace", "path": "/durationMinutes", "value": 170},
        ),
    )
    assert (candidate.title, candidate.duration_minutes) == ("Heat", 170)


def test_numeric_string_is_coerced_for_duration():
    candidate = apply_operations(BASE, ops({"op": "replace", "path": "/duration_minutes", "value": "150"}))
    assert candidate.duration_minutes == 150


def test_remove_clears_field():
    candidate = apply_operations(BASE, ops({"op": "remove", "path": "/genre"}))
    assert candidate.genre is None


def test_copy_and_move():
    copied = apply_operations(BASE, ops({"op": "copy", "from": "/title", "path": "/genre"}))
    assert copied.genre == "Inception"

    moved = apply_operations(BASE, ops({"op": "move", "from": "/title", "path": "/genre"}))
    assert (moved.title, moved.genre) == (None, "Inception")


def test_test_operation():
    apply_operations(BASE, ops({"op": "test", "path": "/duration_minutes", "value": 148}))
    with pytest.raises(MalformedPatch):
        apply_operations(BASE, ops({"op": "test", "path": "/duration_minutes", "value": 90}))


@pytest.mark.parametrize(
    "operation",
    [
        {"op": "replace", "path": "/director", "value": "Nolan"},
        {"op": "replace", "path": "title", "value": "Heat"},
        {"op": "replace", "path": "/title/0", "value": "Heat"},
        {"op": "replace", "path": "/title"},
        {"op": "rename", "path": "/title", "value": "Heat"},
        {"op": "copy", "path": "/title"},
        {"op": "replace", "path": "/duration_minutes", "value": "long"},
        {"op": "replace", "path": "/title", "value": 12},
        {"op": "replace", "path": "/duration_minutes", "value": True},
        {"op": "add", "path": "/title", "value": False},
    ],
)
def test_structural_errors_are_malformed(operation):
    with pytest.raises(MalformedPatch):
        apply_operations(BASE, ops(operation))


@pytest.mark.parametrize("body", [{"op": "replace"}, "replace", [1], [{"path": "/title"}]])
def test_parse_rejects_non_operation_bodies(body):
    with pytest.raises(MalformedPatch):
        parse_operations(body)


# ────────────────────────────────
# Tests: reconciliation
# ────────────────────────────────
def test_reconcile_commits_valid_patch(reconciler, store):
    movie = reconciler.reconcile(1, ops({"op": "replace", "path": "/duration_minutes", "value": 150}))
    assert movie.duration_minutes == 150
    assert store.get(1).duration_minutes == 150
    assert store.get(1).title == "Inception"


def test_invalid_patch_leaves_entity_unchanged(reconciler, store):
    before = store.get(1)
    with pytest.raises(ValidationFailed) as exc:
        reconciler.reconcile(1, ops({"op": "replace", "path": "/duration_minutes", "value": 610}))
    assert [v.field for v in exc.value.violations] == ["duration_minutes"]
    assert store.get(1) == before


def test_malformed_patch_leaves_entity_unchanged(reconciler, store):
    before = store.get(1)
    with pytest.raises(MalformedPatch):
        reconciler.reconcile(
            1,
            ops(
                {"op": "replace", "path": "/title", "value": "Heat"},
                {"op": "replace", "path": "/rating", "value": 9},
            ),
        )
    assert store.get(1) == before


def test_remove_required_field_fails_validation(reconciler, store):
    with pytest.raises(ValidationFailed) as exc:
        reconciler.reconcile(1, ops({"op": "remove", "path": "/title"}))
    assert exc.value.violations[0].reason == "title is required"
    assert store.get(1).title == "Inception"


def test_reconcile_missing_movie(reconciler):
    with pytest.raises(MovieNotFound):
        reconciler.reconcile(99, ops({"op": "replace", "path": "/title", "value": "Heat"}))


def test_empty_patch_keeps_movie(reconciler, store):
    before = store.get(1)
    assert reconciler.reconcile(1, []) == before
