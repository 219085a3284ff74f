"""
Tests for MovieStore over the in-memory repository:
- id assignment and non-reuse
- not-found handling on every id-addressed operation
- insertion-ordered offset pagination
- replace idempotence
"""

import threading

import pytest
from moviecatalog.movies.exceptions import MovieNotFound
from moviecatalog.movies.schemas import MovieCreate, MovieUpdate
from moviecatalog.movies.store import MovieStore
from moviecatalog.repositories import InMemoryRepository


@pytest.fixture
def store():
    return MovieStore(InMemoryRepository())


def _movie(title="Inception", duration=148):
    return MovieCreate(title=title, genre="Sci-Fi", duration_minutes=duration)


def test_create_returns_fields_with_fresh_id(store):
    movie = store.create(_movie())
    assert movie.id == 1
    assert (movie.title, movie.genre, movie.duration_minutes) == ("Inception", "Sci-Fi", 148)
    assert store.get(1) == movie


def test_ids_are_never_reused(store):
    first = store.create(_movie("A"))
    second = store.create(_movie("B"))
    store.delete(second.id)
    third = store.create(_movie("C"))
    assert len({first.id, second.id, third.id}) == 3
    assert third.id > second.id


def test_missing_ids_raise_not_found(store):
    with pytest.raises(MovieNotFound):
        store.get(1)
    with pytest.raises(MovieNotFound):
        store.replace(1, MovieUpdate(title="A", genre="B", duration_minutes=90))
    with pytest.raises(MovieNotFound):
        store.delete(1)


def test_delete_returns_removed_movie(store):
    created = store.create(_movie())
    assert store.delete(created.id) == created
    with pytest.raises(MovieNotFound):
        store.get(created.id)


def test_list_pages_in_insertion_order(store):
    for i in range(70):
        store.create(_movie(f"Movie {i}"))

    first = store.list(0, 50)
    assert len(first) == 50
    assert [m.id for m in first] == list(range(1, 51))
    assert len(store.list(50, 50)) == 20
    assert len(store.list()) == 50


def test_list_clamps_negative_values(store):
    store.create(_movie())
    assert len(store.list(-3, 5)) == 1
    assert store.list(0, -1) == []


def test_replace_keeps_position_and_id(store):
    store.create(_movie("A"))
    store.create(_movie("B"))
    store.replace(1, MovieUpdate(title="Z", genre="Drama", duration_minutes=100))
    assert [m.title for m in store.list()] == ["Z", "B"]
    assert store.get(1).id == 1


def test_replace_is_idempotent(store):
    created = store.create(_movie())
    update = MovieUpdate(title="Tenet", genre="Action", duration_minutes=150)
    once = store.replace(created.id, update)
    twice = store.replace(created.id, update)
    assert once == twice == store.get(created.id)


def test_returned_movies_are_copies(store):
    created = store.create(_movie())
    created.title = "Mutated"
    fetched = store.get(created.id)
    fetched.genre = "Mutated"
    assert store.get(created.id).title == "Inception"
    assert store.get(created.id).genre == "Sci-Fi"


def test_concurrent_creates_get_distinct_ids(store):
    def worker():
        for _ in range(25):
            store.create(_movie())

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    ids = [m.id for m in store.list(0, 200)]
    assert len(ids) == 100
    assert len(set(ids)) == 100
