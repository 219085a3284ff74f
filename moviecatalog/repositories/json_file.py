"""
JSON file repository - stores the whole catalog in one JSON document.

Layout: {"next_id": <int>, "movies": [<movie>, ...]} with movies kept in
insertion order. Writes go to a temp file first and are moved over the
catalog, so a crash mid-write never leaves a half-written file behind.
"""

import os, json, tempfile, shutil
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import ValidationError

from moviecatalog.movies.exceptions import StoreUnavailable
from moviecatalog.movies.models import Movie
from moviecatalog.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class JsonFileRepository(BaseRepository):
    """Repository implementation using a local JSON file"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        logger.info(f"JsonFileRepository initialized with data file: {self.path}")

    # ────────────────────────────────
    # JSON helpers
    # ────────────────────────────────
    def _load(self) -> Dict:
        if not self.path.exists():
            return {"next_id": 1, "movies": []}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read().strip()
        except OSError as e:
            raise StoreUnavailable(f"Cannot read {self.path}: {e}") from e

        if not content:
            return {"next_id": 1, "movies": []}
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise StoreUnavailable(f"Corrupted catalog file {self.path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("movies", []), list):
            raise StoreUnavailable(f"Corrupted catalog file {self.path}: expected an object with a 'movies' list")

        movies = []
        for index, record in enumerate(data.get("movies", [])):
            try:
                movie = Movie.model_validate(record)
            except ValidationError as e:
                raise StoreUnavailable(f"Corrupted record {index} in {self.path}: {e}") from e
            if movie.id is None:
                raise StoreUnavailable(f"Corrupted record {index} in {self.path}: missing id")
            movies.append(movie.model_dump())

        next_id = data.get("next_id", 1)
        if isinstance(next_id, bool) or not isinstance(next_id, int):
            raise StoreUnavailable(f"Corrupted catalog file {self.path}: next_id must be an integer")

        # next_id may be missing from a hand-written file; never go below max id + 1
        highest = max((m["id"] for m in movies), default=0)
        data["next_id"] = max(next_id, highest + 1)
        data["movies"] = movies
        return data

    def _save(self, data: Dict) -> None:
        """Safely write the catalog to disk (atomic write)."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_fd, tmp_path = tempfile.mkstemp(dir=self.path.parent)
            os.close(tmp_fd)
        except OSError as e:
            raise StoreUnavailable(f"Cannot write {self.path}: {e}") from e

        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            shutil.move(tmp_path, self.path)
        except OSError as e:
            raise StoreUnavailable(f"Cannot write {self.path}: {e}") from e
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    # ────────────────────────────────
    # Repository interface
    # ────────────────────────────────
    def allocate_id(self) -> int:
        data = self._load()
        movie_id = data["next_id"]
        data["next_id"] = movie_id + 1
        self._save(data)
        return movie_id

    def insert(self, movie: Movie) -> None:
        data = self._load()
        data["movies"].append(movie.model_dump())
        data["next_id"] = max(data["next_id"], movie.id + 1)
        self._save(data)

    def fetch(self, movie_id: int) -> Optional[Movie]:
        for record in self._load()["movies"]:
            if record["id"] == movie_id:
                return Movie(**record)
        return None

    def fetch_page(self, skip: int, take: int) -> List[Movie]:
        records = self._load()["movies"][skip: skip + take]
        return [Movie(**r) for r in records]

    def update(self, movie: Movie) -> bool:
        data = self._load()
        for i, record in enumerate(data["movies"]):
            if record["id"] == movie.id:
                data["movies"][i] = movie.model_dump()
                self._save(data)
                return True
        return False

    def remove(self, movie_id: int) -> Optional[Movie]:
        data = self._load()
        kept = [r for r in data["movies"] if r["id"] != movie_id]
        if len(kept) == len(data["movies"]):
            return None
        removed = next(r for r in data["movies"] if r["id"] == movie_id)
        data["movies"] = kept
        self._save(data)
        return Movie(**removed)

    def count(self) -> int:
        return len(self._load()["movies"])
