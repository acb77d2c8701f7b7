from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union
from uuid import NAMESPACE_URL, UUID, uuid5

import yaml

from heykids.domain.age_group import AgeGroup
from heykids.domain.errors import CatalogError
from heykids.domain.movie import Movie, validate_movie_collection
from heykids.utils import format_kv

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "movies.yaml"
CATALOG_NAMESPACE = uuid5(NAMESPACE_URL, "https://heykidswatchthis.app/movies")


def movie_id_for(title: str, year: int) -> UUID:
    return uuid5(CATALOG_NAMESPACE, f"{title}|{year}")


def _read(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise CatalogError(f"catalog not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise CatalogError(f"catalog is not valid YAML: {path}: {exc}") from exc
    if not isinstance(data, dict) or not isinstance(data.get("movies", []), list):
        raise CatalogError(f"catalog must be a mapping with a 'movies' list: {path}")
    return data


def _movie_from_entry(entry: Any, index: int) -> Movie:
    if not isinstance(entry, dict):
        raise CatalogError(f"movie #{index} must be a mapping")
    try:
        title = str(entry["title"]).strip()
        year = int(entry["year"])
        age_group = AgeGroup(entry["age_group"])
        genre = str(entry["genre"]).strip()
    except KeyError as exc:
        raise CatalogError(f"movie #{index} is missing {exc.args[0]!r}") from exc
    except (TypeError, ValueError) as exc:
        raise CatalogError(f"movie #{index}: {exc}") from exc

    services = entry.get("streaming_services") or []
    if not isinstance(services, list):
        raise CatalogError(f"movie #{index}: streaming_services must be a list")
    rating = entry.get("rating")
    raw_id = entry.get("id")
    try:
        movie_id = UUID(str(raw_id)) if raw_id else movie_id_for(title, year)
        return Movie(
            id=movie_id,
            title=title,
            year=year,
            age_group=age_group,
            genre=genre,
            emoji=str(entry.get("emoji") or "🎬"),
            streaming_services=tuple(str(s) for s in services),
            rating=None if rating is None else float(rating),
            notes=entry.get("notes"),
        )
    except (TypeError, ValueError) as exc:
        raise CatalogError(f"movie #{index}: {exc}") from exc


def load_catalog(path: Optional[Union[str, Path]] = None) -> list[Movie]:
    """Read and validate the seed catalog. Raises ``CatalogError`` on any problem."""
    resolved = Path(path).expanduser() if path is not None else DEFAULT_CATALOG_PATH
    data = _read(resolved)
    movies = [_movie_from_entry(entry, idx) for idx, entry in enumerate(data.get("movies") or [])]

    result = validate_movie_collection(movies)
    if not result.is_valid:
        raise CatalogError("; ".join(result.errors))
    logger.debug("catalog loaded %s", format_kv(path=resolved, movies=len(movies)))
    return movies
