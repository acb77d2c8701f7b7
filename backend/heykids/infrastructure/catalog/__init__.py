from .loader import DEFAULT_CATALOG_PATH, load_catalog, movie_id_for

__all__ = ["DEFAULT_CATALOG_PATH", "load_catalog", "movie_id_for"]
