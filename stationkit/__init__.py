"""Independent helpers for game servers: transliteration, URL coding, timing, logging, TOML, ids, noise maps, pathfinding, Redis, HTML sanitizing and MySQL pools."""

__version__ = "4.2.0"