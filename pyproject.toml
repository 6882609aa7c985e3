[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stationkit"
version = "4.2.0"
description = "Helpers for game servers: transliteration, URL coding, timing, logging, TOML, ids, noise maps, A* pathfinding, Redis queues, HTML sanitizing and MySQL pools"
requires-python = ">=3.11"
keywords = [
    "game-server",
    "transliteration",
    "perlin",
    "worley",
    "poisson",
    "pathfinding",
    "astar",
    "redis",
    "mysql",
    "sanitize",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "redis",
    "pymysql",
    "tomli-w",
    "html5lib",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["stationkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
