# stationkit

A collection of small, independent helpers for game servers and their
tooling. Each module can be used on its own.

## Installation

```
pip install stationkit
```

To run the test suite:

```
pip install "stationkit[test]"
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `stationkit.text` | Cyrillic ⇄ Latin transliteration (`cyr_to_latin`, `latin_to_cyr`, `Transliterator`) |
| `stationkit.url` | Form-style URL `encode` / `decode` |
| `stationkit.time` | Named stopwatches (`Stopwatch`), `unix_timestamp`, `format_timestamp` |
| `stationkit.log` | Appending, timestamped log files (`LogWriter`, `log_write`, `log_close_all`) |
| `stationkit.toml` | TOML file to JSON and JSON to TOML (`toml_file_to_json`, `toml_encode`, `TomlError`) |
| `stationkit.ids` | `uuid_v4`, `uuid_v7` and `cuid2` identifiers |
| `stationkit.noise` | Seeded 2D Perlin noise scaled to `[0, 1]` (`Perlin`, `get_at_coordinates`) |
| `stationkit.pathfinder` | A node graph with A* path search (`NodeGraph`, `Node`) |
| `stationkit.poissonnoise` | Poisson-disc point maps as `0`/`1` strings (`poisson_map`) |
| `stationkit.worleynoise` | Worley (cellular) noise maps as `0`/`1` strings (`worley_noise`) |
| `stationkit.redis_pubsub` | Background Redis publish/subscribe (`PubSub`) |
| `stationkit.redis_reliablequeue` | Redis list operations on JSON values (`ReliableQueue`) |
| `stationkit.sanitize` | Whitelist-based HTML sanitizing (`sanitize_html`) |
| `stationkit.sql` | MySQL connection pools and queries with JSON-shaped results (`SqlPools`, `ConnectOptions`) |

## Examples

Transliteration:

```python
from stationkit.text import cyr_to_latin, latin_to_cyr

cyr_to_latin("Привет мир! Hello world!")   # "Privet mir! Hello world!"
latin_to_cyr("Привет мир! Hello world!")   # "Привет мир! Хелло ворлд!"
```

URL coding:

```python
from stationkit.url import encode, decode

encoded = encode("a b&c")          # "a+b%26c"
assert decode(encoded) == "a b&c"
```

Timing:

```python
from stationkit.time import Stopwatch, format_timestamp, unix_timestamp

watch = Stopwatch()
watch.reset("tick")
elapsed_ms = watch.milliseconds("tick")     # int
format_timestamp("%Y-%m-%d %H:%M", "0")     # current time at UTC+0
format_timestamp("%H:%M")                   # current local time
unix_timestamp()                            # e.g. "1700000000.123456"
```

A stopwatch that has never been reset starts the first time it is read.
`format_timestamp` raises `ValueError` for an offset that is not a whole
number of hours within a day.

Logging:

```python
from stationkit.log import LogWriter

writer = LogWriter()
writer.write("logs/game.log", "round started\nmap loaded", True)
writer.close_all()
```

Each timestamped entry starts with `[YYYY-MM-DD HH:MM:SS.mmm]` (UTC); further
lines of the same entry are written with a ` - ` prefix. With `timestamp`
false the data is appended exactly as given. Missing parent directories are
created. `log_write` and `log_close_all` use one shared writer.

TOML:

```python
from stationkit.toml import toml_encode, toml_file_to_json

toml_text = toml_encode('{"name": "station", "ports": [1, 2]}')
json_text = toml_file_to_json("config.toml")
```

Both raise `TomlError` when the input cannot be read or converted; a JSON
`null` cannot be written as TOML.

Identifiers:

```python
from stationkit.ids import cuid2, uuid_v4, uuid_v7

uuid_v4()
uuid_v7()       # time-ordered
cuid2(10)       # length between 2 and 32, default 24
```

Pathfinding:

```python
from stationkit.pathfinder import NodeGraph

graph = NodeGraph()
graph.register_nodes(nodes_json)      # a JSON list of nodes indexed from 0
path = graph.generate_path(10, 25)    # node ids, goal first, start last
graph.remove_node(11)
```

A node is a JSON object with `unique_id`, `x`, `y`, `z` and
`connected_nodes_id`; its `unique_id` must equal its position, otherwise
`NodesNotCorrectlyIndexed` is raised. `add_node` links existing neighbours
back to the new node, and `remove_node` raises `NodeNotFound` for a missing
node. Nodes on different `z` levels never connect, and a missing start or
goal node, or the absence of any path, raises `PathError`.

Noise maps:

```python
import random

from stationkit.noise import get_at_coordinates
from stationkit.poissonnoise import poisson_map
from stationkit.worleynoise import worley_noise

value = get_at_coordinates("42", "0.5", "1.25")   # float within [0, 1]
grid = poisson_map("7", "20", "10", "3")          # 200 characters of 0/1
cells = worley_noise(5, 1.5, 50, 20, 2, 5, random.Random(1))   # 400 characters
```

Maps are returned row by row as one string.

Redis publish/subscribe:

```python
from stationkit.redis_pubsub import PubSub

bus = PubSub()
bus.connect("redis://localhost:6379")
bus.subscribe("events")
bus.publish("events", "hello")
messages = bus.get_messages()   # dict: {"events": ["hello"], ...}
bus.disconnect()
```

Requests are carried out on a background thread. If the connection fails
later, the error text appears under the `REDIS_ERROR_CHANNEL` key of
`get_messages`. Calling `subscribe` or `publish` while not connected raises
`ConnectionError`.

Redis lists:

```python
from stationkit.redis_reliablequeue import ReliableQueue

rq = ReliableQueue()
rq.connect("redis://localhost:6379")
rq.lpush("jobs", [{"id": 1}, {"id": 2}])   # each list item is pushed as JSON
rq.lrange("jobs", 0, -1)                   # stored JSON strings
rq.lpop("jobs")                            # one element
rq.lpop("jobs", 5)                         # a list of up to five elements
rq.disconnect()
```

HTML sanitizing:

```python
from stationkit.sanitize import sanitize_html

sanitize_html('<a href="https://example.com" onclick="x()">hi</a><script>bad()</script>',
              ["href"], ["a"])
# '<a href="https://example.com" rel="noopener">hi</a>'
```

Only the whitelisted tags and attributes are kept; other tags are unwrapped,
`script` and `style` are removed with their content, links get
`rel="noopener"`, and URLs with unknown schemes are dropped (`byond:` is
allowed).

MySQL:

```python
from stationkit.sql import ConnectOptions, SqlPools

password = "password"
pools = SqlPools()
handle = pools.connect(ConnectOptions(host="localhost", user="user", password=password, db_name="game"))
result = pools.query(handle, "SELECT id, name FROM players WHERE id = ?", "[1]")
# {"status": "ok", "affected": 0, "last_insert_id": None, "columns": [...], "rows": [[1, "..."]]}
pools.connected(handle)    # True
pools.disconnect(handle)   # True
```

Parameters are given as a JSON array for `?` placeholders or a JSON object
for `:name` placeholders. A query on an unknown handle returns
`{"status": "offline"}`. `err_to_json` builds the matching
`{"status": "err", "data": ...}` document.

## What it does not do

stationkit is a library only: it has no command-line program and no server.
Queries and Redis list operations run synchronously in the calling thread;
there is no job queue for running them in the background and collecting the
results later.