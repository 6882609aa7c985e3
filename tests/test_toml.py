import json
import tomllib

import pytest

from stationkit.toml import TomlError, toml_encode, toml_file_to_json


def test_file_to_json(tmp_path):
    path = tmp_path / "c.toml"
    path.write_text('name = "x"\n[server]\nport = 8080\nflags = [true, false]\n')
    assert json.loads(toml_file_to_json(path)) == {
        "name": "x",
        "server": {"port": 8080, "flags": [True, False]},
    }


def test_missing_file(tmp_path):
    with pytest.raises(TomlError):
        toml_file_to_json(tmp_path / "none.toml")


def test_invalid_toml(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text("= = =")
    with pytest.raises(TomlError):
        toml_file_to_json(path)


def test_encode_round_trip():
    data = {"a": 1, "b": {"c": "d", "e": [1, 2]}}
    assert tomllib.loads(toml_encode(json.dumps(data))) == data


@pytest.mark.parametrize("text", ["[1, 2]", "{bad", '{"a": null}'])
def test_encode_errors(text):
    with pytest.raises(TomlError):
        toml_encode(text)