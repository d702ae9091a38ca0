#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Test the command line and configuration loading
"""

import json

import pytest

from rich.console import Console

from DocSeeker import main as cli_main
from DocSeeker.create_default_config import DEFAULT_CONFIG, create_default_config, load_config
from DocSeeker.tfidf_search.corpus import Corpus


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    monkeypatch.setattr(cli_main, "console", Console(width=400))


@pytest.fixture
def docs(tmp_path):
    root = tmp_path / "docs"
    root.mkdir()
    (root / "cats.html").write_text("<p>cat cat dog</p>", encoding="utf-8")
    (root / "dogs.html").write_text("<p>dog bird</p>", encoding="utf-8")
    (root / "fish.html").write_text("<p>fish</p>", encoding="utf-8")
    return root


def test_no_subcommand_fails(capsys):
    assert cli_main.main([]) == 1


def test_index_inspect_and_query(docs, tmp_path, capsys):
    output = tmp_path / "index.json"
    assert cli_main.main(["index", str(docs), "--output", str(output)]) == 0
    assert len(Corpus.load_from_json(str(output))) == 3

    capsys.readouterr()
    assert cli_main.main(["inspect", str(output)]) == 0
    assert "Documents: 3" in capsys.readouterr().out

    assert cli_main.main(["query", str(output), "cat"]) == 0
    assert "cats.html" in capsys.readouterr().out


def test_index_missing_folder_fails(tmp_path):
    output = tmp_path / "index.json"
    assert cli_main.main(["index", str(tmp_path / "missing"), "--output", str(output)]) == 1
    assert not output.exists()


def test_inspect_missing_or_broken_file_fails(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("not json", encoding="utf-8")
    assert cli_main.main(["inspect", str(tmp_path / "missing.json")]) == 1
    assert cli_main.main(["inspect", str(broken)]) == 1


def test_query_without_text_fails(docs, tmp_path):
    output = tmp_path / "index.json"
    assert cli_main.main(["index", str(docs), "--output", str(output)]) == 0
    assert cli_main.main(["query", str(output)]) == 1


def test_serve_passes_address_and_corpus(docs, tmp_path, monkeypatch):
    output = tmp_path / "index.json"
    assert cli_main.main(["index", str(docs), "--output", str(output)]) == 0

    calls = {}

    def fake_serve(corpus, host, port, static_dir):
        calls.update(corpus=corpus, host=host, port=port)

    monkeypatch.setattr(cli_main, "serve", fake_serve)
    assert cli_main.main(["serve", str(output), "0.0.0.0:7000"]) == 0
    assert calls["host"] == "0.0.0.0"
    assert calls["port"] == 7000
    assert len(calls["corpus"]) == 3

    assert cli_main.main(["serve", str(output), "host:port"]) == 1


def test_load_config_defaults_when_missing(tmp_path):
    assert load_config(str(tmp_path / "missing.json")) == DEFAULT_CONFIG


def test_load_config_merges_sections(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"server": {"port": 8080}}), encoding="utf-8")
    config = load_config(str(config_path))
    assert config["server"]["port"] == 8080
    assert config["server"]["host"] == "127.0.0.1"
    assert config["indexing"] == DEFAULT_CONFIG["indexing"]


def test_load_config_invalid_file_uses_defaults(tmp_path, capsys):
    config_path = tmp_path / "config.json"
    config_path.write_text("{broken", encoding="utf-8")
    assert load_config(str(config_path)) == DEFAULT_CONFIG
    assert "Warning" in capsys.readouterr().out


def test_create_default_config(tmp_path):
    config_path = tmp_path / "config.json"
    create_default_config(str(config_path))
    assert load_config(str(config_path)) == DEFAULT_CONFIG
    # Defaults are not shared between calls
    load_config(str(config_path))["server"]["port"] = 1
    assert DEFAULT_CONFIG["server"]["port"] == 6969


@pytest.mark.parametrize("top", ["0", "-1", "many"])
def test_query_rejects_non_positive_top(docs, tmp_path, top):
    output = tmp_path / "index.json"
    assert cli_main.main(["index", str(docs), "--output", str(output)]) == 0
    with pytest.raises(SystemExit) as excinfo:
        cli_main.main(["query", str(output), "cat", "--top", top])
    assert excinfo.value.code == 2


def test_query_top_limits_results(docs, tmp_path, capsys):
    output = tmp_path / "index.json"
    assert cli_main.main(["index", str(docs), "--output", str(output)]) == 0
    capsys.readouterr()
    assert cli_main.main(["query", str(output), "dog", "--top", "1"]) == 0
    assert "Found 1 documents" in capsys.readouterr().out
