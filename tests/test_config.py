from __future__ import annotations

import logging

import pytest

from rustlens.config import LocalConfig, load_config
from rustlens.errors import IoFailure


def test_defaults_without_file(tmp_path) -> None:
    config = load_config(tmp_path)
    assert config == LocalConfig()
    assert config.model_name == "all-MiniLM-L12-v2"
    assert config.exclude_dirs == ["target", ".git"]
    assert config.top_k == 5
    assert config.skip_unparsable is False


def test_load_section_from_default_file(tmp_path) -> None:
    (tmp_path / ".rustlens.yaml").write_text(
        "rustlens:\n  top_k: 10\n  skip_unparsable: true\n  exclude_dirs: [target, vendor]\n",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.top_k == 10
    assert config.skip_unparsable is True
    assert config.exclude_dirs == ["target", "vendor"]
    assert config.model_name == "all-MiniLM-L12-v2"


def test_explicit_path(tmp_path) -> None:
    path = tmp_path / "custom.yaml"
    path.write_text("rustlens:\n  model_name: all-MiniLM-L6-v2\n", encoding="utf-8")
    assert load_config(tmp_path / "elsewhere", path).model_name == "all-MiniLM-L6-v2"


def test_missing_explicit_path_fails(tmp_path) -> None:
    with pytest.raises(IoFailure):
        load_config(tmp_path, tmp_path / "missing.yaml")


def test_missing_section_and_empty_file(tmp_path) -> None:
    path = tmp_path / ".rustlens.yaml"
    path.write_text("other:\n  top_k: 3\n", encoding="utf-8")
    assert load_config(tmp_path) == LocalConfig()

    path.write_text("", encoding="utf-8")
    assert load_config(tmp_path) == LocalConfig()


def test_malformed_yaml_falls_back_to_defaults(tmp_path, caplog) -> None:
    (tmp_path / ".rustlens.yaml").write_text("rustlens: [unclosed\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="rustlens.config"):
        config = load_config(tmp_path)

    assert config == LocalConfig()
    assert "Using defaults" in caplog.text


def test_unknown_keys_are_ignored(tmp_path, caplog) -> None:
    (tmp_path / ".rustlens.yaml").write_text("rustlens:\n  top_k: 2\n  colour: blue\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="rustlens.config"):
        config = load_config(tmp_path)

    assert config.top_k == 2
    assert "colour" in caplog.text


@pytest.mark.parametrize("section", ["5", "[top_k, 3]", "just text"])
def test_non_mapping_section_falls_back_to_defaults(tmp_path, caplog, section) -> None:
    (tmp_path / ".rustlens.yaml").write_text(f"rustlens: {section}\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="rustlens.config"):
        config = load_config(tmp_path)

    assert config == LocalConfig()
    assert "not a mapping" in caplog.text


def test_empty_section_gives_defaults(tmp_path) -> None:
    (tmp_path / ".rustlens.yaml").write_text("rustlens:\n", encoding="utf-8")
    assert load_config(tmp_path) == LocalConfig()


def test_invalid_values_keep_defaults(tmp_path, caplog) -> None:
    (tmp_path / ".rustlens.yaml").write_text(
        "rustlens:\n"
        "  top_k: five\n"
        "  embed_retries: 0\n"
        "  skip_unparsable: maybe\n"
        "  exclude_dirs: target\n"
        "  embed_retry_wait: true\n"
        "  model_name: all-MiniLM-L6-v2\n",
        encoding="utf-8",
    )

    with caplog.at_level(logging.WARNING, logger="rustlens.config"):
        config = load_config(tmp_path)

    assert config.top_k == 5
    assert config.embed_retries == 3
    assert config.skip_unparsable is False
    assert config.exclude_dirs == ["target", ".git"]
    assert config.embed_retry_wait == 1.0
    assert config.model_name == "all-MiniLM-L6-v2"
    assert "'five'" in caplog.text
    assert "top_k" in caplog.text


def test_negative_top_k_is_rejected(tmp_path) -> None:
    (tmp_path / ".rustlens.yaml").write_text("rustlens:\n  top_k: -1\n", encoding="utf-8")
    assert load_config(tmp_path).top_k == 5


def test_integer_retry_wait_is_stored_as_float(tmp_path) -> None:
    (tmp_path / ".rustlens.yaml").write_text("rustlens:\n  embed_retry_wait: 2\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.embed_retry_wait == 2.0
    assert isinstance(config.embed_retry_wait, float)
