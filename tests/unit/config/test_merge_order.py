from __future__ import annotations

from pathlib import Path

import pytest

from wfam.config import CliOverrides, default_config, merge_config, parse_run_config


def test_defaults_when_only_required_flags_given(tmp_path: Path) -> None:
    result = parse_run_config(["-base", "/b", "-unsorted", "/u"], cwd=tmp_path)

    assert result.ok
    config = result.config
    assert config is not None
    assert config.scan.base_pattern == "/b"
    assert config.scan.unsorted_path == "/u"
    assert not config.scan.extensions.active
    assert config.scan.name_case == "auto"
    assert config.scan.sort_entries is False
    assert config.output.missing_path is None
    assert config.output.different_path is None
    assert config.output.audit_log is None
    assert config.verbose is False


def test_merge_order_defaults_then_file_then_cli(tmp_path: Path) -> None:
    (tmp_path / "wfam.toml").write_text(
        "\n".join(
            [
                "[scan]",
                'base = "/archive/photos/20*"',
                'unsorted = "/camera"',
                'extensions = [".jpg", ".jpeg"]',
                'name_case = "insensitive"',
                "sorted = true",
                "",
                "[output]",
                'missing = "from-file-missing.txt"',
                'different = "from-file-different.txt"',
            ]
        ),
        encoding="utf-8",
    )

    result = parse_run_config(["-unsorted", "/card", "-ext", ".png", "-miss", "m.txt"], cwd=tmp_path)

    config = result.config
    assert config is not None
    assert config.scan.base_pattern == "/archive/photos/20*"
    assert config.scan.unsorted_path == "/card"
    assert config.scan.extensions.extensions == frozenset({".png"})
    assert config.scan.name_case == "insensitive"
    assert config.scan.sort_entries is True
    assert config.output.missing_path == Path("m.txt")
    assert config.output.different_path == Path("from-file-different.txt")


def test_explicit_config_file_replaces_working_directory_file(tmp_path: Path) -> None:
    (tmp_path / "wfam.toml").write_text('[scan]\nbase = "/ignored"\n', encoding="utf-8")
    other = tmp_path / "other.toml"
    other.write_text('[scan]\nbase = "/chosen"\nunsorted = "/u"\n', encoding="utf-8")

    result = parse_run_config(["--config", str(other)], cwd=tmp_path)

    assert result.config is not None
    assert result.config.scan.base_pattern == "/chosen"


def test_cli_flags_and_long_spellings(tmp_path: Path) -> None:
    result = parse_run_config(
        [
            "--base",
            "/b",
            "--unsorted",
            "/u",
            "--diff",
            "d.txt",
            "--name-case",
            "sensitive",
            "--sorted",
            "--audit-log",
            "audit.jsonl",
            "-v",
        ],
        cwd=tmp_path,
    )

    config = result.config
    assert config is not None
    assert config.output.different_path == Path("d.txt")
    assert config.output.audit_log == Path("audit.jsonl")
    assert config.scan.name_case == "sensitive"
    assert config.scan.sort_entries is True
    assert config.verbose is True


def test_environment_variables_are_expanded_in_paths(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("WFAM_ARCHIVE", "/archive")
    monkeypatch.setenv("WFAM_OUT", "/reports")

    result = parse_run_config(
        ["-base", "$WFAM_ARCHIVE/20*", "-unsorted", "${WFAM_ARCHIVE}/new", "-miss", "$WFAM_OUT/m.txt"],
        cwd=tmp_path,
    )

    config = result.config
    assert config is not None
    assert config.scan.base_pattern == "/archive/20*"
    assert config.scan.unsorted_path == "/archive/new"
    assert config.output.missing_path == Path("/reports/m.txt")


def test_merge_config_rejects_non_boolean_sorted() -> None:
    with pytest.raises(ValueError, match="scan.sorted"):
        merge_config(default_config(), {"scan": {"sorted": "yes"}}, CliOverrides())


def test_public_dict_snapshot() -> None:
    config = merge_config(
        default_config(),
        {"scan": {"base": "/b", "unsorted": "/u", "extensions": [".JPG", "raw"]}},
        CliOverrides(),
    )

    snapshot = config.to_public_dict()

    assert snapshot["scan"] == {
        "base_pattern": "/b",
        "unsorted_path": "/u",
        "extensions": [".jpg"],
        "name_case": "auto",
        "sort_entries": False,
    }
    assert snapshot["output"] == {"missing_path": None, "different_path": None, "audit_log": None}
