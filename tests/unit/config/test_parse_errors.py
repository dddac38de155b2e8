from __future__ import annotations

from pathlib import Path

from wfam.config import (
    ERROR_HELP_REQUESTED,
    ERROR_INVALID_ARGUMENT,
    ERROR_INVALID_CONFIG,
    ERROR_MISSING_REQUIRED,
    ERROR_NO_ARGUMENTS,
    ERROR_UNKNOWN_ARGUMENT,
    parse_run_config,
)


def test_no_arguments_is_explicit_error(tmp_path: Path) -> None:
    result = parse_run_config([], cwd=tmp_path)

    assert not result.ok
    assert result.config is None
    assert result.error is not None
    assert result.error.code == ERROR_NO_ARGUMENTS
    assert "-h" in result.error.message


def test_help_flag_is_reported_as_help_request(tmp_path: Path) -> None:
    for flag in ("-h", "--help"):
        result = parse_run_config([flag], cwd=tmp_path)
        assert result.error is not None
        assert result.error.code == ERROR_HELP_REQUESTED


def test_unknown_parameter_is_reported(tmp_path: Path) -> None:
    result = parse_run_config(["-base", "b", "-unsorted", "u", "-bogus"], cwd=tmp_path)

    assert result.error is not None
    assert result.error.code == ERROR_UNKNOWN_ARGUMENT
    assert "-bogus" in result.error.message


def test_flag_without_value_is_invalid_argument(tmp_path: Path) -> None:
    result = parse_run_config(["-unsorted", "u", "-base"], cwd=tmp_path)

    assert result.error is not None
    assert result.error.code == ERROR_INVALID_ARGUMENT
    assert "-base" in result.error.message


def test_invalid_name_case_choice_is_invalid_argument(tmp_path: Path) -> None:
    result = parse_run_config(
        ["-base", "b", "-unsorted", "u", "--name-case", "mixed"], cwd=tmp_path
    )

    assert result.error is not None
    assert result.error.code == ERROR_INVALID_ARGUMENT


def test_missing_unsorted_is_missing_required(tmp_path: Path) -> None:
    result = parse_run_config(["-base", "b"], cwd=tmp_path)

    assert result.error is not None
    assert result.error.code == ERROR_MISSING_REQUIRED
    assert "-unsorted" in result.error.message


def test_missing_base_is_missing_required(tmp_path: Path) -> None:
    result = parse_run_config(["-unsorted", "u"], cwd=tmp_path)

    assert result.error is not None
    assert result.error.code == ERROR_MISSING_REQUIRED
    assert "-base" in result.error.message


def test_invalid_config_field_type_is_invalid_config(tmp_path: Path) -> None:
    (tmp_path / "wfam.toml").write_text(
        "\n".join(
            [
                "[scan]",
                'extensions = ".jpg"',
            ]
        ),
        encoding="utf-8",
    )

    result = parse_run_config(["-base", "b", "-unsorted", "u"], cwd=tmp_path)

    assert result.error is not None
    assert result.error.code == ERROR_INVALID_CONFIG
    assert "scan.extensions" in result.error.message


def test_invalid_section_type_is_invalid_config(tmp_path: Path) -> None:
    (tmp_path / "wfam.toml").write_text('output = "not-a-table"\n', encoding="utf-8")

    result = parse_run_config(["-base", "b", "-unsorted", "u"], cwd=tmp_path)

    assert result.error is not None
    assert result.error.code == ERROR_INVALID_CONFIG
    assert "section 'output'" in result.error.message


def test_malformed_toml_is_invalid_config(tmp_path: Path) -> None:
    (tmp_path / "wfam.toml").write_text("[scan\n", encoding="utf-8")

    result = parse_run_config(["-base", "b", "-unsorted", "u"], cwd=tmp_path)

    assert result.error is not None
    assert result.error.code == ERROR_INVALID_CONFIG


def test_explicit_config_file_must_exist(tmp_path: Path) -> None:
    result = parse_run_config(
        ["-base", "b", "-unsorted", "u", "--config", str(tmp_path / "absent.toml")],
        cwd=tmp_path,
    )

    assert result.error is not None
    assert result.error.code == ERROR_INVALID_CONFIG
    assert "absent.toml" in result.error.message
