"""Configuration loading, deterministic merge order and explicit parse results."""

from __future__ import annotations

import argparse
import os
import tomllib
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

from wfam.scan.models import NAME_CASE_CHOICES, ExtensionFilter

CONFIG_FILE_NAME = "wfam.toml"

PARAM_BASE = "-base"
PARAM_UNSORTED = "-unsorted"
PARAM_EXT = "-ext"
PARAM_MISS = "-miss"
PARAM_DIFF = "-diff"

ERROR_NO_ARGUMENTS = "NO_ARGUMENTS"
ERROR_HELP_REQUESTED = "HELP_REQUESTED"
ERROR_UNKNOWN_ARGUMENT = "UNKNOWN_ARGUMENT"
ERROR_INVALID_ARGUMENT = "INVALID_ARGUMENT"
ERROR_MISSING_REQUIRED = "MISSING_REQUIRED"
ERROR_INVALID_CONFIG = "INVALID_CONFIG"


@dataclass(slots=True, frozen=True)
class ScanConfig:
    """What to compare and how names are matched."""

    base_pattern: str | None
    unsorted_path: str | None
    extensions: ExtensionFilter
    name_case: str
    sort_entries: bool


@dataclass(slots=True, frozen=True)
class OutputConfig:
    """Where results and run records are written."""

    missing_path: Path | None
    different_path: Path | None
    audit_log: Path | None


@dataclass(slots=True, frozen=True)
class RunConfig:
    """Fully merged run configuration."""

    scan: ScanConfig
    output: OutputConfig
    verbose: bool = False

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot for audit records."""
        return {
            "scan": {
                "base_pattern": self.scan.base_pattern,
                "unsorted_path": self.scan.unsorted_path,
                "extensions": sorted(self.scan.extensions.extensions),
                "name_case": self.scan.name_case,
                "sort_entries": self.scan.sort_entries,
            },
            "output": {
                "missing_path": _optional_str(self.output.missing_path),
                "different_path": _optional_str(self.output.different_path),
                "audit_log": _optional_str(self.output.audit_log),
            },
            "verbose": self.verbose,
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Command-line values applied at highest precedence."""

    config_file: Path | None = None
    base_pattern: str | None = None
    unsorted_path: str | None = None
    extensions: str | None = None
    missing_path: str | None = None
    different_path: str | None = None
    audit_log: str | None = None
    name_case: str | None = None
    sort_entries: bool | None = None
    verbose: bool = False


@dataclass(slots=True, frozen=True)
class ConfigError:
    """Explicit configuration failure reported by the entry point."""

    code: str
    message: str


@dataclass(slots=True, frozen=True)
class ConfigResult:
    """Either a usable configuration or the reason there is none."""

    config: RunConfig | None = None
    error: ConfigError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.config is not None


class _ArgumentError(Exception):
    """Raised by the parser instead of exiting the process."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise _ArgumentError(message)


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for run configuration."""
    parser = _ArgumentParser(prog="wfam", add_help=False, allow_abbrev=False)
    parser.add_argument("-h", "--help", action="store_true", default=False)
    parser.add_argument(PARAM_BASE, "--base", dest="base", default=None)
    parser.add_argument(PARAM_UNSORTED, "--unsorted", dest="unsorted", default=None)
    parser.add_argument(PARAM_EXT, "--ext", dest="ext", default=None)
    parser.add_argument(PARAM_MISS, "--miss", dest="miss", default=None)
    parser.add_argument(PARAM_DIFF, "--diff", dest="diff", default=None)
    parser.add_argument("--config", dest="config", default=None)
    parser.add_argument("--name-case", dest="name_case", choices=NAME_CASE_CHOICES, default=None)
    parser.add_argument("--sorted", dest="sort_entries", action="store_true", default=None)
    parser.add_argument("--audit-log", dest="audit_log", default=None)
    parser.add_argument("-v", "--verbose", dest="verbose", action="store_true", default=False)
    return parser


def usage_lines() -> list[str]:
    """Return help text lines for the command line."""
    return [
        f"wfam {PARAM_BASE} <BASE_FOLDER> {PARAM_UNSORTED} <UNSORTED_FOLDER>",
        f"wfam {PARAM_BASE} <BASE_FOLDER> {PARAM_UNSORTED} <UNSORTED_FOLDER> {PARAM_EXT} <EXT_LIST>",
        f"wfam {PARAM_BASE} <BASE_FOLDER> {PARAM_UNSORTED} <UNSORTED_FOLDER> {PARAM_EXT} <EXT_LIST> "
        f"{PARAM_MISS} <MISSING_FILE_LIST> {PARAM_DIFF} <DIFFERENCE_FILE_LIST>",
        "Where",
        "\t<BASE_FOLDER> is root of sorted file storage, i.e. photos by date;"
        " '*' and '?' select several folders at one depth",
        "\t<UNSORTED_FOLDER> is a root of files to check for presence in <BASE_FOLDER>",
        "\t<EXT_LIST> is an optional comma-separated list of extensions to process, i.e. .jpg,.jpeg",
        "\t<MISSING_FILE_LIST> is an optional name of file to save list of missing files into",
        "\t<DIFFERENCE_FILE_LIST> is an optional name of file to save list of files"
        " which are present but different into",
        "Options",
        f"\t--config <TOML> reads settings from a file instead of ./{CONFIG_FILE_NAME}",
        "\t--name-case auto|sensitive|insensitive controls file name matching (default auto)",
        "\t--sorted processes directory entries in name order",
        "\t--audit-log <JSONL> appends one record per run",
        "\t-v, --verbose traces scanning to stderr",
    ]


def default_config() -> RunConfig:
    """Build the built-in defaults."""
    return RunConfig(
        scan=ScanConfig(
            base_pattern=None,
            unsorted_path=None,
            extensions=ExtensionFilter(),
            name_case="auto",
            sort_entries=False,
        ),
        output=OutputConfig(missing_path=None, different_path=None, audit_log=None),
    )


def expand_path_text(value: str) -> str:
    """Expand environment variables and a leading '~'."""
    return os.path.expanduser(os.path.expandvars(value))


def load_config_file(path: Path, *, required: bool) -> dict[str, object]:
    """Load a TOML config file; a missing optional file yields no settings."""
    if not path.exists():
        if required:
            raise ValueError(f"Config file '{path}' does not exist.")
        return {}
    with path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{path.name} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _optional_string(table: dict[str, object], section: str, field: str) -> str | None:
    value = table.get(field)
    if value is None:
        return None
    if not isinstance(value, str) or not value:
        raise ValueError(f"Config field '{section}.{field}' must be a non-empty string.")
    return value


def _tuple_of_strings(value: object, section: str, field: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError(f"Config field '{section}.{field}' must be a list of strings.")
    output: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"Config field '{section}.{field}' must contain only strings.")
        output.append(item)
    return tuple(output)


def _name_case(value: object, name: str) -> str:
    if not isinstance(value, str) or value not in NAME_CASE_CHOICES:
        raise ValueError(f"Config field '{name}' must be one of {', '.join(NAME_CASE_CHOICES)}.")
    return value


def _optional_path(value: str | None) -> Path | None:
    if value is None:
        return None
    return Path(expand_path_text(value))


def _optional_str(value: Path | None) -> str | None:
    return str(value) if value is not None else None


def merge_config(
    base: RunConfig, file_payload: dict[str, object], overrides: CliOverrides
) -> RunConfig:
    """Merge defaults, config file, then command-line overrides."""
    scan_payload = _get_table(file_payload, "scan")
    output_payload = _get_table(file_payload, "output")

    extensions = base.scan.extensions
    if "extensions" in scan_payload:
        extensions = ExtensionFilter.from_iterable(
            _tuple_of_strings(scan_payload["extensions"], "scan", "extensions")
        )
    name_case = base.scan.name_case
    if "name_case" in scan_payload:
        name_case = _name_case(scan_payload["name_case"], "scan.name_case")
    sort_entries = base.scan.sort_entries
    if "sorted" in scan_payload:
        raw_sorted = scan_payload["sorted"]
        if not isinstance(raw_sorted, bool):
            raise ValueError("Config field 'scan.sorted' must be a boolean.")
        sort_entries = raw_sorted

    merged = RunConfig(
        scan=ScanConfig(
            base_pattern=_optional_string(scan_payload, "scan", "base") or base.scan.base_pattern,
            unsorted_path=(
                _optional_string(scan_payload, "scan", "unsorted") or base.scan.unsorted_path
            ),
            extensions=extensions,
            name_case=name_case,
            sort_entries=sort_entries,
        ),
        output=OutputConfig(
            missing_path=(
                _optional_path(_optional_string(output_payload, "output", "missing"))
                or base.output.missing_path
            ),
            different_path=(
                _optional_path(_optional_string(output_payload, "output", "different"))
                or base.output.different_path
            ),
            audit_log=(
                _optional_path(_optional_string(output_payload, "output", "audit_log"))
                or base.output.audit_log
            ),
        ),
        verbose=base.verbose,
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: RunConfig, overrides: CliOverrides) -> RunConfig:
    """Apply command-line values at highest precedence and expand path variables."""
    base_pattern = overrides.base_pattern or config.scan.base_pattern
    unsorted_path = overrides.unsorted_path or config.scan.unsorted_path
    extensions = config.scan.extensions
    if overrides.extensions is not None:
        extensions = ExtensionFilter.parse(overrides.extensions)
    name_case = config.scan.name_case
    if overrides.name_case is not None:
        name_case = _name_case(overrides.name_case, "overrides.name_case")
    sort_entries = (
        overrides.sort_entries if overrides.sort_entries is not None else config.scan.sort_entries
    )
    return RunConfig(
        scan=ScanConfig(
            base_pattern=expand_path_text(base_pattern) if base_pattern else None,
            unsorted_path=expand_path_text(unsorted_path) if unsorted_path else None,
            extensions=extensions,
            name_case=name_case,
            sort_entries=sort_entries,
        ),
        output=OutputConfig(
            missing_path=_optional_path(overrides.missing_path) or config.output.missing_path,
            different_path=(
                _optional_path(overrides.different_path) or config.output.different_path
            ),
            audit_log=_optional_path(overrides.audit_log) or config.output.audit_log,
        ),
        verbose=overrides.verbose or config.verbose,
    )


def load_effective_config(overrides: CliOverrides, cwd: Path | None = None) -> RunConfig:
    """Load effective config using merge order defaults -> config file -> overrides."""
    if overrides.config_file is not None:
        payload = load_config_file(overrides.config_file, required=True)
    else:
        payload = load_config_file((cwd or Path.cwd()) / CONFIG_FILE_NAME, required=False)
    return merge_config(default_config(), payload, overrides)


def parse_run_config(argv: Sequence[str], cwd: Path | None = None) -> ConfigResult:
    """Parse command-line arguments into a config or an explicit error result."""
    if not argv:
        return ConfigResult(
            error=ConfigError(ERROR_NO_ARGUMENTS, "No parameters provided. Use -h for help.")
        )
    parser = build_arg_parser()
    try:
        args, unknown = parser.parse_known_args(list(argv))
    except _ArgumentError as exc:
        return ConfigResult(error=ConfigError(ERROR_INVALID_ARGUMENT, str(exc)))
    if args.help:
        return ConfigResult(error=ConfigError(ERROR_HELP_REQUESTED, "Help requested."))
    if unknown:
        return ConfigResult(
            error=ConfigError(
                ERROR_UNKNOWN_ARGUMENT, f"Unknown command-line parameter: {unknown[0]}"
            )
        )

    overrides = CliOverrides(
        config_file=Path(expand_path_text(args.config)) if args.config is not None else None,
        base_pattern=args.base,
        unsorted_path=args.unsorted,
        extensions=args.ext,
        missing_path=args.miss,
        different_path=args.diff,
        audit_log=args.audit_log,
        name_case=args.name_case,
        sort_entries=args.sort_entries,
        verbose=args.verbose,
    )
    try:
        config = load_effective_config(overrides, cwd=cwd)
    except (OSError, ValueError) as exc:
        return ConfigResult(error=ConfigError(ERROR_INVALID_CONFIG, str(exc)))

    if not config.scan.base_pattern:
        return ConfigResult(
            error=ConfigError(
                ERROR_MISSING_REQUIRED, f"Command-line parameter {PARAM_BASE} needs path"
            )
        )
    if not config.scan.unsorted_path:
        return ConfigResult(
            error=ConfigError(
                ERROR_MISSING_REQUIRED, f"Command-line parameter {PARAM_UNSORTED} needs path"
            )
        )
    return ConfigResult(config=config)
