"""Unit tests for loading the harness configuration.

These tests write small YAML files into ``tmp_path`` and check the resulting
dataclasses, the environment overrides (``PROJECT``, ``PORT``, ``BASE_URL``
and ``CI``) and the validation errors raised for malformed values.

Usage
-----
Run ``pytest tests/test_config_loader.py -v``.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from docs_e2e.config import HarnessConfigError, load_harness_config

REPO_ROOT = Path(__file__).resolve().parents[1]


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "harness.yaml"
    path.write_text(body.strip() + "\n", encoding="utf-8")
    return path


def test_repository_config_loads() -> None:
    """The checked-in harness.yaml should parse with its documented values."""
    config = load_harness_config(REPO_ROOT / "config" / "harness.yaml", env={})
    assert config.server.root == Path("build/docs")
    assert config.server.port == 3000
    assert config.browser.name == "chromium"
    assert config.run.test_dir == Path("tests/e2e")
    assert config.base_url == "http://127.0.0.1:3000"
    assert config.uses_local_server


def test_defaults_apply_without_a_config_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """With no path and no default file, built-in defaults are used."""
    monkeypatch.chdir(tmp_path)
    config = load_harness_config(env={})
    assert config.server.host == "127.0.0.1"
    assert config.run.retries == 0
    assert config.run.workers == 4
    assert not config.ci


def test_explicit_missing_path_raises(tmp_path: Path) -> None:
    """An explicitly named file must exist."""
    with pytest.raises(FileNotFoundError, match="not found"):
        load_harness_config(tmp_path / "absent.yaml", env={})


def test_environment_overrides_file_values(tmp_path: Path) -> None:
    """PROJECT, PORT and BASE_URL take precedence over the YAML."""
    path = _write_config(
        tmp_path,
        """
server:
  root: site
  port: 3000
browser:
  base_url: http://file.invalid
""",
    )
    env = {"PROJECT": "out/docs", "PORT": "8081", "BASE_URL": "https://docs.example"}
    config = load_harness_config(path, env=env)
    assert config.server.root == Path("out/docs")
    assert config.server.port == 8081
    assert config.base_url == "https://docs.example"
    assert not config.uses_local_server


def test_ci_switches_scheduling_defaults(tmp_path: Path) -> None:
    """On CI the suites retry twice and run on one worker."""
    path = _write_config(tmp_path, "run: {}")
    config = load_harness_config(path, env={"CI": "true"})
    assert config.ci
    assert (config.run.retries, config.run.workers) == (2, 1)


def test_explicit_scheduling_beats_ci_defaults(tmp_path: Path) -> None:
    """Values written in the file win over the CI defaults."""
    path = _write_config(tmp_path, "run:\n  retries: 1\n  workers: 3")
    config = load_harness_config(path, env={"CI": "1"})
    assert (config.run.retries, config.run.workers) == (1, 3)


@pytest.mark.parametrize("value", ["0", "false", ""])
def test_falsy_ci_values_are_local(tmp_path: Path, value: str) -> None:
    """A CI variable set to a false-like value does not enable CI mode."""
    config = load_harness_config(_write_config(tmp_path, "{}"), env={"CI": value})
    assert not config.ci


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ("server: [1, 2]", "must be a mapping"),
        ("server:\n  port: abc", "must be an integer"),
        ("server:\n  port: 70000", "<= 65535"),
        ("run:\n  retries: -1", ">= 0"),
        ("run:\n  workers: 0", ">= 1"),
        ("browser:\n  headless: maybe", "must be a boolean"),
    ],
)
def test_malformed_values_raise(tmp_path: Path, body: str, message: str) -> None:
    """Invalid sections and values raise HarnessConfigError."""
    with pytest.raises(HarnessConfigError, match=message):
        load_harness_config(_write_config(tmp_path, body), env={})


def test_non_mapping_top_level_raises(tmp_path: Path) -> None:
    """The YAML document itself must be a mapping."""
    with pytest.raises(TypeError, match="mapping"):
        load_harness_config(_write_config(tmp_path, "- just\n- a list"), env={})


def test_pytest_args_reflect_configuration(tmp_path: Path) -> None:
    """The generated pytest command line carries every scheduling option."""
    path = _write_config(
        tmp_path,
        """
browser:
  name: firefox
  headless: false
run:
  test_dir: suites
  retries: 2
  workers: 3
  junit_xml: report.xml
""",
    )
    args = load_harness_config(path, env={"PORT": "4000"}).pytest_args()
    assert args[:3] == ["suites", "--browser", "firefox"]
    assert ["--base-url", "http://127.0.0.1:4000"] == args[3:5]
    assert "--headed" in args
    assert args[args.index("--reruns") + 1] == "2"
    assert args[args.index("-n") + 1] == "3"
    assert "--junitxml=report.xml" in args


def test_pytest_args_skip_default_scheduling(tmp_path: Path) -> None:
    """No reruns or xdist flags are emitted for single-shot serial runs."""
    path = _write_config(tmp_path, "run:\n  retries: 0\n  workers: 1\n  junit_xml: null")
    args = load_harness_config(path, env={}).pytest_args()
    assert "--reruns" not in args
    assert "-n" not in args
    assert not any(arg.startswith("--junitxml") for arg in args)
