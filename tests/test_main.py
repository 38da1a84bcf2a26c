import sys

import pytest

import goverter
from goverter import main as goverter_main
from goverter.cli import usage

pytestmark = pytest.mark.usefixtures("test_env_file")


def run_main(argv: list[str]):
    try:
        goverter_main(argv)
    except SystemExit as exc:
        return exc.code
    return 0


def test_main_hands_config_to_engine(fake_engines, capsys):
    """Ensures main() passes the parsed config to the engine named in .env.

    Why: the entry point is only glue; the engine must receive exactly what the
    parser produced, and a successful run must not print anything.
    """
    received = []
    fake_engines["fake"] = received.append

    code = run_main(["goverter", "gen", "-g", "skipCopySameType", "./pkg"])

    assert code == 0
    assert len(received) == 1
    assert received[0].package_patterns == ["./pkg"]
    assert received[0].global_settings.lines == ["skipCopySameType"]
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_main_help_goes_to_stdout(capsys):
    code = run_main(["goverter", "help"])
    assert code == 0
    assert capsys.readouterr().out == usage("goverter") + "\n"


def test_main_version(monkeypatch, capsys):
    monkeypatch.setattr("goverter.version.version", lambda name: "9.9.9")
    code = run_main(["goverter", "version"])
    assert code == 0
    assert capsys.readouterr().out == "goverter 9.9.9\n"


@pytest.mark.parametrize(
    "argv,message",
    [
        (["goverter"], "Error: missing command"),
        (["goverter", "gen"], "Error: missing PATTERN"),
        (["goverter", "frobnicate"], "Error: unknown command frobnicate"),
    ],
)
def test_main_usage_errors_exit_nonzero(argv, message, capsys):
    """Usage errors print message and usage to stderr and exit with 1.

    Why: scripts rely on the exit status to detect a bad invocation, and the
    usage text must not end up in stdout where it could be mistaken for output.
    """
    code = run_main(argv)
    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert captured.err.startswith(message + "\n")
    assert usage("goverter") in captured.err


def test_main_engine_failure(fake_engines, capsys):
    def failing(config):
        raise ValueError("converter Convert: unsupported type")

    fake_engines["fake"] = failing

    code = run_main(["goverter", "gen", "./pkg"])
    assert code == 1
    assert capsys.readouterr().err == "error: converter Convert: unsupported type\n"


def test_main_missing_engine(fake_engines, capsys):
    fake_engines["other"] = lambda config: None

    code = run_main(["goverter", "gen", "./pkg"])
    err = capsys.readouterr().err
    assert code == 1
    assert "no generation engine named 'fake'" in err
    assert "installed: other" in err


def test_main_verbose_dumps_config(fake_engines, monkeypatch, capsys):
    monkeypatch.setenv("GOVERTER_VERBOSE", "yes")
    fake_engines["fake"] = lambda config: None

    code = run_main(["goverter", "gen", "-cwd", "/src", "./pkg"])
    err = capsys.readouterr().err
    assert code == 0
    assert err.startswith("Config:\n")
    assert "'working_dir': '/src'" in err


def test_main_defaults_to_sys_argv(fake_engines, monkeypatch):
    received = []
    fake_engines["fake"] = received.append
    monkeypatch.setattr(sys, "argv", ["goverter", "gen", "./a", "./b"])

    goverter_main()

    assert received[0].package_patterns == ["./a", "./b"]


def test_main_loads_dotenv_before_parsing(monkeypatch, fake_engines):
    order = []

    def fake_load_dotenv(path):  # noqa: ARG001 - signature matches load_dotenv
        order.append("dotenv")
        return True

    fake_engines["default"] = lambda config: order.append("engine")
    monkeypatch.setattr(goverter, "load_dotenv", fake_load_dotenv)

    run_main(["goverter", "gen", "./pkg"])
    assert order == ["dotenv", "engine"]
