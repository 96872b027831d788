"""Tests for signpost.cli — entrypoint, argument parsing and route listing."""

import sys
import types

import pytest

from signpost.app import App
from signpost.cli import main


class TestCLIHelp:
    @pytest.mark.parametrize("argv", [["--help"], ["run", "--help"], ["routes", "--help"]])
    def test_help_exits_zero(self, argv: list[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 0

    @pytest.mark.parametrize("argv", [["run"], ["routes"]])
    def test_missing_app_exits_two(self, argv: list[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 2

    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "signpost" in capsys.readouterr().out


def _hello_app() -> App:
    app = App()

    @app.get("/")
    def index() -> str:
        return "Hello, Web!"

    @app.get("/name/:name", name="greet")
    def greet(name: str) -> str:
        return f"Hello, {name}!"

    @app.post("/name", json=True)
    def greet_json(body: dict) -> str:
        return f"Hello, {body['name']}!"

    return app


def _duplicate_app() -> App:
    app = App()
    app.get("/name/:name")(lambda name: name)
    app.get("/name/{name}")(lambda name: name)
    return app


@pytest.fixture
def _cli_module(monkeypatch: pytest.MonkeyPatch) -> None:
    mod = types.ModuleType("_signpost_cli_app")
    mod.app = _hello_app()  # type: ignore[attr-defined]
    mod.empty = App()  # type: ignore[attr-defined]
    mod.duplicate = _duplicate_app()  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_signpost_cli_app", mod)


@pytest.mark.usefixtures("_cli_module")
class TestRoutesCommand:
    def test_lists_routes_in_match_order(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_signpost_cli_app:app"])
        lines = capsys.readouterr().out.splitlines()

        assert lines[0].split() == ["METHOD", "PATH", "HANDLER"]
        assert set(lines[1]) == {"-"}
        assert lines[2].split() == ["GET", "/", "index"]
        assert lines[3].split() == ["GET", "/name/:name", "greet", "(greet)"]
        assert lines[4].split() == ["POST", "/name", "greet_json", "[json]"]

    def test_no_routes(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_signpost_cli_app:empty"])
        assert capsys.readouterr().out.strip() == "No routes registered."

    def test_configuration_error_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "_signpost_cli_app:duplicate"])
        assert exc_info.value.code == 1
        assert "already registered" in capsys.readouterr().err

    def test_unknown_module_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "nonexistent_module_xyz:app"])
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith("Error:")


@pytest.mark.usefixtures("_cli_module")
class TestRunCommand:
    def test_passes_overrides_to_dev_server(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple] = []

        def fake_run_dev_server(app: object, host: str, port: int, **kwargs: object) -> None:
            calls.append((app, host, port, kwargs))

        monkeypatch.setattr("signpost.server.dev.run_dev_server", fake_run_dev_server)
        main(["run", "_signpost_cli_app:app", "--port", "9000"])

        app, host, port, kwargs = calls[0]
        assert app is sys.modules["_signpost_cli_app"].app
        assert (host, port) == ("127.0.0.1", 9000)
        assert kwargs["app_path"] == "_signpost_cli_app:app"
        assert kwargs["log_level"] == "info"

    def test_port_zero_is_passed_through(self, monkeypatch: pytest.MonkeyPatch) -> None:
        ports: list[int] = []

        def fake_run_dev_server(app: object, host: str, port: int, **kwargs: object) -> None:
            ports.append(port)

        monkeypatch.setattr("signpost.server.dev.run_dev_server", fake_run_dev_server)
        main(["run", "_signpost_cli_app:app", "--port", "0"])

        assert ports == [0]

    def test_configuration_error_exits_one(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", "_signpost_cli_app:duplicate"])
        assert exc_info.value.code == 1
