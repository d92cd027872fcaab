"""Tests for safe_router._cli — argument parsing and command dispatch."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from safe_router._cli import _HANDLER_NAME, _build_parser, main


@pytest.fixture(autouse=True)
def _reset_cli_logging():
    """Drop the handler main() installs so it never outlives a test's stderr."""
    yield
    package_logger = logging.getLogger("safe_router")
    for handler in list(package_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


class TestBuildParser:
    """_build_parser — CLI argument parsing."""

    def test_generate_defaults(self) -> None:
        args = _build_parser().parse_args(["generate"])
        assert args.command == "generate"
        assert args.root == "."
        # Unset flags stay None so config-file values win
        assert args.project_type is None
        assert args.out is None
        assert args.mode is None
        assert args.watch is None
        assert args.routes_dir is None
        assert args.debounce_ms is None
        assert args.verbose is False

    def test_short_flags(self) -> None:
        args = _build_parser().parse_args([
            "generate", "-r", "web", "-t", "next-app", "-o", "types.d.ts", "-m", "flat", "-w", "-v",
        ])
        assert args.root == "web"
        assert args.project_type == "next-app"
        assert args.out == "types.d.ts"
        assert args.mode == "flat"
        assert args.watch is True
        assert args.verbose is True

    def test_long_flags(self) -> None:
        args = _build_parser().parse_args([
            "generate", "--type", "next-page", "--routes-dir", "src/pages", "--debounce", "300",
        ])
        assert args.project_type == "next-page"
        assert args.routes_dir == "src/pages"
        assert args.debounce_ms == 300

    def test_invalid_type_rejected(self) -> None:
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["generate", "--type", "vue"])

    def test_invalid_mode_rejected(self) -> None:
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["generate", "--mode", "tree"])


class TestMain:
    """main() — dispatch and exit codes."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 0
        assert "generate" in capsys.readouterr().out

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        from safe_router import __version__

        with pytest.raises(SystemExit):
            main(["--version"])
        assert __version__ in capsys.readouterr().out

    def test_generate(self, next_app_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["generate", "--root", str(next_app_project), "--type", "next-app", "--mode", "flat"])
        artifact = next_app_project / "generated" / "routes.d.ts"
        assert artifact.is_file()
        assert '"/user/$id/posts/$postId"' in artifact.read_text()
        err = capsys.readouterr().err
        assert "safe-router" in err
        assert "3 routes written" in err

    def test_generate_reads_config_file(self, next_page_project: Path) -> None:
        (next_page_project / "safe-router.yaml").write_text("type: next-page\nout: types/routes.d.ts\n")
        main(["generate", "-r", str(next_page_project)])
        assert (next_page_project / "types" / "routes.d.ts").is_file()

    def test_flags_override_config_file(self, next_app_project: Path) -> None:
        (next_app_project / "safe-router.yaml").write_text("type: next-app\nmode: hierarchy\n")
        main(["generate", "-r", str(next_app_project), "-m", "flat"])
        text = (next_app_project / "generated" / "routes.d.ts").read_text()
        assert "RouteTree" not in text

    def test_conflict_exits_nonzero(
        self, make_tree, capsys: pytest.CaptureFixture[str],
    ) -> None:
        root = make_tree(["app/(a)/x/page.tsx", "app/(b)/x/page.tsx"])
        with pytest.raises(SystemExit) as excinfo:
            main(["generate", "-r", str(root), "-t", "next-app"])
        assert excinfo.value.code == 1
        err = capsys.readouterr().err
        assert "Conflicting route '/x'" in err
        assert "(a)" in err
        assert "(b)" in err

    def test_missing_routes_root_exits_nonzero(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["generate", "-r", str(tmp_path), "-t", "next-app"])
        assert excinfo.value.code == 1
        assert "Routes root not found" in capsys.readouterr().err

    def test_bad_config_file_exits_nonzero(self, tmp_path: Path) -> None:
        (tmp_path / "safe-router.yaml").write_text("bogus: 1\n")
        with pytest.raises(SystemExit) as excinfo:
            main(["generate", "-r", str(tmp_path)])
        assert excinfo.value.code == 1

    def test_verbose_enables_debug(self, next_app_project: Path) -> None:
        main(["generate", "-r", str(next_app_project), "-t", "next-app", "-v"])
        assert logging.getLogger("safe_router").level == logging.DEBUG

    def test_watch_interrupted_exits_cleanly(
        self, next_app_project: Path, monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        import safe_router._cli as cli

        def interrupted(coro):
            coro.close()
            raise KeyboardInterrupt

        monkeypatch.setattr(cli.asyncio, "run", interrupted)
        main(["generate", "-r", str(next_app_project), "-t", "next-app", "--watch"])
        assert "0 passes: 0 completed" in capsys.readouterr().err

    def test_watch_prints_session_summary(
        self, next_app_project: Path, monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        import safe_router.app as app

        async def one_pass(*, config, log):
            job = app.GenerationJob(output=config.output_path, mode=config.mode, generation=1)
            yield app.run_pass(config, job, log=log)

        monkeypatch.setattr(app, "watch", one_pass)
        main(["generate", "-r", str(next_app_project), "-t", "next-app", "--watch"])
        err = capsys.readouterr().err
        assert "3 routes written" in err
        assert "1 pass: 1 completed" in err
