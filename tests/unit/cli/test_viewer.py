"""Tests for the notes viewer app wiring."""

from __future__ import annotations

from pathlib import Path


def test_viewer_module_is_importable() -> None:
    """Viewer module can be imported without side effects."""
    from cuinotes.cli.viewer import ViewerApp

    assert ViewerApp is not None


def test_viewer_app_uses_given_config(tmp_path: Path) -> None:
    from cuinotes.cli.viewer import ViewerApp
    from cuinotes.config.schema import ViewerConfig

    config = ViewerConfig(large_file_threshold=10)
    app = ViewerApp(notes_dir=tmp_path, config=config)

    assert app.notes_dir == tmp_path
    assert app.manager.config is config
    assert app.manager.session is None


def test_viewer_app_defaults_config(tmp_path: Path) -> None:
    from cuinotes.cli.viewer import ViewerApp

    app = ViewerApp(notes_dir=tmp_path)

    assert app.config.large_file_threshold == 1024 * 1024


def test_version_flag_prints_package_version(monkeypatch, capsys) -> None:
    import pytest

    from cuinotes import __version__
    from cuinotes.cli import viewer

    monkeypatch.setattr("sys.argv", ["cuinotes", "--version"])

    with pytest.raises(SystemExit) as exc_info:
        viewer.main()

    assert exc_info.value.code == 0
    assert capsys.readouterr().out.strip() == f"cuinotes {__version__}"
