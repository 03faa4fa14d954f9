#!/usr/bin/env python3
import logging
import os

import pytest

from app.cli import build_arg_parser, collect_inputs, is_up_to_date, main, run
from app.config import GeneratorConfig


@pytest.fixture
def ui_file(tmp_path, dialog_ui):
    path = tmp_path / "find_dialog.ui"
    path.write_text(dialog_ui, encoding="utf-8")
    return path


def _cfg(out_dir, **kw):
    return GeneratorConfig(output_directory=str(out_dir), **kw)


def test_arg_parser_defaults():
    args = build_arg_parser().parse_args(["form.ui"])
    cfg = GeneratorConfig.from_args(args)
    assert cfg.output_directory == "uigen"
    assert cfg.resolved_package_name() == "uigen"
    assert cfg.use_default_profile is True
    assert cfg.enum_profiles == []

    args = build_arg_parser().parse_args([
        "form.ui", "-o", "out/gen", "--package", "views", "--force",
        "--enum-profile", "a.yaml", "--enum-profile", "b.json", "--no-default-profile", "-q",
    ])
    cfg = GeneratorConfig.from_args(args)
    assert cfg.package_name == "views"
    assert cfg.force is True
    assert cfg.enum_profiles == ["a.yaml", "b.json"]
    assert cfg.use_default_profile is False
    assert cfg.quiet is True


def test_single_file(tmp_path, ui_file):
    out = tmp_path / "gen"
    assert main([str(ui_file), "-o", str(out)]) == 0
    code = (out / "find_dialog_ui.go").read_text(encoding="utf-8")
    assert "package gen\n" in code
    assert "type UIFindDialogDialog struct {" in code


def test_up_to_date_output_is_skipped(tmp_path, ui_file):
    out = tmp_path / "gen"
    cfg = _cfg(out)
    assert run(cfg, str(ui_file)) == 0
    go_path = out / "find_dialog_ui.go"
    go_path.write_text("stale marker", encoding="utf-8")
    ui_stat = os.stat(ui_file)
    os.utime(go_path, ns=(ui_stat.st_atime_ns, ui_stat.st_mtime_ns + 10**9))
    assert is_up_to_date(str(ui_file), str(go_path))

    assert run(cfg, str(ui_file)) == 0
    assert go_path.read_text(encoding="utf-8") == "stale marker"

    assert run(_cfg(out, force=True), str(ui_file)) == 0
    assert go_path.read_text(encoding="utf-8") != "stale marker"


def test_equal_mtime_is_not_up_to_date(tmp_path, ui_file):
    go_path = tmp_path / "x.go"
    go_path.write_text("", encoding="utf-8")
    ui_stat = os.stat(ui_file)
    os.utime(go_path, ns=(ui_stat.st_atime_ns, ui_stat.st_mtime_ns))
    assert not is_up_to_date(str(ui_file), str(go_path))


def test_directory_mode_filters_ui_files(tmp_path, dialog_ui, main_window_ui):
    src = tmp_path / "forms"
    src.mkdir()
    (src / "b_main.ui").write_text(main_window_ui, encoding="utf-8")
    (src / "a_dialog.ui").write_text(dialog_ui, encoding="utf-8")
    (src / "notes.txt").write_text("not a form", encoding="utf-8")
    (src / "sub").mkdir()
    (src / "sub" / "deep.ui").write_text(dialog_ui, encoding="utf-8")

    assert [os.path.basename(p) for p in collect_inputs(str(src))] == ["a_dialog.ui", "b_main.ui"]

    out = tmp_path / "uigen"
    assert run(_cfg(out), str(src)) == 0
    assert sorted(os.listdir(out)) == ["a_dialog_ui.go", "b_main_ui.go"]


def test_directory_mode_ignores_scaffold(tmp_path, dialog_ui, caplog):
    src = tmp_path / "forms"
    src.mkdir()
    (src / "d.ui").write_text(dialog_ui, encoding="utf-8")
    scaffold = tmp_path / "main.go"
    with caplog.at_level(logging.WARNING):
        assert run(_cfg(tmp_path / "out", scaffold_path=str(scaffold)), str(src)) == 0
    assert "--scaffold is ignored in directory mode" in caplog.text
    assert not scaffold.exists()


def test_single_file_scaffold(tmp_path, ui_file):
    scaffold = tmp_path / "cmd" / "main.go"
    cfg = _cfg(tmp_path / "uigen", scaffold_path=str(scaffold), scaffold_import_path="example.com/x/uigen")
    assert run(cfg, str(ui_file)) == 0
    code = scaffold.read_text(encoding="utf-8")
    assert '"example.com/x/uigen"' in code
    assert "uigen.UIFindDialogDialog" in code


def test_malformed_file_fails_but_others_are_written(tmp_path, dialog_ui, caplog):
    src = tmp_path / "forms"
    src.mkdir()
    (src / "bad.ui").write_text("<ui><class>X</class></ui>", encoding="utf-8")
    (src / "broken.ui").write_text("<ui><widget", encoding="utf-8")
    (src / "good.ui").write_text(dialog_ui, encoding="utf-8")
    out = tmp_path / "out"
    with caplog.at_level(logging.ERROR):
        assert run(_cfg(out), str(src)) == 1
    assert os.listdir(out) == ["good_ui.go"]
    assert "Failed to translate" in caplog.text


def test_missing_input_and_profile(tmp_path, ui_file):
    assert run(_cfg(tmp_path / "out"), str(tmp_path / "missing.ui")) == 1
    cfg = _cfg(tmp_path / "out", enum_profiles=[str(tmp_path / "nope.yaml")])
    assert run(cfg, str(ui_file)) == 1


def test_user_profile_resolves_enum(tmp_path, make_ui):
    profile = tmp_path / "mine.yaml"
    profile.write_text("enum_namespaces:\n  QCustomView: widgets\n", encoding="utf-8")
    ui = tmp_path / "custom.ui"
    ui.write_text(make_ui('<property name="mode"><enum>QCustomView::Fast</enum></property>'), encoding="utf-8")
    out = tmp_path / "gen"
    assert run(_cfg(out, enum_profiles=[str(profile)], use_default_profile=False), str(ui)) == 0
    code = (out / "custom_ui.go").read_text(encoding="utf-8")
    assert "Form.SetMode(widgets.QCustomView__Fast)" in code
