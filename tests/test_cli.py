"""Smoke tests for the main.py CLI - the orchestrator is mocked."""

import pytest
from unittest.mock import patch

import main
from core.state import GeneratedFile, PipelineStage


def _final(code="<!DOCTYPE html><html><body>ok</body></html>", error=None):
    if error:
        return PipelineStage(stage="complete", progress=100, error=error, error_kind="CollaboratorTimeout")
    files = (GeneratedFile(path="index.html", content=code, language="html"),)
    return PipelineStage(stage="complete", progress=100, code=code, files=files)


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc:
        main.main([])
    assert exc.value.code == 1
    assert "usage" in capsys.readouterr().out.lower()


def test_stacks(capsys):
    main.main(["stacks"])
    out = capsys.readouterr().out
    assert "html" in out
    assert "svelte" in out


def test_generate_requires_source():
    with pytest.raises(SystemExit):
        main.main(["generate", "--stack", "html"])


@patch("main.Orchestrator")
def test_generate_from_prompt_prints_code(mock_cls, capsys):
    mock_cls.return_value.run_from_text.return_value = _final()
    main.main(["generate", "--prompt", "A landing page for a bakery"])
    out = capsys.readouterr().out
    assert "<body>ok</body>" in out
    config = mock_cls.return_value.run_from_text.call_args.args[0]
    assert config.text_prompt == "A landing page for a bakery"
    assert config.tech_stack == "html"


@patch("main.Orchestrator")
def test_generate_palette_and_pages(mock_cls):
    mock_cls.return_value.run_from_text.return_value = _final()
    main.main(["generate", "--prompt", "A landing page for a bakery", "--palette", "bw",
               "--pages", "Home, Menu"])
    config = mock_cls.return_value.run_from_text.call_args.args[0]
    assert config.color_palette.id == "bw"
    assert [p.name for p in config.pages] == ["Home", "Menu"]


@patch("main.Orchestrator")
def test_generate_from_image(mock_cls, tmp_path):
    image = tmp_path / "sketch.png"
    image.write_bytes(b"\x89PNG" + b"\x00" * 200)
    mock_cls.return_value.run_from_image.return_value = _final()
    out = tmp_path / "page.html"
    main.main(["generate", "--image", str(image), "--out", str(out)])
    config, image_input, _ = mock_cls.return_value.run_from_image.call_args.args
    assert image_input.mime_type == "image/png"
    assert out.read_text() == _final().code


@patch("main.Orchestrator")
def test_generate_writes_packaged_entry_file(mock_cls, tmp_path):
    packaged = "<!DOCTYPE html><html><body>ok<script>enhance()</script></body></html>"
    final = PipelineStage(
        stage="complete", progress=100, code=_final().code,
        files=(GeneratedFile(path="index.html", content=packaged, language="html"),),
    )
    mock_cls.return_value.run_from_text.return_value = final
    out = tmp_path / "page.html"
    main.main(["generate", "--prompt", "A landing page for a bakery", "--out", str(out)])
    assert out.read_text() == packaged


@patch("main.Orchestrator")
def test_generate_error_exits(mock_cls, capsys):
    mock_cls.return_value.run_from_text.return_value = _final(error="Generation timed out.")
    with pytest.raises(SystemExit) as exc:
        main.main(["generate", "--prompt", "A landing page for a bakery"])
    assert exc.value.code == 1
    assert "timed out" in capsys.readouterr().out


def test_generate_short_prompt_is_invalid(capsys):
    with pytest.raises(SystemExit) as exc:
        main.main(["generate", "--prompt", "tiny"])
    assert exc.value.code == 2
    assert "Invalid request" in capsys.readouterr().out


@patch("main.Orchestrator")
def test_generate_export_writes_project(mock_cls, tmp_path):
    from core.orchestrator import Orchestrator
    mock_cls.return_value.run_from_text.return_value = _final(code="export default function App() {}")
    mock_cls.return_value.write_files.side_effect = Orchestrator().write_files
    out = tmp_path / "project"
    main.main(["generate", "--prompt", "A landing page for a bakery", "--stack", "react",
               "--export", "--out", str(out)])
    assert (out / "src" / "App.tsx").read_text() == "export default function App() {}"
    assert (out / "package.json").exists()


def test_preview_writes_document(tmp_path):
    source = tmp_path / "App.svelte"
    source.write_text("<script>let n = 0;</script>\n<p>{n}</p>")
    out = tmp_path / "preview.html"
    main.main(["preview", str(source), "--stack", "svelte", "-o", str(out)])
    assert out.read_text().startswith("<!DOCTYPE html>")


@patch("main.Orchestrator")
def test_edit_overwrites_file(mock_cls, tmp_path):
    source = tmp_path / "index.html"
    source.write_text("<p>x</p>")
    mock_cls.return_value.edit.return_value = "<p>red</p>"
    main.main(["edit", str(source), "--command", "make it red"])
    assert source.read_text() == "<p>red</p>"
    mock_cls.return_value.edit.assert_called_once_with("<p>x</p>", "make it red", "html")
