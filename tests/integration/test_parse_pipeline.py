from __future__ import annotations

from pathlib import Path

import pytest

from resumemd.container import create_container
from resumemd.pipeline import DocumentLoadError, DocumentLoader, OutputWriter, ParsePipeline


@pytest.fixture
def pipeline() -> ParsePipeline:
    return create_container().pipeline()


def test_pipeline_returns_payload_without_writing(tmp_path: Path, pipeline: ParsePipeline) -> None:
    source = tmp_path / "resume.md"
    source.write_text("# Skills\n\n```resume:skills\n- Go\n```\n", encoding="utf-8")

    payload = pipeline.run(input_path=source, include_content=True)

    assert payload["metadata"]["ok"] is True
    assert payload["metadata"]["app_version"]
    assert payload["metadata"]["timestamp"]
    assert payload["content"][0]["section"] == "skills"
    assert list(tmp_path.iterdir()) == [source]


def test_pipeline_keeps_crlf_offsets(tmp_path: Path, pipeline: ParsePipeline) -> None:
    source = tmp_path / "resume.md"
    source.write_bytes(b"# Skills\r\n\r\ntext\r\n")

    payload = pipeline.run(input_path=source)

    assert payload["result"]["value"]["raw_content"] == "# Skills\r\n\r\ntext\r\n"


def test_failure_payload_omits_content(tmp_path: Path, pipeline: ParsePipeline) -> None:
    source = tmp_path / "broken.md"
    source.write_text("---\nkey: [unclosed\n---\n", encoding="utf-8")

    payload = pipeline.run(input_path=source, include_content=True)

    assert payload["metadata"]["ok"] is False
    assert "content" not in payload


def test_loader_errors(tmp_path: Path) -> None:
    loader = DocumentLoader()

    with pytest.raises(DocumentLoadError):
        loader.load(tmp_path / "missing.md")

    binary = tmp_path / "binary.md"
    binary.write_bytes(b"\xff\xfe\x00bad")
    with pytest.raises(DocumentLoadError) as excinfo:
        loader.load(binary)
    assert excinfo.value.path == binary


def test_output_writer_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "dir" / "out.json"

    OutputWriter().write(target, {"name": "山田"})

    assert target.read_text(encoding="utf-8") == '{\n  "name": "山田"\n}'
