"""Tests for serialized styled buffers and source dispatch."""

import json

import pytest
import yaml

from richmark.config.models import SourcesConfig
from richmark.converter.models import StyledBuffer
from richmark.sources import can_read, read_source, source_format
from richmark.sources.models import SourceError
from richmark.sources.styled import read_styled


def _runs():
    return [
        {"text": "Title\n", "font_size": 30},
        {"text": "1. One\n", "text_list": {"marker_format": "decimal", "list_id": "a"}},
        {"text": "body", "italic": True},
    ]


# ---------------------------------------------------------------------------
# read_styled
# ---------------------------------------------------------------------------


class TestReadStyled:
    def test_yaml_mapping(self, tmp_path):
        path = tmp_path / "doc.yaml"
        path.write_text(yaml.dump({"base_font_size": 12, "runs": _runs()}))
        buffer = read_styled(path)
        assert buffer.base_font_size == 12
        assert buffer.text == "Title\n1. One\nbody"
        assert buffer.runs[1].text_list.marker_format == "decimal"

    def test_json_mapping(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text(json.dumps({"runs": _runs()}))
        buffer = read_styled(path)
        assert buffer.base_font_size is None
        assert buffer.runs[2].italic

    def test_bare_run_list(self, tmp_path):
        path = tmp_path / "doc.yml"
        path.write_text(yaml.dump(_runs()))
        assert len(read_styled(path).runs) == 3

    def test_empty_file(self, tmp_path):
        path = tmp_path / "doc.yaml"
        path.write_text("")
        assert read_styled(path) == StyledBuffer()

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "doc.yaml"
        path.write_text("runs: [unclosed")
        with pytest.raises(SourceError, match="malformed"):
            read_styled(path)

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text("{not json")
        with pytest.raises(SourceError, match="malformed"):
            read_styled(path)

    def test_invalid_run(self, tmp_path):
        path = tmp_path / "doc.yaml"
        path.write_text(yaml.dump({"runs": [{"text": "x", "font_size": -1}]}))
        with pytest.raises(SourceError, match="invalid styled document") as exc_info:
            read_styled(path)
        assert exc_info.value.path == str(path)
        assert exc_info.value.__cause__ is not None


# ---------------------------------------------------------------------------
# read_source
# ---------------------------------------------------------------------------


class TestSourceFormat:
    @pytest.mark.parametrize(
        "name, fmt",
        [
            ("a.docx", "docx"),
            ("a.HTML", "html"),
            ("a.htm", "html"),
            ("a.yaml", "yaml"),
            ("a.yml", "yaml"),
            ("a.json", "json"),
            ("a.pdf", None),
            ("README", None),
        ],
    )
    def test_formats(self, name, fmt):
        assert source_format(name) == fmt
        assert can_read(name) is (fmt is not None)


class TestReadSource:
    def test_dispatches_to_html(self, tmp_path):
        path = tmp_path / "page.html"
        path.write_text("<h2>Hi</h2>")
        buffer = read_source(path, SourcesConfig(), 10)
        assert buffer.base_font_size == 10
        assert buffer.runs[0].font_size == 15

    def test_dispatches_to_styled(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text(json.dumps(_runs()))
        assert read_source(path, SourcesConfig(), 16).text == "Title\n1. One\nbody"

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("plain")
        with pytest.raises(SourceError, match="unsupported format"):
            read_source(path, SourcesConfig(), 16)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceError, match="file not found"):
            read_source(tmp_path / "absent.html", SourcesConfig(), 16)

    def test_directory_is_not_a_file(self, tmp_path):
        folder = tmp_path / "folder.html"
        folder.mkdir()
        with pytest.raises(SourceError, match="file not found"):
            read_source(folder, SourcesConfig(), 16)

    def test_too_large(self, tmp_path):
        path = tmp_path / "big.html"
        path.write_bytes(b"<p>" + b"x" * (1024 * 1024 + 1) + b"</p>")
        with pytest.raises(SourceError, match="too large"):
            read_source(path, SourcesConfig(max_file_size_mb=1), 16)
