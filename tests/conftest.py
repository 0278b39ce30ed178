"""Shared test fixtures for richmark."""

import pytest

from richmark.config.models import RichmarkConfig
from richmark.converter.models import BufferRun, StyledBuffer, TextList


@pytest.fixture
def base_size():
    return 16.0


@pytest.fixture
def numbered_list():
    return TextList(marker_format="decimal", list_id="steps")


@pytest.fixture
def bullet_list():
    return TextList(marker_format="disc", list_id="notes")


@pytest.fixture
def sample_buffer(numbered_list, bullet_list):
    """A pasted document: heading, numbered list, blank line, bullets, prose."""
    return StyledBuffer(
        runs=[
            BufferRun(text="Release notes\n", font_size=28),
            BufferRun(text="1. Install\n", text_list=numbered_list),
            BufferRun(text="2. Configure\n", text_list=numbered_list),
            BufferRun(text="\n"),
            BufferRun(text="• Faster ", text_list=bullet_list),
            BufferRun(text="startup", text_list=bullet_list, bold=True),
            BufferRun(text="\n", text_list=bullet_list),
            BufferRun(text="See the "),
            BufferRun(text="manual", link="https://example.com/manual", italic=True),
            BufferRun(text=" for details."),
        ]
    )


@pytest.fixture
def sample_config():
    return RichmarkConfig()


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run from an empty directory with no user-global config."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
    return tmp_path
