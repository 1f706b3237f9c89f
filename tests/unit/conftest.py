"""Shared test fixtures."""

import pytest

from blockdrag.buffer import TextBuffer

# - A
#     - B
#         - C
#     - D
# - E
NESTED_DOC = "- A\n\t- B\n\t\t- C\n\t- D\n- E\n"

SIMPLE_DOC = "- A\n\t- B\n- C\n"

MIXED_DOC = (
    "# Title\n"
    "\n"
    "Some text\n"
    "that wraps\n"
    "\n"
    "- first\n"
    "- second ^keep01\n"
    "\t- child\n"
    "\n"
    "```\n"
    "- not a list\n"
    "```\n"
)


@pytest.fixture
def nested_buffer() -> TextBuffer:
    return TextBuffer(NESTED_DOC, name="nested")


@pytest.fixture
def simple_buffer() -> TextBuffer:
    return TextBuffer(SIMPLE_DOC, name="simple")


@pytest.fixture
def notes_buffer() -> TextBuffer:
    return TextBuffer("Notes\n", name="notes")
