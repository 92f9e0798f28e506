"""Tests for kilo.edit -- the edit engine."""

from __future__ import annotations

import pytest

from kilo.document import Document
from kilo.edit import delete_char, insert_char, insert_newline
from kilo.state import EditorState


def make_state(lines: list[str], cx: int = 0, cy: int = 0) -> EditorState:
    state = EditorState(
        screen_rows=24, screen_cols=80, document=Document.from_lines(lines)
    )
    state.cx, state.cy = cx, cy
    return state


def texts(state: EditorState) -> list[str]:
    return [row.chars for row in state.document.rows]


class TestInsertChar:
    def test_inserts_at_cursor_and_advances(self) -> None:
        state = make_state(["ac"], cx=1)
        insert_char(state, "b")
        assert texts(state) == ["abc"]
        assert state.cx == 2
        assert state.document.dirty > 0

    def test_typing_past_end_of_file_creates_row(self) -> None:
        state = make_state(["a"], cx=0, cy=1)
        insert_char(state, "x")
        assert texts(state) == ["a", "x"]
        assert state.cy == 1
        assert state.cx == 1

    def test_typing_into_empty_document(self) -> None:
        state = make_state([])
        insert_char(state, "h")
        insert_char(state, "i")
        assert texts(state) == ["hi"]


class TestInsertNewline:
    def test_at_start_inserts_empty_row_above(self) -> None:
        state = make_state(["abc"], cx=0)
        insert_newline(state)
        assert texts(state) == ["", "abc"]
        assert (state.cx, state.cy) == (0, 1)

    def test_splits_row(self) -> None:
        state = make_state(["hello world"], cx=5)
        insert_newline(state)
        assert texts(state) == ["hello", " world"]
        assert (state.cx, state.cy) == (0, 1)
        assert state.document.rows[0].render == "hello"

    def test_at_end_of_row_adds_empty_row_below(self) -> None:
        state = make_state(["abc", "def"], cx=3)
        insert_newline(state)
        assert texts(state) == ["abc", "", "def"]

    def test_past_end_of_file(self) -> None:
        state = make_state(["abc"], cx=0, cy=1)
        insert_newline(state)
        assert texts(state) == ["abc", ""]
        assert state.cy == 2


class TestDeleteChar:
    def test_deletes_before_cursor(self) -> None:
        state = make_state(["abc"], cx=2)
        delete_char(state)
        assert texts(state) == ["ac"]
        assert state.cx == 1

    def test_noop_at_document_start(self) -> None:
        state = make_state(["abc"])
        delete_char(state)
        assert texts(state) == ["abc"]
        assert state.document.dirty == 0

    def test_noop_past_end_of_file(self) -> None:
        state = make_state(["abc"], cx=0, cy=1)
        delete_char(state)
        assert texts(state) == ["abc"]
        assert state.cy == 1

    def test_joins_with_previous_row(self) -> None:
        state = make_state(["ab", "cd", "ef"], cx=0, cy=1)
        delete_char(state)
        assert texts(state) == ["abcd", "ef"]
        assert (state.cx, state.cy) == (2, 0)
        assert state.document.rows[0].render == "abcd"


class TestSplitJoin:
    @pytest.mark.parametrize("k", range(0, 8))
    def test_split_then_join_restores_row(self, k: int) -> None:
        state = make_state(["ab\tcdef", "next"], cx=k)
        insert_newline(state)
        delete_char(state)
        assert texts(state) == ["ab\tcdef", "next"]
        assert (state.cx, state.cy) == (k, 0)
