"""Smoke tests for the Gradio app.

These tests verify the app can start without crashing.
They catch configuration errors like invalid Gradio parameters
that wouldn't be caught by unit tests.
"""

from unittest.mock import AsyncMock, patch

import pytest


@pytest.mark.unit
class TestAppSmoke:
    """Smoke tests for app initialization."""

    def test_app_creates_demo(self) -> None:
        """App should create the Gradio demo without crashing."""
        pytest.importorskip("gradio")

        from gemini_file_search.app import create_demo

        demo = create_demo()
        assert demo is not None

    def test_split_stores(self) -> None:
        pytest.importorskip("gradio")

        from gemini_file_search.app import _split_stores

        assert _split_stores("abc, fileSearchStores/def\nghi,,") == [
            "abc",
            "fileSearchStores/def",
            "ghi",
        ]

    @pytest.mark.asyncio
    async def test_search_errors_surface_as_gradio_errors(self) -> None:
        gr = pytest.importorskip("gradio")

        from gemini_file_search.app import search_documents

        with pytest.raises(gr.Error):
            await search_documents("", "abc")

    @pytest.mark.asyncio
    async def test_search_passes_split_stores(self) -> None:
        pytest.importorskip("gradio")

        from gemini_file_search.app import search_documents

        with patch(
            "gemini_file_search.app.gemini_file_search", AsyncMock(return_value="answer")
        ) as mock_search:
            assert await search_documents("q", "a, b", "") == "answer"

        mock_search.assert_awaited_once_with("q", ["a", "b"], "")
