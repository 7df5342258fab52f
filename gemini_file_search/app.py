"Gradio UI for Gemini File Search with MCP server support."

import os

import gradio as gr

from gemini_file_search.tools import gemini_file_search, gemini_file_search_stores
from gemini_file_search.utils.config import configure_logging, settings
from gemini_file_search.utils.exceptions import FileSearchError
from gemini_file_search.utils.models import DEFAULT_MODEL


def _split_stores(stores: str) -> list[str]:
    """Split a comma- or newline-separated store field into names."""
    return [s.strip() for s in stores.replace("\n", ",").split(",") if s.strip()]


async def list_stores() -> str:
    """List available Gemini File Search document stores.

    Returns:
        Numbered markdown list of stores with their resource names
    """
    try:
        return await gemini_file_search_stores()
    except FileSearchError as e:
        raise gr.Error(str(e)) from e


async def search_documents(query: str, stores: str, model: str = "") -> str:
    """Search document stores using Gemini File Search.

    Args:
        query: Semantic search query
        stores: Comma-separated store names or short IDs (e.g., "abc123, fileSearchStores/def")
        model: Gemini model override (leave empty for the default)

    Returns:
        The grounded answer followed by its sources
    """
    try:
        return await gemini_file_search(query, _split_stores(stores), model)
    except FileSearchError as e:
        raise gr.Error(str(e)) from e


def create_demo() -> gr.TabbedInterface:
    """
    Create the Gradio demo interface with MCP support.

    Returns:
        Tabbed interface with one tab per tool
    """
    stores_tab = gr.Interface(
        fn=list_stores,
        inputs=[],
        outputs=gr.Markdown(),
        title="Stores",
        description="List the File Search stores visible to the configured API key.",
        flagging_mode="never",
    )

    search_tab = gr.Interface(
        fn=search_documents,
        inputs=[
            gr.Textbox(label="Query", placeholder="What does the onboarding guide say about VPN?"),
            gr.Textbox(label="Stores", placeholder="fileSearchStores/abc123, def456"),
            gr.Textbox(label="Model (optional)", placeholder=DEFAULT_MODEL),
        ],
        outputs=gr.Markdown(),
        title="Search",
        description="Ask a question grounded in one or more File Search stores.",
        flagging_mode="never",
    )

    return gr.TabbedInterface(
        [search_tab, stores_tab],
        tab_names=["Search", "Stores"],
        title="Gemini File Search",
    )


def main() -> None:
    """Run the Gradio app with MCP server enabled."""
    configure_logging(settings)
    demo = create_demo()
    demo.launch(
        server_name=os.getenv("GRADIO_SERVER_NAME", "0.0.0.0"),  # nosec B104
        server_port=int(os.getenv("GRADIO_SERVER_PORT", "7860")),
        share=False,
        mcp_server=True,
    )


if __name__ == "__main__":
    main()
