"""Test that all modules can be imported successfully."""


def test_ai_imports():
    """Test AI layer imports."""
    from toolrouter.ai import (
        ToolOrchestrator, OrchestratorResult, PromptGenerator,
        ToolContext, ToolRegistry, ToolExecutor, ConfigurationError,
    )
    from toolrouter.ai.models import TokenUsage

    result = OrchestratorResult(usage=TokenUsage(), tools_required=None)
    assert not result.needs_tools
    assert ToolContext().user_id is None
    assert len(ToolRegistry()) == 0


def test_adapter_imports():
    """Test adapter module imports."""
    from toolrouter.ai.adapter import BaseLLMAdapter, OpenAIAdapter, create_adapter

    assert issubclass(OpenAIAdapter, BaseLLMAdapter)
    assert callable(create_adapter)


def test_tools_and_ui_imports():
    """Tools and renderers import each other lazily."""
    from toolrouter.ui import render_tool_result
    from toolrouter.tools import create_default_registry

    registry = create_default_registry()
    assert all(tool.render is not None for tool in registry if not tool.is_client_side)
    assert callable(render_tool_result)


def test_cli_imports():
    """Test CLI module imports."""
    from toolrouter.cli import main
    from toolrouter.utils import ConsoleManager, THEMES

    assert main.name == "main"
    assert "manhattan" in THEMES
    assert ConsoleManager(theme="unknown").theme_name == "unknown"


def test_console_status_lines():
    """Status helpers write icon-prefixed lines."""
    import io
    from toolrouter.utils import ConsoleManager, StatusType

    out = io.StringIO()
    console = ConsoleManager(file=out, width=80)
    console.print_error("bad")
    console.print_success("good")
    console.print_info("note")

    assert out.getvalue().splitlines() == ["[x] bad", "[✓] good", "[!] note"]
    assert [status.name for status in StatusType] == ["SUCCESS", "ERROR", "INFO"]
