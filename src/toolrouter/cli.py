"""Command-line interface for toolrouter."""
import asyncio
import json
import sys
import logging
from typing import Any, List, Optional

import click
from pydantic import ValidationError
from rich.markup import escape

from .ai.adapter.factory import create_adapter_from_config
from .ai.config import OrchestratorConfig, get_orchestrator_config_from_env, load_prompt_file
from .ai.exceptions import ConfigurationError
from .ai.orchestrator import OrchestratorResult, ToolOrchestrator
from .ai.prompts import PromptGenerator
from .ai.tools import ToolExecutor, ToolRegistry
from .tools import create_default_registry
from .ui.renderers import render_tool_result
from .utils.console import ConsoleManager, THEMES


def setup_logging(debug: bool) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else logging.WARNING
    format_string = '[%(levelname)s] %(message)s'

    logging.basicConfig(
        level=level,
        format=format_string,
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    # Reduce noise from external libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


def load_conversation(stream) -> List[Any]:
    """Read a JSON conversation: a list of {role, content} objects."""
    try:
        data = json.load(stream)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"conversation is not valid JSON: {e}")
    if isinstance(data, dict) and "messages" in data:
        data = data["messages"]
    if not isinstance(data, list):
        raise click.BadParameter("conversation must be a JSON list of messages")
    return data


def resolve_config(model: Optional[str], api_key: Optional[str], base_url: Optional[str],
                   prompt_file: Optional[str]) -> OrchestratorConfig:
    """Environment configuration with command line overrides applied."""
    config = get_orchestrator_config_from_env(require_api_key=api_key is None)

    if model:
        config.model = model
    if api_key:
        config.api_key = api_key
    if base_url:
        config.base_url = base_url
    if prompt_file:
        config.orchestration_prompt = load_prompt_file(prompt_file)

    if not config.api_key:
        raise ConfigurationError("No API key provided. Set OPENAI_API_KEY or LLM_API_KEY, or use --api-key.")
    return config


def print_selection(console: ConsoleManager, registry: ToolRegistry,
                    result: OrchestratorResult, cost: float) -> None:
    """Show the selected tools and the usage of the classification call."""
    if result.tools_required is None:
        console.print_info("No tools required for this turn")
    else:
        console.print_success(f"{len(result.tools_required)} tool(s) enabled")
        for name in result.tools_required:
            tool = registry.get(name)
            label = tool.display_name if tool else "[warning]unregistered[/warning]"
            console.print(f"  [dim]>[/dim] [highlight]{escape(name)}[/highlight]  {label}")

    usage = result.usage
    console.print_info_with_heading(
        "Usage:",
        f"{usage.input_tokens:,} in / {usage.output_tokens:,} out (~${cost:.6f})"
    )


@click.group()
@click.option('--theme', '-t', type=click.Choice(sorted(THEMES)), default='manhattan',
              help='Terminal color theme')
@click.option('--debug', is_flag=True, help='Enable debug logging and tracebacks')
@click.version_option(package_name='toolrouter')
@click.pass_context
def main(ctx: click.Context, theme: str, debug: bool) -> None:
    """Select and render assistant tools for a chat conversation."""
    setup_logging(debug)
    ctx.ensure_object(dict)
    ctx.obj['console'] = ConsoleManager(theme=theme)
    ctx.obj['debug'] = debug


@main.command()
@click.argument('conversation', type=click.File('r'))
@click.option('--confirmation', '-c', default=None,
              help="The user's answer to a previous confirmation prompt, if resuming one.")
@click.option('--model', default=None, help="Orchestrator model. Defaults to ORCHESTRATOR_MODEL or LLM_MODEL.")
@click.option('--api-key', default=None, help="API key. Defaults to OPENAI_API_KEY or LLM_API_KEY.")
@click.option('--base-url', default=None, help="OpenAI-compatible base URL. Defaults to LLM_BASE_URL.")
@click.option('--prompt-file', type=click.Path(dir_okay=False), default=None,
              help="File holding the orchestration prompt.")
@click.option('--json', 'as_json', is_flag=True, help="Print the result as JSON.")
@click.pass_context
def select(ctx: click.Context, conversation, confirmation: Optional[str], model: Optional[str],
           api_key: Optional[str], base_url: Optional[str], prompt_file: Optional[str],
           as_json: bool) -> None:
    """
    Select the tools needed for the next turn of CONVERSATION.

    CONVERSATION is a JSON file (or - for stdin) holding a list of
    {"role": ..., "content": ...} messages.

    Examples:

        toolrouter select chat.json

        toolrouter select chat.json --confirmation yes --json
    """
    console: ConsoleManager = ctx.obj['console']

    try:
        messages = load_conversation(conversation)
        config = resolve_config(model, api_key, base_url, prompt_file)

        registry = create_default_registry()
        prompt = PromptGenerator(registry, config.orchestration_prompt).generate()
        adapter = create_adapter_from_config(config)
        orchestrator = ToolOrchestrator(
            adapter,
            prompt,
            registry=registry,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )

        result = asyncio.run(orchestrator.get_tools(messages, confirmation))
    except click.BadParameter:
        raise
    except Exception as e:
        console.print_error(f"{type(e).__name__}: {e}")
        if ctx.obj['debug']:
            console.print_exception()
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({
            "usage": {
                "inputTokens": result.usage.input_tokens,
                "outputTokens": result.usage.output_tokens,
                "totalTokens": result.usage.total_tokens,
            },
            "toolsRequired": result.tools_required,
        }, indent=2))
    else:
        print_selection(console, registry, result, adapter.get_total_cost())


@main.command()
@click.option('--json', 'as_json', is_flag=True, help="Print OpenAI function definitions.")
@click.pass_context
def tools(ctx: click.Context, as_json: bool) -> None:
    """List the registered tools."""
    console: ConsoleManager = ctx.obj['console']
    registry = create_default_registry()

    if as_json:
        click.echo(json.dumps(ToolExecutor(registry).get_tools_for_openai(), indent=2))
        return

    for tool in registry:
        where = "client" if tool.is_client_side else "server"
        console.print(f"[highlight]{tool.name}[/highlight] [dim]({where})[/dim]  {tool.display_name}")
        console.print(f"  [dim]{tool.description}[/dim]")


@main.command()
@click.argument('tool_name')
@click.argument('result_file', type=click.File('r'))
@click.pass_context
def render(ctx: click.Context, tool_name: str, result_file) -> None:
    """Render a stored JSON tool RESULT_FILE with TOOL_NAME's renderer."""
    console: ConsoleManager = ctx.obj['console']
    registry = create_default_registry()

    tool = registry.get(tool_name)
    if tool is None:
        console.print_error(f"Unknown tool '{tool_name}'. Available: {', '.join(registry.names())}")
        sys.exit(1)

    try:
        data = json.load(result_file)
        console.render(render_tool_result(tool, data))
    except (json.JSONDecodeError, ValidationError) as e:
        console.print_error(f"Invalid result for {tool_name}: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
