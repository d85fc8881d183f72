"""Rich renderers for tool results.

Each tool's ``render`` callable takes the tool's result model and returns a
rich renderable. ``render_tool_result`` is the entry point for arbitrary
tools and stored JSON results.
"""

from typing import Any, Iterable, List, Optional, TYPE_CHECKING

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.pretty import Pretty
from rich.table import Table
from rich.text import Text

from ..tools.bundle import BundleEntry, BundleResult, MintBundleAnalysis
from ..tools.telegram import BOT_NOT_STARTED_ERROR, MISSING_USERNAME_ERROR, TelegramResult

if TYPE_CHECKING:
    from ..ai.tools import ToolDefinition


# Formatting helpers

def format_amount(value: Optional[float]) -> str:
    """Thousands separators, at most three decimals, no trailing zeros."""
    number = float(value or 0)
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.3f}".rstrip("0").rstrip(".")


def format_sol(value: Optional[float]) -> str:
    return f"{(value or 0):.2f} SOL"


def format_percent(value: Optional[float]) -> str:
    return f"{(value or 0):.2f}%"


def short_address(address: str) -> str:
    return f"{address[:8]}..."


def pnl_style(value: Optional[float]) -> str:
    return "green" if (value or 0) >= 0 else "red"


# Telegram

def render_telegram_response(result: TelegramResult, success_title: str,
                             success_message: str) -> Panel:
    """Render a Telegram tool result, with dedicated panels for known error kinds."""
    if not result.success and result.error == MISSING_USERNAME_ERROR:
        return Panel(
            Text("Please provide a Telegram username.", style="dim"),
            title="Missing Telegram Username",
            title_align="left",
        )

    if not result.success and result.error == BOT_NOT_STARTED_ERROR:
        link = f"https://t.me/{result.bot_id}"
        start_line = Text("Click here to start: ", style="dim")
        start_line.append(f"@{result.bot_id}", style=f"bold underline link {link}")
        start_line.append(f" ({link})", style="dim")
        return Panel(
            Group(
                Text("You need to start the bot before using Telegram notifications.", style="dim"),
                start_line,
            ),
            title="Bot Not Started",
            title_align="left",
        )

    if not result.success:
        return Panel(
            Text(result.error or "Unknown error", style="dim"),
            title="[red]Error[/red]",
            title_align="left",
            border_style="red",
        )

    return Panel(
        Text(success_message or "", style="dim"),
        title=success_title,
        title_align="left",
        border_style="green",
    )


def render_verify_telegram_setup(result: TelegramResult) -> Panel:
    return render_telegram_response(
        result,
        success_title="Setup Verified ✅",
        success_message="Your Telegram setup is valid.",
    )


def render_send_telegram_notification(result: TelegramResult) -> Panel:
    return render_telegram_response(
        result,
        success_title="Telegram Notification Sent ✅",
        success_message=f"Check your Telegram for a message from {result.bot_id}",
    )


# Bundles

def _summary_table(analysis: MintBundleAnalysis) -> Table:
    table = Table.grid(padding=(0, 2))
    table.add_column(style="dim")
    table.add_column()
    table.add_column(style="dim")
    table.add_column()

    table.add_row("Total Bundles", str(analysis.total_bundles),
                  "Total SOL Volume", format_sol(analysis.total_sol_volume))
    table.add_row("Unique Wallets", str(analysis.total_unique_wallets),
                  "Total Supply", format_amount(analysis.total_supply))
    table.add_row("Total Bought", Text(f"{format_amount(analysis.total_bought)} tokens", style="green"),
                  "Total Sold", Text(f"{format_amount(analysis.total_sold)} tokens", style="red"))
    table.add_row("Net P/L", Text(format_sol(analysis.total_profit_loss),
                                  style=pnl_style(analysis.total_profit_loss)), "", "")
    return table


def _pattern_section(heading: str, style: str, entries: List[BundleEntry],
                     columns: Iterable[str]) -> Group:
    columns = list(columns)
    table = Table(show_edge=False, box=None, padding=(0, 2))
    table.add_column("Bundle")
    for column in columns:
        table.add_column(column, style="dim")

    for entry in entries:
        cells = [short_address(entry.bundle_address)]
        for column in columns:
            if column == "Supply":
                cells.append(format_percent(entry.supply_percentage))
            elif column == "Velocity":
                cells.append(f"{(entry.purchase_velocity or 0):.0f} tokens/hour")
            elif column == "Transactions":
                cells.append(str(len(entry.transactions)))
            else:
                cells.append(f"{entry.time_window_seconds:.1f}s")
        table.add_row(*cells)

    return Group(Text(f"{heading} ({len(entries)})", style=f"bold {style}"), table)


def _suspicious_panel(analysis: MintBundleAnalysis) -> Panel:
    patterns = analysis.suspicious_patterns
    sections: List[RenderableType] = []

    if patterns.snipers:
        sections.append(_pattern_section(
            "🎯 Potential Snipers", "red", patterns.snipers,
            ["Supply", "Velocity", "Time Window"],
        ))
    if patterns.rapid_accumulation:
        sections.append(_pattern_section(
            "⚡ Rapid Accumulation", "dark_orange", patterns.rapid_accumulation,
            ["Supply", "Time"],
        ))
    if patterns.coordinated_buying:
        sections.append(_pattern_section(
            "🤝 Coordinated Buying", "blue", patterns.coordinated_buying,
            ["Transactions", "Supply", "Time Window"],
        ))
    return Panel(Group(*sections), title="⚠️ Suspicious Activity", title_align="left", border_style="red")


def _largest_bundle_panel(bundle: BundleEntry) -> Panel:
    lines = [
        Text.assemble("🏆 Bundle ", (short_address(bundle.bundle_address), "bold")),
        Text(f"Supply: {format_percent(bundle.supply_percentage)}", style="dim"),
        Text(f"Bought: {format_amount(bundle.total_bought)} tokens", style="dim"),
        Text(f"Sold: {format_amount(bundle.total_sold)} tokens", style="dim"),
        Text(f"Current Holdings: {format_amount(bundle.current_holdings)}", style="dim"),
        Text(f"SOL Spent: {format_sol(bundle.sol_spent)}", style="dim"),
        Text(f"SOL from Sales: {format_sol(bundle.sell_amount)}", style="dim"),
        Text(f"P/L: {format_sol(bundle.profit_loss)}", style=pnl_style(bundle.profit_loss)),
    ]
    return Panel(Group(*lines), title="Largest Bundle", title_align="left", border_style="cyan")


def _bundles_table(bundles: List[BundleEntry]) -> Table:
    table = Table(title="All Potential Bundles", title_justify="left", expand=True)
    table.add_column("Bundle", no_wrap=True)
    table.add_column("Supply", justify="right")
    table.add_column("Bought", justify="right")
    table.add_column("Sold", justify="right")
    table.add_column("SOL Spent", justify="right")
    table.add_column("SOL from Sales", justify="right")
    table.add_column("Holdings", justify="right")
    table.add_column("P/L", justify="right")
    table.add_column("", no_wrap=True)

    for bundle in bundles:
        table.add_row(
            short_address(bundle.bundle_address),
            format_percent(bundle.supply_percentage),
            format_amount(bundle.total_bought),
            format_amount(bundle.total_sold),
            f"{bundle.sol_spent:.2f}",
            f"{bundle.sell_amount:.2f}",
            format_amount(bundle.current_holdings),
            Text(format_sol(bundle.profit_loss), style=pnl_style(bundle.profit_loss)),
            Text("Pumpfun Bundle", style="blue") if bundle.is_pumpfun_bundle else "",
        )
    return table


def render_bundle_analysis(result: BundleResult) -> RenderableType:
    """Render a bundle analysis result."""
    if not result.success:
        return Panel(Text(f"Error: {result.error}", style="red"), border_style="red")

    if result.data is None:
        return Panel(Text("No bundle data available", style="dim"))

    analysis = result.data
    parts: List[RenderableType] = [
        Panel(_summary_table(analysis), title="Summary", title_align="left"),
        _suspicious_panel(analysis),
    ]
    if analysis.largest_bundle:
        parts.append(_largest_bundle_panel(analysis.largest_bundle))
    parts.append(_bundles_table(analysis.bundles))
    return Group(*parts)


# Generic

def render_tool_result(tool: 'ToolDefinition', data: Any) -> RenderableType:
    """Render a tool result with the tool's renderer, or pretty-print it."""
    result = tool.parse_result(data)
    if tool.render is None:
        body: RenderableType = Pretty(result)
    else:
        body = tool.render(result)
    return Panel(body, title=tool.display_name, title_align="left", border_style="dim")
