# src/interface/cli.py

from typing import List
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.prompt import Prompt
from rich import box
from rich.text import Text

from src.domain.errors import MalformedLocator
from src.domain.highlights import Highlight, SpanHighlight
from src.domain.item_set import Item, ItemSet


console = Console()

OPERATIONS = ["union", "intersection"]


def display_welcome_banner() -> None:
    console.print(Panel.fit(
        "[bold cyan]🖍  Highlight Sets[/bold cyan]\n"
        "[dim]Confront the interpretations filed under several topics[/dim]",
        box=box.DOUBLE,
        border_style="cyan",
    ))


def display_topics(topic_ids: List[str]) -> None:
    table = Table(title="Topics", box=box.SIMPLE)
    table.add_column("#", style="dim")
    table.add_column("Topic", style="bold")
    for rank, topic_id in enumerate(topic_ids, start=1):
        table.add_row(str(rank), topic_id)
    console.print(table)


def prompt_for_operation() -> str:
    return Prompt.ask(
        "\n[bold yellow]Operation[/bold yellow]",
        choices=OPERATIONS,
        default="union",
    )


def prompt_for_topics() -> List[str]:
    answer = Prompt.ask("[bold yellow]Topics[/bold yellow] [dim](comma separated)[/dim]")
    return [t.strip() for t in answer.split(",") if t.strip()]


def display_item_set(title: str, item_set: ItemSet) -> None:
    console.print(
        f"\n[bold]{title}[/bold] — "
        f"[bold]{item_set.count_items()}[/bold] items, "
        f"[bold]{item_set.count_highlights()}[/bold] highlights\n"
    )
    for item in sorted(item_set.get_items(), key=lambda i: i.name):
        console.print(Panel(
            _item_content(item),
            title=f"[bold]{item.name}[/bold]",
            border_style="green" if item.size() else "dim",
            box=box.ROUNDED,
            padding=(0, 1),
        ))


def display_error(message: str) -> None:
    console.print(f"\n[bold red]✗ Error:[/bold red] {message}\n")


def ask_continue() -> bool:
    answer = Prompt.ask(
        "\n[dim]Compare again?[/dim]",
        choices=["y", "n"],
        default="y",
    )
    return answer.lower() == "y"


def _item_content(item: Item) -> Text:
    content = Text()
    highlights = item.get_highlights()
    if not highlights:
        content.append("no highlight", style="dim italic")
        return content
    for index, highlight in enumerate(highlights):
        if index:
            content.append("\n")
        content.append("• ", style="dim")
        content.append(_describe(item, highlight))
    return content


def _describe(item: Item, highlight: Highlight) -> str:
    if isinstance(highlight, SpanHighlight) and highlight.texts:
        return highlight.text
    try:
        return item.resource_locator(highlight)
    except MalformedLocator:
        return f"#{highlight.fragment()}"
