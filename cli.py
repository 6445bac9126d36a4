# cli.py: interactive inventory console
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pyinventory import InventoryClient

console = Console()

status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def is_low_stock(p: Dict[str, Any]) -> bool:
    return p.get("stock", 0) <= (p.get("lowStockThreshold") or 5)


def build_products_table(products: List[Dict[str, Any]], title: str = "📦 Inventory") -> Table:
    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", justify="right", width=6)
    table.add_column("Name", style="bold", width=22)
    table.add_column("Category", width=15)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Stock", justify="right", width=8)
    table.add_column("Alert at", justify="right", width=8)

    for p in products:
        stock = str(p.get("stock", 0))
        if is_low_stock(p):
            stock = f"[bold red]{stock}[/bold red]"
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            p.get("category", "N/A"),
            f"${float(p.get('price', 0)):.2f}",
            stock,
            str(p.get("lowStockThreshold", 5)),
        )
    return table


def show_products(products: List[Dict[str, Any]], title: str = "📦 Inventory"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return
    console.print(build_products_table(products, title))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner. Returns None and records the
    error in status_message when the call fails.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


def get_product_completer():
    ids = [str(p.get("id", "")) for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def get_category_completer():
    categories = sorted({p.get("category", "") for p in product_cache if p.get("category")})
    return WordCompleter(categories, ignore_case=True)


def create_header(base_url: str):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "📦 PyInventory",
        f"[bold blue]{base_url}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


# ---------------------------
# Main menu
# ---------------------------
def menu(c: InventoryClient):
    global status_message, product_cache

    console.clear()
    console.print(create_header(c.base_url))
    product_cache = try_api(c.list_products) or []

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        options = [
            ("1", "📦 List products"),
            ("2", "➕ Add product"),
            ("3", "✏️ Update stock"),
            ("4", "⚠️ Low-stock report"),
            ("q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(["1", "2", "3", "4", "q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded successfully")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            name = prompt_with_autocomplete("Enter product name")
            price = ask_float("💰 Price", default=10.0)
            stock = IntPrompt.ask("📦 Stock", default=0)
            category = prompt_with_autocomplete("🏷️ Category", completer=get_category_completer())
            threshold = IntPrompt.ask("⚠️ Low-stock threshold", default=5)
            resp = try_api(
                c.add_product, name, price, stock, category, threshold,
                success_msg=f"Product '{name}' added"
            )
            if resp:
                show_products([resp], title="Added")
                product_cache = try_api(c.list_products) or []

        elif choice == "3":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            qty = IntPrompt.ask("New quantity", default=0)
            try:
                product_id = int(pid)
            except ValueError:
                console.print(show_status(f"'{pid}' is not a product ID", False))
                continue
            resp = try_api(c.update_stock, product_id, qty, success_msg=f"Stock for product {pid} set to {qty}")
            if resp:
                show_products([resp], title="Updated")

        elif choice == "4":
            products = try_api(c.low_stock, success_msg="Low-stock report loaded")
            if products is not None:
                show_products(products, title="⚠️ Low stock")

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    client = InventoryClient(base_url=os.environ.get("INVENTORY_API_URL", "http://127.0.0.1:3001"))
    try:
        menu(client)
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
