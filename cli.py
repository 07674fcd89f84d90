# cli.py - interactive cart shell with autocomplete
import asyncio
import sys
from datetime import datetime
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from app.cart import CartStore
from app.config import settings
from app.core import CartOutcome, cart_size, cart_total, format_price, subtotal
from app.database import JsonFileStorage
from app.models import Product, ProductInfo, UpdateProductAmount
from app.notifications import ConsoleNotifier
from sdk.stockclient import StockClient

console = Console()
loop = asyncio.new_event_loop()

stock = StockClient(base_url=settings.stock_api_url, timeout=settings.http_timeout)
store = CartStore(
    stock_service=stock,
    notifier=ConsoleNotifier(console),
    storage=JsonFileStorage(settings.cart_storage_path),
)

product_cache: List[ProductInfo] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[ProductInfo]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="👟 Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Name", style="bold", width=28)
    table.add_column("Price", justify="right", width=12)

    for p in products:
        table.add_row(str(p.id), p.name, format_price(p.price))
    console.print(table)


def show_cart(cart: List[Product]):
    title = Text()
    title.append("🛒 Cart - ", style="bold")
    title.append(f"{cart_size(cart)} product(s)", style="bold cyan")
    title.append(f" - Total: {format_price(cart_total(cart))}", style="bold green")

    if not cart:
        console.print(Panel("Your cart is empty 🛍️", title=title, style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("ID", style="dim", width=6)
    table.add_column("Product", style="bold", width=28)
    table.add_column("Qty", justify="right", width=6)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Subtotal", justify="right", width=12)

    for p in cart:
        table.add_row(str(p.id), p.name, str(p.amount), format_price(p.price), format_price(subtotal(p)))

    console.print(Panel(table, title=title, border_style="blue"))


def run(coro, description: str = "Processing..."):
    """Runs a coroutine on the shell's loop behind a spinner."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=True,
    ) as progress:
        progress.add_task(description=description, total=None)
        return loop.run_until_complete(coro)


def report(outcome: CartOutcome, success_msg: str):
    # Failures were already shown by the notifier
    if outcome is CartOutcome.SUCCESS:
        console.print(Panel.fit(f"[green]{success_msg}[/green]", title="Status"))
    elif outcome is CartOutcome.IGNORED:
        console.print("[dim]Nothing to do: quantity must be at least 1, use remove instead[/dim]")


# ---------------------------
# Autocompletion helpers
# ---------------------------
def load_catalog() -> List[ProductInfo]:
    global product_cache
    try:
        product_cache = run(stock.list_products(), "Loading catalog...")
    except Exception as e:
        console.print(Panel.fit(f"[red]Could not load catalog: {e}[/red]", title="Status"))
    return product_cache


def get_product_completer():
    ids = [str(p.id) for p in product_cache] + [str(p.id) for p in store.cart]
    return WordCompleter(sorted(set(ids)), ignore_case=True)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "👟 rocketcart",
        f"[bold blue]Cart shell[/bold blue] [dim]{settings.stock_api_url}[/dim]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_product_id() -> Optional[int]:
    raw = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
    try:
        return int(raw)
    except ValueError:
        console.print("[red]Product ID must be a number.[/red]")
        return None


# ---------------------------
# Main menu
# ---------------------------
def menu():
    console.clear()
    console.print(create_header())
    load_catalog()

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List catalog", "4", "🔢 Set quantity"),
            ("2", "➕ Add to cart", "5", "🛒 View cart"),
            ("3", "➖ Remove from cart", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title=f"📋 Menu - cart: {cart_size(store.cart)}", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(["1", "2", "3", "4", "5", "q", "quit", "exit"])
        ).strip()

        if choice == "1":
            show_products(load_catalog())

        elif choice == "2":
            pid = ask_product_id()
            if pid is not None:
                report(run(store.add_product(pid)), f"Product {pid} added to cart")
                show_cart(list(store.cart))

        elif choice == "3":
            pid = ask_product_id()
            if pid is not None:
                report(store.remove_product(pid), f"Product {pid} removed from cart")
                show_cart(list(store.cart))

        elif choice == "4":
            pid = ask_product_id()
            if pid is not None:
                amount = IntPrompt.ask("New quantity", default=1)
                outcome = run(store.update_product_amount(UpdateProductAmount(product_id=pid, amount=amount)))
                report(outcome, f"Product {pid} quantity set to {amount}")
                show_cart(list(store.cart))

        elif choice == "5":
            show_cart(list(store.cart))

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Your cart is saved. Bye! 👋[/bold green]", title="Goodbye"))
                return

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    finally:
        loop.run_until_complete(stock.aclose())
        loop.close()
