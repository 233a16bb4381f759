# cli.py
import argparse
import os
import sys
from typing import Any, Dict, List

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from product_sdk.client import ProductClient, ProductApiError

console = Console()


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=36)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("In stock", justify="center", width=9)

    for p in products:
        in_stock = "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            p.get("description", ""),
            f"${p.get('price', 0):.2f}",
            p.get("category", "N/A"),
            in_stock
        )
    console.print(table)


def show_page(resp: Dict[str, Any]):
    show_products(resp.get("data", []))
    console.print(
        f"[dim]page {resp.get('page')} of {resp.get('totalPages')} "
        f"({resp.get('total')} matching, limit {resp.get('limit')})[/dim]"
    )


def show_stats(stats: Dict[str, Any]):
    table = Table(title="📊 Product Stats", box=box.ROUNDED, header_style="bold yellow")
    table.add_column("Metric", style="bold")
    table.add_column("Count", justify="right")
    table.add_row("Total products", str(stats.get("totalProducts", 0)))
    table.add_row("In stock", f"[green]{stats.get('inStock', 0)}[/green]")
    table.add_row("Out of stock", f"[red]{stats.get('outOfStock', 0)}[/red]")
    for category, count in stats.get("byCategory", {}).items():
        table.add_row(f"  {category}", str(count))
    console.print(table)


def show_mutation(resp: Dict[str, Any]):
    console.print(Panel.fit(f"[green]{resp.get('message')}[/green]", title="Status"))
    show_products([resp["product"]])


def show_error(err: ProductApiError):
    console.print(Panel.fit(f"[red]{err.message}[/red]", title=f"❌ {err.name} ({err.status_code})"))


def _stock_flag(value: str) -> bool:
    v = value.lower()
    if v in ("true", "yes", "1"):
        return True
    if v in ("false", "no", "0"):
        return False
    raise argparse.ArgumentTypeError("expected true or false")


def _add_product_fields(p: argparse.ArgumentParser):
    p.add_argument("--name", required=True, help="Product name")
    p.add_argument("--description", required=True, help="Product description")
    p.add_argument("--price", type=float, required=True, help="Price")
    p.add_argument("--category", required=True, help="Product category")
    p.add_argument("--in-stock", type=_stock_flag, default=True, help="true/false (default true)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Product API CLI")
    parser.add_argument("--base-url", default=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--api-key", default=os.getenv("API_KEY"), help="Value for the x-api-key header")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list", help="List products")
    lp.add_argument("--category", help="Filter products by category")
    lp.add_argument("--page", type=int, help="Page number (default 1)")
    lp.add_argument("--limit", type=int, help="Page size (default 10)")

    sp = subparsers.add_parser("search", help="Search name and description")
    sp.add_argument("q", help="Search term")

    subparsers.add_parser("stats", help="Show product statistics")

    gp = subparsers.add_parser("get", help="Get a product by its ID")
    gp.add_argument("product_id")

    cp = subparsers.add_parser("create", help="Create a product")
    _add_product_fields(cp)

    up = subparsers.add_parser("update", help="Replace a product")
    up.add_argument("product_id")
    _add_product_fields(up)

    dp = subparsers.add_parser("delete", help="Delete a product")
    dp.add_argument("product_id")
    return parser


def run(args: argparse.Namespace, c: ProductClient) -> None:
    if args.command == "list":
        show_page(c.list_products(args.category, args.page, args.limit))

    elif args.command == "search":
        resp = c.search_products(args.q)
        show_products(resp["data"], title=f"🔍 {resp['count']} result(s) for '{resp['query']}'")

    elif args.command == "stats":
        show_stats(c.stats())

    elif args.command == "get":
        show_products([c.get_product(args.product_id)])

    elif args.command == "create":
        show_mutation(c.create_product(args.name, args.description, args.price,
                                       args.category, args.in_stock))

    elif args.command == "update":
        show_mutation(c.update_product(args.product_id, args.name, args.description,
                                       args.price, args.category, args.in_stock))

    elif args.command == "delete":
        show_mutation(c.delete_product(args.product_id))


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    c = ProductClient(base_url=args.base_url, api_key=args.api_key)
    try:
        run(args, c)
    except ProductApiError as e:
        show_error(e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
