# src/cli/runner.py

"""Headless CLI commands built on the same controllers as the TUI."""

import json
import logging
import sys
from collections.abc import Callable
from dataclasses import asdict
from typing import Any

from rich.console import Console
from rich.table import Table

from src.auth.session_context import SessionContext
from src.config.settings import Settings
from src.gateway.errors import SwipeShopError
from src.gateway.factory import Backend, build_backend
from src.models.collection_item import CartItem, SavedItem
from src.models.product import Product
from src.services.account_service import AccountService
from src.services.cart_controller import CartController
from src.services.feed_controller import ProductFeedController
from src.services.saved_controller import SavedController
from src.services.seller_dashboard import SellerDashboardController

logger = logging.getLogger("swipeshop.cli")

COMMANDS: tuple[str, ...] = ("feed", "cart", "saved", "checkout", "analytics")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _money(value: float) -> str:
    return f"{Settings.CURRENCY_SYMBOL}{value:,.2f}"


def _product_to_dict(p: Product | None) -> dict[str, object] | None:
    """Serialise a product to a plain dict for JSON output."""
    if p is None:
        return None
    return {
        "id": p.id,
        "name": p.name,
        "price": p.price,
        "category": p.category,
        "description": p.description,
        "image_url": p.image_url,
        "seller_id": p.seller_id,
    }


def _cart_to_dicts(items: list[CartItem]) -> list[dict[str, object]]:
    return [
        {
            "id": i.id,
            "product_id": i.product_id,
            "quantity": i.quantity,
            "line_total": i.line_total,
            "product": _product_to_dict(i.product),
        }
        for i in items
    ]


def _saved_to_dicts(items: list[SavedItem]) -> list[dict[str, object]]:
    return [
        {
            "id": i.id,
            "product_id": i.product_id,
            "product": _product_to_dict(i.product),
        }
        for i in items
    ]


def _dump_json(payload: Any) -> None:
    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


# ── Table renderers ──────────────────────────────────────


def _print_products(products: list[Product]) -> None:
    """Render a Rich table of feed products to stdout."""
    table = Table(title="Feed", show_lines=True, title_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", max_width=40)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Category", style="magenta")
    table.add_column("Description", overflow="fold", style="dim")
    for idx, p in enumerate(products, 1):
        table.add_row(
            str(idx), p.name[:40], _money(p.price),
            p.category or "—", p.description,
        )
    Console().print(table)


def _print_cart(items: list[CartItem], total: float) -> None:
    table = Table(
        title="Cart", show_lines=True, title_style="bold cyan",
        caption=f"Total: {_money(total)}",
    )
    table.add_column("Product", max_width=40)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Qty", justify="right")
    table.add_column("Subtotal", justify="right", style="bold green")
    for i in items:
        name = i.product.name if i.product else "Unknown"
        price = i.product.price if i.product else 0.0
        table.add_row(
            name[:40], _money(price), str(i.quantity),
            _money(i.line_total),
        )
    Console().print(table)


def _print_saved(items: list[SavedItem]) -> None:
    table = Table(
        title="Saved for later", show_lines=True, title_style="bold cyan",
    )
    table.add_column("Product", max_width=40)
    table.add_column("Price", justify="right", style="green")
    for i in items:
        product = i.product
        table.add_row(
            product.name[:40] if product else "Unknown",
            _money(product.price if product else 0.0),
        )
    Console().print(table)


def _print_mapping(title: str, data: dict[str, Any]) -> None:
    table = Table(title=title, show_lines=True, title_style="bold cyan")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    for key, value in data.items():
        table.add_row(key.replace("_", " ").title(), str(value))
    Console().print(table)


# ── Commands ─────────────────────────────────────────────


def _cmd_feed(context: SessionContext, output_format: str, **_: Any) -> int:
    feed = ProductFeedController(context)
    products = feed.load()
    _err.print(f"[green]✓ {len(products)} products in feed[/green]")
    if output_format == "table":
        _print_products(products)
    else:
        _dump_json([_product_to_dict(p) for p in products])
    return 0


def _cmd_cart(context: SessionContext, output_format: str, **_: Any) -> int:
    cart = CartController(context)
    items = cart.load()
    if output_format == "table":
        _print_cart(items, cart.total)
    else:
        _dump_json({"items": _cart_to_dicts(items), "total": cart.total})
    return 0


def _cmd_saved(
    context: SessionContext, output_format: str, **_: Any,
) -> int:
    saved = SavedController(context)
    items = saved.load()
    if output_format == "table":
        _print_saved(items)
    else:
        _dump_json(_saved_to_dicts(items))
    return 0


def _cmd_checkout(
    context: SessionContext, output_format: str, **_: Any,
) -> int:
    cart = CartController(context)
    cart.load()
    if not cart.items:
        _err.print("[yellow]Cart is empty, nothing to check out.[/yellow]")
        return 0
    result = cart.checkout()
    if result.purchases_failed:
        _err.print(
            f"[yellow]{result.purchases_failed} purchase(s) could not "
            f"be logged[/yellow]"
        )
    if output_format == "table":
        _print_mapping("Checkout", asdict(result))
    else:
        _dump_json(asdict(result))
    return 0 if result.cart_cleared else 1


def _cmd_analytics(
    context: SessionContext,
    output_format: str,
    chart: bool = False,
    **_: Any,
) -> int:
    if not context.is_seller:
        _err.print("[red]Analytics are only available to sellers.[/red]")
        return 1
    dashboard = SellerDashboardController(context)
    dashboard.load_products()
    analytics = dashboard.load_analytics()
    data: dict[str, Any] = asdict(analytics)
    data["products"] = len(dashboard.products)
    if chart:
        try:
            path = dashboard.export_engagement_chart(open_browser=False)
        except OSError as exc:
            logger.error("Chart export failed: %s", exc, exc_info=True)
            _err.print(f"[red]Chart export failed: {exc}[/red]")
            return 1
        data["chart"] = str(path) if path else None
        if path:
            _err.print(f"[dim]Chart saved → {path}[/dim]")
    if output_format == "table":
        data.pop("breakdown")
        _print_mapping("Seller analytics", data)
    else:
        _dump_json(data)
    return 0


_HANDLERS: dict[str, Callable[..., int]] = {
    "feed": _cmd_feed,
    "cart": _cmd_cart,
    "saved": _cmd_saved,
    "checkout": _cmd_checkout,
    "analytics": _cmd_analytics,
}


def run_command(
    command: str,
    email: str | None,
    password: str | None,
    output_format: str = "json",
    chart: bool = False,
    backend: Backend | None = None,
) -> int:
    """Sign in, run one headless command and return an exit code."""
    if command not in _HANDLERS:
        _err.print(f"[red]Unknown command: {command}[/red]")
        _err.print(f"[dim]Available: {', '.join(COMMANDS)}[/dim]")
        return 1
    if not email or not password:
        _err.print("[red]--email and --password are required.[/red]")
        return 1

    owns_backend = backend is None
    try:
        active = backend or build_backend()
    except ValueError as exc:
        _err.print(f"[red]{exc}[/red]")
        return 1

    context = SessionContext(active.sessions, active.gateway)
    try:
        context.start()
        route = AccountService(context).sign_in(email, password)
        _err.print(
            f"[bold]Signed in:[/bold] {email}  "
            f"[dim]role={context.role} landing={route}[/dim]"
        )
        return _HANDLERS[command](
            context, output_format=output_format, chart=chart,
        )
    except SwipeShopError as exc:
        logger.error("Command %s failed: %s", command, exc, exc_info=True)
        _err.print(f"[red]Error: {exc}[/red]")
        return 1
    finally:
        context.stop()
        if owns_backend:
            active.close()
