from typing import Any, Dict, List, Optional

import typer
from tabulate import tabulate

from sweetshop.client.api import ApiClientError, SweetShopClient

cli = typer.Typer(help="Sweet Shop inventory client")

def get_client() -> SweetShopClient:
    return SweetShopClient()

def render_sweets(sweets: List[Dict[str, Any]]) -> str:
    if not sweets:
        return "No sweets found."
    rows = [
        [
            s["id"],
            s["name"],
            s["category"],
            f"{s['price']:.2f}",
            s["quantity"] if s["quantity"] > 0 else "out of stock",
        ]
        for s in sweets
    ]
    return tabulate(rows, headers=["id", "name", "category", "price", "stock"])

def fail(exc: ApiClientError):
    typer.echo(f"Error: {exc.message}", err=True)
    raise typer.Exit(1)


@cli.command()
def register(
    name: str = typer.Argument(...),
    email: str = typer.Argument(...),
    role: str = typer.Option("user", help="user or admin"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
):
    """Create an account and sign in."""
    try:
        user = get_client().register(name, email, password, role)
    except ApiClientError as exc:
        fail(exc)
    typer.echo(f"Registered {user['email']} ({user['role']})")

@cli.command()
def login(
    email: str = typer.Argument(...),
    password: str = typer.Option(..., prompt=True, hide_input=True),
):
    """Sign in and remember the session."""
    try:
        user = get_client().login(email, password)
    except ApiClientError as exc:
        fail(exc)
    typer.echo(f"Welcome back, {user['name']}")

@cli.command()
def logout():
    """Forget the stored session."""
    get_client().logout()
    typer.echo("Logged out")

@cli.command()
def whoami():
    """Show the signed-in user."""
    user = get_client().current_user()
    if not user:
        typer.echo("Not logged in")
        raise typer.Exit(1)
    typer.echo(f"{user['name']} <{user['email']}> [{user['role']}]")

@cli.command("list")
def list_sweets():
    """List the whole inventory."""
    try:
        sweets = get_client().get_sweets()
    except ApiClientError as exc:
        fail(exc)
    typer.echo(render_sweets(sweets))

@cli.command()
def search(
    q: Optional[str] = typer.Argument(None),
    category: Optional[str] = typer.Option(None),
    min_price: Optional[float] = typer.Option(None, "--min-price"),
    max_price: Optional[float] = typer.Option(None, "--max-price"),
    page: int = typer.Option(1),
    limit: int = typer.Option(10),
):
    """Search by text, category and price range."""
    client = get_client()
    try:
        if not (q or category or min_price is not None or max_price is not None):
            sweets = client.get_sweets()
            typer.echo(render_sweets(sweets))
            return
        data = client.search_sweets(q, category, min_price, max_price, page, limit)
    except ApiClientError as exc:
        fail(exc)
    typer.echo(render_sweets(data["sweets"]))
    p = data["pagination"]
    typer.echo(f"page {p['page']}/{max(p['pages'], 1)} ({p['total']} total)")

@cli.command()
def add(
    name: str = typer.Argument(...),
    category: str = typer.Argument(...),
    price: float = typer.Argument(...),
    quantity: int = typer.Argument(...),
    description: Optional[str] = typer.Option(None),
    image_url: Optional[str] = typer.Option(None, "--image-url"),
):
    """Add a sweet (admin)."""
    payload = {"name": name, "category": category, "price": price, "quantity": quantity}
    if description:
        payload["description"] = description
    if image_url:
        payload["imageUrl"] = image_url
    try:
        sweet = get_client().create_sweet(payload)
    except ApiClientError as exc:
        fail(exc)
    typer.echo(f"Created {sweet['name']} ({sweet['id']})")

@cli.command()
def update(
    sweet_id: str = typer.Argument(...),
    name: Optional[str] = typer.Option(None),
    category: Optional[str] = typer.Option(None),
    price: Optional[float] = typer.Option(None),
    quantity: Optional[int] = typer.Option(None),
    description: Optional[str] = typer.Option(None),
    image_url: Optional[str] = typer.Option(None, "--image-url"),
):
    """Edit a sweet (admin). Only given fields change."""
    changes = {
        "name": name,
        "category": category,
        "price": price,
        "quantity": quantity,
        "description": description,
        "imageUrl": image_url,
    }
    changes = {k: v for k, v in changes.items() if v is not None}
    if not changes:
        typer.echo("Nothing to update", err=True)
        raise typer.Exit(1)
    try:
        sweet = get_client().update_sweet(sweet_id, changes)
    except ApiClientError as exc:
        fail(exc)
    typer.echo(render_sweets([sweet]))

@cli.command()
def delete(
    sweet_id: str = typer.Argument(...),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a sweet (admin)."""
    if not yes:
        typer.confirm(f"Delete sweet {sweet_id}?", abort=True)
    try:
        get_client().delete_sweet(sweet_id)
    except ApiClientError as exc:
        fail(exc)
    typer.echo("Deleted")

@cli.command()
def purchase(
    sweet_id: str = typer.Argument(...),
    quantity: int = typer.Option(1, "--quantity", "-q"),
):
    """Buy some of a sweet."""
    try:
        sweet = get_client().purchase_sweet(sweet_id, quantity)
    except ApiClientError as exc:
        fail(exc)
    typer.echo(f"Purchased {quantity} x {sweet['name']}, {sweet['quantity']} left")

@cli.command()
def restock(
    sweet_id: str = typer.Argument(...),
    quantity: int = typer.Argument(...),
):
    """Add stock to a sweet (admin)."""
    try:
        sweet = get_client().restock_sweet(sweet_id, quantity)
    except ApiClientError as exc:
        fail(exc)
    typer.echo(f"Restocked {sweet['name']}, now {sweet['quantity']}")

@cli.command()
def health():
    """Check that the API and its database are up."""
    try:
        data = get_client().health()
    except ApiClientError as exc:
        fail(exc)
    typer.echo(f"{data.get('status')} (database {data.get('database')})")

if __name__ == "__main__":
    cli()
