"""Server CLI commands."""

from dataclasses import dataclass

import httpx
import typer
from rich.panel import Panel

from .utils import console, load_config

server_app = typer.Typer(help="🚀 Server commands")


@dataclass
class CheckResult:
    name: str
    passed: bool
    detail: str


def run_smoke_checks(client: httpx.Client) -> list[CheckResult]:
    """Exercise a running server the way the end-to-end suite does.

    Args:
        client: HTTP client whose base URL points at the server
    """
    results: list[CheckResult] = []

    def check(name: str, passed: bool, detail: str) -> None:
        results.append(CheckResult(name=name, passed=passed, detail=detail))

    try:
        response = client.get("/health")
        check(
            "health",
            response.status_code == 200 and response.json().get("status") == "ok",
            f"{response.status_code} {response.text.strip()}",
        )

        response = client.get("/api/v1/books")
        is_list = response.status_code == 200 and isinstance(response.json(), list)
        check(
            "list books",
            is_list,
            f"{response.status_code}, {len(response.json()) if is_list else 0} books",
        )
        check(
            "cors headers",
            response.headers.get("access-control-allow-origin") == "*",
            response.headers.get("access-control-allow-origin", "missing"),
        )

        response = client.options("/api/v1/books")
        allowed = response.headers.get("access-control-allow-methods", "")
        check(
            "cors preflight",
            response.status_code == 200
            and all(m in allowed for m in ("GET", "POST", "PUT", "DELETE")),
            f"{response.status_code} {allowed or 'no allow-methods'}",
        )
    except (httpx.HTTPError, ValueError) as e:
        check("connection", False, str(e))

    return results


@server_app.command(name="start")
def start_server(
    host: str | None = typer.Option(None, help="Host to bind, defaults to config"),
    port: int | None = typer.Option(None, help="Port to bind, defaults to config"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """Start the books API server with uvicorn."""
    import uvicorn

    config = load_config()
    bind_host = host or config.app.host
    bind_port = port or config.app.port

    console.print(
        Panel.fit(
            "[bold green]Starting Books API[/bold green]\n"
            f"http://{bind_host}:{bind_port}  (database: {config.database.connection_string})",
            border_style="green",
        )
    )
    uvicorn.run(
        "src.books_api.api.http.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        access_log=False,
    )


@server_app.command(name="check")
def check_server(
    url: str | None = typer.Option(None, help="Base URL of a running server"),
    timeout: float = typer.Option(5.0, help="Request timeout in seconds"),
) -> None:
    """Smoke-test a running server: health, listing and CORS."""
    base_url = url or load_config().app.base_url
    console.print(f"[blue]Checking[/blue] {base_url}")

    with httpx.Client(base_url=base_url, timeout=timeout) as client:
        results = run_smoke_checks(client)

    for result in results:
        mark = "[green]✅[/green]" if result.passed else "[red]❌[/red]"
        console.print(f"{mark} {result.name}: {result.detail}")

    if not all(result.passed for result in results):
        raise typer.Exit(code=1)
    console.print("[bold green]All checks passed[/bold green]")
