"""Root landing page for Taskdesk: workflow overview and API links."""

from html import escape

from taskdesk.domain.enums import TaskStatus
from taskdesk.domain.task_workflow import TransitionTable


def _workflow_rows(table: TransitionTable) -> str:
    rows = []
    for status in TaskStatus:
        targets = ", ".join(t.value for t in TaskStatus if t in table.get(status, ()))
        rows.append(
            f"<tr><td><code>{escape(status.value)}</code></td>"
            f"<td>{escape(targets) or '<em>terminal</em>'}</td></tr>"
        )
    return "\n".join(rows)


def render_root_page(app_name: str, table: TransitionTable) -> str:
    """Return HTML for the root landing page."""
    name = escape(app_name)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{name}</title>
    <style>
        body {{ font-family: system-ui, sans-serif; margin: 0; padding: 2rem 1rem;
               background: #0b0b0b; color: #ddd; }}
        .wrap {{ max-width: 640px; margin: 0 auto; }}
        h1 {{ color: #fff; font-weight: 600; margin-bottom: 0.25rem; }}
        .tagline {{ color: #888; margin-top: 0; }}
        table {{ border-collapse: collapse; width: 100%; margin: 1.5rem 0; }}
        td, th {{ border-bottom: 1px solid #222; padding: 0.4rem 0.6rem; text-align: left; }}
        a {{ color: #9cf; }}
    </style>
</head>
<body>
<div class="wrap">
    <h1>{name}</h1>
    <p class="tagline">Task workflow for technical managers and their client accounts.</p>
    <table>
        <thead><tr><th>Status</th><th>May move to</th></tr></thead>
        <tbody>
{_workflow_rows(table)}
        </tbody>
    </table>
    <p>
        <a href="/docs">Swagger UI</a> &middot;
        <a href="/redoc">ReDoc</a> &middot;
        <a href="/api/v1/health">Health</a>
    </p>
</div>
</body>
</html>
"""
