"""Root landing page for the Fragments API with usage notes and API links."""

from html import escape

from app.domain.type_registry import CONVERSIONS, EXTENSION_TYPES


def _conversion_rows() -> str:
    rows = []
    for source, targets in CONVERSIONS.items():
        rows.append(
            f"<tr><td><code>{escape(source)}</code></td>"
            f"<td>{', '.join(f'<code>{escape(t)}</code>' for t in sorted(targets))}</td></tr>"
        )
    return "\n".join(rows)


def render_root_page(app_name: str, version: str) -> str:
    """Return HTML for the root landing page."""
    extensions = ", ".join(f"<code>{escape(ext)}</code>" for ext in EXTENSION_TYPES)
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(app_name)}</title>
    <style>
        body {{ font-family: system-ui, sans-serif; max-width: 640px; margin: 2rem auto; padding: 0 1rem; }}
        code {{ font-family: ui-monospace, monospace; }}
        table {{ border-collapse: collapse; }}
        td {{ padding: 0.25rem 0.75rem 0.25rem 0; vertical-align: top; }}
    </style>
</head>
<body>
    <h1>{escape(app_name)} <small>v{escape(version)}</small></h1>
    <p>Store text fragments and fetch them back as-is or converted.
    API routes live under <code>/v1</code>; every request carries the
    authenticated owner in the configured owner header.</p>
    <p>Append an extension to a fragment URL to convert it
    (<code>GET /v1/fragments/&lt;id&gt;.html</code>). Extensions: {extensions}.</p>
    <table>
        <tr><th align="left">Stored as</th><th align="left">Available as</th></tr>
        {_conversion_rows()}
    </table>
    <p><a href="/docs">OpenAPI docs</a> · <a href="/v1/health">Health</a></p>
</body>
</html>
""".strip()
