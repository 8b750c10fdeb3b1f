"""HTML Views — the single home page rendered by /, /login and /callback.

Invariants:
    - Every interpolated value is HTML-escaped
    - The error view says only that login failed; no verification details
"""

from html import escape

from fastapi.responses import HTMLResponse

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>foopoc</title>
</head>
<body>
  <h1>foopoc</h1>
{body}
</body>
</html>
"""


def render_home(
    logged_in: bool = False,
    error: bool = False,
    name: str = "",
    email: str = "",
) -> HTMLResponse:
    parts = []
    if error:
        parts.append('  <p class="error">Login failed. Please try again.</p>')
    if logged_in:
        parts.append(f'  <p class="welcome">Welcome, {escape(name)}</p>')
        parts.append(f'  <p class="email">{escape(email)}</p>')
    else:
        parts.append('  <a href="/login">Log in</a>')
    return HTMLResponse(_PAGE.format(body="\n".join(parts)))
