"""HTML pages served by the demo UI handlers."""

import html


PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{title}</title>
</head>
<body>
{content}
</body>
</html>
"""

FORM = """  <h1>Shorten a URL</h1>
  <form method="post" action="/">
    <input type="text" name="u" placeholder="https://example.com/a/very/long/path" required>
    <button type="submit">Shorten</button>
  </form>"""


def home_page() -> str:
    return PAGE_TEMPLATE.format(title='shortlinks', content=FORM)


def shortened_page(short_url: str, target_url: str, submitted_url: str) -> str:
    """Confirmation page listing the new short URL and the URL it points to

    The link text is the URL as submitted; the link itself is the normalized URL.
    """
    content = (
        '  <h1>URL shortened</h1>\n'
        f'  <p>Short URL: <code>{html.escape(short_url)}</code></p>\n'
        f'  <p>Points to: <a href="{html.escape(target_url, quote=True)}">{html.escape(submitted_url)}</a></p>\n'
        '  <p><a href="/">Shorten another URL</a></p>'
    )
    return PAGE_TEMPLATE.format(title='shortlinks: URL shortened', content=content)


def error_page(message: str) -> str:
    content = f'  <h1>Something went wrong</h1>\n  <p>{html.escape(message)}</p>\n{FORM}'
    return PAGE_TEMPLATE.format(title='shortlinks: error', content=content)
