"""HTML samples and parsing helpers shared by the tests."""

from bs4 import BeautifulSoup


def body_of(html: str):
    """Parse an HTML fragment and return its <body> element."""
    return BeautifulSoup(html, "lxml").body


DOCS_PAGE = """
<html>
  <head><title>  Getting   Started </title></head>
  <body>
    <header><a href="/">Home</a></header>
    <nav class="sidebar"><a href="/docs/other">Other page</a></nav>
    <main>
      <h1>Getting Started</h1>
      <p>This guide explains how to install the tool and run a first extraction.</p>
      <h2>Installation</h2>
      <p>Install the package with pip, then see the <a href="setup">setup notes</a>.</p>
      <pre><code class="language-bash">pip install web2rag</code></pre>
      <h2>Usage</h2>
      <p>Point the command at any documentation page to get Markdown back.</p>
    </main>
    <footer>Copyright notice</footer>
  </body>
</html>
"""
