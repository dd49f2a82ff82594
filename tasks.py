from invoke import task


@task
def env(c):
    """
    Install the package in editable mode together with the dev extra.
    """
    c.run('pip install -e ".[dev]"')


@task(help={"transport": "stdio, sse or streamable-http"})
def run(c, transport="stdio"):
    """
    Launch the Sports MCP server on the given transport.
    """
    c.run(f"python -m sports_mcp --transport {transport}", pty=True)


@task(help={"k": "only run tests matching this expression"})
def test(c, k=""):
    """
    Run the test suite.
    """
    selector = f' -k "{k}"' if k else ""
    c.run(f"pytest tests{selector}", pty=True)
