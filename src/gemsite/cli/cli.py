"""CLI entrypoint: Typer app definition and command registration"""

import typer

from gemsite.cli.commands import index_cmd, make_cmd


app = typer.Typer(name="gemsite", no_args_is_help=True, help="Render a plain-text site to HTML and Gemini")

app.command(name="make")(make_cmd)
app.command(name="index")(index_cmd)
