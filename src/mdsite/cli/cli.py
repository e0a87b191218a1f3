"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdsite.cli.commands import drafts_cmd, new_cmd, notify_cmd, recent_cmd, todo_cmd, web_cmd


app = typer.Typer(name="mdsite", no_args_is_help=True, help="Static site generator for a directory of Markdown pages")

app.command(name="web")(web_cmd)
app.command(name="drafts")(drafts_cmd)
app.command(name="todo")(todo_cmd)
app.command(name="recent")(recent_cmd)
app.command(name="new")(new_cmd)
app.command(name="notify")(notify_cmd)
