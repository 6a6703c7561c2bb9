"""CLI for the menushell-demo command."""

import typer

from .application import Application, UIMode
from .config import MenuConfig
from .demo import DemoState, build_demo_tree, emit_backlog
from .errors import ConfigError


app = typer.Typer(
    help="Run the menushell demo menu",
    add_completion=False,
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    ui: UIMode = typer.Option(UIMode.TUI, "--ui", "-u", help="Front end: tui or text"),
    title: str = typer.Option("Demo", "--title", help="Root menu title"),
    precedence: str = typer.Option(
        "binding", "--precedence", help="Which token wins on a clash: binding or alias"
    ),
):
    """
    Start the demo counter menu.

    Examples:
        # Interactive shell
        menushell-demo

        # Plain text over stdin/stdout
        menushell-demo --ui text

        # Scripted run
        printf 'inc\\ninc 5\\nq\\n' | menushell-demo --ui text
    """
    try:
        config = MenuConfig(title=title, binding_precedence=precedence)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--precedence")
    application = Application(
        build_demo_tree(title),
        DemoState(),
        config=config,
        tick_handler=emit_backlog,
    )
    application.run(ui)


if __name__ == "__main__":
    app()
