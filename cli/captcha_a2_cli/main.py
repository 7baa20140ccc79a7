from __future__ import annotations

import typer

from .commands import captcha_cmd, settings_cmd, sms_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="captcha-a2",
        help="CAPTCHA-A2 slider captcha and SMS verification client",
        no_args_is_help=True,
    )

    app.add_typer(settings_cmd.app, name="settings")
    app.add_typer(captcha_cmd.app, name="captcha")
    app.add_typer(sms_cmd.app, name="sms")

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
