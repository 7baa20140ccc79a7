from __future__ import annotations

import typer

from .. import console
from ..config import load_config
from ..http import run_call

app = typer.Typer(help="Slider captcha: generate, check and verify challenges.")

_CLIENT_IP_OPTION = typer.Option(None, "--client-ip", help="X-Client-IP for this call.")


@app.command("generate")
def generate(
        json_output: bool = typer.Option(False, "--json", help="Print the full challenge as JSON."),
        client_ip: str | None = _CLIENT_IP_OPTION,
):
    cfg = load_config()
    challenge = run_call(cfg, lambda c: c.generate_captcha(), client_ip=client_ip)
    payload = challenge.to_payload()
    if json_output:
        console.print_json(payload)
        return
    console.challenge_table(payload)


@app.command("check")
def check(
        captcha_key: str = typer.Argument(..., help="captcha_key from `captcha generate`."),
        value: str = typer.Argument(..., help='Slider drop position "X,Y".'),
        client_ip: str | None = _CLIENT_IP_OPTION,
):
    """Check a position without consuming the challenge."""
    cfg = load_config()
    passed = run_call(cfg, lambda c: c.check_captcha(captcha_key, value), client_ip=client_ip)
    if passed:
        console.ok("Captcha position accepted.")
        return
    console.warn("Captcha position rejected.")
    raise typer.Exit(code=1)


@app.command("verify")
def verify(
        captcha_key: str = typer.Argument(..., help="captcha_key from `captcha generate`."),
        value: str = typer.Argument(..., help='Slider drop position "X,Y".'),
        json_output: bool = typer.Option(False, "--json", help="Output JSON only."),
        client_ip: str | None = _CLIENT_IP_OPTION,
):
    """Verify a position; the challenge cannot be verified again."""
    cfg = load_config()
    result = run_call(cfg, lambda c: c.verify_captcha(captcha_key, value), client_ip=client_ip)
    message = result.get("message") if isinstance(result, dict) else result
    console.result(result, json_output=json_output, text=f"Captcha verified: {message}")
