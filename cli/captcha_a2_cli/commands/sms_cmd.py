from __future__ import annotations

import typer

from .. import console
from ..config import load_config
from ..http import run_call

app = typer.Typer(help="SMS one-time codes and rate-limit maintenance.")

_CLIENT_IP_OPTION = typer.Option(None, "--client-ip", help="X-Client-IP for this call.")


@app.command("send")
def send(
        captcha_key: str = typer.Argument(..., help="captcha_key from `captcha generate`."),
        value: str = typer.Argument(..., help='Slider drop position "X,Y".'),
        phone: str = typer.Argument(..., help="Destination phone number."),
        code: int = typer.Argument(..., help="SMS template code."),
        json_output: bool = typer.Option(False, "--json", help="Output JSON only."),
        client_ip: str | None = _CLIENT_IP_OPTION,
):
    """Send an SMS code, gated by a solved captcha."""
    cfg = load_config()
    result = run_call(
        cfg,
        lambda c: c.send_sms_with_captcha(captcha_key, value, phone, code),
        client_ip=client_ip,
    )
    msg_id = result.get("msg_id") if isinstance(result, dict) else result
    console.result(result, json_output=json_output, text=f"SMS sent to {phone} (msg_id={msg_id}).")


@app.command("verify")
def verify(
        phone: str = typer.Argument(..., help="Phone number that received the SMS."),
        code: int = typer.Argument(..., help="Code from the SMS."),
        json_output: bool = typer.Option(False, "--json", help="Output JSON only."),
        client_ip: str | None = _CLIENT_IP_OPTION,
):
    cfg = load_config()
    result = run_call(cfg, lambda c: c.verify_sms(phone, code), client_ip=client_ip)
    message = result.get("message") if isinstance(result, dict) else result
    console.result(result, json_output=json_output, text=f"SMS code verified: {message}")


@app.command("clear-ip")
def clear_ip(
        json_output: bool = typer.Option(False, "--json", help="Output JSON only."),
        client_ip: str | None = _CLIENT_IP_OPTION,
):
    """Clear the SMS rate limit of the calling IP."""
    cfg = load_config()
    result = run_call(cfg, lambda c: c.clear_ip_rate_limit(), client_ip=client_ip)
    ip = result.get("ip") if isinstance(result, dict) else None
    console.result(result, json_output=json_output, text=f"Rate limit cleared for IP {ip}.")


@app.command("clear-phone")
def clear_phone(
        phone: str = typer.Argument(..., help="Phone number to clear."),
        json_output: bool = typer.Option(False, "--json", help="Output JSON only."),
        client_ip: str | None = _CLIENT_IP_OPTION,
):
    """Clear rate limits and pending codes of a phone number."""
    cfg = load_config()
    result = run_call(cfg, lambda c: c.clear_phone_rate_limit(phone), client_ip=client_ip)
    console.result(result, json_output=json_output, text=f"Rate limit cleared for {phone}.")
