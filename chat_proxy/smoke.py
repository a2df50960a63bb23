# chat_proxy/smoke.py
"""
Manual smoke test against a live deployment.

    chat-proxy-smoke https://proxy.example.com --api-key <client key>

Runs three checks (GET /, POST without a key, POST with the key),
prints each response and exits non-zero if any check failed.
"""
import click
import requests

HELLO_BODY = {"messages": [{"role": "user", "content": "Hello!"}]}


def _show(label: str, response: requests.Response) -> None:
    try:
        body = response.json()
    except ValueError:
        body = response.text
    click.echo(f"{label} Response: {body}")
    click.echo(f"{label} Status: {response.status_code}")


def check_get_root(url: str) -> bool:
    response = requests.get(url)
    _show("GET", response)
    return response.ok


def check_post_without_key(url: str) -> bool:
    response = requests.post(url, json=HELLO_BODY)
    _show("No Key", response)
    return response.status_code == 401


def check_post_with_key(url: str, api_key: str) -> bool:
    body = {**HELLO_BODY, "temperature": 0.7, "max_tokens": 2000}
    response = requests.post(url, json=body, headers={"Authorization": f"Bearer {api_key}"})
    _show("POST", response)
    return response.ok


def run_checks(url: str, api_key: str) -> dict:
    checks = [
        ("GET", "Testing GET request to root endpoint", lambda: check_get_root(url)),
        ("No Key", "Testing POST request without API key", lambda: check_post_without_key(url)),
        ("POST", "Testing POST request with API key", lambda: check_post_with_key(url, api_key)),
    ]
    results = {}
    for number, (name, title, check) in enumerate(checks, start=1):
        click.echo(f"Test {number}: {title}")
        try:
            passed = check()
        except requests.RequestException as e:
            click.echo(f"Error: {e}")
            passed = False
        results[name] = passed
        click.echo(f"{name} Test: " + ("✅ PASSED" if passed else "❌ FAILED") + "\n")
    return results


@click.command()
@click.argument("url")
@click.option("--api-key", envvar="CLIENT_API_KEY", required=True, help="Client-facing API key of the deployment.")
def main(url: str, api_key: str) -> None:
    """Smoke-test a deployed chat proxy at URL."""
    click.echo("Testing chat proxy...\n")
    results = run_checks(url, api_key)
    if not all(results.values()):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
