import json

import pytest

from locatorrank import engine
from locatorrank.__main__ import analyse_html, run
from locatorrank.errors import PageFetchError
from locatorrank.models import GenerationOptions


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("LOCATORRANK_LOG_FILE", str(tmp_path / "locatorrank.log"))
    monkeypatch.delenv("LOCATORRANK_FRAMEWORK", raising=False)
    monkeypatch.delenv("LOCATORRANK_INCLUDE_ACCESSIBILITY", raising=False)


def test_analyse_html_payload(login_html) -> None:
    payload = analyse_html(login_html, GenerationOptions(framework="playwright"), summary=True, advice=True)

    assert payload["framework"] == "playwright"
    assert len(payload["locators"]) == 7
    assert payload["locators"][2]["strategies"][0]["formattedSelector"] == "#submit-btn"
    assert isinstance(payload["locators"][0]["recommendations"], list)
    assert payload["summary"]["metadata"]["title"] == "Test Page"
    assert payload["timestamp"]


def test_single_file_prints_one_document(tmp_path, capsys, login_html) -> None:
    page = tmp_path / "login.html"
    page.write_text(login_html, encoding="utf-8")

    exit_code = run([str(page), "--framework", "cypress"])

    document = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert document["source"] == str(page)
    assert document["success"] is True
    assert document["locators"][2]["strategies"][0]["formattedSelector"] == "cy.get('#submit-btn')"
    assert "summary" not in document


def test_no_accessibility_flag(tmp_path, capsys) -> None:
    page = tmp_path / "dialog.html"
    page.write_text('<button aria-label="Close" role="button">x</button>', encoding="utf-8")

    run([str(page), "--no-accessibility"])

    document = json.loads(capsys.readouterr().out)
    types = {strategy["type"] for strategy in document["locators"][0]["strategies"]}
    assert "aria-label" not in types


def test_batch_reports_failures_per_source(tmp_path, capsys, login_html) -> None:
    good = tmp_path / "good.html"
    good.write_text(login_html, encoding="utf-8")
    missing = tmp_path / "missing.html"

    exit_code = run([str(good), str(missing)])

    documents = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert [doc["success"] for doc in documents] == [True, False]
    assert documents[1]["source"] == str(missing)
    assert "error" in documents[1]


def test_urls_use_fetcher(capsys, login_html) -> None:
    fetched: list[str] = []

    def _fetcher(url: str) -> str:
        fetched.append(url)
        if "down" in url:
            raise PageFetchError(f"Connection refused: {url} is not accessible.")
        return login_html

    exit_code = run(["--url", "https://up.test", "--url", "https://down.test"], fetcher=_fetcher)

    documents = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert fetched == ["https://up.test", "https://down.test"]
    assert documents[0]["success"] is True
    assert documents[1]["error"] == "Connection refused: https://down.test is not accessible."


def test_invalid_html_is_reported(tmp_path, capsys) -> None:
    page = tmp_path / "tiny.html"
    page.write_text("<a>", encoding="utf-8")

    exit_code = run([str(page)])

    document = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert document["error"] == "html must be at least 10 characters long."


def test_no_sources_is_a_usage_error(capsys) -> None:
    assert run([]) == 2
    assert "provide at least one HTML source" in capsys.readouterr().err


def test_undecodable_bytes_are_replaced(tmp_path, capsys) -> None:
    page = tmp_path / "broken.html"
    page.write_bytes(b'<button id="go">Caf\xe9 menu</button>')

    exit_code = run([str(page)])

    document = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert document["locators"][0]["element"]["text"] == "Caf\ufffd menu"


def test_summary_parses_markup_once(monkeypatch, login_html) -> None:
    parsed: list[str] = []
    real_parse = engine.parse_html

    def _counting_parse(html: str):
        parsed.append(html)
        return real_parse(html)

    monkeypatch.setattr(engine, "parse_html", _counting_parse)

    payload = analyse_html(login_html, GenerationOptions(), summary=True)

    assert len(parsed) == 1
    assert payload["summary"]["forms"][0]["id"] == "login-form"
