# File: tests/test_report.py
import csv
import json

from webmail_harvester.models import ResultRow
from webmail_harvester.report import render_csv, render_html, render_json, rows_to_csv

ROWS = [
    ResultRow("example.com", "info@example.com"),
    ResultRow("https://b.org/about", "team@b.org"),
    ResultRow("example.com", "sales@example.com"),
]


def test_csv_round_trip(tmp_path):
    out = render_csv(ROWS, tmp_path / "out" / "emails.csv")
    lines = out.read_text(encoding="utf-8").splitlines()

    assert lines[0] == "website,email"
    parsed = [tuple(line.split(",")) for line in lines[1:]]
    assert parsed == [(row.website, row.email) for row in ROWS]


def test_csv_email_only():
    assert rows_to_csv(ROWS, email_only=True).splitlines() == [
        "email",
        "info@example.com",
        "team@b.org",
        "sales@example.com",
    ]


def test_csv_quotes_commas(tmp_path):
    rows = [ResultRow("https://x.org/a,b", "me@x.org")]
    out = render_csv(rows, tmp_path / "emails.csv")
    with out.open(encoding="utf-8", newline="") as f:
        assert list(csv.reader(f)) == [["website", "email"], ["https://x.org/a,b", "me@x.org"]]


def test_csv_empty():
    assert rows_to_csv([]) == "website,email\n"


def test_render_json(tmp_path):
    out = render_json(ROWS, tmp_path / "emails.json")
    assert json.loads(out.read_text(encoding="utf-8")) == [row.to_dict() for row in ROWS]


def test_render_html_default_template(tmp_path):
    out = render_html(ROWS + [ResultRow("<b>evil</b>", "x@evil.org")], None, tmp_path / "report.html")
    html = out.read_text(encoding="utf-8")
    assert "sales@example.com" in html
    assert "Total emails: 4" in html
    assert "&lt;b&gt;evil&lt;/b&gt;" in html


def test_render_html_custom_template(tmp_path):
    tpl = tmp_path / "tpl"
    tpl.mkdir()
    (tpl / "report.html.j2").write_text("{{ total }}|{% for r in rows %}{{ r.email }};{% endfor %}", encoding="utf-8")
    out = render_html(ROWS, tpl, tmp_path / "r.html")
    assert out.read_text(encoding="utf-8") == "3|info@example.com;team@b.org;sales@example.com;"
