"""
Tests for turning model output into file maps.
"""

from codearchitect.core.file_actions import (
    extract_code_blocks,
    extract_files,
    generate_filename,
    parse_directives,
)


DIRECTIVES = """Here is the change.

[CREATE: src/app.js]
const app = () => 1;
export default app;
[/CREATE]

[MODIFY: styles.css]
body {
  margin: 0;
}
[/MODIFY]
"""


# ---------------------------------------------------------------------------
# Directives
# ---------------------------------------------------------------------------

def test_each_directive_becomes_one_file_in_order():
    files = extract_files(DIRECTIVES)
    assert list(files) == ["src/app.js", "styles.css"]
    assert files["src/app.js"] == "const app = () => 1;\nexport default app;"
    assert files["styles.css"] == "body {\n  margin: 0;\n}"


def test_parse_directives_reports_operation():
    directives = parse_directives(DIRECTIVES)
    assert [(d.operation, d.path) for d in directives] == [
        ("create", "src/app.js"),
        ("modify", "styles.css"),
    ]


def test_directive_paths_only_gain_a_missing_extension():
    text = "[CREATE: notes]\n# Notes\n\nRemember the milk.\n[/CREATE]\n[CREATE: main.js]\ndef main():\n    print('x')\n[/CREATE]"
    files = extract_files(text)
    assert set(files) == {"notes.md", "main.js"}


def test_markdown_with_code_samples_keeps_its_name():
    text = "[MODIFY: README.md]\n# App\n\nStart it with:\n\nconst app = createApp()\n[/MODIFY]"

    directives = parse_directives(text)

    assert [(d.operation, d.path) for d in directives] == [("modify", "README.md")]
    assert list(extract_files(text)) == ["README.md"]


def test_later_directive_for_same_path_wins():
    text = "[CREATE: a.py]\nx = 1\n[/CREATE]\n[MODIFY: a.py]\nx = 2\n[/MODIFY]"
    assert extract_files(text) == {"a.py": "x = 2"}


def test_directives_take_precedence_over_code_blocks():
    text = (
        "[CREATE: a.py]\ndef f():\n    return 1\n[/CREATE]\n\n"
        "```python\ndef other():\n    return 2\n```"
    )
    assert list(extract_files(text)) == ["a.py"]


def test_legacy_file_marker():
    text = "[FILE: main.py]\n```python\nprint('hi there')\n```"
    assert extract_files(text) == {"main.py": "print('hi there')"}


# ---------------------------------------------------------------------------
# Fenced code blocks
# ---------------------------------------------------------------------------

def test_python_block_named_by_language():
    text = "Try this:\n```python\ndef add(a, b):\n    return a + b\n```"
    assert extract_files(text) == {"python1.py": "def add(a, b):\n    return a + b"}


def test_short_blocks_are_skipped_and_do_not_consume_an_index():
    text = "```js\nx = 1\n```\n\n```html\n<div>Hello world</div>\n```"
    assert extract_code_blocks(text) == {"index.html": "<div>Hello world</div>"}


def test_filename_hint_comment_wins():
    text = (
        "```javascript\n// file: src/utils.js\nexport const sum = (a, b) => a + b;\n```\n"
        "```html\n<!-- filename: about.html -->\n<div>About</div>\n```"
    )
    files = extract_files(text)
    assert list(files) == ["src/utils.js", "about.html"]


def test_html_css_and_js_naming():
    text = (
        "```html\n<div>Hello world</div>\n```\n"
        "```html\n<div>Second page</div>\n```\n"
        "```js\nfunction go() { return 1; }\n```\n"
        "```javascript\nimport React from 'react';\nexport default function App() { return null; }\n```"
    )
    files = extract_code_blocks(text)
    assert list(files) == ["index.html", "html2.html", "script3.js", "component4.jsx"]


def test_generate_filename_fallbacks():
    assert generate_filename("css", 0, "body { margin: 0; }") == "styles.css"
    assert generate_filename("css", 2, "body { margin: 0; }") == "css3.css"
    assert generate_filename("text", 0, "plain words here") == "text1.txt"
    assert generate_filename("go", 1, "package main") == "go2.go"


def test_unlabelled_block_gets_content_extension():
    text = "```\nSELECT id, name FROM users;\n```"
    assert extract_files(text) == {"text1.sql": "SELECT id, name FROM users;"}


def test_prose_without_code_gives_nothing():
    assert extract_files("Just an explanation, no code here.") == {}
