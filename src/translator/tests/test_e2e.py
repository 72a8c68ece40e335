"""End-to-end tests: Groovy source → JavaScript → node → check output."""

import os
import shutil
import subprocess
import tempfile

import pytest
from src.translator.analyser import translate
from src.translator.runtime import with_prelude

NODE = shutil.which("node")

pytestmark = pytest.mark.skipif(NODE is None, reason="node is not installed")


def run(groovy_source: str) -> str:
    """Translate Groovy source, run it under node, return stdout."""
    js = with_prelude(translate(groovy_source))
    with tempfile.NamedTemporaryFile(suffix=".js", mode="w", delete=False) as f:
        f.write(js)
        path = f.name
    try:
        result = subprocess.run([NODE, path], capture_output=True, text=True, timeout=30)
        if result.returncode != 0:
            pytest.fail(f"node failed:\n{result.stderr}\n\nGenerated JS:\n{js}")
        return result.stdout
    finally:
        os.unlink(path)


class TestRun:
    def test_numbers(self):
        assert run("def a = 1\ndef b = a - 3\nprintln b") == "-2\n"

    def test_array_add(self):
        assert run("def a = [1, 2]\ndef b = a + 3\nprintln b.join(',')") == "1,2,3\n"

    def test_array_subtract(self):
        assert run("def a = [1, 2, 1, 3]\nprintln((a - 1).join(','))") == "2,3\n"

    def test_array_multiply(self):
        assert run("def a = [7]\nprintln((a * 3).length)") == "3\n"

    def test_left_shift(self):
        assert run("def a = []\na << 5\nprintln a.size()") == "1\n"

    def test_range(self):
        assert run("def r = 1..4\nprintln r.join(' ')") == "1 2 3 4\n"

    def test_exclusive_range(self):
        assert run("def r = 0..<3\nprintln r.join(' ')") == "0 1 2\n"

    def test_collect_and_inject(self):
        src = (
            "def xs = [1, 2, 3]\n"
            "List doubled = xs.collect { it * 2 }\n"
            "def sum = doubled.inject(0) { acc, x -> acc + x }\n"
            "println sum\n"
        )
        assert run(src) == "12\n"

    def test_times(self):
        assert run("3.times { println it }") == "0\n1\n2\n"

    def test_map(self):
        src = "def m = [name: 'groovy', n: 2]\nprintln m.name\nprintln m.containsKey('n')"
        assert run(src) == "groovy\ntrue\n"

    def test_gstring(self):
        assert run("def who = 'world'\nprintln \"hello $who\"") == "hello world\n"

    def test_compound_assignment_chain(self):
        assert run("def a = [1]\na += [2] + [3]\nprintln a.join(',')") == "1,2,3\n"

    def test_literal_receiver_in_declaration(self):
        src = "def s = [1, 2].size()\ndef d = [1, 2].collect { it * 2 }\nprintln s\nprintln d.join(',')"
        assert run(src) == "2\n2,4\n"

    def test_inject_callback_inside_parentheses(self):
        assert run("def l = [1, 2, 3]\ndef s = l.inject(0, { acc, x -> acc + x })\nprintln s") == "6\n"
