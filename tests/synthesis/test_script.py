"""Tests for synthesis.script."""

import pytest

from testcov.synthesis.discovery import find_test_files
from testcov.synthesis.errors import SynthesisError
from testcov.synthesis.models import TestFileInfo
from testcov.synthesis.script import (
    generate_main_script,
    render_main_script,
    script_path,
)

EXPECTED_SCRIPT = """\
# Auto-generated by testcov. Do not edit by hand.
# Consider adding this file to your .gitignore.

import importlib.util
import os
import sys

_TEST_ROOT = os.path.dirname(os.path.abspath(__file__))


def _load_test(name, relative_path):
    path = os.path.join(_TEST_ROOT, *relative_path.split("/"))
    spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    spec.loader.exec_module(module)
    return module


a_x_test = _load_test('a_x_test', 'a/x_test.py')
b_y_test = _load_test('b_y_test', 'b/y_test.py')


def main():
    a_x_test.main()
    b_y_test.main()


if __name__ == "__main__":
    main()
"""


def _infos(root, *relative):
    return [TestFileInfo.for_file(root / "test" / r) for r in relative]


class TestRenderMainScript:
    def test_two_test_files(self, tmp_path):
        content = render_main_script(_infos(tmp_path, "a/x_test.py", "b/y_test.py"))
        assert content == EXPECTED_SCRIPT

    def test_output_independent_of_input_order(self, tmp_path):
        relative = ["c/z_test.py", "a/x_test.py", "b/y_test.py", "m_test.py"]
        forward = render_main_script(_infos(tmp_path, *relative))
        backward = render_main_script(_infos(tmp_path, *reversed(relative)))

        assert forward == backward

    def test_loads_sorted_and_calls_follow_loads(self, tmp_path):
        content = render_main_script(
            _infos(tmp_path, "z_test.py", "b/y_test.py", "a/x_test.py")
        )
        lines = content.splitlines()

        loads = [line for line in lines if " = _load_test(" in line]
        calls = [line.strip() for line in lines if line.endswith(".main()") and line.startswith("    ")]
        assert loads == sorted(loads)
        assert calls == [f"{line.split(' = ')[0]}.main()" for line in loads]

    def test_duplicate_alias_rejected(self, tmp_path):
        with pytest.raises(SynthesisError) as exc_info:
            render_main_script(_infos(tmp_path, "a/x_test.py", "a_x_test.py"))
        assert "a_x_test" in str(exc_info.value)

    def test_no_test_files(self):
        content = render_main_script([])

        assert "def main():\n    pass\n" in content
        assert " = _load_test(" not in content

    def test_generated_script_compiles(self, tmp_path):
        content = render_main_script(_infos(tmp_path, "a/x_test.py", "b/y_test.py"))
        compile(content, ".test_coverage.py", "exec")


class TestGenerateMainScript:
    def test_writes_to_fixed_location(self, package_root):
        path = generate_main_script(package_root, find_test_files(package_root))

        assert path == script_path(package_root)
        assert path == package_root / "test" / ".test_coverage.py"
        assert path.read_text() == EXPECTED_SCRIPT

    def test_overwrites_previous_content(self, package_root):
        path = script_path(package_root)
        path.write_text("stale content that is much longer than needed " * 50)

        generate_main_script(package_root, find_test_files(package_root))
        assert path.read_text() == EXPECTED_SCRIPT

    def test_file_outside_test_directory(self, package_root):
        with pytest.raises(SynthesisError):
            generate_main_script(package_root, [package_root / "src" / "mathlib.py"])
