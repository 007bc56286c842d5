"""
Import smoke tests: every module compiles and the package imports in a fresh
interpreter, independent of whatever this test process has already loaded.
Run: pytest tests/test_package_imports.py -v
"""
import os
import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
SOURCES = sorted((ROOT / "agent_console").rglob("*.py"))


class TestPackageImports:

    @pytest.mark.parametrize("path", SOURCES, ids=lambda p: str(p.relative_to(ROOT)))
    def test_module_compiles(self, path):
        compile(path.read_text(encoding="utf-8"), str(path), "exec")

    def test_imports_in_clean_process(self):
        code = (
            "import agent_console.templates.parser, agent_console.catalog, "
            "agent_console.agent_service.agent_registry, agent_console.api.server"
        )
        env = dict(os.environ, PYTHONDONTWRITEBYTECODE="1")
        result = subprocess.run(
            [sys.executable, "-c", code], cwd=ROOT, env=env, capture_output=True, text=True,
        )
        assert result.returncode == 0, result.stderr
