import os
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:
    import main
except ImportError:
    pytest.skip("PySide6 is not available", allow_module_level=True)

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def test_every_package_module_is_required():
    required = {path.name for path in main.required_files(PROJECT_ROOT)}
    modules = {path.name for path in (PROJECT_ROOT / "Calculator").glob("*.py")}
    assert modules <= required
    assert "error.py" in required


def test_check_passes_on_project_root():
    main.check_files_exist(PROJECT_ROOT)


def test_check_exits_when_files_are_missing(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main.check_files_exist(tmp_path)
    assert excinfo.value.code == 1
    assert "error.py" in capsys.readouterr().out
