from pathlib import Path
import sys

from _pytest.monkeypatch import MonkeyPatch
import pytest

pytest_plugins = [
    "tests._plugins.pytest_hermetic",
]


# Ensure repo root is importable as a package root (for `tests._plugins`).
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from claudectx.settings import ToolSettings  # noqa: E402
from tests._utils.claude_home import FakeLauncher  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _session_env(tmp_path_factory: pytest.TempPathFactory) -> None:
    """
    Session-level hermetic env that does not depend on the function-scoped
    `monkeypatch` fixture (avoids ScopeMismatch).
    """
    home = tmp_path_factory.mktemp("home")
    mp = MonkeyPatch()
    mp.setenv("HOME", str(home))
    mp.setenv("PYTHONHASHSEED", "0")
    try:
        yield
    finally:
        mp.undo()


@pytest.fixture(autouse=True)
def hermetic_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Autouse: each test runs in its own tmp cwd with its own claudectx home,
    and no CLAUDECTX_* variable leaks in from the developer's shell.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CLAUDECTX_HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    for var in (
        "CLAUDECTX_CONFIG",
        "CLAUDECTX_PROFILES_DIR",
        "CLAUDECTX_EXECUTABLE",
        "CLAUDECTX_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


@pytest.fixture
def home(hermetic_env: Path) -> Path:
    return hermetic_env / "home"


@pytest.fixture
def settings(home: Path) -> ToolSettings:
    return ToolSettings.for_home(home)


@pytest.fixture
def fake_launcher() -> FakeLauncher:
    return FakeLauncher()
