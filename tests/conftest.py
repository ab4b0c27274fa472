"""Import helpers for scripts that aren't packages."""
import importlib.util
import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent
SCRIPTS_DIR = ROOT / "scripts"

# scripts/ for `lib.*`, the repo root for `pkg.*`.
for path in (SCRIPTS_DIR, ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


def _import_script(name: str, filename: str):
    """Import a script file as a module using importlib."""
    spec = importlib.util.spec_from_file_location(name, SCRIPTS_DIR / filename)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


gerrit_review = _import_script("gerrit_review", "gerrit-review.py")
github_review = _import_script("github_review", "github-review.py")
