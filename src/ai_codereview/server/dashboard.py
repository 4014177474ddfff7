"""Make sure a built dashboard exists before the server starts.

A source checkout may carry a ``frontend/`` project (``package.json``) that
is built with npm into ``public/``. Installed packages ship only the bundled
single-page template, which is copied into ``public/`` on first use.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Optional

from ..exceptions import DashboardBuildError
from ..logging_config import get_logger

logger = get_logger(__name__)

_PKG_DIR = Path(__file__).parent
DEFAULT_PUBLIC_DIR = _PKG_DIR / "public"
DEFAULT_FRONTEND_DIR = _PKG_DIR / "frontend"
TEMPLATE_PATH = _PKG_DIR / "templates" / "index.html"

NPM_TIMEOUT = 600


def is_built(public_dir: Path) -> bool:
    return (public_dir / "index.html").is_file()


def ensure_dashboard(
    public_dir: Optional[Path] = None,
    frontend_dir: Optional[Path] = None,
    template_path: Optional[Path] = None,
) -> Path:
    """Return the directory holding the built dashboard, building it if needed.

    Raises:
        DashboardBuildError: If the front-end cannot be built or copied
    """
    public_dir = public_dir or DEFAULT_PUBLIC_DIR
    frontend_dir = frontend_dir or DEFAULT_FRONTEND_DIR
    template_path = template_path or TEMPLATE_PATH

    if is_built(public_dir):
        logger.debug("Using built dashboard: %s", public_dir)
        return public_dir

    logger.warning("First run: building the review dashboard into %s", public_dir)
    if (frontend_dir / "package.json").is_file():
        _npm_build(frontend_dir)
    else:
        _copy_template(template_path, public_dir)

    if not is_built(public_dir):
        raise DashboardBuildError("build finished but index.html is missing", public_dir)
    (public_dir / "assets").mkdir(parents=True, exist_ok=True)
    logger.info("Dashboard build complete")
    return public_dir


def _npm_build(frontend_dir: Path) -> None:
    """Run ``npm install`` (first time only) and ``npm run build``."""
    commands = []
    if not (frontend_dir / "node_modules").is_dir():
        commands.append(["npm", "install"])
    commands.append(["npm", "run", "build"])

    for command in commands:
        logger.info("Running %s in %s", " ".join(command), frontend_dir)
        try:
            subprocess.run(command, cwd=frontend_dir, check=True, timeout=NPM_TIMEOUT)
        except FileNotFoundError as e:
            raise DashboardBuildError(f"npm not found: {e}", frontend_dir)
        except subprocess.CalledProcessError as e:
            raise DashboardBuildError(
                f"'{' '.join(command)}' exited with status {e.returncode}", frontend_dir
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise DashboardBuildError(str(e), frontend_dir)


def _copy_template(template_path: Path, public_dir: Path) -> None:
    try:
        public_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(template_path, public_dir / "index.html")
    except OSError as e:
        raise DashboardBuildError(str(e), public_dir)
