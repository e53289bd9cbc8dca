"""Fetches the DaisyUI documentation sources with a shallow git clone."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Callable, Iterable

from .config import DEFAULT_REPO_URL
from .logging import get_logger

CHECKOUT_DIR = Path("tmp") / "daisyui"
COMPONENTS_SUBDIR = Path("packages") / "docs" / "src" / "routes" / "(routes)" / "components"


class CloneError(RuntimeError):
    """Raised when the documentation repository cannot be fetched."""


def checkout_path(base_dir: Path) -> Path:
    return Path(base_dir) / CHECKOUT_DIR


def components_dir(base_dir: Path) -> Path:
    """Directory holding one documentation folder per component."""
    return checkout_path(base_dir) / COMPONENTS_SUBDIR


class Cloner:
    """Clones DaisyUI into ``<base_dir>/tmp/daisyui`` (depth 1)."""

    def __init__(
        self,
        runner: Callable[..., str] | None = None,
        *,
        repo_url: str = DEFAULT_REPO_URL,
        output_callback: Callable[[str], None] | None = None,
    ) -> None:
        self._runner = runner or self._default_runner
        self.repo_url = repo_url
        self._output = output_callback or (lambda message: None)
        self.logger = get_logger("cloner")

    def ensure_available(self, base_dir: Path) -> Path:
        """Return the checkout path, cloning only when it is missing."""
        path = checkout_path(base_dir)
        if path.is_dir():
            self.logger.debug("Reusing existing checkout at %s", path)
            return path
        return self.clone(base_dir)

    def clone(self, base_dir: Path) -> Path:
        tmp_dir = checkout_path(base_dir).parent
        target = checkout_path(base_dir)
        try:
            tmp_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CloneError(f"Failed to create tmp directory: {exc}") from exc

        if target.is_dir():
            self._output("Removing existing daisyui directory...")
            try:
                shutil.rmtree(target)
            except OSError as exc:
                raise CloneError(f"Failed to remove existing directory: {exc}") from exc

        self._output("Cloning DaisyUI repository (depth 1)...")
        self.logger.debug("git clone --depth 1 %s into %s", self.repo_url, tmp_dir)
        try:
            self._run(["git", "clone", "--depth", "1", self.repo_url, target.name], cwd=tmp_dir)
        except subprocess.CalledProcessError as exc:
            raise CloneError(f"Git clone failed with exit code {exc.returncode}") from exc
        except OSError as exc:
            raise CloneError(f"Git clone failed: {exc}") from exc

        self._output(f"DaisyUI cloned to {target}")
        return target

    def _run(self, args: Iterable[str], *, cwd: Path) -> str:
        return self._runner(args, cwd=cwd)

    @staticmethod
    def _default_runner(args: Iterable[str], *, cwd: Path) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=True,
        )
        return completed.stdout


__all__ = ["CloneError", "Cloner", "checkout_path", "components_dir"]
