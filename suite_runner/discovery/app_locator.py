"""Application executable locator.

Finds the single built application executable in the build output directory.
"""

import logging
from pathlib import Path

from ..config import RunnerConfig
from ..errors import ExecutableNotFoundError, UnsupportedPlatformError

logger = logging.getLogger(__name__)

# Glob patterns relative to the build output directory, per platform.
CANDIDATE_PATTERNS = {
    "darwin": "*.app",
    "linux": "atom-*/atom",
    "win32": "**/atom*.exe",
}


def find_candidates(build_output_path: Path, platform: str) -> list[Path]:
    """List every path in the build output that looks like the executable.

    Raises:
        UnsupportedPlatformError: If no pattern is known for the platform.
    """
    pattern = CANDIDATE_PATTERNS.get(platform)
    if pattern is None:
        raise UnsupportedPlatformError(
            f"Unrecognized platform: {platform}", {"platform": platform}
        )

    candidates = sorted(Path(build_output_path).glob(pattern))
    logger.debug("Executable candidates for %s: %s", pattern, candidates)
    return candidates


def _bundle_executable(app_bundle: Path) -> Path:
    """Resolve Foo.app to Foo.app/Contents/MacOS/Foo."""
    return app_bundle / "Contents" / "MacOS" / app_bundle.stem


def locate_executable(config: RunnerConfig) -> Path:
    """Find the one application executable for this build.

    Args:
        config: Runner configuration (build output path and platform).

    Returns:
        Path to the executable.

    Raises:
        ExecutableNotFoundError: If zero or several candidates are found.
        UnsupportedPlatformError: If the platform has no known layout.
    """
    candidates = find_candidates(config.build_output_path, config.platform)

    if len(candidates) != 1:
        raise ExecutableNotFoundError(
            f"Expected exactly one application executable in "
            f"{config.build_output_path}, found {len(candidates)}",
            {
                "build_output_path": config.build_output_path,
                "candidates": candidates,
            },
        )

    candidate = candidates[0]
    if config.platform == "darwin":
        return _bundle_executable(candidate)
    return candidate
