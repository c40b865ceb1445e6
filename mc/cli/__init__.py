"""mc CLI entry points.

Re-exports ``main`` and the app builders so ``mc.cli:main`` works as the
console script target.
"""

from mc.cli.main import McGroup, build_app, build_registry, main  # noqa: F401
