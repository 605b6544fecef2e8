"""Site builder pipeline package.

Turns locale-specific source pages into a staging tree and transfers it to
its destination. The public API is re-exported here; callers should import
from this package rather than from submodules.

- ``locales.py``: closed locale set with counterparts.
- ``page.py``: per-page context, wrap and write.
- ``options.py``: run configuration and ``.env`` loading.
- ``fs_ops.py``: filesystem and transfer backend.
- ``runner.py``: the staged build itself.
- ``report.py``: run report and its Rich rendering.
- ``layouts.py``: bundled formatters.

Examples
--------
>>> from sitegen.pipeline.site_builder import RunConfiguration, SiteRunner, standard_layout
>>> runner = SiteRunner(RunConfiguration(), asset_patterns=[])
>>> report = runner.run(standard_layout)  # doctest: +SKIP
"""

from .fs_ops import FileOps, LocalFileOps, TransferResult, validate_staging_path
from .layouts import markdown_layout, passthrough_layout, standard_layout
from .locales import LocaleSet
from .options import RunConfiguration
from .page import Formatter, PageContext
from .report import RunReport, render_report
from .runner import RunState, SiteRunner, rewrite_base_lines

__all__ = [
    "FileOps",
    "Formatter",
    "LocalFileOps",
    "LocaleSet",
    "PageContext",
    "RunConfiguration",
    "RunReport",
    "RunState",
    "SiteRunner",
    "TransferResult",
    "markdown_layout",
    "passthrough_layout",
    "rewrite_base_lines",
    "render_report",
    "standard_layout",
    "validate_staging_path",
]
