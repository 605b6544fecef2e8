"""Locale-aware static site generator.

This package renders locale-specific source pages (``index.de.html``,
``index.us.html``, ...) through a caller-supplied layout function into a
staging directory, copies static assets, prepares the deploy configuration
(``.htaccess``) and hands the staging tree to a sync command such as
``rsync``.

Package Structure
-----------------
- `pipeline/markup/`:
    Tag builder, forbidden-markup guard and locale-aware links.
- `pipeline/site_builder/`:
    Page context, run configuration, filesystem backend, the staged runner,
    run report and bundled layouts.
- `cli.py`: The ``sitegen`` command-line entrypoint.
- `config.py`: Default constants, as UPPER_SNAKE_CASE.
- `exceptions.py`: Project-specific exception classes.

Examples
--------
>>> import sitegen
>>> # See sitegen.cli or sitegen.pipeline.site_builder for entrypoints.
"""
