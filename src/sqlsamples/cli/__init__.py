"""Command-line interface: ``sqlsamples`` (see :mod:`sqlsamples.cli.app`)."""
