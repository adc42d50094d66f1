from __future__ import annotations

import contextlib
import logging

import pytest


def pytest_configure(config: pytest.Config) -> None:
    with contextlib.suppress(AttributeError):
        config.option.no_cov = True
    # Debug records from the parser would otherwise dominate the timings.
    logging.getLogger("sexp").setLevel(logging.WARNING)
