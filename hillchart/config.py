"""Process-wide default options for newly created engines."""

from __future__ import annotations

import copy

from .model import HillOptions

_DEFAULT_OPTIONS = HillOptions()


def get_default_options() -> HillOptions:
    return copy.deepcopy(_DEFAULT_OPTIONS)


def set_default_options(options: HillOptions) -> None:
    options.validate()
    global _DEFAULT_OPTIONS
    _DEFAULT_OPTIONS = copy.deepcopy(options)
